"""Tests for the scenarios, run against fake pages."""

import pytest

from conftest import FakeEngine, FakePage, make_row, with_expandables
from ftse_scraper.core.config import ScraperConfig
from ftse_scraper.core.scenarios import (
    AVERAGE_INDEX_HEADER,
    SCENARIOS,
    average_index_value,
    homepage,
    market_cap_summary,
    run_scenario,
    scenario_names,
    top_fallers,
    top_risers,
)


@pytest.fixture
def config():
    return ScraperConfig(sort_settle_ms=0, page_settle_ms=0)


@pytest.fixture
def no_browser_checks(mocker):
    """Replace Playwright assertions and the consent step."""
    mocker.patch('ftse_scraper.core.scenarios.expect')
    mocker.patch('ftse_scraper.extractors.table_extractor.expect')
    return mocker.patch('ftse_scraper.core.scenarios.dismiss_cookie_banner', return_value=False)


class TestTopMovers:

    def test_risers(self, fake_page, config, no_browser_checks, capsys):
        engine = FakeEngine(fake_page)
        result = top_risers(engine, config)

        constituents = result['constituents']
        assert len(constituents) == 10
        assert result['sorted'] is True
        assert constituents[0].change_text == '+4.10%'
        assert engine.visited == [config.constituents_url]
        no_browser_checks.assert_called_once_with(fake_page, config.consent_timeout)
        assert "Highest Daily Change" in capsys.readouterr().out

    def test_fallers(self, fake_page, config, no_browser_checks, capsys):
        result = top_fallers(FakeEngine(fake_page), config)

        assert [c.change_text for c in result['constituents'][:2]] == ['-3.30%', '-2.40%']
        assert result['sorted'] is True
        assert "Lowest Daily Change" in capsys.readouterr().out

    def test_top_n_from_config(self, fake_page, no_browser_checks):
        config = ScraperConfig(top_n=3, sort_settle_ms=0)
        result = top_risers(FakeEngine(fake_page), config)

        assert len(result['constituents']) == 3


class TestMarketCapSummary:

    def test_aggregates_every_page(self, config, no_browser_checks, capsys):
        pages = [
            with_expandables([make_row('A', '7,500'), make_row('B', '6,200')]),
            with_expandables([make_row('C', '9,000'), make_row('D', 'N/A')]),
            with_expandables([]),
            with_expandables([make_row('E', '')]),
            with_expandables([]),
        ]
        page = FakePage(pages)

        result = market_cap_summary(FakeEngine(page), config)

        assert [p.page_number for p in result['pages']] == [1, 2, 3, 4, 5]
        assert [e.rank for e in result['entries']] == [1, 2, 3, 4, 5]
        assert [e.name for e in result['entries']] == ['A', 'B', 'C', 'D', 'E']
        assert round(result['stats'].average, 2) == 7566.67
        assert result['stats'].skipped == 2
        assert [e.name for e in result['above_threshold']] == ['A', 'B', 'C']

        out = capsys.readouterr().out
        assert "Total: 5 companies across 5 pages" in out
        assert "Average: £7,566.67m" in out

    def test_respects_total_pages(self, no_browser_checks):
        pages = [with_expandables([make_row(f'P{n}', '1,000')]) for n in range(5)]
        config = ScraperConfig(total_pages=2, page_settle_ms=0)

        result = market_cap_summary(FakeEngine(FakePage(pages)), config)

        assert len(result['pages']) == 2
        assert [e.name for e in result['entries']] == ['P0', 'P1']


class TestHomepage:

    def test_screenshot_and_consent(self, config, no_browser_checks):
        no_browser_checks.return_value = True
        engine = FakeEngine(FakePage())

        result = homepage(engine, config)

        assert engine.visited == [config.base_url]
        assert engine.screenshots == ['london-stock-exchange.png']
        assert result['consent_clicked'] is True

    def test_missing_screenshot_fails_scenario(self, config, no_browser_checks, mocker):
        engine = FakeEngine(FakePage())
        mocker.patch.object(engine, 'screenshot', return_value=None)

        with pytest.raises(RuntimeError, match='Screenshot was not saved'):
            homepage(engine, config)


class TestAverageIndexValue:

    def test_missing_column(self, config, no_browser_checks, capsys):
        result = average_index_value(FakeEngine(FakePage()), config)

        assert result == {'found': False, 'value': None}
        assert "does not exist" in capsys.readouterr().out

    def test_present_column(self, config, no_browser_checks):
        page = FakePage()
        page.locator_counts[AVERAGE_INDEX_HEADER] = 1
        page.texts['xpath=following::td[1]'] = ' 7,812.34 '

        result = average_index_value(FakeEngine(page), config)

        assert result == {'found': True, 'value': '7,812.34'}


class TestRunScenario:

    def test_fresh_session_per_scenario(self, config, no_browser_checks, mocker):
        engines = []

        def factory(browser_config):
            engine = FakeEngine(FakePage())
            engines.append((browser_config, engine))
            return engine

        run_scenario('homepage', config, engine_factory=factory)
        run_scenario('index-average', config, engine_factory=factory)

        assert len(engines) == 2
        assert engines[0][1] is not engines[1][1]
        assert all(engine.entered and engine.closed for _, engine in engines)
        assert engines[0][0].headless is config.headless

    def test_session_closed_on_failure(self, config, mocker):
        engine = FakeEngine(FakePage())
        mocker.patch.dict(SCENARIOS, {'homepage': mocker.Mock(side_effect=AssertionError('logo missing'))})

        with pytest.raises(AssertionError):
            run_scenario('homepage', config, engine_factory=lambda _: engine)

        assert engine.closed is True


class TestScenarioNames:

    def test_all(self):
        assert scenario_names(None) == ['homepage', 'risers', 'fallers', 'market-cap', 'index-average']
        assert scenario_names(['all', 'risers']) == scenario_names(None)

    def test_registry_order_without_duplicates(self):
        assert scenario_names(['market-cap', 'risers', 'risers']) == ['risers', 'market-cap']

    def test_unknown(self):
        with pytest.raises(ValueError):
            scenario_names(['nope'])
