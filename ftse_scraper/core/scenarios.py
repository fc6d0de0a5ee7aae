"""The FTSE 100 scenarios.

Each scenario is a plain function taking an open ``PlaywrightEngine`` and
the ``ScraperConfig``. ``run_scenario`` gives every scenario its own
browser session.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import expect

from .config import ScraperConfig
from .statistics import compute_market_cap_stats
from ..dynamic.browser_engine import BrowserConfig, PlaywrightEngine
from ..dynamic.consent import dismiss_cookie_banner
from ..dynamic.paginator import TablePaginator, collect_rows
from ..extractors.table_extractor import (
    ConstituentsTable,
    filter_above_threshold,
    is_sorted_by_change,
    market_cap_entries,
)
from ..reporting.console import print_market_cap_report, print_top_constituents

LOGO_SELECTOR = 'div.logo'
HERO_TITLE_SELECTOR = 'h1.ftse-hero-title.font-bold.hero-font'
AVERAGE_INDEX_HEADER = 'th:has-text("Average Index Value")'
FOLLOWING_CELL = 'xpath=following::td[1]'

SITE_URL_PATTERN = re.compile(r'londonstockexchange', re.IGNORECASE)
SITE_TITLE_PATTERN = re.compile(r'London Stock Exchange', re.IGNORECASE)


def open_constituents(engine: PlaywrightEngine, config: ScraperConfig) -> ConstituentsTable:
    """Load the constituents table, check the hero title, clear the consent banner."""
    page = engine.page
    engine.goto(config.constituents_url)

    expect(page.locator(HERO_TITLE_SELECTOR)).to_be_visible()
    dismiss_cookie_banner(page, config.consent_timeout)

    return ConstituentsTable(page, required_timeout=config.required_timeout)


def homepage(engine: PlaywrightEngine, config: ScraperConfig) -> Dict:
    """Open the home page and verify logo, URL and title."""
    page = engine.page
    engine.goto(config.base_url)

    expect(page.locator(LOGO_SELECTOR)).to_be_visible()
    consent_clicked = dismiss_cookie_banner(page, config.consent_timeout)

    expect(page).to_have_url(SITE_URL_PATTERN)
    expect(page).to_have_title(SITE_TITLE_PATTERN)

    screenshot = engine.screenshot(config.screenshot_path)
    if screenshot is None:
        raise RuntimeError(f"Screenshot was not saved to {config.screenshot_path}")

    return {
        'url': page.url,
        'consent_clicked': consent_clicked,
        'screenshot': screenshot,
    }


def _top_movers(engine: PlaywrightEngine, config: ScraperConfig, descending: bool) -> Dict:
    table = open_constituents(engine, config)
    table.verify_visible()
    table.sort_by_change(descending=descending, settle_ms=config.sort_settle_ms)

    constituents = table.top_constituents(config.top_n)
    in_order = is_sorted_by_change(constituents, descending=descending)
    if not in_order:
        print("  ⚠ Extracted change values are not in the selected sort order")

    print_top_constituents(constituents, descending=descending)

    return {
        'constituents': constituents,
        'sorted': in_order,
    }


def top_risers(engine: PlaywrightEngine, config: ScraperConfig) -> Dict:
    """Top constituents by highest change %."""
    return _top_movers(engine, config, descending=True)


def top_fallers(engine: PlaywrightEngine, config: ScraperConfig) -> Dict:
    """Top constituents by lowest change %."""
    return _top_movers(engine, config, descending=False)


def market_cap_summary(engine: PlaywrightEngine, config: ScraperConfig) -> Dict:
    """Collect market caps across every page and print statistics."""
    table = open_constituents(engine, config)

    paginator = TablePaginator(
        engine.page,
        table,
        page_href=config.page_href,
        total_pages=config.total_pages,
        settle_ms=config.page_settle_ms,
        first_page_url=config.constituents_url,
    )
    pages = list(paginator)
    rows = collect_rows(iter(pages))

    entries = market_cap_entries(rows)
    stats = compute_market_cap_stats(e.market_cap_text for e in entries)
    above = filter_above_threshold(entries, config.market_cap_threshold)

    print_market_cap_report(entries, paginator.pages_visited, stats, above, config.market_cap_threshold)

    return {
        'pages': pages,
        'entries': entries,
        'stats': stats,
        'above_threshold': above,
    }


def average_index_value(engine: PlaywrightEngine, config: ScraperConfig) -> Dict:
    """
    Look for an "Average Index Value" column on the constituents table.

    The table does not publish one today, so the usual outcome is a
    "does not exist" report. Lookup errors are reported, not raised.
    """
    open_constituents(engine, config)
    page = engine.page

    value: Optional[str] = None
    found = False
    try:
        header = page.locator(AVERAGE_INDEX_HEADER)
        if header.count() > 0:
            found = True
            value = (header.first.locator(FOLLOWING_CELL).first.text_content() or '').strip()
            print(f"Average Index Value: {value}")
        else:
            print("Average Index Value column does not exist in the table")
    except PlaywrightError as e:
        print(f"✗ Error while searching for Average Index Value: {e}")

    return {'found': found, 'value': value}


Scenario = Callable[[PlaywrightEngine, ScraperConfig], Dict]

SCENARIOS: Dict[str, Scenario] = {
    'homepage': homepage,
    'risers': top_risers,
    'fallers': top_fallers,
    'market-cap': market_cap_summary,
    'index-average': average_index_value,
}

SCENARIO_TITLES: Dict[str, str] = {
    'homepage': 'Navigation to the London Stock Exchange website',
    'risers': 'FTSE 100 top constituents with highest % change',
    'fallers': 'FTSE 100 top constituents with lowest % change',
    'market-cap': 'FTSE 100 market caps across all pages',
    'index-average': 'FTSE 100 average index value',
}


def run_scenario(
    name: str,
    config: ScraperConfig,
    engine_factory: Callable[[BrowserConfig], Any] = PlaywrightEngine
) -> Dict:
    """Run one scenario in a fresh browser session."""
    scenario = SCENARIOS[name]

    print(f"\n{'='*80}")
    print(SCENARIO_TITLES[name].upper())
    print(f"{'='*80}")

    with engine_factory(BrowserConfig.from_scraper_config(config)) as engine:
        return scenario(engine, config)


def scenario_names(selected: Optional[List[str]] = None) -> List[str]:
    """Expand a selection (``None`` or ``'all'``) into ordered scenario names."""
    if not selected or 'all' in selected:
        return list(SCENARIOS)

    unknown = [n for n in selected if n not in SCENARIOS]
    if unknown:
        raise ValueError(f"Unknown scenario(s): {', '.join(unknown)}")

    # keep registry order, drop duplicates
    return [n for n in SCENARIOS if n in selected]
