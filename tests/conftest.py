"""
Pytest fixtures and fake Playwright objects for the scraper test suite.

The fakes only implement the handful of page/locator calls the scraper
makes, so the unit tests never start a browser.
"""

import re
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Ensure ftse_scraper package is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from ftse_scraper.extractors.number_parser import parse_change  # noqa: E402


def make_row(name: str, market_cap: str = "1,000", change: str = "+0.50%") -> Dict:
    """A data row with the live table's seven columns."""
    return {
        'expandable': False,
        'cells': ['TCK', name, '1,234.00', market_cap, 'GBX', '+6.00', change],
    }


def make_expandable() -> Dict:
    return {'expandable': True, 'cells': ['Detail panel']}


def with_expandables(rows: List[Dict]) -> List[Dict]:
    """Interleave an expandable detail row after every data row."""
    interleaved = []
    for row in rows:
        interleaved.append(row)
        interleaved.append(make_expandable())
    return interleaved


class FakeLocator:
    def __init__(self, page: 'FakePage', selector: str):
        self.page = page
        self.selector = selector

    @property
    def first(self) -> 'FakeLocator':
        return self

    def click(self, **kwargs) -> None:
        self.page.clicked.append(self.selector)

        match = re.search(r'page=(\d+)', self.selector)
        if match:
            self.page.current = int(match.group(1)) - 1
        elif 'Highest' in self.selector:
            self.page.sort_current(descending=True)
        elif 'Lowest' in self.selector:
            self.page.sort_current(descending=False)

    def scroll_into_view_if_needed(self, **kwargs) -> None:
        self.page.scrolled.append(self.selector)

    def count(self) -> int:
        return self.page.locator_counts.get(self.selector, 0)

    def locator(self, selector: str) -> 'FakeLocator':
        return FakeLocator(self.page, selector)

    def text_content(self) -> Optional[str]:
        return self.page.texts.get(self.selector)


class FakePage:
    """
    A page holding one list of raw rows per table page.

    ``eval_on_selector_all`` returns the rows of the current page the same
    shape the in-browser script does.
    """

    def __init__(self, pages: List[List[Dict]] = None):
        self.pages = pages or [[]]
        self.current = 0
        self.url = 'https://www.londonstockexchange.com/'
        self.clicked: List[str] = []
        self.scrolled: List[str] = []
        self.gotos: List[str] = []
        self.load_states: List[str] = []
        self.timeouts: List[int] = []
        self.locator_counts: Dict[str, int] = {}
        self.texts: Dict[str, str] = {}

    def eval_on_selector_all(self, selector: str, script: str, arg=None) -> List[Dict]:
        return [dict(row) for row in self.pages[self.current]]

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def goto(self, url: str, **kwargs) -> None:
        self.gotos.append(url)
        self.current = 0

    def wait_for_load_state(self, state: str = 'load') -> None:
        self.load_states.append(state)

    def wait_for_timeout(self, ms: int) -> None:
        self.timeouts.append(ms)

    def sort_current(self, descending: bool) -> None:
        rows = [r for r in self.pages[self.current] if not r['expandable']]

        def key(row):
            value = parse_change(row['cells'][6])
            return value if value is not None else float('-inf')

        rows.sort(key=key, reverse=descending)
        self.pages[self.current] = with_expandables(rows)


class FakeEngine:
    """Stands in for ``PlaywrightEngine`` inside a scenario."""

    def __init__(self, page: FakePage):
        self.page = page
        self.visited: List[str] = []
        self.screenshots: List[str] = []
        self.entered = False
        self.closed = False

    def __enter__(self) -> 'FakeEngine':
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    def goto(self, url: str, wait_until: str = 'networkidle') -> None:
        self.visited.append(url)
        self.page.goto(url)
        self.page.wait_for_load_state(wait_until)

    def screenshot(self, path: str = 'screenshot.png') -> str:
        self.screenshots.append(path)
        return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FTSE_* variables from the developer's shell out of the tests."""
    for name in ('FTSE_BASE_URL', 'FTSE_HEADLESS', 'FTSE_TIMEOUT_MS', 'FTSE_TOP_N',
                 'FTSE_TOTAL_PAGES', 'FTSE_SCREENSHOT_PATH'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def twelve_rows() -> List[Dict]:
    """Twelve constituents with distinct change values, unsorted."""
    changes = ['+1.10%', '-2.40%', '+3.75%', '+0.05%', '-0.80%', '+2.20%',
               '+4.10%', '-1.15%', '+0.90%', '+1.60%', '-3.30%', '+0.35%']
    return [
        make_row(f"Company {chr(ord('A') + i)}", market_cap=f"{(i + 1) * 1000:,}", change=change)
        for i, change in enumerate(changes)
    ]


@pytest.fixture
def fake_page(twelve_rows) -> FakePage:
    return FakePage([with_expandables(twelve_rows)])
