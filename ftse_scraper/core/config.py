"""Configuration management for the scraper."""

import copy
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        print(f"⚠ Warning: ignoring non-integer {name}={value!r}")
        return default


@dataclass
class ScraperConfig:
    """Configuration for the FTSE 100 scenarios."""

    # Target website
    base_url: str = "https://www.londonstockexchange.com/"
    constituents_path: str = "indices/ftse-100/constituents/table"

    # Browser settings
    headless: bool = True
    browser_timeout: int = 30000  # ms

    # Extraction settings
    top_n: int = 10
    total_pages: int = 5
    market_cap_threshold: float = 7.0  # £m

    # Waits
    consent_timeout: int = 5000      # ms, bounded wait for the cookie banner
    sort_settle_ms: int = 2000       # table re-render after sorting
    page_settle_ms: int = 1000       # table re-render after pagination
    required_timeout: int = 15000    # ms, for the sort header

    # Output
    screenshot_path: str = "london-stock-exchange.png"

    def __post_init__(self):
        """Apply FTSE_* environment overrides."""
        self.base_url = os.getenv("FTSE_BASE_URL") or self.base_url
        self.headless = _env_bool("FTSE_HEADLESS", self.headless)
        self.browser_timeout = _env_int("FTSE_TIMEOUT_MS", self.browser_timeout)
        self.top_n = _env_int("FTSE_TOP_N", self.top_n)
        self.total_pages = _env_int("FTSE_TOTAL_PAGES", self.total_pages)
        self.screenshot_path = os.getenv("FTSE_SCREENSHOT_PATH") or self.screenshot_path

        if not self.base_url.endswith('/'):
            self.base_url += '/'

    @property
    def constituents_url(self) -> str:
        """Full URL of the constituents table."""
        return self.base_url + self.constituents_path.lstrip('/')

    def page_href(self, page_number: int) -> str:
        """Relative href the pagination links use for a given page."""
        return f"/{self.constituents_path.strip('/')}?page={page_number}"

    def validate(self) -> bool:
        """Validate configuration."""
        problems = []
        for name in ('top_n', 'total_pages', 'browser_timeout', 'consent_timeout'):
            if getattr(self, name) <= 0:
                problems.append(name)

        if problems:
            print(f"⚠ Warning: non-positive settings: {', '.join(problems)}")
            return False
        return True

    def with_overrides(self, **overrides: Optional[object]) -> 'ScraperConfig':
        """Return a copy with every non-None override applied."""
        config = copy.copy(self)
        for name, value in overrides.items():
            if value is None:
                continue
            if not hasattr(config, name):
                raise AttributeError(f"Unknown config field: {name}")
            setattr(config, name, value)
        return config
