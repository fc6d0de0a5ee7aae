"""Browser-side helpers.

Components:
    - browser_engine: Playwright session per scenario
    - consent: optional cookie banner dismissal
    - paginator: page-by-page walk of the constituents table
"""

from .browser_engine import BrowserConfig, PlaywrightEngine
from .consent import dismiss_cookie_banner
from .paginator import PageResult, TablePaginator

__all__ = [
    'BrowserConfig',
    'PlaywrightEngine',
    'dismiss_cookie_banner',
    'PageResult',
    'TablePaginator'
]
