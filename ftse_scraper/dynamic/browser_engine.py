"""Browser automation engine for the FTSE 100 scenarios."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from playwright.sync_api import sync_playwright

from ..core.config import ScraperConfig


@dataclass
class BrowserConfig:
    """Configuration for browser execution."""
    headless: bool = True
    timeout: int = 30000  # ms
    viewport: Dict = field(default_factory=lambda: {'width': 1280, 'height': 720})
    user_agent: str = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'

    @classmethod
    def from_scraper_config(cls, config: ScraperConfig) -> 'BrowserConfig':
        return cls(headless=config.headless, timeout=config.browser_timeout)


class PlaywrightEngine:
    """
    Browser session using Playwright.

    One engine is one scenario's session: it is opened when the scenario
    starts and closed when it ends, and is never shared.

    Usage:
        with PlaywrightEngine(config) as engine:
            engine.goto(url)
            ...
    """

    def __init__(self, config: BrowserConfig = None):
        self.config = config or BrowserConfig()
        self.playwright = None
        self.browser = None
        self.context = None
        self.page = None

    def __enter__(self) -> 'PlaywrightEngine':
        try:
            self.initialize()
            self.create_page()
        except BaseException:
            # __exit__ does not run when __enter__ raises
            self.cleanup()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def initialize(self) -> None:
        """Start Playwright and launch a Chromium browser."""
        self.playwright = sync_playwright().start()
        self.browser = self.playwright.chromium.launch(headless=self.config.headless)
        self.context = self.browser.new_context(
            viewport=self.config.viewport,
            user_agent=self.config.user_agent
        )
        print("✓ Browser initialized")

    def create_page(self) -> Any:
        """Create new page instance."""
        if not self.context:
            self.initialize()

        self.page = self.context.new_page()
        self.page.set_default_timeout(self.config.timeout)

        return self.page

    def goto(self, url: str, wait_until: str = "networkidle") -> None:
        """
        Navigate to URL and wait for the page to settle.

        Args:
            url: Target URL
            wait_until: Load state to wait for after navigation
                - "networkidle": no network activity for 500 ms (default,
                  the constituents table is filled by XHR)
                - "domcontentloaded" / "load": faster, for static pages
        """
        self.page.goto(url, timeout=self.config.timeout)
        self.page.wait_for_load_state(wait_until)
        print(f"  ✓ Loaded: {url}")

    def screenshot(self, path: str = "screenshot.png") -> Optional[str]:
        """Save a screenshot of the current page."""
        try:
            self.page.screenshot(path=path)
            print(f"  📸 Screenshot: {path}")
            return path
        except Exception as e:
            print(f"  ✗ Screenshot failed: {e}")
            return None

    def cleanup(self) -> None:
        """
        Close page, context, browser, then stop Playwright.

        Each step runs even if an earlier one fails, so the driver is always
        stopped. Safe to call more than once.
        """
        steps = [
            (self.page, 'close'),
            (self.context, 'close'),
            (self.browser, 'close'),
            (self.playwright, 'stop'),
        ]
        self.page = None
        self.context = None
        self.browser = None
        self.playwright = None

        clean = True
        for resource, method in steps:
            if not resource:
                continue
            try:
                getattr(resource, method)()
            except Exception as e:
                clean = False
                print(f"⚠ Cleanup warning: {e}")

        if clean:
            print("✓ Browser cleanup complete")
