"""Best-effort dismissal of the cookie consent banner."""

import re
from typing import Any

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import expect

ACCEPT_BUTTON_NAME = re.compile(r'ACCEPT ALL|ACCEPT Cookies|Accept All', re.IGNORECASE)


def dismiss_cookie_banner(page: Any, timeout_ms: int = 5000) -> bool:
    """
    Click "Accept all" on the consent banner if it shows up.

    The banner is optional: if it is not visible within ``timeout_ms``
    nothing happens. Returns True only when a click was made, so calling
    this again after a dismissal returns False.
    """
    button = page.get_by_role('button', name=ACCEPT_BUTTON_NAME).first

    try:
        button.wait_for(state='visible', timeout=timeout_ms)
    except PlaywrightTimeoutError:
        print("  ⚠ Cookie banner not found or already accepted")
        return False

    button.click()
    print("  ✓ Clicked accept all cookies")

    try:
        expect(button).not_to_be_visible()
    except AssertionError:
        print("  ⚠ Cookie banner still visible after accepting")
    return True
