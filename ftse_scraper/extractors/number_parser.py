"""Parse the numeric text shown in the constituents table."""

import re
from typing import Optional

# "7,500", "12,345.67", "-1,000"
MARKET_CAP_PATTERN = re.compile(r'^[+\-]?\d+(?:\.\d+)?$')

# "+1.23%", "-0.45 %", "0.00%", "1.2"
CHANGE_PATTERN = re.compile(r'^([+\-]?)\s*(\d+(?:\.\d+)?)\s*%?$')

MINUS_SIGNS = ('−', '–')


def _normalise(text: Optional[str]) -> str:
    if not text:
        return ''
    cleaned = text.strip().replace('\xa0', ' ')
    for sign in MINUS_SIGNS:
        cleaned = cleaned.replace(sign, '-')
    return cleaned


def parse_market_cap(text: Optional[str]) -> Optional[float]:
    """
    Parse a market cap cell (£m) such as ``"7,500"``.

    Thousands separators are stripped. Returns None for empty or
    non-numeric text.
    """
    cleaned = _normalise(text).replace(',', '').replace(' ', '')
    if not MARKET_CAP_PATTERN.match(cleaned):
        return None
    return float(cleaned)


def parse_change(text: Optional[str]) -> Optional[float]:
    """Parse a change % cell such as ``"+1.23%"``. Returns None if it is not a number."""
    cleaned = _normalise(text).replace(',', '')
    match = CHANGE_PATTERN.match(cleaned)
    if not match:
        return None
    sign, amount = match.groups()
    value = float(amount)
    return -value if sign == '-' else value
