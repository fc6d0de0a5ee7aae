"""Summary statistics over scraped market cap values."""

from dataclasses import dataclass
from typing import Iterable, Optional

from ..extractors.number_parser import parse_market_cap


@dataclass
class MarketCapStats:
    """Mean, minimum and maximum market cap (£m)."""
    count: int
    average: float
    minimum: float
    maximum: float
    skipped: int = 0


def compute_market_cap_stats(values: Iterable[Optional[str]]) -> Optional[MarketCapStats]:
    """
    Compute statistics over market cap text such as ``["7,500", "6,200"]``.

    Values that do not parse are left out and counted in ``skipped``.
    Returns None when nothing parses.
    """
    parsed = []
    skipped = 0
    for value in values:
        number = parse_market_cap(value)
        if number is None:
            skipped += 1
        else:
            parsed.append(number)

    if not parsed:
        return None

    minimum, maximum = min(parsed), max(parsed)
    # float rounding can push the mean of equal values just outside the range
    average = min(max(sum(parsed) / len(parsed), minimum), maximum)

    return MarketCapStats(
        count=len(parsed),
        average=average,
        minimum=minimum,
        maximum=maximum,
        skipped=skipped
    )
