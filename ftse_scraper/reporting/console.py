"""Console reports for the scenarios.

``format_*`` functions return the report lines; ``print_*`` prints them.
"""

from typing import List, Optional

from ..core.statistics import MarketCapStats
from ..extractors.table_extractor import Constituent, MarketCapEntry, PLACEHOLDER

TOP_RULE = '=' * 46
MARKET_CAP_RULE = '=' * 34
NAME_WIDTH = 25


def format_number(value: float, max_decimals: int = 3) -> str:
    """
    Group thousands with commas and drop trailing zeros.

    ``format_number(7566.666, 2) == "7,566.67"``, ``format_number(7500.0) == "7,500"``
    """
    text = f"{value:,.{max_decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text in ('-0', ''):
        text = '0'
    return text


def format_top_constituents(constituents: List[Constituent], descending: bool = True) -> List[str]:
    """Ranked name / change % table."""
    direction = 'Highest' if descending else 'Lowest'
    lines = [
        '',
        f"Top {len(constituents)} FTSE 100 Companies by {direction} Daily Change:",
        TOP_RULE,
        f"Rank | {'Company Name'.ljust(NAME_WIDTH + 2)} | Change %",
        f"-----|{'-' * (NAME_WIDTH + 2)}|----------",
    ]

    for c in constituents:
        rank = str(c.rank).ljust(4)
        name = (c.name or PLACEHOLDER).ljust(NAME_WIDTH)
        change = c.change_text or PLACEHOLDER
        lines.append(f"{rank} | {name} | {change}")

    lines.append(TOP_RULE)
    return lines


def format_market_caps(entries: List[MarketCapEntry], pages_visited: int) -> List[str]:
    """Every market cap value in page order, then the total."""
    lines = [
        '',
        f"All Market Cap Values (Pages 1-{pages_visited}):",
        MARKET_CAP_RULE,
        'Rank  Market Cap (£m)',
        '-----|---------------',
    ]

    for entry in entries:
        rank = str(entry.rank).ljust(4)
        lines.append(f"{rank} | {entry.market_cap_text or PLACEHOLDER}")

    lines.append(MARKET_CAP_RULE)
    lines.append(f"Total: {len(entries)} companies across {pages_visited} pages")
    return lines


def format_statistics(stats: Optional[MarketCapStats]) -> List[str]:
    lines = ['', 'Statistics:']
    if stats is None:
        lines.append('No numeric market cap values to summarise')
        return lines

    lines.extend([
        f"Average: £{format_number(stats.average, 2)}m",
        f"Minimum: £{format_number(stats.minimum)}m",
        f"Maximum: £{format_number(stats.maximum)}m",
    ])
    if stats.skipped:
        lines.append(f"⚠ Skipped {stats.skipped} non-numeric value(s)")
    return lines


def format_above_threshold(entries: List[MarketCapEntry], threshold: float) -> List[str]:
    lines = ['', f"Companies with Market Cap > £{format_number(threshold)}m: {len(entries)}"]
    for entry in entries:
        lines.append(f"  {entry.name.ljust(NAME_WIDTH)} £{entry.market_cap_text}m")
    return lines


def print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def print_top_constituents(constituents: List[Constituent], descending: bool = True) -> None:
    print_lines(format_top_constituents(constituents, descending))


def print_market_cap_report(
    entries: List[MarketCapEntry],
    pages_visited: int,
    stats: Optional[MarketCapStats],
    above: List[MarketCapEntry],
    threshold: float
) -> None:
    print_lines(format_market_caps(entries, pages_visited))
    print_lines(format_statistics(stats))
    print_lines(format_above_threshold(above, threshold))
