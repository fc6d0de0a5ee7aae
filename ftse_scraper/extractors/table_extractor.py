"""Extract constituents from the FTSE 100 index table.

The table is rendered client-side. Every data row is followed by an
``expandable`` row holding a collapsible detail panel; those rows carry no
constituent data and are skipped everywhere.

Columns (1-based, as in ``td:nth-child``):
    2 - company name
    4 - market cap (£m)
    7 - change %
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from playwright.sync_api import expect

from .number_parser import parse_change, parse_market_cap

TABLE_SELECTOR = '.full-width.ftse-index-table-table'
ROW_SELECTOR = f'{TABLE_SELECTOR} tbody tr'
EXPANDABLE_CLASS = 'expandable'

NAME_COLUMN = 2
MARKET_CAP_COLUMN = 4
CHANGE_COLUMN = 7

CHANGE_HEADER = 'xpath=//span[normalize-space() = "Change %"]'

# The sort menu is rendered once per sortable column; the 4th copy belongs
# to the Change % header.
SORT_OPTION_TEMPLATE = 'xpath=(//div[@title="{title}"])[{index}]'
SORT_OPTION_INDEX = 4
HIGHEST_FIRST = 'Highest – lowest'
LOWEST_FIRST = 'Lowest – highest'

PLACEHOLDER = 'N/A'

READ_ROWS_SCRIPT = """
rows => rows.map(row => ({
    expandable: row.classList.contains('%s'),
    cells: Array.from(row.querySelectorAll('td')).map(td => (td.textContent || '').trim())
}))
""" % EXPANDABLE_CLASS


@dataclass
class TableRow:
    """One ``tbody tr`` as scraped text."""
    cells: List[str] = field(default_factory=list)
    expandable: bool = False

    def cell(self, column: int) -> str:
        """Text of a 1-based column, empty when the row is shorter."""
        if 0 < column <= len(self.cells):
            return self.cells[column - 1] or ''
        return ''


@dataclass
class Constituent:
    """A ranked row of the top-N table."""
    rank: int
    name: str
    change_text: str
    change_pct: Optional[float] = None


@dataclass
class MarketCapEntry:
    """A ranked market cap value, in page order."""
    rank: int
    name: str
    market_cap_text: str
    market_cap: Optional[float] = None


def data_rows(rows: Iterable[TableRow]) -> List[TableRow]:
    """Drop expandable detail rows."""
    return [row for row in rows if not row.expandable]


def column_values(rows: Iterable[TableRow], column: int) -> List[str]:
    """Text of one column for every data row, in table order."""
    return [row.cell(column) for row in data_rows(rows)]


def align_top_n(
    names: List[str],
    changes: List[str],
    n: int = 10,
    placeholder: str = PLACEHOLDER
) -> List[Constituent]:
    """
    Pair the name and change % columns by index and keep the first ``n``.

    Missing or empty cells become ``placeholder``. Change text that is not
    a number is treated as absent data rather than an error.
    """
    length = min(n, max(len(names), len(changes)))
    constituents = []

    for i in range(length):
        name = names[i] if i < len(names) else ''
        change = changes[i] if i < len(changes) else ''
        change_pct = parse_change(change)

        constituents.append(Constituent(
            rank=i + 1,
            name=name or placeholder,
            change_text=change if change_pct is not None else placeholder,
            change_pct=change_pct
        ))

    return constituents


def is_sorted_by_change(constituents: List[Constituent], descending: bool = True) -> bool:
    """Check the order of the parseable change values."""
    values = [c.change_pct for c in constituents if c.change_pct is not None]
    pairs = zip(values, values[1:])
    if descending:
        return all(a >= b for a, b in pairs)
    return all(a <= b for a, b in pairs)


def market_cap_entries(rows: Iterable[TableRow], start_rank: int = 1) -> List[MarketCapEntry]:
    """Market cap text and value for every data row."""
    entries = []
    for offset, row in enumerate(data_rows(rows)):
        text = row.cell(MARKET_CAP_COLUMN)
        entries.append(MarketCapEntry(
            rank=start_rank + offset,
            name=row.cell(NAME_COLUMN) or PLACEHOLDER,
            market_cap_text=text,
            market_cap=parse_market_cap(text)
        ))
    return entries


def filter_above_threshold(entries: Iterable[MarketCapEntry], threshold: float) -> List[MarketCapEntry]:
    """Entries whose market cap exceeds ``threshold`` (£m)."""
    return [e for e in entries if e.market_cap is not None and e.market_cap > threshold]


class ConstituentsTable:
    """
    The constituents table on a loaded page.

    Wraps the selectors and the sort menu; all text processing is done by
    the module-level functions above.
    """

    def __init__(self, page: Any, required_timeout: int = 15000):
        self.page = page
        self.required_timeout = required_timeout

    @property
    def locator(self) -> Any:
        return self.page.locator(TABLE_SELECTOR)

    def verify_visible(self) -> None:
        """Scroll the table into view and assert it is visible."""
        table = self.locator
        table.scroll_into_view_if_needed()
        expect(table).to_be_visible()
        print("  ✓ Table verified")

    def read_rows(self) -> List[TableRow]:
        """All body rows of the current page, expandable ones included."""
        raw_rows = self.page.eval_on_selector_all(ROW_SELECTOR, READ_ROWS_SCRIPT)
        return [
            TableRow(cells=list(raw.get('cells') or []), expandable=bool(raw.get('expandable')))
            for raw in raw_rows
        ]

    def sort_by_change(self, descending: bool = True, settle_ms: int = 2000) -> None:
        """Sort by change % through the header menu and let the table re-render."""
        header = self.page.locator(CHANGE_HEADER)
        expect(header).to_be_visible(timeout=self.required_timeout)
        header.click(timeout=self.required_timeout)

        title = HIGHEST_FIRST if descending else LOWEST_FIRST
        option = self.page.locator(SORT_OPTION_TEMPLATE.format(title=title, index=SORT_OPTION_INDEX))
        option.click()
        print(f"  ✓ Selected {title} sorting")

        self.page.wait_for_timeout(settle_ms)

    def top_constituents(self, n: int = 10) -> List[Constituent]:
        """First ``n`` constituents in the table's current order."""
        rows = self.read_rows()
        names = column_values(rows, NAME_COLUMN)[:n]
        changes = column_values(rows, CHANGE_COLUMN)[:n]
        return align_top_n(names, changes, n)
