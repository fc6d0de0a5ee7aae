"""Walk the paginated constituents table one page at a time."""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional

from ..extractors.table_extractor import ConstituentsTable, TableRow, data_rows

PAGE_LINK_TEMPLATE = 'a.page-number[href="{href}"]'


@dataclass
class PageResult:
    """Rows extracted from one page of the table."""
    page_number: int
    rows: List[TableRow] = field(default_factory=list)
    rows_seen: int = 0
    expandable_skipped: int = 0

    @property
    def extracted(self) -> int:
        return len(self.rows)


class TablePaginator:
    """
    Finite, lazy sequence of ``PageResult`` over ``total_pages`` pages.

    Pages are visited strictly in order because each link is only present
    once the previous page has rendered. Iterating a second time starts
    over from page 1.
    """

    def __init__(
        self,
        page: Any,
        table: ConstituentsTable,
        page_href: Callable[[int], str],
        total_pages: int = 5,
        settle_ms: int = 1000,
        first_page_url: Optional[str] = None
    ):
        self.page = page
        self.table = table
        self.page_href = page_href
        self.total_pages = total_pages
        self.settle_ms = settle_ms
        self.first_page_url = first_page_url
        self.pages_visited = 0
        self._started = False

    def __iter__(self) -> Iterator[PageResult]:
        if self._started:
            self._restart()
        self._started = True
        self.pages_visited = 0

        for page_number in range(1, self.total_pages + 1):
            if page_number > 1:
                self._go_to_page(page_number)

            print(f"  → Extracting from Page {page_number}...")
            result = self._extract(page_number)
            self.pages_visited += 1
            yield result

    def _restart(self) -> None:
        if self.first_page_url:
            self.page.goto(self.first_page_url)
        else:
            self._go_to_page(1)
        self.page.wait_for_load_state('networkidle')

    def _go_to_page(self, page_number: int) -> None:
        link = self.page.locator(PAGE_LINK_TEMPLATE.format(href=self.page_href(page_number)))
        link.click()
        self.page.wait_for_load_state('networkidle')
        self.page.wait_for_timeout(self.settle_ms)

    def _extract(self, page_number: int) -> PageResult:
        rows = self.table.read_rows()
        kept = data_rows(rows)
        return PageResult(
            page_number=page_number,
            rows=kept,
            rows_seen=len(rows),
            expandable_skipped=len(rows) - len(kept)
        )


def collect_rows(results: Iterator[PageResult]) -> List[TableRow]:
    """Concatenate the rows of every page in page order."""
    rows: List[TableRow] = []
    for result in results:
        rows.extend(result.rows)
    return rows
