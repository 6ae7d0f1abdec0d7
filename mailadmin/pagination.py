# mailadmin/pagination.py
# Page is one fetched slice of a server-side collection; it is replaced
# wholesale on every fetch. Pager is the state of the page-button control,
# always derived from the most recently resolved Page.

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Page:
    data: List[Dict[str, Any]] = field(default_factory=list)
    current_page: int = 0
    last_page: int = 0

    @classmethod
    def from_response(cls, response) -> "Page":
        """Builds a Page from a decoded paginated response (or a bare list)."""
        if response is None:
            return cls()
        if isinstance(response, list):
            return cls(data=response, current_page=1, last_page=1)
        if not isinstance(response, dict):
            raise ValueError(f"Unexpected page response: {response!r}")
        current = int(response.get("current_page") or 1)
        last = int(response.get("last_page") or current)
        return cls(data=list(response.get("data") or []), current_page=current, last_page=last)

    @property
    def is_empty(self) -> bool:
        return not self.data

    def has_previous(self) -> bool:
        return self.current_page > 1

    def has_next(self) -> bool:
        return self.current_page < self.last_page


@dataclass
class Pager:
    total: int = 0
    page: int = 0
    max_visible: int = 5

    @classmethod
    def from_page(cls, page: Page, max_visible: int = 5) -> "Pager":
        # The indicator never points past the last page, even for an empty page beyond the end
        current = min(page.current_page, page.last_page) if page.last_page else page.current_page
        return cls(total=page.last_page, page=current, max_visible=max_visible)

    def visible_pages(self) -> List[int]:
        """
        Page numbers shown as buttons. Pages are grouped in blocks of
        ``max_visible`` and the block containing the current page is shown,
        e.g. with 12 pages and page 7: [6, 7, 8, 9, 10].
        """
        if self.total < 1:
            return []
        current = min(max(self.page, 1), self.total)
        start = ((current - 1) // self.max_visible) * self.max_visible + 1
        end = min(start + self.max_visible - 1, self.total)
        return list(range(start, end + 1))

    def label(self) -> str:
        if self.total < 1:
            return "No pages"
        return f"Page {self.page} of {self.total}"
