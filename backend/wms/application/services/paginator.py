"""Paginator — fixed-size page windows over the sorted list."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PageWindow(Generic[T]):
    """One rendered page. ``page`` is 1-based; indices are 0-based and end-exclusive."""

    page: int
    page_size: int
    total_items: int
    total_pages: int
    start_index: int
    end_index: int
    items: list[T] = field(default_factory=list)

    @property
    def can_go_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def can_go_previous(self) -> bool:
        return self.page > 1


class Paginator:
    """Tracks the current page and clamps it whenever the list size changes.

    A list that shrinks (bulk delete, narrower filter) never strands the
    view on an empty page: ``window()`` re-derives the page count and pulls
    the current page back into range on every call.
    """

    def __init__(self, page_size: int = 10):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.current_page = 1
        self._total_items = 0

    def total_pages_for(self, total_items: int) -> int:
        return max(1, math.ceil(total_items / self.page_size))

    @property
    def total_pages(self) -> int:
        return self.total_pages_for(self._total_items)

    def _clamp(self, page: int) -> int:
        return max(1, min(page, self.total_pages))

    def window(self, items: Sequence[T], page: int | None = None) -> PageWindow[T]:
        """Slice ``items`` at the current page, or at ``page`` when given."""
        self._total_items = len(items)
        if page is not None:
            self.current_page = page
        self.current_page = self._clamp(self.current_page)
        start = (self.current_page - 1) * self.page_size
        end = min(start + self.page_size, self._total_items)
        return PageWindow(
            page=self.current_page,
            page_size=self.page_size,
            total_items=self._total_items,
            total_pages=self.total_pages,
            start_index=start,
            end_index=end,
            items=list(items[start:end]),
        )

    def go_to(self, page: int) -> int:
        self.current_page = self._clamp(page)
        return self.current_page

    def next(self) -> int:
        return self.go_to(self.current_page + 1)

    def previous(self) -> int:
        return self.go_to(self.current_page - 1)

    def first(self) -> int:
        return self.go_to(1)

    def last(self) -> int:
        return self.go_to(self.total_pages)

    def reset(self) -> None:
        self.current_page = 1
