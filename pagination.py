"""
Pagination for the translation table
"""

import math

from constants import MAX_VISIBLE_PAGES


class Paginator:
    """Page arithmetic for a list of table rows.

    current_page is zero-based and always clamped to an existing page.
    """

    def __init__(self, total_items, page_size, current_page=0):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.total_items = total_items
        self.page_size = page_size
        self.current_page = current_page

    @property
    def total_pages(self):
        return math.ceil(self.total_items / self.page_size)

    @property
    def current_page(self):
        return self._current_page

    @current_page.setter
    def current_page(self, page):
        last_page = max(self.total_pages - 1, 0)
        self._current_page = min(max(page, 0), last_page)

    @property
    def has_previous(self):
        return self.current_page > 0

    @property
    def has_next(self):
        return self.current_page < self.total_pages - 1

    @property
    def start_index(self):
        return self.current_page * self.page_size

    @property
    def end_index(self):
        return min(self.start_index + self.page_size, self.total_items)

    def page_slice(self, items):
        """Items shown on the current page"""
        return items[self.start_index:self.end_index]

    def range_label(self):
        """Human-readable range, e.g. '26–50 of 120'"""
        if self.total_items == 0:
            return "0 of 0"
        return f"{self.start_index + 1}–{self.end_index} of {self.total_items}"

    def visible_pages(self, max_visible=MAX_VISIBLE_PAGES):
        """Window of up to max_visible page indices around the current page"""
        if self.total_pages == 0:
            return []
        start = min(max(self.current_page - max_visible // 2, 0), self.total_pages - 1)
        end = min(start + max_visible, self.total_pages)
        if end - start < max_visible:
            start = max(end - max_visible, 0)
        return list(range(start, end))
