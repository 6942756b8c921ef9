"""Pagination arithmetic for paged queries."""

from __future__ import annotations

from .dtos import PaginationResponseDto


class PaginationService:
    """Computes pagination details for a page number and page size."""

    def __init__(self, page: int, page_size: int) -> None:
        self.page = page
        self.page_size = page_size

    def execute(self, total_items: int) -> PaginationResponseDto:
        """Describe the current page given the total number of items."""
        return PaginationResponseDto(
            current_page=self.page,
            page_size=self.page_size,
            has_next_page=total_items > self.page * self.page_size,
            has_previous_page=self.page > 1,
            total_items=total_items,
        )

    def get_offset(self) -> int:
        """Number of items to skip; a page below 1 is raised to 1."""
        limit = self.get_limit()
        if self.page <= 0:
            self.page = 1
        return (self.page - 1) * limit

    def get_limit(self) -> int:
        """Page size, raised to at least 10."""
        if self.page_size <= 10:
            self.page_size = 10
        return self.page_size