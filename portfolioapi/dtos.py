"""Data transfer objects shared between layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheParams:
    """A cache key and the value stored under it."""

    key: str
    value: Any = None


@dataclass
class PaginationResponseDto:
    """Pagination details returned alongside a page of results."""

    current_page: int = 0
    page_size: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False
    total_items: int = 0


@dataclass
class ParamsGetAllPortfolioOfUserDto:
    """Query parameters for listing a user's portfolio."""

    user_id: str = ""
    page: int = 0
    limit: int = 0
    search: str = ""
    sort_type: str = ""
    sort_by: str = ""