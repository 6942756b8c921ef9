"""Abstract interfaces between the domain, application and infrastructure layers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, List, Optional, Tuple

from .dtos import CacheParams, PaginationResponseDto, ParamsGetAllPortfolioOfUserDto
from .entities import Portfolio

PortfolioPage = Tuple[List[Portfolio], PaginationResponseDto]
CachedPortfolioPage = Tuple[Optional[List[Portfolio]], Optional[PaginationResponseDto]]


class ManagerCacheRepositoryPort(ABC):
    """Storage backend for cached values."""

    @abstractmethod
    def get_data(self, params: CacheParams) -> None:
        """Fill ``params.value`` with the value stored under ``params.key``; raise on a miss."""

    @abstractmethod
    def set_data(self, params: CacheParams, expiration: timedelta) -> None:
        """Store ``params.value`` under ``params.key`` for ``expiration``."""


class ManagerCacheServicePort(ABC):
    """Cache access used by domain services."""

    @abstractmethod
    def get_data(self, key: str, structure: Any) -> Any:
        """Return the value cached under ``key``; raise when it cannot be read."""

    @abstractmethod
    def set_data(self, key: str, value: Any, expiration: timedelta) -> None:
        """Cache ``value`` under ``key`` for ``expiration``."""


class AllPortfolioOfUserQueryRepositoryPort(ABC):
    """Storage query for a user's portfolio."""

    @abstractmethod
    def execute(self, params: ParamsGetAllPortfolioOfUserDto) -> Tuple[List[Portfolio], int]:
        """Return one page of items and the total number of matching items."""


class AllPortfolioOfUserQueryServicePort(ABC):
    """Validated query for a user's portfolio."""

    @abstractmethod
    def execute(self, params: ParamsGetAllPortfolioOfUserDto) -> PortfolioPage:
        """Return one page of items with its pagination details."""


class AllPortfolioOfUserCacheServicePort(ABC):
    """Cache for pages of a user's portfolio."""

    @abstractmethod
    def get(self, params: ParamsGetAllPortfolioOfUserDto) -> CachedPortfolioPage:
        """Return the cached page, or ``(None, None)`` on a miss."""

    @abstractmethod
    def set(
        self,
        params: ParamsGetAllPortfolioOfUserDto,
        data: List[Portfolio],
        pagination: Optional[PaginationResponseDto],
    ) -> None:
        """Cache a page of items."""


class AllPortfolioOfUserQueryUseCasePort(ABC):
    """Use case listing a user's portfolio."""

    @abstractmethod
    def execute(self, params: ParamsGetAllPortfolioOfUserDto) -> PortfolioPage:
        """Return one page of items with its pagination details."""


class RunSeedRepositoryPort(ABC):
    """Storage that receives the seed data."""

    @abstractmethod
    def execute(self, portfolios: List[Portfolio]) -> None:
        """Persist the given portfolio items."""


class SeedRunCheckRepositoryPort(ABC):
    """Check on whether the seed has been loaded."""

    @abstractmethod
    def execute(self) -> None:
        """Raise when the seed has already been loaded."""


class LoadDataSeedRepositoryPort(ABC):
    """Source of seed data."""

    @abstractmethod
    def execute(self) -> List[Portfolio]:
        """Return the seed portfolio items."""


class RunSeedServicePort(ABC):
    """Service loading the seed data into storage."""

    @abstractmethod
    def execute(self) -> None:
        """Load and persist the seed data."""


class SeedRunCheckServicePort(ABC):
    """Service checking whether the seed may run."""

    @abstractmethod
    def execute(self) -> None:
        """Raise when the seed must not run."""


class RunSeedUseCasePort(ABC):
    """Use case running the seed."""

    @abstractmethod
    def execute(self) -> None:
        """Run the seed, raising on failure."""