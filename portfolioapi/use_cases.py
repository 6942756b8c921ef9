"""Application use cases: listing a user's portfolio and running the seed."""

from __future__ import annotations

import dataclasses
from typing import List, Optional, Tuple

from .dtos import PaginationResponseDto, ParamsGetAllPortfolioOfUserDto
from .entities import Portfolio
from .ports import (
    AllPortfolioOfUserCacheServicePort,
    AllPortfolioOfUserQueryServicePort,
    AllPortfolioOfUserQueryUseCasePort,
    RunSeedServicePort,
    RunSeedUseCasePort,
    SeedRunCheckServicePort,
)


class GetAllPortfolioOfUserUseCase(AllPortfolioOfUserQueryUseCasePort):
    """Serves a page of a user's portfolio from the cache, or queries and caches it."""

    def __init__(
        self,
        manager_cache_service: AllPortfolioOfUserCacheServicePort,
        get_all_portfolio_of_user_service: AllPortfolioOfUserQueryServicePort,
    ) -> None:
        self.manager_cache_service = manager_cache_service
        self.get_all_portfolio_of_user_service = get_all_portfolio_of_user_service

    def execute(
        self, params: ParamsGetAllPortfolioOfUserDto
    ) -> Tuple[List[Portfolio], Optional[PaginationResponseDto]]:
        # The query service normalises its parameters in place; the cache is
        # keyed on the parameters exactly as they were requested.
        cache_params = dataclasses.replace(params)
        data, pagination = self.manager_cache_service.get(cache_params)
        if data is not None:
            return data, pagination

        data, pagination = self.get_all_portfolio_of_user_service.execute(params)
        self.manager_cache_service.set(cache_params, data, pagination)
        return data, pagination


class RunSeedUseCase(RunSeedUseCasePort):
    """Loads the seed data once the check service allows it."""

    def __init__(
        self,
        run_seed_service: RunSeedServicePort,
        seed_run_check_service: SeedRunCheckServicePort,
    ) -> None:
        self.run_seed_service = run_seed_service
        self.seed_run_check_service = seed_run_check_service

    def execute(self) -> None:
        self.seed_run_check_service.execute()
        self.run_seed_service.execute()