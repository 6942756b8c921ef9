"""Domain services for loading the seed data."""

from __future__ import annotations

from .ports import (
    LoadDataSeedRepositoryPort,
    RunSeedRepositoryPort,
    RunSeedServicePort,
    SeedRunCheckRepositoryPort,
    SeedRunCheckServicePort,
)


class RunSeedService(RunSeedServicePort):
    """Loads the seed data and hands it to storage."""

    def __init__(
        self,
        run_seed_repository: RunSeedRepositoryPort,
        load_data_seed_repository: LoadDataSeedRepositoryPort,
    ) -> None:
        self.run_seed_repository = run_seed_repository
        self.load_data_seed_repository = load_data_seed_repository

    def execute(self) -> None:
        portfolios = self.load_data_seed_repository.execute()
        self.run_seed_repository.execute(portfolios)


class SeedRunCheckService(SeedRunCheckServicePort):
    """Raises when the seed has already been loaded."""

    def __init__(self, seed_run_check_repository: SeedRunCheckRepositoryPort) -> None:
        self.seed_run_check_repository = seed_run_check_repository

    def execute(self) -> None:
        self.seed_run_check_repository.execute()