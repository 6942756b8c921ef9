"""Domain errors raised by portfolio and seed operations."""


class NotFoundPortfoliosOfUserError(LookupError):
    """No portfolio items exist for the requested user."""

    def __init__(self, message: str = "portfolios of user not found") -> None:
        super().__init__(message)


class SeedAlreadyExecutedError(RuntimeError):
    """The seed data has already been loaded."""

    def __init__(self, message: str = "seed already executed") -> None:
        super().__init__(message)


class SeedNotExecutedError(RuntimeError):
    """Loading the seed data into storage failed."""

    def __init__(self, message: str = "seed not executed") -> None:
        super().__init__(message)


class LoadDataSeedError(RuntimeError):
    """Reading the seed data failed."""

    def __init__(self, message: str = "error loading data seed") -> None:
        super().__init__(message)