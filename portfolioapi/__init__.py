"""HTTP API serving customer product portfolios from MongoDB, with Redis caching and a seed loader."""

__version__ = "0.1.0"