import logging
from datetime import timedelta

import pytest

from portfolioapi.dtos import CacheParams
from portfolioapi.manager_cache_service import ManagerCacheService
from portfolioapi.ports import ManagerCacheRepositoryPort


class FakeRepository(ManagerCacheRepositoryPort):
    def __init__(self, error=None):
        self.error = error
        self.get_calls = []
        self.set_calls = []

    def get_data(self, params):
        self.get_calls.append(CacheParams(params.key, params.value))
        if self.error is not None:
            raise self.error

    def set_data(self, params, expiration):
        self.set_calls.append((CacheParams(params.key, params.value), expiration))
        if self.error is not None:
            raise self.error


KEY = "testKey"
STRUCTURE = {"Field": ""}


def test_new_keeps_repository():
    repository = FakeRepository()
    service = ManagerCacheService(repository)
    assert service.repository is repository


def test_get_data_returns_data_when_repository_returns_data():
    repository = FakeRepository()
    service = ManagerCacheService(repository)

    result = service.get_data(KEY, STRUCTURE)

    assert result == STRUCTURE
    assert repository.get_calls == [CacheParams(KEY, STRUCTURE)]


def test_get_data_returns_value_filled_by_repository():
    class FillingRepository(FakeRepository):
        def get_data(self, params):
            params.value = {"Field": "filled"}

    service = ManagerCacheService(FillingRepository())
    assert service.get_data(KEY, STRUCTURE) == {"Field": "filled"}


def test_get_data_raises_when_repository_raises():
    service = ManagerCacheService(FakeRepository(error=RuntimeError("test error")))
    with pytest.raises(RuntimeError) as excinfo:
        service.get_data(KEY, STRUCTURE)
    assert str(excinfo.value) == "test error"


def test_set_data_calls_repository():
    repository = FakeRepository()
    service = ManagerCacheService(repository)
    expiration = timedelta(minutes=1)

    service.set_data(KEY, STRUCTURE, expiration)

    assert repository.set_calls == [(CacheParams(KEY, STRUCTURE), expiration)]


def test_set_data_logs_repository_error(caplog):
    repository = FakeRepository(error=RuntimeError("test error"))
    service = ManagerCacheService(repository)
    expiration = timedelta(minutes=1)

    with caplog.at_level(logging.ERROR):
        service.set_data(KEY, STRUCTURE, expiration)

    assert repository.set_calls == [(CacheParams(KEY, STRUCTURE), expiration)]
    assert "test error" in caplog.text