import json
from datetime import timedelta

import pytest

from portfolioapi.cache_repository import CacheMissError, RedisManagerCacheRepository
from portfolioapi.dtos import CacheParams


class FakeRedis:
    def __init__(self):
        self.store = {}
        self.get_error = None
        self.set_error = None
        self.set_calls = []

    def get(self, key):
        if self.get_error is not None:
            raise self.get_error
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.set_calls.append((key, value, ex))
        if self.set_error is not None:
            raise self.set_error
        self.store[key] = value
        return True


KEY = "testKey"
EXPIRATION = timedelta(minutes=1)


def test_new_keeps_client():
    client = FakeRedis()
    assert RedisManagerCacheRepository(client).redis_client is client


def test_get_data_success():
    client = FakeRedis()
    client.store[KEY] = '{"Test": "value"}'
    params = CacheParams(key=KEY, value={"Test": ""})
    RedisManagerCacheRepository(client).get_data(params)
    assert params.value == {"Test": "value"}


def test_get_data_accepts_bytes():
    client = FakeRedis()
    client.store[KEY] = b'{"Test": "value"}'
    params = CacheParams(key=KEY, value={})
    RedisManagerCacheRepository(client).get_data(params)
    assert params.value == {"Test": "value"}


def test_get_data_miss():
    params = CacheParams(key=KEY, value={"Test": ""})
    with pytest.raises(CacheMissError):
        RedisManagerCacheRepository(FakeRedis()).get_data(params)
    assert params.value == {"Test": ""}


def test_get_data_redis_error():
    client = FakeRedis()
    error = RuntimeError("error mock")
    client.get_error = error
    with pytest.raises(RuntimeError) as info:
        RedisManagerCacheRepository(client).get_data(CacheParams(key=KEY))
    assert info.value is error


def test_get_data_invalid_json():
    client = FakeRedis()
    client.store[KEY] = '{"test":'
    with pytest.raises(json.JSONDecodeError):
        RedisManagerCacheRepository(client).get_data(CacheParams(key=KEY))


def test_set_data_success():
    client = FakeRedis()
    RedisManagerCacheRepository(client).set_data(
        CacheParams(key=KEY, value={"Test": ""}), EXPIRATION
    )
    assert client.set_calls == [(KEY, '{"Test":""}', EXPIRATION)]


def test_set_data_unserialisable_value():
    client = FakeRedis()
    with pytest.raises(TypeError):
        RedisManagerCacheRepository(client).set_data(
            CacheParams(key=KEY, value=object()), EXPIRATION
        )
    assert client.set_calls == []


def test_set_data_redis_error():
    client = FakeRedis()
    error = RuntimeError("redis error")
    client.set_error = error
    with pytest.raises(RuntimeError) as info:
        RedisManagerCacheRepository(client).set_data(
            CacheParams(key=KEY, value={"Test": "value"}), EXPIRATION
        )
    assert info.value is error
    assert client.set_calls == [(KEY, '{"Test":"value"}', EXPIRATION)]


def test_set_then_get_round_trip():
    client = FakeRedis()
    repository = RedisManagerCacheRepository(client)
    document = {"data": [{"id": "a", "rate": 19}], "pagination": None}
    repository.set_data(CacheParams(key=KEY, value=document), timedelta(0))
    assert client.set_calls[0][2] is None
    params = CacheParams(key=KEY, value={})
    repository.get_data(params)
    assert params.value == document