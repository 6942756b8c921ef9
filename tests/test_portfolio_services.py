import json
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from portfolioapi.dtos import PaginationResponseDto, ParamsGetAllPortfolioOfUserDto
from portfolioapi.entities import Portfolio, PortfolioEntityParams, Tax
from portfolioapi.errors import NotFoundPortfoliosOfUserError
from portfolioapi.portfolio_services import (
    AllPortfolioOfUserService,
    ManagerCacheAllPortfolioOfUserService,
    generate_cache_key,
)
from portfolioapi.ports import AllPortfolioOfUserQueryRepositoryPort, ManagerCacheServicePort
from portfolioapi.validation import ValidationError

CUSTOMER = "0123456789abcdef01234567"
ITEM_ID = "abcdef0123456789abcdef01"


def make_portfolio(sku="SKU00001"):
    return Portfolio(
        PortfolioEntityParams(
            id=ITEM_ID,
            channel="DIGITAL",
            country="COLO",
            create_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            customer_id=CUSTOMER,
            route="ROUTE1",
            sku=sku,
            title="Chocolate bar",
            category_id="Sweet Snacks",
            category="Snacks",
            brand="Brand Name",
            classification="Premium",
            units_per_box="12",
            min_order_units="1.50",
            package_description="Box of twelve",
            package_unit_description="Single bar",
            quantity_max_redeem=5,
            redeem_unit="UNIT",
            order_reason_redeem=3,
            sku_redeem=True,
            price=10.5,
            points=20,
            taxes=[Tax("tax-1", "IVA", 19)],
        )
    )


class FakeRepository(AllPortfolioOfUserQueryRepositoryPort):
    def __init__(self, result=None, total=0, error=None):
        self.result = result if result is not None else []
        self.total = total
        self.error = error
        self.received = []

    def execute(self, params):
        self.received.append(replace(params))
        if self.error is not None:
            raise self.error
        return self.result, self.total


class FakeCache(ManagerCacheServicePort):
    def __init__(self):
        self.store = {}
        self.expirations = {}

    def get_data(self, key, structure):
        return json.loads(self.store[key])

    def set_data(self, key, value, expiration):
        self.store[key] = json.dumps(value)
        self.expirations[key] = expiration


def params(**overrides):
    base = ParamsGetAllPortfolioOfUserDto(user_id=CUSTOMER, page=1, limit=10)
    return replace(base, **overrides)


def test_execute_applies_defaults_and_paginates():
    items = [make_portfolio()]
    repository = FakeRepository(result=items, total=15)
    query = params()

    result, pagination = AllPortfolioOfUserService(repository).execute(query)

    assert result is items
    assert query.sort_type == "desc"
    assert query.sort_by == "created_at"
    assert repository.received == [query]
    assert pagination == PaginationResponseDto(
        current_page=1, page_size=10, has_next_page=True,
        has_previous_page=False, total_items=15,
    )


def test_execute_normalises_search_and_sort():
    repository = FakeRepository(result=[make_portfolio()], total=1)
    query = params(search="Choco", sort_type="ASC", sort_by="Min Order Units")

    AllPortfolioOfUserService(repository).execute(query)

    assert repository.received[0].search == "choco"
    assert repository.received[0].sort_type == "asc"
    assert repository.received[0].sort_by == "min_order_units"


@pytest.mark.parametrize(
    "overrides",
    [
        {"sort_type": "abcd"},
        {"search": "ab"},
        {"page": 0},
        {"limit": -5},
        {"user_id": "not-an-id"},
        {"sort_by": "abc"},
    ],
)
def test_execute_rejects_invalid_params(overrides):
    repository = FakeRepository()
    with pytest.raises(ValidationError):
        AllPortfolioOfUserService(repository).execute(params(**overrides))
    assert repository.received == []


def test_execute_invalid_sort_type_message():
    with pytest.raises(ValidationError) as excinfo:
        AllPortfolioOfUserService(FakeRepository()).execute(params(sort_type="abcd"))
    assert str(excinfo.value) == "sortType must be asc or desc"


def test_execute_propagates_repository_error():
    repository = FakeRepository(error=NotFoundPortfoliosOfUserError())
    with pytest.raises(NotFoundPortfoliosOfUserError):
        AllPortfolioOfUserService(repository).execute(params())


def test_cache_key_format():
    key = generate_cache_key(params())
    prefix = f"customer/{CUSTOMER}/currentPage/1/pageSize/10/hash/"
    assert key.startswith(prefix)
    assert key.endswith("/all-portfolios")
    digest = key[len(prefix):-len("/all-portfolios")]
    assert len(digest) == 64
    assert all(c in "0123456789abcdef" for c in digest)


def test_cache_key_depends_on_every_parameter():
    base = generate_cache_key(params())
    assert generate_cache_key(params()) == base
    assert generate_cache_key(params(search="choco")) != base
    assert generate_cache_key(params(sort_by="points")) != base


def test_cache_miss_returns_none_pair():
    service = ManagerCacheAllPortfolioOfUserService(FakeCache())
    assert service.get(params()) == (None, None)


def test_cache_round_trip():
    cache = FakeCache()
    service = ManagerCacheAllPortfolioOfUserService(cache)
    original = make_portfolio()
    pagination = PaginationResponseDto(1, 10, True, False, 15)

    service.set(params(), [original], pagination)
    data, cached_pagination = service.get(params())

    assert cached_pagination == pagination
    assert len(data) == 1
    restored = data[0]
    for field in (
        "id", "channel", "country", "create_at", "customer_id", "route", "sku",
        "title", "category_id", "category", "brand", "classification",
        "units_per_box", "min_order_units", "package_description",
        "package_unit_description", "quantity_max_redeem", "redeem_unit",
        "order_reason_redeem", "sku_redeem", "full_price", "price", "points",
    ):
        assert getattr(restored, field) == getattr(original, field), field
    assert [(t.id, t.type_tax, t.rate_raw) for t in restored.taxes] == [
        (t.id, t.type_tax, t.rate_raw) for t in original.taxes
    ]
    assert cache.expirations[generate_cache_key(params())] == timedelta(hours=24)


def test_cache_is_keyed_by_params():
    service = ManagerCacheAllPortfolioOfUserService(FakeCache())
    service.set(params(), [make_portfolio()], PaginationResponseDto(1, 10, False, False, 1))
    assert service.get(params(page=2)) == (None, None)


def test_cache_keeps_missing_pagination():
    service = ManagerCacheAllPortfolioOfUserService(FakeCache())
    service.set(params(), [make_portfolio()], None)
    data, pagination = service.get(params())
    assert pagination is None
    assert [item.sku for item in data] == ["SKU00001"]