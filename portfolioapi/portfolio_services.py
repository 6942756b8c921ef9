"""Domain services listing a user's portfolio and caching the results."""

from __future__ import annotations

import hashlib
from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .dtos import PaginationResponseDto, ParamsGetAllPortfolioOfUserDto
from .entities import Portfolio, PortfolioEntityParams, Tax
from .pagination import PaginationService
from .ports import (
    AllPortfolioOfUserCacheServicePort,
    AllPortfolioOfUserQueryRepositoryPort,
    AllPortfolioOfUserQueryServicePort,
    ManagerCacheServicePort,
)
from .validation import NumberValidateObject, StringValidateObject, ValidationError

_DEFAULT_SORT_TYPE = "desc"
_DEFAULT_SORT_BY = "created_at"
_SORT_TYPES = ("asc", "desc")
_CACHE_EXPIRATION = timedelta(hours=24)


class AllPortfolioOfUserService(AllPortfolioOfUserQueryServicePort):
    """Validates query parameters and fetches one page of a user's portfolio."""

    def __init__(self, repository: AllPortfolioOfUserQueryRepositoryPort) -> None:
        self.repository = repository

    def execute(
        self, params: ParamsGetAllPortfolioOfUserDto
    ) -> Tuple[List[Portfolio], PaginationResponseDto]:
        """Normalise ``params`` in place, query the repository and paginate.

        Raises ValidationError for invalid parameters; repository errors propagate.
        """
        search = (
            StringValidateObject(params.search, "search")
            .is_optional().max_length(100).min_length(3).transform_lower_case()
        )
        sort_type = (
            StringValidateObject(params.sort_type, "sortType")
            .is_optional().max_length(4).min_length(3).transform_lower_case()
        )
        sort_by = (
            StringValidateObject(params.sort_by, "sortBy")
            .is_optional().max_length(16).min_length(5).transform_snake_case()
        )
        page = NumberValidateObject(params.page, "page").is_different_zero().is_positive()
        page_size = NumberValidateObject(params.limit, "pageSize").is_different_zero().is_positive()
        user_id = StringValidateObject(params.user_id, "userId").is_id()

        search.validate()

        sort_type.validate()
        sort_type_value = sort_type.value or _DEFAULT_SORT_TYPE
        if sort_type_value not in _SORT_TYPES:
            raise ValidationError("sortType must be asc or desc")

        sort_by.validate()
        sort_by_value = sort_by.value or _DEFAULT_SORT_BY

        page.validate()
        page_size.validate()
        user_id.validate()

        params.search = search.value
        params.sort_type = sort_type_value
        params.sort_by = sort_by_value
        params.page = page.value
        params.limit = page_size.value
        params.user_id = user_id.value

        result, total_items = self.repository.execute(params)
        pagination = PaginationService(params.page, params.limit).execute(total_items)
        return result, pagination


def generate_cache_key(params: ParamsGetAllPortfolioOfUserDto) -> str:
    """Cache key for a page of a user's portfolio, unique per parameter set."""
    fingerprint = (
        f"&{{{params.user_id} {params.page} {params.limit} "
        f"{params.search} {params.sort_type} {params.sort_by}}}"
    )
    digest = hashlib.sha256(fingerprint.encode("utf-8")).hexdigest()
    return (
        f"customer/{params.user_id}/currentPage/{params.page}"
        f"/pageSize/{params.limit}/hash/{digest}/all-portfolios"
    )


def _portfolio_to_cache(item: Portfolio) -> Dict[str, Any]:
    return {
        "id": item.id,
        "channel": item.channel,
        "country": item.country,
        "create_at": item.create_at.isoformat(),
        "customer_id": item.customer_id,
        "route": item.route,
        "sku": item.sku,
        "title": item.title,
        "category_id": item.category_id,
        "category": item.category,
        "brand": item.brand,
        "classification": item.classification,
        "units_per_box": f"{item.units_per_box:d}",
        "min_order_units": f"{item.min_order_units:f}",
        "package_description": item.package_description,
        "package_unit_description": item.package_unit_description,
        "quantity_max_redeem": item.quantity_max_redeem,
        "redeem_unit": item.redeem_unit,
        "order_reason_redeem": item.order_reason_redeem,
        "sku_redeem": item.sku_redeem,
        "price": item.full_price,
        "points": item.points,
        "taxes": [
            {"id": tax.id, "type_tax": tax.type_tax, "rate": tax.rate_raw}
            for tax in item.taxes
        ],
    }


def _portfolio_from_cache(item: Mapping[str, Any]) -> Portfolio:
    create_at = item.get("create_at")
    taxes = [
        Tax(tax["id"], tax["type_tax"], tax["rate"]) for tax in item.get("taxes") or []
    ]
    return Portfolio(
        PortfolioEntityParams(
            id=item["id"],
            channel=item["channel"],
            country=item["country"],
            create_at=datetime.fromisoformat(create_at) if create_at else None,
            customer_id=item["customer_id"],
            route=item["route"],
            sku=item["sku"],
            title=item["title"],
            category_id=item["category_id"],
            category=item["category"],
            brand=item["brand"],
            classification=item["classification"],
            units_per_box=item["units_per_box"],
            min_order_units=item["min_order_units"],
            package_description=item["package_description"],
            package_unit_description=item["package_unit_description"],
            quantity_max_redeem=item["quantity_max_redeem"],
            redeem_unit=item["redeem_unit"],
            order_reason_redeem=item["order_reason_redeem"],
            sku_redeem=item["sku_redeem"],
            price=item["price"],
            points=item["points"],
            taxes=taxes,
        )
    )


class ManagerCacheAllPortfolioOfUserService(AllPortfolioOfUserCacheServicePort):
    """Caches pages of a user's portfolio as JSON-friendly documents."""

    def __init__(self, manager_cache_service: ManagerCacheServicePort) -> None:
        self.manager_cache_service = manager_cache_service

    def get(
        self, params: ParamsGetAllPortfolioOfUserDto
    ) -> Tuple[Optional[List[Portfolio]], Optional[PaginationResponseDto]]:
        """Return the cached page, or ``(None, None)`` when none can be read."""
        key = generate_cache_key(params)
        try:
            cached = self.manager_cache_service.get_data(key, {})
        except Exception:  # noqa: BLE001 - any cache failure is a miss
            return None, None

        try:
            data = [_portfolio_from_cache(item) for item in cached.get("data") or []]
            raw_pagination = cached.get("pagination")
            pagination = (
                PaginationResponseDto(**raw_pagination) if raw_pagination is not None else None
            )
        except (AttributeError, KeyError, TypeError, ValueError):
            return None, None
        return data, pagination

    def set(
        self,
        params: ParamsGetAllPortfolioOfUserDto,
        data: List[Portfolio],
        pagination: Optional[PaginationResponseDto],
    ) -> None:
        """Cache a page for a day."""
        key = generate_cache_key(params)
        document = {
            "data": [_portfolio_to_cache(item) for item in data or []],
            "pagination": asdict(pagination) if pagination is not None else None,
        }
        self.manager_cache_service.set_data(key, document, _CACHE_EXPIRATION)