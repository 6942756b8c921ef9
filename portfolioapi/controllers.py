"""HTTP controllers returning ``(payload, status)`` pairs."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .dtos import ParamsGetAllPortfolioOfUserDto
from .entities import Portfolio
from .errors import (
    LoadDataSeedError,
    NotFoundPortfoliosOfUserError,
    SeedAlreadyExecutedError,
    SeedNotExecutedError,
)
from .ports import AllPortfolioOfUserQueryUseCasePort, RunSeedUseCasePort
from .validation import TimeValidateObject

Reply = Tuple[Dict[str, Any], int]


class HealthController:
    """Reports that the API is up."""

    def execute(self) -> Reply:
        return {
            "code": 200,
            "data": {
                "status": "UP",
                "current_time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            },
            "message": "API is healthy",
        }, 200


class RunSeedController:
    """Runs the seed and reports the outcome."""

    def __init__(self, use_case: RunSeedUseCasePort) -> None:
        self.use_case = use_case

    def execute(self) -> Reply:
        try:
            self.use_case.execute()
        except SeedAlreadyExecutedError:
            return {"code": 400, "message": "Seed already executed"}, 400
        except SeedNotExecutedError:
            return {"code": 500, "message": "Seed not executed"}, 500
        except LoadDataSeedError:
            return {"code": 500, "message": "Error loading data seed"}, 500
        except Exception as error:  # noqa: BLE001 - reported to the client
            return {
                "code": 500,
                "message": "Internal server error",
                "error": str(error),
            }, 500
        return {"code": 200, "message": "Seed executed"}, 200


def _field(body: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = body.get(key)
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    return value if valid else default


def map_entities_to_response(entities: List[Portfolio]) -> List[Dict[str, Any]]:
    """Render portfolio items for the response; every item lists the first item's taxes."""
    if not entities:
        return []
    taxes = [
        {"tax_type": tax.type_tax, "percentage": tax.rate, "tax_id": tax.id}
        for tax in entities[0].taxes
    ]
    return [
        {
            "id": entity.id,
            "channel": entity.channel,
            "country": entity.country,
            "create_at": TimeValidateObject(entity.create_at, "createAt").value_string,
            "customer_code": entity.customer_id,
            "route": entity.route,
            "sku": entity.sku,
            "title": entity.title,
            "category_id": entity.category_id,
            "category": entity.category,
            "brand": entity.brand,
            "classification": entity.classification,
            "units_per_box": entity.units_per_box,
            "min_order_units": entity.min_order_units,
            "package_description": entity.package_description,
            "package_unit_description": entity.package_unit_description,
            "quantity_max_redeem": entity.quantity_max_redeem,
            "redeem_unit": entity.redeem_unit,
            "order_reason_redeem": entity.order_reason_redeem,
            "sku_redeem": entity.sku_redeem,
            "price": entity.price,
            "points": entity.points,
            "taxes": [dict(tax) for tax in taxes],
        }
        for entity in entities
    ]


class GetAllPortfoliosOfUserController:
    """Lists one page of a user's portfolio."""

    def __init__(self, use_case: AllPortfolioOfUserQueryUseCasePort) -> None:
        self.use_case = use_case

    def execute(self, consumer_id: str, body: Optional[Mapping[str, Any]]) -> Reply:
        """Answer a request for ``consumer_id`` with the parsed JSON ``body``."""
        body = body if isinstance(body, Mapping) else {}
        params = ParamsGetAllPortfolioOfUserDto(
            user_id=consumer_id,
            page=_field(body, "current_page", int, 0),
            limit=_field(body, "page_size", int, 0),
            search=_field(body, "search", str, ""),
            sort_type=_field(body, "sort_type", str, ""),
            sort_by=_field(body, "sort_by", str, ""),
        )

        try:
            data, pagination = self.use_case.execute(params)
        except NotFoundPortfoliosOfUserError as error:
            return {"code": "404", "message": "Not found", "error": str(error)}, 404
        except Exception as error:  # noqa: BLE001 - reported to the client
            return {
                "code": "500",
                "message": "Internal server error",
                "error": str(error),
            }, 500

        return {
            "code": "200",
            "message": "Success",
            "data": map_entities_to_response(data),
            "pagination": {
                "current_page": pagination.current_page,
                "page_size": pagination.page_size,
                "hast_next": pagination.has_next_page,
                "has_previous": pagination.has_previous_page,
                "total_items": pagination.total_items,
            },
        }, 200