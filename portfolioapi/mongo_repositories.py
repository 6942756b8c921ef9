"""MongoDB repositories for portfolio queries and the seed data."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Tuple

import pymongo
import pymongo.errors
from bson import ObjectId
from bson.errors import InvalidId

from .dtos import ParamsGetAllPortfolioOfUserDto
from .entities import Portfolio, PortfolioEntityParams, Tax
from .errors import (
    NotFoundPortfoliosOfUserError,
    SeedAlreadyExecutedError,
    SeedNotExecutedError,
)
from .models import PortfolioDocument, PriceDocument, TaxDocument
from .ports import (
    AllPortfolioOfUserQueryRepositoryPort,
    RunSeedRepositoryPort,
    SeedRunCheckRepositoryPort,
)

COLLECTION_NAME = "clients-portfolios"
SEARCH_INDEX_NAME = "portfolio_search_index"
ORDER_INDEX_NAME = "portfolio_order_index"

_FIELDS_MONGO = {
    "min_order_units": "minOrderUnits",
    "create_at": "createdDate",
    "title": "title",
    "brand": "brand",
    "price": "price.fullPrice",
    "points": "points",
}

_TYPE_SORT = {"asc": 1, "desc": -1}

_SEARCH_INDEX_KEYS = [
    ("title", pymongo.TEXT),
    ("branch", pymongo.TEXT),
    ("category", pymongo.TEXT),
    ("sku", pymongo.TEXT),
    ("classification", pymongo.TEXT),
]

_ORDER_INDEX_KEYS = [
    ("customerCode", pymongo.ASCENDING),
    ("title", pymongo.ASCENDING),
    ("sku", pymongo.ASCENDING),
    ("branch", pymongo.ASCENDING),
    ("createdDate", pymongo.ASCENDING),
    ("points", pymongo.ASCENDING),
    ("price.fullPrice", pymongo.ASCENDING),
    ("minOrderUnits", pymongo.ASCENDING),
]

_EMPTY_OBJECT_ID_HEX = "0" * 24


def build_queries(
    params: ParamsGetAllPortfolioOfUserDto,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """Return the aggregation pipeline for one page and the filter counting all matches."""
    if params.search:
        count_query: Dict[str, Any] = {
            "customerCode": params.user_id,
            "$text": {"$search": params.search},
        }
    else:
        count_query = {"customerCode": params.user_id}

    aggregation: List[Dict[str, Any]] = [
        {"$match": dict(count_query)},
        {
            "$sort": {
                _FIELDS_MONGO.get(params.sort_by, ""): _TYPE_SORT.get(params.sort_type, 0)
            }
        },
        {"$skip": (params.page - 1) * params.limit},
        {"$limit": params.limit},
    ]
    return aggregation, count_query


def _document_to_entity(document: PortfolioDocument) -> Portfolio:
    taxes = [Tax(tax.tax_id, tax.tax_type, tax.rate) for tax in document.price.taxes]
    object_id = str(document.id) if document.id is not None else _EMPTY_OBJECT_ID_HEX
    return Portfolio(
        PortfolioEntityParams(
            id=object_id,
            channel=document.channel,
            country=document.country,
            create_at=document.created_date,
            customer_id=document.customer_code,
            route=document.route,
            sku=document.sku,
            title=document.title,
            category_id=document.category_id,
            category=document.category,
            brand=document.brand,
            classification=document.classification,
            units_per_box=f"{document.units_per_box:d}",
            min_order_units=f"{document.min_order_units:.2f}",
            package_description=document.package_description,
            package_unit_description=document.package_unit_description,
            quantity_max_redeem=document.quantity_max_redeem,
            redeem_unit=document.redeem_unit,
            order_reason_redeem=document.order_reason_redeem,
            sku_redeem=document.sku_redeem,
            price=document.price.full_price,
            points=document.points,
            taxes=taxes,
        )
    )


def map_documents_to_entities(documents: Iterable[Mapping[str, Any]]) -> List[Portfolio]:
    """Turn stored documents into portfolio entities."""
    return [_document_to_entity(PortfolioDocument.from_bson(doc)) for doc in documents]


class AllPortfolioOfUserRepository(AllPortfolioOfUserQueryRepositoryPort):
    """Queries one page of a user's portfolio."""

    def __init__(self, db) -> None:
        self.db = db

    def execute(self, params: ParamsGetAllPortfolioOfUserDto) -> Tuple[List[Portfolio], int]:
        """Return the page and the total count; raise when the page is empty."""
        collection = self.db.connection()[COLLECTION_NAME]
        aggregation, count_query = build_queries(params)

        total_items = collection.count_documents(count_query)
        documents = list(collection.aggregate(aggregation))
        if not documents:
            raise NotFoundPortfoliosOfUserError()

        return map_documents_to_entities(documents), int(total_items)


def _entity_to_document(portfolio: Portfolio) -> Dict[str, Any]:
    try:
        object_id = ObjectId(portfolio.id)
    except (InvalidId, TypeError) as error:
        raise SeedNotExecutedError() from error

    taxes = [
        TaxDocument(tax_type=tax.type_tax, tax_id=tax.id, rate=tax.rate_raw)
        for tax in portfolio.taxes
    ]
    return PortfolioDocument(
        id=object_id,
        channel=portfolio.channel,
        country=portfolio.country,
        created_date=portfolio.create_at,
        customer_code=portfolio.customer_id,
        route=portfolio.route,
        sku=portfolio.sku,
        title=portfolio.title,
        category_id=portfolio.category_id,
        category=portfolio.category,
        brand=portfolio.brand,
        classification=portfolio.classification,
        units_per_box=portfolio.units_per_box,
        min_order_units=portfolio.min_order_units,
        package_description=portfolio.package_description,
        package_unit_description=portfolio.package_unit_description,
        quantity_max_redeem=portfolio.quantity_max_redeem,
        redeem_unit=portfolio.redeem_unit,
        order_reason_redeem=portfolio.order_reason_redeem,
        sku_redeem=portfolio.sku_redeem,
        price=PriceDocument(full_price=portfolio.full_price, taxes=taxes),
        points=portfolio.points,
    ).to_bson()


class RunSeedRepository(RunSeedRepositoryPort):
    """Inserts the seed portfolio items and creates the collection's indexes."""

    def __init__(self, db) -> None:
        self.db = db

    def execute(self, portfolios: List[Portfolio]) -> None:
        """Insert the items; raise SeedNotExecutedError or RuntimeError on failure."""
        collection = self.db.connection()[COLLECTION_NAME]
        documents = [_entity_to_document(portfolio) for portfolio in portfolios]
        if not documents:
            raise SeedNotExecutedError()

        try:
            result = collection.insert_many(documents)
        except pymongo.errors.PyMongoError as error:
            raise SeedNotExecutedError() from error
        if not getattr(result, "inserted_ids", None):
            raise SeedNotExecutedError()

        try:
            collection.create_index(_SEARCH_INDEX_KEYS, name=SEARCH_INDEX_NAME)
        except pymongo.errors.PyMongoError as error:
            raise RuntimeError("error creating index search") from error

        try:
            collection.create_index(_ORDER_INDEX_KEYS, name=ORDER_INDEX_NAME)
        except pymongo.errors.PyMongoError as error:
            raise RuntimeError("error creating index order") from error


class SeedRunCheckRepository(SeedRunCheckRepositoryPort):
    """Raises SeedAlreadyExecutedError when the collection holds any document."""

    def __init__(self, db) -> None:
        self.db = db

    def execute(self) -> None:
        collection = self.db.connection()[COLLECTION_NAME]
        if collection.find_one({}) is not None:
            raise SeedAlreadyExecutedError()