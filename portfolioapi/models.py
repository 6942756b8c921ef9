"""Document shapes stored in the portfolio collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId


@dataclass
class TaxDocument:
    """A tax as stored inside a price."""

    tax_type: str = ""
    tax_id: str = ""
    rate: int = 0

    def to_bson(self) -> Dict[str, Any]:
        return {"taxType": self.tax_type, "taxId": self.tax_id, "rate": self.rate}

    @classmethod
    def from_bson(cls, data: Mapping[str, Any]) -> TaxDocument:
        return cls(
            tax_type=data.get("taxType") or "",
            tax_id=data.get("taxId") or "",
            rate=int(data.get("rate") or 0),
        )


@dataclass
class PriceDocument:
    """A full price and the taxes that apply to it."""

    full_price: float = 0.0
    taxes: List[TaxDocument] = field(default_factory=list)

    def to_bson(self) -> Dict[str, Any]:
        return {
            "fullPrice": self.full_price,
            "taxes": [tax.to_bson() for tax in self.taxes],
        }

    @classmethod
    def from_bson(cls, data: Mapping[str, Any]) -> PriceDocument:
        return cls(
            full_price=float(data.get("fullPrice") or 0.0),
            taxes=[TaxDocument.from_bson(tax) for tax in data.get("taxes") or []],
        )


@dataclass
class PortfolioDocument:
    """A portfolio item as stored in the collection."""

    id: Optional[ObjectId] = None
    channel: str = ""
    country: str = ""
    created_date: Optional[datetime] = None
    customer_code: str = ""
    route: str = ""
    sku: str = ""
    title: str = ""
    category_id: str = ""
    category: str = ""
    brand: str = ""
    classification: str = ""
    units_per_box: int = 0
    min_order_units: float = 0.0
    package_description: str = ""
    package_unit_description: str = ""
    quantity_max_redeem: int = 0
    redeem_unit: str = ""
    order_reason_redeem: int = 0
    sku_redeem: bool = False
    price: PriceDocument = field(default_factory=PriceDocument)
    points: int = 0

    def to_bson(self) -> Dict[str, Any]:
        """Build the stored document; ``_id`` and ``createdDate`` are left out when unset."""
        document: Dict[str, Any] = {}
        if self.id is not None:
            document["_id"] = self.id
        document["channel"] = self.channel
        document["country"] = self.country
        if self.created_date is not None:
            document["createdDate"] = self.created_date
        document.update(
            {
                "customerCode": self.customer_code,
                "route": self.route,
                "sku": self.sku,
                "title": self.title,
                "categoryId": self.category_id,
                "category": self.category,
                "brand": self.brand,
                "classification": self.classification,
                "unitsPerBox": self.units_per_box,
                "minOrderUnits": self.min_order_units,
                "packageDescription": self.package_description,
                "packageUnitDescription": self.package_unit_description,
                "quantityMaxRedeem": self.quantity_max_redeem,
                "redeemUnit": self.redeem_unit,
                "orderReasonRedeem": self.order_reason_redeem,
                "skuRedeem": self.sku_redeem,
                "price": self.price.to_bson(),
                "points": self.points,
            }
        )
        return document

    @classmethod
    def from_bson(cls, data: Mapping[str, Any]) -> PortfolioDocument:
        """Read a stored document; missing fields take their empty values."""
        price = data.get("price")
        return cls(
            id=data.get("_id"),
            channel=data.get("channel") or "",
            country=data.get("country") or "",
            created_date=data.get("createdDate"),
            customer_code=data.get("customerCode") or "",
            route=data.get("route") or "",
            sku=data.get("sku") or "",
            title=data.get("title") or "",
            category_id=data.get("categoryId") or "",
            category=data.get("category") or "",
            brand=data.get("brand") or "",
            classification=data.get("classification") or "",
            units_per_box=int(data.get("unitsPerBox") or 0),
            min_order_units=float(data.get("minOrderUnits") or 0.0),
            package_description=data.get("packageDescription") or "",
            package_unit_description=data.get("packageUnitDescription") or "",
            quantity_max_redeem=int(data.get("quantityMaxRedeem") or 0),
            redeem_unit=data.get("redeemUnit") or "",
            order_reason_redeem=int(data.get("orderReasonRedeem") or 0),
            sku_redeem=bool(data.get("skuRedeem", False)),
            price=PriceDocument.from_bson(price) if price else PriceDocument(),
            points=int(data.get("points") or 0),
        )


@dataclass
class IndexDocument:
    """Description of a collection index."""

    index_name: str = ""
    unique: bool = False
    keys: List[str] = field(default_factory=list)