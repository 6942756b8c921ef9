"""Domain entities: portfolio items and their taxes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union

from .validation import (
    FloatValidateObject,
    NumberValidateObject,
    StringValidateObject,
    TimeValidateObject,
)

_CREATE_AT_FORMAT = "%Y-%m-%dT%H:%M:%S.%L%Q"


class Tax:
    """A tax applied to a portfolio item's price."""

    def __init__(self, tax_id: str, type_tax: str, rate: int) -> None:
        self._id = StringValidateObject(tax_id, "id tax")
        self._type_tax = StringValidateObject(type_tax, "type tax")
        self._rate = NumberValidateObject(rate, "rate tax").is_different_zero().is_positive()

    @property
    def id(self) -> str:
        return self._id.value

    @property
    def type_tax(self) -> str:
        return self._type_tax.value

    @property
    def rate(self) -> float:
        return float(self._rate.value)

    @property
    def rate_raw(self) -> int:
        return self._rate.value

    def validate(self) -> None:
        """Raise ValidationError for the first invalid field."""
        for validator in (self._id, self._type_tax, self._rate):
            validator.validate()


@dataclass
class PortfolioEntityParams:
    """Raw input used to build a Portfolio."""

    id: str = ""
    channel: str = ""
    country: str = ""
    create_at: Optional[datetime] = None
    customer_id: str = ""
    route: str = ""
    sku: str = ""
    title: str = ""
    category_id: str = ""
    category: str = ""
    brand: str = ""
    classification: str = ""
    units_per_box: Union[str, int] = ""
    min_order_units: Union[str, float] = ""
    package_description: str = ""
    package_unit_description: str = ""
    quantity_max_redeem: int = 0
    redeem_unit: str = ""
    order_reason_redeem: int = 0
    sku_redeem: bool = False
    price: float = 0.0
    points: int = 0
    taxes: Optional[List[Tax]] = None


class Portfolio:
    """A product in a customer's portfolio."""

    def __init__(self, params: PortfolioEntityParams) -> None:
        self._id = StringValidateObject(params.id, "id").is_optional().is_id()
        self._channel = StringValidateObject(params.channel, "channel").min_length(4).max_length(10)
        self._country = StringValidateObject(params.country, "country").min_length(4).max_length(5)
        self._create_at = TimeValidateObject(params.create_at, "createAt").format(_CREATE_AT_FORMAT)
        self._customer_id = StringValidateObject(params.customer_id, "customerId").is_id()
        self._route = StringValidateObject(params.route, "route").min_length(4).max_length(10)
        self._sku = StringValidateObject(params.sku, "sku").min_length(6).max_length(10)
        self._title = (
            StringValidateObject(params.title, "title")
            .min_length(4).max_length(50).transform_upper_case()
        )
        self._category_id = StringValidateObject(params.category_id, "categoryId").transform_snake_case()
        self._category = (
            StringValidateObject(params.category, "category")
            .min_length(4).max_length(70).transform_upper_case()
        )
        self._brand = (
            StringValidateObject(params.brand, "brand")
            .min_length(4).max_length(70).transform_lower_case()
        )
        self._classification = (
            StringValidateObject(params.classification, "classification")
            .min_length(4).max_length(70).transform_upper_case()
        )
        self._units_per_box = NumberValidateObject(params.units_per_box, "unitsPerBox").is_positive()
        self._min_order_units = (
            FloatValidateObject(params.min_order_units, "minOrderUnits").is_positive().decimals(2)
        )
        self._package_description = (
            StringValidateObject(params.package_description, "packageDescription")
            .min_length(4).max_length(70).transform_upper_case()
        )
        self._package_unit_description = (
            StringValidateObject(params.package_unit_description, "packageUnitDescription")
            .min_length(4).max_length(70).transform_upper_case()
        )
        self._quantity_max_redeem = (
            NumberValidateObject(params.quantity_max_redeem, "quantityMaxRedeem").is_positive()
        )
        self._redeem_unit = StringValidateObject(params.redeem_unit, "redeemUnit").min_length(4).max_length(10)
        self._order_reason_redeem = (
            NumberValidateObject(params.order_reason_redeem, "orderReasonRedeem").is_positive()
        )
        self._sku_redeem = params.sku_redeem
        self._full_price = FloatValidateObject(params.price, "fullPrice").is_positive().decimals(2)
        self._points = NumberValidateObject(params.points, "points").is_positive()
        self._taxes = params.taxes

    @property
    def id(self) -> str:
        return self._id.value

    @property
    def channel(self) -> str:
        return self._channel.value

    @property
    def country(self) -> str:
        return self._country.value

    @property
    def create_at(self) -> datetime:
        return self._create_at.value

    @property
    def customer_id(self) -> str:
        return self._customer_id.value

    @property
    def route(self) -> str:
        return self._route.value

    @property
    def sku(self) -> str:
        return self._sku.value

    @property
    def title(self) -> str:
        return self._title.value

    @property
    def category_id(self) -> str:
        return self._category_id.value

    @property
    def category(self) -> str:
        return self._category.value

    @property
    def brand(self) -> str:
        return self._brand.value

    @property
    def classification(self) -> str:
        return self._classification.value

    @property
    def units_per_box(self) -> int:
        return self._units_per_box.value

    @property
    def min_order_units(self) -> float:
        return self._min_order_units.value

    @property
    def package_description(self) -> str:
        return self._package_description.value

    @property
    def package_unit_description(self) -> str:
        return self._package_unit_description.value

    @property
    def quantity_max_redeem(self) -> int:
        return self._quantity_max_redeem.value

    @property
    def redeem_unit(self) -> str:
        return self._redeem_unit.value

    @property
    def order_reason_redeem(self) -> int:
        return self._order_reason_redeem.value

    @property
    def sku_redeem(self) -> bool:
        return self._sku_redeem

    @property
    def price(self) -> float:
        """Full price with every tax rate applied in turn."""
        value = self._full_price.value
        for tax in self.taxes:
            value *= 1 + tax.rate
        return value

    @property
    def taxes(self) -> List[Tax]:
        return list(self._taxes or [])

    @property
    def full_price(self) -> float:
        return self._full_price.value

    @property
    def points(self) -> int:
        return self._points.value

    def validate(self) -> None:
        """Raise ValidationError for the first invalid field, then check taxes."""
        validators = (
            self._id,
            self._channel,
            self._country,
            self._customer_id,
            self._route,
            self._sku,
            self._title,
            self._category_id,
            self._category,
            self._brand,
            self._classification,
            self._units_per_box,
            self._min_order_units,
            self._package_description,
            self._package_unit_description,
            self._quantity_max_redeem,
            self._redeem_unit,
            self._order_reason_redeem,
            self._full_price,
            self._points,
        )
        for validator in validators:
            validator.validate()
        for tax in self.taxes:
            tax.validate()