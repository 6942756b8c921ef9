"""Reads seed portfolio data from a JSON export file."""

from __future__ import annotations

import json
import os
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .entities import Portfolio, PortfolioEntityParams, Tax
from .ports import LoadDataSeedRepositoryPort

_DEFAULT_FILE_PATH = "data/portfolios.clients-portfolios.json"
_DATE_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{3})(Z|[+-]\d{2}:\d{2})"
)
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _typed(record: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = record.get(key)
    if value is None:
        return default
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"field {key} must be of type {kind.__name__}")
    return value


def _string_map_entry(record: Mapping[str, Any], key: str, entry: str) -> str:
    mapping = _typed(record, key, dict, {})
    value = mapping.get(entry)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key}.{entry} must be of type str")
    return value


def _parse_date(text: str) -> datetime:
    match = _DATE_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as a timestamp")
    year, month, day, hour, minute, second, millis, zone = match.groups()
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second),
        int(millis) * 1000, tzinfo=tz,
    )


def _parse_int(text: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _to_entity(record: Any) -> Portfolio:
    if not isinstance(record, dict):
        raise ValueError("each seed entry must be an object")

    price = _typed(record, "price", dict, {})
    taxes = []
    for tax in _typed(price, "taxes", list, []):
        if not isinstance(tax, dict):
            raise ValueError("each tax must be an object")
        taxes.append(
            Tax(
                _typed(tax, "taxId", str, ""),
                _typed(tax, "taxType", str, ""),
                _typed(tax, "rate", int, 0),
            )
        )

    return Portfolio(
        PortfolioEntityParams(
            id=_string_map_entry(record, "_id", "$oid"),
            channel=_typed(record, "channel", str, ""),
            country=_typed(record, "country", str, ""),
            create_at=_parse_date(_string_map_entry(record, "createdDate", "$date")),
            customer_id=_typed(record, "customerCode", str, ""),
            route=_typed(record, "route", str, ""),
            sku=_typed(record, "sku", str, ""),
            title=_typed(record, "title", str, ""),
            category_id=_typed(record, "categoryId", str, ""),
            category=_typed(record, "category", str, ""),
            brand=_typed(record, "brand", str, ""),
            classification=_typed(record, "classification", str, ""),
            units_per_box=_typed(record, "unitsPerBox", str, ""),
            min_order_units=_typed(record, "minOrderUnits", str, ""),
            package_description=_typed(record, "packageDescription", str, ""),
            package_unit_description=_typed(record, "packageUnitDescription", str, ""),
            quantity_max_redeem=_typed(record, "quantityMaxRedeem", int, 0),
            redeem_unit=_typed(record, "redeemUnit", str, ""),
            order_reason_redeem=_parse_int(_typed(record, "orderReasonRedeem", str, "")),
            sku_redeem=_typed(record, "skuRedeem", bool, False),
            price=float(_typed(price, "fullPrice", int, 0)),
            points=_typed(record, "points", int, 0),
            taxes=taxes,
        )
    )


class LoadDataSeedRepository(LoadDataSeedRepositoryPort):
    """Loads seed portfolio items from a JSON array file.

    The path is the one given, else the FILE_PATH environment variable,
    else a default relative path.
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        self.file_path = file_path

    def _resolve_path(self) -> Path:
        return Path(self.file_path or os.environ.get("FILE_PATH") or _DEFAULT_FILE_PATH)

    def execute(self) -> List[Portfolio]:
        """Return the portfolio items in the file.

        File, JSON and field errors propagate as OSError or ValueError.
        """
        with self._resolve_path().open("r", encoding="utf-8") as handle:
            records = json.load(handle)
        if records is None:
            return []
        if not isinstance(records, list):
            raise ValueError("seed data must be a JSON array")
        return [_to_entity(record) for record in records]