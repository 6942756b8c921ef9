import json
from datetime import datetime, timedelta, timezone

import pytest

from portfolioapi.seed_file_repository import LoadDataSeedRepository

OID = "65a1b2c3d4e5f60718293a4b"
CUSTOMER = "0123456789abcdef01234567"


def make_record(**overrides):
    record = {
        "_id": {"$oid": OID},
        "channel": "DIGITAL",
        "country": "COLOM",
        "createdDate": {"$date": "2024-01-02T03:04:05.678Z"},
        "customerCode": CUSTOMER,
        "route": "RT01",
        "sku": "SKU0001",
        "title": "water",
        "categoryId": "soft drinks",
        "category": "drinks",
        "brand": "BrandX",
        "classification": "basic",
        "unitsPerBox": "6",
        "minOrderUnits": "1.5",
        "packageDescription": "box",
        "packageUnitDescription": "bottle",
        "quantityMaxRedeem": 3,
        "redeemUnit": "UNIT",
        "orderReasonRedeem": "7",
        "skuRedeem": True,
        "price": {"fullPrice": 12, "taxes": [{"taxType": "IVA", "taxId": "tax-1", "rate": 19}]},
        "points": 40,
    }
    record.update(overrides)
    return record


def write_seed(tmp_path, records):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_loads_entities(tmp_path):
    path = write_seed(tmp_path, [make_record()])
    items = LoadDataSeedRepository(path).execute()
    assert len(items) == 1
    item = items[0]
    assert item.id == OID
    assert item.customer_id == CUSTOMER
    assert item.create_at == datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    assert item.order_reason_redeem == 7
    assert item.full_price == 12.0
    assert item.quantity_max_redeem == 3
    assert [(tax.id, tax.type_tax, tax.rate_raw) for tax in item.taxes] == [("tax-1", "IVA", 19)]
    item.validate()
    assert item.sku_redeem is True


def test_preserves_order_of_records(tmp_path):
    records = [make_record(sku="SKU0001"), make_record(sku="SKU0002")]
    items = LoadDataSeedRepository(write_seed(tmp_path, records)).execute()
    assert [item.sku for item in items] == ["SKU0001", "SKU0002"]


def test_offset_timestamp(tmp_path):
    record = make_record(createdDate={"$date": "2024-01-02T03:04:05.000+02:00"})
    item = LoadDataSeedRepository(write_seed(tmp_path, [record])).execute()[0]
    assert item.create_at.utcoffset() == timedelta(hours=2)


def test_path_from_environment(tmp_path, monkeypatch):
    path = write_seed(tmp_path, [make_record()])
    monkeypatch.setenv("FILE_PATH", str(path))
    items = LoadDataSeedRepository().execute()
    assert [item.id for item in items] == [OID]


def test_empty_array(tmp_path):
    assert LoadDataSeedRepository(write_seed(tmp_path, [])).execute() == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LoadDataSeedRepository(tmp_path / "absent.json").execute()


def test_invalid_json(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(ValueError):
        LoadDataSeedRepository(path).execute()


def test_bad_date_raises(tmp_path):
    record = make_record(createdDate={"$date": "2024-01-02 03:04:05"})
    with pytest.raises(ValueError, match="timestamp"):
        LoadDataSeedRepository(write_seed(tmp_path, [record])).execute()


def test_missing_date_raises(tmp_path):
    record = make_record()
    del record["createdDate"]
    with pytest.raises(ValueError):
        LoadDataSeedRepository(write_seed(tmp_path, [record])).execute()


def test_bad_order_reason_raises(tmp_path):
    record = make_record(orderReasonRedeem="seven")
    with pytest.raises(ValueError, match="invalid integer"):
        LoadDataSeedRepository(write_seed(tmp_path, [record])).execute()


def test_wrong_field_type_raises(tmp_path):
    record = make_record(unitsPerBox=6)
    with pytest.raises(ValueError, match="unitsPerBox"):
        LoadDataSeedRepository(write_seed(tmp_path, [record])).execute()


def test_non_array_raises(tmp_path):
    with pytest.raises(ValueError, match="array"):
        LoadDataSeedRepository(write_seed(tmp_path, {"a": 1})).execute()