"""Content Record tests — seed validation, derived fields, and exact lookup."""

import pytest

from goggles.core.content_record import (
    ContentRecord, find_by_address, validate_record_data,
)
from goggles.core.domain_types import ResultType, Template

VALID = {
    "id": "x",
    "title": "Diary",
    "url": "https://a.example/x",
    "description": "A diary",
    "template": "NittaBlogPage",
    "content": {"body": "text"},
}


def test_valid_item_passes():
    assert validate_record_data(VALID) is None


@pytest.mark.parametrize("field", ["id", "title", "url", "description", "template", "content"])
def test_missing_required_field_reported(field):
    item = {k: v for k, v in VALID.items() if k != field}
    error = validate_record_data(item)
    assert error["status"] == "error"
    assert error["field"] == field


def test_wrong_shapes_reported():
    assert validate_record_data(["not", "a", "dict"])["field"] == "record"
    assert validate_record_data({**VALID, "content": "text"})["field"] == "content"
    assert validate_record_data({**VALID, "keywords": "nitta"})["field"] == "keywords"
    assert validate_record_data({**VALID, "domainStatus": "parked"})["field"] == "domainStatus"


def test_non_string_dates_and_status_reported():
    assert validate_record_data({**VALID, "archivedDate": 20240315})["field"] == "archivedDate"
    assert validate_record_data({**VALID, "domainStatus": ["expired"]})["field"] == "domainStatus"


@pytest.mark.parametrize("key,value", [("archivedDate", 20240315), ("domainStatus", 1)])
def test_from_dict_rejects_non_string_dates_and_status(key, value):
    with pytest.raises(TypeError):
        ContentRecord.from_dict({**VALID, key: value})


def test_from_dict_accepts_address_key():
    record = ContentRecord.from_dict({"id": 1, "address": "https://a.example/", "template": "KyetPage"})
    assert record.id == "1"
    assert record.address == "https://a.example/"


def test_derived_fields():
    record = ContentRecord.from_dict({**VALID, "domainStatus": "expired"})
    assert record.is_expired
    assert record.template_kind == Template.NITTA_BLOG
    assert record.result_type == ResultType.PERSONAL
    assert ContentRecord(id="u", address="u", template="Nope").result_type == ResultType.DIRECTORY


def test_summary_has_no_content():
    summary = ContentRecord.from_dict(VALID).to_summary()
    assert "content" not in summary
    assert summary["type"] == "personal"


def test_find_by_address_is_exact():
    records = [ContentRecord.from_dict(VALID)]
    assert find_by_address(records, "https://a.example/x").id == "x"
    assert find_by_address(records, "https://a.example/x/") is None
    assert find_by_address(records, "https://A.example/x") is None
