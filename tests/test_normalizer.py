"""
Tests for the record normalizer
Covers strict field validation and fail-fast batch behaviour
"""

import pytest
from pydantic import ValidationError

from inventory_metrics.errors import MalformedRecord
from inventory_metrics.normalizer import (
    normalize_item_master,
    normalize_record,
    normalize_records,
)


class TestNormalizeRecord:
    """Test suite for single record validation"""

    def test_valid_record_maps_document_labels(self, make_raw_record):
        """Document labels land on snake_case attributes"""
        record = normalize_record(make_raw_record())

        assert record.item_id == "I1"
        assert record.date == "2024-01-05"
        assert record.opening_stock == 100
        assert record.closing_stock == 80
        assert record.unit_price == 5
        assert record.abc_class == "A"
        assert record.units == "pcs"

    def test_units_is_optional(self, make_raw_record):
        raw = make_raw_record()
        del raw["Units"]
        assert normalize_record(raw).units is None

    def test_negative_consumption_is_kept_as_reported(self, make_raw_record):
        """Clamping happens in aggregation, not on ingest"""
        record = normalize_record(make_raw_record(Consumption=-7))
        assert record.consumption == -7

    def test_extra_fields_are_ignored(self, make_raw_record):
        raw = make_raw_record(**{"Inventory Turnover ratio": 1.2, "Ratio": 0.4})
        assert normalize_record(raw).item_id == "I1"

    def test_missing_field_is_reported(self, make_raw_record):
        raw = make_raw_record()
        del raw["Closing Stock"]

        with pytest.raises(MalformedRecord) as exc_info:
            normalize_record(raw, index=3)

        assert exc_info.value.field == "Closing Stock"
        assert exc_info.value.index == 3
        assert "Closing Stock" in str(exc_info.value)

    def test_numeric_string_is_not_coerced(self, make_raw_record):
        with pytest.raises(MalformedRecord) as exc_info:
            normalize_record(make_raw_record(**{"Opening Stock": "100"}))
        assert exc_info.value.field == "Opening Stock"

    def test_boolean_is_not_a_number(self, make_raw_record):
        with pytest.raises(MalformedRecord) as exc_info:
            normalize_record(make_raw_record(Consumption=True))
        assert exc_info.value.field == "Consumption"

    @pytest.mark.parametrize("field, value", [
        ("Item ID", ""),
        ("Opening Stock", -1),
        ("Closing Stock", -0.5),
        ("Unit Price", -2),
        ("MSL", 0),
        ("ABC Class", "D"),
        ("Date", "05/01/2024"),
        ("Date", "2024-02-30"),
    ])
    def test_out_of_contract_values(self, make_raw_record, field, value):
        with pytest.raises(MalformedRecord) as exc_info:
            normalize_record(make_raw_record(**{field: value}))
        assert exc_info.value.field == field

    def test_non_mapping_is_malformed(self):
        with pytest.raises(MalformedRecord) as exc_info:
            normalize_record(["I1", "2024-01-05"])
        assert exc_info.value.field == "<record>"

    def test_cause_is_the_validation_error(self, make_raw_record):
        with pytest.raises(MalformedRecord) as exc_info:
            normalize_record(make_raw_record(MSL="high"))
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_records_are_immutable(self, make_raw_record):
        record = normalize_record(make_raw_record())
        with pytest.raises(ValidationError):
            record.closing_stock = 0


class TestNormalizeBatch:
    """Test suite for batch normalization"""

    def test_batch_keeps_input_order(self, mixed_raw_records):
        records = normalize_records(mixed_raw_records)
        assert [r.item_id for r in records] == ["I2", "I1", "I10", "I1", "I2"]

    def test_batch_does_not_mutate_input(self, scenario_raw_records):
        before = [dict(raw) for raw in scenario_raw_records]
        normalize_records(scenario_raw_records)
        assert scenario_raw_records == before

    def test_first_bad_row_aborts_batch(self, make_raw_record):
        raws = [make_raw_record(), make_raw_record(Category=None), make_raw_record(MSL=-1)]

        with pytest.raises(MalformedRecord) as exc_info:
            normalize_records(raws)

        assert exc_info.value.index == 1
        assert exc_info.value.field == "Category"

    def test_empty_batch(self):
        assert normalize_records([]) == []


class TestNormalizeItemMaster:
    """Test suite for item master validation"""

    def test_item_master_loads(self, raw_item_master):
        items = normalize_item_master(raw_item_master)
        assert [item.item_id for item in items] == ["I1", "I2", "I10"]
        assert items[1].unit_price == 2

    def test_item_master_rejects_bad_class(self, raw_item_master):
        raw_item_master[2]["ABC Class"] = "Z"
        with pytest.raises(MalformedRecord) as exc_info:
            normalize_item_master(raw_item_master)
        assert exc_info.value.index == 2
        assert exc_info.value.field == "ABC Class"
