"""Tests for the field mapping engine."""

import pytest

from erp_migration.errors import MigrationObjectError
from erp_migration.models.mapping import ConverterTag, FieldMappingRule
from erp_migration.services.transformer import FieldMappingEngine


def r(**kwargs):
    return FieldMappingRule(**kwargs)


class TestApplyRecord:
    def test_plain_copy_and_convert(self):
        engine = FieldMappingEngine([
            r(source="BUKRS", target="CompanyCode"),
            r(source="DMBTR", target="Amount", convert=ConverterTag.TO_DECIMAL),
            r(source="BUDAT", target="PostingDate", convert="toDate"),
        ])
        out = engine.apply_record({"BUKRS": "1000", "DMBTR": "12.50", "BUDAT": "20240131"})
        assert out == {"CompanyCode": "1000", "Amount": "12.50", "PostingDate": "2024-01-31"}

    def test_pad_left_cost_center(self):
        engine = FieldMappingEngine([r(source="KOSTL", target="CostCenter", convert="padLeft10")])
        assert engine.apply_record({"KOSTL": "CC1001"}) == {"CostCenter": "0000CC1001"}

    def test_missing_source_without_default_is_empty(self):
        engine = FieldMappingEngine([r(source="A", target="X", convert="toInteger")])
        assert engine.apply_record({}) == {"X": ""}
        assert engine.apply_record({"A": ""}) == {"X": ""}

    def test_default_runs_through_converter(self):
        engine = FieldMappingEngine([r(source="A", target="X", default="7", convert="padLeft10")])
        assert engine.apply_record({})["X"] == "0000000007"

    def test_constant_rule(self):
        engine = FieldMappingEngine([r(target="SourceSystem", default="ECC")])
        assert engine.apply_record({"anything": 1}) == {"SourceSystem": "ECC"}

    def test_value_map(self):
        engine = FieldMappingEngine([
            r(source="KTOKD", target="Grouping", value_map={"D": "CUST", "K": "SUPL"}, default="OTHR"),
            r(source="KTOKD", target="Raw", value_map={"D": "CUST"}),
        ])
        assert engine.apply_record({"KTOKD": "K"}) == {"Grouping": "SUPL", "Raw": "K"}
        assert engine.apply_record({"KTOKD": "Z"}) == {"Grouping": "OTHR", "Raw": "Z"}

    def test_value_map_is_case_sensitive(self):
        engine = FieldMappingEngine([r(source="SHKZG", target="Side", value_map={"D": "Debit"})])
        assert engine.apply_record({"SHKZG": "D"}) == {"Side": "Debit"}
        assert engine.apply_record({"SHKZG": "d"}) == {"Side": "d"}

    def test_later_rule_overwrites(self):
        engine = FieldMappingEngine([
            r(source="A", target="X"),
            r(source="B", target="X"),
        ])
        assert engine.apply_record({"A": "1", "B": "2"}) == {"X": "2"}

    def test_pass_through(self):
        engine = FieldMappingEngine([r(source="A", target="X")], pass_through=True)
        assert engine.apply_record({"A": "1", "EXTRA": "e"}) == {"X": "1", "EXTRA": "e"}

    def test_batch_preserves_order_and_stats(self):
        engine = FieldMappingEngine([r(source="A", target="X")])
        out = engine.apply_batch([{"A": str(i)} for i in range(3)])
        assert [o["X"] for o in out] == ["0", "1", "2"]
        summary = engine.get_summary()
        assert summary["processed"] == 3
        assert summary["total_mappings"] == 1
        engine.reset_stats()
        assert engine.get_summary()["processed"] == 0


class TestCompile:
    def test_unknown_converter_raises_at_construction(self):
        with pytest.raises(MigrationObjectError) as exc_info:
            FieldMappingEngine([r(source="A", target="X", convert="toRoman")])
        assert exc_info.value.code == "MIGOBJ_UNKNOWN_CONVERTER"

    def test_rule_without_source_or_default_raises(self):
        with pytest.raises(MigrationObjectError) as exc_info:
            FieldMappingEngine([r(target="X")])
        assert exc_info.value.code == "MIGOBJ_INVALID_RULE"

    def test_rule_without_target_raises(self):
        with pytest.raises(MigrationObjectError):
            FieldMappingEngine([r(source="A")])


class TestValidateMappings:
    def test_valid(self):
        valid, errors = FieldMappingEngine.validate_mappings([r(source="A", target="X")])
        assert valid
        assert errors == []

    def test_reports_every_problem(self):
        valid, errors = FieldMappingEngine.validate_mappings([
            r(source="A", target="X"),
            r(source="B", target="X"),
            r(target="Y"),
            r(source="C", target="Z", convert="toRoman"),
        ])
        assert not valid
        assert len(errors) == 3
        assert any("duplicate target 'X'" in e for e in errors)
        assert any("toRoman" in e for e in errors)

    def test_round_trip_from_dict(self):
        rule = FieldMappingRule.from_dict({"source": "A", "target": "X", "valueMap": {"1": "one"}})
        assert rule.value_map == {"1": "one"}
        assert rule.to_dict() == {"target": "X", "source": "A", "value_map": {"1": "one"}}
