"""Tests for the data quality checker."""

from erp_migration.models.mapping import FormatCheck, QualityChecks, RangeCheck
from erp_migration.models.record import FindingRule, Severity
from erp_migration.services import validator
from erp_migration.services.validator import DataQualityChecker, jaccard_similarity, tokenize


def check(records, **kwargs):
    return DataQualityChecker(QualityChecks.build(**kwargs)).check(records)


class TestRequired:
    def test_missing_empty_and_sentinel(self):
        report = check(
            [{"A": "1", "B": "x"}, {"A": "", "B": "x"}, {"B": "x"}, {"A": "0000000000", "B": ""}],
            required=["A", "B"],
        )
        findings = report.findings_for(FindingRule.REQUIRED)
        assert [(f.record_index, f.field) for f in findings] == [(1, "A"), (2, "A"), (3, "A"), (3, "B")]
        assert all(f.severity == Severity.ERROR for f in findings)
        assert report.failed
        assert report.status == "errors"

    def test_all_present(self):
        report = check([{"A": "1"}], required=["A"])
        assert not report.failed
        assert report.status == "passed"
        assert report.checks[0].severity == "pass"


class TestDuplicates:
    def test_exact_duplicates_are_warnings(self):
        report = check(
            [{"K": "1", "C": "a"}, {"K": "1", "C": "a"}, {"K": "1", "C": "b"}, {"K": "1", "C": "a"}],
            duplicate_keys=["K", "C"],
        )
        findings = report.findings_for(FindingRule.DUPLICATE)
        assert [(f.record_index, f.related_index) for f in findings] == [(1, 0), (3, 0)]
        assert not report.failed
        assert report.status == "warnings"

    def test_fuzzy_duplicates_reported_on_later_record(self):
        records = [
            {"Name": "Acme Manufacturing Inc", "Street": "1 Main St"},
            {"Name": "Globex", "Street": "5 Elm Rd"},
            {"Name": "ACME Manufacturing, Inc.", "Street": "1 Main St"},
        ]
        report = check(records, fuzzy_keys=["Name", "Street"], fuzzy_threshold=0.85)
        findings = report.findings_for(FindingRule.FUZZY)
        assert len(findings) == 1
        assert findings[0].record_index == 2
        assert findings[0].related_index == 0
        assert findings[0].value == 1.0
        assert not report.failed

    def test_fuzzy_threshold_is_inclusive(self):
        # {a, b} vs {a, b, c, d}: 2 / 4 = 0.5
        records = [{"N": "a b"}, {"N": "a b c d"}]
        assert len(check(records, fuzzy_keys=["N"], fuzzy_threshold=0.5).findings) == 1
        assert check(records, fuzzy_keys=["N"], fuzzy_threshold=0.51).findings == []

    def test_empty_keys_never_match(self):
        report = check([{"N": ""}, {"N": None}], fuzzy_keys=["N"], fuzzy_threshold=0.0)
        assert report.findings == []

    def test_fuzzy_comparison_is_capped(self, monkeypatch):
        monkeypatch.setattr(validator, "FUZZY_COMPARISON_LIMIT", 2)
        records = [{"N": "same"}, {"N": "other"}, {"N": "same"}]
        assert check(records, fuzzy_keys=["N"]).findings == []


class TestRangeAndFormat:
    def test_range_bounds_inclusive(self):
        records = [{"Q": "0"}, {"Q": "100"}, {"Q": "-1"}, {"Q": "101"}, {"Q": ""}, {"Q": "n/a"}]
        report = check(records, ranges=[("Q", 0, 100)])
        findings = report.findings_for(FindingRule.RANGE)
        assert [f.record_index for f in findings] == [2, 3]
        assert report.failed

    def test_open_bound(self):
        report = DataQualityChecker(QualityChecks(range=(RangeCheck("Q", min=0),))).check([{"Q": "99999"}])
        assert report.findings == []

    def test_format_is_warning(self):
        checks = QualityChecks(format=(FormatCheck("Currency", r"^[A-Z]{3}$", "ISO currency"),))
        report = DataQualityChecker(checks).check([{"Currency": "USD"}, {"Currency": "usd"}, {"Currency": ""}])
        findings = report.findings_for(FindingRule.FORMAT)
        assert [f.record_index for f in findings] == [1]
        assert "ISO currency" in findings[0].message
        assert not report.failed
        assert report.warning_count == 1


class TestReport:
    def test_counts_and_truncation(self):
        records = [{"A": ""} for _ in range(5)]
        report = check(records, required=["A"])
        assert report.error_count == 5
        data = report.to_dict(max_findings=2)
        assert len(data["findings"]) == 2
        assert data["findings_truncated"]
        assert data["total_records"] == 5

    def test_no_checks(self):
        report = check([{"A": 1}])
        assert report.status == "passed"
        assert report.checks == []


class TestSimilarity:
    def test_tokenize(self):
        assert tokenize(["Acme, Inc.", None, "1 Main-St"]) == frozenset({"acme", "inc", "1", "main", "st"})

    def test_jaccard(self):
        assert jaccard_similarity(frozenset({"a", "b"}), frozenset({"b", "c"})) == 1 / 3
        assert jaccard_similarity(frozenset(), frozenset()) == 0.0
