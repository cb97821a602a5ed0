"""Data quality checks run on the transformed record set of a migration object."""

import re
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..models.mapping import QualityChecks, RangeCheck, FormatCheck
from ..models.record import (
    EMPTY_KEY_SENTINEL,
    Finding,
    FindingRule,
    Record,
    Severity,
)

logger = logging.getLogger(__name__)

FUZZY_COMPARISON_LIMIT = 10000

_TOKEN_SPLIT = re.compile(r"[^0-9a-z]+")

# Finding rules that fail the validate phase; all others are warnings.
BLOCKING_RULES = frozenset({FindingRule.REQUIRED, FindingRule.RANGE})


@dataclass
class CheckSummary:
    """Outcome of one check over the whole record set."""
    name: str
    severity: str  # error, warning, pass
    message: str
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "severity": self.severity,
            "message": self.message,
            "count": self.count,
        }


@dataclass
class QualityReport:
    """Findings and per-check summaries for one record set."""
    total_records: int
    findings: List[Finding] = field(default_factory=list)
    checks: List[CheckSummary] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """True iff any required or range finding occurred."""
        return any(f.rule in BLOCKING_RULES for f in self.findings)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if not f.is_error)

    @property
    def status(self) -> str:
        if self.error_count:
            return "errors"
        if self.warning_count:
            return "warnings"
        return "passed"

    def findings_for(self, rule: FindingRule) -> List[Finding]:
        return [f for f in self.findings if f.rule == rule]

    def to_dict(self, max_findings: Optional[int] = 100) -> Dict[str, Any]:
        """Convert to dictionary representation (findings truncated to `max_findings`)."""
        findings = self.findings if max_findings is None else self.findings[:max_findings]
        return {
            "status": self.status,
            "failed": self.failed,
            "total_records": self.total_records,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "checks": [c.to_dict() for c in self.checks],
            "findings": [f.to_dict() for f in findings],
            "findings_truncated": len(findings) < len(self.findings),
        }


def _is_missing(value: Any) -> bool:
    return value is None or value == "" or value == EMPTY_KEY_SENTINEL


def _to_number(value: Any) -> Optional[Decimal]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def tokenize(values: Sequence[Any]) -> FrozenSet[str]:
    """Lower-cased alphanumeric tokens of the concatenated key values."""
    text = " ".join("" if v is None else str(v) for v in values).lower()
    return frozenset(token for token in _TOKEN_SPLIT.split(text) if token)


def jaccard_similarity(left: FrozenSet[str], right: FrozenSet[str]) -> float:
    """Token-set Jaccard similarity in [0, 1]."""
    if not left and not right:
        return 0.0
    return len(left & right) / len(left | right)


class DataQualityChecker:
    """
    Evaluates a QualityChecks descriptor over a record set.

    Supports:
    - Required fields (error)
    - Exact duplicates on a composite key (warning)
    - Fuzzy duplicates by token-set Jaccard similarity (warning)
    - Inclusive numeric ranges (error)
    - Regex formats (warning)

    Never raises on bad data: every observation becomes a Finding.
    """

    def __init__(self, checks: QualityChecks):
        """Initialize the checker."""
        self.checks = checks

    def check(self, records: Sequence[Record]) -> QualityReport:
        """
        Run every configured check against the records.

        Args:
            records: Transformed target records

        Returns:
            QualityReport with findings in check order
        """
        report = QualityReport(total_records=len(records))

        if self.checks.required:
            self._add(report, self.check_required(records, self.checks.required))

        if self.checks.exact_duplicate:
            self._add(report, self.find_exact_duplicates(records, self.checks.exact_duplicate.keys))

        if self.checks.fuzzy_duplicate:
            cfg = self.checks.fuzzy_duplicate
            self._add(report, self.find_fuzzy_duplicates(records, cfg.keys, cfg.threshold))

        for fmt in self.checks.format:
            self._add(report, self.check_format(records, fmt))

        for rng in self.checks.range:
            self._add(report, self.check_range(records, rng))

        logger.debug(
            f"Quality check on {report.total_records} records: {report.status} "
            f"({report.error_count} errors, {report.warning_count} warnings)"
        )
        return report

    @staticmethod
    def _add(report: QualityReport, outcome: Tuple[CheckSummary, List[Finding]]) -> None:
        summary, findings = outcome
        report.checks.append(summary)
        report.findings.extend(findings)

    def check_required(
        self,
        records: Sequence[Record],
        fields: Sequence[str]
    ) -> Tuple[CheckSummary, List[Finding]]:
        """One finding per record and field that is absent, empty or the all-zero sentinel."""
        findings = []
        for i, record in enumerate(records):
            for name in fields:
                if _is_missing(record.get(name)):
                    findings.append(Finding(
                        rule=FindingRule.REQUIRED,
                        record_index=i,
                        field=name,
                        message=f"Required field '{name}' is empty",
                        severity=Severity.ERROR,
                        value=record.get(name),
                    ))

        summary = CheckSummary(
            name="required",
            severity="error" if findings else "pass",
            message=(
                f"{len(findings)} missing required value(s) across fields: {', '.join(fields)}"
                if findings else f"All required fields present: {', '.join(fields)}"
            ),
            count=len(findings),
        )
        return summary, findings

    def find_exact_duplicates(
        self,
        records: Sequence[Record],
        keys: Sequence[str]
    ) -> Tuple[CheckSummary, List[Finding]]:
        """One finding per non-first record of every group sharing all key values."""
        seen: Dict[Tuple[Any, ...], int] = {}
        findings = []

        for i, record in enumerate(records):
            key = tuple(record.get(k) for k in keys)
            first = seen.get(key)
            if first is None:
                seen[key] = i
                continue
            findings.append(Finding(
                rule=FindingRule.DUPLICATE,
                record_index=i,
                field=",".join(keys),
                message=f"Duplicate of record {first} on keys: {', '.join(keys)}",
                severity=Severity.WARNING,
                related_index=first,
                value=list(key),
            ))

        summary = CheckSummary(
            name="exact_duplicate",
            severity="warning" if findings else "pass",
            message=(
                f"{len(findings)} exact duplicate(s) on keys: {', '.join(keys)}"
                if findings else f"No exact duplicates on keys: {', '.join(keys)}"
            ),
            count=len(findings),
        )
        return summary, findings

    def find_fuzzy_duplicates(
        self,
        records: Sequence[Record],
        keys: Sequence[str],
        threshold: float = 0.85
    ) -> Tuple[CheckSummary, List[Finding]]:
        """
        Pairwise token-set Jaccard comparison of the concatenated key values.

        Quadratic; only the first FUZZY_COMPARISON_LIMIT records are compared.
        Each matching pair (i, j), i < j, yields one finding on j.
        """
        limit = min(len(records), FUZZY_COMPARISON_LIMIT)
        if len(records) > limit:
            logger.warning(f"Fuzzy duplicate check capped at {limit} of {len(records)} records")

        tokens = [tokenize([records[i].get(k) for k in keys]) for i in range(limit)]
        findings = []

        for i in range(limit):
            if not tokens[i]:
                continue
            for j in range(i + 1, limit):
                if not tokens[j]:
                    continue
                similarity = jaccard_similarity(tokens[i], tokens[j])
                if similarity >= threshold:
                    findings.append(Finding(
                        rule=FindingRule.FUZZY,
                        record_index=j,
                        field=",".join(keys),
                        message=f"Possible duplicate of record {i} (similarity {similarity:.2f})",
                        severity=Severity.WARNING,
                        related_index=i,
                        value=round(similarity, 4),
                    ))

        summary = CheckSummary(
            name="fuzzy_duplicate",
            severity="warning" if findings else "pass",
            message=(
                f"{len(findings)} potential fuzzy duplicate(s) (threshold: {threshold})"
                if findings else f"No fuzzy duplicates detected (threshold: {threshold})"
            ),
            count=len(findings),
        )
        return summary, findings

    def check_range(
        self,
        records: Sequence[Record],
        rng: RangeCheck
    ) -> Tuple[CheckSummary, List[Finding]]:
        """Inclusive bounds; empty or non-numeric values are not checked."""
        low = _to_number(rng.min) if rng.min is not None else None
        high = _to_number(rng.max) if rng.max is not None else None
        findings = []

        for i, record in enumerate(records):
            number = _to_number(record.get(rng.field))
            if number is None:
                continue
            reason = None
            if low is not None and number < low:
                reason = f"below min {rng.min}"
            elif high is not None and number > high:
                reason = f"above max {rng.max}"
            if reason:
                findings.append(Finding(
                    rule=FindingRule.RANGE,
                    record_index=i,
                    field=rng.field,
                    message=f"Value {number} of '{rng.field}' is {reason}",
                    severity=Severity.ERROR,
                    value=record.get(rng.field),
                ))

        bounds = f"{'-inf' if rng.min is None else rng.min}..{'inf' if rng.max is None else rng.max}"
        summary = CheckSummary(
            name="range",
            severity="error" if findings else "pass",
            message=(
                f"{len(findings)} range violation(s) on {rng.field} ({bounds})"
                if findings else f"Range OK for {rng.field}"
            ),
            count=len(findings),
        )
        return summary, findings

    def check_format(
        self,
        records: Sequence[Record],
        fmt: FormatCheck
    ) -> Tuple[CheckSummary, List[Finding]]:
        """Non-empty values must match the pattern (warning only)."""
        regex = re.compile(fmt.pattern)
        findings = []

        for i, record in enumerate(records):
            value = record.get(fmt.field)
            if value is None or value == "":
                continue
            if not regex.search(str(value)):
                findings.append(Finding(
                    rule=FindingRule.FORMAT,
                    record_index=i,
                    field=fmt.field,
                    message=f"'{fmt.field}' does not match {fmt.description or fmt.pattern}",
                    severity=Severity.WARNING,
                    value=value,
                ))

        summary = CheckSummary(
            name="format",
            severity="warning" if findings else "pass",
            message=(
                f"{len(findings)} format violation(s) on {fmt.field} ({fmt.description or fmt.pattern})"
                if findings else f"Format OK for {fmt.field}"
            ),
            count=len(findings),
        )
        return summary, findings
