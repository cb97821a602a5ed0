"""Record and finding models for migration data."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional
from enum import Enum


# Flat bag of scalars keyed by source or target field code.
Record = Dict[str, Any]

# Sentinel the source systems use for "no partner / no key".
EMPTY_KEY_SENTINEL = "0000000000"


def has_value(value: Any) -> bool:
    """True when a field carries a usable value."""
    return value is not None and value != "" and value != EMPTY_KEY_SENTINEL


class FindingRule(str, Enum):
    """Quality check that produced a finding."""
    REQUIRED = "required"
    DUPLICATE = "duplicate"
    FUZZY = "fuzzy"
    RANGE = "range"
    FORMAT = "format"


class Severity(str, Enum):
    """Severity of a finding."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Finding:
    """A structured per-record observation from the quality-check engine (not an exception)."""
    rule: FindingRule
    record_index: int
    message: str
    field: Optional[str] = None
    severity: Severity = Severity.ERROR
    related_index: Optional[int] = None  # first record of a duplicate group / fuzzy pair
    value: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "rule": self.rule.value,
            "record_index": self.record_index,
            "field": self.field,
            "message": self.message,
            "severity": self.severity.value,
            "related_index": self.related_index,
            "value": self.value,
        }

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


@dataclass
class MergedBusinessPartner:
    """
    Business partner produced by merging customer and supplier records.

    `roles` holds the accumulated role codes (FLCU01 customer, FLVN01
    supplier). `merged_count` is the number of source records folded in.
    """
    data: Record
    roles: FrozenSet[str] = field(default_factory=frozenset)
    merged_count: int = 1

    @property
    def is_merged(self) -> bool:
        return self.merged_count > 1

    def to_record(self) -> Record:
        """Flatten into a target record with the role set under `_roles`."""
        record = dict(self.data)
        record["_roles"] = sorted(self.roles)
        return record

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "data": self.data,
            "roles": sorted(self.roles),
            "merged_count": self.merged_count,
        }


@dataclass
class TransformOutput:
    """Result of a transform hook: the records plus optional extra details."""
    records: List[Record]
    extra: Dict[str, Any] = field(default_factory=dict)
