"""Data models for the migration runtime."""

from .mapping import (
    ConverterTag,
    FieldMappingRule,
    DuplicateKeys,
    FuzzyDuplicate,
    RangeCheck,
    FormatCheck,
    QualityChecks,
)
from .migration import (
    SourceMode,
    PhaseName,
    PhaseStatus,
    ObjectStatus,
    PhaseResult,
    ObjectStats,
    ObjectResult,
    RunStats,
    RunResult,
    SourceGateway,
)
from .record import (
    Record,
    Finding,
    FindingRule,
    Severity,
    MergedBusinessPartner,
    TransformOutput,
    has_value,
)

__all__ = [
    "ConverterTag",
    "FieldMappingRule",
    "DuplicateKeys",
    "FuzzyDuplicate",
    "RangeCheck",
    "FormatCheck",
    "QualityChecks",
    "SourceMode",
    "PhaseName",
    "PhaseStatus",
    "ObjectStatus",
    "PhaseResult",
    "ObjectStats",
    "ObjectResult",
    "RunStats",
    "RunResult",
    "SourceGateway",
    "Record",
    "Finding",
    "FindingRule",
    "Severity",
    "MergedBusinessPartner",
    "TransformOutput",
    "has_value",
]
