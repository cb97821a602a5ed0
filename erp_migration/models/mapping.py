"""Declarative field mapping rules and quality-check descriptors."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union
from enum import Enum


class ConverterTag(str, Enum):
    """Closed set of value converters a mapping rule may reference."""
    TO_DATE = "toDate"
    TO_DECIMAL = "toDecimal"
    TO_INTEGER = "toInteger"
    TO_UPPER_CASE = "toUpperCase"
    TO_LOWER_CASE = "toLowerCase"
    BOOL_YN = "boolYN"
    BOOL_TF = "boolTF"
    PAD_LEFT_10 = "padLeft10"
    PAD_LEFT_40 = "padLeft40"
    STRIP_LEADING_ZEROS = "stripLeadingZeros"
    TRIM = "trim"


@dataclass(frozen=True)
class FieldMappingRule:
    """
    One field-level mapping from a source record to a target record.

    Valid shapes are: source only, source + convert, source + value_map,
    or target + default without source. `default` also applies when the
    source value is absent or empty.
    """
    source: Optional[str] = None
    target: str = ""
    convert: Optional[Union[ConverterTag, str]] = None
    default: Optional[Any] = None
    value_map: Optional[Dict[str, Any]] = None

    @property
    def is_constant(self) -> bool:
        """True for rules that only emit a default value."""
        return self.source is None

    @property
    def convert_tag(self) -> Optional[str]:
        """The converter tag as a plain string."""
        if self.convert is None:
            return None
        return self.convert.value if isinstance(self.convert, ConverterTag) else str(self.convert)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {"target": self.target}
        if self.source is not None:
            result["source"] = self.source
        if self.convert is not None:
            result["convert"] = self.convert_tag
        if self.default is not None:
            result["default"] = self.default
        if self.value_map is not None:
            result["value_map"] = dict(self.value_map)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldMappingRule":
        """Create from dictionary representation."""
        return cls(
            source=data.get("source"),
            target=data.get("target", ""),
            convert=data.get("convert"),
            default=data.get("default"),
            value_map=data.get("value_map") or data.get("valueMap"),
        )


@dataclass(frozen=True)
class DuplicateKeys:
    """Exact duplicate check on a composite key."""
    keys: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"keys": list(self.keys)}


@dataclass(frozen=True)
class FuzzyDuplicate:
    """Fuzzy duplicate check: similarity of the concatenated keys >= threshold."""
    keys: Tuple[str, ...]
    threshold: float = 0.85

    def to_dict(self) -> Dict[str, Any]:
        return {"keys": list(self.keys), "threshold": self.threshold}


@dataclass(frozen=True)
class RangeCheck:
    """Inclusive numeric bounds on a target field. Either bound may be open."""
    field: str
    min: Optional[float] = None
    max: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "min": self.min, "max": self.max}


@dataclass(frozen=True)
class FormatCheck:
    """Regex format check on a target field (warning only)."""
    field: str
    pattern: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "pattern": self.pattern, "description": self.description}


@dataclass(frozen=True)
class QualityChecks:
    """Quality checks evaluated on the transformed record set of one object."""
    required: Tuple[str, ...] = ()
    exact_duplicate: Optional[DuplicateKeys] = None
    fuzzy_duplicate: Optional[FuzzyDuplicate] = None
    range: Tuple[RangeCheck, ...] = ()
    format: Tuple[FormatCheck, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "required": list(self.required),
            "exact_duplicate": self.exact_duplicate.to_dict() if self.exact_duplicate else None,
            "fuzzy_duplicate": self.fuzzy_duplicate.to_dict() if self.fuzzy_duplicate else None,
            "range": [r.to_dict() for r in self.range],
            "format": [f.to_dict() for f in self.format],
        }

    @classmethod
    def build(
        cls,
        required: Optional[List[str]] = None,
        duplicate_keys: Optional[List[str]] = None,
        fuzzy_keys: Optional[List[str]] = None,
        fuzzy_threshold: float = 0.85,
        ranges: Optional[List[Tuple[str, Optional[float], Optional[float]]]] = None,
        formats: Optional[List[Tuple[str, str, str]]] = None,
    ) -> "QualityChecks":
        """Shorthand constructor used by the migration object declarations."""
        return cls(
            required=tuple(required or ()),
            exact_duplicate=DuplicateKeys(tuple(duplicate_keys)) if duplicate_keys else None,
            fuzzy_duplicate=(
                FuzzyDuplicate(tuple(fuzzy_keys), fuzzy_threshold) if fuzzy_keys else None
            ),
            range=tuple(RangeCheck(f, lo, hi) for f, lo, hi in (ranges or ())),
            format=tuple(FormatCheck(f, p, d) for f, p, d in (formats or ())),
        )
