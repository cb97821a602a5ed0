"""Field mapping interpreter for converting source records into target records."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..errors import MigrationObjectError
from ..models.mapping import FieldMappingRule
from ..models.record import Record
from .converters import Converter, get_converter, is_known_converter

logger = logging.getLogger(__name__)


class FieldMappingEngine:
    """
    Applies an ordered list of mapping rules to source records.

    Rules run in list order. For each rule:
    - read the source field (constant rules have none)
    - empty or missing value falls back to `default`, else the target is ''
    - `value_map` lookup is exact; unmatched values fall back to `default`,
      then to the raw value
    - the converter, if any, is applied last
    A later rule targeting the same field overwrites the earlier one.

    The rule list is compiled once; an unknown converter tag or a
    malformed rule raises MigrationObjectError at construction.
    """

    def __init__(self, rules: Sequence[FieldMappingRule], pass_through: bool = False):
        """
        Initialize the engine.

        Args:
            rules: Mapping rules in application order
            pass_through: Copy source fields no rule consumed into the target record
        """
        self.rules: Tuple[FieldMappingRule, ...] = tuple(rules)
        self.pass_through = pass_through
        self._compiled = [(rule, self._compile_rule(index, rule)) for index, rule in enumerate(self.rules)]
        self._mapped_sources = {rule.source for rule in self.rules if rule.source is not None}
        self._stats = {"processed": 0, "mapped": 0, "unmapped": 0}

    @staticmethod
    def _compile_rule(index: int, rule: FieldMappingRule) -> Optional[Converter]:
        if not rule.target:
            raise MigrationObjectError(
                f"Mapping[{index}]: missing target field",
                code="MIGOBJ_INVALID_RULE",
                details={"index": index, "rule": rule.to_dict()},
            )
        if rule.source is None and rule.default is None:
            raise MigrationObjectError(
                f"Mapping[{index}] -> {rule.target}: no source or default defined",
                code="MIGOBJ_INVALID_RULE",
                details={"index": index, "rule": rule.to_dict()},
            )
        if rule.convert is None:
            return None
        return get_converter(rule.convert)

    @classmethod
    def validate_mappings(cls, rules: Sequence[FieldMappingRule]) -> Tuple[bool, List[str]]:
        """
        Check mapping definitions for common errors without raising.

        Duplicate targets are reported but are legal: later rules overwrite.

        Returns:
            Tuple of (valid, error messages)
        """
        errors = []
        targets = set()

        for i, rule in enumerate(rules):
            if not rule.target:
                errors.append(f"Mapping[{i}]: missing target field")
            if rule.source is None and rule.default is None:
                errors.append(f"Mapping[{i}]: no source or default defined")
            if rule.convert is not None and not is_known_converter(rule.convert):
                errors.append(f"Mapping[{i}]: unknown converter '{rule.convert_tag}'")
            if rule.target and rule.target in targets:
                errors.append(f"Mapping[{i}]: duplicate target '{rule.target}'")
            if rule.target:
                targets.add(rule.target)

        return len(errors) == 0, errors

    def apply_record(self, record: Record) -> Record:
        """Apply all rules to one source record."""
        target: Record = {}

        for rule, converter in self._compiled:
            value = record.get(rule.source) if rule.source is not None else None

            if value is None or value == "":
                if rule.default is None:
                    target[rule.target] = ""
                    continue
                value = rule.default

            if rule.value_map is not None:
                mapped = _lookup(rule.value_map, value)
                if mapped is not _MISSING:
                    value = mapped
                elif rule.default is not None:
                    value = rule.default

            if converter is not None:
                value = converter(value)

            target[rule.target] = value
            self._stats["mapped"] += 1

        if self.pass_through:
            for key, value in record.items():
                if key not in self._mapped_sources and key not in target:
                    target[key] = value
                    self._stats["unmapped"] += 1

        self._stats["processed"] += 1
        return target

    def apply_batch(self, records: Sequence[Record]) -> List[Record]:
        """Apply all rules to each record, preserving order and count."""
        return [self.apply_record(record) for record in records]

    def get_summary(self) -> Dict[str, Any]:
        """Get mapping statistics."""
        return {"total_mappings": len(self.rules), **self._stats}

    def reset_stats(self) -> None:
        self._stats = {"processed": 0, "mapped": 0, "unmapped": 0}


_MISSING = object()


def _lookup(value_map: Dict[Any, Any], value: Any) -> Any:
    try:
        return value_map[value] if value in value_map else _MISSING
    except TypeError:
        # unhashable source value
        return _MISSING
