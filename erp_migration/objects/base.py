"""
Base class for declarative migration objects.

A migration object describes one entity's Extract -> Transform ->
Validate -> Load lifecycle: the source table it reads, its field mapping
rules, its quality checks and a deterministic mock extract. Execution is
delegated to the phase executor.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..errors import MigrationObjectError
from ..models.mapping import ConverterTag, FieldMappingRule, QualityChecks
from ..models.migration import ObjectResult, PhaseResult, SourceGateway
from ..models.record import Record, TransformOutput
from ..orchestrator import PhaseExecutor
from ..services.transformer import FieldMappingEngine
from ..services.validator import QualityReport

SOURCE_SYSTEM = "ECC"


def rule(
    source: str,
    target: str,
    convert: Optional[ConverterTag] = None,
    default: Any = None,
    value_map: Optional[Dict[Any, Any]] = None,
) -> FieldMappingRule:
    """Shorthand for a source -> target mapping rule."""
    return FieldMappingRule(source=source, target=target, convert=convert, default=default, value_map=value_map)


def constant(target: str, value: Any) -> FieldMappingRule:
    """A rule with no source that always writes `value`."""
    return FieldMappingRule(target=target, default=value)


def provenance(object_id: str, source_system: str = SOURCE_SYSTEM) -> List[FieldMappingRule]:
    """The SourceSystem / MigrationObjectId rules every object ends with."""
    return [constant("SourceSystem", source_system), constant("MigrationObjectId", object_id)]


def mock_amount(seed: int, minimum: float, spread: int) -> str:
    """Deterministic pseudo-random amount in [minimum, minimum + spread), two decimals."""
    cents = (seed * 7919 + 104729) % (spread * 100)
    return f"{minimum + cents / 100:.2f}"


class BaseMigrationObject:
    """
    Abstract migration object.

    Subclasses set `object_id`, `name`, `source_table` and `target_entity`
    and implement `field_mappings()`, `quality_checks()` and
    `extract_mock()`. `transform_hook()` is optional.

    Instances hold a compiled mapping engine and are not safe to run
    concurrently; the scheduler creates a fresh instance per run.
    """

    object_id: str = ""
    name: str = ""
    source_table: Optional[str] = None
    target_entity: str = ""

    def __init__(
        self,
        gateway: Optional[SourceGateway] = None,
        batch_size: int = 100,
        load_error_rate: float = 0.0,
    ):
        """
        Initialize the object.

        Args:
            gateway: Mock or live source gateway (default mock)
            batch_size: Records per load batch
            load_error_rate: Simulated load failure rate in mock mode

        Raises:
            MigrationObjectError: MIGOBJ_ABSTRACT for the base class or a
                subclass without an object_id
        """
        if type(self) is BaseMigrationObject or not self.object_id:
            raise MigrationObjectError(
                f"Cannot instantiate {type(self).__name__} directly: object_id not defined",
                code="MIGOBJ_ABSTRACT",
            )
        self.gateway = gateway or SourceGateway.mock()
        self.batch_size = batch_size
        self.load_error_rate = load_error_rate
        self.logger = logging.getLogger(f"erp_migration.objects.{self.object_id}")
        self._engine: Optional[FieldMappingEngine] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.object_id} mode={self.gateway.mode.value}>"

    # Declarations

    def field_mappings(self) -> List[FieldMappingRule]:
        """Ordered mapping rules. Returns a new list on every call."""
        raise MigrationObjectError(f"{self.object_id}: field_mappings() not implemented", code="MIGOBJ_ABSTRACT")

    def quality_checks(self) -> QualityChecks:
        return QualityChecks()

    def extract_mock(self) -> List[Record]:
        return []

    def transform_hook(self, records: List[Record]) -> Optional[TransformOutput]:
        """Post-process mapped records. None keeps them as they are."""
        return None

    def extract_live(self, adapter: Any, options: Any) -> List[Record]:
        """Read `source_table` through a source adapter. Blocking."""
        if not self.source_table:
            raise MigrationObjectError(
                f"{self.object_id}: no source table defined for live extraction",
                code="MIGOBJ_NO_SOURCE",
            )
        return adapter.read_table(self.source_table, options).rows

    def mapping_engine(self) -> FieldMappingEngine:
        """The compiled interpreter for this object's rules (built once)."""
        if self._engine is None:
            self._engine = FieldMappingEngine(self.field_mappings())
        return self._engine

    def describe(self) -> Dict[str, Any]:
        """Metadata for listings."""
        return {
            "object_id": self.object_id,
            "name": self.name,
            "source_table": self.source_table,
            "target_entity": self.target_entity,
            "mapping_count": len(self.field_mappings()),
            "quality_checks": self.quality_checks().to_dict(),
        }

    # Lifecycle

    def _executor(self) -> PhaseExecutor:
        return PhaseExecutor(self.gateway, batch_size=self.batch_size, load_error_rate=self.load_error_rate)

    async def extract(self) -> Tuple[PhaseResult, List[Record]]:
        return await self._executor().extract(self)

    def transform(self, records: Sequence[Record]) -> Tuple[PhaseResult, List[Record]]:
        return self._executor().transform(self, records)

    def validate(self, records: Sequence[Record]) -> Tuple[PhaseResult, QualityReport]:
        return self._executor().validate(self, records)

    async def load(self, records: List[Record]) -> PhaseResult:
        return await self._executor().load(self, records)

    async def run(self) -> ObjectResult:
        """Run Extract -> Transform -> Validate -> Load."""
        return await self._executor().run(self)
