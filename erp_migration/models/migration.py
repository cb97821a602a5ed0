"""Migration execution models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum
from datetime import datetime
import uuid


class SourceMode(str, Enum):
    """Where extraction reads from."""
    MOCK = "mock"  # deterministic fixtures, no I/O
    LIVE = "live"  # source adapter + target loader


class PhaseName(str, Enum):
    """The four ETVL phases, in execution order."""
    EXTRACT = "extract"
    TRANSFORM = "transform"
    VALIDATE = "validate"
    LOAD = "load"


class PhaseStatus(str, Enum):
    """Outcome of a single phase."""
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class ObjectStatus(str, Enum):
    """Aggregate outcome of one migration object run."""
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    VALIDATION_FAILED = "validation_failed"
    ERROR = "error"

    @property
    def is_failure(self) -> bool:
        return self in (ObjectStatus.ERROR, ObjectStatus.VALIDATION_FAILED)


@dataclass
class PhaseResult:
    """Result of one phase. A skipped phase always has record_count 0."""
    status: PhaseStatus
    record_count: int = 0
    error_count: int = 0
    duration_ms: float = 0.0
    success_count: Optional[int] = None  # load only
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def skipped(cls, reason: str) -> "PhaseResult":
        """Create a skipped phase result."""
        return cls(status=PhaseStatus.SKIPPED, details={"reason": reason})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "status": self.status.value,
            "record_count": self.record_count,
            "error_count": self.error_count,
            "duration_ms": round(self.duration_ms, 3),
        }
        if self.success_count is not None:
            result["success_count"] = self.success_count
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class ObjectStats:
    """Record counts across the phases of one object run."""
    extracted_records: int = 0
    transformed_records: int = 0
    loaded_records: int = 0
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "extracted_records": self.extracted_records,
            "transformed_records": self.transformed_records,
            "loaded_records": self.loaded_records,
            "duration_ms": round(self.duration_ms, 3),
        }


@dataclass
class ObjectResult:
    """Outcome of running E -> T -> V -> L for one migration object."""
    object_id: str
    name: str
    status: ObjectStatus = ObjectStatus.COMPLETED
    mode: SourceMode = SourceMode.MOCK
    phases: Dict[str, PhaseResult] = field(default_factory=dict)
    stats: ObjectStats = field(default_factory=ObjectStats)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "object_id": self.object_id,
            "name": self.name,
            "status": self.status.value,
            "mode": self.mode.value,
            "phases": {name: phase.to_dict() for name, phase in self.phases.items()},
            "stats": self.stats.to_dict(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def phase(self, name: PhaseName) -> Optional[PhaseResult]:
        """Get a phase result by name."""
        return self.phases.get(name.value)

    @property
    def error(self) -> Optional[str]:
        """First captured phase error, if any."""
        for phase in self.phases.values():
            if phase.error:
                return phase.error
        return None


@dataclass
class RunStats:
    """Totals for one scheduler run."""
    total: int = 0
    completed: int = 0
    failed: int = 0
    waves: List[List[str]] = field(default_factory=list)
    execution_order: List[str] = field(default_factory=list)
    total_duration_ms: float = 0.0
    cancelled: bool = False
    not_run: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "total": self.total,
            "completed": self.completed,
            "failed": self.failed,
            "waves": [list(wave) for wave in self.waves],
            "execution_order": list(self.execution_order),
            "total_duration_ms": round(self.total_duration_ms, 3),
            "cancelled": self.cancelled,
            "not_run": list(self.not_run),
        }


@dataclass
class RunResult:
    """A complete scheduler run over a set of migration objects."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    mode: SourceMode = SourceMode.MOCK
    results: List[ObjectResult] = field(default_factory=list)
    stats: RunStats = field(default_factory=RunStats)
    started_at: datetime = field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "mode": self.mode.value,
            "results": [r.to_dict() for r in self.results],
            "stats": self.stats.to_dict(),
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def get_result(self, object_id: str) -> Optional[ObjectResult]:
        """Get an object result by id."""
        for result in self.results:
            if result.object_id == object_id:
                return result
        return None

    @property
    def success(self) -> bool:
        return self.stats.failed == 0 and not self.stats.cancelled


@dataclass
class SourceGateway:
    """
    Tells the phase executor where to extract from and load to.

    In mock mode neither collaborator is touched. In live mode `adapter`
    is a connected SourceAdapter and `loader` a BaseLoader for the target.
    """
    mode: SourceMode = SourceMode.MOCK
    adapter: Optional[Any] = None
    loader: Optional[Any] = None
    read_options: Optional[Any] = None

    @classmethod
    def mock(cls) -> "SourceGateway":
        return cls(mode=SourceMode.MOCK)

    @classmethod
    def live(cls, adapter: Any, loader: Optional[Any] = None) -> "SourceGateway":
        return cls(mode=SourceMode.LIVE, adapter=adapter, loader=loader)

    @property
    def is_live(self) -> bool:
        return self.mode == SourceMode.LIVE
