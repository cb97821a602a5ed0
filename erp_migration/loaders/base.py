"""Base loader interface for the target ERP."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from ..models.record import Record

logger = logging.getLogger(__name__)


@dataclass
class RecordLoadResult:
    """Outcome of loading one target record."""
    record_index: int
    success: bool
    target_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record_index": self.record_index,
            "success": self.success,
            "target_id": self.target_id,
            "error": self.error,
            "error_code": self.error_code,
        }


@dataclass
class LoadResult:
    """Result of a load operation."""
    entity: str
    total_attempted: int = 0
    total_succeeded: int = 0
    total_failed: int = 0
    batches: int = 0
    batch_size: int = 0
    results: List[RecordLoadResult] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_ids: List[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    @property
    def success_rate(self) -> float:
        if self.total_attempted == 0:
            return 0.0
        return self.total_succeeded / self.total_attempted

    def merge(self, other: "LoadResult") -> None:
        """Fold a batch result into this one."""
        self.total_attempted += other.total_attempted
        self.total_succeeded += other.total_succeeded
        self.total_failed += other.total_failed
        self.results.extend(other.results)
        self.errors.extend(other.errors)
        self.created_ids.extend(other.created_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity": self.entity,
            "total_attempted": self.total_attempted,
            "total_succeeded": self.total_succeeded,
            "total_failed": self.total_failed,
            "batches": self.batches,
            "batch_size": self.batch_size,
            "success_rate": self.success_rate,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "errors": self.errors,
        }


class BaseLoader(ABC):
    """
    Base class for target loaders.

    Loaders push transformed records into the target ERP, batch by batch.
    A failure on one record is recorded and the batch continues.
    """

    def __init__(
        self,
        target_service: str,
        api_key: Optional[str] = None,
        dry_run: bool = False,
        batch_size: int = 100
    ):
        """
        Initialize the loader.

        Args:
            target_service: Name of the target system
            api_key: API key for authentication
            dry_run: If True, simulate without making changes
            batch_size: Number of records per batch
        """
        self.target_service = target_service
        self.api_key = api_key
        self.dry_run = dry_run
        self.batch_size = max(1, batch_size)

    @abstractmethod
    def load_record(self, record: Record, entity: str, index: int) -> RecordLoadResult:
        """
        Load a single record to the target.

        Args:
            record: Target record
            entity: Target entity set
            index: Position of the record in the full load

        Returns:
            RecordLoadResult indicating success/failure
        """
        pass

    def load_batch(self, records: List[Record], entity: str, start_index: int = 0) -> LoadResult:
        """Load one batch of records."""
        result = LoadResult(entity=entity, batch_size=self.batch_size)
        result.started_at = datetime.utcnow()

        for offset, record in enumerate(records):
            index = start_index + offset
            try:
                outcome = self.load_record(record, entity, index)
            except Exception as e:
                outcome = RecordLoadResult(record_index=index, success=False, error=str(e))
                logger.error(f"Failed to load {entity} record {index}: {e}")

            result.results.append(outcome)
            result.total_attempted += 1
            if outcome.success:
                result.total_succeeded += 1
                if outcome.target_id:
                    result.created_ids.append(outcome.target_id)
            else:
                result.total_failed += 1
                result.errors.append({
                    "record_index": index,
                    "error": outcome.error,
                    "error_code": outcome.error_code,
                })

        result.completed_at = datetime.utcnow()
        return result

    def load(self, records: List[Record], entity: str) -> LoadResult:
        """
        Load all records for one entity in batches.

        Args:
            records: Target records
            entity: Target entity set

        Returns:
            LoadResult with totals across batches
        """
        logger.info(f"Loading {len(records)} {entity} records to {self.target_service}...")

        result = LoadResult(entity=entity, batch_size=self.batch_size)
        result.started_at = datetime.utcnow()

        for i in range(0, len(records), self.batch_size):
            batch = records[i:i + self.batch_size]
            result.merge(self.load_batch(batch, entity, start_index=i))
            result.batches += 1

        result.completed_at = datetime.utcnow()
        logger.info(f"Loaded {entity}: {result.total_succeeded}/{result.total_attempted} succeeded")
        return result

    def validate_connection(self) -> bool:
        """Validate the connection to the target."""
        return True
