"""Simulated target used in mock runs."""

import math
import logging
from typing import List

from .base import BaseLoader, LoadResult, RecordLoadResult
from ..models.record import Record

logger = logging.getLogger(__name__)


class SimulatedLoader(BaseLoader):
    """
    Loader that writes nowhere and echoes counts.

    With `error_rate` > 0 the last floor(n * error_rate) records of each
    load are reported as failed, so partial loads are reproducible.
    """

    def __init__(self, batch_size: int = 100, error_rate: float = 0.0):
        super().__init__("simulated", dry_run=True, batch_size=batch_size)
        self.error_rate = error_rate
        self._fail_from = 0

    def load(self, records: List[Record], entity: str) -> LoadResult:
        self._fail_from = len(records) - math.floor(len(records) * self.error_rate)
        return super().load(records, entity)

    def load_record(self, record: Record, entity: str, index: int) -> RecordLoadResult:
        if index >= self._fail_from:
            return RecordLoadResult(
                record_index=index,
                success=False,
                error="Simulated load failure",
                error_code="SIMULATED",
            )
        return RecordLoadResult(record_index=index, success=True, target_id=f"{entity}-{index + 1:06d}")
