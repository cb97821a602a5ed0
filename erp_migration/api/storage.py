"""In-memory state shared by the API routes."""

import threading
from typing import Dict, List, Optional

from ..models.migration import RunResult
from ..objects.registry import MigrationObjectRegistry


class RunStorage:
    """Keeps the most recent run results in memory."""

    def __init__(self, max_runs: int = 50):
        self.max_runs = max_runs
        self._runs: Dict[str, RunResult] = {}
        self._lock = threading.Lock()

    def add(self, result: RunResult) -> None:
        with self._lock:
            self._runs[result.id] = result
            while len(self._runs) > self.max_runs:
                del self._runs[next(iter(self._runs))]

    def get(self, run_id: str) -> Optional[RunResult]:
        return self._runs.get(run_id)

    def list_all(self) -> List[RunResult]:
        return list(self._runs.values())

    def clear(self) -> None:
        with self._lock:
            self._runs.clear()


registry = MigrationObjectRegistry()
run_storage = RunStorage()
