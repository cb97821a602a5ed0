"""Migration orchestrator - runs migration objects phase by phase and wave by wave."""

import asyncio
import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .adapters.base import ReadOptions
from .errors import MigrationObjectError
from .loaders.simulated import SimulatedLoader
from .models.migration import (
    ObjectResult,
    ObjectStats,
    ObjectStatus,
    PhaseName,
    PhaseResult,
    PhaseStatus,
    RunResult,
    RunStats,
    SourceGateway,
)
from .models.record import Record
from .services.dependency_graph import DependencyGraph
from .services.validator import DataQualityChecker, QualityReport

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, ObjectResult], Any]


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _crashed_result(object_id: str, mode: Any, error: Exception) -> ObjectResult:
    """Error result for an object that could not be built or run at all."""
    now = datetime.utcnow()
    result = ObjectResult(
        object_id=object_id,
        name=object_id,
        status=ObjectStatus.ERROR,
        mode=mode,
        started_at=now,
        completed_at=now,
    )
    result.phases[PhaseName.EXTRACT.value] = PhaseResult(status=PhaseStatus.FAILED, error=str(error))
    for phase in list(PhaseName)[1:]:
        result.phases[phase.value] = PhaseResult.skipped("Object failed")
    return result


class PhaseExecutor:
    """
    Runs Extract -> Transform -> Validate -> Load for one migration object.

    Handles:
    - Mock extraction from the object's fixture, live extraction through the adapter
    - Field mapping plus the object's transform hook
    - Quality checks (blocking findings skip the load)
    - Simulated load in mock mode, the gateway's loader in live mode

    Adapter and loader calls are the only blocking I/O; in live mode they
    run in a worker thread so other objects of the wave keep progressing.
    """

    def __init__(
        self,
        gateway: Optional[SourceGateway] = None,
        batch_size: int = 100,
        load_error_rate: float = 0.0,
    ):
        """
        Initialize the executor.

        Args:
            gateway: Mock or live source gateway
            batch_size: Records per load batch
            load_error_rate: Simulated load failure rate in mock mode
        """
        self.gateway = gateway or SourceGateway.mock()
        self.batch_size = batch_size
        self.load_error_rate = load_error_rate

    async def extract(self, obj: Any) -> Tuple[PhaseResult, List[Record]]:
        """Extract source records. Raises on failure."""
        start = time.perf_counter()
        obj.logger.info(f"Extracting {obj.name}...")

        if self.gateway.is_live:
            if self.gateway.adapter is None:
                raise MigrationObjectError(
                    f"{obj.object_id}: live mode requires a source adapter",
                    code="MIGOBJ_NO_ADAPTER",
                )
            options = self.gateway.read_options or ReadOptions()
            records = await asyncio.to_thread(obj.extract_live, self.gateway.adapter, options)
        else:
            records = obj.extract_mock()

        records = list(records)
        return PhaseResult(
            status=PhaseStatus.COMPLETED,
            record_count=len(records),
            duration_ms=_elapsed_ms(start),
            details={"source": "adapter" if self.gateway.is_live else "mock"},
        ), records

    def transform(self, obj: Any, records: Sequence[Record]) -> Tuple[PhaseResult, List[Record]]:
        """Apply the mapping rules, then the object's transform hook. Raises on failure."""
        start = time.perf_counter()
        obj.logger.info(f"Transforming {len(records)} records...")

        engine = obj.mapping_engine()
        transformed = engine.apply_batch(records)
        details: Dict[str, Any] = {"mapping_summary": engine.get_summary()}

        output = obj.transform_hook(transformed)
        if output is not None:
            transformed = output.records
            details.update(output.extra)

        return PhaseResult(
            status=PhaseStatus.COMPLETED,
            record_count=len(transformed),
            duration_ms=_elapsed_ms(start),
            details=details,
        ), transformed

    def validate(self, obj: Any, records: Sequence[Record]) -> Tuple[PhaseResult, QualityReport]:
        """Run the object's quality checks. Findings never raise."""
        start = time.perf_counter()
        obj.logger.info(f"Validating {len(records)} records...")

        report = DataQualityChecker(obj.quality_checks()).check(records)
        summary = report.to_dict(max_findings=20)
        return PhaseResult(
            status=PhaseStatus.FAILED if report.failed else PhaseStatus.COMPLETED,
            record_count=len(records),
            error_count=report.error_count,
            duration_ms=_elapsed_ms(start),
            details={
                "quality_status": report.status,
                "warning_count": report.warning_count,
                "checks": summary["checks"],
                "findings": summary["findings"],
            },
        ), report

    async def load(self, obj: Any, records: List[Record]) -> PhaseResult:
        """Load records into the target. Raises when the load cannot start."""
        start = time.perf_counter()
        obj.logger.info(f"Loading {len(records)} records...")

        if self.gateway.is_live:
            if self.gateway.loader is None:
                raise MigrationObjectError(
                    f"{obj.object_id}: live mode requires a target loader",
                    code="MIGOBJ_NO_LOADER",
                )
            result = await asyncio.to_thread(self.gateway.loader.load, records, obj.target_entity)
        else:
            loader = SimulatedLoader(batch_size=self.batch_size, error_rate=self.load_error_rate)
            result = loader.load(records, obj.target_entity)

        return PhaseResult(
            status=PhaseStatus.COMPLETED,
            record_count=result.total_attempted,
            success_count=result.total_succeeded,
            error_count=result.total_failed,
            duration_ms=_elapsed_ms(start),
            details={
                "entity": result.entity,
                "batches": result.batches,
                "batch_size": result.batch_size,
                "errors": result.errors[:10],
            },
        )

    async def run(self, obj: Any) -> ObjectResult:
        """
        Run all four phases for one object.

        An exception in any phase before load ends the object with status
        `error` and marks the later phases skipped. Blocking validation
        findings skip the load (`validation_failed`). A failed or partial
        load gives `completed_with_errors`.
        """
        start = time.perf_counter()
        result = ObjectResult(
            object_id=obj.object_id,
            name=obj.name,
            mode=self.gateway.mode,
            started_at=datetime.utcnow(),
        )
        obj.logger.info(f"Running {obj.name} migration object...")

        def finish() -> ObjectResult:
            result.stats.duration_ms = _elapsed_ms(start)
            result.completed_at = datetime.utcnow()
            obj.logger.info(f"{obj.name} finished: {result.status.value}")
            return result

        def skip_rest(after: PhaseName, reason: str) -> None:
            order = list(PhaseName)
            for phase in order[order.index(after) + 1:]:
                result.phases[phase.value] = PhaseResult.skipped(reason)

        phase_start = time.perf_counter()
        try:
            extract_phase, records = await self.extract(obj)
        except Exception as e:
            obj.logger.error(f"Extract failed for {obj.name}: {e}")
            result.phases[PhaseName.EXTRACT.value] = PhaseResult(
                status=PhaseStatus.FAILED, duration_ms=_elapsed_ms(phase_start), error=str(e)
            )
            result.status = ObjectStatus.ERROR
            skip_rest(PhaseName.EXTRACT, "Extract failed")
            return finish()

        result.phases[PhaseName.EXTRACT.value] = extract_phase
        result.stats.extracted_records = extract_phase.record_count

        if not records:
            obj.logger.info(f"No records to migrate for {obj.name}")
            skip_rest(PhaseName.EXTRACT, "No records extracted")
            return finish()

        phase_start = time.perf_counter()
        try:
            transform_phase, transformed = self.transform(obj, records)
        except Exception as e:
            obj.logger.error(f"Transform failed for {obj.name}: {e}")
            result.phases[PhaseName.TRANSFORM.value] = PhaseResult(
                status=PhaseStatus.FAILED, duration_ms=_elapsed_ms(phase_start), error=str(e)
            )
            result.status = ObjectStatus.ERROR
            skip_rest(PhaseName.TRANSFORM, "Transform failed")
            return finish()

        result.phases[PhaseName.TRANSFORM.value] = transform_phase
        result.stats.transformed_records = transform_phase.record_count

        phase_start = time.perf_counter()
        try:
            validate_phase, _ = self.validate(obj, transformed)
        except Exception as e:
            obj.logger.error(f"Validate failed for {obj.name}: {e}")
            result.phases[PhaseName.VALIDATE.value] = PhaseResult(
                status=PhaseStatus.FAILED, duration_ms=_elapsed_ms(phase_start), error=str(e)
            )
            result.status = ObjectStatus.ERROR
            skip_rest(PhaseName.VALIDATE, "Validate failed")
            return finish()

        result.phases[PhaseName.VALIDATE.value] = validate_phase
        if validate_phase.status == PhaseStatus.FAILED:
            obj.logger.warning(f"Load skipped for {obj.name}: validation errors")
            result.status = ObjectStatus.VALIDATION_FAILED
            skip_rest(PhaseName.VALIDATE, "Validation errors found")
            return finish()

        phase_start = time.perf_counter()
        try:
            load_phase = await self.load(obj, transformed)
        except Exception as e:
            obj.logger.error(f"Load failed for {obj.name}: {e}")
            load_phase = PhaseResult(
                status=PhaseStatus.FAILED, duration_ms=_elapsed_ms(phase_start), error=str(e)
            )

        result.phases[PhaseName.LOAD.value] = load_phase
        result.stats.loaded_records = load_phase.success_count or 0
        if load_phase.status == PhaseStatus.FAILED or load_phase.error_count > 0:
            result.status = ObjectStatus.COMPLETED_WITH_ERRORS

        return finish()


class MigrationScheduler:
    """
    Runs migration objects in dependency waves.

    Waves execute strictly in order. Objects inside a wave run
    concurrently, bounded by `max_concurrency` (1 when `parallel` is
    False). A failing object never stops its wave or later waves.
    """

    def __init__(
        self,
        registry: Any,
        graph: Optional[DependencyGraph] = None,
        max_concurrency: int = 8,
        parallel: bool = True,
        batch_size: int = 100,
        load_error_rate: float = 0.0,
    ):
        """
        Initialize the scheduler.

        Args:
            registry: MigrationObjectRegistry providing fresh object instances
            graph: Dependency graph (default: built-in dependency table)
            max_concurrency: Max objects running at once within a wave
            parallel: Run objects of a wave concurrently
            batch_size: Records per load batch
            load_error_rate: Simulated load failure rate in mock mode
        """
        self.registry = registry
        self.graph = graph or DependencyGraph()
        self.max_concurrency = max(1, max_concurrency)
        self.parallel = parallel
        self.batch_size = batch_size
        self.load_error_rate = load_error_rate

    async def run_all(
        self,
        gateway: Optional[SourceGateway] = None,
        object_ids: Optional[Sequence[str]] = None,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> RunResult:
        """
        Run the requested objects (default: all registered) in dependency order.

        Args:
            gateway: Mock or live source gateway
            object_ids: Subset of object ids to run
            on_progress: Called as on_progress(object_id, result) once per finished object
            cancel_event: When set, no further object is started

        Returns:
            RunResult with per-object results and run statistics

        Raises:
            MigrationObjectError: MIGOBJ_UNKNOWN for an unregistered id,
                MIGOBJ_CYCLE when the requested ids form a dependency cycle
        """
        gateway = gateway or SourceGateway.mock()
        requested = list(dict.fromkeys(object_ids if object_ids is not None else self.registry.list_object_ids()))
        known = set(self.registry.list_object_ids())
        unknown = [object_id for object_id in requested if object_id not in known]
        if unknown:
            raise MigrationObjectError(
                f"Unknown migration object(s): {', '.join(unknown)}",
                code="MIGOBJ_UNKNOWN",
                details={"object_ids": unknown},
            )

        start = time.perf_counter()
        run = RunResult(mode=gateway.mode)
        waves = self.graph.get_execution_waves(requested)
        run.stats = RunStats(
            total=len(requested),
            waves=waves,
            execution_order=[object_id for wave in waves for object_id in wave],
        )
        logger.info(f"Execution plan: {len(waves)} waves for {len(requested)} objects")

        limit = self.max_concurrency if self.parallel else 1
        semaphore = asyncio.Semaphore(limit)
        executor = PhaseExecutor(gateway, batch_size=self.batch_size, load_error_rate=self.load_error_rate)

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        async def run_one(object_id: str) -> Optional[ObjectResult]:
            async with semaphore:
                if cancelled():
                    return None
                try:
                    obj = self.registry.create_object(
                        object_id, gateway, batch_size=self.batch_size, load_error_rate=self.load_error_rate
                    )
                    logger.info(f"Running {obj.name} ({object_id})...")
                    result = await executor.run(obj)
                except Exception as e:
                    logger.error(f"Migration object {object_id} failed: {e}")
                    result = _crashed_result(object_id, gateway.mode, e)

            if on_progress is not None:
                try:
                    outcome = on_progress(object_id, result)
                    if asyncio.iscoroutine(outcome):
                        await outcome
                except Exception as e:
                    logger.warning(f"Progress callback failed for {object_id}: {e}")
            return result

        for index, wave in enumerate(waves):
            if cancelled():
                run.stats.cancelled = True
                run.stats.not_run.extend(wave)
                continue

            logger.info(f"Wave {index + 1}/{len(waves)}: [{', '.join(wave)}]")
            wave_results = await asyncio.gather(*(run_one(object_id) for object_id in wave))

            for object_id, result in zip(wave, wave_results):
                if result is None:
                    run.stats.cancelled = True
                    run.stats.not_run.append(object_id)
                    continue
                run.results.append(result)
                if result.status.is_failure:
                    run.stats.failed += 1
                else:
                    run.stats.completed += 1

        run.stats.total_duration_ms = _elapsed_ms(start)
        run.completed_at = datetime.utcnow()

        if run.stats.cancelled:
            logger.warning(f"Run cancelled: {len(run.stats.not_run)} objects not run")
        logger.info(
            f"Run finished: {run.stats.completed} completed, {run.stats.failed} failed "
            f"in {run.stats.total_duration_ms:.0f} ms"
        )
        return run
