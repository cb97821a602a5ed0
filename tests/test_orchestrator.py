"""Tests for the phase executor, the scheduler and the object registry."""

import asyncio

import pytest

from erp_migration.adapters.base import TableResult
from erp_migration.errors import MigrationObjectError
from erp_migration.loaders.simulated import SimulatedLoader
from erp_migration.models.migration import (
    ObjectStatus,
    PhaseName,
    PhaseStatus,
    SourceGateway,
    SourceMode,
)
from erp_migration.objects.base import BaseMigrationObject
from erp_migration.objects.registry import MigrationObjectRegistry
from erp_migration.orchestrator import MigrationScheduler, PhaseExecutor
from erp_migration.services.dependency_graph import DependencyGraph

from .fakes import (
    BadPatternObject,
    BrokenExtractObject,
    BrokenHookObject,
    BrokenInitObject,
    EmptyObject,
    HookedObject,
    InvalidObject,
    ItemObject,
    TEST_OBJECTS,
)


class FakeAdapter:
    """Source adapter stand-in that serves a fixed table."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    def read_table(self, name, options=None):
        self.calls.append(name)
        return TableResult(rows=list(self.rows), metadata={"table_name": name})


class RecordingLoader:
    def __init__(self):
        self.loaded = []

    def load(self, records, entity):
        self.loaded.append((entity, len(records)))
        return SimulatedLoader().load(records, entity)


def run(coro):
    return asyncio.run(coro)


class TestPhaseExecutor:
    def test_happy_path(self):
        result = run(PhaseExecutor().run(ItemObject()))
        assert result.status == ObjectStatus.COMPLETED
        assert result.stats.extracted_records == 5
        assert result.stats.transformed_records == 5
        assert result.stats.loaded_records == 5
        assert [p.status for p in result.phases.values()] == [PhaseStatus.COMPLETED] * 4
        assert result.mode == SourceMode.MOCK
        assert result.completed_at is not None

    def test_no_records_skips_later_phases(self):
        result = run(PhaseExecutor().run(EmptyObject()))
        assert result.status == ObjectStatus.COMPLETED
        for name in (PhaseName.TRANSFORM, PhaseName.VALIDATE, PhaseName.LOAD):
            phase = result.phase(name)
            assert phase.status == PhaseStatus.SKIPPED
            assert phase.record_count == 0

    def test_extract_failure(self):
        result = run(PhaseExecutor().run(BrokenExtractObject()))
        assert result.status == ObjectStatus.ERROR
        assert result.phase(PhaseName.EXTRACT).status == PhaseStatus.FAILED
        assert result.error == "source unavailable"
        assert result.phase(PhaseName.LOAD).status == PhaseStatus.SKIPPED

    def test_transform_hook_failure(self):
        result = run(PhaseExecutor().run(BrokenHookObject()))
        assert result.status == ObjectStatus.ERROR
        assert result.phase(PhaseName.EXTRACT).status == PhaseStatus.COMPLETED
        assert result.phase(PhaseName.TRANSFORM).status == PhaseStatus.FAILED
        assert result.phase(PhaseName.VALIDATE).status == PhaseStatus.SKIPPED

    def test_validate_failure(self):
        result = run(PhaseExecutor().run(BadPatternObject()))
        assert result.status == ObjectStatus.ERROR
        assert result.phase(PhaseName.TRANSFORM).status == PhaseStatus.COMPLETED
        assert result.phase(PhaseName.VALIDATE).status == PhaseStatus.FAILED
        assert result.phase(PhaseName.VALIDATE).error
        assert result.phase(PhaseName.LOAD).status == PhaseStatus.SKIPPED

    def test_validation_failure_skips_load(self):
        result = run(PhaseExecutor().run(InvalidObject()))
        assert result.status == ObjectStatus.VALIDATION_FAILED
        assert result.status.is_failure
        validate = result.phase(PhaseName.VALIDATE)
        assert validate.status == PhaseStatus.FAILED
        assert validate.error_count == 2
        assert result.phase(PhaseName.LOAD).status == PhaseStatus.SKIPPED
        assert result.stats.loaded_records == 0

    def test_partial_load(self):
        result = run(PhaseExecutor(load_error_rate=0.4).run(ItemObject()))
        assert result.status == ObjectStatus.COMPLETED_WITH_ERRORS
        assert not result.status.is_failure
        load = result.phase(PhaseName.LOAD)
        assert load.success_count == 3
        assert load.error_count == 2
        assert result.stats.loaded_records == 3

    def test_hook_output_replaces_records(self):
        result = run(PhaseExecutor().run(HookedObject()))
        transform = result.phase(PhaseName.TRANSFORM)
        assert transform.record_count == 2
        assert transform.details["kept"] == 2
        assert transform.details["mapping_summary"]["processed"] == 5

    def test_live_extract_and_load(self):
        adapter = FakeAdapter([{"ID": "L1", "QTY": "3"}])
        loader = RecordingLoader()
        gateway = SourceGateway.live(adapter, loader)
        result = run(PhaseExecutor(gateway).run(ItemObject(gateway)))
        assert result.status == ObjectStatus.COMPLETED
        assert adapter.calls == ["ITEMS"]
        assert loader.loaded == [("Item", 1)]
        assert result.phase(PhaseName.EXTRACT).details["source"] == "adapter"

    def test_live_without_loader_fails_load_only(self):
        gateway = SourceGateway.live(FakeAdapter([{"ID": "L1", "QTY": "3"}]))
        result = run(PhaseExecutor(gateway).run(ItemObject(gateway)))
        assert result.status == ObjectStatus.COMPLETED_WITH_ERRORS
        assert "target loader" in result.phase(PhaseName.LOAD).error

    def test_live_without_adapter_is_error(self):
        gateway = SourceGateway(mode=SourceMode.LIVE)
        result = run(PhaseExecutor(gateway).run(ItemObject(gateway)))
        assert result.status == ObjectStatus.ERROR
        assert "source adapter" in result.error

    def test_object_level_phase_methods(self):
        obj = ItemObject()
        extract, records = run(obj.extract())
        transform, transformed = obj.transform(records)
        validate, report = obj.validate(transformed)
        load = run(obj.load(transformed))
        assert extract.record_count == transform.record_count == 5
        assert transformed[0] == {"ItemId": "I1", "Quantity": 10, "SourceSystem": "ECC", "MigrationObjectId": "ITEM"}
        assert report.status == "passed"
        assert validate.status == PhaseStatus.COMPLETED
        assert load.success_count == 5


class TestScheduler:
    def test_waves_and_counts(self, registry):
        result = run(registry.run_all(object_ids=["HOOKED", "ORDER", "ITEM"]))
        assert result.stats.waves == [["ITEM"], ["ORDER"], ["HOOKED"]]
        assert [r.object_id for r in result.results] == ["ITEM", "ORDER", "HOOKED"]
        assert result.stats.total == 3
        assert result.stats.completed == 3
        assert result.success

    def test_failures_do_not_stop_the_run(self, registry):
        result = run(registry.run_all(object_ids=["BROKEN_EXTRACT", "INVALID", "ITEM", "EMPTY"]))
        assert result.stats.failed == 2
        assert result.stats.completed == 2
        assert not result.success
        assert result.get_result("INVALID").status == ObjectStatus.VALIDATION_FAILED

    def test_crashing_objects_do_not_abort_the_run(self):
        registry = MigrationObjectRegistry(
            objects=[ItemObject, BadPatternObject, BrokenInitObject],
            graph=DependencyGraph({}),
        )
        result = run(registry.run_all(object_ids=["ITEM", "BAD_PATTERN", "BROKEN_INIT"]))
        assert result.stats.completed == 1
        assert result.stats.failed == 2
        assert result.get_result("ITEM").status == ObjectStatus.COMPLETED
        assert result.get_result("BAD_PATTERN").phase(PhaseName.VALIDATE).status == PhaseStatus.FAILED
        broken = result.get_result("BROKEN_INIT")
        assert broken.status == ObjectStatus.ERROR
        assert broken.error == "cannot build object"
        assert broken.phase(PhaseName.LOAD).status == PhaseStatus.SKIPPED

    def test_sequential_matches_parallel(self, registry):
        ids = ["ITEM", "ORDER", "EMPTY", "INVALID"]
        parallel = run(registry.run_all(object_ids=ids, parallel=True))
        sequential = run(registry.run_all(object_ids=ids, parallel=False))
        assert [(r.object_id, r.status) for r in parallel.results] == \
            [(r.object_id, r.status) for r in sequential.results]

    def test_unknown_object(self, registry):
        with pytest.raises(MigrationObjectError) as exc_info:
            run(registry.run_all(object_ids=["ITEM", "NOPE"]))
        assert exc_info.value.code == "MIGOBJ_UNKNOWN"

    def test_cycle(self):
        registry = MigrationObjectRegistry(
            objects=TEST_OBJECTS,
            graph=DependencyGraph({"ITEM": ["ORDER"], "ORDER": ["ITEM"]}),
        )
        with pytest.raises(MigrationObjectError) as exc_info:
            run(registry.run_all(object_ids=["ITEM", "ORDER"]))
        assert exc_info.value.code == "MIGOBJ_CYCLE"

    def test_empty_request(self, registry):
        result = run(registry.run_all(object_ids=[]))
        assert result.stats.total == 0
        assert result.results == []
        assert result.success

    def test_cancellation(self, registry):
        async def scenario():
            cancel = asyncio.Event()
            return await registry.run_all(
                object_ids=["ITEM", "ORDER", "HOOKED"],
                on_progress=lambda object_id, result: cancel.set(),
                cancel_event=cancel,
            )

        result = run(scenario())
        assert [r.object_id for r in result.results] == ["ITEM"]
        assert result.stats.cancelled
        assert result.stats.not_run == ["ORDER", "HOOKED"]
        assert not result.success

    def test_progress_callback_errors_are_ignored(self, registry):
        seen = []

        def on_progress(object_id, result):
            seen.append(object_id)
            raise RuntimeError("listener broke")

        result = run(registry.run_all(object_ids=["ITEM", "ORDER"], on_progress=on_progress))
        assert seen == ["ITEM", "ORDER"]
        assert result.stats.completed == 2

    def test_async_progress_callback(self, registry):
        seen = []

        async def on_progress(object_id, result):
            seen.append((object_id, result.status))

        run(registry.run_all(object_ids=["ITEM"], on_progress=on_progress))
        assert seen == [("ITEM", ObjectStatus.COMPLETED)]

    def test_concurrency_floor(self, registry):
        assert MigrationScheduler(registry, max_concurrency=0).max_concurrency == 1

    def test_run_all_sync(self, registry):
        result = registry.run_all_sync(object_ids=["ITEM"], load_error_rate=1.0)
        assert result.results[0].status == ObjectStatus.COMPLETED_WITH_ERRORS
        assert result.to_dict()["stats"]["execution_order"] == ["ITEM"]


class TestRegistry:
    def test_cached_and_fresh_instances(self, registry):
        assert registry.get_object("ITEM") is registry.get_object("ITEM")
        assert registry.create_object("ITEM") is not registry.create_object("ITEM")

    def test_cache_is_per_mode(self, registry):
        live = SourceGateway.live(FakeAdapter([]))
        assert registry.get_object("ITEM", live) is not registry.get_object("ITEM")

    def test_unknown(self, registry):
        with pytest.raises(MigrationObjectError) as exc_info:
            registry.get_object("NOPE")
        assert exc_info.value.code == "MIGOBJ_UNKNOWN"
        assert "NOPE" not in registry

    def test_register_requires_object_id(self, registry):
        with pytest.raises(MigrationObjectError) as exc_info:
            registry.register_class(BaseMigrationObject)
        assert exc_info.value.code == "MIGOBJ_ABSTRACT"

    def test_register_replaces(self, registry):
        registry.get_object("ITEM")
        registry.register_class(HookedObject, object_id="ITEM")
        assert isinstance(registry.get_object("ITEM"), HookedObject)
        assert len(registry) == len(TEST_OBJECTS)

    def test_list_objects(self, registry):
        listing = registry.list_objects()
        assert [o["object_id"] for o in listing] == [cls.object_id for cls in TEST_OBJECTS]
        assert listing[0]["mapping_count"] == 4
        assert listing[0]["quality_checks"]["required"] == ["ItemId"]

    def test_waves_reject_unknown(self, registry):
        with pytest.raises(MigrationObjectError):
            registry.get_execution_waves(["ITEM", "NOPE"])

    def test_base_class_is_abstract(self):
        with pytest.raises(MigrationObjectError) as exc_info:
            BaseMigrationObject()
        assert exc_info.value.code == "MIGOBJ_ABSTRACT"
