"""Tests for the dependency graph and wave planning."""

import pytest

from erp_migration.errors import MigrationObjectError
from erp_migration.objects.catalog import BUILTIN_OBJECTS
from erp_migration.services.dependency_graph import DEPENDENCIES, DependencyGraph


class TestWaves:
    def test_layering(self):
        graph = DependencyGraph({"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]})
        assert graph.get_execution_waves(["D", "C", "B", "A"]) == [["A"], ["C", "B"], ["D"]]

    def test_dependencies_outside_request_ignored(self):
        graph = DependencyGraph({"A": [], "B": ["A"]})
        assert graph.get_execution_waves(["B"]) == [["B"]]

    def test_empty_request(self):
        assert DependencyGraph().get_execution_waves([]) == []

    def test_duplicates_collapsed(self):
        graph = DependencyGraph({"A": []})
        assert graph.get_execution_waves(["A", "A"]) == [["A"]]

    def test_cycle_raises(self):
        graph = DependencyGraph({"A": ["B"], "B": ["A"], "C": []})
        with pytest.raises(MigrationObjectError) as exc_info:
            graph.get_execution_waves(["A", "B", "C"])
        assert exc_info.value.code == "MIGOBJ_CYCLE"
        assert sorted(exc_info.value.details["objects"]) == ["A", "B"]

    def test_execution_order(self):
        graph = DependencyGraph({"A": [], "B": ["A"]})
        assert graph.get_execution_order(["B", "A"]) == ["A", "B"]

    def test_builtin_waves(self):
        graph = DependencyGraph()
        ids = [cls.object_id for cls in BUILTIN_OBJECTS]
        waves = graph.get_execution_waves(ids)
        position = {object_id: i for i, wave in enumerate(waves) for object_id in wave}
        assert sorted(position) == sorted(ids)
        for object_id in ids:
            for dep in graph.get_dependencies(object_id):
                assert position[dep] < position[object_id]
        assert waves[0][:3] == ["GL_ACCOUNT_MASTER", "BANK_MASTER", "MATERIAL_MASTER"]


class TestEdges:
    def test_add_and_set(self):
        graph = DependencyGraph({})
        graph.add_dependency("B", "A")
        graph.add_dependency("B", "A")
        assert graph.get_dependencies("B") == ["A"]
        graph.set_dependencies("B", ["C"])
        assert graph.get_dependencies("B") == ["C"]
        assert graph.get_dependencies("UNKNOWN") == []

    def test_transitive(self):
        graph = DependencyGraph()
        deps = graph.get_transitive_dependencies("SALES_ORDER")
        assert deps[:3] == ["BUSINESS_PARTNER", "MATERIAL_MASTER", "PRICING_CONDITION"]
        assert "BANK_MASTER" in deps
        assert len(deps) == len(set(deps))

    def test_default_table_is_copied(self):
        graph = DependencyGraph()
        graph.add_dependency("COST_ELEMENT", "GL_ACCOUNT_MASTER")
        assert DEPENDENCIES["COST_ELEMENT"] == []


class TestValidation:
    def test_detect_cycles_closed(self):
        graph = DependencyGraph({"A": ["B"], "B": ["C"], "C": ["A"]})
        cycles = graph.detect_circular_dependencies()
        assert len(cycles) == 1
        assert cycles[0][0] == cycles[0][-1]
        assert set(cycles[0]) == {"A", "B", "C"}

    def test_builtin_graph_is_valid(self):
        result = DependencyGraph().validate(cls.object_id for cls in BUILTIN_OBJECTS)
        assert result == {"valid": True, "issues": [], "circular_dependencies": []}

    def test_missing_dependency_reported(self):
        result = DependencyGraph({"A": ["GHOST"]}).validate(["A"])
        assert not result["valid"]
        assert result["issues"] == [{"object_id": "A", "missing_dependency": "GHOST"}]
