"""Dependency graph between migration objects and wave layering."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from ..errors import MigrationObjectError

logger = logging.getLogger(__name__)


# Key depends on values (values must be migrated first).
DEPENDENCIES: Dict[str, List[str]] = {
    "GL_BALANCE": ["GL_ACCOUNT_MASTER"],
    "GL_ACCOUNT_MASTER": [],
    "CUSTOMER_OPEN_ITEM": ["BUSINESS_PARTNER"],
    "VENDOR_OPEN_ITEM": ["BUSINESS_PARTNER"],
    "BUSINESS_PARTNER": ["BANK_MASTER"],
    "MATERIAL_MASTER": [],
    "PURCHASE_ORDER": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "SALES_ORDER": ["BUSINESS_PARTNER", "MATERIAL_MASTER", "PRICING_CONDITION"],
    "FIXED_ASSET": ["COST_CENTER"],
    "ASSET_ACQUISITION": ["FIXED_ASSET"],
    "COST_CENTER": ["PROFIT_CENTER"],
    "COST_ELEMENT": [],
    "PROFIT_CENTER": [],
    "PROFIT_SEGMENT": ["PROFIT_CENTER"],
    "BANK_MASTER": [],
    "EMPLOYEE_MASTER": ["BUSINESS_PARTNER"],
    "EQUIPMENT_MASTER": ["FUNCTIONAL_LOCATION"],
    "FUNCTIONAL_LOCATION": [],
    "WORK_CENTER": ["COST_CENTER"],
    "MAINTENANCE_ORDER": ["EQUIPMENT_MASTER", "WORK_CENTER"],
    "PRODUCTION_ORDER": ["MATERIAL_MASTER", "WORK_CENTER"],
    "BATCH_MASTER": ["MATERIAL_MASTER"],
    "SOURCE_LIST": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "SCHEDULING_AGREEMENT": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "PURCHASE_CONTRACT": ["BUSINESS_PARTNER", "MATERIAL_MASTER"],
    "PRICING_CONDITION": ["MATERIAL_MASTER"],
    "FI_CONFIG": [],
    "CO_CONFIG": [],
    "MM_CONFIG": [],
    "SD_CONFIG": [],
    "WBS_ELEMENT": ["PROFIT_CENTER", "COST_CENTER"],
    "INTERNAL_ORDER": ["COST_CENTER"],
    "RFC_DESTINATION": [],
    "IDOC_CONFIG": [],
    "WEB_SERVICE": [],
    "BATCH_JOB": [],
    "WAREHOUSE_STRUCTURE": [],
    "TRANSPORT_ROUTE": [],
    "TRADE_COMPLIANCE": [],
    "BW_EXTRACTOR": [],
    "BOM_ROUTING": ["MATERIAL_MASTER", "WORK_CENTER"],
    "INSPECTION_PLAN": ["MATERIAL_MASTER"],
}


class DependencyGraph:
    """
    Directed graph of object ids; an edge means "must complete before".

    Waves are computed by Kahn-style layering restricted to the requested
    ids. Dependencies on ids outside the request are ignored. Ties keep the
    request order.
    """

    def __init__(self, dependencies: Optional[Dict[str, Sequence[str]]] = None):
        """
        Initialize the graph.

        Args:
            dependencies: object id -> prerequisite ids (defaults to DEPENDENCIES)
        """
        source = DEPENDENCIES if dependencies is None else dependencies
        self.dependencies: Dict[str, List[str]] = {k: list(v) for k, v in source.items()}

    def set_dependencies(self, object_id: str, deps: Iterable[str]) -> None:
        """Replace the prerequisites of an object."""
        self.dependencies[object_id] = list(deps)

    def add_dependency(self, object_id: str, depends_on: str) -> None:
        """Add one edge: `depends_on` must complete before `object_id`."""
        deps = self.dependencies.setdefault(object_id, [])
        if depends_on not in deps:
            deps.append(depends_on)

    def get_dependencies(self, object_id: str) -> List[str]:
        """Get direct prerequisites of an object."""
        return list(self.dependencies.get(object_id, []))

    def get_transitive_dependencies(self, object_id: str) -> List[str]:
        """Get every prerequisite reachable from an object, nearest first."""
        result: List[str] = []
        visited = {object_id}
        frontier = self.get_dependencies(object_id)

        while frontier:
            next_frontier = []
            for dep in frontier:
                if dep in visited:
                    continue
                visited.add(dep)
                result.append(dep)
                next_frontier.extend(self.get_dependencies(dep))
            frontier = next_frontier

        return result

    def get_execution_waves(self, object_ids: Sequence[str]) -> List[List[str]]:
        """
        Group the requested ids into waves.

        Every id in wave i has all of its (requested) prerequisites in
        waves < i.

        Raises:
            MigrationObjectError: MIGOBJ_CYCLE if the requested ids contain a cycle
        """
        requested = list(dict.fromkeys(object_ids))
        available = set(requested)
        remaining_deps = {
            object_id: {d for d in self.get_dependencies(object_id) if d in available and d != object_id}
            for object_id in requested
        }
        done: Set[str] = set()
        waves: List[List[str]] = []

        while len(done) < len(requested):
            wave = [
                object_id for object_id in requested
                if object_id not in done and remaining_deps[object_id] <= done
            ]
            if not wave:
                stuck = [object_id for object_id in requested if object_id not in done]
                raise MigrationObjectError(
                    f"Circular dependency among: {', '.join(stuck)}",
                    code="MIGOBJ_CYCLE",
                    details={"objects": stuck, "cycles": self.detect_circular_dependencies()},
                )
            waves.append(wave)
            done.update(wave)

        return waves

    def get_execution_order(self, object_ids: Sequence[str]) -> List[str]:
        """Flattened waves: a valid sequential execution order."""
        return [object_id for wave in self.get_execution_waves(object_ids) for object_id in wave]

    def detect_circular_dependencies(self) -> List[List[str]]:
        """Find cycles in the full graph. Each cycle is returned closed (first id repeated)."""
        cycles: List[List[str]] = []
        visited: Set[str] = set()
        in_stack: Set[str] = set()

        def visit(object_id: str, path: List[str]) -> None:
            if object_id in in_stack:
                start = path.index(object_id)
                cycles.append(path[start:] + [object_id])
                return
            if object_id in visited:
                return

            visited.add(object_id)
            in_stack.add(object_id)
            for dep in self.get_dependencies(object_id):
                visit(dep, path + [object_id])
            in_stack.discard(object_id)

        for object_id in list(self.dependencies):
            visit(object_id, [])

        return cycles

    def validate(self, registered_ids: Iterable[str]) -> Dict[str, Any]:
        """Check that every dependency names a registered object and that the graph is acyclic."""
        registered = set(registered_ids)
        issues = []

        for object_id, deps in self.dependencies.items():
            for dep in deps:
                if dep not in registered:
                    issues.append({"object_id": object_id, "missing_dependency": dep})

        cycles = self.detect_circular_dependencies()
        return {
            "valid": not issues and not cycles,
            "issues": issues,
            "circular_dependencies": cycles,
        }
