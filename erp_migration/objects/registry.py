"""Registry of migration objects with dependency-ordered execution."""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from ..errors import MigrationObjectError
from ..models.migration import RunResult, SourceGateway
from ..orchestrator import MigrationScheduler, ProgressCallback
from ..services.dependency_graph import DependencyGraph
from .base import BaseMigrationObject
from .catalog import BUILTIN_OBJECTS

logger = logging.getLogger(__name__)


class MigrationObjectRegistry:
    """
    Central registry for migration object classes.

    Object classes are passed in explicitly (default: the built-in
    catalog). `get_object` hands out cached instances for inspection;
    runs always use fresh instances from `create_object`.
    """

    def __init__(
        self,
        objects: Optional[Iterable[Type[BaseMigrationObject]]] = None,
        graph: Optional[DependencyGraph] = None,
    ):
        """
        Initialize the registry.

        Args:
            objects: Migration object classes to register (default: BUILTIN_OBJECTS)
            graph: Dependency graph used for wave planning
        """
        if objects is None:
            objects = BUILTIN_OBJECTS

        self._classes: Dict[str, Type[BaseMigrationObject]] = {}
        self._cache: Dict[Tuple[str, str], BaseMigrationObject] = {}
        self.graph = graph or DependencyGraph()
        for cls in objects:
            self.register_class(cls)

    def register_class(self, cls: Type[BaseMigrationObject], object_id: Optional[str] = None) -> None:
        """Register a migration object class under its object_id (or an explicit id)."""
        object_id = object_id or cls.object_id
        if not object_id:
            raise MigrationObjectError(
                f"{cls.__name__} has no object_id",
                code="MIGOBJ_ABSTRACT",
            )
        if object_id in self._classes:
            logger.debug(f"Replacing registered migration object {object_id}")
        self._classes[object_id] = cls
        self._cache = {key: obj for key, obj in self._cache.items() if key[0] != object_id}

    def _get_class(self, object_id: str) -> Type[BaseMigrationObject]:
        try:
            return self._classes[object_id]
        except KeyError:
            raise MigrationObjectError(
                f"Unknown migration object: {object_id}",
                code="MIGOBJ_UNKNOWN",
                details={"object_id": object_id},
            )

    def get_object(
        self,
        object_id: str,
        gateway: Optional[SourceGateway] = None,
        **options: Any
    ) -> BaseMigrationObject:
        """Get or create a cached instance (one per object id and mode)."""
        cls = self._get_class(object_id)
        gateway = gateway or SourceGateway.mock()
        key = (object_id, gateway.mode.value)
        if key not in self._cache:
            self._cache[key] = cls(gateway, **options)
        return self._cache[key]

    def create_object(
        self,
        object_id: str,
        gateway: Optional[SourceGateway] = None,
        **options: Any
    ) -> BaseMigrationObject:
        """Create a fresh, uncached instance."""
        return self._get_class(object_id)(gateway or SourceGateway.mock(), **options)

    def list_object_ids(self) -> List[str]:
        return list(self._classes)

    def list_objects(self, gateway: Optional[SourceGateway] = None) -> List[Dict[str, Any]]:
        """List registered objects with their metadata."""
        return [self.get_object(object_id, gateway).describe() for object_id in self._classes]

    def __contains__(self, object_id: str) -> bool:
        return object_id in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def get_execution_waves(self, object_ids: Optional[Sequence[str]] = None) -> List[List[str]]:
        ids = list(object_ids) if object_ids is not None else self.list_object_ids()
        for object_id in ids:
            self._get_class(object_id)
        return self.graph.get_execution_waves(ids)

    async def run_all(
        self,
        gateway: Optional[SourceGateway] = None,
        object_ids: Optional[Sequence[str]] = None,
        parallel: bool = True,
        max_concurrency: int = 8,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
        batch_size: int = 100,
        load_error_rate: float = 0.0,
    ) -> RunResult:
        """
        Run migration objects in dependency waves.

        Args:
            gateway: Mock or live source gateway
            object_ids: Subset to run (default: all registered)
            parallel: Run independent objects of a wave concurrently
            max_concurrency: Max objects running at once within a wave
            on_progress: Callback(object_id, result) per finished object
            cancel_event: Set to stop starting new objects
            batch_size: Records per load batch
            load_error_rate: Simulated load failure rate in mock mode

        Returns:
            RunResult
        """
        scheduler = MigrationScheduler(
            self,
            graph=self.graph,
            max_concurrency=max_concurrency,
            parallel=parallel,
            batch_size=batch_size,
            load_error_rate=load_error_rate,
        )
        return await scheduler.run_all(
            gateway=gateway,
            object_ids=object_ids,
            on_progress=on_progress,
            cancel_event=cancel_event,
        )

    def run_all_sync(self, gateway: Optional[SourceGateway] = None, **options: Any) -> RunResult:
        """Blocking wrapper around `run_all` for scripts and the CLI."""
        return asyncio.run(self.run_all(gateway, **options))

    def clear_cache(self) -> None:
        """Drop all cached instances."""
        self._cache.clear()

