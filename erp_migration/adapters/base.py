"""Base interface for read-only source adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from datetime import datetime
import time
import logging

from ..errors import ErpMigrationError, InforError
from ..models.migration import SourceMode
from ..models.record import Record

logger = logging.getLogger(__name__)

PAGING_SOURCE = "source"
PAGING_POST_FETCH = "post-fetch"


@dataclass
class ReadOptions:
    """
    Options for `SourceAdapter.read_table`.

    `max_rows` / `offset` are applied on the source whenever the access
    path supports it, otherwise after the fetch. The returned metadata
    carries `paging` = "source" or "post-fetch" accordingly.
    """
    fields: Optional[List[str]] = None
    filter: Optional[str] = None
    max_rows: Optional[int] = None
    offset: int = 0
    order_by: Optional[str] = None
    data_area: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "fields": self.fields,
            "filter": self.filter,
            "max_rows": self.max_rows,
            "offset": self.offset,
            "order_by": self.order_by,
            "data_area": self.data_area,
        }

    @property
    def is_paged(self) -> bool:
        return bool(self.max_rows) or self.offset > 0


@dataclass
class TableResult:
    """Rows read from one table, IDO, MI program or entity set."""
    rows: List[Record] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"rows": self.rows, "metadata": self.metadata}


@dataclass
class EntityResult:
    """Result of an entity (BOD / Landmark / IDO) query."""
    entities: List[Record] = field(default_factory=list)
    total_count: int = 0
    mock: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"entities": self.entities, "total_count": self.total_count, "mock": self.mock}


def apply_paging(rows: Sequence[Record], options: ReadOptions) -> List[Record]:
    """Apply offset and max_rows after the fetch."""
    start = max(options.offset or 0, 0)
    if options.max_rows:
        return list(rows[start:start + options.max_rows])
    return list(rows[start:])


def project_fields(rows: Sequence[Record], fields: Optional[Sequence[str]]) -> List[Record]:
    """Keep only the requested fields that exist on each row."""
    if not fields:
        return [dict(row) for row in rows]
    return [{f: row[f] for f in fields if f in row} for row in rows]


class SourceAdapter(ABC):
    """
    Read-only connector to a source ERP.

    Every adapter runs in `mock` mode (deterministic fixtures, no network or
    database I/O) or `live` mode. All methods are blocking; the phase
    executor calls them off the event loop.
    """

    product: str = ""
    product_name: str = ""

    def __init__(self, mode: SourceMode = SourceMode.MOCK):
        """
        Initialize the adapter.

        Args:
            mode: SourceMode.MOCK or SourceMode.LIVE
        """
        self.mode = SourceMode(mode)
        self._connected = False

    @property
    def is_mock(self) -> bool:
        return self.mode == SourceMode.MOCK

    @property
    def is_connected(self) -> bool:
        return self._connected

    @abstractmethod
    def connect(self) -> None:
        """Open the connection. Idempotent."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection."""

    @abstractmethod
    def read_table(self, name: str, options: Optional[ReadOptions] = None) -> TableResult:
        """Read rows from a table or table-like collection."""

    @abstractmethod
    def call_api(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Call a product API endpoint."""

    @abstractmethod
    def query_entities(
        self,
        entity_type: str,
        filter: Optional[str] = None,
        options: Optional[ReadOptions] = None
    ) -> EntityResult:
        """Query business entities."""

    @abstractmethod
    def get_system_info(self) -> Dict[str, Any]:
        """Get product, version, modules and timestamp."""

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        """Return {ok, latency_ms, status, product, error?}."""

    def _require_connected(self) -> None:
        if not self._connected:
            raise InforError(
                f"{self.product_name or type(self).__name__} adapter is not connected. Call connect() first.",
                code="INFOR_NOT_CONNECTED",
            )

    def _mock_read(
        self,
        fixtures: Dict[str, List[Record]],
        name: str,
        options: ReadOptions,
        **metadata: Any
    ) -> TableResult:
        """Serve a read from in-memory fixtures; paging is applied post-fetch."""
        logger.debug(f"Mock {self.product} read_table: {name}")
        rows = apply_paging(fixtures.get(name, []), options)
        rows = project_fields(rows, options.fields)
        return TableResult(
            rows=rows,
            metadata={
                "table_name": name,
                "row_count": len(rows),
                "source": "mock",
                "paging": PAGING_POST_FETCH,
                **metadata,
            },
        )

    def _mock_system_info(self, version: str, modules: List[Dict[str, Any]], **extra: Any) -> Dict[str, Any]:
        return {
            "product": self.product_name,
            "version": version,
            "modules": modules,
            "timestamp": datetime.utcnow().isoformat(),
            "mock": True,
            **extra,
        }

    def _mock_health(self, **extra: Any) -> Dict[str, Any]:
        return {"ok": True, "latency_ms": 1, "status": "mock", "product": self.product_name, **extra}


class InforAdapter(SourceAdapter):
    """
    Shared connection handling for the Infor product adapters.

    Live mode needs at least one access path: a REST gateway client
    (`client`) or a read-only database adapter (`db`).
    """

    health_table: str = ""

    def __init__(
        self,
        mode: SourceMode = SourceMode.MOCK,
        client: Optional[Any] = None,
        db: Optional[Any] = None,
    ):
        super().__init__(mode)
        self.client = client
        self.db = db

    def connect(self) -> None:
        if self._connected:
            return
        if self.is_mock:
            self._connected = True
            logger.info(f"{self.product_name} adapter connected (mock mode)")
            return

        if self.client is None and self.db is None:
            raise InforError(
                f"{self.product_name} adapter requires a REST client or a database adapter for live mode",
                code="INFOR_CONFIG",
            )
        if self.db is not None and not self.db.is_connected:
            self.db.connect()
        self._connected = True
        logger.info(f"{self.product_name} adapter connected ({'rest' if self.client else 'database'})")

    def disconnect(self) -> None:
        if self.db is not None:
            self.db.disconnect()
        if self.client is not None:
            self.client.close()
        self._connected = False

    def health_check(self) -> Dict[str, Any]:
        start = time.monotonic()
        if self.is_mock:
            return self._mock_health(**self._identity())
        try:
            self.read_table(self.health_table, ReadOptions(max_rows=1))
        except ErpMigrationError as e:
            return {
                "ok": False,
                "latency_ms": round((time.monotonic() - start) * 1000),
                "status": "error",
                "error": e.message,
                "product": self.product_name,
            }
        return {
            "ok": True,
            "latency_ms": round((time.monotonic() - start) * 1000),
            "status": "connected",
            "product": self.product_name,
            **self._identity(),
        }

    def _identity(self) -> Dict[str, Any]:
        """Product-specific identifiers (company, site, data area) for reports."""
        return {}

    def _read_db(self, table: str, options: ReadOptions, **metadata: Any) -> TableResult:
        """Read through the database adapter; paging is applied in SQL."""
        rows = self.db.select(table, options)
        return TableResult(
            rows=rows,
            metadata={
                "table_name": table,
                "row_count": len(rows),
                "source": "database",
                "paging": PAGING_SOURCE,
                **metadata,
            },
        )

    def _no_access_path(self, operation: str) -> InforError:
        return InforError(
            f"{operation} requires a REST client or database adapter for {self.product_name}",
            code="INFOR_CONFIG",
        )
