"""Read-only source adapters for Infor ERPs."""

from .base import (
    SourceAdapter,
    InforAdapter,
    ReadOptions,
    TableResult,
    EntityResult,
    apply_paging,
    PAGING_SOURCE,
    PAGING_POST_FETCH,
)
from .resilience import RetryPolicy, CircuitBreaker, CircuitState, ResilientExecutor
from .rest_client import InforRestClient
from .db_adapter import InforDbAdapter, is_write_statement
from .ln_adapter import LNAdapter
from .m3_adapter import M3Adapter
from .csi_adapter import CSIAdapter
from .lawson_adapter import LawsonAdapter
from .factory import ADAPTERS, create_adapter

__all__ = [
    "SourceAdapter",
    "InforAdapter",
    "ReadOptions",
    "TableResult",
    "EntityResult",
    "apply_paging",
    "PAGING_SOURCE",
    "PAGING_POST_FETCH",
    "RetryPolicy",
    "CircuitBreaker",
    "CircuitState",
    "ResilientExecutor",
    "InforRestClient",
    "InforDbAdapter",
    "is_write_statement",
    "LNAdapter",
    "M3Adapter",
    "CSIAdapter",
    "LawsonAdapter",
    "ADAPTERS",
    "create_adapter",
]
