"""Loaders for the target ERP."""

from .base import BaseLoader, LoadResult, RecordLoadResult
from .simulated import SimulatedLoader
from .api_loader import TargetApiLoader

__all__ = [
    "BaseLoader",
    "LoadResult",
    "RecordLoadResult",
    "SimulatedLoader",
    "TargetApiLoader",
]
