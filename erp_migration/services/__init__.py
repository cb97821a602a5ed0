"""Service layer for the migration runtime."""

from .converters import CONVERTERS, get_converter
from .transformer import FieldMappingEngine
from .validator import DataQualityChecker, QualityReport
from .dependency_graph import DependencyGraph, DEPENDENCIES

__all__ = [
    "CONVERTERS",
    "get_converter",
    "FieldMappingEngine",
    "DataQualityChecker",
    "QualityReport",
    "DependencyGraph",
    "DEPENDENCIES",
]
