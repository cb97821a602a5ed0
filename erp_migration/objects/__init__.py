"""Migration objects and their registry."""

from .base import BaseMigrationObject, constant, mock_amount, provenance, rule
from .catalog import BUILTIN_OBJECTS
from .registry import MigrationObjectRegistry

__all__ = [
    "BaseMigrationObject",
    "constant",
    "mock_amount",
    "provenance",
    "rule",
    "BUILTIN_OBJECTS",
    "MigrationObjectRegistry",
]
