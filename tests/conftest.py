"""Shared fixtures for the migration runtime tests."""

import pytest

from erp_migration.objects.registry import MigrationObjectRegistry
from erp_migration.services.dependency_graph import DependencyGraph

from .fakes import TEST_OBJECTS


@pytest.fixture
def graph():
    """Dependency graph over the test objects: ORDER after ITEM."""
    return DependencyGraph({"ITEM": [], "ORDER": ["ITEM"], "HOOKED": ["ORDER"]})


@pytest.fixture
def registry(graph):
    """Registry holding only the test objects."""
    return MigrationObjectRegistry(objects=TEST_OBJECTS, graph=graph)


@pytest.fixture(scope="session")
def builtin_registry():
    """Registry with the full built-in catalog."""
    return MigrationObjectRegistry()
