"""Small deterministic migration objects used across the tests."""

from erp_migration.models.mapping import QualityChecks
from erp_migration.models.record import TransformOutput
from erp_migration.objects.base import BaseMigrationObject, provenance, rule


class ItemObject(BaseMigrationObject):
    """Small, deterministic object used by the orchestrator tests."""

    object_id = "ITEM"
    name = "Item"
    source_table = "ITEMS"
    target_entity = "Item"

    def field_mappings(self):
        return [
            rule("ID", "ItemId"),
            rule("QTY", "Quantity", convert="toInteger"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(required=["ItemId"], ranges=[("Quantity", 0, 1000)])

    def extract_mock(self):
        return [{"ID": f"I{i}", "QTY": str(i * 10)} for i in range(1, 6)]


class OrderObject(ItemObject):
    object_id = "ORDER"
    name = "Order"
    target_entity = "Order"


class EmptyObject(ItemObject):
    object_id = "EMPTY"
    name = "Empty"

    def extract_mock(self):
        return []


class BrokenExtractObject(ItemObject):
    object_id = "BROKEN_EXTRACT"
    name = "Broken extract"

    def extract_mock(self):
        raise RuntimeError("source unavailable")


class BrokenHookObject(ItemObject):
    object_id = "BROKEN_HOOK"
    name = "Broken hook"

    def transform_hook(self, records):
        raise ValueError("bad hook")


class InvalidObject(ItemObject):
    object_id = "INVALID"
    name = "Invalid"

    def extract_mock(self):
        return [{"ID": "", "QTY": "5"}, {"ID": "I2", "QTY": "5000"}]


class HookedObject(ItemObject):
    object_id = "HOOKED"
    name = "Hooked"

    def transform_hook(self, records):
        return TransformOutput(records=records[:2], extra={"kept": 2})


class BadPatternObject(ItemObject):
    object_id = "BAD_PATTERN"
    name = "Bad pattern"

    def quality_checks(self):
        return QualityChecks.build(formats=[("ItemId", "[unclosed", "broken regex")])


class BrokenInitObject(ItemObject):
    object_id = "BROKEN_INIT"
    name = "Broken init"

    def __init__(self, *args, **kwargs):
        raise RuntimeError("cannot build object")


TEST_OBJECTS = [
    ItemObject,
    OrderObject,
    EmptyObject,
    BrokenExtractObject,
    BrokenHookObject,
    InvalidObject,
    HookedObject,
]


