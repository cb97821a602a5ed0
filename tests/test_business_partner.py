"""Tests for business partner role merging."""

import asyncio

from erp_migration.models.migration import ObjectStatus, PhaseName
from erp_migration.objects.business_partner import (
    CUSTOMER_ROLE,
    SUPPLIER_ROLE,
    BusinessPartnerMigrationObject,
    merge_roles,
)


def partner(name, city, customer="", supplier="", **extra):
    record = {
        "BusinessPartnerFullName": name,
        "CityName": city,
        "Customer": customer,
        "Supplier": supplier,
    }
    record.update(extra)
    return record


class TestMergeRoles:
    def test_merge_on_name_and_city_case_insensitive(self):
        merged = merge_roles([
            partner("Acme Corp", "Chicago", customer="100001", Phone=""),
            partner("ACME CORP", "chicago", supplier="200001", Phone="555-1234"),
        ])
        assert len(merged) == 1
        bp = merged[0]
        assert bp.roles == frozenset({CUSTOMER_ROLE, SUPPLIER_ROLE})
        assert bp.merged_count == 2
        assert bp.is_merged
        # first record wins, its empty fields are filled
        assert bp.data["BusinessPartnerFullName"] == "Acme Corp"
        assert bp.data["Supplier"] == "200001"
        assert bp.data["Phone"] == "555-1234"

    def test_different_city_not_merged(self):
        merged = merge_roles([
            partner("Acme Corp", "Chicago", customer="1"),
            partner("Acme Corp", "Houston", supplier="2"),
        ])
        assert len(merged) == 2
        assert [sorted(p.roles) for p in merged] == [[CUSTOMER_ROLE], [SUPPLIER_ROLE]]

    def test_sentinel_key_is_not_a_role(self):
        merged = merge_roles([partner("X", "Y", customer="0000000000")])
        assert merged[0].roles == frozenset()

    def test_to_record_sorted_roles(self):
        merged = merge_roles([partner("A", "B", customer="1", supplier="2")])
        assert merged[0].to_record()["_roles"] == [CUSTOMER_ROLE, SUPPLIER_ROLE]


class TestBusinessPartnerObject:
    def test_mock_run_merges_dual_role_partners(self):
        result = asyncio.run(BusinessPartnerMigrationObject().run())
        assert result.status == ObjectStatus.COMPLETED
        assert result.stats.extracted_records == 85
        assert result.stats.transformed_records == 80

        transform = result.phase(PhaseName.TRANSFORM)
        assert transform.details["merged_count"] == 5
        assert transform.details["dual_role_count"] == 5

    def test_transformed_records_carry_roles(self):
        obj = BusinessPartnerMigrationObject()
        _, records = obj.transform(obj.extract_mock())
        dual = [r for r in records if r["_roles"] == [CUSTOMER_ROLE, SUPPLIER_ROLE]]
        assert len(dual) == 5
        assert all(r["Customer"] and r["Supplier"] for r in dual)
        assert records[-1]["MigrationObjectId"] == "BUSINESS_PARTNER"
