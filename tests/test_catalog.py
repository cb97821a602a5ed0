"""Tests for the built-in migration object catalog."""

import pytest

from erp_migration.models.migration import ObjectStatus, PhaseName
from erp_migration.objects.catalog import BUILTIN_OBJECTS
from erp_migration.objects.integration import (
    BatchJobMigrationObject,
    BwExtractorMigrationObject,
    IdocConfigMigrationObject,
    RfcDestinationMigrationObject,
    WebServiceMigrationObject,
    classify_batch_job,
    classify_destination,
    classify_extractor,
    classify_idoc_flow,
    classify_web_service,
)
from erp_migration.services.dependency_graph import DEPENDENCIES
from erp_migration.services.transformer import FieldMappingEngine

CATALOG_IDS = [
    "GL_BALANCE", "GL_ACCOUNT_MASTER", "CUSTOMER_OPEN_ITEM", "VENDOR_OPEN_ITEM",
    "BUSINESS_PARTNER", "BANK_MASTER", "MATERIAL_MASTER", "PURCHASE_ORDER",
    "SALES_ORDER", "PRICING_CONDITION", "SOURCE_LIST", "SCHEDULING_AGREEMENT",
    "PURCHASE_CONTRACT", "BATCH_MASTER", "FIXED_ASSET", "ASSET_ACQUISITION",
    "COST_CENTER", "PROFIT_CENTER", "COST_ELEMENT", "PROFIT_SEGMENT",
    "INTERNAL_ORDER", "WBS_ELEMENT", "EMPLOYEE_MASTER", "EQUIPMENT_MASTER",
    "FUNCTIONAL_LOCATION", "WORK_CENTER", "MAINTENANCE_ORDER", "PRODUCTION_ORDER",
    "BOM_ROUTING", "INSPECTION_PLAN", "FI_CONFIG", "CO_CONFIG", "MM_CONFIG",
    "SD_CONFIG", "WAREHOUSE_STRUCTURE", "TRANSPORT_ROUTE", "TRADE_COMPLIANCE",
    "BW_EXTRACTOR", "RFC_DESTINATION", "IDOC_CONFIG", "WEB_SERVICE", "BATCH_JOB",
]


def test_catalog_ids_in_order():
    assert [cls.object_id for cls in BUILTIN_OBJECTS] == CATALOG_IDS
    assert set(CATALOG_IDS) == set(DEPENDENCIES)


def test_registry_holds_catalog(builtin_registry):
    assert len(builtin_registry) == 42
    assert builtin_registry.list_object_ids() == CATALOG_IDS


@pytest.mark.parametrize("cls", BUILTIN_OBJECTS, ids=lambda cls: cls.object_id)
class TestDeclarations:
    def test_metadata(self, cls):
        obj = cls()
        assert obj.name
        assert obj.target_entity
        assert obj.source_table

    def test_mapping_rules_compile(self, cls):
        rules = cls().field_mappings()
        assert 25 <= len(rules) <= 100
        valid, errors = FieldMappingEngine.validate_mappings(rules)
        assert all("duplicate target" in e for e in errors), errors
        FieldMappingEngine(rules)

    def test_provenance_rules_last(self, cls):
        rules = cls().field_mappings()
        assert [r.target for r in rules[-2:]] == ["SourceSystem", "MigrationObjectId"]
        assert rules[-1].default == cls.object_id
        assert rules[-2].is_constant

    def test_mock_extract_is_deterministic(self, cls):
        first = cls().extract_mock()
        assert 20 <= len(first) <= 200
        assert first == cls().extract_mock()

    def test_mock_run_completes(self, cls, builtin_registry):
        import asyncio

        result = asyncio.run(builtin_registry.create_object(cls.object_id).run())
        assert result.status == ObjectStatus.COMPLETED, result.to_dict()
        assert result.stats.loaded_records == result.stats.transformed_records > 0
        assert result.phase(PhaseName.VALIDATE).details["quality_status"] in ("passed", "warnings")


class TestIntegrationClassification:
    def test_extractor_replacements(self):
        assert classify_extractor("0FI_GL_14")["replacement"] == "I_GL_14"
        assert classify_extractor("0CO_OM_CCA_9")["replacement"] == "I_CO_OM_CCA_9"
        assert classify_extractor("0FIAA_TRANS")["replacement"] == "I_AA_TRANS"
        assert classify_extractor("2LIS_11_VAHDR")["action"] == "update"
        assert classify_extractor("ZCUSTOM_SALES_RPT")["impact"] == "HIGH"
        assert classify_extractor("0MATERIAL_ATTR")["action"] == "keep"

    def test_destinations(self):
        assert classify_destination("ERP_TO_CRM", "3") == "decommission"
        assert classify_destination("ERP_TO_PI", "3") == "replace-with-cpi"
        assert classify_destination("SAPFTP", "T") == "replace-with-cpi"
        assert classify_destination("LEGACY_MAINFRAME", "3") == "keep-redirect"
        assert classify_destination("ERP_TO_SOLMAN", "3") == "replace-with-cloud-alm"
        assert classify_destination("EDI_PROVIDER", "H") == "route-via-cpi"
        assert classify_destination("UNKNOWN", "X") == "review"

    def test_idoc_flows(self):
        assert classify_idoc_flow("DEBMAS", "ERP_TO_CRM")["strategy"] == "replace"
        assert classify_idoc_flow("MATMAS", "ERP_TO_BW")["strategy"] == "update-segments"
        assert classify_idoc_flow("ORDERS", "ARIBA_NETWORK")["strategy"] == "route-via-cpi"
        assert classify_idoc_flow("ACC_DOCUMENT", "ERP_TO_BW")["strategy"] == "review"
        assert classify_idoc_flow("CIFMAT", "ERP_TO_APO")["strategy"] == "decommission"
        assert classify_idoc_flow("ORDERS", "EDI_PROVIDER") == {
            "strategy": "keep-review",
            "impact": "low",
            "replacement": "Verify segment compatibility",
        }

    def test_web_services(self):
        assert classify_web_service("API_BUSINESS_PARTNER", "OData", "provider") == "keep"
        assert classify_web_service("ZREST_FX_RATES", "REST", "consumer") == "cpi-route"
        assert classify_web_service("ZSOAP_ORDER", "SOAP", "provider") == "soap-to-odata"
        assert classify_web_service("ZREST_ORDER_STATUS", "REST", "provider") == "keep-enhance"
        assert classify_web_service("ZODATA_SALES_SRV", "OData", "provider") == "migrate-to-rap"

    def test_batch_jobs(self):
        assert classify_batch_job("RSPO0041", "daily", 5) == "keep"
        assert classify_batch_job("ZREPORT", "daily", 180) == "review-performance"
        assert classify_batch_job("ZREPORT", "hourly", 10) == "convert-to-app-job"
        assert classify_batch_job("ZREPORT", "daily", 10) == "review-compatibility"

    @pytest.mark.parametrize("cls,field", [
        (BwExtractorMigrationObject, "MigrationAction"),
        (RfcDestinationMigrationObject, "MigrationStrategy"),
        (IdocConfigMigrationObject, "MigrationStrategy"),
        (WebServiceMigrationObject, "MigrationPath"),
        (BatchJobMigrationObject, "MigrationStrategy"),
    ])
    def test_hook_fills_assessment(self, cls, field):
        obj = cls()
        phase, records = obj.transform(obj.extract_mock())
        assert cls.strategy_field == field
        assert all(r[field] for r in records)
        counts = phase.details["strategy_counts"]
        assert sum(counts.values()) == len(records)
        assert phase.details["classified_count"] <= len(records)

    def test_source_assessment_wins(self):
        obj = RfcDestinationMigrationObject()
        mapped = obj.mapping_engine().apply_batch(obj.extract_mock()[:1])
        mapped[0]["MigrationStrategy"] = "keep"
        output = obj.transform_hook(mapped)
        assert output.records[0]["MigrationStrategy"] == "keep"
        assert output.extra["classified_count"] == 0
