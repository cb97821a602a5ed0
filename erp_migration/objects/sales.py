"""Sales migration objects: open sales orders and pricing condition records."""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, mock_amount, provenance, rule

CUSTOMERS = ["0000100001", "0000100005", "0000100010", "0000100020", "0000100030"]


class SalesOrderMigrationObject(BaseMigrationObject):
    """VBAK/VBAP -> open sales orders, one record per item."""

    object_id = "SALES_ORDER"
    name = "Sales Order (Open)"
    source_table = "VBAK"
    target_entity = "A_SalesOrder"

    def field_mappings(self):
        return [
            # Header
            rule("VBELN", "SalesOrder", ConverterTag.PAD_LEFT_10),
            rule("AUART", "SalesOrderType"),
            rule("VKORG", "SalesOrganization"),
            rule("VTWEG", "DistributionChannel"),
            rule("SPART", "OrganizationDivision"),
            rule("VKBUR", "SalesOffice"),
            rule("VKGRP", "SalesGroup"),
            rule("KUNNR", "SoldToParty", ConverterTag.PAD_LEFT_10),
            rule("KUNWE", "ShipToParty", ConverterTag.PAD_LEFT_10),
            rule("KUNRE", "BillToParty", ConverterTag.PAD_LEFT_10),
            rule("KUNRG", "PayerParty", ConverterTag.PAD_LEFT_10),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("AUDAT", "SalesOrderDate", ConverterTag.TO_DATE),
            rule("VDATU", "RequestedDeliveryDate", ConverterTag.TO_DATE),
            rule("BNDDT", "BindingPeriodValidityEndDate", ConverterTag.TO_DATE),
            rule("WAERK", "TransactionCurrency"),
            rule("NETWR", "TotalNetAmount", ConverterTag.TO_DECIMAL),
            rule("KALSM", "PricingProcedure"),
            rule("INCO1", "IncotermsClassification"),
            rule("INCO2", "IncotermsLocation1"),
            rule("ZTERM", "CustomerPaymentTerms"),
            rule("BSTNK", "PurchaseOrderByCustomer"),
            rule("BSTDK", "CustomerPurchaseOrderDate", ConverterTag.TO_DATE),
            rule("KNUMV", "PricingDocument"),
            # Item
            rule("POSNR", "SalesOrderItem", ConverterTag.STRIP_LEADING_ZEROS),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("ARKTX", "SalesOrderItemText"),
            rule("PSTYV", "SalesOrderItemCategory"),
            rule("WERKS", "ProductionPlant"),
            rule("LGORT", "StorageLocation"),
            rule("KWMENG", "RequestedQuantity", ConverterTag.TO_DECIMAL),
            rule("VRKME", "RequestedQuantityUnit"),
            rule("NETPR", "NetPriceAmount", ConverterTag.TO_DECIMAL),
            rule("KPEIN", "NetPriceQuantity", ConverterTag.TO_INTEGER),
            rule("KMEIN", "NetPriceQuantityUnit"),
            rule("NETWR_I", "NetAmount", ConverterTag.TO_DECIMAL),
            rule("MWSKZ", "TaxCode"),
            rule("KDMAT", "MaterialByCustomer"),
            rule("GRPOS", "AlternativeToItem"),
            rule("UEPOS", "HigherLevelItem"),
            rule("ABGRU", "SalesDocumentRjcnReason"),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("MVGR1", "AdditionalMaterialGroup1"),
            rule("MVGR2", "AdditionalMaterialGroup2"),
            rule("MVGR3", "AdditionalMaterialGroup3"),
            rule("PRODH", "ProductHierarchyNode"),
            rule("ROUTE", "Route"),
            rule("VSTEL", "ShippingPoint"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["SalesOrder", "SalesOrderItem", "SoldToParty", "SalesOrganization"],
            duplicate_keys=["SalesOrder", "SalesOrderItem"],
            ranges=[("RequestedQuantity", 0, None)],
        )

    def extract_mock(self):
        order_types = ["OR", "OR", "RE", "OR", "CR"]
        materials = ["MAT00002", "MAT00004", "MAT00007", "MAT00010", "MAT00015"]
        records = []
        for h in range(1, 16):
            customer = CUSTOMERS[(h - 1) % 5]
            month = h % 12 + 1
            plant = "2000" if h % 2 == 0 else "1000"
            for i in range(1, 2 + h % 4 + 1):
                quantity = 5 * (i + h % 10)
                price = mock_amount(h * 10 + i, 50, 950)
                records.append({
                    "VBELN": str(5000000 + h),
                    "AUART": order_types[(h - 1) % 5],
                    "VKORG": "1000",
                    "VTWEG": "10",
                    "SPART": "00",
                    "VKBUR": "BU02" if h % 3 == 0 else "BU01",
                    "KUNNR": customer,
                    "KUNWE": customer,
                    "KUNRE": customer,
                    "KUNRG": customer,
                    "ERDAT": f"2024{month:02d}15",
                    "ERNAM": "SALESPERSON",
                    "AUDAT": f"2024{month:02d}15",
                    "VDATU": f"2024{min(12, month + 1):02d}01",
                    "WAERK": "USD",
                    "NETWR": mock_amount(h, 1000, 99000),
                    "KALSM": "RVAA01",
                    "INCO1": "FOB",
                    "INCO2": "Customer Warehouse",
                    "ZTERM": "0030",
                    "BSTNK": f"PO-CUST-{h}",
                    "BSTDK": f"2024{month:02d}10",
                    "KNUMV": str(6000000 + h),
                    "POSNR": f"{i * 10:06d}",
                    "MATNR": materials[(h + i - 2) % 5],
                    "ARKTX": f"Sales item {h}-{i}",
                    "PSTYV": "TAN",
                    "WERKS": plant,
                    "LGORT": "0001",
                    "KWMENG": str(quantity),
                    "VRKME": "KG" if i % 3 == 0 else "EA",
                    "NETPR": price,
                    "KPEIN": "1",
                    "KMEIN": "KG" if i % 3 == 0 else "EA",
                    "NETWR_I": f"{quantity * float(price):.2f}",
                    "MWSKZ": "A1",
                    "PRCTR": f"PC{plant[:2]}01",
                    "VSTEL": plant,
                })
        return records


# (type, description, application, usage, calculation type, low, high, percentage, count, valid-from year)
CONDITION_TYPES = [
    ("PR00", "Gross Price", "V", "A", "C", 50, 5000, False, 15, 2023),
    ("K004", "Material Discount", "V", "A", "A", 3, 25, True, 10, 2023),
    ("MWST", "Output Tax", "V", "A", "A", 5, 20, True, 9, 2020),
    ("RB00", "Freight", "V", "A", "C", 10, 500, False, 6, 2023),
    ("RA01", "Rebate", "V", "B", "A", 1, 10, True, 5, 2024),
]
TAX_RATES = [7, 10, 19]
MAXIMUM_VALUES = {"K004": "10000.00", "RA01": "50000.00"}


class PricingConditionMigrationObject(BaseMigrationObject):
    """
    KONH/KONP/A-tables -> condition records.

    Percentage conditions carry '%' as currency and no pricing unit.
    Tax conditions are org-level only (no material or customer key).
    """

    object_id = "PRICING_CONDITION"
    name = "Pricing Conditions"
    source_table = "KONP"
    target_entity = "A_SlsPrcgConditionRecord"

    def field_mappings(self):
        return [
            # Header
            rule("KNUMH", "ConditionRecord", ConverterTag.PAD_LEFT_10),
            rule("KOPOS", "ConditionSequentialNumber"),
            rule("KSCHL", "ConditionType"),
            rule("KAPPL", "ConditionApplication"),
            rule("KVEWE", "ConditionUsage"),
            rule("DATAB", "ConditionValidityStartDate", ConverterTag.TO_DATE),
            rule("DATBI", "ConditionValidityEndDate", ConverterTag.TO_DATE),
            rule("VAKEY", "ConditionVariableKey"),
            rule("KFRST", "ConditionReleaseStatus"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("KOSRT", "ConditionSearchTerm"),
            # Item
            rule("KBETR", "ConditionRateValue", ConverterTag.TO_DECIMAL),
            rule("KONWA", "ConditionRateValueUnit"),
            rule("KPEIN", "ConditionQuantity", ConverterTag.TO_INTEGER),
            rule("KMEIN", "ConditionQuantityUnit"),
            rule("MEINS", "BaseUnit"),
            rule("KUMZA", "ConditionToBaseQtyNmrtr", ConverterTag.TO_INTEGER),
            rule("KUMNE", "ConditionToBaseQtyDnmntr", ConverterTag.TO_INTEGER),
            rule("MXWRT", "MaximumConditionAmount", ConverterTag.TO_DECIMAL),
            rule("STFKZ", "ConditionScaleType"),
            rule("KNRMAT", "PricingScaleBasisMaterial"),
            rule("KZBZG", "ConditionScaleBasisValue"),
            rule("KRECH", "ConditionCalculationType"),
            rule("KSTBM", "ConditionScaleQuantity", ConverterTag.TO_DECIMAL),
            rule("KONMS", "ConditionScaleQuantityUnit"),
            rule("LOEVM_KO", "ConditionIsDeleted", ConverterTag.BOOL_YN),
            # Key fields
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("KUNNR", "Customer", ConverterTag.PAD_LEFT_10),
            rule("VKORG", "SalesOrganization"),
            rule("VTWEG", "DistributionChannel"),
            rule("SPART", "Division"),
            rule("LIFNR", "Supplier", ConverterTag.PAD_LEFT_10),
            rule("EKORG", "PurchasingOrganization"),
            rule("ESOKZ", "PurchasingInfoRecordCategory"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ConditionRecord", "ConditionType", "ConditionValidityStartDate"],
            duplicate_keys=["ConditionRecord", "ConditionSequentialNumber"],
        )

    def extract_mock(self):
        sales_orgs = ["1000", "2000", "3000"]
        channels = ["10", "20"]
        divisions = ["00", "01", "02"]
        customers = [str(100000 + c) for c in range(1, 11)]
        records = []
        number = 0
        for condition_type, description, application, usage, calculation, low, high, percentage, count, year in CONDITION_TYPES:
            for i in range(count):
                number += 1
                if condition_type == "MWST":
                    rate = TAX_RATES[i % 3]
                else:
                    rate = low + (high - low) * i // count
                org_level = condition_type in ("MWST", "RA01")
                material = "" if condition_type in ("MWST", "RB00", "RA01") else f"MAT{i + 1:05d}"
                customer = "" if condition_type == "MWST" else customers[i % 10]
                records.append({
                    "KNUMH": f"{number:010d}",
                    "KOPOS": "01",
                    "KSCHL": condition_type,
                    "KAPPL": application,
                    "KVEWE": usage,
                    "DATAB": f"{year}0101",
                    "DATBI": "99991231",
                    "ERDAT": "20240101",
                    "ERNAM": "MIGRATION",
                    "KOSRT": f"{description} - {material or customer or 'General'}",
                    "KBETR": f"{rate}.000" if percentage else f"{rate}.00",
                    "KONWA": "%" if percentage else "USD",
                    "KPEIN": "" if percentage else "1",
                    "KMEIN": "" if percentage else "EA",
                    "MEINS": "EA",
                    "KUMZA": "1",
                    "KUMNE": "1",
                    "MXWRT": MAXIMUM_VALUES.get(condition_type, ""),
                    "STFKZ": "" if condition_type == "PR00" else "A",
                    "KZBZG": "B" if percentage else "C",
                    "KRECH": calculation,
                    "MATNR": material,
                    "KUNNR": customer,
                    "VKORG": sales_orgs[i % 3],
                    "VTWEG": "10" if condition_type == "RA01" else channels[i % 2],
                    "SPART": "00" if org_level else divisions[i % 3],
                })
        return records
