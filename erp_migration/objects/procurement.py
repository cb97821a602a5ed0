"""
Procurement migration objects: open purchase orders, source lists and
the two outline agreement kinds (scheduling agreements and contracts).
"""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, mock_amount, provenance, rule

SUPPLIERS = ["0000200001", "0000200002", "0000200003", "0000200005", "0000200010"]


def _outline_header_rules(number_target):
    """EKKO header rules shared by scheduling agreements and contracts."""
    return [
        rule("EBELN", number_target, ConverterTag.PAD_LEFT_10),
        rule("BUKRS", "CompanyCode"),
        rule("BSART", "PurchasingDocumentType"),
        rule("LIFNR", "Supplier", ConverterTag.PAD_LEFT_10),
        rule("EKORG", "PurchasingOrganization"),
        rule("EKGRP", "PurchasingGroup"),
        rule("WAERS", "DocumentCurrency"),
        rule("KDATB", "ValidityStartDate", ConverterTag.TO_DATE),
        rule("KDATE", "ValidityEndDate", ConverterTag.TO_DATE),
        rule("AEDAT", "CreationDate", ConverterTag.TO_DATE),
        rule("ERNAM", "CreatedByUser"),
        rule("LOEKZ", "IsDeleted", ConverterTag.BOOL_YN),
        rule("ZTERM", "PaymentTerms"),
        rule("INCO1", "IncotermsClassification"),
        rule("INCO2", "IncotermsLocation1"),
    ]


def _outline_item_flags():
    return [
        rule("PSTYP", "PurchasingDocumentItemCategory"),
        rule("KNTTP", "AccountAssignmentCategory"),
        rule("REPOS", "InvoiceIsExpected", ConverterTag.BOOL_YN),
        rule("WEBRE", "InvoiceIsGoodsReceiptBased", ConverterTag.BOOL_YN),
        rule("WEPOS", "GoodsReceiptIsExpected", ConverterTag.BOOL_YN),
        rule("MWSKZ", "TaxCode"),
        rule("INFNR", "PurchasingInfoRecord"),
    ]


class PurchaseOrderMigrationObject(BaseMigrationObject):
    """
    EKKO/EKPO -> open purchase orders.

    Only open documents are in scope; one record per PO item with the
    header fields repeated.
    """

    object_id = "PURCHASE_ORDER"
    name = "Purchase Order (Open)"
    source_table = "EKKO"
    target_entity = "A_PurchaseOrder"

    def field_mappings(self):
        return [
            # Header
            rule("EBELN", "PurchaseOrder", ConverterTag.PAD_LEFT_10),
            rule("BUKRS", "CompanyCode"),
            rule("BSTYP", "PurchasingDocumentCategory"),
            rule("BSART", "PurchaseOrderType"),
            rule("LOEKZ", "IsDeleted", ConverterTag.BOOL_YN),
            rule("AEDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("LIFNR", "Supplier", ConverterTag.PAD_LEFT_10),
            rule("ZTERM", "PaymentTerms"),
            rule("EKORG", "PurchasingOrganization"),
            rule("EKGRP", "PurchasingGroup"),
            rule("WAERS", "DocumentCurrency"),
            rule("BEDAT", "PurchaseOrderDate", ConverterTag.TO_DATE),
            rule("KDATB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("KDATE", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("INCO1", "IncotermsClassification"),
            rule("INCO2", "IncotermsLocation1"),
            rule("WKURS", "ExchangeRate", ConverterTag.TO_DECIMAL),
            rule("KUFIX", "ExchangeRateIsFixed", ConverterTag.BOOL_YN),
            rule("VERKF", "SupplierRespSalesPersonName"),
            rule("TELF1", "SupplierPhoneNumber"),
            rule("LLIEF", "SupplyingSupplier", ConverterTag.PAD_LEFT_10),
            rule("RESWK", "SupplyingPlant"),
            rule("KONNR", "PurchaseContract", ConverterTag.PAD_LEFT_10),
            rule("MEMORY", "IsMemoryCompleted", ConverterTag.BOOL_YN),
            # Item
            rule("EBELP", "PurchaseOrderItem"),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("TXZ01", "PurchaseOrderItemText"),
            rule("WERKS", "Plant"),
            rule("LGORT", "StorageLocation"),
            rule("MATKL", "MaterialGroup"),
            rule("MENGE", "OrderQuantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "PurchaseOrderQuantityUnit"),
            rule("NETPR", "NetPriceAmount", ConverterTag.TO_DECIMAL),
            rule("PEINH", "NetPriceQuantity", ConverterTag.TO_INTEGER),
            rule("BPRME", "OrderPriceUnit"),
            rule("NETWR", "NetAmount", ConverterTag.TO_DECIMAL),
            rule("MWSKZ", "TaxCode"),
            rule("BWTAR", "InventoryValuationType"),
            rule("PSTYP", "PurchaseOrderItemCategory"),
            rule("KNTTP", "AccountAssignmentCategory"),
            rule("REPOS", "InvoiceIsExpected", ConverterTag.BOOL_YN),
            rule("WEBRE", "InvoiceIsGoodsReceiptBased", ConverterTag.BOOL_YN),
            rule("WEPOS", "GoodsReceiptIsExpected", ConverterTag.BOOL_YN),
            rule("BANFN", "PurchaseRequisition", ConverterTag.PAD_LEFT_10),
            rule("BNFPO", "PurchaseRequisitionItem"),
            rule("SAKTO", "GLAccount", ConverterTag.PAD_LEFT_10),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("WEMPF", "GoodsRecipientName"),
            rule("ABLAD", "UnloadingPointName"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["PurchaseOrder", "PurchaseOrderItem", "Supplier", "PurchasingOrganization"],
            duplicate_keys=["PurchaseOrder", "PurchaseOrderItem"],
            ranges=[("OrderQuantity", 0, None), ("NetPriceAmount", 0, None)],
        )

    def extract_mock(self):
        order_types = ["NB", "NB", "FO", "NB", "NB"]
        materials = ["MAT00001", "MAT00003", "MAT00005", "MAT00008", "MAT00012"]
        records = []
        for h in range(1, 21):
            month = f"{h % 12 + 1:02d}"
            for i in range(1, 2 + h % 3 + 1):
                quantity = 10 * (i + h % 5)
                price = mock_amount(h * 10 + i, 10, 990)
                records.append({
                    "EBELN": str(4500000000 + h),
                    "BUKRS": "2000" if h % 3 == 0 else "1000",
                    "BSTYP": "F",
                    "BSART": order_types[(h - 1) % 5],
                    "AEDAT": f"2024{month}{h % 28 + 1:02d}",
                    "ERNAM": "PURCHASER",
                    "LIFNR": SUPPLIERS[(h - 1) % 5],
                    "ZTERM": "0030" if h % 2 == 0 else "0045",
                    "EKORG": "1000",
                    "EKGRP": f"00{h % 3 + 1}",
                    "WAERS": "USD",
                    "BEDAT": f"2024{month}01",
                    "INCO1": "CIF" if h % 3 == 0 else "FOB",
                    "INCO2": "New York",
                    "WKURS": "1.00000",
                    "VERKF": f"Vendor Contact {(h - 1) % 5 + 1}",
                    "TELF1": f"555-{h:04d}",
                    "EBELP": f"{i * 10:05d}",
                    "MATNR": materials[(h + i - 2) % 5],
                    "TXZ01": f"PO Item {h}-{i} material",
                    "WERKS": "2000" if h % 2 == 0 else "1000",
                    "LGORT": "0001",
                    "MATKL": f"MG{(h + i) % 10 + 1:02d}",
                    "MENGE": str(quantity),
                    "MEINS": "KG" if i % 2 == 0 else "EA",
                    "NETPR": price,
                    "PEINH": "1",
                    "BPRME": "KG" if i % 2 == 0 else "EA",
                    "NETWR": f"{quantity * float(price):.2f}",
                    "MWSKZ": "V1",
                    "PSTYP": "0",
                    "REPOS": "X",
                    "WEBRE": "X",
                    "WEPOS": "X",
                })
        return records


class SourceListMigrationObject(BaseMigrationObject):
    """EORD -> sources of supply per material and plant."""

    object_id = "SOURCE_LIST"
    name = "Source List"
    source_table = "EORD"
    target_entity = "A_PurchasingSource"

    def field_mappings(self):
        return [
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("WERKS", "Plant"),
            rule("ZEORD", "SourceListRecord"),
            rule("VDATU", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("BDATU", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("LIFNR", "Supplier", ConverterTag.PAD_LEFT_10),
            rule("EKORG", "PurchasingOrganization"),
            rule("FLIFN", "SupplierIsFixed", ConverterTag.BOOL_YN),
            rule("NOTKZ", "SourceOfSupplyIsBlocked", ConverterTag.BOOL_YN),
            rule("AUTET", "MRPSourcingControl"),
            rule("EBELN", "PurchaseOutlineAgreement", ConverterTag.PAD_LEFT_10),
            rule("EBELP", "PurchaseOutlineAgreementItem"),
            rule("EKGRP", "PurchasingGroup"),
            rule("RESWK", "SupplyingPlant"),
            rule("MEINS", "OrderQuantityUnit"),
            rule("FRESW", "SupplyingPlantIsFixed", ConverterTag.BOOL_YN),
            rule("LOGSY", "LogicalSystem"),
            rule("SOBKZ", "SpecialStockIndicator"),
            rule("BESKZ", "ProcurementType"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Material", "Plant", "Supplier", "ValidityStartDate"],
            duplicate_keys=["Material", "Plant", "Supplier", "ValidityStartDate"],
        )

    def extract_mock(self):
        materials = [
            "MAT00001", "MAT00003", "MAT00005", "MAT00008", "MAT00010",
            "MAT00012", "MAT00015", "MAT00018", "MAT00020", "MAT00025",
        ]
        plants = ["1000", "2000"]
        usages = ["1", "2", ""]
        units = ["EA", "KG", "L", "PC", "M"]
        records = []
        number = 0
        for m, material in enumerate(materials):
            for s in range(3):
                number += 1
                plant = plants[s % 2]
                month = f"{number % 12 + 1:02d}"
                has_agreement = number % 3 == 0
                records.append({
                    "MATNR": material,
                    "WERKS": plant,
                    "ZEORD": f"{number:05d}",
                    "VDATU": f"2024{month}01",
                    "BDATU": f"2025{month}01",
                    "LIFNR": SUPPLIERS[(m + s) % 5],
                    "EKORG": plant,
                    "FLIFN": "X" if s == 0 else "",
                    "AUTET": usages[number % 3],
                    "EBELN": str(4600000000 + number) if has_agreement else "",
                    "EBELP": f"{(s + 1) * 10:05d}" if has_agreement else "",
                    "EKGRP": f"00{m % 3 + 1}",
                    "MEINS": units[m % 5],
                    "BESKZ": "F",
                    "ERDAT": f"2023{m % 12 + 1:02d}15",
                    "ERNAM": "PURCHASER",
                    "AEDAT": f"2024{month}10",
                    "AENAM": "PURCHASER",
                })
        return records


class SchedulingAgreementMigrationObject(BaseMigrationObject):
    """EKKO/EKPO (category L) -> scheduling agreements."""

    object_id = "SCHEDULING_AGREEMENT"
    name = "Scheduling Agreement"
    source_table = "EKKO"
    target_entity = "A_SchedgAgrmtHdr"

    def field_mappings(self):
        return [
            *_outline_header_rules("SchedulingAgreement"),
            rule("EBELP", "SchedulingAgreementItem"),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("WERKS", "Plant"),
            rule("LGORT", "StorageLocation"),
            rule("KTMNG", "TargetQuantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "OrderQuantityUnit"),
            rule("NETPR", "NetPriceAmount", ConverterTag.TO_DECIMAL),
            rule("PEINH", "NetPriceQuantity", ConverterTag.TO_INTEGER),
            rule("BPRME", "OrderPriceUnit"),
            rule("MENGE", "CumulativeScheduledQuantity", ConverterTag.TO_DECIMAL),
            rule("WEMNG", "GoodsReceiptQuantity", ConverterTag.TO_DECIMAL),
            rule("ABLAD", "UnloadingPointName"),
            rule("EVERS", "ShippingInstruction"),
            rule("ELIKZ", "IsCompletelyDelivered", ConverterTag.BOOL_YN),
            rule("TXZ01", "SchedulingAgreementItemText"),
            rule("MATKL", "MaterialGroup"),
            *_outline_item_flags(),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["SchedulingAgreement", "SchedulingAgreementItem", "Supplier", "Material"],
            duplicate_keys=["SchedulingAgreement", "SchedulingAgreementItem"],
            ranges=[("TargetQuantity", 0, None)],
        )

    def extract_mock(self):
        suppliers = ["0000200001", "0000200003", "0000200005", "0000200008", "0000200010"]
        materials = ["MAT00002", "MAT00006", "MAT00009", "MAT00014"]
        document_types = ["LP", "LPA", "LP", "LP"]
        currencies = ["USD", "EUR", "USD", "USD", "GBP"]
        units = ["EA", "KG", "EA", "L"]
        records = []
        number = 0
        for s, supplier in enumerate(suppliers):
            for m, material in enumerate(materials):
                number += 1
                company = "1000" if number % 2 == 0 else "2000"
                month = f"{number % 12 + 1:02d}"
                records.append({
                    "EBELN": str(5500000000 + number),
                    "BUKRS": company,
                    "BSART": document_types[m],
                    "LIFNR": supplier,
                    "EKORG": company,
                    "EKGRP": f"00{s % 3 + 1}",
                    "WAERS": currencies[s],
                    "KDATB": f"2024{month}01",
                    "KDATE": f"2025{month}01",
                    "AEDAT": f"2023{s % 12 + 1:02d}01",
                    "ERNAM": "SCHEDULER",
                    "ZTERM": "0030" if number % 2 == 0 else "0045",
                    "INCO1": "CIF" if number % 3 == 0 else "FOB",
                    "EBELP": "00010",
                    "MATNR": material,
                    "WERKS": company,
                    "LGORT": "0001",
                    "KTMNG": f"{100 + number * 50:.3f}",
                    "MEINS": units[m],
                    "NETPR": mock_amount(number, 5, 495),
                    "PEINH": "1",
                    "BPRME": units[m],
                    "MENGE": f"{number * 20:.3f}",
                    "WEMNG": f"{number * 15:.3f}",
                    "ABLAD": f"Dock {number % 4 + 1}",
                    "TXZ01": f"SA item {supplier[-3:]}-{material}",
                    "MATKL": f"MG{m % 10 + 1:02d}",
                    "PSTYP": "0",
                    "REPOS": "X",
                    "WEBRE": "X",
                    "WEPOS": "X",
                    "MWSKZ": "V1",
                    "INFNR": f"5300{number:06d}",
                })
        return records


class PurchaseContractMigrationObject(BaseMigrationObject):
    """EKKO/EKPO (category K) -> quantity and value contracts."""

    object_id = "PURCHASE_CONTRACT"
    name = "Purchase Contract"
    source_table = "EKKO"
    target_entity = "A_PurchaseContract"

    def field_mappings(self):
        return [
            *_outline_header_rules("PurchaseContract"),
            rule("EBELP", "PurchaseContractItem"),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("MATKL", "MaterialGroup"),
            rule("WERKS", "Plant"),
            rule("KTMNG", "TargetQuantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "OrderQuantityUnit"),
            rule("NETPR", "NetPriceAmount", ConverterTag.TO_DECIMAL),
            rule("PEINH", "NetPriceQuantity", ConverterTag.TO_INTEGER),
            rule("KTWRT", "PurchaseContractTargetAmount", ConverterTag.TO_DECIMAL),
            rule("ZWERT", "PurchaseContractHeaderTarget", ConverterTag.TO_DECIMAL),
            rule("ABMNG", "ReleasedQuantity", ConverterTag.TO_DECIMAL),
            rule("ABDAT", "ReleaseDate", ConverterTag.TO_DATE),
            rule("ELIKZ", "IsCompletelyDelivered", ConverterTag.BOOL_YN),
            rule("KONNR", "PrincipalPurchaseContract", ConverterTag.PAD_LEFT_10),
            rule("KTPNR", "PrincipalPurchaseContractItem"),
            rule("TXZ01", "PurchaseContractItemText"),
            *_outline_item_flags(),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["PurchaseContract", "PurchaseContractItem", "Supplier"],
            duplicate_keys=["PurchaseContract", "PurchaseContractItem"],
            ranges=[("TargetQuantity", 0, None), ("NetPriceAmount", 0, None)],
        )

    def extract_mock(self):
        suppliers = ["0000200002", "0000200004", "0000200006", "0000200008", "0000200012"]
        materials = ["MAT00003", "MAT00007", "MAT00011", "MAT00016", "MAT00020"]
        document_types = ["MK", "WK", "MK", "MK", "WK"]
        currencies = ["USD", "EUR", "USD", "GBP", "USD"]
        units = ["EA", "KG", "L", "PC", "EA"]
        records = []
        for c in range(5):
            contract = str(4700000000 + c + 1)
            company = "1000" if c % 2 == 0 else "2000"
            month = f"{c * 2 % 12 + 1:02d}"
            for i in range(5):
                item = f"{(i + 1) * 10:05d}"
                quantity = 500 + c * 100 + i * 50
                price = mock_amount(c * 5 + i, 10, 490)
                target_value = quantity * float(price)
                records.append({
                    "EBELN": contract,
                    "BUKRS": company,
                    "BSART": document_types[c],
                    "LIFNR": suppliers[c],
                    "EKORG": company,
                    "EKGRP": f"00{c % 3 + 1}",
                    "WAERS": currencies[c],
                    "KDATB": f"2024{month}01",
                    "KDATE": f"2025{month}01",
                    "AEDAT": f"2023{c % 12 + 1:02d}01",
                    "ERNAM": "BUYER",
                    "ZTERM": "0030" if c % 2 == 0 else "0060",
                    "INCO1": "CIF" if c % 3 == 0 else "FOB",
                    "EBELP": item,
                    "MATNR": materials[i],
                    "MATKL": f"MG{(c + i) % 10 + 1:02d}",
                    "WERKS": company,
                    "KTMNG": f"{quantity:.3f}",
                    "MEINS": units[i],
                    "NETPR": price,
                    "PEINH": "1",
                    "KTWRT": f"{target_value:.2f}",
                    "ZWERT": f"{target_value * 1.2:.2f}",
                    "ABMNG": f"{quantity * (0.1 + c * 0.1):.3f}",
                    "ABDAT": f"2024{(c + i) % 12 + 1:02d}15",
                    "TXZ01": f"Contract item {contract[-3:]}-{item}",
                    "PSTYP": "0",
                    "REPOS": "X",
                    "WEBRE": "X",
                    "WEPOS": "X",
                    "MWSKZ": "V1",
                    "INFNR": f"5300{c * 5 + i + 1:06d}",
                })
        return records
