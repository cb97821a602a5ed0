"""
Logistics and manufacturing migration objects.

Material master, batches, BOMs with routings, work centers, production
orders and inspection plans.
"""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, mock_amount, provenance, rule

MATERIAL_TYPES = ["FERT", "HALB", "ROH", "HIBE", "ERSA"]
PLANTS = ["1000", "2000", "3000"]
STORAGE_LOCATIONS = ["0001", "0002"]


class MaterialMasterMigrationObject(BaseMigrationObject):
    """
    MARA/MARC/MARD/MAKT -> product master.

    One record per material, plant and storage location. Text and
    classification data are flattened onto every record.
    """

    object_id = "MATERIAL_MASTER"
    name = "Material Master"
    source_table = "MARA"
    target_entity = "A_Product"

    def field_mappings(self):
        return [
            # General data
            rule("MATNR", "Product", ConverterTag.PAD_LEFT_40),
            rule("MTART", "ProductType"),
            rule("MBRSH", "IndustrySector"),
            rule("MATKL", "ProductGroup"),
            rule("MEINS", "BaseUnit"),
            rule("BRGEW", "GrossWeight", ConverterTag.TO_DECIMAL),
            rule("NTGEW", "NetWeight", ConverterTag.TO_DECIMAL),
            rule("GEWEI", "WeightUnit"),
            rule("VOLUM", "MaterialVolume", ConverterTag.TO_DECIMAL),
            rule("VOLEH", "VolumeUnit"),
            rule("GROES", "SizeOrDimensionText"),
            rule("EAN11", "ProductStandardID"),
            rule("NUMTP", "InternationalArticleNumberCat"),
            rule("MHDRZ", "MinRemainingShelfLife", ConverterTag.TO_INTEGER),
            rule("MHDHB", "TotalShelfLife", ConverterTag.TO_INTEGER),
            rule("VPSTA", "MaintenanceStatus"),
            rule("PSTAT", "ProfileStatus"),
            rule("LVORM", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            rule("BISMT", "ProductOldID"),
            rule("EXTWG", "ExternalProductGroup"),
            rule("LABOR", "LaboratoryOrDesignOffice"),
            rule("KOSCH", "ProductCostingGroup"),
            rule("FERTH", "ProductionMemo"),
            rule("NORMT", "IndustryStandardName"),
            rule("WRKST", "BasicMaterial"),
            rule("SPART", "Division"),
            rule("TRAGR", "TransportationGroup"),
            rule("LADGR", "LoadingGroup"),
            rule("ERSDA", "CreationDate", ConverterTag.TO_DATE),
            # Plant data
            rule("WERKS", "Plant"),
            rule("EKGRP", "PurchasingGroup"),
            rule("DISMM", "MRPType"),
            rule("DISPO", "MRPResponsible"),
            rule("DISLS", "LotSizingProcedure"),
            rule("BSTMI", "MinimumLotSizeQuantity", ConverterTag.TO_DECIMAL),
            rule("BSTMA", "MaximumLotSizeQuantity", ConverterTag.TO_DECIMAL),
            rule("BSTFE", "FixedLotSizeQuantity", ConverterTag.TO_DECIMAL),
            rule("MABST", "MaximumStockQuantity", ConverterTag.TO_DECIMAL),
            rule("MINBE", "ReorderThresholdQuantity", ConverterTag.TO_DECIMAL),
            rule("EISBE", "SafetyStockQuantity", ConverterTag.TO_DECIMAL),
            rule("PLIFZ", "PlannedDeliveryDurationInDays", ConverterTag.TO_INTEGER),
            rule("WEBAZ", "GoodsReceiptDuration", ConverterTag.TO_INTEGER),
            rule("FHORI", "SchedulingFloatProfile"),
            rule("RWPRO", "RangeOfCoverageProfile"),
            rule("BESKZ", "ProcurementType"),
            rule("SOBSL", "SpecialProcurementType"),
            rule("LGPRO", "ProductionInvtryManagedLoc"),
            rule("LGFSB", "DfltStorageLocationExtProcmt"),
            rule("PERKZ", "PeriodType"),
            rule("AUSME", "GoodsIssueUnit"),
            rule("LOSFX", "LotSizeIndependentCosts", ConverterTag.TO_DECIMAL),
            rule("SBDKZ", "DependentRequirementsType"),
            rule("FEVOR", "ProductionSupervisor"),
            rule("SFCPF", "ProductionSchedulingProfile"),
            rule("SCHGT", "IsBulkMaterial", ConverterTag.BOOL_YN),
            rule("INSMK", "StockInQualityInspection", ConverterTag.BOOL_YN),
            rule("SSQSS", "QualityMgmtCtrlKey"),
            rule("MISKZ", "MixedMRP"),
            rule("XCHPF", "IsBatchManagementRequired", ConverterTag.BOOL_YN),
            rule("VRMOD", "ConsumptionMode"),
            rule("VINT1", "BackwardConsumptionPeriod", ConverterTag.TO_INTEGER),
            rule("VINT2", "ForwardConsumptionPeriod", ConverterTag.TO_INTEGER),
            rule("STRGR", "PlanningStrategyGroup"),
            rule("SERNP", "SerialNumberProfile"),
            # Storage location data
            rule("LGORT", "StorageLocation"),
            rule("LABST", "UnrestrictedStock", ConverterTag.TO_DECIMAL),
            rule("INSME", "QualityInspectionStock", ConverterTag.TO_DECIMAL),
            rule("EINME", "RestrictedStock", ConverterTag.TO_DECIMAL),
            rule("SPEME", "BlockedStock", ConverterTag.TO_DECIMAL),
            rule("RETME", "ReturnsStock", ConverterTag.TO_DECIMAL),
            rule("UMLME", "StockInTransfer", ConverterTag.TO_DECIMAL),
            rule("KLABS", "ConsignmentStock", ConverterTag.TO_DECIMAL),
            rule("KINSM", "ConsignmentInspectionStock", ConverterTag.TO_DECIMAL),
            rule("KEINM", "ConsignmentRestrictedStock", ConverterTag.TO_DECIMAL),
            rule("KSPEM", "ConsignmentBlockedStock", ConverterTag.TO_DECIMAL),
            rule("LFGJA", "FiscalYearCurrentPeriod", ConverterTag.TO_INTEGER),
            rule("LFMON", "FiscalMonthCurrentPeriod", ConverterTag.TO_INTEGER),
            rule("HERKL", "CountryOfOrigin", ConverterTag.TO_UPPER_CASE),
            rule("HERKR", "RegionOfOrigin"),
            # Texts
            rule("MAKTX", "ProductDescription"),
            rule("MAKTX_EN", "ProductDescriptionEN"),
            rule("MAKTX_DE", "ProductDescriptionDE"),
            rule("LTEX1", "PurchaseOrderText"),
            rule("LTEX2", "SalesText"),
            rule("LTEX3", "InternalNote"),
            rule("LTEX4", "InspectionText"),
            rule("LTEX5", "StorageInstructions"),
            # Classification
            rule("KLART", "ClassType"),
            rule("CLASS", "ClassName"),
            rule("ATWRT1", "Characteristic01"),
            rule("ATWRT2", "Characteristic02"),
            rule("ATWRT3", "Characteristic03"),
            rule("ATWRT4", "Characteristic04"),
            rule("ATWRT5", "Characteristic05"),
            rule("HAZMAT_CLASS", "DangerousGoodsClass"),
            rule("HAZMAT_NUM", "DangerousGoodsNumber"),
            rule("BATCH_CLASS", "BatchClass"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Product", "ProductType", "BaseUnit"],
            duplicate_keys=["Product", "Plant", "StorageLocation"],
            ranges=[("GrossWeight", 0, None), ("UnrestrictedStock", 0, None)],
        )

    def extract_mock(self):
        units = ["L", "EA", "KG"]
        records = []
        seed = 0
        for m in range(1, 26):
            material_type = MATERIAL_TYPES[(m - 1) % 5]
            gross_weight = mock_amount(m, 1, 100)
            general = {
                "MATNR": f"MAT{m:05d}",
                "MTART": material_type,
                "MBRSH": "M",
                "MATKL": f"MG{(m - 1) % 10 + 1:02d}",
                "MEINS": units[m % 3],
                "BRGEW": gross_weight,
                "NTGEW": f"{float(gross_weight) * 0.9:.3f}",
                "GEWEI": "KG",
                "VOLUM": mock_amount(m * 7, 1, 50),
                "VOLEH": "L",
                "GROES": f"{10 + m}x{5 + m}x{3 + m}",
                "EAN11": f"40{m:011d}",
                "NUMTP": "HE",
                "MHDRZ": "30" if m % 4 == 0 else "0",
                "MHDHB": "365" if m % 4 == 0 else "0",
                "VPSTA": "KDEBLPQSVX",
                "PSTAT": "KDEBLPQSVX",
                "LABOR": "LAB1",
                "WRKST": "STEEL" if m % 5 == 0 else "",
                "SPART": "00",
                "TRAGR": "0001",
                "LADGR": "0001",
                "ERSDA": "20200101",
                "MAKTX": f"Material {m} - {material_type}",
                "MAKTX_EN": f"Material {m} English",
                "MAKTX_DE": f"Material {m} Deutsch",
                "KLART": "001",
                "CLASS": f"CL_MAT_{material_type}",
            }
            for plant in PLANTS:
                for storage_location in STORAGE_LOCATIONS:
                    seed += 1
                    record = dict(general)
                    record.update({
                        "WERKS": plant,
                        "EKGRP": f"00{m % 3 + 1}",
                        "DISMM": "PD" if m % 2 == 0 else "ND",
                        "DISPO": f"D{plant[-2:]}",
                        "DISLS": "EX",
                        "BSTMI": "1",
                        "BSTMA": "9999",
                        "MABST": "5000",
                        "MINBE": "100",
                        "EISBE": "50",
                        "PLIFZ": "5" if m % 2 == 0 else "10",
                        "WEBAZ": "1",
                        "BESKZ": "E" if m % 3 == 0 else "F",
                        "LGPRO": storage_location,
                        "LGFSB": storage_location,
                        "PERKZ": "M",
                        "FEVOR": f"F{plant[-2:]}",
                        "XCHPF": "X" if m % 4 == 0 else "",
                        "VINT1": "30",
                        "VINT2": "30",
                        "LGORT": storage_location,
                        "LABST": str((seed * 7919) % 1000),
                        "INSME": "0",
                        "SPEME": "0",
                        "LFGJA": "2024",
                        "LFMON": str(m % 12 + 1),
                        "HERKL": "us",
                    })
                    records.append(record)
        return records


BATCH_MATERIALS = ["PHARMA-API-001", "PHARMA-EXC-002", "CHEM-SOL-003", "FOOD-FLV-004", "COSM-BAS-005"]


class BatchMasterMigrationObject(BaseMigrationObject):
    """MCH1/MCHA/MCHB -> batches with shelf-life dates and batch stock."""

    object_id = "BATCH_MASTER"
    name = "Batch Master"
    source_table = "MCH1"
    target_entity = "A_Batch"

    def field_mappings(self):
        return [
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("WERKS", "Plant"),
            rule("CHARG", "Batch"),
            rule("ERSDA", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("ZUSTD", "BatchIsMarkedRestricted", ConverterTag.BOOL_YN),
            rule("LICHA", "SupplierBatch"),
            rule("LGORT", "StorageLocation"),
            # Shelf life
            rule("HSDAT", "ManufactureDate", ConverterTag.TO_DATE),
            rule("VFDAT", "ShelfLifeExpirationDate", ConverterTag.TO_DATE),
            rule("QNDAT", "NextInspectionDate", ConverterTag.TO_DATE),
            rule("LWEDT", "LastGoodsReceiptDate", ConverterTag.TO_DATE),
            # Batch stock
            rule("CLABS", "UnrestrictedStock", ConverterTag.TO_DECIMAL),
            rule("CINSM", "QualityInspectionStock", ConverterTag.TO_DECIMAL),
            rule("CSPEM", "BlockedStock", ConverterTag.TO_DECIMAL),
            # Origin and classification
            rule("LIFNR", "Supplier", ConverterTag.PAD_LEFT_10),
            rule("HERKL", "CountryOfOrigin", ConverterTag.TO_UPPER_CASE),
            rule("ZUSTAND", "BatchCondition"),
            rule("MEINS", "BaseUnit"),
            rule("BWTAR", "ValuationType"),
            rule("HERKR", "RegionOfOrigin"),
            rule("KLASS", "BatchClass"),
            rule("CUOBJ_BM", "ClassificationObject"),
            rule("LAEDA", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            rule("LVORM", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            rule("XBEW", "IsValuatedSeparately", ConverterTag.BOOL_YN),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Material", "Batch", "Plant"],
            duplicate_keys=["Material", "Batch", "Plant"],
            ranges=[("UnrestrictedStock", 0, None)],
        )

    def extract_mock(self):
        suppliers = ["200001", "200002", "200003"]
        countries = ["US", "DE", "CN", "IN", "JP"]
        conditions = ["NEW", "REWORK", "STANDARD"]
        records = []
        for m, material in enumerate(BATCH_MATERIALS):
            shelf_life_managed = m < 3
            for b in range(1, 8):
                made = f"{(b + m) % 12 + 1:02d}"
                expires = f"{(b + m + 6) % 12 + 1:02d}"
                seed = m * 7 + b
                records.append({
                    "MATNR": material,
                    "WERKS": PLANTS[b % 3],
                    "CHARG": f"B24{m + 1:02d}{b:04d}",
                    "ERSDA": f"2024{made}01",
                    "ERNAM": "BATCHMGR",
                    "ZUSTD": "X" if b % 3 == 1 else "",
                    "LICHA": f"SB-{seed:05d}",
                    "LGORT": STORAGE_LOCATIONS[b % 2],
                    "HSDAT": f"2024{made}01",
                    "VFDAT": f"2025{expires}28" if shelf_life_managed else "",
                    "QNDAT": f"2025{made}01" if shelf_life_managed else "",
                    "LWEDT": f"2024{made}02",
                    "CLABS": str(100 + (seed * 7919) % 900),
                    "CINSM": str(10 + seed % 50) if b % 4 == 0 else "0",
                    "CSPEM": str(5 + seed % 20) if b % 5 == 0 else "0",
                    "LIFNR": suppliers[m % 3],
                    "HERKL": countries[m % 5].lower(),
                    "ZUSTAND": conditions[b % 3],
                    "MEINS": "KG" if m < 2 else "L" if m == 2 else "EA",
                    "BWTAR": "BATCH" if b % 3 == 0 else "",
                    "KLASS": f"CL_BATCH_{m + 1:02d}",
                    "LAEDA": f"2024{made}15",
                    "AENAM": "BATCHMGR",
                    "XBEW": "X" if b % 3 == 0 else "",
                })
        return records


# (material, description, plant)
BOM_HEADERS = [
    ("FERT001", "Finished Product A", "1000"),
    ("FERT002", "Finished Product B", "1000"),
    ("FERT003", "Finished Product C", "2000"),
    ("HALB001", "Semi-Finished D", "1000"),
    ("HALB002", "Semi-Finished E", "2000"),
]
COMPONENTS = ["ROH001", "ROH002", "ROH003", "ROH004", "ROH005", "HALB001", "HALB002"]
WORK_CENTERS = ["WC-ASSY", "WC-MACH", "WC-PACK", "WC-QUAL", "WC-WELD"]


class BomRoutingMigrationObject(BaseMigrationObject):
    """
    STKO/STPO and PLKO/PLPO -> BOM items and routing operations.

    Both record kinds share one flat layout; RecordType tells them apart
    (BOM_ITEM or ROUTING_OP).
    """

    object_id = "BOM_ROUTING"
    name = "BOM & Routing"
    source_table = "STPO"
    target_entity = "A_BillOfMaterialItem"

    def field_mappings(self):
        return [
            rule("RECORD_TYPE", "RecordType"),
            # BOM header
            rule("STLNR", "BillOfMaterial"),
            rule("STLAL", "BillOfMaterialVariant"),
            rule("STLAN", "BillOfMaterialVariantUsage"),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("WERKS", "Plant"),
            rule("DATUV", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("STKTX", "BOMHeaderText"),
            rule("BMENG", "BOMHeaderBaseUnitQuantity", ConverterTag.TO_DECIMAL),
            rule("BMEIN", "BOMHeaderBaseUnit"),
            rule("STLST", "BillOfMaterialStatus"),
            # BOM item
            rule("POSNR", "BillOfMaterialItemNumber"),
            rule("POSTP", "BillOfMaterialItemCategory"),
            rule("IDNRK", "BillOfMaterialComponent", ConverterTag.PAD_LEFT_40),
            rule("MENGE", "BillOfMaterialItemQuantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "BillOfMaterialItemUnit"),
            rule("SORTF", "BOMItemSorter"),
            rule("ALPGR", "AlternativeItemGroup"),
            rule("ALPRF", "AlternativeItemPriority", ConverterTag.TO_INTEGER),
            rule("SCHGT", "IsBulkMaterial", ConverterTag.BOOL_YN),
            rule("ERSKZ", "IsSparePart", ConverterTag.BOOL_YN),
            # Routing header
            rule("PLNTY", "TaskListType"),
            rule("PLNNR", "TaskListGroup"),
            rule("PLNAL", "TaskListGroupCounter"),
            rule("KTEXT", "TaskListDescription"),
            rule("VERWE", "TaskListUsage"),
            rule("STATU", "TaskListStatus"),
            rule("LOSVN", "MinimumLotSizeQuantity", ConverterTag.TO_DECIMAL),
            rule("LOSBS", "MaximumLotSizeQuantity", ConverterTag.TO_DECIMAL),
            # Routing operation
            rule("VORNR", "Operation"),
            rule("LTXA1", "OperationText"),
            rule("ARBPL", "WorkCenter"),
            rule("STEUS", "OperationControlProfile"),
            rule("VGW01", "StandardWorkQuantity1", ConverterTag.TO_DECIMAL),
            rule("VGW02", "StandardWorkQuantity2", ConverterTag.TO_DECIMAL),
            rule("VGW03", "StandardWorkQuantity3", ConverterTag.TO_DECIMAL),
            rule("VGE01", "StandardWorkQuantityUnit1"),
            rule("VGE02", "StandardWorkQuantityUnit2"),
            rule("VGE03", "StandardWorkQuantityUnit3"),
            rule("BMSCH", "OperationReferenceQuantity", ConverterTag.TO_DECIMAL),
            # Component allocation
            rule("OBJTY", "ObjectType"),
            rule("ALLOC_MATNR", "AllocatedComponent", ConverterTag.PAD_LEFT_40),
            rule("AENNR", "ChangeNumber"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Material", "Plant", "RecordType"],
            duplicate_keys=["Material", "Plant", "RecordType", "BillOfMaterialItemNumber", "Operation"],
        )

    def extract_mock(self):
        records = []
        for index, (material, description, plant) in enumerate(BOM_HEADERS):
            item_count = 4 + index % 3
            for i in range(1, item_count + 1):
                records.append({
                    "RECORD_TYPE": "BOM_ITEM",
                    "STLNR": f"BOM_{material}",
                    "STLAL": "01",
                    "STLAN": "1",
                    "MATNR": material,
                    "WERKS": plant,
                    "DATUV": "20200101",
                    "STKTX": f"BOM for {description}",
                    "BMENG": "1",
                    "BMEIN": "EA",
                    "STLST": "01",
                    "POSNR": f"{i * 10:04d}",
                    "POSTP": "L" if i < item_count else "N",
                    "IDNRK": COMPONENTS[(i - 1) % len(COMPONENTS)],
                    "MENGE": "2" if i <= 2 else "1",
                    "MEINS": "EA",
                    "SORTF": f"{i:04d}",
                    "AENNR": "ECN-001" if i == 1 else "",
                })

            for o in range(1, 3 + index % 2 + 1):
                work_center = WORK_CENTERS[(o - 1) % len(WORK_CENTERS)]
                records.append({
                    "RECORD_TYPE": "ROUTING_OP",
                    "MATNR": material,
                    "WERKS": plant,
                    "PLNTY": "N",
                    "PLNNR": f"RTG_{material}",
                    "PLNAL": "01",
                    "KTEXT": f"Routing for {description}",
                    "VERWE": "1",
                    "STATU": "4",
                    "LOSVN": "1",
                    "LOSBS": "99999",
                    "VORNR": f"{o * 10:04d}",
                    "LTXA1": f"{work_center} Operation",
                    "ARBPL": work_center,
                    "STEUS": "PP01",
                    "VGW01": str(5 + o),
                    "VGW02": str(10 + o * 5),
                    "VGW03": str(8 + o * 3),
                    "VGE01": "MIN",
                    "VGE02": "MIN",
                    "VGE03": "MIN",
                    "BMSCH": "1",
                    "OBJTY": "M",
                    "ALLOC_MATNR": COMPONENTS[o - 1] if o <= 2 else "",
                })
        return records


# category code -> (usage, type, names)
WORK_CENTER_CATEGORIES = {
    "A": ("0001", "ASSEMBLY", ["Assembly Line 1", "Assembly Line 2", "Assembly Line 3"]),
    "M": ("0002", "MACHINING", ["CNC Milling Center", "CNC Lathe Station", "Drill Press Bay"]),
    "T": ("0003", "TESTING", ["Quality Test Lab", "Stress Test Cell", "Calibration Bench"]),
    "P": ("0004", "PACKAGING", ["Pack Line 1", "Pack Line 2", "Palletizing Station"]),
    "S": ("0005", "PAINTING", ["Paint Booth 1", "Paint Booth 2", "Powder Coat Line"]),
}


class WorkCenterMigrationObject(BaseMigrationObject):
    """CRHD/CRCO/KAKO -> work centers with cost center and capacity assignment."""

    object_id = "WORK_CENTER"
    name = "Work Center"
    source_table = "CRHD"
    target_entity = "A_WorkCenters"

    def field_mappings(self):
        return [
            # Header
            rule("OBJID", "WorkCenterInternalID"),
            rule("ARBPL", "WorkCenter"),
            rule("WERKS", "Plant"),
            rule("VERWE", "WorkCenterUsage"),
            rule("KTEXT", "WorkCenterDesc"),
            rule("VERAN", "WorkCenterResponsible"),
            rule("VGWTS", "StandardValueKey"),
            rule("KAPID", "CapacityInternalID"),
            rule("LANTU", "LaborCapacityPercent", ConverterTag.TO_DECIMAL),
            rule("MEINS", "CapacityUnit"),
            rule("FORK1", "FormulaKey"),
            rule("STEUS", "OperationControlProfile"),
            # Cost assignment
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("LSTAR", "ActivityType"),
            rule("PLANV", "PlannerGroup"),
            rule("RUEST_KEY", "SetupTimeKey"),
            rule("BEARB_KEY", "ProcessingTimeKey"),
            rule("PAUSE", "BreakDurationMinutes", ConverterTag.TO_INTEGER),
            rule("ABBAU_KEY", "TeardownTimeKey"),
            rule("STAND", "WorkCenterLocation"),
            # Capacity and validity
            rule("KAPAZ", "AvailableCapacityHours", ConverterTag.TO_DECIMAL),
            rule("BEGDA", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("ENDDA", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("ARBPL_TYPE", "WorkCenterTypeCode"),
            rule("XSPRR", "IsLockedForNewOperations", ConverterTag.BOOL_YN),
            rule("BUKRS", "CompanyCode"),
            rule("KOKRS", "ControllingArea"),
            rule("SPRAS", "Language", ConverterTag.TO_UPPER_CASE),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["WorkCenter", "Plant", "WorkCenterUsage"],
            duplicate_keys=["WorkCenter", "Plant"],
            ranges=[("LaborCapacityPercent", 0, 100)],
        )

    def extract_mock(self):
        records = []
        counter = 0
        for plant in ("1000", "2000"):
            per_category = 3 if plant == "1000" else 2
            for code, (usage, category_type, names) in WORK_CENTER_CATEGORIES.items():
                for n, work_center_name in enumerate(names[:per_category]):
                    counter += 1
                    work_center = f"WC-{code}{counter:03d}"
                    records.append({
                        "OBJID": str(10000 + counter),
                        "ARBPL": work_center,
                        "WERKS": plant,
                        "VERWE": usage,
                        "KTEXT": work_center_name,
                        "VERAN": f"WC_MGR_{plant[-2:]}{n + 1:02d}",
                        "VGWTS": f"SAP{(counter - 1) % 6 + 1:03d}",
                        "KAPID": f"KAP-{work_center}",
                        "LANTU": f"{80 + (counter * 7) % 20}.0",
                        "MEINS": "H",
                        "FORK1": f"FML{(counter - 1) % 3 + 1:03d}",
                        "STEUS": "QM01" if code == "T" else "PP01",
                        "KOSTL": f"CC{plant[-2:]}{(counter - 1) % 5 + 1:02d}",
                        "LSTAR": f"LAT{(counter - 1) % 4 + 1:03d}",
                        "PLANV": f"PG{(counter - 1) % 3 + 1:02d}",
                        "RUEST_KEY": "STK01" if code == "M" else "",
                        "BEARB_KEY": f"PTK{(counter - 1) % 4 + 1:02d}",
                        "PAUSE": "15" if code == "A" else "30" if code == "M" else "10",
                        "ABBAU_KEY": "TDK01" if code == "M" else "",
                        "STAND": f"LOC-{plant}-{(counter - 1) % 4 + 1:02d}",
                        "KAPAZ": f"{160 + (counter * 13) % 80}.0",
                        "BEGDA": "20200101",
                        "ENDDA": "99991231",
                        "ARBPL_TYPE": category_type,
                        "BUKRS": plant,
                        "KOKRS": "1000",
                        "SPRAS": "EN",
                        "ERDAT": "20200101",
                        "AEDAT": "20240115",
                        "AENAM": "MIGRATION",
                    })
        return records


class ProductionOrderMigrationObject(BaseMigrationObject):
    """AUFK/AFKO/AFPO -> open production orders."""

    object_id = "PRODUCTION_ORDER"
    name = "Production Order"
    source_table = "AFKO"
    target_entity = "A_ProductionOrder"

    def field_mappings(self):
        return [
            # Header
            rule("AUFNR", "ManufacturingOrder", ConverterTag.PAD_LEFT_10),
            rule("AUART", "ManufacturingOrderType"),
            rule("KTEXT", "ManufacturingOrderText"),
            rule("BUKRS", "CompanyCode"),
            rule("WERKS", "ProductionPlant"),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("GAMNG", "TotalQuantity", ConverterTag.TO_DECIMAL),
            rule("GMEIN", "ProductionUnit"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("STATUS", "OrderSystemStatus"),
            rule("OBJNR", "ObjectInternalID"),
            rule("ABGSL", "SettlementRule"),
            rule("CO_PROF", "ProductionOrderProfile"),
            rule("LOEKZ", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            # Scheduling
            rule("GSTRP", "BasicSchedulingStartDate", ConverterTag.TO_DATE),
            rule("GLTRP", "BasicSchedulingEndDate", ConverterTag.TO_DATE),
            rule("GSTRS", "ScheduledStartDate", ConverterTag.TO_DATE),
            rule("GLTRS", "ScheduledEndDate", ConverterTag.TO_DATE),
            rule("GSTRI", "ActualStartDate", ConverterTag.TO_DATE),
            rule("GLTRI", "ActualEndDate", ConverterTag.TO_DATE),
            rule("TERKZ", "SchedulingType"),
            rule("SMKEY", "SchedulingMarginKey"),
            # BOM and routing
            rule("PLNNR", "Routing"),
            rule("STLNR", "BillOfMaterial"),
            rule("VERID", "ProductionVersion"),
            rule("PLNUM", "PlannedOrder"),
            rule("FEVOR", "ProductionSupervisor"),
            rule("ARBPL", "WorkCenter"),
            # Account assignment
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("GSBER", "BusinessArea"),
            rule("LGORT", "StorageLocation"),
            rule("DISPO", "MRPController"),
            rule("ABLAD", "UnloadingPointName"),
            # Quantities
            rule("PSAMG", "ExpectedScrapQuantity", ConverterTag.TO_DECIMAL),
            rule("IGMNG", "ConfirmedYieldQuantity", ConverterTag.TO_DECIMAL),
            rule("IASMG", "ConfirmedScrapQuantity", ConverterTag.TO_DECIMAL),
            rule("UMREZ", "UnitConversionNumerator", ConverterTag.TO_DECIMAL),
            rule("WEMNG", "GoodsReceiptQuantity", ConverterTag.TO_DECIMAL),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ManufacturingOrder", "ManufacturingOrderType", "CompanyCode", "Material"],
            duplicate_keys=["ManufacturingOrder"],
            ranges=[("TotalQuantity", 0, None)],
        )

    def extract_mock(self):
        order_types = ["PP01", "PP01", "PP02", "PP01", "PP03"]
        finished = ["FERT-PUMP-100", "FERT-MOTOR-200", "FERT-VALVE-300", "FERT-GEAR-400", "FERT-FRAME-500"]
        semi_finished = ["HALB-SHAFT-110", "HALB-HOUS-210", "HALB-SEAL-310", "HALB-BEAR-410", "HALB-FLNG-510"]
        storage_locations = ["0001", "0002", "0003"]
        records = []
        for i in range(1, 21):
            is_finished = i % 2 == 1
            material = (finished if is_finished else semi_finished)[(i - 1) % 5]
            plant = "1000" if is_finished else "2000"
            quantity = 50 + i * 10
            started = i <= 12
            delivered = i <= 8
            confirmed = int(quantity * (0.6 + (i * 7 % 35) / 100)) if started else 0
            month = f"{i % 12 + 1:02d}"
            records.append({
                "AUFNR": str(1000000 + i),
                "AUART": order_types[(i - 1) % 5],
                "KTEXT": f"Production of {material}",
                "BUKRS": plant,
                "WERKS": plant,
                "MATNR": material,
                "GAMNG": str(quantity),
                "GMEIN": "EA" if is_finished else "PC",
                "ERDAT": f"2024{month}05",
                "ERNAM": "PP_PLANNER",
                "STATUS": "REL CNF" if started else "CRTD REL",
                "OBJNR": f"OR{1000000 + i}",
                "ABGSL": "SETT01",
                "CO_PROF": "PP01",
                "GSTRP": f"2024{month}10",
                "GLTRP": f"2024{month}25",
                "GSTRS": f"2024{month}11",
                "GLTRS": f"2024{month}24",
                "GSTRI": f"2024{month}12" if started else "",
                "GLTRI": f"2024{month}23" if delivered else "",
                "TERKZ": "1" if i % 2 == 0 else "2",
                "SMKEY": "001",
                "PLNNR": f"RTG-{(i - 1) % 5 + 1:04d}",
                "STLNR": f"BOM-{(i - 1) % 5 + 1:04d}",
                "VERID": "0001",
                "PLNUM": str(9000000 + i) if i % 3 == 0 else "",
                "FEVOR": f"PG{(i - 1) % 3 + 1:02d}",
                "ARBPL": WORK_CENTERS[(i - 1) % 5],
                "KOSTL": f"CC{(i - 1) % 10 + 1:04d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "GSBER": "BU01",
                "LGORT": storage_locations[(i - 1) % 3],
                "DISPO": f"D{plant[-2:]}",
                "PSAMG": str(int(quantity * 0.02)),
                "IGMNG": str(confirmed),
                "IASMG": str(int(confirmed * 0.01)),
                "UMREZ": "1.000",
                "WEMNG": str(confirmed) if delivered else "0",
            })
        return records


INSPECTION_PLANS = [
    ("QP001", "Incoming Inspection - Raw Materials", "MAT00001", "5"),
    ("QP002", "In-Process Inspection - Assembly", "MAT00003", "5"),
    ("QP003", "Final Inspection - Finished Goods", "MAT00005", "5"),
    ("QP004", "Vendor Quality Audit", "", "6"),
    ("QP005", "Periodic Calibration Check", "", "6"),
]
INSPECTION_OPERATIONS = [
    ("0010", "Visual Inspection", "QC-01", "QM01"),
    ("0020", "Dimensional Check", "QC-02", "QM01"),
    ("0030", "Functional Test", "QC-03", "QM02"),
]
# (number, text, type, target, upper, lower, unit)
INSPECTION_CHARACTERISTICS = [
    ("0010", "Surface Quality", "Q", "", "", "", ""),
    ("0020", "Length (mm)", "M", "100", "100.5", "99.5", "MM"),
    ("0030", "Weight (g)", "M", "250", "252", "248", "G"),
]


class InspectionPlanMigrationObject(BaseMigrationObject):
    """PLKO/PLPO/PLMK (task list type Q) -> inspection plans with operations and characteristics."""

    object_id = "INSPECTION_PLAN"
    name = "Inspection Plan"
    source_table = "PLKO"
    target_entity = "A_InspectionPlan"

    def field_mappings(self):
        return [
            # Header
            rule("PLNTY", "TaskListType"),
            rule("PLNNR", "InspectionPlanGroup"),
            rule("PLNAL", "InspectionPlan"),
            rule("KTEXT", "InspectionPlanDesc"),
            rule("WERKS", "Plant"),
            rule("VERWE", "TaskListUsage"),
            rule("STATU", "TaskListStatus"),
            rule("LOEKZ", "IsDeleted", ConverterTag.BOOL_YN),
            rule("MATNR", "Material", ConverterTag.PAD_LEFT_40),
            rule("DATUV", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            rule("SLWBEZ", "InspectionPointsType"),
            rule("QPRZIEHVER", "SamplingProcedure"),
            rule("QDYNREGEL", "DynamicModificationRule"),
            # Operations
            rule("VORNR", "Operation"),
            rule("LTXA1", "OperationText"),
            rule("ARBPL", "WorkCenter"),
            rule("STEUS", "OperationControlProfile"),
            rule("VGW01", "StandardWorkQuantity1", ConverterTag.TO_DECIMAL),
            rule("VGW02", "StandardWorkQuantity2", ConverterTag.TO_DECIMAL),
            rule("VGE01", "StandardWorkQuantityUnit1"),
            rule("VGE02", "StandardWorkQuantityUnit2"),
            rule("AUFAK", "ScrapPercent", ConverterTag.TO_DECIMAL),
            rule("QPPKTABS", "IsInspectionPointCompletion", ConverterTag.BOOL_YN),
            rule("ART", "InspectionLotType"),
            rule("USR00", "OperationUserField1"),
            rule("USR01", "OperationUserField2"),
            rule("QRASTMENGE", "InspectionInterval", ConverterTag.TO_DECIMAL),
            rule("PLNKN", "TaskListNode"),
            # Characteristics
            rule("MERKNR", "InspectionCharacteristic"),
            rule("VERWMERKM", "MasterInspectionCharacteristic"),
            rule("KURZTEXT", "InspSpecificationText"),
            rule("QMTB_ART", "InspectionCharacteristicType"),
            rule("SOLLWERT", "InspSpecTargetValue", ConverterTag.TO_DECIMAL),
            rule("TOLERANZOB", "InspSpecUpperLimit", ConverterTag.TO_DECIMAL),
            rule("TOLERANZUN", "InspSpecLowerLimit", ConverterTag.TO_DECIMAL),
            rule("MASSEINHSW", "InspSpecUnit"),
            rule("PROBEMGEH", "SampleSize", ConverterTag.TO_INTEGER),
            rule("AUSWMENGE1", "ValuationCode"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["InspectionPlanGroup", "InspectionPlanDesc", "Plant"],
            duplicate_keys=["InspectionPlanGroup", "InspectionPlan", "Operation", "InspectionCharacteristic"],
            ranges=[("SampleSize", 1, 1000)],
        )

    def extract_mock(self):
        records = []
        for group, description, material, usage in INSPECTION_PLANS:
            for operation, operation_text, work_center, control_key in INSPECTION_OPERATIONS:
                for number, text, kind, target, upper, lower, unit in INSPECTION_CHARACTERISTICS:
                    records.append({
                        "PLNTY": "Q",
                        "PLNNR": group,
                        "PLNAL": "01",
                        "KTEXT": description,
                        "WERKS": "1000",
                        "VERWE": usage,
                        "STATU": "4",
                        "MATNR": material,
                        "DATUV": "20240101",
                        "AEDAT": "20240115",
                        "AENAM": "QUALITYMGR",
                        "SLWBEZ": "SP01",
                        "VORNR": operation,
                        "LTXA1": operation_text,
                        "ARBPL": work_center,
                        "STEUS": control_key,
                        "VGW01": "0.50",
                        "VGW02": "0",
                        "VGE01": "H",
                        "AUFAK": "0",
                        "QPPKTABS": "X",
                        "ART": "01",
                        "MERKNR": number,
                        "VERWMERKM": f"MIC-{number}",
                        "KURZTEXT": text,
                        "QMTB_ART": kind,
                        "SOLLWERT": target,
                        "TOLERANZOB": upper,
                        "TOLERANZUN": lower,
                        "MASSEINHSW": unit,
                        "PROBEMGEH": "5",
                    })
        return records
