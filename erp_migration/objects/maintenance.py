"""
Plant maintenance migration objects.

Technical objects (equipment and the functional location hierarchy)
and the maintenance orders that reference them.
"""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, provenance, rule

# category -> (manufacturers, models, main work center prefix)
EQUIPMENT_TYPES = [
    ("PUMP", ["Grundfos", "KSB", "Sulzer"], ["GP-200", "KS-350", "SZ-500"], "M"),
    ("MOTOR", ["Siemens", "ABB", "WEG"], ["SM-110", "AB-220", "WG-375"], "M"),
    ("CONVEYOR", ["Hytrol", "Dorner", "FlexLink"], ["HY-2400", "DN-3200", "FL-1800"], "A"),
    ("COMPRESSOR", ["Atlas Copco", "Kaeser", "Ingersoll Rand"], ["AC-750", "KA-500", "IR-900"], "M"),
    ("GENERATOR", ["Caterpillar", "Cummins", "Kohler"], ["CT-1000", "CM-800", "KH-600"], "T"),
]
LOCATIONS = ["PROD-HALL-A", "PROD-HALL-B", "UTIL-ROOM", "MAINT-SHOP", "WAREHOUSE"]


def _abc_indicator(n: int) -> str:
    remainder = n % 10
    if remainder <= 3:
        return "A"
    return "B" if remainder <= 6 else "C"


class EquipmentMasterMigrationObject(BaseMigrationObject):
    """EQUI/EQKT/EQUZ/ILOA -> equipment."""

    object_id = "EQUIPMENT_MASTER"
    name = "Equipment Master"
    source_table = "EQUI"
    target_entity = "A_Equipment"

    def field_mappings(self):
        return [
            # General data
            rule("EQUNR", "Equipment"),
            rule("EQKTX", "EquipmentName"),
            rule("EQTYP", "EquipmentCategory"),
            rule("EQART", "TechnicalObjectType"),
            rule("HERST", "AssetManufacturerName"),
            rule("TYPBZ", "ManufacturerPartTypeName"),
            rule("SERGE", "ManufacturerSerialNumber"),
            rule("BAUJJ", "ConstructionYear", ConverterTag.TO_INTEGER),
            rule("BAUMM", "ConstructionMonth", ConverterTag.TO_INTEGER),
            rule("INBDT", "OperationStartDate", ConverterTag.TO_DATE),
            rule("GSBER", "BusinessArea"),
            rule("BUKRS", "CompanyCode"),
            rule("SWERK", "MaintenancePlant"),
            rule("STORT", "AssetLocation"),
            rule("TIDNR", "TechnicalObjectSortCode"),
            # Maintenance organization
            rule("INGRP", "MaintenancePlannerGroup"),
            rule("IWERK", "MaintenancePlanningPlant"),
            rule("GEWRK", "MainWorkCenter"),
            rule("RBNR", "CatalogProfile"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("HEQUI", "SuperordinateEquipment"),
            rule("ANLNR", "MasterFixedAsset", ConverterTag.STRIP_LEADING_ZEROS),
            rule("TPLNR", "FunctionalLocation"),
            rule("ABCKZ", "MaintObjectABCIndicator"),
            rule("BEGRU", "AuthorizationGroup"),
            # Physical attributes
            rule("GROES", "SizeOrDimensionText"),
            rule("BRGEW", "GrossWeight", ConverterTag.TO_DECIMAL),
            rule("GEWEI", "GrossWeightUnit"),
            rule("EQFNR", "SortField"),
            rule("INVNR", "InventoryNumber"),
            # Status and classification
            rule("STATUS", "EquipmentSystemStatus"),
            rule("USTATUS", "EquipmentUserStatus"),
            rule("CLASS", "ClassName"),
            rule("DATAB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("DATBI", "ValidityEndDate", ConverterTag.TO_DATE),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Equipment", "EquipmentName", "EquipmentCategory"],
            duplicate_keys=["Equipment"],
            ranges=[("ConstructionYear", 1950, 2030), ("ConstructionMonth", 1, 12)],
        )

    def extract_mock(self):
        records = []
        for e in range(1, 31):
            kind, manufacturers, models, center_prefix = EQUIPMENT_TYPES[(e - 1) % 5]
            variant = (e - 1) % 3
            plant = "1000" if e <= 20 else "2000"
            year = 2015 + e % 9
            month = e % 12 + 1
            if kind == "CONVEYOR":
                size = f"{1200 + e * 100:.1f} MM"
            else:
                size = f"{50 + e * 10:.1f} CM"
            weight = 2000 + e * 50 if kind == "GENERATOR" else 100 + e * 15
            records.append({
                "EQUNR": f"EQ{e:08d}",
                "EQKTX": f"{manufacturers[variant]} {kind.capitalize()} Unit {e}",
                "EQTYP": kind[0],
                "EQART": kind,
                "HERST": manufacturers[variant],
                "TYPBZ": models[variant],
                "SERGE": f"{kind[:2]}-{e:06d}",
                "BAUJJ": str(year),
                "BAUMM": str(month),
                "INBDT": f"{year}{month:02d}15",
                "GSBER": "BU01",
                "BUKRS": plant,
                "SWERK": plant,
                "STORT": LOCATIONS[(e - 1) % 5],
                "TIDNR": f"TID-{kind}-{e:04d}",
                "INGRP": f"MPG{(e - 1) % 3 + 1:02d}",
                "IWERK": plant,
                "GEWRK": f"WC-{center_prefix}{(e - 1) % 5 + 1:03d}",
                "RBNR": f"CP{(e - 1) % 4 + 1:02d}",
                "KOSTL": f"CC{plant[-2:]}{(e - 1) % 5 + 1:02d}",
                "HEQUI": f"EQ{e - 1:08d}" if e % 6 == 0 else "",
                "ANLNR": f"{e:012d}",
                "TPLNR": f"{plant}-PR{(e - 1) % 4 + 1:02d}-LN{(e - 1) % 3 + 1:02d}-ST{(e - 1) % 5 + 1:02d}",
                "ABCKZ": _abc_indicator(e),
                "GROES": size,
                "BRGEW": f"{weight:.1f}",
                "GEWEI": "KG",
                "EQFNR": kind,
                "STATUS": "INAC" if e % 15 == 0 else "AVLB",
                "CLASS": f"CL_EQ_{kind}",
                "DATAB": f"{year}{month:02d}01",
                "DATBI": "99991231",
            })
        return records


# area code -> (description, plant section, lines, stations per line)
FLOC_AREAS = [
    ("PR", "Production Area", "PRODUCTION", 2, 2),
    ("UT", "Utilities Area", "UTILITIES", 1, 1),
    ("WH", "Warehouse Area", "LOGISTICS", 1, 0),
]
STATION_TEXTS = ["Station 1 - Intake", "Station 2 - Processing"]
FLOC_LEVEL_CLASSES = ["CL_FL_PLANT", "CL_FL_AREA", "CL_FL_LINE", "CL_FL_STATION"]


class FunctionalLocationMigrationObject(BaseMigrationObject):
    """
    IFLOT/IFLOTX/ILOA -> functional locations.

    Mock data is a PLANT-AREA-LINE-STATION hierarchy over two plants.
    Parents always precede their children so SuperiorFunctionalLocation
    resolves during load.
    """

    object_id = "FUNCTIONAL_LOCATION"
    name = "Functional Location"
    source_table = "IFLOT"
    target_entity = "A_FunctionalLocation"

    def field_mappings(self):
        return [
            # Header
            rule("TPLNR", "FunctionalLocation"),
            rule("FLTYP", "FunctionalLocationCategory"),
            rule("PLTXT", "FunctionalLocationName"),
            rule("EQUNR", "InstalledEquipment"),
            rule("BUKRS", "CompanyCode"),
            rule("IWERK", "MaintenancePlanningPlant"),
            rule("STORT", "AssetLocation"),
            rule("BEBER", "PlantSection"),
            rule("SWERK", "MaintenancePlant"),
            rule("INGRP", "MaintenancePlannerGroup"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("GSBER", "BusinessArea"),
            rule("WERGW", "WorkCenterPlant"),
            rule("TPLKZ", "FunctionalLocationStrucIndicator"),
            rule("IEQUI", "EquipmentInstallationIsAllowed", ConverterTag.BOOL_YN),
            rule("EINZL", "SingleEquipmentInstallation", ConverterTag.BOOL_YN),
            # Additional attributes
            rule("RBNR", "CatalogProfile"),
            rule("ABCKZ", "MaintObjectABCIndicator"),
            rule("STATUS", "FunctionalLocationSystemStatus"),
            rule("DATAB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("DATBI", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("TPLMA", "SuperiorFunctionalLocation"),
            rule("USTATUS", "FunctionalLocationUserStatus"),
            rule("GEWRK", "MainWorkCenter"),
            # Classification and organization
            rule("CLASS", "ClassName"),
            rule("KOKRS", "ControllingArea"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["FunctionalLocation", "FunctionalLocationCategory", "FunctionalLocationName"],
            duplicate_keys=["FunctionalLocation"],
        )

    def extract_mock(self):
        records = []

        def add(location, text, plant, level, parent, area=None, section=""):
            n = len(records) + 1
            center = f"WC-{'A' if level < 2 else 'M'}{(n - 1) % 5 + 1:03d}"
            records.append({
                "TPLNR": location,
                "FLTYP": "A",
                "PLTXT": text,
                "EQUNR": f"EQ{n:08d}" if level == 3 and n % 3 == 0 else "",
                "BUKRS": plant,
                "IWERK": plant,
                "STORT": area or "MAIN",
                "BEBER": section,
                "SWERK": plant,
                "INGRP": f"MPG{(n - 1) % 3 + 1:02d}" if level >= 2 else "MPG01",
                "KOSTL": f"CC{plant[-2:]}{(n - 1) % 5 + 1 if level else 1:02d}",
                "GSBER": "BU01",
                "WERGW": plant,
                "TPLKZ": "A",
                "IEQUI": "" if level == 3 else "X",
                "EINZL": "X" if level == 3 else "",
                "RBNR": f"CP{(n - 1) % 4 + 1 if level else 1:02d}",
                "ABCKZ": "A" if level < 2 else "B",
                "STATUS": "AVLB",
                "DATAB": "20200101",
                "DATBI": "99991231",
                "TPLMA": parent,
                "GEWRK": center,
                "CLASS": FLOC_LEVEL_CLASSES[level],
                "KOKRS": "1000",
                "ERDAT": "20200101",
                "AEDAT": "20240115",
                "AENAM": "MIGRATION",
            })

        for plant in ("1000", "2000"):
            add(plant, f"Plant {plant} - Main Location", plant, 0, "")
            for code, description, section, line_count, station_count in FLOC_AREAS:
                area_location = f"{plant}-{code}"
                add(area_location, f"{description} - Plant {plant}", plant, 1, plant, code, section)
                # Only the main plant operates a warehouse line
                if code == "WH" and plant != "1000":
                    continue
                for line in range(1, line_count + 1):
                    line_location = f"{area_location}-LN{line:02d}"
                    line_text = f"Line {line} - {description} - Plant {plant}"
                    add(line_location, line_text, plant, 2, area_location, code, section)
                    for station in range(station_count):
                        add(
                            f"{line_location}-ST{station + 1:02d}",
                            f"{STATION_TEXTS[station]} - Line {line} - Plant {plant}",
                            plant, 3, line_location, code, section,
                        )
        return records


ORDER_TYPE_TEXTS = {
    "PM01": "Corrective Maintenance",
    "PM02": "Preventive Maintenance",
    "PM03": "Condition-Based Maintenance",
}


class MaintenanceOrderMigrationObject(BaseMigrationObject):
    """AUFK/AFIH/AFKO -> open maintenance orders. PM02 orders carry plan and cycle references."""

    object_id = "MAINTENANCE_ORDER"
    name = "Maintenance Order"
    source_table = "AUFK"
    target_entity = "MaintenanceOrder"

    def field_mappings(self):
        return [
            # Header
            rule("AUFNR", "MaintenanceOrder", ConverterTag.PAD_LEFT_10),
            rule("AUART", "MaintenanceOrderType"),
            rule("AUTYP", "OrderCategory"),
            rule("KTEXT", "MaintenanceOrderDesc"),
            rule("BUKRS", "CompanyCode"),
            rule("WERKS", "Plant"),
            rule("TPLNR", "FunctionalLocation"),
            rule("EQUNR", "Equipment"),
            rule("IWERK", "MaintenancePlanningPlant"),
            rule("INGPR", "MaintenancePlannerGroup"),
            rule("GEWRK", "MainWorkCenter"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("GSBER", "BusinessArea"),
            rule("PRIOK", "MaintPriority"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("OBJNR", "ObjectInternalID"),
            rule("ILART", "MaintenanceActivityType"),
            # Scheduling
            rule("GSTRP", "MaintOrdBasicStartDate", ConverterTag.TO_DATE),
            rule("GLTRP", "MaintOrdBasicEndDate", ConverterTag.TO_DATE),
            rule("GSTRS", "ScheduledBasicStartDate", ConverterTag.TO_DATE),
            rule("GLTRS", "ScheduledBasicEndDate", ConverterTag.TO_DATE),
            rule("GETRI", "ActualStartDate", ConverterTag.TO_DATE),
            rule("GLTRI", "ActualEndDate", ConverterTag.TO_DATE),
            rule("ABNUM", "MaintenancePlanCallNumber", ConverterTag.TO_INTEGER),
            rule("REVNR", "MaintenanceRevision"),
            # Work and cost
            rule("ARBEI", "PlannedWorkQuantity", ConverterTag.TO_DECIMAL),
            rule("ISMNW", "ActualWorkQuantity", ConverterTag.TO_DECIMAL),
            rule("QMNUM", "MaintenanceNotification"),
            rule("WAERS", "TransactionCurrency"),
            # Status
            rule("IPHAS", "MaintenanceProcessingPhase"),
            rule("SYSTATUS", "MaintOrdSystemStatus"),
            rule("USTATUS", "MaintOrdUserStatus"),
            rule("STORT", "AssetLocation"),
            rule("WAPOS", "MaintenanceItem"),
            rule("WARPL", "MaintenancePlan"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["MaintenanceOrder", "MaintenanceOrderType", "CompanyCode", "Plant"],
            duplicate_keys=["MaintenanceOrder"],
            ranges=[("PlannedWorkQuantity", 0, None)],
        )

    def extract_mock(self):
        order_types = list(ORDER_TYPE_TEXTS)
        locations = ["1000-PR-LN01", "2000-PR-LN01", "1000-UT-LN01", "1000-WH-LN01", "2000-PR-LN02"]
        work_centers = ["PM-MECH", "PM-ELEC", "PM-INST", "PM-PIPE", "PM-HVAC"]
        records = []
        for i in range(1, 26):
            order_type = order_types[(i - 1) % 3]
            preventive = order_type == "PM02"
            plant = "1000" if i % 2 == 1 else "2000"
            equipment = f"EQ{(i - 1) % 30 + 1:08d}"
            started = i <= 15
            month = f"{i % 12 + 1:02d}"
            records.append({
                "AUFNR": str(4000000 + i),
                "AUART": order_type,
                "AUTYP": "30",
                "KTEXT": f"{ORDER_TYPE_TEXTS[order_type]} - {equipment}",
                "BUKRS": plant,
                "WERKS": plant,
                "TPLNR": locations[(i - 1) % 5],
                "EQUNR": equipment,
                "IWERK": plant,
                "INGPR": f"IG{(i - 1) % 3 + 1:02d}",
                "GEWRK": work_centers[(i - 1) % 5],
                "KOSTL": f"CC{(i - 1) % 10 + 1:04d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "GSBER": "BU01",
                "PRIOK": str((i - 1) % 4 + 1),
                "ERDAT": "20240115",
                "ERNAM": "PLANNER",
                "AEDAT": "20240201",
                "OBJNR": f"OR{4000000 + i}",
                "ILART": f"{(i - 1) % 4 + 1:03d}",
                "GSTRP": f"2024{month}01",
                "GLTRP": f"2024{month}15",
                "GSTRS": f"2024{month}02",
                "GLTRS": f"2024{month}14",
                "GETRI": f"2024{month}03" if started else "",
                "GLTRI": f"2024{month}12" if started else "",
                "ABNUM": str(i) if preventive else "",
                "REVNR": f"REV{i:03d}" if preventive else "",
                "ARBEI": str((2 + i % 8) * 10),
                "ISMNW": str((2 + i % 6) * 10) if started else "0",
                "QMNUM": str(10000000 + i) if i % 3 == 0 else "",
                "WAERS": "USD",
                "IPHAS": "5" if started else "3",
                "SYSTATUS": "REL CNF" if started else "REL",
                "STORT": locations[(i - 1) % 5],
                "WAPOS": f"MI-{(i - 1) % 5 + 1:03d}" if preventive else "",
                "WARPL": f"MP-{(i - 1) % 5 + 1:03d}" if preventive else "",
            })
        return records
