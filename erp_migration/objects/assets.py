"""
Asset accounting migration objects.

FIXED_ASSET carries the full asset master with one record per
depreciation area; ASSET_ACQUISITION carries the legacy acquisition
values posted on take-over.
"""

from typing import Dict, Tuple

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, provenance, rule

# class -> (label, depreciation key, useful life in years, base acquisition value)
ASSET_CLASSES: Dict[str, Tuple[str, str, int, int]] = {
    "1000": ("Buildings", "LINA", 40, 500000),
    "2000": ("Machinery", "LINA", 10, 80000),
    "3000": ("Vehicles", "DGRS", 5, 35000),
    "3100": ("IT Equipment", "LINA", 3, 5000),
    "4000": ("Furniture", "LINA", 8, 3000),
}
CLASS_ORDER = list(ASSET_CLASSES)

ASSET_TEXTS = [
    "Office Building Main", "Production Machine A", "Delivery Truck", "Server Rack", "Office Desk",
    "Warehouse", "CNC Machine", "Forklift", "Laptop Fleet", "Conference Table",
    "Parking Garage", "Assembly Robot", "Company Van", "Network Switch", "Ergonomic Chair",
    "Factory Hall B", "Lathe Machine", "Crane Truck", "Storage Array", "Filing Cabinet",
    "Gate House", "Press Machine", "Electric Vehicle", "UPS System", "Standing Desk",
    "Annex Building", "Welding Station", "Refrigerated Truck", "Firewall Appliance", "Bookshelf",
]

DEPRECIATION_AREAS = {"01": "LINA", "15": "LINT"}


def _asset_values(number: int, asset_class: str, base_value: int) -> Tuple[int, int, float, float]:
    """(useful life, years depreciated, acquisition value, accumulated depreciation)."""
    life = ASSET_CLASSES[asset_class][2]
    years = min(number % life + 1, life)
    value = base_value + number * 1500
    return life, years, value, value / life * years


class FixedAssetMigrationObject(BaseMigrationObject):
    """ANLA/ANLB/ANLC -> fixed asset master with depreciation areas and cumulative values."""

    object_id = "FIXED_ASSET"
    name = "Fixed Asset"
    source_table = "ANLA"
    target_entity = "A_FixedAsset"

    def field_mappings(self):
        return [
            # Master data
            rule("BUKRS", "CompanyCode"),
            rule("ANLN1", "MasterFixedAsset", ConverterTag.STRIP_LEADING_ZEROS),
            rule("ANLN2", "FixedAsset", ConverterTag.STRIP_LEADING_ZEROS),
            rule("ANLKL", "AssetClass"),
            rule("TXT50", "FixedAssetDescription"),
            rule("TXA50", "AssetAdditionalDescription"),
            rule("SERNR", "AssetSerialNumber"),
            rule("INVNR", "InventoryNumber"),
            rule("AKTIV", "AssetCapitalizationDate", ConverterTag.TO_DATE),
            rule("DEAKT", "AssetDeactivationDate", ConverterTag.TO_DATE),
            rule("ZUGDT", "FirstAcquisitionDate", ConverterTag.TO_DATE),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("WERKS", "Plant"),
            rule("STORT", "AssetLocation"),
            rule("RAUMN", "Room"),
            rule("ANLUE", "AssetSuperNumber"),
            rule("EAUFN", "InvestmentOrder"),
            rule("AUFNR", "InternalOrder"),
            rule("GSBER", "BusinessArea"),
            rule("SEGMENT", "Segment"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("MENGE", "Quantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "BaseUnit"),
            rule("LVORM", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            # Depreciation area
            rule("AFABE", "DepreciationArea"),
            rule("AFABG", "DepreciationStartDate", ConverterTag.TO_DATE),
            rule("AFASL", "DepreciationKey"),
            rule("NDJAR", "PlannedUsefulLifeInYears", ConverterTag.TO_INTEGER),
            rule("NDPER", "PlannedUsefulLifeInPeriods", ConverterTag.TO_INTEGER),
            rule("SCHRW", "ScrapValueAmount", ConverterTag.TO_DECIMAL),
            rule("SCHRW_PROZ", "ScrapValuePercent", ConverterTag.TO_DECIMAL),
            rule("ZINKZ", "InterestIndicator"),
            rule("XAFAR", "IsDepreciationAreaActive", ConverterTag.BOOL_YN),
            rule("SAFBG", "SpecialDepreciationStartDate", ConverterTag.TO_DATE),
            rule("UMJAR", "TransferReserveYear"),
            rule("NACBW", "SubsequentAcquisition", ConverterTag.TO_DECIMAL),
            rule("URWRT", "OriginalAcquisitionValue", ConverterTag.TO_DECIMAL),
            rule("POSNR", "InvestmentMeasure"),
            rule("IPRKZ", "InvestmentProgram"),
            # Cumulative values
            rule("KANSW", "AcquisitionValue", ConverterTag.TO_DECIMAL),
            rule("KNAFA", "AccumulatedOrdinaryDepreciation", ConverterTag.TO_DECIMAL),
            rule("KAUFW", "RevaluationAmount", ConverterTag.TO_DECIMAL),
            rule("KSAFA", "AccumulatedSpecialDepreciation", ConverterTag.TO_DECIMAL),
            rule("KAAFA", "AccumulatedUnplannedDepreciation", ConverterTag.TO_DECIMAL),
            rule("KINVZ", "InvestmentGrant", ConverterTag.TO_DECIMAL),
            rule("NBV", "NetBookValue", ConverterTag.TO_DECIMAL),
            rule("NAFAZ", "OrdinaryDepreciationCurrentYear", ConverterTag.TO_DECIMAL),
            rule("SAFAZ", "SpecialDepreciationCurrentYear", ConverterTag.TO_DECIMAL),
            rule("AAFAZ", "UnplannedDepreciationCurrentYear", ConverterTag.TO_DECIMAL),
            rule("MAFAZ", "ManualDepreciationCurrentYear", ConverterTag.TO_DECIMAL),
            rule("GJAHR", "FiscalYear", ConverterTag.TO_INTEGER),
            rule("PERAF", "DepreciationPeriod", ConverterTag.TO_INTEGER),
            rule("ANSWL", "CurrentYearAcquisitions", ConverterTag.TO_DECIMAL),
            rule("ABGAN", "CurrentYearRetirements", ConverterTag.TO_DECIMAL),
            # Time-dependent assignment
            rule("KOSTLV", "ResponsibleCostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTRV", "ResponsibleProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("ADATU", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("BDATU", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("TXJCD", "TaxJurisdiction"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["CompanyCode", "MasterFixedAsset", "AssetClass", "AssetCapitalizationDate"],
            duplicate_keys=["CompanyCode", "MasterFixedAsset", "FixedAsset", "DepreciationArea"],
            ranges=[
                ("PlannedUsefulLifeInYears", 1, 99),
                ("FiscalYear", 1990, 2030),
                ("ScrapValuePercent", 0, 100),
            ],
        )

    def extract_mock(self):
        records = []
        for number, text in enumerate(ASSET_TEXTS, start=1):
            asset_class = CLASS_ORDER[(number - 1) % 5]
            _label, _key, _life, base_value = ASSET_CLASSES[asset_class]
            life, years, value, accumulated = _asset_values(number, asset_class, base_value)
            capitalized = f"{2024 - years}0101"
            first = number <= 20
            for area, key in DEPRECIATION_AREAS.items():
                records.append({
                    "BUKRS": "1000" if first else "2000",
                    "ANLN1": f"{number:012d}",
                    "ANLN2": "0000",
                    "ANLKL": asset_class,
                    "TXT50": text,
                    "SERNR": f"SN-{number:06d}" if number % 3 == 0 else "",
                    "INVNR": f"INV-{number:06d}",
                    "AKTIV": capitalized,
                    "ZUGDT": capitalized,
                    "KOSTL": "CC1001" if first else "CC2001",
                    "PRCTR": "PC0001" if first else "PC0002",
                    "WERKS": "1000" if first else "2000",
                    "STORT": f"LOC{number % 5 + 1:02d}",
                    "GSBER": "BU01",
                    "SEGMENT": "SEG1",
                    "LAND1": "us",
                    "MENGE": str(5 + number % 20) if asset_class == "3100" else "1",
                    "MEINS": "EA",
                    "AFABE": area,
                    "AFABG": capitalized,
                    "AFASL": key,
                    "NDJAR": str(life),
                    "NDPER": "0",
                    "SCHRW": f"{value * 0.05:.2f}",
                    "SCHRW_PROZ": "5.00",
                    "XAFAR": "X",
                    "NACBW": "0.00",
                    "URWRT": f"{value:.2f}",
                    "KANSW": f"{value:.2f}",
                    "KNAFA": f"{-accumulated:.2f}",
                    "NBV": f"{value - accumulated:.2f}",
                    "NAFAZ": f"{-value / life:.2f}",
                    "GJAHR": "2024",
                    "PERAF": "1",
                    "KOSTLV": "CC1001" if first else "CC2001",
                    "PRCTRV": "PC0001" if first else "PC0002",
                    "ADATU": capitalized,
                    "BDATU": "99991231",
                })
        return records


ACQUISITION_TEXTS = [
    "Main Office Building", "CNC Milling Machine", "Delivery Truck 18t", "Server Rack DC-01", "Executive Desk Set",
    "Production Hall A", "Hydraulic Press", "Company Sedan", "Network Switch Core", "Conference Table Lg",
    "Warehouse North", "Assembly Robot Arm", "Forklift Electric", "Laptop Fleet Batch", "Ergonomic Chairs x20",
    "R&D Laboratory", "Conveyor Belt System", "Refrigerated Van", "Storage Array NAS", "Filing Cabinet Bank",
    "Parking Structure", "Industrial Oven", "Service Vehicle", "UPS System Main", "Standing Desk Batch",
    "Annex Building", "Packaging Line", "Electric Vehicle", "Firewall Appliance", "Reception Counter",
]


class AssetAcquisitionMigrationObject(BaseMigrationObject):
    """Legacy asset values (ANLC take-over values) -> asset acquisition postings."""

    object_id = "ASSET_ACQUISITION"
    name = "Asset Acquisition"
    source_table = "ANLC"
    target_entity = "A_FixedAssetPostingAcquisition"

    def field_mappings(self):
        return [
            rule("BUKRS", "CompanyCode"),
            rule("ANLN1", "MasterFixedAsset", ConverterTag.STRIP_LEADING_ZEROS),
            rule("ANLN2", "FixedAsset", ConverterTag.STRIP_LEADING_ZEROS),
            rule("ANLKL", "AssetClass"),
            rule("AKTIV", "AssetCapitalizationDate", ConverterTag.TO_DATE),
            rule("DEAKT", "AssetDeactivationDate", ConverterTag.TO_DATE),
            rule("BZDAT", "AssetValueDate", ConverterTag.TO_DATE),
            rule("AFABG", "OrdinaryDeprStartDate", ConverterTag.TO_DATE),
            rule("TXT50", "FixedAssetDescription"),
            rule("TXA50", "AssetAdditionalDescription"),
            rule("ANSWL", "AcquisitionValue", ConverterTag.TO_DECIMAL),
            rule("KANSW", "CumulativeAcquisitionValue", ConverterTag.TO_DECIMAL),
            rule("NAFAG", "OrdinaryDepreciationPosted", ConverterTag.TO_DECIMAL),
            rule("KNAFA", "CumulativeOrdinaryDepreciation", ConverterTag.TO_DECIMAL),
            rule("KAUFW", "RevaluationAmount", ConverterTag.TO_DECIMAL),
            rule("NDJAR", "PlannedUsefulLifeInYears", ConverterTag.TO_INTEGER),
            rule("AFASL", "DepreciationKey"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("GSBER", "BusinessArea"),
            rule("SEGMENT", "Segment"),
            rule("WAERS", "TransactionCurrency"),
            rule("ANLUE", "AssetSuperNumber"),
            rule("INVNR", "InventoryNumber"),
            rule("GRUPPE", "AssetGroup"),
            rule("WERKS", "Plant"),
            rule("STORT", "AssetLocation"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("SERNR", "AssetSerialNumber"),
            rule("MENGE", "Quantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "BaseUnit"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("USNAM", "CreatedByUser"),
            rule("GJAHR", "FiscalYear", ConverterTag.TO_INTEGER),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["CompanyCode", "MasterFixedAsset", "AssetClass", "AcquisitionValue"],
            duplicate_keys=["CompanyCode", "MasterFixedAsset", "FixedAsset"],
            ranges=[("AcquisitionValue", 0, None), ("PlannedUsefulLifeInYears", 1, 99)],
        )

    def extract_mock(self):
        plants = ["1000", "1000", "2000", "1000", "2000"]
        cost_centers = ["CC1001", "CC1002", "CC2001", "CC1003", "CC2002"]
        records = []
        for number, text in enumerate(ACQUISITION_TEXTS, start=1):
            index = (number - 1) % 5
            asset_class = CLASS_ORDER[index]
            label, depreciation_key, _life, base_value = ASSET_CLASSES[asset_class]
            life, years, value, accumulated = _asset_values(number, asset_class, base_value)
            year = 2024 - years
            asset = f"{number:08d}"
            records.append({
                "BUKRS": "1000" if number <= 20 else "2000",
                "ANLN1": asset,
                "ANLN2": "0000",
                "ANLKL": asset_class,
                "AKTIV": f"{year}0101",
                "BZDAT": f"{year}0101",
                "AFABG": f"{year}0201",
                "TXT50": text,
                "TXA50": f"{text} - {label}",
                "ANSWL": f"{value:.2f}",
                "KANSW": f"{value:.2f}",
                "NAFAG": f"{accumulated:.2f}",
                "KNAFA": f"{accumulated:.2f}",
                "KAUFW": "0.00",
                "NDJAR": str(life),
                "AFASL": depreciation_key,
                "KOSTL": cost_centers[index],
                "PRCTR": f"PC{index + 1:04d}",
                "GSBER": "BU01",
                "SEGMENT": f"SEG{(number + 9) // 10}",
                "WAERS": "USD",
                "INVNR": f"INV-{asset}",
                "GRUPPE": label.upper().replace(" ", "_")[:10],
                "WERKS": plants[index],
                "STORT": f"LOC{number % 5 + 1:02d}",
                "LAND1": "US",
                "SERNR": f"SN-{asset}" if number % 4 == 0 else "",
                "MENGE": str(5 + number % 15) if asset_class == "3100" else "1",
                "MEINS": "EA",
                "ERDAT": f"{year}0101",
                "USNAM": "MIGRATION",
                "GJAHR": "2024",
            })
        return records
