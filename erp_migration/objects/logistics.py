"""
Logistics execution migration objects.

Warehouse bins with their quants (WM -> EWM), transportation routes
(-> TM lanes) and GTS trade compliance master data.
"""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, provenance, rule

STORAGE_TYPES = {
    "001": "High Rack",
    "002": "Bulk Storage",
    "003": "Fixed Bin",
    "010": "Goods Receipt",
    "020": "Goods Issue",
    "100": "Interim Storage",
}
WAREHOUSES = {"WH01": ("1000", "0001"), "WH02": ("2000", "0002")}


class WarehouseStructureMigrationObject(BaseMigrationObject):
    """
    LAGP/LQUA -> EWM storage bins and stock.

    Storage types below 010 are permanent storage with five bins each;
    the interim types get two staging bins.
    """

    object_id = "WAREHOUSE_STRUCTURE"
    name = "Warehouse Structure"
    source_table = "LAGP"
    target_entity = "WarehouseStorageBin"

    def field_mappings(self):
        return [
            # Warehouse and bin master (T300/T301/LAGP)
            rule("LGNUM", "Warehouse"),
            rule("LNUMT", "WarehouseDescription"),
            rule("WERKS", "Plant"),
            rule("LGORT", "StorageLocation"),
            rule("LGTYP", "StorageType"),
            rule("LTYPT", "StorageTypeName"),
            rule("LGPLA", "StorageBin"),
            rule("LGBER", "StorageSection"),
            rule("KOBER", "PickingArea"),
            rule("LPTYP", "StorageBinType"),
            rule("LKAPV", "MaximumWeight", ConverterTag.TO_DECIMAL),
            rule("MGEWI", "LoadingWeight", ConverterTag.TO_DECIMAL),
            rule("GEWEI", "WeightUnit"),
            rule("LGEWI", "MaximumVolume", ConverterTag.TO_DECIMAL),
            rule("VOLEH", "VolumeUnit"),
            rule("ANZLE", "MaximumStorageUnits", ConverterTag.TO_INTEGER),
            rule("ANZQU", "NumberOfQuants", ConverterTag.TO_INTEGER),
            rule("SKZUA", "IsBlockedForRemoval", ConverterTag.BOOL_YN),
            rule("SKZUE", "IsBlockedForPutaway", ConverterTag.BOOL_YN),
            # Quant (LQUA)
            rule("LQNUM", "Quant"),
            rule("MATNR", "Product", ConverterTag.PAD_LEFT_40),
            rule("WERKS_LQUA", "QuantPlant"),
            rule("LGORT_LQUA", "QuantStorageLocation"),
            rule("CHARG", "Batch"),
            rule("BESTQ", "StockCategory"),
            rule("SOBKZ", "SpecialStockIndicator"),
            rule("GESME", "TotalStockQuantity", ConverterTag.TO_DECIMAL),
            rule("VERME", "AvailableStockQuantity", ConverterTag.TO_DECIMAL),
            rule("MEINS", "BaseUnit"),
            rule("WDATU", "GoodsReceiptDate", ConverterTag.TO_DATE),
            rule("AKTTY", "ActivityArea"),
            # EWM targets
            rule("EWM_LGNUM", "EWMWarehouse"),
            rule("EWM_LGTYP", "EWMStorageType"),
            rule("EWM_LGPLA", "EWMStorageBin"),
            rule("RECORD_TYPE", "RecordType"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Warehouse", "StorageType", "StorageBin"],
            duplicate_keys=["Warehouse", "StorageType", "StorageBin"],
            ranges=[("TotalStockQuantity", 0, None)],
        )

    def extract_mock(self):
        records = []
        for warehouse, (plant, storage_location) in WAREHOUSES.items():
            for storage_type, type_name in STORAGE_TYPES.items():
                permanent = storage_type < "010"
                for b in range(1, (5 if permanent else 2) + 1):
                    n = len(records) + 1
                    total = 10 + (n * 7919) % 500
                    bin_id = f"{storage_type}-{b:03d}"
                    records.append({
                        "LGNUM": warehouse,
                        "LNUMT": f"Warehouse {warehouse}",
                        "WERKS": plant,
                        "LGORT": storage_location,
                        "LGTYP": storage_type,
                        "LTYPT": type_name,
                        "LGPLA": bin_id,
                        "LGBER": "MAIN" if permanent else "STAGING",
                        "KOBER": f"PA{storage_type}" if permanent else "",
                        "LPTYP": "PALLET" if storage_type == "001" else "CARTON",
                        "LKAPV": "2000" if storage_type == "001" else "500",
                        "MGEWI": str((n * 131) % 400),
                        "GEWEI": "KG",
                        "LGEWI": "10" if storage_type == "001" else "3",
                        "VOLEH": "M3",
                        "ANZLE": "4" if storage_type == "001" else "1",
                        "ANZQU": "1",
                        "LQNUM": f"Q{n:06d}",
                        "MATNR": f"MAT{(n - 1) % 10 + 1:04d}",
                        "WERKS_LQUA": plant,
                        "LGORT_LQUA": storage_location,
                        "CHARG": f"BATCH{n:03d}" if n % 3 == 0 else "",
                        "GESME": str(total),
                        "VERME": str(total - n % 5),
                        "MEINS": "EA",
                        "WDATU": "20240115",
                        "AKTTY": "PICK",
                        "EWM_LGNUM": f"/SCWM/{warehouse}",
                        "EWM_LGTYP": f"/SCWM/{storage_type}",
                        "EWM_LGPLA": f"/SCWM/{bin_id}",
                        "RECORD_TYPE": "BIN_QUANT",
                    })
        return records


# route -> (description, source country/region/zone, destination, km, transit days, shipping type)
ROUTES = [
    ("RT0001", "NYC to Chicago", "US/NY/Z01", "US/IL/Z02", 790, 2, "ROAD"),
    ("RT0002", "NYC to LA", "US/NY/Z01", "US/CA/Z05", 2800, 5, "ROAD"),
    ("RT0003", "Chicago to Houston", "US/IL/Z02", "US/TX/Z03", 1090, 2, "ROAD"),
    ("RT0004", "NYC to London", "US/NY/Z01", "GB/LN/Z10", 5570, 14, "SEA"),
    ("RT0005", "LA to Shanghai", "US/CA/Z05", "CN/SH/Z20", 11500, 21, "SEA"),
    ("RT0006", "Frankfurt to Munich", "DE/HE/Z30", "DE/BY/Z31", 400, 1, "ROAD"),
    ("RT0007", "NYC to Frankfurt", "US/NY/Z01", "DE/HE/Z30", 6200, 2, "AIR"),
    ("RT0008", "Tokyo to Shanghai", "JP/TK/Z40", "CN/SH/Z20", 1800, 3, "SEA"),
    ("RT0009", "Munich to Milan", "DE/BY/Z31", "IT/LM/Z32", 590, 1, "ROAD"),
    ("RT0010", "Houston to Mexico City", "US/TX/Z03", "MX/DF/Z50", 1550, 3, "ROAD"),
    ("RT0011", "Singapore to Sydney", "SG/SG/Z60", "AU/NS/Z61", 6300, 9, "SEA"),
    ("RT0012", "Chicago to Toronto", "US/IL/Z02", "CA/ON/Z70", 840, 2, "ROAD"),
]
# shipping type -> (carrier, carrier name, mode of transport, legs, cost rate, lane type)
SHIPPING_TYPES = {
    "ROAD": ("CARR001", "FastFreight Inc.", "01", 1, "2.20", "TRUCK"),
    "SEA": ("CARR002", "Ocean Global Shipping", "03", 3, "0.80", "OCEAN"),
    "AIR": ("CARR003", "AirExpress Logistics", "05", 2, "5.50", "AIR"),
}


class TransportRouteMigrationObject(BaseMigrationObject):
    """TVRO/TVRAB -> TM transportation lanes. Multi-leg routes yield one record per leg."""

    object_id = "TRANSPORT_ROUTE"
    name = "Transportation Route"
    source_table = "TVRO"
    target_entity = "TransportationLane"

    def field_mappings(self):
        return [
            # Route (TVRO)
            rule("ROUTE", "TransportationRoute"),
            rule("BEZEI", "RouteDescription"),
            rule("VSART", "ShippingType"),
            rule("VSBED", "ShippingCondition"),
            rule("TRAZT", "TransitDurationInDays", ConverterTag.TO_INTEGER),
            rule("DISTZ", "Distance", ConverterTag.TO_DECIMAL),
            rule("MEDST", "DistanceUnit"),
            # Departure and destination zones
            rule("ALAND", "DepartureCountry", ConverterTag.TO_UPPER_CASE),
            rule("AREGIO", "DepartureRegion"),
            rule("AZONE", "DepartureTransportZone"),
            rule("VSTEL", "ShippingPoint"),
            rule("LLAND", "DestinationCountry", ConverterTag.TO_UPPER_CASE),
            rule("LREGIO", "DestinationRegion"),
            rule("LZONE", "DestinationTransportZone"),
            # Carrier
            rule("TDLNR", "Carrier", ConverterTag.PAD_LEFT_10),
            rule("TDLNR_NAME", "CarrierName"),
            rule("VSAVL", "ModeOfTransport"),
            # Legs (TVRAB)
            rule("ABNUM", "LegSequence", ConverterTag.TO_INTEGER),
            rule("KNANF", "LegStartPoint"),
            rule("KNEND", "LegEndPoint"),
            # Freight cost
            rule("FRACHTKL", "FreightClass"),
            rule("KBETR", "FreightRate", ConverterTag.TO_DECIMAL),
            rule("KMEIN", "FreightRateUnit"),
            rule("WAERS", "Currency"),
            # TM lane
            rule("TM_LANE_ID", "TransportationLaneID"),
            rule("TM_LANE_TYPE", "TransportationLaneType"),
            rule("AKTIV", "IsActive", ConverterTag.BOOL_YN),
            rule("DATAB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("DATBI", "ValidityEndDate", ConverterTag.TO_DATE),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["TransportationRoute", "RouteDescription", "ShippingType"],
            duplicate_keys=["TransportationRoute", "LegSequence"],
            ranges=[("TransitDurationInDays", 0, 60), ("Distance", 0, None)],
        )

    def extract_mock(self):
        records = []
        for route, description, source, destination, distance, days, shipping_type in ROUTES:
            from_country, from_region, from_zone = source.split("/")
            to_country, to_region, to_zone = destination.split("/")
            carrier, carrier_name, mode, legs, rate, lane_type = SHIPPING_TYPES[shipping_type]
            stops = [from_zone] + [f"VIA_{route}_{leg}" for leg in range(1, legs)] + [to_zone]
            for leg in range(1, legs + 1):
                records.append({
                    "ROUTE": route,
                    "BEZEI": description,
                    "VSART": shipping_type,
                    "VSBED": "02" if shipping_type == "AIR" else "01",
                    "TRAZT": str(days),
                    "DISTZ": str(distance),
                    "MEDST": "KM",
                    "ALAND": from_country.lower(),
                    "AREGIO": from_region,
                    "AZONE": from_zone,
                    "VSTEL": "1000",
                    "LLAND": to_country.lower(),
                    "LREGIO": to_region,
                    "LZONE": to_zone,
                    "TDLNR": carrier,
                    "TDLNR_NAME": carrier_name,
                    "VSAVL": mode,
                    "ABNUM": str(leg),
                    "KNANF": stops[leg - 1],
                    "KNEND": stops[leg],
                    "FRACHTKL": "EXPRESS" if shipping_type == "AIR" else "STANDARD",
                    "KBETR": rate,
                    "KMEIN": "KG",
                    "WAERS": "USD",
                    "TM_LANE_ID": f"LANE_{route}",
                    "TM_LANE_TYPE": lane_type,
                    "AKTIV": "X",
                    "DATAB": "20200101",
                    "DATBI": "99991231",
                })
        return records


def compliance_record(category: str, number: int, prefix: str, description: str, **fields):
    return {
        "COMPL_ID": f"{prefix}{number:04d}",
        "COMPL_TYPE": category,
        "DESCRIPTION": description,
        "STATUS": "ACTIVE",
        "VALID_FROM": "20200101",
        "VALID_TO": "99991231",
        **fields,
    }


class TradeComplianceMigrationObject(BaseMigrationObject):
    """
    GTS master data -> S/4HANA international trade.

    Covers sanctioned party screening results, export control
    classifications, customs tariff numbers and trade licenses. The
    records come from GTS, not ECC, and are stamped accordingly.
    """

    object_id = "TRADE_COMPLIANCE"
    name = "Trade Compliance"
    source_table = "/SAPSLL/PNTPR"
    target_entity = "TradeComplianceItem"

    def field_mappings(self):
        return [
            rule("COMPL_ID", "ComplianceId"),
            rule("COMPL_TYPE", "ComplianceType"),
            rule("DESCRIPTION", "Description"),
            # Business partner screening
            rule("PARTNER", "BusinessPartner", ConverterTag.PAD_LEFT_10),
            rule("PARTNER_NAME", "BusinessPartnerName"),
            rule("COUNTRY", "Country", ConverterTag.TO_UPPER_CASE),
            rule("REGION", "Region"),
            rule("SPL_STATUS", "ScreeningStatus"),
            rule("SPL_LIST", "SanctionedPartyList"),
            rule("SPL_MATCH_SCORE", "MatchScore", ConverterTag.TO_DECIMAL),
            rule("LAST_SCREENED", "LastScreeningDate", ConverterTag.TO_DATE),
            # Export control
            rule("ECCN", "ExportControlClassNumber"),
            rule("ECCN_DESC", "ExportControlClassName"),
            rule("AL_CODE", "ControlList"),
            rule("DEST_COUNTRY", "DestinationCountry", ConverterTag.TO_UPPER_CASE),
            rule("LICENSE_REQ", "LicenseIsRequired", ConverterTag.BOOL_YN),
            # Customs
            rule("HS_CODE", "CommodityCode"),
            rule("HS_DESC", "CommodityCodeName"),
            rule("TARIFF_RATE", "TariffRatePercent", ConverterTag.TO_DECIMAL),
            rule("ORIGIN_COUNTRY", "CountryOfOrigin", ConverterTag.TO_UPPER_CASE),
            rule("PREF_ELIGIBLE", "IsPreferenceEligible", ConverterTag.BOOL_YN),
            rule("FTA_CODE", "TradeAgreement"),
            # Licenses
            rule("LICENSE_NO", "LicenseNumber"),
            rule("LICENSE_TYPE", "LicenseType"),
            rule("LICENSE_QTY", "LicensedQuantity", ConverterTag.TO_DECIMAL),
            rule("LICENSE_USED", "UsedQuantity", ConverterTag.TO_DECIMAL),
            rule("LICENSE_UNIT", "QuantityUnit"),
            rule("LICENSE_VALID", "LicenseValidityEndDate", ConverterTag.TO_DATE),
            # Product
            rule("MATNR", "Product", ConverterTag.PAD_LEFT_40),
            rule("MATNR_DESC", "ProductDescription"),
            # Validity
            rule("STATUS", "RecordStatus"),
            rule("VALID_FROM", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("VALID_TO", "ValidityEndDate", ConverterTag.TO_DATE),
            *provenance(self.object_id, source_system="GTS"),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ComplianceId", "ComplianceType", "Description"],
            duplicate_keys=["ComplianceId"],
            ranges=[("MatchScore", 0, 100), ("TariffRatePercent", 0, 100)],
            formats=[("CommodityCode", r"^\d{4}\.\d{2}\.\d{2}$", "HS tariff number")],
        )

    def extract_mock(self):
        records = []
        for partner, partner_name, country, status, score in [
            ("BP001", "Acme Global", "US", "CLEAR", "0"),
            ("BP002", "EuroTrade GmbH", "DE", "CLEAR", "0"),
            ("BP003", "Asia Pacific Ltd", "SG", "REVIEW", "72"),
            ("BP004", "Blocked Entity LLC", "IR", "BLOCKED", "98"),
            ("BP005", "CaribTrade Inc", "CU", "BLOCKED", "95"),
        ]:
            records.append(compliance_record(
                "SPL_SCREENING", len(records) + 1, "SPL", f"SPL Check: {partner_name}",
                PARTNER=partner, PARTNER_NAME=partner_name, COUNTRY=country,
                SPL_STATUS=status, SPL_LIST="SDN", SPL_MATCH_SCORE=score, LAST_SCREENED="20240601",
            ))
        for eccn, description, destination, license_required in [
            ("EAR99", "No license required", "DE", ""),
            ("3A001", "Electronics", "CN", "X"),
            ("5A002", "Encryption", "RU", "X"),
            ("1C350", "Chemicals", "IN", ""),
            ("9A004", "Propulsion", "KR", ""),
        ]:
            n = len(records) + 1
            records.append(compliance_record(
                "EXPORT_CONTROL", n, "EXP", f"Export: {eccn} - {description}",
                ECCN=eccn, ECCN_DESC=description, AL_CODE="CCL",
                DEST_COUNTRY=destination, LICENSE_REQ=license_required,
                MATNR=f"MAT{n:04d}", MATNR_DESC=description,
            ))
        for hs_code, description, rate, origin, agreement in [
            ("8471.30.01", "Laptops", "0", "CN", ""),
            ("8703.23.00", "Automobiles", "2.5", "DE", "EU-FTA"),
            ("3004.90.92", "Pharmaceuticals", "0", "IN", ""),
            ("6110.20.20", "Cotton Sweaters", "16.5", "BD", "GSP"),
            ("2204.21.50", "Wine", "6.3", "FR", "EU-FTA"),
            ("0901.11.00", "Coffee beans", "0", "BR", ""),
            ("7108.12.10", "Gold", "0", "ZA", ""),
            ("8517.12.00", "Smartphones", "0", "KR", "KORUS"),
        ]:
            n = len(records) + 1
            records.append(compliance_record(
                "CUSTOMS_TARIFF", n, "TAR", f"HS {hs_code}: {description}",
                HS_CODE=hs_code, HS_DESC=description, TARIFF_RATE=rate, ORIGIN_COUNTRY=origin,
                PREF_ELIGIBLE="X" if agreement else "", FTA_CODE=agreement,
                MATNR=f"MAT{n:04d}", MATNR_DESC=description,
            ))
        for license_type, number, quantity, used, unit, valid_to in [
            ("GENERAL", "LIC-GEN-001", "999999", "50000", "EA", "20251231"),
            ("INDIVIDUAL", "LIC-IND-001", "1000", "750", "KG", "20240930"),
            ("INDIVIDUAL", "LIC-IND-002", "500", "100", "EA", "20250630"),
            ("GENERAL", "LIC-GEN-002", "999999", "120000", "EA", "20261231"),
        ]:
            records.append(compliance_record(
                "TRADE_LICENSE", len(records) + 1, "LIC", f"License {number}",
                LICENSE_NO=number, LICENSE_TYPE=license_type, LICENSE_QTY=quantity,
                LICENSE_USED=used, LICENSE_UNIT=unit, LICENSE_VALID=valid_to,
            ))
        return records
