"""
Business Partner migration object.

Migrates customers (KNA1/KNB1/KNVV) and vendors (LFA1/LFB1/LFM1) into
unified business partners. Customer and vendor records for the same
organisation are merged into one partner carrying both roles.
"""

from typing import Any, Dict, List, Set

from ..models.mapping import ConverterTag, QualityChecks
from ..models.record import MergedBusinessPartner, Record, TransformOutput, has_value
from .base import BaseMigrationObject, constant, provenance, rule

CUSTOMER_ROLE = "FLCU01"
SUPPLIER_ROLE = "FLVN01"

CITIES = ["New York", "Chicago", "Los Angeles", "Houston", "Phoenix"]


def roles_of(record: Record) -> Set[str]:
    roles = set()
    if has_value(record.get("Customer")):
        roles.add(CUSTOMER_ROLE)
    if has_value(record.get("Supplier")):
        roles.add(SUPPLIER_ROLE)
    return roles


def merge_key(record: Record) -> str:
    name = str(record.get("BusinessPartnerFullName") or "").upper()
    city = str(record.get("CityName") or "").upper()
    return f"{name}|{city}"


def merge_roles(records: List[Record]) -> List[MergedBusinessPartner]:
    """
    Merge records that share full name and city (case-insensitive).

    The first record seen wins; its empty fields are filled from later
    duplicates. Roles accumulate from Customer / Supplier presence.
    """
    groups: Dict[str, Dict[str, Any]] = {}

    for record in records:
        key = merge_key(record)
        group = groups.get(key)
        if group is None:
            groups[key] = {"data": dict(record), "roles": roles_of(record), "count": 1}
            continue

        existing = group["data"]
        for field_name, value in record.items():
            if not has_value(existing.get(field_name)) and has_value(value):
                existing[field_name] = value
        group["roles"] |= roles_of(record)
        group["count"] += 1

    return [
        MergedBusinessPartner(data=g["data"], roles=frozenset(g["roles"]), merged_count=g["count"])
        for g in groups.values()
    ]


class BusinessPartnerMigrationObject(BaseMigrationObject):
    """Customers and vendors -> Business Partner."""

    object_id = "BUSINESS_PARTNER"
    name = "Business Partner"
    source_table = "KNA1"
    target_entity = "A_BusinessPartner"

    def field_mappings(self):
        return [
            # General data
            rule("PARTNER", "BusinessPartner", ConverterTag.PAD_LEFT_10),
            rule("TYPE", "BusinessPartnerCategory", default="2",
                 value_map={"1": "1", "2": "2", "ORG": "2", "PERSON": "1"}),
            rule("NAME1", "BusinessPartnerFullName"),
            rule("NAME1", "OrganizationBPName1"),
            rule("NAME2", "OrganizationBPName2"),
            rule("NAME3", "OrganizationBPName3"),
            rule("NAME4", "OrganizationBPName4"),
            rule("SORTL", "SearchTerm1", ConverterTag.TO_UPPER_CASE),
            rule("STCEG", "TaxNumber1"),
            rule("STCD1", "TaxNumber2"),
            rule("STCD2", "TaxNumber3"),
            rule("STKZN", "TaxNumberResponsible"),
            rule("BRSCH", "IndustrySector"),
            rule("KTOKD", "BusinessPartnerGrouping"),
            rule("LOEVM", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            rule("SPERR", "IsBlocked", ConverterTag.BOOL_YN),
            rule("SPRAS", "Language", ConverterTag.TO_UPPER_CASE),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            rule("KONZS", "GroupKey"),
            rule("KUNNR", "Customer", ConverterTag.PAD_LEFT_10),
            rule("LIFNR", "Supplier", ConverterTag.PAD_LEFT_10),
            constant("AuthorizationGroup", ""),
            # Address
            rule("STRAS", "StreetName"),
            rule("HAUSNR", "HouseNumber"),
            rule("PFACH", "POBox"),
            rule("ORT01", "CityName"),
            rule("ORT02", "District"),
            rule("REGIO", "Region"),
            rule("PSTLZ", "PostalCode"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("TELF1", "PhoneNumber"),
            rule("TELF2", "PhoneNumber2"),
            rule("TELFX", "FaxNumber"),
            rule("SMTP_ADDR", "EmailAddress"),
            rule("ADRNR", "AddressID"),
            rule("PSTL2", "POBoxPostalCode"),
            rule("PFORT", "POBoxCity"),
            rule("LANDX", "CountryName"),
            rule("TIME_ZONE", "TimeZone"),
            rule("TXJCD", "TaxJurisdiction"),
            rule("TRANSPZONE", "TransportZone"),
            rule("LOCCO", "LocationCoordinate"),
            # Bank
            rule("BANKS", "BankCountry", ConverterTag.TO_UPPER_CASE),
            rule("BANKL", "BankNumber"),
            rule("BANKN", "BankAccount"),
            rule("BKONT", "BankControlKey"),
            rule("BKREF", "BankReference"),
            rule("KOINH", "BankAccountHolder"),
            rule("SWIFT", "SWIFTCode"),
            rule("IBAN", "IBANNumber"),
            rule("BVTYP", "CollectionAuthority"),
            rule("XEZER", "PaymentDefault", ConverterTag.BOOL_YN),
            # Customer role
            rule("KUKLA", "CustomerClassification"),
            rule("AKONT", "ReconciliationAccount"),
            rule("ZUAWA", "SortKey"),
            rule("FDGRV", "PlanningGroup"),
            rule("ZTERM", "PaymentTerms"),
            rule("TOGRU", "ToleranceGroup"),
            rule("VKORG", "SalesOrganization"),
            rule("VTWEG", "DistributionChannel"),
            rule("SPART", "Division"),
            rule("VKBUR", "SalesOffice"),
            rule("VKGRP", "SalesGroup"),
            rule("KDGRP", "CustomerGroup"),
            rule("KVGR1", "CustomerGrouping1"),
            rule("WAERS", "Currency"),
            rule("KALKS", "PricingProcedure"),
            # Vendor role
            rule("EKORG", "PurchasingOrganization"),
            rule("EKGRP", "PurchasingGroup"),
            rule("WEBRE", "GoodsReceiptBased", ConverterTag.BOOL_YN),
            rule("LEBRE", "ServiceBasedInvoice", ConverterTag.BOOL_YN),
            rule("MWSKZ", "TaxCode"),
            rule("REPRF", "CheckDoubleInvoice", ConverterTag.BOOL_YN),
            rule("MINBW", "MinimumOrderValue", ConverterTag.TO_DECIMAL),
            rule("VERKF", "ContactPerson"),
            rule("TELF1_V", "VendorPhone"),
            rule("INCO1", "Incoterms"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["BusinessPartner", "BusinessPartnerFullName", "Country"],
            duplicate_keys=["TaxNumber1"],
            fuzzy_keys=["BusinessPartnerFullName", "StreetName"],
            fuzzy_threshold=0.85,
        )

    def transform_hook(self, records):
        partners = merge_roles(records)
        return TransformOutput(
            records=[p.to_record() for p in partners],
            extra={
                "merged_count": len(records) - len(partners),
                "dual_role_count": sum(1 for p in partners if {CUSTOMER_ROLE, SUPPLIER_ROLE} <= p.roles),
            },
        )

    def extract_live(self, adapter, options):
        """Customers and vendors live in separate tables; read both."""
        customers = adapter.read_table("KNA1", options).rows
        vendors = adapter.read_table("LFA1", options).rows
        return customers + vendors

    def extract_mock(self):
        records = []
        for i in range(1, 51):
            records.append(_partner(
                PARTNER=str(100000 + i), NAME1=f"Customer Corp {i}", SORTL=f"CUST{i:03d}",
                STCEG=f"US{100000000 + i}", STCD1=str(200000000 + i), BRSCH="MANU", KTOKD="D",
                ERDAT="20200115", KUNNR=str(100000 + i),
                STRAS=f"{100 + i} Main Street", ORT01=CITIES[(i - 1) % 5], REGIO="NY",
                PSTLZ=f"1{i:04d}", TELF1=f"212-555-{i:04d}", SMTP_ADDR=f"contact{i}@customer{i}.com",
                ADRNR=str(300000 + i), TIME_ZONE="EST", TRANSPZONE="TZ01",
                BANKS="US", BANKL="021000021", BANKN=str(400000000 + i), BKONT="01",
                KOINH=f"Customer Corp {i}", SWIFT="CHASUS33",
                KUKLA="A", AKONT="0000140000", ZUAWA="001", FDGRV="A1", ZTERM="0030", TOGRU="0001",
                VKORG="1000", VTWEG="10", SPART="00", KDGRP="01", WAERS="USD", KALKS="1",
            ))

        for i in range(1, 31):
            records.append(_partner(
                PARTNER=str(200000 + i), NAME1=f"Vendor Supplies {i}", SORTL=f"VEND{i:03d}",
                STCEG=f"US{500000000 + i}", STCD1=str(600000000 + i), BRSCH="RETL", KTOKD="K",
                ERDAT="20190601", LIFNR=str(200000 + i),
                STRAS=f"{200 + i} Supply Ave", ORT01=CITIES[(i - 1) % 5], REGIO="CA",
                PSTLZ=f"9{i:04d}", TELF1=f"310-555-{i:04d}", SMTP_ADDR=f"ap{i}@vendor{i}.com",
                ADRNR=str(700000 + i), TIME_ZONE="PST", TRANSPZONE="TZ02",
                BANKS="US", BANKL="021000089", BANKN=str(800000000 + i), BKONT="01",
                KOINH=f"Vendor Supplies {i}", SWIFT="CITIUS33",
                EKORG="1000", EKGRP="001", WEBRE="X", MWSKZ="V1", REPRF="X", MINBW="100.00",
                VERKF=f"Contact Person {i}", TELF1_V=f"310-555-{100 + i:04d}", INCO1="FOB",
            ))

        # Same name, city and tax id as customers 1-5, registered as vendors
        for i in range(1, 6):
            records.append(_partner(
                PARTNER=str(300000 + i), NAME1=f"Customer Corp {i}", SORTL=f"BOTH{i:03d}",
                STCEG=f"US{100000000 + i}", BRSCH="MANU", KTOKD="K",
                ERDAT="20210301", LIFNR=str(300000 + i),
                STRAS=f"{100 + i} Main Street", ORT01=CITIES[(i - 1) % 5], REGIO="NY",
                PSTLZ=f"1{i:04d}", TELF1=f"212-555-{i:04d}",
                ADRNR=str(900000 + i), TIME_ZONE="EST", TRANSPZONE="TZ01",
                EKORG="1000", EKGRP="002", WEBRE="X", LEBRE="X", MWSKZ="V2", MINBW="500.00",
                VERKF=f"Dual Contact {i}", TELF1_V=f"212-555-{200 + i:04d}", INCO1="CIF",
            ))

        return records


SOURCE_FIELDS = (
    "PARTNER TYPE NAME1 NAME2 NAME3 NAME4 SORTL STCEG STCD1 STCD2 STKZN BRSCH KTOKD LOEVM SPERR "
    "SPRAS ERDAT ERNAM AEDAT AENAM KONZS KUNNR LIFNR STRAS HAUSNR PFACH ORT01 ORT02 REGIO PSTLZ "
    "LAND1 TELF1 TELF2 TELFX SMTP_ADDR ADRNR PSTL2 PFORT LANDX TIME_ZONE TXJCD TRANSPZONE LOCCO "
    "BANKS BANKL BANKN BKONT BKREF KOINH SWIFT IBAN BVTYP XEZER KUKLA AKONT ZUAWA FDGRV ZTERM "
    "TOGRU VKORG VTWEG SPART VKBUR VKGRP KDGRP KVGR1 WAERS KALKS EKORG EKGRP WEBRE LEBRE MWSKZ "
    "REPRF MINBW VERKF TELF1_V INCO1"
).split()


def _partner(**values: str) -> Record:
    """A KNA1/LFA1-shaped row: every source field present, blank unless given."""
    record = dict.fromkeys(SOURCE_FIELDS, "")
    record.update(
        TYPE="ORG", SPRAS="EN", ERNAM="ADMIN", AEDAT="20240101", AENAM="MIGRATION",
        LAND1="US", LANDX="United States",
    )
    record.update(values)
    return record
