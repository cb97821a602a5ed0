"""
Controlling migration objects.

Cost centers, profit centers, cost elements, profitability segments,
internal orders and WBS elements.
"""

from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, mock_amount, provenance, rule

COST_CENTER_NAMES = [
    "Production Line 1", "Production Line 2", "Administration", "Finance Dept",
    "Human Resources", "IT Department", "Sales Domestic", "Sales Export",
    "Warehouse Ops", "Quality Control", "R&D Lab", "Maintenance",
    "Executive Office", "Legal Department", "Marketing", "Customer Service",
    "Procurement", "Engineering", "Facilities", "Training Center",
]


class CostCenterMigrationObject(BaseMigrationObject):
    """CSKS/CSKT -> cost center master."""

    object_id = "COST_CENTER"
    name = "Cost Center"
    source_table = "CSKS"
    target_entity = "A_CostCenter"

    def field_mappings(self):
        return [
            rule("KOKRS", "ControllingArea"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("DATBI", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("DATAB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("KTEXT", "CostCenterName"),
            rule("LTEXT", "CostCenterDescription"),
            rule("VERAK", "PersonResponsible"),
            rule("VERAK_USER", "ResponsibleUser"),
            rule("KOSAR", "CostCenterCategory"),
            rule("KHINR", "CostCenterStandardHierArea"),
            rule("BUKRS", "CompanyCode"),
            rule("GSBER", "BusinessArea"),
            rule("FUNC_AREA", "FunctionalArea"),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("WERKS", "Plant"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("ANRED", "FormOfAddress"),
            rule("NAME1", "AddressName"),
            rule("NAME2", "AddressName2"),
            rule("NAME3", "AddressName3"),
            rule("NAME4", "AddressName4"),
            rule("ORT01", "CityName"),
            rule("PSTLZ", "PostalCode"),
            rule("REGIO", "Region"),
            rule("STRAS", "StreetName"),
            rule("TELF1", "PhoneNumber"),
            rule("TELFX", "FaxNumber"),
            rule("WAERS", "CostCenterCurrency"),
            rule("SPRAS", "Language", ConverterTag.TO_UPPER_CASE),
            rule("BKZKP", "IsBlockedForPrimaryCosts", ConverterTag.BOOL_YN),
            rule("PKZKP", "IsBlockedForPlanPrimaryCosts", ConverterTag.BOOL_YN),
            rule("BKZKS", "IsBlockedForSecondaryCosts", ConverterTag.BOOL_YN),
            rule("BKZER", "IsBlockedForRevenues", ConverterTag.BOOL_YN),
            rule("SEGMENT", "Segment"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ControllingArea", "CostCenter", "CostCenterName", "ValidityStartDate"],
            duplicate_keys=["ControllingArea", "CostCenter", "ValidityStartDate"],
        )

    def extract_mock(self):
        categories = ["E", "F", "H", "L", "P"]
        records = []
        for i, cost_center_name in enumerate(COST_CENTER_NAMES, start=1):
            east = i <= 10
            records.append({
                "KOKRS": "1000",
                "KOSTL": f"CC{i:04d}",
                "DATBI": "99991231",
                "DATAB": "20200101",
                "KTEXT": cost_center_name,
                "LTEXT": f"{cost_center_name} - Company 1000",
                "VERAK": f"Manager {i}",
                "VERAK_USER": f"MGR{i:03d}",
                "KOSAR": categories[(i - 1) % 5],
                "KHINR": "H1",
                "BUKRS": "1000" if i <= 15 else "2000",
                "GSBER": "BU01",
                "FUNC_AREA": f"FA{(i - 1) % 4 + 1:02d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "WERKS": "1000" if east else "2000",
                "LAND1": "us",
                "NAME1": cost_center_name,
                "ORT01": "New York" if east else "Chicago",
                "PSTLZ": "10001" if east else "60601",
                "REGIO": "NY" if east else "IL",
                "STRAS": f"{100 + i} Corporate Blvd",
                "TELF1": f"555-{1000 + i}",
                "WAERS": "USD",
                "SPRAS": "en",
                "BKZER": "X" if i <= 5 else "",
                "SEGMENT": "SEG1",
            })
        return records


PROFIT_CENTERS = [
    ("PC0001", "Industrial Products", "Machinery and industrial equipment"),
    ("PC0002", "Consumer Products", "Retail and consumer goods"),
    ("PC0003", "Services", "Installation, maintenance and consulting services"),
    ("PC0004", "Spare Parts", "After-market spare parts business"),
    ("PC0005", "Corporate", "Corporate functions and shared services"),
]


class ProfitCenterMigrationObject(BaseMigrationObject):
    """
    CEPC/CEPCT -> profit center master.

    Profit centers exist per controlling area and company code, so the
    mock set repeats the standard hierarchy for both company codes and
    adds the dummy profit center each controlling area needs.
    """

    object_id = "PROFIT_CENTER"
    name = "Profit Center"
    source_table = "CEPC"
    target_entity = "A_ProfitCenter"

    def field_mappings(self):
        return [
            rule("KOKRS", "ControllingArea"),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("DATBI", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("DATAB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("KTEXT", "ProfitCenterName"),
            rule("LTEXT", "ProfitCenterLongName"),
            rule("VERAK", "ProfitCtrResponsiblePersonName"),
            rule("VERAK_USER", "ProfitCtrResponsibleUser"),
            rule("KHINR", "ProfitCenterStandardHierarchy"),
            rule("ABTEI", "Department"),
            rule("BUKRS", "CompanyCode"),
            rule("SEGMENT", "Segment"),
            rule("GSBER", "BusinessArea"),
            rule("WAERS", "ProfitCenterCurrency"),
            rule("LOCK_IND", "IsBlocked", ConverterTag.BOOL_YN),
            rule("PCA_TEMPLATE", "FormulaPlanningTemplate"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("REGIO", "Region"),
            rule("ORT01", "CityName"),
            rule("PSTLZ", "PostalCode"),
            rule("STRAS", "StreetName"),
            rule("TELF1", "PhoneNumber"),
            rule("SPRAS", "Language", ConverterTag.TO_UPPER_CASE),
            rule("ERSDA", "CreationDate", ConverterTag.TO_DATE),
            rule("USNAM", "CreatedByUser"),
            rule("NAME1", "AddressName"),
            rule("XDUMMY", "IsDummyProfitCenter", ConverterTag.BOOL_YN),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ControllingArea", "ProfitCenter", "ProfitCenterName", "ValidityStartDate"],
            duplicate_keys=["ControllingArea", "ProfitCenter", "CompanyCode"],
        )

    def extract_mock(self):
        records = []
        sites = [("1000", "US", "NY", "New York", "10001"), ("2000", "US", "IL", "Chicago", "60601")]
        for company_code, country, region, city, postal_code in sites:
            for position, (profit_center, short_text, long_text) in enumerate(PROFIT_CENTERS, start=1):
                records.append({
                    "KOKRS": "1000",
                    "PRCTR": profit_center,
                    "DATBI": "99991231",
                    "DATAB": "20200101",
                    "KTEXT": short_text,
                    "LTEXT": long_text,
                    "VERAK": f"Segment Manager {position}",
                    "VERAK_USER": f"PCM{position:03d}",
                    "KHINR": "PCH_ROOT",
                    "ABTEI": f"D{position:02d}",
                    "BUKRS": company_code,
                    "SEGMENT": "SEG1" if position <= 4 else "SEG9",
                    "GSBER": "BU01",
                    "WAERS": "USD",
                    "LAND1": country,
                    "REGIO": region,
                    "ORT01": city,
                    "PSTLZ": postal_code,
                    "STRAS": f"{position * 10} Commerce Way",
                    "TELF1": f"555-20{position:02d}",
                    "SPRAS": "EN",
                    "ERSDA": "20191201",
                    "USNAM": "MIGRATION",
                    "NAME1": short_text,
                })
            for region_code in ("EAST", "WEST", "CENT", "SOUTH", "NORTH"):
                records.append({
                    "KOKRS": "1000",
                    "PRCTR": f"PCR{region_code[:3]}",
                    "DATBI": "99991231",
                    "DATAB": "20220101",
                    "KTEXT": f"Region {region_code.title()}",
                    "LTEXT": f"Regional sales {region_code.lower()} ({company_code})",
                    "KHINR": "PCH_REGION",
                    "BUKRS": company_code,
                    "SEGMENT": "SEG1",
                    "WAERS": "USD",
                    "LAND1": country,
                    "SPRAS": "EN",
                    "ERSDA": "20211115",
                    "USNAM": "MIGRATION",
                })
        records.append({
            "KOKRS": "1000",
            "PRCTR": "PCDUMMY",
            "DATBI": "99991231",
            "DATAB": "20200101",
            "KTEXT": "Dummy Profit Center",
            "KHINR": "PCH_ROOT",
            "WAERS": "USD",
            "SPRAS": "EN",
            "XDUMMY": "X",
        })
        return records


PRIMARY_COST_ELEMENTS = [
    ("400000", "Revenue - Domestic Sales", "Domestic sales revenue postings"),
    ("401000", "Revenue - Export Sales", "Export sales revenue postings"),
    ("410000", "Sales Deductions", "Discounts, rebates and allowances"),
    ("500000", "Raw Material Consumption", "Raw material usage and consumption"),
    ("510000", "Packaging Materials", "Packaging material costs"),
    ("520000", "Operating Supplies", "Operating supplies consumption"),
    ("600000", "Salaries & Wages", "Employee salary and wage expense"),
    ("610000", "Social Security", "Employer social security contributions"),
    ("620000", "Benefits & Pension", "Employee benefits and pension costs"),
    ("630000", "Travel Expenses", "Business travel and transportation"),
    ("640000", "Depreciation Expense", "Planned depreciation of fixed assets"),
    ("650000", "Rent & Lease", "Facility rent and lease payments"),
    ("660000", "Repairs & Maintenance", "Repair and maintenance costs"),
    ("670000", "Utilities", "Electricity, water and gas expenses"),
    ("680000", "Insurance", "Property and liability insurance"),
    ("690000", "Professional Services", "Legal, audit and consulting fees"),
    ("700000", "Marketing & Advertising", "Marketing campaign and ad spend"),
    ("710000", "IT & Telecom", "IT services and telecom charges"),
    ("720000", "Office Supplies", "General office supply expenses"),
    ("800000", "Interest Expense", "Interest on borrowings"),
    ("810000", "Bank Charges", "Banking fees and commissions"),
    ("820000", "Foreign Exchange Loss", "Realized FX loss on transactions"),
    ("900000", "Tax Expense", "Income tax and other taxes"),
]

# (cost element, text, long text, category: 41 overhead, 42 assessment, 43 activity allocation)
SECONDARY_COST_ELEMENTS = [
    ("940100", "Assessment - Admin OH", "Admin overhead assessment", "42"),
    ("940200", "Assessment - Prod OH", "Production overhead assessment", "42"),
    ("940300", "Assessment - IT Costs", "IT cost center assessment", "42"),
    ("941100", "Distribution - Mgmt", "Management cost distribution", "42"),
    ("941200", "Distribution - Facility", "Facility cost distribution", "42"),
    ("941300", "Distribution - Energy", "Energy cost distribution", "42"),
    ("943100", "Internal Activity - Labor", "Internal labor activity allocation", "43"),
    ("943200", "Internal Activity - Machine", "Machine hour activity allocation", "43"),
    ("943300", "Internal Activity - Setup", "Setup time activity allocation", "43"),
    ("943400", "Internal Activity - QC", "Quality control activity allocation", "43"),
    ("944100", "Overhead Surcharge", "Material overhead surcharge", "41"),
    ("944200", "Overhead Surcharge - Prod", "Production overhead surcharge", "41"),
]

FUNCTIONAL_AREAS = ["0100", "0200", "0300", "0400"]


class CostElementMigrationObject(BaseMigrationObject):
    """CSKA/CSKB -> cost elements (primary and secondary)."""

    object_id = "COST_ELEMENT"
    name = "Cost Element"
    source_table = "CSKB"
    target_entity = "A_CostElement"

    def field_mappings(self):
        return [
            rule("KSTAR", "CostElement", ConverterTag.PAD_LEFT_10),
            rule("KOKRS", "ControllingArea"),
            rule("BUKRS", "CompanyCode"),
            rule("KATYP", "CostElementCategory"),
            rule("KLASS", "CostElementClass"),
            rule("FUNC_AREA", "FunctionalArea"),
            rule("DATAB", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("DATBI", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("KTEXT", "CostElementName"),
            rule("LTEXT", "CostElementDescription"),
            rule("SPRAS", "Language", ConverterTag.TO_UPPER_CASE),
            rule("EIGEN", "AttributeMix"),
            rule("MGEFL", "IsQuantityRecorded", ConverterTag.BOOL_YN),
            rule("HRKFT", "OriginGroup"),
            rule("ERSDA", "CreationDate", ConverterTag.TO_DATE),
            rule("USNAM", "CreatedByUser"),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("RECID", "RecordType"),
            rule("XSTEU", "IsTaxRelevant", ConverterTag.BOOL_YN),
            rule("SAKNR", "GLAccount", ConverterTag.PAD_LEFT_10),
            rule("KTOPL", "ChartOfAccounts"),
            rule("XBILK", "IsBalanceSheetAccount", ConverterTag.BOOL_YN),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("KOSTL", "DefaultCostCenter", ConverterTag.PAD_LEFT_10),
            rule("SEGMENT", "Segment"),
            rule("WAERS", "Currency"),
            rule("LOCK_IND", "IsLocked", ConverterTag.BOOL_YN),
            rule("GSBER", "BusinessArea"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["CostElement", "ControllingArea", "CostElementCategory"],
            duplicate_keys=["CostElement", "ControllingArea"],
        )

    def extract_mock(self):
        records = []
        for i, (cost_element, text, long_text) in enumerate(PRIMARY_COST_ELEMENTS):
            records.append({
                "KSTAR": cost_element,
                "KOKRS": "1000",
                "BUKRS": "1000" if i < 18 else "2000",
                "KATYP": "11" if cost_element.startswith("4") else "1",
                "KLASS": "REV" if cost_element.startswith("4") else "EXP",
                "FUNC_AREA": FUNCTIONAL_AREAS[i % 4],
                "DATAB": "20150101",
                "DATBI": "99991231",
                "KTEXT": text,
                "LTEXT": long_text,
                "SPRAS": "EN",
                "HRKFT": "REV" if cost_element.startswith("4") else "OPS",
                "ERSDA": "20150101",
                "USNAM": "MIGRATION",
                "AEDAT": "20230615",
                "XSTEU": "X" if cost_element.startswith("4") or cost_element == "900000" else "",
                "SAKNR": cost_element,
                "KTOPL": "CAUS",
                "SEGMENT": "SEG1",
                "WAERS": "USD",
                "GSBER": "BU01",
            })
        for i, (cost_element, text, long_text, category) in enumerate(SECONDARY_COST_ELEMENTS):
            records.append({
                "KSTAR": cost_element,
                "KOKRS": "1000",
                "BUKRS": "1000",
                "KATYP": category,
                "KLASS": "SEC",
                "FUNC_AREA": FUNCTIONAL_AREAS[i % 4],
                "DATAB": "20150101",
                "DATBI": "99991231",
                "KTEXT": text,
                "LTEXT": long_text,
                "SPRAS": "EN",
                "MGEFL": "X" if category == "43" else "",
                "HRKFT": "SEC",
                "ERSDA": "20150101",
                "USNAM": "MIGRATION",
                "AEDAT": "20230615",
                "KTOPL": "CAUS",
                "SEGMENT": "SEG1",
                "WAERS": "USD",
                "GSBER": "BU01",
            })
        return records


# (customer, country, customer group, classification, industry, sales district)
SEGMENT_CUSTOMERS = [
    ("100001", "US", "01", "A", "MACH", "EAST"),
    ("100002", "US", "01", "A", "AUTO", "WEST"),
    ("100003", "US", "02", "B", "RETL", "CENT"),
    ("100004", "DE", "01", "A", "MACH", "EMEA"),
    ("100005", "DE", "02", "B", "CHEM", "EMEA"),
]

# (material, material group, product hierarchy, classification)
SEGMENT_MATERIALS = [
    ("MAT-1001", "FG01", "FG001001", "01"),
    ("MAT-1002", "FG01", "FG001002", "01"),
    ("MAT-2001", "FG02", "FG002001", "02"),
    ("MAT-2002", "FG02", "FG002002", "02"),
    ("MAT-3001", "SV01", "SV001001", "03"),
    ("MAT-3002", "SV01", "SV001002", "03"),
]


class ProfitSegmentMigrationObject(BaseMigrationObject):
    """CE4xxxx/CE1xxxx -> profitability segments with their value fields."""

    object_id = "PROFIT_SEGMENT"
    name = "Profitability Segment"
    source_table = "CE41000"
    target_entity = "A_ProfitabilitySegment"

    def field_mappings(self):
        return [
            rule("PAOBJNR", "ProfitabilitySegment"),
            rule("BUKRS", "CompanyCode"),
            rule("KOKRS", "ControllingArea"),
            # Customer characteristics
            rule("KNDNR", "Customer", ConverterTag.PAD_LEFT_10),
            rule("KUNRE", "BillToParty", ConverterTag.PAD_LEFT_10),
            rule("KUNWE", "ShipToParty", ConverterTag.PAD_LEFT_10),
            rule("LAND1", "CustomerCountry", ConverterTag.TO_UPPER_CASE),
            rule("KKBER", "CreditControlArea"),
            rule("KDGRP", "CustomerGroup"),
            rule("KVGR1", "CustomerClassification"),
            rule("BRSCH", "Industry"),
            # Product characteristics
            rule("ARTNR", "Product"),
            rule("MATKL", "ProductGroup"),
            rule("PRODH", "ProductHierarchy"),
            rule("MVGR1", "MaterialGroup1"),
            # Sales organization
            rule("VKORG", "SalesOrganization"),
            rule("VTWEG", "DistributionChannel"),
            rule("SPART", "Division"),
            rule("BZIRK", "SalesDistrict"),
            rule("VKBUR", "SalesOffice"),
            rule("VKGRP", "SalesGroup"),
            rule("WERKS", "Plant"),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("GSBER", "BusinessArea"),
            rule("GJAHR", "FiscalYear"),
            rule("PERDE", "FiscalPeriod", ConverterTag.TO_INTEGER),
            # Value fields
            rule("VV010", "RevenueAmount", ConverterTag.TO_DECIMAL),
            rule("VV030", "CustomerDiscountAmount", ConverterTag.TO_DECIMAL),
            rule("VV140", "CostOfGoodsSoldAmount", ConverterTag.TO_DECIMAL),
            rule("VV040", "FreightAmount", ConverterTag.TO_DECIMAL),
            rule("VV050", "CommissionAmount", ConverterTag.TO_DECIMAL),
            rule("ABSMG", "SalesQuantity", ConverterTag.TO_DECIMAL),
            rule("REC_WAERS", "Currency"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ProfitabilitySegment", "ControllingArea", "FiscalYear"],
            duplicate_keys=["ProfitabilitySegment"],
            ranges=[("FiscalPeriod", 1, 16), ("RevenueAmount", 0, None)],
        )

    def extract_mock(self):
        records = []
        for i in range(30):
            customer, country, group, classification, industry, district = SEGMENT_CUSTOMERS[i % 5]
            material, material_group, hierarchy, material_class = SEGMENT_MATERIALS[i % 6]
            org = i % 2
            wholesale = i % 2 == 1
            service = material_group.startswith("SV")

            revenue = 10000 + i * 2500
            discount = revenue * (0.05 if i % 5 <= 1 else 0.03)
            cogs = revenue * (0.40 if service else 0.65)
            quantity = 10 + i if service else 50 + i * 5

            records.append({
                "PAOBJNR": f"{i + 1:010d}",
                "BUKRS": "1000" if org == 0 else "2000",
                "KOKRS": "1000",
                "KNDNR": customer,
                "KUNRE": customer,
                "KUNWE": customer,
                "LAND1": country,
                "KKBER": "1000" if country == "US" else "2000",
                "KDGRP": group,
                "KVGR1": classification,
                "BRSCH": industry,
                "ARTNR": material,
                "MATKL": material_group,
                "PRODH": hierarchy,
                "MVGR1": material_class,
                "VKORG": "1000" if org == 0 else "2000",
                "VTWEG": "20" if wholesale else "10",
                "SPART": "02" if wholesale else "01",
                "BZIRK": district,
                "VKBUR": f"SO{org + 1:02d}",
                "VKGRP": f"SG{i % 3 + 1:02d}",
                "WERKS": "1000" if org == 0 else "2000",
                "PRCTR": f"PC{i % 5 + 1:04d}",
                "GSBER": "BU01",
                "GJAHR": "2024",
                "PERDE": f"{i % 12 + 1:03d}",
                "VV010": f"{revenue:.2f}",
                "VV030": f"{discount:.2f}",
                "VV140": f"{cogs:.2f}",
                "VV040": f"{revenue * 0.02:.2f}",
                "VV050": f"{revenue * (0.08 if wholesale else 0.05):.2f}",
                "ABSMG": str(quantity),
                "REC_WAERS": "USD" if country == "US" else "EUR",
            })
        return records


INTERNAL_ORDER_TEXTS = [
    "Office Renovation 2024", "IT Infrastructure Upgrade", "Marketing Campaign Q1",
    "Product Launch Event", "Employee Training Program", "Machine Maintenance",
    "Building Security System", "ERP Migration Project", "Customer Appreciation",
    "R&D Prototype Development", "Fleet Vehicle Lease", "Trade Show Booth",
    "Software License Renewal", "Consulting Engagement", "Safety Equipment",
    "Year-End Audit Support", "New Hire Onboarding", "Sustainability Initiative",
    "Patent Filing Expenses", "Branch Office Setup",
]


class InternalOrderMigrationObject(BaseMigrationObject):
    """AUFK (order category 01) -> internal orders."""

    object_id = "INTERNAL_ORDER"
    name = "Internal Order"
    source_table = "AUFK"
    target_entity = "A_InternalOrder"

    def field_mappings(self):
        return [
            rule("AUFNR", "InternalOrder", ConverterTag.PAD_LEFT_10),
            rule("AUART", "OrderType"),
            rule("AUTYP", "OrderCategory"),
            rule("KTEXT", "OrderDescription"),
            rule("LTEXT", "OrderLongText"),
            rule("BUKRS", "CompanyCode"),
            rule("GSBER", "BusinessArea"),
            rule("KOKRS", "ControllingArea"),
            rule("KOSTV", "ResponsibleCostCenter", ConverterTag.PAD_LEFT_10),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("WERKS", "Plant"),
            rule("FUNC_AREA", "FunctionalArea"),
            rule("SEGMENT", "Segment"),
            rule("WAERS", "OrderCurrency"),
            rule("ASTNR", "RequestingCostCenter"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            rule("AEDAT", "LastChangeDate", ConverterTag.TO_DATE),
            rule("AENAM", "LastChangedByUser"),
            rule("KSTAR", "StatisticalCostElement", ConverterTag.PAD_LEFT_10),
            rule("PHAS0", "IsCreated", ConverterTag.BOOL_YN),
            rule("PHAS1", "IsReleased", ConverterTag.BOOL_YN),
            rule("PHAS2", "IsTechnicallyCompleted", ConverterTag.BOOL_YN),
            rule("PHAS3", "IsClosed", ConverterTag.BOOL_YN),
            rule("LOEKZ", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            rule("IDAT1", "PlannedStartDate", ConverterTag.TO_DATE),
            rule("IDAT2", "PlannedEndDate", ConverterTag.TO_DATE),
            rule("PDAT1", "ActualStartDate", ConverterTag.TO_DATE),
            rule("PDAT2", "ActualEndDate", ConverterTag.TO_DATE),
            rule("ABGSL", "SettlementRule"),
            rule("OBJNR", "ObjectNumber"),
            rule("AUFEX", "ExternalOrderNumber"),
            rule("USER0", "Applicant"),
            rule("USER1", "ApplicantPhone"),
            rule("USER2", "PersonResponsible"),
            rule("TXJCD", "TaxJurisdiction"),
            rule("SCOPE", "OrderScope"),
            rule("IVPRO", "InvestmentProfile"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["InternalOrder", "OrderType", "CompanyCode", "ControllingArea"],
            duplicate_keys=["InternalOrder"],
        )

    def extract_mock(self):
        order_types = ["0100", "0200", "0300", "0400", "0500"]
        records = []
        for i, text in enumerate(INTERNAL_ORDER_TEXTS, start=1):
            released = i <= 15
            start_month = i % 12 + 1
            records.append({
                "AUFNR": str(800000 + i),
                "AUART": order_types[(i - 1) % 5],
                "AUTYP": "01",
                "KTEXT": text,
                "LTEXT": f"{text} - detailed description",
                "BUKRS": "1000" if i <= 15 else "2000",
                "GSBER": "BU01",
                "KOKRS": "1000",
                "KOSTV": f"CC{(i - 1) % 10 + 1:04d}",
                "PRCTR": f"PC{(i - 1) % 5 + 1:04d}",
                "WERKS": "1000" if i <= 10 else "2000",
                "FUNC_AREA": f"FA{(i - 1) % 4 + 1:02d}",
                "SEGMENT": "SEG1",
                "WAERS": "USD",
                "ERDAT": "20240101",
                "ERNAM": "CONTROLLER",
                "AEDAT": "20240115",
                "AENAM": "CONTROLLER",
                "PHAS0": "X",
                "PHAS1": "X" if released else "",
                "IDAT1": f"2024{start_month:02d}01",
                "IDAT2": f"2024{min(12, start_month + 2):02d}28",
                "PDAT1": f"2024{start_month:02d}05" if released else "",
                "ABGSL": "SETT01",
                "OBJNR": f"OR{800000 + i}",
                "SCOPE": "OCOST" if order_types[(i - 1) % 5] != "0200" else "CAPEX",
                "IVPRO": "INV01" if order_types[(i - 1) % 5] == "0200" else "",
            })
        return records


# (project definition, description, profile, WBS children as (suffix, description))
PROJECTS = [
    ("P-2024-001", "ERP Migration Program", "ZPROJ1", [
        (".01", "Assessment Phase"), (".02", "Design Phase"), (".02.01", "Technical Design"),
        (".02.02", "Functional Design"), (".03", "Build Phase"), (".04", "Test & Go-Live"),
    ]),
    ("P-2024-002", "New Plant Construction", "ZPROJ2", [
        (".01", "Site Preparation"), (".02", "Foundation Work"), (".03", "Structure Build"),
        (".03.01", "Steel Framework"), (".03.02", "Concrete & Walls"), (".04", "Equipment Install"),
    ]),
    ("P-2024-003", "Product Development Alpha", "ZPROJ1", [
        (".01", "Concept Design"), (".02", "Prototyping"), (".03", "Testing & Certification"),
    ]),
    ("P-2024-004", "Warehouse Automation", "ZPROJ2", [
        (".01", "Vendor Selection"), (".02", "Conveyor Installation"),
    ]),
]


class WBSElementMigrationObject(BaseMigrationObject):
    """PROJ/PRPS -> project definitions and WBS element hierarchy."""

    object_id = "WBS_ELEMENT"
    name = "WBS Element"
    source_table = "PRPS"
    target_entity = "A_EnterpriseProjectElement"

    def field_mappings(self):
        return [
            # Project definition
            rule("PSPNR", "WBSElementInternalID"),
            rule("PSPID", "ProjectDefinition"),
            rule("POST1", "ProjectDescription"),
            rule("VERNR", "ResponsiblePersonNumber"),
            rule("VERNA", "ResponsiblePersonName"),
            rule("ASTNA", "ApplicantName"),
            rule("PROFL", "ProjectProfileCode"),
            rule("PRART", "ProjectType"),
            # WBS element
            rule("POSID", "WBSElement"),
            rule("POSID_EDIT", "WBSElementExternalID"),
            rule("POST1_WBS", "WBSDescription"),
            rule("STUFE", "WBSLevel", ConverterTag.TO_INTEGER),
            rule("UP", "ParentWBSElement"),
            rule("LEFT", "LeftSiblingWBSElement"),
            rule("PSPHI", "ProjectInternalID"),
            rule("PBUKR", "CompanyCode"),
            rule("PGSBR", "BusinessArea"),
            rule("PKOKR", "ControllingArea"),
            rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("FUNC_AREA", "FunctionalArea"),
            rule("WERKS", "Plant"),
            rule("STORT", "Location"),
            # Dates
            rule("PSTRT", "PlannedStartDate", ConverterTag.TO_DATE),
            rule("PENDE", "PlannedEndDate", ConverterTag.TO_DATE),
            rule("ISTRT", "ActualStartDate", ConverterTag.TO_DATE),
            rule("IENDE", "ActualEndDate", ConverterTag.TO_DATE),
            # Control
            rule("BELKZ", "IsAccountAssignment", ConverterTag.BOOL_YN),
            rule("PLAKZ", "IsPlanningElement", ConverterTag.BOOL_YN),
            rule("FAKKZ", "IsBillingElement", ConverterTag.BOOL_YN),
            rule("STAT", "SystemStatus"),
            rule("USTAT", "UserStatus"),
            rule("LOEVM", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            # Financial
            rule("WAERS", "Currency"),
            rule("PRGRP", "InvestmentProgram"),
            rule("IZWEK", "InvestmentReason"),
            rule("KZGRP", "StatisticalKeyFigureGroup"),
            rule("TXJCD", "TaxJurisdiction"),
            rule("PLAN_BUDGET", "PlannedBudget", ConverterTag.TO_DECIMAL),
            # User fields
            rule("USR00", "UserField1"),
            rule("USR01", "UserField2"),
            rule("USR02", "UserField3"),
            rule("USR03", "UserField4"),
            rule("SCOPE", "ProjectScope"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("ERNAM", "CreatedByUser"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["WBSElement", "WBSDescription", "CompanyCode", "ControllingArea"],
            duplicate_keys=["WBSElement"],
            ranges=[("WBSLevel", 1, 10)],
        )

    def extract_mock(self):
        records = []
        for p, (project, description, profile, children) in enumerate(PROJECTS, start=1):
            project_id = str(10000 + p)
            common = {
                "PSPID": project,
                "POST1": description,
                "VERNR": f"PM{p}",
                "PROFL": profile,
                "PRART": "IT" if profile == "ZPROJ1" else "CP",
                "PSPHI": project_id,
                "PBUKR": "1000",
                "PGSBR": "BU01",
                "PKOKR": "1000",
                "PRCTR": f"PC{p:04d}",
                "FUNC_AREA": "FA01",
                "WERKS": "1000",
                "BELKZ": "X",
                "PLAKZ": "X",
                "STAT": "I0001 I0002",
                "WAERS": "USD",
                "ERDAT": "20240101",
                "ERNAM": "ADMIN",
            }
            records.append(dict(
                common,
                PSPNR=project_id,
                VERNA=f"Project Manager {p}",
                ASTNA="Sponsor",
                POSID=project,
                POSID_EDIT=project,
                POST1_WBS=description,
                STUFE="1",
                PSTRT="20240101",
                PENDE="20251231",
                ISTRT="20240115",
                PLAN_BUDGET=mock_amount(p, 250000, 2000000),
            ))
            for suffix, child_description in children:
                wbs = project + suffix
                level = suffix.count(".") + 1
                records.append(dict(
                    common,
                    PSPNR=str(20000 + len(records)),
                    POSID=wbs,
                    POSID_EDIT=wbs,
                    POST1_WBS=child_description,
                    STUFE=str(level),
                    UP=wbs.rsplit(".", 1)[0],
                    PSTRT="20240201",
                    PENDE="20251130",
                    ISTRT="20240215" if level == 2 else "",
                    FAKKZ="X" if level == 2 else "",
                    PLAN_BUDGET=mock_amount(len(records), 10000, 250000),
                ))
        return records
