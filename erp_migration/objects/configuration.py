"""
Configuration migration objects.

Customizing tables (company codes, document types, plants, sales
organizations, ...) are migrated as flat config items. Every item carries
its category, key and description; the remaining columns are specific to
the category and stay empty elsewhere.
"""

from typing import Any, Dict, List

from ..errors import MigrationObjectError
from ..models.mapping import ConverterTag, QualityChecks
from .base import BaseMigrationObject, provenance, rule


def config_record(category: str, key: str, description: str, **fields: Any) -> Dict[str, Any]:
    """One config item in source layout."""
    return {"CONFIG_TYPE": category, "CONFIG_KEY": key, "CONFIG_DESC": description, **fields}


class ConfigurationMigrationObject(BaseMigrationObject):
    """Shared layout for the *_CONFIG objects. Subclasses list their category columns."""

    def category_mappings(self):
        raise MigrationObjectError(f"{self.object_id}: category_mappings() not implemented", code="MIGOBJ_ABSTRACT")

    def field_mappings(self):
        return [
            rule("CONFIG_TYPE", "ConfigCategory"),
            rule("CONFIG_KEY", "ConfigKey", ConverterTag.TRIM),
            rule("CONFIG_DESC", "ConfigDescription"),
            *self.category_mappings(),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ConfigCategory", "ConfigKey", "ConfigDescription"],
            duplicate_keys=["ConfigCategory", "ConfigKey"],
        )


class FIConfigMigrationObject(ConfigurationMigrationObject):
    """Financial accounting customizing: T001, SKA1 ranges, T009, T003, T007A, T052, NRIV."""

    object_id = "FI_CONFIG"
    name = "Finance Configuration"
    source_table = "T001"
    target_entity = "FinanceConfiguration"

    def category_mappings(self):
        return [
            # Company code (T001)
            rule("BUKRS", "CompanyCode"),
            rule("BUTXT", "CompanyCodeName"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            rule("WAERS", "Currency"),
            rule("KTOPL", "ChartOfAccounts"),
            rule("PERIV", "FiscalYearVariant"),
            rule("FSTVA", "FieldStatusVariant"),
            # G/L account ranges (SKA1)
            rule("SAKNR", "GLAccount", ConverterTag.PAD_LEFT_10),
            rule("KTOKS", "GLAccountGroup"),
            rule("BILKT", "AlternativeGLAccount", ConverterTag.PAD_LEFT_10),
            rule("GVTYP", "PLStatementAccountType"),
            rule("XBILK", "IsBalanceSheetAccount", ConverterTag.BOOL_YN),
            # Fiscal year variant (T009)
            rule("PERIV_T009", "FiscalYearVariantKey"),
            rule("ANZBP", "NumberOfPostingPeriods", ConverterTag.TO_INTEGER),
            rule("ANZSP", "NumberOfSpecialPeriods", ConverterTag.TO_INTEGER),
            # Document type (T003)
            rule("BLART", "AccountingDocumentType"),
            rule("LTEXT", "AccountingDocumentTypeName"),
            rule("NUMKR", "NumberRangeInterval"),
            # Tax code (T007A)
            rule("MWSKZ", "TaxCode"),
            rule("TEXT1", "TaxCodeName"),
            rule("KBETR", "TaxRate", ConverterTag.TO_DECIMAL),
            rule("MWART", "TaxType"),
            # Payment terms (T052)
            rule("ZTERM", "PaymentTerms"),
            rule("TEXT_ZTERM", "PaymentTermsName"),
            rule("ZTAG2", "NetPaymentDays", ConverterTag.TO_INTEGER),
            rule("ZPRZ1", "CashDiscount1Percent", ConverterTag.TO_DECIMAL),
            rule("ZTAG1", "CashDiscount1Days", ConverterTag.TO_INTEGER),
            # Number range (NRIV)
            rule("OBJECT", "NumberRangeObject"),
            rule("FROMNUMBER", "NumberRangeFrom"),
            rule("TONUMBER", "NumberRangeTo"),
            rule("NRLEVEL", "NumberRangeCurrentNumber", ConverterTag.STRIP_LEADING_ZEROS),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ConfigCategory", "ConfigKey", "ConfigDescription"],
            duplicate_keys=["ConfigCategory", "ConfigKey"],
            ranges=[("TaxRate", 0, 100), ("NumberOfPostingPeriods", 1, 16)],
        )

    def extract_mock(self) -> List[Dict[str, Any]]:
        records = [
            config_record(
                "COMPANY_CODE", code, f"Company Code {code} - {company}",
                BUKRS=code, BUTXT=company, LAND1=country, WAERS=currency,
                KTOPL="YCOA", PERIV="K4", FSTVA=code,
            )
            for code, company, country, currency in [
                ("1000", "Global HQ", "us", "USD"),
                ("2000", "Europe Operations", "de", "EUR"),
                ("3000", "Asia Pacific", "sg", "SGD"),
            ]
        ]
        for low, high, description, balance_sheet in [
            ("0010000000", "0019999999", "Balance Sheet - Assets", True),
            ("0020000000", "0029999999", "Balance Sheet - Liabilities", True),
            ("0030000000", "0039999999", "Balance Sheet - Equity", True),
            ("0040000000", "0049999999", "P&L - Revenue", False),
            ("0050000000", "0059999999", "P&L - COGS", False),
            ("0060000000", "0069999999", "P&L - Expenses", False),
        ]:
            records.append(config_record(
                "GL_ACCOUNT_RANGE", f"{low}-{high}", description,
                SAKNR=low, KTOKS="BS" if balance_sheet else "PL",
                GVTYP="" if balance_sheet else "X", XBILK="X" if balance_sheet else "",
            ))
        records.append(config_record(
            "FISCAL_YEAR_VARIANT", "K4", "Calendar Year, 4 Special Periods",
            PERIV_T009="K4", ANZBP="12", ANZSP="4",
        ))
        for code, description, number_range in [
            ("SA", "GL Account Document", "01"),
            ("KR", "Vendor Invoice", "19"),
            ("DR", "Customer Invoice", "01"),
            ("DZ", "Customer Payment", "15"),
            ("KZ", "Vendor Payment", "15"),
            ("AB", "Accounting Document", "01"),
            ("AA", "Asset Posting", "01"),
        ]:
            records.append(config_record(
                "DOCUMENT_TYPE", code, description, BLART=code, LTEXT=description, NUMKR=number_range,
            ))
        for code, description, rate, direction in [
            ("I0", "Tax Exempt Input", "0", "V"),
            ("I1", "Standard Input Tax", "19", "V"),
            ("I2", "Reduced Input Tax", "7", "V"),
            ("O0", "Tax Exempt Output", "0", "A"),
            ("O1", "Standard Output Tax", "19", "A"),
            ("O2", "Reduced Output Tax", "7", "A"),
            ("V0", "US Sales Tax Exempt", "0", "A"),
            ("V1", "US Sales Tax", "8.25", "A"),
        ]:
            records.append(config_record(
                "TAX_CODE", code, description, MWSKZ=code, TEXT1=description, KBETR=rate, MWART=direction,
            ))
        for code, description, net_days, discount_days, discount in [
            ("0001", "Due immediately", 0, 0, 0),
            ("NT30", "Net 30 days", 30, 0, 0),
            ("NT60", "Net 60 days", 60, 0, 0),
            ("2N10", "2% 10, Net 30", 30, 10, 2),
            ("3N15", "3% 15, Net 45", 45, 15, 3),
        ]:
            records.append(config_record(
                "PAYMENT_TERMS", code, description,
                ZTERM=code, TEXT_ZTERM=description, ZTAG2=str(net_days),
                ZPRZ1=str(discount), ZTAG1=str(discount_days),
            ))
        for number_object, low, high, current in [
            ("RF_BELEG", "0100000000", "0199999999", "0142387651"),
            ("EINKBELEG", "4500000000", "4599999999", "4502340125"),
            ("RV_BELEG", "0000000001", "0099999999", "0003100245"),
            ("MATERIALNR", "000000000000000001", "000000000099999999", "000000000000185042"),
        ]:
            records.append(config_record(
                "NUMBER_RANGE", number_object, f"Number Range: {number_object}",
                OBJECT=number_object, FROMNUMBER=low, TONUMBER=high, NRLEVEL=current,
            ))
        return records


class COConfigMigrationObject(ConfigurationMigrationObject):
    """Controlling customizing: TKA01, cost center categories, cost elements, CSLA, TKB1, cycles."""

    object_id = "CO_CONFIG"
    name = "Controlling Configuration"
    source_table = "TKA01"
    target_entity = "ControllingConfiguration"

    def category_mappings(self):
        return [
            # Controlling area (TKA01)
            rule("KOKRS", "ControllingArea"),
            rule("BEZEI", "ControllingAreaName"),
            rule("KTOPL", "ChartOfAccounts"),
            rule("WAERS", "ControllingAreaCurrency"),
            rule("LMONA", "FiscalYearVariant"),
            # Cost center category (TKA05)
            rule("KOSAR", "CostCenterCategory"),
            rule("KTEXT_KOSAR", "CostCenterCategoryName"),
            # Cost element (CSKB)
            rule("KSTAR", "CostElement", ConverterTag.PAD_LEFT_10),
            rule("KATYP", "CostElementCategory"),
            rule("KTEXT_KSTAR", "CostElementName"),
            # Activity type (CSLA)
            rule("LSTAR", "CostCtrActivityType"),
            rule("KTEXT_LSTAR", "CostCtrActivityTypeName"),
            rule("LATYP", "CostCtrActivityTypeCategory"),
            rule("LEINH", "CostCtrActivityTypeQtyUnit"),
            rule("TKGXXX", "PlannedActivityPrice", ConverterTag.TO_DECIMAL),
            # Statistical key figure (TKB1)
            rule("STAGR", "StatisticalKeyFigure"),
            rule("BEZEI_STAGR", "StatisticalKeyFigureName"),
            rule("MSEHI", "StatisticalKeyFigureUnit"),
            rule("GRTYP", "StatisticalKeyFigureCategory"),
            # Allocation cycle
            rule("ALLOC_TYPE", "AllocationType"),
            rule("CYCLE", "AllocationCycle"),
        ]

    def extract_mock(self) -> List[Dict[str, Any]]:
        records = [config_record(
            "CONTROLLING_AREA", "1000", "Global Controlling Area",
            KOKRS="1000", BEZEI="Global Controlling", KTOPL="YCOA", WAERS="USD", LMONA="K4",
        )]
        for code, description in [
            ("E", "Production"), ("F", "Administration"), ("H", "Management"),
            ("L", "Logistics"), ("P", "Project"), ("V", "Sales & Distribution"),
        ]:
            records.append(config_record(
                "CC_CATEGORY", code, f"Cost Center Category: {description}",
                KOSAR=code, KTEXT_KOSAR=description,
            ))
        for code, category, description in [
            ("0000400000", "11", "Revenue - Domestic"),
            ("0000410000", "11", "Revenue - Export"),
            ("0000500000", "1", "Material Costs"),
            ("0000600000", "1", "Personnel Costs"),
            ("0000610000", "1", "External Services"),
            ("0000620000", "1", "Depreciation"),
            ("0000900000", "42", "Assessment Allocation"),
            ("0000910000", "43", "Internal Activity Allocation"),
            ("0000920000", "41", "Overhead Surcharge"),
        ]:
            records.append(config_record(
                "COST_ELEMENT", code, description, KSTAR=code, KATYP=category, KTEXT_KSTAR=description,
            ))
        for code, description, category, unit, price in [
            ("LABOR", "Direct Labor", "1", "H", "75.00"),
            ("MACHINE", "Machine Hours", "1", "H", "120.00"),
            ("SETUP", "Setup Time", "1", "H", "90.00"),
            ("ENERGY", "Energy Consumption", "1", "KWH", "0.12"),
            ("OVHD", "Overhead Allocation", "3", "PCT", "0"),
        ]:
            records.append(config_record(
                "ACTIVITY_TYPE", code, description,
                LSTAR=code, KTEXT_LSTAR=description, LATYP=category, LEINH=unit, TKGXXX=price,
            ))
        for code, description, unit, category in [
            ("HEADCNT", "Headcount", "EA", "1"),
            ("SQMETER", "Square Meters", "M2", "1"),
            ("PCHOURS", "PC Hours", "H", "2"),
            ("TRNOVER", "Revenue Share", "PCT", "2"),
        ]:
            records.append(config_record(
                "STAT_KEY_FIGURE", code, description,
                STAGR=code, BEZEI_STAGR=description, MSEHI=unit, GRTYP=category,
            ))
        for allocation, cycle, description in [
            ("assessment", "ADMIN_ALLOC", "Admin Cost Assessment"),
            ("distribution", "ENERGY_DIST", "Energy Cost Distribution"),
            ("activity_alloc", "LABOR_ALLOC", "Labor Activity Allocation"),
        ]:
            records.append(config_record(
                "ALLOCATION_CYCLE", cycle, description, ALLOC_TYPE=allocation, CYCLE=cycle,
            ))
        return records


class MMConfigMigrationObject(ConfigurationMigrationObject):
    """Materials management customizing: T001W, T001L, T024E, T024, T134, T023, T077K."""

    object_id = "MM_CONFIG"
    name = "MM Configuration"
    source_table = "T001W"
    target_entity = "MaterialsConfiguration"

    def category_mappings(self):
        return [
            # Plant (T001W)
            rule("WERKS", "Plant"),
            rule("NAME1", "PlantName"),
            rule("BUKRS", "CompanyCode"),
            rule("FABKL", "FactoryCalendar"),
            rule("LAND1", "Country", ConverterTag.TO_UPPER_CASE),
            # Storage location (T001L)
            rule("LGORT", "StorageLocation"),
            rule("LGOBE", "StorageLocationName"),
            # Purchasing organization (T024E)
            rule("EKORG", "PurchasingOrganization"),
            rule("EKOTX", "PurchasingOrganizationName"),
            # Purchasing group (T024)
            rule("EKGRP", "PurchasingGroup"),
            rule("EKNAM", "PurchasingGroupName"),
            # Material type (T134)
            rule("MTART", "ProductType"),
            rule("MTBEZ", "ProductTypeName"),
            rule("MTREF", "ReferenceProductType"),
            rule("NUMKI", "NumberRangeInterval"),
            # Material group (T023)
            rule("MATKL", "ProductGroup"),
            rule("WGBEZ", "ProductGroupName"),
            # Supplier account group (T077K)
            rule("KTOKK", "SupplierAccountGroup"),
            rule("TXT30", "SupplierAccountGroupName"),
            # Valuation (T001K)
            rule("BWKEY", "ValuationArea"),
            rule("MLBWA", "MaterialLedgerIsActive", ConverterTag.BOOL_YN),
        ]

    def extract_mock(self) -> List[Dict[str, Any]]:
        records = []
        for plant, plant_name, company, calendar in [
            ("1100", "US Manufacturing", "1000", "US"),
            ("1200", "US Distribution", "1000", "US"),
            ("2100", "DE Manufacturing", "2000", "DE"),
            ("2200", "DE Distribution", "2000", "DE"),
            ("3100", "SG Operations", "3000", "SG"),
        ]:
            records.append(config_record(
                "PLANT", plant, f"Plant {plant} - {plant_name}",
                WERKS=plant, NAME1=plant_name, BUKRS=company, FABKL=calendar, LAND1=calendar,
                BWKEY=plant, MLBWA="X" if company == "2000" else "",
            ))
        for plant, location, description in [
            ("1100", "0001", "Raw Materials"),
            ("1100", "0002", "Finished Goods"),
            ("1100", "0003", "Quality Inspection"),
            ("1200", "0001", "Distribution Center"),
            ("2100", "0001", "Raw Materials"),
            ("2100", "0002", "Finished Goods"),
            ("3100", "0001", "General Storage"),
        ]:
            records.append(config_record(
                "STORAGE_LOCATION", f"{plant}-{location}", description,
                WERKS=plant, LGORT=location, LGOBE=description,
            ))
        for code, description in [("1000", "US Purchasing"), ("2000", "EU Purchasing"), ("3000", "APAC Purchasing")]:
            records.append(config_record(
                "PURCHASING_ORG", code, description, EKORG=code, EKOTX=description, BUKRS=code,
            ))
        for code, description in [
            ("001", "Direct Materials"), ("002", "Indirect Materials"),
            ("003", "Services"), ("004", "Capital Equipment"),
        ]:
            records.append(config_record("PURCHASING_GROUP", code, description, EKGRP=code, EKNAM=description))
        for code, description, reference, number_range in [
            ("ROH", "Raw Material", "", "01"),
            ("HALB", "Semi-Finished", "", "01"),
            ("FERT", "Finished Product", "", "01"),
            ("HAWA", "Trading Goods", "", "02"),
            ("DIEN", "Service", "", "03"),
            ("NLAG", "Non-Stock Material", "", "03"),
            ("VERP", "Packaging Material", "ROH", "01"),
        ]:
            records.append(config_record(
                "MATERIAL_TYPE", code, description,
                MTART=code, MTBEZ=description, MTREF=reference, NUMKI=number_range,
            ))
        for code, description in [
            ("001", "Metals & Alloys"), ("002", "Plastics & Polymers"), ("003", "Electronics"),
            ("004", "Chemicals"), ("005", "Packaging"),
        ]:
            records.append(config_record("MATERIAL_GROUP", code, description, MATKL=code, WGBEZ=description))
        for code, description in [
            ("LIEF", "Standard Vendor"), ("KRED", "Creditor (one-time)"), ("CPDI", "Intercompany Vendor"),
        ]:
            records.append(config_record("VENDOR_ACCOUNT_GROUP", code, description, KTOKK=code, TXT30=description))
        return records


class SDConfigMigrationObject(ConfigurationMigrationObject):
    """Sales and distribution customizing: TVKO, TVTW, TSPA, TVAK, TVLK, TVFK, T683, T685."""

    object_id = "SD_CONFIG"
    name = "SD Configuration"
    source_table = "TVKO"
    target_entity = "SalesConfiguration"

    def category_mappings(self):
        return [
            # Sales organization (TVKO)
            rule("VKORG", "SalesOrganization"),
            rule("VTEXT_VKORG", "SalesOrganizationName"),
            rule("BUKRS", "CompanyCode"),
            # Distribution channel (TVTW)
            rule("VTWEG", "DistributionChannel"),
            rule("VTEXT_VTWEG", "DistributionChannelName"),
            # Division (TSPA)
            rule("SPART", "Division"),
            rule("VTEXT_SPART", "DivisionName"),
            # Sales document type (TVAK)
            rule("AUART", "SalesDocumentType"),
            rule("BEZEI_AUART", "SalesDocumentTypeName"),
            rule("NUMKI", "InternalNumberRange"),
            rule("NUMKE", "ExternalNumberRange"),
            # Delivery type (TVLK)
            rule("LFART", "DeliveryDocumentType"),
            rule("VTEXT_LFART", "DeliveryDocumentTypeName"),
            # Billing type (TVFK)
            rule("FKART", "BillingDocumentType"),
            rule("VTEXT_FKART", "BillingDocumentTypeName"),
            # Pricing procedure (T683) and condition type (T685)
            rule("KALSM", "PricingProcedure"),
            rule("VTEXT_KALSM", "PricingProcedureName"),
            rule("KSCHL", "ConditionType"),
            rule("VTEXT_KSCHL", "ConditionTypeName"),
            # Output type (TNAPR)
            rule("KSCHL_NA", "OutputType"),
            rule("VTEXT_NA", "OutputTypeName"),
        ]

    def extract_mock(self) -> List[Dict[str, Any]]:
        records = []
        for code, description in [("1000", "US Sales"), ("2000", "EU Sales"), ("3000", "APAC Sales")]:
            records.append(config_record(
                "SALES_ORG", code, description, VKORG=code, VTEXT_VKORG=description, BUKRS=code,
            ))
        for code, description in [("10", "Direct Sales"), ("20", "Wholesale"), ("30", "Retail"), ("40", "E-Commerce")]:
            records.append(config_record("DIST_CHANNEL", code, description, VTWEG=code, VTEXT_VTWEG=description))
        for code, description in [
            ("00", "Cross-Division"), ("01", "Industrial Products"),
            ("02", "Consumer Products"), ("03", "Services"),
        ]:
            records.append(config_record("DIVISION", code, description, SPART=code, VTEXT_SPART=description))
        for code, description, internal_range, external_range in [
            ("OR", "Standard Order", "01", "02"),
            ("RE", "Returns", "03", ""),
            ("SO", "Rush Order", "01", ""),
            ("CR", "Credit Memo Request", "05", ""),
            ("DR", "Debit Memo Request", "05", ""),
            ("QT", "Quotation", "10", ""),
            ("IN", "Inquiry", "10", ""),
            ("KE", "Consignment Fill-Up", "01", ""),
        ]:
            records.append(config_record(
                "SALES_DOC_TYPE", code, description,
                AUART=code, BEZEI_AUART=description, NUMKI=internal_range, NUMKE=external_range,
            ))
        for code, description in [
            ("LF", "Outbound Delivery"), ("NL", "Replenishment Delivery"),
            ("EL", "Inbound Delivery"), ("LR", "Return Delivery"),
        ]:
            records.append(config_record("DELIVERY_TYPE", code, description, LFART=code, VTEXT_LFART=description))
        for code, description in [
            ("F2", "Invoice"), ("G2", "Credit Memo"), ("L2", "Debit Memo"),
            ("S1", "Cancellation"), ("F8", "Pro-forma Invoice"),
        ]:
            records.append(config_record("BILLING_TYPE", code, description, FKART=code, VTEXT_FKART=description))
        for code, description in [("RVAA01", "Standard Pricing"), ("RVAA02", "Export Pricing")]:
            records.append(config_record(
                "PRICING_PROCEDURE", code, description, KALSM=code, VTEXT_KALSM=description,
            ))
        for code, description in [
            ("PR00", "Base Price"), ("K004", "Material Discount"), ("K005", "Customer Discount"),
            ("K007", "Customer/Material Discount"), ("KF00", "Freight"), ("MWST", "Tax (Output)"),
        ]:
            records.append(config_record("CONDITION_TYPE", code, description, KSCHL=code, VTEXT_KSCHL=description))
        for code, description in [("BA00", "Order Confirmation"), ("RD00", "Invoice Output")]:
            records.append(config_record("OUTPUT_TYPE", code, description, KSCHL_NA=code, VTEXT_NA=description))
        return records
