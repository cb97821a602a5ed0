"""
Financial accounting migration objects.

GL account master (SKA1/SKB1), GL balances (FAGLFLEXT), AR/AP open items
(BSID/BSIK) and the bank directory (BNKA/TIBAN).
"""

from decimal import Decimal
from typing import List

from ..models.mapping import ConverterTag, FieldMappingRule, QualityChecks
from .base import BaseMigrationObject, mock_amount, provenance, rule

COMPANY_CODES = ["1000", "2000"]

# (account, text, group, balance sheet?, open item?, reconciliation type)
GL_ACCOUNTS = [
    ("100000", "Petty Cash", "CASH", True, True, ""),
    ("110000", "Bank Account - Main", "BANK", True, True, ""),
    ("113100", "Accounts Receivable", "RECV", True, True, "D"),
    ("140000", "Raw Materials Inventory", "INVT", True, False, ""),
    ("150000", "Fixed Assets", "FAAA", True, False, ""),
    ("154000", "Accumulated Depreciation", "FAAA", True, False, ""),
    ("160000", "Prepaid Expenses", "PREP", True, False, ""),
    ("200000", "Accounts Payable", "PAYB", True, True, "K"),
    ("210000", "Accrued Expenses", "ACCR", True, False, ""),
    ("220000", "Tax Payable", "TAXP", True, False, ""),
    ("250000", "Long-term Debt", "DEBT", True, True, ""),
    ("290000", "Retained Earnings", "EQTY", True, False, ""),
    ("400000", "Sales Revenue - Domestic", "REVN", False, False, ""),
    ("410000", "Sales Revenue - Export", "REVN", False, False, ""),
    ("420000", "Sales Returns", "REVN", False, False, ""),
    ("430000", "Other Income", "OTHI", False, False, ""),
    ("500000", "Cost of Goods Sold", "COGS", False, False, ""),
    ("510000", "Material Costs", "MATC", False, False, ""),
    ("600000", "Salaries & Wages", "PERS", False, False, ""),
    ("610000", "Benefits", "PERS", False, False, ""),
    ("620000", "Travel Expenses", "TRVL", False, False, ""),
    ("630000", "Office Supplies", "OFFC", False, False, ""),
    ("640000", "Depreciation Expense", "DEPR", False, False, ""),
    ("650000", "Rent Expense", "RENT", False, False, ""),
    ("700000", "Interest Expense", "FEXP", False, False, ""),
    ("800000", "Tax Expense", "TAXE", False, False, ""),
    ("890000", "Clearing Account", "CLER", True, True, ""),
    ("891000", "GR/IR Clearing", "GRIR", True, True, ""),
]


class GLAccountMasterMigrationObject(BaseMigrationObject):
    """SKA1/SKB1/SKAT -> GL account master (chart of accounts and company code level)."""

    object_id = "GL_ACCOUNT_MASTER"
    name = "GL Account Master"
    source_table = "SKA1"
    target_entity = "A_GLAccountInChartOfAccounts"

    def field_mappings(self):
        return [
            # Chart of accounts level
            rule("KTOPL", "ChartOfAccounts"),
            rule("SAKNR", "GLAccount", ConverterTag.PAD_LEFT_10),
            rule("GVTYP", "PLStatementAccountType"),
            rule("KTOKS", "GLAccountGroup"),
            rule("XBILK", "IsBalanceSheetAccount", ConverterTag.BOOL_YN),
            rule("TXT20", "GLAccountShortText"),
            rule("TXT50", "GLAccountLongText"),
            rule("SPRAS", "Language", ConverterTag.TO_UPPER_CASE),
            rule("FUNC_AREA", "FunctionalArea"),
            rule("MCLASS", "GLAccountType"),
            rule("XLOEV", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            rule("XSPEB", "IsBlockedForCreation", ConverterTag.BOOL_YN),
            rule("XSPAB", "IsBlockedForPosting", ConverterTag.BOOL_YN),
            rule("XSPEP", "IsBlockedForPlanning", ConverterTag.BOOL_YN),
            # Company code level
            rule("BUKRS", "CompanyCode"),
            rule("WAERS", "AccountCurrency"),
            rule("MWSKZ", "TaxCategory"),
            rule("XINTB", "IsAutoPostingOnly", ConverterTag.BOOL_YN),
            rule("XOPVW", "IsOpenItemManaged", ConverterTag.BOOL_YN),
            rule("XKRES", "IsLineItemDisplay", ConverterTag.BOOL_YN),
            rule("MITKZ", "ReconciliationAccountType"),
            rule("FDLEV", "PlanningLevel"),
            rule("FSTAG", "FieldStatusGroup"),
            rule("HBKID", "HouseBank"),
            rule("HKTID", "HouseBankAccountID"),
            rule("ALTKT", "AlternativeGLAccount"),
            rule("XGKON", "IsCashFlowRelevant", ConverterTag.BOOL_YN),
            rule("ZUAWA", "SortKey"),
            rule("BUSAB", "AccountingClerk"),
            rule("ERDAT", "CreationDate", ConverterTag.TO_DATE),
            rule("USNAM", "CreatedByUser"),
            # Additional attributes
            rule("XMWNO", "IsTaxNonDeductible", ConverterTag.BOOL_YN),
            rule("FIPLS", "FinancialPlanningLevel"),
            rule("XSALH", "IsSalesRelevant", ConverterTag.BOOL_YN),
            rule("BEWGR", "ValuationGroup"),
            rule("TOGRU", "ToleranceGroup"),
            rule("ZINDT", "InterestCalcDate", ConverterTag.TO_DATE),
            rule("ZINRT", "InterestCalcFrequency", ConverterTag.TO_INTEGER),
            rule("BEGRU", "AuthorizationGroup"),
            rule("VZSKZ", "InterestIndicator"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ChartOfAccounts", "GLAccount", "GLAccountGroup", "CompanyCode"],
            duplicate_keys=["ChartOfAccounts", "GLAccount", "CompanyCode"],
            formats=[("GLAccount", r"^\d{10}$", "10-digit GL account")],
        )

    def extract_mock(self):
        records = []
        for company_code in COMPANY_CODES:
            for account, text, group, balance_sheet, open_item, recon in GL_ACCOUNTS:
                records.append({
                    "KTOPL": "CAUS",
                    "SAKNR": account,
                    "GVTYP": "" if balance_sheet else "P",
                    "KTOKS": group,
                    "XBILK": "X" if balance_sheet else "",
                    "TXT20": text[:20],
                    "TXT50": text,
                    "SPRAS": "en",
                    "BUKRS": company_code,
                    "WAERS": "USD",
                    "MWSKZ": "V" if account[0] in "45" else "",
                    "XOPVW": "X" if open_item else "",
                    "XKRES": "X",
                    "MITKZ": recon,
                    "FSTAG": "G001" if balance_sheet else "G004",
                    "HBKID": "MAIN" if group == "BANK" else "",
                    "HKTID": "001" if group == "BANK" else "",
                    "XGKON": "X" if group in ("BANK", "CASH") else "",
                    "ERDAT": "20150101",
                    "USNAM": "MIGRATION",
                    "XSALH": "X" if account.startswith("4") else "",
                })
        return records


class GLBalanceMigrationObject(BaseMigrationObject):
    """
    FAGLFLEXT period totals -> GL balance carry-forward.

    One record per company code, account, fiscal year and period with
    debit, credit and the resulting balance in three currencies.
    """

    object_id = "GL_BALANCE"
    name = "GL Balances"
    source_table = "FAGLFLEXT"
    target_entity = "A_JournalEntryItemBasic"

    def field_mappings(self):
        return [
            rule("RBUKRS", "CompanyCode"),
            rule("RACCT", "GLAccount", ConverterTag.PAD_LEFT_10),
            rule("RYEAR", "FiscalYear"),
            rule("RPMAX", "FiscalPeriod"),
            rule("RLDNR", "Ledger"),
            rule("RRCTY", "RecordType"),
            rule("RVERS", "PlanVersion"),
            rule("RTCUR", "TransactionCurrency", ConverterTag.TO_UPPER_CASE),
            rule("RUNIT", "BaseUnit"),
            rule("DRCRK", "DebitCreditCode"),
            rule("RPRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
            rule("RCNTR", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("RBUSA", "BusinessArea"),
            rule("RFAREA", "FunctionalArea"),
            rule("SEGMENT", "Segment"),
            rule("RASSC", "PartnerCompany"),
            rule("HSLVT", "BalanceCarryForwardInCoCodeCrcy", ConverterTag.TO_DECIMAL),
            rule("HSL_DEBIT", "DebitAmountInCoCodeCrcy", ConverterTag.TO_DECIMAL),
            rule("HSL_CREDIT", "CreditAmountInCoCodeCrcy", ConverterTag.TO_DECIMAL),
            rule("HSL_BALANCE", "BalanceInCompanyCodeCurrency", ConverterTag.TO_DECIMAL),
            rule("TSL_BALANCE", "BalanceInTransactionCurrency", ConverterTag.TO_DECIMAL),
            rule("KSL_BALANCE", "BalanceInGlobalCurrency", ConverterTag.TO_DECIMAL),
            rule("MSL_BALANCE", "Quantity", ConverterTag.TO_DECIMAL),
            rule("KTOPL", "ChartOfAccounts"),
            rule("TIMESTAMP", "LastChangeDate", ConverterTag.TO_DATE),
            rule("XBILK", "IsBalanceSheetAccount", ConverterTag.BOOL_YN),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["CompanyCode", "GLAccount", "FiscalYear", "FiscalPeriod", "BalanceInCompanyCodeCurrency"],
            duplicate_keys=["CompanyCode", "GLAccount", "FiscalYear", "FiscalPeriod", "Ledger"],
            ranges=[("FiscalPeriod", 1, 16)],
        )

    def extract_mock(self):
        records = []
        seed = 0
        for company_code in COMPANY_CODES:
            for account, _text, _group, balance_sheet, _open, _recon in GL_ACCOUNTS[:20]:
                for period in (11, 12):
                    seed += 1
                    debit = Decimal(mock_amount(seed, 1000, 90000))
                    credit = Decimal(mock_amount(seed * 3, 500, 60000))
                    balance = debit - credit
                    carry_forward = Decimal(mock_amount(seed * 5, 0, 250000)) if balance_sheet else Decimal("0.00")
                    records.append({
                        "RBUKRS": company_code,
                        "RACCT": account,
                        "RYEAR": "2024",
                        "RPMAX": f"{period:03d}",
                        "RLDNR": "0L",
                        "RRCTY": "0",
                        "RVERS": "001",
                        "RTCUR": "usd",
                        "DRCRK": "S" if balance >= 0 else "H",
                        "RPRCTR": f"PC{seed % 5 + 1:04d}",
                        "RBUSA": "BU01",
                        "SEGMENT": "SEG1",
                        "HSLVT": str(carry_forward),
                        "HSL_DEBIT": str(debit),
                        "HSL_CREDIT": str(credit),
                        "HSL_BALANCE": str(balance),
                        "TSL_BALANCE": str(balance),
                        "KSL_BALANCE": str(balance),
                        "KTOPL": "CAUS",
                        "TIMESTAMP": f"2024{period:02d}28",
                        "XBILK": "X" if balance_sheet else "",
                    })
        return records


def _open_item_rules(partner_source: str, partner_target: str) -> List[FieldMappingRule]:
    """Document header and amount rules shared by AR and AP open items."""
    return [
        rule("BUKRS", "CompanyCode"),
        rule(partner_source, partner_target, ConverterTag.PAD_LEFT_10),
        rule("UMSKS", "SpecialGLTransactionType"),
        rule("UMSKZ", "SpecialGLIndicator"),
        rule("AUGDT", "ClearingDate", ConverterTag.TO_DATE),
        rule("AUGBL", "ClearingDocument"),
        rule("ZUONR", "AssignmentReference"),
        rule("GJAHR", "FiscalYear"),
        rule("BELNR", "DocumentNumber"),
        rule("BUZEI", "LineItem"),
        rule("BUDAT", "PostingDate", ConverterTag.TO_DATE),
        rule("BLDAT", "DocumentDate", ConverterTag.TO_DATE),
        rule("CPUDT", "EntryDate", ConverterTag.TO_DATE),
        rule("WAERS", "TransactionCurrency"),
        rule("BLART", "DocumentType"),
        rule("MONAT", "PostingPeriod", ConverterTag.TO_INTEGER),
        rule("BSCHL", "PostingKey"),
        rule("HKONT", "GLAccount", ConverterTag.PAD_LEFT_10),
        rule("DMBTR", "AmountInCompanyCodeCurrency", ConverterTag.TO_DECIMAL),
        rule("WRBTR", "AmountInTransactionCurrency", ConverterTag.TO_DECIMAL),
        rule("DMBE2", "AmountInGroupCurrency", ConverterTag.TO_DECIMAL),
        rule("SHKZG", "DebitCreditIndicator"),
        rule("MWSKZ", "TaxCode"),
        rule("MWSTS", "TaxAmount", ConverterTag.TO_DECIMAL),
        rule("ZFBDT", "BaselineDateForDueDate", ConverterTag.TO_DATE),
        rule("ZTERM", "PaymentTerms"),
        rule("ZBD1T", "CashDiscountDays1", ConverterTag.TO_INTEGER),
        rule("ZBD3T", "NetPaymentDays", ConverterTag.TO_INTEGER),
        rule("ZBD1P", "CashDiscountPercent1", ConverterTag.TO_DECIMAL),
        rule("SGTXT", "ItemText"),
        rule("XREF1", "Reference1"),
        rule("XREF2", "Reference2"),
        rule("PRCTR", "ProfitCenter", ConverterTag.PAD_LEFT_10),
        rule("GSBER", "BusinessArea"),
        rule("SEGMENT", "Segment"),
    ]


def _open_item(i: int, document: int, posting_day: str, amount: str) -> dict:
    month = f"{i % 12 + 1:02d}"
    return {
        "GJAHR": "2024",
        "BELNR": str(document),
        "BUZEI": "001",
        "BUDAT": f"2024{month}{posting_day}",
        "BLDAT": f"2024{month}10",
        "CPUDT": f"2024{month}{posting_day}",
        "MONAT": month,
        "DMBTR": amount,
        "WRBTR": amount,
        "DMBE2": amount,
        "MWSTS": f"{Decimal(amount) * Decimal('0.1'):.2f}",
        "ZFBDT": f"2024{month}{posting_day}",
        "PRCTR": f"PC{i % 5 + 1:04d}",
        "GSBER": "BU01",
        "SEGMENT": "SEG1",
    }


class CustomerOpenItemMigrationObject(BaseMigrationObject):
    """BSID -> customer open items (AR)."""

    object_id = "CUSTOMER_OPEN_ITEM"
    name = "Customer Open Items"
    source_table = "BSID"
    target_entity = "A_OperationalAcctgDocItemCube"

    def field_mappings(self):
        return [
            *_open_item_rules("KUNNR", "Customer"),
            rule("ZBD2T", "CashDiscountDays2", ConverterTag.TO_INTEGER),
            rule("VBELN", "BillingDocument"),
            rule("XREF3", "Reference3"),
            rule("MANST", "DunningLevel", ConverterTag.TO_INTEGER),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["CompanyCode", "Customer", "DocumentNumber", "FiscalYear", "AmountInCompanyCodeCurrency"],
            duplicate_keys=["CompanyCode", "DocumentNumber", "FiscalYear", "LineItem"],
            ranges=[("CashDiscountPercent1", 0, 100), ("PostingPeriod", 1, 16)],
        )

    def extract_mock(self):
        document_types = ["RV", "DZ", "DR", "DG"]
        records = []
        for i in range(40):
            customer = str(100001 + i % 10)
            document_type = document_types[i % 4]
            document = 1900000001 + i
            record = _open_item(i, document, "15", mock_amount(i, 100, 50000))
            record.update({
                "BUKRS": "1000" if i < 30 else "2000",
                "KUNNR": customer,
                "UMSKZ": "A" if i % 10 == 0 else "",
                "ZUONR": f"INV-{str(document)[-6:]}",
                "WAERS": "USD" if i < 35 else "EUR",
                "BLART": document_type,
                "BSCHL": "15" if document_type == "DZ" else "01",
                "HKONT": "113100",
                "SHKZG": "H" if document_type in ("DZ", "DG") else "S",
                "MWSKZ": "O1",
                "ZTERM": "Z030",
                "ZBD1T": "10",
                "ZBD2T": "20",
                "ZBD3T": "30",
                "ZBD1P": "2.00",
                "SGTXT": f"Invoice for customer {customer}",
                "VBELN": f"90{str(document)[-6:]}",
                "MANST": str(i % 4),
            })
            records.append(record)
        return records


class VendorOpenItemMigrationObject(BaseMigrationObject):
    """BSIK -> supplier open items (AP)."""

    object_id = "VENDOR_OPEN_ITEM"
    name = "Vendor Open Items"
    source_table = "BSIK"
    target_entity = "A_OperationalAcctgDocItemCube"

    def field_mappings(self):
        return [
            *_open_item_rules("LIFNR", "Supplier"),
            rule("EBELN", "PurchaseOrder"),
            rule("EBELP", "PurchaseOrderItem"),
            rule("KOSTL", "CostCenter", ConverterTag.PAD_LEFT_10),
            rule("ZLSPR", "PaymentBlockingReason"),
            rule("ZLSCH", "PaymentMethod"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["CompanyCode", "Supplier", "DocumentNumber", "FiscalYear", "AmountInCompanyCodeCurrency"],
            duplicate_keys=["CompanyCode", "DocumentNumber", "FiscalYear", "LineItem"],
            ranges=[("CashDiscountPercent1", 0, 100), ("PostingPeriod", 1, 16)],
        )

    def extract_mock(self):
        document_types = ["RE", "KZ", "KR", "KG"]
        records = []
        for i in range(35):
            supplier = str(200001 + i % 8)
            document_type = document_types[i % 4]
            document = 5100000001 + i
            record = _open_item(i, document, "20", mock_amount(i, 200, 80000))
            record.update({
                "BUKRS": "1000" if i < 25 else "2000",
                "LIFNR": supplier,
                "UMSKZ": "A" if i % 12 == 0 else "",
                "ZUONR": f"PO-{str(document)[-6:]}",
                "WAERS": "USD" if i < 30 else "EUR",
                "BLART": document_type,
                "BSCHL": "25" if document_type == "KZ" else "31",
                "HKONT": "200000",
                "SHKZG": "S" if document_type in ("KZ", "KG") else "H",
                "MWSKZ": "V1",
                "ZTERM": "Z045",
                "ZBD1T": "14",
                "ZBD3T": "45",
                "ZBD1P": "3.00",
                "SGTXT": f"Invoice from supplier {supplier}",
                "EBELN": f"45{str(document)[-8:]}",
                "EBELP": "00010",
                "KOSTL": f"CC{i % 10 + 1:04d}",
                "ZLSPR": "A" if i % 9 == 0 else "",
                "ZLSCH": "T",
            })
            records.append(record)
        return records


# country -> currency, payment method, company code, banks (name, swift, sort code, city, street, branch)
BANKS = {
    "US": ("USD", "T", "1000", [
        ("JPMorgan Chase Bank", "CHASUS33", "021000021", "New York", "383 Madison Ave", "Main Branch"),
        ("Bank of America", "BOFAUS3N", "026009593", "Charlotte", "100 N Tryon St", "Corporate HQ"),
        ("Wells Fargo Bank", "WFBIUS6S", "121000248", "San Francisco", "420 Montgomery St", "West Coast Main"),
        ("Citibank", "CITIUS33", "021000089", "New York", "388 Greenwich St", "Manhattan Branch"),
        ("US Bank", "USBKUS44", "091000022", "Minneapolis", "800 Nicollet Mall", "Midwest HQ"),
        ("PNC Bank", "PNCCUS33", "043000096", "Pittsburgh", "300 Fifth Ave", "Main Office"),
        ("Capital One", "HIBKUS33", "051405515", "McLean", "1680 Capital One Dr", "VA Branch"),
        ("TD Bank", "TDOMUS33", "031101266", "Cherry Hill", "1701 Route 70 E", "NJ Branch"),
    ]),
    "DE": ("EUR", "U", "2000", [
        ("Deutsche Bank", "DEUTDEFF", "50070010", "Frankfurt", "Taunusanlage 12", "Hauptfiliale"),
        ("Commerzbank", "COBADEFF", "50040000", "Frankfurt", "Kaiserplatz 16", "Zentrale"),
        ("DZ Bank", "GENODEFF", "50060400", "Frankfurt", "Platz der Republik", "Hauptsitz"),
        ("KfW Bankengruppe", "KFWIDEFF", "50020400", "Frankfurt", "Palmengartenstr 5", "Foerderkredite"),
        ("Sparkasse Frankfurt", "HELADEF1822", "50050201", "Frankfurt", "Neue Mainzer Str 49", "Innenstadt"),
        ("HypoVereinsbank", "HYVEDEMM", "70020270", "Munich", "Kardinal-Faulhaber-Str 1", "Muenchen Filiale"),
    ]),
    "GB": ("GBP", "B", "3000", [
        ("HSBC UK", "HBUKGB4B", "400515", "London", "8 Canada Square", "Canary Wharf"),
        ("Barclays Bank", "BARCGB22", "203301", "London", "1 Churchill Place", "City of London"),
        ("Lloyds Banking Group", "LOYDGB2L", "309634", "London", "25 Gresham St", "Head Office"),
        ("NatWest", "NWBKGB2L", "600000", "London", "250 Bishopsgate", "City Branch"),
        ("Standard Chartered", "SCBLGB2L", "609242", "London", "1 Basinghall Ave", "EC2 Branch"),
        ("Santander UK", "ABBYGB2L", "090128", "London", "2 Triton Square", "Regent Place"),
    ]),
}


class BankMasterMigrationObject(BaseMigrationObject):
    """BNKA/TIBAN -> bank directory, IBANs and house bank accounts."""

    object_id = "BANK_MASTER"
    name = "Bank Master"
    source_table = "BNKA"
    target_entity = "A_Bank"

    def field_mappings(self):
        return [
            # Bank directory
            rule("BANKS", "BankCountry", ConverterTag.TO_UPPER_CASE),
            rule("BANKL", "BankNumber"),
            rule("BANKA", "BankName"),
            rule("PROVZ", "Region"),
            rule("STRAS", "StreetName"),
            rule("ORT01", "CityName"),
            rule("SWIFT", "SWIFTCode", ConverterTag.TO_UPPER_CASE),
            rule("BNKLZ", "BankInternalID"),
            rule("LOEVM", "IsMarkedForDeletion", ConverterTag.BOOL_YN),
            rule("BRNCH", "BankBranch"),
            rule("BGRUP", "BankGroup"),
            rule("XPGRO", "IsPostBankAccount", ConverterTag.BOOL_YN),
            # IBAN and account
            rule("BANKN", "BankAccount"),
            rule("IBAN", "IBAN", ConverterTag.TO_UPPER_CASE),
            rule("BKREF", "BankReference"),
            rule("VALID_FROM", "IBANValidityStartDate", ConverterTag.TO_DATE),
            rule("BKONT", "BankControlKey"),
            rule("KOINH", "BankAccountHolderName"),
            rule("KOVON", "ValidityStartDate", ConverterTag.TO_DATE),
            rule("KOBIS", "ValidityEndDate", ConverterTag.TO_DATE),
            rule("XEZER", "IsMainBankAccount", ConverterTag.BOOL_YN),
            rule("BKEXT", "ExternalBankID"),
            # House bank
            rule("BUKRS", "CompanyCode"),
            rule("HBKID", "HouseBank"),
            rule("HKTID", "HouseBankAccount"),
            rule("WAERS", "BankAccountCurrency"),
            rule("ZLSCH", "PaymentMethod"),
            rule("BANKN_HB", "HouseBankAccountNumber"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["BankCountry", "BankNumber", "BankName"],
            duplicate_keys=["BankCountry", "BankNumber"],
            formats=[("SWIFTCode", r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$", "BIC (8 or 11 characters)")],
        )

    def extract_mock(self):
        records = []
        index = 0
        for country, (currency, payment_method, company_code, banks) in BANKS.items():
            for position, (bank_name, swift, sort_code, city, street, branch) in enumerate(banks):
                index += 1
                account = str(1000000000 + index * 1234567)[:10]
                iban = f"{country}{89 + index}{sort_code}{account}"
                records.append({
                    "BANKS": country.lower(),
                    "BANKL": sort_code,
                    "BANKA": bank_name,
                    "PROVZ": branch,
                    "STRAS": street,
                    "ORT01": city,
                    "SWIFT": swift,
                    "BNKLZ": sort_code,
                    "BRNCH": branch,
                    "BANKN": account,
                    "IBAN": iban[:22] if country != "US" else iban[:17],
                    "BKREF": f"REF-{index:06d}",
                    "VALID_FROM": "20200101",
                    "BKONT": "00" if country == "DE" else "01",
                    "KOINH": bank_name,
                    "KOVON": "20200101",
                    "KOBIS": "99991231",
                    "XEZER": "X" if position == 0 else "",
                    "BUKRS": company_code,
                    "HBKID": f"HB{index:02d}",
                    "HKTID": f"HA{index:02d}",
                    "WAERS": currency,
                    "ZLSCH": payment_method,
                    "BANKN_HB": account,
                })
        return records
