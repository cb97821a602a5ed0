"""
Integration and technical migration objects.

BW extractors, RFC destinations, IDoc partner profiles, web services and
background jobs. None of these is loaded as business data; each record is
an assessment of how the interface survives the move to S/4HANA. The
assessment columns are filled in the transform hook so that live reads
get classified the same way as the mock extract.
"""

from collections import Counter
import re
from typing import Any, Dict, List

from ..errors import MigrationObjectError
from ..models.mapping import ConverterTag, QualityChecks
from ..models.record import Record, TransformOutput, has_value
from .base import BaseMigrationObject, mock_amount, provenance, rule


class AssessmentMigrationObject(BaseMigrationObject):
    """
    Base for objects whose records carry a migration assessment.

    `classify()` returns target fields for one mapped record. The hook only
    fills fields the source left empty, so an assessment already recorded
    in the source system wins.
    """

    strategy_field = "MigrationStrategy"

    def classify(self, record: Record) -> Dict[str, Any]:
        raise MigrationObjectError(f"{self.object_id}: classify() not implemented", code="MIGOBJ_ABSTRACT")

    def transform_hook(self, records: List[Record]) -> TransformOutput:
        counts: Counter = Counter()
        classified = 0
        out = []
        for record in records:
            assessed = dict(record)
            if not has_value(assessed.get(self.strategy_field)):
                classified += 1
            for target, value in self.classify(record).items():
                if not has_value(assessed.get(target)):
                    assessed[target] = value
            counts[assessed.get(self.strategy_field) or "unclassified"] += 1
            out.append(assessed)
        return TransformOutput(
            records=out,
            extra={"strategy_counts": dict(counts), "classified_count": classified},
        )


# (pattern on the DataSource name, action, replacement prefix, impact, note)
EXTRACTOR_RULES = [
    (r"^0FI_(GL|AR|AP|AA)_", "replace-with-cds", "I_", "HIGH",
     "Classic FI extractor; BSEG/BKPF/FAGLFLEXT are replaced by ACDOCA"),
    (r"^0CO_(OM|PC|PA)_", "replace-with-cds", "I_CO_", "HIGH",
     "CO extractor; COSS/COSP are replaced by ACDOCA"),
    (r"^2LIS_", "update", "", "MEDIUM",
     "Logistics extractor; review setup tables and delta handling"),
    (r"^0(FIAA|AM)_", "replace-with-cds", "I_AA_", "HIGH",
     "Asset extractor; ANLP/ANLC removed, use ACDOCA based CDS views"),
    (r"^Z", "update", "", "HIGH",
     "Custom extractor; validate source tables against the S/4HANA data model"),
    (r"^0HR_", "update", "", "MEDIUM",
     "HR extractor; validate infotype table changes"),
]
PRIORITIES = {"HIGH": "P1", "MEDIUM": "P2", "LOW": "P3"}

# (datasource, description, component, type, extraction, table, delta, runs, avg records, minutes, custom FM)
EXTRACTORS = [
    ("0FI_GL_14", "GL Line Items", "FI-GL", "TRAN", "FULL_DELTA", "FAGLFLEXT", "ABR", 365, 150000, 45, ""),
    ("0FI_AR_4", "AR Line Items", "FI-AR", "TRAN", "DELTA", "BSID", "ABR", 365, 80000, 25, ""),
    ("0FI_AP_4", "AP Line Items", "FI-AP", "TRAN", "DELTA", "BSIK", "ABR", 365, 60000, 20, ""),
    ("0FI_AA_11", "Asset Transactions", "FI-AA", "TRAN", "DELTA", "ANLP", "ABR", 52, 5000, 10, ""),
    ("0FIAA_TRANS", "Asset Values by Period", "FI-AA", "TRAN", "DELTA", "ANLC", "ABR", 12, 4000, 6, ""),
    ("0AM_ASSET_ATTR", "Asset Master Attributes", "FI-AA", "MAST", "FULL", "ANLA", "ABR", 52, 2500, 3, ""),
    ("0CO_OM_CCA_9", "Cost Center Actuals", "CO-OM", "TRAN", "DELTA", "COSS", "ABR", 52, 30000, 15, ""),
    ("0CO_PC_ACT_05", "Product Cost Actuals", "CO-PC", "TRAN", "DELTA", "COSP", "ABR", 12, 20000, 30, ""),
    ("0CO_PA_1", "Profitability Line Items", "CO-PA", "TRAN", "DELTA", "CE11000", "ABR", 365, 90000, 35, ""),
    ("2LIS_02_ITM", "Purchasing Items", "MM", "TRAN", "DELTA", "EKPO", "ABR", 365, 50000, 15, ""),
    ("2LIS_11_VAHDR", "Sales Order Header", "SD", "TRAN", "DELTA", "VBAK", "ABR", 365, 40000, 12, ""),
    ("2LIS_12_VCITM", "Delivery Items", "SD", "TRAN", "DELTA", "LIPS", "ABR", 365, 35000, 10, ""),
    ("2LIS_13_VDITM", "Billing Items", "SD", "TRAN", "DELTA", "VBRP", "ABR", 365, 38000, 11, ""),
    ("2LIS_03_BF", "Goods Movements", "MM", "TRAN", "DELTA", "MSEG", "AIMD", 365, 200000, 60, ""),
    ("ZCUSTOM_SALES_RPT", "Custom Sales Report", "SD", "TRAN", "FULL", "VBAK/VBAP", "FULL", 52, 10000, 8,
     "Z_EXTRACT_SALES_RPT"),
    ("ZCUSTOM_INVENTORY", "Custom Inventory Extract", "MM", "MAST", "FULL", "MARD", "FULL", 12, 25000, 15,
     "Z_EXTRACT_INVENTORY"),
    ("ZCUSTOM_HR_HEADCOUNT", "Custom HR Headcount", "HR", "MAST", "FULL", "PA0001", "FULL", 52, 3000, 5,
     "Z_HR_HEADCOUNT"),
    ("0MATERIAL_ATTR", "Material Master Attributes", "MM", "MAST", "FULL", "MARA", "ABR", 52, 50000, 20, ""),
    ("0CUSTOMER_ATTR", "Customer Master Attributes", "SD", "MAST", "FULL", "KNA1", "ABR", 52, 20000, 8, ""),
    ("0VENDOR_ATTR", "Vendor Master Attributes", "MM", "MAST", "FULL", "LFA1", "ABR", 52, 8000, 4, ""),
    ("0HR_PA_0", "HR Master Data", "HR", "MAST", "FULL", "PA0000", "ABR", 52, 5000, 10, ""),
]


def classify_extractor(datasource: str) -> Dict[str, str]:
    """Action, replacement, impact and note for a BW DataSource name."""
    for pattern, action, prefix, impact, note in EXTRACTOR_RULES:
        if re.match(pattern, datasource):
            replacement = ""
            if prefix:
                # 0FI_GL_14 -> I_GL_14, 0CO_OM_CCA_9 -> I_CO_OM_CCA_9, 0FIAA_TRANS -> I_AA_TRANS
                replacement = prefix + re.sub(r"^0(FIAA|AM|FI|CO)_", "", datasource)
            return {"action": action, "replacement": replacement, "impact": impact, "notes": note}
    return {
        "action": "keep",
        "replacement": "",
        "impact": "LOW",
        "notes": "Standard extractor; no known S/4HANA impact",
    }


class BwExtractorMigrationObject(AssessmentMigrationObject):
    """RSOLTPSOURCE -> BW DataSource assessment."""

    object_id = "BW_EXTRACTOR"
    name = "BW Extractor"
    source_table = "ROOSOURCE"
    target_entity = "BWDataSourceAssessment"
    strategy_field = "MigrationAction"

    def field_mappings(self):
        return [
            # DataSource definition
            rule("OLTPSOURCE", "DataSource"),
            rule("TXTLG", "DataSourceDescription"),
            rule("APPLNM", "ApplicationComponent"),
            rule("TYPE", "DataSourceType"),
            rule("EXTRACT_TYPE", "ExtractionType"),
            rule("EXTRACTOR", "SourceTable"),
            rule("DELTA", "DeltaType"),
            rule("DELTA_FIELD", "DeltaField"),
            # Data flow
            rule("INFOSOURCE", "InfoSource"),
            rule("DTP", "DataTransferProcess"),
            rule("TARGET_OBJ", "TargetObject"),
            rule("TARGET_TYPE", "TargetObjectType"),
            # Load statistics
            rule("LAST_EXEC", "LastExecution", ConverterTag.TO_DATE),
            rule("EXEC_COUNT", "ExecutionCount", ConverterTag.TO_INTEGER),
            rule("AVG_RECORDS", "AvgRecordsPerLoad", ConverterTag.TO_INTEGER),
            rule("AVG_DURATION", "AvgDurationMin", ConverterTag.TO_DECIMAL),
            # Assessment
            rule("MIGRATION_ACTION", "MigrationAction"),
            rule("REPLACEMENT_DS", "ReplacementDataSource"),
            rule("IMPACT", "ImpactLevel"),
            rule("AFFECTED_TABLES", "AffectedTables"),
            rule("NOTES", "Notes"),
            rule("IS_CUSTOM", "IsCustomExtractor", ConverterTag.BOOL_YN),
            rule("FUNCTION", "CustomFunctionModule"),
            rule("STATUS", "AssessmentStatus", default="OPEN"),
            rule("PRIORITY", "MigrationPriority"),
            *provenance(self.object_id, source_system="BW"),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["DataSource", "ApplicationComponent", "MigrationAction"],
            duplicate_keys=["DataSource"],
            ranges=[("ExecutionCount", 0, None), ("AvgRecordsPerLoad", 0, None), ("AvgDurationMin", 0, None)],
        )

    def classify(self, record):
        result = classify_extractor(str(record.get("DataSource") or ""))
        return {
            "MigrationAction": result["action"],
            "ReplacementDataSource": result["replacement"],
            "ImpactLevel": result["impact"],
            "Notes": result["notes"],
            "MigrationPriority": PRIORITIES[result["impact"]],
            "AffectedTables": record.get("SourceTable") or "",
        }

    def extract_mock(self):
        records = []
        for datasource, desc, comp, ds_type, extraction, table, delta, runs, volume, minutes, fm in EXTRACTORS:
            records.append({
                "OLTPSOURCE": datasource,
                "TXTLG": desc,
                "APPLNM": comp,
                "TYPE": ds_type,
                "EXTRACT_TYPE": extraction,
                "EXTRACTOR": table,
                "DELTA": delta,
                "DELTA_FIELD": "AEDAT" if delta == "AIMD" else "",
                "INFOSOURCE": f"IS_{datasource}",
                "DTP": f"DTP_{datasource}",
                "TARGET_OBJ": f"ADSO_{comp.replace('-', '_')}",
                "TARGET_TYPE": "ADSO",
                "LAST_EXEC": "20240601" if runs >= 52 else "20240501",
                "EXEC_COUNT": str(runs),
                "AVG_RECORDS": str(volume),
                "AVG_DURATION": str(minutes),
                "IS_CUSTOM": "X" if fm else "",
                "FUNCTION": fm,
                "STATUS": "ASSESSED",
            })
        return records


RFC_NAME_STRATEGIES = [
    (r"APO|CRM|SRM", "decommission"),
    (r"PI|PO_", "replace-with-cpi"),
    (r"SOLMAN", "replace-with-cloud-alm"),
    (r"BW", "review"),
    (r"SF_|ARIBA|CONCUR|SALESFORCE", "route-via-cpi"),
]
RFC_TYPE_STRATEGIES = {"T": "replace-with-cpi", "H": "route-via-cpi", "3": "keep-redirect"}

# (destination, type, description, host, status)
DESTINATIONS = [
    ("SAPFTP", "T", "FTP transfer", "ftp.acme.com", "active"),
    ("ERP_TO_CRM", "3", "CRM integration", "crm.acme.com", "active"),
    ("ERP_TO_BW", "3", "BW extraction", "bw.acme.com", "active"),
    ("ERP_TO_PI", "3", "PI middleware", "pi.acme.com", "active"),
    ("ERP_TO_SRM", "3", "SRM procurement", "srm.acme.com", "active"),
    ("ERP_TO_PORTAL", "H", "Enterprise Portal", "portal.acme.com", "active"),
    ("BANK_SFTP", "T", "Bank file transfer", "sftp.bank.com", "active"),
    ("EDI_PROVIDER", "H", "EDI VAN provider", "edi.provider.com", "active"),
    ("TAX_ENGINE", "H", "Tax calculation", "tax.vertex.com", "active"),
    ("ERP_TO_GTS", "3", "GTS compliance", "gts.acme.com", "active"),
    ("ERP_TO_EWM", "3", "Extended WM", "ewm.acme.com", "active"),
    ("ARIBA_NETWORK", "H", "Ariba Network", "api.ariba.com", "active"),
    ("SF_EC", "H", "SuccessFactors EC", "api.successfactors.com", "active"),
    ("CONCUR_API", "H", "SAP Concur", "api.concursolutions.com", "active"),
    ("LEGACY_MAINFRAME", "3", "Mainframe legacy", "mainframe.acme.com", "inactive"),
    ("ERP_TO_MES", "3", "MES shopfloor", "mes.acme.com", "active"),
    ("ERP_TO_SOLMAN", "3", "Solution Manager", "solman.acme.com", "active"),
    ("SALESFORCE_API", "H", "Salesforce CRM", "api.salesforce.com", "active"),
    ("ERP_TO_APO", "3", "APO planning", "apo.acme.com", "active"),
    ("PRINT_SERVER", "T", "Print services", "print.acme.com", "active"),
]


def classify_destination(destination: str, rfc_type: str) -> str:
    """Migration strategy for an RFC destination, by name first and then by connection type."""
    for pattern, strategy in RFC_NAME_STRATEGIES:
        if re.search(pattern, destination, re.IGNORECASE):
            return strategy
    return RFC_TYPE_STRATEGIES.get(rfc_type, "review")


class RfcDestinationMigrationObject(AssessmentMigrationObject):
    """RFCDES -> RFC destination assessment (keep, redirect, replace or decommission)."""

    object_id = "RFC_DESTINATION"
    name = "RFC Destination"
    source_table = "RFCDES"
    target_entity = "RFCDestinationAssessment"

    def field_mappings(self):
        return [
            rule("RFCDEST", "Destination"),
            rule("RFCTYPE", "RFCType", ConverterTag.TO_UPPER_CASE),
            rule("RFCDOC1", "Description"),
            rule("RFCHOST", "TargetHost", ConverterTag.TO_LOWER_CASE),
            rule("RFCSYSID", "SystemID"),
            rule("RFCCLIENT", "Client"),
            rule("RFCUSER", "LogonUser"),
            rule("RFCLANG", "LogonLanguage", ConverterTag.TO_UPPER_CASE),
            rule("RFCAUTH", "AuthType"),
            rule("RFCTRUST", "TrustedSystem", ConverterTag.BOOL_YN),
            rule("RFCSNC", "SNCEnabled", ConverterTag.BOOL_YN),
            rule("RFCSNCQOP", "SNCQualityOfProtection"),
            rule("RFCSAMEUSR", "SameUser", ConverterTag.BOOL_YN),
            rule("RFCSERVICE", "Port"),
            rule("RFCPATH", "PathPrefix"),
            rule("RFCSYSNR", "InstanceNumber"),
            rule("RFCGWHOST", "GatewayHost"),
            rule("RFCGWSERV", "GatewayService"),
            rule("RFCMSHOST", "MessageServer"),
            rule("RFCLOGGRP", "LogonGroup"),
            rule("RFCUNICODE", "Unicode", ConverterTag.BOOL_YN),
            rule("RFCTRACE", "TraceEnabled", ConverterTag.BOOL_YN),
            rule("RFCTIMEOUT", "TimeoutSeconds", ConverterTag.TO_INTEGER),
            rule("RFCSTATUS", "Status"),
            rule("RFCCHGDATE", "LastChangedDate", ConverterTag.TO_DATE),
            rule("RFCCHGUSER", "LastChangedBy"),
            rule("RFCMIGSTRATEGY", "MigrationStrategy"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["Destination", "RFCType", "TargetHost"],
            duplicate_keys=["Destination"],
            ranges=[("TimeoutSeconds", 0, 3600)],
        )

    def classify(self, record):
        return {
            "MigrationStrategy": classify_destination(
                str(record.get("Destination") or ""), str(record.get("RFCType") or "")
            ),
        }

    def extract_mock(self):
        records = []
        for i, (destination, rfc_type, desc, host, status) in enumerate(DESTINATIONS, start=1):
            abap = rfc_type == "3"
            records.append({
                "RFCDEST": destination,
                "RFCTYPE": rfc_type,
                "RFCDOC1": desc,
                "RFCHOST": host,
                "RFCSYSID": "S4H" if abap else "",
                "RFCCLIENT": "100" if abap else "",
                "RFCUSER": "RFC_USER",
                "RFCLANG": "EN" if abap else "",
                "RFCAUTH": "BASIC" if rfc_type == "H" else "DIALOG",
                "RFCTRUST": "X" if abap and status == "active" else "",
                "RFCSNC": "X" if abap else "",
                "RFCSNCQOP": "3" if abap else "",
                "RFCSAMEUSR": "",
                "RFCSERVICE": {"H": "443", "T": "22"}.get(rfc_type, "3300"),
                "RFCPATH": "/sap/bc/srt" if rfc_type == "H" else "",
                "RFCSYSNR": "00" if abap else "",
                "RFCGWHOST": host if abap else "",
                "RFCGWSERV": "sapgw00" if abap else "",
                "RFCMSHOST": "",
                "RFCLOGGRP": "",
                "RFCUNICODE": "X" if abap else "",
                "RFCTRACE": "X" if i % 7 == 0 else "",
                "RFCTIMEOUT": "60" if rfc_type == "H" else "0",
                "RFCSTATUS": status,
                "RFCCHGDATE": f"2023{(i - 1) % 12 + 1:02d}15",
                "RFCCHGUSER": "BASIS_ADMIN",
            })
        return records


IDOC_MESSAGE_STRATEGIES = [
    (r"^(DEBMAS|CREMAS)", "replace", "high", "BUPA IDocs for business partner distribution"),
    (r"^(WMMBID|WMTOCO)", "replace", "high", "Embedded EWM or decentralized EWM APIs"),
    (r"^MATMAS", "update-segments", "medium", "MATMAS with 40 character MATNR segments"),
]
IDOC_PARTNER_STRATEGIES = [
    (r"SF_EC|ARIBA|CONCUR", "route-via-cpi", "medium", "CPI standard content package"),
    (r"BW", "review", "medium", "CDS based extraction or embedded analytics"),
    (r"APO", "decommission", "high", "Embedded PP/DS"),
]

# (message type, basic type, direction, partner, description, daily volume, segments)
IDOC_FLOWS = [
    ("ORDERS", "ORDERS05", "1", "EDI_PROVIDER", "Purchase order from customer", 1200, 45),
    ("ORDRSP", "ORDERS05", "2", "EDI_PROVIDER", "Order confirmation", 1100, 45),
    ("DESADV", "DESADV01", "2", "EDI_PROVIDER", "Advance shipping notice", 800, 30),
    ("INVOIC", "INVOIC02", "2", "EDI_PROVIDER", "Invoice outbound", 950, 50),
    ("INVOIC", "INVOIC02", "1", "EDI_PROVIDER", "Vendor invoice", 600, 50),
    ("MATMAS", "MATMAS05", "2", "ERP_TO_BW", "Material master distribution", 350, 65),
    ("DEBMAS", "DEBMAS07", "2", "ERP_TO_CRM", "Customer master distribution", 200, 40),
    ("CREMAS", "CREMAS05", "2", "ERP_TO_SRM", "Vendor master distribution", 150, 35),
    ("WMMBID", "WMMBID02", "1", "ERP_TO_EWM", "WM goods movement", 2500, 20),
    ("HRMD_A", "HRMD_A07", "2", "SF_EC", "HR master data", 100, 80),
    ("PORDCR", "PORDCR05", "2", "ARIBA_NETWORK", "PO creation", 400, 35),
    ("SHPMNT", "SHPMNT06", "2", "ERP_TO_TM", "Shipment", 300, 25),
    ("LOIPRO", "LOIPRO01", "1", "ERP_TO_MES", "Production order", 500, 30),
    ("FIDCCP", "FIDCCP01", "2", "BANK_SFTP", "Payment file", 60, 15),
    ("FINSTA", "FINSTA01", "1", "BANK_SFTP", "Bank statement", 30, 20),
    ("ACC_DOCUMENT", "ACC_DOCUMENT04", "2", "ERP_TO_BW", "Accounting document", 5000, 55),
    ("DELVRY", "DELVRY03", "2", "ERP_TO_EWM", "Delivery", 700, 35),
    ("WMTOCO", "WMTOCO01", "2", "ERP_TO_EWM", "WM transfer order", 1800, 18),
    ("ARTMAS", "ARTMAS09", "2", "ERP_TO_APO", "Article master", 160, 70),
    ("TRVREQ", "TRVREQ01", "2", "CONCUR_API", "Travel request", 40, 25),
    ("DELFOR", "DELFOR01", "1", "EDI_PROVIDER", "Delivery forecast", 220, 28),
    ("REMADV", "REMADV01", "1", "EDI_PROVIDER", "Remittance advice", 80, 22),
    ("GSVERF", "GSVERF02", "2", "ERP_TO_GTS", "GTS compliance", 120, 30),
    ("CIFMAT", "CIFMAT01", "2", "ERP_TO_APO", "CIF material", 140, 40),
    ("GLMAST", "GLMAST02", "2", "ERP_TO_BW", "GL account master", 30, 15),
]


def classify_idoc_flow(message_type: str, partner: str) -> Dict[str, str]:
    """Strategy, impact and replacement for an IDoc flow."""
    for pattern, strategy, impact, replacement in IDOC_MESSAGE_STRATEGIES:
        if re.search(pattern, message_type):
            return {"strategy": strategy, "impact": impact, "replacement": replacement}
    for pattern, strategy, impact, replacement in IDOC_PARTNER_STRATEGIES:
        if re.search(pattern, partner):
            return {"strategy": strategy, "impact": impact, "replacement": replacement}
    return {"strategy": "keep-review", "impact": "low", "replacement": "Verify segment compatibility"}


class IdocConfigMigrationObject(AssessmentMigrationObject):
    """EDP13/EDP21 partner profiles -> IDoc flow assessment."""

    object_id = "IDOC_CONFIG"
    name = "IDoc Configuration"
    source_table = "EDP13"
    target_entity = "IDocFlowAssessment"

    def field_mappings(self):
        return [
            # Flow identification
            rule("MESTYP", "MessageType", ConverterTag.TO_UPPER_CASE),
            rule("IDOCTYP", "IDocType", ConverterTag.TO_UPPER_CASE),
            rule("CIMTYP", "ExtensionType"),
            rule("DIRECT", "Direction"),
            rule("RCVPRN", "PartnerNumber"),
            rule("RCVPRT", "PartnerType"),
            rule("RCVPFC", "PartnerFunction"),
            rule("SNDPRN", "SenderPartner"),
            rule("SNDPRT", "SenderPartnerType"),
            rule("MESCOD", "MessageVariant"),
            rule("MESFCT", "MessageFunction"),
            # Port and processing
            rule("RCVPOR", "Port"),
            rule("RFCDEST", "RFCDestination"),
            rule("OUTMOD", "OutputMode"),
            rule("PCKSIZ", "PacketSize", ConverterTag.TO_INTEGER),
            rule("SYNCHK", "SyntaxCheck", ConverterTag.BOOL_YN),
            rule("TEST", "TestMode", ConverterTag.BOOL_YN),
            rule("QUEUEID", "QueueID"),
            # Volume and monitoring
            rule("VOLUME", "DailyVolume", ConverterTag.TO_INTEGER),
            rule("DESCRP", "Description"),
            rule("STATUS", "FlowStatus"),
            rule("LASTRUN", "LastProcessedDate", ConverterTag.TO_DATE),
            # Segment structure
            rule("SEGNUM", "SegmentCount", ConverterTag.TO_INTEGER),
            rule("APPLREL", "ReleaseVersion"),
            # Assessment
            rule("MIGSTRATEGY", "MigrationStrategy"),
            rule("IMPACT", "ImpactLevel"),
            rule("S4_REPLACEMENT", "S4HANAReplacement"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["MessageType", "IDocType", "Direction", "PartnerNumber"],
            duplicate_keys=["MessageType", "IDocType", "Direction", "PartnerNumber"],
            ranges=[("DailyVolume", 0, 1000000), ("PacketSize", 1, None)],
        )

    def classify(self, record):
        result = classify_idoc_flow(
            str(record.get("MessageType") or ""), str(record.get("RFCDestination") or "")
        )
        return {
            "MigrationStrategy": result["strategy"],
            "ImpactLevel": result["impact"],
            "S4HANAReplacement": result["replacement"],
        }

    def extract_mock(self):
        records = []
        for message_type, basic_type, direction, partner, desc, volume, segments in IDOC_FLOWS:
            outbound = direction == "2"
            records.append({
                "MESTYP": message_type,
                "IDOCTYP": basic_type,
                "CIMTYP": "",
                "DIRECT": direction,
                "RCVPRN": partner if outbound else "SELF",
                "RCVPRT": "LS",
                "RCVPFC": "",
                "SNDPRN": "SELF" if outbound else partner,
                "SNDPRT": "LS",
                "MESCOD": "",
                "MESFCT": "",
                "RCVPOR": f"PORT_{partner}"[:10],
                "RFCDEST": partner,
                "OUTMOD": "4" if outbound else "",
                "PCKSIZ": "50",
                "SYNCHK": "X",
                "TEST": "",
                "QUEUEID": "",
                "VOLUME": str(volume),
                "DESCRP": desc,
                "STATUS": "active",
                "LASTRUN": "20240115",
                "SEGNUM": str(segments),
                "APPLREL": "740",
            })
        return records


# Defaults per migration path: (effort, replacement)
WEB_SERVICE_PATHS = {
    "keep": ("none", "Already S/4HANA native"),
    "keep-enhance": ("low", "Enhance with RAP"),
    "soap-to-odata": ("medium", "Released OData API"),
    "migrate-to-rap": ("medium", "RAP based OData v4"),
    "cpi-route": ("high", "Route via CPI"),
}

# (name, type, direction, binding class, namespace, monthly calls, known replacement)
WEB_SERVICES = [
    ("ZSOAP_CUSTOMER_SYNC", "SOAP", "provider", "ZCL_WS_CUSTOMER", "urn:sap-com:document:sap:rfc:functions",
     5000, "API_BUSINESS_PARTNER"),
    ("ZSOAP_VENDOR_SYNC", "SOAP", "provider", "ZCL_WS_VENDOR", "urn:sap-com:document:sap:rfc:functions",
     3200, "API_BUSINESS_PARTNER"),
    ("ZSOAP_PO_CREATE", "SOAP", "provider", "ZCL_WS_PO", "urn:sap-com:document:sap:rfc:functions",
     2800, "API_PURCHASEORDER_PROCESS_SRV"),
    ("ZSOAP_MATERIAL_QUERY", "SOAP", "provider", "ZCL_WS_MATERIAL", "urn:sap-com:document:sap:rfc:functions",
     1900, "API_PRODUCT_SRV"),
    ("ZSOAP_PRICE_UPDATE", "SOAP", "provider", "ZCL_WS_PRICE", "urn:sap-com:document:sap:rfc:functions",
     700, "API_SLSPRICINGCONDITIONRECORD_SRV"),
    ("ZSOAP_INVENTORY_INQ", "SOAP", "consumer", "ZCL_WS_INV_PROXY", "http://inv.external.com", 8000, ""),
    ("ZREST_ORDER_STATUS", "REST", "provider", "ZCL_REST_ORDER", "/sap/zrest/order", 12000, ""),
    ("ZREST_QUALITY_RESULT", "REST", "provider", "ZCL_REST_QM", "/sap/zrest/quality", 2100, ""),
    ("ZREST_PAYMENT_POST", "REST", "consumer", "ZCL_REST_PAY", "https://pay.stripe.com/api", 1500, ""),
    ("ZREST_SHIPMENT_TRACK", "REST", "consumer", "ZCL_REST_SHIP", "https://track.carrier.com/api", 900, ""),
    ("ZREST_CREDIT_CHECK", "REST", "consumer", "ZCL_REST_CREDIT", "https://api.creditbureau.com/v2", 650, ""),
    ("ZREST_FX_RATES", "REST", "consumer", "ZCL_REST_FX", "https://rates.ecb.example.com", 30, ""),
    ("ZODATA_MATERIAL_SRV", "OData", "provider", "ZCL_ODATA_MAT", "/sap/opu/odata/sap", 15000, ""),
    ("ZODATA_SALES_SRV", "OData", "provider", "ZCL_ODATA_SALES", "/sap/opu/odata/sap", 9500, ""),
    ("ZODATA_EMPLOYEE_SRV", "OData", "provider", "ZCL_ODATA_HR", "/sap/opu/odata/sap", 4200, ""),
    ("ZODATA_PLANT_MAINT_SRV", "OData", "provider", "ZCL_ODATA_PM", "/sap/opu/odata/sap", 2600, ""),
    ("ZODATA_WAREHOUSE_SRV", "OData", "provider", "ZCL_ODATA_WM", "/sap/opu/odata/sap", 3300, ""),
    ("API_BUSINESS_PARTNER", "OData", "provider", "CL_BP_ODATA", "/sap/opu/odata/sap", 20000, ""),
    ("API_MATERIAL_DOCUMENT_SRV", "OData", "provider", "CL_MATDOC_ODATA", "/sap/opu/odata/sap", 7500, ""),
    ("API_SALES_ORDER_SRV", "OData", "provider", "CL_SALESORDER_ODATA", "/sap/opu/odata/sap", 11000, ""),
]


def classify_web_service(name: str, service_type: str, direction: str) -> str:
    """Migration path for a web service."""
    if not name.startswith(("Z", "Y")):
        return "keep"
    if direction == "consumer":
        return "cpi-route"
    return {"SOAP": "soap-to-odata", "REST": "keep-enhance"}.get(service_type, "migrate-to-rap")


class WebServiceMigrationObject(AssessmentMigrationObject):
    """SOA Manager configurations -> web service assessment."""

    object_id = "WEB_SERVICE"
    name = "Web Service"
    source_table = "SRT_CFG_DIR"
    target_entity = "WebServiceAssessment"
    strategy_field = "MigrationPath"

    def field_mappings(self):
        return [
            # Service identification
            rule("SRVNAME", "ServiceName"),
            rule("SRVDESC", "Description"),
            rule("SRVTYPE", "ServiceType"),
            rule("DIRECTION", "Direction", ConverterTag.TO_LOWER_CASE),
            rule("BINDING", "BindingClass"),
            rule("NAMESPACE", "Namespace"),
            rule("VERSION", "ServiceVersion", default="0001"),
            # Technical details
            rule("ENDPOINT", "EndpointURL"),
            rule("AUTHTYPE", "AuthenticationType"),
            rule("SECPROF", "SecurityProfile"),
            rule("SSLREQ", "TLSRequired", ConverterTag.BOOL_YN),
            rule("PROTOCOL", "Protocol"),
            rule("TIMEOUT", "TimeoutSeconds", ConverterTag.TO_INTEGER),
            rule("WSDLPATH", "WSDLPath"),
            rule("DEVCLASS", "ABAPPackage"),
            rule("TRKORR", "TransportRequest"),
            rule("OWNER", "ResponsibleUser"),
            rule("CREATED", "CreatedDate", ConverterTag.TO_DATE),
            # Usage
            rule("STATUS", "Status"),
            rule("LASTCALL", "LastCalledDate", ConverterTag.TO_DATE),
            rule("CALLCOUNT", "MonthlyCallCount", ConverterTag.TO_INTEGER),
            rule("ERRCOUNT", "MonthlyErrorCount", ConverterTag.TO_INTEGER),
            rule("AVGRESP", "AvgResponseMs", ConverterTag.TO_INTEGER),
            # Assessment
            rule("MIGPATH", "MigrationPath"),
            rule("S4REPLACEMENT", "S4HANAReplacement"),
            rule("EFFORT", "EstimatedEffort"),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["ServiceName", "ServiceType", "Direction"],
            duplicate_keys=["ServiceName", "ServiceVersion"],
            ranges=[("MonthlyCallCount", 0, None), ("AvgResponseMs", 0, 60000)],
        )

    def classify(self, record):
        path = str(record.get("MigrationPath") or "") or classify_web_service(
            str(record.get("ServiceName") or ""),
            str(record.get("ServiceType") or ""),
            str(record.get("Direction") or ""),
        )
        effort, replacement = WEB_SERVICE_PATHS.get(path, ("medium", ""))
        return {"MigrationPath": path, "EstimatedEffort": effort, "S4HANAReplacement": replacement}

    def extract_mock(self):
        records = []
        for i, (name, service_type, direction, binding, namespace, calls, replacement) in enumerate(
            WEB_SERVICES, start=1
        ):
            soap = service_type == "SOAP"
            records.append({
                "SRVNAME": name,
                "SRVDESC": name.split("_", 1)[1].replace("_", " ").title(),
                "SRVTYPE": service_type,
                "DIRECTION": direction,
                "BINDING": binding,
                "NAMESPACE": namespace,
                "VERSION": "0001",
                "ENDPOINT": (
                    f"/sap/opu/odata/sap/{name}" if service_type == "OData" else f"/sap/bc/srt/wsdl/{name}"
                ),
                "AUTHTYPE": "OAUTH2" if direction == "consumer" else "BASIC",
                "SECPROF": "SAP_WSRM" if soap else "",
                "SSLREQ": "X",
                "PROTOCOL": "HTTP/1.1" if soap else "HTTP/2",
                "TIMEOUT": "30" if direction == "consumer" else "60",
                "WSDLPATH": f"/sap/bc/srt/wsdl/{name}?sap-client=100" if soap else "",
                "DEVCLASS": f"Z{service_type.upper()}_PKG" if name.startswith("Z") else "",
                "TRKORR": f"DEVK9{i:05d}" if name.startswith("Z") else "",
                "OWNER": "INTEGRATION",
                "CREATED": f"20{15 + i % 8}0301",
                "STATUS": "active",
                "LASTCALL": "20240115",
                "CALLCOUNT": str(calls),
                "ERRCOUNT": str(calls // 200),
                "AVGRESP": mock_amount(i, 80, 900).split(".")[0],
                "S4REPLACEMENT": replacement,
            })
        return records


FREQUENCY_PERIODS = {"hourly": ("60", "0", "0"), "daily": ("0", "24", "0"),
                     "weekly": ("0", "0", "7"), "monthly": ("0", "0", "30")}

# (job name, frequency, program, average runtime minutes, job class)
BATCH_JOBS = [
    ("Z_FI_MONTHLY_CLOSE", "monthly", "ZREP_FI_MONTHLY", 240, "A"),
    ("Z_MM_PO_RELEASE", "daily", "ZMM_PO_RELEASE", 15, "B"),
    ("Z_SD_BILLING_RUN", "daily", "ZSD_BILLING_RUN", 45, "B"),
    ("Z_CUSTOMER_SYNC", "hourly", "ZFI_CUSTOMER_AGING", 5, "B"),
    ("Z_VENDOR_EVAL", "weekly", "ZMM_VENDOR_EVAL", 30, "C"),
    ("Z_WM_REPLENISH", "daily", "ZWM_STOCK_CHECK", 20, "B"),
    ("Z_SD_OUTPUT", "hourly", "ZSD_OUTPUT_MGR", 10, "A"),
    ("Z_DELIVERY_PROC", "daily", "ZSD_DELIVERY", 35, "B"),
    ("Z_PAYMENT_RUN", "weekly", "ZREP_FI_PAYMENT", 60, "A"),
    ("Z_MRP_CUSTOM", "daily", "Z_MRP_PROCESSOR", 120, "A"),
    ("Z_ARCHIVE_DATA", "monthly", "Z_ARCHIVE_PROC", 480, "C"),
    ("Z_EDI_MONITOR", "hourly", "Z_EDI_PROC", 3, "B"),
    ("Z_BANK_STMT_IMPORT", "daily", "Z_BANK_IMPORT", 8, "B"),
    ("Z_TAX_REPORT", "monthly", "Z_TAX_PROC", 90, "A"),
    ("Z_INVENTORY_COUNT", "weekly", "Z_INV_COUNT", 25, "C"),
    ("Z_GR_IR_CLEARING", "daily", "ZREP_GRIR_CLEAR", 40, "B"),
    ("Z_INTERCO_RECON", "monthly", "Z_IC_RECON", 150, "A"),
    ("SAP_COLLECTOR_FOR_PERFMONITOR", "hourly", "RSCOLL00", 1, "A"),
    ("SAP_CCMS_MONI_BATCH_DP", "daily", "RSAL_BATCH_TOOL_DISPATCHING", 2, "A"),
    ("SAP_REORG_SPOOL", "daily", "RSPO0041", 5, "C"),
    ("SAP_REORG_JOBS", "weekly", "RSBTCDEL2", 4, "C"),
]


def classify_batch_job(program: str, frequency: str, runtime: int) -> str:
    """Strategy for a background job: standard programs stay, custom ones are reviewed."""
    if not program.startswith("Z"):
        return "keep"
    if runtime > 120:
        return "review-performance"
    if frequency == "hourly":
        return "convert-to-app-job"
    return "review-compatibility"


class BatchJobMigrationObject(AssessmentMigrationObject):
    """TBTCO/TBTCP -> background job assessment (application jobs in S/4HANA)."""

    object_id = "BATCH_JOB"
    name = "Batch Job"
    source_table = "TBTCO"
    target_entity = "BatchJobAssessment"

    def field_mappings(self):
        return [
            # Job identification
            rule("JOBNAME", "JobName"),
            rule("JOBCOUNT", "JobCount"),
            rule("JOBCLASS", "JobClass"),
            rule("PROGNAME", "ProgramName", ConverterTag.TO_UPPER_CASE),
            rule("VARIANT", "Variant"),
            rule("STEPCOUNT", "StepCount", ConverterTag.TO_INTEGER),
            rule("AUTHCKNAM", "AuthorizationUser"),
            rule("SDLUNAME", "ScheduledBy"),
            # Schedule
            rule("FREQUENCY", "Frequency", ConverterTag.TO_LOWER_CASE),
            rule("SDLSTRTDT", "ScheduledStartDate", ConverterTag.TO_DATE),
            rule("SDLSTRTTM", "StartTime"),
            rule("PRDMINS", "PeriodMinutes", ConverterTag.TO_INTEGER),
            rule("PRDHOURS", "PeriodHours", ConverterTag.TO_INTEGER),
            rule("PRDDAYS", "PeriodDays", ConverterTag.TO_INTEGER),
            rule("CALENDARID", "FactoryCalendar"),
            rule("EVENTID", "TriggerEvent"),
            rule("BTCSYSREAX", "TargetServer"),
            rule("PDEST", "OutputDevice"),
            # Runtime
            rule("STATUS", "Status"),
            rule("AVGRUNTIME", "AvgRuntimeMinutes", ConverterTag.TO_INTEGER),
            rule("LASTRUN", "LastRunDate", ConverterTag.TO_DATE),
            rule("LASTSTATUS", "LastRunStatus"),
            # Assessment
            rule("MIGSTRATEGY", "MigrationStrategy"),
            rule("CUSTOMCODE", "HasCustomCode", ConverterTag.BOOL_YN),
            *provenance(self.object_id),
        ]

    def quality_checks(self):
        return QualityChecks.build(
            required=["JobName", "ProgramName", "Frequency"],
            duplicate_keys=["JobName"],
            ranges=[("AvgRuntimeMinutes", 0, 1440)],
        )

    def classify(self, record):
        runtime = record.get("AvgRuntimeMinutes")
        return {
            "MigrationStrategy": classify_batch_job(
                str(record.get("ProgramName") or ""),
                str(record.get("Frequency") or ""),
                runtime if isinstance(runtime, int) else 0,
            ),
        }

    def extract_mock(self):
        records = []
        for i, (job_name, frequency, program, runtime, job_class) in enumerate(BATCH_JOBS, start=1):
            custom = program.startswith("Z")
            minutes, hours, days = FREQUENCY_PERIODS[frequency]
            records.append({
                "JOBNAME": job_name,
                "JOBCOUNT": f"{6000000 + i * 137:08d}",
                "JOBCLASS": job_class,
                "PROGNAME": program,
                "VARIANT": f"{job_name}_VAR"[:14] if custom else "",
                "STEPCOUNT": "2" if runtime > 100 else "1",
                "AUTHCKNAM": "BATCH_USER",
                "SDLUNAME": "BASIS_ADMIN" if not custom else "JOB_SCHEDULER",
                "FREQUENCY": frequency,
                "SDLSTRTDT": "20240101",
                "SDLSTRTTM": "060000" if frequency != "hourly" else "000000",
                "PRDMINS": minutes,
                "PRDHOURS": hours,
                "PRDDAYS": days,
                "CALENDARID": "US",
                "EVENTID": "SAP_END_OF_JOB" if job_name == "Z_PAYMENT_RUN" else "",
                "BTCSYSREAX": "s4app01_S4H_00" if job_class == "A" else "",
                "PDEST": "LOCL" if "REPORT" in job_name or "CLOSE" in job_name else "",
                "STATUS": "active",
                "AVGRUNTIME": str(runtime),
                "LASTRUN": "20240115",
                "LASTSTATUS": "success",
                "CUSTOMCODE": "X" if custom else "",
            })
        return records
