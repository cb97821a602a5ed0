"""
Source adapter for Infor M3.

M3 uses 6-character table names and 4-character field codes whose first
two letters identify the domain (ITNO item number, CUNO customer, CONO
company). Live reads execute the MI program mapped to the table, or go
straight to the database.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import InforError
from ..models.migration import SourceMode
from ..models.record import Record
from .base import (
    EntityResult,
    InforAdapter,
    PAGING_POST_FETCH,
    PAGING_SOURCE,
    ReadOptions,
    TableResult,
    apply_paging,
)

logger = logging.getLogger(__name__)


TABLE_PROGRAM_MAP = {
    "MITMAS": {"program": "MMS200", "transaction": "LstByNam", "key_field": "ITNO"},
    "OCUSMA": {"program": "CRS610", "transaction": "LstByName", "key_field": "CUNO"},
    "CIDMAS": {"program": "CRS620", "transaction": "LstByName", "key_field": "SUNO"},
    "OOLINE": {"program": "OIS100", "transaction": "LstLines", "key_field": "ORNO"},
    "MPLINE": {"program": "PPS200", "transaction": "LstLines", "key_field": "PUNO"},
    "MITBAL": {"program": "MMS200", "transaction": "LstByNam", "key_field": "ITNO"},
    "FSLEDG": {"program": "GLS200", "transaction": "LstVoucher", "key_field": "VONO"},
    "CMNFCN": {"program": "CMNFCN", "transaction": "GetBasicData", "key_field": "CONO"},
}

FIELD_PREFIXES = {
    "IT": "Item",
    "WH": "Warehouse",
    "CO": "Company/Customer Order",
    "CU": "Customer",
    "SU": "Supplier",
    "OR": "Order",
    "PU": "Purchase",
    "DI": "Division",
    "FA": "Facility",
    "ST": "Status",
    "VO": "Voucher",
    "AC": "Account",
}

MOCK_TABLES: Dict[str, List[Record]] = {
    "MITMAS": [
        {"ITNO": "A001", "ITDS": "Widget Alpha", "ITTY": "001", "STAT": "20", "UNMS": "EA", "FUDS": "Standard widget A"},
        {"ITNO": "A002", "ITDS": "Widget Beta", "ITTY": "001", "STAT": "20", "UNMS": "EA", "FUDS": "Standard widget B"},
        {"ITNO": "B001", "ITDS": "Gear Assembly", "ITTY": "002", "STAT": "20", "UNMS": "PC", "FUDS": "Drive gear assembly"},
        {"ITNO": "B002", "ITDS": "Motor Housing", "ITTY": "002", "STAT": "20", "UNMS": "PC", "FUDS": "Motor housing unit"},
    ],
    "OCUSMA": [
        {"CUNO": "CUST001", "CUNM": "Acme Corp", "STAT": "20", "CUTP": "0", "CUA1": "100 Main St"},
        {"CUNO": "CUST002", "CUNM": "Global Ltd", "STAT": "20", "CUTP": "0", "CUA1": "200 Oak Ave"},
    ],
    "CIDMAS": [
        {"SUNO": "SUPP001", "SUNM": "Parts Plus", "STAT": "20", "SUTY": "0"},
        {"SUNO": "SUPP002", "SUNM": "Metal Works", "STAT": "20", "SUTY": "0"},
    ],
    "CMNFCN": [
        {"CONO": "100", "CONM": "M3 Main Company", "DIVI": "AAA", "CCUR": "USD"},
    ],
}

MODULES = ["MMS", "OIS", "PPS", "GLS", "CRS", "MWS", "APS", "MNS"]


def flatten_mi_record(record: Dict[str, Any]) -> Record:
    """MI records come back as NameValue pairs; flatten them into a row."""
    if "NameValue" in record:
        return {nv.get("Name"): nv.get("Value") for nv in record["NameValue"]}
    return dict(record)


class M3Adapter(InforAdapter):
    """Read-only adapter for Infor M3."""

    product = "m3"
    product_name = "Infor M3"
    health_table = "MITMAS"

    def __init__(
        self,
        company: str = "100",
        division: str = "",
        mode: SourceMode = SourceMode.MOCK,
        client: Optional[Any] = None,
        db: Optional[Any] = None,
    ):
        """
        Initialize the M3 adapter.

        Args:
            company: M3 company number (CONO)
            division: M3 division (DIVI)
            mode: SourceMode.MOCK or SourceMode.LIVE
            client: InforRestClient for the M3 API gateway
            db: InforDbAdapter for direct SQL
        """
        super().__init__(mode, client=client, db=db)
        self.company = str(company or "100")
        self.division = division

    def _identity(self) -> Dict[str, Any]:
        return {"company": self.company}

    @staticmethod
    def get_field_prefix(field_name: str) -> str:
        """Explain an M3 field code prefix (ITNO -> Item)."""
        return FIELD_PREFIXES.get((field_name or "")[:2].upper(), "Unknown")

    @staticmethod
    def get_table_mapping(table: str) -> Optional[Dict[str, str]]:
        return TABLE_PROGRAM_MAP.get(table.upper())

    def read_table(self, name: str, options: Optional[ReadOptions] = None) -> TableResult:
        options = options or ReadOptions()

        if self.is_mock:
            return self._mock_read(MOCK_TABLES, name, options, company=self.company)

        self._require_connected()
        if self.db is not None:
            company_filter = f"CONO = '{self.company}'"
            scoped = ReadOptions(
                fields=options.fields,
                filter=f"({options.filter}) AND {company_filter}" if options.filter else company_filter,
                max_rows=options.max_rows,
                offset=options.offset,
                order_by=options.order_by,
            )
            return self._read_db(name, scoped, company=self.company)

        if self.client is None:
            raise self._no_access_path("read_table()")

        mapping = self.get_table_mapping(name)
        if mapping is None:
            raise InforError(
                f"No MI program mapping for table: {name}. Known tables: {', '.join(TABLE_PROGRAM_MAP)}",
                code="INFOR_ENDPOINT",
                details={"table_name": name},
            )

        # MI programs cap records but have no offset; skip rows after the fetch.
        max_recs = (options.offset + options.max_rows) if options.max_rows else 0
        response = self.execute(mapping["program"], mapping["transaction"], {"maxrecs": max_recs})
        rows = self._mi_rows(response)
        paging = PAGING_SOURCE
        if options.offset:
            rows = apply_paging(rows, options)
            paging = PAGING_POST_FETCH

        return TableResult(
            rows=rows,
            metadata={
                "table_name": name,
                "company": self.company,
                "program": mapping["program"],
                "transaction": mapping["transaction"],
                "row_count": len(rows),
                "source": "mi-program",
                "paging": paging,
            },
        )

    def execute(self, program: str, transaction: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute an MI transaction with company/division scoping."""
        query = {"CONO": self.company, **(params or {})}
        if self.division:
            query["DIVI"] = self.division
        return self.client.get(f"M3/m3api-rest/v2/execute/{program}/{transaction}", params=query)

    @staticmethod
    def _mi_rows(response: Dict[str, Any]) -> List[Record]:
        if "results" in response:
            records = [r for result in response["results"] for r in result.get("records", [])]
        else:
            records = response.get("MIRecord", response.get("records", []))
        return [flatten_mi_record(r) for r in records]

    def call_api(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = params or {}
        program, _, transaction = endpoint.partition("/")
        if not program or not transaction:
            raise InforError(
                f'Invalid M3 endpoint format: "{endpoint}". Expected "Program/Transaction"',
                code="INFOR_ENDPOINT",
                details={"endpoint": endpoint},
            )
        if self.is_mock:
            return {"program": program, "transaction": transaction, "params": params, "result": "mock", "mock": True}
        if self.client is None:
            raise InforError("call_api() requires an M3 API client", code="INFOR_CONFIG")
        self._require_connected()
        return self.execute(program, transaction, params)

    def query_entities(
        self,
        entity_type: str,
        filter: Optional[str] = None,
        options: Optional[ReadOptions] = None
    ) -> EntityResult:
        options = options or ReadOptions()
        result = self.read_table(
            entity_type,
            ReadOptions(filter=filter, max_rows=options.max_rows, offset=options.offset),
        )
        return EntityResult(entities=result.rows, total_count=len(result.rows), mock=self.is_mock)

    def get_system_info(self) -> Dict[str, Any]:
        if self.is_mock:
            return self._mock_system_info(
                "13.4",
                [{"code": m} for m in MODULES],
                company=self.company,
                company_name="M3 Main Company",
                currency="USD",
            )

        company = self.read_table("CMNFCN", ReadOptions(max_rows=1)).rows
        company_data = company[0] if company else {}
        return {
            "product": self.product_name,
            "version": company_data.get("VERS", ""),
            "company": self.company,
            "company_name": company_data.get("CONM", ""),
            "currency": company_data.get("CCUR", ""),
            "modules": [],
            "timestamp": datetime.utcnow().isoformat(),
        }
