"""
Source adapter for Infor LN (Baan).

LN tables are suffixed with the 3-digit company number: the item master
`tcibd001` is `tcibd001100` for company 100. Live reads go through the
ION API gateway (OData) or directly to the database.
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
    PAGING_SOURCE,
    ReadOptions,
    TableResult,
)

logger = logging.getLogger(__name__)


MOCK_TABLES: Dict[str, List[Record]] = {
    "tcibd001": [
        {"ITEM": "ITEM-001", "DSCA": "Steel Plate 4mm", "CITG": "01", "CSIG": "A", "CUNI": "KG", "STAP": 1},
        {"ITEM": "ITEM-002", "DSCA": "Copper Wire 2mm", "CITG": "02", "CSIG": "A", "CUNI": "M", "STAP": 1},
        {"ITEM": "ITEM-003", "DSCA": "Aluminum Sheet 3mm", "CITG": "01", "CSIG": "B", "CUNI": "KG", "STAP": 1},
        {"ITEM": "ITEM-004", "DSCA": "Brass Fitting 1in", "CITG": "03", "CSIG": "A", "CUNI": "EA", "STAP": 1},
    ],
    "tccom100": [
        {"BPID": "CUST-001", "NAMA": "Acme Manufacturing", "BPRL": "Customer", "STAT": "Active"},
        {"BPID": "CUST-002", "NAMA": "Global Industries", "BPRL": "Customer", "STAT": "Active"},
        {"BPID": "VEND-001", "NAMA": "Steel Works Inc", "BPRL": "Supplier", "STAT": "Active"},
    ],
    "tccom130": [
        {"CADR": "CUST-001", "NAMA": "Acme Manufacturing", "CCTY": "US", "CITY": "Chicago"},
        {"CADR": "CUST-002", "NAMA": "Global Industries", "CCTY": "DE", "CITY": "Munich"},
        {"CADR": "VEND-001", "NAMA": "Steel Works Inc", "CCTY": "US", "CITY": "Pittsburgh"},
    ],
    "tcemm030": [
        {"CPAC": "tc", "CMOD": "Common", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "td", "CMOD": "Distribution", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "ti", "CMOD": "Manufacturing", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "tf", "CMOD": "Finance", "VERS": "10.7.0", "STAT": "Active"},
        {"CPAC": "tp", "CMOD": "Project", "VERS": "10.7.0", "STAT": "Active"},
    ],
    "tccom000": [
        {"COMP": "100", "DSCA": "Main Company", "CCUR": "USD", "CTRY": "US"},
    ],
}


class LNAdapter(InforAdapter):
    """Read-only adapter for Infor LN."""

    product = "ln"
    product_name = "Infor LN"
    health_table = "tcibd001"

    def __init__(
        self,
        company: str = "100",
        mode: SourceMode = SourceMode.MOCK,
        client: Optional[Any] = None,
        db: Optional[Any] = None,
    ):
        """
        Initialize the LN adapter.

        Args:
            company: LN company number (table suffix)
            mode: SourceMode.MOCK or SourceMode.LIVE
            client: InforRestClient for the ION API gateway
            db: InforDbAdapter for direct SQL
        """
        super().__init__(mode, client=client, db=db)
        self.company = str(company or "100")

    def _identity(self) -> Dict[str, Any]:
        return {"company": self.company}

    def get_company_table(self, table: str) -> str:
        """Append the 3-digit company suffix: tcibd001 -> tcibd001100."""
        return f"{table}{self.company.zfill(3)}"

    def read_table(self, name: str, options: Optional[ReadOptions] = None) -> TableResult:
        options = options or ReadOptions()
        full_name = self.get_company_table(name)

        if self.is_mock:
            return self._mock_read(MOCK_TABLES, name, options, physical_table=full_name, company=self.company)

        self._require_connected()
        if self.db is not None:
            return self._read_db(full_name, options, base_table=name, company=self.company)

        if self.client is not None:
            response = self.client.get(
                f"LN/lnapi/odata/{name}",
                params={
                    "$select": ",".join(options.fields) if options.fields else None,
                    "$filter": options.filter,
                    "$orderby": options.order_by,
                    "$top": options.max_rows,
                    "$skip": options.offset or None,
                    "company": self.company,
                },
            )
            rows = response.get("value", [])
            return TableResult(
                rows=rows,
                metadata={
                    "table_name": name,
                    "company": self.company,
                    "row_count": len(rows),
                    "source": "ion",
                    "paging": PAGING_SOURCE,
                },
            )

        raise self._no_access_path("read_table()")

    def call_api(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = params or {}
        if self.is_mock:
            return {"endpoint": endpoint, "params": params, "result": "mock", "mock": True}
        if self.client is None:
            raise InforError("call_api() requires an ION client for LN", code="INFOR_CONFIG")
        self._require_connected()
        return self.client.get(endpoint, params=params)

    def query_entities(
        self,
        entity_type: str,
        filter: Optional[str] = None,
        options: Optional[ReadOptions] = None
    ) -> EntityResult:
        options = options or ReadOptions()
        if self.is_mock:
            return EntityResult(
                entities=[{"id": f"{entity_type}-001", "type": entity_type, "status": "Active"}],
                total_count=1,
                mock=True,
            )
        if self.client is None:
            raise InforError("query_entities() requires an ION client for LN", code="INFOR_CONFIG")
        self._require_connected()
        response = self.client.get(
            f"LN/lnapi/bod/{entity_type}",
            params={"$filter": filter, "$top": options.max_rows},
        )
        entities = response.get("value", [])
        return EntityResult(entities=entities, total_count=response.get("totalCount", len(entities)))

    def get_system_info(self) -> Dict[str, Any]:
        if self.is_mock:
            return self._mock_system_info(
                "10.7",
                [{"code": r["CPAC"], "name": r["CMOD"], "version": r["VERS"]} for r in MOCK_TABLES["tcemm030"]],
                company=self.company,
                company_name="Main Company",
                currency="USD",
                database="Oracle",
            )

        modules = self.read_table("tcemm030", ReadOptions(max_rows=50)).rows
        company = self.read_table("tccom000", ReadOptions(filter=f"COMP = '{self.company}'", max_rows=1)).rows
        company_data = company[0] if company else {}
        return {
            "product": self.product_name,
            "version": modules[0].get("VERS", "") if modules else "",
            "company": self.company,
            "company_name": company_data.get("DSCA", ""),
            "currency": company_data.get("CCUR", ""),
            "modules": [
                {"code": m.get("CPAC"), "name": m.get("CMOD"), "version": m.get("VERS"), "status": m.get("STAT")}
                for m in modules
            ],
            "timestamp": datetime.utcnow().isoformat(),
        }
