"""
Source adapter for Infor CSI (CloudSuite Industrial / SyteLine).

CSI exposes its business objects as IDOs (Intelligent Data Objects).
SL-prefixed names (SLItems, SLCustomers) are read through the IDO
request service; anything else goes to the SQL Server database.
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


MOCK_TABLES: Dict[str, List[Record]] = {
    "SLItems": [
        {"Item": "ITEM-001", "Description": "Steel Bolt M10", "UOM": "EA", "Status": "Active", "ProductCode": "HW"},
        {"Item": "ITEM-002", "Description": "Copper Pipe 2in", "UOM": "FT", "Status": "Active", "ProductCode": "PL"},
        {"Item": "ITEM-003", "Description": "Aluminum Sheet 4x8", "UOM": "EA", "Status": "Active", "ProductCode": "RAW"},
    ],
    "SLCustomers": [
        {"CustNum": "C-100", "Name": "Acme Manufacturing", "Status": "Active", "CurrCode": "USD"},
        {"CustNum": "C-200", "Name": "Global Industries", "Status": "Active", "CurrCode": "EUR"},
    ],
    "SLVendors": [
        {"VendNum": "V-100", "VendName": "Steel Supplier Co", "Status": "Active", "CurrCode": "USD"},
        {"VendNum": "V-200", "VendName": "Copper World Ltd", "Status": "Active", "CurrCode": "GBP"},
    ],
    "SLSalesOrders": [
        {"CoNum": "CO-10001", "CustNum": "C-100", "OrderDate": "2024-06-15", "Type": "Regular", "Stat": "Ordered"},
        {"CoNum": "CO-10002", "CustNum": "C-200", "OrderDate": "2024-06-20", "Type": "Regular", "Stat": "Shipped"},
    ],
    "SLInventory": [
        {"Item": "ITEM-001", "Whse": "MAIN", "QtyOnHand": 5000, "QtyAllocated": 1200, "QtyAvailable": 3800},
        {"Item": "ITEM-002", "Whse": "MAIN", "QtyOnHand": 12000, "QtyAllocated": 3000, "QtyAvailable": 9000},
    ],
}

MODULES = ["Inventory", "Order Entry", "Purchasing", "Production", "Financials", "Quality", "APS"]

IDO_PATH = "IDORequestService/ido"


class CSIAdapter(InforAdapter):
    """Read-only adapter for Infor CSI / SyteLine."""

    product = "csi"
    product_name = "Infor CSI/SyteLine"
    health_table = "SLItems"

    def __init__(
        self,
        site: str = "MAIN",
        mode: SourceMode = SourceMode.MOCK,
        client: Optional[Any] = None,
        db: Optional[Any] = None,
    ):
        """
        Initialize the CSI adapter.

        Args:
            site: SyteLine site
            mode: SourceMode.MOCK or SourceMode.LIVE
            client: InforRestClient for the IDO request service
            db: InforDbAdapter for direct SQL
        """
        super().__init__(mode, client=client, db=db)
        self.site = site or "MAIN"

    def _identity(self) -> Dict[str, Any]:
        return {"site": self.site}

    @staticmethod
    def is_ido_collection(name: str) -> bool:
        return name.startswith("SL")

    def read_table(self, name: str, options: Optional[ReadOptions] = None) -> TableResult:
        options = options or ReadOptions()

        if self.is_mock:
            return self._mock_read(MOCK_TABLES, name, options, site=self.site)

        self._require_connected()
        if self.client is not None and self.is_ido_collection(name):
            # IDO loads only support a record cap, so the offset is skipped locally.
            cap = (options.offset + options.max_rows) if options.max_rows else None
            response = self.client.get(
                f"{IDO_PATH}/load/{name}",
                params={
                    "properties": ",".join(options.fields) if options.fields else None,
                    "filter": options.filter,
                    "recordCap": cap,
                    "orderBy": options.order_by,
                },
            )
            rows = response.get("Items", response.get("items", []))
            paging = PAGING_SOURCE
            if options.offset:
                rows = apply_paging(rows, options)
                paging = PAGING_POST_FETCH
            return TableResult(
                rows=rows,
                metadata={
                    "table_name": name,
                    "site": self.site,
                    "row_count": len(rows),
                    "source": "ido",
                    "paging": paging,
                },
            )

        if self.db is not None:
            return self._read_db(name, options, site=self.site)

        raise self._no_access_path("read_table()")

    def call_api(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = params or {}
        if self.is_mock:
            return {"endpoint": endpoint, "params": params, "result": "mock", "mock": True}
        if self.client is None:
            raise InforError("call_api() requires an IDO client for CSI", code="INFOR_CONFIG")

        ido_name, _, method = endpoint.partition("/")
        if not ido_name or not method:
            raise InforError(
                f'Invalid CSI endpoint format: "{endpoint}". Expected "IDOName/MethodName"',
                code="INFOR_ENDPOINT",
                details={"endpoint": endpoint},
            )
        self._require_connected()
        return self.client.post(f"{IDO_PATH}/method/{ido_name}/{method}", params)

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
        result = self.read_table(entity_type, ReadOptions(filter=filter, max_rows=options.max_rows))
        return EntityResult(entities=result.rows, total_count=len(result.rows))

    def get_system_info(self) -> Dict[str, Any]:
        if self.is_mock:
            return self._mock_system_info("10.12", MODULES, site=self.site, database="SQL Server")

        version = ""
        if self.client is not None:
            try:
                rows = self.read_table("SLUserNames", ReadOptions(max_rows=1)).rows
                version = rows[0].get("Version", "") if rows else ""
            except InforError as e:
                logger.warning(f"Could not read SyteLine version from IDO: {e}")
        if not version and self.db is not None:
            try:
                rows = self.db.select("parms", ReadOptions(fields=["Version"], max_rows=1))
                version = rows[0].get("Version", "") if rows else ""
            except InforError as e:
                logger.warning(f"Could not read SyteLine version from database: {e}")

        return {
            "product": self.product_name,
            "version": version,
            "site": self.site,
            "database": "SQL Server",
            "timestamp": datetime.utcnow().isoformat(),
        }
