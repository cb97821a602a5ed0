"""
Source adapter for Infor Lawson (Landmark).

Lawson data lives in business-class entities scoped to a data area
(PROD, TEST). Live reads prefer the Landmark REST API and fall back to
the database.
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
    "Employee": [
        {"Employee": "EMP001", "FirstName": "John", "LastName": "Doe", "Department": "IT", "Status": "Active", "HireDate": "2019-03-15", "Position": "Software Engineer", "PayClass": "SAL"},
        {"Employee": "EMP002", "FirstName": "Jane", "LastName": "Smith", "Department": "HR", "Status": "Active", "HireDate": "2020-06-01", "Position": "HR Manager", "PayClass": "SAL"},
        {"Employee": "EMP003", "FirstName": "Robert", "LastName": "Johnson", "Department": "Finance", "Status": "Active", "HireDate": "2018-11-20", "Position": "Controller", "PayClass": "SAL"},
        {"Employee": "EMP004", "FirstName": "Maria", "LastName": "Garcia", "Department": "Operations", "Status": "Active", "HireDate": "2021-01-10", "Position": "Ops Manager", "PayClass": "SAL"},
    ],
    "Vendor": [
        {"Vendor": "V1000", "Name": "Industrial Supply Co", "Status": "Active", "VendorGroup": "SUPPLY", "Currency": "USD", "Country": "US"},
        {"Vendor": "V2000", "Name": "Office Essentials", "Status": "Active", "VendorGroup": "OFFICE", "Currency": "USD", "Country": "US"},
        {"Vendor": "V3000", "Name": "Global Parts Ltd", "Status": "Active", "VendorGroup": "SUPPLY", "Currency": "EUR", "Country": "DE"},
    ],
    "Customer": [
        {"Customer": "C1000", "Name": "Acme Corp", "Status": "Active", "CustomerGroup": "MFGR", "Currency": "USD", "Country": "US"},
        {"Customer": "C2000", "Name": "TechServ Inc", "Status": "Active", "CustomerGroup": "SVC", "Currency": "USD", "Country": "US"},
    ],
    "GLAccount": [
        {"Account": "1000", "Description": "Cash", "AccountType": "Asset", "Status": "Active", "NormalBalance": "Debit"},
        {"Account": "1100", "Description": "Accounts Receivable", "AccountType": "Asset", "Status": "Active", "NormalBalance": "Debit"},
        {"Account": "2000", "Description": "Accounts Payable", "AccountType": "Liability", "Status": "Active", "NormalBalance": "Credit"},
        {"Account": "3000", "Description": "Retained Earnings", "AccountType": "Equity", "Status": "Active", "NormalBalance": "Credit"},
        {"Account": "4000", "Description": "Revenue", "AccountType": "Revenue", "Status": "Active", "NormalBalance": "Credit"},
        {"Account": "5000", "Description": "Cost of Goods Sold", "AccountType": "Expense", "Status": "Active", "NormalBalance": "Debit"},
    ],
    "PurchaseOrder": [
        {"PurchaseOrder": "PO-10001", "Vendor": "V1000", "OrderDate": "2024-06-15", "Status": "Approved", "TotalAmount": 15000, "Currency": "USD"},
        {"PurchaseOrder": "PO-10002", "Vendor": "V2000", "OrderDate": "2024-06-20", "Status": "Received", "TotalAmount": 3200, "Currency": "USD"},
    ],
    "Invoice": [
        {"Invoice": "INV-50001", "Vendor": "V1000", "InvoiceDate": "2024-06-18", "DueDate": "2024-07-18", "Amount": 15000, "Status": "Open", "Currency": "USD"},
        {"Invoice": "INV-50002", "Vendor": "V2000", "InvoiceDate": "2024-06-22", "DueDate": "2024-07-22", "Amount": 3200, "Status": "Paid", "Currency": "USD"},
    ],
    "BenefitPlan": [
        {"PlanCode": "MED01", "Description": "Medical PPO", "PlanType": "Medical", "Status": "Active", "EffectiveDate": "2024-01-01"},
        {"PlanCode": "DEN01", "Description": "Dental Plan", "PlanType": "Dental", "Status": "Active", "EffectiveDate": "2024-01-01"},
        {"PlanCode": "401K", "Description": "401k Retirement", "PlanType": "Retirement", "Status": "Active", "EffectiveDate": "2024-01-01"},
    ],
    "Job": [
        {"Job": "SWE", "Description": "Software Engineer", "JobFamily": "IT", "Grade": "P3", "Status": "Active"},
        {"Job": "HRM", "Description": "HR Manager", "JobFamily": "HR", "Grade": "M2", "Status": "Active"},
        {"Job": "CTR", "Description": "Controller", "JobFamily": "FIN", "Grade": "M3", "Status": "Active"},
    ],
}

LAWSON_MODULES = [
    {"code": "HR", "name": "Human Resources", "description": "Core HR, talent, workforce management"},
    {"code": "PR", "name": "Payroll", "description": "Payroll processing, tax filing"},
    {"code": "BN", "name": "Benefits", "description": "Benefits administration"},
    {"code": "AP", "name": "Accounts Payable", "description": "Vendor invoices, payments"},
    {"code": "AR", "name": "Accounts Receivable", "description": "Customer invoices, collections"},
    {"code": "GL", "name": "General Ledger", "description": "Journal entries, financial reporting"},
    {"code": "PO", "name": "Purchasing", "description": "Purchase orders, requisitions"},
    {"code": "IC", "name": "Inventory Control", "description": "Inventory management"},
    {"code": "AM", "name": "Asset Management", "description": "Fixed assets, depreciation"},
    {"code": "PM", "name": "Project Management", "description": "Project accounting, billing"},
]


def parse_landmark_entities(response: Any) -> List[Record]:
    """Landmark answers with an OData `value` list, `_embedded` items, or a bare list."""
    if isinstance(response, list):
        return response
    if not isinstance(response, dict):
        return []
    if "value" in response:
        return response["value"]
    embedded = response.get("_embedded")
    if isinstance(embedded, dict):
        return embedded.get("items", [])
    return response.get("entities", [])


class LawsonAdapter(InforAdapter):
    """Read-only adapter for Infor Lawson."""

    product = "lawson"
    product_name = "Infor Lawson/Landmark"
    health_table = "Employee"

    def __init__(
        self,
        data_area: str = "PROD",
        mode: SourceMode = SourceMode.MOCK,
        client: Optional[Any] = None,
        db: Optional[Any] = None,
    ):
        """
        Initialize the Lawson adapter.

        Args:
            data_area: Landmark data area
            mode: SourceMode.MOCK or SourceMode.LIVE
            client: InforRestClient for the Landmark API
            db: InforDbAdapter for direct SQL
        """
        super().__init__(mode, client=client, db=db)
        self.data_area = data_area or "PROD"

    def _identity(self) -> Dict[str, Any]:
        return {"data_area": self.data_area}

    def _entity_path(self, entity_type: str, data_area: Optional[str] = None) -> str:
        area = data_area or self.data_area
        return f"data/erp/{area}/{entity_type}" if area else f"data/erp/{entity_type}"

    def read_table(self, name: str, options: Optional[ReadOptions] = None) -> TableResult:
        options = options or ReadOptions()
        data_area = options.data_area or self.data_area

        if self.is_mock:
            return self._mock_read(MOCK_TABLES, name, options, data_area=data_area)

        self._require_connected()
        if self.client is not None:
            response = self.client.get(
                self._entity_path(name, data_area),
                params={
                    "$select": ",".join(options.fields) if options.fields else None,
                    "$filter": options.filter,
                    "$top": options.max_rows,
                    "$skip": options.offset or None,
                    "$orderby": options.order_by,
                },
            )
            rows = parse_landmark_entities(response)
            return TableResult(
                rows=rows,
                metadata={
                    "table_name": name,
                    "data_area": data_area,
                    "row_count": len(rows),
                    "source": "landmark",
                    "paging": PAGING_SOURCE,
                },
            )

        if self.db is not None:
            return self._read_db(name, options, data_area=data_area)

        raise self._no_access_path("read_table()")

    def call_api(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = params or {}
        if self.is_mock:
            return {"endpoint": endpoint, "params": params, "result": "mock", "mock": True}
        if self.client is None:
            raise InforError("call_api() requires a Landmark client for Lawson", code="INFOR_CONFIG")
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
            raise InforError("query_entities() requires a Landmark client for Lawson", code="INFOR_CONFIG")
        self._require_connected()
        response = self.client.get(
            self._entity_path(entity_type, options.data_area),
            params={"$filter": filter, "$top": options.max_rows, "$skip": options.offset or None},
        )
        entities = parse_landmark_entities(response)
        total = response.get("@odata.count") or response.get("totalCount") if isinstance(response, dict) else None
        return EntityResult(entities=entities, total_count=total or len(entities))

    def get_system_info(self) -> Dict[str, Any]:
        if self.is_mock:
            return self._mock_system_info(
                "v11",
                LAWSON_MODULES,
                data_area=self.data_area,
                entity_types=list(MOCK_TABLES),
            )

        entity_types: List[str] = []
        if self.client is not None:
            self._require_connected()
            response = self.client.get("data/erp/metadata/entityTypes")
            entity_types = [e.get("name", e) if isinstance(e, dict) else e for e in parse_landmark_entities(response)]

        return {
            "product": self.product_name,
            "version": "",
            "data_area": self.data_area,
            "modules": LAWSON_MODULES,
            "entity_types": entity_types,
            "timestamp": datetime.utcnow().isoformat(),
        }
