"""
Read-only SQL access to Infor ERP databases.

LN runs on Oracle/DB2, M3 on DB2/SQL Server, CSI on SQL Server, Lawson on
Oracle/SQL Server. Every statement passes the write guard before anything
else happens, regardless of configuration. Live mode goes through a
SQLAlchemy engine; mock mode returns synthetic data without a connection.
"""

import re
import time
import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import NoSuchModuleError, SQLAlchemyError

from ..errors import InforDbError
from ..models.migration import SourceMode
from ..models.record import Record
from .base import ReadOptions
from .resilience import ResilientExecutor

logger = logging.getLogger(__name__)


WRITE_KEYWORDS = re.compile(
    r"^\s*(INSERT|UPDATE|DELETE|DROP|ALTER|CREATE|TRUNCATE|MERGE|EXEC|EXECUTE|GRANT|REVOKE|CALL)\b",
    re.IGNORECASE,
)

_LEADING_COMMENTS = re.compile(r"^\s*(?:--[^\n]*\n|/\*.*?\*/)\s*", re.DOTALL)

SUPPORTED_DIALECTS = ("sqlserver", "oracle", "db2", "postgres")

TABLE_LIST_QUERIES = {
    "sqlserver": "SELECT TABLE_SCHEMA + '.' + TABLE_NAME AS TABLE_NAME FROM INFORMATION_SCHEMA.TABLES "
                 "WHERE TABLE_TYPE = 'BASE TABLE' ORDER BY TABLE_SCHEMA, TABLE_NAME",
    "oracle": "SELECT OWNER || '.' || TABLE_NAME AS TABLE_NAME FROM ALL_TABLES "
              "WHERE OWNER NOT IN ('SYS','SYSTEM','OUTLN','DBSNMP') ORDER BY OWNER, TABLE_NAME",
    "db2": "SELECT TABSCHEMA || '.' || TABNAME AS TABLE_NAME FROM SYSCAT.TABLES "
           "WHERE TYPE = 'T' AND TABSCHEMA NOT LIKE 'SYS%' ORDER BY TABSCHEMA, TABNAME",
    "postgres": "SELECT table_schema || '.' || table_name AS TABLE_NAME FROM information_schema.tables "
                "WHERE table_type = 'BASE TABLE' AND table_schema NOT IN ('pg_catalog', 'information_schema') "
                "ORDER BY table_schema, table_name",
}

COLUMN_QUERIES: Dict[str, Callable[[str], str]] = {
    "sqlserver": lambda t: (
        "SELECT COLUMN_NAME, DATA_TYPE, CHARACTER_MAXIMUM_LENGTH AS MAX_LENGTH, IS_NULLABLE, COLUMN_DEFAULT "
        f"FROM INFORMATION_SCHEMA.COLUMNS WHERE TABLE_NAME = '{t}' ORDER BY ORDINAL_POSITION"
    ),
    "oracle": lambda t: (
        "SELECT COLUMN_NAME, DATA_TYPE, DATA_LENGTH AS MAX_LENGTH, NULLABLE AS IS_NULLABLE, "
        f"DATA_DEFAULT AS COLUMN_DEFAULT FROM ALL_TAB_COLUMNS WHERE TABLE_NAME = '{t.upper()}' ORDER BY COLUMN_ID"
    ),
    "db2": lambda t: (
        "SELECT COLNAME AS COLUMN_NAME, TYPENAME AS DATA_TYPE, LENGTH AS MAX_LENGTH, NULLS AS IS_NULLABLE, "
        f"DEFAULT AS COLUMN_DEFAULT FROM SYSCAT.COLUMNS WHERE TABNAME = '{t.upper()}' ORDER BY COLNO"
    ),
    "postgres": lambda t: (
        "SELECT column_name AS COLUMN_NAME, data_type AS DATA_TYPE, character_maximum_length AS MAX_LENGTH, "
        "is_nullable AS IS_NULLABLE, column_default AS COLUMN_DEFAULT FROM information_schema.columns "
        f"WHERE table_name = '{t}' ORDER BY ordinal_position"
    ),
}

COUNT_QUERIES: Dict[str, Callable[[str], str]] = {
    "sqlserver": lambda t: f"SELECT COUNT_BIG(*) AS cnt FROM {t}",
    "oracle": lambda t: f"SELECT COUNT(*) AS cnt FROM {t}",
    "db2": lambda t: f"SELECT COUNT(*) AS cnt FROM {t}",
    "postgres": lambda t: f"SELECT COUNT(*) AS cnt FROM {t}",
}

TOP_N_QUERIES: Dict[str, Callable[[str, int], str]] = {
    "sqlserver": lambda t, n: f"SELECT TOP {n} * FROM {t}",
    "oracle": lambda t, n: f"SELECT * FROM {t} WHERE ROWNUM <= {n}",
    "db2": lambda t, n: f"SELECT * FROM {t} FETCH FIRST {n} ROWS ONLY",
    "postgres": lambda t, n: f"SELECT * FROM {t} LIMIT {n}",
}

# SQLAlchemy driver names per dialect.
DRIVERS = {
    "sqlserver": ("mssql+pyodbc", 1433),
    "oracle": ("oracle+oracledb", 1521),
    "db2": ("db2+ibm_db", 50000),
    "postgres": ("postgresql+psycopg2", 5432),
}

MOCK_TABLES = [
    "ITEM_MASTER", "CUSTOMER_MASTER", "VENDOR_MASTER",
    "PURCHASE_ORDER_HEADER", "PURCHASE_ORDER_LINE",
    "SALES_ORDER_HEADER", "SALES_ORDER_LINE",
    "GL_ACCOUNT", "GL_JOURNAL", "GL_BALANCE",
    "INVENTORY_LOCATION", "INVENTORY_TRANSACTION",
    "BOM_HEADER", "BOM_COMPONENT",
]

MOCK_ROW_COUNT = 1500


def is_write_statement(sql: str) -> bool:
    """True if the statement's leading keyword (after comments) is a write keyword."""
    head = sql
    while True:
        stripped = _LEADING_COMMENTS.sub("", head, count=1)
        if stripped == head:
            break
        head = stripped
    return bool(WRITE_KEYWORDS.match(head))


class InforDbAdapter:
    """
    Read-only database adapter with dialect-specific SQL templates.

    Supports:
    - Write guard (read-only-violation) checked before any driver call
    - Table listing, column metadata, row counts, sampling
    - Source-side paging in `build_select`
    - Retry + circuit breaker around every live query
    """

    def __init__(
        self,
        db_type: str = "sqlserver",
        host: str = "",
        port: Optional[int] = None,
        database: str = "",
        username: str = "",
        password: str = "",
        url: Optional[str] = None,
        mode: SourceMode = SourceMode.LIVE,
        engine: Optional[Engine] = None,
        executor: Optional[ResilientExecutor] = None,
    ):
        """
        Initialize the adapter.

        Args:
            db_type: sqlserver, oracle, db2 or postgres
            host: Database host
            port: Database port (dialect default when omitted)
            database: Database name / service
            username: Database user
            password: Database password
            url: Full SQLAlchemy URL, overrides the individual parts
            mode: SourceMode.LIVE or SourceMode.MOCK
            engine: Pre-built engine (used as-is by connect())
            executor: Resilient executor for live queries
        """
        self.type = (db_type or "sqlserver").lower()
        if self.type not in SUPPORTED_DIALECTS:
            raise InforDbError(
                f"Unsupported database type: {self.type}",
                kind=InforDbError.UNSUPPORTED_DIALECT,
                details={"type": self.type, "supported": list(SUPPORTED_DIALECTS)},
            )
        self.host = host
        self.port = port or DRIVERS[self.type][1]
        self.database = database
        self.username = username
        self.password = password
        self.url = url
        self.mode = SourceMode(mode)
        self.read_only = True
        self._engine = engine
        self._connected = False
        self._executor = executor or ResilientExecutor.for_database()

    @property
    def is_connected(self) -> bool:
        return self._connected

    def guard(self, sql: str) -> None:
        """
        Reject write statements.

        Raises:
            InforDbError: kind read-only-violation
        """
        if is_write_statement(sql):
            raise InforDbError(
                "Only SELECT statements are allowed (read-only mode)",
                kind=InforDbError.READ_ONLY_VIOLATION,
                details={"sql": sql[:100], "type": self.type},
            )

    def connect(self) -> None:
        """Create the engine and verify connectivity."""
        if self._connected:
            return
        if self.mode == SourceMode.MOCK:
            self._connected = True
            logger.info(f"Mock database connection established ({self.type})")
            return

        if self._engine is None:
            self._engine = self._create_engine()
        try:
            with self._engine.connect():
                pass
        except SQLAlchemyError as e:
            raise InforDbError(
                f"Failed to connect to database: {e}",
                kind=InforDbError.CONNECTION_FAILED,
                details={"type": self.type, "host": self.host, "database": self.database},
            ) from e

        self._connected = True
        logger.info(f"Database connection established ({self.type} {self.host}/{self.database})")

    def _create_engine(self) -> Engine:
        driver, _ = DRIVERS[self.type]
        url = self.url or URL.create(
            driver,
            username=self.username or None,
            password=self.password or None,
            host=self.host or None,
            port=self.port,
            database=self.database or None,
        )
        try:
            return create_engine(url, pool_pre_ping=True)
        except (NoSuchModuleError, ImportError) as e:
            raise InforDbError(
                f"Database driver '{driver}' is not installed: {e}",
                kind=InforDbError.DRIVER_MISSING,
                details={"driver": driver, "type": self.type},
            ) from e

    def disconnect(self) -> None:
        if self._engine is not None and self.mode == SourceMode.LIVE:
            self._engine.dispose()
        self._connected = False
        logger.info(f"Database connection closed ({self.type})")

    def query(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Record]:
        """
        Execute a read-only SQL statement.

        Raises:
            InforDbError: read-only-violation, not-connected or query-failed
        """
        self.guard(sql)

        if self.mode == SourceMode.MOCK:
            return self._mock_query(sql)

        if not self._connected or self._engine is None:
            raise InforDbError(
                "Database connection not established. Call connect() first.",
                kind=InforDbError.NOT_CONNECTED,
                details={"type": self.type},
            )

        def _run() -> List[Record]:
            try:
                with self._engine.connect() as conn:
                    result = conn.execute(text(sql), params or {})
                    return [dict(row._mapping) for row in result]
            except SQLAlchemyError as e:
                raise InforDbError(
                    f"SQL query failed: {e}",
                    kind=InforDbError.QUERY_FAILED,
                    details={"sql": sql[:200], "type": self.type},
                ) from e

        return self._executor.execute(_run)

    def build_select(self, table: str, options: Optional[ReadOptions] = None) -> str:
        """Build a SELECT with dialect-specific source-side paging."""
        options = options or ReadOptions()
        fields = ", ".join(options.fields) if options.fields else "*"
        sql = f"SELECT {fields} FROM {table}"
        if options.filter:
            sql += f" WHERE {options.filter}"
        order_by = options.order_by
        if order_by:
            sql += f" ORDER BY {order_by}"

        if not options.is_paged:
            return sql

        offset = max(options.offset or 0, 0)
        if self.type == "postgres":
            if options.max_rows:
                sql += f" LIMIT {options.max_rows}"
            if offset:
                sql += f" OFFSET {offset}"
            return sql

        if not offset and options.max_rows:
            if self.type == "sqlserver" and not order_by:
                return sql.replace("SELECT ", f"SELECT TOP {options.max_rows} ", 1)
            if self.type == "oracle" and not order_by and not options.filter:
                return f"{sql} WHERE ROWNUM <= {options.max_rows}"
            return f"{sql} FETCH FIRST {options.max_rows} ROWS ONLY"

        if self.type == "sqlserver" and not order_by:
            sql += " ORDER BY (SELECT NULL)"
        sql += f" OFFSET {offset} ROWS"
        if options.max_rows:
            sql += f" FETCH NEXT {options.max_rows} ROWS ONLY"
        return sql

    def select(self, table: str, options: Optional[ReadOptions] = None) -> List[Record]:
        """Read rows from a table with paging applied in SQL."""
        return self.query(self.build_select(table, options))

    def list_tables(self) -> List[str]:
        """List user tables."""
        if self.mode == SourceMode.MOCK:
            return list(MOCK_TABLES)
        rows = self.query(TABLE_LIST_QUERIES[self.type])
        return [row.get("TABLE_NAME") or row.get("table_name") or next(iter(row.values())) for row in rows]

    def get_table_row_count(self, table: str) -> int:
        if self.mode == SourceMode.MOCK:
            return MOCK_ROW_COUNT
        rows = self.query(COUNT_QUERIES[self.type](table))
        return _first_int(rows, "cnt")

    def profile_table(self, table: str) -> Dict[str, Any]:
        """Column metadata, row count and sample rows for one table."""
        if self.mode == SourceMode.MOCK:
            return self._mock_profile(table)

        row_count = _first_int(self.query(COUNT_QUERIES[self.type](table)), "cnt")

        short_name = table.split(".")[-1]
        columns = []
        try:
            for col in self.query(COLUMN_QUERIES[self.type](short_name)):
                col = {k.upper(): v for k, v in col.items()}
                columns.append({
                    "name": col.get("COLUMN_NAME"),
                    "type": col.get("DATA_TYPE"),
                    "max_length": col.get("MAX_LENGTH"),
                    "nullable": str(col.get("IS_NULLABLE") or "").upper() not in ("NO", "N"),
                    "default_value": col.get("COLUMN_DEFAULT"),
                })
        except InforDbError as e:
            logger.warning(f"Could not retrieve column metadata for {table}: {e}")

        try:
            sample_rows = self.query(TOP_N_QUERIES[self.type](table, 5))
        except InforDbError as e:
            logger.warning(f"Could not retrieve sample rows for {table}: {e}")
            sample_rows = []

        return {
            "table_name": table,
            "row_count": row_count,
            "columns": columns,
            "sample_rows": sample_rows,
            "database_type": self.type,
        }

    def health_check(self) -> Dict[str, Any]:
        start = time.monotonic()
        if self.mode == SourceMode.MOCK:
            return {"ok": True, "latency_ms": 1, "status": "mock", "product": "Infor DB", "database_type": self.type}
        try:
            self.query("SELECT 1 AS health")
        except InforDbError as e:
            return {
                "ok": False,
                "latency_ms": round((time.monotonic() - start) * 1000),
                "status": "error",
                "error": e.message,
                "product": "Infor DB",
                "database_type": self.type,
            }
        return {
            "ok": True,
            "latency_ms": round((time.monotonic() - start) * 1000),
            "status": "connected",
            "product": "Infor DB",
            "database_type": self.type,
        }

    def get_circuit_breaker_stats(self) -> Dict[str, Any]:
        return self._executor.circuit_breaker.get_stats()

    def _mock_query(self, sql: str) -> List[Record]:
        logger.debug(f"Mock SQL query: {sql[:100]}")
        if re.search(r"SELECT\s+COUNT\S*\s*\(\s*\*?\s*\)", sql, re.IGNORECASE):
            return [{"cnt": MOCK_ROW_COUNT}]
        if re.search(r"SELECT\s+DISTINCT", sql, re.IGNORECASE):
            return [{"value": "Value_A"}, {"value": "Value_B"}, {"value": "Value_C"}]
        return [
            {"COL1": "value1", "COL2": 100, "COL3": "2024-01-15", "STATUS": "Active"},
            {"COL1": "value2", "COL2": 200, "COL3": "2024-02-20", "STATUS": "Active"},
            {"COL1": "value3", "COL2": 300, "COL3": "2024-03-25", "STATUS": "Inactive"},
        ]

    def _mock_profile(self, table: str) -> Dict[str, Any]:
        return {
            "table_name": table,
            "row_count": MOCK_ROW_COUNT,
            "columns": [
                {"name": "ID", "type": "INT", "max_length": None, "nullable": False, "default_value": None},
                {"name": "NAME", "type": "VARCHAR", "max_length": 100, "nullable": False, "default_value": None},
                {"name": "STATUS", "type": "VARCHAR", "max_length": 20, "nullable": True, "default_value": "'Active'"},
                {"name": "AMOUNT", "type": "DECIMAL", "max_length": None, "nullable": True, "default_value": "0"},
            ],
            "sample_rows": [
                {"ID": 1, "NAME": "Sample Record 1", "STATUS": "Active", "AMOUNT": 1500.00},
                {"ID": 2, "NAME": "Sample Record 2", "STATUS": "Active", "AMOUNT": 2800.50},
            ],
            "database_type": self.type,
            "mock": True,
        }


def _first_int(rows: List[Record], column: str) -> int:
    if not rows:
        return 0
    row = rows[0]
    value = row.get(column, row.get(column.upper(), 0))
    return int(value or 0)
