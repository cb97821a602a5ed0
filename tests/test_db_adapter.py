"""Tests for the read-only database adapter."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from erp_migration.adapters.base import ReadOptions
from erp_migration.adapters.db_adapter import (
    MOCK_ROW_COUNT,
    MOCK_TABLES,
    InforDbAdapter,
    is_write_statement,
)
from erp_migration.adapters.resilience import ResilientExecutor
from erp_migration.errors import InforDbError
from erp_migration.models.migration import SourceMode


def live_adapter(db_type="sqlserver", rows=None, **kwargs):
    """A live adapter over a MagicMock engine returning `rows`."""
    engine = MagicMock()
    conn = engine.connect.return_value.__enter__.return_value
    result_rows = []
    for row in rows or []:
        item = MagicMock()
        item._mapping = row
        result_rows.append(item)
    conn.execute.return_value = result_rows
    executor = ResilientExecutor.for_database(sleep=lambda s: None)
    adapter = InforDbAdapter(db_type=db_type, engine=engine, executor=executor, **kwargs)
    return adapter, engine, conn


class TestWriteGuard:
    @pytest.mark.parametrize("sql", [
        "INSERT INTO t VALUES (1)",
        "  update t set a = 1",
        "DELETE FROM t",
        "drop table t",
        "TRUNCATE TABLE t",
        "MERGE INTO t USING s ON 1=1",
        "EXEC sp_who",
        "-- comment\nDELETE FROM t",
        "/* block */ DROP TABLE t",
        "/* a */ -- b\n  GRANT ALL ON t TO x",
    ])
    def test_write_statements(self, sql):
        assert is_write_statement(sql)

    @pytest.mark.parametrize("sql", [
        "SELECT * FROM t",
        "select updated_at from t",
        "-- DELETE\nSELECT 1",
        "WITH x AS (SELECT 1) SELECT * FROM x",
    ])
    def test_read_statements(self, sql):
        assert not is_write_statement(sql)

    def test_guard_runs_before_anything_else(self):
        adapter = InforDbAdapter(mode=SourceMode.MOCK)
        with pytest.raises(InforDbError) as exc_info:
            adapter.query("DELETE FROM ITEM_MASTER")
        assert exc_info.value.kind == InforDbError.READ_ONLY_VIOLATION
        assert exc_info.value.code == "ERR_INFOR_DB"

    def test_guard_on_live_adapter_never_touches_engine(self):
        adapter, engine, _ = live_adapter()
        with pytest.raises(InforDbError):
            adapter.query("UPDATE t SET a = 1")
        engine.connect.assert_not_called()


class TestMockMode:
    def test_connect_and_tables(self):
        adapter = InforDbAdapter(db_type="oracle", mode=SourceMode.MOCK)
        adapter.connect()
        assert adapter.is_connected
        assert adapter.list_tables() == MOCK_TABLES
        assert adapter.get_table_row_count("ITEM_MASTER") == MOCK_ROW_COUNT
        assert adapter.health_check()["status"] == "mock"

    def test_mock_queries(self):
        adapter = InforDbAdapter(mode=SourceMode.MOCK)
        assert adapter.query("SELECT COUNT(*) FROM x") == [{"cnt": MOCK_ROW_COUNT}]
        assert len(adapter.query("SELECT DISTINCT a FROM x")) == 3
        assert adapter.query("SELECT * FROM x")[0]["COL1"] == "value1"

    def test_mock_profile(self):
        profile = InforDbAdapter(mode=SourceMode.MOCK).profile_table("GL_ACCOUNT")
        assert profile["table_name"] == "GL_ACCOUNT"
        assert profile["row_count"] == MOCK_ROW_COUNT


class TestLiveMode:
    def test_unsupported_dialect(self):
        with pytest.raises(InforDbError) as exc_info:
            InforDbAdapter(db_type="mysql")
        assert exc_info.value.kind == InforDbError.UNSUPPORTED_DIALECT

    def test_default_port(self):
        assert InforDbAdapter(db_type="db2").port == 50000

    def test_query_requires_connect(self):
        adapter, _, _ = live_adapter()
        with pytest.raises(InforDbError) as exc_info:
            adapter.query("SELECT 1")
        assert exc_info.value.kind == InforDbError.NOT_CONNECTED

    def test_query_returns_dicts(self):
        adapter, _, conn = live_adapter(rows=[{"ITEM": "A"}, {"ITEM": "B"}])
        adapter.connect()
        assert adapter.query("SELECT ITEM FROM tcibd001100") == [{"ITEM": "A"}, {"ITEM": "B"}]
        assert conn.execute.called

    def test_query_failure_is_retried_then_raised(self):
        adapter, _, conn = live_adapter()
        adapter.connect()
        conn.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        with pytest.raises(InforDbError) as exc_info:
            adapter.query("SELECT 1")
        assert exc_info.value.kind == InforDbError.QUERY_FAILED
        # first attempt + 2 retries
        assert conn.execute.call_count == 3

    def test_connect_failure(self):
        adapter, engine, _ = live_adapter()
        engine.connect.side_effect = OperationalError("connect", {}, Exception("refused"))
        with pytest.raises(InforDbError) as exc_info:
            adapter.connect()
        assert exc_info.value.kind == InforDbError.CONNECTION_FAILED
        assert not adapter.is_connected

    def test_health_check_reports_errors(self):
        adapter, _, conn = live_adapter()
        adapter.connect()
        conn.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        health = adapter.health_check()
        assert health["ok"] is False
        assert health["status"] == "error"

    def test_disconnect_disposes_engine(self):
        adapter, engine, _ = live_adapter()
        adapter.connect()
        adapter.disconnect()
        engine.dispose.assert_called_once()
        assert not adapter.is_connected


class TestBuildSelect:
    def test_unpaged(self):
        adapter = InforDbAdapter(db_type="oracle")
        sql = adapter.build_select("T", ReadOptions(fields=["A", "B"], filter="A = 1"))
        assert sql == "SELECT A, B FROM T WHERE A = 1"

    def test_sqlserver_top(self):
        adapter = InforDbAdapter(db_type="sqlserver")
        assert adapter.build_select("T", ReadOptions(max_rows=10)) == "SELECT TOP 10 * FROM T"

    def test_sqlserver_offset_needs_order(self):
        adapter = InforDbAdapter(db_type="sqlserver")
        sql = adapter.build_select("T", ReadOptions(max_rows=10, offset=20))
        assert sql == "SELECT * FROM T ORDER BY (SELECT NULL) OFFSET 20 ROWS FETCH NEXT 10 ROWS ONLY"

    def test_oracle_rownum(self):
        adapter = InforDbAdapter(db_type="oracle")
        assert adapter.build_select("T", ReadOptions(max_rows=5)) == "SELECT * FROM T WHERE ROWNUM <= 5"

    def test_db2_fetch_first(self):
        adapter = InforDbAdapter(db_type="db2")
        sql = adapter.build_select("T", ReadOptions(max_rows=5, order_by="A"))
        assert sql == "SELECT * FROM T ORDER BY A FETCH FIRST 5 ROWS ONLY"

    def test_postgres_limit_offset(self):
        adapter = InforDbAdapter(db_type="postgres")
        assert adapter.build_select("T", ReadOptions(max_rows=5, offset=10)) == "SELECT * FROM T LIMIT 5 OFFSET 10"
