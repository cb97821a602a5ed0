"""Tests for the Infor product adapters and the REST client."""

from unittest.mock import MagicMock

import pytest
import requests

from erp_migration.adapters.base import PAGING_POST_FETCH, PAGING_SOURCE, ReadOptions, apply_paging
from erp_migration.adapters.csi_adapter import CSIAdapter
from erp_migration.adapters.factory import ADAPTERS, create_adapter
from erp_migration.adapters.lawson_adapter import LawsonAdapter, parse_landmark_entities
from erp_migration.adapters.ln_adapter import LNAdapter
from erp_migration.adapters.m3_adapter import M3Adapter, flatten_mi_record
from erp_migration.adapters.resilience import ResilientExecutor
from erp_migration.adapters.rest_client import InforRestClient
from erp_migration.config import AdapterSettings
from erp_migration.errors import InforError
from erp_migration.models.migration import SourceMode


@pytest.fixture(params=[LNAdapter, M3Adapter, CSIAdapter, LawsonAdapter])
def mock_adapter(request):
    adapter = request.param()
    adapter.connect()
    return adapter


class TestMockAdapters:
    def test_health(self, mock_adapter):
        health = mock_adapter.health_check()
        assert health["ok"] is True
        assert health["status"] == "mock"
        assert health["product"] == mock_adapter.product_name

    def test_read_health_table(self, mock_adapter):
        result = mock_adapter.read_table(mock_adapter.health_table, ReadOptions(max_rows=2))
        assert result.row_count == 2
        assert result.metadata["source"] == "mock"
        assert result.metadata["paging"] == PAGING_POST_FETCH

    def test_unknown_table_is_empty(self, mock_adapter):
        assert mock_adapter.read_table("NO_SUCH_TABLE").rows == []

    def test_system_info(self, mock_adapter):
        info = mock_adapter.get_system_info()
        assert info["product"] == mock_adapter.product_name
        assert info["mock"] is True
        assert info["modules"]

    def test_query_entities(self, mock_adapter):
        result = mock_adapter.query_entities(mock_adapter.health_table)
        assert result.mock is True
        assert result.total_count == len(result.entities)

    def test_disconnect(self, mock_adapter):
        mock_adapter.disconnect()
        assert not mock_adapter.is_connected


class TestLN:
    def test_company_suffix(self):
        adapter = LNAdapter(company="5")
        assert adapter.get_company_table("tcibd001") == "tcibd001005"
        result = adapter.read_table("tcibd001")
        assert result.metadata["physical_table"] == "tcibd001005"

    def test_field_projection(self):
        rows = LNAdapter().read_table("tcibd001", ReadOptions(fields=["ITEM", "CUNI"], offset=3)).rows
        assert rows == [{"ITEM": "ITEM-004", "CUNI": "EA"}]

    def test_live_requires_access_path(self):
        with pytest.raises(InforError) as exc_info:
            LNAdapter(mode=SourceMode.LIVE).connect()
        assert exc_info.value.code == "INFOR_CONFIG"

    def test_live_read_before_connect(self):
        adapter = LNAdapter(mode=SourceMode.LIVE, client=MagicMock())
        with pytest.raises(InforError) as exc_info:
            adapter.read_table("tcibd001")
        assert exc_info.value.code == "INFOR_NOT_CONNECTED"

    def test_live_read_through_ion(self):
        client = MagicMock()
        client.get.return_value = {"value": [{"ITEM": "X"}]}
        adapter = LNAdapter(mode=SourceMode.LIVE, client=client)
        adapter.connect()
        result = adapter.read_table("tcibd001", ReadOptions(max_rows=10))
        assert result.rows == [{"ITEM": "X"}]
        assert result.metadata["paging"] == PAGING_SOURCE
        path = client.get.call_args[0][0]
        assert path == "LN/lnapi/odata/tcibd001"
        assert client.get.call_args[1]["params"]["$top"] == 10

    def test_live_read_through_database(self):
        db = MagicMock()
        db.is_connected = False
        db.select.return_value = [{"ITEM": "Y"}]
        adapter = LNAdapter(company="100", mode=SourceMode.LIVE, db=db)
        adapter.connect()
        db.connect.assert_called_once()
        result = adapter.read_table("tcibd001")
        assert db.select.call_args[0][0] == "tcibd001100"
        assert result.metadata["source"] == "database"
        assert result.metadata["paging"] == PAGING_SOURCE


class TestM3:
    def test_flatten_name_value(self):
        record = {"NameValue": [{"Name": "ITNO", "Value": "A1"}, {"Name": "ITDS", "Value": "Widget"}]}
        assert flatten_mi_record(record) == {"ITNO": "A1", "ITDS": "Widget"}

    def test_call_api_endpoint_format(self):
        with pytest.raises(InforError) as exc_info:
            M3Adapter().call_api("MMS200")
        assert exc_info.value.code == "INFOR_ENDPOINT"
        assert M3Adapter().call_api("MMS200/GetItmBasic")["program"] == "MMS200"

    def test_live_mi_read_with_offset(self):
        client = MagicMock()
        client.get.return_value = {"MIRecord": [
            {"NameValue": [{"Name": "ITNO", "Value": f"I{i}"}]} for i in range(5)
        ]}
        adapter = M3Adapter(company="200", division="AAA", mode=SourceMode.LIVE, client=client)
        adapter.connect()
        result = adapter.read_table("MITMAS", ReadOptions(max_rows=2, offset=3))
        assert [r["ITNO"] for r in result.rows] == ["I3", "I4"]
        assert result.metadata["paging"] == PAGING_POST_FETCH
        params = client.get.call_args[1]["params"]
        assert params["CONO"] == "200"
        assert params["DIVI"] == "AAA"
        assert params["maxrecs"] == 5

    def test_live_unknown_table(self):
        adapter = M3Adapter(mode=SourceMode.LIVE, client=MagicMock())
        adapter.connect()
        with pytest.raises(InforError) as exc_info:
            adapter.read_table("ZZZ")
        assert exc_info.value.code == "INFOR_ENDPOINT"

    def test_field_prefix(self):
        assert M3Adapter.get_field_prefix("ITNO") == "Item"
        assert M3Adapter.get_field_prefix("QQQQ") == "Unknown"


class TestCSIAndLawson:
    def test_csi_site(self):
        result = CSIAdapter(site="EAST").read_table("SLItems")
        assert result.metadata["site"] == "EAST"
        assert CSIAdapter.is_ido_collection("SLItems")
        assert not CSIAdapter.is_ido_collection("item_mst")

    def test_lawson_data_area_override(self):
        result = LawsonAdapter(data_area="PROD").read_table("Employee", ReadOptions(data_area="TEST"))
        assert result.metadata["data_area"] == "TEST"

    def test_landmark_response_shapes(self):
        assert parse_landmark_entities([{"a": 1}]) == [{"a": 1}]
        assert parse_landmark_entities({"value": [{"a": 2}]}) == [{"a": 2}]
        assert parse_landmark_entities({"_embedded": {"items": [{"a": 3}]}}) == [{"a": 3}]
        assert parse_landmark_entities("garbage") == []


class TestFactory:
    def test_mock_adapters_have_no_access_paths(self):
        for product, cls in ADAPTERS.items():
            adapter = create_adapter(AdapterSettings(product=product))
            assert isinstance(adapter, cls)
            assert adapter.client is None
            assert adapter.db is None

    def test_identity_passed_through(self):
        adapter = create_adapter(AdapterSettings(product="csi", site="WEST"))
        assert adapter.site == "WEST"

    def test_live_with_ion_url(self):
        settings = AdapterSettings(product="LN", mode=SourceMode.LIVE, ion_base_url="https://ion.example.com/T")
        adapter = create_adapter(settings)
        assert isinstance(adapter.client, InforRestClient)
        assert adapter.db is None


class TestRestClient:
    def test_requires_base_url(self):
        with pytest.raises(InforError):
            InforRestClient("")

    def test_get_drops_empty_params(self):
        session = MagicMock()
        session.request.return_value.content = b'{"value": []}'
        session.request.return_value.json.return_value = {"value": []}
        client = InforRestClient("https://ion.example.com/T/", session=session)
        assert client.get("/LN/items", params={"$top": 5, "$filter": None}) == {"value": []}
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://ion.example.com/T/LN/items")
        assert kwargs["params"] == {"$top": 5}

    def test_http_error_wrapped(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")
        executor = ResilientExecutor.for_api(sleep=lambda s: None, max_retries=0)
        client = InforRestClient("https://ion.example.com", session=session, executor=executor)
        with pytest.raises(InforError) as exc_info:
            client.get("x")
        assert exc_info.value.code == "INFOR_HTTP"


def test_apply_paging():
    rows = [{"i": i} for i in range(10)]
    assert apply_paging(rows, ReadOptions(offset=8)) == [{"i": 8}, {"i": 9}]
    assert apply_paging(rows, ReadOptions(max_rows=2, offset=1)) == [{"i": 1}, {"i": 2}]
