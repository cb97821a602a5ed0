"""Tests for the target loaders."""

from unittest.mock import MagicMock

import requests

from erp_migration.loaders.api_loader import TargetApiLoader
from erp_migration.loaders.simulated import SimulatedLoader


def records(n):
    return [{"Id": str(i)} for i in range(n)]


class TestSimulatedLoader:
    def test_all_succeed(self):
        result = SimulatedLoader(batch_size=4).load(records(10), "Material")
        assert result.total_attempted == 10
        assert result.total_succeeded == 10
        assert result.batches == 3
        assert result.created_ids[0] == "Material-000001"
        assert result.success_rate == 1.0

    def test_error_rate_fails_tail(self):
        result = SimulatedLoader(batch_size=3, error_rate=0.5).load(records(10), "Material")
        assert result.total_failed == 5
        assert [e["record_index"] for e in result.errors] == [5, 6, 7, 8, 9]
        assert result.errors[0]["error_code"] == "SIMULATED"

    def test_empty(self):
        result = SimulatedLoader().load([], "Material")
        assert result.total_attempted == 0
        assert result.success_rate == 0.0
        assert result.to_dict()["batches"] == 0


def ok_response(body=b'{"id": "T-1"}', data=None):
    response = MagicMock()
    response.content = body
    response.json.return_value = data if data is not None else {"id": "T-1"}
    return response


class TestTargetApiLoader:
    def test_dry_run_sends_nothing(self):
        session = MagicMock()
        loader = TargetApiLoader("https://target.example.com", dry_run=True, session=session)
        result = loader.load(records(3), "A_Product")
        assert result.total_succeeded == 3
        session.post.assert_not_called()

    def test_posts_each_record(self):
        session = MagicMock()
        session.post.return_value = ok_response()
        loader = TargetApiLoader(
            "https://target.example.com/",
            session=session,
            endpoints={"A_Product": "/sap/opu/odata/API_PRODUCT_SRV/A_Product"},
        )
        result = loader.load(records(2), "A_Product")
        assert result.total_succeeded == 2
        assert result.created_ids == ["T-1", "T-1"]
        url = session.post.call_args[0][0]
        assert url == "https://target.example.com/sap/opu/odata/API_PRODUCT_SRV/A_Product"
        assert session.post.call_args[1]["json"] == {"Id": "1"}

    def test_http_error_is_a_record_failure(self):
        error_response = MagicMock(status_code=400)
        error_response.json.return_value = {"message": "Invalid material type"}
        response = ok_response()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=error_response)
        session = MagicMock()
        session.post.return_value = response
        result = TargetApiLoader("https://t", session=session).load(records(1), "X")
        assert result.total_failed == 1
        assert result.errors[0]["error"] == "Invalid material type"
        assert result.errors[0]["error_code"] == "400"

    def test_connection_error_does_not_stop_batch(self):
        session = MagicMock()
        session.post.side_effect = [requests.ConnectionError("reset"), ok_response()]
        result = TargetApiLoader("https://t", session=session).load(records(2), "X")
        assert result.total_failed == 1
        assert result.total_succeeded == 1

    def test_auth_headers(self):
        bearer = TargetApiLoader("https://t", api_key="k1")
        assert bearer._session.headers["Authorization"] == "Bearer k1"
        header = TargetApiLoader("https://t", api_key="k2", auth_type="header", auth_header="X-API-Key")
        assert header._session.headers["X-API-Key"] == "k2"
