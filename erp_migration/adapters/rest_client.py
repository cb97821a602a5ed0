"""Thin HTTP client for Infor REST gateways (ION API, M3 MI, IDO, Landmark)."""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import InforError
from .resilience import ResilientExecutor

logger = logging.getLogger(__name__)


class InforRestClient:
    """
    JSON-over-HTTP client with transport retries and a circuit breaker.

    Only GET requests are issued for reads. POST is limited to query-style
    endpoints that some gateways expose for large filters.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
        session: Optional[requests.Session] = None,
        executor: Optional[ResilientExecutor] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Gateway base URL (e.g. https://mingle-ionapi.inforcloudsuite.com/TENANT)
            token: OAuth bearer token
            timeout: Per-request timeout in seconds
            max_retries: Transport-level retries on 429/5xx
            backoff_factor: urllib3 backoff factor
            session: Custom requests session
            executor: Resilient executor wrapping every call
        """
        if not base_url:
            raise InforError("Infor REST client requires a base URL", code="INFOR_CONFIG")
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._max_retries = max_retries
        self._backoff_factor = backoff_factor
        self._session = session or self._create_session()
        self._executor = executor or ResilientExecutor.for_api()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry logic."""
        session = requests.Session()

        retries = Retry(
            total=self._max_retries,
            backoff_factor=self._backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "POST"],
        )

        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        session.headers["Accept"] = "application/json"
        if self.token:
            session.headers["Authorization"] = f"Bearer {self.token}"

        return session

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a JSON document."""
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST a query document and return the JSON response."""
        return self._request("POST", path, json=payload or {})

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        params = {k: v for k, v in (kwargs.pop("params", None) or {}).items() if v is not None}

        def _send() -> Dict[str, Any]:
            try:
                response = self._session.request(method, url, params=params, timeout=self.timeout, **kwargs)
                response.raise_for_status()
            except requests.RequestException as e:
                status = getattr(getattr(e, "response", None), "status_code", None)
                raise InforError(
                    f"{method} {url} failed: {e}",
                    code="INFOR_HTTP",
                    details={"url": url, "status_code": status},
                ) from e
            if not response.content:
                return {}
            return response.json()

        logger.debug(f"{method} {url}")
        return self._executor.execute(_send)

    def close(self) -> None:
        self._session.close()
