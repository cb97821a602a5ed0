"""REST loader for the target ERP's OData / JSON entity sets."""

import time
import logging
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base import BaseLoader, RecordLoadResult
from ..models.record import Record

logger = logging.getLogger(__name__)


class TargetApiLoader(BaseLoader):
    """
    Posts each target record to `{base_url}/{entity}`.

    Entity paths can be overridden per entity. In dry-run mode nothing is
    sent and every record is reported as loaded.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        auth_type: str = "bearer",  # bearer, header
        auth_header: str = "Authorization",
        dry_run: bool = False,
        batch_size: int = 100,
        rate_limit: float = 0.0,
        timeout: float = 30.0,
        endpoints: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the loader.

        Args:
            base_url: Base URL of the target API
            api_key: API key or bearer token
            auth_type: "bearer" or "header"
            auth_header: Header name when auth_type is "header"
            dry_run: If True, simulate without making changes
            batch_size: Number of records per batch
            rate_limit: Max requests per second (0 disables)
            timeout: Per-request timeout in seconds
            endpoints: Mapping of entity -> endpoint path
            session: Custom requests session
        """
        super().__init__("target-api", api_key, dry_run, batch_size)
        self.base_url = base_url.rstrip("/")
        self.auth_type = auth_type
        self.auth_header = auth_header
        self.rate_limit = rate_limit
        self.timeout = timeout
        self.endpoints = endpoints or {}
        self._last_request_time = 0.0
        self._session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with authentication and retry logic."""
        session = requests.Session()

        retries = Retry(
            total=3,
            backoff_factor=1.0,
            status_forcelist=[429, 502, 503, 504],
            allowed_methods=["POST"],
        )
        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        if self.api_key:
            if self.auth_type == "bearer":
                session.headers["Authorization"] = f"Bearer {self.api_key}"
            else:
                session.headers[self.auth_header] = self.api_key

        session.headers["Content-Type"] = "application/json"
        session.headers["Accept"] = "application/json"
        return session

    def _rate_limit_wait(self):
        """Wait to respect rate limits."""
        if self.rate_limit > 0:
            elapsed = time.time() - self._last_request_time
            wait_time = (1.0 / self.rate_limit) - elapsed
            if wait_time > 0:
                time.sleep(wait_time)
        self._last_request_time = time.time()

    def _get_endpoint(self, entity: str) -> str:
        """Get the API endpoint for an entity."""
        if entity in self.endpoints:
            return self.endpoints[entity]
        return f"/{entity}"

    def load_record(self, record: Record, entity: str, index: int) -> RecordLoadResult:
        """POST a single record."""
        if self.dry_run:
            return RecordLoadResult(record_index=index, success=True, target_id=f"dry-run-{index + 1}")

        url = f"{self.base_url}{self._get_endpoint(entity)}"
        self._rate_limit_wait()

        try:
            response = self._session.post(url, json=record, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = str(e)
            try:
                error_data = e.response.json()
                error_msg = error_data.get("message") or error_data.get("error") or str(error_data)
            except ValueError:
                pass
            return RecordLoadResult(
                record_index=index,
                success=False,
                error=error_msg,
                error_code=str(e.response.status_code),
            )
        except requests.RequestException as e:
            return RecordLoadResult(record_index=index, success=False, error=str(e))

        response_data = response.json() if response.content else {}
        target_id = response_data.get("id") or response_data.get("d", {}).get("id")
        return RecordLoadResult(
            record_index=index,
            success=True,
            target_id=str(target_id) if target_id is not None else None,
        )

    def validate_connection(self) -> bool:
        """Validate connection to the API."""
        try:
            self._rate_limit_wait()
            response = self._session.get(self.base_url, timeout=self.timeout)
            return response.status_code < 500
        except requests.RequestException as e:
            logger.error(f"Target API connection validation failed: {e}")
            return False
