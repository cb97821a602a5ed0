"""Settings for source adapters and migration runs."""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .errors import InforError
from .models.migration import SourceMode

logger = logging.getLogger(__name__)

PRODUCTS = ("LN", "M3", "CSI", "LAWSON")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _config_error(message: str, **details: Any) -> InforError:
    return InforError(message, code="INFOR_CONFIG", details=details)


def _int(value: Any, default: int, name: str) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise _config_error(f"{name} must be an integer, got {value!r}", setting=name)


def _float(value: Any, default: float, name: str) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise _config_error(f"{name} must be a number, got {value!r}", setting=name)


def _bool(value: Any, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AdapterSettings:
    """Connection settings for one source ERP."""
    product: str = "LN"
    mode: SourceMode = SourceMode.MOCK

    # Product-specific identifiers
    company: str = "100"
    division: str = ""
    site: str = "MAIN"
    data_area: str = "PROD"

    # REST gateway (ION API / M3 MI / IDO / Landmark)
    ion_base_url: Optional[str] = None
    ion_token: Optional[str] = None
    timeout: float = 30.0

    # Direct database access
    db_type: Optional[str] = None
    db_host: str = ""
    db_port: Optional[int] = None
    db_name: str = ""
    db_user: str = ""
    db_password: str = ""

    def __post_init__(self):
        self.product = (self.product or "").upper()
        if self.product not in PRODUCTS:
            raise _config_error(
                f"Unknown product: {self.product!r}. Expected one of {', '.join(PRODUCTS)}",
                setting="PRODUCT",
            )
        try:
            self.mode = SourceMode(self.mode)
        except ValueError:
            raise _config_error(f"Unknown mode: {self.mode!r}. Expected mock or live", setting="MODE")

    @property
    def has_database(self) -> bool:
        return bool(self.db_type)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (secrets omitted)."""
        return {
            "product": self.product,
            "mode": self.mode.value,
            "company": self.company,
            "division": self.division,
            "site": self.site,
            "data_area": self.data_area,
            "ion_base_url": self.ion_base_url,
            "timeout": self.timeout,
            "db_type": self.db_type,
            "db_host": self.db_host,
            "db_port": self.db_port,
            "db_name": self.db_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdapterSettings":
        """Create from dictionary representation."""
        return cls(
            product=data.get("product", "LN"),
            mode=data.get("mode", SourceMode.MOCK.value),
            company=str(data.get("company", "100")),
            division=data.get("division", ""),
            site=data.get("site", "MAIN"),
            data_area=data.get("data_area", "PROD"),
            ion_base_url=data.get("ion_base_url"),
            ion_token=data.get("ion_token"),
            timeout=_float(data.get("timeout"), 30.0, "timeout"),
            db_type=data.get("db_type"),
            db_host=data.get("db_host", ""),
            db_port=_int(data.get("db_port"), 0, "db_port") or None,
            db_name=data.get("db_name", ""),
            db_user=data.get("db_user", ""),
            db_password=data.get("db_password", ""),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AdapterSettings":
        """Read PRODUCT, MODE, COMPANY, SITE, DATA_AREA, ION_* and DB_* variables."""
        env = os.environ if environ is None else environ
        return cls(
            product=env.get("PRODUCT", "LN"),
            mode=(env.get("MODE") or SourceMode.MOCK.value).lower(),
            company=env.get("COMPANY", "100"),
            division=env.get("DIVISION", ""),
            site=env.get("SITE", "MAIN"),
            data_area=env.get("DATA_AREA", "PROD"),
            ion_base_url=env.get("ION_BASE_URL") or None,
            ion_token=env.get("ION_TOKEN") or None,
            timeout=_float(env.get("ION_TIMEOUT"), 30.0, "ION_TIMEOUT"),
            db_type=(env.get("DB_TYPE") or "").lower() or None,
            db_host=env.get("DB_HOST", ""),
            db_port=_int(env.get("DB_PORT"), 0, "DB_PORT") or None,
            db_name=env.get("DB_NAME", ""),
            db_user=env.get("DB_USER", ""),
            db_password=env.get("DB_PASSWORD", ""),
        )


@dataclass
class RunConfig:
    """Options for one migration run."""
    batch_size: int = 100
    max_concurrency: int = 8
    parallel: bool = True
    load_error_rate: float = 0.0

    # Live target
    target_url: Optional[str] = None
    target_api_key: Optional[str] = None
    dry_run: bool = False

    log_level: str = "INFO"

    def __post_init__(self):
        if self.batch_size < 1:
            raise _config_error(f"batch_size must be >= 1, got {self.batch_size}", setting="batch_size")
        if self.max_concurrency < 1:
            raise _config_error(
                f"max_concurrency must be >= 1, got {self.max_concurrency}", setting="max_concurrency"
            )
        if not 0.0 <= self.load_error_rate <= 1.0:
            raise _config_error(
                f"load_error_rate must be between 0 and 1, got {self.load_error_rate}",
                setting="load_error_rate",
            )
        self.log_level = (self.log_level or "INFO").upper()
        if self.log_level not in LOG_LEVELS:
            raise _config_error(f"Unknown log level: {self.log_level}", setting="log_level")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation (secrets omitted)."""
        return {
            "batch_size": self.batch_size,
            "max_concurrency": self.max_concurrency,
            "parallel": self.parallel,
            "load_error_rate": self.load_error_rate,
            "target_url": self.target_url,
            "dry_run": self.dry_run,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Create from dictionary representation."""
        return cls(
            batch_size=_int(data.get("batch_size"), 100, "batch_size"),
            max_concurrency=_int(data.get("max_concurrency"), 8, "max_concurrency"),
            parallel=_bool(data.get("parallel"), True),
            load_error_rate=_float(data.get("load_error_rate"), 0.0, "load_error_rate"),
            target_url=data.get("target_url"),
            target_api_key=data.get("target_api_key"),
            dry_run=_bool(data.get("dry_run"), False),
            log_level=data.get("log_level", "INFO"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunConfig":
        """Read MIGRATION_*, TARGET_*, DRY_RUN and LOG_LEVEL variables."""
        env = os.environ if environ is None else environ
        return cls(
            batch_size=_int(env.get("MIGRATION_BATCH_SIZE"), 100, "MIGRATION_BATCH_SIZE"),
            max_concurrency=_int(env.get("MIGRATION_CONCURRENCY"), 8, "MIGRATION_CONCURRENCY"),
            parallel=_bool(env.get("MIGRATION_PARALLEL"), True),
            load_error_rate=_float(env.get("LOAD_ERROR_RATE"), 0.0, "LOAD_ERROR_RATE"),
            target_url=env.get("TARGET_URL") or None,
            target_api_key=env.get("TARGET_API_KEY") or None,
            dry_run=_bool(env.get("DRY_RUN"), False),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )
