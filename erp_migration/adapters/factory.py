"""Build a source adapter from settings."""

import logging
from typing import Dict, Type

from ..config import AdapterSettings
from ..models.migration import SourceMode
from .base import InforAdapter
from .csi_adapter import CSIAdapter
from .db_adapter import InforDbAdapter
from .lawson_adapter import LawsonAdapter
from .ln_adapter import LNAdapter
from .m3_adapter import M3Adapter
from .rest_client import InforRestClient

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[InforAdapter]] = {
    "LN": LNAdapter,
    "M3": M3Adapter,
    "CSI": CSIAdapter,
    "LAWSON": LawsonAdapter,
}


def create_adapter(settings: AdapterSettings) -> InforAdapter:
    """
    Create the adapter for `settings.product`.

    In live mode a REST client is attached when `ion_base_url` is set and
    a read-only database adapter when `db_type` is set. Mock mode never
    builds either.
    """
    client = None
    db = None
    if settings.mode == SourceMode.LIVE:
        if settings.ion_base_url:
            client = InforRestClient(settings.ion_base_url, token=settings.ion_token, timeout=settings.timeout)
        if settings.has_database:
            db = InforDbAdapter(
                db_type=settings.db_type,
                host=settings.db_host,
                port=settings.db_port,
                database=settings.db_name,
                username=settings.db_user,
                password=settings.db_password,
            )

    identity = {
        "LN": {"company": settings.company},
        "M3": {"company": settings.company, "division": settings.division},
        "CSI": {"site": settings.site},
        "LAWSON": {"data_area": settings.data_area},
    }[settings.product]
    adapter = ADAPTERS[settings.product](mode=settings.mode, client=client, db=db, **identity)

    logger.info(
        f"Created {adapter.product_name} adapter ({settings.mode.value}"
        f"{', rest' if client else ''}{', database' if db else ''})"
    )
    return adapter
