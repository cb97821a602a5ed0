"""Execution wave planning endpoint."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from ...errors import MigrationObjectError
from ..models import WavesResponse
from ..storage import registry

router = APIRouter()


@router.get("", response_model=WavesResponse)
async def get_waves(object_ids: Optional[List[str]] = Query(default=None)):
    """Dependency-ordered waves for all objects or a subset."""
    try:
        waves = registry.get_execution_waves(object_ids)
    except MigrationObjectError as e:
        status = 404 if e.code == "MIGOBJ_UNKNOWN" else 400
        raise HTTPException(status_code=status, detail=e.to_dict())
    order = [object_id for wave in waves for object_id in wave]
    return WavesResponse(waves=waves, execution_order=order, total=len(order))
