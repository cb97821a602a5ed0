"""Migration run execution endpoints."""

import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from ...adapters.factory import create_adapter
from ...config import AdapterSettings, RunConfig
from ...errors import ErpMigrationError, MigrationObjectError
from ...loaders.api_loader import TargetApiLoader
from ...models.migration import RunResult, SourceGateway, SourceMode
from ..models import RunCreate, RunListResponse, RunSummary, SourceModeEnum
from ..storage import registry, run_storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _summary(result: RunResult) -> RunSummary:
    return RunSummary(
        id=result.id,
        mode=result.mode.value,
        started_at=result.started_at.isoformat(),
        completed_at=result.completed_at.isoformat() if result.completed_at else None,
        total=result.stats.total,
        completed=result.stats.completed,
        failed=result.stats.failed,
        cancelled=result.stats.cancelled,
    )


def _live_gateway(data: RunCreate) -> SourceGateway:
    """Connect the configured source adapter and build the target loader."""
    settings = AdapterSettings.from_env()
    settings.mode = SourceMode.LIVE
    adapter = create_adapter(settings)
    try:
        adapter.connect()

        run_config = RunConfig.from_env()
        target_url = data.target_url or run_config.target_url
        loader = None
        if target_url:
            loader = TargetApiLoader(
                base_url=target_url,
                api_key=run_config.target_api_key,
                dry_run=data.dry_run or run_config.dry_run,
                batch_size=data.batch_size,
            )
    except Exception:
        _disconnect(adapter)
        raise
    return SourceGateway.live(adapter, loader)


def _disconnect(adapter: Any) -> None:
    try:
        adapter.disconnect()
    except ErpMigrationError as e:
        logger.warning(f"Failed to disconnect source adapter: {e.message}")


@router.post("")
async def create_run(data: RunCreate) -> Dict[str, Any]:
    """Run migration objects in dependency waves and return the run result."""
    if data.object_ids:
        unknown = [object_id for object_id in data.object_ids if object_id not in registry]
        if unknown:
            raise HTTPException(status_code=404, detail=f"Unknown migration objects: {', '.join(unknown)}")

    if data.mode == SourceModeEnum.LIVE:
        try:
            gateway = await asyncio.to_thread(_live_gateway, data)
        except ErpMigrationError as e:
            status = 400 if getattr(e, "code", None) == "INFOR_CONFIG" else 502
            raise HTTPException(status_code=status, detail=e.to_dict())
    else:
        gateway = SourceGateway.mock()

    try:
        result = await registry.run_all(
            gateway=gateway,
            object_ids=data.object_ids,
            parallel=data.parallel,
            max_concurrency=data.max_concurrency,
            batch_size=data.batch_size,
            load_error_rate=data.load_error_rate,
        )
    except MigrationObjectError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    finally:
        if gateway.adapter is not None:
            _disconnect(gateway.adapter)

    run_storage.add(result)
    logger.info(f"Run {result.id} finished: {result.stats.completed}/{result.stats.total} completed")
    return result.to_dict()


@router.get("", response_model=RunListResponse)
async def list_runs():
    """List recent runs."""
    runs = [_summary(r) for r in run_storage.list_all()]
    return RunListResponse(runs=runs, total=len(runs))


@router.get("/{run_id}")
async def get_run(run_id: str) -> Dict[str, Any]:
    """Get the full result of a run."""
    result = run_storage.get(run_id)
    if not result:
        raise HTTPException(status_code=404, detail="Run not found")
    return result.to_dict()
