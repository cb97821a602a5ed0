"""Migration object listing and transform preview endpoints."""

from fastapi import APIRouter, HTTPException

from ...errors import MigrationObjectError
from ..models import (
    MappingRuleResponse,
    ObjectDetail,
    ObjectListResponse,
    ObjectSummary,
    PreviewRequest,
    PreviewResponse,
)
from ..storage import registry

router = APIRouter()


def _get_object(object_id: str):
    if object_id not in registry:
        raise HTTPException(status_code=404, detail=f"Unknown migration object: {object_id}")
    return registry.get_object(object_id)


def _summary(info: dict) -> ObjectSummary:
    return ObjectSummary(
        object_id=info["object_id"],
        name=info["name"],
        source_table=info["source_table"],
        target_entity=info["target_entity"],
        mapping_count=info["mapping_count"],
        dependencies=registry.graph.get_dependencies(info["object_id"]),
    )


@router.get("", response_model=ObjectListResponse)
async def list_objects():
    """List all registered migration objects."""
    objects = [_summary(info) for info in registry.list_objects()]
    return ObjectListResponse(objects=objects, total=len(objects))


@router.get("/{object_id}", response_model=ObjectDetail)
async def get_object(object_id: str):
    """Get one object with its mapping rules and quality checks."""
    obj = _get_object(object_id)
    info = obj.describe()
    return ObjectDetail(
        **_summary(info).model_dump(),
        mappings=[MappingRuleResponse(**rule.to_dict()) for rule in obj.field_mappings()],
        quality_checks=info["quality_checks"],
    )


@router.post("/{object_id}/preview", response_model=PreviewResponse)
async def preview_transform(object_id: str, request: PreviewRequest):
    """Transform and check sample source records without loading them."""
    _get_object(object_id)
    obj = registry.create_object(object_id)
    try:
        if request.run_hook:
            phase, transformed = obj.transform(request.source_records)
            extra = {k: v for k, v in phase.details.items() if k != "mapping_summary"}
        else:
            transformed = obj.mapping_engine().apply_batch(request.source_records)
            extra = {}
    except MigrationObjectError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    _, report = obj.validate(transformed)
    return PreviewResponse(
        object_id=object_id,
        transformed=transformed,
        extra=extra,
        quality=report.to_dict(max_findings=50),
    )
