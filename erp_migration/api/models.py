"""Pydantic models for API requests and responses."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from enum import Enum


class SourceModeEnum(str, Enum):
    MOCK = "mock"
    LIVE = "live"


# Request Models
class RunCreate(BaseModel):
    object_ids: Optional[List[str]] = None
    mode: SourceModeEnum = SourceModeEnum.MOCK
    parallel: bool = True
    max_concurrency: int = Field(default=8, ge=1)
    batch_size: int = Field(default=100, ge=1)
    load_error_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    target_url: Optional[str] = None
    dry_run: bool = False


class PreviewRequest(BaseModel):
    source_records: List[Dict[str, Any]]
    run_hook: bool = True


# Response Models
class MappingRuleResponse(BaseModel):
    source: Optional[str] = None
    target: str
    convert: Optional[str] = None
    default: Optional[Any] = None
    value_map: Optional[Dict[str, Any]] = None


class ObjectSummary(BaseModel):
    object_id: str
    name: str
    source_table: Optional[str] = None
    target_entity: str
    mapping_count: int
    dependencies: List[str] = Field(default_factory=list)


class ObjectDetail(ObjectSummary):
    mappings: List[MappingRuleResponse]
    quality_checks: Dict[str, Any]


class ObjectListResponse(BaseModel):
    objects: List[ObjectSummary]
    total: int


class WavesResponse(BaseModel):
    waves: List[List[str]]
    execution_order: List[str]
    total: int


class PreviewResponse(BaseModel):
    object_id: str
    transformed: List[Dict[str, Any]]
    extra: Dict[str, Any] = Field(default_factory=dict)
    quality: Dict[str, Any]


class RunSummary(BaseModel):
    id: str
    mode: str
    started_at: str
    completed_at: Optional[str] = None
    total: int
    completed: int
    failed: int
    cancelled: bool = False


class RunListResponse(BaseModel):
    runs: List[RunSummary]
    total: int
