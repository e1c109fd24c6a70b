"""
Project domain models and schemas.

Request/response schemas for ingestion and artifact regeneration, plus the
service-level results they are built from.

Dependencies: pydantic
System role: Project API contracts
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class ArtifactKind(str, Enum):
    SUMMARY = "summary"
    DIAGRAM = "diagram"
    INSIGHTS = "insights"


SummaryLevel = Literal["eli5", "college", "expert"]
DiagramType = Literal["flowchart", "mindmap", "timeline"]


class RegenerationRequest(BaseModel):
    """Service-level request to regenerate one artifact kind."""

    kind: ArtifactKind
    level: SummaryLevel | None = None
    custom_prompt: str | None = Field(default=None, description="Free-text summary prompt (not persisted)")
    diagram_type: DiagramType = "flowchart"


class IngestionResult(BaseModel):
    """Outcome of a successful ingestion run."""

    project_id: str
    chunk_count: int
    vector_store_path: str
    degraded: list[str] = Field(default_factory=list, description="Context sections or artifacts that degraded")
    processing_time_ms: float


class RegenerationResult(BaseModel):
    """Outcome of a regeneration request."""

    kind: ArtifactKind
    summary: str | None = None
    level: str | None = None
    diagram_syntax: str | None = None
    diagram_type: str | None = None
    code_snippets: list[dict[str, Any]] = Field(default_factory=list)
    references: list[dict[str, Any]] = Field(default_factory=list)
    insights: list[dict[str, Any]] = Field(default_factory=list)
    persisted: bool = True


# API schemas


class ProcessResponse(BaseModel):
    success: bool = True
    chunk_count: int


class RegenerateSummaryRequest(BaseModel):
    """Request schema for summary regeneration."""

    level: SummaryLevel | None = Field(default=None, description="Reading level")
    custom_prompt: str | None = Field(
        default=None,
        max_length=4000,
        description="Free-text prompt used instead of a level",
    )


class RegenerateSummaryResponse(BaseModel):
    success: bool = True
    summary: str
    level: str


class RegenerateDiagramRequest(BaseModel):
    diagram_type: DiagramType = Field(default="flowchart")


class RegenerateDiagramResponse(BaseModel):
    success: bool = True
    diagram_syntax: str
    diagram_type: str


class InsightsResponse(BaseModel):
    success: bool = True
    code_snippets: list[dict[str, Any]]
    references: list[dict[str, Any]]
    insights: list[dict[str, Any]]


class ExtractTextRequest(BaseModel):
    url: str = Field(min_length=1, description="URL of the paper PDF")


class ExtractTextResponse(BaseModel):
    text: str
