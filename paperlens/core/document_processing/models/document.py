"""
Document input model for the ingestion pipeline.

Dependencies: pydantic
System role: Immutable pipeline input
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Raw paper text owned by one project for the duration of a run."""

    model_config = ConfigDict(frozen=True)

    project_id: UUID = Field(description="Owning project ID")
    raw_text: str = Field(description="Extracted paper text")

    @property
    def has_text(self) -> bool:
        return bool(self.raw_text and self.raw_text.strip())
