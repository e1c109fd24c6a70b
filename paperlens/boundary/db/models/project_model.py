"""
Project ORM model.

One project owns one research paper: its extracted text, ingestion status,
the location of its vector index and every generated artifact.

Dependencies: sqlalchemy, paperlens.boundary.db.base
System role: Project persistence for ingestion and artifacts
"""

import enum
from typing import Any

from sqlalchemy import JSON, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from paperlens.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ProjectStatus(str, enum.Enum):
    """
    Project ingestion lifecycle states.

    PENDING: Paper text stored, not yet ingested
    PROCESSING: Ingestion run in progress (blocks concurrent runs)
    COMPLETE: Index persisted and baseline artifacts generated
    FAILED: Last run failed; error_message holds details
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETE = "complete"
    FAILED = "failed"


class ProjectModel(Base, UUIDMixin, TimestampMixin):
    """
    Project ORM model.

    Status is written only by the pipeline service. Derived fields are
    written together with the transition to COMPLETE, or individually by
    regeneration.
    """

    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(512), nullable=False, default="Untitled paper")
    pdf_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    paper_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, native_enum=False, length=16),
        nullable=False,
        default=ProjectStatus.PENDING,
    )
    error_message: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    vector_store_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    summary_eli5: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary_college: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary_expert: Mapped[str | None] = mapped_column(Text, nullable=True)
    diagram_syntax: Mapped[str | None] = mapped_column(Text, nullable=True)

    extracted_code_snippets: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    extracted_references: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    key_insights: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
