"""
Context assembly models.

Defines the context block handed to generation, its sections and the
per-task retrieval profiles.

Dependencies: pydantic, paperlens.boundary.vdb
System role: Data structures for RAG context assembly
"""

from enum import Enum

from pydantic import BaseModel, Field

from paperlens.boundary.vdb.vector_schemas import VectorSearchResult

RAG_HEADER = "VECTOR STORE CONTEXT (RAG):"
EXTERNAL_HEADER = "EXTERNAL CONTEXT:"
PRIMARY_HEADER = "RESEARCH PAPER:"


class ContextTask(str, Enum):
    """What a context block is assembled for."""

    INGESTION = "ingestion"
    SUMMARY = "summary"
    DIAGRAM = "diagram"
    INSIGHTS = "insights"
    CHAT = "chat"


class TaskProfile(BaseModel):
    """Retrieval defaults for one context task."""

    rag_query: str | None = Field(default=None, description="Canned retrieval query")
    top_k: int = Field(default=3, description="Chunks retrieved for the RAG section")
    use_diagram_limit: bool = Field(default=False, description="Cap primary section at the diagram limit")


TASK_PROFILES: dict[ContextTask, TaskProfile] = {
    ContextTask.INGESTION: TaskProfile(),
    ContextTask.SUMMARY: TaskProfile(rag_query="research paper summary", top_k=3),
    ContextTask.DIAGRAM: TaskProfile(
        rag_query="methodology workflow process diagram",
        top_k=3,
        use_diagram_limit=True,
    ),
    ContextTask.INSIGHTS: TaskProfile(
        rag_query="code snippets algorithms implementation methodology",
        top_k=5,
    ),
    ContextTask.CHAT: TaskProfile(top_k=4),
}


class ExternalContextItem(BaseModel):
    """One web search snippet for a key term. Fetched per request, never stored."""

    term: str = Field(description="Key term the search was run for")
    snippet: str = Field(description="Search result content")
    source_url: str = Field(default="", description="Result URL")


class DegradedSection(BaseModel):
    """A context section omitted because its source failed."""

    section: str = Field(description="rag or external")
    reason: str = Field(description="Error kind that caused the omission")


class ContextBlock(BaseModel):
    """
    Prompt context for one generation call.

    Sections render in fixed order: RAG, external, primary. Omitted
    sections are listed in ``degraded`` when a failure caused the omission.
    """

    rag_section: str | None = None
    external_section: str | None = None
    primary_section: str = ""
    rag_sources: list[VectorSearchResult] = Field(default_factory=list)
    external_items: list[ExternalContextItem] = Field(default_factory=list)
    degraded: list[DegradedSection] = Field(default_factory=list)

    def degrade(self, section: str, reason: str) -> None:
        self.degraded.append(DegradedSection(section=section, reason=reason))

    def is_degraded(self, section: str) -> bool:
        return any(d.section == section for d in self.degraded)

    def render(self) -> str:
        parts = []
        if self.rag_section:
            parts.append(f"{RAG_HEADER}\n{self.rag_section}")
        if self.external_section:
            parts.append(f"{EXTERNAL_HEADER}\n{self.external_section}")
        parts.append(f"{PRIMARY_HEADER}\n{self.primary_section}")
        return "\n\n".join(parts)
