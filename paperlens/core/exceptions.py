"""
Exception hierarchy for the PaperLens backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PaperLensException(Exception):
    """Base exception for all PaperLens application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    @property
    def kind(self) -> str:
        """Short error kind used in logs and failure records."""
        return type(self).__name__


class ProviderUnavailableError(PaperLensException):
    """Raised when the embedding, generation or search service is unreachable,
    rate-limited or timed out."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Name of the failing provider (embedding, generation, search)
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        self.provider = provider
        super().__init__(message, details)


class InvalidInputError(PaperLensException):
    """Raised when input text is empty, too long or otherwise unusable."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class IndexNotFoundError(PaperLensException):
    """Raised when no readable persisted index exists for a project."""

    def __init__(self, location: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["location"] = location
        self.location = location
        super().__init__(f"Vector index not found: {location}", details)


class DimensionMismatchError(PaperLensException):
    """Raised when embedding vectors do not share one dimension."""

    def __init__(
        self,
        expected: int | None,
        actual: int | None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details.update({"expected": expected, "actual": actual})
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            details,
        )


class ParseFailureError(PaperLensException):
    """Raised when model output does not parse into the expected shape."""

    def __init__(
        self,
        message: str,
        spec_name: str | None = None,
        raw_output: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if spec_name:
            details["spec"] = spec_name
        if raw_output is not None:
            details["raw_preview"] = raw_output[:200]
        super().__init__(message, details)


class NoDocumentTextError(PaperLensException):
    """Raised when a project has no paper text to work from."""

    def __init__(self, project_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["project_id"] = project_id
        super().__init__(f"Project {project_id} has no document text", details)


class ProjectNotFoundError(PaperLensException):
    """Raised when a project cannot be found."""

    def __init__(self, project_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["project_id"] = project_id
        super().__init__(f"Project not found: {project_id}", details)


class ProjectBusyError(PaperLensException):
    """Raised when ingestion is triggered for a project already processing."""

    def __init__(self, project_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["project_id"] = project_id
        super().__init__(f"Project {project_id} is already processing", details)


class PipelineError(PaperLensException):
    """Raised by the pipeline controller when an ingestion run fails.

    Wraps the underlying error; ``cause_kind`` keeps its kind for diagnostics.
    """

    def __init__(
        self,
        message: str,
        project_id: str | None = None,
        cause_kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if project_id:
            details["project_id"] = project_id
        if cause_kind:
            details["cause_kind"] = cause_kind
        self.cause_kind = cause_kind
        super().__init__(message, details)


class TextExtractionError(PaperLensException):
    """Raised when paper text cannot be extracted from a PDF URL."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        reason: str = "extraction_failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        details["reason"] = reason
        self.reason = reason
        super().__init__(message, details)
