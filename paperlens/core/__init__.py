"""
Core business logic module.

Contains the ingestion pipeline, context assembly, generation orchestration
and the exception hierarchy shared by every layer.
"""

from paperlens.core.exceptions import (
    DimensionMismatchError,
    IndexNotFoundError,
    InvalidInputError,
    NoDocumentTextError,
    PaperLensException,
    ParseFailureError,
    PipelineError,
    ProjectBusyError,
    ProjectNotFoundError,
    ProviderUnavailableError,
    TextExtractionError,
)

__all__ = [
    "PaperLensException",
    "ProviderUnavailableError",
    "InvalidInputError",
    "IndexNotFoundError",
    "DimensionMismatchError",
    "ParseFailureError",
    "NoDocumentTextError",
    "ProjectNotFoundError",
    "ProjectBusyError",
    "PipelineError",
    "TextExtractionError",
]
