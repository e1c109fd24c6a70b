"""
Retrieval-augmented context assembly.

ContextAssembler lives in ``context_assembler``; this package only exports
the context models so generation can import them without a cycle.
"""

from paperlens.core.rag.context_models import (
    ContextBlock,
    ContextTask,
    DegradedSection,
    ExternalContextItem,
)

__all__ = [
    "ContextBlock",
    "ContextTask",
    "DegradedSection",
    "ExternalContextItem",
]
