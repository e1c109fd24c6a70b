"""
Artifact generation: prompt specs, output parsing and orchestration.

Exports: GenerationOrchestrator, GenerationResult, PromptSpec, OutputShape
"""

from paperlens.core.generation.orchestrator import GenerationOrchestrator, GenerationResult
from paperlens.core.generation.prompt_specs import ModelTier, OutputShape, PromptSpec

__all__ = [
    "GenerationOrchestrator",
    "GenerationResult",
    "ModelTier",
    "OutputShape",
    "PromptSpec",
]
