"""
Generation orchestrator.

Composes prompts from PromptSpecs and assembled context, calls the chat
model and post-processes output per shape. Batches run concurrently and
always settle completely; parse failures degrade to the shape's empty
default while provider failures fail the batch after every call finishes.

Dependencies: paperlens.boundary.llm, pydantic
System role: Concurrent artifact generation
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from paperlens.boundary.llm.chat_client import GeminiChatClient
from paperlens.core.exceptions import ParseFailureError, ProviderUnavailableError
from paperlens.core.generation.output_parser import clean_diagram, parse_structured
from paperlens.core.generation.prompt_specs import (
    FORMAT_RULES,
    ModelTier,
    OutputShape,
    PromptSpec,
)
from paperlens.core.rag.context_models import ContextBlock

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
    """Outcome of one spec in a generation call or batch."""

    name: str = Field(description="Spec name")
    value: Any = Field(default=None, description="Parsed output or the shape's empty default")
    ok: bool = Field(default=True, description="False when the value is a substituted default")
    error: str | None = Field(
        default=None,
        description="Error kind when ok is False, or ItemsDropped:<n> for a partial artifact",
    )


class GenerationOrchestrator:
    """Run PromptSpecs against the chat model."""

    def __init__(
        self,
        chat_client: GeminiChatClient,
        light_client: GeminiChatClient | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            chat_client: Client for artifact generation
            light_client: Cheaper client for auxiliary calls (defaults to chat_client)
        """
        self._chat_client = chat_client
        self._light_client = light_client or chat_client

    def compose_prompt(self, spec: PromptSpec, context: ContextBlock) -> str:
        parts = [spec.instruction]
        rules = FORMAT_RULES[spec.shape]
        if rules:
            parts.append(rules)
        parts.append(f"CONTEXT:\n{context.render()}")
        return "\n\n".join(parts)

    def _client_for(self, spec: PromptSpec) -> GeminiChatClient:
        if spec.tier is ModelTier.LIGHT:
            return self._light_client
        return self._chat_client

    def _postprocess(self, spec: PromptSpec, raw: str) -> tuple[Any, int]:
        """Parsed value and the number of structured items dropped."""
        if spec.shape is OutputShape.JSON:
            parsed = parse_structured(raw, spec)
            return parsed.items, parsed.dropped
        if spec.shape is OutputShape.DIAGRAM:
            return clean_diagram(raw), 0
        return raw.strip(), 0

    async def generate(self, spec: PromptSpec, context: ContextBlock) -> GenerationResult:
        """
        Run one spec.

        Args:
            spec: Prompt specification
            context: Assembled context block

        Returns:
            GenerationResult: Parsed value, or the empty default with ok=False on parse failure

        Raises:
            ProviderUnavailableError: When the generation provider fails or times out
        """
        prompt = self.compose_prompt(spec, context)
        raw = await self._client_for(spec).complete(prompt)

        try:
            value, dropped = self._postprocess(spec, raw)
        except ParseFailureError as e:
            logger.warning(
                f"{__name__}:generate - Parse failure for {spec.name}, using empty default",
                extra={"spec": spec.name, "error": e.message},
            )
            return GenerationResult(
                name=spec.name,
                value=spec.empty_default,
                ok=False,
                error=e.kind,
            )
        if dropped:
            logger.warning(
                f"{__name__}:generate - Dropped {dropped} invalid items from {spec.name}",
                extra={"spec": spec.name, "dropped": dropped},
            )
            return GenerationResult(name=spec.name, value=value, error=f"ItemsDropped:{dropped}")
        return GenerationResult(name=spec.name, value=value)

    async def generate_batch(
        self,
        specs: Sequence[PromptSpec],
        context: ContextBlock,
    ) -> dict[str, GenerationResult]:
        """
        Run specs concurrently against one context.

        Every call runs to completion before the batch resolves.

        Args:
            specs: Specs with unique names
            context: Shared context block

        Returns:
            dict[str, GenerationResult]: Results keyed by spec name

        Raises:
            ProviderUnavailableError: First provider failure, raised after all calls settle
        """
        names = [spec.name for spec in specs]
        if len(set(names)) != len(names):
            raise ValueError(f"Spec names must be unique within a batch: {names}")

        logger.info(f"{__name__}:generate_batch - START specs={names}")
        outcomes = await asyncio.gather(
            *(self.generate(spec, context) for spec in specs),
            return_exceptions=True,
        )

        results: dict[str, GenerationResult] = {}
        provider_error: ProviderUnavailableError | None = None
        unexpected: BaseException | None = None
        for spec, outcome in zip(specs, outcomes):
            if isinstance(outcome, GenerationResult):
                results[spec.name] = outcome
                continue
            if isinstance(outcome, ProviderUnavailableError):
                provider_error = provider_error or outcome
            elif unexpected is None:
                unexpected = outcome
            logger.error(
                f"{__name__}:generate_batch - {spec.name} failed: {type(outcome).__name__}: {outcome}"
            )
            results[spec.name] = GenerationResult(
                name=spec.name,
                value=spec.empty_default,
                ok=False,
                error=type(outcome).__name__,
            )

        if provider_error is not None:
            raise provider_error
        if unexpected is not None:
            raise unexpected

        failed = [name for name, result in results.items() if not result.ok]
        logger.info(f"{__name__}:generate_batch - END degraded={failed}")
        return results
