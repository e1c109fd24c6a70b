"""
Context assembler for generation prompts.

Builds the context block for one generation task from up to three sources:
chunks retrieved from the project's vector index, web search snippets for
the paper's key terms, and a fixed-size prefix of the raw paper text. Only
the primary section is mandatory; a failing optional source is omitted and
recorded on the block.

Dependencies: paperlens.boundary (vdb, llm, search), paperlens.core.generation
System role: Multi-source prompt context for RAG generation
"""

import asyncio
import logging

from paperlens.boundary.llm.embedding_client import GeminiEmbeddingClient
from paperlens.boundary.search.web_search_client import WebSearchClient
from paperlens.boundary.vdb import FAISSIndexStore, IndexCache, VectorSearchResult
from paperlens.core.document_processing.configs import PipelineSettings, get_pipeline_settings
from paperlens.core.document_processing.models import Document
from paperlens.core.exceptions import (
    DimensionMismatchError,
    IndexNotFoundError,
    InvalidInputError,
    NoDocumentTextError,
    ProviderUnavailableError,
)
from paperlens.core.generation.orchestrator import GenerationOrchestrator
from paperlens.core.generation.prompt_specs import KEY_TERMS_SPEC
from paperlens.core.rag.context_models import (
    TASK_PROFILES,
    ContextBlock,
    ContextTask,
    ExternalContextItem,
)

logger = logging.getLogger(__name__)

RAG_RECOVERABLE = (
    IndexNotFoundError,
    ProviderUnavailableError,
    DimensionMismatchError,
    InvalidInputError,
)


class ContextAssembler:
    """Assemble RAG, external and primary context sections."""

    def __init__(
        self,
        embedding_client: GeminiEmbeddingClient,
        store: FAISSIndexStore,
        cache: IndexCache,
        orchestrator: GenerationOrchestrator,
        search_client: WebSearchClient | None = None,
        settings: PipelineSettings | None = None,
        max_key_terms: int = 3,
        max_external_items: int = 3,
        search_query_suffix: str = "research implementation",
    ) -> None:
        """
        Initialize assembler.

        Args:
            embedding_client: Client for query embeddings
            store: Vector index store
            cache: Loaded-index cache
            orchestrator: Generation orchestrator (used for key-term extraction)
            search_client: Web search client (external section unavailable if None)
            settings: Pipeline settings for section limits
            max_key_terms: Key terms searched per request
            max_external_items: External snippets kept overall
            search_query_suffix: Appended to each key term to form the search query
        """
        self._embedding_client = embedding_client
        self._store = store
        self._cache = cache
        self._orchestrator = orchestrator
        self._search_client = search_client
        self._settings = settings or get_pipeline_settings()
        self._max_key_terms = max_key_terms
        self._max_external_items = max_external_items
        self._search_query_suffix = search_query_suffix

    async def retrieve(
        self,
        project_id: str,
        query: str,
        top_k: int,
    ) -> list[VectorSearchResult]:
        """
        Retrieve the chunks most similar to a query.

        Raises:
            IndexNotFoundError, ProviderUnavailableError, DimensionMismatchError, InvalidInputError
        """
        index = await self._cache.get_or_load(project_id, self._store.load)
        vector = await self._embedding_client.embed_query(query)
        return self._store.query(index, vector, top_k)

    async def _rag_section(self, block: ContextBlock, project_id: str, query: str, top_k: int) -> None:
        try:
            results = await self.retrieve(project_id, query, top_k)
        except RAG_RECOVERABLE as e:
            logger.warning(
                f"{__name__}:assemble - RAG section omitted ({e.kind})",
                extra={"project_id": project_id, "reason": e.kind},
            )
            block.degrade("rag", e.kind)
            return
        if results:
            block.rag_sources = results
            block.rag_section = "\n\n".join(result.content for result in results)

    async def extract_key_terms(self, raw_text: str) -> list[str]:
        """
        Extract key terms from the start of the paper.

        Returns:
            list[str]: Up to max_key_terms non-empty terms (empty on parse failure)

        Raises:
            ProviderUnavailableError: When the generation call fails
        """
        prefix = raw_text[: self._settings.key_terms_char_limit]
        result = await self._orchestrator.generate(KEY_TERMS_SPEC, ContextBlock(primary_section=prefix))
        if not result.ok:
            return []
        terms = [term.strip() for term in result.value if term.strip()]
        return terms[: self._max_key_terms]

    async def _external_section(self, block: ContextBlock, raw_text: str) -> None:
        if self._search_client is None:
            block.degrade("external", "SearchNotConfigured")
            return

        try:
            terms = await self.extract_key_terms(raw_text)
        except ProviderUnavailableError as e:
            block.degrade("external", e.kind)
            return
        if not terms:
            block.degrade("external", "NoKeyTerms")
            return

        searches = await asyncio.gather(
            *(
                self._search_client.search(
                    f"{term} {self._search_query_suffix}",
                    max_results=self._max_external_items,
                )
                for term in terms
            ),
            return_exceptions=True,
        )
        for outcome in searches:
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome
        failures = [outcome for outcome in searches if isinstance(outcome, Exception)]
        if failures:
            kind = getattr(failures[0], "kind", type(failures[0]).__name__)
            logger.warning(f"{__name__}:assemble - External section omitted ({kind})")
            block.degrade("external", kind)
            return

        items = [
            ExternalContextItem(term=term, snippet=hit.content, source_url=hit.url)
            for term, hits in zip(terms, searches)
            for hit in hits
        ][: self._max_external_items]
        if not items:
            block.degrade("external", "NoSearchResults")
            return

        block.external_items = items
        block.external_section = "\n\n".join(
            f"Term: {item.term}\n{item.snippet}" + (f"\nSource: {item.source_url}" if item.source_url else "")
            for item in items
        )

    async def assemble(
        self,
        document: Document,
        task: ContextTask,
        rag_query: str | None = None,
        include_external: bool = False,
        use_rag: bool = True,
        top_k: int | None = None,
    ) -> ContextBlock:
        """
        Assemble the context block for one task.

        Args:
            document: Project paper text
            task: Task the context is for (selects canned query, top-k and limits)
            rag_query: Retrieval query overriding the task's canned query
            include_external: Fetch web snippets for the paper's key terms
            use_rag: Query the project's vector index
            top_k: Chunks to retrieve (task default if None)

        Returns:
            ContextBlock: Sections in fixed order, degraded sections recorded

        Raises:
            NoDocumentTextError: When the document has no usable text
        """
        project_id = str(document.project_id)
        if not document.has_text:
            raise NoDocumentTextError(project_id)

        profile = TASK_PROFILES[task]
        limit = (
            self._settings.diagram_char_limit
            if profile.use_diagram_limit
            else self._settings.primary_char_limit
        )
        block = ContextBlock(primary_section=document.raw_text[:limit])

        query = rag_query or profile.rag_query
        tasks = []
        if use_rag and query:
            tasks.append(self._rag_section(block, project_id, query, top_k or profile.top_k))
        if include_external:
            tasks.append(self._external_section(block, document.raw_text))
        if tasks:
            await asyncio.gather(*tasks)

        logger.info(
            f"{__name__}:assemble - task={task.value}, rag={bool(block.rag_section)}, "
            f"external={bool(block.external_section)}, degraded={[d.section for d in block.degraded]}",
            extra={"project_id": project_id},
        )
        return block
