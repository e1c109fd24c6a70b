"""
Pipeline service orchestrator.

Owns the project status state machine: claims a project for ingestion,
indexes its paper, generates the baseline artifacts and records the outcome.
Also regenerates individual artifact kinds on demand.

    pending | complete | failed --ingest--> processing --ok--> complete
                                                       \\-error-> failed

Dependencies: paperlens.core, paperlens.boundary.db
System role: Ingestion and regeneration orchestration
"""

import logging
import time
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from paperlens.boundary.db.CRUD.project_crud import project_crud
from paperlens.boundary.db.models.project_model import ProjectModel, ProjectStatus
from paperlens.core.document_processing.entrypoint import DocumentPipeline
from paperlens.core.document_processing.models import Document
from paperlens.core.exceptions import (
    PipelineError,
    ProjectBusyError,
    ProjectNotFoundError,
)
from paperlens.core.generation.orchestrator import GenerationOrchestrator
from paperlens.core.generation.prompt_specs import (
    CODE_SNIPPETS_SPEC,
    INSIGHTS_SPEC,
    REFERENCES_SPEC,
    custom_summary_spec,
    diagram_spec,
    summary_spec,
)
from paperlens.core.rag.context_assembler import ContextAssembler
from paperlens.core.rag.context_models import ContextTask
from paperlens.models.project import (
    ArtifactKind,
    IngestionResult,
    RegenerationRequest,
    RegenerationResult,
)
from paperlens.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

BASELINE_SPECS = (
    summary_spec("college"),
    diagram_spec("flowchart"),
    CODE_SNIPPETS_SPEC,
    REFERENCES_SPEC,
)


class PipelineService:
    """
    Pipeline controller for one request.

    The only writer of ProjectStatus. Every state change is committed before
    the next long-running step starts.
    """

    def __init__(
        self,
        db: AsyncSession,
        pipeline: DocumentPipeline,
        assembler: ContextAssembler,
        orchestrator: GenerationOrchestrator,
    ) -> None:
        """
        Initialize pipeline service.

        Args:
            db: AsyncSession for project persistence
            pipeline: Chunk/embed/index pipeline
            assembler: Context assembler for generation
            orchestrator: Generation orchestrator
        """
        self.db = db
        self._pipeline = pipeline
        self._assembler = assembler
        self._orchestrator = orchestrator

    async def _get_project(self, project_id: UUID) -> ProjectModel:
        project = await project_crud.get_by_id(self.db, project_id)
        if project is None:
            raise ProjectNotFoundError(str(project_id))
        return project

    async def ingest(self, project_id: UUID) -> IngestionResult:
        """
        Index a project's paper and generate its baseline artifacts.

        Steps:
        1. Claim the project (PROCESSING, committed)
        2. Chunk, embed with retry, build and persist the index
        3. Assemble context (external snippets, no RAG)
        4. Generate college summary, flowchart, code snippets and references
        5. Write all derived fields together with COMPLETE

        Args:
            project_id: Project UUID

        Returns:
            IngestionResult: Chunk count, index location and degraded parts

        Raises:
            ProjectNotFoundError: Project does not exist
            ProjectBusyError: Project is already processing
            PipelineError: Any step failed; the project is marked FAILED
        """
        project = await self._get_project(project_id)
        if project.status is ProjectStatus.PROCESSING:
            raise ProjectBusyError(str(project_id))

        claimed = await project_crud.mark_processing(self.db, project_id)
        if claimed is None:
            await self.db.rollback()
            raise ProjectBusyError(str(project_id))
        paper_text = claimed.paper_text or ""
        await self.db.commit()

        start_time = time.perf_counter()
        log_with_context(logger, logging.INFO, "Ingestion started", project_id=project_id)

        try:
            document = Document(project_id=project_id, raw_text=paper_text)

            indexing = await self._pipeline.process(document)

            context = await self._assembler.assemble(
                document,
                ContextTask.INGESTION,
                include_external=True,
                use_rag=False,
            )
            results = await self._orchestrator.generate_batch(BASELINE_SPECS, context)

            await project_crud.save_analysis(
                self.db,
                project_id,
                vector_store_path=indexing.index_path,
                summary_college=results["summary_college"].value,
                diagram_syntax=results["diagram_flowchart"].value,
                extracted_code_snippets=results["code_snippets"].value,
                extracted_references=results["references"].value,
            )
            await self.db.commit()

        except Exception as e:
            await self.db.rollback()
            kind = getattr(e, "kind", type(e).__name__)
            log_exception_with_context(
                logger, "Ingestion failed", e, project_id=project_id, cause_kind=kind
            )
            await project_crud.mark_failed(
                self.db, project_id, error_message=f"{kind}: {getattr(e, 'message', str(e))}"
            )
            await self.db.commit()
            raise PipelineError(
                "Processing failed",
                project_id=str(project_id),
                cause_kind=kind,
            ) from e

        degraded = [f"context:{d.section}" for d in context.degraded]
        degraded += [f"artifact:{name}" for name, result in results.items() if not result.ok]
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        log_with_context(
            logger,
            logging.INFO,
            "Ingestion complete",
            project_id=project_id,
            chunk_count=indexing.chunk_count,
            degraded=",".join(degraded) or "none",
        )
        return IngestionResult(
            project_id=str(project_id),
            chunk_count=indexing.chunk_count,
            vector_store_path=indexing.index_path,
            degraded=degraded,
            processing_time_ms=elapsed_ms,
        )

    async def regenerate(self, project_id: UUID, request: RegenerationRequest) -> RegenerationResult:
        """
        Regenerate one artifact kind.

        Writes only the affected fields; status is left unchanged. A custom
        summary prompt is answered but not persisted.

        Args:
            project_id: Project UUID
            request: Artifact kind and its options

        Returns:
            RegenerationResult: Generated artifact(s)

        Raises:
            ProjectNotFoundError: Project does not exist
            NoDocumentTextError: Project has no paper text
            ProviderUnavailableError: Generation failed
        """
        project = await self._get_project(project_id)
        document = Document(project_id=project_id, raw_text=project.paper_text or "")

        try:
            if request.kind is ArtifactKind.SUMMARY:
                result = await self._regenerate_summary(document, request)
            elif request.kind is ArtifactKind.DIAGRAM:
                result = await self._regenerate_diagram(document, request)
            else:
                result = await self._regenerate_insights(document)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"{__name__}:regenerate - {request.kind.value} regenerated",
            extra={"project_id": str(project_id), "persisted": result.persisted},
        )
        return result

    async def _regenerate_summary(
        self, document: Document, request: RegenerationRequest
    ) -> RegenerationResult:
        if request.custom_prompt:
            spec = custom_summary_spec(request.custom_prompt)
            rag_query = request.custom_prompt
        else:
            spec = summary_spec(request.level)
            rag_query = f"{request.level} level summary" if request.level else None

        context = await self._assembler.assemble(
            document,
            ContextTask.SUMMARY,
            rag_query=rag_query,
            include_external=True,
        )
        generated = await self._orchestrator.generate(spec, context)

        persist = bool(request.level) and not request.custom_prompt
        if persist:
            level = request.level
            await project_crud.update_artifacts(
                self.db, document.project_id, **{f"summary_{level}": generated.value}
            )
        else:
            level = "custom" if request.custom_prompt else "default"
        return RegenerationResult(
            kind=ArtifactKind.SUMMARY,
            summary=generated.value,
            level=level,
            persisted=persist,
        )

    async def _regenerate_diagram(
        self, document: Document, request: RegenerationRequest
    ) -> RegenerationResult:
        context = await self._assembler.assemble(document, ContextTask.DIAGRAM)
        generated = await self._orchestrator.generate(diagram_spec(request.diagram_type), context)

        await project_crud.update_artifacts(
            self.db, document.project_id, diagram_syntax=generated.value
        )
        return RegenerationResult(
            kind=ArtifactKind.DIAGRAM,
            diagram_syntax=generated.value,
            diagram_type=request.diagram_type,
        )

    async def _regenerate_insights(self, document: Document) -> RegenerationResult:
        context = await self._assembler.assemble(
            document,
            ContextTask.INSIGHTS,
            include_external=True,
        )
        results = await self._orchestrator.generate_batch(
            (CODE_SNIPPETS_SPEC, REFERENCES_SPEC, INSIGHTS_SPEC),
            context,
        )

        code_snippets = results["code_snippets"].value
        references = results["references"].value
        insights = results["insights"].value
        await project_crud.update_artifacts(
            self.db,
            document.project_id,
            extracted_code_snippets=code_snippets,
            extracted_references=references,
            key_insights=insights,
        )
        return RegenerationResult(
            kind=ArtifactKind.INSIGHTS,
            code_snippets=code_snippets,
            references=references,
            insights=insights,
        )
