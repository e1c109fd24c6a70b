"""
Project API endpoints.

Routes:
- POST /projects/{id}/process - Index the paper and generate baseline artifacts
- POST /projects/{id}/regenerate - Regenerate the summary at a level or for a custom prompt
- POST /projects/{id}/regenerate-diagram - Regenerate the Mermaid diagram
- POST /projects/{id}/generate-insights - Regenerate code snippets, references and insights

Dependencies: paperlens.application.services, paperlens.models
System role: Project processing HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from paperlens.api.deps import get_pipeline_service
from paperlens.application.services.pipeline_service import PipelineService
from paperlens.core.exceptions import (
    NoDocumentTextError,
    PipelineError,
    ProjectBusyError,
    ProjectNotFoundError,
    ProviderUnavailableError,
)
from paperlens.models.project import (
    ArtifactKind,
    InsightsResponse,
    ProcessResponse,
    RegenerateDiagramRequest,
    RegenerateDiagramResponse,
    RegenerateSummaryRequest,
    RegenerateSummaryResponse,
    RegenerationRequest,
    RegenerationResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


async def _run_regeneration(
    service: PipelineService,
    project_id: UUID,
    request: RegenerationRequest,
) -> RegenerationResult:
    try:
        return await service.regenerate(project_id, request)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except NoDocumentTextError:
        raise HTTPException(status_code=422, detail="Project has no paper text")
    except ProviderUnavailableError as e:
        logger.error(
            f"{__name__}:regenerate - Provider unavailable",
            extra={"project_id": str(project_id), "provider": e.details.get("provider")},
        )
        raise HTTPException(status_code=503, detail="Generation provider unavailable")
    except Exception as e:
        logger.exception(
            "Regeneration failed",
            extra={"project_id": str(project_id), "kind": request.kind.value, "error": str(e)},
        )
        raise HTTPException(status_code=500, detail="Regeneration failed")


@router.post("/{project_id}/process", response_model=ProcessResponse)
async def process_project(
    project_id: UUID,
    service: PipelineService = Depends(get_pipeline_service),
) -> ProcessResponse:
    """
    Index a project's paper and generate its baseline artifacts.

    Args:
        project_id: Project UUID
        service: Injected PipelineService

    Returns:
        ProcessResponse: Success flag and number of indexed chunks

    Raises:
        HTTPException(404): Project not found
        HTTPException(409): Project is already processing
        HTTPException(422): Project has no paper text
        HTTPException(500): Processing failed
    """
    try:
        result = await service.ingest(project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except ProjectBusyError:
        raise HTTPException(status_code=409, detail="Project is already processing")
    except PipelineError as e:
        if e.details.get("cause_kind") == NoDocumentTextError.__name__:
            raise HTTPException(status_code=422, detail="Project has no paper text")
        raise HTTPException(status_code=500, detail="Processing failed")

    logger.info(
        "Project processed",
        extra={"project_id": str(project_id), "chunk_count": result.chunk_count},
    )
    return ProcessResponse(success=True, chunk_count=result.chunk_count)


@router.post("/{project_id}/regenerate", response_model=RegenerateSummaryResponse)
async def regenerate_summary(
    project_id: UUID,
    request: RegenerateSummaryRequest,
    service: PipelineService = Depends(get_pipeline_service),
) -> RegenerateSummaryResponse:
    """
    Regenerate the summary.

    A level regenerates and stores that level's summary; a custom prompt is
    answered without being stored.
    """
    result = await _run_regeneration(
        service,
        project_id,
        RegenerationRequest(
            kind=ArtifactKind.SUMMARY,
            level=request.level,
            custom_prompt=request.custom_prompt,
        ),
    )
    return RegenerateSummaryResponse(success=True, summary=result.summary or "", level=result.level or "")


@router.post("/{project_id}/regenerate-diagram", response_model=RegenerateDiagramResponse)
async def regenerate_diagram(
    project_id: UUID,
    request: RegenerateDiagramRequest,
    service: PipelineService = Depends(get_pipeline_service),
) -> RegenerateDiagramResponse:
    """Regenerate the Mermaid diagram of the given type."""
    result = await _run_regeneration(
        service,
        project_id,
        RegenerationRequest(kind=ArtifactKind.DIAGRAM, diagram_type=request.diagram_type),
    )
    return RegenerateDiagramResponse(
        success=True,
        diagram_syntax=result.diagram_syntax or "",
        diagram_type=result.diagram_type or request.diagram_type,
    )


@router.post("/{project_id}/generate-insights", response_model=InsightsResponse)
async def generate_insights(
    project_id: UUID,
    service: PipelineService = Depends(get_pipeline_service),
) -> InsightsResponse:
    """Regenerate code snippets, references and key insights."""
    result = await _run_regeneration(
        service,
        project_id,
        RegenerationRequest(kind=ArtifactKind.INSIGHTS),
    )
    return InsightsResponse(
        success=True,
        code_snippets=result.code_snippets,
        references=result.references,
        insights=result.insights,
    )
