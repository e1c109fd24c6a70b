"""Chat API endpoints.

Routes:
- POST /projects/{project_id}/chat - Ask a question about the project's paper

Dependencies: paperlens.application.services.chat_service
System role: Chat messaging HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from paperlens.api.deps import get_chat_service
from paperlens.application.services.chat_service import ChatService
from paperlens.core.exceptions import (
    NoDocumentTextError,
    ProjectNotFoundError,
    ProviderUnavailableError,
)
from paperlens.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["chat"])


@router.post("/{project_id}/chat", response_model=ChatResponse)
async def chat(
    project_id: UUID,
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer a question from the chunks of the project's paper.

    Args:
        project_id: Project UUID
        request: ChatRequest with the question
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Answer with the chunks it was grounded on

    Raises:
        HTTPException(404): Project not found
        HTTPException(422): Project has no paper text
        HTTPException(503): Generation provider unavailable
    """
    try:
        return await chat_service.answer(project_id, request.message)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except NoDocumentTextError:
        raise HTTPException(status_code=422, detail="Project has no paper text")
    except ProviderUnavailableError:
        logger.error("Chat generation unavailable", extra={"project_id": str(project_id)})
        raise HTTPException(status_code=503, detail="Generation provider unavailable")
