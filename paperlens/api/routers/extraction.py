"""
Text extraction API endpoints.

Routes: POST /extract-text

Dependencies: paperlens.boundary.documents
System role: Paper text extraction HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from paperlens.api.deps import get_pdf_provider
from paperlens.boundary.documents import PdfTextProvider
from paperlens.core.exceptions import TextExtractionError
from paperlens.models.project import ExtractTextRequest, ExtractTextResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extraction"])

CLIENT_ERROR_REASONS = {"download_failed": 400, "not_pdf": 400, "too_large": 400, "empty": 422}


@router.post("/extract-text", response_model=ExtractTextResponse)
async def extract_text(
    request: ExtractTextRequest,
    provider: PdfTextProvider = Depends(get_pdf_provider),
) -> ExtractTextResponse:
    """
    Extract the text of a PDF by URL.

    Raises:
        HTTPException(400): Download failed, not a PDF or too large
        HTTPException(422): PDF has no extractable text
        HTTPException(500): PDF could not be read
    """
    try:
        text = await provider.extract(request.url)
    except TextExtractionError as e:
        reason = e.details.get("reason", "")
        logger.warning("Text extraction failed", extra={"url": request.url, "reason": reason})
        raise HTTPException(status_code=CLIENT_ERROR_REASONS.get(reason, 500), detail=e.message)
    return ExtractTextResponse(text=text)
