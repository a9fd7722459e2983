from fastapi import APIRouter, Depends, UploadFile, File, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from loguru import logger
from ..deps import DocumentAnalyzer, get_document_analyzer
from ...core.config import settings
from ...core.exceptions import (
    AnalysisServiceError,
    EmptyDocumentError,
    ServiceNotConfiguredError,
    UnsupportedDocumentError,
)
from ...services.analysis_types import AnalysisResult

router = APIRouter(prefix="/documents", tags=["documents"])


def validate_upload(content: bytes, content_type: str | None) -> None:
    """
    Reject uploads the analysis service should never see.

    Raises:
        EmptyDocumentError: no bytes
        UnsupportedDocumentError: too large (413) or disallowed type (415)
    """
    if not content:
        raise EmptyDocumentError("Document file is required")

    if len(content) > settings.max_upload_bytes:
        raise UnsupportedDocumentError(
            f"File too large. Maximum {settings.max_upload_bytes // (1024 * 1024)}MB.",
            details={"status_code": 413, "size_bytes": len(content)}
        )

    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type not in settings.allowed_content_type_list():
        raise UnsupportedDocumentError(
            "Invalid file type. Only PDF or images are allowed.",
            details={"status_code": 415, "content_type": media_type}
        )


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(
    request: Request,
    file: UploadFile = File(None),
    analyzer: DocumentAnalyzer = Depends(get_document_analyzer),
):
    """
    Extract vendor, customer, dates, totals, currency and line items from a document.

    Accepts either:
    - multipart/form-data (file upload via form field "file")
    - application/pdf, image/* (raw binary body)
    """
    if file:
        content = await file.read()
        content_type = file.content_type
    else:
        content = await request.body()
        content_type = request.headers.get("content-type")

    try:
        validate_upload(content, content_type)
        return await run_in_threadpool(analyzer, content)
    except EmptyDocumentError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except UnsupportedDocumentError as e:
        raise HTTPException(status_code=e.details.get("status_code", 400), detail=e.message)
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=e.message)
    except AnalysisServiceError as e:
        logger.error(f"Document analysis failed: {e.message}")
        raise HTTPException(status_code=502, detail=e.message)
