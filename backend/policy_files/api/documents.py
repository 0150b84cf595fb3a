# backend/policy_files/api/documents.py
import time

from fastapi import APIRouter, Depends

from ..dependencies import get_query_service
from ..errors import PolicyFilesError
from ..schemas.document import (
    Document as DocumentSchema,
    DocumentList,
    DocumentSummary,
    PreviewUrl,
    ScrapedDocument,
    ScrapedDocumentList,
)
from ..schemas.upload import ErrorResponse
from ..services.documents import SCRAPED, UPLOAD_OR_OTHER, DocumentQueryService
from ..utils.logging import api_logger

router = APIRouter(prefix="/documents", tags=["documents"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get(
    "/project/{project_id}/upload-or-other",
    response_model=DocumentList,
    responses=ERROR_RESPONSES,
    summary="Retrieve documents for a project where source is Upload or Other"
)
async def list_uploaded_documents(project_id: str, service: DocumentQueryService = Depends(get_query_service)):
    api_logger.info("Listing uploaded documents", extra={
        "project_id": project_id,
        "operation": "list_uploaded_documents"
    })

    try:
        start_time = time.time()
        documents = service.list_by_project_filtered(project_id, UPLOAD_OR_OTHER)

        api_logger.info("Listed uploaded documents", extra={
            "project_id": project_id,
            "document_count": len(documents),
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })
        return DocumentList(documents=[DocumentSchema.model_validate(d) for d in documents])

    except PolicyFilesError as e:
        api_logger.error("Error listing uploaded documents", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise


@router.get(
    "/project/{project_id}/scraped",
    response_model=ScrapedDocumentList,
    responses=ERROR_RESPONSES,
    summary="Retrieve documents for a project where source is Scrape"
)
async def list_scraped_documents(project_id: str, service: DocumentQueryService = Depends(get_query_service)):
    api_logger.info("Listing scraped documents", extra={
        "project_id": project_id,
        "operation": "list_scraped_documents"
    })

    try:
        start_time = time.time()
        documents = service.list_by_project_filtered(project_id, SCRAPED)

        api_logger.info("Listed scraped documents", extra={
            "project_id": project_id,
            "document_count": len(documents),
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })
        return ScrapedDocumentList(documents=[ScrapedDocument.model_validate(d) for d in documents])

    except PolicyFilesError as e:
        api_logger.error("Error listing scraped documents", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise


@router.get(
    "/scrape/{document_id}",
    response_model=PreviewUrl,
    responses=ERROR_RESPONSES,
    summary="Retrieve a preview URL for a document (scraped or uploaded)"
)
async def get_document_preview(document_id: str, service: DocumentQueryService = Depends(get_query_service)):
    api_logger.info("Building document preview URL", extra={"document_id": document_id})

    try:
        preview_url = await service.get_preview_url(document_id)
    except PolicyFilesError as e:
        api_logger.error("Error building preview URL", extra={
            "document_id": document_id,
            "error_type": type(e).__name__,
            "error": str(e)
        })
        raise

    return PreviewUrl(preview_url=preview_url)


@router.get(
    "/project/{project_id}/summary",
    response_model=DocumentSummary,
    responses=ERROR_RESPONSES,
    summary="Document summary counts by source and status for a project"
)
async def get_project_summary(project_id: str, service: DocumentQueryService = Depends(get_query_service)):
    api_logger.info("Summarizing project documents", extra={"project_id": project_id})

    try:
        summary = service.get_summary(project_id)
    except PolicyFilesError as e:
        api_logger.error("Error summarizing project documents", extra={
            "project_id": project_id,
            "error": str(e)
        })
        raise

    api_logger.debug("Project summary", extra={"project_id": project_id, "total": summary["total"]})
    return summary
