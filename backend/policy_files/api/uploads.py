# backend/policy_files/api/uploads.py
import time
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..dependencies import get_upload_orchestrator
from ..errors import PolicyFilesError
from ..schemas.upload import ErrorResponse, RecordedUploadResponse, UploadResponse
from ..services.upload import UploadOrchestrator
from ..utils.logging import api_logger

router = APIRouter(tags=["uploads"])


@router.post(
    "/upload",
    response_model=Union[RecordedUploadResponse, UploadResponse],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Upload a file to object storage"
)
async def upload_file(
        file: Optional[UploadFile] = File(None),
        project_id: Optional[str] = Form(None),
        orchestrator: UploadOrchestrator = Depends(get_upload_orchestrator)
):
    """Store the file on the primary backend, or on the fallback backend with a document record.

    Only the fallback path creates a document row, so only that response
    carries `document_id`.
    """
    api_logger.info("Received upload", extra={
        "original_name": file.filename if file else None,
        "project_id": project_id
    })

    try:
        start_time = time.time()
        file_bytes = await file.read() if file is not None else None
        outcome = await orchestrator.handle_upload(
            file_bytes,
            file.filename if file is not None else None,
            file.content_type if file is not None else None,
            project_id
        )

        api_logger.info("Upload complete", extra={
            "stored_name": outcome.stored_name,
            "backend": outcome.backend.value,
            "document_id": outcome.document_id,
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })

    except PolicyFilesError as e:
        api_logger.error("Upload failed", extra={
            "project_id": project_id,
            "error_type": type(e).__name__,
            "error": str(e)
        })
        raise

    if outcome.document_id is None:
        return UploadResponse(name=outcome.stored_name, url=outcome.url)
    return RecordedUploadResponse(document_id=outcome.document_id, name=outcome.stored_name, url=outcome.url)
