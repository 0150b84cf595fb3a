# backend/policy_files/schemas/__init__.py
from .document import (
    Document, ScrapedDocument, DocumentList, ScrapedDocumentList,
    PreviewUrl, SourceSummary, DocumentSummary
)
from .upload import UploadResponse, RecordedUploadResponse, ErrorResponse

__all__ = [
    "Document", "ScrapedDocument", "DocumentList", "ScrapedDocumentList",
    "PreviewUrl", "SourceSummary", "DocumentSummary",
    "UploadResponse", "RecordedUploadResponse", "ErrorResponse"
]
