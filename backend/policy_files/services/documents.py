# backend/policy_files/services/documents.py
from typing import Any, Dict, Iterable, List, Optional

from ..config import SIGNED_URL_TTL_SECONDS
from ..errors import (
    BackendError,
    DataIntegrityError,
    NotFoundError,
    PreviewBackendNotConfigured,
    StoreNotConfigured,
    ValidationError,
)
from ..models.document import Document, DocumentSource, DocumentStatus
from ..storage import StorageClient, firebase_media_url
from ..utils.logging import service_logger
from .store import DocumentStore, SourceStatusCount

UPLOAD_OR_OTHER = frozenset({DocumentSource.UPLOAD.value.lower(), DocumentSource.OTHER.value.lower()})
SCRAPED = frozenset({DocumentSource.SCRAPE.value.lower()})

UNKNOWN = "unknown"
PROCESSED_STATUS = DocumentStatus.PROCESSED.value
ANALYSED_STATUSES = frozenset({DocumentStatus.ANALYSED.value, DocumentStatus.ANALYZED.value})


def normalize_path(filename: str) -> str:
    return filename.lstrip("/")


def summarize_counts(rows: Iterable[SourceStatusCount]) -> Dict[str, Any]:
    """Fold (source, status, count) rows into per-source status counts and totals"""
    sources: Dict[str, Dict[str, Any]] = {}
    total_processed = 0
    total_analysed = 0
    total = 0

    for source, status, count in rows:
        source = source or UNKNOWN
        status = status or UNKNOWN
        count = count or 0
        total += count

        bucket = sources.setdefault(source, {"status": {}, "total": 0})
        bucket["status"][status] = bucket["status"].get(status, 0) + count
        bucket["total"] += count

        lowered = str(status).lower()
        if lowered == PROCESSED_STATUS:
            total_processed += count
        elif lowered in ANALYSED_STATUSES:
            total_analysed += count

    return {
        "sources": sources,
        "total_processed": total_processed,
        "total_analysed": total_analysed,
        "total": total
    }


class DocumentQueryService:
    """Read-only queries over the documents table plus preview URL derivation"""

    def __init__(
            self,
            store: Optional[DocumentStore],
            preview_storage: StorageClient,
            legacy_bucket: Optional[str] = None,
            signed_url_ttl: int = SIGNED_URL_TTL_SECONDS
    ):
        self.store = store
        self.preview_storage = preview_storage
        self.legacy_bucket = legacy_bucket
        self.signed_url_ttl = signed_url_ttl

    def _require_store(self) -> DocumentStore:
        if self.store is None:
            raise StoreNotConfigured()
        return self.store

    def list_by_project_filtered(self, project_id: str, sources: Iterable[str]) -> List[Document]:
        if not project_id:
            raise ValidationError("project_id is required")
        return self._require_store().query_by_project(project_id, sources)

    async def get_preview_url(self, document_id: str) -> str:
        if not document_id:
            raise ValidationError("document_id is required")
        document = self._require_store().query_by_id(document_id)
        if document is None:
            raise NotFoundError("document not found")
        if not document.filename:
            raise DataIntegrityError("Document filename not found in database")

        path = normalize_path(document.filename)

        if self.preview_storage.configured:
            try:
                return await self.preview_storage.signed_read_url(path, self.signed_url_ttl)
            except BackendError as e:
                service_logger.warning("Signed preview URL failed, using public URL", extra={
                    "document_id": document_id,
                    "backend": self.preview_storage.name,
                    "error": str(e)
                })
                return self.preview_storage.public_url(path)

        if self.legacy_bucket:
            return firebase_media_url(self.legacy_bucket, path)

        raise PreviewBackendNotConfigured()

    def get_summary(self, project_id: str) -> Dict[str, Any]:
        if not project_id:
            raise ValidationError("project_id is required")
        rows = self._require_store().aggregate_by_project_source_status(project_id)
        return summarize_counts(rows)
