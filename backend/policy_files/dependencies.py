# backend/policy_files/dependencies.py
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .backends import StorageBackends, get_storage_backends
from .database import get_db
from .services.documents import DocumentQueryService
from .services.store import DocumentStore
from .services.upload import UploadOrchestrator


def get_document_store(db: Optional[Session] = Depends(get_db)) -> Optional[DocumentStore]:
    """None when no DATABASE_URL is configured"""
    return DocumentStore(db) if db is not None else None


def get_upload_orchestrator(
        backends: StorageBackends = Depends(get_storage_backends),
        store: Optional[DocumentStore] = Depends(get_document_store)
) -> UploadOrchestrator:
    return UploadOrchestrator(
        primary=backends.primary,
        fallback=backends.fallback,
        store=store
    )


def get_query_service(
        backends: StorageBackends = Depends(get_storage_backends),
        store: Optional[DocumentStore] = Depends(get_document_store)
) -> DocumentQueryService:
    return DocumentQueryService(
        store=store,
        preview_storage=backends.fallback,
        legacy_bucket=backends.legacy_bucket
    )
