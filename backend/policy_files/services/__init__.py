# backend/policy_files/services/__init__.py
from .store import DocumentStore
from .upload import UploadOrchestrator, UploadOutcome, StorageBackend
from .documents import DocumentQueryService, summarize_counts

__all__ = [
    "DocumentStore",
    "UploadOrchestrator",
    "UploadOutcome",
    "StorageBackend",
    "DocumentQueryService",
    "summarize_counts"
]
