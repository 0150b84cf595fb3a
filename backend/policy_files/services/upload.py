# backend/policy_files/services/upload.py
import enum
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import SIGNED_URL_TTL_SECONDS
from ..errors import (
    ConfigurationError,
    BackendError,
    DatabaseNotConfigured,
    MissingProjectId,
    NoFileProvided,
)
from ..models.document import Document, DocumentSource, DocumentStatus
from ..storage import StorageClient
from ..utils.logging import service_logger
from .store import DocumentStore


class StorageBackend(str, enum.Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass
class StoredObject:
    """Which backend accepted the bytes, and where to read them back"""
    backend: StorageBackend
    stored_name: str
    url: str


@dataclass
class UploadOutcome:
    backend: StorageBackend
    stored_name: str
    url: str
    document_id: Optional[str] = None


def build_stored_name(original_name: str, now: float) -> str:
    """Storage key: millisecond epoch timestamp, underscore, original file name"""
    return f"{int(now * 1000)}_{original_name}"


class UploadOrchestrator:
    """Writes an upload to the primary backend, or the fallback plus a document row.

    A primary write is never recorded in the documents table. Only the
    fallback branch associates the object with a project and persists a
    row, and it does so after the object write, so a failure at that point
    leaves an orphan object behind.
    """

    def __init__(
            self,
            primary: StorageClient,
            fallback: StorageClient,
            store: Optional[DocumentStore],
            signed_url_ttl: int = SIGNED_URL_TTL_SECONDS,
            clock: Callable[[], float] = time.time
    ):
        self.primary = primary
        self.fallback = fallback
        self.store = store
        self.signed_url_ttl = signed_url_ttl
        self.clock = clock

    async def handle_upload(
            self,
            file_bytes: Optional[bytes],
            original_name: Optional[str],
            mime_type: Optional[str],
            project_id: Optional[str]
    ) -> UploadOutcome:
        if not file_bytes or not original_name:
            raise NoFileProvided()

        stored_name = build_stored_name(original_name, self.clock())
        stored = await self._store_object(stored_name, file_bytes, mime_type)

        if stored.backend is StorageBackend.PRIMARY:
            service_logger.info("Upload stored on primary backend, no document row", extra={
                "stored_name": stored_name,
                "backend": self.primary.name
            })
            return UploadOutcome(stored.backend, stored.stored_name, stored.url)

        document = self._record_document(stored, original_name, project_id)
        return UploadOutcome(stored.backend, stored.stored_name, stored.url, document_id=document.id)

    async def _store_object(self, stored_name: str, file_bytes: bytes, mime_type: Optional[str]) -> StoredObject:
        try:
            await self.primary.put(stored_name, file_bytes, mime_type)
        except (BackendError, ConfigurationError) as primary_error:
            if not self.fallback.configured:
                service_logger.error("Primary storage failed and no fallback configured", extra={
                    "stored_name": stored_name,
                    "backend": self.primary.name,
                    "error": str(primary_error)
                })
                raise

            service_logger.warning("Primary storage failed, using fallback", extra={
                "stored_name": stored_name,
                "primary": self.primary.name,
                "fallback": self.fallback.name,
                "error": str(primary_error)
            })
            await self.fallback.put(stored_name, file_bytes, mime_type)
            url = await self.fallback.signed_read_url(stored_name, self.signed_url_ttl)
            return StoredObject(StorageBackend.FALLBACK, stored_name, url)

        url = await self.primary.signed_read_url(stored_name, self.signed_url_ttl)
        return StoredObject(StorageBackend.PRIMARY, stored_name, url)

    def _record_document(self, stored: StoredObject, original_name: str, project_id: Optional[str]) -> Document:
        # The object already exists at this point; failures below leave it in place
        if not project_id:
            service_logger.warning("Upload stored without project_id", extra={"stored_name": stored.stored_name})
            raise MissingProjectId()
        if self.store is None:
            raise DatabaseNotConfigured()

        return self.store.insert_document(Document(
            project_id=project_id,
            filename=original_name,
            file_path=stored.stored_name,
            source=DocumentSource.UPLOAD.value,
            status=DocumentStatus.PENDING.value,
            document_content=None
        ))
