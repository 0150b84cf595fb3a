# backend/policy_files/services/store.py
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ..errors import BackendError, DatabaseInsertFailed
from ..models.document import Document
from ..utils.logging import db_logger

SourceStatusCount = Tuple[Optional[str], Optional[str], int]


class DocumentStore:
    """Access to the documents table through a request-scoped session"""

    def __init__(self, db: Session):
        self.db = db

    def insert_document(self, document: Document) -> Document:
        try:
            self.db.add(document)
            self.db.commit()
            self.db.refresh(document)
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error("Document insert failed", extra={
                "project_id": document.project_id,
                "file_path": document.file_path,
                "error": str(e)
            })
            raise DatabaseInsertFailed(str(e), backend="database") from e

        db_logger.info("Document inserted", extra={
            "document_id": document.id,
            "project_id": document.project_id
        })
        return document

    def query_by_project(self, project_id: str, sources: Iterable[str]) -> List[Document]:
        wanted = sorted({s.lower() for s in sources})
        try:
            return self.db.query(Document) \
                .filter(Document.project_id == project_id) \
                .filter(func.lower(Document.source).in_(wanted)) \
                .order_by(Document.filename) \
                .all()
        except SQLAlchemyError as e:
            raise BackendError(str(e), backend="database") from e

    def query_by_id(self, document_id: str) -> Optional[Document]:
        try:
            return self.db.query(Document).filter(Document.id == document_id).first()
        except SQLAlchemyError as e:
            raise BackendError(str(e), backend="database") from e

    def aggregate_by_project_source_status(self, project_id: str) -> List[SourceStatusCount]:
        try:
            rows = self.db.query(Document.source, Document.status, func.count(Document.id)) \
                .filter(Document.project_id == project_id) \
                .group_by(Document.source, Document.status) \
                .all()
        except SQLAlchemyError as e:
            raise BackendError(str(e), backend="database") from e
        return [(source, status, int(count)) for source, status, count in rows]
