# backend/policy_files/models/document.py
import enum
import uuid

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from ..database import Base


class DocumentSource(str, enum.Enum):
    UPLOAD = "Upload"
    SCRAPE = "Scrape"
    OTHER = "Other"


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    ANALYSED = "analysed"
    # Alternate spelling written by the analysis pipeline
    ANALYZED = "analyzed"


def _new_document_id() -> str:
    return str(uuid.uuid4())


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=_new_document_id)
    project_id = Column(String(255), nullable=False, index=True)
    filename = Column(String(1024), nullable=True)
    file_path = Column(String(1024), nullable=True)
    # Source and status are stored as given; comparisons lower-case both sides
    source = Column(String(50), nullable=True)
    status = Column(String(50), nullable=True)
    document_content = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
