# backend/policy_files/schemas/document.py
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field

from .base import BaseSchema, TimestampMixin

class Document(BaseSchema, TimestampMixin):
    id: str
    project_id: str
    filename: Optional[str] = None
    file_path: Optional[str] = None
    source: Optional[str] = None
    status: Optional[str] = None
    document_content: Optional[str] = None

class ScrapedDocument(BaseSchema, TimestampMixin):
    id: str
    file_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("filename", "file_name"))
    status: Optional[str] = None

class DocumentList(BaseModel):
    documents: List[Document]

class ScrapedDocumentList(BaseModel):
    documents: List[ScrapedDocument]

class PreviewUrl(BaseModel):
    preview_url: str

class SourceSummary(BaseModel):
    status: Dict[str, int]
    total: int

class DocumentSummary(BaseModel):
    sources: Dict[str, SourceSummary]
    total_processed: int
    total_analysed: int
    total: int
