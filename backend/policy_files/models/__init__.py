# backend/policy_files/models/__init__.py
from ..database import Base
from .document import Document, DocumentSource, DocumentStatus

__all__ = [
    "Base",
    "Document",
    "DocumentSource",
    "DocumentStatus"
]
