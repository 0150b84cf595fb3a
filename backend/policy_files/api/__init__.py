# backend/policy_files/api/__init__.py
from .uploads import router as uploads_router
from .documents import router as documents_router

__all__ = ["uploads_router", "documents_router"]
