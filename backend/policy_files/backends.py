# backend/policy_files/backends.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .config import Settings
from .storage import StorageClient, build_firebase_storage, build_supabase_storage
from .utils.logging import storage_logger


@dataclass
class StorageBackends:
    """Storage handles built once at startup and shared by every request"""
    primary: StorageClient
    fallback: StorageClient
    # Bucket used for legacy Firebase media links when no preview backend is configured
    legacy_bucket: Optional[str] = None


def build_storage_backends(settings: Settings) -> StorageBackends:
    backends = StorageBackends(
        primary=build_firebase_storage(settings),
        fallback=build_supabase_storage(settings),
        legacy_bucket=settings.FIREBASE_STORAGE_BUCKET
    )
    storage_logger.info("Storage backends ready", extra={
        "primary": backends.primary.name,
        "primary_configured": backends.primary.configured,
        "fallback": backends.fallback.name,
        "fallback_configured": backends.fallback.configured,
        "legacy_bucket": backends.legacy_bucket
    })
    return backends


def get_storage_backends(request: Request) -> StorageBackends:
    return request.app.state.backends
