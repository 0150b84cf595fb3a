# backend/policy_files/storage/firebase.py
import asyncio
import base64
import binascii
import json
from datetime import timedelta
from typing import Optional
from urllib.parse import quote

import firebase_admin
from firebase_admin import credentials, storage
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

from ..config import Settings
from ..errors import SignedUrlFailed, StorageWriteFailed
from ..utils.logging import storage_logger
from .base import StorageClient, UnconfiguredStorage

FIREBASE_APP_NAME = "policy-files"
NOT_INITIALIZED = (
    "Firebase Storage not initialized. "
    "Set FIREBASE_SERVICE_ACCOUNT or FIREBASE_SERVICE_ACCOUNT_PATH."
)


def firebase_media_url(bucket_name: str, path: str) -> str:
    """Direct download URL served by the Firebase Storage REST endpoint"""
    return f"https://firebasestorage.googleapis.com/v0/b/{bucket_name}/o/{quote(path, safe='')}?alt=media"


def load_service_account(settings: Settings) -> Optional[dict]:
    """Read service account JSON from the base64 env value or from a file path.

    Malformed input is logged and treated as absent so that the upload path
    can still fall back to the secondary backend.
    """
    try:
        if settings.FIREBASE_SERVICE_ACCOUNT:
            raw = base64.b64decode(settings.FIREBASE_SERVICE_ACCOUNT).decode("utf-8")
            return json.loads(raw)
        if settings.FIREBASE_SERVICE_ACCOUNT_PATH:
            with open(settings.FIREBASE_SERVICE_ACCOUNT_PATH, "r", encoding="utf-8") as f:
                return json.load(f)
    except (binascii.Error, UnicodeDecodeError, ValueError, OSError) as e:
        storage_logger.warning("Invalid Firebase service account", extra={"error": str(e)})
    return None


class FirebaseStorage(StorageClient):
    """Primary backend: a Firebase (Google Cloud Storage) bucket"""

    def __init__(self, bucket):
        super().__init__("firebase")
        self.bucket = bucket

    @property
    def bucket_name(self) -> str:
        return self.bucket.name

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        blob = self.bucket.blob(path)
        try:
            await asyncio.to_thread(blob.upload_from_string, data, content_type=content_type)
        except (GoogleAPIError, GoogleAuthError, OSError) as e:
            raise StorageWriteFailed(str(e), backend=self.name) from e
        except Exception as e:
            # Resumable-upload and transport errors sit outside the google hierarchy;
            # any of them must still hand the upload over to the fallback
            storage_logger.error("Unexpected Firebase upload error", extra={
                "stored_name": path,
                "backend": self.name,
                "error_type": type(e).__name__
            }, exc_info=True)
            raise StorageWriteFailed(str(e), backend=self.name) from e

    async def signed_read_url(self, path: str, ttl: int) -> str:
        blob = self.bucket.blob(path)
        try:
            return await asyncio.to_thread(
                blob.generate_signed_url,
                version="v4",
                expiration=timedelta(seconds=ttl),
                method="GET"
            )
        except Exception as e:
            raise SignedUrlFailed(str(e), backend=self.name) from e

    def public_url(self, path: str) -> str:
        return firebase_media_url(self.bucket_name, path)


def build_firebase_storage(settings: Settings) -> StorageClient:
    service_account = load_service_account(settings)
    if not service_account:
        return UnconfiguredStorage("firebase", NOT_INITIALIZED)

    try:
        app = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        try:
            certificate = credentials.Certificate(service_account)
        except ValueError as e:
            storage_logger.warning("Rejected Firebase service account", extra={"error": str(e)})
            return UnconfiguredStorage("firebase", NOT_INITIALIZED)
        app = firebase_admin.initialize_app(
            certificate,
            {"storageBucket": settings.firebase_bucket_name},
            name=FIREBASE_APP_NAME
        )

    storage_logger.info("Firebase storage configured", extra={"bucket": settings.firebase_bucket_name})
    return FirebaseStorage(storage.bucket(app=app))
