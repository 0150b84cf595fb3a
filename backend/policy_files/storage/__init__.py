# backend/policy_files/storage/__init__.py
from .base import StorageClient, UnconfiguredStorage
from .firebase import FirebaseStorage, build_firebase_storage, firebase_media_url
from .supabase import SupabaseStorage, build_supabase_storage

__all__ = [
    "StorageClient",
    "UnconfiguredStorage",
    "FirebaseStorage",
    "SupabaseStorage",
    "build_firebase_storage",
    "build_supabase_storage",
    "firebase_media_url"
]
