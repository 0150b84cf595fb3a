# backend/policy_files/config.py
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Lifetime of every signed read URL handed to clients, in seconds
SIGNED_URL_TTL_SECONDS = 3600


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None  # No relational store when unset

    # Primary storage (Firebase)
    FIREBASE_SERVICE_ACCOUNT: Optional[str] = None  # base64 encoded service account JSON
    FIREBASE_SERVICE_ACCOUNT_PATH: Optional[Path] = None
    FIREBASE_STORAGE_BUCKET: Optional[str] = None
    FIREBASE_DEFAULT_BUCKET: str = "policy-file"

    # Fallback storage (Supabase, S3 protocol)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_BUCKET: Optional[str] = None
    SUPABASE_S3_ACCESS_KEY_ID: Optional[str] = None
    SUPABASE_S3_SECRET_ACCESS_KEY: Optional[str] = None
    SUPABASE_S3_REGION: str = "us-east-1"

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "*"  # comma separated

    # Local paths (logs)
    STORAGE_PATH: Path = Path("storage")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def cors_origins(self) -> List[str]:
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    @property
    def firebase_bucket_name(self) -> str:
        return self.FIREBASE_STORAGE_BUCKET or self.FIREBASE_DEFAULT_BUCKET

    @property
    def supabase_configured(self) -> bool:
        return all([
            self.SUPABASE_URL,
            self.SUPABASE_BUCKET,
            self.SUPABASE_S3_ACCESS_KEY_ID,
            self.SUPABASE_S3_SECRET_ACCESS_KEY,
        ])

    def model_post_init(self, __context) -> None:
        """Post initialization hook to create the local storage directory"""
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)
        self.STORAGE_PATH.mkdir(parents=True, exist_ok=True)


settings = Settings()
