# backend/policy_files/errors.py
from typing import Optional


class PolicyFilesError(Exception):
    """Base class for errors surfaced to API clients as {"error": message}"""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PolicyFilesError):
    status_code = 400


class NoFileProvided(ValidationError):
    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message)


class MissingProjectId(ValidationError):
    def __init__(self, message: str = "project_id is required"):
        super().__init__(message)


class NotFoundError(PolicyFilesError):
    status_code = 404


class ConfigurationError(PolicyFilesError):
    status_code = 500


class DatabaseNotConfigured(ConfigurationError):
    def __init__(self, message: str = "DATABASE_URL not configured"):
        super().__init__(message)


StoreNotConfigured = DatabaseNotConfigured


class PreviewBackendNotConfigured(ConfigurationError):
    def __init__(self, message: str = "Storage not configured for preview URL generation"):
        super().__init__(message)


class BackendError(PolicyFilesError):
    """Failure reported by a storage backend or the database, message passed through"""
    status_code = 500

    def __init__(self, message: str, backend: Optional[str] = None):
        super().__init__(message)
        self.backend = backend


class StorageWriteFailed(BackendError):
    pass


class SignedUrlFailed(BackendError):
    pass


class DatabaseInsertFailed(BackendError):
    pass


class DataIntegrityError(PolicyFilesError):
    """A stored row is missing data required to act on it"""
    status_code = 500
