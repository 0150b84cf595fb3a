# backend/policy_files/storage/base.py
import abc

from ..errors import ConfigurationError


class StorageClient(abc.ABC):
    """Abstract base class for object storage backends"""

    configured = True

    def __init__(self, name: str):
        self.name = name

    @abc.abstractmethod
    async def put(self, path: str, data: bytes, content_type: str) -> None:
        """Write an object, raising StorageWriteFailed on failure"""
        pass

    @abc.abstractmethod
    async def signed_read_url(self, path: str, ttl: int) -> str:
        """Return a time-limited read URL, raising SignedUrlFailed on failure"""
        pass

    @abc.abstractmethod
    def public_url(self, path: str) -> str:
        """Build the public URL of an object without any network call"""
        pass

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class UnconfiguredStorage(StorageClient):
    """Stands in for a backend whose credentials were never provided"""

    configured = False

    def __init__(self, name: str, reason: str):
        super().__init__(name)
        self.reason = reason

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        raise ConfigurationError(self.reason)

    async def signed_read_url(self, path: str, ttl: int) -> str:
        raise ConfigurationError(self.reason)

    def public_url(self, path: str) -> str:
        raise ConfigurationError(self.reason)
