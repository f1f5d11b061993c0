# ABOUTME: Point-query interface for the game asset store and its error hierarchy
# ABOUTME: The store answers fetch-by-path only; there is no listing API to enumerate contents

from typing import Protocol


class VoicelineExtractorError(Exception):
    """Base exception for all voice line extraction errors."""

    pass


class StoreError(VoicelineExtractorError):
    """Base exception for content store failures."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when the content store cannot be opened at all."""

    pass


class ResourceNotFound(StoreError):
    """Raised when a path is absent from the store. Expected during probing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} not found in store")


class ResourceReadError(StoreError):
    """Raised when a path exists but its bytes could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} could not be read: {reason}")


class ContentStore(Protocol):
    """Protocol for a closed asset store that only answers point queries."""

    def exists(self, path: str) -> bool:
        """Return whether ``path`` resolves to a resource."""
        ...

    def fetch(self, path: str) -> bytes:
        """Return the bytes stored at ``path``.

        Raises:
            ResourceNotFound: If nothing is stored at the path
            ResourceReadError: If the resource exists but cannot be read
        """
        ...
