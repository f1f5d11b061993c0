# ABOUTME: Content store collaborators answering exists/fetch point queries by path
# ABOUTME: Exposes the store protocol, its error types, and the loose-file implementation

from .base import (
    ContentStore,
    ResourceNotFound,
    ResourceReadError,
    StoreError,
    StoreUnavailableError,
    VoicelineExtractorError,
)
from .loose import LooseFileStore

__all__ = [
    "ContentStore",
    "LooseFileStore",
    "ResourceNotFound",
    "ResourceReadError",
    "StoreError",
    "StoreUnavailableError",
    "VoicelineExtractorError",
]
