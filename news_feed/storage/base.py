"""
Blob store interface used by the persistence gateway.

The store is a flat key -> bytes namespace with per-object metadata. It only
offers get/put: there are no transactions or conditional writes, so callers
must not run two writers for the same key concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class StorageError(Exception):
    """A blob store operation failed or returned unusable data."""


class BlobNotFound(StorageError):
    """The requested key does not exist."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No object stored at {key}")
        self.key = key


@dataclass
class BlobMetadata:
    """Metadata recorded alongside a stored object.

    Attributes:
        key: Object key
        size: Payload size in bytes
        updated: Last write time (UTC)
        content_type: Content type given on write
        cache_control: Cache-Control given on write
        public: Whether make_public has been called since the last write
    """
    key: str
    size: int
    updated: datetime
    content_type: str = "application/octet-stream"
    cache_control: str | None = None
    public: bool = False


class BlobStore(Protocol):
    def exists(self, key: str) -> bool: ...

    def get(self, key: str) -> bytes: ...

    def put(self, key: str, data: bytes, content_type: str, cache_control: str | None = None) -> None: ...

    def metadata(self, key: str) -> BlobMetadata: ...

    def make_public(self, key: str) -> None: ...

    def public_url(self, key: str) -> str: ...
