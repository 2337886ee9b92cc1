"""In-process blob store for dry runs and tests."""

from __future__ import annotations

from ..core.dates import utc_now
from .base import BlobMetadata, BlobNotFound


class MemoryBlobStore:
    """Keeps objects in a dict. Nothing survives the process."""

    def __init__(self, base_url: str = "memory://") -> None:
        self.base_url = base_url
        self._objects: dict[str, bytes] = {}
        self._meta: dict[str, BlobMetadata] = {}

    def exists(self, key: str) -> bool:
        return key in self._objects

    def get(self, key: str) -> bytes:
        try:
            return self._objects[key]
        except KeyError:
            raise BlobNotFound(key) from None

    def put(self, key: str, data: bytes, content_type: str, cache_control: str | None = None) -> None:
        self._objects[key] = bytes(data)
        self._meta[key] = BlobMetadata(
            key=key,
            size=len(data),
            updated=utc_now(),
            content_type=content_type,
            cache_control=cache_control,
        )

    def metadata(self, key: str) -> BlobMetadata:
        if key not in self._meta:
            raise BlobNotFound(key)
        return self._meta[key]

    def make_public(self, key: str) -> None:
        if key not in self._meta:
            raise BlobNotFound(key)
        self._meta[key].public = True

    def public_url(self, key: str) -> str:
        return f"{self.base_url}{key}"

    def keys(self) -> list[str]:
        return sorted(self._objects)
