"""
Filesystem blob store.

Each object is a file under the root directory, with its metadata in a JSON
sidecar next to it (``<key>.meta.json``). Writes go to a temporary file first
and are moved into place, so a reader never sees a half-written payload.
"""

from __future__ import annotations

from datetime import datetime
import json
import os
from pathlib import Path

from ..core.dates import format_timestamp, parse_timestamp, utc_now
from .base import BlobMetadata, BlobNotFound, StorageError


META_SUFFIX = ".meta.json"


class LocalBlobStore:
    """Blob store backed by a local directory.

    Args:
        root: Directory holding the objects (created on first write)
        public_base_url: Base URL for public links; defaults to a file:// URL
    """

    def __init__(self, root: str | Path, public_base_url: str | None = None) -> None:
        self.root = Path(root).expanduser()
        self.public_base_url = public_base_url

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def get(self, key: str) -> bytes:
        path = self._path(key)
        if not path.is_file():
            raise BlobNotFound(key)
        return path.read_bytes()

    def put(self, key: str, data: bytes, content_type: str, cache_control: str | None = None) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_atomic(path, data)
        meta = {
            "size": len(data),
            "updated": format_timestamp(utc_now()),
            "content_type": content_type,
            "cache_control": cache_control,
            "public": False,
        }
        self._write_meta(key, meta)

    def metadata(self, key: str) -> BlobMetadata:
        if not self.exists(key):
            raise BlobNotFound(key)
        meta = self._read_meta(key)
        updated = parse_timestamp(meta.get("updated")) if meta else None
        if updated is None:
            stat = self._path(key).stat()
            updated = datetime.fromtimestamp(stat.st_mtime).astimezone()
        return BlobMetadata(
            key=key,
            size=self._path(key).stat().st_size,
            updated=updated,
            content_type=meta.get("content_type", "application/octet-stream"),
            cache_control=meta.get("cache_control"),
            public=bool(meta.get("public", False)),
        )

    def make_public(self, key: str) -> None:
        if not self.exists(key):
            raise BlobNotFound(key)
        meta = self._read_meta(key)
        meta["public"] = True
        self._write_meta(key, meta)

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        return self._path(key).resolve().as_uri()

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        root = self.root.resolve()
        if root != path and root not in path.parents:
            raise StorageError(f"Key escapes store root: {key}")
        return path

    def _meta_path(self, key: str) -> Path:
        path = self._path(key)
        return path.with_name(path.name + META_SUFFIX)

    def _read_meta(self, key: str) -> dict:
        meta_path = self._meta_path(key)
        if not meta_path.exists():
            return {}
        try:
            with open(meta_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError:
            return {}
        return raw if isinstance(raw, dict) else {}

    def _write_meta(self, key: str, meta: dict) -> None:
        payload = json.dumps(meta, indent=2, ensure_ascii=False).encode("utf-8")
        _write_atomic(self._meta_path(key), payload)


def _write_atomic(path: Path, data: bytes) -> None:
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_bytes(data)
    os.replace(tmp_path, path)
