"""
Dataset persistence.

This package holds the blob store interface and backends, the dataset wire
codec, and the gateway implementing read-merge-write-verify.
"""

from .base import BlobMetadata, BlobNotFound, BlobStore, StorageError
from .codec import decode_dataset, encode_dataset
from .gateway import DatasetGateway, PublishOutcome, create_store
from .local import LocalBlobStore
from .memory import MemoryBlobStore

__all__ = [
    "BlobMetadata",
    "BlobNotFound",
    "BlobStore",
    "StorageError",
    "decode_dataset",
    "encode_dataset",
    "DatasetGateway",
    "PublishOutcome",
    "create_store",
    "LocalBlobStore",
    "MemoryBlobStore",
]
