"""
Blob storage access.
"""

from honeylog.storage.base import BlobStore, run_with_timeout
from honeylog.storage.azure_store import (
    ConnectionStringBlobStore,
    SasUrlBlobStore,
    create_blob_store,
)

__all__ = [
    "BlobStore",
    "run_with_timeout",
    "ConnectionStringBlobStore",
    "SasUrlBlobStore",
    "create_blob_store",
]
