"""
Abstract blob store interface.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, List, TypeVar

from honeylog.exceptions import RetrievalTimeout
from honeylog.models.blob import BlobDescriptor, ConnectionStatus


T = TypeVar("T")


async def run_with_timeout(operation: Awaitable[T], seconds: float, what: str) -> T:
    """
    Await an operation under a wall-clock deadline.
    
    The operation is cancelled when the deadline passes, so nothing it
    accumulated is handed back to the caller.
    
    Raises:
        RetrievalTimeout: If the deadline passes first
    """
    try:
        return await asyncio.wait_for(operation, timeout=seconds)
    except asyncio.TimeoutError:
        raise RetrievalTimeout(f"{what} timed out after {seconds:g}s") from None


class BlobStore(ABC):
    """
    Read-only access to a container of log blobs.
    
    Implementations are safe to share across concurrent requests. Each
    method raises a honeylog StorageError subclass on failure, never an
    SDK exception.
    """
    
    connection_type: str = "unknown"
    container_name: str = ""
    
    @abstractmethod
    async def list_blobs(self, prefix: str = "", max_results: int = 100) -> List[BlobDescriptor]:
        """
        List blobs under a name prefix.
        
        Args:
            prefix: Name prefix, appended to the store's configured prefix
            max_results: Stop after this many blobs
            
        Returns:
            Descriptors ordered by last_modified, most recent first
        """
        pass
    
    @abstractmethod
    async def exists(self, name: str) -> bool:
        """Check whether a blob exists."""
        pass
    
    @abstractmethod
    async def get_metadata(self, name: str) -> BlobDescriptor:
        """
        Fetch size and last-modified time of one blob.
        
        Raises:
            BlobNotFound: If the blob does not exist
        """
        pass
    
    @abstractmethod
    async def download(self, name: str) -> bytes:
        """
        Download the full content of one blob.
        
        Raises:
            BlobNotFound: If the blob does not exist
        """
        pass
    
    @abstractmethod
    async def test_connection(self) -> ConnectionStatus:
        """Check connectivity. Reports failures in the status, does not raise."""
        pass
    
    async def close(self) -> None:
        """Release network resources."""
        return None


def sort_by_recency(blobs: List[BlobDescriptor]) -> List[BlobDescriptor]:
    """Order descriptors most recently modified first."""
    return sorted(blobs, key=lambda b: b.last_modified, reverse=True)
