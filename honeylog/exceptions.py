"""
Exception hierarchy for storage and retrieval failures.

Every error carries the HTTP status the API layer answers with, so route
handlers never have to inspect SDK-specific exceptions.
"""

from typing import Optional


class HoneylogError(Exception):
    """Base class for all honeylog errors."""
    
    status_code: int = 500
    error: str = "internal_error"
    
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class StorageError(HoneylogError):
    """A blob-store operation failed."""
    
    status_code = 502
    error = "storage_error"


class StorageConfigError(StorageError):
    """No usable blob-store credentials were configured."""
    
    status_code = 503
    error = "storage_not_configured"


class StorageAuthError(StorageError):
    """The blob store rejected the configured credentials."""
    
    status_code = 503
    error = "storage_auth_failed"


class BlobNotFound(StorageError):
    """A named blob or the container does not exist."""
    
    status_code = 404
    error = "not_found"


class RetrievalTimeout(StorageError):
    """A listing or download exceeded its deadline. Safe to retry."""
    
    status_code = 504
    error = "retrieval_timeout"


class RetrievalFailed(StorageError):
    """Every selected file in a multi-file fetch failed."""
    
    status_code = 502
    error = "retrieval_failed"
