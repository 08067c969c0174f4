"""
Azure Blob Storage implementations of BlobStore.
"""

import logging
from datetime import timezone
from typing import List, Optional

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
)
from azure.storage.blob import BlobProperties
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from honeylog.config import Settings
from honeylog.exceptions import (
    BlobNotFound,
    StorageAuthError,
    StorageConfigError,
    StorageError,
)
from honeylog.models.blob import BlobDescriptor, ConnectionStatus
from honeylog.storage.base import BlobStore, run_with_timeout, sort_by_recency


logger = logging.getLogger(__name__)

# Azure caps a listing page at 5000; stay well below
MAX_PAGE_SIZE = 1000

AUTH_ERROR_CODES = {"InvalidAuthenticationInfo", "AuthenticationFailed", "AuthorizationFailure"}


def _descriptor(props: BlobProperties) -> BlobDescriptor:
    last_modified = props.last_modified
    if last_modified is not None and last_modified.tzinfo is None:
        last_modified = last_modified.replace(tzinfo=timezone.utc)
    return BlobDescriptor(
        name=props.name,
        last_modified=last_modified,
        size=props.size or 0,
    )


class AzureBlobStore(BlobStore):
    """
    Shared BlobStore logic over an async Azure ContainerClient.
    
    Subclasses only decide how the container client is built and how
    connectivity is checked.
    """
    
    def __init__(self, container_client: ContainerClient, settings: Settings):
        self.container_client = container_client
        self.container_name = settings.azure_container_name
        self.log_prefix = settings.azure_log_prefix
        self.list_timeout = settings.list_timeout_seconds
        self.download_timeout = settings.download_timeout_seconds
        self.debug_logs = settings.debug_logs
    
    async def list_blobs(self, prefix: str = "", max_results: int = 100) -> List[BlobDescriptor]:
        search_prefix = self.log_prefix + prefix
        if self.debug_logs:
            logger.debug("Listing blobs with prefix %r", search_prefix)
        
        async def _list() -> List[BlobDescriptor]:
            blobs = []
            pager = self.container_client.list_blobs(
                name_starts_with=search_prefix or None,
                results_per_page=min(max_results, MAX_PAGE_SIZE),
            )
            async for props in pager:
                blobs.append(_descriptor(props))
                if len(blobs) >= max_results:
                    break
            return blobs
        
        try:
            blobs = await run_with_timeout(_list(), self.list_timeout, "Blob listing")
        except AzureError as e:
            raise self._translate(e, f"Failed to list log files: {e}") from e
        
        logger.info("Found %d log files in container %s", len(blobs), self.container_name)
        return sort_by_recency(blobs)[:max_results]
    
    async def exists(self, name: str) -> bool:
        blob_client = self.container_client.get_blob_client(name)
        try:
            return await run_with_timeout(
                blob_client.exists(), self.list_timeout, f"Existence check of '{name}'"
            )
        except AzureError as e:
            raise self._translate(e, f"Failed to check '{name}': {e}") from e
    
    async def get_metadata(self, name: str) -> BlobDescriptor:
        blob_client = self.container_client.get_blob_client(name)
        try:
            props = await run_with_timeout(
                blob_client.get_blob_properties(), self.list_timeout, f"Metadata of '{name}'"
            )
        except AzureError as e:
            raise self._translate(e, f"Failed to read metadata of '{name}': {e}") from e
        return _descriptor(props)
    
    async def download(self, name: str) -> bytes:
        blob_client = self.container_client.get_blob_client(name)
        
        async def _download() -> bytes:
            downloader = await blob_client.download_blob()
            return await downloader.readall()
        
        try:
            content = await run_with_timeout(
                _download(), self.download_timeout, f"Download of '{name}'"
            )
        except AzureError as e:
            raise self._translate(e, f"Failed to download log file '{name}': {e}") from e
        
        if self.debug_logs:
            logger.debug("Downloaded %s: %d bytes", name, len(content))
        return content
    
    async def close(self) -> None:
        await self.container_client.close()
    
    def _translate(self, error: AzureError, message: str) -> StorageError:
        """Map an Azure SDK error onto the honeylog error hierarchy."""
        code = getattr(error, "error_code", None)
        if isinstance(error, ResourceNotFoundError):
            if code == "ContainerNotFound":
                message = f"Container '{self.container_name}' not found. Check the container name."
            return BlobNotFound(message, code=code)
        if isinstance(error, ClientAuthenticationError) or code in AUTH_ERROR_CODES:
            return StorageAuthError(
                "Invalid Azure Storage credentials. Check the connection string or SAS URL.",
                code=code,
            )
        if isinstance(error, HttpResponseError) and error.status_code == 403:
            return StorageAuthError(message, code=code)
        return StorageError(message, code=code)
    
    def _error_status(self, error: AzureError) -> ConnectionStatus:
        translated = self._translate(error, str(error))
        return ConnectionStatus(
            status="error",
            connection_type=self.connection_type,
            container=self.container_name,
            message=translated.message,
            code=translated.code,
        )


class ConnectionStringBlobStore(AzureBlobStore):
    """BlobStore authenticated with a storage account connection string."""
    
    connection_type = "connection_string"
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionStringBlobStore":
        try:
            service = BlobServiceClient.from_connection_string(
                settings.azure_storage_connection_string
            )
        except ValueError as e:
            raise StorageConfigError(f"Azure Storage configuration error: {e}") from e
        container = service.get_container_client(settings.azure_container_name)
        logger.info("Using Azure Storage via connection string, container %s",
                    settings.azure_container_name)
        return cls(container, settings)
    
    async def test_connection(self) -> ConnectionStatus:
        try:
            props = await run_with_timeout(
                self.container_client.get_container_properties(),
                self.list_timeout,
                "Container properties",
            )
        except AzureError as e:
            logger.error("Azure Storage connection test failed: %s", e)
            return self._error_status(e)
        
        return ConnectionStatus(
            status="connected",
            connection_type=self.connection_type,
            container=self.container_name,
            last_modified=props.last_modified,
            etag=props.etag,
        )


class SasUrlBlobStore(AzureBlobStore):
    """
    BlobStore using a container SAS URL (delegated access).
    
    A SAS token may lack container-level read permission, so connectivity
    is checked with a one-item listing rather than a properties fetch.
    """
    
    connection_type = "sas_url"
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "SasUrlBlobStore":
        try:
            container = ContainerClient.from_container_url(settings.azure_sas_url)
        except ValueError as e:
            raise StorageConfigError(f"Azure Storage configuration error: {e}") from e
        logger.info("Using Azure Storage via SAS URL, account %s",
                    container.account_name)
        store = cls(container, settings)
        store.container_name = container.container_name
        return store
    
    async def test_connection(self) -> ConnectionStatus:
        async def _probe() -> bool:
            pager = self.container_client.list_blobs(results_per_page=1)
            async for _ in pager:
                return True
            return False
        
        try:
            has_blobs = await run_with_timeout(_probe(), self.list_timeout, "Blob listing")
        except AzureError as e:
            logger.error("Azure Storage connection test failed: %s", e)
            return self._error_status(e)
        
        return ConnectionStatus(
            status="connected",
            connection_type=self.connection_type,
            container=self.container_name,
            has_blobs=has_blobs,
            message="Connected via SAS URL",
        )


def create_blob_store(settings: Settings) -> BlobStore:
    """
    Build the production BlobStore for the configured credentials.
    
    The connection string wins when both credentials are set.
    
    Raises:
        StorageConfigError: If neither credential is configured
    """
    if settings.azure_storage_connection_string:
        return ConnectionStringBlobStore.from_settings(settings)
    if settings.azure_sas_url:
        return SasUrlBlobStore.from_settings(settings)
    raise StorageConfigError(
        "No blob storage credentials configured. Set AZURE_STORAGE_CONNECTION_STRING "
        "or AZURE_SAS_URL."
    )
