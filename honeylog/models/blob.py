"""
Blob storage and retrieval result models.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes to camelCase JSON for the dashboard."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BlobDescriptor(CamelModel):
    """A listed log object. Used for selection only, never mutated."""
    
    model_config = ConfigDict(frozen=True)
    
    name: str = Field(description="Full blob name including any prefix")
    last_modified: datetime = Field(description="Last modification time (UTC)")
    size: int = Field(default=0, description="Content length in bytes")


class SkippedFile(CamelModel):
    """A file left out of a retrieval, with the reason."""
    
    name: str
    reason: str


class RetrievalResult(CamelModel):
    """
    Combined content of the files picked for a time window.
    
    Empty content with no files means the window held no data, which is
    not an error.
    """
    
    content: str = ""
    files: List[BlobDescriptor] = Field(default_factory=list)
    skipped: List[SkippedFile] = Field(default_factory=list)
    candidates_found: int = Field(
        default=0,
        description="Files inside the window before the count and size caps"
    )
    total_bytes: int = Field(
        default=0,
        description="Summed source size of the files in the result"
    )
    
    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


class SampledRetrieval(CamelModel):
    """
    Result of the streaming retrieval: a bounded line sample per file.
    
    total_lines counts every non-blank line of the processed files and
    is usually larger than the number of lines in sample_data.
    """
    
    sample_data: str = ""
    total_lines: int = 0
    processed_files: int = 0
    files_analyzed: List[BlobDescriptor] = Field(default_factory=list)
    skipped: List[SkippedFile] = Field(default_factory=list)
    
    @property
    def is_empty(self) -> bool:
        return not self.sample_data.strip()


class ConnectionStatus(CamelModel):
    """Outcome of a blob-store connectivity check."""
    
    status: str = Field(description="'connected' or 'error'")
    connection_type: Optional[str] = Field(
        default=None,
        description="'connection_string' or 'sas_url'"
    )
    container: Optional[str] = None
    has_blobs: Optional[bool] = None
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    message: Optional[str] = None
    code: Optional[str] = None
