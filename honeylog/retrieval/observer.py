"""
Progress notifications from the bounded retriever.
"""

import logging

from honeylog.logging_config import format_bytes
from honeylog.models.blob import BlobDescriptor


logger = logging.getLogger("honeylog.retrieval")


class RetrievalObserver:
    """
    Receives retrieval progress. All hooks are no-ops by default.
    
    Retrieval results already carry the counts and skipped files; an
    observer only adds tracing.
    """
    
    def candidates_selected(self, window_hours: float, found: int, selected: int, total_bytes: int) -> None:
        pass
    
    def budget_reached(self, limit_bytes: int, kept: int) -> None:
        pass
    
    def file_processed(self, blob: BlobDescriptor, lines: int) -> None:
        pass
    
    def file_skipped(self, name: str, reason: str) -> None:
        pass
    
    def sample_limit_reached(self, chars: int) -> None:
        pass


class LoggingObserver(RetrievalObserver):
    """Writes retrieval progress to the honeylog.retrieval logger."""
    
    def __init__(self, verbose: bool = False):
        self.verbose = verbose
    
    def candidates_selected(self, window_hours, found, selected, total_bytes):
        if found == 0:
            logger.info("No log files found within the last %gh", window_hours)
            return
        logger.info("Selected %d of %d log files within the last %gh (%s)",
                    selected, found, window_hours, format_bytes(total_bytes))
    
    def budget_reached(self, limit_bytes, kept):
        logger.warning("Size budget of %s reached, keeping %d files",
                       format_bytes(limit_bytes), kept)
    
    def file_processed(self, blob, lines):
        if self.verbose:
            logger.debug("Processed %s: %d lines (%s)", blob.name, lines, format_bytes(blob.size))
    
    def file_skipped(self, name, reason):
        logger.warning("Skipping %s: %s", name, reason)
    
    def sample_limit_reached(self, chars):
        logger.info("Sample size limit reached at %d characters, stopping", chars)
