"""
Bounded retrieval of recent log files from a blob store.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from honeylog.config import Settings, get_settings
from honeylog.exceptions import (
    BlobNotFound,
    RetrievalFailed,
    RetrievalTimeout,
    StorageAuthError,
    StorageError,
)
from honeylog.models.blob import (
    BlobDescriptor,
    RetrievalResult,
    SampledRetrieval,
    SkippedFile,
)
from honeylog.parsers.base import iter_nonblank_lines
from honeylog.retrieval.observer import LoggingObserver, RetrievalObserver
from honeylog.retrieval.segments import SegmentLayout
from honeylog.storage.base import BlobStore


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def decode_content(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


class BoundedRetriever:
    """
    Picks and downloads a small, recency-biased set of log files.
    
    Two strategies share the same candidate selection:
    - fetch_recent(): concurrent download of whole files under a total
      size budget
    - fetch_sample(): sequential download keeping only the first lines
      of each file, for a bounded sample whatever the file sizes
    
    Per-file failures are skipped and reported in the result. Only a
    timeout or the failure of every file is raised to the caller.
    """
    
    def __init__(
        self,
        store: BlobStore,
        settings: Optional[Settings] = None,
        observer: Optional[RetrievalObserver] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.observer = observer or LoggingObserver(verbose=self.settings.debug_logs)
        self.clock = clock
        
        self.layout = None
        if self.settings.live_segment_name:
            self.layout = SegmentLayout(
                self.settings.live_segment_name,
                self.settings.archive_segment_format,
                prefix=self.settings.azure_log_prefix,
            )
    
    async def select_candidates(
        self,
        window_hours: float,
        max_files: int,
        prefix: str = "",
    ) -> Tuple[List[BlobDescriptor], int]:
        """
        Find the newest files modified within the window.
        
        Args:
            window_hours: How far back from now to look
            max_files: Maximum number of files to return
            prefix: Optional name prefix for listing
            
        Returns:
            (selected descriptors most recent first, count inside the window)
        """
        if max_files <= 0:
            return [], 0
        
        if self.layout is not None:
            blobs = await self._probe_segments(window_hours, max_files)
        else:
            blobs = await self.store.list_blobs(prefix, self.settings.list_max_results)
        
        cutoff = self.clock() - timedelta(hours=window_hours)
        in_window = [b for b in blobs if b.last_modified > cutoff]
        in_window.sort(key=lambda b: b.last_modified, reverse=True)
        return in_window[:max_files], len(in_window)
    
    async def _probe_segments(self, window_hours: float, max_files: int) -> List[BlobDescriptor]:
        """
        Probe the live segment, then daily archives from today backwards.
        
        A segment whose probe fails is left out. Timeouts and rejected
        credentials still abort the request.
        """
        names = [self.layout.live]
        names.extend(self.layout.archive_names(self.clock().date(), window_hours))
        
        found = []
        for name in names:
            if len(found) >= max_files:
                break
            try:
                if not await self.store.exists(name):
                    continue
                found.append(await self.store.get_metadata(name))
            except BlobNotFound:
                continue
            except (RetrievalTimeout, StorageAuthError):
                raise
            except StorageError as e:
                self._skip(name, e.message)
                continue
        
        return found
    
    async def fetch_recent(self, window_hours: float = 24, max_files: int = 10) -> RetrievalResult:
        """
        Download the newest files in the window under the size budget.
        
        Files are kept in recency order until the next one would push the
        summed size over max_total_bytes. Downloads run concurrently with
        a fixed fan-out and are joined in recency order.
        
        Raises:
            RetrievalTimeout: If listing or any download times out
            RetrievalFailed: If every selected file failed to download
        """
        candidates, found = await self.select_candidates(window_hours, max_files)
        selected, total_bytes = self._apply_size_budget(candidates)
        self.observer.candidates_selected(window_hours, found, len(selected), total_bytes)
        
        if not selected:
            return RetrievalResult(candidates_found=found)
        
        semaphore = asyncio.Semaphore(max(1, self.settings.download_concurrency))
        
        async def _fetch(blob: BlobDescriptor) -> bytes:
            async with semaphore:
                return await self.store.download(blob.name)
        
        outcomes = await asyncio.gather(
            *(_fetch(blob) for blob in selected),
            return_exceptions=True,
        )
        
        for outcome in outcomes:
            if isinstance(outcome, RetrievalTimeout):
                raise outcome
        
        parts = []
        files = []
        skipped = []
        for blob, outcome in zip(selected, outcomes):
            if isinstance(outcome, StorageError):
                skipped.append(self._skip(blob.name, outcome.message))
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            parts.append(decode_content(outcome).rstrip("\n"))
            files.append(blob)
        
        if not files:
            raise RetrievalFailed(f"All {len(selected)} selected log files failed to download")
        
        return RetrievalResult(
            content="\n".join(parts),
            files=files,
            skipped=skipped,
            candidates_found=found,
            total_bytes=sum(b.size for b in files),
        )
    
    async def fetch_sample(self, window_hours: float = 24, max_files: int = 5) -> SampledRetrieval:
        """
        Build a bounded line sample from the newest files in the window.
        
        Files are downloaded one at a time so at most one file is held in
        memory. Files above max_file_bytes are skipped, only the first
        sample_lines_per_file lines of each file are kept, and processing
        stops once the sample exceeds max_sample_chars.
        
        Raises:
            RetrievalTimeout: If listing or any download times out
            RetrievalFailed: If every attempted file failed to download
        """
        candidates, found = await self.select_candidates(window_hours, max_files)
        self.observer.candidates_selected(
            window_hours, found, len(candidates), sum(b.size for b in candidates)
        )
        
        per_file = self.settings.sample_lines_per_file
        sample_parts: List[str] = []
        sample_chars = 0
        total_lines = 0
        analyzed: List[BlobDescriptor] = []
        skipped: List[SkippedFile] = []
        attempted = 0
        
        for blob in candidates:
            if blob.size > self.settings.max_file_bytes:
                skipped.append(self._skip(blob.name, f"larger than {self.settings.max_file_bytes} bytes"))
                continue
            
            attempted += 1
            try:
                content = decode_content(await self.store.download(blob.name))
            except RetrievalTimeout:
                raise
            except StorageError as e:
                skipped.append(self._skip(blob.name, e.message))
                continue
            
            lines = list(iter_nonblank_lines(content))
            del content
            total_lines += len(lines)
            chunk = "\n".join(lines[:per_file]) + "\n"
            sample_parts.append(chunk)
            sample_chars += len(chunk)
            analyzed.append(blob)
            self.observer.file_processed(blob, len(lines))
            
            if sample_chars > self.settings.max_sample_chars:
                self.observer.sample_limit_reached(sample_chars)
                break
        
        if attempted and not analyzed:
            raise RetrievalFailed(f"All {attempted} attempted log files failed to download")
        
        return SampledRetrieval(
            sample_data="".join(sample_parts),
            total_lines=total_lines,
            processed_files=len(analyzed),
            files_analyzed=analyzed,
            skipped=skipped,
        )
    
    def _apply_size_budget(self, candidates: List[BlobDescriptor]) -> Tuple[List[BlobDescriptor], int]:
        """Keep files in order until the next would exceed max_total_bytes."""
        limit = self.settings.max_total_bytes
        kept = []
        total = 0
        for blob in candidates:
            if total + blob.size > limit:
                self.observer.budget_reached(limit, len(kept))
                break
            kept.append(blob)
            total += blob.size
        return kept, total
    
    def _skip(self, name: str, reason: str) -> SkippedFile:
        self.observer.file_skipped(name, reason)
        return SkippedFile(name=name, reason=reason)
