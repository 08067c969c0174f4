"""
FastAPI API routes.
"""

import logging
from enum import Enum
from typing import Dict, List, Tuple

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from honeylog import __version__
from honeylog.analytics.engine import AnalyticsEngine
from honeylog.models.blob import BlobDescriptor, ConnectionStatus
from honeylog.models.report import AnalyticsResponse
from honeylog.models.validation import ValidationReport
from honeylog.parsers.cowrie_parser import CowrieLogParser
from honeylog.parsers.base import iter_nonblank_lines
from honeylog.retrieval.retriever import BoundedRetriever
from honeylog.storage.base import BlobStore
from honeylog.validation.validator import LogFormatValidator
from honeylog.api.dependencies import (
    get_analytics_engine,
    get_blob_store,
    get_parser,
    get_retriever,
    get_validator,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class TimeRangeKey(str, Enum):
    """Time ranges the dashboard can request."""
    HOUR = "1h"
    DAY = "24h"
    WEEK = "7d"
    MONTH = "30d"
    ALL = "all"


# (window hours, max files) per range; file caps keep each request cheap
LOGS_POLICY: Dict[TimeRangeKey, Tuple[int, int]] = {
    TimeRangeKey.HOUR: (1, 1),
    TimeRangeKey.DAY: (24, 3),
    TimeRangeKey.WEEK: (24 * 7, 5),
    TimeRangeKey.MONTH: (24 * 30, 8),
    TimeRangeKey.ALL: (24 * 365, 10),
}

ANALYTICS_POLICY: Dict[TimeRangeKey, Tuple[int, int]] = {
    TimeRangeKey.HOUR: (1, 3),
    TimeRangeKey.DAY: (24, 5),
    TimeRangeKey.WEEK: (24 * 7, 10),
    TimeRangeKey.MONTH: (24 * 30, 15),
    TimeRangeKey.ALL: (24 * 365, 20),
}


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/logs")
async def get_recent_logs(
    time_range: TimeRangeKey = Query(TimeRangeKey.DAY, alias="timeRange"),
    limit: int = Query(100, ge=1, le=5000),
    retriever: BoundedRetriever = Depends(get_retriever),
    parser: CowrieLogParser = Depends(get_parser),
) -> List[dict]:
    """
    Return raw events from the newest files in the range.
    
    The first `limit` non-blank lines are parsed; malformed ones are
    dropped, so fewer than `limit` events may come back.
    """
    hours, max_files = LOGS_POLICY[time_range]
    logger.info("Logs request: %s (%dh, max %d files, limit %d)",
                time_range.value, hours, max_files, limit)
    
    result = await retriever.fetch_recent(hours, max_files)
    if result.is_empty:
        return []
    
    events = []
    for i, line in enumerate(iter_nonblank_lines(result.content)):
        if i >= limit:
            break
        event = parser.parse_line(line)
        if event is not None:
            events.append(event.model_dump(mode="json"))
    
    return events


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    time_range: TimeRangeKey = Query(TimeRangeKey.DAY, alias="timeRange"),
    retriever: BoundedRetriever = Depends(get_retriever),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """Analyze whole files from the range under the size budget."""
    hours, max_files = ANALYTICS_POLICY[time_range]
    logger.info("Analytics request: %s (%dh, max %d files)", time_range.value, hours, max_files)
    
    result = await retriever.fetch_recent(hours, max_files)
    if result.is_empty:
        return AnalyticsResponse(requested_range=time_range.value, data_source="no_data")
    
    report = engine.analyze_text(result.content)
    return AnalyticsResponse(
        **report.model_dump(),
        requested_range=time_range.value,
        files_processed=len(result.files),
        total_lines=sum(1 for _ in iter_nonblank_lines(result.content)),
        files_analyzed=result.files,
    )


@router.get("/analytics/sample", response_model=AnalyticsResponse)
async def get_sampled_analytics(
    time_range: TimeRangeKey = Query(TimeRangeKey.DAY, alias="timeRange"),
    retriever: BoundedRetriever = Depends(get_retriever),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
):
    """Analyze a bounded per-file line sample; totalLines counts every line."""
    hours, max_files = ANALYTICS_POLICY[time_range]
    sample = await retriever.fetch_sample(hours, max_files)
    if sample.is_empty:
        return AnalyticsResponse(requested_range=time_range.value, data_source="no_data")
    
    report = engine.analyze_text(sample.sample_data)
    return AnalyticsResponse(
        **report.model_dump(),
        requested_range=time_range.value,
        files_processed=sample.processed_files,
        total_lines=sample.total_lines,
        files_analyzed=sample.files_analyzed,
    )


@router.get("/validate", response_model=ValidationReport)
async def validate_logs(
    time_range: TimeRangeKey = Query(TimeRangeKey.DAY, alias="timeRange"),
    sample_size: int = Query(10, ge=1, le=1000, alias="sampleSize"),
    retriever: BoundedRetriever = Depends(get_retriever),
    validator: LogFormatValidator = Depends(get_validator),
):
    """Validate the format of the newest log file in the range."""
    hours, _ = LOGS_POLICY[time_range]
    result = await retriever.fetch_recent(hours, 1)
    return validator.validate(result.content, sample_size)


@router.get("/test-connection", response_model=ConnectionStatus)
async def test_connection(store: BlobStore = Depends(get_blob_store)):
    """Check blob storage connectivity."""
    return await store.test_connection()


@router.get("/files", response_model=List[BlobDescriptor])
async def list_files(
    limit: int = Query(100, ge=1, le=1000),
    store: BlobStore = Depends(get_blob_store),
):
    """List log files, most recently modified first."""
    return await store.list_blobs("", limit)


@router.get("/patterns")
async def list_patterns(engine: AnalyticsEngine = Depends(get_analytics_engine)):
    """List all active attack-pattern detectors."""
    return engine.get_detector_info()
