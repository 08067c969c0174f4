"""
Pydantic models for honeylog.
"""

from honeylog.models.event import HoneypotEvent, EventType, EVENT_LABELS
from honeylog.models.blob import (
    BlobDescriptor,
    ConnectionStatus,
    RetrievalResult,
    SampledRetrieval,
    SkippedFile,
)
from honeylog.models.report import AnalyticsReport, AnalyticsResponse, GeoLocation
from honeylog.models.validation import ValidationReport, FieldCoverage

__all__ = [
    "HoneypotEvent",
    "EventType",
    "EVENT_LABELS",
    "BlobDescriptor",
    "ConnectionStatus",
    "RetrievalResult",
    "SampledRetrieval",
    "SkippedFile",
    "AnalyticsReport",
    "AnalyticsResponse",
    "GeoLocation",
    "ValidationReport",
    "FieldCoverage",
]
