"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from honeylog.analytics.engine import AnalyticsEngine
from honeylog.config import get_settings
from honeylog.geo.lookup import GeoLookup, create_geo_lookup
from honeylog.parsers.cowrie_parser import CowrieLogParser
from honeylog.retrieval.retriever import BoundedRetriever
from honeylog.storage.azure_store import create_blob_store
from honeylog.storage.base import BlobStore
from honeylog.validation.validator import LogFormatValidator


@lru_cache()
def get_blob_store() -> BlobStore:
    """Get the shared blob store (read-only, safe across requests)."""
    return create_blob_store(get_settings())


@lru_cache()
def get_geo_lookup() -> GeoLookup:
    """Get cached geo lookup instance."""
    return create_geo_lookup(get_settings())


@lru_cache()
def get_parser() -> CowrieLogParser:
    """Get cached log parser instance."""
    return CowrieLogParser()


@lru_cache()
def get_validator() -> LogFormatValidator:
    """Get cached format validator instance."""
    return LogFormatValidator()


def get_analytics_engine() -> AnalyticsEngine:
    """Get analytics engine bound to the shared geo lookup."""
    return AnalyticsEngine(geo=get_geo_lookup(), settings=get_settings())


def get_retriever() -> BoundedRetriever:
    """Get a retriever over the shared blob store (new each request)."""
    return BoundedRetriever(get_blob_store(), settings=get_settings())
