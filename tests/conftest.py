"""
Shared pytest fixtures.
"""

from datetime import timedelta

import pytest

from honeylog.config import Settings
from tests.factories import NOW, FakeGeoLookup, InMemoryBlobStore


@pytest.fixture
def settings():
    """Settings with no credentials and no GeoIP database."""
    return Settings(
        _env_file=None,
        azure_storage_connection_string="",
        azure_sas_url="",
        geoip_database_path="",
        live_segment_name="",
    )


@pytest.fixture
def store():
    return InMemoryBlobStore()


@pytest.fixture
def geo():
    return FakeGeoLookup({
        "203.0.113.7": "CN",
        "198.51.100.20": "US",
        "198.51.100.21": "US",
    })


@pytest.fixture
def base_time():
    return NOW - timedelta(hours=3)
