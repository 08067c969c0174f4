"""
Geo-IP lookup backed by a local MaxMind GeoLite2 database.
"""

import ipaddress
import logging
from abc import ABC, abstractmethod
from typing import Optional

import geoip2.database
import geoip2.errors
from maxminddb import InvalidDatabaseError

from honeylog.config import Settings
from honeylog.models.report import GeoLocation


logger = logging.getLogger(__name__)


class GeoLookup(ABC):
    """Resolves an address to a location, or None when it cannot."""
    
    @abstractmethod
    def lookup(self, ip: Optional[str]) -> Optional[GeoLocation]:
        pass
    
    def close(self) -> None:
        return None


class NullGeoLookup(GeoLookup):
    """Used when no database is configured; every address is unresolved."""
    
    def lookup(self, ip: Optional[str]) -> Optional[GeoLocation]:
        return None


class GeoIP2Lookup(GeoLookup):
    """
    Lookup against a GeoLite2 City or Country database.
    
    Private, loopback and malformed addresses resolve to None. The reader
    is memory-mapped and read-only, so one instance serves all requests.
    """
    
    def __init__(self, database_path: str, reader=None):
        self.reader = reader or geoip2.database.Reader(database_path)
        self.database_type = self.reader.metadata().database_type
    
    def lookup(self, ip: Optional[str]) -> Optional[GeoLocation]:
        if not ip:
            return None
        return self._resolve(ip)
    
    def _resolve(self, ip: str) -> Optional[GeoLocation]:
        try:
            address = ipaddress.ip_address(ip)
        except ValueError:
            return None
        if not address.is_global:
            return None
        
        try:
            if "City" in self.database_type:
                response = self.reader.city(ip)
            else:
                response = self.reader.country(ip)
        except geoip2.errors.AddressNotFoundError:
            return None
        
        if not response.country.iso_code:
            return None
        
        location = GeoLocation(
            country=response.country.iso_code,
            country_name=response.country.name,
        )
        if "City" in self.database_type:
            location = location.model_copy(update={
                "region": response.subdivisions.most_specific.iso_code,
                "city": response.city.name,
                "timezone": response.location.time_zone,
                "latitude": response.location.latitude,
                "longitude": response.location.longitude,
            })
        return location
    
    def close(self) -> None:
        self.reader.close()


def create_geo_lookup(settings: Settings) -> GeoLookup:
    """Build the configured geo lookup, falling back to NullGeoLookup."""
    if not settings.geoip_database_path:
        logger.info("No GeoIP database configured; geographic attribution disabled")
        return NullGeoLookup()
    
    try:
        lookup = GeoIP2Lookup(settings.geoip_database_path)
    except (OSError, InvalidDatabaseError) as e:
        logger.error("Failed to load GeoIP database %s: %s", settings.geoip_database_path, e)
        return NullGeoLookup()
    
    logger.info("Using GeoIP database: %s", settings.geoip_database_path)
    return lookup
