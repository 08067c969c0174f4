"""
Geo-IP attribution.
"""

from honeylog.geo.lookup import GeoLookup, GeoIP2Lookup, NullGeoLookup, create_geo_lookup

__all__ = ["GeoLookup", "GeoIP2Lookup", "NullGeoLookup", "create_geo_lookup"]
