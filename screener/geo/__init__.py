"""Distance resolution from a registered address to the reference point."""

from .distance import DistanceResolver, build_address_query, haversine_km
from .geocoder import GeocodingDistanceResolver, GeocodeResult

__all__ = [
    "DistanceResolver",
    "GeocodingDistanceResolver",
    "GeocodeResult",
    "build_address_query",
    "haversine_km",
]
