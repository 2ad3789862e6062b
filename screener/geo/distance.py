"""Great-circle distance helpers."""

import math
from typing import Awaitable, Callable, Optional

from screener.models import Address

EARTH_RADIUS_KM = 6371.0

# resolve_distance(address_text, structured_address) -> km or None
DistanceResolver = Callable[[Optional[str], Optional[Address]], Awaitable[Optional[float]]]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometres between two coordinates."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def build_address_query(
    address: Optional[str],
    structured: Optional[Address] = None,
) -> Optional[str]:
    """Pick the free-text address, else join the structured parts."""
    query = address or ""
    if structured and not address:
        query = structured.to_query()

    query = " ".join(query.split())
    return query or None
