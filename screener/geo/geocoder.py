"""Cache-first geocoding resolver for distance-from-reference-point."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

import httpx
from sqlalchemy.orm import sessionmaker

from screener.config import settings
from screener.models import Address
from screener.models.database import DBGeocodeCache, init_db
from .distance import build_address_query, haversine_km

logger = logging.getLogger(__name__)


class GeocodeResult:
    """Coordinates for an address query."""

    def __init__(
        self,
        query: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        error: Optional[str] = None,
        from_cache: bool = False,
    ):
        self.query = query
        self.latitude = latitude
        self.longitude = longitude
        self.error = error
        self.from_cache = from_cache

    @property
    def success(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class GeocodingDistanceResolver:
    """Resolve a registered address to km from the reference point.

    Usable directly as the scorer's ``resolve_distance`` capability. Lookups
    hit the geocode cache first, then Nominatim. Every failure resolves to
    ``None``; nothing is raised to the caller.
    """

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        client: Optional[httpx.AsyncClient] = None,
        reference: Optional[tuple[float, float]] = None,
        use_cache: bool = True,
        rate_limit_delay: Optional[float] = None,
    ):
        self.use_cache = use_cache
        self._session_factory = session_factory
        self._client = client
        self.reference = reference or (settings.reference_latitude, settings.reference_longitude)
        self.rate_limit_delay = (
            settings.geocode_rate_limit_delay if rate_limit_delay is None else rate_limit_delay
        )

        self._last_request: Optional[datetime] = None
        self._rate_limit_lock = asyncio.Lock()

    async def __call__(
        self,
        address: Optional[str],
        structured: Optional[Address] = None,
    ) -> Optional[float]:
        return await self.distance_km(address, structured)

    async def distance_km(
        self,
        address: Optional[str],
        structured: Optional[Address] = None,
    ) -> Optional[float]:
        """Distance in km from the reference point, or None if unresolvable."""
        query = build_address_query(address, structured)
        if not query:
            return None

        result = await self.geocode(query)
        if not result.success:
            return None

        ref_lat, ref_lon = self.reference
        return haversine_km(ref_lat, ref_lon, result.latitude, result.longitude)

    async def geocode(self, query: str) -> GeocodeResult:
        """Geocode an address query with caching and rate limiting."""
        if self.use_cache:
            cached = self._get_cached(query)
            if cached:
                return cached

        await self._wait_for_rate_limit()
        result = await self._do_geocode(query)

        # Cache definitive answers, including "no match"; not transport errors
        if self.use_cache and result.error is None:
            self._cache_result(result)

        return result

    async def _wait_for_rate_limit(self):
        async with self._rate_limit_lock:
            if self._last_request and self.rate_limit_delay > 0:
                elapsed = (datetime.utcnow() - self._last_request).total_seconds()
                if elapsed < self.rate_limit_delay:
                    await asyncio.sleep(self.rate_limit_delay - elapsed)

            self._last_request = datetime.utcnow()

    async def _do_geocode(self, query: str) -> GeocodeResult:
        """Call the Nominatim search endpoint."""
        params = {
            "q": f"{query}, UK",
            "format": "json",
            "limit": 1,
            "countrycodes": settings.geocoder_country_codes,
        }
        headers = {"User-Agent": settings.user_agent}

        try:
            if self._client is not None:
                response = await self._client.get(settings.geocoder_url, params=params, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=httpx.Timeout(
                        connect=settings.connect_timeout,
                        read=settings.read_timeout,
                        write=settings.read_timeout,
                        pool=settings.connect_timeout,
                    ),
                ) as client:
                    response = await client.get(settings.geocoder_url, params=params, headers=headers)

            response.raise_for_status()
            data = response.json()

        except httpx.TimeoutException:
            logger.warning(f"Timeout geocoding '{query}'")
            return GeocodeResult(query=query, error="Timeout")

        except httpx.HTTPStatusError as e:
            logger.warning(f"Geocoder returned {e.response.status_code} for '{query}'")
            return GeocodeResult(query=query, error=f"HTTP {e.response.status_code}")

        except httpx.RequestError as e:
            logger.warning(f"Request error geocoding '{query}': {e}")
            return GeocodeResult(query=query, error=str(e))

        except ValueError as e:
            logger.warning(f"Invalid geocoder response for '{query}': {e}")
            return GeocodeResult(query=query, error="Invalid JSON")

        if not isinstance(data, list) or not data:
            logger.debug(f"No geocoding match for '{query}'")
            return GeocodeResult(query=query)

        try:
            latitude = float(data[0]["lat"])
            longitude = float(data[0]["lon"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Malformed geocoder result for '{query}'")
            return GeocodeResult(query=query, error="Malformed result")

        return GeocodeResult(query=query, latitude=latitude, longitude=longitude)

    def _sessions(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = init_db()
        return self._session_factory

    @staticmethod
    def _cache_key(query: str) -> str:
        return query.strip().lower()

    def _get_cached(self, query: str) -> Optional[GeocodeResult]:
        """Get a cached geocode result."""
        try:
            session = self._sessions()()
            try:
                cached = session.query(DBGeocodeCache).filter_by(query=self._cache_key(query)).first()
                if cached and cached.expires_at and cached.expires_at > datetime.utcnow():
                    return GeocodeResult(
                        query=query,
                        latitude=cached.latitude,
                        longitude=cached.longitude,
                        from_cache=True,
                    )
            finally:
                session.close()
        except Exception as e:
            logger.debug(f"Geocode cache lookup failed: {e}")

        return None

    def _cache_result(self, result: GeocodeResult):
        """Cache a geocode result."""
        try:
            session = self._sessions()()
            try:
                key = self._cache_key(result.query)
                now = datetime.utcnow()
                expires_at = now + timedelta(days=settings.geocode_cache_days)

                cached = session.query(DBGeocodeCache).filter_by(query=key).first()
                if cached:
                    cached.latitude = result.latitude
                    cached.longitude = result.longitude
                    cached.fetched_at = now
                    cached.expires_at = expires_at
                else:
                    session.add(DBGeocodeCache(
                        query=key,
                        latitude=result.latitude,
                        longitude=result.longitude,
                        fetched_at=now,
                        expires_at=expires_at,
                    ))

                session.commit()
            finally:
                session.close()
        except Exception as e:
            logger.debug(f"Failed to cache geocode result: {e}")
