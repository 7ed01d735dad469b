"""Weather service with per-place snapshot caching."""
import asyncio
import dataclasses
import logging
import time
from typing import Callable, Dict, Optional, Tuple
from weather_provider import WeatherProviderBase, WeatherProviderError
from weather_data import PlaceQuery, WeatherSnapshot


class WeatherService:
    """
    Service that assembles full weather snapshots and caches them per place.

    A snapshot is fresh for ``cache_ttl_seconds`` after the fetch that
    produced it. Expired entries are treated as absent and refetched.
    Concurrent misses for the same place each fetch; the last write wins.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        cache_ttl_seconds: int = 900,  # 15 minutes default
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
            cache_ttl_seconds: How long a snapshot stays fresh
            clock: Time source in seconds (injectable for tests)
        """
        self.provider = provider
        self.cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock
        self._cache: Dict[str, Tuple[float, WeatherSnapshot]] = {}

    def get_cached(self, place: PlaceQuery) -> Optional[WeatherSnapshot]:
        """Return the cached snapshot for a place if it is still fresh."""
        entry = self._cache.get(place.cache_key)
        if entry is None:
            return None

        fetched_at, snapshot = entry
        cache_age = self._clock() - fetched_at
        if cache_age < self.cache_ttl_seconds:
            logging.debug(f"Using cached weather for {place} (age: {cache_age:.1f}s, TTL: {self.cache_ttl_seconds}s)")
            return snapshot

        logging.info(f"Cache expired for {place} (age: {cache_age:.1f}s >= TTL: {self.cache_ttl_seconds}s)")
        return None

    async def get_snapshot(self, place: PlaceQuery) -> WeatherSnapshot:
        """
        Get weather for a place, from cache when fresh.

        The provider calls run in a worker thread. The cache is written only
        after they complete, so a cancelled request leaves no entry behind.

        Raises:
            PlaceNotFoundError: If the provider does not know the place
            WeatherProviderError: If current conditions or forecast fail
        """
        cached = self.get_cached(place)
        if cached is not None:
            return cached

        snapshot = await asyncio.to_thread(self.fetch_snapshot, place)
        self._cache[place.cache_key] = (self._clock(), snapshot)
        return snapshot

    def fetch_snapshot(self, place: PlaceQuery) -> WeatherSnapshot:
        """
        Fetch current conditions, forecast, air quality and alerts.

        Air quality and alerts are optional: a failure there is logged and
        the snapshot is returned without them.
        """
        logging.info(f"Fetching weather snapshot for {place}...")
        current = self.provider.get_current(place)
        forecast = self.provider.get_forecast(place)

        air_quality = None
        try:
            air_quality = self.provider.get_air_quality(current.lat, current.lon)
        except WeatherProviderError as e:
            logging.warning(f"Air quality unavailable for {current.place_name}: {e}")

        alerts = []
        try:
            alerts = self.provider.get_alerts(current.lat, current.lon)
        except WeatherProviderError as e:
            logging.warning(f"Alerts unavailable for {current.place_name}: {e}")

        snapshot = dataclasses.replace(
            current,
            forecast=tuple(forecast),
            air_quality=air_quality,
            alerts=tuple(alerts),
        )
        logging.info(f"Weather fetch successful: {snapshot.place_name} {snapshot.temp}°C, {snapshot.condition_main}")
        return snapshot
