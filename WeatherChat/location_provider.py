"""Device-location providers - where is "here" for the person chatting."""
import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests


class LocationErrorReason(Enum):
    PERMISSION_DENIED = "permission_denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


class LocationUnavailableError(Exception):
    """Raised when the caller's own position cannot be determined."""

    def __init__(self, reason: LocationErrorReason, message: str = ""):
        super().__init__(message or f"Location unavailable ({reason.value})")
        self.reason = reason


@dataclass(frozen=True)
class DeviceLocation:
    lat: float
    lon: float
    place_name: Optional[str] = None
    country: Optional[str] = None


class LocationProviderBase(ABC):
    """Abstract base class for device-location lookups."""

    @abstractmethod
    def get_location(self) -> DeviceLocation:
        """
        Determine the current position.

        Raises:
            LocationUnavailableError: If the position cannot be determined
        """
        pass


class StaticLocationProvider(LocationProviderBase):
    """Always answers with configured coordinates (WEATHER_LAT/WEATHER_LON)."""

    def __init__(self, lat: float, lon: float, place_name: Optional[str] = None):
        self.location = DeviceLocation(lat=lat, lon=lon, place_name=place_name)

    def get_location(self) -> DeviceLocation:
        return self.location


class NoLocationProvider(LocationProviderBase):
    """Used when no way of locating the user is configured."""

    def get_location(self) -> DeviceLocation:
        raise LocationUnavailableError(
            LocationErrorReason.UNSUPPORTED,
            "Geolocation is not supported in this environment",
        )


class IpLocationProvider(LocationProviderBase):
    """
    Approximate position from the public IP address (ipapi.co).

    Good to city level at best, but needs no permission prompt.
    """

    LOOKUP_URL = "https://ipapi.co/json/"

    def __init__(self, timeout: int = 10):
        self.timeout = timeout

    def get_location(self) -> DeviceLocation:
        try:
            logging.info(f"Looking up location by IP: {self.LOOKUP_URL}")
            response = requests.get(self.LOOKUP_URL, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logging.error(f"IP location lookup timed out: {e}")
            raise LocationUnavailableError(LocationErrorReason.TIMEOUT, "Location request timed out")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during IP location lookup: {e}")
            raise LocationUnavailableError(LocationErrorReason.UNAVAILABLE, f"Network error: {str(e)}")

        if response.status_code in (401, 403):
            raise LocationUnavailableError(LocationErrorReason.PERMISSION_DENIED, "IP lookup refused")
        if not response.ok:
            raise LocationUnavailableError(
                LocationErrorReason.UNAVAILABLE, f"IP lookup failed with HTTP {response.status_code}"
            )

        try:
            data = response.json()
            lat = float(data.get("latitude", data.get("lat")))
            lon = float(data.get("longitude", data.get("lon")))
        except (ValueError, TypeError, AttributeError) as e:
            logging.error(f"Unusable IP lookup response: {e}")
            raise LocationUnavailableError(LocationErrorReason.UNAVAILABLE, "IP lookup returned no coordinates")

        location = DeviceLocation(
            lat=lat,
            lon=lon,
            place_name=data.get("city"),
            country=data.get("country_code") or data.get("country"),
        )
        logging.info(f"IP location resolved to {location.place_name} ({lat}, {lon})")
        return location


async def resolve_device_location(provider: LocationProviderBase, timeout: float = 10.0) -> DeviceLocation:
    """
    Run a (blocking) provider lookup off the event loop with a bounded wait.

    Raises:
        LocationUnavailableError: On provider failure, or TIMEOUT when the
        lookup takes longer than ``timeout`` seconds
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(provider.get_location), timeout=timeout)
    except asyncio.TimeoutError:
        logging.warning(f"Device location lookup exceeded {timeout}s")
        raise LocationUnavailableError(LocationErrorReason.TIMEOUT, "Location request timed out")
