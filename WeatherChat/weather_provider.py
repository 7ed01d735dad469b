"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import List, Optional
from weather_data import AirQuality, ForecastSample, PlaceQuery, WeatherAlert, WeatherSnapshot


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, place: PlaceQuery) -> WeatherSnapshot:
        """
        Fetch current conditions for a place name or coordinates.

        Returns:
            WeatherSnapshot: Current conditions (forecast, air quality and
            alerts left empty)

        Raises:
            PlaceNotFoundError: If the provider does not know the place
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_forecast(self, place: PlaceQuery) -> List[ForecastSample]:
        """
        Fetch the short-range forecast, oldest sample first.

        Raises:
            PlaceNotFoundError: If the provider does not know the place
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_air_quality(self, lat: float, lon: float) -> Optional[AirQuality]:
        """Fetch the air pollution reading (None if the provider has none)."""
        pass

    @abstractmethod
    def get_alerts(self, lat: float, lon: float) -> List[WeatherAlert]:
        """Fetch active weather alerts (empty list if none)."""
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class PlaceNotFoundError(WeatherProviderError):
    """The provider has no match for the requested place name."""

    def __init__(self, place: str):
        super().__init__(f"Place not found: {place}")
        self.place = place
