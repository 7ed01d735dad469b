"""Shared fixtures."""
import dataclasses

import pytest
from weather_data import ForecastSample, WeatherSnapshot
from weather_provider import PlaceNotFoundError, WeatherProviderBase


def make_snapshot(**overrides) -> WeatherSnapshot:
    """Build a mild, dry snapshot for Tokyo; override any field."""
    fields = dict(
        place_name="Tokyo",
        country="JP",
        lat=35.68,
        lon=139.69,
        temp=22.0,
        feels_like=20.0,
        humidity=60,
        wind_speed=3.5,
        condition_main="Clear",
        condition_description="clear sky",
        timestamp=1704067200,  # 2024-01-01 00:00 UTC, a Monday
        timezone_offset=0,
        temp_min=19.0,
        temp_max=24.0,
        pressure=1015,
        visibility=10000,
        wind_deg=90,
        cloudiness=5,
    )
    fields.update(overrides)
    return WeatherSnapshot(**fields)


class MockProvider(WeatherProviderBase):
    """Mock weather provider for testing."""

    def __init__(self, current=None, forecast=None, air_quality=None, alerts=None,
                 raise_error=None, air_error=None, alerts_error=None, known_places=None):
        self.current = current or make_snapshot()
        self.forecast = forecast or []
        self.air_quality = air_quality
        self.alerts = alerts or []
        self.raise_error = raise_error
        self.air_error = air_error
        self.alerts_error = alerts_error
        self.known_places = known_places
        self.call_count = 0
        self.requested = []

    def get_current(self, place):
        self.call_count += 1
        self.requested.append(place)
        if self.raise_error:
            raise self.raise_error
        if place.name and self.known_places is not None and place.name not in self.known_places:
            raise PlaceNotFoundError(place.name)
        if place.name:
            return dataclasses.replace(self.current, place_name=place.name)
        return dataclasses.replace(self.current, lat=place.lat, lon=place.lon)

    def get_forecast(self, place):
        return list(self.forecast)

    def get_air_quality(self, lat, lon):
        if self.air_error:
            raise self.air_error
        return self.air_quality

    def get_alerts(self, lat, lon):
        if self.alerts_error:
            raise self.alerts_error
        return list(self.alerts)


@pytest.fixture
def sample_snapshot():
    """Sample weather snapshot."""
    return make_snapshot(forecast=(
        ForecastSample(1704067200, 21.0, "Clear", "clear sky"),
        ForecastSample(1704078000, 23.4, "Clouds", "few clouds"),
        ForecastSample(1704088800, 20.5, "Clouds", "scattered clouds"),
        ForecastSample(1704099600, 18.0, "Clear", "clear sky"),
        ForecastSample(1704110400, 16.0, "Clear", "clear sky"),
    ))


@pytest.fixture
def provider():
    """Mock provider that knows every place."""
    return MockProvider(forecast=[ForecastSample(1704067200, 21.0, "Clear", "clear sky")])
