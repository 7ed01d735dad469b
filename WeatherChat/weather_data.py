"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PlaceQuery:
    """What to ask a weather provider for: a place name or a coordinate pair."""
    name: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    @classmethod
    def by_name(cls, name: str) -> "PlaceQuery":
        return cls(name=name.strip())

    @classmethod
    def by_coords(cls, lat: float, lon: float) -> "PlaceQuery":
        return cls(lat=lat, lon=lon)

    @property
    def has_coords(self) -> bool:
        return self.lat is not None and self.lon is not None

    @property
    def cache_key(self) -> str:
        """Place identity used for caching."""
        if self.name:
            return f"name:{self.name.lower()}"
        return f"coords:{self.lat:.2f},{self.lon:.2f}"

    def __str__(self) -> str:
        if self.name:
            return self.name
        return f"({self.lat}, {self.lon})"


@dataclass(frozen=True)
class ForecastSample:
    """One step of the short-range forecast."""
    timestamp: int  # UNIX timestamp (UTC)
    temp: float
    condition_main: str
    condition_description: str = ""


@dataclass(frozen=True)
class AirQuality:
    """Air pollution reading. AQI runs from 1 (good) to 5 (very poor)."""
    aqi: int
    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    no2: Optional[float] = None
    o3: Optional[float] = None
    co: Optional[float] = None


@dataclass(frozen=True)
class WeatherAlert:
    event: str
    description: str = ""


@dataclass(frozen=True)
class WeatherSnapshot:
    """Everything known about the weather at one place at one moment."""
    place_name: str
    country: str
    lat: float
    lon: float
    temp: float
    feels_like: float
    humidity: float
    wind_speed: float
    condition_main: str  # e.g., "Clouds", "Rain", "Clear"
    condition_description: str  # e.g., "broken clouds", "light rain"
    timestamp: int  # UNIX timestamp (UTC)
    timezone_offset: int = 0  # Offset from UTC in seconds

    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[float] = None
    visibility: Optional[int] = None  # meters
    wind_gust: Optional[float] = None
    wind_deg: Optional[float] = None
    cloudiness: Optional[int] = None  # percentage
    rain_1h: Optional[float] = None
    rain_3h: Optional[float] = None
    snow_1h: Optional[float] = None
    snow_3h: Optional[float] = None

    air_quality: Optional[AirQuality] = None
    alerts: Tuple[WeatherAlert, ...] = ()
    forecast: Tuple[ForecastSample, ...] = ()

    @property
    def has_rain(self) -> bool:
        return self.rain_1h is not None or self.rain_3h is not None

    @property
    def has_snow(self) -> bool:
        return self.snow_1h is not None or self.snow_3h is not None

    @property
    def rain_amount(self) -> float:
        """Most recent rainfall in mm (1h preferred over 3h, 0 if none)."""
        return self.rain_1h or self.rain_3h or 0

    @property
    def snow_amount(self) -> float:
        return self.snow_1h or self.snow_3h or 0
