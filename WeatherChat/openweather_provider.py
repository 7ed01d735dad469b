"""OpenWeather API provider implementation."""
import logging
import requests
from typing import Any, Dict, List, Optional
from weather_provider import PlaceNotFoundError, WeatherProviderBase, WeatherProviderError
from weather_data import AirQuality, ForecastSample, PlaceQuery, WeatherAlert, WeatherSnapshot


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the OpenWeather APIs.

    Current conditions, the 5 day / 3 hour forecast and air pollution come
    from the free 2.5 endpoints. Alerts come from One Call 3.0, which needs
    its own subscription; without it that call fails and callers are
    expected to carry on without alerts.
    """

    BASE_URL = "https://api.openweathermap.org"
    CURRENT_URL = f"{BASE_URL}/data/2.5/weather"
    FORECAST_URL = f"{BASE_URL}/data/2.5/forecast"
    AIR_POLLUTION_URL = f"{BASE_URL}/data/2.5/air_pollution"
    ONECALL_URL = f"{BASE_URL}/data/3.0/onecall"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "en",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_current(self, place: PlaceQuery) -> WeatherSnapshot:
        """
        Fetch current weather from the OpenWeather Current Weather API.

        Raises:
            PlaceNotFoundError: If OpenWeather has no match for the name
            WeatherProviderError: If the API request fails
        """
        data = self._request(self.CURRENT_URL, self._place_params(place), place)

        try:
            weather_array = data.get("weather", [])
            if not weather_array:
                logging.error("Response missing 'weather' array")
                raise WeatherProviderError("Response missing 'weather' array")
            weather = weather_array[0]
            logging.debug(f"Weather condition: {weather.get('main')} - {weather.get('description')}")

            main_data = data.get("main", {})
            if not main_data:
                raise WeatherProviderError("Response missing 'main' block")

            coord = data.get("coord", {})
            wind_data = data.get("wind") or {}
            clouds_data = data.get("clouds") or {}
            rain = data.get("rain") or {}
            snow = data.get("snow") or {}

            snapshot = WeatherSnapshot(
                place_name=data.get("name") or str(place),
                country=(data.get("sys") or {}).get("country", ""),
                lat=coord.get("lat", place.lat),
                lon=coord.get("lon", place.lon),
                temp=main_data.get("temp", 0.0),
                feels_like=main_data.get("feels_like", main_data.get("temp", 0.0)),
                humidity=main_data.get("humidity", 0.0),
                wind_speed=wind_data.get("speed", 0.0),
                condition_main=weather.get("main", "Unknown"),
                condition_description=weather.get("description", ""),
                timestamp=data.get("dt", 0),
                timezone_offset=data.get("timezone", 0),
                temp_min=main_data.get("temp_min"),
                temp_max=main_data.get("temp_max"),
                pressure=main_data.get("pressure"),
                visibility=data.get("visibility"),
                wind_gust=wind_data.get("gust"),
                wind_deg=wind_data.get("deg"),
                cloudiness=clouds_data.get("all"),
                rain_1h=rain.get("1h"),
                rain_3h=rain.get("3h"),
                snow_1h=snow.get("1h"),
                snow_3h=snow.get("3h"),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

        logging.info(f"Parsed current weather for {snapshot.place_name}: {snapshot.temp}°C, {snapshot.condition_main}")
        return snapshot

    def get_forecast(self, place: PlaceQuery) -> List[ForecastSample]:
        """Fetch the 5 day / 3 hour forecast."""
        data = self._request(self.FORECAST_URL, self._place_params(place), place)

        try:
            samples = []
            for item in data.get("list", []):
                weather = (item.get("weather") or [{}])[0]
                samples.append(ForecastSample(
                    timestamp=item["dt"],
                    temp=item["main"]["temp"],
                    condition_main=weather.get("main", "Unknown"),
                    condition_description=weather.get("description", ""),
                ))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logging.error(f"Failed to parse forecast response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse forecast: {str(e)}")

        logging.info(f"Parsed {len(samples)} forecast samples for {place}")
        return samples

    def get_air_quality(self, lat: float, lon: float) -> Optional[AirQuality]:
        """Fetch air pollution data. Returns None when the list is empty."""
        data = self._request(self.AIR_POLLUTION_URL, {"lat": lat, "lon": lon})

        entries = data.get("list") or []
        if not entries:
            logging.warning(f"No air quality data for ({lat}, {lon})")
            return None

        try:
            entry = entries[0]
            components = entry.get("components", {})
            return AirQuality(
                aqi=int(entry["main"]["aqi"]),
                pm2_5=components.get("pm2_5"),
                pm10=components.get("pm10"),
                no2=components.get("no2"),
                o3=components.get("o3"),
                co=components.get("co"),
            )
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse air pollution response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse air pollution: {str(e)}")

    def get_alerts(self, lat: float, lon: float) -> List[WeatherAlert]:
        """Fetch active alerts through One Call 3.0."""
        params = {"lat": lat, "lon": lon, "exclude": "current,minutely,hourly,daily"}
        data = self._request(self.ONECALL_URL, params)
        return [
            WeatherAlert(event=alert.get("event", "Weather alert"), description=alert.get("description", ""))
            for alert in data.get("alerts") or []
        ]

    def _place_params(self, place: PlaceQuery) -> Dict[str, Any]:
        if place.name:
            return {"q": place.name}
        if place.has_coords:
            return {"lat": place.lat, "lon": place.lon}
        raise WeatherProviderError("Place query needs a name or coordinates")

    def _request(self, url: str, params: Dict[str, Any], place: Optional[PlaceQuery] = None) -> Dict[str, Any]:
        """
        GET an OpenWeather endpoint and decode the JSON body.

        A 404 for a query by name is reported as PlaceNotFoundError, every
        other failure as WeatherProviderError.
        """
        full_params = dict(params)
        full_params.update({"appid": self.api_key, "units": self.units, "lang": self.lang})

        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(f"Request parameters: {params}")

            response = requests.get(url, params=full_params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                if response.status_code == 404 and place is not None and place.name:
                    raise PlaceNotFoundError(place.name)
                self._handle_error_response(response)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
        except ValueError as e:
            logging.error(f"Failed to decode API response: {e}")
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")

        if not isinstance(data, dict):
            raise WeatherProviderError(f"Unexpected response type: {type(data).__name__}")
        # Some endpoints report errors in the body with a 200 status.
        if str(data.get("cod", "200")) == "404" and place is not None and place.name:
            raise PlaceNotFoundError(place.name)
        return data

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        parameters = error_data.get("parameters", [])

        logging.error(f"OpenWeather API error response: {error_data}")

        error_msg = f"OpenWeather API error {cod}: {message}"
        if parameters:
            error_msg += f" (parameters: {', '.join(parameters)})"

        raise WeatherProviderError(error_msg)
