"""Tests for reply composition."""
import random

import pytest
import responses
from advice_tables import DEFAULT_TABLES, build_default_tables
from conftest import make_snapshot
from intents import Intent
from responses import (
    clothing_for_temperature,
    compose_air_quality,
    compose_alerts,
    compose_climate,
    compose_clothing_advice,
    compose_conditions,
    compose_rain_answer,
    compose_current_weather,
    compose_details,
    compose_forecast,
    compose_greeting,
    compose_weather_tips,
    health_recommendation,
    humidity_level,
    season_for_month,
    temperature_advice,
    weather_insights,
    wind_direction,
)
from text_matching import normalize
from weather_data import AirQuality, ForecastSample, WeatherAlert

TABLES = DEFAULT_TABLES
MONDAY = 1704067200  # 2024-01-01 00:00 UTC
HOUR = 3600


@pytest.mark.parametrize("temp,band", [
    (36.0, "extreme"),
    (35.0, "warm"),
    (25.1, "warm"),
    (25.0, "mild"),
    (15.0, "cool"),
    (5.0, "cold"),
    (-4.9, "cold"),
    (-5.0, "very_cold"),
])
def test_temperature_advice_bands(temp, band):
    """Test strict greater-than temperature thresholds."""
    assert temperature_advice(temp, TABLES) == TABLES.temperature_advice[band]


@pytest.mark.parametrize("temp,band", [
    (30.5, "hot"),
    (30.0, "warm"),
    (20.0, "mild"),
    (15.0, "cool"),
    (5.0, "cold"),
    (-5.0, "freezing"),
])
def test_clothing_bands(temp, band):
    """Test clothing thresholds."""
    assert clothing_for_temperature(temp, TABLES) == TABLES.clothing[band]


@pytest.mark.parametrize("humidity,band", [
    (81, "very_humid"),
    (80, "moderate"),
    (60, "comfortable"),
    (40, "low"),
    (20, "very_dry"),
])
def test_humidity_bands(humidity, band):
    """Test humidity thresholds."""
    assert humidity_level(humidity, TABLES) == TABLES.humidity[band]


def test_health_recommendation_lookup():
    """Test direct AQI lookup with a generic answer for unknown levels."""
    assert health_recommendation(1, TABLES) == TABLES.aqi_health[1]
    assert health_recommendation(9, TABLES) == TABLES.default_health


@pytest.mark.parametrize("degrees,name", [
    (0, "North"),
    (90, "East"),
    (225, "Southwest"),
    (350, "North"),
    (-90, "West"),
])
def test_wind_direction(degrees, name):
    """Test 16-point compass names."""
    assert wind_direction(degrees) == name


@pytest.mark.parametrize("month,season", [
    (1, "winter"), (3, "spring"), (5, "spring"), (6, "summer"),
    (8, "summer"), (9, "autumn"), (11, "autumn"), (12, "winter"),
])
def test_season_for_month(month, season):
    """Test month to season mapping."""
    assert season_for_month(month) == season


def test_advice_tables_are_read_only():
    """Test that tables cannot be modified at runtime."""
    tables = build_default_tables()
    with pytest.raises(TypeError):
        tables.clothing["hot"] = "nothing"
    with pytest.raises(AttributeError):
        tables.clothing = {}


def test_greeting_uses_injected_random_source():
    """Test that a seeded source pins the selection."""
    expected = random.Random(7).choice(responses.GREETINGS)
    assert compose_greeting(random.Random(7)) == expected


def test_temperature_reply():
    """Test the focused temperature answer."""
    reply = compose_current_weather(make_snapshot(), normalize("temperature in Tokyo"), TABLES)
    assert "22°C" in reply
    assert "feels like 20°C" in reply
    assert TABLES.temperature_advice["mild"] in reply


def test_temperature_reply_uses_feels_like_for_advice():
    """Test that the advisory follows the feels-like value."""
    snapshot = make_snapshot(temp=30.0, feels_like=25.0)
    reply = compose_current_weather(snapshot, normalize("temperature"), TABLES)
    assert TABLES.temperature_advice["mild"] in reply
    snapshot = make_snapshot(temp=30.0, feels_like=25.1)
    reply = compose_current_weather(snapshot, normalize("temperature"), TABLES)
    assert TABLES.temperature_advice["warm"] in reply


def test_temperature_rounds_half_up():
    """Test that 20.5 degrees reads as 21."""
    reply = compose_current_weather(make_snapshot(temp=20.5), normalize("temperature"), TABLES)
    assert "is 21°C" in reply


def test_wind_reply():
    """Test the wind answer with gusts and the > 10 cutoff."""
    calm = compose_current_weather(make_snapshot(wind_speed=10), normalize("is it windy"), TABLES)
    assert "The wind speed in Tokyo is 10 m/s" in calm
    assert "Light winds" in calm

    gusty = compose_current_weather(make_snapshot(wind_speed=12.5, wind_gust=18.0), normalize("wind"), TABLES)
    assert "with gusts up to 18 m/s" in gusty
    assert TABLES.tips["wind"] in gusty


def test_humidity_reply():
    """Test the humidity answer."""
    reply = compose_current_weather(make_snapshot(humidity=85), normalize("humidity"), TABLES)
    assert "The humidity in Tokyo is 85%" in reply
    assert TABLES.humidity["very_humid"] in reply


def test_current_weather_summary(sample_snapshot):
    """Test the general summary with upcoming samples."""
    reply = compose_current_weather(sample_snapshot, normalize("weather"), TABLES)
    assert reply.startswith("Current weather in Tokyo:")
    assert "• Temperature: 22°C" in reply
    assert "• Conditions: clear sky" in reply
    assert "• Visibility: 10.0 km" in reply
    assert "• 0:00 - 21°C, clear sky" in reply
    assert "• 3:00 - 23°C, few clouds" in reply
    assert "• 6:00 - 21°C, scattered clouds" in reply
    assert "12:00" not in reply
    assert "Pleasant weather conditions overall!" in reply


def test_current_weather_summary_optional_parts():
    """Test rainfall, air quality label and alert lines."""
    snapshot = make_snapshot(
        condition_main="Rain",
        rain_1h=2.5,
        air_quality=AirQuality(aqi=2),
        alerts=(WeatherAlert("Flood Watch", "Rivers rising"),),
    )
    reply = compose_current_weather(snapshot, normalize("weather"), TABLES)
    assert "• Rainfall: 2.5mm" in reply
    assert "• Air Quality: Fair" in reply
    assert "⚠️ Weather Alert: Flood Watch" in reply
    assert "☔ Rain expected" in reply


def test_weather_insights():
    """Test insight thresholds."""
    hot = make_snapshot(temp=31, humidity=81, wind_speed=11, visibility=4000)
    insights = weather_insights(hot)
    assert "Hot day ahead" in insights
    assert "High humidity" in insights
    assert "Windy conditions" in insights
    assert "Reduced visibility" in insights
    assert weather_insights(make_snapshot(visibility=None)) == "🌤️ Pleasant weather conditions overall!"


def test_air_quality_reply():
    """Test AQI band text and unmodified pollutant figures."""
    snapshot = make_snapshot(air_quality=AirQuality(aqi=3, pm2_5=40, pm10=55.2, co=201.94))
    reply = compose_air_quality(snapshot, TABLES)
    assert "• Air Quality Index: 3/5" in reply
    assert TABLES.aqi_status[3] in reply
    assert "• PM2.5: 40 μg/m³" in reply
    assert "• PM10: 55.2 μg/m³" in reply
    assert "• CO: 201.94 μg/m³" in reply
    assert "• NO2: n/a" in reply
    assert TABLES.aqi_health[3] in reply


def test_air_quality_reply_without_reading():
    """Test that a snapshot without air data yields None."""
    assert compose_air_quality(make_snapshot(), TABLES) is None


def test_clothing_advice():
    """Test clothing band plus one additional tip."""
    rainy = compose_clothing_advice(make_snapshot(condition_main="Rain", wind_speed=20), TABLES)
    assert rainy.startswith("Clothing advice for Tokyo (22°C, feels like 20°C):")
    assert TABLES.clothing["mild"] in rainy
    assert TABLES.tips["rain"] in rainy
    assert TABLES.tips["wind"] not in rainy

    snowy = compose_clothing_advice(make_snapshot(condition_main="Snow", feels_like=-8), TABLES)
    assert TABLES.clothing["freezing"] in snowy
    assert TABLES.tips["snow"] in snowy


def test_clothing_advice_wind_cutoff_is_eight():
    """Test that clothing advice uses the > 8 wind cutoff."""
    assert TABLES.tips["wind"] not in compose_clothing_advice(make_snapshot(wind_speed=8), TABLES)
    assert TABLES.tips["wind"] in compose_clothing_advice(make_snapshot(wind_speed=8.5), TABLES)


def test_weather_tips():
    """Test tip selection."""
    reply = compose_weather_tips(make_snapshot(temp=32, condition_main="Thunderstorm", wind_speed=10.5), TABLES)
    assert reply.startswith("Weather tips for Tokyo:")
    assert TABLES.tips["heat"] in reply
    assert TABLES.tips["storm"] in reply
    assert TABLES.tips["wind"] in reply


def test_weather_tips_fog_and_default():
    """Test the visibility fog tip and the all-clear line."""
    foggy = compose_weather_tips(make_snapshot(condition_main="Mist", visibility=4999), TABLES)
    assert TABLES.tips["fog"] in foggy
    clear = compose_weather_tips(make_snapshot(visibility=5000, wind_speed=10), TABLES)
    assert "Great weather conditions!" in clear
    assert TABLES.tips["wind"] not in clear


def test_forecast_groups_by_day():
    """Test daily min/max, distinct conditions and flags."""
    snapshot = make_snapshot(forecast=(
        ForecastSample(MONDAY, 5.0, "Rain", "light rain"),
        ForecastSample(MONDAY + 12 * HOUR, 9.4, "Clouds", "overcast clouds"),
        ForecastSample(MONDAY + 24 * HOUR, 3.0, "Snow", "snow"),
        ForecastSample(MONDAY + 27 * HOUR, 2.6, "Thunderstorm", "thunderstorm"),
    ))
    reply = compose_forecast(snapshot)
    assert reply.startswith("5-day forecast for Tokyo:")
    monday, tuesday = reply.split("Tuesday:")
    assert "Monday:" in monday
    assert "• Temperature: 5°C to 9°C" in monday
    assert "• Conditions: Rain, Clouds" in monday
    assert "• Rain expected" in monday
    assert "• Temperature: 3°C to 3°C" in tuesday
    assert "• Snow expected" in tuesday
    assert "• Thunderstorms possible" in tuesday


def test_forecast_uses_local_time():
    """Test that the timezone offset moves samples across midnight."""
    snapshot = make_snapshot(
        timezone_offset=-HOUR,
        forecast=(ForecastSample(MONDAY, 5.0, "Clear", "clear sky"),),
    )
    assert "Sunday:" in compose_forecast(snapshot)


def test_forecast_limits_days():
    """Test that at most five days are listed."""
    samples = tuple(ForecastSample(MONDAY + day * 24 * HOUR, 10.0, "Clear") for day in range(7))
    reply = compose_forecast(make_snapshot(forecast=samples))
    assert reply.count("• Temperature:") == 5
    assert "Saturday:" not in reply


def test_forecast_without_samples():
    """Test the empty forecast message."""
    assert "No forecast data" in compose_forecast(make_snapshot())


def test_details_reply():
    """Test the detailed breakdown."""
    snapshot = make_snapshot(
        wind_gust=9.1,
        snow_1h=0.5,
        air_quality=AirQuality(aqi=1, pm2_5=12.5, pm10=20),
    )
    reply = compose_details(snapshot)
    assert "• Min: 19°C" in reply
    assert "• Max: 24°C" in reply
    assert "• Pressure: 1015 hPa" in reply
    assert "• Direction: East" in reply
    assert "• Gusts: 9.1 m/s" in reply
    assert "• PM2.5: 12.5 μg/m³" in reply
    assert "Snow:\n• Last hour: 0.5 mm" in reply
    assert "Rain:" not in reply


def test_conditions_reply():
    """Test precipitation, next 24 hours and alerts."""
    snapshot = make_snapshot(
        rain_1h=1.2,
        alerts=(WeatherAlert("Storm Warning", "Gale force winds"),),
        forecast=tuple(
            ForecastSample(MONDAY + i * 3 * HOUR, 10.0, "Thunderstorm" if i == 7 else "Clouds")
            for i in range(10)
        ),
    )
    reply = compose_conditions(snapshot)
    assert "• Cloud cover: 5%" in reply
    assert "• Rain: 1.2 mm" in reply
    assert "• Thunderstorms possible" in reply
    assert "• Storm Warning: Gale force winds" in reply


def test_conditions_reply_only_looks_24_hours_ahead():
    """Test that samples past the first eight are ignored."""
    snapshot = make_snapshot(forecast=tuple(
        ForecastSample(MONDAY + i * 3 * HOUR, 10.0, "Rain" if i == 8 else "Clear")
        for i in range(10)
    ))
    reply = compose_conditions(snapshot)
    assert "• No precipitation expected" in reply
    assert "Precipitation:" not in reply


def test_alerts_reply():
    """Test active alert listing and the no-alert guidance."""
    with_alerts = compose_alerts(make_snapshot(alerts=(WeatherAlert("Heat Advisory", "Stay cool"),)))
    assert "Active weather alerts for Tokyo" in with_alerts
    assert "• Heat Advisory: Stay cool" in with_alerts
    assert "no active alerts reported for Tokyo" in compose_alerts(make_snapshot())


def test_climate_reply():
    """Test season text from the given month."""
    reply = compose_climate(10, TABLES)
    assert reply.startswith("Current Season: Autumn")
    assert TABLES.climate["autumn"] in reply


def test_apologies_are_intent_specific():
    """Test that each data intent has its own apology."""
    assert responses.apology_for(Intent.FORECAST) != responses.apology_for(Intent.AIR_QUALITY)
    assert responses.apology_for(Intent.GREETING) == responses.GENERIC_APOLOGY


def test_rain_question_when_raining():
    """Test the yes answer with the rain tip."""
    snapshot = make_snapshot(place_name="London", condition_main="Rain", condition_description="light rain")
    reply = compose_conditions(snapshot, normalize("will it rain in London"), TABLES)
    assert reply == f"Yes, it's currently raining in London. {TABLES.tips['rain']} ☔"


def test_rain_question_when_dry():
    """Test the no answer."""
    snapshot = make_snapshot(place_name="London")
    reply = compose_conditions(snapshot, normalize("is it raining"), TABLES)
    assert reply == "No rain at the moment in London! Perfect weather for outdoor activities! ☀️"


def test_rain_question_other_wording():
    """Test that a drizzle condition is not reported as rain."""
    assert compose_rain_answer(make_snapshot(condition_main="Drizzle"), TABLES).startswith("No rain")


def test_conditions_without_rain_words_give_overview():
    """Test that other condition questions keep the full overview."""
    reply = compose_conditions(make_snapshot(condition_main="Rain"), normalize("is it sunny"), TABLES)
    assert reply.startswith("Weather conditions in Tokyo:")


def test_current_weather_rain_topic():
    """Test that the rain topic is checked after temperature and before wind."""
    snapshot = make_snapshot(condition_main="Rain")
    assert compose_current_weather(snapshot, normalize("rainy and windy"), TABLES).startswith("Yes, it's currently raining")
    assert compose_current_weather(snapshot, normalize("temperature and rain"), TABLES).startswith("The temperature")
