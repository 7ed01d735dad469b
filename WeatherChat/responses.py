"""Reply composition - pure functions from weather data to chat text."""
import math
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from advice_tables import DEFAULT_TABLES, AdviceTables
from intents import Intent
from text_matching import contains_any
from weather_data import WeatherSnapshot

ASSISTANT_NAME = "Weather Assistant"

GREETINGS = (
    "👋 Hi there! How can I help you with the weather today?",
    "Hello! Ready to talk about the weather?",
    "Hey! What would you like to know about the weather?",
    "Hi! I'm here to help with your weather questions!",
)

FAREWELLS = (
    "Goodbye! Have a great day! ☀️",
    "See you later! Stay weather-ready! 🌤️",
    "Take care! Come back if you need more weather updates! 👋",
    "Bye! Don't forget your umbrella if it's going to rain! ☔",
)

THANKS_REPLIES = (
    "You're welcome! Let me know if you need anything else! 😊",
    "Anytime! I'm always here to help with weather info! ☀️",
    "My pleasure! Feel free to ask more questions! 🌤️",
    "No problem! That's what I'm here for! 👍",
)

HELP_TEXT = """Here's what you can ask me about:

🌤️ **Weather Information:**
• Current weather in any city
• Weather forecast and predictions
• Temperature, humidity, wind conditions
• Rain, snow, and storm forecasts

🧥 **Weather Advice:**
• What to wear based on weather
• Weather tips and recommendations
• Should I bring an umbrella?

🌍 **Advanced Weather:**
• Air quality and pollution levels
• Weather alerts and warnings
• Climate patterns and seasonal info

Just ask me naturally - I understand conversational language! 😊"""

ABOUT_TEXT = (
    f"I'm {ASSISTANT_NAME} 🌤️, a chat assistant that turns live weather data into "
    "friendly advice. Say 'help' to see everything I can do!"
)

FALLBACK_TEXT = """I understand you're asking about weather, but could you be more specific? You can ask about:
• Current weather in any city
• Weather near you
• Rain forecast and precipitation
• Temperature and feels-like temperature
• Weekly forecast and upcoming weather
• Air quality and pollution levels
• Weather alerts and warnings
• Clothing advice for the weather
• Weather tips and recommendations

Or try saying 'help' to see all my capabilities! 🌤️"""

ALERTS_GUIDANCE_TEXT = """Weather Alert Information:

⚠️ There are no active alerts reported for {place} right now.

Current Safety Checks:
• Monitor local weather services for official warnings
• Check radar for approaching storms
• Be aware of seasonal weather patterns
• Have emergency supplies ready during severe weather seasons

For official weather alerts and warnings, I recommend checking your local meteorological service."""

CLIMATE_TIPS = """🌍 Climate Tips:
• Weather patterns can vary significantly by geographic location
• Coastal areas tend to have more moderate temperatures
• Mountain regions experience more variable weather
• Urban areas may be warmer due to the heat island effect"""

LOCATION_APOLOGY = (
    "I couldn't get your location. Please make sure you've allowed location access, "
    "or specify a city name."
)
PLACE_NOT_FOUND_APOLOGY = "Sorry, I couldn't find that city. Please try another one!"
GENERIC_APOLOGY = "Sorry, I couldn't process that right now."

APOLOGIES: Dict[Intent, str] = {
    Intent.CURRENT_WEATHER: (
        "I couldn't get the weather information. Please try again with a different location "
        "or check the city name."
    ),
    Intent.FORECAST: "Sorry, I couldn't get the forecast information. Please try again later.",
    Intent.DETAILS: "Sorry, I couldn't get the detailed weather information. Please try again later.",
    Intent.CONDITIONS: "Sorry, I couldn't get the current weather conditions. Please try again later.",
    Intent.CLOTHING_ADVICE: (
        "I couldn't get the current weather for clothing advice. Please specify a city "
        "or enable location access."
    ),
    Intent.WEATHER_TIPS: (
        "I couldn't get weather information for tips. Please specify a city or enable location access."
    ),
    Intent.AIR_QUALITY: (
        "I couldn't get air quality information. Please try again or specify a different location."
    ),
    Intent.ALERTS: (
        "I couldn't access weather alert information. Please check local weather services "
        "for official warnings."
    ),
}

TEMPERATURE_TOPIC = ("temperature", "degrees", "how hot", "how cold", "how warm")
RAIN_TOPIC = ("rain", "raining", "rainfall", "precipitation", "rainy")
WIND_TOPIC = ("wind", "windy", "wind speed", "breeze")
HUMIDITY_TOPIC = ("humidity", "humid", "moisture")

COMPASS_POINTS = (
    "North", "North-Northeast", "Northeast", "East-Northeast", "East",
    "East-Southeast", "Southeast", "South-Southeast", "South",
    "South-Southwest", "Southwest", "West-Southwest", "West",
    "West-Northwest", "Northwest", "North-Northwest",
)


def apology_for(intent: Intent) -> str:
    return APOLOGIES.get(intent, GENERIC_APOLOGY)


def _whole(value: float) -> int:
    """Round half up, so 20.5 reads as 21 rather than 20."""
    return int(math.floor(value + 0.5))


def _number(value) -> str:
    """Render a reading without a spurious trailing .0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _local_time(timestamp: int, offset_seconds: int) -> datetime:
    return datetime.fromtimestamp(timestamp + offset_seconds, tz=timezone.utc)


# --- threshold tables -------------------------------------------------------

def temperature_advice(temp: float, tables: AdviceTables) -> str:
    advice = tables.temperature_advice
    if temp > 35:
        return advice["extreme"]
    if temp > 25:
        return advice["warm"]
    if temp > 15:
        return advice["mild"]
    if temp > 5:
        return advice["cool"]
    if temp > -5:
        return advice["cold"]
    return advice["very_cold"]


def clothing_for_temperature(temp: float, tables: AdviceTables) -> str:
    clothing = tables.clothing
    if temp > 30:
        return clothing["hot"]
    if temp > 20:
        return clothing["warm"]
    if temp > 15:
        return clothing["mild"]
    if temp > 5:
        return clothing["cool"]
    if temp > -5:
        return clothing["cold"]
    return clothing["freezing"]


def humidity_level(humidity: float, tables: AdviceTables) -> str:
    levels = tables.humidity
    if humidity > 80:
        return levels["very_humid"]
    if humidity > 60:
        return levels["moderate"]
    if humidity > 40:
        return levels["comfortable"]
    if humidity > 20:
        return levels["low"]
    return levels["very_dry"]


def health_recommendation(aqi: int, tables: AdviceTables) -> str:
    return tables.aqi_health.get(aqi, tables.default_health)


def wind_direction(degrees: float) -> str:
    """16-point compass name for a bearing in degrees."""
    index = _whole((degrees % 360) / 22.5)
    return COMPASS_POINTS[index % 16]


def season_for_month(month: int) -> str:
    """Northern-hemisphere meteorological season for a month (1-12)."""
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "autumn"
    return "winter"


def weather_insights(snapshot: WeatherSnapshot) -> str:
    insights = []
    if snapshot.temp > 30:
        insights.append("🔥 Hot day ahead - stay hydrated!")
    if snapshot.humidity > 80:
        insights.append("💧 High humidity - expect muggy conditions")
    if snapshot.wind_speed > 10:
        insights.append("💨 Windy conditions - secure loose items")
    if snapshot.visibility is not None and snapshot.visibility < 5000:
        insights.append("🌫️ Reduced visibility - drive carefully")
    if "Rain" in snapshot.condition_main:
        insights.append("☔ Rain expected - bring an umbrella")
    return "\n".join(insights) if insights else "🌤️ Pleasant weather conditions overall!"


# --- conversational replies --------------------------------------------------

def compose_greeting(rng: random.Random) -> str:
    return rng.choice(GREETINGS)


def compose_farewell(rng: random.Random) -> str:
    return rng.choice(FAREWELLS)


def compose_thanks(rng: random.Random) -> str:
    return rng.choice(THANKS_REPLIES)


def compose_climate(month: int, tables: AdviceTables) -> str:
    season = season_for_month(month)
    return (
        f"Current Season: {season.capitalize()}\n\n"
        f"{tables.climate[season]}\n\n"
        f"{CLIMATE_TIPS}\n\n"
        "Would you like specific climate information for a particular city or region?"
    )


# --- data-backed replies ----------------------------------------------------

def compose_current_weather(snapshot: WeatherSnapshot, tokens: Sequence[str], tables: AdviceTables) -> str:
    """
    Answer a current-weather question.

    The message picks the angle: temperature, wind or humidity questions get
    a focused answer, anything else gets the full summary.
    """
    name = snapshot.place_name

    if contains_any(tokens, TEMPERATURE_TOPIC):
        return (
            f"The temperature in {name} is {_whole(snapshot.temp)}°C and feels like "
            f"{_whole(snapshot.feels_like)}°C 🌡️\n\n{temperature_advice(snapshot.feels_like, tables)}"
        )

    if contains_any(tokens, RAIN_TOPIC):
        return compose_rain_answer(snapshot, tables)

    if contains_any(tokens, WIND_TOPIC):
        gusts = f" with gusts up to {_number(snapshot.wind_gust)} m/s" if snapshot.wind_gust else ""
        advice = tables.tips["wind"] if snapshot.wind_speed > 10 else "Light winds, perfect for outdoor activities!"
        return f"The wind speed in {name} is {_number(snapshot.wind_speed)} m/s{gusts} 💨\n\n{advice}"

    if contains_any(tokens, HUMIDITY_TOPIC):
        return (
            f"The humidity in {name} is {_number(snapshot.humidity)}% 💧\n\n"
            f"{humidity_level(snapshot.humidity, tables)}"
        )

    lines = [
        f"Current weather in {name}:",
        f"• Temperature: {_whole(snapshot.temp)}°C",
        f"• Feels like: {_whole(snapshot.feels_like)}°C",
        f"• Conditions: {snapshot.condition_description}",
        f"• Humidity: {_number(snapshot.humidity)}%",
        f"• Wind: {_number(snapshot.wind_speed)} m/s",
    ]
    if snapshot.visibility is not None:
        lines.append(f"• Visibility: {snapshot.visibility / 1000:.1f} km")
    if snapshot.has_rain:
        lines.append(f"• Rainfall: {_number(snapshot.rain_amount)}mm")
    if snapshot.air_quality is not None:
        label = tables.aqi_labels.get(snapshot.air_quality.aqi, "Unknown")
        lines.append(f"• Air Quality: {label}")
    if snapshot.alerts:
        lines.append("")
        lines.append(f"⚠️ Weather Alert: {snapshot.alerts[0].event}")
    if snapshot.forecast:
        lines.append("")
        lines.append("Upcoming weather:")
        for sample in snapshot.forecast[:4]:
            hour = _local_time(sample.timestamp, snapshot.timezone_offset).hour
            lines.append(f"• {hour}:00 - {_whole(sample.temp)}°C, {sample.condition_description}")

    lines.append("")
    lines.append("💡 Weather Insights:")
    lines.append(weather_insights(snapshot))
    return "\n".join(lines)


def compose_forecast(snapshot: WeatherSnapshot, max_days: int = 5) -> str:
    """Group forecast samples into local days and summarise each one."""
    if not snapshot.forecast:
        return f"No forecast data is available for {snapshot.place_name} right now."

    days: Dict[str, dict] = {}
    for sample in snapshot.forecast:
        local = _local_time(sample.timestamp, snapshot.timezone_offset)
        key = local.date().isoformat()
        if key not in days:
            days[key] = {"label": local.strftime("%A"), "temps": [], "conditions": []}
        day = days[key]
        day["temps"].append(sample.temp)
        if sample.condition_main not in day["conditions"]:
            day["conditions"].append(sample.condition_main)

    lines = [f"5-day forecast for {snapshot.place_name}:", ""]
    for day in list(days.values())[:max_days]:
        conditions = day["conditions"]
        lines.append(f"{day['label']}:")
        lines.append(f"• Temperature: {_whole(min(day['temps']))}°C to {_whole(max(day['temps']))}°C")
        lines.append(f"• Conditions: {', '.join(conditions)}")
        if "Rain" in conditions:
            lines.append("• Rain expected")
        if "Snow" in conditions:
            lines.append("• Snow expected")
        if "Thunderstorm" in conditions:
            lines.append("• Thunderstorms possible")
        lines.append("")
    return "\n".join(lines).rstrip()


def compose_details(snapshot: WeatherSnapshot) -> str:
    lines = [
        f"Detailed weather information for {snapshot.place_name}:",
        "",
        "Temperature:",
        f"• Current: {_whole(snapshot.temp)}°C",
        f"• Feels like: {_whole(snapshot.feels_like)}°C",
    ]
    if snapshot.temp_min is not None:
        lines.append(f"• Min: {_whole(snapshot.temp_min)}°C")
    if snapshot.temp_max is not None:
        lines.append(f"• Max: {_whole(snapshot.temp_max)}°C")

    lines += ["", "Atmospheric Conditions:", f"• Humidity: {_number(snapshot.humidity)}%"]
    if snapshot.pressure is not None:
        lines.append(f"• Pressure: {_number(snapshot.pressure)} hPa")
    if snapshot.visibility is not None:
        lines.append(f"• Visibility: {snapshot.visibility / 1000:.1f} km")

    lines += ["", "Wind:", f"• Speed: {_number(snapshot.wind_speed)} m/s"]
    if snapshot.wind_deg is not None:
        lines.append(f"• Direction: {wind_direction(snapshot.wind_deg)}")
    if snapshot.wind_gust:
        lines.append(f"• Gusts: {_number(snapshot.wind_gust)} m/s")

    air = snapshot.air_quality
    if air is not None:
        lines += ["", "Air Quality:"]
        for label, value in (("PM2.5", air.pm2_5), ("PM10", air.pm10), ("NO2", air.no2), ("O3", air.o3)):
            if value is not None:
                lines.append(f"• {label}: {value} μg/m³")

    for title, last_hour, last_3h in (
        ("Rain", snapshot.rain_1h, snapshot.rain_3h),
        ("Snow", snapshot.snow_1h, snapshot.snow_3h),
    ):
        if last_hour or last_3h:
            lines += ["", f"{title}:"]
            if last_hour:
                lines.append(f"• Last hour: {last_hour} mm")
            if last_3h:
                lines.append(f"• Last 3 hours: {last_3h} mm")

    return "\n".join(lines)


def compose_rain_answer(snapshot: WeatherSnapshot, tables: AdviceTables) -> str:
    """Yes/no answer to "is it raining" from the current condition."""
    if "rain" in snapshot.condition_main.lower():
        return f"Yes, it's currently raining in {snapshot.place_name}. {tables.tips['rain']} ☔"
    return f"No rain at the moment in {snapshot.place_name}! Perfect weather for outdoor activities! ☀️"


def compose_conditions(
    snapshot: WeatherSnapshot,
    tokens: Sequence[str] = (),
    tables: AdviceTables = DEFAULT_TABLES
) -> str:
    """Condition overview, or a direct yes/no when the question is about rain."""
    if contains_any(tokens, RAIN_TOPIC):
        return compose_rain_answer(snapshot, tables)

    lines = [
        f"Weather conditions in {snapshot.place_name}:",
        "",
        "Current Conditions:",
        f"• {snapshot.condition_description}",
    ]
    if snapshot.cloudiness is not None:
        lines.append(f"• Cloud cover: {snapshot.cloudiness}%")

    if snapshot.has_rain or snapshot.has_snow:
        lines += ["", "Precipitation:"]
        if snapshot.has_rain:
            lines.append(f"• Rain: {_number(snapshot.rain_amount)} mm")
        if snapshot.has_snow:
            lines.append(f"• Snow: {_number(snapshot.snow_amount)} mm")

    upcoming = [sample.condition_main.lower() for sample in snapshot.forecast[:8]]
    lines += ["", "Next 24 hours:"]
    expected = []
    if "rain" in upcoming:
        expected.append("• Rain expected")
    if "snow" in upcoming:
        expected.append("• Snow expected")
    if "thunderstorm" in upcoming:
        expected.append("• Thunderstorms possible")
    lines += expected or ["• No precipitation expected"]

    if snapshot.alerts:
        lines += ["", "⚠️ Weather Alerts:"]
        lines += [f"• {alert.event}: {alert.description}" for alert in snapshot.alerts]

    return "\n".join(lines)


def compose_clothing_advice(snapshot: WeatherSnapshot, tables: AdviceTables) -> str:
    """Clothing band by feels-like temperature plus at most one extra tip."""
    condition = snapshot.condition_main.lower()
    advice = clothing_for_temperature(snapshot.feels_like, tables)

    if "rain" in condition:
        advice += "\n\n☔ Additional tip: " + tables.tips["rain"]
    elif "snow" in condition:
        advice += "\n\n❄️ Additional tip: " + tables.tips["snow"]
    elif snapshot.wind_speed > 8:
        advice += "\n\n💨 Additional tip: " + tables.tips["wind"]

    return (
        f"Clothing advice for {snapshot.place_name} ({_whole(snapshot.temp)}°C, "
        f"feels like {_whole(snapshot.feels_like)}°C):\n\n{advice}"
    )


def compose_weather_tips(snapshot: WeatherSnapshot, tables: AdviceTables) -> str:
    condition = snapshot.condition_main.lower()
    tips: List[str] = []

    if snapshot.temp > 30:
        tips.append("🌡️ " + tables.tips["heat"])

    if "rain" in condition:
        tips.append("☔ " + tables.tips["rain"])
    elif "snow" in condition:
        tips.append("❄️ " + tables.tips["snow"])
    elif "thunderstorm" in condition:
        tips.append("🌩️ " + tables.tips["storm"])
    elif snapshot.visibility is not None and snapshot.visibility < 5000:
        tips.append("🌫️ " + tables.tips["fog"])

    if snapshot.wind_speed > 10:
        tips.append("💨 " + tables.tips["wind"])

    if not tips:
        tips.append("🌤️ Great weather conditions! Perfect for outdoor activities and no special precautions needed.")

    return f"Weather tips for {snapshot.place_name}:\n\n" + "\n\n".join(tips)


def compose_air_quality(snapshot: WeatherSnapshot, tables: AdviceTables) -> Optional[str]:
    """Air quality report, or None when the snapshot carries no reading."""
    air = snapshot.air_quality
    if air is None:
        return None

    def figure(value) -> str:
        return "n/a" if value is None else f"{value} μg/m³"

    status = tables.aqi_status.get(air.aqi, "Unknown")
    return f"""Air Quality Information for {snapshot.place_name}:
• Air Quality Index: {air.aqi}/5
• Status: {status}

Detailed Pollutant Levels:
• PM2.5: {figure(air.pm2_5)}
• PM10: {figure(air.pm10)}
• NO2: {figure(air.no2)}
• O3: {figure(air.o3)}
• CO: {figure(air.co)}

💡 Health Recommendation: {health_recommendation(air.aqi, tables)}"""


def compose_alerts(snapshot: WeatherSnapshot) -> str:
    if not snapshot.alerts:
        return ALERTS_GUIDANCE_TEXT.format(place=snapshot.place_name)

    lines = [f"⚠️ Active weather alerts for {snapshot.place_name}:", ""]
    for alert in snapshot.alerts:
        lines.append(f"• {alert.event}: {alert.description}" if alert.description else f"• {alert.event}")
    lines += ["", "Please follow the guidance of your local authorities and stay safe."]
    return "\n".join(lines)
