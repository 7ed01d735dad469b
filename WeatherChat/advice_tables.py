"""Static advice text used when composing replies."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class AdviceTables:
    """
    Read-only lookup tables for advice text.

    Built once at startup and handed to the composer. Every mapping is
    wrapped in a MappingProxyType so nothing can change it at runtime.
    """
    temperature_advice: Mapping[str, str]
    clothing: Mapping[str, str]
    tips: Mapping[str, str]
    climate: Mapping[str, str]
    aqi_status: Mapping[int, str]
    aqi_health: Mapping[int, str]
    aqi_labels: Mapping[int, str]
    humidity: Mapping[str, str]
    default_health: str = "Monitor air quality conditions and adjust activities accordingly."


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


def build_default_tables() -> AdviceTables:
    return AdviceTables(
        temperature_advice=_frozen({
            "extreme": "🔥 Extremely hot! Stay hydrated and avoid prolonged sun exposure.",
            "warm": "☀️ Warm and pleasant! Great weather for outdoor activities.",
            "mild": "🌤️ Mild temperature, perfect for a walk or light outdoor activities.",
            "cool": "🧥 Cool weather, you might want to wear a light jacket.",
            "cold": "❄️ Cold! Bundle up with warm clothing.",
            "very_cold": "🥶 Very cold! Dress in layers and limit time outdoors.",
        }),
        clothing=_frozen({
            "hot": "Light, breathable clothing like cotton shirts, shorts, and sandals. Don't forget sunscreen and a hat! ☀️",
            "warm": "Comfortable clothing like t-shirts and light pants. A light jacket for evening might be useful. 🌤️",
            "mild": "Layered clothing works best - t-shirt with a light sweater or jacket you can remove if needed. 👕",
            "cool": "Long sleeves, pants, and a medium jacket. Consider bringing a scarf for extra warmth. 🧥",
            "cold": "Warm layers - thermal underwear, sweater, heavy coat, gloves, and warm boots. Stay cozy! 🧤",
            "freezing": "Heavy winter clothing - insulated coat, warm hat, gloves, scarf, and waterproof boots. Layer up! ❄️",
        }),
        tips=_frozen({
            "rain": "Carry an umbrella or raincoat. Wear waterproof shoes and drive carefully on wet roads. ☔",
            "snow": "Wear warm, waterproof clothing. Drive slowly and allow extra time for travel. Clear snow from your car. ❄️",
            "wind": "Secure loose items outdoors. Be cautious when driving, especially in high-profile vehicles. 💨",
            "storm": "Stay indoors if possible. Avoid windows and seek shelter in a sturdy building. 🌩️",
            "fog": "Use fog lights when driving. Reduce speed and increase following distance. Be extra cautious. 🌫️",
            "heat": "Stay hydrated, seek shade, wear light colors, and avoid prolonged sun exposure. 🌡️",
        }),
        climate=_frozen({
            "spring": "Typically mild with increasing temperatures, occasional rain showers, and blooming vegetation. 🌸",
            "summer": "Usually the warmest season with longer days, higher humidity, and potential for thunderstorms. ☀️",
            "autumn": "Cooling temperatures, changing leaves, and more variable weather patterns. 🍂",
            "winter": "Coldest season with shorter days, potential for snow/ice, and more stable weather patterns. ❄️",
        }),
        aqi_status=_frozen({
            1: "Excellent - Air quality is ideal for outdoor activities. Perfect for exercise and spending time outside! 🌟",
            2: "Good - Air quality is acceptable. Great day for outdoor activities with minimal health concerns. ✅",
            3: "Moderate - Sensitive individuals may experience minor issues. Generally fine for most people. ⚠️",
            4: "Poor - Everyone may experience health effects. Consider limiting outdoor activities. 🚨",
            5: "Very Poor - Health alert! Avoid outdoor activities. Stay indoors with air purification if possible. 🔴",
        }),
        aqi_health=_frozen({
            1: "Perfect for all outdoor activities including exercise and sports.",
            2: "Great conditions for outdoor activities with minimal health concerns.",
            3: "Generally acceptable, but sensitive individuals should monitor symptoms.",
            4: "Consider limiting prolonged outdoor activities, especially exercise.",
            5: "Avoid outdoor activities. Stay indoors and use air purification if available.",
        }),
        aqi_labels=_frozen({1: "Good", 2: "Fair", 3: "Moderate", 4: "Poor", 5: "Very Poor"}),
        humidity=_frozen({
            "very_humid": "Very humid conditions. You might feel sticky and uncomfortable.",
            "moderate": "Moderately humid. The air feels a bit thick.",
            "comfortable": "Comfortable humidity levels.",
            "low": "Low humidity. You might experience dry skin or static.",
            "very_dry": "Very dry air. Consider using a humidifier indoors.",
        }),
    )


DEFAULT_TABLES = build_default_tables()
