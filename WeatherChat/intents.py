"""Intent catalogue and first-match classification."""
import logging
from enum import Enum
from typing import Sequence, Tuple

from text_matching import contains_any


class Intent(Enum):
    GREETING = "greeting"
    FAREWELL = "farewell"
    THANKS = "thanks"
    HELP = "help"
    ABOUT = "about"
    CLOTHING_ADVICE = "clothing_advice"
    WEATHER_TIPS = "weather_tips"
    AIR_QUALITY = "air_quality"
    CLIMATE_PATTERNS = "climate_patterns"
    ALERTS = "alerts"
    FORECAST = "forecast"
    DETAILS = "details"
    CONDITIONS = "conditions"
    CURRENT_WEATHER = "current_weather"
    FALLBACK = "fallback"


# Checked top to bottom, first hit wins. Conversational intents come before
# anything weather related, and advice/air/climate/alerts come before the
# generic current-weather phrases.
INTENT_PATTERNS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.GREETING, ("hi", "hello", "hey", "good morning", "good afternoon", "good evening")),
    (Intent.FAREWELL, ("bye", "goodbye", "see you", "take care")),
    (Intent.THANKS, ("thank", "thanks", "appreciate", "thx")),
    (Intent.HELP, ("help", "what can you do", "how to use")),
    (Intent.ABOUT, ("who are you", "what are you", "who made you", "who created you", "developer", "who developed")),
    (Intent.CLOTHING_ADVICE, ("what to wear", "clothing", "dress", "outfit", "should i wear")),
    (Intent.WEATHER_TIPS, ("tips", "advice", "should i bring", "umbrella", "jacket")),
    (Intent.AIR_QUALITY, ("air quality", "pollution", "aqi", "air pollution", "smog")),
    (Intent.CLIMATE_PATTERNS, ("climate", "seasonal", "season", "typical climate")),
    (Intent.ALERTS, ("alert", "warning", "severe", "emergency", "dangerous")),
    (Intent.FORECAST, ("forecast", "tomorrow", "upcoming", "next days", "week", "later")),
    (Intent.DETAILS, ("details", "detailed", "pressure", "visibility", "gusts")),
    (Intent.CONDITIONS, (
        "conditions", "rain", "raining", "rainy", "precipitation",
        "sunny", "cloudy", "overcast", "snowy", "snowing", "storm", "thunder",
    )),
    (Intent.CURRENT_WEATHER, (
        "weather", "current weather", "temperature", "degrees",
        "wind", "windy", "breeze", "humidity", "humid", "outside",
    )),
)

# Intents answered from the reply tables alone.
CONVERSATIONAL_INTENTS = frozenset({
    Intent.GREETING,
    Intent.FAREWELL,
    Intent.THANKS,
    Intent.HELP,
    Intent.ABOUT,
    Intent.CLIMATE_PATTERNS,
    Intent.FALLBACK,
})


def classify(tokens: Sequence[str]) -> Intent:
    """Return the first intent whose phrases match, or FALLBACK."""
    for intent, phrases in INTENT_PATTERNS:
        if contains_any(tokens, phrases):
            logging.debug(f"Classified {list(tokens)} as {intent.value}")
            return intent
    logging.debug(f"No intent matched {list(tokens)}, using fallback")
    return Intent.FALLBACK


def needs_weather_data(intent: Intent) -> bool:
    return intent not in CONVERSATIONAL_INTENTS
