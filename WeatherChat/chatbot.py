"""Chat dispatcher - one message in, one reply out."""
import logging
import random
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

import responses
from advice_tables import AdviceTables, DEFAULT_TABLES
from intents import Intent, classify, needs_weather_data
from location_extractor import LocationKind, LocationQuery, extract_location
from location_provider import (
    LocationProviderBase,
    LocationUnavailableError,
    NoLocationProvider,
    resolve_device_location,
)
from text_matching import normalize
from weather_data import PlaceQuery, WeatherSnapshot
from weather_provider import PlaceNotFoundError, WeatherProviderError
from weather_service import WeatherService


class DispatchState(Enum):
    IDLE = "idle"
    NORMALIZING = "normalizing"
    CLASSIFYING = "classifying"
    EXTRACTING_ARGUMENT = "extracting_argument"
    RESOLVING_LOCATION = "resolving_location"
    FETCHING_DATA = "fetching_data"
    COMPOSING = "composing"
    DONE = "done"


class WeatherChatbot:
    """
    Answers weather questions typed in plain language.

    Each call to ``process_message`` walks the dispatch states in order.
    Only RESOLVING_LOCATION and FETCHING_DATA suspend; every other step is
    a synchronous transform. Provider and location failures never escape:
    they become an apology fitting what was attempted.
    """

    def __init__(
        self,
        weather_service: WeatherService,
        location_provider: Optional[LocationProviderBase] = None,
        tables: AdviceTables = DEFAULT_TABLES,
        rng: Optional[random.Random] = None,
        month_source: Optional[Callable[[], int]] = None,
        location_timeout: float = 10.0,
        on_transition: Optional[Callable[[DispatchState], None]] = None
    ):
        """
        Initialize the chatbot.

        Args:
            weather_service: Cached source of weather snapshots
            location_provider: Where "here" is (defaults to unsupported)
            tables: Advice text tables
            rng: Random source for small-talk replies
            month_source: Returns the current month (1-12) for climate replies
            location_timeout: Seconds to wait for the device location
            on_transition: Called with every state the dispatcher enters
        """
        self.weather_service = weather_service
        self.location_provider = location_provider or NoLocationProvider()
        self.tables = tables
        self.rng = rng or random.Random()
        self.month_source = month_source or (lambda: datetime.now().month)
        self.location_timeout = location_timeout
        self.on_transition = on_transition

    def _enter(self, state: DispatchState) -> None:
        logging.debug(f"Dispatch state -> {state.value}")
        if self.on_transition is not None:
            self.on_transition(state)

    async def process_message(self, message: str) -> str:
        """
        Produce exactly one reply for a user message.

        Cancellation while suspended propagates to the caller and leaves the
        weather cache untouched.
        """
        self._enter(DispatchState.IDLE)
        try:
            reply = await self._dispatch(message)
        except Exception:
            logging.exception(f"Unexpected error while answering {message!r}")
            reply = responses.GENERIC_APOLOGY
        self._enter(DispatchState.DONE)
        return reply

    async def _dispatch(self, message: str) -> str:
        self._enter(DispatchState.NORMALIZING)
        tokens = normalize(message)

        self._enter(DispatchState.CLASSIFYING)
        intent = classify(tokens)
        logging.info(f"Message classified as {intent.value}")

        if not needs_weather_data(intent):
            self._enter(DispatchState.COMPOSING)
            return self._compose_without_data(intent)

        self._enter(DispatchState.EXTRACTING_ARGUMENT)
        query = extract_location(message)

        try:
            place = await self._resolve_place(query)
            self._enter(DispatchState.FETCHING_DATA)
            snapshot = await self.weather_service.get_snapshot(place)
        except LocationUnavailableError as e:
            logging.warning(f"Could not resolve device location: {e} ({e.reason.value})")
            return responses.LOCATION_APOLOGY
        except PlaceNotFoundError as e:
            logging.warning(f"Place not found: {e.place}")
            return responses.PLACE_NOT_FOUND_APOLOGY
        except WeatherProviderError as e:
            logging.error(f"Weather provider failed for {intent.value}: {e}")
            return responses.apology_for(intent)

        self._enter(DispatchState.COMPOSING)
        return self._compose_with_data(intent, snapshot, tokens)

    async def _resolve_place(self, query: LocationQuery) -> PlaceQuery:
        if query.kind is LocationKind.BY_NAME:
            return PlaceQuery.by_name(query.name)

        self._enter(DispatchState.RESOLVING_LOCATION)
        location = await resolve_device_location(self.location_provider, timeout=self.location_timeout)
        logging.info(f"Device location: ({location.lat}, {location.lon}) {location.place_name or ''}")
        return PlaceQuery.by_coords(location.lat, location.lon)

    def _compose_without_data(self, intent: Intent) -> str:
        if intent is Intent.GREETING:
            return responses.compose_greeting(self.rng)
        if intent is Intent.FAREWELL:
            return responses.compose_farewell(self.rng)
        if intent is Intent.THANKS:
            return responses.compose_thanks(self.rng)
        if intent is Intent.HELP:
            return responses.HELP_TEXT
        if intent is Intent.ABOUT:
            return responses.ABOUT_TEXT
        if intent is Intent.CLIMATE_PATTERNS:
            return responses.compose_climate(self.month_source(), self.tables)
        return responses.FALLBACK_TEXT

    def _compose_with_data(self, intent: Intent, snapshot: WeatherSnapshot, tokens: Sequence[str]) -> str:
        if intent is Intent.CLOTHING_ADVICE:
            return responses.compose_clothing_advice(snapshot, self.tables)
        if intent is Intent.WEATHER_TIPS:
            return responses.compose_weather_tips(snapshot, self.tables)
        if intent is Intent.AIR_QUALITY:
            return responses.compose_air_quality(snapshot, self.tables) or responses.apology_for(intent)
        if intent is Intent.ALERTS:
            return responses.compose_alerts(snapshot)
        if intent is Intent.FORECAST:
            return responses.compose_forecast(snapshot)
        if intent is Intent.DETAILS:
            return responses.compose_details(snapshot)
        if intent is Intent.CONDITIONS:
            return responses.compose_conditions(snapshot, tokens, self.tables)
        return responses.compose_current_weather(snapshot, tokens, self.tables)
