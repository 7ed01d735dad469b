"""Terminal chat front-end for the weather assistant."""
import argparse
import asyncio
import logging
import os
import random
import signal
import sys
from typing import Optional, Tuple

from dotenv import load_dotenv

from chatbot import WeatherChatbot
from location_provider import IpLocationProvider, LocationProviderBase, StaticLocationProvider
from openweather_provider import OpenWeatherProvider
from responses import ASSISTANT_NAME
from weather_service import WeatherService

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-chat.log")
EXIT_COMMANDS = {"quit", "exit", "/quit", "/exit"}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather chat assistant")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--cache-ttl", type=int, default=900, help="Seconds a weather snapshot stays fresh")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--location-timeout", type=float, default=10.0, help="Seconds to wait for device location")
    parser.add_argument("--seed", type=int, default=None, help="Seed for small-talk reply selection")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_config() -> Tuple[str, Optional[float], Optional[float], str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY") or os.getenv("OPENWEATHER_API_KEY")
    lat = os.getenv("WEATHER_LAT")
    lon = os.getenv("WEATHER_LON")
    lang = os.getenv("WEATHER_LANG", "en")

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")
    if bool(lat) != bool(lon):
        raise SystemExit("Set both WEATHER_LAT and WEATHER_LON, or neither")

    lat_val = lon_val = None
    if lat and lon:
        try:
            lat_val = float(lat)
            lon_val = float(lon)
        except ValueError as exc:
            raise SystemExit(f"Invalid coordinates: {exc}") from exc

    logging.info("Configuration loaded: lat=%s lon=%s lang=%s", lat_val, lon_val, lang)
    return api_key, lat_val, lon_val, lang


def build_location_provider(lat: Optional[float], lon: Optional[float], args: argparse.Namespace) -> LocationProviderBase:
    if lat is not None and lon is not None:
        logging.info("Using fixed device location (%s, %s)", lat, lon)
        return StaticLocationProvider(lat, lon)
    logging.info("No fixed location configured, using IP lookup")
    return IpLocationProvider(timeout=args.timeout)


def build_chatbot(api_key: str, lat: Optional[float], lon: Optional[float], lang: str, args: argparse.Namespace) -> WeatherChatbot:
    provider = OpenWeatherProvider(
        api_key=api_key,
        units="metric",
        lang=lang,
        timeout=args.timeout,
    )
    service = WeatherService(provider=provider, cache_ttl_seconds=args.cache_ttl)
    logging.info("Weather service ready (cache ttl=%ss)", args.cache_ttl)
    return WeatherChatbot(
        weather_service=service,
        location_provider=build_location_provider(lat, lon, args),
        rng=random.Random(args.seed),
        location_timeout=args.location_timeout,
    )


def chat_loop(bot: WeatherChatbot, stdin=sys.stdin, stdout=sys.stdout) -> None:
    """
    Read one message per line and print one reply per message until EOF or quit.

    Input is read on the calling thread so SIGINT and SIGTERM interrupt the
    wait; each message gets its own event loop.
    """
    print(f"Hi! I'm your {ASSISTANT_NAME}. Ask me anything about weather! (type 'quit' to leave)", file=stdout)
    while True:
        print("> ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        message = line.strip()
        if not message:
            continue
        if message.lower() in EXIT_COMMANDS:
            break
        reply = asyncio.run(bot.process_message(message))
        print(reply, file=stdout)
        print(file=stdout)


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_file, args.verbose)
    api_key, lat, lon, lang = load_config()
    bot = build_chatbot(api_key, lat, lon, lang, args)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        chat_loop(bot)
    except KeyboardInterrupt:
        logging.info("Stopping chat")
    finally:
        logging.info("Goodbye")


if __name__ == "__main__":
    main()
