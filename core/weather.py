# =============================================================================
# core/weather.py  —  Current weather + 3-day forecast
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Answers "what's the weather in X?" either from LIVE services or from a
#   deterministic SIMULATED generator.
#
# DATA SOURCE TOGGLE:
#   USE_LIVE_DATA=true   → (default) wttr.in (no key), then OpenWeatherMap when
#                          OPENWEATHER_API_KEY is set, then simulated data
#   USE_LIVE_DATA=false  → simulated data only (offline, reproducible)
#
# Every provider returns the SAME payload shape:
#
#   {location, temperature, condition, humidity, windSpeed,
#    forecast: [{day, high, low, condition} × 3], source, simulated}
#
#   Temperatures are °F, wind is mph.  The synthesizer never needs to know
#   which provider answered; `source` and `simulated` say it explicitly.
# =============================================================================

import logging
import random
import urllib.parse
import zlib
from typing import Optional

from core.config import Settings
from core.errors import ProviderError
from core.http import fetch_json

logger = logging.getLogger(__name__)

FORECAST_DAY_NAMES = ("Today", "Tomorrow", "Day 3")
SIMULATED_SOURCE = "Simulated Data"


# Climate profiles for the simulated generator.  Unknown locations use the
# Las Vegas profile (the conference city).
_CLIMATES: dict[str, dict] = {
    "las vegas": {
        "base_temp": 45, "temp_range": 10, "base_humidity": 72, "base_wind": 15,
        "conditions": ["Partly Cloudy", "Cloudy", "Sunny", "Light Snow", "Overcast"],
    },
    "orlando": {
        "base_temp": 78, "temp_range": 8, "base_humidity": 65, "base_wind": 8,
        "conditions": ["Sunny", "Partly Cloudy", "Light Rain", "Thunderstorms", "Clear"],
    },
    "san francisco": {
        "base_temp": 65, "temp_range": 6, "base_humidity": 80, "base_wind": 12,
        "conditions": ["Foggy", "Partly Cloudy", "Sunny", "Overcast", "Drizzle"],
    },
}


def _to_int(value) -> int:
    return round(float(value))


# =============================================================================
# PUBLIC API: get_weather (dispatcher)
# =============================================================================
def get_weather(location: str, settings: Optional[Settings] = None) -> dict:
    """Weather for `location`: live when enabled and reachable, else simulated."""
    settings = settings or Settings()
    location = (location or "").strip() or "Las Vegas"

    if settings.use_live_data:
        try:
            return get_weather_live(location, settings.openweather_api_key)
        except ProviderError as e:
            logger.warning(f"⚠ live weather failed for {location!r}: {e}. Using simulated data.")
    return get_weather_simulated(location)


# =============================================================================
# LIVE PROVIDERS
# =============================================================================
def get_weather_live(location: str, openweather_api_key: Optional[str] = None) -> dict:
    """wttr.in first; OpenWeatherMap second when a key is configured."""
    try:
        return _from_wttr(location)
    except ProviderError as e:
        if not openweather_api_key:
            raise
        logger.info(f"wttr.in failed ({e}), trying OpenWeatherMap")
    return _from_openweathermap(location, openweather_api_key)


def _from_wttr(location: str) -> dict:
    data = fetch_json(f"https://wttr.in/{urllib.parse.quote(location)}", params={"format": "j1"})
    try:
        current = data["current_condition"][0]
        area = data["nearest_area"][0]
        forecast = [
            {
                "day": FORECAST_DAY_NAMES[i],
                "high": _to_int(day["maxtempF"]),
                "low": _to_int(day["mintempF"]),
                "condition": day["hourly"][0]["weatherDesc"][0]["value"],
            }
            for i, day in enumerate(data["weather"][:3])
        ]
        return {
            "location": f"{area['areaName'][0]['value']}, {area['country'][0]['value']}",
            "temperature": _to_int(current["temp_F"]),
            "condition": current["weatherDesc"][0]["value"],
            "humidity": int(current["humidity"]),
            "windSpeed": _to_int(current["windspeedMiles"]),
            "forecast": forecast,
            "source": "wttr.in (Live)",
            "simulated": False,
        }
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ProviderError(f"unexpected wttr.in payload: {e}") from e


def _from_openweathermap(location: str, api_key: str) -> dict:
    params = {"q": location, "appid": api_key, "units": "imperial"}
    current = fetch_json("https://api.openweathermap.org/data/2.5/weather", params=params)
    outlook = fetch_json("https://api.openweathermap.org/data/2.5/forecast", params=params)
    try:
        entries = outlook["list"]
        forecast = []
        for i, name in enumerate(FORECAST_DAY_NAMES):
            # 3-hourly entries: 8 per day
            entry = entries[i * 8] if i * 8 < len(entries) else entries[0]
            forecast.append({
                "day": name,
                "high": _to_int(entry["main"]["temp_max"]),
                "low": _to_int(entry["main"]["temp_min"]),
                "condition": entry["weather"][0]["description"].title(),
            })
        return {
            "location": f"{current['name']}, {current['sys']['country']}",
            "temperature": _to_int(current["main"]["temp"]),
            "condition": current["weather"][0]["description"].title(),
            "humidity": int(current["main"]["humidity"]),
            "windSpeed": _to_int(current["wind"]["speed"]),
            "forecast": forecast,
            "source": "OpenWeatherMap (Live)",
            "simulated": False,
        }
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ProviderError(f"unexpected OpenWeatherMap payload: {e}") from e


# =============================================================================
# SIMULATED PROVIDER: deterministic per location
# =============================================================================
def _climate_for(location: str) -> dict:
    lower = location.lower()
    for name, climate in _CLIMATES.items():
        if name in lower:
            return climate
    return _CLIMATES["las vegas"]


def get_weather_simulated(location: str) -> dict:
    """Plausible weather for `location`; same location → same answer."""
    rng = random.Random(zlib.crc32(location.lower().encode()))
    climate = _climate_for(location)

    temperature = round(climate["base_temp"] + (rng.random() - 0.5) * climate["temp_range"])
    forecast = []
    for name in FORECAST_DAY_NAMES:
        day_temp = temperature + (rng.random() - 0.5) * 8
        forecast.append({
            "day": name,
            "high": round(day_temp + 3 + rng.random() * 5),
            "low": round(day_temp - 3 - rng.random() * 5),
            "condition": rng.choice(climate["conditions"]),
        })

    return {
        "location": location,
        "temperature": temperature,
        "condition": rng.choice(climate["conditions"]),
        "humidity": round(climate["base_humidity"] + (rng.random() - 0.5) * 20),
        "windSpeed": max(0, round(climate["base_wind"] + (rng.random() - 0.5) * 10)),
        "forecast": forecast,
        "source": SIMULATED_SOURCE,
        "simulated": True,
    }
