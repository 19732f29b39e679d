# =============================================================================
# core/flights.py  —  Flight search to the conference city
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Lists flight options for a route ("SFO-LAS").  The destination defaults
#   to Las Vegas (LAS), where the conference is held.
#
# DATA SOURCES:
#   - FLIGHT_API_URL set and USE_LIVE_DATA=true → GET {url}?origin=..&destination=..
#     which must answer {"flights": [...]} in the payload shape below
#   - otherwise a fixed table of well-known routes, and for any other route
#     a deterministic generator (same route → same options)
#
# Payload: {route, origin, destination, flights: [{airline, flight, departure,
#           arrival, duration, price, stops}], source, simulated}
# =============================================================================

import logging
import random
import zlib
from typing import Optional

from core.config import Settings
from core.errors import ProviderError
from core.http import fetch_json

logger = logging.getLogger(__name__)

DEFAULT_DESTINATION = "LAS"
SIMULATED_SOURCE = "Simulated Data"

_KNOWN_ROUTES: dict[str, list[dict]] = {
    "NYC-LAS": [
        {"airline": "United", "flight": "UA 1234", "departure": "7:30 AM",
         "arrival": "10:15 AM", "duration": "5h 45m", "price": "$285", "stops": "Nonstop"},
        {"airline": "American", "flight": "AA 5678", "departure": "1:45 PM",
         "arrival": "4:30 PM", "duration": "5h 45m", "price": "$312", "stops": "Nonstop"},
    ],
    "LAX-LAS": [
        {"airline": "United", "flight": "UA 9876", "departure": "6:00 AM",
         "arrival": "7:10 AM", "duration": "1h 10m", "price": "$195", "stops": "Nonstop"},
        {"airline": "Southwest", "flight": "WN 5432", "departure": "10:30 AM",
         "arrival": "11:40 AM", "duration": "1h 10m", "price": "$158", "stops": "Nonstop"},
    ],
    "SFO-LAS": [
        {"airline": "United", "flight": "UA 2468", "departure": "8:15 AM",
         "arrival": "9:50 AM", "duration": "1h 35m", "price": "$225", "stops": "Nonstop"},
        {"airline": "American", "flight": "AA 1357", "departure": "3:20 PM",
         "arrival": "4:55 PM", "duration": "1h 35m", "price": "$189", "stops": "Nonstop"},
    ],
    "ATL-LAS": [
        {"airline": "Delta", "flight": "DL 3691", "departure": "9:45 AM",
         "arrival": "11:20 AM", "duration": "4h 35m", "price": "$275", "stops": "Nonstop"},
        {"airline": "United", "flight": "UA 7410", "departure": "4:10 PM",
         "arrival": "7:05 PM", "duration": "5h 55m", "price": "$248", "stops": "1 stop (DEN)"},
    ],
}

_AIRLINES = (("United", "UA"), ("American", "AA"), ("Delta", "DL"), ("Southwest", "WN"),
             ("Alaska", "AS"))
_HUBS = ("DEN", "PHX", "DFW", "ORD", "SLC")


def search_flights(
    origin: str,
    destination: str = DEFAULT_DESTINATION,
    settings: Optional[Settings] = None,
) -> dict:
    settings = settings or Settings()
    origin = (origin or "").strip().upper()
    destination = (destination or DEFAULT_DESTINATION).strip().upper()
    if not origin:
        raise ValueError("origin is required")

    if settings.use_live_data and settings.flight_api_url:
        try:
            return search_flights_live(settings.flight_api_url, origin, destination)
        except ProviderError as e:
            logger.warning(f"⚠ live flight search failed for {origin}-{destination}: {e}. "
                           f"Using simulated data.")
    return search_flights_simulated(origin, destination)


def search_flights_live(url: str, origin: str, destination: str) -> dict:
    data = fetch_json(url, params={"origin": origin, "destination": destination})
    flights = data.get("flights") if isinstance(data, dict) else None
    if not isinstance(flights, list):
        raise ProviderError("flight service answered without a 'flights' list")
    return {
        "route": f"{origin}-{destination}",
        "origin": origin,
        "destination": destination,
        "flights": flights,
        "source": "Flight API (Live)",
        "simulated": False,
    }


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60:02d}m"


def _format_clock(minutes: int) -> str:
    minutes %= 24 * 60
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{(hour % 12) or 12}:{minute:02d} {suffix}"


def _generate_options(origin: str, destination: str) -> list[dict]:
    """Nonstop (pricier) and one-stop (cheaper, longer) options for a route."""
    rng = random.Random(zlib.crc32(f"{origin}-{destination}".encode()))
    options = []
    nonstop_minutes = rng.randint(75, 330)

    for _ in range(2):
        airline, code = rng.choice(_AIRLINES)
        depart = rng.randint(6 * 60, 20 * 60) // 5 * 5
        options.append({
            "airline": airline,
            "flight": f"{code} {rng.randint(100, 9999)}",
            "departure": _format_clock(depart),
            "arrival": _format_clock(depart + nonstop_minutes),
            "duration": _format_minutes(nonstop_minutes),
            "price": f"${rng.randint(220, 480)}",
            "stops": "Nonstop",
        })

    airline, code = rng.choice(_AIRLINES)
    depart = rng.randint(6 * 60, 18 * 60) // 5 * 5
    one_stop_minutes = nonstop_minutes + rng.randint(60, 150)
    options.append({
        "airline": airline,
        "flight": f"{code} {rng.randint(100, 9999)}",
        "departure": _format_clock(depart),
        "arrival": _format_clock(depart + one_stop_minutes),
        "duration": _format_minutes(one_stop_minutes),
        "price": f"${rng.randint(160, 300)}",
        "stops": f"1 stop ({rng.choice(_HUBS)})",
    })
    return options


def search_flights_simulated(origin: str, destination: str = DEFAULT_DESTINATION) -> dict:
    route = f"{origin}-{destination}"
    if origin == destination:
        flights: list[dict] = []
    else:
        flights = [dict(f) for f in _KNOWN_ROUTES.get(route, ())] or _generate_options(origin, destination)
    return {
        "route": route,
        "origin": origin,
        "destination": destination,
        "flights": flights,
        "source": SIMULATED_SOURCE,
        "simulated": True,
    }
