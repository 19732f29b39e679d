# =============================================================================
# agent/capabilities.py  —  The capability registry (what the agent CAN do)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares every capability the agent can invoke, grouped into three
#   strands, each served by one (logical) MCP server:
#
#   ┌───────────────┬──────────────────────────┬───────────────────────────────┐
#   │ strand        │ server                   │ capabilities                  │
#   ├───────────────┼──────────────────────────┼───────────────────────────────┤
#   │ conference    │ reinvent-schedule-server │ search_sessions,              │
#   │               │                          │ get_session_details,          │
#   │               │                          │ recommend_sessions,           │
#   │               │                          │ create_personalized_schedule, │
#   │               │                          │ get_schedule_by_day,          │
#   │               │                          │ get_conference_info           │
#   │ documentation │ aws-documentation-server │ search_aws_docs               │
#   │ liveData      │ live-data-server         │ get_weather, get_stock_price, │
#   │               │                          │ search_flights                │
#   └───────────────┴──────────────────────────┴───────────────────────────────┘
#
#   Every capability has the same shape: a name, a group, a parameter schema
#   and an async invoke().  invoke() validates and coerces parameters against
#   the schema first, so handlers only ever see clean input.  Synchronous
#   handlers (catalog lookups, HTTP providers) run in worker threads.
#
#   The registry is built ONCE from an AgentContext and is read-only after
#   that; concurrent requests share it safely.
# =============================================================================

import asyncio
from dataclasses import asdict, dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterator, Mapping, Optional, Union

from core.agenda import build_agenda
from core.errors import InvocationError
from core.flights import search_flights
from core.models import ParameterSpec, StrandGroup
from core.recommendations import (
    conference_info,
    recommend_events,
    schedule_by_day,
    search_sessions,
    session_details,
)
from core.stocks import get_stock_price
from core.vocabulary import DEFAULT_ROLE, DEFAULT_TOPICS
from core.weather import get_weather


class CapabilityName(str, Enum):
    SEARCH_SESSIONS = "search_sessions"
    GET_SESSION_DETAILS = "get_session_details"
    RECOMMEND_SESSIONS = "recommend_sessions"
    CREATE_PERSONALIZED_SCHEDULE = "create_personalized_schedule"
    GET_SCHEDULE_BY_DAY = "get_schedule_by_day"
    GET_CONFERENCE_INFO = "get_conference_info"
    SEARCH_AWS_DOCS = "search_aws_docs"
    GET_WEATHER = "get_weather"
    GET_STOCK_PRICE = "get_stock_price"
    SEARCH_FLIGHTS = "search_flights"


STRANDS: Mapping[str, StrandGroup] = MappingProxyType({
    "conference": StrandGroup(
        key="conference",
        name="AWS re:Invent Conference",
        description="Session search, recommendations and personalized agendas",
        server="reinvent-schedule-server",
    ),
    "documentation": StrandGroup(
        key="documentation",
        name="AWS Documentation",
        description="Official AWS documentation via the AWS documentation MCP server",
        server="aws-documentation-server",
    ),
    "liveData": StrandGroup(
        key="liveData",
        name="Live Data",
        description="Weather, stock prices and flights",
        server="live-data-server",
    ),
})

Handler = Callable[[dict], Union[Any, Awaitable[Any]]]

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off"}


def _coerce(capability: str, spec: ParameterSpec, value: Any) -> Any:
    """Coerce one raw value to the declared type, or raise InvocationError."""
    where = f"{capability}.{spec.name}"
    if spec.type == "array":
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple, set, frozenset)):
            return [str(item).strip() for item in value if str(item).strip()]
        raise InvocationError(f"{where} must be a list, got {type(value).__name__}")
    if spec.type == "integer":
        if isinstance(value, bool):
            raise InvocationError(f"{where} must be an integer, got a boolean")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise InvocationError(f"{where} must be an integer, got {value!r}") from None
    if spec.type == "boolean":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise InvocationError(f"{where} must be a boolean, got {value!r}")
    if isinstance(value, (dict, list)):
        raise InvocationError(f"{where} must be a string, got {type(value).__name__}")
    return str(value).strip()


@dataclass(frozen=True)
class Capability:
    name: CapabilityName
    group: str
    description: str
    parameters: tuple[ParameterSpec, ...]
    handler: Handler

    def validate(self, raw: Optional[Mapping[str, Any]]) -> dict:
        """Required present, types coerced, defaults applied, extras dropped."""
        if raw is not None and not isinstance(raw, Mapping):
            raise InvocationError(f"{self.name.value}: parameters must be an object")
        raw = raw or {}
        clean: dict[str, Any] = {}
        for spec in self.parameters:
            value = raw.get(spec.name)
            if value is None or (isinstance(value, str) and not value.strip()):
                if spec.required:
                    raise InvocationError(
                        f"{self.name.value}: missing required parameter '{spec.name}'"
                    )
                default = spec.default
                clean[spec.name] = list(default) if isinstance(default, (list, tuple)) else default
                continue
            clean[spec.name] = _coerce(self.name.value, spec, value)
        return clean

    async def invoke(self, raw: Optional[Mapping[str, Any]] = None) -> Any:
        params = self.validate(raw)
        if asyncio.iscoroutinefunction(self.handler):
            return await self.handler(params)
        return await asyncio.to_thread(self.handler, params)

    def describe(self) -> str:
        lines = [f"{self.name.value} ({self.group} strand): {self.description}"]
        lines.append("  Parameters:" if self.parameters else "  Parameters: none")
        lines.extend(f"    {spec.describe()}" for spec in self.parameters)
        return "\n".join(lines)


class CapabilityRegistry(Mapping[str, Capability]):
    """Read-only name → Capability mapping."""

    def __init__(self, capabilities):
        table: dict[str, Capability] = {}
        for capability in capabilities:
            if capability.group not in STRANDS:
                raise ValueError(f"{capability.name.value}: unknown strand {capability.group!r}")
            if capability.name.value in table:
                raise ValueError(f"duplicate capability {capability.name.value}")
            table[capability.name.value] = capability
        self._table = MappingProxyType(table)

    def __getitem__(self, name: str) -> Capability:
        return self._table[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def in_group(self, group: str) -> list[Capability]:
        return [c for c in self._table.values() if c.group == group]


def catalog_description(registry: CapabilityRegistry) -> str:
    """Strands and capabilities as plain text, for the planner prompt."""
    strands = "\n".join(
        f"{key}: {strand.description} (server: {strand.server}; tools: "
        f"{', '.join(c.name.value for c in registry.in_group(key))})"
        for key, strand in STRANDS.items()
    )
    tools = "\n\n".join(c.describe() for c in registry.values())
    return f"STRANDS:\n{strands}\n\nTOOLS:\n{tools}"


# =============================================================================
# build_registry — bind every capability to the request-independent context
# =============================================================================
def build_registry(context) -> CapabilityRegistry:
    """Create the registry for an AgentContext (repository, settings, docs client)."""
    repository = context.repository
    settings = context.settings

    def _search(p: dict) -> dict:
        return search_sessions(repository, p["query"], p["track"], p["level"],
                               p["day"], p["venue"], p["limit"])

    def _details(p: dict) -> dict:
        return session_details(repository, p["session_id"])

    def _recommend(p: dict) -> dict:
        return recommend_events(repository.all(), p["interests"], p["role"],
                                p["level"], p["limit"])

    def _schedule(p: dict) -> dict:
        agenda = build_agenda(
            repository.all(), p["learning_topics"], p["role"], p["experience_level"],
            max_per_day=p["max_sessions_per_day"], avoid_conflicts=p["avoid_conflicts"],
        )
        return asdict(agenda)

    def _by_day(p: dict) -> dict:
        return schedule_by_day(repository, p["day"])

    def _info(p: dict) -> dict:
        return conference_info(repository)

    async def _docs(p: dict) -> dict:
        return await context.docs_client.search(p["query"], p["service"])

    def _weather(p: dict) -> dict:
        return get_weather(p["location"], settings)

    def _stock(p: dict) -> dict:
        return get_stock_price(p["symbol"], settings)

    def _flights(p: dict) -> dict:
        return search_flights(p["origin"], p["destination"], settings)

    text = "string"
    return CapabilityRegistry([
        Capability(
            CapabilityName.SEARCH_SESSIONS, "conference",
            "Search re:Invent sessions by keywords with optional filters",
            (
                ParameterSpec("query", text, "search keywords", default=""),
                ParameterSpec("track", text, "session type, e.g. Workshop"),
                ParameterSpec("level", text, "session level, e.g. 300"),
                ParameterSpec("day", text, "conference day, e.g. Tuesday"),
                ParameterSpec("venue", text, "venue name fragment"),
                ParameterSpec("limit", "integer", "maximum sessions returned", default=20),
            ),
            _search,
        ),
        Capability(
            CapabilityName.GET_SESSION_DETAILS, "conference",
            "Full details of one session by id",
            (ParameterSpec("session_id", text, "session id, e.g. AIM201", required=True),),
            _details,
        ),
        Capability(
            CapabilityName.RECOMMEND_SESSIONS, "conference",
            "Ranked session recommendations for interests and role",
            (
                ParameterSpec("interests", "array", "topics of interest",
                              default=DEFAULT_TOPICS),
                ParameterSpec("role", text, "professional role, e.g. developer"),
                ParameterSpec("level", text, "only sessions of this level"),
                ParameterSpec("limit", "integer", "maximum recommendations", default=10),
            ),
            _recommend,
        ),
        Capability(
            CapabilityName.CREATE_PERSONALIZED_SCHEDULE, "conference",
            "Conflict-free personalized agenda across conference days",
            (
                ParameterSpec("role", text, "professional role", default=DEFAULT_ROLE),
                ParameterSpec("learning_topics", "array", "topics to learn about",
                              default=DEFAULT_TOPICS),
                ParameterSpec("experience_level", text, "experience level, e.g. 200"),
                ParameterSpec("max_sessions_per_day", "integer", "sessions per day", default=4),
                ParameterSpec("avoid_conflicts", "boolean", "skip overlapping time slots",
                              default=True),
            ),
            _schedule,
        ),
        Capability(
            CapabilityName.GET_SCHEDULE_BY_DAY, "conference",
            "All sessions on one conference day",
            (ParameterSpec("day", text, "conference day, e.g. Monday", required=True),),
            _by_day,
        ),
        Capability(
            CapabilityName.GET_CONFERENCE_INFO, "conference",
            "Catalog overview: session types, venues, levels and days",
            (),
            _info,
        ),
        Capability(
            CapabilityName.SEARCH_AWS_DOCS, "documentation",
            "Search official AWS documentation for services, APIs and best practices",
            (
                ParameterSpec("query", text, "documentation search phrase", required=True),
                ParameterSpec("service", text, "AWS service name, e.g. bedrock"),
            ),
            _docs,
        ),
        Capability(
            CapabilityName.GET_WEATHER, "liveData",
            "Current weather and a 3-day forecast for a location",
            (ParameterSpec("location", text, "city name", default="Las Vegas"),),
            _weather,
        ),
        Capability(
            CapabilityName.GET_STOCK_PRICE, "liveData",
            "Stock quote for a ticker symbol",
            (ParameterSpec("symbol", text, "ticker symbol, e.g. AMZN", required=True),),
            _stock,
        ),
        Capability(
            CapabilityName.SEARCH_FLIGHTS, "liveData",
            "Flights to the conference city",
            (
                ParameterSpec("origin", text, "3-letter origin airport code", default="SFO"),
                ParameterSpec("destination", text, "3-letter destination airport code",
                              default="LAS"),
            ),
            _flights,
        ),
    ])
