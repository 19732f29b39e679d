# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that flows
# through the engine: catalog events, scored events, the agenda, and the
# planned/executed capability invocations.
#
# Events are FROZEN: the catalog is shared read-only state across concurrent
# requests.  Everything else lives for one request and is discarded.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# Placeholder values used when a catalog record is missing a field.
# Downstream code compares against these, it never checks for None.
TBD = "TBD"
SPEAKERS_TBD = "Speakers TBD"
VENUE_TBD = "Venue TBD"
DEFAULT_TYPE = "Session"
DEFAULT_LEVEL = "All levels"

_PLACEHOLDER_TIMES = {"", "tbd", "time tbd", "schedule tbd"}


def is_placeholder_time(value: str) -> bool:
    """True for time slots that never conflict with anything ("TBD" etc.)."""
    return value.strip().lower() in _PLACEHOLDER_TIMES


# -----------------------------------------------------------------------------
# Event — one conference session in the catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Event:
    """A timed catalog event (conference session)."""

    id: str
    title: str
    description: str = ""
    speakers: str = SPEAKERS_TBD
    venue: str = VENUE_TBD
    day: str = TBD                     # "Monday" ... "Friday" or "TBD"
    time: str = TBD                    # "11:30 - 12:30" or "TBD"
    type: str = DEFAULT_TYPE           # "Breakout session", "Workshop", ...
    level: str = DEFAULT_LEVEL         # "200 – Intermediate", ...
    tags: frozenset[str] = frozenset()
    services: frozenset[str] = frozenset()
    url: str = ""
    day_time: str = TBD                # raw combined slot, e.g. "Monday 11:30 - 12:30"

    @property
    def tags_text(self) -> str:
        return ", ".join(sorted(self.tags))

    @property
    def services_text(self) -> str:
        return ", ".join(sorted(self.services))

    def to_dict(self) -> dict:
        """Flatten to a JSON-friendly dict (sets become sorted lists)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "speakers": self.speakers,
            "venue": self.venue,
            "day": self.day,
            "time": self.time,
            "dayTime": self.day_time,
            "type": self.type,
            "level": self.level,
            "tags": sorted(self.tags),
            "services": sorted(self.services),
            "url": self.url,
        }


@dataclass(frozen=True)
class ScoredEvent:
    """An event paired with its relevance score for one request."""

    event: Event
    score: float


# -----------------------------------------------------------------------------
# Agenda — the personalized schedule produced by core/agenda.py
# -----------------------------------------------------------------------------
@dataclass
class ScheduledSession:
    """One accepted slot in a day of the agenda."""

    id: str
    title: str
    description: str
    speakers: str
    time: str
    venue: str
    level: str
    type: str
    relevance_score: float             # rounded to 2 decimals
    matched_topics: list[str] = field(default_factory=list)
    role_match: bool = False
    tags: list[str] = field(default_factory=list)
    services: list[str] = field(default_factory=list)
    day_time: str = TBD
    url: str = ""


@dataclass
class DaySummary:
    day: str
    count: int
    top_session: str                   # title of the first entry, or "No sessions"


@dataclass
class AgendaResult:
    """A per-day, conflict-free, ranked agenda."""

    role: str
    learning_topics: list[str]
    experience_level: str
    total_sessions: int
    average_relevance_score: float
    candidate_pool_size: int
    schedule: dict[str, list[ScheduledSession]] = field(default_factory=dict)
    sessions_per_day: list[DaySummary] = field(default_factory=list)
    message: str = ""


# -----------------------------------------------------------------------------
# Capability catalog shapes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ParameterSpec:
    """One named parameter of a capability."""

    name: str
    type: str                          # "string", "array", "integer", "boolean"
    description: str
    required: bool = False
    default: Any = None

    def describe(self) -> str:
        optional = "" if self.required else "optional "
        return f"{self.name}: {optional}{self.type} — {self.description}"


@dataclass(frozen=True)
class StrandGroup:
    """A named group of capabilities served by one (logical) MCP server."""

    key: str                           # "conference", "documentation", "liveData"
    name: str                          # display label
    description: str
    server: str                        # MCP server reported in summaries


# -----------------------------------------------------------------------------
# Invocation plan & outcomes — one request's worth of work
# -----------------------------------------------------------------------------
@dataclass
class PlannedInvocation:
    """One capability call chosen by the planner."""

    tool: str
    parameters: dict[str, Any] = field(default_factory=dict)
    reasoning: str = ""
    strand: Optional[str] = None       # the planner's guess; the registry wins


@dataclass
class InvocationOutcome:
    """The result (or error) of executing one PlannedInvocation."""

    tool: str
    group: str
    parameters: dict[str, Any]
    result: Any = None
    error: Optional[str] = None
    reasoning: str = ""

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class AgentResponse:
    """What callers of the engine get back for one query."""

    answer_text: str
    invocation_summaries: list[dict] = field(default_factory=list)
    groups_activated: list[str] = field(default_factory=list)
    error: Optional[str] = None
