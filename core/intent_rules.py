# =============================================================================
# core/intent_rules.py  —  Deterministic keyword planner
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Maps a free-text query to capability invocations WITHOUT an LLM.  It is
#   the fallback whenever the intent classifier is unavailable, slow, or
#   answers with something that is not a well-formed plan.
#
#   Rules are independent; a query can trigger several of them
#   ("weather in Las Vegas and AI sessions" → weather + session search).
#
#   | trigger words                          | capability                     |
#   |----------------------------------------|--------------------------------|
#   | bedrock, aws, lambda, documentation    | search_aws_docs                |
#   | session, re:invent, conference, ...    | create_personalized_schedule / |
#   |                                        | recommend_sessions /           |
#   |                                        | search_sessions                |
#   | weather                                | get_weather                    |
#   | stock, share price, $TICKER            | get_stock_price                |
#   | flight, fly                            | search_flights                 |
#
#   keyword_plan() never raises.  An unmatched query yields an empty plan.
# =============================================================================

import re
from typing import Optional

from core.models import PlannedInvocation
from core.vocabulary import DEFAULT_ROLE, DEFAULT_TOPICS, ROLE_PHRASES, TOPIC_PHRASES

_DOCS_WORDS = ("bedrock", "aws", "lambda", "documentation", "docs")
_CONFERENCE_WORDS = (
    "session", "sessions", "reinvent", "re:invent", "conference", "agenda",
    "schedule", "talk", "talks", "workshop", "workshops", "keynote", "keynotes",
)
_SCHEDULE_WORDS = ("schedule", "agenda", "plan", "create", "personalized", "personalised")
_RECOMMEND_WORDS = ("recommend", "recommendation", "recommendations", "suggest", "suggestions")
_STOCK_WORDS = ("stock", "stocks", "share price", "shares", "ticker")
_FLIGHT_WORDS = ("flight", "flights", "fly", "flying", "airfare")

DEFAULT_WEATHER_LOCATION = "Las Vegas"
DEFAULT_FLIGHT_ORIGIN = "SFO"

_CAPITALIZED_LOCATION = re.compile(
    r"weather (?:in|for|at) ((?:[A-Z][\w.'-]*)(?:[ ,]+[A-Z][\w.'-]*)*)"
)
_LOOSE_LOCATIONS = (
    re.compile(r"weather (?:in|for|at) ([^?.!]+)", re.IGNORECASE),
    re.compile(r"([a-zA-Z\s]+?) weather", re.IGNORECASE),
)
_LOCATION_NOISE = re.compile(r"\b(the|what's|what is|today|tomorrow|now|like)\b", re.IGNORECASE)

_DOLLAR_TICKER = re.compile(r"\$([A-Za-z]{1,5})\b")
_NAMED_TICKER = re.compile(
    r"(?:stock|share|shares|ticker)\s+(?:price\s+)?(?:for|of|on)?\s*([A-Za-z]{1,5})\b",
    re.IGNORECASE,
)
_UPPER_TICKER = re.compile(r"\b([A-Z]{2,5})\b")
_TICKER_STOPWORDS = {"AWS", "AI", "ML", "PM", "IT", "API", "USA", "THE", "FOR", "OF", "PRICE"}

_FLIGHT_ORIGIN = re.compile(r"\bfrom\s+([A-Za-z]{3})\b", re.IGNORECASE)


def _has_phrase(text: str, phrase: str) -> bool:
    """Whole-word (or whole-phrase) containment; "ai" does not match "said"."""
    return re.search(rf"(?<![\w]){re.escape(phrase)}(?![\w])", text) is not None


def _has_any(text: str, phrases) -> bool:
    return any(_has_phrase(text, p) for p in phrases)


def extract_role(query: str) -> str:
    lower = query.lower()
    for phrase, role in ROLE_PHRASES:
        if _has_phrase(lower, phrase):
            return role
    return DEFAULT_ROLE


def extract_topics(query: str) -> list[str]:
    lower = query.lower()
    topics: list[str] = []
    for phrase, topic in TOPIC_PHRASES:
        if topic not in topics and _has_phrase(lower, phrase):
            topics.append(topic)
    return topics


def extract_location(query: str) -> Optional[str]:
    """First capitalized phrase after "weather in/for", then looser patterns."""
    match = _CAPITALIZED_LOCATION.search(query)
    if match:
        return match.group(1).strip(" ,")
    for pattern in _LOOSE_LOCATIONS:
        match = pattern.search(query)
        if match and match.group(1):
            location = _LOCATION_NOISE.sub("", match.group(1))
            location = " ".join(location.split()).strip(" ,")
            if location:
                return location
    return None


def extract_symbol(query: str) -> Optional[str]:
    for pattern in (_DOLLAR_TICKER, _NAMED_TICKER):
        match = pattern.search(query)
        if match and match.group(1).upper() not in _TICKER_STOPWORDS:
            return match.group(1).upper()
    for candidate in _UPPER_TICKER.findall(query):
        if candidate not in _TICKER_STOPWORDS:
            return candidate
    return None


def extract_origin(query: str) -> Optional[str]:
    match = _FLIGHT_ORIGIN.search(query)
    return match.group(1).upper() if match else None


def _conference_invocation(query: str, lower: str) -> PlannedInvocation:
    topics = extract_topics(query)
    role = extract_role(query)

    if _has_any(lower, _SCHEDULE_WORDS):
        return PlannedInvocation(
            tool="create_personalized_schedule",
            parameters={"role": role, "learning_topics": topics or list(DEFAULT_TOPICS)},
            reasoning="Personalized schedule request detected",
            strand="conference",
        )
    if _has_any(lower, _RECOMMEND_WORDS):
        parameters = {"interests": topics or list(DEFAULT_TOPICS)}
        if role != DEFAULT_ROLE:
            parameters["role"] = role
        return PlannedInvocation(
            tool="recommend_sessions",
            parameters=parameters,
            reasoning="Session recommendation request detected",
            strand="conference",
        )
    return PlannedInvocation(
        tool="search_sessions",
        parameters={"query": " ".join(topics)},
        reasoning="Conference query detected",
        strand="conference",
    )


def keyword_plan(query: str) -> list[PlannedInvocation]:
    """Best-effort plan from keyword rules.  Never raises."""
    if not query or not query.strip():
        return []
    lower = query.lower()
    plan: list[PlannedInvocation] = []

    if _has_any(lower, _DOCS_WORDS):
        plan.append(PlannedInvocation(
            tool="search_aws_docs",
            parameters={"query": query.strip()},
            reasoning="AWS/technical documentation query detected",
            strand="documentation",
        ))

    if _has_any(lower, _CONFERENCE_WORDS):
        plan.append(_conference_invocation(query, lower))

    if _has_phrase(lower, "weather"):
        plan.append(PlannedInvocation(
            tool="get_weather",
            parameters={"location": extract_location(query) or DEFAULT_WEATHER_LOCATION},
            reasoning="Weather query detected",
            strand="liveData",
        ))

    if _has_any(lower, _STOCK_WORDS) or _DOLLAR_TICKER.search(query):
        symbol = extract_symbol(query)
        if symbol:
            plan.append(PlannedInvocation(
                tool="get_stock_price",
                parameters={"symbol": symbol},
                reasoning="Stock price query detected",
                strand="liveData",
            ))

    if _has_any(lower, _FLIGHT_WORDS):
        plan.append(PlannedInvocation(
            tool="search_flights",
            parameters={"origin": extract_origin(query) or DEFAULT_FLIGHT_ORIGIN},
            reasoning="Flight search query detected",
            strand="liveData",
        ))

    return plan
