# =============================================================================
# core/synthesis.py  —  Deterministic answer rendering
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Renders capability outcomes into a readable answer WITHOUT an LLM.  The
#   agent's synthesizer uses it whenever the summarizer is unavailable.
#
# RULES:
#   - one labelled section per capability group that produced an outcome;
#     no group is ever dropped
#   - failed outcomes render as "Error: <message>"
#   - successful but empty results render a fixed "no data" line
#   - every tool has a renderer; unknown tools get a compact generic one
# =============================================================================

import json
from typing import Any, Callable, Iterable, Mapping

from core.models import InvocationOutcome

GROUP_ORDER = ("conference", "documentation", "liveData")
NO_DATA = "No data returned."

_MAX_LISTED = 5


def _lines_for_sessions(sessions: list[dict], empty: str) -> list[str]:
    if not sessions:
        return [empty]
    lines = []
    for session in sessions[:_MAX_LISTED]:
        line = f"- {session.get('title', 'Untitled Session')}"
        when = session.get("dayTime") or session.get("day_time")
        if when and when != "TBD":
            line += f" ({when})"
        if session.get("venue"):
            line += f" @ {session['venue']}"
        if "relevanceScore" in session:
            line += f" [score {session['relevanceScore']}]"
        lines.append(line)
    if len(sessions) > _MAX_LISTED:
        lines.append(f"  …and {len(sessions) - _MAX_LISTED} more")
    return lines


def _render_search(result: Mapping) -> list[str]:
    sessions = result.get("sessions") or []
    header = [f"Found {result.get('found', len(sessions))} session(s)."] if sessions else []
    return header + _lines_for_sessions(sessions, "No conference sessions found.")


def _render_recommendations(result: Mapping) -> list[str]:
    return _lines_for_sessions(
        result.get("recommendations") or [], "No session recommendations found."
    )


def _render_details(result: Mapping) -> list[str]:
    session = result.get("session")
    if session:
        return [
            f"{session.get('title')} ({session.get('id')})",
            f"  {session.get('dayTime', 'TBD')} @ {session.get('venue', 'Venue TBD')}",
            f"  Speakers: {session.get('speakers', 'Speakers TBD')}",
            f"  {session.get('description') or 'Session description available'}",
        ]
    return [result.get("message", "Session not found.")] + _lines_for_sessions(
        result.get("similar_sessions") or [], "No similar sessions found."
    )


def _render_schedule(result: Mapping) -> list[str]:
    schedule = result.get("schedule") or {}
    if not any(schedule.values()):
        return ["No sessions could be scheduled."]
    lines = [
        result.get("message") or "Personalized schedule:",
        f"{result.get('total_sessions', 0)} session(s), average relevance "
        f"{result.get('average_relevance_score', 0)}.",
    ]
    for day, sessions in schedule.items():
        if not sessions:
            continue
        lines.append(f"{day}:")
        for session in sessions:
            lines.append(
                f"  - {session.get('time', 'TBD')} {session.get('title')} "
                f"@ {session.get('venue', 'Venue TBD')} [score {session.get('relevance_score')}]"
            )
    return lines


def _render_day(result: Mapping) -> list[str]:
    return [f"{result.get('day')}:"] + _lines_for_sessions(
        result.get("sessions") or [], "No sessions scheduled that day."
    )


def _render_info(result: Mapping) -> list[str]:
    if not result.get("total_sessions"):
        return ["The session catalog is empty."]
    return [
        f"{result['total_sessions']} sessions.",
        f"Days: {', '.join(result.get('days') or [])}",
        f"Session types: {', '.join(result.get('session_types') or [])}",
        f"Levels: {', '.join(result.get('levels') or [])}",
        f"Venues: {', '.join(result.get('venues') or [])}",
    ]


def _render_docs(result: Mapping) -> list[str]:
    docs = result.get("results") or []
    if not docs:
        return ["No AWS documentation found."]
    lines = []
    for doc in docs[:_MAX_LISTED]:
        lines.append(f"- {doc.get('title')}: {doc.get('url')}")
        if doc.get("summary"):
            lines.append(f"  {doc['summary']}")
    lines.append(f"Source: {result.get('source', 'unknown')}")
    return lines


def _render_weather(result: Mapping) -> list[str]:
    lines = [
        f"{result.get('location')}: {result.get('temperature')}°F, {result.get('condition')}, "
        f"humidity {result.get('humidity')}%, wind {result.get('windSpeed')} mph"
    ]
    for day in result.get("forecast") or []:
        lines.append(f"  {day.get('day')}: {day.get('high')}°/{day.get('low')}° - {day.get('condition')}")
    lines.append(f"Source: {result.get('source', 'unknown')}")
    return lines


def _render_stock(result: Mapping) -> list[str]:
    return [
        f"{result.get('symbol')}: ${result.get('price')} "
        f"({result.get('change')}, {result.get('changePercent')}%), market {result.get('marketStatus')}",
        f"Source: {result.get('source', 'unknown')}",
    ]


def _render_flights(result: Mapping) -> list[str]:
    flights = result.get("flights") or []
    if not flights:
        return [f"No flights found for route {result.get('route', 'unknown')}."]
    lines = [f"Flights {result.get('route')}:"]
    for flight in flights[:_MAX_LISTED]:
        lines.append(
            f"  - {flight.get('airline')} {flight.get('flight')} "
            f"{flight.get('departure')} → {flight.get('arrival')}, {flight.get('price')} ({flight.get('stops')})"
        )
    lines.append(f"Source: {result.get('source', 'unknown')}")
    return lines


def _render_generic(result: Any) -> list[str]:
    text = json.dumps(result, default=str)
    return [text if len(text) <= 500 else text[:500] + "…"]


_RENDERERS: dict[str, Callable[[Mapping], list[str]]] = {
    "search_sessions": _render_search,
    "recommend_sessions": _render_recommendations,
    "get_session_details": _render_details,
    "create_personalized_schedule": _render_schedule,
    "get_schedule_by_day": _render_day,
    "get_conference_info": _render_info,
    "search_aws_docs": _render_docs,
    "get_weather": _render_weather,
    "get_stock_price": _render_stock,
    "search_flights": _render_flights,
}


def render_outcome(outcome: InvocationOutcome) -> list[str]:
    if not outcome.succeeded:
        return [f"Error: {outcome.error}"]
    if not outcome.result:
        return [NO_DATA]
    if not isinstance(outcome.result, Mapping):
        return _render_generic(outcome.result)
    renderer = _RENDERERS.get(outcome.tool, _render_generic)
    return renderer(outcome.result)


def ordered_groups(groups: Iterable[str]) -> list[str]:
    """Known groups in fixed order, then any others alphabetically."""
    groups = set(groups)
    known = [g for g in GROUP_ORDER if g in groups]
    return known + sorted(groups - set(GROUP_ORDER))


def render_fallback_answer(
    outcomes: Iterable[InvocationOutcome],
    group_labels: Mapping[str, str] | None = None,
) -> str:
    """Template answer: one section per group, every outcome rendered."""
    outcomes = list(outcomes)
    if not outcomes:
        return (
            "I couldn't match your request to any of my tools. Try asking about "
            "conference sessions, AWS documentation, weather, stocks or flights."
        )

    group_labels = group_labels or {}
    by_group: dict[str, list[InvocationOutcome]] = {}
    for outcome in outcomes:
        by_group.setdefault(outcome.group, []).append(outcome)

    sections = ["Here are the results from the tools I used:"]
    for group in ordered_groups(by_group):
        lines = [f"**{group_labels.get(group, group)}:**"]
        for outcome in by_group[group]:
            if len(by_group[group]) > 1:
                lines.append(f"[{outcome.tool}]")
            lines.extend(render_outcome(outcome))
        sections.append("\n".join(lines))
    return "\n\n".join(sections)
