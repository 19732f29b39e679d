# =============================================================================
# core/recommendations.py  —  Search, details and ranked recommendations
# =============================================================================
#
# The conference capabilities that are not agenda building:
#   search_sessions      plain filtered search, no fallback scores
#   session_details      one session, or similar ones when the id is unknown
#   recommend_events     ranked list (recommend profile), always non-empty
#                        for a non-empty catalog
#
# An empty catalog raises EmptyCatalogError, so "the catalog is empty" never
# looks like "nothing matched".
#
# Results are plain dicts: they go straight into tool responses and the
# synthesizer, and they are bounded (limit) to keep responses small.
# =============================================================================

from typing import Iterable, Optional

from core.errors import EmptyCatalogError
from core.models import Event, ScoredEvent
from core.repository import InMemoryEventRepository
from core.scoring import (
    RECOMMEND_PROFILE,
    fallback_score,
    level_matches,
    matched_terms,
    role_matches,
    score_events,
)

DEFAULT_SEARCH_LIMIT = 20
DEFAULT_RECOMMEND_LIMIT = 10


def _require_events(events) -> None:
    """An empty catalog is an error, never an empty result."""
    if not len(events):
        raise EmptyCatalogError()


def search_sessions(
    repository: InMemoryEventRepository,
    query: Optional[str] = None,
    track: Optional[str] = None,
    level: Optional[str] = None,
    day: Optional[str] = None,
    venue: Optional[str] = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> dict:
    _require_events(repository)
    results = repository.search(query, type=track, level=level, day=day)
    if venue:
        results = [e for e in results if venue.strip().lower() in e.venue.lower()]
    return {
        "query": query or "",
        "found": len(results),
        "sessions": [e.to_dict() for e in results[: max(limit, 0)]],
    }


def session_details(repository: InMemoryEventRepository, session_id: str) -> dict:
    _require_events(repository)
    event = repository.get_by_id(session_id)
    if event is not None:
        return {"found": True, "session": event.to_dict()}

    similar = repository.search(session_id)[:3]
    return {
        "found": False,
        "message": f"Session {session_id} not found, but here are similar sessions:",
        "similar_sessions": [e.to_dict() for e in similar],
    }


def schedule_by_day(repository: InMemoryEventRepository, day: str) -> dict:
    _require_events(repository)
    sessions = repository.by_day(day)
    return {"day": day, "found": len(sessions), "sessions": [e.to_dict() for e in sessions]}


def conference_info(repository: InMemoryEventRepository) -> dict:
    return {
        "total_sessions": len(repository),
        "session_types": repository.distinct_types(),
        "venues": repository.distinct_venues(),
        "levels": repository.distinct_levels(),
        "days": repository.distinct_days(),
    }


def recommend_events(
    events: Iterable[Event],
    interests: Optional[Iterable[str]] = None,
    role: Optional[str] = None,
    level: Optional[str] = None,
    limit: int = DEFAULT_RECOMMEND_LIMIT,
) -> dict:
    """Top `limit` events for the interests/role, best first.

    When `level` is given, events of other levels are dropped.  If fewer than
    `limit` events score above zero, the rest of the list is filled with
    fallback-scored events so the answer is never empty.

    Raises:
        EmptyCatalogError: `events` is empty.
    """
    interests = [str(i).strip() for i in (interests or ()) if str(i).strip()]
    candidates = list(events)
    _require_events(candidates)
    if level:
        candidates = [e for e in candidates if level_matches(e.level, level)]

    # the level already filtered; it earns no bonus on top
    scored = score_events(candidates, interests, role, None, RECOMMEND_PROFILE)
    positive = sum(1 for s in scored if s.score > 0)
    if positive < limit:
        scored = [
            s if s.score > 0 else ScoredEvent(s.event, fallback_score(s.event))
            for s in scored
        ]
    scored.sort(key=lambda s: s.score, reverse=True)

    top = scored[: max(limit, 0)]
    return {
        "total_matched": positive,
        "recommendations": [
            {
                **s.event.to_dict(),
                "relevanceScore": round(s.score, 2),
                "matchedInterests": matched_terms(s.event, interests),
                "roleMatch": role_matches(s.event, role),
            }
            for s in top
        ],
    }
