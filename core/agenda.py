# =============================================================================
# core/agenda.py  —  Personalized, conflict-free agenda building
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a (possibly very large) catalog into a bounded per-day agenda:
#
#     1. score every event with the schedule profile
#     2. split into positively scored and zero-scored events
#     3. if fewer than 3 × max_per_day events scored, top up with zero-scored
#        events re-scored by the fallback policy (best fallback first)
#     4. stable-sort the candidate pool by score, highest first
#     5. group by day, then greedily place up to max_per_day events per day,
#        skipping an event whose time slot is already taken that day
#
# GUARANTEES:
#   - with avoid_conflicts, no two events on one day share a real time slot
#   - placeholder times ("TBD") never conflict with anything
#   - same inputs → same agenda (Python's sort is stable)
#   - an empty catalog raises EmptyCatalogError; it is never an empty success
# =============================================================================

from typing import Iterable, Optional

from core.errors import EmptyCatalogError
from core.models import (
    AgendaResult,
    DaySummary,
    Event,
    ScheduledSession,
    ScoredEvent,
    is_placeholder_time,
)
from core.repository import order_days
from core.scoring import (
    SCHEDULE_PROFILE,
    fallback_score,
    matched_terms,
    role_matches,
    score_events,
)

CANDIDATE_MULTIPLIER = 3


def select_candidates(scored: list[ScoredEvent], max_per_day: int) -> list[ScoredEvent]:
    """Candidate pool: positive scores, topped up by fallback-scored events."""
    threshold = CANDIDATE_MULTIPLIER * max_per_day
    positive = [s for s in scored if s.score > 0]
    pool = list(positive)

    if len(positive) < threshold:
        fallback = sorted(
            (ScoredEvent(s.event, fallback_score(s.event)) for s in scored if s.score <= 0),
            key=lambda s: s.score,
            reverse=True,
        )
        pool.extend(fallback[: threshold - len(positive)])

    pool.sort(key=lambda s: s.score, reverse=True)
    return pool


def _to_scheduled(
    scored: ScoredEvent,
    learning_topics: list[str],
    role: Optional[str],
) -> ScheduledSession:
    event = scored.event
    return ScheduledSession(
        id=event.id,
        title=event.title,
        description=event.description or "Session description available",
        speakers=event.speakers,
        time=event.time,
        venue=event.venue,
        level=event.level,
        type=event.type,
        relevance_score=round(scored.score, 2),
        matched_topics=matched_terms(event, learning_topics),
        role_match=role_matches(event, role),
        tags=sorted(event.tags),
        services=sorted(event.services),
        day_time=event.day_time,
        url=event.url,
    )


def pack_days(
    pool: list[ScoredEvent],
    max_per_day: int,
    avoid_conflicts: bool = True,
) -> dict[str, list[ScoredEvent]]:
    """Greedy per-day packing of an already-sorted candidate pool."""
    by_day: dict[str, list[ScoredEvent]] = {}
    for scored in pool:
        by_day.setdefault(scored.event.day, []).append(scored)

    packed: dict[str, list[ScoredEvent]] = {}
    for day in order_days(by_day):
        placed: list[ScoredEvent] = []
        used_times: set[str] = set()
        for scored in by_day[day]:
            if len(placed) >= max_per_day:
                break
            slot = scored.event.time
            real_slot = not is_placeholder_time(slot)
            if avoid_conflicts and real_slot and slot in used_times:
                continue
            placed.append(scored)
            if real_slot:
                used_times.add(slot)
        packed[day] = placed
    return packed


def build_agenda(
    events: Iterable[Event],
    interests: Optional[Iterable[str]] = None,
    role: Optional[str] = None,
    level: Optional[str] = None,
    max_per_day: int = 4,
    avoid_conflicts: bool = True,
) -> AgendaResult:
    """Build a personalized per-day agenda from the whole catalog.

    Args:
        events: Every event in the catalog.
        interests: Learning topics, e.g. ["agents", "AI"].
        role: Professional role, e.g. "product manager".
        level: Experience level, e.g. "200" or "300 – Advanced".
        max_per_day: Upper bound on sessions per day (>= 1).
        avoid_conflicts: Skip events whose time slot is taken that day.

    Raises:
        EmptyCatalogError: the catalog holds no events.
        ValueError: max_per_day < 1.
    """
    events = list(events)
    if not events:
        raise EmptyCatalogError()
    if max_per_day < 1:
        raise ValueError(f"max_per_day must be at least 1, got {max_per_day}")

    learning_topics = [str(t).strip() for t in (interests or ()) if str(t).strip()]
    scored = score_events(events, learning_topics, role, level, SCHEDULE_PROFILE)
    pool = select_candidates(scored, max_per_day)
    packed = pack_days(pool, max_per_day, avoid_conflicts)

    schedule = {
        day: [_to_scheduled(s, learning_topics, role) for s in entries]
        for day, entries in packed.items()
    }
    placed = [s for entries in packed.values() for s in entries]
    average = sum(s.score for s in placed) / len(placed) if placed else 0.0

    role_label = role or "attendee"
    return AgendaResult(
        role=role_label,
        learning_topics=learning_topics,
        experience_level=level or "All levels",
        total_sessions=len(placed),
        average_relevance_score=round(average, 2),
        candidate_pool_size=len(pool),
        schedule=schedule,
        sessions_per_day=[
            DaySummary(
                day=day,
                count=len(entries),
                top_session=entries[0].title if entries else "No sessions",
            )
            for day, entries in schedule.items()
        ],
        message=(
            f"Personalized schedule created for {role_label} focusing on "
            f"{', '.join(learning_topics) if learning_topics else 'general sessions'}"
        ),
    )
