# =============================================================================
# core/scoring.py  —  Relevance scoring of catalog events
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns (event, interests, role, level) into an additive relevance score.
#   Scores are not normalized and ties are allowed; they only matter
#   relative to each other within one request.
#
# TWO NAMED PROFILES:
#   SCHEDULE_PROFILE   heavier weights, used when building an agenda
#   RECOMMEND_PROFILE  lighter weights, used for plain recommendations
#   Both share the same term-matching structure; only the weights differ.
#   They rank differently in edge cases, so they are kept apart.
#
# MATCHING:
#   Case-insensitive substring matching over each field ("developer"
#   matches the tag "Developer / Engineer").  Tags and services are joined
#   into one string per field before matching.
#
# FALLBACK POLICY:
#   When a caller needs results no matter what (agenda building,
#   recommendations) zero-scored events get small nonzero scores from
#   fallback_score().  Plain search never uses it.
# =============================================================================

from dataclasses import dataclass
from typing import Iterable, Optional

from core.models import Event, ScoredEvent
from core.vocabulary import ROLE_SYNONYMS, TOPIC_SYNONYMS


@dataclass(frozen=True)
class ScoringProfile:
    name: str

    role_in_tags: float
    role_in_title: float
    role_in_description: float
    role_synonym: float

    interest_in_title: float
    interest_in_tags: float
    interest_in_services: float
    interest_in_description: float
    interest_in_type: float
    interest_synonym: float

    level_match: float = 5

    keynote_bonus: float = 3
    workshop_bonus: float = 2
    breakout_bonus: float = 1


SCHEDULE_PROFILE = ScoringProfile(
    name="schedule",
    role_in_tags=10, role_in_title=6, role_in_description=4, role_synonym=5,
    interest_in_title=8, interest_in_tags=6, interest_in_services=4,
    interest_in_description=3, interest_in_type=2, interest_synonym=3,
)

RECOMMEND_PROFILE = ScoringProfile(
    name="recommend",
    role_in_tags=5, role_in_title=3, role_in_description=2, role_synonym=3,
    interest_in_title=4, interest_in_tags=3, interest_in_services=2,
    interest_in_description=2, interest_in_type=1, interest_synonym=2,
)


@dataclass(frozen=True)
class _Fields:
    """Lowercased searchable text of one event, computed once per score."""

    title: str
    description: str
    tags: str
    services: str
    type: str

    @classmethod
    def of(cls, event: Event) -> "_Fields":
        return cls(
            title=event.title.lower(),
            description=event.description.lower(),
            tags=event.tags_text.lower(),
            services=event.services_text.lower(),
            type=event.type.lower(),
        )


def normalize_terms(terms: Optional[Iterable[str]]) -> list[str]:
    """Lowercase, strip and de-duplicate terms, keeping first-seen order."""
    seen: list[str] = []
    for term in terms or ():
        term = str(term).strip().lower()
        if term and term not in seen:
            seen.append(term)
    return seen


def level_matches(event_level: str, level: Optional[str]) -> bool:
    """Exact level match, case-insensitive.

    A bare tier such as "200" also matches "200 – Intermediate".
    """
    if not level or not level.strip():
        return False
    wanted = level.strip().lower()
    actual = event_level.strip().lower()
    if actual == wanted:
        return True
    return actual.split()[0] == wanted if actual else False


def type_bonus(event: Event, profile: ScoringProfile = SCHEDULE_PROFILE) -> float:
    """Interest-independent bonus for generally valuable session types."""
    session_type = event.type.lower()
    bonus = 0.0
    if "workshop" in session_type or "hands-on" in session_type:
        bonus += profile.workshop_bonus
    if "keynote" in session_type:
        bonus += profile.keynote_bonus
    if "breakout" in session_type:
        bonus += profile.breakout_bonus
    return bonus


def score_event(
    event: Event,
    interests: Optional[Iterable[str]] = None,
    role: Optional[str] = None,
    level: Optional[str] = None,
    profile: ScoringProfile = SCHEDULE_PROFILE,
) -> float:
    """Additive relevance of one event for a role, interests and level."""
    fields = _Fields.of(event)
    score = 0.0

    role = (role or "").strip().lower()
    if role:
        if role in fields.tags:
            score += profile.role_in_tags
        if role in fields.title:
            score += profile.role_in_title
        if role in fields.description:
            score += profile.role_in_description
        for synonym in ROLE_SYNONYMS.get(role, ()):
            if synonym in fields.tags or synonym in fields.title or synonym in fields.description:
                score += profile.role_synonym

    for interest in normalize_terms(interests):
        if interest in fields.title:
            score += profile.interest_in_title
        if interest in fields.tags:
            score += profile.interest_in_tags
        if interest in fields.services:
            score += profile.interest_in_services
        if interest in fields.description:
            score += profile.interest_in_description
        if interest in fields.type:
            score += profile.interest_in_type
        for synonym in TOPIC_SYNONYMS.get(interest, ()):
            if (synonym in fields.title or synonym in fields.tags
                    or synonym in fields.description or synonym in fields.services):
                score += profile.interest_synonym

    if level_matches(event.level, level):
        score += profile.level_match

    score += type_bonus(event, profile)
    return score


def fallback_score(event: Event) -> float:
    """Small nonzero score for an event that matched nothing."""
    session_type = event.type.lower()
    if "keynote" in session_type:
        return 0.8
    if "workshop" in session_type:
        return 0.6
    if level_matches(event.level, "200"):
        return 0.4
    return 0.1


def score_events(
    events: Iterable[Event],
    interests: Optional[Iterable[str]] = None,
    role: Optional[str] = None,
    level: Optional[str] = None,
    profile: ScoringProfile = SCHEDULE_PROFILE,
) -> list[ScoredEvent]:
    interests = normalize_terms(interests)
    return [
        ScoredEvent(event, score_event(event, interests, role, level, profile))
        for event in events
    ]


def matched_terms(event: Event, terms: Iterable[str]) -> list[str]:
    """Terms (original spelling) found in the event's title, tags or services."""
    fields = _Fields.of(event)
    matched = []
    for term in terms or ():
        needle = str(term).strip().lower()
        if needle and (needle in fields.title or needle in fields.tags or needle in fields.services):
            matched.append(term)
    return matched


def role_matches(event: Event, role: Optional[str]) -> bool:
    role = (role or "").strip().lower()
    return bool(role) and role in event.tags_text.lower()
