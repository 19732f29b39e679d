# =============================================================================
# core/repository.py  —  Read-only session catalog
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the catalog of conference sessions in memory and answers the
#   queries the capabilities need: text search with optional filters,
#   lookup by id, per-day listings and the distinct values of the
#   categorical fields.
#
# NORMALIZATION:
#   Raw records (CSV rows, dicts) go through normalize_event() exactly once,
#   at load time.  Missing fields become explicit placeholders ("TBD",
#   "Speakers TBD", ...), so scoring never branches on missing-ness.
#
# CONCURRENCY:
#   The repository is never mutated after construction.  Any number of
#   concurrent requests may read it without locking.
# =============================================================================

import csv
import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional

from core.errors import RepositoryUnavailableError
from core.models import (
    DEFAULT_LEVEL,
    DEFAULT_TYPE,
    SPEAKERS_TBD,
    TBD,
    VENUE_TBD,
    Event,
)
from core.vocabulary import CONFERENCE_DAYS

logger = logging.getLogger(__name__)

_SLOT_START = re.compile(r"\s*(\d{1,2}):(\d{2})")


def parse_day_time(day_time: Optional[str]) -> tuple[str, str]:
    """Split "Monday 11:30 - 12:30" into ("Monday", "11:30 - 12:30")."""
    if not day_time or not day_time.strip():
        return TBD, TBD
    parts = day_time.split()
    if len(parts) >= 2:
        return parts[0], " ".join(parts[1:])
    return day_time.strip(), TBD


def _split_labels(raw) -> frozenset[str]:
    if not raw:
        return frozenset()
    if isinstance(raw, str):
        items = raw.split(",")
    else:
        items = raw
    return frozenset(item.strip() for item in items if item and str(item).strip())


def _text(record: Mapping, key: str, default: str) -> str:
    value = record.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def normalize_event(record: Mapping) -> Event:
    """Build an Event from a raw record, filling every missing field."""
    event_id = _text(record, "id", "")
    if not event_id:
        raise ValueError(f"Session record without an id: {dict(record)!r}")

    day_time = _text(record, "dayTime", "") or _text(record, "day_time", "")
    day = _text(record, "day", "")
    time = _text(record, "time", "")
    if day_time and not (day and time):
        parsed_day, parsed_time = parse_day_time(day_time)
        day = day or parsed_day
        time = time or parsed_time
    day = day or TBD
    time = time or TBD

    return Event(
        id=event_id,
        title=_text(record, "title", "Untitled Session"),
        description=_text(record, "description", ""),
        speakers=_text(record, "speakers", SPEAKERS_TBD),
        venue=_text(record, "venue", VENUE_TBD),
        day=day,
        time=time,
        type=_text(record, "type", DEFAULT_TYPE),
        level=_text(record, "level", DEFAULT_LEVEL),
        tags=_split_labels(record.get("tags")),
        services=_split_labels(record.get("services")),
        url=_text(record, "url", ""),
        day_time=day_time or (TBD if day == TBD else f"{day} {time}"),
    )


def _day_sort_key(day: str) -> tuple[int, str]:
    if day in CONFERENCE_DAYS:
        return CONFERENCE_DAYS.index(day), day
    if day == TBD:
        return len(CONFERENCE_DAYS) + 1, day
    return len(CONFERENCE_DAYS), day


def order_days(days: Iterable[str]) -> list[str]:
    """Conference day order: Monday..Sunday, then anything else, TBD last."""
    return sorted(set(days), key=_day_sort_key)


def time_sort_key(time: str) -> tuple[int, str]:
    """Start of a "9:00 - 10:00" slot in minutes; unparseable slots sort last."""
    match = _SLOT_START.match(time or "")
    if not match:
        return 24 * 60, time or ""
    return int(match.group(1)) * 60 + int(match.group(2)), time


class InMemoryEventRepository:
    """Immutable in-memory catalog of Events."""

    def __init__(self, events: Iterable[Event]):
        events = tuple(events)
        by_id: dict[str, Event] = {}
        for event in events:
            if event.id in by_id:
                raise ValueError(f"Duplicate session id in catalog: {event.id!r}")
            by_id[event.id] = event
        self._events = events
        self._by_id = by_id

    def __len__(self) -> int:
        return len(self._events)

    def all(self) -> tuple[Event, ...]:
        return self._events

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self._by_id.get((event_id or "").strip())

    def search(
        self,
        text: Optional[str] = None,
        type: Optional[str] = None,
        level: Optional[str] = None,
        day: Optional[str] = None,
    ) -> list[Event]:
        """Find events containing every term of `text`, with optional filters.

        Terms are matched case-insensitively against title, description,
        speakers, tags, services and type.  Filters compare case-insensitively
        for equality; None or "" means "no filter".
        """
        terms = (text or "").lower().split()
        results = []
        for event in self._events:
            if type and event.type.lower() != type.strip().lower():
                continue
            if level and event.level.lower() != level.strip().lower():
                continue
            if day and event.day.lower() != day.strip().lower():
                continue
            if terms:
                haystack = " ".join((
                    event.title, event.description, event.speakers,
                    event.tags_text, event.services_text, event.type,
                )).lower()
                if not all(term in haystack for term in terms):
                    continue
            results.append(event)
        return results

    def by_day(self, day: str) -> list[Event]:
        """Events on one day, ordered by time slot."""
        return sorted(
            (e for e in self._events if e.day.lower() == (day or "").strip().lower()),
            key=lambda e: time_sort_key(e.time),
        )

    def distinct_types(self) -> list[str]:
        return sorted({e.type for e in self._events})

    def distinct_venues(self) -> list[str]:
        return sorted({e.venue for e in self._events})

    def distinct_levels(self) -> list[str]:
        return sorted({e.level for e in self._events})

    def distinct_days(self) -> list[str]:
        return order_days(e.day for e in self._events)


def load_events_from_csv(path: str | Path) -> list[Event]:
    """Read a session CSV export (one row per session, header row required).

    Expected columns: id, type, level, title, description, speakers, venue,
    dayTime, services, tags, url.  Rows without an id are skipped.
    """
    path = Path(path)
    try:
        with path.open(newline="", encoding="utf-8") as handle:
            rows = list(csv.DictReader(handle))
    except OSError as exc:
        raise RepositoryUnavailableError(f"Cannot read session catalog {path}: {exc}") from exc

    # A later row with the same id replaces the earlier one.
    events: dict[str, Event] = {}
    skipped = 0
    for row in rows:
        try:
            event = normalize_event(row)
        except ValueError:
            skipped += 1
            continue
        events[event.id] = event
    if skipped:
        logger.warning("Skipped %d catalog rows without an id in %s", skipped, path)
    logger.info("Loaded %d sessions from %s", len(events), path)
    return list(events.values())


def build_repository(catalog_csv: Optional[str] = None) -> InMemoryEventRepository:
    """Repository from a CSV export, or the bundled sample catalog."""
    if catalog_csv:
        return InMemoryEventRepository(load_events_from_csv(catalog_csv))

    from core.catalog import sample_catalog

    return InMemoryEventRepository(sample_catalog())
