import unittest
import os
import sys
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.catalog import sample_catalog
from core.errors import EmptyCatalogError, RepositoryUnavailableError
from core.models import Event
from core.recommendations import (
    conference_info,
    recommend_events,
    schedule_by_day,
    search_sessions,
    session_details,
)
from core.repository import (
    InMemoryEventRepository,
    build_repository,
    load_events_from_csv,
    normalize_event,
    parse_day_time,
)
from core.scoring import RECOMMEND_PROFILE, score_event

CSV_HEADER = "id,type,level,title,description,speakers,venue,dayTime,services,tags,url\n"


class TestNormalization(unittest.TestCase):

    def test_parse_day_time(self):
        self.assertEqual(parse_day_time("Monday 11:30 - 12:30"), ("Monday", "11:30 - 12:30"))
        self.assertEqual(parse_day_time(""), ("TBD", "TBD"))
        self.assertEqual(parse_day_time(None), ("TBD", "TBD"))
        self.assertEqual(parse_day_time("Monday"), ("Monday", "TBD"))

    def test_missing_fields_become_placeholders(self):
        event = normalize_event({"id": "X1"})
        self.assertEqual(event.title, "Untitled Session")
        self.assertEqual(event.speakers, "Speakers TBD")
        self.assertEqual(event.venue, "Venue TBD")
        self.assertEqual((event.day, event.time, event.day_time), ("TBD", "TBD", "TBD"))
        self.assertEqual(event.type, "Session")
        self.assertEqual(event.level, "All levels")
        self.assertEqual(event.tags, frozenset())
        self.assertEqual(event.description, "")

    def test_labels_are_split_and_trimmed(self):
        event = normalize_event({"id": "X1", "tags": " AI , Agents,,", "services": ["Amazon Bedrock", ""]})
        self.assertEqual(event.tags, frozenset({"AI", "Agents"}))
        self.assertEqual(event.services, frozenset({"Amazon Bedrock"}))

    def test_record_without_id_is_rejected(self):
        with self.assertRaises(ValueError):
            normalize_event({"title": "No id"})


class TestInMemoryEventRepository(unittest.TestCase):

    def setUp(self):
        self.repository = InMemoryEventRepository(sample_catalog())

    def test_duplicate_ids_are_rejected(self):
        with self.assertRaises(ValueError):
            InMemoryEventRepository([Event(id="A", title="one"), Event(id="A", title="two")])

    def test_get_by_id(self):
        self.assertEqual(self.repository.get_by_id("AIM201").venue, "MGM")
        self.assertIsNone(self.repository.get_by_id("NOPE"))

    def test_search_requires_every_term(self):
        ids = {e.id for e in self.repository.search("bedrock")}
        self.assertEqual(ids, {"AIM201", "AIM301", "SEC201", "KEY002"})
        ids = {e.id for e in self.repository.search("bedrock agents")}
        self.assertEqual(ids, {"AIM301", "KEY002"})

    def test_search_filters(self):
        self.assertEqual({e.id for e in self.repository.search(type="workshop")}, {"AIM301", "WKS201"})
        self.assertEqual({e.id for e in self.repository.search(day="tuesday")},
                         {"KEY001", "BIZ201", "SVS301"})
        self.assertEqual(len(self.repository.search("")), len(self.repository))

    def test_zero_matches_is_an_empty_list(self):
        self.assertEqual(self.repository.search("quantum teleportation"), [])

    def test_by_day_is_ordered_by_time(self):
        self.assertEqual([e.id for e in self.repository.by_day("Monday")],
                         ["AIM201", "AIM301", "AIM202"])
        # slots compare by start time, not as strings
        self.assertEqual([e.id for e in self.repository.by_day("Tuesday")],
                         ["KEY001", "BIZ201", "SVS301"])

    def test_distinct_values(self):
        self.assertEqual(self.repository.distinct_days(),
                         ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "TBD"])
        self.assertIn("Workshop", self.repository.distinct_types())
        self.assertIn("Venue TBD", self.repository.distinct_venues())
        self.assertIn("400 – Expert", self.repository.distinct_levels())

    def test_build_repository_defaults_to_sample_catalog(self):
        self.assertEqual(len(build_repository()), len(sample_catalog()))


class TestCsvLoading(unittest.TestCase):

    def _write(self, body):
        handle = tempfile.NamedTemporaryFile("w", suffix=".csv", delete=False, encoding="utf-8")
        handle.write(CSV_HEADER + body)
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_loads_rows_and_splits_day_time(self):
        path = self._write(
            'S1,Workshop,200 – Intermediate,Agents 101,Build agents,Jo,MGM,'
            'Monday 9:00 - 10:00,"Amazon Bedrock, AWS Lambda","Developer / Engineer, Agents",'
            'https://example.com/s1\n'
        )
        events = load_events_from_csv(path)
        self.assertEqual(len(events), 1)
        self.assertEqual((events[0].day, events[0].time), ("Monday", "9:00 - 10:00"))
        self.assertEqual(events[0].services, frozenset({"Amazon Bedrock", "AWS Lambda"}))

    def test_rows_without_id_are_skipped_and_later_duplicates_win(self):
        path = self._write(
            "S1,Workshop,,First,,,,,,,\n"
            ",Workshop,,No id,,,,,,,\n"
            "S1,Keynote,,Second,,,,,,,\n"
        )
        events = load_events_from_csv(path)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].title, "Second")

    def test_missing_file_raises(self):
        with self.assertRaises(RepositoryUnavailableError):
            load_events_from_csv("/nonexistent/sessions.csv")


class TestRecommendationsAndSearch(unittest.TestCase):

    def setUp(self):
        self.repository = InMemoryEventRepository(sample_catalog())

    def test_search_sessions_reports_total_and_limits(self):
        result = search_sessions(self.repository, "", limit=3)
        self.assertEqual(result["found"], len(self.repository))
        self.assertEqual(len(result["sessions"]), 3)

    def test_search_sessions_venue_filter(self):
        result = search_sessions(self.repository, venue="venetian")
        self.assertEqual({s["id"] for s in result["sessions"]}, {"KEY001", "SEC201", "KEY002"})

    def test_session_details_found_and_not_found(self):
        found = session_details(self.repository, "AIM301")
        self.assertTrue(found["found"])
        self.assertEqual(found["session"]["dayTime"], "Monday 10:00 - 12:00")

        missing = session_details(self.repository, "bedrock")
        self.assertFalse(missing["found"])
        self.assertLessEqual(len(missing["similar_sessions"]), 3)
        self.assertTrue(missing["similar_sessions"])

    def test_recommendations_are_never_empty_for_a_non_empty_catalog(self):
        result = recommend_events(self.repository.all(), ["quantum"], None, limit=5)
        self.assertEqual(result["total_matched"], 11)
        self.assertEqual(len(result["recommendations"]), 5)

        nothing = recommend_events(
            [Event(id="T", title="Talk", type="Chalk talk")], ["quantum"], None
        )
        self.assertEqual(nothing["total_matched"], 0)
        self.assertEqual(nothing["recommendations"][0]["relevanceScore"], 0.1)

    def test_recommendations_filter_by_level(self):
        result = recommend_events(self.repository.all(), ["ai"], "developer", level="300")
        levels = {r["level"] for r in result["recommendations"]}
        self.assertEqual(levels, {"300 – Advanced"})

    def test_level_filter_adds_no_score_bonus(self):
        result = recommend_events(self.repository.all(), ["ai"], "developer", level="300")
        aim301 = next(r for r in result["recommendations"] if r["id"] == "AIM301")
        expected = score_event(
            self.repository.get_by_id("AIM301"), ["ai"], "developer", None, RECOMMEND_PROFILE
        )
        self.assertEqual(aim301["relevanceScore"], round(expected, 2))

    def test_no_match_is_not_an_error(self):
        result = search_sessions(self.repository, "quantum teleportation")
        self.assertEqual(result["found"], 0)
        self.assertEqual(result["sessions"], [])

    def test_empty_catalog_raises(self):
        empty = InMemoryEventRepository([])
        with self.assertRaises(EmptyCatalogError):
            recommend_events([], ["ai"], "developer")
        with self.assertRaises(EmptyCatalogError):
            search_sessions(empty, "bedrock")
        with self.assertRaises(EmptyCatalogError):
            schedule_by_day(empty, "Monday")
        with self.assertRaises(EmptyCatalogError):
            session_details(empty, "AIM301")
        self.assertEqual(conference_info(empty)["total_sessions"], 0)

    def test_conference_info(self):
        info = conference_info(self.repository)
        self.assertEqual(info["total_sessions"], len(self.repository))
        self.assertEqual(info["days"][0], "Monday")


if __name__ == '__main__':
    unittest.main()
