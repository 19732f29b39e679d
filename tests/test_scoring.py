import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.catalog import sample_catalog
from core.models import Event
from core.scoring import (
    RECOMMEND_PROFILE,
    SCHEDULE_PROFILE,
    fallback_score,
    level_matches,
    matched_terms,
    role_matches,
    score_event,
    type_bonus,
)


def make_event(**fields):
    defaults = {"id": "E1", "title": "Untitled"}
    defaults.update(fields)
    return Event(**defaults)


class TestScoreEvent(unittest.TestCase):

    def setUp(self):
        self.intro = make_event(
            title="Intro to Machine Learning",
            type="Breakout session",
            tags=frozenset({"developer", "ai"}),
        )

    def test_no_preferences_scores_only_the_type_bonus(self):
        for event in sample_catalog():
            for profile in (SCHEDULE_PROFILE, RECOMMEND_PROFILE):
                self.assertEqual(score_event(event, [], "", "", profile),
                                 type_bonus(event, profile), event.id)

    def test_type_bonus_values(self):
        self.assertEqual(type_bonus(make_event(type="Keynote")), 3)
        self.assertEqual(type_bonus(make_event(type="Workshop")), 2)
        self.assertEqual(type_bonus(make_event(type="Hands-on lab")), 2)
        self.assertEqual(type_bonus(make_event(type="Breakout session")), 1)
        self.assertEqual(type_bonus(make_event(type="Chalk talk")), 0)

    def test_developer_interested_in_ai_scores_high(self):
        # role tag 10 + "dev" synonym 5 + interest tag 6
        # + "machine learning" synonym 3 + breakout 1
        score = score_event(self.intro, ["ai"], "developer", None, SCHEDULE_PROFILE)
        self.assertGreaterEqual(score, 19)
        self.assertEqual(score, 25)

    def test_recommend_profile_is_lighter(self):
        schedule = score_event(self.intro, ["ai"], "developer", None, SCHEDULE_PROFILE)
        recommend = score_event(self.intro, ["ai"], "developer", None, RECOMMEND_PROFILE)
        self.assertEqual(recommend, 14)
        self.assertLess(recommend, schedule)

    def test_matching_is_case_insensitive(self):
        lower = score_event(self.intro, ["ai"], "developer")
        upper = score_event(self.intro, ["AI"], "DEVELOPER")
        self.assertEqual(lower, upper)

    def test_duplicate_interests_count_once(self):
        once = score_event(self.intro, ["ai"], None)
        twice = score_event(self.intro, ["ai", "AI", " ai "], None)
        self.assertEqual(once, twice)

    def test_level_match_adds_points(self):
        event = make_event(level="200 – Intermediate")
        self.assertEqual(score_event(event, [], None, "200"), SCHEDULE_PROFILE.level_match)
        self.assertEqual(score_event(event, [], None, "300"), 0)


class TestHelpers(unittest.TestCase):

    def test_level_matches(self):
        self.assertTrue(level_matches("200 – Intermediate", "200"))
        self.assertTrue(level_matches("200 – Intermediate", "200 – intermediate"))
        self.assertFalse(level_matches("200 – Intermediate", "300"))
        self.assertFalse(level_matches("200 – Intermediate", ""))
        self.assertFalse(level_matches("", "200"))

    def test_fallback_scores(self):
        self.assertEqual(fallback_score(make_event(type="Keynote")), 0.8)
        self.assertEqual(fallback_score(make_event(type="Workshop")), 0.6)
        self.assertEqual(fallback_score(make_event(type="Chalk talk", level="200 – Intermediate")), 0.4)
        self.assertEqual(fallback_score(make_event(type="Chalk talk", level="400 – Expert")), 0.1)

    def test_matched_terms_keep_original_spelling(self):
        event = make_event(title="Serverless patterns", services=frozenset({"AWS Lambda"}))
        self.assertEqual(matched_terms(event, ["Lambda", "Serverless", "kubernetes"]),
                         ["Lambda", "Serverless"])

    def test_role_matches_on_tags_only(self):
        event = make_event(title="For every developer", tags=frozenset({"Security"}))
        self.assertFalse(role_matches(event, "developer"))
        self.assertTrue(role_matches(event, "security"))
        self.assertFalse(role_matches(event, None))


if __name__ == '__main__':
    unittest.main()
