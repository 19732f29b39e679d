import unittest
import os
import sys
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from agent.context import AgentContext
from agent.orchestrator import APOLOGY_TEXT, HELP_TEXT, StrandsAgent
from core.catalog import sample_catalog
from core.config import Settings
from core.models import Event
from core.repository import InMemoryEventRepository


def small_catalog():
    return [
        Event(id="ML101", title="Intro to Machine Learning", type="Breakout session",
              day="Monday", time="10:00 - 11:00", day_time="Monday 10:00 - 11:00",
              tags=frozenset({"developer", "ai"})),
        Event(id="BIZ100", title="Cloud Economics", type="Chalk talk",
              day="Tuesday", time="9:00 - 10:00", day_time="Tuesday 9:00 - 10:00",
              tags=frozenset({"Business"})),
        Event(id="OPS100", title="Observability Basics", type="Breakout session",
              day="Wednesday", time="9:00 - 10:00", day_time="Wednesday 9:00 - 10:00"),
    ]


def make_agent(catalog=None, summarizer=None):
    docs_client = MagicMock()
    docs_client.search = AsyncMock(return_value={
        "query": "How do I use Bedrock?",
        "results": [{"title": "What is Amazon Bedrock?",
                     "url": "https://docs.aws.amazon.com/bedrock/latest/userguide/what-is-bedrock.html",
                     "summary": "Bedrock overview", "relevance": 1.0}],
        "source": "AWS Documentation MCP Server",
        "simulated": False,
    })
    context = AgentContext(
        settings=Settings(use_llm=False, use_live_data=False),
        repository=InMemoryEventRepository(sample_catalog() if catalog is None else catalog),
        docs_client=docs_client,
        summarizer=summarizer,
    )
    return StrandsAgent(context)


class TestStrandsAgent(unittest.IsolatedAsyncioTestCase):

    async def test_recommendation_end_to_end(self):
        agent = make_agent(small_catalog())

        response = await agent.handle("Recommend sessions for a developer interested in AI")

        self.assertIsNone(response.error)
        self.assertEqual(response.invocation_summaries, [{
            "tool": "recommend_sessions",
            "strand": "conference",
            "server": "reinvent-schedule-server",
            "parameters": {"interests": ["ai"], "role": "developer"},
            "success": True,
        }])
        self.assertEqual(response.groups_activated, ["conference"])
        answer = response.answer_text
        self.assertIn("**AWS re:Invent Conference:**", answer)
        self.assertLess(answer.index("Intro to Machine Learning"),
                        answer.index("Observability Basics"))

    async def test_empty_catalog_is_reported_not_hidden(self):
        agent = make_agent(catalog=[])

        response = await agent.handle("Recommend sessions for a developer interested in AI")

        self.assertFalse(response.invocation_summaries[0]["success"])
        self.assertIn("Error: No sessions found in the catalog", response.answer_text)

    async def test_multi_strand_query(self):
        agent = make_agent()

        response = await agent.handle("What's the weather in Las Vegas and any AI sessions?")

        self.assertEqual(response.groups_activated, ["conference", "liveData"])
        self.assertEqual([s["tool"] for s in response.invocation_summaries],
                         ["search_sessions", "get_weather"])
        self.assertTrue(all(s["success"] for s in response.invocation_summaries))
        self.assertIn("**Live Data:**", response.answer_text)

    async def test_documentation_query_uses_the_docs_client(self):
        agent = make_agent()

        response = await agent.handle("How do I use Bedrock?")

        agent.context.docs_client.search.assert_awaited_once_with("How do I use Bedrock?", None)
        self.assertEqual(response.groups_activated, ["documentation"])
        self.assertEqual(response.invocation_summaries[0]["server"], "aws-documentation-server")
        self.assertIn("What is Amazon Bedrock?", response.answer_text)

    async def test_summarizer_writes_the_answer_when_available(self):
        summarizer = MagicMock()
        summarizer.complete = AsyncMock(return_value="Two flights found.")
        agent = make_agent(summarizer=summarizer)

        response = await agent.handle("flights from SFO")

        self.assertEqual(response.answer_text, "Two flights found.")
        summarizer.complete.assert_awaited_once()

    async def test_unmatched_query_still_answers(self):
        response = await make_agent().handle("tell me a joke")
        self.assertEqual(response.invocation_summaries, [])
        self.assertEqual(response.groups_activated, [])
        self.assertIn("couldn't match your request", response.answer_text)

    async def test_unexpected_error_returns_apology(self):
        agent = make_agent()
        agent.planner.plan = AsyncMock(side_effect=RuntimeError("planner exploded"))

        response = await agent.handle("weather in Las Vegas")

        self.assertEqual(response.answer_text, APOLOGY_TEXT)
        self.assertEqual(response.error, "planner exploded")
        self.assertEqual(response.invocation_summaries, [])

    async def test_empty_query_returns_help(self):
        response = await make_agent().handle("  ")
        self.assertEqual(response.answer_text, HELP_TEXT)
        self.assertIsNone(response.error)


if __name__ == '__main__':
    unittest.main()
