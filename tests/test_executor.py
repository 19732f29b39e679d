import unittest
import asyncio
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from agent.capabilities import Capability, CapabilityName, CapabilityRegistry
from agent.executor import UNKNOWN_GROUP, ConcurrentExecutor
from core.errors import InvocationError
from core.models import ParameterSpec, PlannedInvocation


def _ok(params):
    return {"echo": params["location"]}


def _boom(params):
    raise RuntimeError("boom")


async def _async_ok(params):
    await asyncio.sleep(0)
    return {"symbol": params["symbol"]}


async def _slow(params):
    await asyncio.sleep(1.0)
    return {"late": True}


def make_registry():
    return CapabilityRegistry([
        Capability(
            CapabilityName.GET_WEATHER, "liveData", "echo a location",
            (ParameterSpec("location", "string", "city", default="Las Vegas"),),
            _ok,
        ),
        Capability(
            CapabilityName.SEARCH_FLIGHTS, "liveData", "always fails",
            (),
            _boom,
        ),
        Capability(
            CapabilityName.GET_STOCK_PRICE, "liveData", "async echo",
            (ParameterSpec("symbol", "string", "ticker", required=True),),
            _async_ok,
        ),
        Capability(
            CapabilityName.GET_CONFERENCE_INFO, "conference", "never finishes in time",
            (),
            _slow,
        ),
    ])


class TestConcurrentExecutor(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.executor = ConcurrentExecutor(make_registry(), timeout=0.1)

    async def test_one_failure_does_not_affect_siblings(self):
        outcomes = await self.executor.execute([
            PlannedInvocation("get_weather", {"location": "Austin"}),
            PlannedInvocation("search_flights", {}),
            PlannedInvocation("get_stock_price", {"symbol": "AMZN"}),
        ])

        self.assertEqual([o.tool for o in outcomes],
                         ["get_weather", "search_flights", "get_stock_price"])
        self.assertTrue(outcomes[0].succeeded)
        self.assertEqual(outcomes[0].result, {"echo": "Austin"})
        self.assertFalse(outcomes[1].succeeded)
        self.assertEqual(outcomes[1].error, "boom")
        self.assertTrue(outcomes[2].succeeded)
        self.assertEqual(outcomes[2].result, {"symbol": "AMZN"})

    async def test_parameter_names_cannot_break_the_batch(self):
        outcomes = await self.executor.execute([
            PlannedInvocation("get_weather", {"location": "Austin"}),
            PlannedInvocation("get_weather", {"location": "Reno", "tool_name": "x", "logger": 1}),
            PlannedInvocation("get_stock_price", {"symbol": "AMZN"}),
            PlannedInvocation("get_stock_price", None),
        ])

        self.assertEqual(len(outcomes), 4)
        self.assertEqual(outcomes[0].result, {"echo": "Austin"})
        # extra keys are dropped by validation, not passed anywhere
        self.assertEqual(outcomes[1].result, {"echo": "Reno"})
        self.assertEqual(outcomes[1].parameters["tool_name"], "x")
        self.assertEqual(outcomes[2].result, {"symbol": "AMZN"})
        self.assertIn("missing required parameter 'symbol'", outcomes[3].error)

    async def test_unknown_tool_becomes_a_failed_outcome(self):
        outcomes = await self.executor.execute([PlannedInvocation("nope", {"x": 1})])
        self.assertEqual(outcomes[0].error, "Unknown tool: nope")
        self.assertEqual(outcomes[0].group, UNKNOWN_GROUP)
        self.assertEqual(outcomes[0].parameters, {"x": 1})

        outcomes = await self.executor.execute(
            [PlannedInvocation("nope", {}, strand="documentation")]
        )
        self.assertEqual(outcomes[0].group, "documentation")

    async def test_slow_tool_times_out(self):
        outcomes = await self.executor.execute([
            PlannedInvocation("get_conference_info", {}),
            PlannedInvocation("get_weather", {}),
        ])
        self.assertIn("timed out", outcomes[0].error)
        self.assertEqual(outcomes[0].group, "conference")
        self.assertEqual(outcomes[1].result, {"echo": "Las Vegas"})

    async def test_missing_required_parameter_fails_the_outcome(self):
        outcomes = await self.executor.execute([PlannedInvocation("get_stock_price", {})])
        self.assertFalse(outcomes[0].succeeded)
        self.assertIn("missing required parameter 'symbol'", outcomes[0].error)

    async def test_empty_plan(self):
        self.assertEqual(await self.executor.execute([]), [])


class TestCapabilityValidation(unittest.TestCase):

    def setUp(self):
        self.capability = Capability(
            CapabilityName.CREATE_PERSONALIZED_SCHEDULE, "conference", "schedule",
            (
                ParameterSpec("role", "string", "role", default="attendee"),
                ParameterSpec("learning_topics", "array", "topics", default=("AI",)),
                ParameterSpec("max_sessions_per_day", "integer", "max", default=4),
                ParameterSpec("avoid_conflicts", "boolean", "avoid", default=True),
            ),
            lambda params: params,
        )

    def test_defaults_are_applied_and_extras_dropped(self):
        clean = self.capability.validate({"role": " developer ", "color": "blue"})
        self.assertEqual(clean, {
            "role": "developer",
            "learning_topics": ["AI"],
            "max_sessions_per_day": 4,
            "avoid_conflicts": True,
        })

    def test_default_lists_are_not_shared(self):
        first = self.capability.validate({})
        first["learning_topics"].append("data")
        self.assertEqual(self.capability.validate({})["learning_topics"], ["AI"])

    def test_values_are_coerced(self):
        clean = self.capability.validate({
            "learning_topics": "agents, ai ,",
            "max_sessions_per_day": "3",
            "avoid_conflicts": "false",
        })
        self.assertEqual(clean["learning_topics"], ["agents", "ai"])
        self.assertEqual(clean["max_sessions_per_day"], 3)
        self.assertIs(clean["avoid_conflicts"], False)

    def test_bad_values_raise(self):
        for raw in ({"max_sessions_per_day": "many"},
                    {"max_sessions_per_day": True},
                    {"avoid_conflicts": "maybe"},
                    {"learning_topics": 7},
                    {"role": {"name": "dev"}}):
            with self.assertRaises(InvocationError, msg=repr(raw)):
                self.capability.validate(raw)

    def test_parameters_must_be_an_object(self):
        with self.assertRaises(InvocationError):
            self.capability.validate(["developer"])


if __name__ == '__main__':
    unittest.main()
