# =============================================================================
# agent/planner.py  —  Query → invocation plan
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Decides WHICH capabilities to run for a query, and with what parameters.
#
#     query ──▶ intent classifier (LLM) ──▶ parse_plan() ──▶ plan
#                 │ unavailable / slow / exception / unusable output
#                 ▼
#               keyword_plan() (core/intent_rules.py) ──────────▶ plan
#
#   The classifier's answer is UNTRUSTED text.  parse_plan() accepts it only
#   if it contains a JSON array of objects, each with a string "tool" and an
#   object "parameters".  Anything else is a PlanningFailure, and the
#   keyword rules take over.  The user never sees a planning failure.
#
#   Plans are capped at max_plan_size invocations.  plan() never raises.
# =============================================================================

import asyncio
import json
import logging
import re
from typing import Any, Optional

from agent.capabilities import CapabilityRegistry, catalog_description
from agent.llm import TextClient
from agent.prompt import build_planner_prompt
from core.errors import PlanningFailure
from core.intent_rules import keyword_plan
from core.log import log_status
from core.models import PlannedInvocation

logger = logging.getLogger(__name__)

_FENCED = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _locate_array(text: str) -> str:
    fenced = _FENCED.search(text)
    if fenced and "[" in fenced.group(1):
        text = fenced.group(1)
    start, end = text.find("["), text.rfind("]")
    if start == -1 or end <= start:
        raise PlanningFailure("classifier output contains no JSON array")
    return text[start:end + 1]


def _to_invocation(item: Any) -> PlannedInvocation:
    if not isinstance(item, dict):
        raise PlanningFailure(f"plan entry is not an object: {item!r}")
    tool = item.get("tool")
    if not isinstance(tool, str) or not tool.strip():
        raise PlanningFailure(f"plan entry without a tool name: {item!r}")
    parameters = item.get("parameters", {})
    if parameters is None:
        parameters = {}
    if not isinstance(parameters, dict):
        raise PlanningFailure(f"parameters of {tool!r} are not an object")
    strand = item.get("strand")
    reasoning = item.get("reasoning")
    return PlannedInvocation(
        tool=tool.strip(),
        parameters=parameters,
        reasoning=reasoning if isinstance(reasoning, str) else "",
        strand=strand if isinstance(strand, str) else None,
    )


def parse_plan(text: Optional[str]) -> list[PlannedInvocation]:
    """Strictly parse classifier output into a non-empty plan.

    Raises:
        PlanningFailure: no array, invalid JSON, wrong entry shape, or an
            empty array.
    """
    if not text or not text.strip():
        raise PlanningFailure("classifier returned no text")
    try:
        decoded = json.loads(_locate_array(text))
    except ValueError as e:
        raise PlanningFailure(f"classifier output is not valid JSON: {e}") from e
    if not isinstance(decoded, list):
        raise PlanningFailure("classifier output is not a JSON array")
    if not decoded:
        raise PlanningFailure("classifier returned an empty plan")
    return [_to_invocation(item) for item in decoded]


class IntentPlanner:
    def __init__(
        self,
        registry: CapabilityRegistry,
        classifier: Optional[TextClient] = None,
        timeout: float = 20.0,
        max_plan_size: int = 6,
    ):
        self.registry = registry
        self.classifier = classifier
        self.timeout = timeout
        self.max_plan_size = max(1, max_plan_size)

    async def plan(self, query: str) -> list[PlannedInvocation]:
        if not query or not query.strip():
            return []

        if self.classifier is not None:
            try:
                plan = await self._classify(query)
            except PlanningFailure as e:
                log_status(logger, f"Classifier unusable ({e}); using keyword rules")
            else:
                log_status(logger, f"Classifier planned: {[p.tool for p in plan]}")
                return plan[: self.max_plan_size]

        plan = keyword_plan(query)
        log_status(logger, f"Keyword rules planned: {[p.tool for p in plan]}")
        return plan[: self.max_plan_size]

    async def _classify(self, query: str) -> list[PlannedInvocation]:
        prompt = build_planner_prompt(
            query, catalog_description(self.registry), self.max_plan_size
        )
        try:
            text = await asyncio.wait_for(self.classifier.complete(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise PlanningFailure(f"classifier timed out after {self.timeout}s") from e
        except Exception as e:
            raise PlanningFailure(f"classifier call failed: {e}") from e
        return parse_plan(text)
