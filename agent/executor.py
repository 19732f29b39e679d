# =============================================================================
# agent/executor.py  —  Run a plan concurrently, isolating failures
# =============================================================================
#
# Every invocation becomes its own task; all tasks run under one
# asyncio.gather.  A task NEVER raises: exceptions, timeouts and unknown
# tool names all come back as failed InvocationOutcomes, so one bad tool
# cannot take down its siblings.
#
# Each invocation is bounded by `timeout` seconds.
# =============================================================================

import asyncio
import logging
from typing import Iterable, Mapping

from agent.capabilities import CapabilityRegistry
from core.log import log_request, log_response, log_status
from core.models import InvocationOutcome, PlannedInvocation

logger = logging.getLogger(__name__)

UNKNOWN_GROUP = "unknown"


class ConcurrentExecutor:
    def __init__(self, registry: CapabilityRegistry, timeout: float = 15.0):
        self.registry = registry
        self.timeout = timeout

    async def execute(self, plan: Iterable[PlannedInvocation]) -> list[InvocationOutcome]:
        plan = list(plan)
        if not plan:
            return []
        return list(await asyncio.gather(*(self._run(invocation) for invocation in plan)))

    async def _run(self, invocation: PlannedInvocation) -> InvocationOutcome:
        capability = self.registry.get(invocation.tool)
        raw = invocation.parameters
        parameters = dict(raw) if isinstance(raw, Mapping) else {}

        if capability is None:
            log_status(logger, f"Unknown tool {invocation.tool!r}")
            return InvocationOutcome(
                tool=invocation.tool,
                group=invocation.strand or UNKNOWN_GROUP,
                parameters=parameters,
                error=f"Unknown tool: {invocation.tool}",
                reasoning=invocation.reasoning,
            )

        outcome = InvocationOutcome(
            tool=invocation.tool,
            group=capability.group,
            parameters=parameters,
            reasoning=invocation.reasoning,
        )
        try:
            # parameters are untrusted planner output: log them as one value
            log_request(logger, invocation.tool, params=parameters)
            outcome.result = await asyncio.wait_for(
                capability.invoke(raw), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            outcome.error = f"{invocation.tool} timed out after {self.timeout}s"
        except Exception as e:
            outcome.error = str(e) or e.__class__.__name__

        if outcome.succeeded:
            log_response(logger, invocation.tool, outcome.result)
        else:
            log_status(logger, f"{invocation.tool} failed: {outcome.error}")
        return outcome
