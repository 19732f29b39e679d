# =============================================================================
# agent/orchestrator.py  —  StrandsAgent: the one exposed operation
# =============================================================================
#
# HOW A QUERY FLOWS:
#
#   handle(query)
#     │
#     ├─▶ IntentPlanner.plan()         classifier, or keyword rules
#     ├─▶ ConcurrentExecutor.execute() every invocation at once, failures isolated
#     └─▶ ResultSynthesizer.synthesize() summarizer, or template answer
#
#   Each stage has its own fallback, so handle() only reaches its apology
#   path on a truly unexpected error.  Even then it returns an AgentResponse
#   (with `error` set) instead of raising.
# =============================================================================

import logging
from typing import Optional

from agent.capabilities import STRANDS, CapabilityRegistry, build_registry
from agent.context import AgentContext
from agent.executor import ConcurrentExecutor
from agent.planner import IntentPlanner
from agent.synthesizer import ResultSynthesizer
from core.models import AgentResponse, InvocationOutcome
from core.synthesis import ordered_groups

logger = logging.getLogger(__name__)

_EXAMPLES = (
    '🎯 AWS re:Invent Conference: "Recommend sessions for a developer interested in AI"\n'
    '📚 AWS Documentation: "How do I use Bedrock?"\n'
    '🌤️ Live Data: "Weather in Las Vegas", "AMZN stock price", "Flights from SFO"'
)

HELP_TEXT = f"Ask me about:\n{_EXAMPLES}"

APOLOGY_TEXT = (
    "I apologize, but I encountered an error processing your request. "
    f"Please try rephrasing your question or ask about:\n\n{_EXAMPLES}"
)


def summarize_outcome(outcome: InvocationOutcome) -> dict:
    strand = STRANDS.get(outcome.group)
    return {
        "tool": outcome.tool,
        "strand": outcome.group,
        "server": strand.server if strand else "unknown",
        "parameters": outcome.parameters,
        "success": outcome.succeeded,
    }


class StrandsAgent:
    def __init__(self, context: AgentContext, registry: Optional[CapabilityRegistry] = None):
        settings = context.settings
        self.context = context
        self.registry = registry or build_registry(context)
        self.planner = IntentPlanner(
            self.registry,
            classifier=context.classifier,
            timeout=settings.classifier_timeout,
            max_plan_size=settings.max_plan_size,
        )
        self.executor = ConcurrentExecutor(self.registry, timeout=settings.invocation_timeout)
        self.synthesizer = ResultSynthesizer(
            context.summarizer,
            timeout=settings.summarizer_timeout,
            group_labels={key: strand.name for key, strand in STRANDS.items()},
        )

    async def handle(self, query: str) -> AgentResponse:
        if not query or not query.strip():
            return AgentResponse(answer_text=HELP_TEXT)

        try:
            plan = await self.planner.plan(query)
            outcomes = await self.executor.execute(plan)
            answer = await self.synthesizer.synthesize(query, outcomes)
        except Exception as e:
            logger.exception("Request failed")
            return AgentResponse(answer_text=APOLOGY_TEXT, error=str(e) or e.__class__.__name__)

        return AgentResponse(
            answer_text=answer,
            invocation_summaries=[summarize_outcome(o) for o in outcomes],
            groups_activated=ordered_groups(o.group for o in outcomes),
        )
