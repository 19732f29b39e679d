# =============================================================================
# agent/synthesizer.py  —  Outcomes → one answer
# =============================================================================
#
# Primary path: the summarizer LLM sees the query and EVERY outcome,
# failures included (agent/prompt.py).  If it is not configured, fails,
# times out or answers with nothing, the deterministic template renderer
# in core/synthesis.py produces the answer instead.  synthesize() never
# raises for a well-formed list of outcomes.
# =============================================================================

import asyncio
import logging
from typing import Iterable, Mapping, Optional

from agent.llm import TextClient
from agent.prompt import build_summarizer_prompt
from core.errors import SynthesisFailure
from core.log import log_status
from core.models import InvocationOutcome
from core.synthesis import render_fallback_answer

logger = logging.getLogger(__name__)


class ResultSynthesizer:
    def __init__(
        self,
        summarizer: Optional[TextClient] = None,
        timeout: float = 30.0,
        group_labels: Optional[Mapping[str, str]] = None,
    ):
        self.summarizer = summarizer
        self.timeout = timeout
        self.group_labels = dict(group_labels or {})

    async def synthesize(self, query: str, outcomes: Iterable[InvocationOutcome]) -> str:
        outcomes = list(outcomes)
        if self.summarizer is not None and outcomes:
            try:
                return await self._summarize(query, outcomes)
            except SynthesisFailure as e:
                log_status(logger, f"Summarizer unusable ({e}); using template answer")
        return render_fallback_answer(outcomes, self.group_labels)

    async def _summarize(self, query: str, outcomes: list[InvocationOutcome]) -> str:
        prompt = build_summarizer_prompt(query, outcomes)
        try:
            text = await asyncio.wait_for(self.summarizer.complete(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise SynthesisFailure(f"summarizer timed out after {self.timeout}s") from e
        except Exception as e:
            raise SynthesisFailure(f"summarizer call failed: {e}") from e
        if not text or not text.strip():
            raise SynthesisFailure("summarizer returned no text")
        return text.strip()
