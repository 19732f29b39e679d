# =============================================================================
# agent/prompt.py  —  Prompts for the two LLM collaborators
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the text sent to:
#     1. the INTENT CLASSIFIER — picks capabilities and parameters for a
#        query and must answer with a JSON array (nothing else)
#     2. the SUMMARIZER — turns every capability outcome (errors included)
#        into one friendly answer
#
#   Both are plain functions so the runtime context (today's date, the
#   capability catalog, the outcomes) is injected on every call.
#
# PROMPT ENGINEERING PRINCIPLES USED:
#   - ROLE DEFINITION: each prompt says what the model IS
#   - EXPLICIT OUTPUT CONTRACT: the classifier gets an exact JSON shape;
#     whatever else it says is discarded by the planner's parser
#   - SELECTION RULES: keyword → strand hints so multi-strand queries
#     activate every relevant strand
#   - ANTI-PATTERNS: the summarizer must not invent data or hide failures
# =============================================================================

from datetime import date
import json
from typing import Iterable

from core.models import InvocationOutcome

PLANNER_INSTRUCTION = (
    "You are the intent classifier of a conference assistant. You map a user "
    "query to tool calls and reply with a JSON array only."
)

SUMMARIZER_INSTRUCTION = (
    "You are a friendly AWS re:Invent conference assistant. You turn tool "
    "results into clear, accurate answers."
)

_MAX_RESULT_CHARS = 4000


def build_planner_prompt(query: str, catalog: str, max_tools: int = 6) -> str:
    """Classifier prompt: strands + tools + selection rules + output contract."""
    return f"""You orchestrate tools grouped into strands. Each strand is served by one MCP server.

TODAY'S DATE: {date.today().isoformat()}

{catalog}

TOOL SELECTION RULES:
- AWS / Bedrock / Lambda / cloud documentation → search_aws_docs (documentation strand)
- re:Invent sessions, speakers, agendas → search_sessions, recommend_sessions,
  create_personalized_schedule, get_session_details, get_schedule_by_day,
  get_conference_info (conference strand)
- weather, stock prices, flights → get_weather, get_stock_price, search_flights (liveData strand)
- Select tools from several strands when the query asks about several things.
- Use create_personalized_schedule when the user wants a plan or agenda;
  recommend_sessions when they want suggestions; search_sessions otherwise.
- Choose at most {max_tools} tools.

USER QUERY: "{query}"

Respond with ONLY a JSON array, no prose:
[
  {{
    "tool": "tool_name",
    "parameters": {{"param": "value"}},
    "strand": "strand_key",
    "reasoning": "why this tool is needed"
  }}
]"""


def _outcome_block(outcome: InvocationOutcome) -> str:
    header = f"[{outcome.group}] {outcome.tool}"
    if not outcome.succeeded:
        return f"{header} FAILED: {outcome.error}"
    body = json.dumps(outcome.result, default=str)
    if len(body) > _MAX_RESULT_CHARS:
        body = body[:_MAX_RESULT_CHARS] + "…"
    return f"{header} OK:\n{body}"


def build_summarizer_prompt(query: str, outcomes: Iterable[InvocationOutcome]) -> str:
    """Summarizer prompt: the query plus every outcome, failures included."""
    blocks = "\n\n".join(_outcome_block(o) for o in outcomes) or "(no tools were run)"
    return f"""USER QUERY: "{query}"

TOOL RESULTS:
{blocks}

Write the answer for the user:
- Use ONLY the data above. Never invent sessions, prices or forecasts.
- Cover every strand that returned something, under a short heading each.
- For personalized schedules, list sessions per day with time and venue.
- If a tool FAILED, say briefly that that part is unavailable.
- If data is marked "simulated": true, say it is simulated.
- Be concise; use bullet points."""
