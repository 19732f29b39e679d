# =============================================================================
# main.py  —  Console entry point for the conference Strands agent
# =============================================================================
#
# HOW TO RUN:
#   python main.py                       interactive loop
#   python main.py "weather in Austin"   one query, then exit
#   strands-agent                        same, once installed
#
# WHAT HAPPENS PER QUERY:
#   1. the planner picks capabilities (LLM classifier, or keyword rules)
#   2. the executor runs them concurrently across the three strands
#   3. the synthesizer writes one answer (LLM summarizer, or template)
#
# CONFIGURATION:
#   .env / environment, see core/config.py.  With USE_LLM=false and
#   USE_LIVE_DATA=false the agent runs fully offline: keyword planning,
#   template answers, simulated data.
# =============================================================================

import asyncio
import sys

from dotenv import load_dotenv

# Must run before building LLM clients: LiteLlm reads OPENROUTER_API_KEY
# (or the provider's key) from the environment.
load_dotenv()

from agent.context import build_context
from agent.orchestrator import StrandsAgent
from core.config import Settings
from core.log import configure_logging


def _print_response(response) -> None:
    print("-" * 70)
    for summary in response.invocation_summaries:
        mark = "✅" if summary["success"] else "❌"
        print(f"  {mark} {summary['tool']} ({summary['strand']} → {summary['server']})")
    if response.groups_activated:
        print(f"  strands: {', '.join(response.groups_activated)}")
    print(f"\n🤖 Agent:\n\n{response.answer_text}")
    print("\n" + "=" * 70)


async def run_agent(queries: list[str]) -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    agent = StrandsAgent(build_context(settings))

    if queries:
        for query in queries:
            _print_response(await agent.handle(query))
        return

    print("=" * 70)
    print("  AWS re:INVENT STRANDS AGENT")
    print("  conference · documentation · live data")
    print("=" * 70)
    print("💬 Ask about sessions, AWS docs, weather, stocks or flights.")
    print("   (Type 'quit' to exit)\n")

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break
        if not user_input:
            continue

        print("\n🤖 Agent is thinking...\n")
        _print_response(await agent.handle(user_input))


def cli() -> None:
    asyncio.run(run_agent([" ".join(sys.argv[1:])] if len(sys.argv) > 1 else []))


if __name__ == "__main__":
    cli()
