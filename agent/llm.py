# =============================================================================
# agent/llm.py  —  Text-in / text-out LLM clients (Google ADK + LiteLlm)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The planner and the synthesizer only need "send a prompt, get text
#   back".  That contract is TextClient.  AdkTextClient implements it with
#   the same stack as a full ADK agent:
#
#     ADK Agent (no tools) → LiteLlm → OpenRouter → model (GPT-4o default)
#
#   Each complete() call runs in a FRESH in-memory session: classification
#   and summarization are one-shot, so no conversation history leaks from
#   one request into the next.
#
#   LiteLlm reads the provider key (e.g. OPENROUTER_API_KEY) from the
#   environment; entry points call load_dotenv() before building clients.
# =============================================================================

from typing import Protocol

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

APP_NAME = "strands_agent"
USER_ID = "strands_agent"


class TextClient(Protocol):
    async def complete(self, prompt: str) -> str:
        ...


class AdkTextClient:
    """One ADK agent used as a plain completion endpoint."""

    def __init__(self, model: str, name: str, instruction: str):
        self.agent = Agent(
            name=name,
            model=LiteLlm(model=model),
            instruction=instruction,
        )
        self.session_service = InMemorySessionService()
        self.runner = Runner(
            agent=self.agent,
            app_name=APP_NAME,
            session_service=self.session_service,
        )

    async def complete(self, prompt: str) -> str:
        session = await self.session_service.create_session(app_name=APP_NAME, user_id=USER_ID)
        message = types.Content(role="user", parts=[types.Part(text=prompt)])

        final_text = ""
        async for event in self.runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_text = part.text
        return final_text
