# =============================================================================
# agent/context.py  —  Everything a request needs, built once per process
# =============================================================================
#
# AgentContext replaces module-level singletons: the repository, the docs
# client and the LLM clients are created here and handed to the registry,
# planner and synthesizer explicitly.  Tests build their own context with
# fakes (a small repository, a stub classifier) and nothing global changes.
# =============================================================================

from dataclasses import dataclass
import logging
from typing import Optional

from agent.llm import AdkTextClient, TextClient
from agent.prompt import PLANNER_INSTRUCTION, SUMMARIZER_INSTRUCTION
from core.config import Settings
from core.log import log_status
from core.repository import InMemoryEventRepository, build_repository
from tools.docs_client import DocumentationClient

logger = logging.getLogger(__name__)


@dataclass
class AgentContext:
    settings: Settings
    repository: InMemoryEventRepository
    docs_client: DocumentationClient
    classifier: Optional[TextClient] = None
    summarizer: Optional[TextClient] = None


def build_context(settings: Optional[Settings] = None) -> AgentContext:
    """Wire the default collaborators from settings (environment by default)."""
    settings = settings or Settings.from_env()

    repository = build_repository(settings.catalog_csv)
    log_status(logger, f"Catalog ready: {len(repository)} sessions")

    classifier = summarizer = None
    if settings.use_llm:
        classifier = AdkTextClient(settings.llm_model, "intent_classifier", PLANNER_INSTRUCTION)
        summarizer = AdkTextClient(settings.llm_model, "result_summarizer", SUMMARIZER_INSTRUCTION)
        log_status(logger, f"LLM collaborators: {settings.llm_model}")
    else:
        log_status(logger, "USE_LLM=false: keyword planner and template answers only")

    return AgentContext(
        settings=settings,
        repository=repository,
        docs_client=DocumentationClient(
            settings.docs_server_command,
            settings.docs_server_args,
            timeout=settings.docs_timeout,
        ),
        classifier=classifier,
        summarizer=summarizer,
    )
