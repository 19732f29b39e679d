# =============================================================================
# core/config.py  —  Runtime settings
# =============================================================================
#
# All knobs come from environment variables (entry points call
# load_dotenv() first, so a .env file works too).  Settings are read once
# per process into a frozen dataclass and passed around explicitly.
#
#   LLM_MODEL                   LiteLlm model string (default: GPT-4o via OpenRouter)
#   USE_LLM                     "false" → deterministic planner/synthesizer only
#   USE_LIVE_DATA               "false" → simulated weather/stock/flight data only
#                               (default: live first, simulated after a live failure)
#   CATALOG_CSV                 path to a session CSV export (default: sample catalog)
#   *_TIMEOUT_SECONDS           classifier, summarizer, invocation, docs lookups
#   DOCS_SERVER_COMMAND/ARGS    how to spawn the documentation MCP server
#   MAX_PLAN_SIZE               upper bound on invocations per query
# =============================================================================

from dataclasses import dataclass
import os
import shlex
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    llm_model: str = "openrouter/openai/gpt-4o"
    use_llm: bool = True
    use_live_data: bool = True
    catalog_csv: Optional[str] = None

    classifier_timeout: float = 20.0
    summarizer_timeout: float = 30.0
    invocation_timeout: float = 15.0
    docs_timeout: float = 10.0

    docs_server_command: str = "uvx"
    docs_server_args: tuple[str, ...] = ("awslabs.aws-documentation-mcp-server@latest",)

    max_plan_size: int = 6

    openweather_api_key: Optional[str] = None
    alpha_vantage_api_key: Optional[str] = None
    flight_api_url: Optional[str] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        docs_args = os.environ.get("DOCS_SERVER_ARGS")
        return cls(
            llm_model=os.environ.get("LLM_MODEL", cls.llm_model),
            use_llm=_env_bool("USE_LLM", True),
            use_live_data=_env_bool("USE_LIVE_DATA", True),
            catalog_csv=os.environ.get("CATALOG_CSV") or None,
            classifier_timeout=_env_float("CLASSIFIER_TIMEOUT_SECONDS", cls.classifier_timeout),
            summarizer_timeout=_env_float("SUMMARIZER_TIMEOUT_SECONDS", cls.summarizer_timeout),
            invocation_timeout=_env_float("INVOCATION_TIMEOUT_SECONDS", cls.invocation_timeout),
            docs_timeout=_env_float("DOCS_TIMEOUT_SECONDS", cls.docs_timeout),
            docs_server_command=os.environ.get("DOCS_SERVER_COMMAND", cls.docs_server_command),
            docs_server_args=tuple(shlex.split(docs_args)) if docs_args else cls.docs_server_args,
            max_plan_size=max(1, _env_int("MAX_PLAN_SIZE", cls.max_plan_size)),
            openweather_api_key=os.environ.get("OPENWEATHER_API_KEY") or None,
            alpha_vantage_api_key=os.environ.get("ALPHA_VANTAGE_API_KEY") or None,
            flight_api_url=os.environ.get("FLIGHT_API_URL") or None,
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
        )
