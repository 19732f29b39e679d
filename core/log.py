# =============================================================================
# core/log.py  —  Logging setup shared by the agent, tools and entry points
# =============================================================================
#
# Everything logs to STDERR: the conference MCP server speaks JSON-RPC on
# STDOUT, and a stray log line there would corrupt the protocol stream.
#
# ANSI colour codes make tool traffic easy to scan in a terminal:
#   CYAN   → capability calls with their parameters
#   YELLOW → intermediate status / fallbacks
#   GREEN  → compact JSON responses
# =============================================================================

import json
import logging
import sys

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_RESPONSE_PREVIEW_CHARS = 400


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def log_request(logger: logging.Logger, tool_name: str, **params) -> None:
    """Log an incoming capability call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(logger: logging.Logger, message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(logger: logging.Logger, tool_name: str, result: dict) -> dict:
    """Log a (truncated) compact JSON response in GREEN, then return it."""
    payload = json.dumps(result, separators=(",", ":"), default=str)
    if len(payload) > _RESPONSE_PREVIEW_CHARS:
        payload = payload[:_RESPONSE_PREVIEW_CHARS] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {payload}{_RESET}")
    return result
