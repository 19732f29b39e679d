# =============================================================================
# tools/docs_client.py  —  AWS documentation lookups over MCP (stdio)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The documentation strand is served by the public AWS documentation MCP
#   server.  For every lookup we:
#     1. spawn the server as a subprocess (default: `uvx
#        awslabs.aws-documentation-mcp-server@latest`)
#     2. connect with a FastMCP Client over StdioTransport
#     3. call its `search_documentation` tool
#     4. map the results into our own small payload
#
#   The whole exchange runs under ONE hard timeout (DOCS_TIMEOUT_SECONDS).
#   The transport is closed on every path (success, error, timeout and
#   cancellation), so no server subprocess outlives the request.
#
#   When the server cannot be started, errors, or times out, the lookup
#   degrades to a small simulated result marked `"simulated": True`.  A
#   docs failure never fails the user's request.
# =============================================================================

import asyncio
import json
import logging
from typing import Any, Optional, Sequence

from fastmcp import Client
from fastmcp.client.transports import StdioTransport

from core.log import log_status

logger = logging.getLogger(__name__)

SEARCH_TOOL = "search_documentation"
MAX_RESULTS = 5
LIVE_SOURCE = "AWS Documentation MCP Server"
FALLBACK_SOURCE = "Mock AWS Documentation (MCP fallback)"


def simulated_docs(query: str, service: Optional[str] = None) -> dict:
    return {
        "query": query,
        "service": service or "all",
        "results": [
            {
                "title": "Amazon Bedrock - Getting Started",
                "url": "https://docs.aws.amazon.com/bedrock/latest/userguide/getting-started.html",
                "summary": "Learn how to get started with Amazon Bedrock, a fully managed "
                           "service for foundation models.",
                "service": "bedrock",
                "relevance": 0.95,
            }
        ],
        "source": FALLBACK_SOURCE,
        "simulated": True,
    }


def _result_items(result: Any) -> list[dict]:
    """Pull the list of hits out of a CallToolResult.

    Newer servers answer with structured content ({"result": [...]}); older
    ones only with a JSON text block.
    """
    structured = getattr(result, "structured_content", None)
    if isinstance(structured, dict) and isinstance(structured.get("result"), list):
        return structured["result"]

    for block in getattr(result, "content", None) or []:
        text = getattr(block, "text", None)
        if not text:
            continue
        try:
            decoded = json.loads(text)
        except ValueError:
            continue
        if isinstance(decoded, list):
            return decoded
        if isinstance(decoded, dict) and isinstance(decoded.get("result"), list):
            return decoded["result"]
    return []


def _to_hit(item: dict, service: Optional[str]) -> dict:
    rank = item.get("rank_order")
    return {
        "title": item.get("title") or "AWS Documentation",
        "url": item.get("url") or "#",
        "summary": item.get("context") or "AWS service documentation",
        "service": service or "aws",
        "relevance": round((11 - rank) / 10, 2) if isinstance(rank, int) else 0.9,
    }


class DocumentationClient:
    """Runs one documentation search per call against a fresh MCP subprocess."""

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        timeout: float = 10.0,
    ):
        self.command = command
        self.args = list(args)
        self.timeout = timeout

    def _transport(self) -> StdioTransport:
        return StdioTransport(command=self.command, args=self.args)

    async def _call(self, transport: StdioTransport, query: str) -> Any:
        async with Client(transport) as client:
            return await client.call_tool(
                SEARCH_TOOL, {"search_phrase": query, "limit": MAX_RESULTS}
            )

    async def search(self, query: str, service: Optional[str] = None) -> dict:
        transport = self._transport()
        try:
            result = await asyncio.wait_for(self._call(transport, query), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"⚠ documentation server timed out after {self.timeout}s")
            return simulated_docs(query, service)
        except Exception as e:
            logger.warning(f"⚠ documentation server failed: {e}")
            return simulated_docs(query, service)
        finally:
            await transport.close()

        hits = [_to_hit(item, service) for item in _result_items(result) if isinstance(item, dict)]
        log_status(logger, f"documentation server returned {len(hits)} result(s)")
        return {
            "query": query,
            "service": service or "all",
            "results": hits[:MAX_RESULTS],
            "source": LIVE_SOURCE,
            "simulated": False,
        }
