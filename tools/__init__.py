# =============================================================================
# tools/__init__.py
# =============================================================================
# MCP-facing code, in both directions:
#
#   mcp_server.py   SERVES the conference capabilities as FastMCP tools
#                   ("reinvent-schedule-server", stdio)
#   docs_client.py  CONSUMES the AWS documentation MCP server through a
#                   FastMCP stdio client
#
# Business logic stays in core/.  Nothing here knows about Google ADK or
# about the agent's planner/executor.
# =============================================================================
