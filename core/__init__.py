# =============================================================================
# core/__init__.py
# =============================================================================
# Business logic of the conference assistant: the session catalog, relevance
# scoring, agenda building, keyword intent rules, deterministic answer
# rendering and the live data providers.
#
# Nothing in this package imports Google ADK, FastMCP or any other agent
# framework.  Every module can be used (and tested) from a bare REPL.
# =============================================================================
