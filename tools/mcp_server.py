# =============================================================================
# tools/mcp_server.py  —  FastMCP server for the conference strand
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the conference capabilities as MCP tools under the server name
#   "reinvent-schedule-server", so any MCP client (an IDE, another agent)
#   can search the catalog and build agendas.  Each tool is a thin wrapper
#   around a core/ function: log the call, delegate, log the response.
#
#   The in-process agent (agent/capabilities.py) calls the same core/
#   functions directly; this server is the out-of-process face of them.
#
# THE REPOSITORY IS INJECTED:
#   create_server(repository) builds a FastMCP app whose tools close over
#   that one repository.  There is no module-level catalog; tests build a
#   server around their own repository.
#
# TOOL NAMING:
#   get_*    → read-only retrieval
#   search_* → query with filters
#   create_* / recommend_* → derived results, still read-only
#
# BOUNDED RESPONSES:
#   Search and recommendation results are capped (limit parameters), and
#   the agenda is capped by max_per_day.  No tool dumps the catalog.
#   An empty catalog answers {"error": "No sessions found in the catalog..."}
#   from every tool that reads sessions.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server        (stdio transport)
#   CATALOG_CSV=/path/sessions.csv python -m tools.mcp_server
# =============================================================================

from dataclasses import asdict
import logging
from typing import Callable, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from core.agenda import build_agenda
from core.config import Settings
from core.errors import EmptyCatalogError
from core.log import configure_logging, log_request, log_response, log_status
from core.recommendations import (
    conference_info,
    recommend_events,
    schedule_by_day,
    search_sessions as search_catalog,
    session_details,
)
from core.repository import InMemoryEventRepository, build_repository

SERVER_NAME = "reinvent-schedule-server"

logger = logging.getLogger(SERVER_NAME)


def _answer(tool_name: str, produce: Callable[[], dict]) -> dict:
    """Run one tool body; an empty catalog becomes an {"error"} payload."""
    try:
        result = produce()
    except EmptyCatalogError as e:
        log_status(logger, "Catalog is empty")
        result = {"error": str(e)}
    return log_response(logger, tool_name, result)


def create_server(repository: Optional[InMemoryEventRepository] = None) -> FastMCP:
    """Build the conference MCP server around `repository`.

    Without a repository, the catalog comes from CATALOG_CSV (or the
    built-in sample catalog).
    """
    if repository is None:
        repository = build_repository(Settings.from_env().catalog_csv)
        log_status(logger, f"Loaded {len(repository)} sessions")

    mcp = FastMCP(SERVER_NAME)

    # =========================================================================
    # TOOL 1: search_sessions
    # =========================================================================
    @mcp.tool()
    def search_sessions(
        query: str = "",
        track: Optional[str] = None,
        level: Optional[str] = None,
        day: Optional[str] = None,
        venue: Optional[str] = None,
        limit: int = 20,
    ) -> dict:
        """Search conference sessions by keywords and optional filters.

        Every word of `query` must appear somewhere in the session (title,
        description, speakers, tags, services or type).

        Args:
            query: Keywords, e.g. "bedrock agents".  Empty matches everything.
            track: Session type filter, e.g. "Workshop" or "Breakout session".
            level: Level filter, e.g. "300 – Advanced".
            day: Day filter, e.g. "Tuesday".
            venue: Venue name fragment, e.g. "Venetian".
            limit: Maximum sessions returned (default 20).

        Returns:
            {query, found, sessions: [...]} where `found` counts all matches.
        """
        log_request(logger, "search_sessions", query=query, track=track, level=level,
                    day=day, venue=venue, limit=limit)
        return _answer("search_sessions", lambda: search_catalog(
            repository, query, track, level, day, venue, limit))

    # =========================================================================
    # TOOL 2: get_session_details
    # =========================================================================
    @mcp.tool()
    def get_session_details(session_id: str) -> dict:
        """Full details of one session by id (e.g. "AIM201").

        Unknown ids return {found: false, message, similar_sessions}.
        """
        log_request(logger, "get_session_details", session_id=session_id)
        return _answer("get_session_details", lambda: session_details(repository, session_id))

    # =========================================================================
    # TOOL 3: recommend_sessions
    # =========================================================================
    @mcp.tool()
    def recommend_sessions(
        interests: list[str],
        role: Optional[str] = None,
        level: Optional[str] = None,
        limit: int = 10,
    ) -> dict:
        """Ranked session recommendations for interests and an optional role.

        Args:
            interests: Topics, e.g. ["AI", "serverless"].
            role: Professional role, e.g. "developer" or "product manager".
            level: Only sessions of this level, e.g. "200".
            limit: Maximum recommendations (default 10).

        Returns:
            {total_matched, recommendations: [session + relevanceScore,
            matchedInterests, roleMatch]}, best first.  Never empty while the
            catalog has sessions.
        """
        log_request(logger, "recommend_sessions", interests=interests, role=role,
                    level=level, limit=limit)
        return _answer("recommend_sessions", lambda: recommend_events(
            repository.all(), interests, role, level, limit))

    # =========================================================================
    # TOOL 4: create_personalized_schedule
    # =========================================================================
    @mcp.tool()
    def create_personalized_schedule(
        role: str,
        learning_topics: list[str],
        experience_level: Optional[str] = None,
        max_sessions_per_day: int = 4,
        avoid_conflicts: bool = True,
    ) -> dict:
        """Build a ranked, conflict-free, per-day conference agenda.

        Args:
            role: e.g. "product manager", "developer", "architect".
            learning_topics: e.g. ["agents", "AI"].
            experience_level: e.g. "200" or "300 – Advanced".
            max_sessions_per_day: Upper bound per day (default 4).
            avoid_conflicts: Never place two sessions in the same time slot.

        Returns:
            {role, learning_topics, total_sessions, average_relevance_score,
            schedule: {day: [...]}, sessions_per_day, message}, or
            {error} when the catalog is empty.
        """
        log_request(logger, "create_personalized_schedule", role=role,
                    learning_topics=learning_topics, experience_level=experience_level,
                    max_sessions_per_day=max_sessions_per_day, avoid_conflicts=avoid_conflicts)

        def produce() -> dict:
            agenda = build_agenda(
                repository.all(), learning_topics, role, experience_level,
                max_per_day=max_sessions_per_day, avoid_conflicts=avoid_conflicts,
            )
            log_status(logger, f"Scheduled {agenda.total_sessions} of "
                               f"{agenda.candidate_pool_size} candidates")
            return asdict(agenda)

        return _answer("create_personalized_schedule", produce)

    # =========================================================================
    # TOOL 5: get_schedule_by_day
    # =========================================================================
    @mcp.tool()
    def get_schedule_by_day(day: str) -> dict:
        """All sessions on one day ("Monday" … "Friday"), ordered by time."""
        log_request(logger, "get_schedule_by_day", day=day)
        return _answer("get_schedule_by_day", lambda: schedule_by_day(repository, day))

    # =========================================================================
    # TOOL 6: get_conference_info
    # =========================================================================
    @mcp.tool()
    def get_conference_info() -> dict:
        """Catalog overview: session count, session types, venues, levels, days."""
        log_request(logger, "get_conference_info")
        return log_response(logger, "get_conference_info", conference_info(repository))

    return mcp


if __name__ == "__main__":
    load_dotenv()
    configure_logging(Settings.from_env().log_level)
    create_server().run()
