# =============================================================================
# core/errors.py  —  Failure taxonomy
# =============================================================================
#
# Failures are contained at the smallest scope possible:
#   PlanningFailure   → fallback keyword plan, never shown to the user
#   InvocationError   → one failed outcome, other invocations unaffected
#   EmptyCatalogError → explicit "no data" message (not "no matches")
#   SynthesisFailure  → deterministic template answer
#   ProviderError     → live data service failed, simulated data is used
# =============================================================================


class AgentError(Exception):
    """Base class for every error raised by this package."""


class PlanningFailure(AgentError):
    """The intent classifier was unavailable or returned unusable output."""


class InvocationError(AgentError):
    """A single capability call could not be completed."""


class EmptyCatalogError(AgentError):
    """The event repository holds no events at all."""

    def __init__(self, message: str = (
        "No sessions found in the catalog. "
        "The session data appears to be empty; check data loading."
    )):
        super().__init__(message)


class SynthesisFailure(AgentError):
    """The summarizer was unavailable or returned nothing usable."""


class ProviderError(AgentError):
    """A live external data provider failed."""


class RepositoryUnavailableError(AgentError):
    """The session catalog could not be loaded or read."""
