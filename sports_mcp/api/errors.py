# sports_mcp/api/errors.py
"""
Error taxonomy for Sports MCP.

Provides:
1. Error code constants for consistent error handling
2. Custom exception hierarchy for the different failure modes
   (upstream provider failures, unknown entities, bad parameters,
   unknown or unwired leagues)

Upstream failures are never retried here; they propagate to the caller
and the server layer turns them into error envelopes.
"""

from typing import Any, Dict, Iterable, Optional


# ============================================================================
# ERROR CODES
# ============================================================================


class ErrorCode:
    """Standard error codes for Sports MCP."""

    # Client errors (4xx equivalent)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    UNKNOWN_LEAGUE = "UNKNOWN_LEAGUE"
    LEAGUE_NOT_IMPLEMENTED = "LEAGUE_NOT_IMPLEMENTED"

    # Server/API errors (5xx equivalent)
    UPSTREAM_API_ERROR = "UPSTREAM_API_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# EXCEPTION HIERARCHY
# ============================================================================


class SportsMCPError(Exception):
    """Base exception for all Sports MCP errors."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for ResponseEnvelope."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class SportAPIError(SportsMCPError):
    """Upstream provider error (network failure or non-success HTTP status)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        league: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            code=ErrorCode.UPSTREAM_API_ERROR,
            details={
                "status_code": status_code,
                "endpoint": endpoint,
                "league": league,
            },
        )
        self.status_code = status_code
        self.endpoint = endpoint
        self.league = league


class EntityNotFoundError(SportsMCPError):
    """Raised when a player (or a player's stats) cannot be found upstream."""

    def __init__(self, entity_type: str, query: Any, league: Optional[str] = None):
        super().__init__(
            message=f"{entity_type.capitalize()} '{query}' not found",
            code=ErrorCode.ENTITY_NOT_FOUND,
            details={
                "entity_type": entity_type,
                "query": str(query),
                "league": league,
            },
        )


class InvalidParameterError(SportsMCPError):
    """Raised when tool or method parameters are invalid."""

    def __init__(self, param_name: str, param_value: Any, expected: str):
        super().__init__(
            message=f"Invalid parameter '{param_name}': got {param_value}, expected {expected}",
            code=ErrorCode.INVALID_PARAMETER,
            details={
                "param_name": param_name,
                "param_value": str(param_value),
                "expected": expected,
            },
        )


class UnknownLeagueError(SportsMCPError):
    """Raised for a league identifier outside the recognised set."""

    def __init__(self, league: str, supported: Iterable[str]):
        supported = list(supported)
        super().__init__(
            message=f"Unknown league: {league}. Supported leagues: {', '.join(supported)}",
            code=ErrorCode.UNKNOWN_LEAGUE,
            details={"league": league, "supported": supported},
        )


class LeagueNotImplementedError(SportsMCPError):
    """Raised for a recognised league that has no comparison wired up yet."""

    def __init__(self, league: str):
        super().__init__(
            message=f"{league.upper()} comparison not yet implemented",
            code=ErrorCode.LEAGUE_NOT_IMPLEMENTED,
            details={"league": league},
        )
