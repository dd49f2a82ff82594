# sports_mcp/api/models.py
"""
Standard response envelope and data models for Sports MCP.

All MCP tool responses use the ResponseEnvelope structure to ensure:
1. Consistent error handling
2. Metadata tracking (version, league, source)
3. JSON Schema validation for LLM function calling
4. Type safety with Pydantic

The comparison models describe the output of the player comparison engine
and are shared by every league.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

Winner = Literal["player1", "player2", "tie"]


# ============================================================================
# RESPONSE ENVELOPE
# ============================================================================


class ErrorDetail(BaseModel):
    """Structured error information."""

    code: str = Field(
        ..., description="Error code (e.g., 'UPSTREAM_API_ERROR', 'UNKNOWN_LEAGUE')"
    )
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error context"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "UNKNOWN_LEAGUE",
                "message": "Unknown league: nhl. Supported leagues: mlb, nba, nfl",
                "details": {"league": "nhl", "supported": ["mlb", "nba", "nfl"]},
            }
        }
    )


class ResponseMetadata(BaseModel):
    """Metadata for every response."""

    version: str = Field(default="v1", description="API version")
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc)
        .isoformat()
        .replace("+00:00", "Z"),
        description="ISO-8601 UTC timestamp",
    )
    league: Optional[str] = Field(None, description="League the data belongs to")
    execution_time_ms: Optional[float] = Field(
        None, description="Tool execution time in milliseconds"
    )


class ResponseEnvelope(BaseModel):
    """
    Universal response envelope for all Sports MCP tools.

    Provides consistent structure for success and error responses,
    enabling LLMs to reliably parse results and handle errors.
    """

    status: Literal["success", "error"] = Field(
        ..., description="Response status: 'success' for data, 'error' for failure"
    )
    data: Optional[Any] = Field(
        None, description="Response payload (tool-specific structure)"
    )
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
    errors: Optional[List[ErrorDetail]] = Field(
        None, description="Error details (present if status == error)"
    )

    def to_json_string(self, **kwargs) -> str:
        """
        Serialize to JSON with deterministic key ordering.
        Ensures response stability for caching and testing.
        """
        return json.dumps(
            self.model_dump(mode="json"),
            sort_keys=True,
            **kwargs,
        )


# ============================================================================
# PLAYER MODELS
# ============================================================================


class BasePlayer(BaseModel):
    """Player search hit, identical shape for every league."""

    id: Union[int, str]
    full_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    active: Optional[bool] = None
    position: Optional[str] = None
    team: Optional[str] = None


class BaseTeam(BaseModel):
    """Team lookup hit, identical shape for every league."""

    id: Union[int, str]
    name: str
    abbreviation: Optional[str] = None
    location: Optional[str] = None
    nickname: Optional[str] = None
    league: Optional[str] = None
    division: Optional[str] = None
    venue: Optional[str] = None


# ============================================================================
# COMPARISON MODELS
# ============================================================================


class Metric(BaseModel):
    """One named, directional statistical category used for comparison."""

    key: str
    display_name: str
    higher_is_better: bool = True

    model_config = ConfigDict(frozen=True)


class ComparisonRecord(BaseModel):
    """Result of comparing both players on a single metric."""

    category: str = Field(..., description="Display name of the metric")
    player1_value: float
    player2_value: float
    winner: Winner
    difference: float = Field(..., ge=0.0, description="|player1_value - player2_value|")


class PlayerSummary(BaseModel):
    """Identity and extracted stats of one side of a comparison."""

    id: Union[int, str]
    name: str
    stats: Dict[str, float] = Field(default_factory=dict)


class MetricCoverage(BaseModel):
    """
    Which metrics had to be defaulted to 0 because the upstream payload
    did not carry them.

    Lets callers tell a genuine tie apart from a tie caused by missing data.
    """

    total_metrics: int = 0
    player1_defaulted: List[str] = Field(default_factory=list)
    player2_defaulted: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def complete(self) -> bool:
        return not self.player1_defaulted and not self.player2_defaulted


class ComparisonResult(BaseModel):
    """Full output of one player comparison."""

    league: str
    season: Optional[Union[int, str]] = None
    stat_group: Optional[str] = None
    player1: PlayerSummary
    player2: PlayerSummary
    comparison: List[ComparisonRecord] = Field(default_factory=list)
    overall_winner: Winner
    player1_wins: int = 0
    player2_wins: int = 0
    summary: str
    coverage: MetricCoverage = Field(default_factory=MetricCoverage)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "league": "mlb",
                "season": 2023,
                "stat_group": "hitting",
                "player1": {"id": 592450, "name": "Aaron Judge", "stats": {"homeRuns": 37}},
                "player2": {"id": 660271, "name": "Shohei Ohtani", "stats": {"homeRuns": 44}},
                "comparison": [
                    {
                        "category": "Home Runs",
                        "player1_value": 37,
                        "player2_value": 44,
                        "winner": "player2",
                        "difference": 7,
                    }
                ],
                "overall_winner": "player2",
                "player1_wins": 0,
                "player2_wins": 1,
                "summary": "Shohei Ohtani leads in 1 out of 1 key hitting categories.",
            }
        }
    )


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def success_response(
    data: Any,
    league: Optional[str] = None,
    execution_time_ms: Optional[float] = None,
) -> ResponseEnvelope:
    """
    Create a success response envelope.

    Args:
        data: Tool-specific response data
        league: League the data belongs to
        execution_time_ms: Execution time in milliseconds

    Returns:
        ResponseEnvelope with status="success"
    """
    return ResponseEnvelope(
        status="success",
        data=data,
        metadata=ResponseMetadata(
            league=league,
            execution_time_ms=execution_time_ms,
        ),
        errors=None,
    )


def error_response(
    error_code: str,
    error_message: str,
    details: Optional[Dict[str, Any]] = None,
    league: Optional[str] = None,
) -> ResponseEnvelope:
    """
    Create an error response envelope.

    Args:
        error_code: Error code (e.g., 'UPSTREAM_API_ERROR')
        error_message: Human-readable error message
        details: Additional error context
        league: League the request was made against

    Returns:
        ResponseEnvelope with status="error"
    """
    return ResponseEnvelope(
        status="error",
        data=None,
        metadata=ResponseMetadata(league=league),
        errors=[
            ErrorDetail(
                code=error_code,
                message=error_message,
                details=details,
            )
        ],
    )
