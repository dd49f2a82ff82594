# sports_mcp/sports_server.py
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional, Union

# Load environment variables from .env file
from dotenv import load_dotenv

_project_root = Path(__file__).parent.parent  # sports_mcp/sports_server.py -> repo root
load_dotenv(dotenv_path=_project_root / ".env")

from mcp.server.fastmcp import FastMCP

from sports_mcp.api.client_registry import ClientRegistry
from sports_mcp.api.errors import (
    EntityNotFoundError,
    ErrorCode,
    InvalidParameterError,
    SportsMCPError,
)
from sports_mcp.api.models import error_response, success_response
from sports_mcp.comparison import ComparisonRegistry, NFLSelector, list_metrics
from sports_mcp.config import ServerConfig

logger = logging.getLogger(__name__)

server_config = ServerConfig.from_env()

mcp_server = FastMCP(name="sports_mcp", host=server_config.host, port=server_config.port)
mcp = mcp_server  # Alias so the FastMCP CLI can auto-discover the server

# One registry per process; tools reach clients through comparisons.client_registry
comparisons = ComparisonRegistry(ClientRegistry())

PlayerIdArg = Union[int, str]
SeasonArg = Optional[Union[int, str]]


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000


def _error_json(exc: Exception, tool: str, league: Optional[str] = None) -> str:
    """Error envelope for a failed tool call."""
    if isinstance(exc, SportsMCPError):
        logger.warning("%s failed: %s", tool, exc.message)
        return error_response(
            error_code=exc.code,
            error_message=exc.message,
            details=exc.details,
            league=league,
        ).to_json_string()

    logger.exception("Unexpected error in %s", tool)
    return error_response(
        error_code=ErrorCode.INTERNAL_ERROR,
        error_message=f"{tool} failed: {exc}",
        league=league,
    ).to_json_string()


def _league_key(league: str) -> str:
    return (league or "").strip().lower()


@mcp_server.tool()
async def search_players(league: str, name: str, active_status: Optional[str] = "Y") -> str:
    """
    Search players by name in one league.

    Args:
        league: "mlb", "nba" or "nfl"
        name: Full or partial player name
        active_status: "Y" for active players, "N" for inactive, None for both

    Returns:
        JSON envelope with {"players": [...], "count": n}
    """
    start_time = time.time()
    league = _league_key(league)
    logger.debug("search_players(%s, '%s', active_status=%s)", league, name, active_status)

    try:
        client = comparisons.client_registry.get(league)
        players = await client.search_players(name, active_status=active_status)
        return success_response(
            data={"players": [p.model_dump() for p in players], "count": len(players)},
            league=league,
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "search_players", league)


@mcp_server.tool()
async def find_player_id(league: str, name: str) -> str:
    """
    Resolve a player name to a single id (first match when several players match).

    Args:
        league: "mlb", "nba" or "nfl"
        name: Player name

    Returns:
        JSON envelope with {"player_id", "query"}
    """
    start_time = time.time()
    league = _league_key(league)

    try:
        player_id = await comparisons.get(league).search_player(name)
        if player_id is None:
            raise EntityNotFoundError("player", name, league=league)
        return success_response(
            data={"player_id": player_id, "query": name},
            league=league,
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "find_player_id", league)


@mcp_server.tool()
async def get_player_stats(league: str, player_id: PlayerIdArg, season: SeasonArg = None) -> str:
    """
    Raw statistics payload for one player, as returned by the league's API.

    Args:
        league: "mlb", "nba" or "nfl"
        player_id: League player id
        season: Year (e.g. 2023), NBA season string ("2023-24") or "career"
            (MLB/NBA). Defaults to the current season (career totals for NBA).
    """
    start_time = time.time()
    league = _league_key(league)

    try:
        client = comparisons.client_registry.get(league)
        payload = await client.get_player_stats(player_id, season=season)
        return success_response(
            data=payload,
            league=league,
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_player_stats", league)


@mcp_server.tool()
async def compare_players(
    league: str,
    player1_id: PlayerIdArg,
    player2_id: PlayerIdArg,
    season: SeasonArg = None,
    stat_group: Optional[str] = None,
    position: Optional[str] = None,
    category: Optional[str] = None,
    output_format: str = "json",
) -> str:
    """
    Compare two players of the same league metric by metric.

    Args:
        league: "mlb", "nba" or "nfl"
        player1_id: First player's id
        player2_id: Second player's id
        season: Year, NBA season string or "career"
        stat_group: MLB: "hitting" (default), "pitching" or "fielding".
            NFL: a position ("QB", "RB", ...) or a category ("passing", ...).
            Ignored for NBA.
        position: NFL only, explicit position selector
        category: NFL only, explicit ESPN stat category selector
        output_format: "json" (envelope) or "text" (console table)

    Returns:
        JSON envelope with the comparison result, or plain text when
        output_format="text"
    """
    start_time = time.time()
    league = _league_key(league)
    logger.debug(
        "compare_players(%s, %s, %s, season=%s, stat_group=%s, position=%s, category=%s)",
        league,
        player1_id,
        player2_id,
        season,
        stat_group,
        position,
        category,
    )

    try:
        if output_format not in ("json", "text"):
            raise InvalidParameterError("output_format", output_format, "'json' or 'text'")

        service = comparisons.get(league)
        selector: Any = stat_group
        if league == "nfl":
            selector = NFLSelector.from_params(stat_group, position=position, category=category)
        elif position or category:
            raise InvalidParameterError(
                "position/category", position or category, "only supported for league 'nfl'"
            )

        result = await service.compare_players(
            player1_id, player2_id, season=season, stat_group=selector
        )
        if output_format == "text":
            return service.format_comparison_result(result)

        return success_response(
            data=result.model_dump(mode="json"),
            league=league,
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "compare_players", league)


@mcp_server.tool()
async def list_comparison_metrics(league: str, stat_group: Optional[str] = None) -> str:
    """
    Metrics a comparison would use for a league and selector.

    Args:
        league: "mlb", "nba" or "nfl"
        stat_group: Stat group / NFL position or category
    """
    league = _league_key(league)

    try:
        metrics = list_metrics(league, stat_group)
        return success_response(
            data={
                "stat_group": stat_group,
                "metrics": [m.model_dump() for m in metrics],
                "count": len(metrics),
            },
            league=league,
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "list_comparison_metrics", league)


@mcp_server.tool()
async def get_team_roster(league: str, team_id: Union[int, str], season: SeasonArg = None) -> str:
    """
    Players on one team's roster.

    Args:
        league: "mlb", "nba" or "nfl"
        team_id: League team id (see lookup_team)
        season: MLB/NBA season; defaults to the current roster. NFL rosters
            are current only.

    Returns:
        JSON envelope with {"team_id", "players": [...], "count": n}
    """
    start_time = time.time()
    league = _league_key(league)

    try:
        client = comparisons.client_registry.get(league)
        players = await client.get_team_roster(team_id, season=season)
        return success_response(
            data={
                "team_id": team_id,
                "players": [p.model_dump() for p in players],
                "count": len(players),
            },
            league=league,
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_team_roster", league)


@mcp_server.tool()
async def lookup_team(league: str, query: str) -> str:
    """
    Find teams by name, city or abbreviation.

    Returns:
        JSON envelope with {"teams": [...], "count": n}
    """
    start_time = time.time()
    league = _league_key(league)

    try:
        client = comparisons.client_registry.get(league)
        found = await client.lookup_team(query)
        return success_response(
            data={"teams": [t.model_dump() for t in found], "count": len(found)},
            league=league,
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "lookup_team", league)


# MLB-only tools. The MLB Stats API is the one league source that also
# serves game logs, standings, schedules and leaderboards.


@mcp_server.tool()
async def get_team_info(team_id: int) -> str:
    """MLB team details (venue, league, division)."""
    start_time = time.time()

    try:
        team = await comparisons.client_registry.get("mlb").get_team_info(team_id)
        return success_response(
            data=team.model_dump(),
            league="mlb",
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_team_info", "mlb")


@mcp_server.tool()
async def get_player_game_logs(
    player_id: int, season: SeasonArg = None, game_type: str = "R"
) -> str:
    """
    Game-by-game MLB stat lines for one player.

    Args:
        player_id: MLB person id
        season: Year, defaults to the current season
        game_type: "R" regular season, "P" postseason, "S" spring training
    """
    start_time = time.time()

    try:
        logs = await comparisons.client_registry.get("mlb").get_player_game_logs(
            player_id, season=season, game_type=game_type
        )
        return success_response(
            data=logs,
            league="mlb",
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_player_game_logs", "mlb")


@mcp_server.tool()
async def get_standings(
    season: SeasonArg = None,
    league_id: Optional[Union[int, str]] = None,
    division_id: Optional[Union[int, str]] = None,
) -> str:
    """
    MLB standings.

    Args:
        season: Year, defaults to the current season
        league_id: 103 (AL) or 104 (NL); both when omitted
        division_id: Restrict to one division
    """
    start_time = time.time()

    try:
        standings = await comparisons.client_registry.get("mlb").get_standings(
            season=season, league_id=league_id, division_id=division_id
        )
        return success_response(
            data={"standings": standings, "count": len(standings)},
            league="mlb",
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_standings", "mlb")


@mcp_server.tool()
async def get_schedule(
    start_date: str, end_date: Optional[str] = None, team_id: Optional[int] = None
) -> str:
    """
    MLB games between two dates (YYYY-MM-DD), optionally for one team.
    """
    start_time = time.time()

    try:
        games = await comparisons.client_registry.get("mlb").get_schedule(
            start_date, end_date=end_date, team_id=team_id
        )
        return success_response(
            data={"games": games, "count": len(games)},
            league="mlb",
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_schedule", "mlb")


@mcp_server.tool()
async def get_league_leaders(
    categories: str,
    season: SeasonArg = None,
    league_id: Optional[Union[int, str]] = None,
    limit: int = 10,
) -> str:
    """
    MLB leaderboards.

    Args:
        categories: Comma separated leader categories, e.g. "homeRuns,battingAverage"
        season: Year, defaults to the current season
        league_id: 103 (AL) or 104 (NL); both when omitted
        limit: Leaders per category (1-100)
    """
    start_time = time.time()

    try:
        leaders = await comparisons.client_registry.get("mlb").get_league_leaders(
            categories, season=season, league_id=league_id, limit=limit
        )
        return success_response(
            data=leaders,
            league="mlb",
            execution_time_ms=_elapsed_ms(start_time),
        ).to_json_string()
    except Exception as e:
        return _error_json(e, "get_league_leaders", "mlb")


def main():
    """Parse CLI args and start the FastMCP server."""
    parser = argparse.ArgumentParser(prog="sports-mcp")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default=server_config.transport,
        help="MCP transport to use",
    )
    parser.add_argument(
        "--host",
        default=server_config.host,
        help="Host to bind for network transports",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=server_config.port,
        help="Port for network transports",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, server_config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    mcp_server.settings.host = args.host
    mcp_server.settings.port = args.port

    try:
        if args.transport == "stdio":
            logger.info("Starting FastMCP server on STDIO")
            mcp_server.run()
        else:
            logger.info(
                "Starting FastMCP server on %s://%s:%s", args.transport, args.host, args.port
            )
            mcp_server.run(transport=args.transport)
    except Exception:
        logger.exception("Failed to start MCP server (transport=%s)", args.transport)
        sys.exit(1)


if __name__ == "__main__":
    main()
