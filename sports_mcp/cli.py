# sports_mcp/cli.py
"""
Command-line player comparison.

    sports-compare mlb "Aaron Judge" "Shohei Ohtani" --season 2023
    sports-compare mlb 592450 660271 --group pitching --json
    sports-compare nfl "Patrick Mahomes" "Josh Allen" --category passing
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional, Union

from dotenv import load_dotenv

from sports_mcp.api.client_registry import ClientRegistry
from sports_mcp.api.errors import EntityNotFoundError, InvalidParameterError, SportsMCPError
from sports_mcp.comparison import ComparisonRegistry, ComparisonService, NFLSelector

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sports-compare", description="Compare two players' statistics."
    )
    parser.add_argument("league", help="mlb, nba or nfl")
    parser.add_argument("player1", help="Player id or name")
    parser.add_argument("player2", help="Player id or name")
    parser.add_argument("--season", help="Year, NBA season (2023-24) or 'career'")
    parser.add_argument("--group", help="MLB stat group, or NFL position/category")
    parser.add_argument("--position", help="NFL position (QB, RB, WR, ...)")
    parser.add_argument("--category", help="NFL stat category (passing, rushing, ...)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


async def resolve_player(service: ComparisonService, value: str) -> Union[int, str]:
    """Ids pass through unchanged; anything else is looked up by name."""
    if value.isdigit():
        return int(value)
    player_id = await service.search_player(value)
    if player_id is None:
        raise EntityNotFoundError("player", value, league=service.league)
    return player_id


async def run_comparison(args: argparse.Namespace, registry: ComparisonRegistry) -> str:
    service = registry.get(args.league)

    stat_group = args.group
    if service.league == "nfl":
        stat_group = NFLSelector.from_params(args.group, args.position, args.category)
    elif args.position or args.category:
        raise InvalidParameterError(
            "position/category", args.position or args.category, "only supported for league 'nfl'"
        )

    player1_id, player2_id = await asyncio.gather(
        resolve_player(service, args.player1), resolve_player(service, args.player2)
    )
    result = await service.compare_players(
        player1_id, player2_id, season=args.season, stat_group=stat_group
    )
    if args.json:
        return json.dumps(result.model_dump(mode="json"), indent=2)
    return service.format_comparison_result(result)


def main(argv: Optional[List[str]] = None, registry: Optional[ComparisonRegistry] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    registry = registry or ComparisonRegistry(ClientRegistry())
    try:
        output = asyncio.run(run_comparison(args, registry))
    except SportsMCPError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
