"""
Shared fixtures: raw payload builders for each league and in-memory fakes
for the API clients, so no test touches the network.
"""

from typing import Any, Dict, Iterable, List, Optional

import pytest

from sports_mcp.api.errors import SportAPIError, UnknownLeagueError
from sports_mcp.api.models import BasePlayer
from sports_mcp.comparison import ComparisonRegistry


class FakeClient:
    """Stands in for a league API client; serves canned payloads."""

    def __init__(
        self,
        league: str,
        payloads: Dict[Any, Dict[str, Any]],
        search_results: Optional[Dict[str, List[BasePlayer]]] = None,
        fail_for: Iterable[Any] = (),
    ):
        self.league = league
        self.payloads = payloads
        self.search_results = search_results or {}
        self.fail_for = set(fail_for)
        self.stat_calls: List[tuple] = []

    async def get_player_stats(self, player_id, season=None, **options):
        self.stat_calls.append((player_id, season))
        if player_id in self.fail_for:
            raise SportAPIError(
                f"{self.league.upper()} API request failed: 500 Internal Server Error",
                status_code=500,
                endpoint=f"/players/{player_id}",
                league=self.league,
            )
        return self.payloads[player_id]

    async def search_players(self, query, active_status=None):
        if query == "explode":
            raise SportAPIError("search backend down", status_code=503, league=self.league)
        return self.search_results.get(query, [])


class FakeClientRegistry:
    def __init__(self, clients: Dict[str, FakeClient]):
        self.clients = clients

    def get(self, league: str) -> FakeClient:
        key = league.strip().lower()
        if key not in self.clients:
            raise UnknownLeagueError(league, sorted(self.clients))
        return self.clients[key]


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def comparison_registry_for():
    """Build a ComparisonRegistry over fake clients: registry(mlb=client, ...)."""

    def build(builders=None, **clients):
        return ComparisonRegistry(FakeClientRegistry(clients), builders=builders)

    return build


@pytest.fixture
def mlb_payload():
    def build(name="Test Player", player_id=1, season=2023, **groups):
        return {
            "player": {
                "id": player_id,
                "fullName": name,
                "primaryPosition": {"code": "9", "name": "Outfielder", "type": "Outfielder"},
            },
            "season": season,
            "stats": [
                {
                    "type": {"displayName": "season"},
                    "group": {"displayName": group},
                    "stats": stats,
                }
                for group, stats in groups.items()
            ],
        }

    return build


@pytest.fixture
def nba_payload():
    def build(name="Test Player", player_id=1, season="career", **stats):
        return {"player_id": player_id, "full_name": name, "season": season, **stats}

    return build


@pytest.fixture
def nfl_payload():
    def build(name="Test Player", player_id="1", season=2023, **categories):
        return {
            "playerId": player_id,
            "playerName": name,
            "season": {"year": season},
            "splits": {
                "categories": [
                    {
                        "name": category,
                        "displayName": category.title(),
                        "stats": [
                            {"name": key, "value": value, "displayValue": str(value)}
                            for key, value in stats.items()
                        ],
                    }
                    for category, stats in categories.items()
                ]
            },
        }

    return build
