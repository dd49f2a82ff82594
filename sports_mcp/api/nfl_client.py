# sports_mcp/api/nfl_client.py
"""
NFL client for the public ESPN APIs.

- Site API: teams and team rosters (rosters also build the player index)
- Core API: per-athlete season statistics

Player names are not part of the statistics document, so the client keeps
an index of every rostered player (all 32 teams) and attaches the name to
each stats payload it returns.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from ..cache import CacheTier, generate_cache_key
from .base_client import BaseSportClient, PlayerId, TeamId
from .errors import InvalidParameterError, SportAPIError
from .models import BasePlayer, BaseTeam

logger = logging.getLogger(__name__)

# ESPN team ids: 1-30 plus 33 (Ravens) and 34 (Texans)
NFL_TEAM_IDS = list(range(1, 31)) + [33, 34]
MAX_SEARCH_RESULTS = 20
REGULAR_SEASON = 2


def current_nfl_season(today: Optional[date] = None) -> int:
    """
    Year the most recent NFL season started in.

    The season runs September through February, so from August on the
    current year is used and before that the previous one.
    """
    today = today or date.today()
    return today.year if today.month >= 8 else today.year - 1


class NFLApiClient(BaseSportClient):
    """Client for the ESPN NFL site and core APIs."""

    league = "nfl"

    @property
    def site_url(self) -> str:
        return self.config.nfl_site_base_url.rstrip("/")

    @property
    def core_url(self) -> str:
        return self.config.nfl_core_base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Rosters and teams
    # ------------------------------------------------------------------

    async def _fetch_roster(self, team_id: TeamId) -> Dict[str, Any]:
        return await self._request(f"{self.site_url}/teams/{team_id}/roster")

    @staticmethod
    def _roster_players(roster: Dict[str, Any]) -> List[BasePlayer]:
        team_name = (roster.get("team") or {}).get("displayName")
        players = []
        for group in roster.get("athletes") or []:
            for athlete in group.get("items") or []:
                players.append(
                    BasePlayer(
                        id=str(athlete["id"]),
                        full_name=athlete.get("displayName") or athlete.get("fullName", ""),
                        first_name=athlete.get("firstName"),
                        last_name=athlete.get("lastName"),
                        active=True,
                        position=(athlete.get("position") or {}).get("abbreviation"),
                        team=team_name,
                    )
                )
        return players

    async def get_team_roster(
        self, team_id: TeamId, season: Union[int, str, None] = None
    ) -> List[BasePlayer]:
        """
        Current roster of one team (ESPN team id).

        Raises:
            InvalidParameterError: a season was given; ESPN rosters are current only
        """
        if season is not None:
            raise InvalidParameterError("season", season, "None (NFL rosters are current only)")
        return self._roster_players(await self._fetch_roster(team_id))

    async def lookup_team(self, query: str) -> List[BaseTeam]:
        """Find NFL teams by name, city, nickname or abbreviation."""
        needle = query.lower().strip()
        if not needle:
            return []

        key = generate_cache_key("nfl:teams", {})
        teams = self.cache.get(key)
        if teams is None:
            data = await self._request(f"{self.site_url}/teams")
            teams = [
                entry.get("team") or {}
                for sport in data.get("sports") or []
                for league in sport.get("leagues") or []
                for entry in league.get("teams") or []
            ]
            if teams:
                self.cache.set(key, teams, CacheTier.STATIC.value)

        return [
            BaseTeam(
                id=str(team["id"]),
                name=team.get("displayName", ""),
                abbreviation=team.get("abbreviation"),
                location=team.get("location"),
                nickname=team.get("name"),
            )
            for team in teams
            if any(
                needle in (team.get(field) or "").lower()
                for field in ("displayName", "location", "name", "abbreviation", "shortDisplayName")
            )
        ]

    async def _load_roster_index(self) -> List[BasePlayer]:
        key = generate_cache_key("nfl:rosters", {"teams": NFL_TEAM_IDS})
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("NFL roster index cache hit (%d players)", len(cached))
            return cached

        logger.info("Loading NFL player index from %d team rosters", len(NFL_TEAM_IDS))
        rosters = await asyncio.gather(
            *(self._fetch_roster(team_id) for team_id in NFL_TEAM_IDS),
            return_exceptions=True,
        )

        index: List[BasePlayer] = []
        for team_id, roster in zip(NFL_TEAM_IDS, rosters):
            if isinstance(roster, SportAPIError):
                logger.warning("Skipping roster for team %s: %s", team_id, roster.message)
                continue
            if isinstance(roster, BaseException):
                raise roster
            index.extend(self._roster_players(roster))

        if not index:
            logger.warning("No NFL rosters could be loaded; player index not cached")
            return index

        self.cache.set(key, index, self.config.roster_cache_ttl)
        logger.info("Loaded %d NFL players into cache", len(index))
        return index

    async def resolve_player_name(self, player_id: PlayerId) -> str:
        """
        Display name for an athlete id.

        Rostered players come from the roster index; anyone else is looked
        up on the core athlete endpoint. Falls back to "Player {id}".
        """
        wanted = str(player_id)
        for player in await self._load_roster_index():
            if player.id == wanted:
                return player.full_name

        try:
            athlete = await self._request(f"{self.core_url}/athletes/{wanted}")
        except SportAPIError as exc:
            logger.warning("Could not resolve NFL player name for %s: %s", wanted, exc.message)
            return f"Player {wanted}"
        return athlete.get("displayName") or athlete.get("fullName") or f"Player {wanted}"

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    async def search_players(
        self, query: str, active_status: Optional[str] = None
    ) -> List[BasePlayer]:
        """
        Case-insensitive substring search over current rosters.

        Only rostered (active) players are indexed, so active_status="N"
        always yields an empty list.
        """
        needle = query.lower().strip()
        if not needle or active_status == "N":
            return []
        index = await self._load_roster_index()
        return [p for p in index if needle in p.full_name.lower()][:MAX_SEARCH_RESULTS]

    async def get_player_stats(
        self,
        player_id: PlayerId,
        season: Union[int, str, None] = None,
        **options,
    ) -> Dict[str, Any]:
        """
        Regular-season statistics for one athlete.

        Args:
            player_id: ESPN athlete id
            season: Season start year; defaults to the most recent season

        Returns:
            {"playerId", "playerName", "splits", "season"} where splits is
            ESPN's {"categories": [{"name", "displayName", "stats": [...]}]}

        Raises:
            SportAPIError: request failed (a defaulted season that 404s is
                retried once with the previous year first)
        """
        defaulted = season is None
        if defaulted:
            year = current_nfl_season()
        else:
            try:
                year = int(season)
            except (TypeError, ValueError):
                raise InvalidParameterError("season", season, "a season start year, e.g. 2023")

        try:
            data = await self._fetch_statistics(player_id, year)
        except SportAPIError as exc:
            if not (defaulted and exc.status_code == 404):
                raise
            logger.info(
                "No %s statistics for NFL player %s yet, falling back to %s",
                year,
                player_id,
                year - 1,
            )
            year -= 1
            data = await self._fetch_statistics(player_id, year)

        return {
            "playerId": str(player_id),
            "playerName": await self.resolve_player_name(player_id),
            "splits": data.get("splits") or {},
            "season": data.get("season") or {"year": year},
        }

    async def _fetch_statistics(self, player_id: PlayerId, year: int) -> Dict[str, Any]:
        url = (
            f"{self.core_url}/seasons/{year}/types/{REGULAR_SEASON}"
            f"/athletes/{player_id}/statistics/0"
        )
        return await self._request(url, {"lang": "en", "region": "us"})
