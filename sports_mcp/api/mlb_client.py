# sports_mcp/api/mlb_client.py
"""
MLB Stats API client.

Fetches player statistics, player and team lookups, rosters, game logs,
standings, schedules and league leaders from https://statsapi.mlb.com.
The player stats response is reshaped into one entry per stat group:

    {
        "player": {"id", "fullName", "primaryPosition": {...}},
        "stats": [
            {"type": {"displayName"}, "group": {"displayName"}, "stats": {...}},
            ...
        ],
    }
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union

from ..cache import CacheTier, generate_cache_key
from .base_client import BaseSportClient, PlayerId, TeamId
from .errors import EntityNotFoundError, InvalidParameterError
from .models import BasePlayer, BaseTeam

logger = logging.getLogger(__name__)

STAT_GROUPS = "hitting,pitching,fielding"
PLAYER_INDEX_FIELDS = (
    "people,id,fullName,firstName,lastName,primaryNumber,currentTeam,name,"
    "primaryPosition,abbreviation,code,useName,boxscoreName,nickName,active,"
    "nameFirstLast,firstLastName,lastFirstName,nameSlug"
)
TEAM_HYDRATE = "venue,league,division"
TEAM_SEARCH_FIELDS = ("name", "locationName", "abbreviation", "teamName", "shortName")
AL_NL_LEAGUE_IDS = "103,104"
MAX_LEADERS = 100


def _normalize_mlb_season(season: Union[int, str, None]) -> Optional[int]:
    """Year for a season argument; None means career."""
    if season is None:
        return date.today().year
    if isinstance(season, str):
        text = season.strip().lower()
        if text == "career":
            return None
        if text.isdigit():
            return int(text)
        raise InvalidParameterError("season", season, "a year (e.g. 2023) or 'career'")
    return int(season)


def _season_year(season: Union[int, str, None]) -> int:
    """Year for endpoints that only work per season (no career totals)."""
    year = _normalize_mlb_season(season)
    if year is None:
        raise InvalidParameterError("season", season, "a year (e.g. 2023)")
    return year


def _mlb_team(team: Dict[str, Any]) -> BaseTeam:
    return BaseTeam(
        id=team["id"],
        name=team.get("name", ""),
        abbreviation=team.get("abbreviation"),
        location=team.get("locationName"),
        nickname=team.get("teamName"),
        league=(team.get("league") or {}).get("name"),
        division=(team.get("division") or {}).get("name"),
        venue=(team.get("venue") or {}).get("name"),
    )


class MLBApiClient(BaseSportClient):
    """Client for interacting with the MLB Stats API."""

    league = "mlb"

    @property
    def base_url(self) -> str:
        return self.config.mlb_base_url.rstrip("/")

    async def get_player_stats(
        self,
        player_id: PlayerId,
        season: Union[int, str, None] = None,
        game_type: str = "R",
        stats_type: str = "season",
        **options,
    ) -> Dict[str, Any]:
        """
        Get a player's statistics for every stat group.

        Args:
            player_id: MLB person id
            season: Year, "career", or None for the current year
            game_type: MLB game type code ("R" = regular season)
            stats_type: "season", "career", "yearByYear", ...

        Returns:
            Player identity plus one {type, group, stats} entry per group

        Raises:
            EntityNotFoundError: upstream returned no stat groups at all
            SportAPIError: request failed
        """
        year = _normalize_mlb_season(season)
        if year is None:
            stats_type = "career"

        data = await self._request(
            f"{self.base_url}/people/{player_id}/stats",
            {
                "stats": stats_type,
                "group": STAT_GROUPS,
                "season": year if stats_type != "career" else None,
                "gameType": game_type,
            },
        )

        raw_groups = data.get("stats") or []
        if not raw_groups:
            raise EntityNotFoundError("stats for player", player_id, league=self.league)

        player: Dict[str, Any] = {}
        transformed = []
        for group in raw_groups:
            splits = group.get("splits") or []
            if splits and not player.get("fullName"):
                player = splits[0].get("player") or {}
            transformed.append(
                {
                    "type": {
                        "displayName": (group.get("type") or {}).get("displayName", "Unknown")
                    },
                    "group": {
                        "displayName": (group.get("group") or {}).get("displayName", "Unknown")
                    },
                    "stats": splits[0].get("stat", {}) if splits else {},
                }
            )

        if not player.get("fullName"):
            # Splits do not always carry the person; resolve the name directly
            info = await self.get_player_info(player_id)
            player = {**info, **player, "fullName": info.get("fullName")}

        position = player.get("primaryPosition") or {}
        return {
            "player": {
                "id": player.get("id", player_id),
                "fullName": player.get("fullName") or f"Player {player_id}",
                "primaryPosition": {
                    "code": position.get("code", ""),
                    "name": position.get("name", ""),
                    "type": position.get("type", ""),
                },
            },
            "season": year if stats_type != "career" else "career",
            "stats": transformed,
        }

    async def get_player_info(self, player_id: PlayerId) -> Dict[str, Any]:
        """Get a person record by id."""
        data = await self._request(f"{self.base_url}/people/{player_id}")
        people = data.get("people") or []
        if not people:
            raise EntityNotFoundError("player", player_id, league=self.league)
        return people[0]

    async def _load_player_index(self, season: int) -> List[Dict[str, Any]]:
        key = generate_cache_key("mlb:players", {"season": season})
        people = self.cache.get(key)
        if people is not None:
            logger.debug("MLB player index cache hit (season=%s)", season)
            return people

        data = await self._request(
            f"{self.base_url}/sports/1/players",
            {"season": season, "fields": PLAYER_INDEX_FIELDS},
        )
        people = data.get("people") or []
        self.cache.set(key, people, CacheTier.DAILY.value)
        logger.info("Loaded %d MLB players for season %s", len(people), season)
        return people

    async def search_players(
        self,
        query: str,
        active_status: Optional[str] = "Y",
        season: Optional[int] = None,
    ) -> List[BasePlayer]:
        """
        Search players by name.

        Every whitespace-separated term of the query has to appear
        (case-insensitively) in at least one scalar field of the player
        record. Nested objects such as currentTeam are not searched.

        Args:
            query: Full or partial name
            active_status: "Y" active only, "N" inactive only, None for both
            season: Season whose player index is searched (default: this year)
        """
        people = await self._load_player_index(season or date.today().year)
        terms = [t for t in query.lower().split() if t]
        if not terms:
            return []

        results: List[BasePlayer] = []
        for person in people:
            values = [
                str(v).lower()
                for v in person.values()
                if v is not None and not isinstance(v, (dict, list))
            ]
            if not all(any(term in value for value in values) for term in terms):
                continue

            active = person.get("active")
            if active_status == "Y" and active is False:
                continue
            if active_status == "N" and active is not False:
                continue

            results.append(
                BasePlayer(
                    id=person["id"],
                    full_name=person.get("fullName", ""),
                    first_name=person.get("firstName"),
                    last_name=person.get("lastName"),
                    active=active,
                    position=(person.get("primaryPosition") or {}).get("abbreviation"),
                    team=(person.get("currentTeam") or {}).get("name"),
                )
            )
        return results

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    async def get_team_info(self, team_id: TeamId) -> BaseTeam:
        """
        Get one team with its league, division and venue.

        Raises:
            EntityNotFoundError: no team with that id
        """
        data = await self._request(f"{self.base_url}/teams/{team_id}", {"hydrate": TEAM_HYDRATE})
        teams = data.get("teams") or []
        if not teams:
            raise EntityNotFoundError("team", team_id, league=self.league)
        return _mlb_team(teams[0])

    async def _load_team_index(self, season: int) -> List[Dict[str, Any]]:
        key = generate_cache_key("mlb:teams", {"season": season})
        teams = self.cache.get(key)
        if teams is not None:
            return teams

        data = await self._request(
            f"{self.base_url}/teams",
            {"sportId": 1, "season": season, "hydrate": TEAM_HYDRATE},
        )
        teams = data.get("teams") or []
        if teams:
            self.cache.set(key, teams, CacheTier.STATIC.value)
        return teams

    async def lookup_team(
        self, query: str, season: Union[int, str, None] = None
    ) -> List[BaseTeam]:
        """
        Find MLB teams by name, city, abbreviation or nickname.

        Args:
            query: "Yankees", "NYY", "New York", ...
            season: Season whose team list is searched (default: this year)
        """
        needle = query.lower().strip()
        if not needle:
            return []
        teams = await self._load_team_index(_season_year(season))
        return [
            _mlb_team(team)
            for team in teams
            if any(needle in (team.get(field) or "").lower() for field in TEAM_SEARCH_FIELDS)
        ]

    async def get_team_roster(
        self, team_id: TeamId, season: Union[int, str, None] = None
    ) -> List[BasePlayer]:
        """
        Active roster of a team, for the current or a past season.

        Raises:
            EntityNotFoundError: upstream returned no roster
        """
        year = _season_year(season) if season is not None else None
        data = await self._request(
            f"{self.base_url}/teams/{team_id}/roster", {"season": year}
        )
        roster = data.get("roster")
        if roster is None:
            raise EntityNotFoundError("roster for team", team_id, league=self.league)

        players = []
        for entry in roster:
            person = entry.get("person") or {}
            status = (entry.get("status") or {}).get("code")
            players.append(
                BasePlayer(
                    id=person["id"],
                    full_name=person.get("fullName", ""),
                    active=status == "A" if status else None,
                    position=(entry.get("position") or {}).get("abbreviation"),
                )
            )
        return players

    # ------------------------------------------------------------------
    # Season data
    # ------------------------------------------------------------------

    async def get_player_game_logs(
        self,
        player_id: PlayerId,
        season: Union[int, str, None] = None,
        game_type: str = "R",
    ) -> Dict[str, Any]:
        """
        Game-by-game lines for one player and season.

        Returns:
            {"player_id", "season", "games": [...], "count"} with games in
            date order, one entry per game and stat group

        Raises:
            EntityNotFoundError: no game logs for that player and season
        """
        year = _season_year(season)
        data = await self._request(
            f"{self.base_url}/people/{player_id}/stats",
            {"stats": "gameLog", "group": STAT_GROUPS, "season": year, "gameType": game_type},
        )
        groups = data.get("stats") or []
        if not groups:
            raise EntityNotFoundError("game logs for player", player_id, league=self.league)

        games = []
        for group in groups:
            group_name = (group.get("group") or {}).get("displayName", "Unknown")
            for split in group.get("splits") or []:
                games.append(
                    {
                        "date": split.get("date"),
                        "game_pk": (split.get("game") or {}).get("gamePk"),
                        "group": group_name,
                        "opponent": (split.get("opponent") or {}).get("name"),
                        "is_home": split.get("isHome"),
                        "stats": split.get("stat") or {},
                    }
                )
        games.sort(key=lambda g: g["date"] or "")
        return {"player_id": player_id, "season": year, "games": games, "count": len(games)}

    async def get_standings(
        self,
        season: Union[int, str, None] = None,
        league_id: Optional[str] = None,
        division_id: Optional[int] = None,
        standings_type: str = "regularSeason",
    ) -> List[Dict[str, Any]]:
        """
        One row per team with wins, losses, percentage and games back.

        Args:
            season: Year (default: this year)
            league_id: "103" (AL), "104" (NL); both when omitted
            division_id: Restrict to one division
            standings_type: MLB standings type ("regularSeason", "wildCard", ...)
        """
        data = await self._request(
            f"{self.base_url}/standings",
            {
                "leagueId": league_id or AL_NL_LEAGUE_IDS,
                "divisionId": division_id,
                "season": _season_year(season),
                "standingsTypes": standings_type,
                "hydrate": "league,division",
            },
        )
        standings = []
        for record in data.get("records") or []:
            division = (record.get("division") or {}).get("name") or "Unknown"
            league = (record.get("league") or {}).get("name") or "Unknown"
            for team_record in record.get("teamRecords") or []:
                team = team_record.get("team") or {}
                standings.append(
                    {
                        "team": team.get("name"),
                        "team_id": team.get("id"),
                        "wins": team_record.get("wins"),
                        "losses": team_record.get("losses"),
                        "winning_percentage": team_record.get("winningPercentage"),
                        "games_back": team_record.get("gamesBack"),
                        "division": division,
                        "league": league,
                    }
                )
        return standings

    async def get_schedule(
        self,
        start_date: str,
        end_date: Optional[str] = None,
        team_id: Optional[TeamId] = None,
        game_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Games between two dates (YYYY-MM-DD, inclusive) with teams and scores.

        Raises:
            InvalidParameterError: a date is not in ISO format
        """
        for name, value in (("start_date", start_date), ("end_date", end_date)):
            if value is None:
                continue
            try:
                date.fromisoformat(value)
            except ValueError:
                raise InvalidParameterError(name, value, "a date in YYYY-MM-DD format")

        data = await self._request(
            f"{self.base_url}/schedule",
            {
                "sportId": 1,
                "startDate": start_date,
                "endDate": end_date or start_date,
                "teamId": team_id,
                "gameType": game_type,
                "hydrate": "team,linescore,venue",
            },
        )
        games = []
        for day in data.get("dates") or []:
            for game in day.get("games") or []:
                teams = game.get("teams") or {}
                away = teams.get("away") or {}
                home = teams.get("home") or {}
                games.append(
                    {
                        "game_pk": game.get("gamePk"),
                        "date": game.get("officialDate") or day.get("date"),
                        "status": (game.get("status") or {}).get("detailedState"),
                        "away_team": (away.get("team") or {}).get("name"),
                        "away_score": away.get("score"),
                        "home_team": (home.get("team") or {}).get("name"),
                        "home_score": home.get("score"),
                        "venue": (game.get("venue") or {}).get("name"),
                    }
                )
        return games

    async def get_league_leaders(
        self,
        categories: str,
        season: Union[int, str, None] = None,
        league_id: Optional[str] = None,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """
        Leaderboards for one or more stat categories.

        Args:
            categories: Comma-separated MLB leader categories ("homeRuns,battingAverage")
            season: Year (default: this year)
            league_id: "103" (AL) or "104" (NL); both when omitted
            limit: Leaders per category (1-100)

        Raises:
            EntityNotFoundError: upstream returned no leaderboard
        """
        if not 1 <= limit <= MAX_LEADERS:
            raise InvalidParameterError("limit", limit, f"an integer from 1 to {MAX_LEADERS}")
        year = _season_year(season)
        data = await self._request(
            f"{self.base_url}/stats/leaders",
            {"leaderCategories": categories, "season": year, "leagueId": league_id, "limit": limit},
        )
        leaderboards = data.get("leagueLeaders") or []
        if not leaderboards:
            raise EntityNotFoundError("league leaders for", categories, league=self.league)

        return {
            "season": year,
            "categories": [
                {
                    "category": board.get("leaderCategory"),
                    "leaders": [
                        {
                            "rank": leader.get("rank"),
                            "value": leader.get("value"),
                            "player_id": (leader.get("person") or {}).get("id"),
                            "player_name": (leader.get("person") or {}).get("fullName"),
                            "team": (leader.get("team") or {}).get("name"),
                        }
                        for leader in board.get("leaders") or []
                    ],
                }
                for board in leaderboards
            ],
        }
