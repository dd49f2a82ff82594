# sports_mcp/api/nba_client.py
"""
NBA client built on nba_api.

nba_api endpoints are blocking, so every call is pushed to a worker thread
with asyncio.to_thread. Stats come from PlayerCareerStats in Totals mode;
per-game figures are derived later by the comparison layer.
"""

import asyncio
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
from nba_api.stats.endpoints import commonplayerinfo, commonteamroster, playercareerstats
from nba_api.stats.static import players, teams

from .base_client import BaseSportClient, PlayerId, TeamId
from .errors import EntityNotFoundError, InvalidParameterError, SportAPIError
from .headers import get_stats_api_headers
from .models import BasePlayer, BaseTeam

logger = logging.getLogger(__name__)

STAT_COLUMNS = [
    "GP",
    "PTS",
    "REB",
    "AST",
    "STL",
    "BLK",
    "FGM",
    "FGA",
    "FG_PCT",
    "FG3M",
    "FG3A",
    "FG3_PCT",
    "FTM",
    "FTA",
    "FT_PCT",
    "OREB",
    "DREB",
    "TOV",
    "PF",
]

_SEASON_RE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def normalize_nba_season(season: Union[int, str, None]) -> Optional[str]:
    """
    Convert a season argument into the NBA "YYYY-YY" form.

    None and "career" both mean career totals and return None.

    >>> normalize_nba_season(2023)
    '2023-24'
    >>> normalize_nba_season("2023-24")
    '2023-24'
    """
    if season is None:
        return None
    text = str(season).strip().lower()
    if text == "career":
        return None
    match = _SEASON_RE.match(text)
    if not match:
        raise InvalidParameterError("season", season, "'YYYY', 'YYYY-YY' or 'career'")
    year = int(match.group(1))
    return f"{year}-{str(year + 1)[-2:]}"


def current_nba_season(today: Optional[date] = None) -> str:
    """Season string of the most recent NBA season (starts in October)."""
    today = today or date.today()
    start = today.year if today.month >= 10 else today.year - 1
    return f"{start}-{str(start + 1)[-2:]}"


def _fetch_team_roster(team_id: int, season: str, timeout: float) -> pd.DataFrame:
    """Blocking fetch of one team's roster for a season."""
    roster = commonteamroster.CommonTeamRoster(
        team_id=team_id,
        season=season,
        headers=get_stats_api_headers(),
        timeout=timeout,
    )
    return roster.common_team_roster.get_data_frame()


def _fetch_career_frames(player_id: int, timeout: float) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Blocking fetch of (season totals, career totals) for one player."""
    stats = playercareerstats.PlayerCareerStats(
        player_id=player_id,
        per_mode36="Totals",
        headers=get_stats_api_headers(),
        timeout=timeout,
    )
    return (
        stats.season_totals_regular_season.get_data_frame(),
        stats.career_totals_regular_season.get_data_frame(),
    )


def _lookup_full_name(player_id: int, timeout: float) -> Optional[str]:
    """Name from the static player list, then from CommonPlayerInfo."""
    player = players.find_player_by_id(player_id)
    if player and player.get("full_name"):
        return player["full_name"]

    info = commonplayerinfo.CommonPlayerInfo(
        player_id=player_id,
        headers=get_stats_api_headers(),
        timeout=timeout,
    )
    df = info.common_player_info.get_data_frame()
    if df.empty:
        return None
    return df.iloc[0].get("DISPLAY_FIRST_LAST")


def _row_to_stats(row: pd.Series) -> Dict[str, Any]:
    stats: Dict[str, Any] = {}
    for column in STAT_COLUMNS:
        value = row.get(column)
        stats[column.lower()] = None if value is None or pd.isna(value) else float(value)
    return stats


class NBAApiClient(BaseSportClient):
    """Client for the NBA.com Stats API."""

    league = "nba"

    async def search_players(
        self, query: str, active_status: Optional[str] = None
    ) -> List[BasePlayer]:
        """
        Substring search over the nba_api static player list.

        Args:
            query: Full or partial name (matched against full, first and last name)
            active_status: "Y" active only, "N" inactive only, None for both

        Returns:
            Matching players, active players first, then alphabetical
        """
        needle = query.lower().strip()
        if not needle:
            return []

        all_players = await asyncio.to_thread(players.get_players)
        logger.debug("Loaded %d players from roster data", len(all_players))

        matched = []
        for p in all_players:
            names = (p.get("full_name", ""), p.get("first_name", ""), p.get("last_name", ""))
            if not any(needle in (n or "").lower() for n in names):
                continue
            if active_status == "Y" and not p.get("is_active"):
                continue
            if active_status == "N" and p.get("is_active"):
                continue
            matched.append(p)

        matched.sort(key=lambda p: (not p.get("is_active"), p.get("full_name", "")))
        return [
            BasePlayer(
                id=p["id"],
                full_name=p.get("full_name", ""),
                first_name=p.get("first_name"),
                last_name=p.get("last_name"),
                active=p.get("is_active"),
            )
            for p in matched
        ]

    async def get_player_stats(
        self,
        player_id: PlayerId,
        season: Union[int, str, None] = None,
        **options,
    ) -> Dict[str, Any]:
        """
        Regular-season totals for one player.

        Args:
            player_id: NBA person id
            season: None or "career" for career totals, else 2023 / "2023-24"

        Returns:
            Flat dict of lowercase stat keys plus player_id, full_name and season

        Raises:
            EntityNotFoundError: no row for that player / season
            SportAPIError: the stats.nba.com request failed
        """
        try:
            pid = int(player_id)
        except (TypeError, ValueError):
            raise InvalidParameterError("player_id", player_id, "a numeric NBA player id")
        season_str = normalize_nba_season(season)

        try:
            season_df, career_df = await asyncio.to_thread(
                _fetch_career_frames, pid, self.config.http_timeout
            )
        except Exception as exc:
            raise self._upstream_error(exc, "playercareerstats") from exc

        if season_str is None:
            if career_df.empty:
                raise EntityNotFoundError("career stats for player", pid, league=self.league)
            row = career_df.iloc[0]
        else:
            rows = season_df[season_df["SEASON_ID"] == season_str]
            if rows.empty:
                raise EntityNotFoundError(
                    f"{season_str} stats for player", pid, league=self.league
                )
            # Traded players get one row per team plus a combined TOT row
            total = rows[rows["TEAM_ABBREVIATION"] == "TOT"]
            row = total.iloc[0] if not total.empty else rows.iloc[0]

        try:
            full_name = await asyncio.to_thread(
                _lookup_full_name, pid, self.config.http_timeout
            )
        except Exception as exc:
            raise self._upstream_error(exc, "commonplayerinfo") from exc

        return {
            "player_id": pid,
            "full_name": full_name or f"Player {pid}",
            "season": season_str or "career",
            **_row_to_stats(row),
        }

    async def get_team_roster(
        self, team_id: TeamId, season: Union[int, str, None] = None
    ) -> List[BasePlayer]:
        """
        Roster of one team for a season (default: the current season).

        Raises:
            InvalidParameterError: non-numeric team id, or season="career"
            EntityNotFoundError: no roster rows for that team and season
        """
        try:
            tid = int(team_id)
        except (TypeError, ValueError):
            raise InvalidParameterError("team_id", team_id, "a numeric NBA team id")
        season_str = current_nba_season() if season is None else normalize_nba_season(season)
        if season_str is None:
            raise InvalidParameterError(
                "season", season, "a single season, e.g. 2023 or '2023-24'"
            )

        try:
            df = await asyncio.to_thread(
                _fetch_team_roster, tid, season_str, self.config.http_timeout
            )
        except Exception as exc:
            raise self._upstream_error(exc, "commonteamroster") from exc
        if df.empty:
            raise EntityNotFoundError(
                f"{season_str} roster for team", tid, league=self.league
            )

        team = teams.find_team_name_by_id(tid)
        team_name = team["full_name"] if team else None
        return [
            BasePlayer(
                id=int(row["PLAYER_ID"]),
                full_name=row.get("PLAYER") or "",
                active=True,
                position=row.get("POSITION") or None,
                team=team_name,
            )
            for _, row in df.iterrows()
        ]

    async def lookup_team(self, query: str) -> List[BaseTeam]:
        """Find NBA teams by full name, city, nickname or abbreviation."""
        needle = query.lower().strip()
        if not needle:
            return []

        all_teams = await asyncio.to_thread(teams.get_teams)
        fields = ("full_name", "city", "nickname", "abbreviation")
        return [
            BaseTeam(
                id=t["id"],
                name=t.get("full_name", ""),
                abbreviation=t.get("abbreviation"),
                location=t.get("city"),
                nickname=t.get("nickname"),
            )
            for t in all_teams
            if any(needle in (t.get(field) or "").lower() for field in fields)
        ]

    def _upstream_error(self, exc: Exception, endpoint: str) -> SportAPIError:
        logger.error("NBA stats request to %s failed: %s", endpoint, exc)
        return SportAPIError(
            f"NBA API request failed: {exc}", endpoint=endpoint, league=self.league
        )
