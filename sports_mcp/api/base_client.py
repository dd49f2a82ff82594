# sports_mcp/api/base_client.py
"""
Base class for the per-league API clients.

Every client exposes the same two operations the comparison engine
consumes (search_players, get_player_stats) and shares one async HTTP
helper that turns transport failures and non-success statuses into
SportAPIError.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

import httpx

from ..cache import LRUCache
from ..config import ClientConfig
from .errors import SportAPIError
from .headers import get_default_headers
from .models import BasePlayer, BaseTeam

logger = logging.getLogger(__name__)

PlayerId = Union[int, str]
TeamId = Union[int, str]


class BaseSportClient(ABC):
    """Shared plumbing for the MLB, NBA and NFL clients."""

    league: str = ""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache: Optional[LRUCache] = None,
    ):
        """
        Args:
            config: Client configuration (read from env when omitted)
            transport: Optional httpx transport (tests inject httpx.MockTransport)
            cache: Lookup cache for roster / player index data
        """
        self.config = config or ClientConfig.from_env()
        self._transport = transport
        self.cache = cache or LRUCache()

    def _headers(self) -> Dict[str, str]:
        return get_default_headers(user_agent=self.config.user_agent)

    async def _request(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a JSON document.

        None-valued params are dropped. Network errors, non-2xx statuses and
        undecodable bodies all raise SportAPIError carrying the endpoint.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("Making request to: %s params=%s", url, query)

        try:
            async with httpx.AsyncClient(
                timeout=self.config.http_timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=query)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise SportAPIError(
                f"{self.league.upper()} API request failed: {status} "
                f"{exc.response.reason_phrase}",
                status_code=status,
                endpoint=url,
                league=self.league,
            ) from exc
        except httpx.HTTPError as exc:
            raise SportAPIError(
                f"Failed to fetch from {self.league.upper()} API: {url} ({exc})",
                endpoint=url,
                league=self.league,
            ) from exc
        except ValueError as exc:
            raise SportAPIError(
                f"{self.league.upper()} API returned invalid JSON for {url}",
                endpoint=url,
                league=self.league,
            ) from exc

    @abstractmethod
    async def search_players(
        self, query: str, active_status: Optional[str] = None
    ) -> List[BasePlayer]:
        """Search players by (partial) name."""

    @abstractmethod
    async def get_player_stats(self, player_id: PlayerId, season=None, **options) -> Dict[str, Any]:
        """Fetch the raw stats payload for one player."""

    @abstractmethod
    async def get_team_roster(self, team_id: TeamId, season=None) -> List[BasePlayer]:
        """Players on a team's roster."""

    @abstractmethod
    async def lookup_team(self, query: str) -> List[BaseTeam]:
        """Teams whose name, city or abbreviation contains the query."""
