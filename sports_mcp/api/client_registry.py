# sports_mcp/api/client_registry.py
"""
League -> API client registry.

One client instance per league, built on first use. The registry object is
created once by the server (or CLI) and handed to whoever needs clients.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

import httpx

from ..cache import LRUCache
from ..config import ClientConfig
from .base_client import BaseSportClient
from .errors import UnknownLeagueError
from .mlb_client import MLBApiClient
from .nba_client import NBAApiClient
from .nfl_client import NFLApiClient

logger = logging.getLogger(__name__)

CLIENT_CLASSES: Dict[str, Callable[..., BaseSportClient]] = {
    "mlb": MLBApiClient,
    "nba": NBAApiClient,
    "nfl": NFLApiClient,
}


class ClientRegistry:
    """Lazily builds and caches one API client per league."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache: Optional[LRUCache] = None,
    ):
        self.config = config or ClientConfig.from_env()
        self._transport = transport
        self._cache = cache or LRUCache()
        self._clients: Dict[str, BaseSportClient] = {}
        self._lock = threading.Lock()

    def supported_leagues(self) -> List[str]:
        return sorted(CLIENT_CLASSES)

    def get(self, league: str) -> BaseSportClient:
        """
        Client for a league (case-insensitive).

        Raises:
            UnknownLeagueError: league has no client
        """
        key = (league or "").strip().lower()
        if key not in CLIENT_CLASSES:
            raise UnknownLeagueError(league, self.supported_leagues())

        with self._lock:
            client = self._clients.get(key)
            if client is None:
                logger.debug("Creating %s API client", key.upper())
                client = CLIENT_CLASSES[key](
                    config=self.config, transport=self._transport, cache=self._cache
                )
                self._clients[key] = client
            return client

    def reset(self):
        """Drop every cached client."""
        with self._lock:
            self._clients.clear()
