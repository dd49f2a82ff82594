# sports_mcp/comparison/registry.py
"""
League -> ComparisonService registry.

Services are built on first use and reused afterwards; construction is
guarded by a lock so concurrent first requests still share one instance.
"""

import logging
import threading
from typing import Callable, Dict, List, Mapping, Optional

from ..api.client_registry import ClientRegistry
from ..api.errors import LeagueNotImplementedError, UnknownLeagueError
from ..api.models import Metric
from .base import ComparisonService, ComparisonStrategy
from .mlb import MLBComparison
from .nba import NBAComparison
from .nfl import NFLComparison

logger = logging.getLogger(__name__)

KNOWN_LEAGUES = ("mlb", "nba", "nfl")

DEFAULT_BUILDERS: Dict[str, Callable[[], ComparisonStrategy]] = {
    "mlb": MLBComparison,
    "nba": NBAComparison,
    "nfl": NFLComparison,
}


def _normalize(league: str) -> str:
    return (league or "").strip().lower()


class ComparisonRegistry:
    """
    One ComparisonService per league, wired to the matching API client.

    Args:
        client_registry: Source of the per-league API clients
        builders: league -> strategy factory (defaults to every known league)
    """

    def __init__(
        self,
        client_registry: ClientRegistry,
        builders: Optional[Mapping[str, Callable[[], ComparisonStrategy]]] = None,
    ):
        self.client_registry = client_registry
        self._builders = dict(DEFAULT_BUILDERS if builders is None else builders)
        self._services: Dict[str, ComparisonService] = {}
        self._lock = threading.Lock()

    def supported_leagues(self) -> List[str]:
        return [league for league in KNOWN_LEAGUES if league in self._builders]

    def is_supported(self, league: str) -> bool:
        return _normalize(league) in self._builders

    def get(self, league: str) -> ComparisonService:
        """
        Comparison service for a league (case-insensitive).

        Raises:
            UnknownLeagueError: league is not one of mlb, nba, nfl
            LeagueNotImplementedError: known league with no strategy wired up
        """
        key = _normalize(league)
        if key not in KNOWN_LEAGUES:
            raise UnknownLeagueError(league, self.supported_leagues())
        if key not in self._builders:
            raise LeagueNotImplementedError(key)

        with self._lock:
            service = self._services.get(key)
            if service is None:
                logger.debug("Creating %s comparison service", key.upper())
                service = ComparisonService(self._builders[key](), self.client_registry.get(key))
                self._services[key] = service
            return service

    def reset(self):
        """Drop every cached service."""
        with self._lock:
            self._services.clear()


def list_metrics(league: str, stat_group: Optional[str] = None) -> List[Metric]:
    """
    Metric table a comparison would use for a league and selector.

    Raises:
        UnknownLeagueError: league is not one of mlb, nba, nfl
    """
    key = _normalize(league)
    if key not in DEFAULT_BUILDERS:
        raise UnknownLeagueError(league, list(KNOWN_LEAGUES))
    strategy = DEFAULT_BUILDERS[key]()
    return strategy.get_metrics(strategy.parse_selector(stat_group))
