# sports_mcp/comparison/base.py
"""
Comparison strategy interface and the comparison service built on it.

A ComparisonStrategy knows one league: which metrics exist for a selector,
how to pull them out of that league's raw stats payload, and where the
player's name lives. ComparisonService does the league-independent part:
fetch both players concurrently, extract, compare, tally, summarize.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence

from ..api.base_client import BaseSportClient, PlayerId
from ..api.errors import SportsMCPError
from ..api.models import (
    ComparisonResult,
    Metric,
    MetricCoverage,
    PlayerSummary,
)
from .engine import (
    compare_stats,
    determine_winner,
    format_comparison_result,
    generate_summary,
    to_number,
)

logger = logging.getLogger(__name__)


class StatExtraction(NamedTuple):
    """Extracted metric values plus the keys that had to default to 0."""

    values: Dict[str, float]
    defaulted: List[str]


def read_metrics(source: Mapping[str, Any], metrics: Sequence[Metric]) -> StatExtraction:
    """Read every metric key from a flat mapping, defaulting absent values to 0."""
    values: Dict[str, float] = {}
    defaulted: List[str] = []
    for metric in metrics:
        number = to_number(source.get(metric.key))
        if number is None:
            defaulted.append(metric.key)
            number = 0.0
        values[metric.key] = number
    return StatExtraction(values, defaulted)


class ComparisonStrategy(ABC):
    """Per-league knowledge used by ComparisonService."""

    league: str = ""
    default_stat_group: Optional[str] = None

    def parse_selector(self, stat_group: Any) -> Any:
        """Normalize the caller's selector; most leagues use the plain string."""
        return stat_group

    @abstractmethod
    def get_metrics(self, stat_group: Any = None) -> List[Metric]:
        """Ordered metric table for a selector."""

    @abstractmethod
    def extract_stats(self, payload: Dict[str, Any], stat_group: Any = None) -> StatExtraction:
        """Flat metric values (one per metric) from a raw stats payload."""

    @abstractmethod
    def get_player_name(self, payload: Dict[str, Any], player_id: PlayerId) -> str:
        """Display name carried by a raw stats payload."""

    async def fetch_player_stats(
        self,
        client: BaseSportClient,
        player_id: PlayerId,
        season: Any = None,
        stat_group: Any = None,
    ) -> Dict[str, Any]:
        return await client.get_player_stats(player_id, season=season)

    def get_season(self, payload: Dict[str, Any], requested: Any = None) -> Any:
        return requested

    def summary_label(self, stat_group: Any = None) -> Optional[str]:
        """Group word used in the summary sentence ("key hitting categories")."""
        return stat_group or self.default_stat_group


class ComparisonService:
    """
    Player comparison for one league.

    Args:
        strategy: League-specific extraction and metric selection
        client: API client the raw payloads are fetched with
    """

    def __init__(self, strategy: ComparisonStrategy, client: BaseSportClient):
        self.strategy = strategy
        self.client = client

    @property
    def league(self) -> str:
        return self.strategy.league

    async def compare_players(
        self,
        player1_id: PlayerId,
        player2_id: PlayerId,
        season: Any = None,
        stat_group: Any = None,
    ) -> ComparisonResult:
        """
        Compare two players on the metric table for a selector.

        Both payloads are fetched concurrently; if either fetch fails the
        error propagates and no partial result is produced.

        Args:
            player1_id: First player's league id
            player2_id: Second player's league id
            season: Year, league season string, or "career"
            stat_group: Stat group / position / category (league vocabulary)

        Returns:
            ComparisonResult with one record per metric
        """
        strategy = self.strategy
        selector = strategy.parse_selector(stat_group)

        payload1, payload2 = await asyncio.gather(
            strategy.fetch_player_stats(self.client, player1_id, season, selector),
            strategy.fetch_player_stats(self.client, player2_id, season, selector),
        )

        metrics = strategy.get_metrics(selector)
        extracted1 = strategy.extract_stats(payload1, selector)
        extracted2 = strategy.extract_stats(payload2, selector)
        for player_id, extracted in ((player1_id, extracted1), (player2_id, extracted2)):
            if extracted.defaulted:
                logger.debug(
                    "%s player %s: defaulted %d metric(s) to 0: %s",
                    self.league.upper(),
                    player_id,
                    len(extracted.defaulted),
                    ", ".join(extracted.defaulted),
                )

        records = compare_stats(extracted1.values, extracted2.values, metrics)
        tally = determine_winner(records)

        name1 = strategy.get_player_name(payload1, player1_id)
        name2 = strategy.get_player_name(payload2, player2_id)
        label = strategy.summary_label(selector)

        return ComparisonResult(
            league=self.league,
            season=strategy.get_season(payload1, season),
            stat_group=label,
            player1=PlayerSummary(id=player1_id, name=name1, stats=extracted1.values),
            player2=PlayerSummary(id=player2_id, name=name2, stats=extracted2.values),
            comparison=records,
            overall_winner=tally.overall_winner,
            player1_wins=tally.player1_wins,
            player2_wins=tally.player2_wins,
            summary=generate_summary(
                name1,
                name2,
                tally.player1_wins,
                tally.player2_wins,
                label,
                total_metrics=len(metrics),
            ),
            coverage=MetricCoverage(
                total_metrics=len(metrics),
                player1_defaulted=extracted1.defaulted,
                player2_defaulted=extracted2.defaulted,
            ),
        )

    async def search_player(self, name: str) -> Optional[PlayerId]:
        """
        Resolve a name to a single player id.

        No match (or a failed search) gives None. Several matches resolve to
        the first one the client returned.
        """
        try:
            results = await self.client.search_players(name)
        except SportsMCPError as exc:
            logger.error("%s player search for '%s' failed: %s", self.league.upper(), name, exc.message)
            return None

        if not results:
            return None
        if len(results) > 1:
            logger.warning(
                "Found %d players matching '%s', using first match: %s (%s)",
                len(results),
                name,
                results[0].full_name,
                results[0].id,
            )
        return results[0].id

    def format_comparison_result(self, result: ComparisonResult) -> str:
        return format_comparison_result(result)
