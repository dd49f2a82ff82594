# sports_mcp/comparison/nfl.py
"""
NFL comparison over ESPN core API statistics.

ESPN groups an athlete's season numbers into categories (general, passing,
rushing, receiving, defensive, defensiveInterceptions, scoring), each a list
of {"name", "value"} stats. Metrics are chosen either by position (QB, RB,
WR, ...) or by ESPN category (passing, rushing, ...).
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..api.base_client import PlayerId
from ..api.errors import InvalidParameterError
from ..api.models import Metric
from .base import ComparisonStrategy, StatExtraction
from .engine import to_number
from .metrics import (
    NFL_CATEGORY_METRICS,
    NFL_DEFAULT_POSITION,
    nfl_category_metrics,
    nfl_espn_category,
    nfl_position_metrics,
)

logger = logging.getLogger(__name__)

CategoryStats = List[Tuple[str, Dict[str, Any]]]


@dataclass(frozen=True)
class NFLSelector:
    """Either a position code or an ESPN stat category, never both."""

    position: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self):
        if self.position and self.category:
            raise InvalidParameterError(
                "position/category",
                f"{self.position}/{self.category}",
                "either a position or a stat category, not both",
            )

    @classmethod
    def parse(cls, stat_group: Union["NFLSelector", str, None]) -> "NFLSelector":
        """
        Read the single-string selector form.

        Known ESPN category names win over positions; anything else is
        treated as a position code (unknown positions get the fallback table).
        """
        if isinstance(stat_group, NFLSelector):
            return stat_group
        if not stat_group:
            return cls()
        text = str(stat_group).strip()
        if text.upper() in NFL_CATEGORY_METRICS:
            return cls(category=text)
        return cls(position=text)

    @classmethod
    def from_params(
        cls,
        stat_group: Optional[str] = None,
        position: Optional[str] = None,
        category: Optional[str] = None,
    ) -> "NFLSelector":
        """Build from the explicit position/category parameters or the legacy string."""
        if stat_group and (position or category):
            raise InvalidParameterError(
                "stat_group",
                stat_group,
                "stat_group alone, or position/category without stat_group",
            )
        if position or category:
            return cls(position=position, category=category)
        return cls.parse(stat_group)

    @property
    def label(self) -> str:
        return self.category or self.position or NFL_DEFAULT_POSITION


def _category_stats(payload: Dict[str, Any]) -> CategoryStats:
    """[(category name, {stat name: value})] in upstream order."""
    splits = payload.get("splits") or {}
    categories = []
    for category in splits.get("categories") or []:
        stats = {
            stat.get("name"): stat.get("value")
            for stat in category.get("stats") or []
            if stat.get("name")
        }
        categories.append((category.get("name") or "", stats))
    return categories


class NFLComparison(ComparisonStrategy):
    league = "nfl"
    default_stat_group = NFL_DEFAULT_POSITION

    def parse_selector(self, stat_group: Any) -> NFLSelector:
        return NFLSelector.parse(stat_group)

    def get_metrics(self, stat_group: Any = None) -> List[Metric]:
        selector = NFLSelector.parse(stat_group)
        if selector.category:
            return nfl_category_metrics(selector.category)
        return nfl_position_metrics(selector.position)

    def extract_stats(self, payload: Dict[str, Any], stat_group: Any = None) -> StatExtraction:
        """
        Look every metric up across ESPN categories.

        With a category selector, categories whose name contains its ESPN
        name (DEFENSE looks in "defensive") are searched first, in upstream
        order, and the rest after. Sacks under PASSING are sacks taken, so
        they are read from the passing category only. Without a category
        selector the first category carrying the stat wins.
        """
        selector = NFLSelector.parse(stat_group)
        categories = _category_stats(payload)

        if selector.category:
            wanted = nfl_espn_category(selector.category)
            preferred = [c for c in categories if wanted in c[0].lower()]
            if len(preferred) > 1:
                logger.debug(
                    "Category '%s' matches %d ESPN categories (%s); using upstream order",
                    selector.category,
                    len(preferred),
                    ", ".join(name for name, _ in preferred),
                )
            ordered = preferred + [c for c in categories if wanted not in c[0].lower()]
        else:
            ordered = categories

        passing_only = (selector.category or "").strip().upper() == "PASSING"
        values: Dict[str, float] = {}
        defaulted: List[str] = []
        for metric in self.get_metrics(selector):
            if passing_only and metric.key == "sacks":
                search = [c for c in categories if c[0].lower() == "passing"]
            else:
                search = ordered

            raw = None
            for _, stats in search:
                if metric.key in stats:
                    raw = stats[metric.key]
                    break

            number = to_number(raw)
            if number is None:
                defaulted.append(metric.key)
                number = 0.0
            values[metric.key] = number
        return StatExtraction(values, defaulted)

    def get_player_name(self, payload: Dict[str, Any], player_id: PlayerId) -> str:
        return payload.get("playerName") or f"Player {payload.get('playerId') or player_id}"

    def get_season(self, payload: Dict[str, Any], requested: Any = None) -> Any:
        season = payload.get("season")
        if isinstance(season, dict):
            return season.get("year", requested)
        return season if season is not None else requested

    def summary_label(self, stat_group: Any = None) -> Optional[str]:
        return NFLSelector.parse(stat_group).label
