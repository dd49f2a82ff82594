# sports_mcp/comparison/mlb.py
"""MLB comparison: hitting, pitching and fielding groups from the MLB Stats API."""

from typing import Any, Dict, List, Optional

from ..api.base_client import PlayerId
from ..api.models import Metric
from .base import ComparisonStrategy, StatExtraction, read_metrics
from .metrics import MLB_DEFAULT_GROUP, mlb_metrics


class MLBComparison(ComparisonStrategy):
    league = "mlb"
    default_stat_group = MLB_DEFAULT_GROUP

    def get_metrics(self, stat_group: Optional[str] = None) -> List[Metric]:
        return mlb_metrics(stat_group)

    def extract_stats(
        self, payload: Dict[str, Any], stat_group: Optional[str] = None
    ) -> StatExtraction:
        """
        Stats of the first group whose display name contains the selector.

        MLB numbers arrive partly as strings (avg ".312", ops "1.012"), which
        are coerced to floats; a missing group defaults every metric to 0.
        """
        group = (stat_group or "").strip().lower() or MLB_DEFAULT_GROUP
        source: Dict[str, Any] = {}
        for entry in payload.get("stats") or []:
            name = ((entry.get("group") or {}).get("displayName") or "").lower()
            if group in name:
                source = entry.get("stats") or {}
                break
        return read_metrics(source, self.get_metrics(group))

    def get_player_name(self, payload: Dict[str, Any], player_id: PlayerId) -> str:
        return (payload.get("player") or {}).get("fullName") or f"Player {player_id}"

    def get_season(self, payload: Dict[str, Any], requested: Any = None) -> Any:
        return payload.get("season", requested)
