# sports_mcp/comparison/nba.py
"""NBA comparison over regular-season totals with derived per-game rates."""

from typing import Any, Dict, List, Optional

from ..api.base_client import PlayerId
from ..api.models import Metric
from .base import ComparisonStrategy, StatExtraction
from .engine import to_number
from .metrics import nba_metrics

# per-game key -> season total it is derived from (divided by gp)
PER_GAME = {
    "ppg": "pts",
    "apg": "ast",
    "spg": "stl",
    "bpg": "blk",
    "rpg": "reb",
}


class NBAComparison(ComparisonStrategy):
    league = "nba"

    def get_metrics(self, stat_group: Optional[str] = None) -> List[Metric]:
        return nba_metrics(stat_group)

    def extract_stats(
        self, payload: Dict[str, Any], stat_group: Optional[str] = None
    ) -> StatExtraction:
        raw = {key: to_number(value) for key, value in payload.items()}
        missing = {key for key, value in raw.items() if value is None}

        def get(key: str) -> float:
            value = raw.get(key)
            if value is None:
                missing.add(key)
                return 0.0
            return value

        gp = get("gp")
        derived: Dict[str, float] = {}
        for key, total in PER_GAME.items():
            derived[key] = get(total) / gp if gp > 0 else 0.0
            if "gp" in missing or total in missing:
                missing.add(key)

        ast, tov = get("ast"), get("tov")
        derived["ast_to_ratio"] = ast / tov if tov > 0 else ast
        if "ast" in missing or "tov" in missing:
            missing.add("ast_to_ratio")

        values: Dict[str, float] = {}
        defaulted: List[str] = []
        for metric in self.get_metrics():
            values[metric.key] = derived[metric.key] if metric.key in derived else get(metric.key)
            if metric.key in missing:
                defaulted.append(metric.key)
        return StatExtraction(values, defaulted)

    def get_player_name(self, payload: Dict[str, Any], player_id: PlayerId) -> str:
        return payload.get("full_name") or f"Player {payload.get('player_id') or player_id}"

    def get_season(self, payload: Dict[str, Any], requested: Any = None) -> Any:
        return payload.get("season", requested)

    def summary_label(self, stat_group: Optional[str] = None) -> Optional[str]:
        return None
