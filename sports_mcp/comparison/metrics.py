# sports_mcp/comparison/metrics.py
"""
Metric tables for player comparison.

Each table is an ordered tuple of Metric(key, display_name, higher_is_better).
Keys are the field names the league's stat extractor produces:

- MLB: MLB Stats API stat names, per stat group
- NBA: lowercase stats.nba.com columns plus derived per-game values
- NFL: ESPN core API stat names, per position or per ESPN stat category
"""

from typing import Dict, List, Optional, Tuple

from ..api.models import Metric


def _table(*rows) -> Tuple[Metric, ...]:
    return tuple(
        Metric(key=key, display_name=name, higher_is_better=better)
        for key, name, better in rows
    )


# ============================================================================
# MLB
# ============================================================================

MLB_METRICS: Dict[str, Tuple[Metric, ...]] = {
    "hitting": _table(
        ("avg", "Batting Average", True),
        ("ops", "OPS", True),
        ("homeRuns", "Home Runs", True),
        ("rbi", "RBIs", True),
        ("hits", "Hits", True),
    ),
    "pitching": _table(
        ("era", "ERA", False),
        ("whip", "WHIP", False),
        ("wins", "Wins", True),
        ("strikeOuts", "Strikeouts", True),
        ("inningsPitched", "Innings Pitched", True),
    ),
    "fielding": _table(
        ("fielding", "Fielding %", True),
        ("assists", "Assists", True),
        ("putOuts", "Putouts", True),
        ("errors", "Errors", False),
        ("doublePlays", "Double Plays", True),
    ),
}
MLB_DEFAULT_GROUP = "hitting"


def mlb_metrics(stat_group: Optional[str] = None) -> List[Metric]:
    """Metrics for an MLB stat group; unknown groups have none."""
    group = (stat_group or "").strip().lower() or MLB_DEFAULT_GROUP
    return list(MLB_METRICS.get(group, ()))


# ============================================================================
# NBA
# ============================================================================

NBA_METRICS: Tuple[Metric, ...] = _table(
    # Overall
    ("gp", "Games Played", True),
    ("pts", "Total Points", True),
    ("ppg", "Points Per Game", True),
    # Scoring
    ("fg_pct", "Field Goal %", True),
    ("fg3_pct", "3-Point %", True),
    ("ft_pct", "Free Throw %", True),
    ("fgm", "Field Goals Made", True),
    ("fg3m", "3-Pointers Made", True),
    # Playmaking
    ("ast", "Total Assists", True),
    ("apg", "Assists Per Game", True),
    ("tov", "Turnovers", False),
    ("ast_to_ratio", "Assist/TO Ratio", True),
    # Defense
    ("stl", "Total Steals", True),
    ("blk", "Total Blocks", True),
    ("spg", "Steals Per Game", True),
    ("bpg", "Blocks Per Game", True),
    # Rebounding
    ("reb", "Total Rebounds", True),
    ("rpg", "Rebounds Per Game", True),
    ("oreb", "Offensive Rebounds", True),
    ("dreb", "Defensive Rebounds", True),
)


def nba_metrics(stat_group: Optional[str] = None) -> List[Metric]:
    """NBA has a single table; the selector is ignored."""
    return list(NBA_METRICS)


# ============================================================================
# NFL
# ============================================================================

_NFL_DEFENDER = _table(
    ("gamesPlayed", "Games Played", True),
    ("tackles", "Total Tackles", True),
    ("soloTackles", "Solo Tackles", True),
    ("sacks", "Sacks", True),
    ("interceptions", "Interceptions", True),
    ("passesDefended", "Passes Defended", True),
    ("forcedFumbles", "Forced Fumbles", True),
    ("fumbleRecoveries", "Fumble Recoveries", True),
)
_NFL_RECEIVER = _table(
    ("gamesPlayed", "Games Played", True),
    ("receptions", "Receptions", True),
    ("receivingYards", "Receiving Yards", True),
    ("receivingTDs", "Receiving TDs", True),
    ("targets", "Targets", True),
    ("yardsPerReception", "Yards/Reception", True),
    ("longReception", "Long Reception", True),
    ("fumbles", "Fumbles", False),
)

NFL_POSITION_METRICS: Dict[str, Tuple[Metric, ...]] = {
    "QB": _table(
        ("gamesPlayed", "Games Played", True),
        ("passingYards", "Passing Yards", True),
        ("passingTouchdowns", "Passing TDs", True),
        ("interceptions", "Interceptions", False),
        ("completions", "Completions", True),
        ("passingAttempts", "Attempts", True),
        ("completionPct", "Completion %", True),
        ("yardsPerPassAttempt", "Yards/Attempt", True),
        ("QBRating", "QB Rating", True),
        ("rushingYards", "Rushing Yards", True),
    ),
    "RB": _table(
        ("gamesPlayed", "Games Played", True),
        ("rushingYards", "Rushing Yards", True),
        ("rushingTDs", "Rushing TDs", True),
        ("rushingAttempts", "Rushing Attempts", True),
        ("yardsPerCarry", "Yards/Carry", True),
        ("receptions", "Receptions", True),
        ("receivingYards", "Receiving Yards", True),
        ("receivingTDs", "Receiving TDs", True),
        ("fumbles", "Fumbles", False),
    ),
    "WR": _NFL_RECEIVER,
    "TE": _NFL_RECEIVER,
    "DE": _NFL_DEFENDER,
    "DT": _NFL_DEFENDER,
    "LB": _NFL_DEFENDER,
    "CB": _NFL_DEFENDER,
    "S": _NFL_DEFENDER,
    "DB": _NFL_DEFENDER,
}

# Positions without a dedicated table (K, P, OL, ...)
NFL_FALLBACK_METRICS = _table(
    ("gamesPlayed", "Games Played", True),
    ("touchdowns", "Total TDs", True),
    ("yardsGained", "Total Yards", True),
)

_NFL_DEFENSIVE = _table(
    ("teamGamesPlayed", "Games Played", True),
    ("totalTackles", "Total Tackles", True),
    ("soloTackles", "Solo Tackles", True),
    ("assistTackles", "Assist Tackles", True),
    ("sacks", "Sacks", True),
    ("sackYards", "Sack Yards", True),
    ("tacklesForLoss", "Tackles For Loss", True),
    ("passesDefended", "Passes Defended", True),
    ("fumblesForced", "Forced Fumbles", True),
    ("fumblesRecovered", "Fumble Recoveries", True),
)

NFL_CATEGORY_METRICS: Dict[str, Tuple[Metric, ...]] = {
    "PASSING": _table(
        ("teamGamesPlayed", "Games Played", True),
        ("completions", "Completions", True),
        ("passingAttempts", "Attempts", True),
        ("completionPct", "Completion %", True),
        ("netPassingYards", "Passing Yards", True),
        ("yardsPerPassAttempt", "Yards/Attempt", True),
        ("passingTouchdowns", "Passing TDs", True),
        ("interceptions", "Interceptions", False),
        ("QBRating", "QB Rating", True),
        ("sacks", "Sacks Taken", False),
    ),
    "RUSHING": _table(
        ("teamGamesPlayed", "Games Played", True),
        ("rushingAttempts", "Rushing Attempts", True),
        ("rushingYards", "Rushing Yards", True),
        ("yardsPerRushAttempt", "Yards/Carry", True),
        ("longRushing", "Long Rush", True),
        ("rushingTouchdowns", "Rushing TDs", True),
        ("rushingBigPlays", "20+ Yard Rushes", True),
        ("rushingFumbles", "Fumbles", False),
    ),
    "RECEIVING": _table(
        ("teamGamesPlayed", "Games Played", True),
        ("receptions", "Receptions", True),
        ("receivingTargets", "Targets", True),
        ("receivingYards", "Receiving Yards", True),
        ("yardsPerReception", "Yards/Reception", True),
        ("longReception", "Long Reception", True),
        ("receivingTouchdowns", "Receiving TDs", True),
        ("receivingBigPlays", "20+ Yard Receptions", True),
        ("receivingFumbles", "Fumbles", False),
    ),
    "DEFENSIVE": _NFL_DEFENSIVE,
    "DEFENSE": _NFL_DEFENSIVE,
    "GENERAL": _table(
        ("gamesPlayed", "Games Played", True),
        ("fumbles", "Fumbles", False),
        ("fumblesLost", "Fumbles Lost", False),
        ("fumblesForced", "Forced Fumbles", True),
        ("fumblesRecovered", "Fumbles Recovered", True),
    ),
    "SCORING": _table(
        ("totalPoints", "Total Points", True),
        ("totalTouchdowns", "Touchdowns", True),
        ("rushingTouchdowns", "Rushing TDs", True),
        ("receivingTouchdowns", "Receiving TDs", True),
        ("passingTouchdowns", "Passing TDs", True),
        ("twoPointPassConvs", "2-Pt Pass Conversions", True),
        ("twoPointRushConvs", "2-Pt Rush Conversions", True),
        ("twoPointRecConvs", "2-Pt Rec Conversions", True),
    ),
}
NFL_DEFAULT_POSITION = "QB"

# Selector aliases whose ESPN category carries a different name
NFL_ESPN_CATEGORY_NAMES: Dict[str, str] = {"DEFENSE": "defensive"}


def nfl_position_metrics(position: Optional[str]) -> List[Metric]:
    pos = (position or NFL_DEFAULT_POSITION).upper()
    return list(NFL_POSITION_METRICS.get(pos, NFL_FALLBACK_METRICS))


def nfl_category_metrics(category: Optional[str]) -> List[Metric]:
    """Metrics for an ESPN stat category; unknown categories have none."""
    if not category:
        return []
    return list(NFL_CATEGORY_METRICS.get(category.strip().upper(), ()))


def nfl_espn_category(category: str) -> str:
    """Lowercase ESPN category name a category selector looks stats up in."""
    text = category.strip()
    return NFL_ESPN_CATEGORY_NAMES.get(text.upper(), text.lower())
