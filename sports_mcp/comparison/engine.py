# sports_mcp/comparison/engine.py
"""
League-independent comparison logic.

Everything here is a pure function of its inputs: per-metric comparison,
win tally, summary sentence and plain-text rendering of a result.
"""

import math
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence

from ..api.models import ComparisonRecord, ComparisonResult, Metric, Winner

RULE = "=" * 80


class WinnerTally(NamedTuple):
    overall_winner: Winner
    player1_wins: int
    player2_wins: int


def to_number(value: Any) -> Optional[float]:
    """
    Coerce an upstream stat value to float.

    Returns None for missing, blank, placeholder (".---", "-.--") and NaN
    values so callers can record them as defaulted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def compare_stats(
    stats1: Mapping[str, float],
    stats2: Mapping[str, float],
    metrics: Sequence[Metric],
) -> List[ComparisonRecord]:
    """
    Compare two extracted stat mappings metric by metric.

    Missing keys count as 0. One record per metric, in metric order.

    Example:
        >>> records = compare_stats({"era": 2.5}, {"era": 3.8},
        ...                         [Metric(key="era", display_name="ERA", higher_is_better=False)])
        >>> records[0].winner
        'player1'
    """
    records = []
    for metric in metrics:
        value1 = to_number(stats1.get(metric.key)) or 0.0
        value2 = to_number(stats2.get(metric.key)) or 0.0

        if value1 > value2:
            winner = "player1" if metric.higher_is_better else "player2"
        elif value2 > value1:
            winner = "player2" if metric.higher_is_better else "player1"
        else:
            winner = "tie"

        records.append(
            ComparisonRecord(
                category=metric.display_name,
                player1_value=value1,
                player2_value=value2,
                winner=winner,
                difference=abs(value1 - value2),
            )
        )
    return records


def determine_winner(records: Sequence[ComparisonRecord]) -> WinnerTally:
    """Tally per-metric winners; equal counts (including 0-0) is a tie."""
    player1_wins = sum(1 for r in records if r.winner == "player1")
    player2_wins = sum(1 for r in records if r.winner == "player2")

    if player1_wins > player2_wins:
        overall = "player1"
    elif player2_wins > player1_wins:
        overall = "player2"
    else:
        overall = "tie"
    return WinnerTally(overall, player1_wins, player2_wins)


def generate_summary(
    player1_name: str,
    player2_name: str,
    player1_wins: int,
    player2_wins: int,
    group_label: Optional[str] = None,
    total_metrics: Optional[int] = None,
) -> str:
    """
    One-sentence verdict.

    "X leads in 3 out of 5 key hitting categories." for a winner and
    "X and Y are tied in key hitting categories." for a tie. When no metric
    was compared at all the sentence says "0 out of 0" explicitly.
    """
    group_text = f" {group_label}" if group_label else ""
    decided = player1_wins + player2_wins

    if player1_wins > player2_wins:
        return f"{player1_name} leads in {player1_wins} out of {decided} key{group_text} categories."
    if player2_wins > player1_wins:
        return f"{player2_name} leads in {player2_wins} out of {decided} key{group_text} categories."
    if total_metrics == 0:
        return (
            f"{player1_name} and {player2_name} are tied with 0 out of 0 "
            f"key{group_text} categories compared."
        )
    return f"{player1_name} and {player2_name} are tied in key{group_text} categories."


def format_value(value: float) -> str:
    """40.0 -> "40", 0.25 -> "0.25", 0.3333333 -> "0.333"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_comparison_result(result: ComparisonResult) -> str:
    """Render a comparison as a console block with a trailing summary."""
    name1, name2 = result.player1.name, result.player2.name
    lines = ["", RULE, f"PLAYER COMPARISON: {name1} vs {name2}", RULE, ""]

    for record in result.comparison:
        if record.winner == "player1":
            winner = name1
        elif record.winner == "player2":
            winner = name2
        else:
            winner = "TIE"
        lines.extend(
            [
                f"{record.category}:",
                f"  {name1}: {format_value(record.player1_value)}",
                f"  {name2}: {format_value(record.player2_value)}",
                f"  Winner: {winner}",
                "",
            ]
        )

    lines.extend([RULE, f"SUMMARY: {result.summary}", RULE])
    return "\n".join(lines) + "\n"
