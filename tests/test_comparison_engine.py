"""
Tests for the league-independent comparison engine: per-metric comparison,
win tally, summary sentence and text formatting.
"""

import pytest

from sports_mcp.api.models import (
    ComparisonRecord,
    ComparisonResult,
    Metric,
    PlayerSummary,
)
from sports_mcp.comparison.engine import (
    compare_stats,
    determine_winner,
    format_comparison_result,
    format_value,
    generate_summary,
)


def metric(key, higher_is_better=True, name=None):
    return Metric(key=key, display_name=name or key, higher_is_better=higher_is_better)


def record(winner, v1=1.0, v2=1.0):
    return ComparisonRecord(
        category="x", player1_value=v1, player2_value=v2, winner=winner, difference=abs(v1 - v2)
    )


# ============================================================================
# COMPARATOR
# ============================================================================


def test_home_runs_and_average_split_to_a_tie():
    stats1 = {"homeRuns": 40, "avg": 0.250}
    stats2 = {"homeRuns": 35, "avg": 0.300}
    metrics = [metric("homeRuns", name="Home Runs"), metric("avg", name="Batting Average")]

    records = compare_stats(stats1, stats2, metrics)

    assert [r.category for r in records] == ["Home Runs", "Batting Average"]
    assert records[0].player1_value == 40
    assert records[0].player2_value == 35
    assert records[0].winner == "player1"
    assert records[0].difference == 5
    assert records[1].winner == "player2"
    assert records[1].difference == pytest.approx(0.05)

    tally = determine_winner(records)
    assert tally.player1_wins == 1
    assert tally.player2_wins == 1
    assert tally.overall_winner == "tie"


def test_lower_era_wins():
    records = compare_stats({"era": 2.50}, {"era": 3.80}, [metric("era", higher_is_better=False)])

    assert records[0].winner == "player1"
    assert records[0].difference == pytest.approx(1.30)


def test_missing_key_counts_as_zero():
    metrics = [metric("rbi"), metric("hits")]

    records = compare_stats({"rbi": 90, "hits": 150}, {"hits": 150}, metrics)

    assert records[0].player2_value == 0
    assert records[0].winner == "player1"
    assert records[0].difference == 90
    assert records[1].winner == "tie"


def test_none_value_counts_as_zero():
    records = compare_stats({"hits": None}, {"hits": 3}, [metric("hits")])

    assert records[0].player1_value == 0
    assert records[0].winner == "player2"


def test_identical_values_are_all_ties():
    stats = {"avg": 0.3, "ops": 0.9, "homeRuns": 30}
    metrics = [metric("avg"), metric("ops"), metric("homeRuns"), metric("era", False)]

    records = compare_stats(stats, dict(stats), metrics)

    assert all(r.winner == "tie" for r in records)
    assert all(r.difference == 0 for r in records)
    assert determine_winner(records).overall_winner == "tie"


def test_empty_metric_list():
    records = compare_stats({"avg": 0.3}, {"avg": 0.2}, [])

    assert records == []
    assert determine_winner(records) == ("tie", 0, 0)


@pytest.mark.parametrize(
    "v1,v2,higher_is_better,expected",
    [
        (10, 5, True, "player1"),
        (5, 10, True, "player2"),
        (10, 5, False, "player2"),
        (5, 10, False, "player1"),
        (7, 7, True, "tie"),
        (7, 7, False, "tie"),
        (0, 0, False, "tie"),
    ],
)
def test_winner_follows_direction(v1, v2, higher_is_better, expected):
    records = compare_stats({"k": v1}, {"k": v2}, [metric("k", higher_is_better)])

    assert records[0].winner == expected
    assert records[0].difference == abs(v1 - v2)
    assert records[0].difference >= 0


def test_comparator_is_deterministic_and_keeps_metric_order():
    stats1 = {"a": 3, "b": 1.5, "c": 0}
    stats2 = {"a": 1, "b": 2.5, "c": 4}
    metrics = [metric("c", False), metric("a"), metric("b")]

    first = compare_stats(stats1, stats2, metrics)
    second = compare_stats(stats1, stats2, metrics)

    assert first == second
    assert [r.category for r in first] == ["c", "a", "b"]
    assert len(first) == len(metrics)


def test_string_numbers_are_accepted():
    records = compare_stats({"avg": ".312"}, {"avg": "0.250"}, [metric("avg")])

    assert records[0].player1_value == pytest.approx(0.312)
    assert records[0].winner == "player1"


# ============================================================================
# WINNER TALLY + SUMMARY
# ============================================================================


@pytest.mark.parametrize(
    "winners,expected",
    [
        (["player1", "player1", "player2"], ("player1", 2, 1)),
        (["player2", "tie", "player2", "player1"], ("player2", 2, 1)),
        (["player1", "player2", "tie"], ("tie", 1, 1)),
        (["tie", "tie"], ("tie", 0, 0)),
    ],
)
def test_determine_winner(winners, expected):
    assert determine_winner([record(w) for w in winners]) == expected


def test_summary_names_the_leader_with_group():
    summary = generate_summary("Aaron Judge", "Shohei Ohtani", 3, 2, "hitting")

    assert summary == "Aaron Judge leads in 3 out of 5 key hitting categories."


def test_summary_for_player2_without_group():
    summary = generate_summary("A", "B", 1, 4)

    assert summary == "B leads in 4 out of 5 key categories."


def test_summary_tie():
    summary = generate_summary("A", "B", 2, 2, "pitching", total_metrics=5)

    assert summary == "A and B are tied in key pitching categories."


def test_summary_with_no_metrics_says_zero_out_of_zero():
    summary = generate_summary("A", "B", 0, 0, "hitting", total_metrics=0)

    assert "0 out of 0" in summary
    assert summary == "A and B are tied with 0 out of 0 key hitting categories compared."


# ============================================================================
# FORMATTING
# ============================================================================


def build_result(records, summary="Aaron Judge leads in 1 out of 1 key hitting categories."):
    tally = determine_winner(records)
    return ComparisonResult(
        league="mlb",
        season=2023,
        stat_group="hitting",
        player1=PlayerSummary(id=592450, name="Aaron Judge"),
        player2=PlayerSummary(id=660271, name="Shohei Ohtani"),
        comparison=records,
        overall_winner=tally.overall_winner,
        player1_wins=tally.player1_wins,
        player2_wins=tally.player2_wins,
        summary=summary,
    )


def test_format_contains_names_and_summary_verbatim():
    records = compare_stats({"homeRuns": 37}, {"homeRuns": 44}, [metric("homeRuns", name="Home Runs")])
    result = build_result(records, summary="Shohei Ohtani leads in 1 out of 1 key hitting categories.")

    text = format_comparison_result(result)

    assert "PLAYER COMPARISON: Aaron Judge vs Shohei Ohtani" in text
    assert "SUMMARY: Shohei Ohtani leads in 1 out of 1 key hitting categories." in text
    assert "Home Runs:\n  Aaron Judge: 37\n  Shohei Ohtani: 44\n  Winner: Shohei Ohtani\n" in text
    assert text.count("=" * 80) == 4


def test_format_marks_ties():
    records = compare_stats({"avg": 0.3}, {"avg": 0.3}, [metric("avg", name="Batting Average")])

    text = format_comparison_result(build_result(records))

    assert "  Winner: TIE" in text
    assert "  Aaron Judge: 0.3\n" in text


def test_format_with_no_records_still_has_summary():
    text = format_comparison_result(build_result([], summary="no data"))

    assert "SUMMARY: no data" in text


@pytest.mark.parametrize(
    "value,expected",
    [(40.0, "40"), (0.25, "0.25"), (1.3, "1.3"), (0.3333333, "0.333"), (0.0, "0")],
)
def test_format_value(value, expected):
    assert format_value(value) == expected
