"""
Tests for NBA comparison: derived per-game rates, zero-game guards and
assist/turnover ratio handling.
"""

import pytest

from sports_mcp.comparison import ComparisonService, NBAComparison

TOTALS = {
    "gp": 80.0,
    "pts": 2000.0,
    "reb": 640.0,
    "ast": 560.0,
    "stl": 96.0,
    "blk": 40.0,
    "fgm": 720.0,
    "fga": 1500.0,
    "fg_pct": 0.48,
    "fg3m": 160.0,
    "fg3a": 420.0,
    "fg3_pct": 0.381,
    "ftm": 400.0,
    "fta": 480.0,
    "ft_pct": 0.833,
    "oreb": 80.0,
    "dreb": 560.0,
    "tov": 200.0,
    "pf": 150.0,
}


@pytest.fixture
def strategy():
    return NBAComparison()


def test_metric_table_has_twenty_entries(strategy):
    metrics = strategy.get_metrics()

    assert len(metrics) == 20
    assert [m.key for m in metrics if not m.higher_is_better] == ["tov"]
    assert strategy.get_metrics("anything") == metrics


def test_per_game_values_are_derived(strategy, nba_payload):
    extraction = strategy.extract_stats(nba_payload(**TOTALS))

    assert extraction.values["ppg"] == pytest.approx(25.0)
    assert extraction.values["apg"] == pytest.approx(7.0)
    assert extraction.values["rpg"] == pytest.approx(8.0)
    assert extraction.values["spg"] == pytest.approx(1.2)
    assert extraction.values["bpg"] == pytest.approx(0.5)
    assert extraction.values["ast_to_ratio"] == pytest.approx(2.8)
    assert extraction.defaulted == []
    assert set(extraction.values) == {m.key for m in strategy.get_metrics()}


def test_zero_games_gives_zero_rates(strategy, nba_payload):
    extraction = strategy.extract_stats(nba_payload(gp=0, pts=0, ast=0, reb=0, stl=0, blk=0, tov=0))

    for key in ("ppg", "apg", "rpg", "spg", "bpg"):
        assert extraction.values[key] == 0.0


def test_ratio_without_turnovers_is_assists(strategy, nba_payload):
    extraction = strategy.extract_stats(nba_payload(gp=10, ast=45, tov=0))

    assert extraction.values["ast_to_ratio"] == 45


def test_missing_columns_are_defaulted(strategy, nba_payload):
    payload = nba_payload(**{**TOTALS, "fg3_pct": None})
    del payload["tov"]

    extraction = strategy.extract_stats(payload)

    assert extraction.values["fg3_pct"] == 0.0
    assert extraction.values["tov"] == 0.0
    assert "fg3_pct" in extraction.defaulted
    assert "tov" in extraction.defaulted
    assert "ast_to_ratio" in extraction.defaulted
    assert "ppg" not in extraction.defaulted


def test_player_name(strategy):
    assert strategy.get_player_name({"full_name": "Nikola Jokic"}, 203999) == "Nikola Jokic"
    assert strategy.get_player_name({"player_id": 203999}, 203999) == "Player 203999"


@pytest.mark.asyncio
async def test_compare_players(fake_client, nba_payload):
    better = nba_payload("Star", 1, **TOTALS)
    worse = nba_payload("Bench", 2, **{k: v / 2 for k, v in TOTALS.items()})
    service = ComparisonService(NBAComparison(), fake_client("nba", {1: better, 2: worse}))

    result = await service.compare_players(1, 2)

    by_category = {r.category: r for r in result.comparison}
    assert len(result.comparison) == 20
    # Halving every total halves the percentages but keeps per-game rates and the ratio
    assert by_category["Field Goal %"].player2_value == pytest.approx(0.24)
    assert by_category["Points Per Game"].winner == "tie"
    assert by_category["Turnovers"].winner == "player2"
    assert by_category["Assist/TO Ratio"].winner == "tie"
    assert result.stat_group is None
    assert result.season == "career"
    assert result.summary.startswith("Star leads in ")
    assert " key categories." in result.summary
