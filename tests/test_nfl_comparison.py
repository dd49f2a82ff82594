"""
Tests for NFL comparison: position/category selectors, ESPN category lookup
order, the passing-sacks rule and the compare flow.
"""

import pytest

from sports_mcp.api.errors import InvalidParameterError
from sports_mcp.comparison import ComparisonService, NFLComparison, NFLSelector


@pytest.fixture
def strategy():
    return NFLComparison()


# ============================================================================
# SELECTORS
# ============================================================================


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, NFLSelector()),
        ("", NFLSelector()),
        ("QB", NFLSelector(position="QB")),
        ("wr", NFLSelector(position="wr")),
        ("passing", NFLSelector(category="passing")),
        ("DEFENSE", NFLSelector(category="DEFENSE")),
        ("K", NFLSelector(position="K")),
    ],
)
def test_parse_single_string(raw, expected):
    assert NFLSelector.parse(raw) == expected


def test_parse_passes_selector_through():
    selector = NFLSelector(category="rushing")

    assert NFLSelector.parse(selector) is selector


def test_position_and_category_together_is_invalid():
    with pytest.raises(InvalidParameterError):
        NFLSelector.from_params(position="QB", category="passing")


def test_stat_group_with_explicit_selector_is_invalid():
    with pytest.raises(InvalidParameterError):
        NFLSelector.from_params("QB", category="passing")


def test_from_params_explicit_and_legacy():
    assert NFLSelector.from_params(position="RB") == NFLSelector(position="RB")
    assert NFLSelector.from_params(category="scoring") == NFLSelector(category="scoring")
    assert NFLSelector.from_params("receiving") == NFLSelector(category="receiving")


def test_label():
    assert NFLSelector().label == "QB"
    assert NFLSelector(category="passing").label == "passing"
    assert NFLSelector(position="TE").label == "TE"


# ============================================================================
# METRICS
# ============================================================================


def test_default_metrics_are_quarterback(strategy):
    keys = [m.key for m in strategy.get_metrics()]

    assert keys[:3] == ["gamesPlayed", "passingYards", "passingTouchdowns"]
    assert len(keys) == 10


def test_defensive_positions_share_a_table(strategy):
    tables = [strategy.get_metrics(pos) for pos in ("DE", "DT", "LB", "CB", "S", "DB")]

    assert all(t == tables[0] for t in tables)
    interceptions = next(m for m in tables[0] if m.key == "interceptions")
    assert interceptions.higher_is_better


def test_unknown_position_uses_fallback_table(strategy):
    assert [m.key for m in strategy.get_metrics("K")] == ["gamesPlayed", "touchdowns", "yardsGained"]


def test_category_wins_over_position(strategy):
    keys = [m.key for m in strategy.get_metrics("passing")]

    assert "netPassingYards" in keys
    assert keys[-1] == "sacks"


def test_unknown_explicit_category_has_no_metrics(strategy):
    assert strategy.get_metrics(NFLSelector(category="kicking")) == []


# ============================================================================
# EXTRACTION
# ============================================================================


def test_passing_sacks_come_from_passing_category(strategy, nfl_payload):
    payload = nfl_payload(
        defensive={"sacks": 2.5},
        passing={"completions": 401, "sacks": 27, "QBRating": 105.2},
    )

    extraction = strategy.extract_stats(payload, "passing")

    assert extraction.values["sacks"] == 27
    assert extraction.values["completions"] == 401


def test_passing_sacks_do_not_fall_back_to_defense(strategy, nfl_payload):
    payload = nfl_payload(defensive={"sacks": 2.5}, passing={"completions": 300})

    extraction = strategy.extract_stats(payload, "passing")

    assert extraction.values["sacks"] == 0
    assert "sacks" in extraction.defaulted


@pytest.mark.parametrize("selector", ["DEFENSE", "defense", " defensive "])
def test_defense_category_reads_espn_defensive_stats(strategy, nfl_payload, selector):
    payload = nfl_payload(
        general={"gamesPlayed": 17, "fumblesForced": 4},
        passing={"sacks": 0, "sackYards": 0},
        defensive={"sacks": 12.5, "sackYards": 80, "tacklesForLoss": 19, "passesDefended": 3},
    )

    extraction = strategy.extract_stats(payload, selector)

    assert extraction.values["sacks"] == 12.5
    assert extraction.values["sackYards"] == 80
    assert extraction.values["tacklesForLoss"] == 19
    assert extraction.values["fumblesForced"] == 4


def test_defense_and_defensive_selectors_agree(strategy, nfl_payload):
    payload = nfl_payload(
        passing={"sacks": 0, "sackYards": 0},
        defensive={"sacks": 12.5, "sackYards": 80},
    )

    defense = strategy.extract_stats(payload, NFLSelector(category="DEFENSE"))
    defensive = strategy.extract_stats(payload, NFLSelector(category="defensive"))

    assert defense.values == defensive.values
    assert defense.defaulted == defensive.defaulted


def test_category_selector_prefers_matching_category(strategy, nfl_payload):
    payload = nfl_payload(
        general={"fumbles": 4},
        rushing={"rushingFumbles": 1, "teamGamesPlayed": 17},
        receiving={"teamGamesPlayed": 16, "receivingFumbles": 0},
    )

    extraction = strategy.extract_stats(payload, "receiving")

    assert extraction.values["teamGamesPlayed"] == 16


def test_position_selector_uses_first_category_with_the_stat(strategy, nfl_payload):
    payload = nfl_payload(
        general={"gamesPlayed": 17},
        passing={"passingYards": 4183, "interceptions": 11},
        rushing={"rushingYards": 389},
        defensiveInterceptions={"interceptions": 0},
    )

    extraction = strategy.extract_stats(payload, "QB")

    assert extraction.values["gamesPlayed"] == 17
    assert extraction.values["passingYards"] == 4183
    assert extraction.values["interceptions"] == 11
    assert extraction.values["rushingYards"] == 389
    assert "QBRating" in extraction.defaulted


def test_empty_payload_defaults_everything(strategy):
    extraction = strategy.extract_stats({"playerId": "1"}, "RB")

    assert len(extraction.values) == 9
    assert set(extraction.values.values()) == {0.0}
    assert len(extraction.defaulted) == 9


def test_player_name_and_season(strategy):
    payload = {"playerId": "3139477", "playerName": "Patrick Mahomes", "season": {"year": 2023}}

    assert strategy.get_player_name(payload, "3139477") == "Patrick Mahomes"
    assert strategy.get_player_name({"playerId": "42"}, "42") == "Player 42"
    assert strategy.get_season(payload) == 2023


# ============================================================================
# COMPARE FLOW
# ============================================================================


@pytest.mark.asyncio
async def test_compare_quarterbacks_by_category(fake_client, nfl_payload):
    mahomes = nfl_payload(
        "Patrick Mahomes",
        "3139477",
        passing={
            "teamGamesPlayed": 17,
            "completions": 401,
            "passingAttempts": 597,
            "completionPct": 67.2,
            "netPassingYards": 4183,
            "yardsPerPassAttempt": 7.0,
            "passingTouchdowns": 27,
            "interceptions": 14,
            "QBRating": 92.6,
            "sacks": 27,
        },
    )
    flacco = nfl_payload(
        "Joe Flacco",
        "11252",
        passing={
            "teamGamesPlayed": 5,
            "completions": 134,
            "passingAttempts": 223,
            "completionPct": 60.1,
            "netPassingYards": 1616,
            "yardsPerPassAttempt": 7.6,
            "passingTouchdowns": 13,
            "interceptions": 8,
            "QBRating": 89.3,
            "sacks": 9,
        },
    )
    client = fake_client("nfl", {"3139477": mahomes, "11252": flacco})
    service = ComparisonService(NFLComparison(), client)

    result = await service.compare_players("3139477", "11252", season=2023, stat_group="passing")

    by_category = {r.category: r for r in result.comparison}
    assert len(result.comparison) == 10
    assert by_category["Sacks Taken"].winner == "player2"
    assert by_category["Interceptions"].winner == "player2"
    assert by_category["Yards/Attempt"].winner == "player2"
    assert result.player1_wins == 7
    assert result.player2_wins == 3
    assert result.overall_winner == "player1"
    assert result.summary == "Patrick Mahomes leads in 7 out of 10 key passing categories."
    assert result.stat_group == "passing"
    assert result.season == 2023


@pytest.mark.asyncio
async def test_compare_with_explicit_position_selector(fake_client, nfl_payload):
    p1 = nfl_payload("A", "1", general={"gamesPlayed": 17}, rushing={"rushingYards": 1200})
    p2 = nfl_payload("B", "2", general={"gamesPlayed": 17}, rushing={"rushingYards": 900})
    service = ComparisonService(NFLComparison(), fake_client("nfl", {"1": p1, "2": p2}))

    result = await service.compare_players("1", "2", stat_group=NFLSelector(position="RB"))

    assert result.stat_group == "RB"
    assert result.overall_winner == "player1"
    assert result.summary == "A leads in 1 out of 1 key RB categories."
    assert "rushingTDs" in result.coverage.player1_defaulted
