"""
Tests for the sports-compare command line entry point.
"""

import json

import pytest

from sports_mcp.api.models import BasePlayer
from sports_mcp.cli import build_parser, main


@pytest.fixture
def registry(fake_client, comparison_registry_for, nba_payload):
    nba = fake_client(
        "nba",
        {
            203999: nba_payload("Nikola Jokic", 203999, gp=69, pts=1690, reb=817, ast=678, tov=247),
            2544: nba_payload("LeBron James", 2544, gp=71, pts=1822, reb=518, ast=589, tov=245),
        },
        search_results={
            "jokic": [BasePlayer(id=203999, full_name="Nikola Jokic")],
            "lebron": [BasePlayer(id=2544, full_name="LeBron James")],
        },
    )
    return comparison_registry_for(nba=nba)


def test_parser_options():
    args = build_parser().parse_args(
        ["nfl", "Mahomes", "Allen", "--season", "2023", "--category", "passing", "--json"]
    )

    assert args.league == "nfl"
    assert args.season == "2023"
    assert args.category == "passing"
    assert args.json
    assert args.group is None


def test_text_output_resolves_names(registry, capsys):
    exit_code = main(["nba", "jokic", "lebron"], registry=registry)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "PLAYER COMPARISON: Nikola Jokic vs LeBron James" in out
    assert "SUMMARY: " in out


def test_json_output_with_ids(registry, capsys):
    exit_code = main(["nba", "203999", "2544", "--json"], registry=registry)

    result = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert result["player1"]["name"] == "Nikola Jokic"
    assert result["player2"]["id"] == 2544
    assert len(result["comparison"]) == 20


def test_unknown_player_fails(registry, capsys):
    exit_code = main(["nba", "jokic", "nobody"], registry=registry)

    assert exit_code == 1
    assert "Error: Player 'nobody' not found" in capsys.readouterr().err


def test_unknown_league_fails(registry, capsys):
    exit_code = main(["nhl", "1", "2"], registry=registry)

    assert exit_code == 1
    assert "Unknown league: nhl" in capsys.readouterr().err


def test_position_outside_nfl_fails(registry, capsys):
    exit_code = main(["nba", "1", "2", "--position", "QB"], registry=registry)

    assert exit_code == 1
    assert "only supported for league 'nfl'" in capsys.readouterr().err
