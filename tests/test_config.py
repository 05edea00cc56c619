from pathlib import Path

import pytest

from teamdraft.config import (
    DEFAULT_WEIGHTS,
    SCORED_ATTRIBUTES,
    ConfigurationError,
    RunOptions,
    parse_seed,
    parse_team_count,
)
from teamdraft.config_loader import ColumnProfile


def test_default_weights_table():
    weights = dict(DEFAULT_WEIGHTS.items())
    assert weights == {
        "current_total_points": 4,
        "days_active_last_30": 20,
        "current_streak_value": 10,
        "historical_points_earned": 3,
        "historical_points_spent": 2,
        "historical_events_participated": 10,
        "historical_event_engagements": 5,
        "historical_messages_sent": 2,
    }
    assert SCORED_ATTRIBUTES == tuple(weights)


@pytest.mark.parametrize("raw", ["1", "0", "-3", "abc", "2.5", "", None])
def test_parse_team_count_rejects_invalid(raw):
    with pytest.raises(ConfigurationError):
        parse_team_count(raw)


def test_parse_team_count_accepts_strings_and_ints():
    assert parse_team_count(" 4 ") == 4
    assert parse_team_count(2) == 2


def test_parse_seed():
    assert parse_seed(None) is None
    assert parse_seed("") is None
    assert parse_seed("42") == 42
    assert parse_seed(-7) == -7
    with pytest.raises(ConfigurationError):
        parse_seed("forty-two")


def test_run_options_from_raw():
    options = RunOptions.from_raw("3", "43", "data/roster.csv", detailed=True)
    assert options.num_teams == 3
    assert options.seed == 43
    assert options.input_path == Path("data/roster.csv")
    assert options.detailed is True


def test_column_profile_round_trip(tmp_path: Path):
    path = tmp_path / "profile.json"
    ColumnProfile({"player_id": "Member ID"}).save(path)

    loaded = ColumnProfile.load(path)
    assert loaded.column_mapping == {"player_id": "Member ID"}
