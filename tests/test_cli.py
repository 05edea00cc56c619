import csv
import json
from pathlib import Path

import pytest

from teamdraft.cli import main
from teamdraft.ingest import COLUMN_ORDER


def _write_roster(path: Path, count: int = 10) -> Path:
    lines = [",".join(COLUMN_ORDER)]
    for player_id in range(1, count + 1):
        lines.append(f"{player_id},{player_id % 3},5,2,1,10,4,1,2025-08-13 0:00:00,1,Blue,{100 + player_id}")
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.mark.parametrize("teams", ["1", "zero", "-2"])
def test_invalid_team_count_exits_before_reading(tmp_path: Path, capsys, teams):
    code = main(["--teams", teams, "--input", str(tmp_path / "missing.csv")])

    captured = capsys.readouterr()
    assert code == 1
    assert "Error: Number of teams must be an integer >= 2" in captured.err
    assert "not found" not in captured.err


def test_invalid_seed(tmp_path: Path, capsys):
    code = main(["--teams", "3", "--seed", "abc", "--input", str(tmp_path / "missing.csv")])

    assert code == 1
    assert "Seed must be a valid integer" in capsys.readouterr().err


def test_missing_file(tmp_path: Path, capsys):
    code = main(["--teams", "3", "--input", str(tmp_path / "missing.csv")])

    assert code == 1
    assert "roster file not found" in capsys.readouterr().err


def test_parse_failure(tmp_path: Path, capsys):
    roster = tmp_path / "roster.csv"
    roster.write_text(",".join(COLUMN_ORDER) + "\n1,1,1,1,1,1,1,1,2025-08-13,,,abc\n")

    code = main(["--teams", "2", "--input", str(roster)])

    assert code == 1
    assert "player_id 'abc' is not an integer" in capsys.readouterr().err


def test_unknown_column_mapping_field(tmp_path: Path, capsys):
    code = main(["--teams", "2", "--input", str(tmp_path / "r.csv"), "--column", "nickname=Nick"])

    assert code == 1
    assert "Unknown roster field(s) in column mapping: nickname" in capsys.readouterr().err


def test_successful_run_prints_mapping_and_report(tmp_path: Path, capsys):
    roster = _write_roster(tmp_path / "roster.csv")

    code = main(["--teams", "3", "--seed", "42", "--input", str(roster), "--detailed"])

    out = capsys.readouterr().out
    assert code == 0
    assert "--- Player Assignments ---" in out
    assert out.count(" -> ") == 10
    assert "Overall fairness:" in out
    assert "DETAILED ANALYSIS:" in out


def test_seeded_runs_print_identical_output(tmp_path: Path, capsys):
    roster = _write_roster(tmp_path / "roster.csv", count=12)

    main(["--teams", "4", "--seed", "7", "--input", str(roster)])
    first = capsys.readouterr().out
    main(["--teams", "4", "--seed", "7", "--input", str(roster)])
    second = capsys.readouterr().out

    assert first == second


def test_output_csv_and_profiles(tmp_path: Path, capsys):
    header = ",".join(COLUMN_ORDER).replace("player_id", "Member")
    roster = tmp_path / "roster.csv"
    roster.write_text(header + "\n3,1,1,1,1,1,1,1,2025-08-13,,,7\n1,1,1,1,1,1,1,1,2025-08-13,,,8\n")
    output = tmp_path / "teams.csv"
    profile = tmp_path / "profile.json"

    code = main(
        [
            "--teams",
            "2",
            "--input",
            str(roster),
            "--column",
            "player_id=Member",
            "--save-profile",
            str(profile),
            "--output",
            str(output),
        ]
    )

    assert code == 0
    assert json.loads(profile.read_text())["column_mapping"] == {"player_id": "Member"}
    with output.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows == [
        {"player_id": "7", "team_id": "1", "engagement_score": "76"},
        {"player_id": "8", "team_id": "2", "engagement_score": "56"},
    ]

    capsys.readouterr()
    assert main(["--teams", "2", "--input", str(roster), "--load-profile", str(profile)]) == 0
    assert "7 -> 1" in capsys.readouterr().out


def test_unwritable_output_path_is_an_error(tmp_path: Path, capsys):
    roster = _write_roster(tmp_path / "roster.csv")
    output = tmp_path / "no" / "teams.csv"

    code = main(["--teams", "2", "--input", str(roster), "--output", str(output)])

    captured = capsys.readouterr()
    assert code == 1
    assert "Error:" in captured.err
    assert "Wrote team mapping" not in captured.out
    assert not output.exists()


def test_profile_not_saved_when_roster_fails_to_load(tmp_path: Path, capsys):
    profile = tmp_path / "profile.json"

    code = main(
        [
            "--teams",
            "2",
            "--input",
            str(tmp_path / "missing.csv"),
            "--column",
            "player_id=Member",
            "--save-profile",
            str(profile),
        ]
    )

    assert code == 1
    assert "roster file not found" in capsys.readouterr().err
    assert not profile.exists()
