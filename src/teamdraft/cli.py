"""Command-line interface for splitting a roster into balanced teams."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from teamdraft.config import ConfigurationError, RunOptions
from teamdraft.config_loader import ColumnProfile
from teamdraft.draft import DraftInvariantError, TeamSortResult, sort_teams
from teamdraft.ingest import RosterLoadError, unknown_mapping_keys
from teamdraft.report import analyze_team_balance, render_balance_report


DEFAULT_INPUT = Path("data/players.csv")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sort players into engagement-balanced teams")
    parser.add_argument("-t", "--teams", required=True, help="Number of teams to create (>= 2)")
    parser.add_argument("-s", "--seed", default=None, help="Random seed for reproducible results")
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=DEFAULT_INPUT,
        help=f"Path to roster CSV (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "-d",
        "--detailed",
        action="store_true",
        help="Include per-team score ranges in the balance report",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., player_id=Member ID)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path to write the player/team mapping as CSV",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log draft decisions to stderr")
    return parser


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ConfigurationError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_mapping(args: argparse.Namespace) -> dict[str, str]:
    mapping = _parse_mapping(args.column)
    if args.load_profile:
        try:
            profile = ColumnProfile.load(args.load_profile)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Unable to load profile {args.load_profile}: {exc}") from exc
        mapping = profile.column_mapping | mapping
    unknown = unknown_mapping_keys(mapping)
    if unknown:
        raise ConfigurationError(f"Unknown roster field(s) in column mapping: {', '.join(unknown)}")
    return mapping


def _write_mapping_csv(path: Path, result: TeamSortResult) -> None:
    scores = {player.player_id: player.engagement_score for team in result.teams for player in team.players}
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["player_id", "team_id", "engagement_score"])
        for player_id, team_id in result.mapping.items():
            writer.writerow([player_id, team_id, scores[player_id]])


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        options = RunOptions.from_raw(args.teams, args.seed, args.input, args.detailed)
        mapping = _resolve_mapping(args)
        result = sort_teams(options.input_path, options.num_teams, options.seed, mapping=mapping or None)
        # Side files are written only once the roster has loaded and drafted.
        if args.save_profile:
            ColumnProfile(mapping).save(args.save_profile)
        if args.output:
            _write_mapping_csv(args.output, result)
    except (ConfigurationError, RosterLoadError, DraftInvariantError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("--- Player Assignments ---\n")
    for player_id, team_id in result.mapping.items():
        print(f"{player_id} -> {team_id}")

    report = analyze_team_balance(result.teams)
    print(render_balance_report(report, detailed=options.detailed))

    if args.save_profile:
        print(f"Saved column profile to {args.save_profile}")
    if args.output:
        print(f"Wrote team mapping to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
