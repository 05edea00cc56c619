"""Lightweight REST client for the teamdraft API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> str | None:
    if not raw:
        return None
    try:
        json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc
    return raw


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the teamdraft REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster CSV")
    parser.add_argument("--teams", type=int, default=3, help="Number of teams to create")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible results")
    parser.add_argument("--detailed", action="store_true", help="Request the detailed balance report")
    parser.add_argument("--column-mapping", default="", help="JSON mapping for roster columns")
    parser.add_argument("--json", action="store_true", help="Print the full JSON payload")
    parser.add_argument("--health", action="store_true", help="Check API health and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.health:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.roster is None:
            raise SystemExit("roster file is required unless using --health")

        files = {"roster": (args.roster.name, args.roster.read_bytes(), "text/csv")}
        data = {"teams": str(args.teams), "detailed": str(args.detailed).lower()}
        if args.seed is not None:
            data["seed"] = str(args.seed)
        mapping = build_mapping(args.column_mapping)
        if mapping:
            data["column_mapping"] = mapping

        resp = client.post("/teams", files=files, data=data)
        if resp.status_code == 400:
            raise SystemExit(f"Error: {resp.json().get('detail')}")
        resp.raise_for_status()
        payload = resp.json()

    if args.json:
        print(json.dumps(payload, indent=2))
        return
    print("--- Player Assignments ---\n")
    for item in payload["assignments"]:
        print(f"{item['player_id']} -> {item['team_id']}")
    print(payload["report"])


if __name__ == "__main__":
    main()
