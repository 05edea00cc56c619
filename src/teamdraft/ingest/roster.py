"""Helpers to load roster CSVs and emit scored player records."""

from __future__ import annotations

import csv
import logging
import math
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from teamdraft.config import DEFAULT_WEIGHTS, SCORED_ATTRIBUTES, EngagementWeights
from teamdraft.models import Player
from teamdraft.scoring import engagement_score


logger = logging.getLogger(__name__)


class RosterLoadError(ValueError):
    """Raised when a roster file cannot be read or a row cannot be parsed."""


class TimestampParseError(RosterLoadError):
    """Raised when a last-active timestamp cannot be interpreted."""


# Column layout of the legacy engagement export, used when the header carries
# none of the mapped names.
COLUMN_ORDER: tuple[str, ...] = (
    "historical_events_participated",
    "historical_event_engagements",
    "historical_points_earned",
    "historical_points_spent",
    "historical_messages_sent",
    "current_total_points",
    "days_active_last_30",
    "current_streak_value",
    "last_active_ts",
    "current_team",
    "current_team_name",
    "player_id",
)

DEFAULT_COLUMN_MAPPING: Dict[str, str] = {name: name for name in COLUMN_ORDER}

_REQUIRED_FIELDS = ("player_id", "last_active_ts", *SCORED_ATTRIBUTES)

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})(?:[T\s]+(.*))?")
_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?")


class RosterRow(BaseModel):
    line_number: int
    raw_player_id: str
    raw_last_active: str
    raw_attributes: Dict[str, str]
    raw_current_team: Optional[str] = None
    raw_current_team_name: str = ""

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Optional[str]],
        mapping: Mapping[str, str],
        *,
        line_number: int = 0,
    ) -> "RosterRow":
        def extract(key: str) -> Optional[str]:
            column = mapping.get(key, DEFAULT_COLUMN_MAPPING[key])
            value = row.get(column)
            return value.strip() if value is not None else None

        missing = [key for key in _REQUIRED_FIELDS if extract(key) is None]
        if missing:
            raise RosterLoadError(
                f"line {line_number}: missing column(s) {', '.join(missing)}"
            )

        return cls(
            line_number=line_number,
            raw_player_id=extract("player_id") or "",
            raw_last_active=extract("last_active_ts") or "",
            raw_attributes={name: extract(name) or "" for name in SCORED_ATTRIBUTES},
            raw_current_team=extract("current_team"),
            raw_current_team_name=extract("current_team_name") or "",
        )


def parse_last_active(text: str) -> datetime:
    """Parse loosely formatted timestamps such as ``2025-08-13 0:00:00``.

    Month, day and each time component are zero-padded, and whatever whitespace
    separates date from time becomes a single ``T`` before ISO parsing. Aware
    values are converted to local time and returned naive so they compare
    against the local clock.
    """

    value = text.strip()
    if not value:
        raise TimestampParseError("last active timestamp is empty")

    def pad(match: re.Match[str]) -> str:
        hours, minutes, seconds = match.group(1), match.group(2), match.group(3) or "0"
        return f"{int(hours):02d}:{int(minutes):02d}:{int(seconds):02d}"

    date_match = _DATE_PATTERN.fullmatch(value)
    if date_match:
        year, month, day, rest = date_match.groups()
        normalized = f"{year}-{int(month):02d}-{int(day):02d}"
        if rest:
            normalized += "T" + _TIME_PATTERN.sub(pad, rest.strip(), count=1)
    else:
        normalized = value
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        raise TimestampParseError(f"last active timestamp '{text}' is not a valid date-time") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _parse_number(raw: str, column: str) -> float:
    text = raw.strip()
    if not text:
        raise ValueError(f"{column} is empty")
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"{column} '{raw}' is not numeric") from None
    if not math.isfinite(value):
        raise ValueError(f"{column} '{raw}' is not finite")
    return value


def _parse_int(raw: str, column: str) -> int:
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"{column} '{raw}' is not an integer") from None


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    path = Path(path)
    if not path.is_file():
        raise RosterLoadError(f"roster file not found: {path}")
    column_mapping = {**DEFAULT_COLUMN_MAPPING, **(mapping or {})}

    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            lines = [line for line in csv.reader(f) if any(cell.strip() for cell in line)]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise RosterLoadError(f"unable to read roster file {path}: {exc}") from exc

    if not lines:
        raise RosterLoadError(f"roster file {path} is empty")

    header = [cell.strip() for cell in lines[0]]
    body = lines[1:]
    if any(column_mapping[key] in header for key in ("player_id", "last_active_ts")):
        columns = header
    else:
        logger.info(
            "Header of %s does not name the mapped columns; reading %d rows positionally",
            path,
            len(body),
        )
        columns = [column_mapping[key] for key in COLUMN_ORDER]

    rows: List[RosterRow] = []
    for offset, cells in enumerate(body, start=2):
        if columns is not header and len(cells) < len(columns):
            raise RosterLoadError(
                f"line {offset}: expected {len(columns)} columns, found {len(cells)}"
            )
        record = dict(zip(columns, cells))
        rows.append(RosterRow.from_mapping(record, column_mapping, line_number=offset))
    logger.debug("Loaded %d roster rows from %s", len(rows), path)
    return rows


def rows_to_players(
    rows: Iterable[RosterRow],
    *,
    weights: EngagementWeights = DEFAULT_WEIGHTS,
) -> List[Player]:
    players: List[Player] = []
    seen: Dict[int, int] = {}
    for row in rows:
        try:
            player_id = _parse_int(row.raw_player_id, "player_id")
            attributes = {
                name: _parse_number(raw, name) for name, raw in row.raw_attributes.items()
            }
            current_team = (
                _parse_int(row.raw_current_team, "current_team")
                if row.raw_current_team
                else None
            )
            last_active = parse_last_active(row.raw_last_active)
        except TimestampParseError as exc:
            raise TimestampParseError(f"line {row.line_number}: {exc}") from exc
        except ValueError as exc:
            raise RosterLoadError(f"line {row.line_number}: {exc}") from exc

        if player_id in seen:
            raise RosterLoadError(
                f"line {row.line_number}: duplicate player_id {player_id} "
                f"(first seen on line {seen[player_id]})"
            )
        seen[player_id] = row.line_number

        players.append(
            Player(
                player_id=player_id,
                engagement_score=engagement_score(attributes, weights),
                last_active_ts=row.raw_last_active,
                last_active=last_active,
                current_team=current_team,
                current_team_name=row.raw_current_team_name,
                **attributes,
            )
        )
    return players


def load_players_from_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
    weights: EngagementWeights = DEFAULT_WEIGHTS,
) -> List[Player]:
    rows = load_roster_csv(path, mapping=mapping)
    return rows_to_players(rows, weights=weights)


def unknown_mapping_keys(mapping: Mapping[str, str]) -> Sequence[str]:
    """Return mapping keys that do not name a roster field."""

    return sorted(key for key in mapping if key not in DEFAULT_COLUMN_MAPPING)
