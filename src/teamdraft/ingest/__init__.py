"""Input adapters that turn roster exports into scored players."""

from .roster import (
    COLUMN_ORDER,
    DEFAULT_COLUMN_MAPPING,
    RosterLoadError,
    RosterRow,
    TimestampParseError,
    load_players_from_csv,
    load_roster_csv,
    parse_last_active,
    rows_to_players,
    unknown_mapping_keys,
)

__all__ = [
    "COLUMN_ORDER",
    "DEFAULT_COLUMN_MAPPING",
    "RosterLoadError",
    "RosterRow",
    "TimestampParseError",
    "load_players_from_csv",
    "load_roster_csv",
    "parse_last_active",
    "rows_to_players",
    "unknown_mapping_keys",
]
