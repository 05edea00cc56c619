"""Validation of per-run options coming from the CLI or the API."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


MIN_TEAMS = 2


class ConfigurationError(ValueError):
    """Raised when run options are invalid; always raised before any file access."""


def parse_team_count(raw: Union[str, int, None]) -> int:
    if raw is None or isinstance(raw, bool):
        raise ConfigurationError(f"Number of teams must be an integer >= {MIN_TEAMS}")
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ConfigurationError(
            f"Number of teams must be an integer >= {MIN_TEAMS}, got {raw!r}"
        ) from None
    if value < MIN_TEAMS:
        raise ConfigurationError(f"Number of teams must be an integer >= {MIN_TEAMS}, got {value}")
    return value


def parse_seed(raw: Union[str, int, None]) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ConfigurationError(f"Seed must be a valid integer, got {raw!r}")
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise ConfigurationError(f"Seed must be a valid integer, got {raw!r}") from None


@dataclass(frozen=True)
class RunOptions:
    num_teams: int
    seed: Optional[int] = None
    input_path: Optional[Path] = None
    detailed: bool = False

    @classmethod
    def from_raw(
        cls,
        teams: Union[str, int, None],
        seed: Union[str, int, None] = None,
        input_path: Union[str, Path, None] = None,
        detailed: bool = False,
    ) -> "RunOptions":
        return cls(
            num_teams=parse_team_count(teams),
            seed=parse_seed(seed),
            input_path=Path(input_path) if input_path is not None else None,
            detailed=bool(detailed),
        )
