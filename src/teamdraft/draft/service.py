"""Size-constrained snake draft that splits a roster into balanced teams."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import cmp_to_key
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from teamdraft.ingest import load_players_from_csv
from teamdraft.models import Player, TeamSummary

from .rng import SeededRandom


logger = logging.getLogger(__name__)

_LESS_ACTIVE_DAYS_ENV = "TEAMDRAFT_LESS_ACTIVE_DAYS"
_LESS_ACTIVE_DAYS_DEFAULT = 30


class DraftInvariantError(RuntimeError):
    """Raised when a finished draft breaks its own placement guarantees."""


@dataclass
class TeamSortResult:
    mapping: Dict[int, int]
    teams: List[TeamSummary]
    seed: Optional[int]
    start_forward: bool


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("%s=%d is below %d; using default %d", name, value, min_value, default)
        return default
    return value


def _less_active_days() -> int:
    return _env_int(_LESS_ACTIVE_DAYS_ENV, _LESS_ACTIVE_DAYS_DEFAULT, min_value=0)


def draft_starts_forward(seed: Optional[int]) -> bool:
    if seed is None:
        return True
    return seed % 2 == 0


def _less_active_cutoff(now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now()) - timedelta(days=_less_active_days())


def _is_less_active(player: Player, cutoff: datetime) -> bool:
    return player.last_active < cutoff


def order_by_engagement(players: Sequence[Player], rng: SeededRandom) -> List[Player]:
    """Sort players by descending engagement score.

    Every comparison between two equal scores draws once from ``rng`` and uses the
    sign of ``draw - 0.5``; distinct scores never draw.
    """

    def compare(a: Player, b: Player) -> float:
        if a.engagement_score != b.engagement_score:
            return b.engagement_score - a.engagement_score
        return rng.next() - 0.5

    return sorted(players, key=cmp_to_key(compare))


def _snake_index(player_index: int, num_teams: int, start_forward: bool) -> Tuple[int, bool]:
    round_number, position = divmod(player_index, num_teams)
    forward = start_forward if round_number % 2 == 0 else not start_forward
    team_index = position if forward else num_teams - 1 - position
    return team_index, forward


def _choose_override_team(
    team_sizes: Sequence[int],
    max_team_size: int,
    player_index: int,
    *,
    start_forward: bool,
    less_active: bool,
) -> int:
    num_teams = len(team_sizes)
    available = [index for index, size in enumerate(team_sizes) if size < max_team_size]

    if not available:
        return min(range(num_teams), key=lambda index: (team_sizes[index], index))
    if len(available) == 1:
        return available[0]

    if less_active:
        # Largest team with room gets the under-engaged player.
        return min(available, key=lambda index: (-team_sizes[index], index))

    candidate, forward = _snake_index(player_index, num_teams, start_forward)
    if candidate in available:
        return candidate
    scan = range(num_teams) if forward else range(num_teams - 1, -1, -1)
    for index in scan:
        if index in available:
            return index
    return available[0]


def assign_teams(
    players: Sequence[Player],
    num_teams: int,
    *,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[int, int]:
    """Place already-ordered players onto teams ``1..num_teams`` via snake draft.

    Team sizes never exceed ``len(players) // num_teams + 1``. When the snake slot is
    full the override policy picks a team, routing players inactive for longer than
    the less-active window to the largest team that still has room.
    """

    if num_teams < 2:
        raise ValueError(f"num_teams must be >= 2, got {num_teams}")

    total_players = len(players)
    base_team_size = total_players // num_teams
    max_team_size = base_team_size + 1
    start_forward = draft_starts_forward(seed)
    cutoff = _less_active_cutoff(now)

    mapping: Dict[int, int] = {}
    team_sizes = [0] * num_teams
    team_scores = [0] * num_teams
    overrides = 0

    for index, player in enumerate(players):
        team_index, _ = _snake_index(index, num_teams, start_forward)
        if team_sizes[team_index] >= max_team_size:
            overrides += 1
            less_active = _is_less_active(player, cutoff)
            team_index = _choose_override_team(
                team_sizes,
                max_team_size,
                index,
                start_forward=start_forward,
                less_active=less_active,
            )
            logger.debug(
                "Override for player %d (pick %d, less_active=%s) -> team %d",
                player.player_id,
                index,
                less_active,
                team_index + 1,
            )
        mapping[player.player_id] = team_index + 1
        team_sizes[team_index] += 1
        team_scores[team_index] += player.engagement_score

    if len(mapping) != total_players:
        raise DraftInvariantError(
            f"{total_players - len(mapping)} player(s) were not assigned exactly once"
        )
    oversized = [index + 1 for index, size in enumerate(team_sizes) if size > max_team_size]
    if oversized:
        raise DraftInvariantError(f"team(s) {oversized} exceed max size {max_team_size}")

    logger.info(
        "Drafted %d players into %d teams (base=%d, max=%d, start_forward=%s, overrides=%d)",
        total_players,
        num_teams,
        base_team_size,
        max_team_size,
        start_forward,
        overrides,
    )
    logger.debug("Team engagement totals: %s", team_scores)
    return mapping


def summarize_teams(
    players: Sequence[Player],
    mapping: Mapping[int, int],
    num_teams: int,
) -> List[TeamSummary]:
    members: List[List[Player]] = [[] for _ in range(num_teams)]
    for player in players:
        team_id = mapping.get(player.player_id)
        if team_id is None:
            raise DraftInvariantError(f"player {player.player_id} has no team assignment")
        if not 1 <= team_id <= num_teams:
            raise DraftInvariantError(
                f"player {player.player_id} mapped to team {team_id} outside 1..{num_teams}"
            )
        members[team_id - 1].append(player)

    summaries: List[TeamSummary] = []
    for index, team_players in enumerate(members):
        total = sum(player.engagement_score for player in team_players)
        size = len(team_players)
        summaries.append(
            TeamSummary(
                team_id=index + 1,
                size=size,
                total_engagement=total,
                avg_engagement=total / size if size else 0.0,
                players=team_players,
            )
        )
    return summaries


def sort_players(
    players: Sequence[Player],
    num_teams: int,
    seed: Optional[int] = None,
    *,
    now: Optional[datetime] = None,
) -> TeamSortResult:
    rng = SeededRandom(seed)
    ordered = order_by_engagement(players, rng)
    logger.debug("Ordered %d players using %r", len(ordered), rng)
    mapping = assign_teams(ordered, num_teams, seed=seed, now=now)
    teams = summarize_teams(ordered, mapping, num_teams)
    return TeamSortResult(
        mapping=mapping,
        teams=teams,
        seed=seed,
        start_forward=draft_starts_forward(seed),
    )


def sort_teams(
    input_path: Path,
    num_teams: int,
    seed: Optional[int] = None,
    *,
    mapping: Mapping[str, str] | None = None,
    now: Optional[datetime] = None,
) -> TeamSortResult:
    players = load_players_from_csv(Path(input_path), mapping=mapping)
    return sort_players(players, num_teams, seed, now=now)
