"""Team drafting: seeded ordering, snake assignment and team aggregation."""

from .rng import SeededRandom
from .service import (
    DraftInvariantError,
    TeamSortResult,
    assign_teams,
    draft_starts_forward,
    order_by_engagement,
    sort_players,
    sort_teams,
    summarize_teams,
)

__all__ = [
    "DraftInvariantError",
    "SeededRandom",
    "TeamSortResult",
    "assign_teams",
    "draft_starts_forward",
    "order_by_engagement",
    "sort_players",
    "sort_teams",
    "summarize_teams",
]
