"""Pydantic models for API I/O."""

from .teams import (
    AssignmentResponse,
    BalanceResponse,
    TeamBalanceResponse,
    TeamMemberResponse,
    TeamSortResponse,
    TeamSummaryResponse,
)

__all__ = [
    "AssignmentResponse",
    "BalanceResponse",
    "TeamBalanceResponse",
    "TeamMemberResponse",
    "TeamSortResponse",
    "TeamSummaryResponse",
]
