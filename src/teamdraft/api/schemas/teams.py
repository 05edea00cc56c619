from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class AssignmentResponse(BaseModel):
    player_id: int
    team_id: int = Field(..., ge=1)


class TeamMemberResponse(BaseModel):
    player_id: int
    engagement_score: int
    last_active_ts: str
    current_team_name: str = ""


class TeamSummaryResponse(BaseModel):
    team_id: int
    size: int
    total_engagement: int
    avg_engagement: float
    players: List[TeamMemberResponse]


class TeamBalanceResponse(BaseModel):
    team_id: int
    size_deviation: float
    engagement_deviation: float
    deviation_percent: float
    status: str
    top_player_ids: List[int]


class BalanceResponse(BaseModel):
    size_variance: int
    engagement_variance: float
    engagement_variance_percent: float
    engagement_std_dev: float
    max_deviation_percent: float
    size_fairness: str
    engagement_fairness: str
    overall_fairness: str
    teams: List[TeamBalanceResponse]


class TeamSortResponse(BaseModel):
    num_teams: int
    seed: int | None = None
    start_forward: bool
    assignments: List[AssignmentResponse]
    teams: List[TeamSummaryResponse]
    balance: BalanceResponse
    report: str
