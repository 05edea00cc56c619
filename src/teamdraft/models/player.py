"""Canonical player and team models shared across ingestion, drafting and reporting."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Player(BaseModel):
    """Scored roster entry produced by the loader; never mutated after load."""

    player_id: int
    engagement_score: int
    last_active_ts: str
    last_active: datetime

    current_total_points: float
    days_active_last_30: float
    current_streak_value: float
    historical_points_earned: float
    historical_points_spent: float
    historical_events_participated: float
    historical_event_engagements: float
    historical_messages_sent: float

    # Display-only fields carried through from the export.
    current_team: Optional[int] = None
    current_team_name: str = ""

    model_config = ConfigDict(frozen=True)


class TeamSummary(BaseModel):
    team_id: int = Field(..., ge=1)
    size: int = Field(..., ge=0)
    total_engagement: int
    avg_engagement: float
    players: List[Player] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
