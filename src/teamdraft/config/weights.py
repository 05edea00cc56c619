"""Engagement score weights."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterator, Tuple


@dataclass(frozen=True)
class EngagementWeights:
    # Current activity
    current_total_points: float = 4
    days_active_last_30: float = 20
    current_streak_value: float = 10
    # Historical engagement
    historical_points_earned: float = 3
    historical_points_spent: float = 2
    historical_events_participated: float = 10
    historical_event_engagements: float = 5
    historical_messages_sent: float = 2

    def items(self) -> Iterator[Tuple[str, float]]:
        """Yield ``(attribute, weight)`` pairs in declaration order."""

        for field in fields(self):
            yield field.name, getattr(self, field.name)


DEFAULT_WEIGHTS = EngagementWeights()

SCORED_ATTRIBUTES: Tuple[str, ...] = tuple(name for name, _ in DEFAULT_WEIGHTS.items())
