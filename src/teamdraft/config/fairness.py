"""Thresholds used to grade team balance."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FairnessThresholds:
    size_excellent: int = 1
    size_good: int = 2
    # Percent deviation of a team's average engagement from the mean; strict upper bounds.
    engagement_excellent: float = 10.0
    engagement_good: float = 20.0


FAIRNESS_THRESHOLDS = FairnessThresholds()
