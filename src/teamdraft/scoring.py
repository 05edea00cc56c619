"""Weighted engagement score computed for every roster row."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from teamdraft.config import DEFAULT_WEIGHTS, EngagementWeights


def round_half_away_from_zero(value: float) -> int:
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def engagement_score(
    values: Mapping[str, float],
    weights: EngagementWeights = DEFAULT_WEIGHTS,
) -> int:
    """Return ``round(sum(value * weight))`` over every weighted attribute.

    Halves round away from zero. ``values`` must carry every attribute named by
    ``weights``; a missing one raises ``KeyError``.
    """

    total = 0.0
    for attribute, weight in weights.items():
        total += float(values[attribute]) * weight
    return round_half_away_from_zero(total)
