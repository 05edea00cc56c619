"""Configuration helpers for scoring weights, fairness grading and run options."""

from .fairness import FAIRNESS_THRESHOLDS, FairnessThresholds
from .run import ConfigurationError, RunOptions, parse_seed, parse_team_count
from .weights import DEFAULT_WEIGHTS, SCORED_ATTRIBUTES, EngagementWeights

__all__ = [
    "ConfigurationError",
    "DEFAULT_WEIGHTS",
    "EngagementWeights",
    "FAIRNESS_THRESHOLDS",
    "FairnessThresholds",
    "RunOptions",
    "SCORED_ATTRIBUTES",
    "parse_seed",
    "parse_team_count",
]
