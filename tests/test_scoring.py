import pytest

from teamdraft.config import SCORED_ATTRIBUTES, EngagementWeights
from teamdraft.scoring import engagement_score, round_half_away_from_zero


def _values(**overrides: float) -> dict[str, float]:
    values = {name: 0.0 for name in SCORED_ATTRIBUTES}
    values.update(overrides)
    return values


def test_engagement_score_sums_weighted_attributes():
    assert engagement_score(_values(**{name: 1 for name in SCORED_ATTRIBUTES})) == 56

    score = engagement_score(
        _values(
            current_total_points=120,
            days_active_last_30=12,
            current_streak_value=3,
            historical_points_earned=400,
            historical_points_spent=150,
            historical_events_participated=6,
            historical_event_engagements=20,
            historical_messages_sent=35,
        )
    )
    # 480 + 240 + 30 + 1200 + 300 + 60 + 100 + 70
    assert score == 2480


def test_engagement_score_rounds_halves_away_from_zero():
    assert engagement_score(_values(current_total_points=0.125)) == 1
    assert engagement_score(_values(current_total_points=0.375)) == 2
    assert engagement_score(_values(current_total_points=-0.125)) == -1


@pytest.mark.parametrize("value,expected", [(2.5, 3), (3.5, 4), (2.4, 2), (-2.5, -3)])
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


def test_engagement_score_custom_weights():
    weights = EngagementWeights(current_total_points=1, days_active_last_30=0)
    values = _values(current_total_points=10, days_active_last_30=10)
    assert engagement_score(values, weights) == 10


def test_engagement_score_requires_every_attribute():
    values = _values()
    del values["historical_messages_sent"]
    with pytest.raises(KeyError):
        engagement_score(values)
