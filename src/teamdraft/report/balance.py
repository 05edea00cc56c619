"""Fairness diagnostics over aggregated team summaries."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from teamdraft.config import FAIRNESS_THRESHOLDS, FairnessThresholds
from teamdraft.models import Player, TeamSummary


TOP_PLAYERS = 3


@dataclass(frozen=True)
class TeamBalance:
    team_id: int
    size: int
    size_deviation: float
    avg_engagement: float
    engagement_deviation: float
    deviation_percent: float
    status: str
    top_players: Tuple[Player, ...]
    score_range: Tuple[int, int] | None


@dataclass(frozen=True)
class BalanceReport:
    teams: Tuple[TeamBalance, ...]
    total_players: int
    avg_team_size: float
    mean_engagement: float
    size_variance: int
    engagement_variance: float
    engagement_variance_percent: float
    engagement_std_dev: float
    max_deviation: float
    max_deviation_percent: float
    size_fairness: str
    engagement_fairness: str
    overall_fairness: str
    score_range: Tuple[int, int] | None = None
    thresholds: FairnessThresholds = field(default=FAIRNESS_THRESHOLDS, repr=False)


def _percent_of(value: float, reference: float) -> float:
    if reference == 0:
        return 0.0
    return value / reference * 100


def _std_dev(values: Sequence[float], mean: float) -> float:
    if not values:
        return 0.0
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def grade_size(size_variance: int, thresholds: FairnessThresholds = FAIRNESS_THRESHOLDS) -> str:
    if size_variance <= thresholds.size_excellent:
        return "EXCELLENT"
    if size_variance <= thresholds.size_good:
        return "GOOD"
    return "POOR"


def grade_engagement(max_deviation_percent: float, thresholds: FairnessThresholds = FAIRNESS_THRESHOLDS) -> str:
    if max_deviation_percent < thresholds.engagement_excellent:
        return "EXCELLENT"
    if max_deviation_percent < thresholds.engagement_good:
        return "GOOD"
    return "POOR"


def grade_overall(
    size_variance: int,
    max_deviation_percent: float,
    thresholds: FairnessThresholds = FAIRNESS_THRESHOLDS,
) -> str:
    if size_variance <= thresholds.size_excellent and max_deviation_percent < thresholds.engagement_excellent:
        return "EXCELLENT"
    if size_variance <= thresholds.size_good and max_deviation_percent < thresholds.engagement_good:
        return "GOOD"
    return "NEEDS IMPROVEMENT"


def _team_status(deviation_percent: float, thresholds: FairnessThresholds) -> str:
    magnitude = abs(deviation_percent)
    if magnitude < thresholds.engagement_excellent:
        return "ok"
    if magnitude < thresholds.engagement_good:
        return "warn"
    return "off"


def analyze_team_balance(
    teams: Sequence[TeamSummary],
    thresholds: FairnessThresholds = FAIRNESS_THRESHOLDS,
) -> BalanceReport:
    """Compute size and engagement balance metrics without touching ``teams``."""

    if not teams:
        raise ValueError("at least one team summary is required")

    sizes = [team.size for team in teams]
    averages = [team.avg_engagement for team in teams]
    total_players = sum(sizes)
    avg_team_size = total_players / len(teams)
    mean_engagement = sum(averages) / len(averages)

    size_variance = max(sizes) - min(sizes)
    engagement_variance = max(averages) - min(averages)

    balances: List[TeamBalance] = []
    for team in teams:
        deviation = team.avg_engagement - mean_engagement
        deviation_percent = _percent_of(deviation, mean_engagement)
        top = sorted(team.players, key=lambda player: -player.engagement_score)[:TOP_PLAYERS]
        scores = [player.engagement_score for player in team.players]
        balances.append(
            TeamBalance(
                team_id=team.team_id,
                size=team.size,
                size_deviation=team.size - avg_team_size,
                avg_engagement=team.avg_engagement,
                engagement_deviation=deviation,
                deviation_percent=deviation_percent,
                status=_team_status(deviation_percent, thresholds),
                top_players=tuple(top),
                score_range=(min(scores), max(scores)) if scores else None,
            )
        )

    max_deviation = max(abs(balance.engagement_deviation) for balance in balances)
    max_deviation_percent = max(abs(balance.deviation_percent) for balance in balances)
    all_scores = [player.engagement_score for team in teams for player in team.players]

    return BalanceReport(
        teams=tuple(balances),
        total_players=total_players,
        avg_team_size=avg_team_size,
        mean_engagement=mean_engagement,
        size_variance=size_variance,
        engagement_variance=engagement_variance,
        engagement_variance_percent=_percent_of(engagement_variance, mean_engagement),
        engagement_std_dev=_std_dev(averages, mean_engagement),
        max_deviation=max_deviation,
        max_deviation_percent=max_deviation_percent,
        size_fairness=grade_size(size_variance, thresholds),
        engagement_fairness=grade_engagement(max_deviation_percent, thresholds),
        overall_fairness=grade_overall(size_variance, max_deviation_percent, thresholds),
        score_range=(min(all_scores), max(all_scores)) if all_scores else None,
        thresholds=thresholds,
    )


def _signed(value: float, digits: int = 1) -> str:
    return f"{value:+.{digits}f}"


def render_balance_report(report: BalanceReport, *, detailed: bool = False) -> str:
    thresholds = report.thresholds
    lines: List[str] = ["", "=== TEAM BALANCE ANALYSIS ===", ""]

    lines.append("TEAM SIZE DISTRIBUTION:")
    for team in report.teams:
        marker = "ok" if abs(team.size_deviation) <= thresholds.size_excellent else "off"
        lines.append(
            f"  Team {team.team_id}: {team.size} players ({_signed(team.size_deviation)}) [{marker}]"
        )
    size_marker = "ok" if report.size_variance <= thresholds.size_excellent else "off"
    lines.append(
        f"  Size variance: {report.size_variance} (max {thresholds.size_excellent} allowed) [{size_marker}]"
    )
    lines.append("")

    lines.append("ENGAGEMENT DISTRIBUTION:")
    for team in report.teams:
        lines.append(
            f"  Team {team.team_id}: {team.avg_engagement:.0f} "
            f"({_signed(team.deviation_percent)}%) [{team.status}]"
        )
    lines.append(
        f"  Engagement variance: {report.engagement_variance:.0f} "
        f"({report.engagement_variance_percent:.1f}% of average)"
    )
    lines.append(f"  Standard deviation: {report.engagement_std_dev:.0f}")
    lines.append("")

    lines.append("TOP PLAYERS PER TEAM:")
    for team in report.teams:
        lines.append(f"  Team {team.team_id}:")
        for rank, player in enumerate(team.top_players, start=1):
            lines.append(f"    {rank}. Player {player.player_id}: {player.engagement_score:,} points")

    lines.append("")
    lines.append("FAIRNESS ASSESSMENT:")
    lines.append(f"  Team size balance: {report.size_fairness} (variance: {report.size_variance})")
    lines.append(
        f"  Engagement balance: {report.engagement_fairness} "
        f"(max deviation: {report.max_deviation:.0f}, {report.max_deviation_percent:.1f}%)"
    )
    lines.append(f"  Overall fairness: {report.overall_fairness}")

    if detailed:
        lines.append("")
        lines.append("DETAILED ANALYSIS:")
        if report.score_range is not None:
            low, high = report.score_range
            lines.append(f"  Engagement score range: {low:,} - {high:,} (span: {high - low:,})")
        for team in report.teams:
            if team.score_range is None:
                lines.append(f"  Team {team.team_id} score range: no players")
                continue
            low, high = team.score_range
            lines.append(f"  Team {team.team_id} score range: {low:,} - {high:,} (span: {high - low:,})")

    lines.append("")
    lines.append("=== END ANALYSIS ===")
    return "\n".join(lines)
