"""Team balance reporting."""

from .balance import (
    BalanceReport,
    TeamBalance,
    analyze_team_balance,
    grade_engagement,
    grade_overall,
    grade_size,
    render_balance_report,
)

__all__ = [
    "BalanceReport",
    "TeamBalance",
    "analyze_team_balance",
    "grade_engagement",
    "grade_overall",
    "grade_size",
    "render_balance_report",
]
