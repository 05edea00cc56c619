"""REST API for the team drafter."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from teamdraft.api.schemas import (
    AssignmentResponse,
    BalanceResponse,
    TeamBalanceResponse,
    TeamMemberResponse,
    TeamSortResponse,
    TeamSummaryResponse,
)
from teamdraft.config import ConfigurationError, RunOptions
from teamdraft.draft import TeamSortResult, sort_players
from teamdraft.ingest import RosterLoadError, load_players_from_csv, unknown_mapping_keys
from teamdraft.report import BalanceReport, analyze_team_balance, render_balance_report


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        mapping = json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(mapping, dict):
        raise HTTPException(status_code=400, detail="Column mapping must be a JSON object")
    unknown = unknown_mapping_keys(mapping)
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown roster field(s) in column mapping: {', '.join(unknown)}",
        )
    return {str(key): str(value) for key, value in mapping.items()}


async def _write_temp(upload: UploadFile | None) -> Path | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    try:
        tmp.write(contents)
        tmp.flush()
    finally:
        tmp.close()
    return Path(tmp.name)


def _result_to_response(
    result: TeamSortResult,
    report: BalanceReport,
    *,
    num_teams: int,
    detailed: bool,
) -> TeamSortResponse:
    return TeamSortResponse(
        num_teams=num_teams,
        seed=result.seed,
        start_forward=result.start_forward,
        assignments=[
            AssignmentResponse(player_id=player_id, team_id=team_id)
            for player_id, team_id in result.mapping.items()
        ],
        teams=[
            TeamSummaryResponse(
                team_id=team.team_id,
                size=team.size,
                total_engagement=team.total_engagement,
                avg_engagement=team.avg_engagement,
                players=[
                    TeamMemberResponse(
                        player_id=player.player_id,
                        engagement_score=player.engagement_score,
                        last_active_ts=player.last_active_ts,
                        current_team_name=player.current_team_name,
                    )
                    for player in team.players
                ],
            )
            for team in result.teams
        ],
        balance=BalanceResponse(
            size_variance=report.size_variance,
            engagement_variance=report.engagement_variance,
            engagement_variance_percent=report.engagement_variance_percent,
            engagement_std_dev=report.engagement_std_dev,
            max_deviation_percent=report.max_deviation_percent,
            size_fairness=report.size_fairness,
            engagement_fairness=report.engagement_fairness,
            overall_fairness=report.overall_fairness,
            teams=[
                TeamBalanceResponse(
                    team_id=balance.team_id,
                    size_deviation=balance.size_deviation,
                    engagement_deviation=balance.engagement_deviation,
                    deviation_percent=balance.deviation_percent,
                    status=balance.status,
                    top_player_ids=[player.player_id for player in balance.top_players],
                )
                for balance in report.teams
            ],
        ),
        report=render_balance_report(report, detailed=detailed),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="teamdraft")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/teams", response_model=TeamSortResponse)
    async def build_teams(
        roster: UploadFile = File(...),
        teams: str = Form(...),
        seed: str | None = Form(None),
        detailed: bool = Form(False),
        column_mapping: str | None = Form(None),
    ) -> TeamSortResponse:
        try:
            options = RunOptions.from_raw(teams, seed, detailed=detailed)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        mapping = _parse_mapping(column_mapping)

        roster_path = await _write_temp(roster)
        if roster_path is None:
            raise HTTPException(status_code=400, detail="roster file is empty")
        try:
            players = load_players_from_csv(roster_path, mapping=mapping or None)
        except RosterLoadError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        finally:
            roster_path.unlink(missing_ok=True)

        result = sort_players(players, options.num_teams, options.seed)
        report = analyze_team_balance(result.teams)
        return _result_to_response(
            result,
            report,
            num_teams=options.num_teams,
            detailed=options.detailed,
        )

    return app
