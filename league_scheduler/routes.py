from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from .database import ScheduleRun, get_session, list_runs, load_schedule, save_schedule
from .report import compute_stats, format_schedule, schedule_payload, stats_payload
from .schedule import Schedule, ScheduleParams, UnsupportedParameters, generate_schedule

router = APIRouter()

logger = logging.getLogger(__name__)


def _query_params(
    num_divisions: int = Query(..., ge=1),
    num_teams_per_division: int = Query(..., ge=1),
    num_games_vs_division: int = Query(1, ge=0),
    num_games_vs_non_division: int = Query(0, ge=0),
    seed: int = Query(-1),
) -> ScheduleParams:
    return ScheduleParams(
        num_divisions=num_divisions,
        num_teams_per_division=num_teams_per_division,
        num_games_vs_division=num_games_vs_division,
        num_games_vs_non_division=num_games_vs_non_division,
        seed=seed,
    )


def _generate(params: ScheduleParams) -> Schedule:
    try:
        return generate_schedule(params)
    except UnsupportedParameters as exc:
        logger.warning("Rejected schedule request %s: %s", params, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _run_payload(run: ScheduleRun) -> dict[str, object]:
    return {
        "id": run.id,
        "num_divisions": run.num_divisions,
        "num_teams_per_division": run.num_teams_per_division,
        "num_games_vs_division": run.num_games_vs_division,
        "num_games_vs_non_division": run.num_games_vs_non_division,
        "seed": run.seed,
        "num_days": run.num_days,
        "created_at": run.created_at.isoformat(),
    }


@router.get("/schedule", name="schedule")
async def schedule_json(params: ScheduleParams = Depends(_query_params)):
    return schedule_payload(_generate(params))


@router.get("/schedule.txt", response_class=PlainTextResponse, name="schedule_text")
async def schedule_text(params: ScheduleParams = Depends(_query_params)):
    return format_schedule(_generate(params))


@router.get("/schedule/stats", name="schedule_stats")
async def schedule_stats(params: ScheduleParams = Depends(_query_params)):
    schedule = _generate(params)
    payload = stats_payload(compute_stats(schedule))
    payload["seed"] = schedule.seed
    return payload


@router.post("/runs", status_code=201, name="create_run")
async def create_run(
    params: ScheduleParams = Depends(_query_params),
    session: Session = Depends(get_session),
):
    schedule = _generate(params)
    run = save_schedule(session, schedule)
    payload = schedule_payload(schedule)
    payload["id"] = run.id
    return payload


@router.get("/runs", name="runs")
async def runs_index(session: Session = Depends(get_session)):
    return [_run_payload(run) for run in list_runs(session)]


@router.get("/runs/{run_id}", name="run_detail")
async def run_detail(run_id: int, session: Session = Depends(get_session)):
    schedule = load_schedule(session, run_id)
    if schedule is None:
        raise HTTPException(status_code=404, detail="Schedule run not found")
    payload = schedule_payload(schedule)
    payload["id"] = run_id
    return payload
