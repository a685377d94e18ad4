"""Database models and helpers for recording generated schedules."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Iterator

from sqlmodel import Field, Session, SQLModel, create_engine, select

from .schedule import BYE, Day, Game, Schedule, ScheduleParams

DEFAULT_SQLITE_PATH = "sqlite:///./league_schedule.db"

logger = logging.getLogger(__name__)


def _build_engine_url() -> str:
    """Return the configured database URL or fall back to SQLite."""
    return os.environ.get("DATABASE_URL", DEFAULT_SQLITE_PATH)


def _build_engine():
    url = _build_engine_url()
    engine_kwargs = {}
    if url.startswith("sqlite"):
        # Only SQLite understands check_same_thread; other drivers reject it.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **engine_kwargs)


engine = _build_engine()


class ScheduleRun(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    num_divisions: int = Field(nullable=False)
    num_teams_per_division: int = Field(nullable=False)
    num_games_vs_division: int = Field(nullable=False)
    num_games_vs_non_division: int = Field(nullable=False)
    requested_seed: int = Field(default=-1, nullable=False)
    seed: int = Field(nullable=False)
    num_days: int = Field(nullable=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)


class ScheduledGame(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    run_id: int = Field(foreign_key="schedulerun.id", nullable=False, index=True)
    day_index: int = Field(nullable=False, index=True)
    slot_index: int = Field(nullable=False)
    # NULL on either side stands for BYE.
    away_team: int | None = Field(default=None)
    home_team: int | None = Field(default=None)


def init_db() -> None:
    """Create tables if they don't already exist."""
    SQLModel.metadata.create_all(engine)


def get_session() -> Iterator[Session]:
    """Yield a SQLModel session for dependency injection."""
    with Session(engine) as session:
        yield session


def save_schedule(session: Session, schedule: Schedule) -> ScheduleRun:
    params = schedule.params
    run = ScheduleRun(
        num_divisions=params.num_divisions,
        num_teams_per_division=params.num_teams_per_division,
        num_games_vs_division=params.num_games_vs_division,
        num_games_vs_non_division=params.num_games_vs_non_division,
        requested_seed=params.seed,
        seed=schedule.seed,
        num_days=schedule.num_days,
    )
    session.add(run)
    session.commit()
    session.refresh(run)

    for day_index, day in enumerate(schedule.days):
        for slot_index, game in enumerate(day):
            session.add(
                ScheduledGame(
                    run_id=run.id,
                    day_index=day_index,
                    slot_index=slot_index,
                    away_team=None if game.away is BYE else game.away,
                    home_team=None if game.home is BYE else game.home,
                )
            )
    session.commit()
    logger.info("Recorded schedule run %s (%d days, seed %d)", run.id, run.num_days, run.seed)
    return run


def list_runs(session: Session) -> list[ScheduleRun]:
    return list(session.exec(select(ScheduleRun).order_by(ScheduleRun.id.desc())).all())


def load_schedule(session: Session, run_id: int) -> Schedule | None:
    """Rebuild a recorded schedule with its original day and game order."""
    run = session.get(ScheduleRun, run_id)
    if not run:
        return None

    rows = session.exec(
        select(ScheduledGame)
        .where(ScheduledGame.run_id == run_id)
        .order_by(ScheduledGame.day_index, ScheduledGame.slot_index)
    ).all()

    days: list[list[Game]] = [[] for _ in range(run.num_days)]
    for row in rows:
        away = BYE if row.away_team is None else row.away_team
        home = BYE if row.home_team is None else row.home_team
        days[row.day_index].append(Game(away=away, home=home))

    params = ScheduleParams(
        num_divisions=run.num_divisions,
        num_teams_per_division=run.num_teams_per_division,
        num_games_vs_division=run.num_games_vs_division,
        num_games_vs_non_division=run.num_games_vs_non_division,
        seed=run.requested_seed,
    )
    frozen: tuple[Day, ...] = tuple(tuple(day) for day in days)
    return Schedule(params=params, seed=run.seed, days=frozen)
