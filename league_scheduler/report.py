"""Human-readable output and statistics for generated schedules."""

from __future__ import annotations

import string
from dataclasses import asdict, dataclass

from .schedule import AWAY, BYE, HOME, Game, InternalInvariantViolation, Schedule, TeamSlot


@dataclass
class ScheduleStats:
    # crosstable[away][home] counts meetings at ``home``'s venue.
    crosstable: list[list[int]]
    # half_crosstable[i][j] (j < i) counts all meetings between i and j.
    half_crosstable: list[list[int]]
    away_games: list[int]
    home_games: list[int]
    bye_games: list[int]
    num_days: int


def _label(team: TeamSlot) -> str:
    return str(BYE) if team is BYE else str(team + 1)


def format_game(game: Game) -> str:
    return f"{_label(game[AWAY])} at {_label(game[HOME])}"


def format_schedule(schedule: Schedule) -> str:
    """Render the team list followed by every day; teams are printed one-based."""
    params = schedule.params
    size = params.num_teams_per_division
    lines = ["TEAMS:"]
    for division in range(params.num_divisions):
        offset = division * size
        members = " ".join(str(offset + index + 1) for index in range(size))
        lines.append(f"  DIV {string.ascii_uppercase[division]}: {members}")
    lines.append("")

    for number, day in enumerate(schedule.days, start=1):
        lines.append(f"DAY {number}:")
        lines.extend(format_game(game) for game in day)
        lines.append("")
    return "\n".join(lines) + "\n"


def compute_stats(schedule: Schedule) -> ScheduleStats:
    num_teams = schedule.params.num_teams
    crosstable = [[0] * num_teams for _ in range(num_teams)]
    half_crosstable = [[0] * index for index in range(num_teams)]
    away_games = [0] * num_teams
    home_games = [0] * num_teams
    bye_games = [0] * num_teams

    for day_index, day in enumerate(schedule.days):
        playing: set[int] = set()
        for game in day:
            for team in game.teams:
                if team in playing:
                    raise InternalInvariantViolation(f"Team {team + 1} plays twice on day {day_index + 1}.")
                playing.add(team)
            if game.is_bye:
                for team in game.teams:
                    bye_games[team] += 1
                continue
            away, home = game
            crosstable[away][home] += 1
            half_crosstable[max(away, home)][min(away, home)] += 1
            away_games[away] += 1
            home_games[home] += 1

    return ScheduleStats(
        crosstable=crosstable,
        half_crosstable=half_crosstable,
        away_games=away_games,
        home_games=home_games,
        bye_games=bye_games,
        num_days=schedule.num_days,
    )


def format_stats(stats: ScheduleStats) -> str:
    num_teams = len(stats.away_games)
    header = "".join(f" {team + 1}" for team in range(num_teams))

    lines = ["########## Schedule Stats ##########", ""]
    lines.append("NUM AWAY \\ HOME GAMES VS OPPONENT CROSSTABLE:")
    lines.append(f"A\\H{header}")
    for team, row in enumerate(stats.crosstable):
        lines.append(f" {team + 1} " + "".join(f" {count}" for count in row))
    lines.append("")

    lines.append("NUM GAMES VS OPPONENT HALF-CROSSTABLE:")
    lines.append(f" {header}")
    for team, row in enumerate(stats.half_crosstable):
        lines.append(f"{team + 1}" + "".join(f" {count}" for count in row))
    lines.append("")

    for team in range(num_teams):
        lines.append(
            f"Team {team + 1} plays {stats.away_games[team]} away games "
            f"and {stats.home_games[team]} home games"
        )
    lines.append(f"{stats.num_days} days of games")
    return "\n".join(lines) + "\n"


def game_payload(game: Game) -> dict[str, int | None]:
    """JSON-friendly game; ``None`` marks the BYE side."""
    return {
        "away": None if game.away is BYE else game.away,
        "home": None if game.home is BYE else game.home,
    }


def schedule_payload(schedule: Schedule) -> dict[str, object]:
    return {
        "params": asdict(schedule.params),
        "seed": schedule.seed,
        "num_days": schedule.num_days,
        "days": [[game_payload(game) for game in day] for day in schedule.days],
    }


def stats_payload(stats: ScheduleStats) -> dict[str, object]:
    return asdict(stats)
