from __future__ import annotations

import pytest

from league_scheduler.report import (
    compute_stats,
    format_game,
    format_schedule,
    format_stats,
    schedule_payload,
    stats_payload,
)
from league_scheduler.schedule import (
    BYE,
    Game,
    InternalInvariantViolation,
    Schedule,
    ScheduleParams,
    build_days,
)


def _unshuffled(divisions: int, teams: int, vs_division: int, vs_non_division: int) -> Schedule:
    params = ScheduleParams(
        num_divisions=divisions,
        num_teams_per_division=teams,
        num_games_vs_division=vs_division,
        num_games_vs_non_division=vs_non_division,
        seed=0,
    )
    return Schedule(params=params, seed=0, days=tuple(build_days(params)))


def test_format_game_is_one_based():
    assert format_game(Game(away=0, home=3)) == "1 at 4"
    assert format_game(Game(away=2, home=BYE)) == "3 at BYE"


def test_format_schedule_single_division():
    text = format_schedule(_unshuffled(1, 3, 1, 0))
    assert text == (
        "TEAMS:\n"
        "  DIV A: 1 2 3\n"
        "\n"
        "DAY 1:\n"
        "2 at 1\n"
        "3 at BYE\n"
        "\n"
        "DAY 2:\n"
        "1 at 3\n"
        "2 at BYE\n"
        "\n"
        "DAY 3:\n"
        "1 at BYE\n"
        "3 at 2\n"
        "\n"
    )


def test_format_schedule_lists_both_divisions():
    text = format_schedule(_unshuffled(2, 4, 1, 1))
    lines = text.splitlines()
    assert lines[:3] == ["TEAMS:", "  DIV A: 1 2 3 4", "  DIV B: 5 6 7 8"]
    assert lines.count("DAY 7:") == 1
    assert "DAY 8:" not in lines


def test_compute_stats_counts_meetings():
    stats = compute_stats(_unshuffled(1, 4, 1, 0))
    assert stats.num_days == 3
    assert stats.crosstable[1][0] == 1
    assert stats.crosstable[0][1] == 0
    assert stats.half_crosstable == [[], [1], [1, 1], [1, 1, 1]]
    assert [a + h for a, h in zip(stats.away_games, stats.home_games)] == [3, 3, 3, 3]
    assert stats.bye_games == [0, 0, 0, 0]


def test_compute_stats_tracks_byes():
    stats = compute_stats(_unshuffled(1, 3, 2, 0))
    assert stats.bye_games == [2, 2, 2]
    assert stats.away_games == [2, 2, 2]
    assert stats.home_games == [2, 2, 2]


def test_compute_stats_rejects_double_booking():
    params = ScheduleParams(1, 4, 1, 0, seed=0)
    bad = Schedule(params=params, seed=0, days=((Game(0, 1), Game(1, 2)),))
    with pytest.raises(InternalInvariantViolation):
        compute_stats(bad)


def test_format_stats_layout():
    text = format_stats(compute_stats(_unshuffled(1, 3, 1, 0)))
    assert text == (
        "########## Schedule Stats ##########\n"
        "\n"
        "NUM AWAY \\ HOME GAMES VS OPPONENT CROSSTABLE:\n"
        "A\\H 1 2 3\n"
        " 1  0 0 1\n"
        " 2  1 0 0\n"
        " 3  0 1 0\n"
        "\n"
        "NUM GAMES VS OPPONENT HALF-CROSSTABLE:\n"
        "  1 2 3\n"
        "1\n"
        "2 1\n"
        "3 1 1\n"
        "\n"
        "Team 1 plays 1 away games and 1 home games\n"
        "Team 2 plays 1 away games and 1 home games\n"
        "Team 3 plays 1 away games and 1 home games\n"
        "3 days of games\n"
    )


def test_payloads_use_none_for_bye():
    schedule = _unshuffled(1, 3, 1, 0)
    payload = schedule_payload(schedule)
    assert payload["num_days"] == 3
    assert payload["seed"] == 0
    assert payload["params"]["num_teams_per_division"] == 3
    assert payload["days"][0] == [{"away": 1, "home": 0}, {"away": 2, "home": None}]

    stats = stats_payload(compute_stats(schedule))
    assert stats["num_days"] == 3
    assert stats["half_crosstable"][2] == [1, 1]
