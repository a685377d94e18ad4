"""Round-robin schedule construction for one- and two-division leagues.

Teams are numbered ``0 .. D*T - 1``; division ``d`` owns the contiguous block
``[d*T, (d+1)*T)``.  Intra-division rounds use the circle method.  When the
division size is odd and there are two divisions, the team that would sit
out in division A plays a team from division B instead, which discharges one
inter-division pairing per day and removes both byes.  Whatever
inter-division games are left once the intra-division rounds are done are
appended as plain cross-division days, and the finished list of days is
shuffled with a seeded RNG.
"""

from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass
from typing import Iterator, NamedTuple

logger = logging.getLogger(__name__)

MAX_DIVISIONS = 2

AWAY = 0
HOME = 1


class Bye(enum.Enum):
    """Marker for the empty side of a game."""

    BYE = "BYE"

    def __str__(self) -> str:
        return self.value


BYE = Bye.BYE

TeamSlot = int | Bye


class UnsupportedParameters(ValueError):
    """The requested league shape cannot be scheduled."""


class InternalInvariantViolation(RuntimeError):
    """A constructed day or schedule broke a structural guarantee."""


@dataclass(frozen=True)
class ScheduleParams:
    num_divisions: int
    num_teams_per_division: int
    num_games_vs_division: int
    num_games_vs_non_division: int
    seed: int = -1

    @property
    def num_teams(self) -> int:
        return self.num_divisions * self.num_teams_per_division

    def division_of(self, team: int) -> int:
        return team // self.num_teams_per_division


class Game(NamedTuple):
    away: TeamSlot
    home: TeamSlot

    @property
    def is_bye(self) -> bool:
        return self.away is BYE or self.home is BYE

    @property
    def teams(self) -> tuple[int, ...]:
        """Real teams taking part, BYE excluded."""
        return tuple(side for side in self if side is not BYE)


Day = tuple[Game, ...]


@dataclass(frozen=True)
class Schedule:
    """An immutable, already shuffled schedule plus the seed that shuffled it."""

    params: ScheduleParams
    seed: int
    days: tuple[Day, ...]

    @property
    def num_days(self) -> int:
        return len(self.days)

    def games(self, day: int) -> Day:
        return self.days[day]

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[Day]:
        return iter(self.days)


def _balance(round_index: int, team1: int, team2: int) -> Game:
    """Pick home and away for a pairing.

    With ``low < high`` the lower team travels when ``round + low + high`` is
    even and hosts otherwise.
    """
    low, high = min(team1, team2), max(team1, team2)
    if (round_index + low + high) % 2 == 0:
        return Game(away=low, home=high)
    return Game(away=high, home=low)


def _pairing(round_index: int, team1: int, team2: int, bye_team: int | None = None) -> Game:
    if team1 == bye_team:
        return Game(away=team2, home=BYE)
    if team2 == bye_team:
        return Game(away=team1, home=BYE)
    return _balance(round_index, team1, team2)


def _circle_pairs(pivot: int, low: int, high: int, count: int) -> Iterator[tuple[int, int]]:
    """Yield ``count`` pairs fanning out from ``pivot``, wrapping inside ``[low, high]``."""
    team1 = team2 = pivot
    for _ in range(count):
        team1 -= 1
        if team1 < low:
            team1 = high
        team2 += 1
        if team2 > high:
            team2 = low
        yield team1, team2


@dataclass
class _InterDivisionCursor:
    """Progress through the inter-division obligations.

    ``match_idx`` is the offset into division B that is paired with team 0 of
    division A; one full sweep of offsets is one inter-division round.
    """

    size: int
    inter_round: int = 0
    match_idx: int = 0

    def advance(self) -> None:
        self.match_idx += 1
        if self.match_idx >= self.size:
            self.inter_round += 1
            self.match_idx = 0

    def opponent(self, team: int) -> int:
        return (team + self.match_idx) % self.size + self.size


def _even_round(params: ScheduleParams, round_index: int) -> list[Day]:
    size = params.num_teams_per_division
    days: list[Day] = []
    for match_idx in range(1, size):
        games: list[Game] = []
        for division in range(params.num_divisions):
            offset = division * size
            games.append(_balance(round_index, offset, offset + match_idx))
            # Team ``offset`` is pinned; the rest rotate around it.
            pairs = _circle_pairs(offset + match_idx, offset + 1, offset + size - 1, size // 2 - 1)
            games.extend(_balance(round_index, team1, team2) for team1, team2 in pairs)
        days.append(tuple(games))
    return days


def _odd_round(params: ScheduleParams, round_index: int, cursor: _InterDivisionCursor) -> list[Day]:
    size = params.num_teams_per_division
    coupled = params.num_divisions == 2 and cursor.inter_round < params.num_games_vs_non_division
    pairs_per_division = (size - 1) // 2

    days: list[Day] = []
    for match_idx in range(1, size + 1):
        cross: Game | None = None
        team_a = team_b = 0
        if coupled:
            team_a = match_idx - 1
            team_b = cursor.opponent(team_a)
            cross = _balance(cursor.inter_round, team_a, team_b)

        games: list[Game] = []
        for division in range(params.num_divisions):
            offset = division * size
            bye_team = offset + size
            if coupled:
                pivot = team_a if division == 0 else team_b
                pairs = _circle_pairs(pivot, offset, bye_team - 1, pairs_per_division)
            else:
                pivot = offset + match_idx
                games.append(_pairing(round_index, offset, pivot, bye_team))
                pairs = _circle_pairs(pivot, offset + 1, bye_team, pairs_per_division)
            games.extend(_pairing(round_index, team1, team2, bye_team) for team1, team2 in pairs)

        if cross is not None:
            # Team 0's game always leads the day.
            games = [cross] + games if team_a == 0 else games + [cross]
        days.append(tuple(games))

    if coupled:
        logger.debug(
            "Round %d coupled with inter-division offset %d (inter round %d)",
            round_index,
            cursor.match_idx,
            cursor.inter_round,
        )
        cursor.advance()
    return days


def _inter_division_days(params: ScheduleParams, cursor: _InterDivisionCursor) -> list[Day]:
    if params.num_divisions < 2:
        return []
    size = params.num_teams_per_division
    days: list[Day] = []
    while cursor.inter_round < params.num_games_vs_non_division:
        while cursor.match_idx < size:
            days.append(
                tuple(_balance(cursor.inter_round, team, cursor.opponent(team)) for team in range(size))
            )
            cursor.match_idx += 1
        cursor.inter_round += 1
        cursor.match_idx = 0
    return days


def _check_day(params: ScheduleParams, day: Day) -> None:
    seen: set[int] = set()
    byes = 0
    for game in day:
        if game.away is BYE and game.home is BYE:
            raise InternalInvariantViolation(f"Game without any team: {game}")
        byes += game.is_bye
        for team in game.teams:
            if team in seen:
                raise InternalInvariantViolation(f"Team {team} scheduled twice on one day: {day}")
            seen.add(team)
    if len(seen) != params.num_teams:
        raise InternalInvariantViolation(f"Day covers {len(seen)} of {params.num_teams} teams: {day}")
    if byes not in (0, params.num_divisions):
        raise InternalInvariantViolation(f"Day has {byes} byes across {params.num_divisions} divisions: {day}")


def validate_params(params: ScheduleParams) -> None:
    if params.num_divisions > MAX_DIVISIONS:
        raise UnsupportedParameters(
            f"Only up to {MAX_DIVISIONS} divisions are supported, got {params.num_divisions}."
        )


def build_days(params: ScheduleParams) -> list[Day]:
    """Construct every day of the schedule in generation order (unshuffled)."""
    validate_params(params)

    cursor = _InterDivisionCursor(size=params.num_teams_per_division)
    days: list[Day] = []
    for round_index in range(params.num_games_vs_division):
        if params.num_teams_per_division % 2 == 0:
            days.extend(_even_round(params, round_index))
        else:
            days.extend(_odd_round(params, round_index, cursor))
    intra_days = len(days)
    days.extend(_inter_division_days(params, cursor))

    for day in days:
        _check_day(params, day)

    logger.debug("Built %d intra-division and %d inter-division days", intra_days, len(days) - intra_days)
    return days


def resolve_seed(seed: int) -> int:
    """Return ``seed`` when non-negative, otherwise a clock-derived seed."""
    if seed >= 0:
        return seed
    drawn = time.time_ns() & 0xFFFFFFFF
    logger.info("No seed supplied; using clock seed %d", drawn)
    return drawn


def shuffle_days(days: list[Day], seed: int) -> None:
    """Permute ``days`` in place; games inside a day keep their order."""
    random.Random(seed).shuffle(days)


def generate_schedule(params: ScheduleParams) -> Schedule:
    days = build_days(params)
    seed = resolve_seed(params.seed)
    shuffle_days(days, seed)
    return Schedule(params=params, seed=seed, days=tuple(days))


def expected_bye_rounds(params: ScheduleParams) -> int:
    """Intra-division rounds that cannot be coupled and therefore carry byes."""
    size = params.num_teams_per_division
    if size % 2 == 0:
        return 0
    if params.num_divisions == 1:
        return params.num_games_vs_division
    return max(0, params.num_games_vs_division - params.num_games_vs_non_division * size)


def expected_num_days(params: ScheduleParams) -> int:
    size = params.num_teams_per_division
    days_per_round = size - 1 if size % 2 == 0 else size
    intra_days = params.num_games_vs_division * days_per_round
    if params.num_divisions < 2:
        return intra_days
    coupled_rounds = params.num_games_vs_division - expected_bye_rounds(params) if size % 2 else 0
    return intra_days + params.num_games_vs_non_division * size - coupled_rounds
