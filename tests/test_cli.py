from __future__ import annotations

import argparse

import pytest

from league_scheduler.cli import main, parse_seed


def test_cli_prints_schedule_and_stats(capsys):
    assert main(["2", "4", "1", "1", "--rng=3"]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("TEAMS:\n  DIV A: 1 2 3 4\n  DIV B: 5 6 7 8\n\nDAY 1:\n")
    assert "DAY 7:" in captured.out
    assert "########## Schedule Stats ##########" in captured.err
    assert captured.err.rstrip().endswith("7 days of games")


def test_cli_is_deterministic_with_seed(capsys):
    main(["2", "5", "2", "1", "--rng=42"])
    first = capsys.readouterr().out
    main(["2", "5", "2", "1", "--rng=42"])
    assert capsys.readouterr().out == first


def test_cli_defaults_to_clock_seed(capsys):
    assert main(["1", "4", "1", "0", "--rng=TIME"]) == 0
    assert "3 days of games" in capsys.readouterr().err


def test_cli_rejects_too_many_divisions(capsys):
    assert main(["3", "4", "1", "1"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Runtime error" in captured.err


@pytest.mark.parametrize(
    "argv",
    [
        ["0", "4", "1", "1"],
        ["1", "0", "1", "1"],
        ["1", "4", "-1", "1"],
        ["1", "4", "1", "x"],
        ["1", "4", "1"],
        ["1", "4", "1", "0", "--rng=-5"],
        ["1", "4", "1", "0", "--rng=abc"],
        ["1", "4", "1", "0", "--bogus"],
    ],
)
def test_cli_parse_failures_exit_one(argv, capsys):
    assert main(argv) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usage:" in captured.err


def test_parse_seed():
    assert parse_seed("TIME") == -1
    assert parse_seed("0") == 0
    assert parse_seed("17") == 17
    with pytest.raises(argparse.ArgumentTypeError):
        parse_seed("-2")
