"""Command line entry points."""
import logging

import pytest
from conftest import make_unit
from engine.model import UnitClass
from runtime.cli import CONSOLE_HANDLER, build_parser, main, summarize


def console_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == CONSOLE_HANDLER]


@pytest.fixture(autouse=True)
def drop_console_handler():
    yield
    for h in console_handlers():
        logging.getLogger().removeHandler(h)


def test_serve_defaults():
    args = build_parser().parse_args(["serve"])
    assert (args.port, args.tick_ms, args.log, args.seed) == (0, 10, "logging.txt", None)


def test_spawn_arguments():
    args = build_parser().parse_args(["spawn", "4000", "red", "giant", "5"])
    assert (args.port, args.side, args.unit_class, args.row) == (4000, "red", "giant", 5)
    assert UnitClass[args.unit_class.upper()] is UnitClass.GIANT


def test_spawn_rejects_two_digit_rows():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["spawn", "4000", "red", "giant", "12"])


def test_summarize_counts_living_units_per_side():
    units = (make_unit(), make_unit(hp=0), make_unit(side="RED"))
    assert summarize(units) == "RED: 1 alive | GREEN: 1 alive"


def test_new_game_against_closed_port_prints_empty_line(capsys):
    assert main(["new-game", "1"]) == 0
    assert capsys.readouterr().out == "\n"


def test_repeated_runs_share_one_console_handler():
    assert main(["new-game", "1"]) == 0
    assert main(["new-game", "1"]) == 0
    assert len(console_handlers()) == 1
