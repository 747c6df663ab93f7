"""Tests for the ``python -m combat_balance`` command line."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import argparse
import json
import logging

import pytest

from combat_balance.__main__ import _build_parser, _enemy_arg, main


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """``run`` installs its own stdout handler; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestEnemyArg:

    def test_full_form(self):
        assert _enemy_arg("brute:7:2") == ("brute", 7, 2)

    def test_defaults(self):
        assert _enemy_arg("brute") == ("brute", 1, 1)
        assert _enemy_arg("brute:4") == ("brute", 4, 1)

    @pytest.mark.parametrize("bad", ["", ":3:1", "brute:x:1", "a:1:2:3"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(argparse.ArgumentTypeError):
            _enemy_arg(bad)


class TestParser:

    def test_run_defaults(self):
        args = _build_parser().parse_args(["run"])
        assert args.iterations == 1000
        assert args.seed == 42
        assert args.rng_mode == "shared"
        assert args.enemy is None

    def test_repeatable_enemy(self):
        args = _build_parser().parse_args(["run", "--enemy", "brute:3:1", "--enemy", "melee-grunt:2:4"])
        assert args.enemy == [("brute", 3, 1), ("melee-grunt", 2, 4)]


class TestRun:

    def test_headless_run_prints_summary(self, capsys, tmp_path):
        out = tmp_path / "result.json"
        code = main([
            "run", "--iterations", "20", "--seed", "3",
            "--enemy", "melee-grunt:5:2", "--output", str(out), "--log-level", "WARNING",
        ])
        assert code == 0
        printed = capsys.readouterr().out
        assert "Survival rate" in printed
        assert "Melee Attack" in printed
        assert json.loads(out.read_text(encoding="utf-8"))["total_fights"] == 20

    def test_unknown_gear_exits_nonzero(self):
        assert main(["run", "--gear", "mythic", "--iterations", "5", "--log-level", "WARNING"]) == 2

    def test_bad_iterations_exits_nonzero(self):
        assert main(["run", "--iterations", "0", "--log-level", "WARNING"]) == 2


class TestLoggingSetup:

    def test_fight_logger_quiet_by_default(self):
        from combat_balance.utils.logging import setup_logging
        setup_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("combat_balance.engine.fight").level == logging.INFO

    def test_fight_detail_enables_debug(self):
        from combat_balance.utils.logging import setup_logging
        setup_logging("DEBUG", fight_detail=True)
        assert logging.getLogger("combat_balance.engine.fight").level == logging.DEBUG
        setup_logging("WARNING")
        assert logging.getLogger("combat_balance.engine.fight").level == logging.WARNING
