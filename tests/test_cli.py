import logging
import unittest
from io import StringIO
from unittest.mock import patch

import pytest

from matkalk_pkg import config
from matkalk_pkg import logging_config
from matkalk_pkg.cli import main_entry
from matkalk_pkg.cli import repl_loop
from matkalk_pkg.cli.context import ReplContext
from matkalk_pkg.cli.repl_commands import split_operands
from matkalk_pkg.cli.repl_core import REPL
from matkalk_pkg.fraction import Fraction
from matkalk_pkg.logging_config import get_logger
from matkalk_pkg.logging_config import setup_logging


@pytest.fixture(autouse=True)
def keep_logging(monkeypatch):
    # main_entry reconfigures the root logger; leave pytest's handlers alone
    monkeypatch.setattr(logging_config, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(config, "OUTPUT_PRECISION", config.OUTPUT_PRECISION)


def run_session(lines, ctx=None):
    feed = iter(lines)
    repl = REPL(ctx or ReplContext(), input_func=lambda prompt: next(feed))
    repl.start()
    return repl


def test_version(capsys):
    assert main_entry(["--version"]) == 0
    assert capsys.readouterr().out.strip() == config.VERSION


def test_eval_determinant(capsys):
    assert main_entry(["-e", "det [[1,2],[3,4]]"]) == 0
    assert "Determinant: -2.000000" in capsys.readouterr().out


def test_eval_fraction_inverse(capsys):
    assert main_entry(["--field", "fraction", "-e", "inverse [[2,1],[1,1]]"]) == 0
    out = capsys.readouterr().out
    assert "Result (A^-1):" in out
    assert "-1" in out
    assert "." not in out.split("Result (A^-1):")[1]


def test_eval_singular_fails(capsys):
    assert main_entry(["-e", "inverse [[1,2],[2,4]]"]) == 1
    assert "Error: Matrix is singular" in capsys.readouterr().out


def test_eval_chain(capsys):
    assert main_entry(["-e", "A = 1 2; 3 4", "-e", "rank A"]) == 0
    assert "Rank: 2" in capsys.readouterr().out


def test_precision_flag(capsys):
    assert main_entry(["-p", "1", "-e", "transpose [[1,2]]"]) == 0
    out = capsys.readouterr().out
    assert "1.0" in out
    assert "1.000" not in out


def test_health_check(capsys):
    assert main_entry(["--health-check"]) == 0
    out = capsys.readouterr().out
    assert "[FAIL]" not in out
    assert "All health checks passed" in out


def test_split_operands():
    assert split_operands("add A [[1, 2], [3, 4]]") == ["add", "A", "[[1, 2], [3, 4]]"]


class TestReplSession(unittest.TestCase):
    def test_registers_and_operations(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            repl = run_session(["A = [[1,2],[3,4]]", "B = A", "add A B", "show A", "quit"])
        output = out.getvalue()
        self.assertIn("Result (A + B):", output)
        self.assertIn("8.000", output)
        self.assertIn("A (2x2, float):", output)
        self.assertFalse(repl.running)
        self.assertIsNotNone(repl.ctx.last_result)

    def test_ans_refers_to_last_matrix(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(["transpose [[1,2]]", "C = mul ans [[1,2]]", "show C", "quit"])
        self.assertIn("C (2x2, float):", out.getvalue())

    def test_unknown_command(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            ok = REPL().process_input("frobnicate A")
        self.assertFalse(ok)
        self.assertIn("unknown command", out.getvalue())

    def test_errors_do_not_stop_session(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            repl = run_session(["add [[1,2]] [[1],[2]]", "det Z", "det [[4]]", "quit"])
        output = out.getvalue()
        self.assertIn("Error: Matrix addition: dimension mismatch", output)
        self.assertIn("Unknown matrix 'Z'", output)
        self.assertIn("Determinant: 4.000000", output)
        self.assertFalse(repl.running)

    def test_invalid_assignment(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            self.assertFalse(REPL().process_input("1A = 2"))
        self.assertIn("invalid matrix name", out.getvalue())

    def test_command_names_are_reserved(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            self.assertFalse(REPL().process_input("det = [[1]]"))
        self.assertIn("is a command name", out.getvalue())

    def test_field_switch_converts_registers(self):
        ctx = ReplContext()
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(["A = 0.5 0.25", "field fraction", "show A", "quit"], ctx)
        self.assertEqual(ctx.field_name, "fraction")
        self.assertEqual(ctx.matrices["A"].get(0, 0), Fraction(1, 2))
        self.assertIn("1/4", out.getvalue())

    def test_guided_solve_steps_toggle(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(
                [
                    "field fraction",
                    "steps off",
                    "solve [[1,1,1,6],[0,2,5,-4],[2,5,-1,27]]",
                    "quit",
                ]
            )
        output = out.getvalue()
        self.assertIn("x = 5", output)
        self.assertIn("y = 3", output)
        self.assertNotIn("Step 1", output)

    def test_timing(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(["timing on", "det [[1]]", "quit"])
        self.assertIn("[Time:", out.getvalue())

    def test_eof_ends_session(self):
        def raise_eof(prompt):
            raise EOFError

        repl = REPL(input_func=raise_eof)
        with patch("sys.stdout", new_callable=StringIO):
            repl.start()
        self.assertFalse(repl.running)


class TestMenu(unittest.TestCase):
    def test_menu_determinant(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(["menu", "7", "2", "1 2", "3 4", "12", "quit"])
        output = out.getvalue()
        self.assertIn("MATRIX CALCULATOR", output)
        self.assertIn("Determinant: -2.000000", output)

    def test_menu_rejects_bad_input(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(["menu", "99", "4", "1", "x", "2", "1 2 3", "1 2", "2", "12", "quit"])
        output = out.getvalue()
        self.assertIn("Invalid choice", output)
        self.assertIn("Invalid input", output)
        self.assertIn("Please enter exactly 2 value(s).", output)
        self.assertIn("Result (k * A):", output)

    def test_menu_mul_dimension_check(self):
        with patch("sys.stdout", new_callable=StringIO) as out:
            run_session(["menu", "3", "2", "3", "2", "3", "12", "quit"])
        self.assertIn(
            "Error: Number of columns of A must equal number of rows of B", out.getvalue()
        )


class TestDebugCommand(unittest.TestCase):
    def test_debug_on_off(self):
        commands = ["debug on", "det [[1,2],[3,4]]", "debug off", "quit"]

        with patch("builtins.input", side_effect=commands), patch(
            "sys.stdout", new_callable=StringIO
        ) as mock_stdout:
            repl_loop()

        output = mock_stdout.getvalue()
        self.assertIn("Debug mode enabled", output)
        self.assertIn("Debug mode disabled", output)
        self.assertEqual(logging.getLogger("matkalk_pkg").level, logging.WARNING)


def test_setup_logging_writes_file(tmp_path, monkeypatch):
    monkeypatch.delenv("MATKALK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MATKALK_LOG_FILE", raising=False)
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "matkalk.log"
    try:
        setup_logging(level="DEBUG", log_file=str(log_file), console=False)
        get_logger("linalg.elimination").debug("pivot chosen")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "pivot chosen" in log_file.read_text()
        assert get_logger("cli").name == "matkalk_pkg.cli"
    finally:
        for handler in logging.getLogger().handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        logging.getLogger("matkalk_pkg").setLevel(logging.NOTSET)


def test_help_mentions_negative_decimals(capsys):
    REPL().process_input("help")
    assert "-1.5 = -3/2" in capsys.readouterr().out
