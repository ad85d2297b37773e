from __future__ import annotations

import argparse
import logging
import sys

from ..config import VERSION

_logger = logging.getLogger(__name__)


def _health_check() -> int:
    """Run health check to verify dependencies and the kernel's self tests.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    def run(name: str, check) -> None:
        nonlocal checks_passed, checks_failed
        try:
            ok = bool(check())
        except Exception as e:
            _logger.debug("Health check %s raised", name, exc_info=True)
            print(f"[FAIL] {name}: {e}")
            checks_failed += 1
            return
        if ok:
            print(f"[OK] {name}")
            checks_passed += 1
        else:
            print(f"[FAIL] {name}")
            checks_failed += 1

    print("Running matkalk health check...")
    print("-" * 50)

    try:
        import numpy as np
        import sympy as sp

        print(f"[OK] NumPy {np.__version__} and SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] Dependency import failed: {e}")
        print("  To install: pip install numpy sympy")
        return 1

    from ..field import FRACTION_FIELD
    from ..interop import to_numpy
    from ..interop import to_sympy
    from ..linalg import solve_guided
    from ..matrix import Matrix

    A = Matrix.from_rows([[1, 2], [3, 4]], field=FRACTION_FIELD)
    B = Matrix.from_rows([[5, 6], [7, 8]], field=FRACTION_FIELD)
    C = Matrix.from_rows([[1, 0, 1], [0, 2, 0], [1, 0, 2]], field=FRACTION_FIELD)
    I2 = Matrix.identity(2, FRACTION_FIELD)
    I3 = Matrix.identity(3, FRACTION_FIELD)

    run("(A+B)-B == A", lambda: Matrix.approx_equal((A + B) - B, A))
    run("A*I == A", lambda: Matrix.approx_equal(A * I2, A))
    run("C*C.inverse() == I (3x3)", lambda: Matrix.approx_equal(C * C.inverse(), I3))
    run(
        "Elimination and adjugate inverses agree",
        lambda: C.inverse() == C.adjugate_inverse(),
    )

    Cf = C.with_field("float")
    run(
        "Inverse matches numpy.linalg.inv",
        lambda: np.allclose(to_numpy(Cf.inverse()), np.linalg.inv(to_numpy(Cf))),
    )
    run(
        "Determinant matches numpy.linalg.det",
        lambda: abs(Cf.determinant() - np.linalg.det(to_numpy(Cf))) < 1e-9,
    )
    run(
        "RREF matches SymPy",
        lambda: to_sympy(A.rref()) == to_sympy(A).rref()[0],
    )

    def guided() -> bool:
        sol = solve_guided([[1, 1, 1, 6], [0, 2, 5, -4], [2, 5, -1, 27]])
        return sol.ok and np.allclose(sol.solution, (5, 3, -2))

    run("Guided solver (x=5, y=3, z=-2)", guided)

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Results may be unreliable.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""matkalk v{VERSION}

COMMANDS
  help                Show commands
  menu                Numbered menu with guided input
  quit                Exit
  health              Self test

MATRICES
  A = [[1,2],[3,4]]   Store a matrix (also: A = 1 2; 3 4)
  A = inverse B       Store the result of an operation
  show [A ...]        Print stored matrices ('ans' is the last result)
  clear               Forget stored matrices

OPERATIONS (operands: names, 'ans' or [[...]] literals)
  add A B       sub A B       mul A B
  scale A k     div A k       transpose A
  det A         cofactor A    rank A
  inverse A     Inverse by Gauss-Jordan elimination
  adjinv A      Inverse by the adjugate (cofactor) method
  rref A        Reduced row-echelon form
  solve M       Guided solve of 3 equations, M = [A|b] (3x4)

SETTINGS
  field [float|fraction]  Scalar field (fraction is exact: 1/3, -1.5 = -3/2)
  steps [on|off]          Show guided-solver steps
  timing [on|off]         Timing stats
  debug [on|off]          Debug mode (pivot logging)
"""
    print(help_text)


def repl_loop(field_name: str | None = None) -> None:
    """Start the interactive session."""
    from .context import ReplContext
    from .repl_core import REPL

    ctx = ReplContext()
    if field_name:
        ctx.field_name = field_name
    REPL(ctx).start()


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the matkalk CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    import matkalk_pkg.config as _config

    parser = argparse.ArgumentParser(prog="matkalk")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        action="append",
        help="Run one command and exit (repeatable, e.g. -e 'A = 1 2; 3 4' -e 'det A')",
        dest="eval_expr",
    )
    parser.add_argument(
        "--field",
        type=str,
        choices=["float", "fraction"],
        default=None,
        help="Scalar field for entered matrices (default: float)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Decimal places for float output"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run the self test and verify dependencies",
    )
    args = parser.parse_args(argv)

    from ..logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.precision is not None and args.precision >= 0:
        _config.OUTPUT_PRECISION = int(args.precision)
    field_name = args.field or _config.DEFAULT_FIELD

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_expr:
        from .context import ReplContext
        from .repl_core import REPL

        repl = REPL(ReplContext(field_name=field_name))
        ok = True
        for line in args.eval_expr:
            if not repl.process_input(line):
                ok = False
                break
        return 0 if ok else 1

    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
        except AttributeError:
            pass
    repl_loop(field_name)
    return 0
