"""
Command handlers for the matkalk console.

Math operations take register names (``A``, ``B``, ``ans``) or bracketed
inline matrices (``[[1,2],[3,4]]``) as operands and return a result
dictionary that ``print_result_pretty`` renders.
"""

import logging
import time
from typing import Any
from typing import Callable
from typing import Dict
from typing import List

from ..config import VAR_NAME_RE
from ..field import get_field
from ..linalg import solve_guided
from ..matrix import Matrix
from ..types import MatrixError
from ..types import ParseError
from ..utils.formatting import format_matrix
from ..utils.formatting import print_result_pretty
from ..utils.parsing import parse_matrix_text
from ..utils.parsing import parse_scalar
from .commands import handle_debug_command
from .context import ReplContext

logger = logging.getLogger(__name__)


def _matrix_result(title: str, fn: Callable[..., Matrix]) -> Callable[..., Dict[str, Any]]:
    def run(*args: Any) -> Dict[str, Any]:
        return {"ok": True, "type": "matrix", "title": title, "result": fn(*args)}

    return run


# name -> (operand kinds, handler); "m" is a matrix operand, "s" a scalar
OPERATIONS: Dict[str, tuple] = {
    "add": ("mm", _matrix_result("Result (A + B)", lambda a, b: a + b)),
    "sub": ("mm", _matrix_result("Result (A - B)", lambda a, b: a - b)),
    "mul": ("mm", _matrix_result("Result (A * B)", lambda a, b: a * b)),
    "scale": ("ms", _matrix_result("Result (k * A)", lambda a, k: a * k)),
    "div": ("ms", _matrix_result("Result (A / k)", lambda a, k: a / k)),
    "transpose": ("m", _matrix_result("Result (A^T)", lambda a: a.transpose())),
    "cofactor": ("m", _matrix_result("Cofactor matrix of A", lambda a: a.cofactor())),
    "inverse": ("m", _matrix_result("Result (A^-1)", lambda a: a.inverse())),
    "adjinv": (
        "m",
        _matrix_result("Result (A^-1, adjugate method)", lambda a: a.adjugate_inverse()),
    ),
    "rref": ("m", _matrix_result("RREF(A)", lambda a: a.rref())),
    "det": ("m", lambda a: {"ok": True, "type": "determinant", "result": a.determinant()}),
    "rank": ("m", lambda a: {"ok": True, "type": "rank", "result": a.rank()}),
    "solve": (
        "m",
        lambda a: {
            "ok": True,
            "type": "guided",
            "title": "Guided solution of [A|b]",
            "result": solve_guided(a),
        },
    ),
}

# Registry of non-math commands for input dispatch
COMMAND_REGISTRY = {
    "help",
    "?",
    "quit",
    "exit",
    "menu",
    "show",
    "list",
    "clear",
    "field",
    "steps",
    "debug",
    "timing",
    "health",
} | set(OPERATIONS)


def split_operands(text: str) -> List[str]:
    """Split on whitespace outside brackets: ``"A [[1, 2]]"`` -> ``["A", "[[1, 2]]"]``."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        if ch.isspace() and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
            continue
        current.append(ch)
    if current:
        parts.append("".join(current))
    return parts


def resolve_matrix(token: str, ctx: ReplContext) -> Matrix:
    """Look up a register or parse an inline matrix in the session's field."""
    if token == "ans":
        if ctx.last_result is None:
            raise ParseError("No previous result")
        return ctx.last_result
    if token in ctx.matrices:
        return ctx.matrices[token]
    if VAR_NAME_RE.match(token):
        raise ParseError(f"Unknown matrix '{token}'")
    return parse_matrix_text(token, ctx.field_name)


def evaluate_operation(op: str, operands: List[str], ctx: ReplContext) -> Dict[str, Any]:
    """Run one named operation and return a result dictionary.

    Kernel errors are reported in the dictionary (``ok`` False) so the
    session keeps running.
    """
    if op not in OPERATIONS:
        return {"ok": False, "error": f"Unknown operation '{op}'", "error_code": "UNKNOWN_OP"}
    kinds, _ = OPERATIONS[op]
    if len(operands) != len(kinds):
        return {
            "ok": False,
            "error": f"'{op}' takes {len(kinds)} operand(s), got {len(operands)}",
            "error_code": "ARITY",
        }
    try:
        args = []
        for kind, token in zip(kinds, operands):
            if kind == "m":
                args.append(resolve_matrix(token, ctx))
            else:
                args.append(parse_scalar(token, ctx.field_name))
    except MatrixError as e:
        return {"ok": False, "error": str(e), "error_code": type(e).__name__}
    return apply_operation(op, args, ctx)


def apply_operation(op: str, args: List[Any], ctx: ReplContext) -> Dict[str, Any]:
    """Run ``op`` on already resolved matrices and scalars."""
    _, handler = OPERATIONS[op]
    try:
        start = time.perf_counter()
        res = handler(*args)
        elapsed = time.perf_counter() - start
    except MatrixError as e:
        logger.debug("Operation %s failed: %s", op, e, exc_info=True)
        return {"ok": False, "error": str(e), "error_code": type(e).__name__}

    if ctx.timing_enabled:
        res["elapsed"] = elapsed
    if res.get("type") == "matrix":
        ctx.last_result = res["result"]
    if res.get("type") == "guided":
        res["steps"] = ctx.show_steps
    return res


def run_operation_text(text: str, ctx: ReplContext) -> bool:
    """Evaluate ``"<op> <operand> ..."`` and print the result. Returns success."""
    parts = split_operands(text.strip())
    if not parts:
        return False
    res = evaluate_operation(parts[0].lower(), parts[1:], ctx)
    print_result_pretty(res)
    if "elapsed" in res:
        print(f"[Time: {res['elapsed'] * 1000:.3f} ms]")
    return bool(res.get("ok"))


def handle_assignment(text: str, ctx: ReplContext) -> bool:
    """Handle ``A = <matrix>`` or ``A = <op> <operands>``. Returns success."""
    name, rhs = (s.strip() for s in text.split("=", 1))
    if not VAR_NAME_RE.match(name) or name == "ans":
        print(f"Error: invalid matrix name '{name}'")
        return False
    if name.lower() in COMMAND_REGISTRY:
        print(f"Error: '{name}' is a command name and cannot hold a matrix")
        return False
    first = rhs.split()[0].lower() if rhs.split() else ""
    if first in OPERATIONS:
        parts = split_operands(rhs)
        res = evaluate_operation(first, parts[1:], ctx)
        if not res.get("ok"):
            print_result_pretty(res)
            return False
        if res.get("type") != "matrix":
            print(f"Error: '{first}' does not produce a matrix")
            return False
        value = res["result"]
    else:
        try:
            value = resolve_matrix(rhs, ctx).copy()
        except MatrixError as e:
            print(f"Error: {e}")
            return False
    ctx.matrices[name] = value
    print(f"{name} =")
    print(format_matrix(value))
    return True


def _handle_field_command(text: str, ctx: ReplContext) -> None:
    parts = text.split()
    if len(parts) != 2:
        print(f"Current field: {ctx.field_name}. Usage: field <float|fraction>")
        return
    try:
        f = get_field(parts[1])
    except ValueError as e:
        print(f"Error: {e}")
        return
    ctx.field_name = f.name
    try:
        ctx.matrices = {k: m.with_field(f) for k, m in ctx.matrices.items()}
        ctx.last_result = ctx.last_result.with_field(f) if ctx.last_result is not None else None
    except ValueError as e:
        logger.debug("Field conversion failed", exc_info=True)
        print(f"Error converting stored matrices: {e}")
        ctx.matrices.clear()
        ctx.last_result = None
    print(f"Scalar field set to {f.name}.")


def _handle_show_command(text: str, ctx: ReplContext) -> None:
    parts = text.split()
    names = parts[1:] if len(parts) > 1 else sorted(ctx.matrices)
    if not names:
        print("No matrices defined.")
        return
    for name in names:
        m = ctx.last_result if name == "ans" else ctx.matrices.get(name)
        if m is None:
            print(f"{name}: not defined")
            continue
        print(f"{name} ({m.rows}x{m.cols}, {m.field.name}):")
        print(format_matrix(m))


def _toggle_setting(text: str, ctx: ReplContext, attr: str, name: str) -> None:
    parts = text.split()
    if len(parts) == 2 and parts[1].lower() in ("on", "off"):
        setattr(ctx, attr, parts[1].lower() == "on")
        print(f"{name} {'enabled' if getattr(ctx, attr) else 'disabled'}.")
    else:
        print(f"Usage: {parts[0]} <on|off>")


def handle_command(text: str, ctx: ReplContext) -> bool:
    """
    Attempt to handle the input text as a non-math command.
    Returns True if handled, False otherwise.
    """
    raw_lower = text.lower().strip()
    word = raw_lower.split()[0] if raw_lower else ""

    if word in ("show", "list"):
        _handle_show_command(text, ctx)
        return True
    if word == "clear":
        ctx.matrices.clear()
        ctx.last_result = None
        print("Stored matrices cleared.")
        return True
    if word == "field":
        _handle_field_command(text, ctx)
        return True
    if word == "steps":
        _toggle_setting(text, ctx, "show_steps", "Step narration")
        return True
    if word == "timing":
        _toggle_setting(text, ctx, "timing_enabled", "Timing")
        return True
    if word == "debug":
        handle_debug_command(ctx, text)
        return True
    if word == "health":
        from .app import _health_check

        _health_check()
        return True
    return False
