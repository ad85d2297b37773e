import logging
from typing import Any

from .. import config
from ..fraction import Fraction
from ..matrix import Matrix
from ..types import GuidedSolution

logger = logging.getLogger(__name__)


def format_number_no_trailing_zeros(num_str: str) -> str:
    """Format a number string by removing trailing zeros and decimal point if not needed."""
    try:
        num = float(num_str)
        if num.is_integer():
            return str(int(num))
        return str(num).rstrip("0").rstrip(".")
    except (ValueError, TypeError, OverflowError):
        return num_str


def format_scalar(value: Any, precision: int | None = None) -> str:
    """Render one matrix entry.

    Fractions print exactly (``"3"``, ``"-2/5"``); floats print with a fixed
    number of decimals. A float that rounds to zero prints without a sign.
    """
    if isinstance(value, Fraction):
        return value.format()
    p = config.OUTPUT_PRECISION if precision is None else precision
    text = f"{float(value):.{p}f}"
    if float(text) == 0.0:
        text = text.lstrip("-")
    return text


def format_compact(value: Any) -> str:
    """Shortest readable form, used inside narration text."""
    if isinstance(value, Fraction):
        return value.format()
    return format_number_no_trailing_zeros(repr(float(value)))


def format_matrix(
    m: Matrix,
    precision: int | None = None,
    width: int | None = None,
    augmented: bool = False,
) -> str:
    """Render a matrix as ``| a b c |`` rows.

    With ``augmented`` a vertical bar separates the last column, as in
    ``[A | b]``.
    """
    w = config.CELL_WIDTH if width is None else width
    lines = []
    for row in m.to_rows():
        cells = [format_scalar(v, precision).rjust(w) for v in row]
        if augmented and len(cells) > 1:
            body = " ".join(cells[:-1]) + " | " + cells[-1]
        else:
            body = " ".join(cells)
        lines.append(f"| {body} |")
    return "\n".join(lines)


def format_determinant(value: Any) -> str:
    if isinstance(value, Fraction):
        return value.format()
    return format_scalar(value, config.DETERMINANT_PRECISION)


def format_guided_solution(solution: GuidedSolution, show_steps: bool = True) -> str:
    lines = []
    if show_steps:
        for i, step in enumerate(solution.steps, 1):
            lines.append(f"Step {i}: {step.description}")
            lines.append(format_matrix(step.matrix, augmented=True))
            lines.append("")
    if not solution.ok:
        lines.append(f"Result: {solution.reason}")
        return "\n".join(lines)
    x, y, z = solution.solution
    lines.append("Solution:")
    lines.append(f"  x = {format_compact(x)}")
    lines.append(f"  y = {format_compact(y)}")
    lines.append(f"  z = {format_compact(z)}")
    return "\n".join(lines)


def print_result_pretty(res: dict[str, Any]) -> None:
    """Print a result dictionary produced by the CLI dispatcher."""
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    typ = res.get("type", "matrix")
    title = res.get("title")
    if title:
        print(f"\n{title}:")
    if typ == "matrix":
        print(format_matrix(res["result"]))
    elif typ == "determinant":
        print(f"Determinant: {format_determinant(res['result'])}")
    elif typ == "rank":
        print(f"Rank: {res['result']}")
    elif typ == "guided":
        print(format_guided_solution(res["result"], show_steps=res.get("steps", True)))
    else:
        logger.debug("Unknown result type %r, printing raw value", typ)
        print(res.get("result"))
