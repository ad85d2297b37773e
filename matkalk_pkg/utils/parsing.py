import logging
from typing import Any

from .. import config
from ..field import ScalarField
from ..field import get_field
from ..matrix import Matrix
from ..types import InvalidDimensionsError
from ..types import ParseError

logger = logging.getLogger(__name__)


def _normalize_brackets(text: str) -> str:
    """Turn ``[[1, 2], [3, 4]]`` into ``1, 2; 3, 4``."""
    t = text.strip()
    if not t.startswith("["):
        return t
    inner = t[1:-1].strip() if t.endswith("]") else t[1:]
    rows = []
    depth = 0
    current = []
    for ch in inner:
        if ch == "[":
            depth += 1
            continue
        if ch == "]":
            depth -= 1
            rows.append("".join(current))
            current = []
            continue
        if depth == 0 and ch == ",":
            ch = " "
        current.append(ch)
    if "".join(current).strip():
        rows.append("".join(current))
    return ";".join(rows)


def parse_scalar(text: str, field: ScalarField | str) -> Any:
    """Read a single scalar for ``field``.

    The fraction field is lenient (bad text is zero); the float field raises
    :class:`ParseError`.
    """
    f = get_field(field)
    try:
        return f.parse(text)
    except ValueError:
        raise ParseError(f"Invalid number: '{text}'") from None


def parse_matrix_text(text: str, field: ScalarField | str) -> Matrix:
    """Parse matrix text such as ``"1 2; 3 4"`` or ``"[[1, 2], [3, 4]]"``.

    Rows are separated by ``;`` or newlines, cells by commas or whitespace.
    """
    f = get_field(field)
    body = _normalize_brackets(text)
    raw_rows = [r.strip() for r in config.ROW_SEPARATOR_RE.split(body) if r.strip()]
    if not raw_rows:
        raise ParseError("Empty matrix")

    rows = []
    for i, raw in enumerate(raw_rows):
        cells = [c for c in config.CELL_SEPARATOR_RE.split(raw) if c]
        try:
            rows.append([f.parse(c) for c in cells])
        except ValueError:
            raise ParseError(f"Invalid number in row {i + 1}: '{raw}'") from None

    if len(rows) > config.MAX_DIMENSION or any(
        len(r) > config.MAX_DIMENSION for r in rows
    ):
        raise InvalidDimensionsError(
            f"Matrices are limited to {config.MAX_DIMENSION}x{config.MAX_DIMENSION}"
        )
    logger.debug("Parsed %d row(s) as %s matrix", len(rows), f.name)
    return Matrix.from_rows(rows, field=f)
