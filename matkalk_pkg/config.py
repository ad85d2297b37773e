"""Centralized configuration for matkalk.

This module defines:
- Numeric thresholds used by pivoting and singularity detection
- Output formatting defaults for the console front end
- Input limits for interactively entered matrices

Configuration can be overridden via:
- CLI flags (see cli/app.py)
- Environment variables (prefixed with MATKALK_)
"""

import os
import re

VERSION = "1.0.0"

# Numeric thresholds (floating-point field only; the fraction field is exact)
EPSILON = float(
    os.getenv("MATKALK_EPSILON", "1e-10")
)  # Pivot / determinant magnitude treated as zero
APPROX_TOLERANCE = float(
    os.getenv("MATKALK_APPROX_TOLERANCE", "1e-9")
)  # Default tolerance for approx_equal

# Output formatting
OUTPUT_PRECISION = int(
    os.getenv("MATKALK_OUTPUT_PRECISION", "3")
)  # Decimal places for matrix cells
DETERMINANT_PRECISION = int(
    os.getenv("MATKALK_DETERMINANT_PRECISION", "6")
)  # Decimal places for a printed determinant
CELL_WIDTH = int(os.getenv("MATKALK_CELL_WIDTH", "10"))

# Input limits
MAX_DIMENSION = int(
    os.getenv("MATKALK_MAX_DIMENSION", "20")
)  # Largest row/column count accepted from the console
DEFAULT_FIELD = os.getenv("MATKALK_DEFAULT_FIELD", "float")  # "float" or "fraction"

ROW_SEPARATOR_RE = re.compile(r"[;\n]")
CELL_SEPARATOR_RE = re.compile(r"[,\s]+")
VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
