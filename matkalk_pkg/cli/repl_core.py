import logging
from typing import Callable
from typing import Optional

from .. import config
from ..matrix import Matrix
from ..types import MatrixError
from ..utils.formatting import print_result_pretty
from ..utils.parsing import parse_matrix_text
from ..utils.parsing import parse_scalar
from .context import ReplContext
from .repl_commands import OPERATIONS
from .repl_commands import apply_operation
from .repl_commands import handle_assignment
from .repl_commands import handle_command
from .repl_commands import run_operation_text

logger = logging.getLogger(__name__)

# (label, operation); operation None leaves the menu
MENU_ITEMS = [
    ("Matrix Addition (A + B)", "add"),
    ("Matrix Subtraction (A - B)", "sub"),
    ("Matrix Multiplication (A * B)", "mul"),
    ("Scalar Multiplication (k * A)", "scale"),
    ("Scalar Division (A / k)", "div"),
    ("Matrix Transpose (A^T)", "transpose"),
    ("Matrix Determinant (det(A))", "det"),
    ("Cofactor Matrix", "cofactor"),
    ("Matrix Inverse (A^-1)", "inverse"),
    ("Reduced Row-Echelon Form (RREF)", "rref"),
    ("Solve 3 Linear Equations (guided)", "solve"),
    ("Back to command prompt", None),
]


class REPL:
    """
    Interactive session: a command prompt plus the numbered menu of the
    classic console calculator.
    """

    def __init__(
        self,
        context: Optional[ReplContext] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ):
        self.ctx = context if context else ReplContext()
        self.running = True
        self._input = input_func or input

    def start(self):
        """Main loop entry point."""
        print(
            f"matkalk v{config.VERSION} ({self.ctx.field_name} field) - "
            "type 'help' for commands, 'menu' for the menu, 'quit' to exit."
        )
        while self.running:
            self.loop_once()

    def loop_once(self):
        """Single iteration of the read-eval-print loop."""
        try:
            prompt = ">>> " if not self.ctx.debug_mode else "DEBUG>>> "
            try:
                raw = self._input(prompt)
            except EOFError:
                self.running = False
                return
            self.process_input(raw)
        except KeyboardInterrupt:
            print("\n[Interrupted]")

    def process_input(self, text: str) -> bool:
        """Dispatch one line of input. Returns False if it reported an error."""
        text = text.strip()
        if not text or text.startswith("#"):
            return True

        raw_lower = text.lower()
        if raw_lower in ("quit", "exit"):
            self.running = False
            return True
        if raw_lower in ("help", "?"):
            from .app import print_help_text

            print_help_text()
            return True
        if raw_lower == "menu":
            self.run_menu()
            return True

        if "=" in text and config.VAR_NAME_RE.match(text.split("=", 1)[0].strip()):
            return handle_assignment(text, self.ctx)
        if handle_command(text, self.ctx):
            return True

        first = raw_lower.split()[0]
        if first in OPERATIONS:
            return run_operation_text(text, self.ctx)
        if "=" in text:
            return handle_assignment(text, self.ctx)

        print(f"Error: unknown command '{first}'. Type 'help' for a list of commands.")
        return False

    # Menu mode

    def print_menu(self):
        print("\n" + "=" * 50)
        print("           MATRIX CALCULATOR")
        print("=" * 50)
        for i, (label, _) in enumerate(MENU_ITEMS, 1):
            print(f"{i:<3} {label}")
        print("=" * 50)

    def run_menu(self):
        while self.running:
            self.print_menu()
            try:
                choice = self._input("Enter your choice: ").strip()
            except EOFError:
                self.running = False
                return
            if not choice.isdigit() or not 1 <= int(choice) <= len(MENU_ITEMS):
                print(f"Invalid choice. Please enter a number between 1-{len(MENU_ITEMS)}.")
                continue
            label, op = MENU_ITEMS[int(choice) - 1]
            if op is None:
                return
            print(f"\n--- {label} ---")
            try:
                self._run_menu_operation(op)
            except EOFError:
                self.running = False
                return

    def _read_size(self, dimension: str) -> int:
        while True:
            raw = self._input(f"Enter number of {dimension}: ").strip()
            if raw.isdigit() and 0 < int(raw) <= config.MAX_DIMENSION:
                return int(raw)
            print(f"Invalid input. Please enter an integer between 1 and {config.MAX_DIMENSION}.")

    def _read_matrix(self, label: str, rows: int, cols: int) -> Matrix:
        print(f"\nMatrix {label}:")
        print("Enter matrix elements row by row (space-separated):")
        data = []
        for i in range(rows):
            while True:
                raw = self._input(f"Row {i + 1}: ")
                try:
                    row = parse_matrix_text(raw, self.ctx.field_name)
                except MatrixError as e:
                    print(f"Invalid input: {e}")
                    continue
                if row.rows != 1 or row.cols != cols:
                    print(f"Please enter exactly {cols} value(s).")
                    continue
                data.append(row.row(0))
                break
        return Matrix.from_rows(data, field=self.ctx.field_name)

    def _read_scalar(self):
        while True:
            raw = self._input("\nEnter scalar value: ")
            try:
                return parse_scalar(raw, self.ctx.field_name)
            except MatrixError:
                print("Invalid input. Please enter a number.")

    def _run_menu_operation(self, op: str):
        kinds, _ = OPERATIONS[op]
        if op == "solve":
            print("Enter each equation a*x + b*y + c*z = d as: a b c d")
            args = [self._read_matrix("[A|b]", 3, 4)]
        elif op == "mul":
            print("Matrix A dimensions:")
            rows_a = self._read_size("rows")
            cols_a = self._read_size("columns")
            print("\nMatrix B dimensions:")
            rows_b = self._read_size("rows")
            cols_b = self._read_size("columns")
            if cols_a != rows_b:
                print("Error: Number of columns of A must equal number of rows of B")
                return
            args = [
                self._read_matrix("A", rows_a, cols_a),
                self._read_matrix("B", rows_b, cols_b),
            ]
        elif op in ("det", "cofactor", "inverse"):
            size = self._read_size("rows/columns (square matrix)")
            args = [self._read_matrix("A", size, size)]
        else:
            rows = self._read_size("rows")
            cols = self._read_size("columns")
            args = [self._read_matrix("A", rows, cols)]
            if kinds == "mm":
                args.append(self._read_matrix("B", rows, cols))
            elif kinds == "ms":
                args.append(self._read_scalar())

        res = apply_operation(op, args, self.ctx)
        print_result_pretty(res)
