import logging

from ..context import ReplContext


def _set_log_level(level: int) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
    logging.getLogger("matkalk_pkg").setLevel(level)


def handle_debug_command(ctx: ReplContext, cmd: str) -> None:
    """Handle the 'debug' command."""
    parts = str(cmd).split()
    if len(parts) > 1:
        mode = parts[1].lower()
        if mode in ("on", "true", "enabled"):
            ctx.debug_mode = True
            ctx.timing_enabled = True
            _set_log_level(logging.DEBUG)
            print("Debug mode enabled (timing + pivot logging).")
        elif mode in ("off", "false", "disabled"):
            ctx.debug_mode = False
            ctx.timing_enabled = False
            _set_log_level(logging.WARNING)
            print("Debug mode disabled.")
        else:
            print("Usage: debug <on|off>")
    else:
        state = "on" if ctx.debug_mode else "off"
        print(f"Debug mode is {state}. Usage: debug <on|off>")
