"""
Exit codes for Pomodoro CLI.

Semantic exit codes so scripts can tell what went wrong.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Configuration could not be read or written
ERROR_CONFIG = 3

# The timer needs an interactive terminal
ERROR_NO_TERMINAL = 4


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_CONFIG: "ERROR_CONFIG",
        ERROR_NO_TERMINAL: "ERROR_NO_TERMINAL",
    }
    return code_names.get(code, f"UNKNOWN({code})")
