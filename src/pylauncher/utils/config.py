"""
Configuration constants to replace magic strings throughout pylauncher
"""

from typing_extensions import Final

PROGRAM_NAME: Final = "pylauncher"

# Environment variables consulted unless -E is given
RUNTIME_PATH_VAR: Final = "PYLAUNCHERPATH"   # runtime-specific search path, takes priority
GENERAL_PATH_VAR: Final = "PYTHONPATH"
DEBUG_VAR: Final = "PYTHONDEBUG"
INSPECT_VAR: Final = "PYTHONINSPECT"
NO_USER_SITE_VAR: Final = "PYTHONNOUSERSITE"
DONT_WRITE_BYTECODE_VAR: Final = "PYTHONDONTWRITEBYTECODE"
OPTIMIZE_VAR: Final = "PYTHONOPTIMIZE"
VERBOSE_VAR: Final = "PYTHONVERBOSE"
STARTUP_VAR: Final = "PYTHONSTARTUP"

# Read even with -E (it configures the launcher, not the runtime)
LOG_LEVEL_VAR: Final = "PYLAUNCHER_LOG"

# Integer environment values are parsed as unsigned 8-bit numbers
MAX_LEVEL: Final = 255
MALFORMED_LEVEL: Final = 1

# argv[0] placeholders
COMMAND_ARGV0: Final = "-c"
MODULE_ARGV0: Final = "-m"

# Synthetic source names
COMMAND_SOURCE_NAME: Final = "<string>"
INTERACTIVE_SOURCE_NAME: Final = "<stdin>"

# Directory invocation
ENTRY_POINT_MODULE: Final = "__main__"
ENTRY_POINT_FILE: Final = ENTRY_POINT_MODULE + ".py"

# Interactive session
PRIMARY_PROMPT_NAME: Final = "ps1"
SECONDARY_PROMPT_NAME: Final = "ps2"
DEFAULT_PRIMARY_PROMPT: Final = ">>> "
DEFAULT_SECONDARY_PROMPT: Final = "... "
LAST_RESULT_NAME: Final = "_"
RECENT_OUTCOMES: Final = 16

# History lives under the per-user configuration directory
HISTORY_DIR_NAME: Final = "pylauncher"
HISTORY_FILE_NAME: Final = "repl_history.txt"
FALLBACK_HISTORY_FILE: Final = ".repl_history.txt"
MAX_HISTORY_ENTRIES: Final = 100

# File encoding constants
DEFAULT_FILE_ENCODING: Final = "utf-8"
