"""
Error Reporting

Launcher error taxonomy plus the single rendering path for uncaught
exceptions. Fatal launcher errors (bad configuration, missing script) are
exceptions carrying a human-readable message; everything raised by executed
code is rendered as a standard traceback.
"""

import os
import runpy
import sys
import traceback
from pathlib import Path
from types import TracebackType
from typing import Optional, TextIO

from ..utils.config import PROGRAM_NAME


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set or not a TTY)
# ---------------------------------------------------------------------------

def _use_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("PYLAUNCHER_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    if explicit in ("1", "true", "yes", "always"):
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ============================================================================
# Exception Classes
# ============================================================================

class LauncherError(Exception):
    """Base exception for fatal launcher errors (always exit status 1)"""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ConfigurationError(LauncherError):
    """
    Settings could not be resolved (e.g. an undecodable search path entry).

    Raised before anything is executed.
    """


class LaunchError(LauncherError):
    """
    The requested execution source cannot be launched.

    Covers a missing script, a directory without an entry-point module and an
    unreadable script file. ``kind`` distinguishes them for callers and tests.
    """
    NO_SUCH_FILE = "no_such_file"
    NO_ENTRY_POINT = "no_entry_point"
    UNREADABLE = "unreadable"

    def __init__(self, message: str, kind: str, path: Optional[Path] = None):
        super().__init__(message)
        self.kind = kind
        self.path = path


def format_launcher_error(error: LauncherError, stream: Optional[TextIO] = None) -> str:
    """Render a fatal launcher error as ``pylauncher: error: <message>``."""
    color = _use_color(stream if stream is not None else sys.stderr)
    return (
        _style(f"{PROGRAM_NAME}: ", _BOLD, color=color)
        + _style("error", _BOLD, _RED, color=color)
        + f": {error.message}"
    )


# ============================================================================
# ExceptionReporter
# ============================================================================

# Frames from these locations are the launcher's, not the user's
_PACKAGE_DIR = str(Path(__file__).resolve().parent.parent) + os.sep
_RUNPY_FILE = str(Path(runpy.__file__).resolve())


def _frame_file(tb: TracebackType) -> Optional[str]:
    try:
        return str(Path(tb.tb_frame.f_code.co_filename).resolve())
    except (OSError, ValueError):
        return None


def _is_package_frame(tb: TracebackType) -> bool:
    filename = _frame_file(tb)
    return filename is not None and filename.startswith(_PACKAGE_DIR)


def _is_launcher_frame(tb: TracebackType) -> bool:
    return _is_package_frame(tb) or _frame_file(tb) == _RUNPY_FILE


def _user_traceback(tb: Optional[TracebackType]) -> Optional[TracebackType]:
    """
    Drop the frames that belong to the launcher itself.

    Leading launcher and runpy frames are skipped; package frames deeper in
    the chain (e.g. the display hook calling a failing ``__repr__``) are
    unlinked by rebuilding the traceback.
    """
    while tb is not None and _is_launcher_frame(tb):
        tb = tb.tb_next

    kept = []
    while tb is not None:
        if not _is_package_frame(tb):
            kept.append(tb)
        tb = tb.tb_next

    rebuilt = None
    for entry in reversed(kept):
        rebuilt = TracebackType(rebuilt, entry.tb_frame, entry.tb_lasti, entry.tb_lineno)
    return rebuilt


class ExceptionReporter:
    """
    Renders unrecovered exceptions as a standard traceback report.

    The reporter never exits the process: the interactive session calls
    ``report`` per failed statement, and ``handle_exception`` turns the final
    outcome of a launch into an exit status for the process boundary.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected sys.stderr (tests, embedding) is honored
        return self._stream if self._stream is not None else sys.stderr

    def render(self, exc: BaseException) -> str:
        tb = _user_traceback(exc.__traceback__)
        return "".join(traceback.format_exception(type(exc), exc, tb))

    def report(self, exc: BaseException) -> None:
        self.stream.write(self.render(exc))
        self.stream.flush()


def exit_status_for_system_exit(exc: SystemExit, stream: TextIO) -> int:
    """Exit status requested by ``SystemExit``, printing non-integer codes."""
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    stream.write(f"{code}\n")
    stream.flush()
    return 1


def handle_exception(exc: Optional[BaseException], reporter: Optional[ExceptionReporter] = None) -> int:
    """
    Compute the process exit status for the outcome of a launch.

    ``None`` means success (0). ``SystemExit`` carries its own status. Anything
    else is reported and maps to 1. The caller applies the status.
    """
    if exc is None:
        return 0
    reporter = reporter if reporter is not None else ExceptionReporter()
    if isinstance(exc, SystemExit):
        return exit_status_for_system_exit(exc, reporter.stream)
    reporter.report(exc)
    return 1
