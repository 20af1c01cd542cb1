"""
Interactive session: state machine, line editor and history.
"""

from .history import History
from .line_editor import ConsoleLineEditor, LineEditor, ReadResult, ReadResultTag
from .session import IterationKind, IterationOutcome, ReplSession, SessionState

__all__ = [
    "History",
    "ConsoleLineEditor",
    "LineEditor",
    "ReadResult",
    "ReadResultTag",
    "IterationKind",
    "IterationOutcome",
    "ReplSession",
    "SessionState",
]
