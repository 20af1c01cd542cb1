"""
Line Editor

The session reads input through this small interface so the state machine can
be driven by a scripted reader in tests:

    read_line(prompt) -> ReadResult (Line | Interrupted | EndOfInput | Failure)
    add_history(text), load_history(path), save_history(path)
"""

import importlib
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import ModuleType
from typing import Callable, Optional, Union

from .history import History

logger = logging.getLogger(__name__)


class ReadResultTag(Enum):
    """Outcome of one blocking read"""
    LINE = "line"
    INTERRUPTED = "interrupted"
    END_OF_INPUT = "end_of_input"
    FAILURE = "failure"


@dataclass
class ReadResult:
    tag: ReadResultTag
    text: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def line(cls, text: str) -> 'ReadResult':
        return cls(ReadResultTag.LINE, text=text)

    @classmethod
    def interrupted(cls) -> 'ReadResult':
        return cls(ReadResultTag.INTERRUPTED)

    @classmethod
    def end_of_input(cls) -> 'ReadResult':
        return cls(ReadResultTag.END_OF_INPUT)

    @classmethod
    def failure(cls, error: BaseException) -> 'ReadResult':
        return cls(ReadResultTag.FAILURE, error=error)


class LineEditor:
    """
    Base line editor: owns the session history.

    Subclasses implement ``read_line``.
    """

    def __init__(self, history: Optional[History] = None):
        self.history = history if history is not None else History()

    def read_line(self, prompt: str) -> ReadResult:
        raise NotImplementedError

    def add_history(self, text: str) -> None:
        self.history.append(text)

    def load_history(self, path: Union[Path, str]) -> bool:
        return self.history.load(path)

    def save_history(self, path: Union[Path, str]) -> bool:
        return self.history.save(path)


def _load_readline() -> Optional[ModuleType]:
    try:
        return importlib.import_module("readline")
    except ImportError:
        logger.info("readline module not available, line editing disabled")
        return None


class ConsoleLineEditor(LineEditor):
    """Reads from the terminal with ``input()``; uses readline for editing when present."""

    def __init__(
        self,
        history: Optional[History] = None,
        input_func: Callable[[str], str] = input,
        use_readline: bool = True,
    ):
        super().__init__(history)
        self._input = input_func
        self._readline = _load_readline() if use_readline else None

    def read_line(self, prompt: str) -> ReadResult:
        try:
            text = self._input(prompt)
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            return ReadResult.interrupted()
        except EOFError:
            sys.stdout.write("\n")
            return ReadResult.end_of_input()
        except (OSError, UnicodeDecodeError, RuntimeError) as exc:
            return ReadResult.failure(exc)
        return ReadResult.line(text)

    def load_history(self, path: Union[Path, str]) -> bool:
        loaded = super().load_history(path)
        if self._readline is not None:
            # readline records new lines itself; seed it with the stored ones
            clear_history = getattr(self._readline, "clear_history", None)
            if clear_history is not None:
                clear_history()
            for entry in self.history.entries:
                if entry:
                    self._readline.add_history(entry)
        return loaded
