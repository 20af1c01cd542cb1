"""
Interactive Session

Line-oriented state machine over the incremental compiler.

States:
- FRESH: no pending partial input, primary prompt
- CONTINUATION: the buffer holds an incomplete statement, secondary prompt

Per read line: record it in history, append it to the buffer, force FRESH if
it is an empty line ending a continuation, then compile the buffer.
Incomplete input keeps the buffer and moves to CONTINUATION; anything else
(executed, syntax error, runtime failure) clears the buffer and returns to
FRESH. Interrupts during a read drop the buffer and are reported; end of input
ends the loop. History is flushed on the way out.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Deque, Optional, Union

from ..runtime.compiler import IncrementalCompiler
from ..runtime.runtime import PythonRuntime
from ..shared.errors import ExceptionReporter
from ..utils.config import LAST_RESULT_NAME, PRIMARY_PROMPT_NAME, RECENT_OUTCOMES, SECONDARY_PROMPT_NAME
from ..utils.io_utils import read_source_file
from .line_editor import LineEditor, ReadResultTag

logger = logging.getLogger(__name__)


class SessionState(Enum):
    FRESH = "fresh"
    CONTINUATION = "continuation"


class IterationKind(Enum):
    """What one loop iteration did"""
    EXECUTED = "executed"
    CONTINUE = "continue"
    FAILED = "failed"
    INTERRUPTED = "interrupted"


@dataclass
class IterationOutcome:
    kind: IterationKind
    state: SessionState
    value: Optional[Any] = None
    error: Optional[BaseException] = None


class ReplSession:
    """
    Read-eval-print loop over one persistent scope (the context's globals).

    The session never exits the process. ``SystemExit`` raised by a statement
    ends the loop and propagates after history has been saved.
    """

    def __init__(
        self,
        runtime: PythonRuntime,
        editor: LineEditor,
        history_path: Optional[Union[Path, str]] = None,
        reporter: Optional[ExceptionReporter] = None,
        compiler: Optional[IncrementalCompiler] = None,
        banner: Optional[str] = None,
        startup_file: Optional[Union[Path, str]] = None,
    ):
        self.runtime = runtime
        self.context = runtime.context
        self.editor = editor
        self.history_path = Path(history_path) if history_path is not None else None
        self.reporter = reporter if reporter is not None else ExceptionReporter()
        self.compiler = compiler if compiler is not None else runtime.incremental_compiler()
        self.banner = banner
        self.startup_file = startup_file

        self.input_buffer = ""
        self.state = SessionState.FRESH
        # only the most recent outcomes: each failure pins its traceback frames
        self.outcomes: Deque[IterationOutcome] = deque(maxlen=RECENT_OUTCOMES)
        self.history_saved: Optional[bool] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> None:
        self.start()
        try:
            while self.step():
                pass
        finally:
            self.shutdown()

    def start(self) -> None:
        if self.banner:
            print(self.banner)
        if self.history_path is not None:
            self.editor.load_history(self.history_path)
        if self.startup_file is not None:
            self._run_startup_file(Path(self.startup_file))

    def shutdown(self) -> Optional[bool]:
        if self.history_path is not None:
            self.history_saved = self.editor.save_history(self.history_path)
        return self.history_saved

    def _run_startup_file(self, path: Path) -> None:
        try:
            source = read_source_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not open startup file %s: %s", path, exc)
            return
        try:
            self.runtime.run_source(source, str(path))
        except SystemExit:
            raise
        except BaseException as exc:
            self.reporter.report(exc)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def current_prompt(self) -> str:
        name = PRIMARY_PROMPT_NAME if self.state == SessionState.FRESH else SECONDARY_PROMPT_NAME
        prompt = self.context.get_prompt(name)
        return prompt if prompt is not None else ""

    def step(self) -> bool:
        """Run one read/compile/execute iteration. False once the loop should end."""
        result = self.editor.read_line(self.current_prompt())

        if result.tag == ReadResultTag.LINE:
            self.feed(result.text)
            return True
        if result.tag == ReadResultTag.INTERRUPTED:
            self.interrupt()
            return True
        if result.tag == ReadResultTag.END_OF_INPUT:
            return False

        logger.error("Readline error: %r", result.error)
        return False

    def feed(self, line: str) -> IterationOutcome:
        """Process one successfully read line."""
        logger.debug("You entered %r", line)
        self.editor.add_history(line.rstrip())

        stop_continuing = line == ""
        self.input_buffer += line + "\n"

        forced_fresh = False
        if self.state == SessionState.CONTINUATION and stop_continuing:
            self.state = SessionState.FRESH
            forced_fresh = True

        compiled = self.compiler.compile(self.input_buffer, allow_incomplete=not forced_fresh)

        if compiled.is_incomplete():
            self.state = SessionState.CONTINUATION
            return self._record(IterationKind.CONTINUE)

        if compiled.is_invalid():
            self._reset()
            self.reporter.report(compiled.error)
            return self._record(IterationKind.FAILED, error=compiled.error)

        try:
            value = self.runtime.run_interactive(compiled.code)
        except SystemExit:
            self._reset()
            raise
        except BaseException as exc:
            self._reset()
            self.reporter.report(exc)
            return self._record(IterationKind.FAILED, error=exc)

        if value is not None:
            self.context.bind(LAST_RESULT_NAME, value)
        self._reset()
        return self._record(IterationKind.EXECUTED, value=value)

    def interrupt(self) -> IterationOutcome:
        """A read was interrupted: drop partial input and report it."""
        self._reset()
        exc = KeyboardInterrupt()
        self.reporter.report(exc)
        return self._record(IterationKind.INTERRUPTED, error=exc)

    def _reset(self) -> None:
        self.input_buffer = ""
        self.state = SessionState.FRESH

    def _record(self, kind: IterationKind, value: Any = None, error: Optional[BaseException] = None) -> IterationOutcome:
        outcome = IterationOutcome(kind=kind, state=self.state, value=value, error=error)
        self.outcomes.append(outcome)
        return outcome
