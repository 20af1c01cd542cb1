"""
Incremental Compiler

Single-statement compilation for the interactive session. The outcome is an
explicit tagged value so the session can tell "needs more input" apart from
"syntax error" without looking at error messages.
"""

import codeop
import logging
from dataclasses import dataclass
from enum import Enum
from types import CodeType
from typing import Optional

from ..utils.config import INTERACTIVE_SOURCE_NAME

logger = logging.getLogger(__name__)

# Flags that let codeop accept a statement prefix; dropped for strict compiles
_PARTIAL_INPUT_FLAGS = codeop.PyCF_DONT_IMPLY_DEDENT | getattr(codeop, "PyCF_ALLOW_INCOMPLETE_INPUT", 0)


class CompileOutcomeTag(Enum):
    """Compile step discriminant"""
    COMPILED = "compiled"
    INCOMPLETE = "incomplete"
    INVALID = "invalid"


@dataclass
class CompileOutcome:
    """Compiled(code) | Incomplete | Invalid(SyntaxError)"""
    tag: CompileOutcomeTag
    code: Optional[CodeType] = None
    error: Optional[SyntaxError] = None

    @classmethod
    def compiled(cls, code: CodeType) -> 'CompileOutcome':
        return cls(CompileOutcomeTag.COMPILED, code=code)

    @classmethod
    def incomplete(cls) -> 'CompileOutcome':
        return cls(CompileOutcomeTag.INCOMPLETE)

    @classmethod
    def invalid(cls, error: SyntaxError) -> 'CompileOutcome':
        return cls(CompileOutcomeTag.INVALID, error=error)

    def is_compiled(self) -> bool:
        return self.tag == CompileOutcomeTag.COMPILED

    def is_incomplete(self) -> bool:
        return self.tag == CompileOutcomeTag.INCOMPLETE

    def is_invalid(self) -> bool:
        return self.tag == CompileOutcomeTag.INVALID


class IncrementalCompiler:
    """
    Compiles accumulated interactive input one statement at a time.

    Wraps ``codeop.CommandCompiler`` so ``from __future__`` statements entered
    earlier in the session stay in effect for later input.
    """

    def __init__(self, filename: str = INTERACTIVE_SOURCE_NAME, optimize: int = 0):
        self.filename = filename
        self.optimize = optimize
        self._command_compiler = codeop.CommandCompiler()

    def compile(self, source: str, allow_incomplete: bool = True) -> CompileOutcome:
        """
        Compile ``source`` as a single interactive statement.

        With ``allow_incomplete`` false, input that is only a prefix of a
        statement is reported as the syntax error the parser gives for it.
        """
        try:
            code = self._command_compiler(source, self.filename, "single")
        except (SyntaxError, ValueError, OverflowError) as exc:
            return CompileOutcome.invalid(self._as_syntax_error(exc))

        if code is None:
            if allow_incomplete:
                return CompileOutcome.incomplete()
            return self._compile_strict(source)

        if self.optimize:
            return self._compile_strict(source)
        return CompileOutcome.compiled(code)

    def _compile_strict(self, source: str) -> CompileOutcome:
        flags = self._command_compiler.compiler.flags & ~_PARTIAL_INPUT_FLAGS
        try:
            code = compile(source, self.filename, "single", flags, True, self.optimize)
        except (SyntaxError, ValueError, OverflowError) as exc:
            return CompileOutcome.invalid(self._as_syntax_error(exc))
        return CompileOutcome.compiled(code)

    def _as_syntax_error(self, exc: Exception) -> SyntaxError:
        if isinstance(exc, SyntaxError):
            # compile-time failure: no frame of the session is relevant to the user
            return exc.with_traceback(None)
        # compile() rejects e.g. null bytes with ValueError
        return SyntaxError(str(exc), (self.filename, 1, 0, None))
