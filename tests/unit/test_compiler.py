"""
Unit tests for the incremental compiler's three-way outcome.
"""

import pytest
from pylauncher.runtime.compiler import CompileOutcomeTag, IncrementalCompiler


class TestIncrementalCompiler:
    """Compiled / Incomplete / Invalid"""

    def setup_method(self):
        self.compiler = IncrementalCompiler()

    def test_complete_expression(self):
        outcome = self.compiler.compile("1 + 1\n")
        assert outcome.tag == CompileOutcomeTag.COMPILED
        assert outcome.code is not None
        assert outcome.error is None

    @pytest.mark.parametrize("source", [
        "if True:\n",
        "def f():\n",
        "x = (1,\n",
        "if True:\n    x = 1\n",
    ])
    def test_incomplete(self, source):
        assert self.compiler.compile(source).is_incomplete()

    def test_compound_statement_completed_by_blank_line(self):
        assert self.compiler.compile("if True:\n    x = 1\n\n").is_compiled()

    @pytest.mark.parametrize("source", ["x = = 1\n", ")\n", "1 2\n"])
    def test_invalid(self, source):
        outcome = self.compiler.compile(source)
        assert outcome.is_invalid()
        assert isinstance(outcome.error, SyntaxError)
        assert outcome.error.__traceback__ is None

    def test_incomplete_not_allowed_surfaces_syntax_error(self):
        outcome = self.compiler.compile("x = (1,\n\n", allow_incomplete=False)
        assert outcome.is_invalid()
        assert isinstance(outcome.error, SyntaxError)
        assert outcome.error.filename == "<stdin>"

    def test_blank_input_compiles(self):
        assert self.compiler.compile("\n").is_compiled()

    def test_optimize_strips_asserts(self):
        compiler = IncrementalCompiler(optimize=1)
        outcome = compiler.compile("assert False\n")
        assert outcome.is_compiled()
        exec(outcome.code, {})

    def test_future_imports_persist(self):
        self.compiler.compile("from __future__ import annotations\n")
        outcome = self.compiler.compile("def f(x: undefined_name): pass\n\n")
        assert outcome.is_compiled()
        scope = {}
        exec(outcome.code, scope)
        assert scope["f"].__annotations__ == {"x": "undefined_name"}
