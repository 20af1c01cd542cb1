"""
Pytest configuration and shared fixtures for all pylauncher tests.

Fixtures hand out runtimes bound to an isolated sys namespace, scripted
sessions and a capturing exception reporter, so no test touches the real
interpreter's sys.path, sys.argv or terminal.
"""

import io
import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from pylauncher.driver.settings import Settings
from pylauncher.repl.session import ReplSession
from pylauncher.shared.errors import ExceptionReporter
from tests.test_utils import ScriptedLineEditor, fake_sys, make_runtime


# =============================================================================
# Runtime fixtures
# =============================================================================

@pytest.fixture
def sys_namespace():
    """Isolated sys namespace with the default prompts installed."""
    return fake_sys(ps1=">>> ", ps2="... ")


@pytest.fixture
def runtime(sys_namespace):
    """Function-scoped runtime with default settings over the isolated namespace."""
    return make_runtime(Settings(), sys_namespace)


@pytest.fixture
def reporter():
    """Exception reporter writing into a StringIO (read it with ``reporter.stream.getvalue()``)."""
    return ExceptionReporter(stream=io.StringIO())


# =============================================================================
# Session fixtures
# =============================================================================

@pytest.fixture
def make_session(runtime, reporter):
    """
    Factory fixture: build a ReplSession over scripted input.

    Usage:
        def test_something(make_session):
            session = make_session(["1 + 1"])
            session.run()
    """
    def _make(items, history_path=None, **kwargs):
        editor = ScriptedLineEditor(items)
        return ReplSession(runtime, editor, history_path=history_path, reporter=reporter, **kwargs)
    return _make


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests that launch a pylauncher subprocess"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
