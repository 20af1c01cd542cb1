"""
Collaborator runtime: the host interpreter behind a small interface.
"""

from .compiler import CompileOutcome, CompileOutcomeTag, IncrementalCompiler
from .environment import LaunchContext
from .runtime import PythonRuntime

__all__ = ["CompileOutcome", "CompileOutcomeTag", "IncrementalCompiler", "LaunchContext", "PythonRuntime"]
