"""
Runtime

Thin adapter over the host interpreter: compile, exec, runpy. It holds no
launch state of its own; everything it touches comes from the LaunchContext
it was created with.
"""

import importlib
import logging
import runpy
import sys
from contextlib import contextmanager
from types import CodeType, ModuleType
from typing import Any, Dict, Iterator, List, Optional

from ..utils.config import INTERACTIVE_SOURCE_NAME, RUNTIME_PATH_VAR
from .compiler import IncrementalCompiler
from .environment import LaunchContext

logger = logging.getLogger(__name__)


class PythonRuntime:
    """
    Collaborator runtime backed by the running interpreter.

    - initialize(): install the context, apply -B/-s, import site unless -S
    - run_source(): compile + exec a whole program in the main scope
    - run_module(): delegate to runpy
    - run_interactive(): exec one interactive statement, return its value
    """

    def __init__(self, context: LaunchContext):
        self.context = context
        self.settings = context.settings

    def initialize(self) -> None:
        self.context.activate()
        if self.settings.dont_write_bytecode:
            self.context.sys_module.dont_write_bytecode = True
        if not self.settings.no_site:
            self.import_site()

    def import_site(self) -> Optional[ModuleType]:
        try:
            site = importlib.import_module("site")
        except ImportError:
            logger.warning(
                "Failed to import site, consider adding the Lib directory to your %s "
                "environment variable",
                RUNTIME_PATH_VAR,
            )
            return None
        if self.settings.no_user_site:
            site.ENABLE_USER_SITE = False
            user_site = getattr(site, "USER_SITE", None)
            if user_site and user_site in self.context.path:
                self.context.path.remove(user_site)
                logger.debug("removed user site directory %s", user_site)
        return site

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self, source: str, source_path: str, mode: str = "exec") -> CodeType:
        """Compile a whole program; raises SyntaxError."""
        return compile(source, source_path, mode, dont_inherit=True, optimize=self.settings.optimize)

    def incremental_compiler(self) -> IncrementalCompiler:
        return IncrementalCompiler(INTERACTIVE_SOURCE_NAME, optimize=self.settings.optimize)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run_code(self, code: CodeType, scope: Optional[Dict[str, Any]] = None) -> None:
        exec(code, self.context.globals if scope is None else scope)

    def run_source(self, source: str, source_path: str, bind_file: bool = False) -> None:
        """
        Compile and run ``source`` in the main scope.

        With ``bind_file`` the scope's ``__file__`` is set to ``source_path``
        before the code runs.
        """
        code = self.compile(source, source_path)
        if bind_file:
            self.context.bind("__file__", source_path)
        self.run_code(code)

    def run_module(self, name: str) -> Dict[str, Any]:
        """
        Run a library module as ``__main__``; runpy fills in ``argv[0]``.

        The module's globals are merged into the main scope so a later
        interactive session (-i) sees them.
        """
        module_globals = runpy.run_module(name, run_name="__main__", alter_sys=True)
        self.context.globals.update(module_globals)
        return module_globals

    def run_interactive(self, code: CodeType) -> Optional[Any]:
        """
        Execute one interactive statement in the session scope.

        Returns the value of the last expression statement, or None when the
        statement produced no value. Values are echoed like the standard
        interactive interpreter does.
        """
        results: List[Any] = []
        with _capture_display(results):
            self.run_code(code)
        return results[-1] if results else None


@contextmanager
def _capture_display(results: List[Any]) -> Iterator[None]:
    """Route expression-statement values to ``results`` (and stdout)."""
    def displayhook(value: Any) -> None:
        if value is None:
            return
        results.append(value)
        sys.stdout.write(repr(value) + "\n")

    previous = sys.displayhook
    sys.displayhook = displayhook
    try:
        yield
    finally:
        sys.displayhook = previous
