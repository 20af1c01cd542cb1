"""
Execution Dispatcher

Runs exactly one execution strategy for the selected mode:

1. Command: the -c string, under a synthetic source name
2. Module: delegated to runpy by name
3. Script: a file, or a directory holding ``__main__.py``
4. Interactive: a ReplSession over the main scope

Strategies never catch exceptions raised by the executed code; those reach the
single reporter at the process boundary. Launch failures (missing script,
directory without entry point, unreadable file) raise LaunchError.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Union

from .. import __version__
from ..repl.line_editor import ConsoleLineEditor, LineEditor
from ..repl.session import ReplSession
from ..runtime.runtime import PythonRuntime
from ..shared.errors import ExceptionReporter, LaunchError
from ..utils.config import (
    COMMAND_SOURCE_NAME,
    DEFAULT_PRIMARY_PROMPT,
    DEFAULT_SECONDARY_PROMPT,
    ENTRY_POINT_FILE,
    ENTRY_POINT_MODULE,
    PRIMARY_PROMPT_NAME,
    PROGRAM_NAME,
    SECONDARY_PROMPT_NAME,
    STARTUP_VAR,
)
from ..utils.io_utils import history_file_path, read_source_file
from .settings import ExecutionMode, ExecutionModeTag

logger = logging.getLogger(__name__)


def run_command(runtime: PythonRuntime, source: str) -> None:
    logger.debug("Running command %s", source)
    runtime.run_source(source, COMMAND_SOURCE_NAME)


def run_module(runtime: PythonRuntime, module: str) -> None:
    logger.debug("Running module %s", module)
    runtime.run_module(module)


def resolve_script_path(script: Union[Path, str]) -> Path:
    """A regular file is used as is; a directory must contain the entry-point file."""
    file_path = Path(script)
    if file_path.is_file():
        return file_path
    if file_path.is_dir():
        main_file_path = file_path / ENTRY_POINT_FILE
        if main_file_path.is_file():
            return main_file_path
        raise LaunchError(
            f"can't find '{ENTRY_POINT_MODULE}' module in '{script}'",
            LaunchError.NO_ENTRY_POINT,
            file_path,
        )
    raise LaunchError(
        f"can't open file '{script}': No such file or directory",
        LaunchError.NO_SUCH_FILE,
        file_path,
    )


def run_script(runtime: PythonRuntime, script: Union[Path, str]) -> None:
    logger.debug("Running file %s", script)
    file_path = resolve_script_path(script)

    runtime.context.prepend_path(os.path.dirname(str(file_path)))

    try:
        source = read_source_file(file_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise LaunchError(
            f"Failed reading file '{file_path}': {type(exc).__name__}",
            LaunchError.UNREADABLE,
            file_path,
        ) from exc

    runtime.run_source(source, str(file_path), bind_file=True)


def banner_text() -> str:
    python_version = sys.version.split()[0]
    return f"Welcome to {PROGRAM_NAME} {__version__} (Python {python_version})"


def run_shell(
    runtime: PythonRuntime,
    editor: Optional[LineEditor] = None,
    history_path: Optional[Union[Path, str]] = None,
    reporter: Optional[ExceptionReporter] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReplSession:
    """Run an interactive session over the main scope; returns it once it ended."""
    settings = runtime.settings
    env = os.environ if environ is None else environ

    runtime.context.set_default_prompt(PRIMARY_PROMPT_NAME, DEFAULT_PRIMARY_PROMPT)
    runtime.context.set_default_prompt(SECONDARY_PROMPT_NAME, DEFAULT_SECONDARY_PROMPT)

    startup_file = None
    if not settings.ignore_environment and env.get(STARTUP_VAR):
        startup_file = env[STARTUP_VAR]

    session = ReplSession(
        runtime,
        editor if editor is not None else ConsoleLineEditor(),
        history_path=history_path if history_path is not None else history_file_path(env),
        reporter=reporter,
        banner=None if settings.quiet else banner_text(),
        startup_file=startup_file,
    )
    session.run()
    return session


def dispatch(runtime: PythonRuntime, mode: ExecutionMode, **shell_options) -> None:
    """Invoke the strategy for ``mode``. Exceptions from executed code propagate."""
    if mode.tag == ExecutionModeTag.COMMAND:
        run_command(runtime, mode.target)
    elif mode.tag == ExecutionModeTag.MODULE:
        run_module(runtime, mode.target)
    elif mode.tag == ExecutionModeTag.SCRIPT:
        run_script(runtime, mode.target)
    else:
        run_shell(runtime, **shell_options)
