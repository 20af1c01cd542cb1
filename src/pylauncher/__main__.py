"""CLI entry point: run `pylauncher [-c CMD | -m MODULE | FILE] [ARGS]...` or `python -m pylauncher`."""

import logging
import os
import sys
from typing import List, Mapping, Optional

logger = logging.getLogger("pylauncher")


def _fatal(error) -> int:
    from .shared.errors import format_launcher_error

    logger.debug("fatal launcher error", exc_info=True)
    sys.stderr.write(format_launcher_error(error, sys.stderr) + "\n")
    return 1


def run_launcher(runtime, mode, reporter=None, **shell_options) -> int:
    """
    Dispatch ``mode`` and turn its outcome into an exit status.

    This is the only place exit status is decided: launch errors give 1, an
    exception escaping the executed code is reported once and gives 1 (or the
    SystemExit status). With -i the interactive session follows a
    non-interactive run.
    """
    from .driver.dispatcher import dispatch, run_shell
    from .shared.errors import ExceptionReporter, LauncherError, handle_exception

    reporter = reporter if reporter is not None else ExceptionReporter()
    runtime.initialize()

    failure: Optional[BaseException] = None
    try:
        dispatch(runtime, mode, reporter=reporter, **shell_options)
    except LauncherError as err:
        return _fatal(err)
    except BaseException as exc:
        failure = exc

    if runtime.settings.inspect and not mode.is_interactive and not isinstance(failure, SystemExit):
        if failure is not None:
            reporter.report(failure)
            failure = None
        try:
            run_shell(runtime, reporter=reporter, **shell_options)
        except BaseException as exc:
            failure = exc

    return handle_exception(failure, reporter)


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    from .driver.cli import parse_arguments
    from .driver.settings import resolve_settings, select_mode
    from .runtime.environment import LaunchContext, host_default_path
    from .runtime.runtime import PythonRuntime
    from .shared.errors import ConfigurationError
    from .utils.logging_setup import configure_logging

    env = os.environ if environ is None else environ
    args = parse_arguments(argv)

    try:
        settings = resolve_settings(args, env)
    except ConfigurationError as err:
        return _fatal(err)

    configure_logging(settings.verbose, settings.debug, env)
    mode = select_mode(args)

    context = LaunchContext(settings, default_path=host_default_path(sys.path, os.environ))
    runtime = PythonRuntime(context)
    return run_launcher(runtime, mode, environ=env)


if __name__ == "__main__":
    sys.exit(main())
