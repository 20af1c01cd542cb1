"""
Settings Resolution

Turns parsed command-line flags plus a snapshot of the environment into one
immutable ``Settings`` value. For every flag an explicit command-line option
wins; otherwise, unless -E was given, the matching environment variable is
consulted; otherwise the default applies.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..shared.errors import ConfigurationError
from ..utils.config import (
    COMMAND_ARGV0,
    DEBUG_VAR,
    DONT_WRITE_BYTECODE_VAR,
    GENERAL_PATH_VAR,
    INSPECT_VAR,
    MALFORMED_LEVEL,
    MAX_LEVEL,
    MODULE_ARGV0,
    NO_USER_SITE_VAR,
    OPTIMIZE_VAR,
    RUNTIME_PATH_VAR,
    VERBOSE_VAR,
)

logger = logging.getLogger(__name__)


# ==================== EXECUTION MODE ====================

class ExecutionModeTag(Enum):
    """Execution strategies, in selection precedence order"""
    COMMAND = "command"
    MODULE = "module"
    SCRIPT = "script"
    INTERACTIVE = "interactive"


@dataclass(frozen=True)
class ExecutionMode:
    """Exactly one execution source per launch: -c > -m > script > interactive"""
    tag: ExecutionModeTag
    target: Optional[str] = None
    trailing: Tuple[str, ...] = ()

    @classmethod
    def command(cls, source: str, trailing: Sequence[str] = ()) -> 'ExecutionMode':
        return cls(ExecutionModeTag.COMMAND, source, tuple(trailing))

    @classmethod
    def module(cls, name: str, trailing: Sequence[str] = ()) -> 'ExecutionMode':
        return cls(ExecutionModeTag.MODULE, name, tuple(trailing))

    @classmethod
    def script(cls, path: str, trailing: Sequence[str] = ()) -> 'ExecutionMode':
        return cls(ExecutionModeTag.SCRIPT, path, tuple(trailing))

    @classmethod
    def interactive(cls) -> 'ExecutionMode':
        return cls(ExecutionModeTag.INTERACTIVE)

    @property
    def is_interactive(self) -> bool:
        return self.tag == ExecutionModeTag.INTERACTIVE

    def argv(self) -> Tuple[str, ...]:
        """sys.argv as seen by the executed code."""
        if self.tag == ExecutionModeTag.SCRIPT:
            return (self.target,) + self.trailing
        if self.tag == ExecutionModeTag.MODULE:
            # The real module path is filled in by runpy once the module is found
            return (MODULE_ARGV0,) + self.trailing
        if self.tag == ExecutionModeTag.COMMAND:
            return (COMMAND_ARGV0,) + self.trailing
        return ()


def select_mode(args: Any) -> ExecutionMode:
    """Pick the execution mode from parsed arguments (fixed precedence)."""
    command = getattr(args, "command", None)
    module = getattr(args, "module", None)
    script = getattr(args, "script", None)

    if command:
        return ExecutionMode.command(command[0], command[1:])
    if module:
        return ExecutionMode.module(module[0], module[1:])
    if script:
        return ExecutionMode.script(script[0], script[1:])
    return ExecutionMode.interactive()


# ==================== SETTINGS ====================

@dataclass(frozen=True)
class Settings:
    """Resolved launcher configuration. Built once, never mutated."""
    ignore_environment: bool = False
    path_list: Tuple[str, ...] = ("",)
    debug: bool = False
    inspect: bool = False
    no_site: bool = False
    no_user_site: bool = False
    quiet: bool = False
    dont_write_bytecode: bool = False
    optimize: int = 0
    verbose: int = 0
    argv: Tuple[str, ...] = ()


def parse_level(value: str) -> int:
    """
    Parse an integer flag value from the environment.

    Accepts an unsigned 8-bit number; anything else (empty, negative,
    non-numeric, out of range) means the flag was switched on, i.e. 1.
    """
    text = value[1:] if value.startswith("+") else value
    if text.isascii() and text.isdigit():
        number = int(text)
        if number <= MAX_LEVEL:
            return number
    return MALFORMED_LEVEL


def get_env_level(environ: Mapping[str, str], name: str) -> Optional[int]:
    """Integer value of an environment variable, or None if it is unset."""
    if name not in environ:
        return None
    return parse_level(environ[name])


def get_paths(environ: Mapping[str, str], name: str) -> List[str]:
    """Split a path-list environment variable into its entries."""
    value = environ.get(name)
    if value is None:
        return []
    paths = []
    for segment in value.split(os.pathsep):
        try:
            segment.encode("utf-8")
        except UnicodeEncodeError:
            raise ConfigurationError(f"{name} isn't valid unicode") from None
        paths.append(segment)
    return paths


def _flag_or_env(flag: bool, environ: Mapping[str, str], name: str, ignore_environment: bool) -> bool:
    if flag:
        return True
    return not ignore_environment and name in environ


def _count_or_env(count: int, environ: Mapping[str, str], name: str, ignore_environment: bool) -> int:
    if count:
        return min(count, MAX_LEVEL)
    if ignore_environment:
        return 0
    level = get_env_level(environ, name)
    return level if level is not None else 0


def resolve_settings(args: Any, environ: Mapping[str, str]) -> Settings:
    """
    Create settings by examining command line arguments and environment
    variables.

    Raises ConfigurationError when a search path entry is not valid text.
    """
    ignore_environment = bool(getattr(args, "ignore_environment", False))

    # the current directory always leads the search path
    path_list = [""]
    if not ignore_environment:
        path_list.extend(get_paths(environ, RUNTIME_PATH_VAR))
        path_list.extend(get_paths(environ, GENERAL_PATH_VAR))

    settings = Settings(
        ignore_environment=ignore_environment,
        path_list=tuple(path_list),
        debug=_flag_or_env(getattr(args, "debug", False), environ, DEBUG_VAR, ignore_environment),
        inspect=_flag_or_env(getattr(args, "inspect", False), environ, INSPECT_VAR, ignore_environment),
        no_site=bool(getattr(args, "no_site", False)),
        no_user_site=_flag_or_env(getattr(args, "no_user_site", False), environ, NO_USER_SITE_VAR, ignore_environment),
        quiet=bool(getattr(args, "quiet", False)),
        dont_write_bytecode=_flag_or_env(
            getattr(args, "dont_write_bytecode", False), environ, DONT_WRITE_BYTECODE_VAR, ignore_environment
        ),
        optimize=_count_or_env(getattr(args, "optimize", 0) or 0, environ, OPTIMIZE_VAR, ignore_environment),
        verbose=_count_or_env(getattr(args, "verbose", 0) or 0, environ, VERBOSE_VAR, ignore_environment),
        argv=select_mode(args).argv(),
    )
    logger.debug("resolved settings: %r", settings)
    return settings
