"""
Launch Context

The explicit context value that replaces hidden process-wide state: the
module search path, argv, the ``__main__`` scope and the prompt lookup all
live here. The dispatcher owns it and hands it by reference to the runtime
and the interactive session.

Rule: only ``activate()`` touches the ``sys`` namespace; everything else reads
and mutates the context.
"""

import builtins
import logging
import os
import sys
import types
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..driver.settings import Settings
from ..utils.config import ENTRY_POINT_MODULE, GENERAL_PATH_VAR

logger = logging.getLogger(__name__)


def host_default_path(host_path: Sequence[str], environ: Mapping[str, str]) -> List[str]:
    """
    The host interpreter's own search path, minus what it took from PYTHONPATH.

    ``host_path[0]`` (the launcher's location) is dropped; PYTHONPATH entries
    are re-added, or not, by settings resolution.
    """
    from_env = {
        os.path.abspath(entry)
        for entry in environ.get(GENERAL_PATH_VAR, "").split(os.pathsep)
        if entry
    }
    return [entry for entry in host_path[1:] if os.path.abspath(entry) not in from_env]


class LaunchContext:
    """
    Mutable per-launch state shared by the runtime and the session.

    - path: module search path; same list object as ``sys.path`` once activated
    - argv: the executed program's argv
    - globals: the ``__main__`` scope (session scope in interactive mode)
    - get_prompt(name): optional-returning prompt accessor
    """
    path: List[str]
    argv: List[str]
    globals: Dict[str, Any]

    def __init__(
        self,
        settings: Settings,
        default_path: Sequence[str] = (),
        sys_module: Any = None,
    ):
        self.settings = settings
        self.sys_module = sys_module if sys_module is not None else sys
        self.path = list(settings.path_list) + list(default_path)
        self.argv = list(settings.argv)
        self.main_module = types.ModuleType(ENTRY_POINT_MODULE)
        self.globals = self.main_module.__dict__
        self.globals["__builtins__"] = builtins
        self._script_dir_added = False

    def activate(self) -> None:
        """Install path, argv and ``__main__`` into the sys namespace."""
        self.sys_module.path = self.path
        self.sys_module.argv = self.argv
        modules = getattr(self.sys_module, "modules", None)
        if modules is not None:
            modules[ENTRY_POINT_MODULE] = self.main_module
        logger.debug("activated context: argv=%r path=%r", self.argv, self.path)

    def prepend_path(self, directory: str) -> None:
        """Put a script's directory in front of the search path (once per launch)."""
        if self._script_dir_added:
            raise RuntimeError("script directory already added to the search path")
        self.path.insert(0, directory)
        self._script_dir_added = True

    def bind(self, name: str, value: Any) -> None:
        self.globals[name] = value

    def get_prompt(self, name: str) -> Optional[str]:
        """Current value of ``sys.<name>`` as text, or None if unset or unprintable."""
        value = getattr(self.sys_module, name, None)
        if value is None:
            return None
        try:
            return str(value)
        except Exception:
            logger.debug("prompt %s is not printable", name, exc_info=True)
            return None

    def set_default_prompt(self, name: str, value: str) -> None:
        if getattr(self.sys_module, name, None) is None:
            setattr(self.sys_module, name, value)
