"""
Centralized file I/O utilities.

- Single place for encoding and platform-directory handling
- Use Path.read_text() consistently (no raw open/read)
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Union

from .config import (
    DEFAULT_FILE_ENCODING,
    FALLBACK_HISTORY_FILE,
    HISTORY_DIR_NAME,
    HISTORY_FILE_NAME,
)


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def config_dir(environ: Optional[Mapping[str, str]] = None, platform: Optional[str] = None) -> Optional[Path]:
    """Per-user configuration directory for this platform, or None if there is no home."""
    env = os.environ if environ is None else environ
    plat = sys.platform if platform is None else platform

    if plat.startswith("win"):
        appdata = env.get("APPDATA")
        return Path(appdata) if appdata else None

    home = env.get("HOME")
    if plat == "darwin":
        return Path(home) / "Library" / "Application Support" if home else None

    xdg = env.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return Path(home) / ".config" if home else None


def history_file_path(environ: Optional[Mapping[str, str]] = None, platform: Optional[str] = None) -> Path:
    """Location of the interactive history file."""
    base = config_dir(environ, platform)
    if base is None:
        return Path(FALLBACK_HISTORY_FILE)
    return base / HISTORY_DIR_NAME / HISTORY_FILE_NAME
