"""
Process-wide logging configuration, applied once at the process boundary.
"""

import logging
from typing import Mapping, Optional

from .config import LOG_LEVEL_VAR


LOG_FORMAT = "[%(levelname)s %(name)s] %(message)s"


def resolve_log_level(verbose: int, debug: bool, environ: Mapping[str, str]) -> int:
    """
    Pick the root log level.

    An explicit PYLAUNCHER_LOG (level name or number) wins; otherwise WARNING,
    lowered to INFO by -v and to DEBUG by -vv or -d.
    """
    explicit = environ.get(LOG_LEVEL_VAR, "").strip()
    if explicit:
        if explicit.isdigit():
            return int(explicit)
        level = logging.getLevelName(explicit.upper())
        if isinstance(level, int):
            return level

    if debug or verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbose: int, debug: bool, environ: Mapping[str, str], stream: Optional[object] = None) -> int:
    level = resolve_log_level(verbose, debug, environ)
    kwargs = {"level": level, "format": LOG_FORMAT}
    if stream is not None:
        kwargs["stream"] = stream
    logging.basicConfig(**kwargs)
    logging.getLogger("pylauncher").setLevel(level)
    return level
