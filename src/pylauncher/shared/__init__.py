"""
Shared components: error taxonomy and exception reporting.
"""

from .errors import (
    LauncherError,
    ConfigurationError,
    LaunchError,
    ExceptionReporter,
    format_launcher_error,
    handle_exception,
)

__all__ = [
    "LauncherError",
    "ConfigurationError",
    "LaunchError",
    "ExceptionReporter",
    "format_launcher_error",
    "handle_exception",
]
