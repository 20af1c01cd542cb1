"""
Launch driver: settings resolution, command-line grammar and mode dispatch.
"""

from .settings import Settings, ExecutionMode, ExecutionModeTag, resolve_settings, select_mode

__all__ = ["Settings", "ExecutionMode", "ExecutionModeTag", "resolve_settings", "select_mode"]
