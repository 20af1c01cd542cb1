"""
pylauncher utilities package
"""

from .io_utils import read_source_file, config_dir, history_file_path

__all__ = ["read_source_file", "config_dir", "history_file_path"]
