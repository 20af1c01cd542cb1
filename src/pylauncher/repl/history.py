"""
Interactive history: a bounded list of entered lines backed by a plain
newline-delimited text file.
"""

import logging
from collections import deque
from pathlib import Path
from typing import Deque, Iterable, Optional, Tuple, Union

from ..utils.config import DEFAULT_FILE_ENCODING, MAX_HISTORY_ENTRIES

logger = logging.getLogger(__name__)


class History:
    """
    In-memory history; loaded once at session start, saved once at the end.

    Only the newest ``max_entries`` lines are kept, so the file stays bounded
    across sessions.
    """

    def __init__(self, entries: Optional[Iterable[str]] = None, max_entries: int = MAX_HISTORY_ENTRIES):
        self._entries: Deque[str] = deque(entries if entries is not None else (), maxlen=max_entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def append(self, line: str) -> None:
        self._entries.append(line)

    def load(self, path: Union[Path, str]) -> bool:
        """Append the entries stored at ``path``. Missing or unreadable files are tolerated."""
        path = Path(path)
        try:
            text = path.read_text(encoding=DEFAULT_FILE_ENCODING)
        except FileNotFoundError:
            logger.info("No previous history.")
            return False
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not load history from %s: %s", path, exc)
            return False
        self._entries.extend(text.splitlines())
        logger.debug("loaded %d history entries from %s", len(text.splitlines()), path)
        return True

    def save(self, path: Union[Path, str]) -> bool:
        """Rewrite ``path`` with every entry, creating parent directories. False on failure."""
        path = Path(path)
        text = "".join(entry + "\n" for entry in self._entries)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding=DEFAULT_FILE_ENCODING)
        except OSError as exc:
            logger.warning("Could not save history to %s: %s", path, exc)
            return False
        return True
