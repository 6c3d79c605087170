"""File Collector - Walks a project tree and yields eligible source files."""

import logging
import os
import threading
from pathlib import Path
from typing import Iterator, List, Optional, Set

from ..config import ScanConfiguration

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = '.'


class FileCollector:
    """Depth-first source file discovery with exclusion rules."""

    def __init__(self, config: Optional[ScanConfiguration] = None):
        self.config = config or ScanConfiguration()

    def is_excluded(self, name: str) -> bool:
        """Check whether a directory entry name is skipped outright."""
        return name in self.config.excluded_dirs or name.startswith(HIDDEN_PREFIX)

    def is_source_file(self, name: str) -> bool:
        """Check whether a file name carries an allowed extension."""
        return os.path.splitext(name)[1] in self.config.extensions

    def collect(self, root, cancel_event: Optional[threading.Event] = None) -> Iterator[Path]:
        """Yield source files under root.

        Traversal uses an explicit worklist of pending directories. Listing
        order is preserved within a directory, but callers should not rely on
        the overall order for correctness.
        """
        root = Path(root)
        if not root.is_dir():
            return

        follow = self.config.follow_symlinks
        visited: Set[str] = set()
        pending: List[Path] = [root]

        while pending:
            if cancel_event is not None and cancel_event.is_set():
                return

            directory = pending.pop()

            if follow:
                real = os.path.realpath(directory)
                if real in visited:
                    logger.debug("Skipping already visited directory %s", directory)
                    continue
                visited.add(real)

            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError as exc:
                logger.warning("Could not read directory %s: %s", directory, exc)
                continue

            subdirectories = []
            for entry in entries:
                if self.is_excluded(entry.name):
                    continue

                try:
                    if entry.is_dir(follow_symlinks=follow):
                        subdirectories.append(Path(entry.path))
                    elif entry.is_file(follow_symlinks=follow) and self.is_source_file(entry.name):
                        yield Path(entry.path)
                except OSError as exc:
                    logger.warning("Could not access %s: %s", entry.path, exc)

            # Reversed so the first listed subdirectory is visited first
            pending.extend(reversed(subdirectories))
