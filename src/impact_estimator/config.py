"""Scan configuration."""

import os
from dataclasses import dataclass, field
from typing import FrozenSet

DEFAULT_EXTENSIONS = frozenset({'.js', '.ts', '.php', '.go'})
DEFAULT_EXCLUDED_DIRS = frozenset({
    'node_modules', '.git', 'vendor', '.vscode', 'dist', 'build', 'coverage'
})
DEFAULT_LANGUAGE = 'en'


@dataclass
class ScanConfiguration:
    """Configuration for an impact scan."""
    extensions: FrozenSet[str] = field(default_factory=lambda: DEFAULT_EXTENSIONS)
    excluded_dirs: FrozenSet[str] = field(default_factory=lambda: DEFAULT_EXCLUDED_DIRS)
    follow_symlinks: bool = False
    max_workers: int = 0  # 0 means os.cpu_count()
    git_timeout: float = 10.0  # Seconds per git invocation
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self):
        # Accept "js" as well as ".js"
        self.extensions = frozenset(
            ext if ext.startswith('.') else f'.{ext}' for ext in self.extensions
        )
        self.excluded_dirs = frozenset(self.excluded_dirs)
        if self.max_workers <= 0:
            self.max_workers = os.cpu_count() or 4
        if self.git_timeout <= 0:
            raise ValueError("git_timeout must be positive")
