"""File discovery and line-level matching."""

from .file_collector import FileCollector
from .line_scanner import LineScanner, MatchRecord, MatchType, STANDALONE_CONTEXT, read_source

__all__ = [
    "FileCollector",
    "LineScanner", "MatchRecord", "MatchType", "STANDALONE_CONTEXT", "read_source",
]
