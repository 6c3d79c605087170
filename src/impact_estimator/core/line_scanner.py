"""Line Scanner - Literal keyword matching over the lines of a file."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

STANDALONE_CONTEXT = "standalone"


class MatchType(Enum):
    """Kinds of textual reference found in a file."""
    FILENAME_REFERENCE = "filename-reference"
    METHOD_CALL = "method-call"
    STANDALONE_CALL = "standalone-call"


@dataclass(frozen=True)
class MatchRecord:
    """A single matching line."""
    line_number: int  # 1-based
    line_text: str  # Trimmed
    matched_keyword: str
    match_type: MatchType
    call_context: str = STANDALONE_CONTEXT

    def to_dict(self) -> dict:
        return {
            'line': self.line_number,
            'content': self.line_text,
            'keyword': self.matched_keyword,
            'type': self.match_type.value,
            'context': self.call_context,
        }


def read_source(path) -> Optional[str]:
    """Read a file as UTF-8 text, or return None with a warning if that fails."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read file %s: %s", path, exc)
        return None

    if '\x00' in content:
        logger.warning("Skipping binary file %s", path)
        return None

    return content


class LineScanner:
    """Stateless substring scanner.

    Keywords are matched by plain containment, not on word boundaries, so a
    filename or symbol also matches inside comments, strings and longer
    identifiers.
    """

    def scan(self, path, keywords: Iterable[str],
             match_type: MatchType = MatchType.FILENAME_REFERENCE) -> List[MatchRecord]:
        """Scan a file on disk. Unreadable files yield no matches."""
        content = read_source(path)
        if content is None:
            return []
        return self.scan_text(content, keywords, match_type)

    def scan_text(self, content: str, keywords: Iterable[str],
                  match_type: MatchType = MatchType.FILENAME_REFERENCE) -> List[MatchRecord]:
        """Scan already loaded text."""
        keywords = [k for k in keywords if k]
        results = []

        for index, line in enumerate(content.split('\n')):
            for keyword in keywords:
                if keyword in line:
                    results.append(MatchRecord(
                        line_number=index + 1,
                        line_text=line.strip(),
                        matched_keyword=keyword,
                        match_type=match_type,
                    ))

        return results
