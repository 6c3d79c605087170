"""Context Disambiguator - Classifies symbol references by call-site shape."""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from ..core.line_scanner import MatchRecord, MatchType, STANDALONE_CONTEXT

IDENTIFIER = r'[A-Za-z_$][\w$]*'


@dataclass(frozen=True)
class DeclarationPattern:
    """A named pattern binding a declaring context name in group 1."""
    name: str
    regex: re.Pattern

    def search(self, line: str) -> Optional[str]:
        match = self.regex.search(line)
        return match.group(1) if match else None


@dataclass(frozen=True)
class CallShape:
    """A named call-site shape.

    The template contains a ``{symbol}`` placeholder; for member calls the
    receiver token is captured in the ``receiver`` group.
    """
    name: str
    match_type: MatchType
    template: str

    def compile(self, symbol: str) -> re.Pattern:
        return re.compile(self.template.format(symbol=re.escape(symbol)))


# Tried in order on every line of the target file; the first hit wins.
DECLARATION_PATTERNS: Tuple[DeclarationPattern, ...] = (
    DeclarationPattern(
        'class',
        re.compile(rf'^\s*(?:export\s+)?(?:default\s+)?(?:(?:abstract|final|readonly)\s+)*'
                   rf'class\s+({IDENTIFIER})')),
    DeclarationPattern(
        'interface',
        re.compile(rf'^\s*(?:export\s+)?(?:default\s+)?interface\s+({IDENTIFIER})')),
    DeclarationPattern(
        'trait',
        re.compile(r'^\s*trait\s+([A-Za-z_]\w*)')),
    DeclarationPattern(
        'go_type',
        re.compile(r'^\s*type\s+([A-Za-z_]\w*)\s+(?:struct|interface)\b')),
    # Scalar constants such as const API = 'x' do not name a context
    DeclarationPattern(
        'constant',
        re.compile(rf'^\s*(?:export\s+)?const\s+({IDENTIFIER})\s*=\s*(?:\{{|class\b|new\b)')),
)

# Receivers may carry one trailing call, e.g. getWidget().render(
_RECEIVER = r'(?P<receiver>[\w$]+)(?:\([^()]*\))?\s*'

CALL_SHAPES: Tuple[CallShape, ...] = (
    CallShape('dot_call', MatchType.METHOD_CALL, _RECEIVER + r'\??\.{symbol}\('),
    CallShape('arrow_call', MatchType.METHOD_CALL, _RECEIVER + r'->{symbol}\('),
    CallShape('static_call', MatchType.METHOD_CALL,
              r'(?P<receiver>[\w$\\]+)\s*::{symbol}\('),
    # Not preceded by an identifier character, a $ sigil or a member-access operator
    CallShape('standalone_call', MatchType.STANDALONE_CALL, r'(?<![\w$.>:]){symbol}\('),
)


@lru_cache(maxsize=32)
def _compiled_shapes(symbol: str) -> Tuple[Tuple[CallShape, re.Pattern], ...]:
    return tuple((shape, shape.compile(symbol)) for shape in CALL_SHAPES)


class ContextDisambiguator:
    """Raises precision of symbol matches using declaration and call-site context."""

    def __init__(self, declaration_patterns: Iterable[DeclarationPattern] = DECLARATION_PATTERNS):
        self.declaration_patterns = tuple(declaration_patterns)

    def detect_declaring_context(self, content: str) -> Optional[str]:
        """Return the name bound by the first class, interface, trait, struct type or object constant."""
        for line in content.split('\n'):
            for pattern in self.declaration_patterns:
                name = pattern.search(line)
                if name:
                    return name
        return None

    def detect_method_context(self, content: str, symbol: str) -> List[MatchRecord]:
        """Find call sites of symbol, one record per distinct call-shape hit."""
        if not symbol:
            return []

        shapes = _compiled_shapes(symbol)
        results = []

        for index, line in enumerate(content.split('\n')):
            # Cheap reject before running the regexes
            if symbol not in line:
                continue

            for shape, regex in shapes:
                for match in regex.finditer(line):
                    if shape.match_type is MatchType.METHOD_CALL:
                        context = match.group('receiver')
                    else:
                        context = STANDALONE_CONTEXT
                    results.append(MatchRecord(
                        line_number=index + 1,
                        line_text=line.strip(),
                        matched_keyword=symbol,
                        match_type=shape.match_type,
                        call_context=context,
                    ))

        return results

    @staticmethod
    def contextual_subset(matches: Iterable[MatchRecord],
                          declaring_context: Optional[str]) -> List[MatchRecord]:
        """Method calls whose receiver contains the declaring context, case-insensitively."""
        if not declaring_context:
            return []

        needle = declaring_context.lower()
        return [
            match for match in matches
            if match.match_type is MatchType.METHOD_CALL
            and needle in match.call_context.lower()
        ]
