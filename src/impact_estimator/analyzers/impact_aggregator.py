"""Impact Aggregator - Folds per-file matches into a deduplicated impact map."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..config import ScanConfiguration
from ..core.file_collector import FileCollector
from ..core.line_scanner import LineScanner, MatchRecord, MatchType, read_source
from ..errors import ScanCancelledError
from .context_disambiguator import ContextDisambiguator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileImpact:
    """Everything found in one impacted file."""
    file: Path
    matches: Tuple[MatchRecord, ...]
    is_high_confidence: bool = False
    via_attribution: Optional[Path] = None  # Direct-usage file that references this one
    is_direct: bool = False  # Matched on the target filename
    references_symbol: bool = False  # Matched on the target symbol

    @property
    def line_numbers(self) -> List[int]:
        return [match.line_number for match in self.matches]


@dataclass
class FileScanResult:
    """Raw per-file output of the scan stage, before attribution."""
    file: Path
    filename_matches: List[MatchRecord] = field(default_factory=list)
    symbol_matches: List[MatchRecord] = field(default_factory=list)
    contextual_matches: List[MatchRecord] = field(default_factory=list)
    content: Optional[str] = None  # Kept only for direct-usage files

    @property
    def is_empty(self) -> bool:
        return not self.filename_matches and not self.symbol_matches

    def merged_matches(self) -> Tuple[MatchRecord, ...]:
        """Filename matches then symbol matches, one record per line, first wins."""
        seen = set()
        merged = []
        for match in self.filename_matches + self.symbol_matches:
            if match.line_number in seen:
                continue
            seen.add(match.line_number)
            merged.append(match)
        return tuple(merged)


@dataclass
class AggregationResult:
    """Partial report produced by the aggregator."""
    scanned_file_count: int
    impacts: Dict[Path, FileImpact]
    contextual_file_count: int = 0
    symbol_file_count: int = 0

    @property
    def symbol_found_count(self) -> int:
        """Files referencing the symbol, preferring high-confidence ones when present."""
        if self.contextual_file_count:
            return self.contextual_file_count
        return self.symbol_file_count

    @property
    def direct_impacts(self) -> List[FileImpact]:
        return [impact for impact in self.impacts.values() if impact.is_direct]

    @property
    def indirect_impacts(self) -> List[FileImpact]:
        return [impact for impact in self.impacts.values() if not impact.is_direct]


class ImpactAggregator:
    """Scans a project tree and builds the per-file impact map."""

    def __init__(self, config: Optional[ScanConfiguration] = None):
        self.config = config or ScanConfiguration()
        self.collector = FileCollector(self.config)
        self.scanner = LineScanner()
        self.disambiguator = ContextDisambiguator()

    def aggregate(self, project_root, target_file, target_filename: str,
                  target_symbol: Optional[str] = None,
                  declaring_context: Optional[str] = None,
                  cancel_event: Optional[threading.Event] = None) -> AggregationResult:
        """Scan every eligible file except the target and aggregate the matches."""
        target = Path(target_file).resolve()
        cancel_event = cancel_event or threading.Event()

        results: List[FileScanResult] = []
        scanned = 0

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = []
            try:
                for path in self.collector.collect(project_root, cancel_event):
                    if path.resolve() == target:
                        continue
                    futures.append(executor.submit(
                        self._scan_file, path, target_filename, target_symbol,
                        declaring_context, cancel_event
                    ))

                # Merge in discovery order so the impact map is deterministic
                for future in futures:
                    if cancel_event.is_set():
                        executor.shutdown(wait=False, cancel_futures=True)
                        break
                    result = future.result()
                    scanned += 1
                    if result is not None and not result.is_empty:
                        results.append(result)
            except KeyboardInterrupt:
                cancel_event.set()
                executor.shutdown(wait=False, cancel_futures=True)
                raise

        if cancel_event.is_set():
            raise ScanCancelledError("Scan cancelled")

        return self._build(results, scanned)

    def _scan_file(self, path: Path, target_filename: str, target_symbol: Optional[str],
                   declaring_context: Optional[str],
                   cancel_event: threading.Event) -> Optional[FileScanResult]:
        """Scan one file; pure apart from reading it."""
        if cancel_event.is_set():
            return None

        content = read_source(path)
        if content is None:
            return None

        result = FileScanResult(file=path)
        result.filename_matches = self.scanner.scan_text(
            content, [target_filename], MatchType.FILENAME_REFERENCE
        )

        if target_symbol:
            result.symbol_matches = self.disambiguator.detect_method_context(content, target_symbol)
            result.contextual_matches = self.disambiguator.contextual_subset(
                result.symbol_matches, declaring_context
            )

        if result.filename_matches:
            result.content = content

        return result

    def _build(self, results: List[FileScanResult], scanned: int) -> AggregationResult:
        direct = [result for result in results if result.filename_matches]

        impacts: Dict[Path, FileImpact] = {}
        for result in results:
            via = None
            if not result.filename_matches:
                via = self._find_via(result.file, direct)

            impacts[result.file] = FileImpact(
                file=result.file,
                matches=result.merged_matches(),
                is_high_confidence=bool(result.contextual_matches),
                via_attribution=via,
                is_direct=bool(result.filename_matches),
                references_symbol=bool(result.symbol_matches),
            )

        logger.debug("Aggregated %d impacted files out of %d scanned", len(impacts), scanned)

        return AggregationResult(
            scanned_file_count=scanned,
            impacts=impacts,
            contextual_file_count=sum(1 for r in results if r.contextual_matches),
            symbol_file_count=sum(1 for r in results if r.symbol_matches),
        )

    @staticmethod
    def _find_via(indirect_file: Path, direct: List[FileScanResult]) -> Optional[Path]:
        """First direct-usage file whose text mentions the indirect file's basename."""
        name = indirect_file.name
        for source in direct:
            if source.content is not None and name in source.content:
                return source.file
        return None
