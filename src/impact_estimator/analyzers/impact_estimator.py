"""Impact Estimator - Orchestrates a complete impact estimation run."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from ..config import ScanConfiguration
from ..core.line_scanner import read_source
from ..errors import InvalidScanRequestError, ScanCancelledError
from .context_disambiguator import ContextDisambiguator
from .history_resolver import HistoryResolver
from .impact_aggregator import ImpactAggregator
from .report_builder import ImpactReport, ReportBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanRequest:
    """What to analyze: a file, optionally one symbol in it, within a project."""
    target_file: Path
    project_root: Path
    target_symbol: Optional[str] = None

    def validate(self):
        """Fail fast on inputs that make scanning meaningless."""
        if not Path(self.target_file).is_file():
            raise InvalidScanRequestError(
                f"Target file does not exist: {self.target_file}",
                message_key='targetNotFound', subject=str(self.target_file)
            )
        if not Path(self.project_root).is_dir():
            raise InvalidScanRequestError(
                f"Project root is not a directory: {self.project_root}",
                message_key='rootNotFound', subject=str(self.project_root)
            )
        if self.target_symbol is not None and not self.target_symbol.strip():
            raise InvalidScanRequestError(
                "Target symbol must not be empty", message_key='emptySymbol'
            )

    @property
    def target_filename(self) -> str:
        return Path(self.target_file).name


@dataclass
class AnalysisProgress:
    """Tracks progress through analysis phases."""
    current_phase: str = "initialization"
    completed_phases: List[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_time(self) -> float:
        return time.time() - self.start_time


class ImpactEstimator:
    """Main entry point: validate, scan, resolve history, classify."""

    def __init__(self, configuration: Optional[ScanConfiguration] = None,
                 on_phase: Optional[Callable[[str], None]] = None):
        self.config = configuration or ScanConfiguration()
        self.disambiguator = ContextDisambiguator()
        self.aggregator = ImpactAggregator(self.config)
        self.history = HistoryResolver(self.config)
        self.report_builder = ReportBuilder()
        self.on_phase = on_phase
        self.progress = AnalysisProgress()

    def estimate(self, request: ScanRequest,
                 cancel_event: Optional[threading.Event] = None) -> ImpactReport:
        """Run the full pipeline and return a complete report.

        Raises InvalidScanRequestError before any scanning when the inputs are
        invalid, and ScanCancelledError if cancel_event is set during the run.
        Every other failure degrades into the report content.
        """
        request.validate()
        cancel_event = cancel_event or threading.Event()
        self.progress = AnalysisProgress()

        target_file = Path(request.target_file)
        project_root = Path(request.project_root)
        symbol = request.target_symbol.strip() if request.target_symbol else None

        self._update_progress("context_detection")
        declaring_context = None
        content = read_source(target_file)
        if content is not None:
            declaring_context = self.disambiguator.detect_declaring_context(content)
        logger.debug("Declaring context of %s: %s", target_file, declaring_context)

        # History lookup runs alongside the scan
        with ThreadPoolExecutor(max_workers=1) as history_executor:
            history_future = history_executor.submit(self.history.last_change, target_file)

            self._update_progress("scanning")
            aggregation = self.aggregator.aggregate(
                project_root, target_file, request.target_filename,
                target_symbol=symbol,
                declaring_context=declaring_context,
                cancel_event=cancel_event,
            )

            self._update_progress("history")
            last_change = history_future.result()

        if cancel_event.is_set():
            raise ScanCancelledError("Scan cancelled")

        self._update_progress("finalizing")
        report = self.report_builder.build(
            target_file, project_root, symbol, declaring_context, aggregation, last_change
        )
        logger.info(
            "Scanned %d files in %.2fs: %d impacted, risk %s",
            report.scanned_file_count, self.progress.elapsed_time,
            report.impacted_count, report.risk_tier.value
        )
        return report

    def _update_progress(self, phase: str):
        """Update analysis progress."""
        self.progress.completed_phases.append(self.progress.current_phase)
        self.progress.current_phase = phase
        if self.on_phase is not None:
            self.on_phase(phase)
