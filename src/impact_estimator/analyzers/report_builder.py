"""Report Builder - Packages scan findings for the presentation layer."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .history_resolver import LastChangeInfo
from .impact_aggregator import AggregationResult, FileImpact
from .risk_classifier import RiskTier, classify_risk


@dataclass(frozen=True)
class ImpactReport:
    """Complete result of one impact estimation run."""
    requested_file: Path
    project_root: Path
    target_symbol: Optional[str]
    declaring_context: Optional[str]
    scanned_file_count: int
    impacts: Dict[Path, FileImpact]
    last_change: LastChangeInfo
    risk_tier: RiskTier
    symbol_found_count: int = 0
    contextual_file_count: int = 0

    @property
    def impacted_count(self) -> int:
        return len(self.impacts)

    @property
    def symbol_not_found(self) -> bool:
        return bool(self.target_symbol) and self.symbol_found_count == 0

    def relative(self, path: Optional[Path]) -> Optional[str]:
        """Display path relative to the project root."""
        if path is None:
            return None
        try:
            return Path(os.path.relpath(path, self.project_root)).as_posix()
        except ValueError:
            # Different drive on Windows
            return str(path)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable form of the report."""
        return {
            'file': self.relative(self.requested_file),
            'project_root': str(self.project_root),
            'symbol': self.target_symbol,
            'declaring_context': self.declaring_context,
            'scanned_files': self.scanned_file_count,
            'last_change': self.last_change.to_dict(),
            'risk_tier': self.risk_tier.value,
            'impacted_files': self.impacted_count,
            'symbol_found_count': self.symbol_found_count if self.target_symbol else None,
            'impacts': [
                {
                    'file': self.relative(impact.file),
                    'usage': 'direct' if impact.is_direct else 'indirect',
                    'high_confidence': impact.is_high_confidence,
                    'via': self.relative(impact.via_attribution),
                    'matches': [match.to_dict() for match in impact.matches],
                }
                for impact in self.impacts.values()
            ],
        }


class ReportBuilder:
    """Assembles an ImpactReport from the aggregator and history outputs."""

    def build(self, requested_file, project_root, target_symbol: Optional[str],
              declaring_context: Optional[str], aggregation: AggregationResult,
              last_change: LastChangeInfo) -> ImpactReport:
        # Tier is derived from the final map only
        risk_tier = classify_risk(len(aggregation.impacts))

        return ImpactReport(
            requested_file=Path(requested_file),
            project_root=Path(project_root),
            target_symbol=target_symbol,
            declaring_context=declaring_context,
            scanned_file_count=aggregation.scanned_file_count,
            impacts=dict(aggregation.impacts),
            last_change=last_change,
            risk_tier=risk_tier,
            symbol_found_count=aggregation.symbol_found_count if target_symbol else 0,
            contextual_file_count=aggregation.contextual_file_count,
        )
