"""Impact analysis: disambiguation, aggregation, history and risk."""

from .context_disambiguator import (
    ContextDisambiguator, DeclarationPattern, CallShape, DECLARATION_PATTERNS, CALL_SHAPES
)
from .history_resolver import (
    HistoryResolver, HistoryFailure, LastChangeInfo, find_repository_root, parse_git_date
)
from .impact_aggregator import ImpactAggregator, AggregationResult, FileImpact
from .risk_classifier import RiskTier, classify_risk
from .report_builder import ImpactReport, ReportBuilder
from .impact_estimator import ImpactEstimator, ScanRequest, AnalysisProgress

__all__ = [
    "ContextDisambiguator", "DeclarationPattern", "CallShape",
    "DECLARATION_PATTERNS", "CALL_SHAPES",
    "HistoryResolver", "HistoryFailure", "LastChangeInfo",
    "find_repository_root", "parse_git_date",
    "ImpactAggregator", "AggregationResult", "FileImpact",
    "RiskTier", "classify_risk",
    "ImpactReport", "ReportBuilder",
    "ImpactEstimator", "ScanRequest", "AnalysisProgress",
]
