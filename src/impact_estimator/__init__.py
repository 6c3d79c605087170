"""Impact Estimator - estimate the blast radius of changing a source file."""

from .analyzers import (
    ImpactEstimator, ImpactReport, ScanRequest, FileImpact, RiskTier, LastChangeInfo,
    HistoryFailure
)
from .config import ScanConfiguration
from .core import MatchRecord, MatchType
from .errors import ImpactEstimatorError, InvalidScanRequestError, ScanCancelledError

__version__ = "0.1.0"

__all__ = [
    "ImpactEstimator", "ImpactReport", "ScanRequest", "FileImpact", "RiskTier",
    "LastChangeInfo", "HistoryFailure", "ScanConfiguration", "MatchRecord", "MatchType",
    "ImpactEstimatorError", "InvalidScanRequestError", "ScanCancelledError",
]
