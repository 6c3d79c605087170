"""Exceptions raised by the impact estimator."""


class ImpactEstimatorError(Exception):
    """Base class for terminal impact estimation failures."""


class InvalidScanRequestError(ImpactEstimatorError):
    """The target file or project root does not exist, or the symbol is empty."""

    def __init__(self, message: str, message_key: str = "analysisFailed", subject: str = ""):
        super().__init__(message)
        self.message_key = message_key
        self.subject = subject


class ScanCancelledError(ImpactEstimatorError):
    """The scan was cancelled before it completed."""
