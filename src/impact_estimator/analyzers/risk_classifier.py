"""Risk Classifier - Maps the impacted-file count to a severity tier."""

from enum import Enum

MEDIUM_THRESHOLD = 1  # At least this many impacted files is MEDIUM
HIGH_THRESHOLD = 4  # At least this many impacted files is HIGH


class RiskTier(Enum):
    """Coarse severity of changing the target."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label_key(self) -> str:
        """Locale key of the tier heading."""
        return f"riskLevel{self.name.capitalize()}"

    @property
    def message_key(self) -> str:
        """Locale key of the tier message, parameterized by the impacted count."""
        return f"risk{self.name.capitalize()}Message"


def classify_risk(impacted_count: int) -> RiskTier:
    """0 files is LOW, 1 to 3 is MEDIUM, more than 3 is HIGH."""
    if impacted_count < 0:
        raise ValueError("impacted_count cannot be negative")
    if impacted_count >= HIGH_THRESHOLD:
        return RiskTier.HIGH
    if impacted_count >= MEDIUM_THRESHOLD:
        return RiskTier.MEDIUM
    return RiskTier.LOW
