"""Pydantic models for the fraud domain."""

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_LEVEL_RANK = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


class RiskFactor(StrEnum):
    AMOUNT_SPIKE = "amount_spike"
    EXTREME_AMOUNT = "extreme_amount"
    EXCEEDS_HISTORICAL_MAX = "exceeds_historical_max"
    VELOCITY_COUNT_1H = "velocity_count_1h"
    VELOCITY_AMOUNT_24H = "velocity_amount_24h"
    UNUSUAL_HOUR = "unusual_hour"
    OFF_PATTERN_HOUR = "off_pattern_hour"
    HIGH_RISK_MERCHANT = "high_risk_merchant"
    NEW_MERCHANT = "new_merchant"
    NEW_DEVICE = "new_device"
    MISSING_DEVICE_FINGERPRINT = "missing_device_fingerprint"
    NEW_LOCATION = "new_location"


class RuleResult(BaseModel):
    model_config = {"frozen": True}

    rule_name: str
    triggered: bool
    score: float = 0.0
    risk_factor: RiskFactor | None = None
    details: str = ""
    evidence: dict = Field(default_factory=dict)


class RiskAssessmentResult(BaseModel):
    """Verdict for one transaction. A fresh value per call; never persisted here."""

    model_config = {"frozen": True}

    transaction_id: str
    user_id: str
    score: float = Field(ge=0, le=100)
    risk_level: RiskLevel
    reasons: list[str] = []
    rule_results: list[RuleResult] = []

    @computed_field
    @property
    def blocked(self) -> bool:
        return self.risk_level == RiskLevel.CRITICAL

    @computed_field
    @property
    def requires_review(self) -> bool:
        return self.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)
