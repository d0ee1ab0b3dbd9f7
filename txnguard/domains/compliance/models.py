"""Pydantic models for the compliance domain."""

from enum import StrEnum

from pydantic import BaseModel, Field


class AMLRiskCategory(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class AMLFlag(StrEnum):
    HIGH_VOLUME = "HIGH_VOLUME"
    STRUCTURING = "STRUCTURING"
    REPEATED_AMOUNTS = "REPEATED_AMOUNTS"
    ROUND_AMOUNTS = "ROUND_AMOUNTS"
    RAPID_FIRE = "RAPID_FIRE"


class PatternFinding(BaseModel):
    """One triggered check: its flag, score delta and human-readable pattern."""

    model_config = {"frozen": True}

    flag: AMLFlag
    score: float
    pattern: str
    evidence: dict = Field(default_factory=dict)


class AMLRisk(BaseModel):
    model_config = {"frozen": True}

    user_id: str
    category: AMLRiskCategory
    risk_score: float = Field(ge=0, le=100)
    flags: frozenset[AMLFlag] = frozenset()
    suspicious_patterns: list[str] = []
    monthly_volume: float = 0.0
    transaction_count: int = 0
    requires_manual_review: bool = False
