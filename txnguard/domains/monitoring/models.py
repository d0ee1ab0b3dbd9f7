"""Pydantic models for suspicious-activity monitoring."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, Literal, NamedTuple

from pydantic import BaseModel, Field


class ActivityType(StrEnum):
    HIGH_RISK_TRANSACTION = "high_risk_transaction"
    BLOCKED_TRANSACTION = "blocked_transaction"
    AML_PATTERN = "aml_pattern"
    INTEGRITY_FAILURE = "integrity_failure"
    FAILED_LOGIN = "failed_login"


class ActivityKey(NamedTuple):
    user_id: str
    activity_type: str


# --- Metadata (closed union discriminated on ``kind``) ---


class RiskAssessmentMetadata(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["risk_assessment"] = "risk_assessment"
    transaction_id: str
    score: float
    risk_level: str
    reasons: tuple[str, ...] = ()


class AMLPatternMetadata(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["aml_pattern"] = "aml_pattern"
    category: str
    risk_score: float
    flags: tuple[str, ...] = ()
    monthly_volume: float = 0.0


class AuthFailureMetadata(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["auth_failure"] = "auth_failure"
    ip_address: str | None = None
    user_agent: str | None = None
    reason: str = ""


class IntegrityFailureMetadata(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["integrity_failure"] = "integrity_failure"
    transaction_id: str
    intact: bool
    authentic: bool
    canonical_version: str = ""


class DiagnosticMetadata(BaseModel):
    """Opaque freeform data for activity types with no dedicated shape."""

    model_config = {"frozen": True}

    kind: Literal["diagnostic"] = "diagnostic"
    data: dict[str, Any] = Field(default_factory=dict)


ActivityMetadata = Annotated[
    RiskAssessmentMetadata
    | AMLPatternMetadata
    | AuthFailureMetadata
    | IntegrityFailureMetadata
    | DiagnosticMetadata,
    Field(discriminator="kind"),
]


class SuspiciousActivityAlert(BaseModel):
    model_config = {"frozen": True}

    alert_id: str
    user_id: str
    activity_type: str
    count: int
    metadata: ActivityMetadata | None = None
    created_at: datetime
