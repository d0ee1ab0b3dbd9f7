"""Transaction fraud risk domain."""

from .config import FraudConfig, RiskBands
from .models import RiskAssessmentResult, RiskFactor, RiskLevel, RuleResult
from .rules import ALL_RULES, RiskRule
from .scorer import TransactionRiskScorer, classify_risk_level

__all__ = [
    "ALL_RULES",
    "FraudConfig",
    "RiskAssessmentResult",
    "RiskBands",
    "RiskFactor",
    "RiskLevel",
    "RiskRule",
    "RuleResult",
    "TransactionRiskScorer",
    "classify_risk_level",
]
