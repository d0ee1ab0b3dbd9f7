"""Transaction risk, AML detection, record integrity and suspicious-activity alerting."""

from txnguard.domains.compliance import AMLFlag, AMLPatternDetector, AMLRisk, AMLRiskCategory
from txnguard.domains.fraud import RiskAssessmentResult, RiskLevel, TransactionRiskScorer
from txnguard.domains.integrity import TransactionIntegrityGuard, TransactionSeal
from txnguard.domains.monitoring import ActivityType, SuspiciousActivityMonitor
from txnguard.pipeline import TransactionRiskService
from txnguard.shared.errors import InvalidProfileError, InvalidTransactionError, TxnGuardError
from txnguard.shared.models import TransactionData, UserBehaviorProfile
from txnguard.shared.schemas import parse_profile, parse_transaction

__all__ = [
    "AMLFlag",
    "AMLPatternDetector",
    "AMLRisk",
    "AMLRiskCategory",
    "ActivityType",
    "InvalidProfileError",
    "InvalidTransactionError",
    "RiskAssessmentResult",
    "RiskLevel",
    "SuspiciousActivityMonitor",
    "TransactionData",
    "TransactionIntegrityGuard",
    "TransactionRiskScorer",
    "TransactionRiskService",
    "TransactionSeal",
    "TxnGuardError",
    "UserBehaviorProfile",
    "parse_profile",
    "parse_transaction",
]
