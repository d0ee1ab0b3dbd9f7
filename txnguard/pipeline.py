"""Risk pipeline: score/detect -> report verdicts -> alert."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

import structlog

from txnguard.config import settings
from txnguard.domains.compliance import AMLPatternDetector, AMLRisk
from txnguard.domains.fraud import RiskAssessmentResult, RiskLevel, TransactionRiskScorer
from txnguard.domains.integrity import TransactionIntegrityGuard, TransactionSeal
from txnguard.domains.monitoring import (
    ActivityType,
    AMLPatternMetadata,
    IntegrityFailureMetadata,
    RiskAssessmentMetadata,
    SuspiciousActivityMonitor,
)
from txnguard.shared.models import TransactionData, UserBehaviorProfile

logger = structlog.get_logger()

ScoringItem = tuple[TransactionData, UserBehaviorProfile, Sequence[TransactionData]]


class TransactionRiskService:
    """Wires the pure scorers to the shared suspicious-activity monitor.

    Verdicts that need review are reported to the monitor; the monitor
    decides when a user's repeated verdicts become an alert.
    """

    def __init__(
        self,
        monitor: SuspiciousActivityMonitor,
        scorer: TransactionRiskScorer | None = None,
        detector: AMLPatternDetector | None = None,
        guard: TransactionIntegrityGuard | None = None,
    ) -> None:
        self._monitor = monitor
        self._scorer = scorer or TransactionRiskScorer()
        self._detector = detector or AMLPatternDetector()
        self._guard = guard or TransactionIntegrityGuard()

    def assess_transaction(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent_txns: Sequence[TransactionData] = (),
    ) -> RiskAssessmentResult:
        result = self._scorer.analyze(tx, profile, recent_txns)

        if result.requires_review:
            activity = (
                ActivityType.BLOCKED_TRANSACTION
                if result.risk_level == RiskLevel.CRITICAL
                else ActivityType.HIGH_RISK_TRANSACTION
            )
            self._monitor.report(
                tx.user_id,
                activity,
                RiskAssessmentMetadata(
                    transaction_id=tx.id,
                    score=result.score,
                    risk_level=result.risk_level.value,
                    reasons=tuple(result.reasons),
                ),
            )

        logger.info(
            "transaction_scored",
            transaction_id=tx.id,
            user_id=tx.user_id,
            score=result.score,
            risk_level=result.risk_level.value,
            blocked=result.blocked,
            requires_review=result.requires_review,
            triggered_count=len(result.rule_results),
        )
        return result

    def assess_many(
        self,
        items: Sequence[ScoringItem],
        max_workers: int | None = None,
    ) -> list[RiskAssessmentResult]:
        """Score a batch on a thread pool; results keep the input order."""
        if not items:
            return []
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(lambda item: self.assess_transaction(*item), items))

    def assess_monthly_activity(
        self,
        user_id: str,
        monthly_txns: Sequence[TransactionData],
    ) -> AMLRisk:
        risk = self._detector.analyze(user_id, monthly_txns)

        if risk.requires_manual_review:
            self._monitor.report(
                user_id,
                ActivityType.AML_PATTERN,
                AMLPatternMetadata(
                    category=risk.category.value,
                    risk_score=risk.risk_score,
                    flags=tuple(sorted(risk.flags)),
                    monthly_volume=risk.monthly_volume,
                ),
            )

        logger.info(
            "aml_assessed",
            user_id=user_id,
            risk_score=risk.risk_score,
            category=risk.category.value,
            flags=sorted(risk.flags),
            requires_manual_review=risk.requires_manual_review,
        )
        return risk

    def verify_record(
        self,
        tx: TransactionData,
        seal: TransactionSeal,
        key: str | bytes | None = None,
    ) -> bool:
        """Re-verify a stored record; failures are reported, never raised.

        ``key`` defaults to the configured ``INTEGRITY_SIGNING_KEY``.
        """
        if key is None:
            key = settings.integrity_signing_key
        if self._guard.verify_seal(tx, seal, key):
            return True

        intact = self._guard.verify_integrity(tx, seal.digest)
        authentic = self._guard.verify_signature(tx, seal.signature, key)

        self._monitor.report(
            tx.user_id,
            ActivityType.INTEGRITY_FAILURE,
            IntegrityFailureMetadata(
                transaction_id=tx.id,
                intact=intact,
                authentic=authentic,
                canonical_version=seal.canonical_version,
            ),
        )
        return False
