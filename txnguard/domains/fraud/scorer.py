"""Per-transaction composite risk scoring."""

from collections.abc import Sequence

import structlog

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from .config import FraudConfig, RiskBands, default_config
from .models import RiskAssessmentResult, RiskLevel, RuleResult
from .rules import ALL_RULES, RiskRule

logger = structlog.get_logger()


def classify_risk_level(score: float, bands: RiskBands | None = None) -> RiskLevel:
    bands = bands or default_config.bands
    if score >= bands.critical_min:
        return RiskLevel.CRITICAL
    if score >= bands.high_min:
        return RiskLevel.HIGH
    if score >= bands.medium_min:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class TransactionRiskScorer:
    """Scores one transaction against the user's behavior profile.

    Scoring is additive on a 0-100 scale:
    1. Run every rule -> list[RuleResult]
    2. Sum the deltas of triggered rules
    3. Clamp to [0, 100] and map to a risk band

    ``analyze`` has no side effects beyond debug logging and holds no mutable
    state, so one instance can be shared across worker threads.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        rules: Sequence[RiskRule] | None = None,
    ) -> None:
        self._config = config or default_config
        self._rules = list(rules if rules is not None else ALL_RULES)

    @property
    def config(self) -> FraudConfig:
        return self._config

    def analyze(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent_txns: Sequence[TransactionData] = (),
    ) -> RiskAssessmentResult:
        if profile.user_id != tx.user_id:
            raise ValueError(
                f"Profile for user {profile.user_id!r} does not match transaction "
                f"user {tx.user_id!r}"
            )

        results: list[RuleResult] = []
        for rule in self._rules:
            try:
                result = rule.evaluate(tx, profile, recent_txns, self._config)
            except Exception:
                logger.exception(
                    "rule_evaluation_error", rule_id=rule.rule_id, transaction_id=tx.id
                )
                continue
            if result.triggered:
                results.append(result)

        raw_score = sum(r.score for r in results)
        score = round(min(max(raw_score, 0.0), 100.0), 2)
        risk_level = classify_risk_level(score, self._config.bands)

        assessment = RiskAssessmentResult(
            transaction_id=tx.id,
            user_id=tx.user_id,
            score=score,
            risk_level=risk_level,
            reasons=[r.details for r in results if r.details],
            rule_results=results,
        )

        logger.debug(
            "transaction_risk_analyzed",
            transaction_id=tx.id,
            score=score,
            risk_level=risk_level.value,
            triggered=[r.rule_name for r in results],
        )

        return assessment
