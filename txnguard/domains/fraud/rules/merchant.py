"""Merchant risk rule."""

from collections.abc import Sequence

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from ..config import FraudConfig
from ..models import RiskFactor, RuleResult
from .base import RiskRule


class MerchantRiskRule(RiskRule):
    """High-risk merchant categories score heavily; unfamiliar merchants lightly."""

    rule_id = "merchant_risk"

    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        cfg = config.merchant
        merchant_lower = tx.merchant.lower()

        matched = [k for k in cfg.high_risk_keywords if k.lower() in merchant_lower]
        if matched:
            return self._triggered(
                score=cfg.high_risk_score,
                risk_factor=RiskFactor.HIGH_RISK_MERCHANT,
                details=f"High-risk merchant category: {tx.merchant}",
                evidence={"merchant": tx.merchant, "keywords": matched},
            )

        # No merchant history yet: nothing to compare against
        if not profile.common_merchants or tx.merchant in profile.common_merchants:
            return self._not_triggered()

        return self._triggered(
            score=cfg.new_merchant_score,
            risk_factor=RiskFactor.NEW_MERCHANT,
            details="New merchant",
            evidence={"merchant": tx.merchant},
        )
