"""Amount anomaly rule."""

from collections.abc import Sequence

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from ..config import FraudConfig
from ..models import RiskFactor, RuleResult
from .base import RiskRule


class AmountAnomalyRule(RiskRule):
    """Flags amounts far above the user's baseline or above absolute limits.

    Three candidates are scored and the highest wins, so the delta never
    decreases as the amount grows:

    - ratio to the user's average, once above the configured multiplier
    - an absolute "extreme amount" floor
    - twice the user's historical single-transaction maximum
    """

    rule_id = "amount_anomaly"

    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        return self._highest(
            self._ratio_candidate(tx, profile, config),
            self._extreme_candidate(tx, config),
            self._historical_max_candidate(tx, profile, config),
        )

    def _ratio_candidate(
        self, tx: TransactionData, profile: UserBehaviorProfile, config: FraudConfig
    ) -> RuleResult | None:
        # No baseline yet: new users are not penalized for it
        if not profile.has_amount_baseline:
            return None

        cfg = config.amount
        ratio = tx.amount / profile.average_transaction_amount
        if ratio <= cfg.multiplier:
            return None

        score = cfg.ratio_base_score + (ratio - cfg.multiplier) * cfg.ratio_slope
        score = min(score, cfg.ratio_score_cap)
        return self._triggered(
            score=score,
            risk_factor=RiskFactor.AMOUNT_SPIKE,
            details=f"Transaction amount {ratio:.1f}x higher than usual",
            evidence={
                "ratio": ratio,
                "amount": tx.amount,
                "average": profile.average_transaction_amount,
                "multiplier": cfg.multiplier,
            },
        )

    def _extreme_candidate(self, tx: TransactionData, config: FraudConfig) -> RuleResult | None:
        cfg = config.amount
        if tx.amount < cfg.extreme_amount:
            return None
        return self._triggered(
            score=cfg.extreme_amount_score,
            risk_factor=RiskFactor.EXTREME_AMOUNT,
            details="Extremely high transaction amount",
            evidence={"amount": tx.amount, "threshold": cfg.extreme_amount},
        )

    def _historical_max_candidate(
        self, tx: TransactionData, profile: UserBehaviorProfile, config: FraudConfig
    ) -> RuleResult | None:
        cfg = config.amount
        if profile.max_single_transaction <= 0:
            return None
        limit = profile.max_single_transaction * cfg.historical_max_factor
        if tx.amount <= limit:
            return None
        return self._triggered(
            score=cfg.historical_max_score,
            risk_factor=RiskFactor.EXCEEDS_HISTORICAL_MAX,
            details=(
                f"Amount exceeds historical maximum by "
                f"{cfg.historical_max_factor:g}x"
            ),
            evidence={"amount": tx.amount, "historical_max": profile.max_single_transaction},
        )
