"""Abstract base class for per-transaction risk rules."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from ..config import FraudConfig
from ..models import RiskFactor, RuleResult


class RiskRule(ABC):
    """Base class for all risk rules.

    Rules are pure: they read the transaction, the user's profile and the
    recent window, and return a bounded score delta with an optional reason.
    """

    rule_id: str

    @abstractmethod
    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        """Evaluate this rule and return a RuleResult."""
        ...

    def _not_triggered(self) -> RuleResult:
        return RuleResult(rule_name=self.rule_id, triggered=False)

    def _triggered(
        self,
        score: float,
        risk_factor: RiskFactor,
        details: str,
        evidence: dict | None = None,
    ) -> RuleResult:
        return RuleResult(
            rule_name=self.rule_id,
            triggered=True,
            score=score,
            risk_factor=risk_factor,
            details=details,
            evidence=evidence or {},
        )

    def _highest(self, *candidates: RuleResult | None) -> RuleResult:
        """Pick the highest-scoring candidate; ties keep the earlier one."""
        best: RuleResult | None = None
        for candidate in candidates:
            if candidate is None:
                continue
            if best is None or candidate.score > best.score:
                best = candidate
        return best or self._not_triggered()
