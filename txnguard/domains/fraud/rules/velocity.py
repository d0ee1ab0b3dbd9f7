"""Velocity rules over the caller-supplied recent-transaction window."""

import math
from collections.abc import Sequence
from datetime import timedelta

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from ..config import FraudConfig
from ..models import RiskFactor, RuleResult
from .base import RiskRule

ONE_HOUR = timedelta(hours=1)
ONE_DAY = timedelta(hours=24)


def trailing_window(
    tx: TransactionData,
    recent: Sequence[TransactionData],
    window: timedelta,
) -> list[TransactionData]:
    """Transactions in (tx.timestamp - window, tx.timestamp], excluding tx itself.

    Anchored on the transaction's own timestamp so replays score the same.
    """
    start = tx.timestamp - window
    return [
        t for t in recent
        if t.id != tx.id and start < t.timestamp <= tx.timestamp
    ]


class VelocityRule(RiskRule):
    """Triggers on bursts of transactions or heavy spend in the trailing window."""

    rule_id = "velocity"

    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        cfg = config.velocity
        candidates: list[RuleResult] = []

        hourly = trailing_window(tx, recent, ONE_HOUR)
        if len(hourly) > cfg.hourly_txn_limit:
            candidates.append(
                self._triggered(
                    score=cfg.hourly_score,
                    risk_factor=RiskFactor.VELOCITY_COUNT_1H,
                    details=f"{len(hourly)} transactions in last hour",
                    evidence={"count": len(hourly), "limit": cfg.hourly_txn_limit},
                )
            )

        daily_amount = math.fsum(t.amount for t in trailing_window(tx, recent, ONE_DAY))
        if daily_amount > cfg.daily_amount_limit:
            candidates.append(
                self._triggered(
                    score=cfg.daily_amount_score,
                    risk_factor=RiskFactor.VELOCITY_AMOUNT_24H,
                    details=f"Daily transaction limit exceeded: ₹{daily_amount:,.2f}",
                    evidence={"daily_amount": daily_amount, "limit": cfg.daily_amount_limit},
                )
            )

        return self._highest(*candidates)
