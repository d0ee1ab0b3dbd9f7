"""Time-of-day rule."""

from collections.abc import Sequence
from datetime import datetime
from zoneinfo import ZoneInfo

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from ..config import FraudConfig
from ..models import RiskFactor, RuleResult
from .base import RiskRule


def local_hour(ts: datetime, timezone: str) -> int:
    return ts.astimezone(ZoneInfo(timezone)).hour


def in_band(hour: int, start: int, end: int) -> bool:
    """Whether ``hour`` lies in [start, end), wrapping past midnight if start > end."""
    if start <= end:
        return start <= hour < end
    return hour >= start or hour < end


class TimePatternRule(RiskRule):
    """Triggers for transactions outside the user's usual hours.

    An hour the user regularly transacts in is never penalized, even inside
    the atypical band. Without a histogram only the atypical band applies.
    """

    rule_id = "time_pattern"

    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        cfg = config.time
        hour = local_hour(tx.timestamp, cfg.timezone)
        common_hours = profile.common_hours

        if hour in common_hours:
            return self._not_triggered()

        if in_band(hour, cfg.atypical_start_hour, cfg.atypical_end_hour):
            return self._triggered(
                score=cfg.atypical_hour_score,
                risk_factor=RiskFactor.UNUSUAL_HOUR,
                details=(
                    f"Transaction at {hour:02d}:00, outside normal hours "
                    f"({cfg.atypical_start_hour:02d}:00-{cfg.atypical_end_hour:02d}:00 is atypical)"
                ),
                evidence={"hour": hour, "timezone": cfg.timezone},
            )

        if not common_hours:
            return self._not_triggered()

        return self._triggered(
            score=cfg.off_pattern_score,
            risk_factor=RiskFactor.OFF_PATTERN_HOUR,
            details="Transaction outside normal hours",
            evidence={"hour": hour, "common_hours": sorted(common_hours)},
        )
