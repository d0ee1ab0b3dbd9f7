"""Device and location familiarity rules."""

from collections.abc import Sequence

from txnguard.shared.models import TransactionData, UserBehaviorProfile

from ..config import FraudConfig
from ..models import RiskFactor, RuleResult
from .base import RiskRule


class DeviceRiskRule(RiskRule):
    """Triggers when the device fingerprint is not among the user's recent devices."""

    rule_id = "device_risk"

    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        cfg = config.device

        if not tx.device_fingerprint:
            if cfg.missing_fingerprint_score <= 0:
                return self._not_triggered()
            return self._triggered(
                score=cfg.missing_fingerprint_score,
                risk_factor=RiskFactor.MISSING_DEVICE_FINGERPRINT,
                details="Missing device fingerprint",
            )

        if not profile.last_seen_devices or tx.device_fingerprint in profile.last_seen_devices:
            return self._not_triggered()

        return self._triggered(
            score=cfg.new_device_score,
            risk_factor=RiskFactor.NEW_DEVICE,
            details="New device detected",
            evidence={"known_devices": len(profile.last_seen_devices)},
        )


class LocationAnomalyRule(RiskRule):
    """Triggers when a reported location is not among the user's usual locations."""

    rule_id = "location_anomaly"

    def evaluate(
        self,
        tx: TransactionData,
        profile: UserBehaviorProfile,
        recent: Sequence[TransactionData],
        config: FraudConfig,
    ) -> RuleResult:
        if not tx.location or not profile.common_locations:
            return self._not_triggered()
        if tx.location in profile.common_locations:
            return self._not_triggered()

        return self._triggered(
            score=config.location.new_location_score,
            risk_factor=RiskFactor.NEW_LOCATION,
            details=f"Transaction from unfamiliar location: {tx.location}",
            evidence={"location": tx.location},
        )
