"""Risk scoring configuration with sensible defaults.

The defaults are starting points carried over from the first rules release;
none has been tuned against labelled fraud outcomes yet.
"""

import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass
class AmountThresholds:
    # Ratio to the user's average above which the amount is anomalous
    multiplier: float = 3.0
    ratio_base_score: float = 20.0
    ratio_slope: float = 1.0  # points per unit of ratio above the multiplier
    ratio_score_cap: float = 40.0
    extreme_amount: float = 100_000.0
    extreme_amount_score: float = 40.0
    historical_max_factor: float = 2.0
    historical_max_score: float = 25.0

    def __post_init__(self) -> None:
        if self.multiplier <= 0:
            raise ValueError("multiplier must be positive")
        if self.extreme_amount <= 0:
            raise ValueError("extreme_amount must be positive")
        if self.historical_max_factor <= 0:
            raise ValueError("historical_max_factor must be positive")


@dataclass
class VelocityThresholds:
    hourly_txn_limit: int = 10
    hourly_score: float = 35.0
    daily_amount_limit: float = 50_000.0
    daily_amount_score: float = 30.0

    def __post_init__(self) -> None:
        if self.hourly_txn_limit <= 0:
            raise ValueError("hourly_txn_limit must be positive")
        if self.daily_amount_limit <= 0:
            raise ValueError("daily_amount_limit must be positive")


@dataclass
class TimePatternThresholds:
    # Atypical band is [start, end) in local hours
    atypical_start_hour: int = 0
    atypical_end_hour: int = 5
    atypical_hour_score: float = 20.0
    off_pattern_score: float = 10.0
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        if not (0 <= self.atypical_start_hour <= 23 and 0 <= self.atypical_end_hour <= 24):
            raise ValueError("Atypical hour band must lie within 0-24")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.timezone!r}") from exc


@dataclass
class MerchantThresholds:
    high_risk_keywords: tuple[str, ...] = (
        "crypto",
        "bitcoin",
        "gambling",
        "casino",
        "betting",
        "gift card",
        "money transfer",
        "wire transfer",
    )
    high_risk_score: float = 25.0
    new_merchant_score: float = 5.0


@dataclass
class DeviceThresholds:
    new_device_score: float = 20.0
    missing_fingerprint_score: float = 0.0


@dataclass
class LocationThresholds:
    new_location_score: float = 10.0


@dataclass
class RiskBands:
    """Score bands: below medium_min is LOW, at or above critical_min is CRITICAL."""

    medium_min: float = 30.0
    high_min: float = 60.0
    critical_min: float = 80.0

    def __post_init__(self) -> None:
        if not (0 < self.medium_min < self.high_min < self.critical_min <= 100):
            raise ValueError(
                "Risk bands must satisfy 0 < medium_min < high_min < critical_min <= 100"
            )


@dataclass
class FraudConfig:
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    velocity: VelocityThresholds = field(default_factory=VelocityThresholds)
    time: TimePatternThresholds = field(default_factory=TimePatternThresholds)
    merchant: MerchantThresholds = field(default_factory=MerchantThresholds)
    device: DeviceThresholds = field(default_factory=DeviceThresholds)
    location: LocationThresholds = field(default_factory=LocationThresholds)
    bands: RiskBands = field(default_factory=RiskBands)

    def __post_init__(self) -> None:
        # Sections are mutable; re-check them after overrides
        self.amount.__post_init__()
        self.velocity.__post_init__()
        self.time.__post_init__()
        self.bands.__post_init__()

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Amount overrides
        if v := os.getenv("FRAUD_AMOUNT_MULTIPLIER"):
            config.amount.multiplier = float(v)
        if v := os.getenv("FRAUD_EXTREME_AMOUNT"):
            config.amount.extreme_amount = float(v)

        # Velocity overrides
        if v := os.getenv("FRAUD_HOURLY_TXN_LIMIT"):
            config.velocity.hourly_txn_limit = int(v)
        if v := os.getenv("FRAUD_DAILY_AMOUNT_LIMIT"):
            config.velocity.daily_amount_limit = float(v)

        # Time overrides
        if v := os.getenv("FRAUD_SCORING_TIMEZONE"):
            config.time.timezone = v

        # Merchant overrides (comma separated)
        if v := os.getenv("FRAUD_HIGH_RISK_KEYWORDS"):
            config.merchant.high_risk_keywords = tuple(
                k.strip().lower() for k in v.split(",") if k.strip()
            )

        # Device overrides
        if v := os.getenv("FRAUD_MISSING_FINGERPRINT_SCORE"):
            config.device.missing_fingerprint_score = float(v)

        config.__post_init__()
        return config


# Module-level default instance
default_config = FraudConfig()
