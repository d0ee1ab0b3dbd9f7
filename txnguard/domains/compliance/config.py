"""AML pattern detection configuration.

Every check can be switched off and every threshold overridden. Amounts are
in INR. The monthly risk bands are deliberately separate from the
per-transaction risk bands in ``txnguard.domains.fraud.config``.
"""

import os
from dataclasses import dataclass, field


@dataclass
class VolumeConfig:
    """Total monthly volume above which the account is flagged HIGH_VOLUME."""

    enabled: bool = True
    monthly_volume_threshold: float = 200_000.0
    base_score: float = 30.0
    # Extra points per multiple of the threshold exceeded
    excess_slope: float = 10.0
    score_cap: float = 40.0

    def __post_init__(self) -> None:
        if self.monthly_volume_threshold <= 0:
            raise ValueError("monthly_volume_threshold must be positive")


@dataclass
class StructuringConfig:
    """Transactions sitting just below the reporting threshold.

    A transaction counts when floor_pct * threshold <= amount < threshold.
    """

    enabled: bool = True
    reporting_threshold: float = 50_000.0
    band_floor_pct: float = 0.90
    min_occurrences: int = 5
    score: float = 40.0

    def __post_init__(self) -> None:
        if self.reporting_threshold <= 0:
            raise ValueError("reporting_threshold must be positive")
        if not 0 < self.band_floor_pct < 1:
            raise ValueError("band_floor_pct must be between 0 and 1")


@dataclass
class RepeatedAmountConfig:
    enabled: bool = True
    min_repetitions: int = 3
    # Small repeated payments (subscriptions, SIPs) are not interesting
    min_amount: float = 10_000.0
    score: float = 20.0


@dataclass
class RoundAmountConfig:
    enabled: bool = True
    round_unit: float = 1_000.0
    # Fraction of round amounts that must be exceeded
    proportion_threshold: float = 0.80
    min_transactions: int = 3
    score: float = 25.0

    def __post_init__(self) -> None:
        if self.round_unit <= 0:
            raise ValueError("round_unit must be positive")


@dataclass
class RapidFireConfig:
    """burst_size consecutive transactions inside burst_window_minutes."""

    enabled: bool = True
    burst_size: int = 20
    burst_window_minutes: int = 60
    score: float = 30.0

    def __post_init__(self) -> None:
        if self.burst_size < 1:
            raise ValueError("burst_size must be at least 1")
        if self.burst_window_minutes <= 0:
            raise ValueError("burst_window_minutes must be positive")


@dataclass
class AMLRiskBands:
    medium_min: float = 40.0
    high_min: float = 70.0
    manual_review_min_flags: int = 2

    def __post_init__(self) -> None:
        if not 0 < self.medium_min < self.high_min <= 100:
            raise ValueError("AML bands must satisfy 0 < medium_min < high_min <= 100")


@dataclass
class AMLConfig:
    volume: VolumeConfig = field(default_factory=VolumeConfig)
    structuring: StructuringConfig = field(default_factory=StructuringConfig)
    repeated: RepeatedAmountConfig = field(default_factory=RepeatedAmountConfig)
    round_amounts: RoundAmountConfig = field(default_factory=RoundAmountConfig)
    rapid_fire: RapidFireConfig = field(default_factory=RapidFireConfig)
    bands: AMLRiskBands = field(default_factory=AMLRiskBands)

    def __post_init__(self) -> None:
        # Sections are mutable; re-check them after overrides
        self.volume.__post_init__()
        self.structuring.__post_init__()
        self.round_amounts.__post_init__()
        self.rapid_fire.__post_init__()
        self.bands.__post_init__()

    @classmethod
    def from_env(cls) -> "AMLConfig":
        """Load config with env var overrides. Env vars use AML_ prefix."""
        config = cls()

        if v := os.getenv("AML_MONTHLY_VOLUME_THRESHOLD"):
            config.volume.monthly_volume_threshold = float(v)
        if v := os.getenv("AML_REPORTING_THRESHOLD"):
            config.structuring.reporting_threshold = float(v)
        if v := os.getenv("AML_STRUCTURING_MIN_OCCURRENCES"):
            config.structuring.min_occurrences = int(v)
        if v := os.getenv("AML_REPEATED_MIN_REPETITIONS"):
            config.repeated.min_repetitions = int(v)
        if v := os.getenv("AML_ROUND_PROPORTION_THRESHOLD"):
            config.round_amounts.proportion_threshold = float(v)
        if v := os.getenv("AML_RAPID_FIRE_ENABLED"):
            config.rapid_fire.enabled = v.lower() in ("1", "true", "yes")

        config.__post_init__()
        return config


# Module-level default instance
default_config = AMLConfig()
