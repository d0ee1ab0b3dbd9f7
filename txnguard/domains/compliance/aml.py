"""Monthly anti-money-laundering pattern detection.

Works on a caller-supplied window (typically the last 30 days) and checks
for five typologies:

  1. High volume     : total spend above the monthly threshold
  2. Structuring     : repeated amounts just below the reporting threshold
  3. Repeated amounts: the same large amount sent again and again
  4. Round amounts   : an unusual share of exact multiples of a round unit
  5. Rapid fire      : a burst of many transactions inside a short window

Every check is a pure function over the window; the result does not depend
on the order in which transactions are supplied.
"""

import math
from collections import Counter
from collections.abc import Sequence
from datetime import timedelta
from decimal import Decimal

import structlog

from txnguard.shared.models import TransactionData

from .config import AMLConfig, AMLRiskBands, default_config
from .models import AMLFlag, AMLRisk, AMLRiskCategory, PatternFinding

logger = structlog.get_logger()


def _inr(amount: float) -> str:
    if float(amount).is_integer():
        return f"₹{amount:,.0f}"
    return f"₹{amount:,.2f}"


def _is_multiple(amount: float, unit: float) -> bool:
    return Decimal(repr(float(amount))) % Decimal(repr(float(unit))) == 0


def monthly_volume(transactions: Sequence[TransactionData]) -> float:
    # fsum is exact, so the total does not depend on input order
    return math.fsum(t.amount for t in transactions)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def detect_high_volume(
    transactions: Sequence[TransactionData],
    config: AMLConfig = default_config,
) -> PatternFinding | None:
    cfg = config.volume
    if not cfg.enabled:
        return None

    volume = monthly_volume(transactions)
    if volume <= cfg.monthly_volume_threshold:
        return None

    excess_ratio = volume / cfg.monthly_volume_threshold
    score = min(cfg.base_score + (excess_ratio - 1.0) * cfg.excess_slope, cfg.score_cap)
    return PatternFinding(
        flag=AMLFlag.HIGH_VOLUME,
        score=score,
        pattern=f"Monthly volume: {_inr(volume)}",
        evidence={"volume": volume, "threshold": cfg.monthly_volume_threshold},
    )


def detect_structuring(
    transactions: Sequence[TransactionData],
    config: AMLConfig = default_config,
) -> PatternFinding | None:
    """Detect amounts clustered just below the reporting threshold."""
    cfg = config.structuring
    if not cfg.enabled:
        return None

    threshold = cfg.reporting_threshold
    floor = threshold * cfg.band_floor_pct
    near = [t for t in transactions if floor <= t.amount < threshold]

    if len(near) < cfg.min_occurrences:
        return None

    return PatternFinding(
        flag=AMLFlag.STRUCTURING,
        score=cfg.score,
        pattern=(
            f"{len(near)} transactions between {_inr(floor)} and the "
            f"{_inr(threshold)} reporting threshold"
        ),
        evidence={
            "count": len(near),
            "threshold": threshold,
            "floor": floor,
            "transaction_ids": sorted(t.id for t in near),
        },
    )


def detect_repeated_amounts(
    transactions: Sequence[TransactionData],
    config: AMLConfig = default_config,
) -> PatternFinding | None:
    cfg = config.repeated
    if not cfg.enabled:
        return None

    frequency = Counter(t.amount for t in transactions if t.amount >= cfg.min_amount)
    repeated = sorted(
        (amount, count) for amount, count in frequency.items() if count >= cfg.min_repetitions
    )
    if not repeated:
        return None

    listed = ", ".join(f"{_inr(amount)} ({count} times)" for amount, count in repeated)
    return PatternFinding(
        flag=AMLFlag.REPEATED_AMOUNTS,
        score=cfg.score,
        pattern=f"Repeated amounts: {listed}",
        evidence={"amounts": {str(amount): count for amount, count in repeated}},
    )


def detect_round_amounts(
    transactions: Sequence[TransactionData],
    config: AMLConfig = default_config,
) -> PatternFinding | None:
    cfg = config.round_amounts
    if not cfg.enabled or len(transactions) < cfg.min_transactions:
        return None

    round_count = sum(1 for t in transactions if _is_multiple(t.amount, cfg.round_unit))
    proportion = round_count / len(transactions)
    if proportion <= cfg.proportion_threshold:
        return None

    return PatternFinding(
        flag=AMLFlag.ROUND_AMOUNTS,
        score=cfg.score,
        pattern=(
            f"High frequency of round amounts: {proportion:.0%} "
            f"({round_count}/{len(transactions)}) are multiples of {_inr(cfg.round_unit)}"
        ),
        evidence={"round_count": round_count, "proportion": proportion},
    )


def detect_rapid_fire(
    transactions: Sequence[TransactionData],
    config: AMLConfig = default_config,
) -> PatternFinding | None:
    cfg = config.rapid_fire
    if not cfg.enabled or len(transactions) < cfg.burst_size:
        return None

    ordered = sorted(transactions, key=lambda t: (t.timestamp, t.id))
    window = timedelta(minutes=cfg.burst_window_minutes)

    for i in range(len(ordered) - cfg.burst_size + 1):
        start = ordered[i].timestamp
        end = ordered[i + cfg.burst_size - 1].timestamp
        if end - start <= window:
            return PatternFinding(
                flag=AMLFlag.RAPID_FIRE,
                score=cfg.score,
                pattern=(
                    f"{cfg.burst_size} transactions within "
                    f"{cfg.burst_window_minutes} minutes starting {start.isoformat()}"
                ),
                evidence={"burst_start": start.isoformat(), "burst_end": end.isoformat()},
            )

    return None


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def classify_aml_category(score: float, bands: AMLRiskBands | None = None) -> AMLRiskCategory:
    bands = bands or default_config.bands
    if score >= bands.high_min:
        return AMLRiskCategory.HIGH
    if score >= bands.medium_min:
        return AMLRiskCategory.MEDIUM
    return AMLRiskCategory.LOW


_CHECKS = (
    detect_high_volume,
    detect_structuring,
    detect_repeated_amounts,
    detect_round_amounts,
    detect_rapid_fire,
)


class AMLPatternDetector:
    """Runs every AML check over a monthly window and aggregates the findings."""

    def __init__(self, config: AMLConfig | None = None) -> None:
        self._config = config or default_config

    @property
    def config(self) -> AMLConfig:
        return self._config

    def findings(self, monthly_txns: Sequence[TransactionData]) -> list[PatternFinding]:
        results = []
        for check in _CHECKS:
            finding = check(monthly_txns, self._config)
            if finding is not None:
                results.append(finding)
        return results

    def analyze(self, user_id: str, monthly_txns: Sequence[TransactionData]) -> AMLRisk:
        txns = [t for t in monthly_txns if t.user_id == user_id]
        if len(txns) != len(monthly_txns):
            logger.warning(
                "aml_foreign_transactions_ignored",
                user_id=user_id,
                ignored=len(monthly_txns) - len(txns),
            )

        findings = self.findings(txns)
        score = min(max(sum(f.score for f in findings), 0.0), 100.0)
        score = round(score, 2)
        category = classify_aml_category(score, self._config.bands)
        flags = frozenset(f.flag for f in findings)

        risk = AMLRisk(
            user_id=user_id,
            category=category,
            risk_score=score,
            flags=flags,
            suspicious_patterns=[f.pattern for f in findings],
            monthly_volume=monthly_volume(txns),
            transaction_count=len(txns),
            requires_manual_review=(
                category == AMLRiskCategory.HIGH
                or len(flags) >= self._config.bands.manual_review_min_flags
            ),
        )

        logger.debug(
            "aml_analysis_completed",
            user_id=user_id,
            risk_score=score,
            category=category.value,
            flags=sorted(flags),
            transaction_count=len(txns),
        )

        return risk
