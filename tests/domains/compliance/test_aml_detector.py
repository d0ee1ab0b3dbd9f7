"""Tests for monthly AML pattern detection.

Covers each typology plus aggregation:
  A-1: Structuring just below the ₹50,000 reporting threshold
  A-2: Repeated and round amounts
  A-3: High monthly volume
  A-4: Rapid-fire bursts
  A-5: Legitimate activity (no false positive)
"""

from datetime import timedelta

import pytest

from tests.helpers import NOW, make_tx, make_window
from txnguard.domains.compliance import (
    AMLConfig,
    AMLFlag,
    AMLPatternDetector,
    AMLRiskCategory,
    classify_aml_category,
)
from txnguard.domains.compliance.aml import (
    detect_high_volume,
    detect_rapid_fire,
    detect_repeated_amounts,
    detect_round_amounts,
    detect_structuring,
)

CONFIG = AMLConfig()
THRESHOLD = CONFIG.structuring.reporting_threshold


@pytest.fixture
def detector() -> AMLPatternDetector:
    return AMLPatternDetector(config=AMLConfig())


class TestScenarioA1Structuring:
    def test_ten_at_98_percent_flags_structuring(self, detector):
        txns = make_window(10, THRESHOLD * 0.98)
        risk = detector.analyze("user-1", txns)
        assert AMLFlag.STRUCTURING in risk.flags
        assert risk.category == AMLRiskCategory.HIGH
        assert risk.requires_manual_review

    def test_ten_at_50_percent_not_structuring(self, detector):
        txns = make_window(10, THRESHOLD * 0.50)
        risk = detector.analyze("user-1", txns)
        assert AMLFlag.STRUCTURING not in risk.flags

    def test_pattern_names_threshold_and_count(self):
        finding = detect_structuring(make_window(10, 49_000.0), CONFIG)
        assert finding is not None
        assert "10 transactions" in finding.pattern
        assert "₹50,000" in finding.pattern

    def test_below_min_occurrences(self):
        assert detect_structuring(make_window(4, 49_000.0), CONFIG) is None

    def test_band_edges(self):
        at_floor = make_window(5, THRESHOLD * 0.90)
        at_threshold = make_window(5, THRESHOLD)
        assert detect_structuring(at_floor, CONFIG) is not None
        assert detect_structuring(at_threshold, CONFIG) is None

    def test_can_be_disabled(self):
        config = AMLConfig()
        config.structuring.enabled = False
        assert detect_structuring(make_window(10, 49_000.0), config) is None


class TestScenarioA2RepeatedAndRound:
    def test_repeated_amounts(self):
        txns = make_window(3, 12_000.0) + [make_tx(id="other", amount=777.0)]
        finding = detect_repeated_amounts(txns, CONFIG)
        assert finding is not None
        assert finding.flag == AMLFlag.REPEATED_AMOUNTS
        assert finding.pattern == "Repeated amounts: ₹12,000 (3 times)"

    def test_small_repeats_ignored(self):
        assert detect_repeated_amounts(make_window(6, 5_000.0), CONFIG) is None

    def test_repeated_amounts_listed_in_ascending_order(self):
        txns = make_window(3, 20_000.5) + [
            make_tx(id=f"x-{i}", amount=15_000.0, timestamp=NOW - timedelta(days=2, hours=i))
            for i in range(4)
        ]
        finding = detect_repeated_amounts(txns, CONFIG)
        assert finding.pattern == (
            "Repeated amounts: ₹15,000 (4 times), ₹20,000.50 (3 times)"
        )

    def test_round_amounts_above_proportion(self):
        assert detect_round_amounts(make_window(5, 3_000.0), CONFIG) is not None

    def test_round_amounts_at_proportion_not_flagged(self):
        txns = make_window(4, 3_000.0) + [make_tx(id="odd", amount=1_234.56)]
        assert detect_round_amounts(txns, CONFIG) is None

    def test_round_amounts_need_minimum_sample(self):
        assert detect_round_amounts(make_window(2, 3_000.0), CONFIG) is None

    def test_two_flags_require_review_below_high(self, detector):
        risk = detector.analyze("user-1", make_window(3, 12_000.0))
        assert risk.flags == {AMLFlag.REPEATED_AMOUNTS, AMLFlag.ROUND_AMOUNTS}
        assert risk.category == AMLRiskCategory.MEDIUM
        assert risk.requires_manual_review


class TestScenarioA3Volume:
    def test_volume_just_over_threshold(self, detector):
        txns = [
            make_tx(id=f"v-{i}", amount=amount, timestamp=NOW - timedelta(days=i + 1))
            for i, amount in enumerate([50_100.5, 50_200.5, 50_300.5, 50_400.5])
        ]
        risk = detector.analyze("user-1", txns)
        assert risk.flags == {AMLFlag.HIGH_VOLUME}
        assert risk.monthly_volume == pytest.approx(201_002.0)
        assert risk.category == AMLRiskCategory.LOW
        assert not risk.requires_manual_review

    def test_volume_score_scales_with_excess(self):
        small = detect_high_volume(make_window(1, 220_000.5), CONFIG)
        large = detect_high_volume(make_window(1, 380_000.5), CONFIG)
        assert small.score < large.score <= CONFIG.volume.score_cap

    def test_at_threshold_not_flagged(self):
        assert detect_high_volume(make_window(4, 50_000.0), CONFIG) is None


class TestScenarioA4RapidFire:
    def _burst(self, count: int, spacing_minutes: int):
        return [
            make_tx(
                id=f"rf-{i:02d}",
                amount=123.45,
                timestamp=NOW - timedelta(minutes=i * spacing_minutes),
            )
            for i in range(count)
        ]

    def test_twenty_in_an_hour(self):
        finding = detect_rapid_fire(self._burst(20, 2), CONFIG)
        assert finding is not None
        assert finding.flag == AMLFlag.RAPID_FIRE

    def test_spread_out(self):
        assert detect_rapid_fire(self._burst(20, 5), CONFIG) is None

    def test_too_few(self):
        assert detect_rapid_fire(self._burst(19, 1), CONFIG) is None


class TestScenarioA5Legitimate:
    def test_empty_window(self, detector):
        risk = detector.analyze("user-1", [])
        assert risk.category == AMLRiskCategory.LOW
        assert risk.risk_score == 0.0
        assert risk.monthly_volume == 0.0
        assert risk.flags == frozenset()
        assert risk.suspicious_patterns == []
        assert not risk.requires_manual_review

    def test_ordinary_month(self, detector):
        amounts = [250.0, 1_234.5, 89.99, 560.0, 4_999.0, 120.0, 75.25]
        txns = [
            make_tx(id=f"ok-{i}", amount=a, timestamp=NOW - timedelta(days=i * 3))
            for i, a in enumerate(amounts)
        ]
        risk = detector.analyze("user-1", txns)
        assert risk.flags == frozenset()
        assert risk.category == AMLRiskCategory.LOW


class TestAggregation:
    @pytest.mark.parametrize(
        ("score", "category"),
        [
            (0.0, AMLRiskCategory.LOW),
            (39.99, AMLRiskCategory.LOW),
            (40.0, AMLRiskCategory.MEDIUM),
            (69.99, AMLRiskCategory.MEDIUM),
            (70.0, AMLRiskCategory.HIGH),
        ],
    )
    def test_category_bands(self, score, category):
        assert classify_aml_category(score) == category

    def test_score_clamped(self, detector):
        risk = detector.analyze("user-1", make_window(10, 49_000.0))
        assert risk.risk_score == 100.0

    def test_input_order_irrelevant(self, detector):
        txns = make_window(6, 49_000.0) + make_window(3, 12_345.67)
        assert detector.analyze("user-1", txns) == detector.analyze("user-1", txns[::-1])

    def test_other_users_transactions_ignored(self, detector):
        txns = make_window(10, 49_000.0, user_id="user-2")
        risk = detector.analyze("user-1", txns)
        assert risk.transaction_count == 0
        assert risk.flags == frozenset()
