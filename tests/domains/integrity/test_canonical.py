"""Tests for the canonical transaction serialization (format v1)."""

import hashlib
from datetime import UTC, datetime, timedelta, timezone

import pytest

from tests.helpers import make_tx
from txnguard.domains.integrity import TransactionIntegrityGuard
from txnguard.domains.integrity.canonical import (
    CANONICAL_FIELDS,
    canonical_bytes,
    format_amount,
    format_timestamp,
)

PINNED_BYTES = (
    b'{"id":"txn-1","userId":"user-1","amount":"10000",'
    b'"timestamp":"2026-01-15T14:00:00.000000Z",'
    b'"merchant":"Big Bazaar","paymentMethod":"upi"}'
)


class TestCanonicalBytes:
    def test_pinned_vector(self):
        assert canonical_bytes(make_tx(amount=10_000.0)) == PINNED_BYTES

    def test_pinned_digest_is_sha256_of_pinned_bytes(self):
        digest = TransactionIntegrityGuard().hash(make_tx(amount=10_000.0))
        assert digest == hashlib.sha256(PINNED_BYTES).hexdigest()

    def test_field_order(self):
        text = canonical_bytes(make_tx()).decode("utf-8")
        positions = [text.index(f'"{name}"') for name in CANONICAL_FIELDS]
        assert positions == sorted(positions)

    def test_excludes_enrichment_fields(self):
        a = make_tx(location="Mumbai", ip_address="1.1.1.1", device_fingerprint="d1")
        b = make_tx(location="Delhi", ip_address="2.2.2.2", device_fingerprint="d2")
        assert canonical_bytes(a) == canonical_bytes(b)

    def test_offset_timestamps_normalized_to_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        local = make_tx(timestamp=datetime(2026, 1, 15, 19, 30, tzinfo=ist))
        assert canonical_bytes(local) == canonical_bytes(make_tx())

    def test_non_ascii_written_as_utf8(self):
        data = canonical_bytes(make_tx(merchant="Café Coffee Day"))
        assert "Café".encode("utf-8") in data
        assert b"\\u" not in data


class TestFormatAmount:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (10_000.0, "10000"),
            (100.5, "100.5"),
            (0.01, "0.01"),
            (49_000.99, "49000.99"),
            (1e-7, "0.0000001"),
            (123_456_789.0, "123456789"),
        ],
    )
    def test_plain_shortest_form(self, amount, expected):
        assert format_amount(amount) == expected


class TestFormatTimestamp:
    def test_microsecond_precision(self):
        ts = datetime(2026, 1, 15, 14, 0, 0, 123456, tzinfo=UTC)
        assert format_timestamp(ts) == "2026-01-15T14:00:00.123456Z"

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2026, 1, 15, 14, 0)) == "2026-01-15T14:00:00.000000Z"
