"""Tests for transaction hashing and HMAC signing."""

from datetime import timedelta

import pytest

from tests.helpers import NOW, make_tx
from txnguard.domains.integrity import TransactionIntegrityGuard, TransactionSeal

KEY = "ledger-signing-key"
OTHER_KEY = "some-other-key"


@pytest.fixture
def guard() -> TransactionIntegrityGuard:
    return TransactionIntegrityGuard()


class TestHash:
    def test_deterministic(self, guard):
        tx = make_tx()
        assert guard.hash(tx) == guard.hash(tx)
        assert guard.hash(tx) == guard.hash(make_tx())

    def test_is_sha256_hex(self, guard):
        digest = guard.hash(make_tx())
        assert len(digest) == 64
        int(digest, 16)

    def test_amount_change_of_one_paisa_changes_hash(self, guard):
        assert guard.hash(make_tx(amount=500.0)) != guard.hash(make_tx(amount=500.01))

    @pytest.mark.parametrize(
        "change",
        [
            {"id": "txn-2"},
            {"user_id": "user-2"},
            {"merchant": "Swiggy"},
            {"payment_method": "card"},
            {"timestamp": NOW - timedelta(microseconds=1)},
        ],
    )
    def test_each_canonical_field_changes_hash(self, guard, change):
        assert guard.hash(make_tx()) != guard.hash(make_tx(**change))


class TestVerifyIntegrity:
    def test_matching_digest(self, guard):
        tx = make_tx()
        assert guard.verify_integrity(tx, guard.hash(tx)) is True

    def test_tampered_record(self, guard):
        digest = guard.hash(make_tx(amount=500.0))
        assert guard.verify_integrity(make_tx(amount=5_000.0), digest) is False

    @pytest.mark.parametrize("bad", ["", "zz", "é" * 64, None, 42])
    def test_malformed_digest_returns_false(self, guard, bad):
        assert guard.verify_integrity(make_tx(), bad) is False

    def test_malformed_record_returns_false(self, guard):
        assert guard.verify_integrity(None, "00" * 32) is False


class TestSignature:
    def test_round_trip(self, guard):
        tx = make_tx()
        assert guard.verify_signature(tx, guard.sign(tx, KEY), KEY) is True

    def test_wrong_key_rejected(self, guard):
        tx = make_tx()
        assert guard.verify_signature(tx, guard.sign(tx, KEY), OTHER_KEY) is False

    def test_differs_per_key(self, guard):
        tx = make_tx()
        assert guard.sign(tx, KEY) != guard.sign(tx, OTHER_KEY)

    def test_str_and_bytes_keys_agree(self, guard):
        tx = make_tx()
        assert guard.sign(tx, KEY) == guard.sign(tx, KEY.encode("utf-8"))

    def test_signature_differs_from_hash(self, guard):
        tx = make_tx()
        assert guard.sign(tx, KEY) != guard.hash(tx)

    def test_tampered_record_rejected(self, guard):
        mac = guard.sign(make_tx(amount=500.0), KEY)
        assert guard.verify_signature(make_tx(amount=500.01), mac, KEY) is False

    def test_empty_key_cannot_sign(self, guard):
        with pytest.raises(ValueError, match="must not be empty"):
            guard.sign(make_tx(), "")

    @pytest.mark.parametrize(
        ("mac", "key"),
        [("abc", KEY), (None, KEY), ("00" * 32, ""), ("00", 123)],
    )
    def test_malformed_inputs_return_false(self, guard, mac, key):
        assert guard.verify_signature(make_tx(), mac, key) is False


class TestSeal:
    def test_seal_round_trip(self, guard):
        tx = make_tx()
        seal = guard.seal(tx, KEY)
        assert seal.digest == guard.hash(tx)
        assert seal.canonical_version == "v1"
        assert guard.verify_seal(tx, seal, KEY) is True

    def test_seal_survives_serialization(self, guard):
        tx = make_tx()
        stored = guard.seal(tx, KEY).model_dump_json()
        assert guard.verify_seal(tx, TransactionSeal.model_validate_json(stored), KEY) is True

    def test_seal_wrong_key(self, guard):
        tx = make_tx()
        assert guard.verify_seal(tx, guard.seal(tx, KEY), OTHER_KEY) is False

    def test_seal_unknown_version(self, guard):
        tx = make_tx()
        seal = guard.seal(tx, KEY).model_copy(update={"canonical_version": "v0"})
        assert guard.verify_seal(tx, seal, KEY) is False
