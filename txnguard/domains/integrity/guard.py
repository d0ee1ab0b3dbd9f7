"""Tamper-evidence and authenticity checks for transaction records.

``hash`` proves a record was not altered; ``sign`` proves it was produced by
a holder of the signing key. Records cross hops (client -> risk engine ->
ledger) where not every hop holds the key, so the two are kept separate.
"""

import hashlib
import hmac

import structlog
from pydantic import BaseModel

from txnguard.shared.models import TransactionData

from .canonical import CANONICAL_VERSION, canonical_bytes

logger = structlog.get_logger()

HASH_ALGORITHM = "sha256"
SIGNATURE_ALGORITHM = "hmac-sha256"


class TransactionSeal(BaseModel):
    """Digest and signature persisted next to a transaction record."""

    model_config = {"frozen": True}

    digest: str
    signature: str
    hash_algorithm: str = HASH_ALGORITHM
    signature_algorithm: str = SIGNATURE_ALGORITHM
    canonical_version: str = CANONICAL_VERSION


def _key_bytes(key: str | bytes) -> bytes:
    if isinstance(key, str):
        key = key.encode("utf-8")
    if not isinstance(key, bytes):
        raise TypeError("signing key must be str or bytes")
    if not key:
        raise ValueError("signing key must not be empty")
    return key


class TransactionIntegrityGuard:
    """Stateless hashing and HMAC signing over the canonical serialization."""

    def hash(self, tx: TransactionData) -> str:
        return hashlib.sha256(canonical_bytes(tx)).hexdigest()

    def verify_integrity(self, tx: TransactionData, expected_digest: str) -> bool:
        """Return True if ``tx`` still hashes to ``expected_digest``. Never raises."""
        try:
            return hmac.compare_digest(self.hash(tx), expected_digest)
        except (AttributeError, TypeError, ValueError):
            logger.warning(
                "integrity_check_malformed",
                transaction_id=getattr(tx, "id", None),
            )
            return False

    def sign(self, tx: TransactionData, key: str | bytes) -> str:
        return hmac.new(_key_bytes(key), canonical_bytes(tx), hashlib.sha256).hexdigest()

    def verify_signature(self, tx: TransactionData, mac: str, key: str | bytes) -> bool:
        """Return True if ``mac`` is a valid signature of ``tx`` under ``key``. Never raises."""
        try:
            return hmac.compare_digest(self.sign(tx, key), mac)
        except (AttributeError, TypeError, ValueError):
            logger.warning(
                "signature_check_malformed",
                transaction_id=getattr(tx, "id", None),
            )
            return False

    def seal(self, tx: TransactionData, key: str | bytes) -> TransactionSeal:
        return TransactionSeal(digest=self.hash(tx), signature=self.sign(tx, key))

    def verify_seal(self, tx: TransactionData, seal: TransactionSeal, key: str | bytes) -> bool:
        if seal.canonical_version != CANONICAL_VERSION:
            logger.warning(
                "seal_version_unsupported",
                transaction_id=getattr(tx, "id", None),
                canonical_version=seal.canonical_version,
            )
            return False
        intact = self.verify_integrity(tx, seal.digest)
        authentic = self.verify_signature(tx, seal.signature, key)
        if not (intact and authentic):
            logger.warning(
                "seal_verification_failed",
                transaction_id=getattr(tx, "id", None),
                intact=intact,
                authentic=authentic,
            )
        return intact and authentic
