"""Transaction record integrity domain."""

from .canonical import CANONICAL_FIELDS, CANONICAL_VERSION, canonical_bytes
from .guard import TransactionIntegrityGuard, TransactionSeal

__all__ = [
    "CANONICAL_FIELDS",
    "CANONICAL_VERSION",
    "TransactionIntegrityGuard",
    "TransactionSeal",
    "canonical_bytes",
]
