"""Canonical byte serialization of a transaction record (format ``v1``).

This is the interoperability contract for hashes and signatures stored
alongside transaction records. Any implementation that wants to verify a
stored digest must produce exactly these bytes:

  1. A JSON object with keys, in this order:
     ``id``, ``userId``, ``amount``, ``timestamp``, ``merchant``, ``paymentMethod``.
  2. Compact separators (``,`` and ``:``), no whitespace, non-ASCII
     characters written as UTF-8 rather than ``\\u`` escapes.
  3. ``amount`` as a JSON string: shortest round-tripping decimal of the
     value, plain notation, no exponent, no trailing zeros
     (``10000``, ``100.5``, ``0.01``).
  4. ``timestamp`` as a JSON string in UTC:
     ``YYYY-MM-DDTHH:MM:SS.ffffffZ``.

Other fields (location, IP, user agent, device) are deliberately excluded so
enrichment between hops does not break verification.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from txnguard.shared.models import TransactionData

CANONICAL_VERSION = "v1"

CANONICAL_FIELDS: tuple[str, ...] = (
    "id",
    "userId",
    "amount",
    "timestamp",
    "merchant",
    "paymentMethod",
)


def format_amount(amount: float) -> str:
    # repr() gives the shortest string that round-trips the float
    return format(Decimal(repr(float(amount))).normalize(), "f")


def format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def canonical_fields(tx: TransactionData) -> dict[str, str]:
    return {
        "id": tx.id,
        "userId": tx.user_id,
        "amount": format_amount(tx.amount),
        "timestamp": format_timestamp(tx.timestamp),
        "merchant": tx.merchant,
        "paymentMethod": tx.payment_method,
    }


def canonical_bytes(tx: TransactionData) -> bytes:
    """Serialize the signed subset of ``tx`` to canonical UTF-8 bytes."""
    return json.dumps(
        canonical_fields(tx),
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")
