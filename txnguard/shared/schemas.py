"""Validate raw ingestion payloads into typed value objects."""

from typing import Any

import structlog
from pydantic import ValidationError

from .errors import InvalidProfileError, InvalidTransactionError
from .models import TransactionData, UserBehaviorProfile

logger = structlog.get_logger()


def parse_transaction(payload: dict[str, Any] | TransactionData) -> TransactionData:
    """Build a TransactionData or raise InvalidTransactionError.

    Scoring assumes well-formed input, so this is the one place where a
    malformed payload is rejected.
    """
    if isinstance(payload, TransactionData):
        return payload
    try:
        return TransactionData.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        logger.warning(
            "transaction_rejected",
            transaction_id=payload.get("id") if isinstance(payload, dict) else None,
            error_count=len(errors),
        )
        raise InvalidTransactionError(
            f"Invalid transaction payload: {len(errors)} error(s)", errors
        ) from exc


def parse_transactions(payloads: list[dict[str, Any]]) -> list[TransactionData]:
    return [parse_transaction(p) for p in payloads]


def parse_profile(payload: dict[str, Any] | UserBehaviorProfile) -> UserBehaviorProfile:
    """Build a UserBehaviorProfile or raise InvalidProfileError."""
    if isinstance(payload, UserBehaviorProfile):
        return payload
    try:
        return UserBehaviorProfile.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        user_id = None
        if isinstance(payload, dict):
            user_id = payload.get("user_id") or payload.get("userId")
        logger.warning(
            "profile_rejected",
            user_id=user_id,
            error_count=len(errors),
        )
        raise InvalidProfileError(
            f"Invalid behavior profile payload: {len(errors)} error(s)", errors
        ) from exc
