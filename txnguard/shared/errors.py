"""Typed errors raised at the ingestion boundary."""

from typing import Any


class TxnGuardError(Exception):
    """Base class for txnguard errors."""


class InputValidationError(TxnGuardError, ValueError):
    """An inbound payload failed validation before scoring."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @property
    def fields(self) -> list[str]:
        return [".".join(str(p) for p in e.get("loc", ())) for e in self.errors]


class InvalidTransactionError(InputValidationError):
    pass


class InvalidProfileError(InputValidationError):
    pass
