"""Immutable input value types shared by every domain."""

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

# Tolerated drift between the producer's clock and ours
MAX_CLOCK_SKEW = timedelta(seconds=60)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TransactionData(BaseModel):
    """A single payment as supplied by the ingestion pipeline.

    Accepts both snake_case and camelCase keys (``user_id`` / ``userId``).
    """

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    amount: float = Field(gt=0, allow_inf_nan=False)
    merchant: str = Field(min_length=1)
    location: str | None = None
    timestamp: datetime
    ip_address: str = ""
    user_agent: str = ""
    payment_method: str = Field(min_length=1)
    device_fingerprint: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_not_in_future(cls, value: datetime) -> datetime:
        value = _as_utc(value)
        if value > datetime.now(UTC) + MAX_CLOCK_SKEW:
            raise ValueError("timestamp is in the future")
        return value


class UserBehaviorProfile(BaseModel):
    """Per-user baseline maintained by the profile aggregation job.

    An ``average_transaction_amount`` of zero means the user has no amount
    baseline yet; empty sets and histograms likewise mean "no history".
    """

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    user_id: str = Field(min_length=1)
    average_transaction_amount: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    common_merchants: frozenset[str] = Field(default_factory=frozenset)
    common_locations: frozenset[str] = Field(default_factory=frozenset)
    common_transaction_times: dict[int, int] = Field(default_factory=dict)  # hour -> count
    max_single_transaction: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    average_daily_transactions: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    last_seen_devices: frozenset[str] = Field(default_factory=frozenset)
    created_at: datetime
    last_updated: datetime

    @field_validator("common_transaction_times", mode="before")
    @classmethod
    def _histogram_from_pairs(cls, value: Any) -> Any:
        # Aggregation job emits [{"hour": 9, "count": 14}, ...]
        if isinstance(value, list):
            histogram: dict[int, int] = {}
            for entry in value:
                try:
                    hour, count = int(entry["hour"]), int(entry["count"])
                except (KeyError, TypeError) as exc:
                    raise ValueError("expected entries of the form {hour, count}") from exc
                histogram[hour] = histogram.get(hour, 0) + count
            return histogram
        return value

    @field_validator("common_transaction_times")
    @classmethod
    def _valid_hours(cls, value: dict[int, int]) -> dict[int, int]:
        for hour, count in value.items():
            if not 0 <= hour <= 23:
                raise ValueError(f"hour out of range: {hour}")
            if count < 0:
                raise ValueError(f"negative count for hour {hour}")
        return value

    @field_validator("created_at", "last_updated")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def has_amount_baseline(self) -> bool:
        return self.average_transaction_amount > 0

    @property
    def common_hours(self) -> frozenset[int]:
        return frozenset(h for h, c in self.common_transaction_times.items() if c > 0)

    @classmethod
    def empty(cls, user_id: str, now: datetime | None = None) -> "UserBehaviorProfile":
        """Profile for a user with no history."""
        now = now or datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, last_updated=now)
