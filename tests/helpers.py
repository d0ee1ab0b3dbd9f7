"""Factories and fakes shared across test modules."""

from datetime import UTC, datetime, timedelta

from txnguard.domains.monitoring.models import SuspiciousActivityAlert
from txnguard.shared.models import TransactionData, UserBehaviorProfile

NOW = datetime(2026, 1, 15, 14, 0, 0, tzinfo=UTC)


def make_tx(**kwargs) -> TransactionData:
    defaults = {
        "id": "txn-1",
        "user_id": "user-1",
        "amount": 500.0,
        "merchant": "Big Bazaar",
        "location": "Mumbai",
        "timestamp": NOW,
        "ip_address": "10.0.1.50",
        "user_agent": "Mozilla/5.0",
        "payment_method": "upi",
        "device_fingerprint": "device-abc",
    }
    defaults.update(kwargs)
    return TransactionData(**defaults)


def make_profile(**kwargs) -> UserBehaviorProfile:
    defaults = {
        "user_id": "user-1",
        "average_transaction_amount": 500.0,
        "common_merchants": {"Big Bazaar", "Swiggy"},
        "common_locations": {"Mumbai"},
        "common_transaction_times": {h: 5 for h in range(9, 22)},
        "max_single_transaction": 2_000.0,
        "average_daily_transactions": 2.0,
        "last_seen_devices": {"device-abc"},
        "created_at": NOW - timedelta(days=365),
        "last_updated": NOW - timedelta(days=1),
    }
    defaults.update(kwargs)
    return UserBehaviorProfile(**defaults)


def make_window(count: int, amount: float, **kwargs) -> list[TransactionData]:
    """``count`` transactions one hour apart, ending just before NOW."""
    return [
        make_tx(
            id=f"txn-w{i}",
            amount=amount,
            timestamp=NOW - timedelta(hours=count - i),
            **kwargs,
        )
        for i in range(count)
    ]


class RecordingSink:
    def __init__(self) -> None:
        self.alerts: list[SuspiciousActivityAlert] = []

    def emit(self, alert: SuspiciousActivityAlert) -> None:
        self.alerts.append(alert)


class FailingSink:
    def __init__(self) -> None:
        self.calls = 0

    def emit(self, alert: SuspiciousActivityAlert) -> None:
        self.calls += 1
        raise ConnectionError("pager unreachable")
