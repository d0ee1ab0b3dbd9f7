"""Threshold alerting on repeated suspicious activity per user."""

import threading
import time
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from .config import MonitorConfig, default_config
from .models import (
    ActivityKey,
    ActivityMetadata,
    AMLPatternMetadata,
    AuthFailureMetadata,
    DiagnosticMetadata,
    IntegrityFailureMetadata,
    RiskAssessmentMetadata,
    SuspiciousActivityAlert,
)
from .sinks import AlertSink, LoggingAlertSink

logger = structlog.get_logger()

_metadata_adapter: TypeAdapter = TypeAdapter(ActivityMetadata)

_METADATA_TYPES = (
    RiskAssessmentMetadata,
    AMLPatternMetadata,
    AuthFailureMetadata,
    IntegrityFailureMetadata,
    DiagnosticMetadata,
)


def coerce_metadata(
    metadata: ActivityMetadata | Mapping[str, Any] | None,
) -> ActivityMetadata | None:
    """Validate known shapes; wrap untagged mappings as diagnostic data."""
    if metadata is None or isinstance(metadata, _METADATA_TYPES):
        return metadata
    if isinstance(metadata, Mapping) and "kind" not in metadata:
        return DiagnosticMetadata(data=dict(metadata))
    return _metadata_adapter.validate_python(metadata)


class SuspiciousActivityMonitor:
    """Counts suspicious events per (user, activity) and alerts at a threshold.

    Counters only grow unless ``counter_ttl_seconds`` is configured or
    ``reset`` is called. Exactly one alert fires when a counter reaches the
    threshold; later increments do not re-alert. Alerts are delivered after
    the lock is released and a failing sink never undoes the increment.
    """

    def __init__(
        self,
        config: MonitorConfig | None = None,
        sink: AlertSink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or default_config
        self._sink = sink or LoggingAlertSink()
        self._clock = clock
        self._lock = threading.Lock()
        self._counts: dict[ActivityKey, int] = {}
        self._first_seen: dict[ActivityKey, float] = {}

    @property
    def threshold(self) -> int:
        return self._config.alert_threshold

    def _expired(self, key: ActivityKey, now: float) -> bool:
        ttl = self._config.counter_ttl_seconds
        if ttl is None:
            return False
        first_seen = self._first_seen.get(key)
        return first_seen is not None and now - first_seen >= ttl

    def report(
        self,
        user_id: str,
        activity_type: str,
        metadata: ActivityMetadata | Mapping[str, Any] | None = None,
    ) -> int:
        """Record one event and return the post-increment count.

        Metadata that fails validation is dropped; the event still counts.
        """
        key = ActivityKey(user_id, str(activity_type))
        try:
            metadata = coerce_metadata(metadata)
        except ValidationError as exc:
            logger.warning(
                "activity_metadata_invalid",
                user_id=user_id,
                activity_type=key.activity_type,
                error_count=exc.error_count(),
            )
            metadata = None
        now = self._clock()

        with self._lock:
            if self._expired(key, now):
                del self._counts[key]
                del self._first_seen[key]
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
            if count == 1:
                self._first_seen[key] = now

        logger.info(
            "suspicious_activity_reported",
            user_id=user_id,
            activity_type=key.activity_type,
            count=count,
        )

        if count == self._config.alert_threshold:
            self._trigger_alert(key, count, metadata)

        return count

    def _trigger_alert(
        self, key: ActivityKey, count: int, metadata: ActivityMetadata | None
    ) -> None:
        alert = SuspiciousActivityAlert(
            alert_id=str(uuid.uuid4()),
            user_id=key.user_id,
            activity_type=key.activity_type,
            count=count,
            metadata=metadata,
            created_at=datetime.now(UTC),
        )
        try:
            self._sink.emit(alert)
        except Exception:
            # Counting stays correct while the paging path is down
            logger.exception(
                "alert_sink_failed",
                alert_id=alert.alert_id,
                user_id=key.user_id,
                activity_type=key.activity_type,
            )

    def count(self, user_id: str, activity_type: str) -> int:
        key = ActivityKey(user_id, str(activity_type))
        with self._lock:
            if self._expired(key, self._clock()):
                return 0
            return self._counts.get(key, 0)

    def snapshot(self, user_id: str | None = None) -> dict[ActivityKey, int]:
        """Copy of current counts, optionally for a single user."""
        now = self._clock()
        with self._lock:
            return {
                key: count
                for key, count in self._counts.items()
                if (user_id is None or key.user_id == user_id)
                and not self._expired(key, now)
            }

    def reset(self, user_id: str, activity_type: str | None = None) -> int:
        """Drop counters for a user (or one of their activities). Returns how many were cleared."""
        with self._lock:
            keys = [
                key for key in self._counts
                if key.user_id == user_id
                and (activity_type is None or key.activity_type == str(activity_type))
            ]
            for key in keys:
                del self._counts[key]
                self._first_seen.pop(key, None)

        if keys:
            logger.info("suspicious_activity_reset", user_id=user_id, cleared=len(keys))
        return len(keys)
