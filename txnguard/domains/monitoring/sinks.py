"""Alert sinks: where threshold alerts from the monitor are delivered."""

import json
from collections.abc import Iterable
from typing import Protocol

import structlog

from .config import default_config
from .models import SuspiciousActivityAlert

logger = structlog.get_logger()


class AlertSink(Protocol):
    def emit(self, alert: SuspiciousActivityAlert) -> None: ...


class LoggingAlertSink:
    """Writes alerts to the structured log for the paging pipeline to pick up."""

    def emit(self, alert: SuspiciousActivityAlert) -> None:
        logger.warning(
            "suspicious_activity_alert",
            alert_id=alert.alert_id,
            user_id=alert.user_id,
            activity_type=alert.activity_type,
            count=alert.count,
            metadata=alert.metadata.model_dump(mode="json") if alert.metadata else None,
            created_at=alert.created_at.isoformat(),
        )


def alert_payload(alert: SuspiciousActivityAlert) -> bytes:
    return json.dumps(alert.model_dump(mode="json"), sort_keys=True).encode("utf-8")


class KafkaAlertSink:
    """Publishes alerts to a Kafka topic keyed by user id.

    Args:
        producer: A kafka-python style producer exposing
            ``send(topic, value=..., key=...)``.
        topic: Destination topic; defaults to the configured alert topic.
    """

    def __init__(self, producer, topic: str | None = None) -> None:
        self._producer = producer
        self._topic = topic or default_config.kafka_topic

    def emit(self, alert: SuspiciousActivityAlert) -> None:
        self._producer.send(
            self._topic,
            value=alert_payload(alert),
            key=alert.user_id.encode("utf-8"),
        )
        logger.info("alert_published_to_kafka", alert_id=alert.alert_id, topic=self._topic)


class CompositeAlertSink:
    """Fans an alert out to several sinks.

    Every sink is attempted; the first failure is re-raised afterwards.
    """

    def __init__(self, sinks: Iterable[AlertSink]) -> None:
        self._sinks = list(sinks)

    def emit(self, alert: SuspiciousActivityAlert) -> None:
        first_error: Exception | None = None
        for sink in self._sinks:
            try:
                sink.emit(alert)
            except Exception as exc:
                logger.exception(
                    "alert_sink_failed",
                    alert_id=alert.alert_id,
                    sink=type(sink).__name__,
                )
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error
