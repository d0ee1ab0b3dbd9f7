"""Suspicious-activity monitoring domain."""

from .config import MonitorConfig
from .models import (
    ActivityKey,
    ActivityMetadata,
    ActivityType,
    AMLPatternMetadata,
    AuthFailureMetadata,
    DiagnosticMetadata,
    IntegrityFailureMetadata,
    RiskAssessmentMetadata,
    SuspiciousActivityAlert,
)
from .monitor import SuspiciousActivityMonitor, coerce_metadata
from .sinks import AlertSink, CompositeAlertSink, KafkaAlertSink, LoggingAlertSink

__all__ = [
    "AMLPatternMetadata",
    "ActivityKey",
    "ActivityMetadata",
    "ActivityType",
    "AlertSink",
    "AuthFailureMetadata",
    "CompositeAlertSink",
    "DiagnosticMetadata",
    "IntegrityFailureMetadata",
    "KafkaAlertSink",
    "LoggingAlertSink",
    "MonitorConfig",
    "RiskAssessmentMetadata",
    "SuspiciousActivityAlert",
    "SuspiciousActivityMonitor",
    "coerce_metadata",
]
