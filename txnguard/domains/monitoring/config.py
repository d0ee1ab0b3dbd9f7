"""Suspicious-activity monitor configuration."""

import os
from dataclasses import dataclass

from txnguard.config import settings


@dataclass
class MonitorConfig:
    # Count at which exactly one alert fires for a (user, activity) pair
    alert_threshold: int = 3
    # None keeps counters forever; otherwise a counter restarts once its
    # first event is older than this many seconds
    counter_ttl_seconds: float | None = None
    kafka_topic: str = settings.alert_kafka_topic

    def __post_init__(self) -> None:
        if self.alert_threshold < 1:
            raise ValueError("alert_threshold must be at least 1")
        if self.counter_ttl_seconds is not None and self.counter_ttl_seconds <= 0:
            raise ValueError("counter_ttl_seconds must be positive when set")

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Load config with env var overrides. Env vars use MONITOR_ prefix."""
        config = cls()
        if v := os.getenv("MONITOR_ALERT_THRESHOLD"):
            config.alert_threshold = int(v)
        if v := os.getenv("MONITOR_COUNTER_TTL_SECONDS"):
            config.counter_ttl_seconds = float(v)
        if v := os.getenv("MONITOR_KAFKA_TOPIC"):
            config.kafka_topic = v
        config.__post_init__()
        return config


# Module-level default instance
default_config = MonitorConfig()
