"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    log_json: bool = True

    # HMAC key for transaction record signatures
    integrity_signing_key: str = "txnguard-signing-key-dev-only"

    alert_kafka_topic: str = "txnguard.suspicious-activity.alerts"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
