"""Configuration for payments-security.

Settings are loaded from the process environment. A missing gateway
secret is fatal: the library refuses to start rather than verify
signatures against an undefined key.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from payments_security.domain.exceptions import ConfigurationError

DEFAULT_GATEWAY_BASE_URL = "https://api.razorpay.com/v1"

# Environment variable → settings field
ENV_FIELDS = {
    "RAZORPAY_KEY_ID": "key_id",
    "RAZORPAY_KEY_SECRET": "key_secret",
    "PAYMENT_MAX_ATTEMPTS": "max_attempts",
    "PAYMENT_AMOUNT_TOLERANCE_MINOR_UNITS": "amount_tolerance_minor_units",
    "PAYMENT_HIGH_VALUE_THRESHOLD": "high_value_threshold_minor_units",
    "PAYMENT_COUNT_SIGNATURE_FAILURES": "count_signature_failures",
    "RAZORPAY_BASE_URL": "gateway_base_url",
    "RAZORPAY_TIMEOUT_SECONDS": "gateway_timeout_seconds",
    "LOG_LEVEL": "log_level",
    "LOG_JSON": "log_json",
}

# Millisecond environment variables → timedelta settings field
ENV_DURATION_FIELDS = {
    "PAYMENT_COOLDOWN_WINDOW_MS": "cooldown_window",
    "PAYMENT_ORDER_FRESHNESS_WINDOW_MS": "order_freshness_window",
}


class SecuritySettings(BaseModel):
    """Tunables and credentials for the payment-security core."""

    model_config = ConfigDict(frozen=True)

    key_id: str = Field(min_length=1)
    key_secret: SecretStr
    """Gateway key secret; also the HMAC key for callback signatures."""

    max_attempts: int = Field(default=3, ge=1)
    cooldown_window: timedelta = timedelta(minutes=15)
    amount_tolerance_minor_units: int = Field(default=1, ge=0)
    order_freshness_window: timedelta = timedelta(minutes=30)
    high_value_threshold_minor_units: int = Field(default=1_000_000, ge=0)
    count_signature_failures: bool = False
    """Count forged callbacks against the actor's attempt limit."""

    gateway_base_url: str = DEFAULT_GATEWAY_BASE_URL
    gateway_timeout_seconds: float = Field(default=10.0, gt=0)

    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("key_secret")
    @classmethod
    def secret_not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("key_secret must not be empty")
        return v

    @field_validator("cooldown_window", "order_freshness_window")
    @classmethod
    def positive_duration(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("duration must be positive")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SecuritySettings:
        """Load settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Validated settings. Unset optional variables keep their defaults.

        Raises:
            ConfigurationError: If credentials are missing or a value is invalid.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {
            field: env[name] for name, field in ENV_FIELDS.items() if env.get(name, "") != ""
        }

        for name, field in ENV_DURATION_FIELDS.items():
            raw = env.get(name, "")
            if raw == "":
                continue
            try:
                data[field] = timedelta(milliseconds=int(raw))
            except ValueError as e:
                raise ConfigurationError(f"{name} must be an integer millisecond count") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            # Name the fields only; pydantic's message echoes input values.
            fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
            raise ConfigurationError(
                f"Invalid payment security settings: {', '.join(fields)}"
            ) from e
