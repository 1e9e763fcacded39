from datetime import timedelta

import pytest

from payments_security.config import DEFAULT_GATEWAY_BASE_URL, SecuritySettings
from payments_security.domain.exceptions import ConfigurationError

REQUIRED_ENV = {
    "RAZORPAY_KEY_ID": "rzp_test_key",
    "RAZORPAY_KEY_SECRET": "rzp_test_secret",
}


class TestSecuritySettingsDefaults:
    def test_defaults_with_only_credentials(self) -> None:
        settings = SecuritySettings.from_env(REQUIRED_ENV)

        assert settings.key_id == "rzp_test_key"
        assert settings.key_secret.get_secret_value() == "rzp_test_secret"
        assert settings.max_attempts == 3
        assert settings.cooldown_window == timedelta(minutes=15)
        assert settings.amount_tolerance_minor_units == 1
        assert settings.order_freshness_window == timedelta(minutes=30)
        assert settings.high_value_threshold_minor_units == 1_000_000
        assert settings.count_signature_failures is False
        assert settings.gateway_base_url == DEFAULT_GATEWAY_BASE_URL
        assert settings.gateway_timeout_seconds == 10.0
        assert settings.log_level == "INFO"
        assert settings.log_json is True

    def test_secret_is_masked_in_repr(self) -> None:
        settings = SecuritySettings.from_env(REQUIRED_ENV)

        assert "rzp_test_secret" not in repr(settings)

    def test_settings_are_frozen(self) -> None:
        settings = SecuritySettings.from_env(REQUIRED_ENV)

        with pytest.raises(ValueError):
            settings.max_attempts = 10  # type: ignore[misc]


class TestSecuritySettingsFromEnv:
    def test_reads_overrides(self) -> None:
        settings = SecuritySettings.from_env(
            {
                **REQUIRED_ENV,
                "PAYMENT_MAX_ATTEMPTS": "5",
                "PAYMENT_COOLDOWN_WINDOW_MS": "60000",
                "PAYMENT_AMOUNT_TOLERANCE_MINOR_UNITS": "0",
                "PAYMENT_ORDER_FRESHNESS_WINDOW_MS": "3600000",
                "PAYMENT_HIGH_VALUE_THRESHOLD": "500000",
                "PAYMENT_COUNT_SIGNATURE_FAILURES": "true",
                "RAZORPAY_BASE_URL": "http://localhost:8080/v1",
                "RAZORPAY_TIMEOUT_SECONDS": "2.5",
                "LOG_LEVEL": "DEBUG",
                "LOG_JSON": "false",
            }
        )

        assert settings.max_attempts == 5
        assert settings.cooldown_window == timedelta(minutes=1)
        assert settings.amount_tolerance_minor_units == 0
        assert settings.order_freshness_window == timedelta(hours=1)
        assert settings.high_value_threshold_minor_units == 500_000
        assert settings.count_signature_failures is True
        assert settings.gateway_base_url == "http://localhost:8080/v1"
        assert settings.gateway_timeout_seconds == 2.5
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False

    def test_empty_optional_values_keep_defaults(self) -> None:
        settings = SecuritySettings.from_env(
            {**REQUIRED_ENV, "PAYMENT_MAX_ATTEMPTS": "", "PAYMENT_COOLDOWN_WINDOW_MS": ""}
        )

        assert settings.max_attempts == 3
        assert settings.cooldown_window == timedelta(minutes=15)

    def test_reads_process_environment_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAZORPAY_KEY_ID", "rzp_env_key")
        monkeypatch.setenv("RAZORPAY_KEY_SECRET", "rzp_env_secret")

        settings = SecuritySettings.from_env()

        assert settings.key_id == "rzp_env_key"


class TestSecuritySettingsValidation:
    def test_missing_secret_is_fatal(self) -> None:
        with pytest.raises(ConfigurationError, match="key_secret"):
            SecuritySettings.from_env({"RAZORPAY_KEY_ID": "rzp_test_key"})

    def test_missing_credentials_name_both_fields(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            SecuritySettings.from_env({})

        assert str(exc_info.value) == "Invalid payment security settings: key_id, key_secret"

    def test_error_does_not_echo_values(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            SecuritySettings.from_env({**REQUIRED_ENV, "PAYMENT_MAX_ATTEMPTS": "0"})

        assert "max_attempts" in str(exc_info.value)
        assert "rzp_test_secret" not in str(exc_info.value)

    def test_non_integer_duration_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="PAYMENT_COOLDOWN_WINDOW_MS"):
            SecuritySettings.from_env({**REQUIRED_ENV, "PAYMENT_COOLDOWN_WINDOW_MS": "15m"})

    def test_non_positive_duration_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="order_freshness_window"):
            SecuritySettings.from_env({**REQUIRED_ENV, "PAYMENT_ORDER_FRESHNESS_WINDOW_MS": "0"})
