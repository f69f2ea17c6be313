import pytest

from verification_sender.config import load_settings
from verification_sender.domain.errors import ConfigurationInvalid

REQUIRED = {
    "api_key": "key",
    "api_secret": "secret",
    "numbers": ["+15550000001"],
    "local_domain": "api.nexmo.test",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("VONAGE_API_KEY", "VONAGE_API_SECRET", "VONAGE_NUMBERS", "VONAGE_LOCAL_DOMAIN"):
        monkeypatch.delenv(var, raising=False)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings(**REQUIRED)

        assert settings.sms_uri == "https://rest.nexmo.com/sms/json"
        assert settings.voice_uri == "https://api.nexmo.test/v1/calls"
        assert settings.circuit_breaker.failure_rate_threshold == 50
        assert settings.retry.max_attempts == 3
        assert settings.executor.max_workers == 10
        assert settings.executor.queue_size == 100

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("VONAGE_API_KEY", "env-key")
        monkeypatch.setenv("VONAGE_API_SECRET", "env-secret")
        monkeypatch.setenv("VONAGE_NUMBERS", '["+15550000001", "+15550000002"]')
        monkeypatch.setenv("VONAGE_LOCAL_DOMAIN", "calls.example.com")
        monkeypatch.setenv("VONAGE_RETRY__MAX_ATTEMPTS", "5")

        settings = load_settings()

        assert settings.api_key == "env-key"
        assert settings.numbers == ["+15550000001", "+15550000002"]
        assert settings.retry.max_attempts == 5

    @pytest.mark.parametrize("field", sorted(REQUIRED))
    def test_missing_field_fails(self, field):
        values = {k: v for k, v in REQUIRED.items() if k != field}

        with pytest.raises(ConfigurationInvalid, match=field):
            load_settings(**values)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("api_key", ""),
            ("api_secret", "   "),
            ("local_domain", ""),
            ("numbers", []),
            ("numbers", ["+15550000001", ""]),
        ],
    )
    def test_empty_field_fails(self, field, value):
        with pytest.raises(ConfigurationInvalid, match=field):
            load_settings(**{**REQUIRED, field: value})

    def test_invalid_nested_setting_fails(self):
        with pytest.raises(ConfigurationInvalid, match="circuit_breaker"):
            load_settings(**REQUIRED, circuit_breaker={"failure_rate_threshold": 0})
