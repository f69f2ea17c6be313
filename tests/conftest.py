import random
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from verification_sender.config import Settings
from verification_sender.domain.models import GatewayCredentials
from verification_sender.domain.ports import HttpTransport
from verification_sender.gateway import VonageRequestBuilder


@pytest.fixture
def settings(monkeypatch) -> Settings:
    for var in ("VONAGE_API_KEY", "VONAGE_API_SECRET", "VONAGE_NUMBERS", "VONAGE_LOCAL_DOMAIN"):
        monkeypatch.delenv(var, raising=False)
    return Settings(
        api_key="test-key",
        api_secret="test-secret",
        numbers=["+15550000001"],
        local_domain="api.nexmo.test",
        base_uri_sms="https://rest.nexmo.test",
        retry={"max_attempts": 1, "wait_duration": 0},
    )


@pytest.fixture
def credentials() -> GatewayCredentials:
    return GatewayCredentials(api_key="test-key", api_secret="test-secret")


@pytest.fixture
def builder(credentials) -> VonageRequestBuilder:
    return VonageRequestBuilder(
        credentials=credentials,
        sms_uri="https://rest.nexmo.test/sms/json",
        voice_uri="https://api.nexmo.test/v1/calls",
        sender_id="Verify",
        numbers=["+15550000001", "+15550000002"],
        rng=random.Random(7),
    )


@pytest.fixture
def transport() -> MagicMock:
    mock = MagicMock(spec=HttpTransport)
    mock.send = AsyncMock(
        return_value=httpx.Response(200, json={"price": 0.0333}),
    )
    mock.aclose = AsyncMock()
    return mock
