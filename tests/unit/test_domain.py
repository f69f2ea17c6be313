from decimal import Decimal

import pytest

from verification_sender.domain.models import Channel, GatewayCredentials, VerificationRequest
from verification_sender.domain.responses import Failure, Success, Unparseable
from verification_sender.infrastructure.logging import mask_destination
from verification_sender.infrastructure.metrics import Counter, DeliveryMetrics


class TestGatewayCredentials:
    def test_empty_credentials_raise_error(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            GatewayCredentials(api_key="", api_secret="secret")

    def test_secret_hidden_from_repr(self):
        credentials = GatewayCredentials(api_key="key", api_secret="hunter2")

        assert "hunter2" not in repr(credentials)

    def test_credentials_are_immutable(self):
        credentials = GatewayCredentials(api_key="key", api_secret="secret")

        with pytest.raises(AttributeError):
            credentials.api_key = "other"


class TestVerificationRequest:
    def test_optional_fields_default_to_none(self):
        request = VerificationRequest(destination="+1555", code="1234", channel=Channel.VOICE)

        assert request.client_type is None
        assert request.locale is None
        assert request.channel.value == "voice"


class TestDeliveryResponse:
    def test_only_success_is_delivered(self):
        assert Success(price=Decimal("0.1")).delivered is True
        assert Failure(status=2, message="Missing").delivered is False

    def test_price_units_truncate(self):
        assert Success(price=Decimal("0.0333")).price_units == 33
        assert Success(price=Decimal("1.5")).price_units == 1500
        assert Success().price_units == 0

    def test_unparseable_follows_status_bucket(self):
        assert Unparseable(http_status=200).delivered is True
        assert Unparseable(http_status=302).delivered is False
        assert Unparseable(http_status=199).delivered is False


class TestMetrics:
    def test_counter_rejects_negative(self):
        counter = Counter("c")

        with pytest.raises(ValueError):
            counter.inc(-1)

    def test_snapshot(self):
        metrics = DeliveryMetrics(prefix="test")
        metrics.record(metrics.sms_delivered)
        metrics.record(metrics.price, 33)

        assert metrics.snapshot() == {
            "test.sms.delivered": 1,
            "test.voice.delivered": 0,
            "test.price": 33,
        }

    def test_record_swallows_counter_errors(self):
        metrics = DeliveryMetrics()
        metrics.record(metrics.price, -5)

        assert metrics.price.value == 0


class TestMaskDestination:
    def test_keeps_last_digits(self):
        assert mask_destination("+15551234567") == "********4567"

    def test_short_and_empty(self):
        assert mask_destination("123") == "***"
        assert mask_destination("") == ""
