from .errors import (
    CircuitOpenError,
    ConfigurationInvalid,
    GatewayRejection,
    MalformedResponse,
    QueueFullError,
    TransportFailure,
    VerificationSenderError,
)
from .models import Channel, GatewayCredentials, VerificationRequest
from .responses import DeliveryResponse, Failure, Success, Unparseable

__all__ = [
    "Channel",
    "CircuitOpenError",
    "ConfigurationInvalid",
    "DeliveryResponse",
    "Failure",
    "GatewayCredentials",
    "GatewayRejection",
    "MalformedResponse",
    "QueueFullError",
    "Success",
    "TransportFailure",
    "Unparseable",
    "VerificationRequest",
    "VerificationSenderError",
]
