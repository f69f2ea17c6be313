"""
Error taxonomy for verification delivery.

Only ConfigurationInvalid is allowed to escape to callers (at startup).
Every per-call failure is absorbed by the sender and reported as False
plus a log record.
"""


class VerificationSenderError(Exception):
    """Base class for all verification sender errors."""


class ConfigurationInvalid(VerificationSenderError):
    """Settings are missing, empty or malformed."""


class TransportFailure(VerificationSenderError):
    """The request never produced an HTTP response."""


class CircuitOpenError(TransportFailure):
    """The circuit breaker is open; no network attempt was made."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Circuit breaker '{name}' is open")
        self.name = name


class QueueFullError(TransportFailure):
    """The bounded executor has no free worker and no queue slot left."""

    def __init__(self, name: str, capacity: int) -> None:
        super().__init__(f"Executor '{name}' is saturated ({capacity} pending)")
        self.name = name
        self.capacity = capacity


class GatewayRejection(VerificationSenderError):
    """The gateway answered with a failure status."""


class MalformedResponse(VerificationSenderError):
    """The gateway answered with a body that could not be decoded."""
