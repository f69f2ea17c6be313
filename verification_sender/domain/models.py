from dataclasses import dataclass
from enum import Enum


class Channel(str, Enum):
    """Verification delivery channels."""
    SMS = "sms"
    VOICE = "voice"


@dataclass(frozen=True)
class GatewayCredentials:
    """Immutable API credentials for the gateway."""
    api_key: str
    api_secret: str

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_secret:
            raise ValueError("Gateway credentials cannot be empty")

    def __repr__(self) -> str:
        return f"GatewayCredentials(api_key={self.api_key!r}, api_secret='***')"


@dataclass(frozen=True)
class VerificationRequest:
    """A single verification code to deliver. Never persisted."""
    destination: str
    code: str
    channel: Channel
    client_type: str | None = None
    locale: str | None = None
