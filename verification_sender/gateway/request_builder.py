"""
Wire requests for the Vonage SMS and Voice APIs.

SMS goes out as a form-encoded POST carrying the credentials in the body.
Voice calls go out as JSON with HTTP Basic auth; the call flow (NCCO) is
a list of actions and the endpoints are typed objects.
"""

import base64
import random
from dataclasses import asdict, dataclass

import httpx

from ..domain.models import GatewayCredentials
from . import templates

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class TalkAction:
    """NCCO action that reads text to the callee."""

    text: str
    action: str = "talk"
    language: str | None = None

    def to_dict(self) -> dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class PhoneEndpoint:
    number: str
    type: str = "phone"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "number": self.number}


class VonageRequestBuilder:
    """
    Builds gateway requests.

    SMS requests are byte-for-byte reproducible for the same input. Voice
    requests draw their caller id from the number pool, so they repeat only
    when the pool holds a single number.
    """

    def __init__(
        self,
        credentials: GatewayCredentials,
        sms_uri: str,
        voice_uri: str,
        sender_id: str,
        numbers: list[str],
        rng: random.Random | None = None,
    ) -> None:
        if not numbers:
            raise ValueError("Number pool cannot be empty")
        self._credentials = credentials
        self._sms_uri = sms_uri
        self._voice_uri = voice_uri
        self._sender_id = sender_id
        self._numbers = list(numbers)
        self._rng = rng or random.Random()

    def build_sms_request(
        self,
        destination: str,
        code: str,
        client_type: str | None = None,
    ) -> httpx.Request:
        """
        Build the SMS request.

        The destination is not validated here; the gateway rejects
        malformed numbers itself.
        """
        form = {
            "api_key": self._credentials.api_key,
            "api_secret": self._credentials.api_secret,
            "from": self._sender_id,
            "to": destination,
            "text": templates.sms_text(code, client_type),
        }
        return httpx.Request(
            "POST",
            self._sms_uri,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            data=form,
        )

    def build_voice_request(
        self,
        destination: str,
        code: str,
        locale: str | None = None,
    ) -> httpx.Request:
        """Build the voice call request that reads the code out once."""
        ncco = [TalkAction(text=templates.voice_text(code), language=_talk_language(locale))]
        payload = {
            "to": [PhoneEndpoint(destination).to_dict()],
            "from": PhoneEndpoint(self._caller_id()).to_dict(),
            "ncco": [action.to_dict() for action in ncco],
        }
        return httpx.Request(
            "POST",
            self._voice_uri,
            headers={
                "Content-Type": JSON_CONTENT_TYPE,
                "Authorization": self._basic_auth(),
            },
            json=payload,
        )

    def _caller_id(self) -> str:
        return self._rng.choice(self._numbers)

    def _basic_auth(self) -> str:
        token = f"{self._credentials.api_key}:{self._credentials.api_secret}".encode()
        return "Basic " + base64.b64encode(token).decode("ascii")


def _talk_language(locale: str | None) -> str | None:
    """Turn a locale like ``en_US`` into the BCP-47 tag the talk action expects."""
    if not locale or not locale.strip():
        return None
    return locale.strip().replace("_", "-")
