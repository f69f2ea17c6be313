"""
Typed gateway responses.

The gateway answers with one of two JSON shapes, or with something that
is not JSON at all. Exactly one variant describes any given answer.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Success:
    """Gateway accepted the request; price is per message (SMS only)."""

    price: Decimal | None = None

    @property
    def delivered(self) -> bool:
        return True

    @property
    def price_units(self) -> int:
        """Price scaled to integer milli-units; an unknown price counts as 0."""
        if self.price is None:
            return 0
        return int(self.price * 1000)


@dataclass(frozen=True)
class Failure:
    """Gateway rejected the request with a machine-readable reason."""

    status: int | None = None
    message: str = ""

    @property
    def delivered(self) -> bool:
        return False


@dataclass(frozen=True)
class Unparseable:
    """
    The HTTP exchange completed but the body was not JSON.

    Content type is advisory only: the HTTP status code alone decides
    whether this counts as delivered.
    """

    http_status: int

    @property
    def delivered(self) -> bool:
        return 200 <= self.http_status < 300


DeliveryResponse = Success | Failure | Unparseable
