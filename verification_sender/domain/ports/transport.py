"""
Outbound port for sending HTTP requests to an external dependency.

The sender depends on this abstraction, not on the concrete
fault-tolerant client, so the same isolation mechanism can be plugged
in front of any other dependency with its own failure domain.
"""

from abc import ABC, abstractmethod

import httpx


class HttpTransport(ABC):
    """
    Outbound port for a fault-tolerant HTTP transport.

    Implementations must:
    - fail fast with QueueFullError when their bounded queue is full
    - fail fast with CircuitOpenError while their breaker is open
    - raise a TransportFailure (or httpx.TransportError) when no
      response could be obtained after retries
    """

    @abstractmethod
    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request and return the gateway response.

        Args:
            request: Fully built request (URL, headers and body)

        Returns:
            The HTTP response, whatever its status code
        """
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
