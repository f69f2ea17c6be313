"""
Vonage verification sender.

Builds a channel-specific request, sends it through an isolated
fault-tolerant transport and folds whatever comes back into a single
boolean. No exception crosses the public methods: every failure ends up
as False plus one log record.
"""

from collections.abc import Callable

import httpx
import structlog

from ..config import Settings
from ..domain.errors import GatewayRejection, MalformedResponse
from ..domain.models import Channel, GatewayCredentials, VerificationRequest
from ..domain.ports import HttpTransport
from ..domain.responses import DeliveryResponse, Failure, Success, Unparseable
from ..infrastructure.http import FaultTolerantHttpClient, TransportOptions
from ..infrastructure.logging import mask_destination
from ..infrastructure.metrics import DeliveryMetrics
from .request_builder import VonageRequestBuilder
from .response_classifier import classify_response

logger = structlog.get_logger()

TRANSPORT_NAME = "vonage"


class VonageVerificationSender:
    """
    Delivers verification codes by SMS or voice call.

    Dependencies are injected; only the settings are required. Credentials
    and the transport are read-only after construction, so concurrent
    deliveries never share mutable state besides the metric counters.
    """

    def __init__(
        self,
        settings: Settings,
        transport: HttpTransport | None = None,
        metrics: DeliveryMetrics | None = None,
        builder: VonageRequestBuilder | None = None,
    ) -> None:
        """
        Initialize with injected dependencies.

        Args:
            settings: Validated Vonage settings
            transport: Transport to send through; a dedicated
                FaultTolerantHttpClient is created when omitted
            metrics: Counters to record into; a private set when omitted
            builder: Request builder; derived from settings when omitted
        """
        self._credentials = GatewayCredentials(settings.api_key, settings.api_secret)
        self._transport = transport or create_transport(settings)
        self._metrics = metrics or DeliveryMetrics()
        self._builder = builder or VonageRequestBuilder(
            credentials=self._credentials,
            sms_uri=settings.sms_uri,
            voice_uri=settings.voice_uri,
            sender_id=settings.sender_id,
            numbers=settings.numbers,
        )

    @property
    def metrics(self) -> DeliveryMetrics:
        return self._metrics

    async def __aenter__(self) -> "VonageVerificationSender":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def deliver_sms(
        self,
        destination: str,
        client_type: str | None,
        code: str,
    ) -> bool:
        """Send the code by SMS. Returns True only if the gateway accepted it."""
        log = logger.bind(channel=Channel.SMS.value, destination=mask_destination(destination))
        self._metrics.record(self._metrics.sms_delivered)
        return await self._dispatch(
            lambda: self._builder.build_sms_request(destination, code, client_type),
            log,
        )

    async def deliver_voice(
        self,
        destination: str,
        code: str,
        locale: str | None = None,
    ) -> bool:
        """Read the code out in a voice call. Returns True only if the call was accepted."""
        log = logger.bind(channel=Channel.VOICE.value, destination=mask_destination(destination))
        self._metrics.record(self._metrics.voice_delivered)
        return await self._dispatch(
            lambda: self._builder.build_voice_request(destination, code, locale),
            log,
        )

    async def deliver(self, request: VerificationRequest) -> bool:
        """Route a VerificationRequest to its channel."""
        match request.channel:
            case Channel.SMS:
                return await self.deliver_sms(request.destination, request.client_type, request.code)
            case Channel.VOICE:
                return await self.deliver_voice(request.destination, request.code, request.locale)
            case _:
                logger.error("Unsupported channel", channel=str(request.channel))
                return False

    async def _dispatch(self, build: Callable[[], httpx.Request], log) -> bool:
        response: DeliveryResponse | None = None
        error: Exception | None = None

        try:
            raw = await self._transport.send(build())
            response = classify_response(raw)
        except Exception as e:
            error = e

        return self._process_response(response, error, log)

    def _process_response(
        self,
        response: DeliveryResponse | None,
        error: Exception | None,
        log,
    ) -> bool:
        match response:
            case Success():
                self._metrics.record(self._metrics.price, response.price_units)
                return True
            case Unparseable() if response.delivered:
                return True
            case Failure(status=status, message=message):
                log.info(
                    "Vonage request rejected",
                    reason=GatewayRejection.__name__,
                    status=status,
                    message=message,
                )
                return False
            case Unparseable():
                log.info(
                    "Vonage request rejected",
                    reason=MalformedResponse.__name__,
                    http_status=response.http_status,
                )
                return False

        if error is not None:
            log.warning(
                "Vonage request failed",
                reason=type(error).__name__,
                error=str(error),
            )
            return False

        log.error("No response or error from transport")
        return False


def create_transport(settings: Settings) -> FaultTolerantHttpClient:
    """Build the transport dedicated to the Vonage gateway."""
    return FaultTolerantHttpClient(
        TransportOptions(
            name=TRANSPORT_NAME,
            circuit_breaker=settings.circuit_breaker,
            retry=settings.retry,
            executor=settings.executor,
        )
    )
