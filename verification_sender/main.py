import argparse
import asyncio
import sys
from uuid import uuid4

import structlog

from .config import load_settings
from .domain.errors import ConfigurationInvalid
from .domain.models import Channel, VerificationRequest
from .gateway import VonageVerificationSender
from .infrastructure.logging import configure_logging, set_correlation_id

logger = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="verification-sender",
        description="Deliver a verification code through Vonage.",
    )
    parser.add_argument("channel", choices=[c.value for c in Channel])
    parser.add_argument("destination", help="Phone number in E.164 format")
    parser.add_argument("code", help="Verification code to deliver")
    parser.add_argument("--client-type", default=None, help="SMS template hint (ios, android-ng)")
    parser.add_argument("--locale", default=None, help="Voice language, e.g. en-US")
    return parser.parse_args(argv)


async def run(request: VerificationRequest) -> bool:
    """Main entry point: wire up the sender and deliver one code."""
    settings = load_settings()
    configure_logging(settings.service_name, settings.log_level)
    set_correlation_id(uuid4().hex)

    async with VonageVerificationSender(settings) as sender:
        delivered = await sender.deliver(request)
        logger.info("Delivery finished", delivered=delivered, metrics=sender.metrics.snapshot())
        return delivered


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    request = VerificationRequest(
        destination=args.destination,
        code=args.code,
        channel=Channel(args.channel),
        client_type=args.client_type,
        locale=args.locale,
    )

    try:
        delivered = asyncio.run(run(request))
    except ConfigurationInvalid as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 2

    print("delivered" if delivered else "failed")
    return 0 if delivered else 1


if __name__ == "__main__":
    sys.exit(main())
