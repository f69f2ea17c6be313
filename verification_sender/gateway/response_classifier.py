"""
Classify raw gateway answers into a DeliveryResponse.

The HTTP status code decides success versus failure. The content type
only decides whether the body is worth decoding.
"""

from decimal import Decimal

import httpx
import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..domain.responses import DeliveryResponse, Failure, Success, Unparseable

logger = structlog.get_logger()

JSON_MEDIA_TYPE = "application/json"


class _SuccessBody(BaseModel):
    price: Decimal | None = Field(default=None, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def _exact_price(cls, value):
        # JSON numbers arrive as floats; go through str to keep 0.29 as 0.29
        if isinstance(value, float):
            return str(value)
        return value


class _FailureBody(BaseModel):
    status: int | None = None
    message: str = ""


def classify(status_code: int, content_type: str | None, body: str | bytes) -> DeliveryResponse:
    """
    Decode a gateway answer.

    Args:
        status_code: HTTP status code
        content_type: Raw Content-Type header, if any
        body: Response body

    Returns:
        Success or Failure for JSON bodies, Unparseable otherwise
    """
    if not _is_json(content_type):
        return Unparseable(http_status=status_code)

    if 200 <= status_code < 300:
        try:
            parsed = _SuccessBody.model_validate_json(body)
        except ValidationError as e:
            # Acceptance is already confirmed by the status code
            logger.warning("Error parsing Vonage success response", error=str(e))
            return Success()
        return Success(price=parsed.price)

    try:
        failure = _FailureBody.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Error parsing Vonage failure response", error=str(e))
        return Failure()
    return Failure(status=failure.status, message=failure.message)


def classify_response(response: httpx.Response) -> DeliveryResponse:
    return classify(
        response.status_code,
        response.headers.get("Content-Type"),
        response.content,
    )


def _is_json(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_MEDIA_TYPE
