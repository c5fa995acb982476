"""Classification of completed HTTP exchanges.

``classify_response`` maps a response to either None (2xx, the call
succeeded) or one of the client's error types. The body is read in full
before anything else so that a response is never left half-consumed when
the caller decides to retry.
"""

import logging
import math
from http import HTTPStatus
from typing import Optional

import httpx
from pydantic import ValidationError

from ...exceptions import (
    DecodingError,
    RateLimitError,
    ResponseError,
    ServiceUnavailableError,
    WooCommerceError,
)
from ...models import ErrorBody

logger = logging.getLogger(__name__)


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def parse_retry_after(response: httpx.Response) -> float:
    """Parse the ``Retry-After`` header as a number of seconds.

    :param response: The 429 response
    :type response: httpx.Response
    :return: Seconds to wait; 0.0 when missing, unparseable or negative
    :rtype: float
    """
    raw = response.headers.get("Retry-After", "").strip()
    if not raw:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        logger.debug("Ignoring unparseable Retry-After header %r", raw)
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def parse_error_body(response: httpx.Response) -> ErrorBody:
    """Parse the API's ``{code, message, data}`` error envelope.

    :param response: A response whose body has been read
    :type response: httpx.Response
    :return: The parsed envelope; an empty one for an empty body
    :rtype: ErrorBody
    :raises DecodingError: If a non-empty body is not such an object
    """
    body = response.content
    if not body:
        return ErrorBody()
    try:
        return ErrorBody.model_validate_json(body)
    except ValidationError as e:
        raise DecodingError(
            str(e), body=body, status_code=response.status_code
        ) from e


def classify_response(response: httpx.Response) -> Optional[WooCommerceError]:
    """Classify a completed response.

    :param response: Response returned by the transport
    :type response: httpx.Response
    :return: None for a 2xx response, otherwise the error describing it
    :rtype: Optional[WooCommerceError]
    """
    response.read()

    if is_success(response.status_code):
        return None

    try:
        envelope = parse_error_body(response)
    except DecodingError as e:
        return e

    status = response.status_code
    message = envelope.message or ""
    errors = envelope.field_errors()
    if status == 429:
        return RateLimitError(
            message,
            retry_after=parse_retry_after(response),
            error_code=envelope.code,
            data=envelope.data,
            errors=errors,
        )
    if status == 503:
        return ServiceUnavailableError(
            message, error_code=envelope.code, data=envelope.data, errors=errors
        )
    if status == 406:
        message = HTTPStatus(406).phrase
    return ResponseError(
        message,
        status_code=status,
        error_code=envelope.code,
        data=envelope.data,
        errors=errors,
    )
