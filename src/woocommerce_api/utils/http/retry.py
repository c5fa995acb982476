"""Bounded retry loop for a single API call.

The loop sends one request, classifies the response and either returns
it, retries it, or raises. Only two conditions are retried:

- HTTP 429: wait for the server's ``Retry-After`` (whole seconds), retry
- HTTP 503: retry immediately, whether or not the error body decodes

Network failures (no response at all) and every other error status are
raised on the spot. Attempt bookkeeping lives in an ``AttemptState``
created per call, so concurrent calls through one client never share
counters.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ...exceptions import RateLimitError, TransportError
from ..security import log_request, sanitize_url
from .classifier import classify_response

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], None]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration shared read-only by every call of a client.

    ``max_retries`` bounds the number of attempts per call. Both 0 and 1
    mean a single attempt.
    """

    max_retries: int = 0

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    @property
    def max_attempts(self) -> int:
        return max(self.max_retries, 1)

    def new_state(self) -> "AttemptState":
        return AttemptState(remaining=self.max_attempts)


@dataclass
class AttemptState:
    """Per-call attempt bookkeeping. Never shared between calls."""

    remaining: int
    attempts: int = 0

    def start_attempt(self) -> int:
        self.attempts += 1
        return self.attempts

    def can_retry(self) -> bool:
        return self.remaining > 1

    def consume(self) -> None:
        self.remaining -= 1


def send_with_retry(
    client: httpx.Client,
    request: httpx.Request,
    auth: httpx.Auth,
    policy: RetryPolicy,
    state: Optional[AttemptState] = None,
    sleep: Sleeper = time.sleep,
) -> httpx.Response:
    """Send ``request`` until it succeeds or a terminal error occurs.

    :param client: Pooled httpx client used for every attempt
    :type client: httpx.Client
    :param request: Fully built request; re-sent unchanged on retry
    :type request: httpx.Request
    :param auth: Authentication strategy selected for this request
    :type auth: httpx.Auth
    :param policy: Retry policy of the client
    :type policy: RetryPolicy
    :param state: Attempt state for this call; a fresh one when None
    :type state: Optional[AttemptState]
    :param sleep: Blocking sleep used for rate-limit waits
    :type sleep: Callable[[float], None]
    :return: The successful, fully read response
    :rtype: httpx.Response
    :raises TransportError: If no HTTP response was obtained
    :raises RateLimitError: On 429 once the budget is exhausted
    :raises ServiceUnavailableError: On 503 once the budget is exhausted
    :raises ResponseError: On any other non-2xx status
    :raises DecodingError: If an error body cannot be parsed; on 503 only
                           once the budget is exhausted
    """
    if state is None:
        state = policy.new_state()
    safe_url = sanitize_url(str(request.url))

    while True:
        attempt = state.start_attempt()
        logger.debug("%s %s (attempt %d)", request.method, safe_url, attempt)
        try:
            response = client.send(request, auth=auth)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", request.method, safe_url, e)
            raise TransportError(f"request failed: {e}", original_error=e) from e

        log_request(
            response.request.method,
            str(response.request.url),
            response.request.headers,
            logger,
        )
        error = classify_response(response)
        logger.debug(
            "RECV %d %s: %s",
            response.status_code,
            response.reason_phrase,
            response.content[:200],
        )
        if error is None:
            return response

        retryable = isinstance(error, RateLimitError) or response.status_code == 503
        if not retryable or not state.can_retry():
            logger.warning(
                "%s %s -> %d after %d attempt(s): %s",
                request.method,
                safe_url,
                response.status_code,
                attempt,
                error.message,
            )
            raise error

        if isinstance(error, RateLimitError):
            wait = math.floor(error.retry_after)
            logger.info("Rate limited, waiting %ds before retrying", wait)
            sleep(wait)
        else:
            logger.debug("Service unavailable, retrying")
        state.consume()
