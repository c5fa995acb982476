"""Pooled HTTP client construction.

Each API client owns one ``httpx.Client``. Its connection pool is shared
by every call the API client makes and is safe for use from several
threads. The timeout applies to a single attempt; there is no budget
spanning a whole retry sequence.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


def create_timeout(timeout: float = 30.0) -> httpx.Timeout:
    """Create a per-attempt timeout covering connect, read, write and pool.

    :param timeout: Timeout in seconds
    :type timeout: float
    :return: Configured timeout object
    :rtype: httpx.Timeout
    """
    return httpx.Timeout(timeout)


def create_limits(
    max_keepalive_connections: int = 10,
    max_connections: int = 20,
    keepalive_expiry: float = 30.0,
) -> httpx.Limits:
    """Create a connection limits configuration object.

    :param max_keepalive_connections: Maximum number of keepalive connections
    :type max_keepalive_connections: int
    :param max_connections: Maximum total number of connections
    :type max_connections: int
    :param keepalive_expiry: Keepalive connection expiry time in seconds
    :type keepalive_expiry: float
    :return: Configured limits object
    :rtype: httpx.Limits
    """
    return httpx.Limits(
        max_keepalive_connections=max_keepalive_connections,
        max_connections=max_connections,
        keepalive_expiry=keepalive_expiry,
    )


def create_http_client(
    timeout: float = 30.0,
    limits: Optional[httpx.Limits] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the pooled client used for every attempt of every call.

    :param timeout: Per-attempt timeout in seconds
    :type timeout: float
    :param limits: Optional custom connection limits
    :type limits: Optional[httpx.Limits]
    :param transport: Optional transport, e.g. ``httpx.MockTransport`` in tests
    :type transport: Optional[httpx.BaseTransport]
    :return: Configured client
    :rtype: httpx.Client
    """
    client = httpx.Client(
        timeout=create_timeout(timeout),
        limits=limits or create_limits(),
        transport=transport,
        follow_redirects=True,
    )
    logger.debug("Created HTTP client (timeout=%ss)", timeout)
    return client
