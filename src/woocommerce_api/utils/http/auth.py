"""Per-request authentication strategies.

Exactly one strategy applies to a request, chosen from the scheme of the
resolved request URL:

- ``https``: the consumer key and secret travel as the ``consumer_key``
  and ``consumer_secret`` query parameters; the channel is encrypted.
- anything else: the request is signed with OAuth 1.0a (one-legged,
  HMAC-SHA1 by default) and the secret itself is never transmitted.

Both strategies are ``httpx.Auth`` flows so they plug into
``httpx.Client.send(request, auth=...)``. Re-running a flow on the same
request (a retry) replaces the previous credentials instead of stacking
them, and a signed request gets a fresh nonce and timestamp each time.
"""

import base64
import hashlib
import hmac
import logging
import secrets
import time
from typing import Callable, Dict, Generator, Iterable, List, Literal, Tuple
from urllib.parse import quote

import httpx

from ...models import Credentials

logger = logging.getLogger(__name__)

SECURE_SCHEMES = frozenset({"https"})

_DIGESTS = {
    "HMAC-SHA1": hashlib.sha1,
    "HMAC-SHA256": hashlib.sha256,
}


class QueryStringAuth(httpx.Auth):
    """Attach credentials as query parameters (secure channel only)."""

    def __init__(self, credentials: Credentials):
        self.credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.url = request.url.copy_set_param(
            "consumer_key", self.credentials.consumer_key
        ).copy_set_param("consumer_secret", self.credentials.consumer_secret)
        yield request


def percent_encode(value: str) -> str:
    """RFC 3986 percent-encoding as OAuth 1.0a requires."""
    return quote(value, safe="~")


def signature_base_uri(url: httpx.URL) -> str:
    """Scheme, lowercase host, non-default port and path of ``url``."""
    netloc = url.netloc.decode("ascii").lower()
    path = url.raw_path.split(b"?", 1)[0].decode("ascii") or "/"
    return f"{url.scheme.lower()}://{netloc}{path}"


def signature_base_string(
    method: str, url: httpx.URL, params: Iterable[Tuple[str, str]]
) -> str:
    """Build the OAuth 1.0a signature base string.

    :param method: HTTP method
    :type method: str
    :param url: Request URL; its query parameters are included
    :type url: httpx.URL
    :param params: OAuth protocol parameters (without ``oauth_signature``)
    :type params: Iterable[Tuple[str, str]]
    :return: ``METHOD&base_uri&normalized_params``
    :rtype: str
    """
    pairs: List[Tuple[str, str]] = [
        (percent_encode(k), percent_encode(v)) for k, v in url.params.multi_items()
    ]
    pairs.extend((percent_encode(k), percent_encode(v)) for k, v in params)
    normalized = "&".join(f"{k}={v}" for k, v in sorted(pairs))
    return "&".join(
        [
            method.upper(),
            percent_encode(signature_base_uri(url)),
            percent_encode(normalized),
        ]
    )


def sign(
    base_string: str,
    consumer_secret: str,
    method: str = "HMAC-SHA1",
    token_secret: str = "",
) -> str:
    """Compute the base64 HMAC signature of a base string.

    :param base_string: Output of :func:`signature_base_string`
    :type base_string: str
    :param consumer_secret: Consumer secret, half of the signing key
    :type consumer_secret: str
    :param method: ``HMAC-SHA1`` or ``HMAC-SHA256``
    :type method: str
    :param token_secret: Token secret, empty for one-legged requests
    :type token_secret: str
    :return: Base64 encoded signature
    :rtype: str
    """
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(
        key.encode("utf-8"), base_string.encode("utf-8"), _DIGESTS[method]
    ).digest()
    return base64.b64encode(digest).decode("ascii")


class OAuth1Auth(httpx.Auth):
    """Sign requests with one-legged OAuth 1.0a.

    :param credentials: Consumer key and secret; the secret only feeds the
                        signing key
    :param signature_method: ``HMAC-SHA1`` or ``HMAC-SHA256``
    :param placement: Send the protocol parameters in the ``Authorization``
                      header or in the query string
    :param clock: Returns the current UNIX time
    :param nonce: Returns a fresh nonce
    """

    def __init__(
        self,
        credentials: Credentials,
        signature_method: Literal["HMAC-SHA1", "HMAC-SHA256"] = "HMAC-SHA1",
        placement: Literal["header", "query"] = "header",
        clock: Callable[[], float] = time.time,
        nonce: Callable[[], str] = lambda: secrets.token_hex(16),
    ):
        if signature_method not in _DIGESTS:
            raise ValueError(f"unsupported signature method {signature_method!r}")
        self.credentials = credentials
        self.signature_method = signature_method
        self.placement = placement
        self.clock = clock
        self.nonce = nonce

    def protocol_params(self) -> Dict[str, str]:
        return {
            "oauth_consumer_key": self.credentials.consumer_key,
            "oauth_nonce": self.nonce(),
            "oauth_signature_method": self.signature_method,
            "oauth_timestamp": str(int(self.clock())),
            "oauth_version": "1.0",
        }

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        url = request.url
        for name in list(url.params.keys()):
            if name.startswith("oauth_"):
                url = url.copy_remove_param(name)

        oauth = self.protocol_params()
        base_string = signature_base_string(request.method, url, oauth.items())
        oauth["oauth_signature"] = sign(
            base_string, self.credentials.consumer_secret, self.signature_method
        )

        if self.placement == "query":
            request.url = url.copy_merge_params(oauth)
        else:
            request.url = url
            request.headers["Authorization"] = "OAuth " + ", ".join(
                f'{percent_encode(k)}="{percent_encode(v)}"'
                for k, v in sorted(oauth.items())
            )
        yield request


def select_auth(url: httpx.URL, credentials: Credentials) -> httpx.Auth:
    """Choose the authentication strategy for a resolved request URL.

    :param url: The request URL about to be dispatched
    :type url: httpx.URL
    :param credentials: The client's credentials
    :type credentials: Credentials
    :return: ``QueryStringAuth`` on a secure scheme, ``OAuth1Auth`` otherwise
    :rtype: httpx.Auth
    """
    if url.scheme.lower() in SECURE_SCHEMES:
        return QueryStringAuth(credentials)
    logger.debug("Insecure scheme %r, signing request with OAuth 1.0a", url.scheme)
    return OAuth1Auth(credentials)
