"""Request construction and response wrapping.

This module turns ``(method, relative path, body, options)`` into a fully
qualified ``httpx.Request`` against the shop's REST API, and provides a
thin wrapper around successful responses that keeps the headers next to
the decoded body so list endpoints can derive pagination.
"""

import json
from typing import Any, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

import httpx
from pydantic import BaseModel

from ... import __version__
from ...exceptions import DecodingError, RequestBuildError
from ...models import QueryOptions

USER_AGENT = f"woocommerce-api-python/{__version__}"
JSON_MEDIA_TYPE = "application/json"


def join_api_path(path_prefix: str, rel_path: str) -> str:
    """Prefix a relative resource path with the API path prefix.

    :param path_prefix: Prefix such as ``/wp-json/wc/v3``
    :type path_prefix: str
    :param rel_path: Resource path such as ``products/12``; a leading
                     slash is ignored
    :type rel_path: str
    :return: Absolute API path
    :rtype: str
    :raises RequestBuildError: If the relative path is empty
    """
    rel_path = rel_path.lstrip("/")
    if not rel_path:
        raise RequestBuildError("relative path must not be empty")
    return f"{path_prefix.rstrip('/')}/{rel_path}"


def encode_body(body: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Pydantic models are dumped without their unset (None) fields.

    :param body: Model, mapping or list to encode
    :type body: Any
    :return: UTF-8 encoded JSON
    :rtype: bytes
    :raises RequestBuildError: If the body cannot be JSON encoded
    """
    if isinstance(body, BaseModel):
        if hasattr(body, "to_payload"):
            body = body.to_payload()
        else:
            body = body.model_dump(mode="json", exclude_none=True, by_alias=True)
    try:
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestBuildError(f"request body is not JSON serializable: {e}") from e


def merge_query(
    options: Optional[QueryOptions], path_query: str
) -> List[Tuple[str, str]]:
    """Merge option-derived parameters with those embedded in the path.

    Option values come first; path values are appended after them and
    never replace them.

    :param options: Typed query options, or None
    :type options: Optional[QueryOptions]
    :param path_query: Raw query string found in the relative path
    :type path_query: str
    :return: Ordered query parameter pairs
    :rtype: List[Tuple[str, str]]
    :raises RequestBuildError: If ``options`` is not a QueryOptions
    """
    params: List[Tuple[str, str]] = []
    if options is not None:
        if not isinstance(options, QueryOptions):
            raise RequestBuildError(
                f"query options must be a QueryOptions model, got {type(options).__name__}"
            )
        params.extend(options.to_query_params())
    params.extend(parse_qsl(path_query, keep_blank_values=True))
    return params


def build_request(
    base_url: str,
    path_prefix: str,
    method: str,
    rel_path: str,
    body: Any = None,
    options: Optional[QueryOptions] = None,
) -> httpx.Request:
    """Build a header-stamped request against the REST API.

    The shop base URL may carry its own path (WordPress installed in a
    subdirectory); the API prefix is appended to it.

    :param base_url: Shop base URL, e.g. ``https://shop.example.com``
    :type base_url: str
    :param path_prefix: API path prefix, e.g. ``/wp-json/wc/v3``
    :type path_prefix: str
    :param method: HTTP method
    :type method: str
    :param rel_path: Resource path, optionally with its own query string
    :type rel_path: str
    :param body: Optional JSON body
    :type body: Any
    :param options: Optional typed query options
    :type options: Optional[QueryOptions]
    :return: A request ready for an authentication strategy
    :rtype: httpx.Request
    :raises RequestBuildError: On empty path, bad options or unencodable body
    """
    split = urlsplit(rel_path)
    path = join_api_path(path_prefix, split.path)
    params = merge_query(options, split.query)

    base = httpx.URL(base_url)
    url = base.copy_with(path=base.path.rstrip("/") + path, params=params)

    headers = {
        "Accept": JSON_MEDIA_TYPE,
        "User-Agent": USER_AGENT,
    }
    content = None
    if body is not None:
        content = encode_body(body)
        headers["Content-Type"] = JSON_MEDIA_TYPE

    return httpx.Request(method.upper(), url, headers=headers, content=content)


class APIResponse:
    """A successful, fully read response.

    Wraps ``httpx.Response`` and caches the decoded JSON body.
    """

    def __init__(self, response: httpx.Response):
        """Initialize the response wrapper.

        :param response: The underlying, already read httpx.Response
        :type response: httpx.Response
        """
        self.response = response
        self._json_cache: Any = None
        self._decoded = False

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def content(self) -> bytes:
        return self.response.content

    @property
    def link_header(self) -> str:
        """Raw ``Link`` header, empty when absent."""
        return self.response.headers.get("Link", "")

    def json(self) -> Any:
        """Get the response body as parsed JSON.

        An empty body (e.g. 204) decodes to None. The result is cached.

        :return: Parsed JSON response
        :rtype: Any
        :raises DecodingError: If the body is not valid JSON
        """
        if not self._decoded:
            if not self.response.content:
                self._json_cache = None
            else:
                try:
                    self._json_cache = json.loads(self.response.content)
                except ValueError as e:
                    raise DecodingError(
                        str(e),
                        body=self.response.content,
                        status_code=self.response.status_code,
                    ) from e
            self._decoded = True
        return self._json_cache
