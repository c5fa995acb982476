"""WooCommerce REST API client.

The client ties the request core together:

    build_request -> select_auth -> send_with_retry -> classify_response

and exposes the small surface used by the per-resource services:
``get``, ``post``, ``put``, ``delete`` and ``get_with_headers`` for list
endpoints that need pagination.

Examples:
    >>> with WooCommerceClient("https://shop.example.com", "ck_...", "cs_...") as wc:
    ...     products, pagination = wc.products.list_with_pagination(ListOptions(per_page=50))
"""

import logging
import time
from typing import Any, Optional

import httpx

from .config.settings import (
    DEFAULT_API_PATH_PREFIX,
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT,
    Settings,
    with_api_version,
)
from .exceptions import ConfigurationError
from .models import Credentials, QueryOptions
from .utils.http import (
    APIResponse,
    RetryPolicy,
    build_request,
    create_http_client,
    select_auth,
    send_with_retry,
)
from .utils.http.retry import Sleeper

logger = logging.getLogger(__name__)


class WooCommerceClient:
    """Authenticated, retrying client for one shop.

    Credentials, path prefix and retry policy are fixed at construction
    and only read afterwards, so one client may be shared by several
    threads. Per-call retry state is created inside each call.

    :param base_url: Shop base URL, e.g. ``https://shop.example.com``
    :type base_url: str
    :param consumer_key: REST API consumer key
    :type consumer_key: str
    :param consumer_secret: REST API consumer secret
    :type consumer_secret: str
    :param max_retries: Maximum attempts per call, 0 means a single attempt
    :type max_retries: int
    :param timeout: Per-attempt timeout in seconds
    :type timeout: float
    :param api_path_prefix: REST API path prefix
    :type api_path_prefix: str
    :param api_version: REST API version, applied to the prefix
    :type api_version: str
    :param transport: Optional httpx transport (tests, proxies)
    :type transport: Optional[httpx.BaseTransport]
    :param sleep: Blocking sleep used between rate-limited attempts
    :type sleep: Callable[[float], None]
    :raises ConfigurationError: If the URL or credentials are missing
    """

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        max_retries: int = 0,
        timeout: float = DEFAULT_TIMEOUT,
        api_path_prefix: str = DEFAULT_API_PATH_PREFIX,
        api_version: str = DEFAULT_API_VERSION,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Sleeper = time.sleep,
    ):
        if not base_url:
            raise ConfigurationError("shop base URL is required", setting="WOOCOMMERCE_URL")
        if not consumer_key or not consumer_secret:
            raise ConfigurationError(
                "consumer key and secret are required",
                setting="WOOCOMMERCE_CONSUMER_KEY/WOOCOMMERCE_CONSUMER_SECRET",
            )
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"invalid shop URL: {e}", setting="WOOCOMMERCE_URL") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(
                f"shop URL must be an absolute http(s) URL, got {base_url!r}",
                setting="WOOCOMMERCE_URL",
            )
        try:
            self.retry_policy = RetryPolicy(max_retries=max_retries)
        except ValueError as e:
            raise ConfigurationError(str(e), setting="WOOCOMMERCE_MAX_RETRIES") from e

        self.base_url = base_url.rstrip("/")
        self.path_prefix = with_api_version(api_path_prefix, api_version)
        self._credentials = Credentials(
            consumer_key=consumer_key, consumer_secret=consumer_secret
        )
        self._sleep = sleep
        self._http = create_http_client(timeout=timeout, transport=transport)

        # Imported here to avoid a circular import with the services package
        from .services import (
            CustomerService,
            ProductService,
            ProductVariationService,
            ReportService,
        )

        self.products = ProductService(self)
        self.product_variations = ProductVariationService(self)
        self.customers = CustomerService(self)
        self.reports = ReportService(self)

        logger.debug(
            "WooCommerceClient initialized: base_url=%s prefix=%s max_attempts=%d",
            self.base_url,
            self.path_prefix,
            self.retry_policy.max_attempts,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **kwargs
    ) -> "WooCommerceClient":
        """Create a client from environment-driven settings.

        :param settings: Settings to use; loaded from the environment when None
        :type settings: Optional[Settings]
        :return: Configured client
        :rtype: WooCommerceClient
        """
        settings = settings or Settings()
        return cls(
            base_url=settings.woocommerce_url or "",
            consumer_key=settings.consumer_key or "",
            consumer_secret=settings.consumer_secret or "",
            max_retries=settings.max_retries,
            timeout=settings.timeout,
            api_path_prefix=settings.api_path_prefix,
            api_version=settings.api_version,
            **kwargs,
        )

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: Optional[QueryOptions] = None,
    ) -> APIResponse:
        """Build, authenticate and send one API call.

        :param method: HTTP method
        :type method: str
        :param path: Resource path relative to the API prefix
        :type path: str
        :param body: Optional JSON body
        :type body: Any
        :param options: Optional typed query options
        :type options: Optional[QueryOptions]
        :return: The successful response with its headers
        :rtype: APIResponse
        :raises WooCommerceError: Any error of the client's taxonomy
        """
        request = build_request(
            self.base_url, self.path_prefix, method, path, body=body, options=options
        )
        auth = select_auth(request.url, self._credentials)
        response = send_with_retry(
            self._http,
            request,
            auth,
            self.retry_policy,
            sleep=self._sleep,
        )
        return APIResponse(response)

    def get(self, path: str, options: Optional[QueryOptions] = None) -> Any:
        return self.request("GET", path, options=options).json()

    def get_with_headers(
        self, path: str, options: Optional[QueryOptions] = None
    ) -> APIResponse:
        """GET returning the full response, for list endpoints that paginate."""
        return self.request("GET", path, options=options)

    def post(self, path: str, body: Any = None) -> Any:
        return self.request("POST", path, body=body).json()

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, body=body).json()

    def delete(self, path: str, options: Optional[QueryOptions] = None) -> Any:
        return self.request("DELETE", path, options=options).json()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "WooCommerceClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
