"""WooCommerce REST API client package.

This package provides a synchronous client for the WooCommerce REST API:
request construction, per-request authentication, bounded retry with
rate-limit backoff, a typed error taxonomy and ``Link`` header
pagination, plus thin per-resource services built on top.

:var __version__: Current package version
:type __version__: str
"""

__version__ = "0.1.0"

from .client import WooCommerceClient  # noqa: E402
from .exceptions import (  # noqa: E402
    ConfigurationError,
    DecodingError,
    PaginationParseError,
    RateLimitError,
    RequestBuildError,
    ResponseError,
    ServiceUnavailableError,
    TransportError,
    WooCommerceError,
)
from .models import (  # noqa: E402
    CustomerListOptions,
    DeleteOptions,
    ListOptions,
    Pagination,
    ReportOptions,
)
from .utils.pagination import extract_pagination  # noqa: E402

__all__ = [
    "__version__",
    "WooCommerceClient",
    "WooCommerceError",
    "ConfigurationError",
    "RequestBuildError",
    "TransportError",
    "DecodingError",
    "PaginationParseError",
    "ResponseError",
    "RateLimitError",
    "ServiceUnavailableError",
    "ListOptions",
    "DeleteOptions",
    "CustomerListOptions",
    "ReportOptions",
    "Pagination",
    "extract_pagination",
]
