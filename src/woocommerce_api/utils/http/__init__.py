"""HTTP request core public API (barrel module).

This package provides:
- Request construction with query merging (``build_request``)
- Per-request authentication strategies (``select_auth``)
- Response classification into the error taxonomy (``classify_response``)
- The bounded retry loop (``send_with_retry``)
- Pooled client construction

Recommended import pattern for consumers:
    from woocommerce_api.utils.http import build_request, send_with_retry
"""

from .auth import OAuth1Auth, QueryStringAuth, select_auth
from .classifier import classify_response, parse_error_body, parse_retry_after
from .client_manager import create_http_client, create_limits, create_timeout
from .request import (
    USER_AGENT,
    APIResponse,
    build_request,
    encode_body,
    join_api_path,
    merge_query,
)
from .retry import AttemptState, RetryPolicy, send_with_retry

__all__ = [
    "USER_AGENT",
    "APIResponse",
    "build_request",
    "encode_body",
    "join_api_path",
    "merge_query",
    "QueryStringAuth",
    "OAuth1Auth",
    "select_auth",
    "classify_response",
    "parse_error_body",
    "parse_retry_after",
    "create_http_client",
    "create_limits",
    "create_timeout",
    "RetryPolicy",
    "AttemptState",
    "send_with_retry",
]
