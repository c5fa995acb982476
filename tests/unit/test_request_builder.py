"""Unit tests for request construction.

Covers URL assembly from the base URL, API prefix and relative path,
query merging between typed options and the path's own query string,
and the standard headers.
"""

import json

import httpx
import pytest

from woocommerce_api.exceptions import DecodingError, RequestBuildError
from woocommerce_api.models import DeleteOptions, ListOptions, Product
from woocommerce_api.utils.http import (
    USER_AGENT,
    APIResponse,
    build_request,
    join_api_path,
    merge_query,
)

BASE = "https://shop.example.com"
PREFIX = "/wp-json/wc/v3"


def test_join_api_path_ignores_leading_slash():
    assert join_api_path(PREFIX, "products") == "/wp-json/wc/v3/products"
    assert join_api_path(PREFIX, "/products") == "/wp-json/wc/v3/products"
    assert join_api_path(PREFIX + "/", "products/12") == "/wp-json/wc/v3/products/12"


@pytest.mark.parametrize("rel_path", ["", "/"])
def test_join_api_path_rejects_empty(rel_path):
    with pytest.raises(RequestBuildError):
        join_api_path(PREFIX, rel_path)


def test_build_request_url_and_method():
    request = build_request(BASE, PREFIX, "get", "products/12")
    assert request.method == "GET"
    assert str(request.url) == "https://shop.example.com/wp-json/wc/v3/products/12"


def test_build_request_leading_slash_is_equivalent():
    a = build_request(BASE, PREFIX, "GET", "products")
    b = build_request(BASE, PREFIX, "GET", "/products")
    assert a.url == b.url


def test_build_request_keeps_base_url_path():
    request = build_request("https://example.com/shop/", PREFIX, "GET", "products")
    assert request.url.path == "/shop/wp-json/wc/v3/products"


def test_build_request_empty_path_raises():
    with pytest.raises(RequestBuildError):
        build_request(BASE, PREFIX, "GET", "")


def test_build_request_standard_headers_without_body():
    request = build_request(BASE, PREFIX, "GET", "products")
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == USER_AGENT
    assert "Content-Type" not in request.headers
    assert request.content == b""


def test_build_request_json_body():
    request = build_request(BASE, PREFIX, "POST", "products", body={"name": "Shirt"})
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"name": "Shirt"}


def test_build_request_model_body_omits_unset_fields():
    request = build_request(
        BASE, PREFIX, "POST", "products", body=Product(name="Shirt", regular_price="9.99")
    )
    assert json.loads(request.content) == {"name": "Shirt", "regular_price": "9.99"}


def test_build_request_unencodable_body_raises():
    with pytest.raises(RequestBuildError):
        build_request(BASE, PREFIX, "POST", "products", body={"bad": object()})


class TestQueryMerging:
    """Option parameters first, then the path's own parameters."""

    def test_options_only(self):
        request = build_request(
            BASE, PREFIX, "GET", "products", options=ListOptions(per_page=10, page=2)
        )
        assert request.url.params.multi_items() == [("page", "2"), ("per_page", "10")]

    def test_options_and_path_query(self):
        request = build_request(
            BASE,
            PREFIX,
            "GET",
            "products?status=draft",
            options=ListOptions(per_page=10),
        )
        assert request.url.path == "/wp-json/wc/v3/products"
        assert request.url.params.multi_items() == [
            ("per_page", "10"),
            ("status", "draft"),
        ]

    def test_option_value_wins_on_lookup(self):
        request = build_request(
            BASE, PREFIX, "GET", "products?page=9", options=ListOptions(page=2)
        )
        assert request.url.params.get_list("page") == ["2", "9"]
        assert request.url.params["page"] == "2"

    def test_zero_valued_options_are_omitted(self):
        request = build_request(BASE, PREFIX, "GET", "products", options=ListOptions())
        assert request.url.query == b""

    def test_list_and_bool_encoding(self):
        params = merge_query(ListOptions(include=[3, 1]), "")
        assert params == [("include", "3"), ("include", "1")]
        assert merge_query(DeleteOptions(force=True), "") == [("force", "true")]
        assert merge_query(DeleteOptions(force=False), "") == []

    def test_non_option_object_raises(self):
        with pytest.raises(RequestBuildError):
            build_request(BASE, PREFIX, "GET", "products", options={"page": 2})


class TestAPIResponse:
    """Tests for the successful response wrapper."""

    def test_json_is_decoded_and_cached(self):
        response = APIResponse(httpx.Response(200, json=[{"id": 1}]))
        first = response.json()
        assert first == [{"id": 1}]
        assert response.json() is first

    def test_empty_body_decodes_to_none(self):
        assert APIResponse(httpx.Response(204)).json() is None

    def test_invalid_json_raises_decoding_error(self):
        response = APIResponse(httpx.Response(200, content=b"<html>oops</html>"))
        with pytest.raises(DecodingError) as exc_info:
            response.json()
        assert exc_info.value.body == b"<html>oops</html>"
        assert exc_info.value.status_code == 200

    def test_link_header(self):
        response = APIResponse(
            httpx.Response(200, json=[], headers={"Link": '<https://x/?page=2>; rel="next"'})
        )
        assert response.link_header == '<https://x/?page=2>; rel="next"'
        assert APIResponse(httpx.Response(200, json=[])).link_header == ""
