"""Unit tests for the per-resource services."""

import json

import httpx
import pytest

from woocommerce_api import (
    CustomerListOptions,
    DecodingError,
    ListOptions,
    PaginationParseError,
    ReportOptions,
)
from woocommerce_api.models import (
    BatchOptions,
    Customer,
    Product,
    ProductVariation,
    TotalsReport,
)

PREFIX = "/wp-json/wc/v3"


class TestProducts:
    def test_list_with_pagination(self, make_client, scripted):
        handler = scripted(
            httpx.Response(
                200,
                json=[{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
                headers={
                    "Link": (
                        f'<https://shop.example.com{PREFIX}/products?page=3&per_page=2>; rel="next", '
                        f'<https://shop.example.com{PREFIX}/products?page=1&per_page=2>; rel="prev"'
                    )
                },
            )
        )
        client = make_client(handler)

        items, pagination = client.products.list_with_pagination(
            ListOptions(page=2, per_page=2)
        )

        assert [p.id for p in items] == [1, 2]
        assert all(isinstance(p, Product) for p in items)
        assert pagination.next == ListOptions(page=3, per_page=2)
        assert pagination.prev.page == 1
        assert handler.requests[0].url.path == f"{PREFIX}/products"

    def test_malformed_link_keeps_items(self, make_client, scripted):
        handler = scripted(
            httpx.Response(200, json=[{"id": 5}], headers={"Link": "not a link"})
        )
        client = make_client(handler)

        with pytest.raises(PaginationParseError) as exc_info:
            client.products.list_with_pagination()

        assert [p.id for p in exc_info.value.items] == [5]

    def test_list_ignores_pagination(self, make_client, scripted):
        client = make_client(scripted(httpx.Response(200, json=[{"id": 1}])))
        assert [p.id for p in client.products.list()] == [1]

    def test_get_keeps_unknown_fields(self, make_client, scripted):
        client = make_client(
            scripted(httpx.Response(200, json={"id": 9, "name": "X", "menu_order": 4}))
        )

        product = client.products.get(9)

        assert product.id == 9
        assert product.model_extra == {"menu_order": 4}

    def test_create_and_update(self, make_client, scripted):
        handler = scripted(httpx.Response(200, json={"id": 11, "name": "Shirt"}))
        client = make_client(handler)

        created = client.products.create(Product(name="Shirt", regular_price="10"))
        client.products.update(created)

        create_req, update_req = handler.requests
        assert create_req.method == "POST"
        assert create_req.url.path == f"{PREFIX}/products"
        assert json.loads(create_req.content) == {"name": "Shirt", "regular_price": "10"}
        assert update_req.method == "PUT"
        assert update_req.url.path == f"{PREFIX}/products/11"

    def test_update_requires_id(self, make_client, scripted):
        client = make_client(scripted(httpx.Response(200, json={})))
        with pytest.raises(ValueError):
            client.products.update(Product(name="no id"))

    def test_batch(self, make_client, scripted):
        handler = scripted(
            httpx.Response(
                200,
                json={
                    "create": [{"id": 20, "name": "New"}],
                    "update": [{"id": 3, "name": "Renamed"}],
                    "delete": [{"id": 4}],
                },
            )
        )
        client = make_client(handler)

        result = client.products.batch(
            BatchOptions[Product](
                create=[Product(name="New")],
                update=[Product(id=3, name="Renamed")],
                delete=[4],
            )
        )

        request = handler.requests[0]
        assert request.url.path == f"{PREFIX}/products/batch"
        assert json.loads(request.content) == {
            "create": [{"name": "New"}],
            "update": [{"id": 3, "name": "Renamed"}],
            "delete": [4],
        }
        assert result.create[0].id == 20
        assert result.delete[0].id == 4

    def test_unexpected_shape_is_decoding_error(self, make_client, scripted):
        client = make_client(scripted(httpx.Response(200, json={"not": "a list"})))
        with pytest.raises(DecodingError):
            client.products.list()


class TestProductVariations:
    def test_paths(self, make_client, scripted):
        handler = scripted(httpx.Response(200, json={"id": 7}))
        client = make_client(handler)

        client.product_variations.get(5, 7)
        client.product_variations.update(5, ProductVariation(id=7, regular_price="2"))
        client.product_variations.delete(5, 7)

        assert [r.url.path for r in handler.requests] == [
            f"{PREFIX}/products/5/variations/7",
            f"{PREFIX}/products/5/variations/7",
            f"{PREFIX}/products/5/variations/7",
        ]

    def test_list(self, make_client, scripted):
        handler = scripted(httpx.Response(200, json=[{"id": 1}, {"id": 2}]))
        client = make_client(handler)

        variations = client.product_variations.list(5)

        assert len(variations) == 2
        assert handler.requests[0].url.path == f"{PREFIX}/products/5/variations"


class TestCustomers:
    def test_list_with_filters(self, make_client, scripted):
        handler = scripted(httpx.Response(200, json=[{"id": 1, "email": "a@example.com"}]))
        client = make_client(handler)

        customers = client.customers.list(CustomerListOptions(email="a@example.com", role="all"))

        assert isinstance(customers[0], Customer)
        params = handler.requests[0].url.params
        assert params["email"] == "a@example.com"
        assert params["role"] == "all"

    def test_delete(self, make_client, scripted):
        handler = scripted(httpx.Response(200, json={"id": 3}))
        client = make_client(handler)

        deleted = client.customers.delete(3)

        assert deleted.id == 3
        assert handler.requests[0].method == "DELETE"
        assert handler.requests[0].url.path == f"{PREFIX}/customers/3"


class TestReports:
    def test_totals(self, make_client, scripted):
        handler = scripted(
            httpx.Response(
                200,
                json=[
                    {"slug": "pending", "name": "Pending payment", "total": 2},
                    {"slug": "processing", "name": "Processing", "total": 5},
                ],
            )
        )
        client = make_client(handler)

        totals = client.reports.get_total_orders()

        assert handler.requests[0].url.path == f"{PREFIX}/reports/orders/totals"
        assert totals[1] == TotalsReport(slug="processing", name="Processing", total=5)

    def test_named_report_with_options(self, make_client, scripted):
        handler = scripted(httpx.Response(200, json=[{"total_sales": "120.00"}]))
        client = make_client(handler)

        rows = client.reports.get("sales", ReportOptions(period="month"))

        assert handler.requests[0].url.path == f"{PREFIX}/reports/sales"
        assert handler.requests[0].url.params["period"] == "month"
        assert rows[0].model_extra == {"total_sales": "120.00"}
