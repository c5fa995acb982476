"""WooCommerce API client models package.

This package contains the Pydantic models used by the request core
(credentials, query options, pagination, error envelope) and the
resource payloads used by the per-resource services.
"""

from .base_models import (
    Credentials,
    CustomerListOptions,
    DeleteOptions,
    ErrorBody,
    ListOptions,
    Pagination,
    QueryOptions,
    ReportOptions,
)
from .resources import (
    Address,
    Attribute,
    BatchOptions,
    BatchResult,
    Category,
    Customer,
    Image,
    Product,
    ProductVariation,
    Report,
    Resource,
    TotalsReport,
)

__all__ = [
    "Credentials",
    "QueryOptions",
    "ListOptions",
    "DeleteOptions",
    "CustomerListOptions",
    "ReportOptions",
    "Pagination",
    "ErrorBody",
    "Resource",
    "Address",
    "Attribute",
    "Category",
    "Image",
    "Product",
    "ProductVariation",
    "Customer",
    "Report",
    "TotalsReport",
    "BatchOptions",
    "BatchResult",
]
