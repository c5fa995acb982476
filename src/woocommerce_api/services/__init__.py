"""Per-resource services built on the request core."""

from .base import CollectionService, ResourceService
from .customers import CustomerService
from .products import ProductService, ProductVariationService
from .reports import ReportService

__all__ = [
    "ResourceService",
    "CollectionService",
    "ProductService",
    "ProductVariationService",
    "CustomerService",
    "ReportService",
]
