"""Products and product variations.

https://woocommerce.github.io/woocommerce-rest-api-docs/#products
"""

from typing import List, Optional, Tuple

from ..models import (
    BatchOptions,
    BatchResult,
    Pagination,
    Product,
    ProductVariation,
    QueryOptions,
)
from .base import CollectionService, ResourceService, require_id

PRODUCTS_BASE_PATH = "products"


class ProductService(CollectionService[Product]):
    base_path = PRODUCTS_BASE_PATH
    model = Product


class ProductVariationService(ResourceService[ProductVariation]):
    """Variations live under their parent product:
    ``products/<product_id>/variations``.
    """

    model = ProductVariation

    @staticmethod
    def collection_path(product_id: int) -> str:
        return f"{PRODUCTS_BASE_PATH}/{product_id}/variations"

    def list_with_pagination(
        self, product_id: int, options: Optional[QueryOptions] = None
    ) -> Tuple[List[ProductVariation], Pagination]:
        return self._list_with_pagination(self.collection_path(product_id), options)

    def list(
        self, product_id: int, options: Optional[QueryOptions] = None
    ) -> List[ProductVariation]:
        items, _ = self.list_with_pagination(product_id, options)
        return items

    def get(
        self,
        product_id: int,
        variation_id: int,
        options: Optional[QueryOptions] = None,
    ) -> ProductVariation:
        return self._get(f"{self.collection_path(product_id)}/{variation_id}", options)

    def create(self, product_id: int, variation: ProductVariation) -> ProductVariation:
        return self._create(self.collection_path(product_id), variation)

    def update(self, product_id: int, variation: ProductVariation) -> ProductVariation:
        path = f"{self.collection_path(product_id)}/{require_id(variation)}"
        return self._update(path, variation)

    def delete(
        self,
        product_id: int,
        variation_id: int,
        options: Optional[QueryOptions] = None,
    ) -> ProductVariation:
        return self._delete(f"{self.collection_path(product_id)}/{variation_id}", options)

    def batch(self, product_id: int, operations: BatchOptions) -> BatchResult:
        return self._batch(f"{self.collection_path(product_id)}/batch", operations)
