"""Resource payload models for the WooCommerce REST API.

These models are intentionally permissive: only the commonly used fields
are declared, unknown fields are kept as extras so nothing the API sends
is lost on a read-modify-write cycle.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Resource(BaseModel):
    """Base for API resources; keeps unknown fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for a request body, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class Category(Resource):
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None


class Image(Resource):
    id: Optional[int] = None
    src: Optional[str] = None
    name: Optional[str] = None
    alt: Optional[str] = None


class Attribute(Resource):
    id: Optional[int] = None
    name: Optional[str] = None
    option: Optional[str] = None
    options: Optional[List[str]] = None
    visible: Optional[bool] = None
    variation: Optional[bool] = None


class Address(Resource):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address_1: Optional[str] = None
    address_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class Product(Resource):
    """A catalog product.

    Prices are strings on the wire, as the API sends them.
    """

    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    permalink: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    featured: Optional[bool] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[str] = None
    regular_price: Optional[str] = None
    sale_price: Optional[str] = None
    on_sale: Optional[bool] = None
    manage_stock: Optional[bool] = None
    stock_quantity: Optional[int] = None
    stock_status: Optional[str] = None
    categories: Optional[List[Category]] = None
    images: Optional[List[Image]] = None
    attributes: Optional[List[Attribute]] = None
    variations: Optional[List[int]] = None


class ProductVariation(Resource):
    """A variation of a variable product."""

    id: Optional[int] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    regular_price: Optional[str] = None
    sale_price: Optional[str] = None
    status: Optional[str] = None
    manage_stock: Optional[bool] = None
    stock_quantity: Optional[int] = None
    stock_status: Optional[str] = None
    image: Optional[Image] = None
    attributes: Optional[List[Attribute]] = None


class Customer(Resource):
    id: Optional[int] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(None, repr=False)
    billing: Optional[Address] = None
    shipping: Optional[Address] = None
    is_paying_customer: Optional[bool] = None
    avatar_url: Optional[str] = None


class Report(Resource):
    slug: Optional[str] = None
    description: Optional[str] = None


class TotalsReport(Resource):
    """One row of a ``reports/<kind>/totals`` response."""

    slug: Optional[str] = None
    name: Optional[str] = None
    total: Optional[int] = None


class BatchOptions(BaseModel, Generic[T]):
    """Body of a ``<resource>/batch`` call."""

    create: List[T] = Field(default_factory=list)
    update: List[T] = Field(default_factory=list)
    delete: List[int] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize, omitting empty operations."""
        payload: Dict[str, Any] = {}
        for op in ("create", "update"):
            items = getattr(self, op)
            if items:
                payload[op] = [
                    i.to_payload() if isinstance(i, Resource) else i for i in items
                ]
        if self.delete:
            payload["delete"] = list(self.delete)
        return payload


class BatchResult(BaseModel, Generic[T]):
    """Response of a ``<resource>/batch`` call."""

    model_config = ConfigDict(extra="allow")

    create: List[T] = Field(default_factory=list)
    update: List[T] = Field(default_factory=list)
    delete: List[T] = Field(default_factory=list)
