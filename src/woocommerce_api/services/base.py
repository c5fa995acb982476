"""Shared plumbing for per-resource services.

Services are thin: they format a path, call the client and validate the
decoded JSON against a payload model.
"""

import logging
from typing import TYPE_CHECKING, Any, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..exceptions import DecodingError, PaginationParseError
from ..models import BatchOptions, BatchResult, Pagination, QueryOptions
from ..models.resources import Resource
from ..utils.pagination import extract_pagination

if TYPE_CHECKING:
    from ..client import WooCommerceClient

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)


def decode_as(model: Any, data: Any) -> Any:
    """Validate decoded JSON against ``model``.

    :raises DecodingError: If the payload does not have the expected shape
    """
    try:
        return TypeAdapter(model).validate_python(data)
    except ValidationError as e:
        raise DecodingError(f"unexpected response shape: {e}") from e


class ResourceService(Generic[R]):
    """Path-parameterised CRUD, list and batch helpers for one resource."""

    model: Type[Resource] = Resource

    def __init__(self, client: "WooCommerceClient"):
        self.client = client

    def _list_with_pagination(
        self, path: str, options: Optional[QueryOptions]
    ) -> Tuple[List[R], Pagination]:
        response = self.client.get_with_headers(path, options)
        items = decode_as(List[self.model], response.json() or [])
        try:
            pagination = extract_pagination(response.link_header)
        except PaginationParseError as e:
            e.items = items
            raise
        return items, pagination

    def _get(self, path: str, options: Optional[QueryOptions] = None) -> R:
        return decode_as(self.model, self.client.get(path, options))

    def _create(self, path: str, resource: R) -> R:
        return decode_as(self.model, self.client.post(path, resource))

    def _update(self, path: str, resource: R) -> R:
        return decode_as(self.model, self.client.put(path, resource))

    def _delete(self, path: str, options: Optional[QueryOptions] = None) -> R:
        return decode_as(self.model, self.client.delete(path, options))

    def _batch(self, path: str, operations: BatchOptions) -> BatchResult:
        return decode_as(BatchResult[self.model], self.client.post(path, operations))


def require_id(resource: Resource) -> int:
    resource_id = getattr(resource, "id", None)
    if resource_id is None:
        raise ValueError(f"{type(resource).__name__} must have an id to be updated")
    return resource_id


class CollectionService(ResourceService[R]):
    """Operations on a top-level collection such as ``products``.

    :raises PaginationParseError: From :meth:`list_with_pagination` when the
                                  ``Link`` header is malformed; the decoded
                                  items are attached as ``items``
    """

    base_path: str = ""

    def list_with_pagination(
        self, options: Optional[QueryOptions] = None
    ) -> Tuple[List[R], Pagination]:
        """List one page and the links to its neighbours."""
        return self._list_with_pagination(self.base_path, options)

    def list(self, options: Optional[QueryOptions] = None) -> List[R]:
        items, _ = self.list_with_pagination(options)
        return items

    def get(self, resource_id: int, options: Optional[QueryOptions] = None) -> R:
        return self._get(f"{self.base_path}/{resource_id}", options)

    def create(self, resource: R) -> R:
        return self._create(self.base_path, resource)

    def update(self, resource: R) -> R:
        return self._update(f"{self.base_path}/{require_id(resource)}", resource)

    def delete(self, resource_id: int, options: Optional[QueryOptions] = None) -> R:
        return self._delete(f"{self.base_path}/{resource_id}", options)

    def batch(self, operations: BatchOptions) -> BatchResult:
        """Create, update and delete several resources in one POST."""
        return self._batch(f"{self.base_path}/batch", operations)
