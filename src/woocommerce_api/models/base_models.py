"""Shared Pydantic models for the WooCommerce API client.

This module contains the data models the request core works with:

- Credentials owned by a client instance
- Typed query-option structs and their query-string encoding
- The pagination aggregate derived from ``Link`` headers
- The API's structured error envelope
"""

import typing
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import RequestBuildError


class Credentials(BaseModel):
    """REST API key pair for a single client instance.

    Immutable for the client's lifetime and never logged.

    :param consumer_key: Consumer key, usually prefixed ``ck_``
    :type consumer_key: str
    :param consumer_secret: Consumer secret, usually prefixed ``cs_``
    :type consumer_secret: str
    """

    model_config = ConfigDict(frozen=True)

    consumer_key: str = Field(..., min_length=1)
    consumer_secret: str = Field(..., min_length=1, repr=False)


def _encode_scalar(name: str, value: Any) -> Optional[str]:
    if value is None or value == "" or value is False:
        return None
    if value is True:
        return "true"
    if isinstance(value, (int, float)):
        return None if value == 0 else str(value)
    if isinstance(value, str):
        return value
    raise RequestBuildError(
        f"cannot encode {type(value).__name__} as a query parameter", field=name
    )


class QueryOptions(BaseModel):
    """Base class for per-endpoint query options.

    Subclasses declare their optional filters as fields. Encoding omits
    fields holding a zero value (None, empty string, 0, False, empty list);
    list fields become repeated keys and booleans become ``true``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    def to_query_params(self) -> List[Tuple[str, str]]:
        """Encode the options as ordered query parameter pairs.

        Keys are emitted in sorted order.

        :return: List of ``(name, value)`` pairs
        :rtype: List[Tuple[str, str]]
        :raises RequestBuildError: If a field holds a value that has no
                                   query-string representation
        """
        params: List[Tuple[str, str]] = []
        data = self.model_dump(by_alias=True)
        for name in sorted(data):
            value = data[name]
            if isinstance(value, (list, tuple, set)):
                for item in value:
                    encoded = _encode_scalar(name, item)
                    if encoded is not None:
                        params.append((name, encoded))
                continue
            encoded = _encode_scalar(name, value)
            if encoded is not None:
                params.append((name, encoded))
        return params


class ListOptions(QueryOptions):
    """Options accepted by most collection endpoints.

    Also used as the page descriptor recovered from pagination links.
    """

    context: str = ""
    page: int = 0
    per_page: int = 0
    search: str = ""
    after: str = ""
    before: str = ""
    exclude: List[int] = Field(default_factory=list)
    include: List[int] = Field(default_factory=list)
    offset: int = 0
    order: str = ""
    orderby: str = ""

    @classmethod
    def from_query(cls, params: typing.Mapping[str, List[str]]) -> "ListOptions":
        """Recover list options from parsed query parameters.

        Unknown parameters are ignored. Values are validated, so a
        non-numeric ``page`` raises a pydantic ``ValidationError``.

        :param params: Mapping of parameter name to all its values
        :type params: Mapping[str, List[str]]
        :return: Options carrying the recognised parameters
        :rtype: ListOptions
        """
        data = {}
        for name, info in cls.model_fields.items():
            values = params.get(name)
            if not values:
                continue
            if typing.get_origin(info.annotation) is list:
                data[name] = values
            else:
                data[name] = values[-1]
        return cls.model_validate(data)


class DeleteOptions(QueryOptions):
    """Options for delete endpoints.

    ``force=True`` permanently deletes the resource instead of moving it
    to the trash.
    """

    force: bool = False


class CustomerListOptions(ListOptions):
    """Customer list filters."""

    email: str = ""
    role: str = ""


class ReportOptions(QueryOptions):
    """Report filters. ``period`` is one of week, month, last_month, year."""

    context: str = ""
    period: str = ""
    date_min: str = ""
    date_max: str = ""


class Pagination(BaseModel):
    """Page descriptors parsed from a ``Link`` response header.

    Each relation is None when the header does not mention it.
    """

    model_config = ConfigDict(frozen=True)

    next: Optional[ListOptions] = None
    prev: Optional[ListOptions] = None
    first: Optional[ListOptions] = None
    last: Optional[ListOptions] = None


class ErrorBody(BaseModel):
    """The API's error envelope, e.g.::

        {"code": "woocommerce_rest_product_invalid_id",
         "message": "Invalid ID.",
         "data": {"status": 404}}
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    code: Optional[str] = None
    message: Optional[str] = None
    data: Any = None

    def field_errors(self) -> List[str]:
        """Collect field-level validation messages from ``data.params``.

        The API reports invalid parameters as
        ``{"data": {"params": {"field": "reason"}}}``; each entry becomes
        ``"field: reason"``. Returns an empty list for any other shape.

        :return: Validation messages in the order the API sent them
        :rtype: List[str]
        """
        if not isinstance(self.data, dict):
            return []
        params = self.data.get("params")
        if not isinstance(params, dict):
            return []
        return [f"{name}: {reason}" for name, reason in params.items()]
