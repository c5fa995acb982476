"""Pagination from ``Link`` response headers.

List endpoints describe neighbouring pages in a ``Link`` header::

    Link: <https://shop.example.com/wp-json/wc/v3/products?page=2>; rel="next",
          <https://shop.example.com/wp-json/wc/v3/products?page=5>; rel="last"

Each entry becomes a ``ListOptions`` carrying the query parameters of its
URL, most importantly ``page``.
"""

import logging
import re
from typing import Dict, Optional
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError

from ..exceptions import PaginationParseError
from ..models import ListOptions, Pagination

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(r'^<([^>]+)>; rel="([^"]*)"$')
# Split on commas that start a new <...> entry so commas inside URLs survive
_ENTRY_SEP_RE = re.compile(r",\s*(?=<)")

RELATIONS = ("next", "prev", "first", "last")


def extract_pagination(link_header: Optional[str]) -> Pagination:
    """Parse a ``Link`` header into a ``Pagination``.

    An absent or blank header yields a Pagination with every relation
    unset. Unknown relations are ignored; a repeated relation keeps the
    last entry.

    :param link_header: Raw header value, or None
    :type link_header: Optional[str]
    :return: Page descriptors for next/prev/first/last
    :rtype: Pagination
    :raises PaginationParseError: If any entry is not ``<url>; rel="name"``
                                  or carries a non-numeric page
    """
    if not link_header or not link_header.strip():
        return Pagination()

    pages: Dict[str, ListOptions] = {}
    for entry in _ENTRY_SEP_RE.split(link_header):
        match = _LINK_RE.match(entry.strip())
        if match is None:
            raise PaginationParseError(
                "could not extract pagination link header", header=link_header
            )
        url, rel = match.groups()
        if rel not in RELATIONS:
            logger.debug("Ignoring unknown link relation %r", rel)
            continue
        try:
            query = urlsplit(url).query
            pages[rel] = ListOptions.from_query(parse_qs(query, keep_blank_values=False))
        except (ValueError, ValidationError) as e:
            raise PaginationParseError(
                f"invalid pagination link for rel={rel!r}: {e}", header=link_header
            ) from e

    return Pagination(**pages)
