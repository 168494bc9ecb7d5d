"""
Listing payloads returned by the pagination endpoint.

Product nodes are passed through exactly as Shopify returns them (plus
``review`` and ``cursor``), so they stay plain dicts.
"""
from typing import Any, Dict, List, Optional

from .base import CamelSchema


class PageInfo(CamelSchema):
    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


class ProductPage(CamelSchema):
    products: List[Dict[str, Any]]
    page_info: PageInfo
