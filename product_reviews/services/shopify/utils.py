"""Helpers for addressing the Shopify Admin API, building listing queries and checking app-proxy signatures."""

from __future__ import annotations

import hashlib
import hmac
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

MYSHOPIFY_SUFFIX = ".myshopify.com"


class CursorDirection(str, Enum):
    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


def normalize_shop_domain(shop: str) -> str:
    """Turn a bare shop handle into its myshopify.com domain.

    Anything that already contains a dot is assumed to be a full domain.
    """
    shop = shop.strip()
    if "." in shop:
        return shop
    return f"{shop}{MYSHOPIFY_SUFFIX}"


def admin_graphql_url(shop: str, api_version: str) -> str:
    return f"https://{normalize_shop_domain(shop)}/admin/api/{api_version}/graphql.json"


def resolve_cursor_direction(
    after: Optional[str] = None, before: Optional[str] = None
) -> Tuple[CursorDirection, Optional[str]]:
    """
    Decide which way to page from the ``after``/``before`` parameters.

    Empty values count as absent. When both are given, ``after`` wins.
    """
    if after:
        return CursorDirection.FORWARD, after
    if before:
        return CursorDirection.BACKWARD, before
    return CursorDirection.NONE, None


def build_products_variables(
    direction: CursorDirection, cursor: Optional[str], page_size: int
) -> Dict[str, Any]:
    if direction is CursorDirection.FORWARD:
        return {"first": page_size, "after": cursor}
    if direction is CursorDirection.BACKWARD:
        return {"last": page_size, "before": cursor}
    return {"first": page_size}


def app_proxy_signature(params: Iterable[Tuple[str, str]], secret: str) -> str:
    """
    Compute the signature Shopify attaches to app-proxy requests.

    Every query parameter except ``signature`` is rendered as ``key=value``
    (repeated keys joined with commas), sorted, and concatenated with no
    separator before HMAC-SHA256 with the app secret.
    """
    grouped: Dict[str, List[str]] = {}
    for key, value in params:
        if key == "signature":
            continue
        grouped.setdefault(key, []).append(value)

    message = "".join(sorted(f"{key}={','.join(values)}" for key, values in grouped.items()))
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def verify_app_proxy_signature(params: Iterable[Tuple[str, str]], secret: str) -> bool:
    params = list(params)
    signature = next((value for key, value in params if key == "signature"), None)
    if not signature:
        return False
    expected = app_proxy_signature(params, secret)
    return hmac.compare_digest(signature, expected)
