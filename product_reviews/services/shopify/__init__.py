from .client import ShopifyGraphQLClient
from .utils import CursorDirection, normalize_shop_domain, resolve_cursor_direction
