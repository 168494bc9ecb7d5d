# product_reviews.services.shopify.client

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from product_reviews.core.exceptions import UpstreamError
from .utils import admin_graphql_url, build_products_variables, resolve_cursor_direction

logger = logging.getLogger(__name__)

MAX_VARIANTS_PER_PRODUCT = 5

PRODUCTS_QUERY = """
query Products($first: Int, $last: Int, $after: String, $before: String) {
  products(first: $first, last: $last, after: $after, before: $before) {
    pageInfo {
      hasNextPage
      hasPreviousPage
      endCursor
      startCursor
    }
    edges {
      cursor
      node {
        id
        title
        featuredMedia {
          preview {
            image {
              url
            }
          }
        }
        variants(first: %d) {
          nodes {
            id
            compareAtPrice
            price
            image {
              url
            }
          }
        }
      }
    }
  }
}
""" % MAX_VARIANTS_PER_PRODUCT

UPDATE_VARIANT_PRICE_MUTATION = """
mutation productVariantsBulkUpdate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    product {
      id
    }
    productVariants {
      id
      price
    }
    userErrors {
      field
      message
    }
  }
}
"""


class ShopifyGraphQLClient:
    """
    Async client for one shop's Admin GraphQL endpoint.

    Built per request from a freshly resolved access token; it holds no
    state between calls. Every failure (transport, timeout, non-2xx, bad
    JSON, GraphQL ``errors``, ``userErrors``) surfaces as ``UpstreamError``
    with the upstream detail attached unchanged.
    """

    def __init__(self, shop: str, access_token: str, api_version: str, timeout: float = 10.0):
        self.shop = shop
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.graphql_url = admin_graphql_url(shop, api_version)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        POST a GraphQL document and return the decoded response envelope.

        GraphQL-level ``errors`` are left in the envelope; callers decide how
        to treat them.

        Raises:
            UpstreamError: transport failure, timeout, non-2xx status or a
                body that is not a JSON object.
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug(f"Shopify GraphQL request to {self.graphql_url} variables={variables}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.graphql_url,
                    headers=self._get_headers(),
                    json=payload,
                )
        except httpx.TimeoutException as e:
            logger.error(f"Shopify request to {self.shop} timed out: {e}")
            raise UpstreamError(f"Shopify request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error(f"Network error calling Shopify for {self.shop}: {e}")
            raise UpstreamError(f"Network error: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Shopify API error {response.status_code} for {self.shop}: {response.text}")
            raise UpstreamError(
                f"Shopify request failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            result = response.json()
        except json.JSONDecodeError as e:
            logger.error(f"Failed to decode Shopify response: {response.text}")
            raise UpstreamError(
                "Failed to decode JSON response from Shopify",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(result, dict):
            raise UpstreamError(
                "Unexpected response shape from Shopify",
                status_code=response.status_code,
                body=result,
            )
        return result

    async def list_products(
        self,
        after: Optional[str] = None,
        before: Optional[str] = None,
        page_size: int = 10,
    ) -> Dict[str, Any]:
        """
        Fetch one page of products with their first variants.

        Returns the ``products`` connection: ``{"edges": [...], "pageInfo": {...}}``.
        """
        direction, cursor = resolve_cursor_direction(after, before)
        variables = build_products_variables(direction, cursor, page_size)
        logger.info(f"Listing products for {self.shop} ({direction.value}, page_size={page_size})")

        result = await self.execute(PRODUCTS_QUERY, variables)

        if result.get("errors"):
            raise UpstreamError(
                "Shopify returned GraphQL errors while listing products",
                status_code=200,
                body=result,
                errors=result["errors"],
            )

        products = (result.get("data") or {}).get("products")
        if not products:
            raise UpstreamError(
                "Failed to fetch products from Shopify",
                status_code=200,
                body=result,
            )
        return products

    async def update_variant_price(self, product_id: str, variant_id: str, price: Any) -> Dict[str, Any]:
        """
        Set a single variant's price through ``productVariantsBulkUpdate``.

        Returns ``{"product": {...}, "variants": [...]}`` from the mutation payload.
        """
        variables = {
            "productId": product_id,
            "variants": [{"id": variant_id, "price": price}],
        }
        logger.info(f"Updating price of {variant_id} on {product_id} for {self.shop}")

        result = await self.execute(UPDATE_VARIANT_PRICE_MUTATION, variables)

        if result.get("errors"):
            raise UpstreamError(
                "Shopify returned GraphQL errors while updating variant price",
                status_code=200,
                body=result,
                errors=result["errors"],
            )

        payload = (result.get("data") or {}).get("productVariantsBulkUpdate")
        if payload is None:
            raise UpstreamError(
                "Missing productVariantsBulkUpdate in Shopify response",
                status_code=200,
                body=result,
            )

        user_errors: List[Dict[str, Any]] = payload.get("userErrors") or []
        if user_errors:
            logger.warning(f"Price update rejected for {variant_id}: {user_errors}")
            raise UpstreamError(
                "Shopify rejected the variant price update",
                status_code=200,
                body=result,
                errors=user_errors,
            )

        return {
            "product": payload.get("product"),
            "variants": payload.get("productVariants") or [],
        }
