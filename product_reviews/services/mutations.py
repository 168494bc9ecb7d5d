# product_reviews/services/mutations.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from product_reviews.core.config import Settings
from product_reviews.core.exceptions import AuthError, ValidationError
from product_reviews.schemas.mutation import PriceMutation, ReviewMutation, parse_mutation_request
from product_reviews.schemas.review import ReviewRead, ReviewSummary
from product_reviews.services.credentials import get_access_token
from product_reviews.services.review_store import ReviewStore
from product_reviews.services.shopify.client import ShopifyGraphQLClient

logger = logging.getLogger(__name__)


class MutationService:
    """Dispatches validated write requests to the review store or to Shopify."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.reviews = ReviewStore(db)

    async def apply(self, payload: Any) -> Dict[str, Any]:
        request = parse_mutation_request(payload)
        if isinstance(request, ReviewMutation):
            return await self.save_review(request)
        return await self.update_price(request)

    async def save_review(self, request: ReviewMutation) -> Dict[str, Any]:
        review = await self.reviews.upsert(request.shop, request.product_id, request.review_snippet)
        return {
            "success": True,
            "review": ReviewRead.from_orm_model(review).to_json(),
        }

    async def update_price(self, request: PriceMutation) -> Dict[str, Any]:
        """
        Raises:
            AuthError: the shop has no stored access token (403).
            UpstreamError: Shopify failed or returned user errors.
        """
        access_token = await get_access_token(self.db, request.shop)
        if not access_token:
            raise AuthError("No access token found for shop", status_code=403)

        client = ShopifyGraphQLClient(
            request.shop,
            access_token,
            api_version=self.settings.SHOPIFY_API_VERSION,
            timeout=self.settings.SHOPIFY_REQUEST_TIMEOUT,
        )
        result = await client.update_variant_price(request.product_id, request.variant_id, request.price)
        return {
            "success": True,
            "product": result["product"],
            "variants": result["variants"],
        }

    async def get_review(self, shop: Optional[str], product_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """Stored review for pre-filling the edit modal and for the storefront; None if absent."""
        if not shop or not product_id:
            raise ValidationError("Missing required query parameters: 'shop' and 'productId'")
        review = await self.reviews.get_one(shop, product_id)
        if review is None:
            return None
        return ReviewSummary.from_orm_model(review).to_json()
