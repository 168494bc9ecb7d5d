# product_reviews/services/product_listing.py
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from product_reviews.core.config import Settings
from product_reviews.core.exceptions import AuthError, MissingShopError
from product_reviews.schemas.product import PageInfo, ProductPage
from product_reviews.services.annotation import annotate_products
from product_reviews.services.credentials import get_access_token
from product_reviews.services.review_store import ReviewStore
from product_reviews.services.shopify.client import ShopifyGraphQLClient

logger = logging.getLogger(__name__)


class ProductListingService:
    """Builds one page of a shop's products, each carrying its review snippet."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.reviews = ReviewStore(db)

    def _client(self, shop: str, access_token: str) -> ShopifyGraphQLClient:
        return ShopifyGraphQLClient(
            shop,
            access_token,
            api_version=self.settings.SHOPIFY_API_VERSION,
            timeout=self.settings.SHOPIFY_REQUEST_TIMEOUT,
        )

    async def get_page(
        self,
        shop: Optional[str],
        after: Optional[str] = None,
        before: Optional[str] = None,
    ) -> ProductPage:
        """
        Raises:
            MissingShopError: no shop given.
            AuthError: the shop has no stored access token (401).
            UpstreamError: Shopify could not be queried.
        """
        if not shop:
            raise MissingShopError("Missing shop parameter")

        access_token = await get_access_token(self.db, shop)
        if not access_token:
            raise AuthError("Access token not found for shop", status_code=401)

        connection = await self._client(shop, access_token).list_products(
            after=after,
            before=before,
            page_size=self.settings.PRODUCTS_PER_PAGE,
        )

        reviews = await self.reviews.get_all(shop)
        products = annotate_products(connection.get("edges") or [], reviews)
        logger.info(f"Returning {len(products)} products for {shop}")

        return ProductPage(
            products=products,
            page_info=PageInfo.model_validate(connection.get("pageInfo") or {}),
        )
