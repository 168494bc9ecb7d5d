# product_reviews/services/review_store.py
import logging
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from product_reviews.core.exceptions import ValidationError
from product_reviews.models.review import Review

logger = logging.getLogger(__name__)


class ReviewStore:
    """
    Persistence for merchant review snippets, one row per (shop, product).

    Overwrites change the snippet only; ``created_at`` keeps the time the
    review was first written. Concurrent writers for the same pair resolve
    last-writer-wins through the table's unique constraint.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, shop: str) -> Dict[str, str]:
        """Map of product id to snippet for every review the shop has."""
        result = await self.db.execute(
            select(Review.product_id, Review.snippet).where(Review.shop == shop)
        )
        return {product_id: snippet for product_id, snippet in result.all()}

    async def get_one(self, shop: str, product_id: str) -> Optional[Review]:
        result = await self.db.execute(
            select(Review).where(Review.shop == shop, Review.product_id == product_id)
        )
        return result.scalars().first()

    async def upsert(self, shop: str, product_id: str, snippet: str) -> Review:
        """Create the review if absent, otherwise overwrite its snippet."""
        if not shop or not product_id:
            raise ValidationError("Both shop and product id are required to store a review")
        if not isinstance(snippet, str):
            raise ValidationError("Review snippet must be a string")

        review = await self.get_one(shop, product_id)
        if review is not None:
            review.snippet = snippet
            await self.db.commit()
            logger.info(f"Updated review for {product_id} in {shop}")
            return review

        review = Review(shop=shop, product_id=product_id, snippet=snippet)
        self.db.add(review)
        try:
            await self.db.commit()
        except IntegrityError:
            # Another request inserted the same (shop, product) first
            await self.db.rollback()
            review = await self.get_one(shop, product_id)
            if review is None:
                # Some other constraint failed
                raise
            logger.info(f"Concurrent insert for {product_id} in {shop}, overwriting")
            review.snippet = snippet
            await self.db.commit()
            return review

        logger.info(f"Created review for {product_id} in {shop}")
        return review
