# product_reviews/services/credentials.py
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from product_reviews.core.exceptions import MissingShopError
from product_reviews.models.session import ShopSession

logger = logging.getLogger(__name__)


async def get_access_token(db: AsyncSession, shop: Optional[str]) -> Optional[str]:
    """
    Look up the stored Admin API access token for a shop.

    Always reads the session table; tokens are never cached in-process.
    Returns None when the shop has no session row.
    """
    if not shop:
        raise MissingShopError("Shop name is required to fetch the access token.")

    result = await db.execute(
        select(ShopSession.access_token)
        .where(ShopSession.shop == shop)
        .limit(1)
    )
    access_token = result.scalars().first()
    if not access_token:
        logger.info(f"No access token stored for shop {shop}")
        return None
    return access_token
