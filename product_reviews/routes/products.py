# product_reviews/routes/products.py
"""
Paginated product listing for the embedded app's product table.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from product_reviews.core.config import Settings, get_settings
from product_reviews.core.exceptions import BaseServiceError
from product_reviews.dependencies import get_db
from product_reviews.routes.responses import service_error_response, unexpected_error_response
from product_reviews.services.product_listing import ProductListingService

router = APIRouter(tags=["products"])

logger = logging.getLogger(__name__)


@router.get("/products-page")
@router.get("/api/products")
async def products_page(
    shop: Optional[str] = Query(None),
    after: Optional[str] = Query(None),
    before: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """One page of products with review snippets. ``after`` takes precedence over ``before``."""
    try:
        service = ProductListingService(db, settings)
        page = await service.get_page(shop, after=after, before=before)
        return JSONResponse(page.to_json())
    except BaseServiceError as e:
        return service_error_response(e)
    except Exception as e:
        return unexpected_error_response(e)
