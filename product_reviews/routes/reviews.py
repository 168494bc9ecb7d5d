# product_reviews/routes/reviews.py
"""
Review reads and the write endpoint for reviews and variant prices.

``GET /apps/review`` is the path Shopify's app proxy forwards storefront
requests to; the theme extension falls back to ``GET /review`` directly.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from product_reviews.core.config import Settings, get_settings
from product_reviews.core.exceptions import BaseServiceError, UpstreamError
from product_reviews.dependencies import get_db
from product_reviews.routes.responses import (
    error_response,
    service_error_response,
    unexpected_error_response,
)
from product_reviews.services.mutations import MutationService
from product_reviews.services.shopify.utils import verify_app_proxy_signature

router = APIRouter(tags=["reviews"])

logger = logging.getLogger(__name__)


async def _review_response(
    shop: Optional[str], product_id: Optional[str], db: AsyncSession, settings: Settings
) -> JSONResponse:
    logger.debug(f"Review lookup shop={shop} productId={product_id}")
    try:
        review = await MutationService(db, settings).get_review(shop, product_id)
        return JSONResponse({"review": review})
    except BaseServiceError as e:
        return service_error_response(e)
    except Exception as e:
        return unexpected_error_response(e)


@router.get("/review")
@router.get("/api/server")
async def get_review(
    shop: Optional[str] = Query(None),
    product_id: Optional[str] = Query(None, alias="productId"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Stored review for a product, or ``{"review": null}``."""
    return await _review_response(shop, product_id, db, settings)


@router.get("/apps/review")
async def get_review_via_app_proxy(
    request: Request,
    shop: Optional[str] = Query(None),
    product_id: Optional[str] = Query(None, alias="productId"),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Storefront read forwarded by Shopify's app proxy; signed when an app secret is configured."""
    if settings.SHOPIFY_API_SECRET and not verify_app_proxy_signature(
        request.query_params.multi_items(), settings.SHOPIFY_API_SECRET
    ):
        logger.warning(f"Rejected app-proxy request with bad signature for shop={shop}")
        return error_response("Invalid app proxy signature", 401)
    return await _review_response(shop, product_id, db, settings)


@router.post("/mutate")
@router.post("/api/server")
async def mutate(
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Upsert a review snippet or change a variant price."""
    try:
        payload = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        return error_response("Request body must be valid JSON", 400)

    try:
        result = await MutationService(db, settings).apply(payload)
        return JSONResponse(result)
    except UpstreamError as e:
        if e.errors:
            # GraphQL errors or userErrors go back to the caller untouched
            return error_response(e.errors, 400)
        return service_error_response(e)
    except BaseServiceError as e:
        return service_error_response(e)
    except Exception as e:
        return unexpected_error_response(e)
