# product_reviews/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from product_reviews.core import logging_config  # noqa: F401
from product_reviews.core.config import get_settings
from product_reviews.routes import health, products, reviews

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        f"Starting product reviews service ({settings.ENVIRONMENT}, "
        f"Shopify API {settings.SHOPIFY_API_VERSION})"
    )
    yield
    from product_reviews.database import engine
    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="Product Reviews for Shopify",
    lifespan=lifespan
)

settings = get_settings()

# The storefront widget calls /review straight from the shop's domain
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# Add middleware to handle HTTPS behind proxy
@app.middleware("http")
async def proxy_headers_middleware(request: Request, call_next):
    forwarded_proto = request.headers.get("x-forwarded-proto")
    if forwarded_proto == "https":
        request.scope["scheme"] = "https"
    response = await call_next(request)
    return response


app.include_router(products.router)
app.include_router(reviews.router)
app.include_router(health.router)
