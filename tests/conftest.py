# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from product_reviews.core.config import Settings, get_settings
from product_reviews.database import Base
from product_reviews.dependencies import get_db
from product_reviews.main import app
from product_reviews.models import ShopSession

TEST_DATABASE_URL = "sqlite+aiosqlite://"

SHOP = "x.myshopify.com"
ACCESS_TOKEN = "shpat_test_token"


@pytest.fixture
def settings():
    """Provide test settings"""
    return Settings(
        DATABASE_URL=TEST_DATABASE_URL,
        SHOPIFY_API_VERSION="2025-04",
        SHOPIFY_REQUEST_TIMEOUT=5.0,
        PRODUCTS_PER_PAGE=10,
    )


@pytest.fixture
async def test_engine():
    """In-memory database, created fresh for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Provide a database session for tests"""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def shop_session(db_session):
    """A stored offline token for SHOP."""
    row = ShopSession(id=f"offline_{SHOP}", shop=SHOP, access_token=ACCESS_TOKEN, is_online=False)
    db_session.add(row)
    await db_session.commit()
    return row


@pytest.fixture
def test_client(settings):
    """Test client with a mocked DB session and test settings"""
    async def override_get_db():
        yield AsyncMock()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def make_product_node(index: int, variants: int = 1) -> dict:
    return {
        "id": f"gid://shopify/Product/{index}",
        "title": f"Product {index}",
        "featuredMedia": {"preview": {"image": {"url": f"https://cdn.example.com/{index}.jpg"}}},
        "variants": {
            "nodes": [
                {
                    "id": f"gid://shopify/ProductVariant/{index}{v}",
                    "compareAtPrice": None,
                    "price": "19.99",
                    "image": None,
                }
                for v in range(variants)
            ]
        },
    }


def make_connection(indexes, has_next=False, has_previous=False) -> dict:
    edges = [{"cursor": f"cursor-{i}", "node": make_product_node(i)} for i in indexes]
    return {
        "edges": edges,
        "pageInfo": {
            "hasNextPage": has_next,
            "hasPreviousPage": has_previous,
            "startCursor": edges[0]["cursor"] if edges else None,
            "endCursor": edges[-1]["cursor"] if edges else None,
        },
    }
