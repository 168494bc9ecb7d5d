# product_reviews/database.py

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from product_reviews.core.config import get_settings

settings = get_settings()

engine_options = {"echo": False, "future": True}
if not settings.DATABASE_URL.startswith("sqlite"):
    engine_options.update(
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,
    )

engine = create_async_engine(settings.DATABASE_URL, **engine_options)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()
