# product_reviews/models/review.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint, func

from ..database import Base


def _utc_now():
    return datetime.now(timezone.utc)


class Review(Base):
    __tablename__ = "review"
    __table_args__ = (
        UniqueConstraint("shop", "product_id", name="uq_review_shop_product_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    shop = Column(String(255), nullable=False, index=True)
    product_id = Column(String(255), nullable=False)  # Product GID
    snippet = Column(Text, nullable=False)
    # Set once on insert; overwriting the snippet leaves it alone
    created_at = Column(
        DateTime(timezone=True),
        default=_utc_now,
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<Review(shop='{self.shop}', product_id='{self.product_id}')>"
