from datetime import datetime
from typing import Optional

from .base import CamelSchema


class ReviewSummary(CamelSchema):
    """What the storefront and the edit modal read back"""
    snippet: str
    created_at: Optional[datetime] = None


class ReviewRead(ReviewSummary):
    """Full stored row, returned after an upsert"""
    id: int
    shop: str
    product_id: str
