from .session import ShopSession
from .review import Review

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'ShopSession',
    'Review',
]
