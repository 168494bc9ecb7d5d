# product_reviews/models/session.py
from sqlalchemy import Column, String, Boolean, DateTime, Text

from ..database import Base


class ShopSession(Base):
    """
    Offline/online access tokens written by the app's OAuth install flow.

    This service only reads the table; rows are created elsewhere.
    """
    __tablename__ = "session"

    id = Column(String(255), primary_key=True)
    shop = Column(String(255), nullable=False, index=True)
    state = Column(String(255), nullable=True)
    is_online = Column(Boolean, nullable=False, default=False)
    scope = Column(Text, nullable=True)
    expires = Column(DateTime, nullable=True)
    access_token = Column(String(255), nullable=False)
