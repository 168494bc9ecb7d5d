"""
Core module exports.
"""
from .exceptions import (
    BaseServiceError,
    ValidationError,
    MissingShopError,
    AuthError,
    UpstreamError,
)
