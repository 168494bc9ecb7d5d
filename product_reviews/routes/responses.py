"""JSON error envelope shared by the public endpoints."""
import logging
from typing import Any

from fastapi.responses import JSONResponse

from product_reviews.core.exceptions import BaseServiceError, UpstreamError

logger = logging.getLogger(__name__)


def error_response(error: Any, status_code: int) -> JSONResponse:
    return JSONResponse({"error": error}, status_code=status_code)


def service_error_response(exc: BaseServiceError, upstream_status: int = 500) -> JSONResponse:
    """
    Map a service exception onto ``{"error": ...}``.

    Upstream failures use ``upstream_status``; every other error carries its own status.
    """
    if isinstance(exc, UpstreamError):
        return error_response(str(exc), upstream_status)
    return error_response(str(exc), exc.status_code)


def unexpected_error_response(exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error: {exc}")
    return error_response(str(exc), 500)
