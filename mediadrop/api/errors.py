import logging

from fastapi.responses import JSONResponse

from mediadrop.core.errors import UploadError

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to process upload"


def error_response(exc: Exception, action: str) -> JSONResponse:
    """Log the failure and translate it into {"error": message} without internal details"""
    if isinstance(exc, UploadError):
        logger.error("%s failed (%s): %s", action, type(exc).__name__, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.user_message})

    logger.exception("%s failed unexpectedly", action)
    return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE})
