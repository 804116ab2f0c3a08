import logging
from auth_api.core.config import settings
from auth_api.core.errors import AuthError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"

# Every response is HTTP 200; callers branch on "success", not the status code.

def success(message: str, **extra) -> dict:
    return {"success": True, "message": message, **extra}

def failure(exc: AuthError) -> dict:
    return {"success": False, "message": exc.public_message}

def internal_failure(exc: Exception, service=None) -> dict:
    """Envelope for unexpected store, mail or crypto errors raised inside an operation."""
    logger.error(f"Unhandled error in auth operation: {exc!r}")
    if service is not None:
        service.store.rollback()
    message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else GENERIC_ERROR_MESSAGE
    return {"success": False, "message": message or GENERIC_ERROR_MESSAGE}
