from starlette.middleware.base import BaseHTTPMiddleware
from fastapi import Request
from auth_api.core.config import Settings
from auth_api.core.errors import AuthError, AuthErrorKind
from auth_api.core.jwt import TokenService
import logging

logger = logging.getLogger(__name__)


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """
    Resolves the session cookie to an account id on ``request.state``.

    Never rejects by itself: routes that need an identity depend on
    ``require_auth``, which turns the recorded failure into a response.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.cookie_name = settings.SESSION_COOKIE_NAME
        self.tokens = TokenService(settings)

    async def dispatch(self, request: Request, call_next):
        request.state.user_id = None
        request.state.auth_error = None

        token = request.cookies.get(self.cookie_name)
        if not token:
            request.state.auth_error = AuthError(AuthErrorKind.UNAUTHORIZED)
        else:
            try:
                request.state.user_id = self.tokens.verify(token)
            except AuthError as e:
                logger.debug(f"SessionAuthMiddleware: rejected token: {e.public_message}")
                request.state.auth_error = e

        response = await call_next(request)
        return response
