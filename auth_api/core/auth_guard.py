from fastapi import Request
from auth_api.core.errors import AuthError, AuthErrorKind


def require_auth(request: Request) -> str:
    """Dependency for routes that need a known account; returns the session's account id."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise getattr(request.state, "auth_error", None) or AuthError(AuthErrorKind.UNAUTHORIZED)
    return user_id
