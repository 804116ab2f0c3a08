from typing import Optional
from fastapi import APIRouter, Depends, Response

from auth_api.core.auth_guard import require_auth
from auth_api.core.config import settings
from auth_api.core.dependencies import get_auth_service
from auth_api.core.errors import AuthError
from auth_api.core.responses import success, failure, internal_failure
from auth_api.schemas.auth import (
    Envelope, RegisterIn, LoginIn, VerifyAccountIn, SendResetOtpIn, ResetPasswordIn
)
from auth_api.services.auth_service import AuthService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

SESSION_MAX_AGE = settings.SESSION_TOKEN_EXPIRE_DAYS * 24 * 60 * 60


def _cookie_flags() -> dict:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "strict",
    }

def set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE,
        **_cookie_flags()
    )

def clear_session_cookie(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME, **_cookie_flags())

# =====================================================
# REGISTER
# =====================================================
@router.post("/register", response_model=Envelope)
async def register(
    response: Response,
    payload: Optional[RegisterIn] = None,
    service: AuthService = Depends(get_auth_service)
):
    payload = payload or RegisterIn()
    try:
        _, token = await service.register(payload.name, payload.email, payload.password)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    set_session_cookie(response, token)
    return success("User Registered Successfully")

# =====================================================
# LOGIN
# =====================================================
@router.post("/login", response_model=Envelope)
async def login(
    response: Response,
    payload: Optional[LoginIn] = None,
    service: AuthService = Depends(get_auth_service)
):
    payload = payload or LoginIn()
    try:
        _, token = await service.login(payload.email, payload.password)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    set_session_cookie(response, token)
    return success("Login Successful")

# =====================================================
# LOGOUT
# =====================================================
@router.post("/logout", response_model=Envelope)
def logout(response: Response):
    # Stateless tokens: only the client's copy is removed
    try:
        clear_session_cookie(response)
    except Exception as e:
        return internal_failure(e)
    return success("Logout Successful")

# =====================================================
# EMAIL VERIFICATION
# =====================================================
@router.post("/send-verify-otp", response_model=Envelope)
async def send_verify_otp(
    user_id: str = Depends(require_auth),
    service: AuthService = Depends(get_auth_service)
):
    try:
        await service.send_verify_otp(user_id)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    return success("OTP sent to your email")

@router.post("/verify-account", response_model=Envelope)
async def verify_account(
    payload: Optional[VerifyAccountIn] = None,
    user_id: str = Depends(require_auth),
    service: AuthService = Depends(get_auth_service)
):
    payload = payload or VerifyAccountIn()
    try:
        await service.verify_account(user_id, payload.otp)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    return success("Email Verified Successfully")

# =====================================================
# IS AUTHENTICATED
# =====================================================
@router.get("/is-auth", response_model=Envelope)
def is_authenticated(user_id: str = Depends(require_auth)):
    return success("User is Authenticated")

# =====================================================
# PASSWORD RESET
# =====================================================
@router.post("/send-reset-otp", response_model=Envelope)
async def send_reset_otp(
    payload: Optional[SendResetOtpIn] = None,
    service: AuthService = Depends(get_auth_service)
):
    payload = payload or SendResetOtpIn()
    try:
        await service.send_reset_otp(payload.email)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    return success("Otp sent to your email")

# TODO: drop require_auth here once the client can reset without a session;
# the account is looked up by email and the session identity is unused.
@router.post("/reset-password", response_model=Envelope)
async def reset_password(
    payload: Optional[ResetPasswordIn] = None,
    user_id: str = Depends(require_auth),
    service: AuthService = Depends(get_auth_service)
):
    payload = payload or ResetPasswordIn()
    try:
        await service.reset_password(payload.email, payload.otp, payload.new_password)
    except AuthError as e:
        return failure(e)
    except Exception as e:
        return internal_failure(e, service)

    return success("Password Reset Successfully")
