from enum import Enum
from typing import Optional


class AuthErrorKind(str, Enum):
    MISSING_FIELDS = "MISSING_FIELDS"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_OTP = "INVALID_OTP"
    OTP_EXPIRED = "OTP_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    ALREADY_VERIFIED = "ALREADY_VERIFIED"


# Rendered only at the response layer
DEFAULT_MESSAGES = {
    AuthErrorKind.MISSING_FIELDS: "Missing Details",
    AuthErrorKind.DUPLICATE_ACCOUNT: "User Already Exists",
    AuthErrorKind.ACCOUNT_NOT_FOUND: "User not found",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid email or password",
    AuthErrorKind.INVALID_OTP: "Invalid Otp",
    AuthErrorKind.OTP_EXPIRED: "Otp Expired",
    AuthErrorKind.INVALID_TOKEN: "Token is not Authorized, login again",
    AuthErrorKind.UNAUTHORIZED: "Not Authorized. Login Again",
    AuthErrorKind.ALREADY_VERIFIED: "Account is already verified",
}


class AuthError(Exception):
    """A business failure of an auth operation. Never fatal; rendered as success:false."""
    def __init__(self, kind: AuthErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message
        super().__init__(message or kind.value)

    @property
    def public_message(self) -> str:
        return self.message or DEFAULT_MESSAGES[self.kind]


class InvalidToken(AuthError):
    """Raised when a session token fails signature, format or expiry checks."""
    def __init__(self, message: Optional[str] = None):
        super().__init__(AuthErrorKind.INVALID_TOKEN, message)
