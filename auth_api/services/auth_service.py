import asyncio
import logging
from typing import Callable, Optional, Tuple

from auth_api.core.config import Settings
from auth_api.core.errors import AuthError, AuthErrorKind
from auth_api.core.jwt import TokenService
from auth_api.core.security import hash_password, verify_password, generate_otp_code
from auth_api.core.utils import now_ms, minutes_to_ms, describe_minutes
from auth_api.db.crud.accounts import AccountStore
from auth_api.db.models.account import Account
from auth_api.services.notifications import EmailSender

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome to Our Platform!"
VERIFY_OTP_SUBJECT = "Your Account Verification OTP"
RESET_OTP_SUBJECT = "Your Password Reset OTP"


def _otp_matches(stored: str, supplied) -> bool:
    return bool(stored) and stored == str(supplied).strip()


class AuthService:
    """
    Credential lifecycle of an account.

    Registration and login issue session tokens. Email ownership is proven
    with a verification OTP; forgotten passwords are replaced with a reset
    OTP. Each account holds at most one pending code per purpose, and issuing
    a new one overwrites the old. Codes are compared before expiry is
    checked, so an expired wrong code reports INVALID_OTP.

    Store writes are committed before any email is attempted.
    """

    def __init__(
        self,
        store: AccountStore,
        tokens: TokenService,
        mailer: EmailSender,
        settings: Settings,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.tokens = tokens
        self.mailer = mailer
        self.settings = settings
        self.clock = clock

    # =====================================================
    # REGISTER / LOGIN
    # =====================================================
    async def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> Tuple[Account, str]:
        if not name or not email or not password:
            raise AuthError(AuthErrorKind.MISSING_FIELDS)

        if self.store.find_by_email(email):
            raise AuthError(AuthErrorKind.DUPLICATE_ACCOUNT)

        account = self.store.create(
            name=name,
            email=email,
            hashed_password=await asyncio.to_thread(hash_password, password)
        )
        token = self.tokens.issue(account.id)
        logger.info(f"Account registered: {account.id}")

        try:
            await self.mailer.send(
                account.email,
                WELCOME_SUBJECT,
                text=f"Welcome to our website. Your account has been created with email id: {account.email}"
            )
        except Exception as e:
            logger.error(f"Welcome email to {account.email} failed: {e}")

        return account, token

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[Account, str]:
        if not email or not password:
            raise AuthError(AuthErrorKind.MISSING_FIELDS, "Email and Password are required")

        account = self.store.find_by_email(email)
        if not account:
            raise AuthError(AuthErrorKind.INVALID_CREDENTIALS, "Invalid email")

        if not await asyncio.to_thread(verify_password, password, account.hashed_password):
            raise AuthError(AuthErrorKind.INVALID_CREDENTIALS, "Invalid password")

        logger.info(f"Login: {account.id}")
        return account, self.tokens.issue(account.id)

    # =====================================================
    # EMAIL VERIFICATION
    # =====================================================
    async def send_verify_otp(self, account_id: Optional[str]) -> Account:
        account = self.store.find_by_id(account_id) if account_id else None
        if not account:
            raise AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND)

        if account.is_account_verified:
            raise AuthError(AuthErrorKind.ALREADY_VERIFIED)

        otp = generate_otp_code()
        account.verify_otp = otp
        account.verify_otp_expire_at = self.clock() + minutes_to_ms(self.settings.VERIFY_OTP_EXPIRE_MINUTES)
        self.store.save(account)
        logger.info(f"Verification OTP issued for {account.id}")

        await self.mailer.send_template(
            account.email,
            VERIFY_OTP_SUBJECT,
            "email_verify",
            {"otp": otp, "email": account.email, "expires_in": describe_minutes(self.settings.VERIFY_OTP_EXPIRE_MINUTES)}
        )
        return account

    async def verify_account(self, account_id: Optional[str], otp) -> Account:
        if not account_id or not otp:
            raise AuthError(AuthErrorKind.MISSING_FIELDS)

        account = self.store.find_by_id(account_id)
        if not account:
            raise AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND)

        if not _otp_matches(account.verify_otp, otp):
            raise AuthError(AuthErrorKind.INVALID_OTP)

        if self.clock() >= account.verify_otp_expire_at:
            raise AuthError(AuthErrorKind.OTP_EXPIRED)

        account.is_account_verified = True
        account.verify_otp = ""
        account.verify_otp_expire_at = 0
        self.store.save(account)
        logger.info(f"Account verified: {account.id}")
        return account

    # =====================================================
    # PASSWORD RESET
    # =====================================================
    async def send_reset_otp(self, email: Optional[str]) -> Account:
        if not email:
            raise AuthError(AuthErrorKind.MISSING_FIELDS, "Email is required")

        account = self.store.find_by_email(email)
        if not account:
            raise AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND)

        otp = generate_otp_code()
        account.reset_otp = otp
        account.reset_otp_expire_at = self.clock() + minutes_to_ms(self.settings.RESET_OTP_EXPIRE_MINUTES)
        self.store.save(account)
        logger.info(f"Password reset OTP issued for {account.id}")

        await self.mailer.send_template(
            account.email,
            RESET_OTP_SUBJECT,
            "password_reset",
            {"otp": otp, "email": account.email, "expires_in": describe_minutes(self.settings.RESET_OTP_EXPIRE_MINUTES)}
        )
        return account

    async def reset_password(self, email: Optional[str], otp, new_password: Optional[str]) -> Account:
        if not email or not otp or not new_password:
            raise AuthError(AuthErrorKind.MISSING_FIELDS)

        account = self.store.find_by_email(email)
        if not account:
            raise AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND)

        if not _otp_matches(account.reset_otp, otp):
            raise AuthError(AuthErrorKind.INVALID_OTP)

        if self.clock() >= account.reset_otp_expire_at:
            raise AuthError(AuthErrorKind.OTP_EXPIRED)

        account.hashed_password = await asyncio.to_thread(hash_password, new_password)
        account.reset_otp = ""
        account.reset_otp_expire_at = 0
        self.store.save(account)
        logger.info(f"Password reset for {account.id}")
        return account

    # =====================================================
    # PROFILE
    # =====================================================
    async def get_user_data(self, account_id: Optional[str]) -> dict:
        account = self.store.find_by_id(account_id) if account_id else None
        if not account:
            raise AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND)

        return {
            "name": account.name,
            "isAccountVerified": account.is_account_verified,
        }
