from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from auth_api.core.config import Settings
from auth_api.core.errors import InvalidToken

ALGORITHM = "HS256"


class TokenService:
    """
    Issues and verifies signed session tokens.

    Tokens carry the account id under the ``id`` claim and an absolute
    ``exp`` bound at issuance. Verification is purely cryptographic: there
    is no revocation list, so a token stays valid until it expires.
    """

    def __init__(self, settings: Settings):
        self.secret_key = settings.JWT_SECRET
        self.expires_delta = timedelta(days=settings.SESSION_TOKEN_EXPIRE_DAYS)

    def issue(self, account_id: str, issued_at: Optional[datetime] = None) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        to_encode = {
            "id": account_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except JWTError as e:
            raise InvalidToken(str(e)) from e

    def verify(self, token: str) -> str:
        payload = self.decode(token)
        account_id = payload.get("id")
        if not account_id:
            raise InvalidToken()
        return str(account_id)
