import uuid
from sqlalchemy import Column, String, Boolean, BigInteger, DateTime
from sqlalchemy.sql import func
from auth_api.db.base_class import Base


def _new_account_id() -> str:
    return uuid.uuid4().hex


class Account(Base):
    __tablename__ = "accounts"

    # --- Identity ---
    id = Column(String(32), primary_key=True, default=_new_account_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_account_verified = Column(Boolean, nullable=False, default=False)

    # --- Pending OTPs (expiries are epoch millis, 0 when unset) ---
    verify_otp = Column(String, nullable=False, default="")
    verify_otp_expire_at = Column(BigInteger, nullable=False, default=0)
    reset_otp = Column(String, nullable=False, default="")
    reset_otp_expire_at = Column(BigInteger, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Account id={self.id} email={self.email}>"
