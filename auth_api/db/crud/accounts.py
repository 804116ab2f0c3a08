from sqlalchemy.orm import Session
from auth_api.db.models.account import Account


class AccountStore:
    """Find/update-by-key access to Account records over one SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, account_id: str) -> Account | None:
        return self.db.query(Account).filter(Account.id == account_id).first()

    def find_by_email(self, email: str) -> Account | None:
        return self.db.query(Account).filter(Account.email == email).first()

    def create(self, name: str, email: str, hashed_password: str) -> Account:
        account = Account(
            name=name,
            email=email,
            hashed_password=hashed_password,
            is_account_verified=False,
            verify_otp="",
            verify_otp_expire_at=0,
            reset_otp="",
            reset_otp_expire_at=0,
        )

        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account

    def save(self, account: Account) -> Account:
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account

    def rollback(self):
        self.db.rollback()
