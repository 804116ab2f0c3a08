from fastapi import Depends
from sqlalchemy.orm import Session
from auth_api.core.config import settings
from auth_api.core.jwt import TokenService
from auth_api.core.utils import now_ms
from auth_api.db.crud.accounts import AccountStore
from auth_api.db.session import get_db
from auth_api.services.auth_service import AuthService
from auth_api.services.notifications import EmailSender, get_email_sender


def get_clock():
    return now_ms


def get_auth_service(
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
    clock=Depends(get_clock),
) -> AuthService:
    """One AuthService per request, bound to the request's database session."""
    return AuthService(
        store=AccountStore(db),
        tokens=TokenService(settings),
        mailer=mailer,
        settings=settings,
        clock=clock,
    )
