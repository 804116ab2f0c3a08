import pytest
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport

from auth_api.main import app
from auth_api.core.config import settings
from auth_api.core.dependencies import get_clock
from auth_api.core.jwt import TokenService
from auth_api.db.base import Base
from auth_api.db.crud.accounts import AccountStore
from auth_api.db.models.account import Account
from auth_api.db.session import engine, SessionLocal
from auth_api.services.auth_service import AuthService
from auth_api.services.notifications import EmailSender, get_email_sender

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millis clock that only moves when told to."""
    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, minutes: int = 0, hours: int = 0, ms: int = 0):
        self.now += ms + minutes * 60 * 1000 + hours * 60 * 60 * 1000


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mailer():
    sender = MagicMock(spec=EmailSender)
    sender.send = AsyncMock()
    sender.send_template = AsyncMock()
    return sender


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def service(db_session, mailer, clock):
    return AuthService(
        store=AccountStore(db_session),
        tokens=TokenService(settings),
        mailer=mailer,
        settings=settings,
        clock=clock,
    )


@pytest.fixture(autouse=True)
def override_dependencies(mailer, clock):
    app.dependency_overrides[get_email_sender] = lambda: mailer
    app.dependency_overrides[get_clock] = lambda: clock
    yield
    app.dependency_overrides = {}


@pytest.fixture
def client():
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


def load_account(email: str) -> Account | None:
    """Reads an account through a fresh session so request-side commits are visible."""
    db = SessionLocal()
    try:
        return db.query(Account).filter(Account.email == email).first()
    finally:
        db.close()


@pytest.fixture
def account_loader():
    return load_account
