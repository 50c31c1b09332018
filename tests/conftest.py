import os

# Settings are read at import time, so the test environment is fixed before any app import
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base, enable_sqlite_foreign_keys, get_db
from app.core.constants import BuiltinIdentity
from app.core.exception import DeliveryError
from app.core.security import create_access_token
from app.crud import posts as crud_posts
from app.crud import users as crud_users
from app.crud.users import ensure_builtin_users
from app.models.enums import MediaType
from app.schemas.post import PostCreate
from app.schemas.user import UserRegister
from app.services.mailer import get_email_sender
from app.services.media import data_uri_cache

# Test database - in-memory SQLite shared by every connection
TEST_DB_URL = "sqlite://"

POTHOLE = {
    "title": "Pothole",
    "description": "Large pothole",
    "mediaType": "image",
    "category": "Infrastructure",
    "location": "Main St",
}


class RecordingEmailSender:
    """Stands in for the SMTP sender and remembers what it was asked to send."""

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send(self, to_address, token):
        if self.fail:
            raise DeliveryError(f"Failed to send verification email to {to_address}")
        self.sent.append((to_address, token))


@pytest.fixture(scope="function")
def engine():
    test_engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Create a test database session with the built-in identities seeded"""
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = testing_session_local()
    ensure_builtin_users(session)
    data_uri_cache.clear()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def email_sender():
    return RecordingEmailSender()


@pytest.fixture(scope="function")
def client(db_session, email_sender):
    """Test client wired to the test session and the recording mail sender"""
    from main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _register(db_session, name, email):
    return crud_users.create_user(
        db_session, UserRegister(name=name, email=email, password="secret123")
    )


@pytest.fixture
def alice(db_session):
    """A regular registered user"""
    return _register(db_session, "Alice", "alice@example.org")


@pytest.fixture
def bob(db_session):
    """A second regular registered user"""
    return _register(db_session, "Bob", "bob@example.org")


def bearer(user_id):
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


@pytest.fixture
def alice_headers(alice):
    return bearer(alice.id)


@pytest.fixture
def bob_headers(bob):
    return bearer(bob.id)


@pytest.fixture
def demo_headers():
    return {"Authorization": BuiltinIdentity.DEMO_USER_ID}


@pytest.fixture
def admin_headers():
    return {"Authorization": BuiltinIdentity.ADMIN_USER_ID}


@pytest.fixture
def alice_post(db_session, alice):
    """A stored post authored by Alice"""
    return crud_posts.create_post(
        db_session,
        alice.id,
        PostCreate(
            title="Broken streetlight",
            description="Dark corner at night",
            media_type=MediaType.IMAGE,
            category="Lighting",
            location="Oak Ave",
        ),
    )
