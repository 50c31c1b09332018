"""Test to verify the testing setup is working correctly"""

from sqlalchemy import text

from app.core.constants import BuiltinIdentity
from app.models.user import User


def test_database_imports():
    """Test that we can import basic database components"""
    from app.db.database import Base, get_db

    assert Base is not None
    assert get_db is not None
    assert {"users", "posts", "comments", "votes"} <= set(Base.metadata.tables)


def test_database_fixture(db_session):
    """Test that database fixture works"""
    result = db_session.execute(text("SELECT 1 as test")).fetchone()
    assert result[0] == 1


def test_foreign_keys_enforced(db_session):
    """SQLite must be told to enforce foreign keys on every connection"""
    result = db_session.execute(text("PRAGMA foreign_keys")).fetchone()
    assert result[0] == 1


def test_builtin_users_seeded(db_session):
    """The reserved demo and admin identities exist as stored users"""
    demo = db_session.get(User, BuiltinIdentity.DEMO_USER_ID)
    admin = db_session.get(User, BuiltinIdentity.ADMIN_USER_ID)

    assert demo.name == BuiltinIdentity.DEMO_USER_NAME
    assert admin.name == BuiltinIdentity.ADMIN_USER_NAME
    assert admin.role.value == "admin"


def test_seeding_is_idempotent(db_session):
    from app.crud.users import ensure_builtin_users

    ensure_builtin_users(db_session)
    assert db_session.query(User).count() == 2


def test_root_and_health(client):
    """Root greeting and health probe respond without authentication"""
    assert client.get("/").status_code == 200

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "dbStatus": "connected"}
