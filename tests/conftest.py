"""
Pytest global configuration for the CyberShield Content API.

- Each test gets its own SQLite database file (sync engine for seeding,
  aiosqlite engine for the request handlers).
- Firebase token verification is replaced by an in-memory token registry:
  ``make_user`` registers ``token-<uid>`` and returns ready-made headers.
- Uploads land in a temporary directory.
"""

import os
import tempfile

_TMP_ROOT = tempfile.mkdtemp(prefix="cybershield-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_ROOT, 'import.db')}"
os.environ.pop("ASYNC_DATABASE_URL", None)
os.environ["UPLOAD_ROOT"] = os.path.join(_TMP_ROOT, "uploads")
os.environ["UPLOAD_BACKEND"] = "local"
os.environ["AUTH_DEV_MODE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

import app.core.auth as auth_module
import app.database.session as db_session_module
from app.database.session import Base
import app.database.models  # noqa: F401 - registers all models with Base.metadata
from app.database.models.article import Article
from app.database.models.user import User
from app.api.main import app
from app.utils.enums import UserRole

# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def test_db_engine(tmp_path, monkeypatch):
    """
    Fresh SQLite database per test, swapped into the global engines used by
    ``get_db`` / ``get_session``.
    """
    db_file = tmp_path / "test.db"
    engine = create_engine(f"sqlite:///{db_file}", poolclass=NullPool)
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)

    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session_module, "engine", engine)
    monkeypatch.setattr(
        db_session_module,
        "SessionLocal",
        sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False),
    )
    monkeypatch.setattr(db_session_module, "async_engine", async_engine)
    monkeypatch.setattr(
        db_session_module,
        "AsyncSessionLocal",
        async_sessionmaker(
            async_engine,
            class_=AsyncSession,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        ),
    )

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


# ============================================================================
# IDENTITY PROVIDER
# ============================================================================

@pytest.fixture(autouse=True)
def token_registry(monkeypatch):
    """
    Replace Firebase verification: ``token-<uid>`` resolves to the claims
    registered for that uid; anything else is rejected like a bad token.
    """
    registry = {}

    def fake_verify(token):
        claims = registry.get(token)
        if claims is None:
            raise ValueError("Token verification failed")
        return claims

    monkeypatch.setattr(auth_module, "verify_firebase_token", fake_verify)
    return registry


@pytest.fixture
def register_identity(token_registry):
    """Register a Firebase identity (no local user) and return auth headers."""

    def _register(uid, email=None, name=None, picture=None, provider="password"):
        claims = {"uid": uid, "firebase": {"sign_in_provider": provider}}
        if email is not False:
            claims["email"] = email or f"{uid}@cys-test.local"
        if name:
            claims["name"] = name
        if picture:
            claims["picture"] = picture
        token = f"token-{uid}"
        token_registry[token] = claims
        return {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def make_user(test_db_engine, register_identity):
    """Create a local user with the given role and return its auth headers."""

    def _make(uid, role=UserRole.STUDENT, email=None, display_name=None):
        email = email or f"{uid}@cys-test.local"
        with db_session_module.get_session() as session:
            session.add(
                User(
                    uid=uid,
                    email=email,
                    display_name=display_name,
                    role=role,
                )
            )
        return register_identity(uid, email=email, name=display_name)

    return _make


@pytest.fixture
def admin_headers(make_user):
    return make_user("admin-1", UserRole.ADMIN, display_name="Site Admin")


@pytest.fixture
def author_headers(make_user):
    return make_user("author-1", UserRole.AUTHOR, display_name="Alice Author")


@pytest.fixture
def other_author_headers(make_user):
    return make_user("author-2", UserRole.AUTHOR, display_name="Bob Author")


@pytest.fixture
def student_headers(make_user):
    return make_user("student-1", UserRole.STUDENT)


# ============================================================================
# FASTAPI CLIENT
# ============================================================================

@pytest.fixture(scope="function")
def test_client(test_db_engine):
    client = TestClient(app)
    yield client


# ============================================================================
# CONTENT FIXTURES
# ============================================================================

@pytest.fixture
def create_topic(test_client, admin_headers):
    """Create a topic through the admin API and return its JSON."""

    def _create(title="Web Exploitation", **extra):
        r = test_client.post(
            "/api/admin/topics",
            json={"title": title, **extra},
            headers=admin_headers,
        )
        assert r.status_code == 201, r.text
        return r.json()["topic"]

    return _create


@pytest.fixture
def topic(create_topic):
    return create_topic()


@pytest.fixture
def create_article(test_client, author_headers, topic):
    """Create a draft through the author API and return its JSON."""

    def _create(title="SQL Injection Writeup", headers=None, topic_id=None, **extra):
        payload = {
            "title": title,
            "topicId": topic_id if topic_id is not None else topic["id"],
            "content": "# Intro\nUNION SELECT ...",
            **extra,
        }
        r = test_client.post("/api/articles", json=payload, headers=headers or author_headers)
        assert r.status_code == 201, r.text
        return r.json()["article"]

    return _create


@pytest.fixture
def force_status(test_db_engine):
    """Put an article straight into a status, bypassing the workflow."""

    def _force(article_id, status, **extra):
        with db_session_module.get_session() as session:
            session.execute(
                update(Article)
                .where(Article.id == article_id)
                .values(status=status, **extra)
            )

    return _force
