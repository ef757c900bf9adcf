# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pulse-feed")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="pulse-uploads-"))

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from pulse_feed.api.dependencies import get_avatar_storage_dep  # noqa: E402
from pulse_feed.core.security import create_access_token, hash_password  # noqa: E402
from pulse_feed.core.settings import Settings  # noqa: E402
from pulse_feed.db.session import Base, build_engine, create_tables  # noqa: E402
from pulse_feed.db.session import get_db as app_get_session  # noqa: E402
from pulse_feed.main import app as fastapi_app  # noqa: E402
from pulse_feed.models import Post, PostKind, User  # noqa: E402
from pulse_feed.services.avatar_storage import AvatarStorage  # noqa: E402
from pulse_feed.services.live import LiveNotifier  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "pw123456"
_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    create_tables(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture(autouse=True)
def override_avatar_storage(app: FastAPI, upload_dir: Path) -> Iterator[AvatarStorage]:
    storage = AvatarStorage(upload_dir, "/uploads")
    app.dependency_overrides[get_avatar_storage_dep] = lambda: storage
    try:
        yield storage
    finally:
        app.dependency_overrides.pop(get_avatar_storage_dep, None)


@pytest.fixture(autouse=True)
def fresh_live_notifier(app: FastAPI) -> Iterator[LiveNotifier]:
    """Give every test its own registry of live viewers."""
    previous = app.state.live_notifier
    notifier = LiveNotifier()
    app.state.live_notifier = notifier
    try:
        yield notifier
    finally:
        app.state.live_notifier = previous


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


def make_user(db_session: Session, username: str, display_name: str) -> User:
    user = User(
        username=username,
        password_hash=hash_password(TEST_PASSWORD),
        display_name=display_name,
        profile_picture_url=_TEST_SETTINGS_INSTANCE.default_profile_picture_url,
    )
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def make_post(db_session: Session, author: User, content: str) -> Post:
    post = Post(kind=PostKind.ORIGINAL, author_id=author.id, content=content, likes=0)
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    return post


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted test user."""
    yield make_user(db_session, "alice", "Alice A")


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    yield make_user(db_session, "bob", "Bob B")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Iterator[Post]:
    """Create a baseline post for tests."""
    yield make_post(db_session, test_user, "Test post content")


@pytest.fixture()
def register_payload() -> dict[str, Any]:
    return {"username": "alice", "password": TEST_PASSWORD, "displayName": "Alice A"}
