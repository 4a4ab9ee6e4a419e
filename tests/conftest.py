# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_ENABLED", "false")
os.environ.setdefault("REQUIRE_EMAIL_VERIFICATION", "true")

from blog_stage.core.security import create_access_token, hash_password
from blog_stage.db import Base
from blog_stage.db import get_db as app_get_session
from blog_stage.main import app as fastapi_app
from blog_stage.models import (
    Comment,
    CommentStatus,
    Post,
    PostStatus,
    User,
    UserRole,
    UserStatus,
)
from blog_stage.services.access import Principal
from blog_stage.services.mailer import Mailer, get_mailer

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"

# Hashing is deliberately slow; share one digest across all fixture users.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_CLOCK = count(1)
_EPOCH = datetime(2025, 1, 1, tzinfo=UTC)


def _next_timestamp() -> datetime:
    """Return strictly increasing creation times so ordering is deterministic."""
    return _EPOCH + timedelta(minutes=next(_CLOCK))


class RecordingMailer(Mailer):
    """Mailer that keeps outgoing messages in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[dict[str, str | None]] = []

    def send(self, to_addr: str, subject: str, body_text: str, body_html: str | None = None) -> None:
        self.sent.append({"to": to_addr, "subject": subject, "body": body_text, "html": body_html})


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every test starts from empty tables instead.
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
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture(autouse=True)
def override_mailer_dependency(app: FastAPI, mailer: RecordingMailer) -> Iterator[None]:
    app.dependency_overrides[get_mailer] = lambda: mailer
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_mailer, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting accounts with the shared test password."""

    def _make_user(
        name: str = "Test User",
        email: str | None = None,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
        email_verified: bool = True,
    ) -> User:
        user = User(
            name=name,
            email=email or f"user{next(_CLOCK)}@example.com",
            password_hash=_PASSWORD_HASH,
            role=role,
            status=status,
            email_verified=email_verified,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user(name="Test User", email="test@example.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user(name="Other User", email="other@example.com")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user(name="Admin", email="admin@example.com", role=UserRole.ADMIN)


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for any user."""
    return bearer


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def principal(test_user: User) -> Principal:
    return Principal.from_user(test_user)


@pytest.fixture()
def other_principal(other_user: User) -> Principal:
    return Principal.from_user(other_user)


@pytest.fixture()
def admin_principal(admin_user: User) -> Principal:
    return Principal.from_user(admin_user)


@pytest.fixture()
def make_post(db_session: Session, test_user: User) -> Callable[..., Post]:
    """Return a factory persisting posts with increasing creation times."""

    def _make_post(
        title: str = "Test post",
        content: str = "Test post content",
        tags: list[str] | None = None,
        status: PostStatus = PostStatus.PUBLISHED,
        author: User | None = None,
        is_featured: bool = False,
        views: int = 0,
    ) -> Post:
        created_at = _next_timestamp()
        post = Post(
            title=title,
            content=content,
            status=status,
            is_featured=is_featured,
            views=views,
            author_id=(author or test_user).id,
            created_at=created_at,
            updated_at=created_at,
        )
        post.tags = tags if tags is not None else ["general"]
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline post for tests."""
    return make_post(title="Hello world", content="First post body", tags=["intro", "news"])


@pytest.fixture()
def make_comment(db_session: Session, test_user: User) -> Callable[..., Comment]:
    """Return a factory persisting comments with increasing creation times."""

    def _make_comment(
        post: Post,
        content: str = "Nice post",
        author: User | None = None,
        parent: Comment | None = None,
        status: CommentStatus = CommentStatus.APPROVED,
    ) -> Comment:
        created_at = _next_timestamp()
        comment = Comment(
            content=content,
            post_id=post.id,
            parent_id=parent.id if parent is not None else None,
            author_id=(author or test_user).id,
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment


@pytest.fixture()
def test_comment(make_comment: Callable[..., Comment], test_post: Post) -> Comment:
    return make_comment(test_post, content="First!")

