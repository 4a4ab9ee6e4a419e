# tests/test_seed_admin.py
"""Tests for the administrator seeding script."""

from contextlib import contextmanager

import pytest
from sqlalchemy import select

from blog_stage.models import User, UserRole
from blog_stage.scripts import seed_admin as seed_admin_script
from blog_stage.scripts.seed_admin import seed_admin
from blog_stage.services.errors import ConflictError
from blog_stage.services.user_service import UserService


def test_seed_admin_creates_verified_admin(db_session, mailer) -> None:
    service = UserService(db_session, mailer)

    admin = seed_admin(service, name="Root", email="root@example.com", password="s3cret-pass")

    assert admin.role == UserRole.ADMIN
    assert admin.email_verified is True
    assert mailer.sent == []


def test_seed_admin_twice_conflicts(db_session, mailer) -> None:
    service = UserService(db_session, mailer)
    seed_admin(service, name="Root", email="root@example.com", password="s3cret-pass")

    with pytest.raises(ConflictError):
        seed_admin(service, name="Root", email="root@example.com", password="s3cret-pass")


@pytest.fixture()
def script_session(monkeypatch, db_session):
    """Point the CLI at the test session and keep its logging config out of the way."""

    @contextmanager
    def _scope():
        yield db_session

    monkeypatch.setattr(seed_admin_script, "session_scope", _scope)
    monkeypatch.setattr(seed_admin_script, "configure_logging", lambda level: None)
    return db_session


def test_main_creates_admin(script_session) -> None:
    code = seed_admin_script.main(["--email", "Root@Example.com", "--password", "s3cret-pass"])

    assert code == 0
    admin = script_session.scalar(select(User).where(User.email == "root@example.com"))
    assert admin.role == UserRole.ADMIN


def test_main_exits_non_zero_on_duplicate(script_session, make_user) -> None:
    make_user(email="root@example.com")
    code = seed_admin_script.main(["--email", "root@example.com", "--password", "s3cret-pass"])
    assert code == 1
