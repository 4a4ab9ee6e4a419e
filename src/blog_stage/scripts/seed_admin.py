"""Create the first administrator account.

Usage:
    python -m blog_stage.scripts.seed_admin --email admin@example.com --password secret123
"""
from __future__ import annotations

import argparse
import logging
import sys

from blog_stage.core.logging import configure_logging
from blog_stage.core.settings import settings
from blog_stage.db.session import session_scope
from blog_stage.models import User, UserRole
from blog_stage.services.errors import ServiceError
from blog_stage.services.mailer import get_mailer
from blog_stage.services.user_service import UserService

logger = logging.getLogger("blog_stage.seed_admin")


def seed_admin(service: UserService, *, name: str, email: str, password: str) -> User:
    """Create a verified ADMIN account.

    Raises:
        ConflictError: If an account with ``email`` already exists.
    """
    logger.info("Checking whether %s already exists", email)
    user = service.create_user(
        name=name,
        email=email,
        password=password,
        role=UserRole.ADMIN,
        email_verified=True,
    )
    logger.info("Admin %s created", user.email)
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the administrator account")
    parser.add_argument("--name", default=settings.admin_name)
    parser.add_argument("--email", default=settings.admin_email)
    parser.add_argument("--password", default=settings.admin_password)
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    if not args.email or not args.password:
        parser.error("an e-mail and password are required (flags or ADMIN_EMAIL/ADMIN_PASSWORD)")

    try:
        with session_scope() as db:
            service = UserService(db, get_mailer())
            seed_admin(service, name=args.name, email=args.email, password=args.password)
    except ServiceError as exc:
        logger.error("Admin seeding failed: %s", exc.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
