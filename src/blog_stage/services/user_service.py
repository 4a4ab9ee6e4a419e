"""Account registration, sign-in and e-mail verification."""
from __future__ import annotations

import logging

from jose import JWTError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog_stage.core import security
from blog_stage.core.settings import Settings, settings
from blog_stage.models import User, UserRole, UserStatus
from blog_stage.schemas.user import SignInRequest, SignUpRequest
from blog_stage.services.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from blog_stage.services.mailer import Mailer

logger = logging.getLogger(__name__)


class UserService:
    """Service for the e-mail/password account lifecycle."""

    def __init__(self, session: Session, mailer: Mailer, config: Settings = settings) -> None:
        self.session = session
        self.mailer = mailer
        self.config = config

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("User already exists") from exc
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalar(select(User).where(User.email == email.lower()))

    def get_user(self, user_id: str) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _add_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: UserRole,
        email_verified: bool,
        image: str | None,
        phone: str | None,
    ) -> User:
        if self.get_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = User(
            name=name,
            email=email.lower(),
            password_hash=security.hash_password(password),
            role=role,
            status=UserStatus.ACTIVE,
            email_verified=email_verified,
            image=image,
            phone=phone,
        )
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("User already exists") from exc
        return user

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        email_verified: bool = False,
        image: str | None = None,
        phone: str | None = None,
    ) -> User:
        """Persist a new account with a hashed password."""
        user = self._add_user(
            name=name,
            email=email,
            password=password,
            role=role,
            email_verified=email_verified,
            image=image,
            phone=phone,
        )
        self._commit()
        self.session.refresh(user)
        logger.info("User %s registered with role %s", user.id, user.role.value)
        return user

    def register(self, data: SignUpRequest) -> User:
        """Create a USER account and send its verification link.

        The account is only committed once the link has been handed to the
        mail transport, so a failed send leaves the address free to retry.

        Raises:
            ConflictError: If the e-mail is already registered.
            ServiceUnavailableError: If the verification mail cannot be sent.
        """
        user = self._add_user(
            name=data.name,
            email=data.email,
            password=data.password,
            role=UserRole.USER,
            email_verified=not self.config.require_email_verification,
            image=data.image,
            phone=data.phone,
        )
        if not user.email_verified:
            token = security.create_email_verification_token(user.id)
            verification_url = f"{self.config.app_url}/verify-email?token={token}"
            try:
                self.mailer.send_verification_email(user.email, user.name, verification_url)
            except OSError as exc:
                self.session.rollback()
                logger.error("Verification mail to %s failed: %s", data.email, exc)
                raise ServiceUnavailableError(
                    "Could not send the verification email. Please try again later."
                ) from exc

        self._commit()
        self.session.refresh(user)
        logger.info("User %s registered with role %s", user.id, user.role.value)
        return user

    def verify_email(self, token: str) -> tuple[User, str]:
        """Mark the account behind ``token`` as verified and sign it in."""
        try:
            user_id = security.decode_token(token, purpose=security.EMAIL_VERIFICATION_PURPOSE)
        except JWTError as exc:
            raise ValidationError("Invalid or expired verification token") from exc

        user = self.get_user(user_id)
        if user.status != UserStatus.ACTIVE:
            raise ForbiddenError("Your account is not active")
        if not user.email_verified:
            user.email_verified = True
            self._commit()
            self.session.refresh(user)
            logger.info("User %s verified their e-mail", user.id)
        return user, security.create_access_token(user.id, {"role": user.role.value})

    def authenticate(self, data: SignInRequest) -> tuple[User, str]:
        """Check credentials and return the user with a fresh access token."""
        user = self.get_by_email(data.email)
        if user is None or not security.verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        if self.config.require_email_verification and not user.email_verified:
            raise ForbiddenError("Email not verified")
        if user.status != UserStatus.ACTIVE:
            raise ForbiddenError("Your account is not active")
        return user, security.create_access_token(user.id, {"role": user.role.value})
