"""Shared API dependencies for authentication and service wiring."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from blog_stage.core.security import decode_token
from blog_stage.core.settings import settings
from blog_stage.db.session import get_db
from blog_stage.models import User, UserRole, UserStatus
from blog_stage.services.access import Principal, authorize
from blog_stage.services.comment_service import CommentService
from blog_stage.services.errors import ForbiddenError, UnauthorizedError
from blog_stage.services.mailer import Mailer, get_mailer
from blog_stage.services.post_service import PostService
from blog_stage.services.user_service import UserService

# HTTP Bearer scheme; missing credentials are reported by the guard itself.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _load_user(token: str, db: Session) -> User:
    """Resolve the account behind an access token.

    Raises:
        UnauthorizedError: If the token is invalid or the user is unknown.
        ForbiddenError: If the account may not use the API.
    """
    try:
        user_id = decode_token(token)
    except JWTError as err:
        raise UnauthorizedError("Could not validate credentials") from err

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    if user.status != UserStatus.ACTIVE:
        raise ForbiddenError("Your account is not active")
    if settings.require_email_verification and not user.email_verified:
        raise ForbiddenError("Email verification required. Please verify your email!")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise UnauthorizedError("You are not authorized!")
    return _load_user(credentials.credentials, db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable[[User], Principal]:
    """Build a dependency admitting only principals holding one of ``roles``."""

    def _guard(user: CurrentUserDep) -> Principal:
        principal = Principal.from_user(user)
        if not authorize(principal, roles):
            raise ForbiddenError("Forbidden! You don't have permission to access this resource")
        return principal

    return _guard


AnyUserDep = Annotated[Principal, Depends(require_roles(UserRole.USER, UserRole.ADMIN))]
AdminDep = Annotated[Principal, Depends(require_roles(UserRole.ADMIN))]


def get_post_service(db: SessionDep) -> PostService:
    return PostService(db)


def get_comment_service(db: SessionDep) -> CommentService:
    return CommentService(db)


def get_user_service(
    db: SessionDep,
    mailer: Annotated[Mailer, Depends(get_mailer)],
) -> UserService:
    return UserService(db, mailer)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
