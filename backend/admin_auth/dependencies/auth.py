# admin_auth/dependencies/auth.py
from __future__ import annotations

import logging
from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from admin_auth.core.config import settings
from admin_auth.core.database import get_db
from admin_auth.core.errors import NotFoundError, UnauthorizedError
from admin_auth.core.security import (
    ExpiredTokenError,
    InvalidTokenError,
    PasswordHasher,
    TokenService,
)
from admin_auth.models.user import User
from admin_auth.services.session_cookie import read_session_cookie
from admin_auth.services.users import SqlAlchemyUserStore, UserStore

logger = logging.getLogger(__name__)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return SqlAlchemyUserStore(db)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@lru_cache()
def get_token_service() -> TokenService:
    return TokenService(
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        lifetime=timedelta(hours=settings.SESSION_TOKEN_EXPIRE_HOURS),
    )


def _subject_to_user_id(subject: str) -> int:
    if not subject.isdigit():
        raise ValueError("subject is not a user id")
    user_id = int(subject)
    if user_id <= 0:
        raise ValueError("subject is not a user id")
    return user_id


def get_current_user(
    request: Request,
    store: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    Validates:
      - session cookie present
      - token signature + exp
      - subject is a user id
      - user exists
    Returns:
      - User SQLAlchemy model
    """
    token = read_session_cookie(request)
    if not token:
        raise UnauthorizedError("Unauthenticated")

    try:
        subject = tokens.parse(token)
    except ExpiredTokenError:
        logger.warning("session token rejected: expired")
        raise UnauthorizedError("Session expired")
    except InvalidTokenError as e:
        logger.warning("session token rejected: %s", e)
        raise UnauthorizedError("Invalid session token")

    try:
        user_id = _subject_to_user_id(subject)
    except ValueError:
        logger.warning("session token rejected: non-numeric subject")
        raise UnauthorizedError("Invalid session token")

    user = store.find_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
