# admin_auth/routes/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from admin_auth.core.errors import (
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from admin_auth.core.security import (
    HashingError,
    PasswordHasher,
    SigningError,
    TokenService,
    VerificationError,
)
from admin_auth.dependencies.auth import (
    get_current_user,
    get_password_hasher,
    get_token_service,
    get_user_store,
)
from admin_auth.models.user import User
from admin_auth.schemas.auth import LoginIn, MessageOut, RegisterIn
from admin_auth.schemas.user import UserOut
from admin_auth.services.session_cookie import clear_session_cookie, set_session_cookie
from admin_auth.services.users import UserAlreadyExistsError, UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserOut)
def register(
    payload: RegisterIn,
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    if payload.password != payload.password_confirm:
        raise BadRequestError("Password doesn't match")

    try:
        password_hash = hasher.hash(payload.password)
    except HashingError as e:
        logger.error("auth.register: password hashing failed: %s", e)
        raise InternalError()

    user = User(
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        email=payload.email,
        password_hash=password_hash,
    )
    try:
        user = store.create(user)
    except UserAlreadyExistsError:
        logger.info("auth.register: duplicate email")
        raise ConflictError("Email already registered")

    logger.info("auth.register: ok user_id=%s", user.id)
    return user


@router.post("/login", response_model=str)
def login(
    payload: LoginIn,
    response: Response,
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    user = store.find_by_email(payload.email)
    if not user:
        logger.info("auth.login: unknown email")
        raise NotFoundError("User not found")

    try:
        password_ok = hasher.verify(user.password_hash, payload.password)
    except VerificationError as e:
        logger.error("auth.login: stored digest unusable user_id=%s: %s", user.id, e)
        raise InternalError()
    if not password_ok:
        logger.info("auth.login: incorrect password user_id=%s", user.id)
        raise UnauthorizedError("Incorrect password")

    try:
        token = tokens.issue(str(user.id))
    except SigningError as e:
        logger.error("auth.login: token signing failed user_id=%s: %s", user.id, e)
        raise InternalError()

    set_session_cookie(response, token, expires=tokens.expires_at())
    logger.info("auth.login: ok user_id=%s", user.id)
    # Token goes in the body too, for clients that don't keep cookies.
    return token


@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)) -> User:
    return user


@router.post("/logout", response_model=MessageOut)
def logout(response: Response):
    """
    Expire the session cookie client-side. Tokens already issued are not revoked.
    """
    clear_session_cookie(response)
    return {"message": "success"}
