# admin_auth/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JOSEError, JWTError, jwt
from passlib import exc as passlib_exc
from passlib.context import CryptContext

DEFAULT_BCRYPT_ROUNDS = 14
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


# -------------------------
# Errors
# -------------------------
class PasswordHashError(Exception):
    pass


class HashingError(PasswordHashError):
    """The hash primitive rejected the plaintext (e.g. over bcrypt's 72-byte limit)."""


class VerificationError(PasswordHashError):
    """The stored digest is malformed or of an unknown scheme."""


class TokenError(Exception):
    pass


class SigningError(TokenError):
    pass


class InvalidTokenError(TokenError):
    pass


class ExpiredTokenError(InvalidTokenError):
    pass


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


# -------------------------
# Password hashing
# -------------------------
class PasswordHasher:
    """
    bcrypt via passlib with a fixed work factor.

    Secrets longer than bcrypt accepts are rejected rather than truncated.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__truncate_error=True,
        )

    def hash(self, plaintext: str) -> str:
        if not isinstance(plaintext, str):
            raise HashingError("password must be a string")
        try:
            return self._context.hash(plaintext)
        except (ValueError, TypeError) as e:
            raise HashingError(str(e)) from e

    def verify(self, digest: str, plaintext: str) -> bool:
        if not digest or not isinstance(digest, (str, bytes)):
            raise VerificationError("empty or non-text digest")
        try:
            return self._context.verify(plaintext, digest)
        except passlib_exc.PasswordValueError:
            # Over-long or NUL-containing secrets can never have been hashed.
            return False
        except (ValueError, TypeError) as e:
            raise VerificationError(str(e)) from e


# -------------------------
# JWT session tokens
# -------------------------
class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("token secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def expires_at(self) -> datetime:
        return _now_utc() + self.lifetime

    def issue(self, subject: str) -> str:
        """
        Signed token for `subject` (the stringified user id), valid for `lifetime`.
        """
        now = _now_utc()
        payload = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + self.lifetime).timestamp()),
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except (JOSEError, ValueError, TypeError) as e:
            raise SigningError(str(e)) from e

    def parse(self, token: str) -> str:
        """
        Returns the subject claim. Raises ExpiredTokenError or InvalidTokenError.
        """
        if not token:
            raise InvalidTokenError("empty token")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError("token expired") from e
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        sub = payload.get("sub")
        if not sub or not str(sub).strip():
            raise InvalidTokenError("token missing 'sub'")
        return str(sub).strip()
