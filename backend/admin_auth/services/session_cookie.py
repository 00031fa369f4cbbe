from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import Request, Response

from admin_auth.core.config import settings

CLEARED_COOKIE_AGE = timedelta(hours=1)


# -----------------------------
# Cookie helpers
# -----------------------------
def cookie_name() -> str:
    return str(getattr(settings, "SESSION_COOKIE_NAME", "jwt")).strip() or "jwt"


def cookie_secure() -> bool:
    # Prod => HTTPS => Secure cookies. Dev http://localhost => must be False.
    return settings.is_prod


def cookie_samesite() -> str:
    """
    "lax" for same-site dev
    "none" ONLY if you truly need cross-site cookies (requires HTTPS + Secure=True)
    """
    v = str(getattr(settings, "SESSION_COOKIE_SAMESITE", "lax")).lower().strip()
    if v not in {"lax", "strict", "none"}:
        return "lax"
    return v


def set_session_cookie(resp: Response, token: str, expires: datetime) -> None:
    resp.set_cookie(
        key=cookie_name(),
        value=token,
        expires=expires,
        httponly=True,
        secure=cookie_secure(),
        samesite=cookie_samesite(),
        path="/",
    )


def clear_session_cookie(resp: Response) -> None:
    """
    Overwrite the session cookie with an empty value that expired an hour ago,
    so the browser drops it. Already-issued tokens stay valid until their own exp.
    """
    resp.set_cookie(
        key=cookie_name(),
        value="",
        expires=datetime.now(timezone.utc) - CLEARED_COOKIE_AGE,
        httponly=True,
        secure=cookie_secure(),
        samesite=cookie_samesite(),
        path="/",
    )


def read_session_cookie(req: Request) -> str | None:
    val = req.cookies.get(cookie_name())
    if not val:
        return None
    val = val.strip()
    return val or None
