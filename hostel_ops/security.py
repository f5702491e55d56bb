from __future__ import annotations

import time
from typing import Annotated, Callable, Iterable

from fastapi import Depends, Request
from jose import JWTError, jwt

from .core import AuthenticationError, AuthorizationError, get_settings
from .roles import Role, View, allowed_views, can_view

# ---------------------------------------------------------------------------
#  Basic JWT helpers
# ---------------------------------------------------------------------------
settings = get_settings()

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM

# Short-lived access token and longer refresh token
ACCESS_TOKEN_EXP_SECONDS: int = settings.ACCESS_TOKEN_EXPIRE_SECONDS
REFRESH_TOKEN_EXP_SECONDS: int = settings.REFRESH_TOKEN_EXPIRE_SECONDS


def _now() -> int:
    return int(time.time())


def create_token(
    sub: str,
    role: str,
    *,
    expires_in: int = ACCESS_TOKEN_EXP_SECONDS,
    **extra_claims,
) -> str:
    """Return a signed JWT including any *extra_claims*.

    Standard claims:
    * sub  - user identifier
    * role - user role string
    * exp  - expiry (unix epoch)

    The dashboard also embeds ``username``, ``views`` and ``typ``
    (access / refresh).
    """
    payload = {
        "sub": str(sub),
        "role": role,
        "exp": _now() + expires_in,
    }
    payload.update(extra_claims)
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Verify *token* and return its payload."""
    try:
        payload: dict = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError("Invalid token") from exc
    return payload


def mint_tokens(sub: str, role: str, **extra_claims) -> tuple[str, str]:
    """Return *(access, refresh)* pair embedding *extra_claims* in both."""
    views = sorted(v.value for v in allowed_views(role))
    access = create_token(
        sub,
        role,
        expires_in=ACCESS_TOKEN_EXP_SECONDS,
        typ="access",
        views=views,
        **extra_claims,
    )
    refresh = create_token(
        sub,
        role,
        expires_in=REFRESH_TOKEN_EXP_SECONDS,
        typ="refresh",
        views=views,
        **extra_claims,
    )
    return access, refresh


# ---------------------------------------------------------------------------
#  Dependencies
# ---------------------------------------------------------------------------
async def _extract_token(req: Request) -> str | None:
    """Return JWT from Authorization header *or* the access_token cookie."""
    auth: str | None = req.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1]
    return req.cookies.get("access_token")


async def current_user(req: Request) -> dict:
    """FastAPI dependency returning the JWT payload or raises 401."""
    token = await _extract_token(req)
    if not token:
        raise AuthenticationError("Missing credentials")
    payload = decode_token(token)
    if payload.get("typ") == "refresh":
        raise AuthenticationError("Refresh token cannot be used here")
    return payload


CurrentUser = Annotated[dict, Depends(current_user)]


def _to_role_str(value: "str | Role") -> str:
    if isinstance(value, Role):
        return value.value
    return str(value)


def role_required(*allowed: "str | Role | Iterable[str | Role]") -> Callable[[dict], dict]:
    """Return a dependency that checks *current_user* role is within *allowed*.

    Usage:
        @router.delete("/{id}", dependencies=[Depends(role_required(Role.admin))])
    """
    if len(allowed) == 1 and isinstance(allowed[0], (list, tuple, set)):
        allowed = tuple(allowed[0])
    allowed_set = {_to_role_str(a) for a in allowed}

    async def _dep(user: CurrentUser):
        if user.get("role") not in allowed_set:
            raise AuthorizationError("Forbidden")
        return user

    return _dep


def view_required(*views: View) -> Callable[[dict], dict]:
    """Dependency passing when the caller's role may open any of *views*."""

    async def _dep(user: CurrentUser):
        if not any(can_view(user.get("role", ""), view) for view in views):
            raise AuthorizationError("Forbidden")
        return user

    return _dep
