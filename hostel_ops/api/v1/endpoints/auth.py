from typing import Optional

from fastapi import APIRouter, Cookie, Request, Response

from hostel_ops.api.v1.middleware import limiter
from hostel_ops.api.v1.schemas.auth_schemas import (
    LoginRequest, LoginResponse, RefreshTokenRequest, RefreshTokenResponse, SessionOut
)
from hostel_ops.core import AuthenticationError, get_settings
from hostel_ops.deps import SessionDep
from hostel_ops.roles import View, allowed_views
from hostel_ops.security import ACCESS_TOKEN_EXP_SECONDS, REFRESH_TOKEN_EXP_SECONDS, CurrentUser
from hostel_ops.services import AuthService


router = APIRouter()
settings = get_settings()


def _views(role: str) -> list:
    """Allowed views in sidebar order"""
    allowed = allowed_views(role)
    return [view.value for view in View if view in allowed]


def _set_cookie(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        httponly=True,
        secure=True,
        samesite="lax",
        max_age=max_age
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    response: Response,
    sess: SessionDep
):
    """Login with username and password"""
    service = AuthService(sess)

    user, access_token, refresh_token = await service.authenticate_user(
        username=payload.username,
        password=payload.password
    )

    # Cookies for the browser dashboard; API clients use the returned tokens
    _set_cookie(response, "access_token", access_token, ACCESS_TOKEN_EXP_SECONDS)
    _set_cookie(response, "refresh_token", refresh_token, REFRESH_TOKEN_EXP_SECONDS)

    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=user,
        views=_views(user["role"]),
    )


@router.post("/refresh", response_model=RefreshTokenResponse)
async def refresh_token(
    response: Response,
    sess: SessionDep,
    refresh_token: Optional[str] = Cookie(None),
    payload: Optional[RefreshTokenRequest] = None
):
    """New access token from the refresh token in the body or cookie"""
    token = payload.refresh_token if payload and payload.refresh_token else refresh_token
    if not token:
        raise AuthenticationError("Missing refresh token")

    access_token = await AuthService(sess).refresh_access_token(token)
    _set_cookie(response, "access_token", access_token, ACCESS_TOKEN_EXP_SECONDS)
    return RefreshTokenResponse(access_token=access_token)


@router.post("/logout")
async def logout(response: Response):
    """Logout (clear auth cookies)"""
    response.delete_cookie(key="access_token", secure=True, httponly=True, samesite="lax")
    response.delete_cookie(key="refresh_token", secure=True, httponly=True, samesite="lax")
    return {"message": "Logged out"}


@router.get("/me", response_model=SessionOut)
async def get_current_user(sess: SessionDep, user: CurrentUser):
    """Restore the session: current user and the views they may open"""
    record = await AuthService(sess).get_current_user(user["sub"])
    views = _views(record["role"])
    return SessionOut(user=record, views=views, default_view=views[0] if views else None)
