from typing import List, Optional
from .base import CamelModel


class LoginRequest(CamelModel):
    """Schema for login request"""
    username: str
    password: str


class LoginResponse(CamelModel):
    """Schema for login response"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: dict
    views: List[str]


class RefreshTokenRequest(CamelModel):
    """Schema for refresh token request"""
    refresh_token: str


class RefreshTokenResponse(CamelModel):
    """Schema for refresh token response"""
    access_token: str
    token_type: str = "bearer"


class SessionOut(CamelModel):
    """Current user with the dashboard views their role may open"""
    user: dict
    views: List[str]
    default_view: Optional[str] = None
