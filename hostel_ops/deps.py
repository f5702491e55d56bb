from typing import Annotated
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hostel_ops.infrastructure import get_session
from hostel_ops.state import AppState


def get_state(request: Request) -> AppState:
    """The application-wide collection mirrors, created with the app"""
    return request.app.state.store


# Type aliases for dependency injection
SessionDep = Annotated[AsyncSession, Depends(get_session)]
StateDep = Annotated[AppState, Depends(get_state)]
