"""Request dependencies shared by the API routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

from nutrition_assistant.domain.context import ExecutionContext  # noqa: TC001
from nutrition_assistant.services.context import resolve_context
from nutrition_assistant.tools.errors import InvalidToolContextError

if TYPE_CHECKING:
    from nutrition_assistant.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def _get_service_token(request: Request) -> str:
    return get_container(request).settings.service_token


async def require_service_token(
    x_service_token: str | None = Header(default=None),
    service_token: str = Depends(_get_service_token),
) -> None:
    """Ensure requests include the shared service token."""
    if not x_service_token or x_service_token != service_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


async def get_execution_context(
    request: Request,
    x_user_id: str | None = Header(default=None),
    x_timezone: str | None = Header(default=None),
) -> ExecutionContext:
    """Build the acting user's context from request headers."""
    try:
        return resolve_context(
            {"userId": x_user_id, "timezone": x_timezone},
            get_container(request).settings.default_timezone,
        )
    except InvalidToolContextError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
