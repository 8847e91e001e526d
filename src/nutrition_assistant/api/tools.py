"""Tool endpoints for the assistant's orchestration loop."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from nutrition_assistant.api.dependencies import (
    get_container,
    get_execution_context,
    require_service_token,
)
from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.tools.errors import UnknownToolError

router = APIRouter(
    prefix="/tools", tags=["tools"], dependencies=[Depends(require_service_token)]
)


@router.get("")
async def list_tools(request: Request) -> dict[str, object]:
    """Return every tool definition in function-calling form."""
    registry = get_container(request).tool_registry
    return {"tools": [spec.describe() for spec in registry.list_specs()]}


@router.post("/{name}")
def execute_tool(
    name: str,
    request: Request,
    args: Any = Body(default=None),  # noqa: ANN401
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Run one tool call on behalf of the user named in the headers."""
    registry = get_container(request).tool_registry
    try:
        return registry.execute(name, {} if args is None else args, ctx)
    except UnknownToolError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
