"""Weight and water read endpoints for the client's tracking views."""

import datetime as dt

from fastapi import APIRouter, Depends, Query, Request

from nutrition_assistant.api.dependencies import (
    get_container,
    get_execution_context,
    require_service_token,
)
from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.services.tracking import (
    WEIGHT_HISTORY_LIMIT,
    water_payload,
    weight_payload,
)

router = APIRouter(
    prefix="/tracking",
    tags=["tracking"],
    dependencies=[Depends(require_service_token)],
)


@router.get("/water/{day}")
def water_for_date(
    day: dt.date,
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Return the day's water total, or null when nothing was logged."""
    entry = get_container(request).tracking_operations.water_for_date(ctx, day)
    return {"water": water_payload(entry) if entry else None}


@router.get("/weight")
def weight_history(
    request: Request,
    limit: int = Query(default=WEIGHT_HISTORY_LIMIT, ge=1, le=365),
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    """Return recent weight entries, newest first."""
    entries = get_container(request).tracking_operations.weight_history(ctx, limit)
    return {"entries": [weight_payload(entry) for entry in entries]}


@router.get("/weight/latest")
def latest_weight(
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    entry = get_container(request).tracking_operations.latest_weight(ctx)
    return {"weight": weight_payload(entry) if entry else None}


@router.get("/weight/{day}")
def weight_for_date(
    day: dt.date,
    request: Request,
    ctx: ExecutionContext = Depends(get_execution_context),
) -> dict[str, object]:
    entry = get_container(request).tracking_operations.weight_for_date(ctx, day)
    return {"weight": weight_payload(entry) if entry else None}
