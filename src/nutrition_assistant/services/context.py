"""Resolution of the caller-supplied execution context."""

import logging
from collections.abc import Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.tools.errors import InvalidToolContextError

logger = logging.getLogger(__name__)


def resolve_context(
    raw: ExecutionContext | Mapping[str, object] | None,
    default_timezone: str = "UTC",
) -> ExecutionContext:
    """Extract the acting user and timezone, failing closed without a user.

    Accepts either a resolved context or the loose mapping the orchestration
    loop passes along (``userId``/``user_id`` and ``timezone`` keys).
    """
    if isinstance(raw, ExecutionContext):
        user_id: object = raw.user_id
        timezone: object = raw.timezone
    elif isinstance(raw, Mapping):
        user_id = raw.get("userId") or raw.get("user_id")
        timezone = raw.get("timezone")
    else:
        user_id = None
        timezone = None

    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidToolContextError(
            "Invalid tool execution context: missing userId"
        )
    return ExecutionContext(
        user_id=user_id.strip(),
        timezone=_resolve_timezone(timezone, default_timezone),
    )


def _resolve_timezone(value: object, default_timezone: str) -> str:
    if not isinstance(value, str) or not value.strip():
        return default_timezone
    name = value.strip()
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using %s", name, default_timezone)
        return default_timezone
    return name
