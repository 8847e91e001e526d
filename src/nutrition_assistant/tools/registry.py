"""Registry mapping tool names to argument schemas and handlers."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter, ValidationError

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.services.context import resolve_context
from nutrition_assistant.tools.errors import UnknownToolError
from nutrition_assistant.tools.results import ToolResult, failure

logger = logging.getLogger(__name__)

ToolHandler = Callable[[ExecutionContext, Any], ToolResult]


@dataclass(frozen=True)
class ToolSpec:
    """A tool as described to the calling model."""

    name: str
    description: str
    arguments: TypeAdapter[Any]

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON schema of the argument object, keyed by camelCase names."""
        return self.arguments.json_schema(by_alias=True)

    def describe(self) -> dict[str, Any]:
        """Return a function-calling style definition."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


@dataclass
class ToolRegistry:
    """Validates tool calls and routes them to their handlers."""

    default_timezone: str = "UTC"
    _specs: dict[str, ToolSpec] = field(default_factory=dict)
    _handlers: dict[str, ToolHandler] = field(default_factory=dict)

    def register(self, spec: ToolSpec, handler: ToolHandler) -> None:
        """Add a tool; names must be unique."""
        if spec.name in self._specs:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._specs[spec.name] = spec
        self._handlers[spec.name] = handler

    def list_specs(self) -> list[ToolSpec]:
        """Return registered tools sorted by name."""
        return sorted(self._specs.values(), key=lambda spec: spec.name)

    def get_spec(self, name: str) -> ToolSpec | None:
        """Return a tool spec by name."""
        return self._specs.get(name)

    def execute(
        self,
        name: str,
        args: object,
        context: ExecutionContext | Mapping[str, object] | None,
    ) -> ToolResult:
        """Run a tool call and return its structured result.

        A missing user identity raises before anything else runs. Invalid
        arguments come back as a failed result naming the offending field;
        store errors propagate to the caller.
        """
        spec = self._specs.get(name)
        handler = self._handlers.get(name)
        if spec is None or handler is None:
            raise UnknownToolError(f"Unknown tool: {name}")

        ctx = resolve_context(context, self.default_timezone)
        if not isinstance(args, Mapping):
            return failure("Tool arguments must be a JSON object")

        operation = args.get("operation")
        try:
            decoded = spec.arguments.validate_python(dict(args))
        except ValidationError as exc:
            message = describe_validation_error(exc, operation)
            logger.info(
                "Rejected %s call for user %s: %s", name, ctx.user_id, message
            )
            return failure(message)

        result = handler(ctx, decoded)
        logger.info(
            "Tool %s operation=%s user=%s success=%s",
            name,
            operation,
            ctx.user_id,
            result.get("success"),
        )
        return result


def describe_validation_error(exc: ValidationError, operation: object) -> str:
    """Turn the first validation error into a message naming the field."""
    error = exc.errors()[0]
    loc = [str(part) for part in error["loc"]]
    if loc and isinstance(operation, str) and loc[0] == operation:
        loc = loc[1:]
    field_name = ".".join(loc)
    error_type = error["type"]

    if error_type in {"union_tag_not_found", "union_tag_invalid"}:
        expected = error.get("ctx", {}).get("expected_tags")
        if expected:
            return f"operation must be one of: {expected}"
        return "operation is required"
    if error_type == "missing":
        suffix = f" for {operation}" if isinstance(operation, str) else ""
        return f"{field_name} is required{suffix}"
    if error_type == "value_error":
        return str(error.get("ctx", {}).get("error", error["msg"]))
    if field_name:
        return f"Invalid {field_name}: {error['msg']}"
    return str(error["msg"])
