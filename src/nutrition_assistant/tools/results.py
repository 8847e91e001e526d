"""Builders for the JSON result contract shared by all tools."""

from typing import Any

ToolResult = dict[str, Any]


def success(operation: str, **fields: Any) -> ToolResult:
    """Return a successful result echoing the operation branch."""
    return {"success": True, "operation": operation, **fields}


def failure(error: str) -> ToolResult:
    """Return a failed result with a message the model can relay."""
    return {"success": False, "error": error}
