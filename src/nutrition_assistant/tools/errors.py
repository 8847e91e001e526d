"""Exceptions raised at the tool boundary."""


class ToolError(Exception):
    """Base error for tool invocation problems outside a handler."""


class UnknownToolError(ToolError):
    """Raised when a tool name is not registered."""


class InvalidToolContextError(ToolError):
    """Raised when the execution context carries no user identity."""
