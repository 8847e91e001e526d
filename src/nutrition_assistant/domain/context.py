"""Execution context passed to every tool invocation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionContext:
    """Identity and locale of the user a tool call acts for."""

    user_id: str
    timezone: str
