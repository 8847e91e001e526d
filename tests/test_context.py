"""Tests for execution context resolution."""

import logging

import pytest

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.services.context import resolve_context
from nutrition_assistant.tools.errors import InvalidToolContextError


def test_resolve_context_reads_camel_case_mapping() -> None:
    ctx = resolve_context({"userId": " user-1 ", "timezone": "America/New_York"})

    assert ctx == ExecutionContext(user_id="user-1", timezone="America/New_York")


def test_resolve_context_accepts_snake_case_key() -> None:
    ctx = resolve_context({"user_id": "user-1"})

    assert ctx.user_id == "user-1"
    assert ctx.timezone == "UTC"


def test_resolve_context_passes_through_resolved_context() -> None:
    resolved = ExecutionContext(user_id="user-1", timezone="Europe/Berlin")

    assert resolve_context(resolved) == resolved


@pytest.mark.parametrize(
    "raw", [None, {}, {"userId": ""}, {"userId": "   "}, {"userId": 42}]
)
def test_resolve_context_rejects_missing_identity(raw) -> None:
    with pytest.raises(InvalidToolContextError, match="missing userId"):
        resolve_context(raw)


def test_resolve_context_falls_back_on_unknown_timezone(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("nutrition_assistant"), "propagate", True)
    with caplog.at_level(logging.WARNING):
        ctx = resolve_context(
            {"userId": "user-1", "timezone": "Mars/Olympus_Mons"},
            default_timezone="Europe/London",
        )

    assert ctx.timezone == "Europe/London"
    assert "Mars/Olympus_Mons" in caplog.text
