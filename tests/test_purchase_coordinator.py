"""Tests for the mark-bought coordinator."""

from dataclasses import dataclass

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.pantry import NewItem, PantryItem
from nutrition_assistant.services.audit import AuditService
from nutrition_assistant.services.purchases import PurchaseCoordinator
from nutrition_assistant.services.shopping import ShoppingListOperations
from nutrition_assistant.tools.models import MarkBought
from tests.conftest import (
    USER_ID,
    InMemoryAuditRepository,
    InMemoryPantryRepository,
    InMemoryShoppingListRepository,
)


@dataclass
class FlakyPantryRepository(InMemoryPantryRepository):
    """Pantry that fails once a number of items were written."""

    fail_after: int = 1

    def create_item(self, user_id: str, item: NewItem) -> PantryItem:
        if len(self.items) >= self.fail_after:
            raise RuntimeError("connection reset")
        return super().create_item(user_id, item)


def _stocked_list(
    repository: InMemoryShoppingListRepository, *names: str
) -> list[str]:
    entry = repository.create_list(USER_ID, "Shopping List")
    created = repository.create_items(entry.id, [NewItem(name) for name in names])
    return [str(item.id) for item in created]


def test_coordinator_checks_and_stocks_each_item(ctx: ExecutionContext) -> None:
    shopping = InMemoryShoppingListRepository()
    pantry = InMemoryPantryRepository()
    ids = _stocked_list(shopping, "Rice", "Beans")

    outcome = PurchaseCoordinator(shopping, pantry).mark_bought(ctx, ids)

    assert outcome.marked_bought == 2
    assert outcome.added_to_pantry == 2
    assert outcome.requested == 2
    assert not outcome.incomplete
    assert all(item.checked for item in shopping.items.values())


def test_coordinator_without_pantry_only_checks(ctx: ExecutionContext) -> None:
    shopping = InMemoryShoppingListRepository()
    pantry = InMemoryPantryRepository()
    ids = _stocked_list(shopping, "Rice")

    outcome = PurchaseCoordinator(shopping, pantry).mark_bought(
        ctx, ids, add_to_pantry=False
    )

    assert outcome.marked_bought == 1
    assert outcome.added_to_pantry == 0
    assert pantry.items == {}


def test_coordinator_ignores_repeated_ids(ctx: ExecutionContext) -> None:
    shopping = InMemoryShoppingListRepository()
    pantry = InMemoryPantryRepository()
    (item_id,) = _stocked_list(shopping, "Rice")

    outcome = PurchaseCoordinator(shopping, pantry).mark_bought(
        ctx, [item_id, item_id]
    )

    assert outcome.marked_bought == 1
    assert len(pantry.items) == 1


def test_coordinator_reports_partial_progress_on_failure(ctx: ExecutionContext) -> None:
    shopping = InMemoryShoppingListRepository()
    pantry = FlakyPantryRepository(fail_after=1)
    ids = _stocked_list(shopping, "Rice", "Beans", "Corn")

    outcome = PurchaseCoordinator(shopping, pantry).mark_bought(ctx, ids)

    assert outcome.incomplete
    assert outcome.marked_bought == 2
    assert outcome.added_to_pantry == 1
    assert "connection reset" in (outcome.error or "")
    assert [item.checked for item in shopping.items.values()] == [True, True, False]


def test_mark_bought_result_flags_incomplete_run(ctx: ExecutionContext) -> None:
    shopping = InMemoryShoppingListRepository()
    pantry = FlakyPantryRepository(fail_after=1)
    ids = _stocked_list(shopping, "Rice", "Beans")
    operations = ShoppingListOperations(
        repository=shopping,
        purchases=PurchaseCoordinator(shopping, pantry),
        audit_service=AuditService(InMemoryAuditRepository()),
    )

    result = operations.handle(ctx, MarkBought(operation="mark_bought", item_ids=ids))

    assert result["success"] is True
    assert result["incomplete"] is True
    assert result["requested"] == 2
    assert result["markedBought"] == 2
    assert result["addedToPantry"] == 1
    assert [item["addedToPantry"] for item in result["items"]] == [True, False]
    assert result["error"].startswith("Stopped at 'Beans'")
