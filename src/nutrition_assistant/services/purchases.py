"""Coordinator for moving bought shopping items into the pantry."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.pantry import NewItem, PantryItem
from nutrition_assistant.domain.shopping import ShoppingListItem
from nutrition_assistant.services.normalize import parse_uuid

logger = logging.getLogger(__name__)


class PurchasedItemsRepository(Protocol):
    """The shopping list store as seen by the coordinator."""

    def find_items_by_ids(
        self, user_id: str, item_ids: list[UUID]
    ) -> list[ShoppingListItem]:
        """Return the items among ids that sit on lists the user owns."""

    def mark_checked(self, user_id: str, item_id: UUID) -> ShoppingListItem | None:
        """Flag an owned item as checked and return it."""


class PantryWriter(Protocol):
    """The pantry store as seen by the coordinator."""

    def create_item(self, user_id: str, item: NewItem) -> PantryItem:
        """Create a pantry item and return it."""


@dataclass
class PurchaseStep:
    """What happened to one bought item."""

    item: ShoppingListItem
    checked: bool = False
    pantry_item: PantryItem | None = None


@dataclass
class PurchaseOutcome:
    """Accumulated result of a mark-bought run."""

    steps: list[PurchaseStep] = field(default_factory=list)
    requested: int = 0
    error: str | None = None

    @property
    def marked_bought(self) -> int:
        return sum(1 for step in self.steps if step.checked)

    @property
    def added_to_pantry(self) -> int:
        return sum(1 for step in self.steps if step.pantry_item is not None)

    @property
    def incomplete(self) -> bool:
        return self.error is not None


@dataclass
class PurchaseCoordinator:
    """Checks off owned list items and stocks the pantry, item by item.

    Each item is first marked checked, then copied into the pantry. When the
    store fails part-way the run stops and the outcome records exactly which
    steps took effect, so a partial purchase is always reported.
    """

    shopping_repository: PurchasedItemsRepository
    pantry_repository: PantryWriter

    def mark_bought(
        self,
        ctx: ExecutionContext,
        item_ids: list[str],
        add_to_pantry: bool = True,
    ) -> PurchaseOutcome:
        """Mark the owned subset of ``item_ids`` bought."""
        parsed = [item_id for item_id in map(parse_uuid, item_ids) if item_id]
        outcome = PurchaseOutcome(requested=len(item_ids))
        if not parsed:
            return outcome

        owned = self.shopping_repository.find_items_by_ids(
            ctx.user_id, list(dict.fromkeys(parsed))
        )
        for item in owned:
            step = PurchaseStep(item=item)
            outcome.steps.append(step)
            try:
                self._apply(ctx, step, add_to_pantry)
            except Exception as exc:
                logger.exception(
                    "mark_bought stopped at item %s for user %s", item.id, ctx.user_id
                )
                outcome.error = f"Stopped at {item.name!r}: {exc}"
                break
        return outcome

    def _apply(
        self, ctx: ExecutionContext, step: PurchaseStep, add_to_pantry: bool
    ) -> None:
        checked = self.shopping_repository.mark_checked(ctx.user_id, step.item.id)
        if checked is None:
            return
        step.checked = True
        if not add_to_pantry:
            return
        step.pantry_item = self.pantry_repository.create_item(
            ctx.user_id,
            NewItem(
                name=step.item.name,
                category=step.item.category,
                quantity=step.item.quantity,
                unit=step.item.unit,
            ),
        )
