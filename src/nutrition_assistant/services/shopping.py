"""Shopping list operations exposed to the assistant."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_assistant.config import DEFAULT_SHOPPING_LIST_NAME
from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.pantry import NewItem
from nutrition_assistant.domain.shopping import ShoppingList, ShoppingListItem
from nutrition_assistant.services.audit import AuditService
from nutrition_assistant.services.normalize import clean_text, contains, parse_uuid
from nutrition_assistant.services.purchases import PurchaseCoordinator
from nutrition_assistant.tools.models import (
    AddItems,
    CreateList,
    DeleteList,
    MarkBought,
    RemoveItems,
    RenameList,
    ShoppingListArgs,
    ShoppingQuery,
)
from nutrition_assistant.tools.results import ToolResult, failure, success

LIST_NOT_FOUND = "List not found"


class ShoppingListRepository(Protocol):
    """Persistence interface for shopping lists and their items."""

    def list_lists(self, user_id: str) -> list[ShoppingList]:
        """Return the user's lists, most recently updated first."""

    def get_list_by_name(self, user_id: str, name: str) -> ShoppingList | None:
        """Return the user's list with exactly this name."""

    def create_list(self, user_id: str, name: str) -> ShoppingList:
        """Create a list and return it."""

    def rename_list(
        self, user_id: str, list_id: UUID, name: str
    ) -> ShoppingList | None:
        """Rename an owned list and return it."""

    def delete_list(self, user_id: str, list_id: UUID) -> ShoppingList | None:
        """Delete an owned list together with its items."""

    def touch_list(self, user_id: str, list_id: UUID) -> None:
        """Refresh the updated timestamp of an owned list."""

    def list_items(
        self, user_id: str, list_id: UUID | None = None
    ) -> list[ShoppingListItem]:
        """Return items on the user's lists, optionally one list only."""

    def create_items(
        self, list_id: UUID, items: list[NewItem]
    ) -> list[ShoppingListItem]:
        """Insert items onto a list in one batch; the list must be owned."""

    def find_items_by_ids(
        self, user_id: str, item_ids: list[UUID]
    ) -> list[ShoppingListItem]:
        """Return the items among ids that sit on lists the user owns."""

    def delete_items(self, user_id: str, item_ids: list[UUID]) -> None:
        """Delete owned items by id."""

    def mark_checked(self, user_id: str, item_id: UUID) -> ShoppingListItem | None:
        """Flag an owned item as checked and return it."""


@dataclass
class ShoppingListOperations:
    """Dispatcher for the ``shopping_list`` tool group."""

    repository: ShoppingListRepository
    purchases: PurchaseCoordinator
    audit_service: AuditService
    default_list_name: str = DEFAULT_SHOPPING_LIST_NAME

    def handle(  # noqa: PLR0911
        self, ctx: ExecutionContext, args: ShoppingListArgs
    ) -> ToolResult:
        """Run the shopping list operation selected by the argument variant."""
        if isinstance(args, ShoppingQuery):
            return self._query(ctx, args)
        if isinstance(args, CreateList):
            return self._create_list(ctx, args)
        if isinstance(args, RenameList):
            return self._rename_list(ctx, args)
        if isinstance(args, DeleteList):
            return self._delete_list(ctx, args)
        if isinstance(args, AddItems):
            return self._add_items(ctx, args)
        if isinstance(args, RemoveItems):
            return self._remove_items(ctx, args)
        return self._mark_bought(ctx, args)

    def _query(self, ctx: ExecutionContext, args: ShoppingQuery) -> ToolResult:
        lists = self.repository.list_lists(ctx.user_id)
        if args.list_name:
            name_filter = args.list_name
            lists = [entry for entry in lists if contains(entry.name, name_filter)]

        items_by_list: dict[UUID, list[ShoppingListItem]] = {}
        for item in self.repository.list_items(ctx.user_id):
            items_by_list.setdefault(item.list_id, []).append(item)

        payload = []
        for entry in lists:
            items = _display_order(items_by_list.get(entry.id, []))
            payload.append(
                {
                    "id": str(entry.id),
                    "name": entry.name,
                    "itemCount": len(items),
                    "checkedCount": sum(1 for item in items if item.checked),
                    "items": [item_payload(item) for item in items],
                }
            )
        return success("query", totalLists=len(payload), lists=payload)

    def _create_list(self, ctx: ExecutionContext, args: CreateList) -> ToolResult:
        created = self.repository.create_list(ctx.user_id, args.list_name or "")
        return success("create_list", created=_list_payload(created))

    def _rename_list(self, ctx: ExecutionContext, args: RenameList) -> ToolResult:
        list_id = parse_uuid(args.list_id)
        updated = (
            self.repository.rename_list(ctx.user_id, list_id, args.list_name or "")
            if list_id
            else None
        )
        if updated is None:
            return failure(LIST_NOT_FOUND)
        return success("rename_list", updated=_list_payload(updated))

    def _delete_list(self, ctx: ExecutionContext, args: DeleteList) -> ToolResult:
        list_id = parse_uuid(args.list_id)
        if list_id is None:
            return failure(LIST_NOT_FOUND)
        items = self.repository.list_items(ctx.user_id, list_id)
        deleted = self.repository.delete_list(ctx.user_id, list_id)
        if deleted is None:
            return failure(LIST_NOT_FOUND)
        self.audit_service.record_event(
            user_id=ctx.user_id,
            entity_type="shopping_list",
            entity_id=deleted.id,
            event_type="delete",
            before={
                **_list_payload(deleted),
                "items": [item_payload(item) for item in items],
            },
            after=None,
        )
        return success(
            "delete_list",
            deleted={**_list_payload(deleted), "itemCount": len(items)},
        )

    def _add_items(self, ctx: ExecutionContext, args: AddItems) -> ToolResult:
        target_name = clean_text(args.list_name) or self.default_list_name
        target = self.repository.get_list_by_name(ctx.user_id, target_name)
        if target is None:
            target = self.repository.create_list(ctx.user_id, target_name)

        created = self.repository.create_items(
            target.id,
            [
                NewItem(
                    name=item.name,
                    category=item.category,
                    quantity=item.quantity,
                    unit=clean_text(item.unit),
                )
                for item in args.items or []
            ],
        )
        self.repository.touch_list(ctx.user_id, target.id)
        return success(
            "add_items",
            listName=target.name,
            addedCount=len(created),
            items=[item_payload(item) for item in created],
        )

    def _remove_items(self, ctx: ExecutionContext, args: RemoveItems) -> ToolResult:
        matches: dict[UUID, ShoppingListItem] = {}

        ids = [item_id for item_id in map(parse_uuid, args.item_ids or []) if item_id]
        if ids:
            for item in self.repository.find_items_by_ids(ctx.user_id, ids):
                matches[item.id] = item

        names = [name for name in (args.item_names or []) if name.strip()]
        if names:
            scope = None
            if args.list_name:
                scope = self.repository.get_list_by_name(ctx.user_id, args.list_name)
            if scope is not None or not args.list_name:
                candidates = self.repository.list_items(
                    ctx.user_id, scope.id if scope else None
                )
                for item in candidates:
                    if any(contains(item.name, name) for name in names):
                        matches.setdefault(item.id, item)

        if matches:
            self.repository.delete_items(ctx.user_id, list(matches))
        removed = [{"id": str(item.id), "name": item.name} for item in matches.values()]
        return success("remove_items", removedCount=len(removed), removed=removed)

    def _mark_bought(self, ctx: ExecutionContext, args: MarkBought) -> ToolResult:
        outcome = self.purchases.mark_bought(
            ctx, args.item_ids or [], add_to_pantry=args.add_to_pantry is not False
        )
        if not outcome.steps:
            return failure("No valid items found")

        result = success(
            "mark_bought",
            requested=outcome.requested,
            markedBought=outcome.marked_bought,
            addedToPantry=outcome.added_to_pantry,
            items=[
                {
                    "id": str(step.item.id),
                    "name": step.item.name,
                    "addedToPantry": step.pantry_item is not None,
                }
                for step in outcome.steps
                if step.checked
            ],
        )
        if outcome.incomplete:
            result["incomplete"] = True
            result["error"] = outcome.error
        return result


def item_payload(item: ShoppingListItem) -> dict[str, object]:
    """Serialize a shopping list item for tool results."""
    return {
        "id": str(item.id),
        "name": item.name,
        "category": str(item.category) if item.category else None,
        "quantity": item.quantity,
        "unit": item.unit,
        "checked": item.checked,
    }


def _list_payload(entry: ShoppingList) -> dict[str, object]:
    return {"id": str(entry.id), "name": entry.name}


def _display_order(items: list[ShoppingListItem]) -> list[ShoppingListItem]:
    newest_first = sorted(items, key=lambda item: item.created_at, reverse=True)
    return sorted(newest_first, key=lambda item: item.checked)
