"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from nutrition_assistant.config import Settings
from nutrition_assistant.containers import AppContainer
from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.meals import MealEntry, NewMeal
from nutrition_assistant.domain.pantry import NewItem, PantryItem
from nutrition_assistant.domain.preferences import Preference, PreferenceCategory
from nutrition_assistant.domain.recipes import NewRecipe, Recipe
from nutrition_assistant.domain.shopping import ShoppingList, ShoppingListItem
from nutrition_assistant.domain.tracking import BodyMetricLog, MetricKind, Profile
from nutrition_assistant.services.audit import AuditRepository, AuditService
from nutrition_assistant.services.meals import MealOperations, MealRepository
from nutrition_assistant.services.normalize import contains
from nutrition_assistant.services.pantry import PantryOperations, PantryRepository
from nutrition_assistant.services.preferences import (
    PreferenceOperations,
    PreferenceRepository,
)
from nutrition_assistant.services.profiles import ProfileRepository, ProfileService
from nutrition_assistant.services.purchases import PurchaseCoordinator
from nutrition_assistant.services.recipes import RecipeRepository, RecipeService
from nutrition_assistant.services.shopping import (
    ShoppingListOperations,
    ShoppingListRepository,
)
from nutrition_assistant.services.tracking import (
    BodyMetricRepository,
    TrackingOperations,
)
from nutrition_assistant.tools.catalog import build_tool_registry
from nutrition_assistant.tools.registry import ToolRegistry

USER_ID = "user-1"
OTHER_USER_ID = "user-2"

# Shaped like a Supabase service key so the real client accepts it.
SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class Clock:
    """Strictly increasing timestamps so ordering in tests is deterministic."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    )

    def tick(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, tuple[str, MealEntry]] = field(default_factory=dict)

    def _owned(self, user_id: str) -> list[MealEntry]:
        owned = [meal for owner, meal in self.meals.values() if owner == user_id]
        return sorted(owned, key=lambda meal: meal.logged_at, reverse=True)

    def list_recent(self, user_id: str, limit: int) -> list[MealEntry]:
        return self._owned(user_id)[:limit]

    def list_by_date(self, user_id: str, day: date) -> list[MealEntry]:
        return [meal for meal in self._owned(user_id) if meal.date == day]

    def search(self, user_id: str, term: str, limit: int) -> list[MealEntry]:
        return [meal for meal in self._owned(user_id) if contains(meal.name, term)][
            :limit
        ]

    def list_between(
        self, user_id: str, start: date, end: date, limit: int
    ) -> list[MealEntry]:
        return [
            meal for meal in self._owned(user_id) if start <= meal.date <= end
        ][:limit]

    def list_logged_since(self, user_id: str, since: datetime) -> list[MealEntry]:
        return [meal for meal in self._owned(user_id) if meal.logged_at >= since]

    def get_meal(self, user_id: str, meal_id: UUID) -> MealEntry | None:
        stored = self.meals.get(meal_id)
        if stored is None or stored[0] != user_id:
            return None
        return stored[1]

    def create_meal(self, user_id: str, meal: NewMeal) -> MealEntry:
        entry = MealEntry(
            id=uuid4(),
            name=meal.name,
            servings=meal.servings,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            date=meal.date,
            logged_at=meal.logged_at,
        )
        self.meals[entry.id] = (user_id, entry)
        return entry

    def update_meal(
        self, user_id: str, meal_id: UUID, changes: dict[str, object]
    ) -> MealEntry | None:
        existing = self.get_meal(user_id, meal_id)
        if existing is None:
            return None
        updated = replace(existing, **changes)
        self.meals[meal_id] = (user_id, updated)
        return updated

    def delete_meal(self, user_id: str, meal_id: UUID) -> MealEntry | None:
        existing = self.get_meal(user_id, meal_id)
        if existing is None:
            return None
        del self.meals[meal_id]
        return existing


@dataclass
class InMemoryBodyMetricRepository(BodyMetricRepository):
    """In-memory body metric repository; upserts are serialised by a lock."""

    records: dict[tuple[str, MetricKind, date], BodyMetricLog] = field(
        default_factory=dict
    )
    written: list[float] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def upsert_body_metric(  # noqa: PLR0913
        self,
        user_id: str,
        kind: MetricKind,
        day: date,
        value: float,
        accumulate: bool,
    ) -> tuple[BodyMetricLog, bool]:
        key = (user_id, kind, day)
        with self.lock:
            existing = self.records.get(key)
            if existing is None:
                record = BodyMetricLog(
                    id=uuid4(),
                    kind=kind,
                    date=day,
                    amount=max(value, 0),
                    logged_at=datetime.now(tz=UTC),
                )
                created = True
            else:
                amount = max(existing.amount + value, 0) if accumulate else value
                record = replace(
                    existing, amount=amount, logged_at=datetime.now(tz=UTC)
                )
                created = False
            self.records[key] = record
            self.written.append(record.amount)
        return record, created

    def _owned(self, user_id: str, kind: MetricKind) -> list[BodyMetricLog]:
        owned = [
            record
            for (owner, record_kind, _), record in self.records.items()
            if owner == user_id and record_kind == kind
        ]
        return sorted(owned, key=lambda record: record.date, reverse=True)

    def list_metrics(
        self, user_id: str, kind: MetricKind, limit: int | None = None
    ) -> list[BodyMetricLog]:
        owned = self._owned(user_id, kind)
        return owned if limit is None else owned[:limit]

    def list_metrics_between(
        self, user_id: str, kind: MetricKind, start: date, end: date
    ) -> list[BodyMetricLog]:
        return [
            record
            for record in self._owned(user_id, kind)
            if start <= record.date <= end
        ]

    def get_metric(
        self, user_id: str, kind: MetricKind, day: date
    ) -> BodyMetricLog | None:
        return self.records.get((user_id, kind, day))

    def latest_before(
        self, user_id: str, kind: MetricKind, day: date
    ) -> BodyMetricLog | None:
        for record in self._owned(user_id, kind):
            if record.date < day:
                return record
        return None

    def add(self, user_id: str, kind: MetricKind, day: date, amount: float) -> None:
        self.records[(user_id, kind, day)] = BodyMetricLog(
            id=uuid4(),
            kind=kind,
            date=day,
            amount=amount,
            logged_at=datetime.now(tz=UTC),
        )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: str) -> Profile | None:
        return self.profiles.get(user_id)

    def create_profile(self, user_id: str, profile: Profile) -> Profile:
        self.profiles[user_id] = profile
        return profile

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> Profile | None:
        existing = self.profiles.get(user_id)
        if existing is None:
            return None
        updated = replace(existing, **changes)
        self.profiles[user_id] = updated
        return updated


@dataclass
class InMemoryPreferenceRepository(PreferenceRepository):
    """In-memory preference repository keyed by (user, category, value)."""

    preferences: dict[tuple[str, PreferenceCategory, str], Preference] = field(
        default_factory=dict
    )

    def save_preference(
        self,
        user_id: str,
        category: PreferenceCategory,
        value_key: str,
        notes: str | None,
    ) -> tuple[Preference, bool]:
        key = (user_id, category, value_key)
        existing = self.preferences.get(key)
        if existing is None:
            created = Preference(
                id=uuid4(), category=category, value=value_key, notes=notes
            )
            self.preferences[key] = created
            return created, True
        if notes:
            existing = replace(existing, notes=notes)
            self.preferences[key] = existing
        return existing, False

    def delete_preference(
        self, user_id: str, category: PreferenceCategory, value_key: str
    ) -> Preference | None:
        return self.preferences.pop((user_id, category, value_key), None)


@dataclass
class InMemoryPantryRepository(PantryRepository):
    """In-memory pantry repository for tests."""

    clock: Clock = field(default_factory=Clock)
    items: dict[UUID, tuple[str, PantryItem]] = field(default_factory=dict)

    def list_items(self, user_id: str) -> list[PantryItem]:
        owned = [item for owner, item in self.items.values() if owner == user_id]
        return sorted(owned, key=lambda item: item.created_at, reverse=True)

    def create_item(self, user_id: str, item: NewItem) -> PantryItem:
        created = PantryItem(
            id=uuid4(),
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            unit=item.unit,
            created_at=self.clock.tick(),
        )
        self.items[created.id] = (user_id, created)
        return created

    def update_item(
        self, user_id: str, item_id: UUID, changes: dict[str, object]
    ) -> PantryItem | None:
        stored = self.items.get(item_id)
        if stored is None or stored[0] != user_id:
            return None
        updated = replace(stored[1], **changes)
        self.items[item_id] = (user_id, updated)
        return updated

    def delete_item(self, user_id: str, item_id: UUID) -> PantryItem | None:
        stored = self.items.get(item_id)
        if stored is None or stored[0] != user_id:
            return None
        del self.items[item_id]
        return stored[1]

    def find_latest_by_name(self, user_id: str, term: str) -> PantryItem | None:
        for item in self.list_items(user_id):
            if contains(item.name, term):
                return item
        return None


@dataclass
class InMemoryShoppingListRepository(ShoppingListRepository):
    """In-memory shopping list repository; items follow their list's owner."""

    clock: Clock = field(default_factory=Clock)
    lists: dict[UUID, tuple[str, ShoppingList]] = field(default_factory=dict)
    items: dict[UUID, ShoppingListItem] = field(default_factory=dict)

    def _owned_list_ids(self, user_id: str) -> set[UUID]:
        return {
            list_id for list_id, (owner, _) in self.lists.items() if owner == user_id
        }

    def list_lists(self, user_id: str) -> list[ShoppingList]:
        owned = [entry for owner, entry in self.lists.values() if owner == user_id]
        return sorted(owned, key=lambda entry: entry.updated_at, reverse=True)

    def get_list_by_name(self, user_id: str, name: str) -> ShoppingList | None:
        for owner, entry in self.lists.values():
            if owner == user_id and entry.name == name:
                return entry
        return None

    def create_list(self, user_id: str, name: str) -> ShoppingList:
        entry = ShoppingList(id=uuid4(), name=name, updated_at=self.clock.tick())
        self.lists[entry.id] = (user_id, entry)
        return entry

    def rename_list(
        self, user_id: str, list_id: UUID, name: str
    ) -> ShoppingList | None:
        if list_id not in self._owned_list_ids(user_id):
            return None
        renamed = replace(
            self.lists[list_id][1], name=name, updated_at=self.clock.tick()
        )
        self.lists[list_id] = (user_id, renamed)
        return renamed

    def delete_list(self, user_id: str, list_id: UUID) -> ShoppingList | None:
        if list_id not in self._owned_list_ids(user_id):
            return None
        _, entry = self.lists.pop(list_id)
        self.items = {
            item_id: item
            for item_id, item in self.items.items()
            if item.list_id != list_id
        }
        return entry

    def touch_list(self, user_id: str, list_id: UUID) -> None:
        if list_id in self._owned_list_ids(user_id):
            touched = replace(self.lists[list_id][1], updated_at=self.clock.tick())
            self.lists[list_id] = (user_id, touched)

    def list_items(
        self, user_id: str, list_id: UUID | None = None
    ) -> list[ShoppingListItem]:
        owned = self._owned_list_ids(user_id)
        items = [
            item
            for item in self.items.values()
            if item.list_id in owned and (list_id is None or item.list_id == list_id)
        ]
        return sorted(items, key=lambda item: item.created_at, reverse=True)

    def create_items(
        self, list_id: UUID, items: list[NewItem]
    ) -> list[ShoppingListItem]:
        created = []
        for item in items:
            entry = ShoppingListItem(
                id=uuid4(),
                list_id=list_id,
                name=item.name,
                category=item.category,
                quantity=item.quantity,
                unit=item.unit,
                checked=False,
                created_at=self.clock.tick(),
            )
            self.items[entry.id] = entry
            created.append(entry)
        return created

    def find_items_by_ids(
        self, user_id: str, item_ids: list[UUID]
    ) -> list[ShoppingListItem]:
        owned = self._owned_list_ids(user_id)
        return [
            self.items[item_id]
            for item_id in item_ids
            if item_id in self.items and self.items[item_id].list_id in owned
        ]

    def delete_items(self, user_id: str, item_ids: list[UUID]) -> None:
        for item in self.find_items_by_ids(user_id, item_ids):
            del self.items[item.id]

    def mark_checked(self, user_id: str, item_id: UUID) -> ShoppingListItem | None:
        found = self.find_items_by_ids(user_id, [item_id])
        if not found:
            return None
        checked = replace(found[0], checked=True)
        self.items[item_id] = checked
        return checked


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    clock: Clock = field(default_factory=Clock)
    recipes: dict[UUID, tuple[str, Recipe]] = field(default_factory=dict)

    def list_recipes(self, user_id: str) -> list[Recipe]:
        owned = [recipe for owner, recipe in self.recipes.values() if owner == user_id]
        return sorted(owned, key=lambda recipe: recipe.created_at, reverse=True)

    def create_recipe(self, user_id: str, recipe: NewRecipe) -> Recipe:
        created = Recipe(
            id=uuid4(),
            name=recipe.name,
            servings=recipe.servings,
            calories=recipe.calories,
            protein=recipe.protein,
            carbs=recipe.carbs,
            fat=recipe.fat,
            created_at=self.clock.tick(),
            ingredients=list(recipe.ingredients),
            instructions=list(recipe.instructions),
            description=recipe.description,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            tips=recipe.tips,
        )
        self.recipes[created.id] = (user_id, created)
        return created

    def delete_recipe(self, user_id: str, recipe_id: UUID) -> Recipe | None:
        stored = self.recipes.get(recipe_id)
        if stored is None or stored[0] != user_id:
            return None
        del self.recipes[recipe_id]
        return stored[1]


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[dict[str, object]] = field(default_factory=list)

    def create_event(  # noqa: PLR0913
        self,
        user_id: str,
        entity_type: str,
        entity_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        self.events.append(
            {
                "user_id": user_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "event_type": event_type,
                "before": before,
                "after": after,
            }
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        service_token="service-token",
    )


@pytest.fixture
def ctx() -> ExecutionContext:
    return ExecutionContext(user_id=USER_ID, timezone="UTC")


@pytest.fixture
def other_ctx() -> ExecutionContext:
    return ExecutionContext(user_id=OTHER_USER_ID, timezone="UTC")


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def metric_repository() -> InMemoryBodyMetricRepository:
    return InMemoryBodyMetricRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def preference_repository() -> InMemoryPreferenceRepository:
    return InMemoryPreferenceRepository()


@pytest.fixture
def pantry_repository() -> InMemoryPantryRepository:
    return InMemoryPantryRepository()


@pytest.fixture
def shopping_repository() -> InMemoryShoppingListRepository:
    return InMemoryShoppingListRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def meal_operations(
    meal_repository: InMemoryMealRepository,
    audit_repository: InMemoryAuditRepository,
) -> MealOperations:
    return MealOperations(
        repository=meal_repository, audit_service=AuditService(audit_repository)
    )


@pytest.fixture
def tracking_operations(
    metric_repository: InMemoryBodyMetricRepository,
    profile_service: ProfileService,
) -> TrackingOperations:
    return TrackingOperations(
        repository=metric_repository, profile_service=profile_service
    )


@pytest.fixture
def preference_operations(
    preference_repository: InMemoryPreferenceRepository,
    profile_service: ProfileService,
) -> PreferenceOperations:
    return PreferenceOperations(
        repository=preference_repository, profile_service=profile_service
    )


@pytest.fixture
def pantry_operations(pantry_repository: InMemoryPantryRepository) -> PantryOperations:
    return PantryOperations(pantry_repository)


@pytest.fixture
def shopping_operations(
    shopping_repository: InMemoryShoppingListRepository,
    pantry_repository: InMemoryPantryRepository,
    audit_repository: InMemoryAuditRepository,
) -> ShoppingListOperations:
    return ShoppingListOperations(
        repository=shopping_repository,
        purchases=PurchaseCoordinator(
            shopping_repository=shopping_repository,
            pantry_repository=pantry_repository,
        ),
        audit_service=AuditService(audit_repository),
    )


@pytest.fixture
def recipe_service(
    recipe_repository: InMemoryRecipeRepository,
    audit_repository: InMemoryAuditRepository,
) -> RecipeService:
    return RecipeService(
        repository=recipe_repository, audit_service=AuditService(audit_repository)
    )


@pytest.fixture
def registry(  # noqa: PLR0913
    meal_operations: MealOperations,
    tracking_operations: TrackingOperations,
    preference_operations: PreferenceOperations,
    pantry_operations: PantryOperations,
    shopping_operations: ShoppingListOperations,
) -> ToolRegistry:
    return build_tool_registry(
        meals=meal_operations,
        tracking=tracking_operations,
        preferences=preference_operations,
        pantry=pantry_operations,
        shopping=shopping_operations,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    profile_service: ProfileService,
    meal_operations: MealOperations,
    tracking_operations: TrackingOperations,
    preference_operations: PreferenceOperations,
    pantry_operations: PantryOperations,
    shopping_operations: ShoppingListOperations,
    recipe_service: RecipeService,
    registry: ToolRegistry,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        meal_operations=meal_operations,
        tracking_operations=tracking_operations,
        preference_operations=preference_operations,
        pantry_operations=pantry_operations,
        shopping_operations=shopping_operations,
        recipe_service=recipe_service,
        tool_registry=registry,
    )
