"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_assistant.adapters.supabase_audit_repository import (
    SupabaseAuditRepository,
)
from nutrition_assistant.adapters.supabase_body_metric_repository import (
    SupabaseBodyMetricRepository,
)
from nutrition_assistant.adapters.supabase_meal_repository import (
    SupabaseMealRepository,
)
from nutrition_assistant.adapters.supabase_pantry_repository import (
    SupabasePantryRepository,
)
from nutrition_assistant.adapters.supabase_preference_repository import (
    SupabasePreferenceRepository,
)
from nutrition_assistant.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_assistant.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from nutrition_assistant.adapters.supabase_shopping_list_repository import (
    SupabaseShoppingListRepository,
)
from nutrition_assistant.config import Settings
from nutrition_assistant.services.audit import AuditService
from nutrition_assistant.services.meals import MealOperations
from nutrition_assistant.services.pantry import PantryOperations
from nutrition_assistant.services.preferences import PreferenceOperations
from nutrition_assistant.services.profiles import ProfileService
from nutrition_assistant.services.purchases import PurchaseCoordinator
from nutrition_assistant.services.recipes import RecipeService
from nutrition_assistant.services.shopping import ShoppingListOperations
from nutrition_assistant.services.tracking import TrackingOperations
from nutrition_assistant.tools.catalog import build_tool_registry
from nutrition_assistant.tools.registry import ToolRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    meal_operations: MealOperations
    tracking_operations: TrackingOperations
    preference_operations: PreferenceOperations
    pantry_operations: PantryOperations
    shopping_operations: ShoppingListOperations
    recipe_service: RecipeService
    tool_registry: ToolRegistry


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    pantry_repository = SupabasePantryRepository(supabase_client)
    shopping_repository = SupabaseShoppingListRepository(supabase_client)

    meal_operations = MealOperations(
        repository=SupabaseMealRepository(supabase_client),
        audit_service=audit_service,
    )
    tracking_operations = TrackingOperations(
        repository=SupabaseBodyMetricRepository(supabase_client),
        profile_service=profile_service,
    )
    preference_operations = PreferenceOperations(
        repository=SupabasePreferenceRepository(supabase_client),
        profile_service=profile_service,
    )
    pantry_operations = PantryOperations(pantry_repository)
    shopping_operations = ShoppingListOperations(
        repository=shopping_repository,
        purchases=PurchaseCoordinator(
            shopping_repository=shopping_repository,
            pantry_repository=pantry_repository,
        ),
        audit_service=audit_service,
        default_list_name=resolved_settings.default_shopping_list_name,
    )
    recipe_service = RecipeService(
        repository=SupabaseRecipeRepository(supabase_client),
        audit_service=audit_service,
    )
    tool_registry = build_tool_registry(
        meals=meal_operations,
        tracking=tracking_operations,
        preferences=preference_operations,
        pantry=pantry_operations,
        shopping=shopping_operations,
        default_timezone=resolved_settings.default_timezone,
    )

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        meal_operations=meal_operations,
        tracking_operations=tracking_operations,
        preference_operations=preference_operations,
        pantry_operations=pantry_operations,
        shopping_operations=shopping_operations,
        recipe_service=recipe_service,
        tool_registry=tool_registry,
    )
