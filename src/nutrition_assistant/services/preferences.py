"""Food preference and goal operations exposed to the assistant."""

from dataclasses import dataclass
from typing import Protocol

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.preferences import Preference, PreferenceCategory
from nutrition_assistant.services.normalize import clean_text, identity_key
from nutrition_assistant.services.profiles import ProfileService
from nutrition_assistant.tools.models import (
    PreferencesArgs,
    RemovePreference,
    SetPreference,
    UpdateGoals,
)
from nutrition_assistant.tools.results import ToolResult, failure, success


class PreferenceRepository(Protocol):
    """Persistence interface for preferences keyed by (user, category, value)."""

    def save_preference(
        self,
        user_id: str,
        category: PreferenceCategory,
        value_key: str,
        notes: str | None,
    ) -> tuple[Preference, bool]:
        """Insert the preference unless its key exists, in one step.

        On an existing key the notes are replaced only when ``notes`` is given.
        Returns the stored preference and whether it was created.
        """

    def delete_preference(
        self, user_id: str, category: PreferenceCategory, value_key: str
    ) -> Preference | None:
        """Delete a preference by natural key and return it."""


@dataclass
class PreferenceOperations:
    """Dispatcher for the ``preferences`` tool group."""

    repository: PreferenceRepository
    profile_service: ProfileService

    def handle(self, ctx: ExecutionContext, args: PreferencesArgs) -> ToolResult:
        """Run the preference operation selected by the argument variant."""
        if isinstance(args, UpdateGoals):
            return self._update_goals(ctx, args)
        if isinstance(args, RemovePreference):
            return self._remove(ctx, args)
        return self._set(ctx, args)

    def _set(self, ctx: ExecutionContext, args: SetPreference) -> ToolResult:
        preference, created = self.repository.save_preference(
            ctx.user_id,
            args.category,
            identity_key(args.value),
            clean_text(args.notes),
        )
        marker = {"created": True} if created else {"already_existed": True}
        return success(
            "set_preference",
            **marker,
            category=str(preference.category),
            value=args.value,
            notes=preference.notes,
        )

    def _remove(self, ctx: ExecutionContext, args: RemovePreference) -> ToolResult:
        removed = self.repository.delete_preference(
            ctx.user_id, args.category, identity_key(args.value)
        )
        if removed is None:
            return failure("Preference not found")
        return success(
            "remove_preference",
            removed={"category": str(removed.category), "value": args.value},
        )

    def _update_goals(self, ctx: ExecutionContext, args: UpdateGoals) -> ToolResult:
        profile = self.profile_service.update_goals(
            ctx.user_id,
            calorie_goal=args.calorie_goal,
            weight_goal=args.weight_goal,
        )
        return success(
            "update_goals",
            updated={
                "calorieGoal": profile.calorie_goal,
                "weightGoal": profile.weight_goal,
            },
        )
