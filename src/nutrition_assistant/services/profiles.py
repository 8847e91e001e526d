"""User goals and unit preferences."""

from dataclasses import dataclass, replace
from typing import Protocol

from nutrition_assistant.domain.tracking import DEFAULT_PROFILE, Profile


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the stored profile, if any."""

    def create_profile(self, user_id: str, profile: Profile) -> Profile:
        """Insert a profile row and return it."""

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> Profile | None:
        """Patch an existing profile and return it."""


@dataclass
class ProfileService:
    """Resolves goals with system defaults for users without a profile."""

    repository: ProfileRepository

    def get_profile(self, user_id: str) -> Profile:
        """Return the user's profile or the defaults."""
        return self.repository.get_profile(user_id) or DEFAULT_PROFILE

    def update_goals(
        self,
        user_id: str,
        calorie_goal: int | None = None,
        weight_goal: float | None = None,
    ) -> Profile:
        """Patch supplied goals, creating the profile on first use."""
        changes: dict[str, object] = {}
        if calorie_goal is not None:
            changes["calorie_goal"] = calorie_goal
        if weight_goal is not None:
            changes["weight_goal"] = weight_goal

        existing = self.repository.get_profile(user_id)
        if existing is None:
            return self.repository.create_profile(
                user_id, replace(DEFAULT_PROFILE, **changes)
            )
        updated = self.repository.update_profile(user_id, changes)
        return updated or replace(existing, **changes)
