"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrition_assistant.domain.tracking import (
    DEFAULT_CALORIE_GOAL,
    DEFAULT_UNIT_SYSTEM,
    Profile,
    UnitSystem,
)
from nutrition_assistant.services.profiles import ProfileRepository

PROFILE_COLUMNS = "units, calorie_goal, weight_goal, water_goal"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles keyed by user id."""

    client: Client

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the stored profile, if any."""
        response = (
            self.client.table("profiles")
            .select(PROFILE_COLUMNS)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, user_id: str, profile: Profile) -> Profile:
        """Insert a profile row and return it."""
        response = (
            self.client.table("profiles")
            .insert(
                {
                    "user_id": user_id,
                    "units": str(profile.units),
                    "calorie_goal": profile.calorie_goal,
                    "weight_goal": profile.weight_goal,
                    "water_goal": profile.water_goal,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile")
        return _parse_profile(response.data[0])

    def update_profile(
        self, user_id: str, changes: dict[str, object]
    ) -> Profile | None:
        """Patch an existing profile and return it."""
        response = (
            self.client.table("profiles")
            .update({**changes, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> Profile:
    weight_goal = row.get("weight_goal")
    water_goal = row.get("water_goal")
    return Profile(
        units=UnitSystem(str(row.get("units") or DEFAULT_UNIT_SYSTEM)),
        calorie_goal=int(row.get("calorie_goal") or DEFAULT_CALORIE_GOAL),
        weight_goal=float(weight_goal) if weight_goal is not None else None,
        water_goal=int(water_goal) if water_goal is not None else None,
    )
