"""Domain models for food preferences."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class PreferenceCategory(StrEnum):
    """Kinds of food preferences the assistant can remember."""

    LIKE = "like"
    DISLIKE = "dislike"
    ALLERGY = "allergy"
    DIETARY = "dietary"
    CUISINE = "cuisine"
    TIMING = "timing"
    PORTION = "portion"
    OTHER = "other"


@dataclass(frozen=True)
class Preference:
    """A stored preference; value is kept in its normalized form."""

    id: UUID
    category: PreferenceCategory
    value: str
    notes: str | None
