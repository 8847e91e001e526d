"""Helpers for building PostgREST filter values."""

LIKE_ESCAPES = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_"})


def contains_pattern(term: str) -> str:
    """Return an ``ilike`` pattern matching ``term`` literally as a substring."""
    return f"%{term.translate(LIKE_ESCAPES)}%"
