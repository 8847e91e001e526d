"""Supabase repository for audit events."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_assistant.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client

    def create_event(  # noqa: PLR0913
        self,
        user_id: str,
        entity_type: str,
        entity_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Append an audit row; a rejected write is an error."""
        response = (
            self.client.table("audit_events")
            .insert(
                {
                    "user_id": user_id,
                    "entity_type": entity_type,
                    "entity_id": str(entity_id),
                    "event_type": event_type,
                    "before_json": before,
                    "after_json": after,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to record {event_type} of {entity_type}")
