"""Supabase repository for weight and water logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutrition_assistant.domain.tracking import BodyMetricLog, MetricKind
from nutrition_assistant.services.tracking import BodyMetricRepository

METRIC_COLUMNS = "id, kind, date, amount, logged_at"


@dataclass
class SupabaseBodyMetricRepository(BodyMetricRepository):
    """Supabase implementation for per-day body metric logs.

    Writes go through the ``upsert_body_metric`` database function so that
    the per-day record is created or updated in a single statement.
    """

    client: Client

    def upsert_body_metric(  # noqa: PLR0913
        self,
        user_id: str,
        kind: MetricKind,
        day: date,
        value: float,
        accumulate: bool,
    ) -> tuple[BodyMetricLog, bool]:
        """Write the day's record and report whether it was new."""
        response = self.client.rpc(
            "upsert_body_metric",
            {
                "p_user_id": user_id,
                "p_kind": str(kind),
                "p_date": day.isoformat(),
                "p_amount": value,
                "p_accumulate": accumulate,
            },
        ).execute()
        if not response.data:
            raise RuntimeError("Failed to write body metric log")
        row = response.data[0]
        return _parse_log(row), bool(row.get("created"))

    def list_metrics(
        self, user_id: str, kind: MetricKind, limit: int | None = None
    ) -> list[BodyMetricLog]:
        """Return records newest first by date."""
        query = (
            self.client.table("body_metric_logs")
            .select(METRIC_COLUMNS)
            .eq("user_id", user_id)
            .eq("kind", str(kind))
            .order("date", desc=True)
        )
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_log(row) for row in response.data or []]

    def list_metrics_between(
        self, user_id: str, kind: MetricKind, start: date, end: date
    ) -> list[BodyMetricLog]:
        """Return records dated within [start, end], newest first."""
        response = (
            self.client.table("body_metric_logs")
            .select(METRIC_COLUMNS)
            .eq("user_id", user_id)
            .eq("kind", str(kind))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=True)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]

    def get_metric(
        self, user_id: str, kind: MetricKind, day: date
    ) -> BodyMetricLog | None:
        """Return the record for exactly one day."""
        response = (
            self.client.table("body_metric_logs")
            .select(METRIC_COLUMNS)
            .eq("user_id", user_id)
            .eq("kind", str(kind))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def latest_before(
        self, user_id: str, kind: MetricKind, day: date
    ) -> BodyMetricLog | None:
        """Return the most recent record dated strictly before a day."""
        response = (
            self.client.table("body_metric_logs")
            .select(METRIC_COLUMNS)
            .eq("user_id", user_id)
            .eq("kind", str(kind))
            .lt("date", day.isoformat())
            .order("date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])


def _parse_log(row: dict[str, object]) -> BodyMetricLog:
    kind = MetricKind(str(row["kind"]))
    return BodyMetricLog(
        id=UUID(str(row["id"])),
        kind=kind,
        date=date.fromisoformat(str(row["date"])),
        amount=_parse_amount(kind, row.get("amount")),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
    )


def _parse_amount(kind: MetricKind, value: object) -> float:
    # Water is tracked in whole oz/ml; only weight carries decimals.
    if kind is MetricKind.WATER:
        return round(float(value or 0))
    return float(value or 0.0)
