"""Weight and water tracking operations exposed to the assistant."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from nutrition_assistant.domain.context import ExecutionContext
from nutrition_assistant.domain.tracking import BodyMetricLog, MetricKind, Profile
from nutrition_assistant.services.aggregation import (
    water_progress,
    weight_change,
    weight_progress,
)
from nutrition_assistant.services.normalize import resolve_date, today_in_timezone
from nutrition_assistant.services.profiles import ProfileService
from nutrition_assistant.tools.models import (
    LogWater,
    LogWeight,
    QueryWeight,
    TrackingArgs,
)
from nutrition_assistant.tools.results import ToolResult, success

NO_WEIGHT_DATA = "No weight entries recorded yet"
WEIGHT_HISTORY_LIMIT = 30


class BodyMetricRepository(Protocol):
    """Persistence interface for per-day weight and water logs."""

    def upsert_body_metric(  # noqa: PLR0913
        self,
        user_id: str,
        kind: MetricKind,
        day: date,
        value: float,
        accumulate: bool,
    ) -> tuple[BodyMetricLog, bool]:
        """Write the day's record in one step and report whether it was new.

        With ``accumulate`` the value is added to any existing amount and the
        result floored at zero; otherwise it replaces the amount.
        """

    def list_metrics(
        self, user_id: str, kind: MetricKind, limit: int | None = None
    ) -> list[BodyMetricLog]:
        """Return records newest first by date."""

    def list_metrics_between(
        self, user_id: str, kind: MetricKind, start: date, end: date
    ) -> list[BodyMetricLog]:
        """Return records dated within [start, end], newest first."""

    def get_metric(
        self, user_id: str, kind: MetricKind, day: date
    ) -> BodyMetricLog | None:
        """Return the record for exactly one day."""

    def latest_before(
        self, user_id: str, kind: MetricKind, day: date
    ) -> BodyMetricLog | None:
        """Return the most recent record dated strictly before a day."""


@dataclass
class TrackingOperations:
    """Dispatcher for the ``tracking`` tool group."""

    repository: BodyMetricRepository
    profile_service: ProfileService

    def handle(self, ctx: ExecutionContext, args: TrackingArgs) -> ToolResult:
        """Run the tracking operation selected by the argument variant."""
        profile = self.profile_service.get_profile(ctx.user_id)
        if isinstance(args, LogWater):
            return self._log_water(ctx, profile, args)
        if isinstance(args, LogWeight):
            return self._log_weight(ctx, profile, args)
        return self._query_weight(ctx, profile, args)

    def water_for_date(self, ctx: ExecutionContext, day: date) -> BodyMetricLog | None:
        """Return the water total logged for a day, if any."""
        return self.repository.get_metric(ctx.user_id, MetricKind.WATER, day)

    def weight_for_date(
        self, ctx: ExecutionContext, day: date
    ) -> BodyMetricLog | None:
        """Return the weight logged for a day, if any."""
        return self.repository.get_metric(ctx.user_id, MetricKind.WEIGHT, day)

    def latest_weight(self, ctx: ExecutionContext) -> BodyMetricLog | None:
        """Return the most recently dated weight entry."""
        latest = self.repository.list_metrics(ctx.user_id, MetricKind.WEIGHT, limit=1)
        return latest[0] if latest else None

    def weight_history(
        self, ctx: ExecutionContext, limit: int = WEIGHT_HISTORY_LIMIT
    ) -> list[BodyMetricLog]:
        """Return the user's weight entries, newest first."""
        return self.repository.list_metrics(ctx.user_id, MetricKind.WEIGHT, limit=limit)

    def _log_water(
        self, ctx: ExecutionContext, profile: Profile, args: LogWater
    ) -> ToolResult:
        day = resolve_date(args.date, ctx.timezone)
        record, _ = self.repository.upsert_body_metric(
            ctx.user_id, MetricKind.WATER, day, args.water_amount, accumulate=True
        )
        progress = water_progress(int(record.amount), profile.effective_water_goal)
        return success(
            "log_water",
            logged=args.water_amount,
            total=progress.total,
            waterUnit=profile.water_unit,
            waterGoal=progress.goal,
            remaining=progress.remaining,
            percentComplete=progress.percent_complete,
            goalReached=progress.goal_reached,
            date=day.isoformat(),
        )

    def _log_weight(
        self, ctx: ExecutionContext, profile: Profile, args: LogWeight
    ) -> ToolResult:
        day = resolve_date(args.date, ctx.timezone)
        record, created = self.repository.upsert_body_metric(
            ctx.user_id, MetricKind.WEIGHT, day, args.weight, accumulate=False
        )
        if not created:
            return success(
                "log_weight",
                updated=True,
                weight=record.amount,
                weightUnit=profile.weight_unit,
                date=day.isoformat(),
            )

        previous = self.repository.latest_before(ctx.user_id, MetricKind.WEIGHT, day)
        previous_weight = previous.amount if previous else None
        return success(
            "log_weight",
            created=True,
            weight=record.amount,
            weightUnit=profile.weight_unit,
            date=day.isoformat(),
            previousWeight=previous_weight,
            change=weight_change(record.amount, previous_weight),
            weightGoal=profile.weight_goal,
        )

    def _query_weight(
        self, ctx: ExecutionContext, profile: Profile, args: QueryWeight
    ) -> ToolResult:
        if args.weight_query_type == "progress":
            return self._weight_progress(ctx, profile)

        if args.weight_query_type == "date_range" and args.start_date and args.end_date:
            entries = self.repository.list_metrics_between(
                ctx.user_id, MetricKind.WEIGHT, args.start_date, args.end_date
            )
        else:
            entries = self.repository.list_metrics(
                ctx.user_id, MetricKind.WEIGHT, limit=args.limit
            )
        return success(
            "query_weight",
            queryType=args.weight_query_type,
            count=len(entries),
            entries=[weight_payload(entry) for entry in entries],
            weightUnit=profile.weight_unit,
            weightGoal=profile.weight_goal,
        )

    def _weight_progress(self, ctx: ExecutionContext, profile: Profile) -> ToolResult:
        history = self.repository.list_metrics(ctx.user_id, MetricKind.WEIGHT)
        progress = weight_progress(
            history, today_in_timezone(ctx.timezone), profile.weight_goal
        )
        if progress is None:
            return success(
                "query_weight",
                queryType="progress",
                message=NO_WEIGHT_DATA,
                weightUnit=profile.weight_unit,
                weightGoal=profile.weight_goal,
            )
        return success(
            "query_weight",
            queryType="progress",
            currentWeight=progress.current,
            startingWeight=progress.starting,
            totalChange=progress.total_change,
            weeklyChange=progress.weekly_change,
            monthlyChange=progress.monthly_change,
            weightGoal=profile.weight_goal,
            remainingToGoal=progress.remaining_to_goal,
            totalEntries=progress.total_entries,
            firstEntry=progress.first_entry.isoformat(),
            lastEntry=progress.last_entry.isoformat(),
            weightUnit=profile.weight_unit,
        )


def weight_payload(entry: BodyMetricLog) -> dict[str, object]:
    """Serialize a weight entry."""
    return {"id": str(entry.id), "weight": entry.amount, "date": entry.date.isoformat()}


def water_payload(entry: BodyMetricLog) -> dict[str, object]:
    """Serialize a day's water total."""
    return {"amount": int(entry.amount), "date": entry.date.isoformat()}
