"""FastAPI application factory."""

import logging

from fastapi import Depends, FastAPI, Path, Query, Request

from hydration_tracker.api.models import (
    ArchiveResponse,
    BottleSizeRequest,
    ChartPointResponse,
    ChartResponse,
    DayResponse,
    EntryResponse,
    GoalRequest,
    HistoryResponse,
    IntakeRequest,
    MonthResponse,
    PreferencesRequest,
    PreferencesResponse,
    RecordResponse,
    TodayResponse,
    UnitRequest,
)
from hydration_tracker.app_logging import configure_logging
from hydration_tracker.containers import AppContainer
from hydration_tracker.domain.intake import DailyRecord
from hydration_tracker.domain.preferences import DisplayPreferences
from hydration_tracker.services.tracking import CHART_RANGES, TrackingService

MAX_CHART_DAYS = 366


def _tracking(request: Request) -> TrackingService:
    """Return the tracking service after catching up with the local day."""
    container: AppContainer = request.app.state.container
    service = container.tracking_service
    service.check_for_new_day_and_reset_if_needed()
    return service


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/today")
    def today(
        service: TrackingService = Depends(_tracking),
    ) -> TodayResponse:
        """Return today's intake, goal and derived values."""
        return _today_response(service)

    @app.post("/intake")
    def add_intake(
        body: IntakeRequest, service: TrackingService = Depends(_tracking)
    ) -> TodayResponse:
        """Record an intake amount."""
        service.add_intake(body.amount)
        return _today_response(service)

    @app.post("/intake/undo")
    def undo_intake(
        service: TrackingService = Depends(_tracking),
    ) -> TodayResponse:
        """Remove the most recent intake entry."""
        service.undo_last_add()
        return _today_response(service)

    @app.post("/today/reset")
    def reset_today(
        service: TrackingService = Depends(_tracking),
    ) -> TodayResponse:
        """Discard today's intake."""
        service.reset_today()
        return _today_response(service)

    @app.post("/today/archive")
    def archive_today(
        service: TrackingService = Depends(_tracking),
    ) -> ArchiveResponse:
        """Snapshot today into history."""
        record = service.archive_today()
        if record is None:
            logger.info("Archive skipped: no intake recorded today")
        return ArchiveResponse(
            record=_record_response(record) if record is not None else None
        )

    @app.put("/settings/goal")
    def set_goal(
        body: GoalRequest, service: TrackingService = Depends(_tracking)
    ) -> TodayResponse:
        """Update the daily goal."""
        service.set_goal(body.goal)
        return _today_response(service)

    @app.put("/settings/unit")
    def set_unit(
        body: UnitRequest, service: TrackingService = Depends(_tracking)
    ) -> TodayResponse:
        """Update the unit preference."""
        service.set_unit(body.unit)
        return _today_response(service)

    @app.put("/settings/bottle-size")
    def set_bottle_size(
        body: BottleSizeRequest, service: TrackingService = Depends(_tracking)
    ) -> TodayResponse:
        """Update the bottle size."""
        service.set_bottle_size(body.size)
        return _today_response(service)

    @app.get("/settings/preferences")
    def get_preferences(request: Request) -> PreferencesResponse:
        """Return display preferences."""
        state_container: AppContainer = request.app.state.container
        return _preferences_response(
            state_container.preferences_service.get_preferences()
        )

    @app.put("/settings/preferences")
    def update_preferences(
        body: PreferencesRequest, request: Request
    ) -> PreferencesResponse:
        """Update dark mode and/or app language."""
        state_container: AppContainer = request.app.state.container
        preferences_service = state_container.preferences_service
        if body.is_dark_mode is not None:
            preferences_service.set_dark_mode(body.is_dark_mode)
        if body.app_language is not None:
            preferences_service.set_app_language(body.app_language)
        return _preferences_response(preferences_service.get_preferences())

    @app.get("/history")
    def history(
        service: TrackingService = Depends(_tracking),
    ) -> HistoryResponse:
        """Return archived days, newest first."""
        return HistoryResponse(
            records=[_record_response(record) for record in service.history]
        )

    @app.get("/history/{year}/{month}")
    def month_calendar(
        year: int = Path(ge=1, le=9999),
        month: int = Path(ge=1, le=12),
        service: TrackingService = Depends(_tracking),
    ) -> MonthResponse:
        """Return calendar cells for a month."""
        days = service.month_summary(year, month)
        return MonthResponse(
            year=year,
            month=month,
            days=[
                DayResponse(
                    date_key=day.date_key,
                    intake=day.intake,
                    goal=day.goal,
                    progress=day.progress,
                    is_today=day.is_today,
                    is_future=day.is_future,
                )
                for day in days
            ],
        )

    @app.get("/charts")
    def charts(
        last_days: int = Query(default=CHART_RANGES[0], ge=1, le=MAX_CHART_DAYS),
        service: TrackingService = Depends(_tracking),
    ) -> ChartResponse:
        """Return the intake chart for the last N days."""
        summary = service.chart_summary(last_days)
        return ChartResponse(
            points=[
                ChartPointResponse(
                    date_key=point.date_key, intake=point.intake, goal=point.goal
                )
                for point in summary.points
            ],
            average_intake=summary.average_intake,
            days_goal_met=summary.days_goal_met,
            current_streak=summary.current_streak,
        )

    return app


def _today_response(service: TrackingService) -> TodayResponse:
    snapshot = service.snapshot()
    return TodayResponse(
        date_key=snapshot.current_date_key,
        daily_goal=snapshot.daily_goal,
        unit=snapshot.unit,
        display_unit=service.display_unit(),
        bottle_size=snapshot.bottle_size,
        today_intake=snapshot.today_intake,
        progress=service.progress(),
        remaining=service.remaining(),
        goal_reached=service.goal_reached(),
        quick_add_amounts=service.quick_add_amounts(),
        morning_intake=service.morning_intake(),
        afternoon_intake=service.afternoon_intake(),
        evening_intake=service.evening_intake(),
        current_streak=service.current_streak(),
        entries=[
            EntryResponse(id=entry.id, timestamp=entry.timestamp, amount=entry.amount)
            for entry in snapshot.entries
        ],
    )


def _record_response(record: DailyRecord) -> RecordResponse:
    return RecordResponse(
        date_key=record.date_key,
        total_intake=record.total_intake,
        goal=record.goal,
        unit=record.unit,
        progress=record.progress,
        goal_met=record.goal_met,
    )


def _preferences_response(preferences: DisplayPreferences) -> PreferencesResponse:
    return PreferencesResponse(
        is_dark_mode=preferences.is_dark_mode,
        is_dark_mode_set=preferences.is_dark_mode_set,
        app_language=preferences.app_language,
    )
