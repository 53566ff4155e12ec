"""Pydantic models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

from hydration_tracker.domain.intake import WaterUnit


class IntakeRequest(BaseModel):
    """Amount to record, in the active unit."""

    amount: float = Field(gt=0)


class GoalRequest(BaseModel):
    """New daily goal."""

    goal: float = Field(ge=0)


class UnitRequest(BaseModel):
    """New unit preference."""

    unit: WaterUnit


class BottleSizeRequest(BaseModel):
    """New bottle size."""

    size: float = Field(ge=0)


class PreferencesRequest(BaseModel):
    """Partial update of display preferences."""

    is_dark_mode: bool | None = None
    app_language: str | None = None


class PreferencesResponse(BaseModel):
    """Display preferences."""

    is_dark_mode: bool
    is_dark_mode_set: bool
    app_language: str


class EntryResponse(BaseModel):
    """Intake entry."""

    id: str
    timestamp: datetime
    amount: float


class RecordResponse(BaseModel):
    """Archived day."""

    date_key: str
    total_intake: float
    goal: float
    unit: WaterUnit
    progress: float
    goal_met: bool


class TodayResponse(BaseModel):
    """Today's state and derived values."""

    date_key: str
    daily_goal: float
    unit: WaterUnit
    display_unit: str
    bottle_size: float
    today_intake: float
    progress: float
    remaining: float
    goal_reached: bool
    quick_add_amounts: list[float]
    morning_intake: float
    afternoon_intake: float
    evening_intake: float
    current_streak: int
    entries: list[EntryResponse]


class ArchiveResponse(BaseModel):
    """Result of a manual archive."""

    record: RecordResponse | None


class HistoryResponse(BaseModel):
    """Archived days, newest first."""

    records: list[RecordResponse]


class DayResponse(BaseModel):
    """Calendar cell."""

    date_key: str
    intake: float
    goal: float
    progress: float
    is_today: bool
    is_future: bool


class MonthResponse(BaseModel):
    """Calendar month."""

    year: int
    month: int
    days: list[DayResponse]


class ChartPointResponse(BaseModel):
    """One bar of the intake chart."""

    date_key: str
    intake: float
    goal: float


class ChartResponse(BaseModel):
    """Chart series and summary values."""

    points: list[ChartPointResponse]
    average_intake: float
    days_goal_met: int
    current_streak: int
