"""JSON codec for intake entries and daily records."""

import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from hydration_tracker.domain.intake import DailyRecord, IntakeEntry, WaterUnit

_logger = logging.getLogger(__name__)


class IntakeEntryPayload(BaseModel):
    """Stored form of an intake entry."""

    id: str
    timestamp: datetime
    amount: float


class DailyRecordPayload(BaseModel):
    """Stored form of a daily record."""

    model_config = ConfigDict(populate_by_name=True)

    date_key: str = Field(alias="dateKey")
    total_intake: float = Field(alias="totalIntake")
    goal: float
    unit: WaterUnit


_ENTRIES = TypeAdapter(list[IntakeEntryPayload])
_HISTORY = TypeAdapter(list[DailyRecordPayload])


def encode_entries(entries: list[IntakeEntry]) -> str:
    """Serialize entries to a JSON array."""
    payloads = [
        IntakeEntryPayload(id=entry.id, timestamp=entry.timestamp, amount=entry.amount)
        for entry in entries
    ]
    return _ENTRIES.dump_json(payloads).decode()


def decode_entries(raw: object) -> list[IntakeEntry]:
    """Parse a JSON array of entries; malformed data yields an empty list."""
    if raw is None:
        return []
    if not isinstance(raw, str):
        _logger.warning("Discarding entries of type %s", type(raw).__name__)
        return []
    try:
        payloads = _ENTRIES.validate_json(raw)
    except ValidationError as exc:
        _logger.warning("Discarding unreadable entries: errors=%s", exc.error_count())
        return []
    return [
        IntakeEntry(id=item.id, timestamp=item.timestamp, amount=item.amount)
        for item in payloads
    ]


def encode_history(records: list[DailyRecord]) -> str:
    """Serialize daily records to a JSON array."""
    payloads = [
        DailyRecordPayload(
            date_key=record.date_key,
            total_intake=record.total_intake,
            goal=record.goal,
            unit=record.unit,
        )
        for record in records
    ]
    return _HISTORY.dump_json(payloads, by_alias=True).decode()


def decode_history(raw: object) -> list[DailyRecord]:
    """Parse a JSON array of daily records; malformed data yields an empty list."""
    if raw is None:
        return []
    if not isinstance(raw, str):
        _logger.warning("Discarding history of type %s", type(raw).__name__)
        return []
    try:
        payloads = _HISTORY.validate_json(raw)
    except ValidationError as exc:
        _logger.warning("Discarding unreadable history: errors=%s", exc.error_count())
        return []
    return [
        DailyRecord(
            date_key=item.date_key,
            total_intake=item.total_intake,
            goal=item.goal,
            unit=item.unit,
        )
        for item in payloads
    ]
