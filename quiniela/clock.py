from __future__ import annotations

import datetime as dt
from typing import Mapping
from zoneinfo import ZoneInfo

from .catalog import Deadline
from .types import TimeSlot

DEFAULT_TIMEZONE = "America/Argentina/Buenos_Aires"

# Indexed by datetime.weekday(): Monday is 0.
WEEKDAYS = ("Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo")
MONTHS = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)


def now_in(zone_name: str = DEFAULT_TIMEZONE) -> dt.datetime:
    return dt.datetime.now(ZoneInfo(zone_name))


def to_local(instant: dt.datetime, zone_name: str = DEFAULT_TIMEZONE) -> dt.datetime:
    """`instant` as civil time in `zone_name`. Naive instants are taken as already local."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(ZoneInfo(zone_name))


def minutes_since_midnight(instant: dt.datetime) -> int:
    return instant.hour * 60 + instant.minute


def is_past_deadline(
    slot: TimeSlot,
    instant: dt.datetime,
    deadlines: Mapping[TimeSlot, Deadline],
    zone_name: str = DEFAULT_TIMEZONE,
) -> bool:
    """True once the slot's results should have been published.

    Deadlines are civil times in `zone_name`; aware instants are converted
    there first. Slots missing from `deadlines` never count as late.
    """
    deadline = deadlines.get(slot)
    if deadline is None:
        return False
    return minutes_since_midnight(to_local(instant, zone_name)) >= deadline.cutoff_minutes


def previous_day(instant: dt.datetime) -> dt.datetime:
    return instant - dt.timedelta(days=1)


def format_date(instant: dt.datetime) -> str:
    return f"{WEEKDAYS[instant.weekday()]} {instant.day} de {MONTHS[instant.month - 1]}"


def format_queried_at(instant: dt.datetime) -> str:
    return instant.strftime("%H:%M hs")
