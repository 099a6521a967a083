"""Dose schedule suggestions from frequency codes.

Maps a parsed frequency (``BD``, ``Q8H``, ``1-0-1``) to default times of
day. These are starting points for the reviewer to edit.
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ScheduleType(str, Enum):
    DAILY = "daily"
    EVERY_X_HOURS = "every_x_hours"


MORNING = "09:00"
BEDTIME = "22:00"

# Slot times for dose patterns with 2, 3 or 4 positions
SLOT_TIMES = {
    2: ["09:00", "21:00"],
    3: ["09:00", "14:00", "21:00"],
    4: ["09:00", "13:00", "17:00", "21:00"],
}

CODE_TIMES = {
    "OD": SLOT_TIMES[2][:1],
    "BD": SLOT_TIMES[2],
    "BID": SLOT_TIMES[2],
    "TID": SLOT_TIMES[3],
    "TDS": SLOT_TIMES[3],
    "QID": SLOT_TIMES[4],
    "QDS": SLOT_TIMES[4],
    "HS": [BEDTIME],
    "QHS": [BEDTIME],
}

AS_NEEDED_CODES = {"PRN", "SOS"}
INTERVAL_CODE = re.compile(r"^Q(\d{1,2})H$")
SLOT_PATTERN = re.compile(r"^\d(?:-\d){1,3}$")


class DoseSchedule(BaseModel):
    """Suggested daily dose times."""

    schedule_type: ScheduleType = ScheduleType.DAILY
    times_of_day: list[str] = Field(default_factory=lambda: [MORNING])
    interval_hours: Optional[int] = None
    as_needed: bool = False


def interval_times(hours: int, start_hour: int = 9) -> list[str]:
    """Times of day for a dose every ``hours`` hours starting at ``start_hour``."""
    count = max(1, 24 // hours)
    return [f"{(start_hour + n * hours) % 24:02d}:00" for n in range(count)]


def schedule_for_frequency(frequency: str) -> DoseSchedule:
    """Suggest a schedule for a frequency code or dose pattern.

    Unknown or empty frequencies default to once daily in the morning.
    """
    code = frequency.strip().upper()

    if code in CODE_TIMES:
        return DoseSchedule(times_of_day=list(CODE_TIMES[code]))

    if code in AS_NEEDED_CODES:
        return DoseSchedule(as_needed=True)

    match = INTERVAL_CODE.match(code)
    if match and int(match.group(1)) > 0:
        hours = int(match.group(1))
        return DoseSchedule(
            schedule_type=ScheduleType.EVERY_X_HOURS,
            times_of_day=interval_times(hours),
            interval_hours=hours,
        )

    if SLOT_PATTERN.match(code):
        slots = [int(n) for n in code.split("-")]
        times = [t for t, n in zip(SLOT_TIMES[len(slots)], slots) if n > 0]
        if times:
            return DoseSchedule(times_of_day=times)

    return DoseSchedule()
