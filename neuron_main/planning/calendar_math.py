# Calendar arithmetic shared by every view.
#
# All date equality in the app goes through is_same_date()/is_today(): values
# are reduced to (year, month, day) so a stray time-of-day never shifts a day.
# Weeks are Monday-first (Python weekday(): Mon=0 … Sun=6).

from __future__ import annotations
import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta

from neuron_main.utils.config import CONFIG

GRID_CELLS = 42            # 6 weeks x 7 days, fixed for every month
MINUTES_PER_DAY = 24 * 60

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

DateLike = Union[date, datetime, str]
TimeLike = Union[time, str, None]


def as_date(value: DateLike) -> date:
    """Reduce a date, datetime or ISO string to a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"expected a date, got {type(value).__name__}")


def is_same_date(a: DateLike, b: DateLike) -> bool:
    a, b = as_date(a), as_date(b)
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_today(value: DateLike, today: Optional[date] = None) -> bool:
    return is_same_date(value, today or date.today())


def hhmm_to_minutes(hhmm: str) -> int:
    h, m = hhmm.split(":")[:2]
    return int(h) * 60 + int(m)


def minutes_to_hhmm(minutes: int) -> str:
    h = minutes // 60
    m = minutes % 60
    return f"{h:02d}:{m:02d}"


def _minutes(value: TimeLike) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not value.strip():
        return None
    return hhmm_to_minutes(value)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_day_index(year: int, month: int) -> int:
    """Column of the 1st in a Monday-first grid (Monday = 0)."""
    return date(year, month, 1).weekday()


def month_grid(year: int, month: int) -> List[date]:
    """
    42 consecutive dates for the month grid: leading days from the previous
    month, every day of (year, month), then next-month days to fill 6 rows.
    """
    start = date(year, month, 1) - timedelta(days=first_day_index(year, month))
    return [start + timedelta(days=i) for i in range(GRID_CELLS)]


def week_window(selected: DateLike, before: Optional[int] = None, after: Optional[int] = None) -> List[date]:
    """Sliding window centred on the selection (not a calendar week)."""
    wcfg = CONFIG["week"]
    before = wcfg["days_before"] if before is None else before
    after = wcfg["days_after"] if after is None else after
    centre = as_date(selected)
    return [centre + timedelta(days=i) for i in range(-before, after + 1)]


def time_slot_position(start: TimeLike, end: TimeLike = None) -> Optional[Tuple[int, int]]:
    """
    (offset_minutes, duration_minutes) on the time axis, or None for all-day.
    Without an end the default duration applies; an end before the start is
    treated the same way.
    """
    start_min = _minutes(start)
    if start_min is None:
        return None
    default = CONFIG["time_axis"]["default_duration_min"]
    end_min = _minutes(end)
    if end_min is None or end_min < start_min:
        return start_min, default
    return start_min, end_min - start_min


def minutes_to_pixels(minutes: float, hour_height_px: Optional[float] = None) -> float:
    if hour_height_px is None:
        hour_height_px = CONFIG["time_axis"]["hour_height_px"]
    return minutes * hour_height_px / 60.0


def shift_month(anchor: DateLike, step: int) -> date:
    """First day of the month `step` months away from anchor's month."""
    first = as_date(anchor).replace(day=1)
    return first + relativedelta(months=step)


# ---------- display formatting ----------

def format_month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def format_long_date(value: DateLike) -> str:
    d = as_date(value)
    return f"{DAY_NAMES[d.weekday()]}, {d.day} {MONTH_NAMES[d.month - 1]} {d.year}"


def format_short_date(value: DateLike) -> str:
    d = as_date(value)
    return f"{DAY_ABBR[d.weekday()]} {d.day}"


def format_time_range(start: TimeLike, end: TimeLike) -> str:
    labels = CONFIG["labels"]
    start_min, end_min = _minutes(start), _minutes(end)
    if start_min is None:
        return labels["all_day"]
    if end_min is None:
        return labels["from_time"].format(start=minutes_to_hhmm(start_min))
    return f"{minutes_to_hhmm(start_min)} - {minutes_to_hhmm(end_min)}"
