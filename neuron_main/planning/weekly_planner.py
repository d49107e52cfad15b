# Week and day layouts.
#
# The week is the 7-day window around the selected date (selected - 3 …
# selected + 3), not a Monday-Sunday calendar week. Each column is built by
# daily_planner.plan_day from the events of that date.

from __future__ import annotations
from datetime import date
from typing import Optional

from neuron_main.models.layout import DayLayout, WeekLayout
from neuron_main.neuron_calendar.index import DateIndex
from neuron_main.planning.calendar_math import DateLike, as_date, week_window
from neuron_main.planning.daily_planner import axis_height, hour_slots, plan_day


def plan_week(
    index: DateIndex,
    selected: DateLike,
    today: Optional[date] = None,
    hour_height_px: Optional[float] = None,
    min_height_px: Optional[float] = None,
) -> WeekLayout:
    selected = as_date(selected)
    columns = []
    for day in week_window(selected):
        columns.append(plan_day(
            index.for_date(day), day,
            today=today, selected=selected,
            hour_height_px=hour_height_px, min_height_px=min_height_px,
        ))
    return WeekLayout(
        hours=hour_slots(hour_height_px),
        columns=tuple(columns),
        total_height_px=axis_height(hour_height_px),
    )


def plan_single_day(
    index: DateIndex,
    selected: DateLike,
    today: Optional[date] = None,
    hour_height_px: Optional[float] = None,
    min_height_px: Optional[float] = None,
) -> DayLayout:
    day = as_date(selected)
    column = plan_day(
        index.for_date(day), day,
        today=today, selected=day,
        hour_height_px=hour_height_px, min_height_px=min_height_px,
    )
    return DayLayout(
        hours=hour_slots(hour_height_px),
        column=column,
        total_height_px=axis_height(hour_height_px),
    )
