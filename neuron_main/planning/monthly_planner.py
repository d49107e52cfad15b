# Month grid: 42 cells, Monday-first, with event previews per cell.

from __future__ import annotations
from datetime import date
from typing import Optional

from neuron_main.models.layout import MonthCell, MonthGrid
from neuron_main.neuron_calendar.index import DateIndex
from neuron_main.planning.calendar_math import DAY_ABBR, is_same_date, is_today, month_grid
from neuron_main.planning.daily_planner import event_view
from neuron_main.utils.config import CONFIG


def plan_month(
    index: DateIndex,
    year: int,
    month: int,
    today: Optional[date] = None,
    selected: Optional[date] = None,
    max_previews: Optional[int] = None,
) -> MonthGrid:
    if max_previews is None:
        max_previews = CONFIG["month"]["max_previews"]
    more = CONFIG["labels"]["more"]

    cells = []
    for day in month_grid(year, month):
        day_events = index.for_date(day)
        overflow = max(0, len(day_events) - max_previews)
        cells.append(MonthCell(
            date=day,
            day_number=day.day,
            is_current_month=(day.year, day.month) == (year, month),
            is_today=is_today(day, today),
            is_selected=selected is not None and is_same_date(day, selected),
            events=tuple(event_view(ev) for ev in day_events[:max_previews]),
            overflow_count=overflow,
            overflow_label=more.format(count=overflow) if overflow else None,
        ))

    return MonthGrid(year=year, month=month, weekday_labels=tuple(DAY_ABBR), cells=tuple(cells))
