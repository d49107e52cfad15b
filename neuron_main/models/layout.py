"""
Layout descriptors: the immutable, renderer-agnostic output of the view composer.

A renderer only ever sees these models. Events appear as EventView
projections referenced by id, so renderers bind actions by stable
identifiers instead of holding on to store objects. Every model is
frozen and dumps to plain JSON via model_dump(mode="json").
"""

import datetime as dt
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from neuron_main.models.models_calendar import SidebarFilter, ViewMode


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class EventView(_Frozen):
    id: str
    title: str
    color: str
    date: dt.date
    time_text: str
    all_day: bool
    description: Optional[str] = None


class MonthCell(_Frozen):
    date: dt.date
    day_number: int
    is_current_month: bool
    is_today: bool
    is_selected: bool
    events: Tuple[EventView, ...] = ()
    overflow_count: int = 0
    overflow_label: Optional[str] = None


class MonthGrid(_Frozen):
    kind: Literal["month"] = "month"
    year: int
    month: int
    weekday_labels: Tuple[str, ...]
    cells: Tuple[MonthCell, ...]

    @property
    def rows(self) -> Tuple[Tuple[MonthCell, ...], ...]:
        return tuple(self.cells[i:i + 7] for i in range(0, len(self.cells), 7))


class TimedEvent(_Frozen):
    """An event placed on the time axis."""
    event: EventView
    offset_minutes: int
    duration_minutes: int
    top_px: float
    height_px: float
    lane: int = 0
    lane_count: int = 1


class DayColumn(_Frozen):
    date: dt.date
    label: str
    is_today: bool
    is_selected: bool
    all_day: Tuple[EventView, ...] = ()
    timed: Tuple[TimedEvent, ...] = ()
    event_count: int = 0
    scheduled_minutes: int = 0


class HourSlot(_Frozen):
    hour: int
    label: str
    top_px: float


class WeekLayout(_Frozen):
    kind: Literal["week"] = "week"
    hours: Tuple[HourSlot, ...]
    columns: Tuple[DayColumn, ...]
    total_height_px: float


class DayLayout(_Frozen):
    kind: Literal["day"] = "day"
    hours: Tuple[HourSlot, ...]
    column: DayColumn
    total_height_px: float


class Header(_Frozen):
    title: str
    view: ViewMode
    view_label: str
    selected_date: dt.date


class SidebarView(_Frozen):
    filter: SidebarFilter
    label: str
    count_label: str
    items: Tuple[EventView, ...] = ()


class EventDetails(_Frozen):
    id: str
    title: str
    color: str
    date_text: str
    time_text: str
    description_text: str
    location: Optional[str] = None


class NotificationView(_Frozen):
    """A transient toast, shown once by the renderer."""
    message: str
    level: str
    at: str
    code: Optional[str] = None


class LayoutDescriptor(_Frozen):
    header: Header
    body: Union[MonthGrid, WeekLayout, DayLayout]
    sidebar: SidebarView
    details: Optional[EventDetails] = None
    notifications: Tuple[NotificationView, ...] = ()
