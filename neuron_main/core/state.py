# View/navigation state machine.
#
# Two independent axes: the active view (Month -> Week -> Day -> Month) and
# navigation (anchor month + selected date). Moving the anchor never moves the
# selection and selecting a date never scrolls the month grid. Every
# transition is synchronous. Malformed input (unknown view, impossible date)
# raises ValidationError before any field changes.

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional, Union

from neuron_main.core.errors import ValidationError
from neuron_main.models.models_calendar import VIEW_ORDER, CalendarEvent, SidebarFilter, ViewMode
from neuron_main.planning.calendar_math import DateLike, as_date, shift_month
from neuron_main.utils.config import CONFIG
from neuron_main.utils.debug import debug_log


def _default_view() -> ViewMode:
    return ViewMode(CONFIG.get("default_view", "month"))


def _default_filter() -> SidebarFilter:
    return SidebarFilter(CONFIG["sidebar"]["default_filter"])


def _coerce(field_name: str, value: Any, convert: Callable[[Any], Any]) -> Any:
    """convert(value), with bad input reported as a ValidationError."""
    try:
        return convert(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Invalid {field_name}: {value!r}",
            details={"fields": [field_name], "value": repr(value)},
            cause=exc,
        ) from exc


@dataclass
class SchedulerState:
    selected_date: date = field(default_factory=date.today)
    anchor: Optional[date] = None               # first day of the anchor month
    view: ViewMode = field(default_factory=_default_view)
    selected_event_id: Optional[str] = None
    sidebar_filter: SidebarFilter = field(default_factory=_default_filter)

    def __post_init__(self):
        self.selected_date = as_date(self.selected_date)
        self.anchor = as_date(self.anchor or self.selected_date).replace(day=1)
        self.view = ViewMode(self.view)
        self.sidebar_filter = SidebarFilter(self.sidebar_filter)

    @classmethod
    def starting(cls, today: Optional[date] = None) -> "SchedulerState":
        """Startup state: today selected, its month anchored."""
        return cls(selected_date=today or date.today())

    @property
    def anchor_year(self) -> int:
        return self.anchor.year

    @property
    def anchor_month(self) -> int:
        return self.anchor.month

    # ---------- navigation ----------

    def navigate_month(self, direction: int) -> None:
        self.anchor = shift_month(self.anchor, _coerce("direction", direction, int))
        debug_log(f"Anchor month -> {self.anchor:%Y-%m}")

    def go_to_today(self, today: Optional[date] = None) -> None:
        today = today or date.today()
        self.selected_date = today
        self.anchor = today.replace(day=1)
        debug_log(f"Jumped to today {today.isoformat()}")

    def select_date(self, day: DateLike) -> None:
        self.selected_date = _coerce("date", day, as_date)
        debug_log(f"Selected {self.selected_date.isoformat()}")

    # ---------- view ----------

    def cycle_view(self) -> ViewMode:
        idx = VIEW_ORDER.index(self.view)
        self.view = VIEW_ORDER[(idx + 1) % len(VIEW_ORDER)]
        debug_log(f"View -> {self.view.value}")
        return self.view

    def set_view(self, view: Union[ViewMode, str]) -> None:
        self.view = _coerce("view", view, ViewMode)

    # ---------- selection / sidebar ----------

    def select_event(self, event: Union[CalendarEvent, str]) -> None:
        self.selected_event_id = event.id if isinstance(event, CalendarEvent) else str(event)

    def clear_selection(self) -> None:
        self.selected_event_id = None

    def set_sidebar_filter(self, flt: Union[SidebarFilter, str]) -> None:
        self.sidebar_filter = _coerce("sidebar_filter", flt, SidebarFilter)

    def toggle_sidebar_filter(self) -> SidebarFilter:
        self.sidebar_filter = (SidebarFilter.UPCOMING if self.sidebar_filter == SidebarFilter.TODAY
                               else SidebarFilter.TODAY)
        return self.sidebar_filter
