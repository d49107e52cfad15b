"""
View composer: (state, store) -> LayoutDescriptor.

compose() is a pure function. It reads the store through a DateIndex,
delegates geometry to the planners and never mutates its inputs, so it is
safe to call after every store mutation and every state transition. The
clock is passed in as `today` (defaults to date.today()). Toasts queued by
the application context arrive as `notifications` and ride on the
descriptor unchanged.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from neuron_main.core.state import SchedulerState
from neuron_main.models.layout import EventDetails, Header, LayoutDescriptor, NotificationView, SidebarView
from neuron_main.models.models_calendar import SidebarFilter, ViewMode
from neuron_main.neuron_calendar.calendar import EventStore
from neuron_main.neuron_calendar.index import DateIndex
from neuron_main.planning.calendar_math import format_long_date, format_month_title, format_time_range
from neuron_main.planning.daily_planner import event_view
from neuron_main.planning.monthly_planner import plan_month
from neuron_main.planning.weekly_planner import plan_single_day, plan_week
from neuron_main.utils.config import CONFIG


def _header(state: SchedulerState) -> Header:
    return Header(
        title=format_month_title(state.anchor_year, state.anchor_month),
        view=state.view,
        view_label=CONFIG["labels"]["views"][state.view.value],
        selected_date=state.selected_date,
    )


def _sidebar(state: SchedulerState, index: DateIndex, today: date) -> SidebarView:
    labels = CONFIG["labels"]
    if state.sidebar_filter == SidebarFilter.UPCOMING:
        horizon = today + timedelta(days=CONFIG["sidebar"]["upcoming_days"])
        events = index.for_range(today, horizon)
    else:
        events = index.for_date(today)
    return SidebarView(
        filter=state.sidebar_filter,
        label=labels["sidebar"][state.sidebar_filter.value],
        count_label=labels["event_count"].format(count=len(events)),
        items=tuple(event_view(ev) for ev in events),
    )


def _details(state: SchedulerState, store: EventStore) -> Optional[EventDetails]:
    if state.selected_event_id is None or state.selected_event_id not in store:
        return None
    ev = store.get(state.selected_event_id)
    return EventDetails(
        id=ev.id,
        title=ev.title,
        color=ev.color,
        date_text=format_long_date(ev.date),
        time_text=format_time_range(ev.start_time, ev.end_time),
        description_text=ev.description or CONFIG["labels"]["no_description"],
        location=ev.location,
    )


def compose(
    state: SchedulerState,
    store: EventStore,
    today: Optional[date] = None,
    index: Optional[DateIndex] = None,
    notifications: Sequence[NotificationView] = (),
) -> LayoutDescriptor:
    today = today or date.today()
    if index is None:
        index = DateIndex(store)

    if state.view == ViewMode.WEEK:
        body = plan_week(index, state.selected_date, today=today)
    elif state.view == ViewMode.DAY:
        body = plan_single_day(index, state.selected_date, today=today)
    else:
        body = plan_month(index, state.anchor_year, state.anchor_month,
                          today=today, selected=state.selected_date)

    return LayoutDescriptor(
        header=_header(state),
        body=body,
        sidebar=_sidebar(state, index, today),
        details=_details(state, store),
        notifications=tuple(notifications),
    )
