# Daily time-axis layout with durations and overlap handling.
#
# Inputs: events of one day (CalendarEvent), in insertion order.
#
# Behavior:
#   - All-day events (no start time) go to a separate lane, never on the axis
#   - Timed events: offset = minutes since midnight, duration from end time
#     (default 60 when there is no end), clipped at midnight
#   - Vertical position/height scale with hour_height_px; height never drops
#     below min_event_height_px
#   - Overlapping events share the width: each gets a lane index and the
#     lane count of its overlap cluster
#
# Output: DayColumn { all_day, timed: [TimedEvent...], event_count, scheduled_minutes }

from __future__ import annotations
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from neuron_main.models.layout import DayColumn, EventView, HourSlot, TimedEvent
from neuron_main.models.models_calendar import CalendarEvent
from neuron_main.planning.calendar_math import (
    MINUTES_PER_DAY,
    format_short_date,
    format_time_range,
    is_same_date,
    is_today,
    minutes_to_hhmm,
    minutes_to_pixels,
    time_slot_position,
)
from neuron_main.utils.config import CONFIG


def event_view(ev: CalendarEvent) -> EventView:
    """Renderer-facing projection of an event."""
    return EventView(
        id=ev.id,
        title=ev.title,
        color=ev.color,
        date=ev.date,
        time_text=format_time_range(ev.start_time, ev.end_time),
        all_day=ev.is_all_day,
        description=ev.description,
    )


def _axis_settings(hour_height_px: Optional[float], min_height_px: Optional[float]) -> Tuple[float, float]:
    tcfg = CONFIG["time_axis"]
    hour_h = tcfg["hour_height_px"] if hour_height_px is None else hour_height_px
    min_h = tcfg["min_event_height_px"] if min_height_px is None else min_height_px
    return float(hour_h), float(min_h)


def hour_slots(hour_height_px: Optional[float] = None) -> Tuple[HourSlot, ...]:
    """The 24 one-hour rows of the time axis."""
    hour_h, _ = _axis_settings(hour_height_px, None)
    return tuple(
        HourSlot(hour=h, label=minutes_to_hhmm(h * 60), top_px=minutes_to_pixels(h * 60, hour_h))
        for h in range(24)
    )


def axis_height(hour_height_px: Optional[float] = None) -> float:
    hour_h, _ = _axis_settings(hour_height_px, None)
    return minutes_to_pixels(MINUTES_PER_DAY, hour_h)


def _assign_lanes(items: List[Dict]) -> None:
    """Greedy lane packing per cluster of transitively overlapping items."""
    cluster: List[Dict] = []
    lane_ends: List[float] = []
    cluster_end = -1.0

    def _close():
        for it in cluster:
            it["_lanes"] = len(lane_ends)

    for it in items:
        if cluster and it["_start"] >= cluster_end:
            _close()
            cluster, lane_ends = [], []
        for i, end in enumerate(lane_ends):
            if end <= it["_start"]:
                it["_lane"] = i
                lane_ends[i] = it["_end"]
                break
        else:
            it["_lane"] = len(lane_ends)
            lane_ends.append(it["_end"])
        cluster.append(it)
        cluster_end = max(cluster_end, it["_end"])

    if cluster:
        _close()


def plan_day(
    events: Sequence[CalendarEvent],
    day: date,
    today: Optional[date] = None,
    selected: Optional[date] = None,
    hour_height_px: Optional[float] = None,
    min_height_px: Optional[float] = None,
) -> DayColumn:
    """Lay out one day. Events on other days are ignored."""
    hour_h, min_h = _axis_settings(hour_height_px, min_height_px)
    # Smallest visible span, in minutes, used when deciding overlaps
    min_span = min_h * 60.0 / hour_h if hour_h else 0.0

    all_day: List[EventView] = []
    timed: List[Dict] = []
    for order, ev in enumerate(events):
        if not is_same_date(ev.date, day):
            continue
        pos = time_slot_position(ev.start_time, ev.end_time)
        if pos is None:
            all_day.append(event_view(ev))
            continue
        offset, duration = pos
        duration = min(duration, MINUTES_PER_DAY - offset)
        timed.append({
            "ev": ev,
            "_order": order,
            "_offset": offset,
            "_dur": duration,
            "_start": float(offset),
            "_end": offset + max(float(duration), min_span),
        })

    # Start time, longer first, then insertion order
    timed.sort(key=lambda it: (it["_offset"], -it["_dur"], it["_order"]))
    _assign_lanes(timed)

    placed = tuple(
        TimedEvent(
            event=event_view(it["ev"]),
            offset_minutes=it["_offset"],
            duration_minutes=it["_dur"],
            top_px=minutes_to_pixels(it["_offset"], hour_h),
            height_px=max(minutes_to_pixels(it["_dur"], hour_h), min_h),
            lane=it["_lane"],
            lane_count=it["_lanes"],
        )
        for it in timed
    )

    return DayColumn(
        date=day,
        label=format_short_date(day),
        is_today=is_today(day, today),
        is_selected=selected is not None and is_same_date(day, selected),
        all_day=tuple(all_day),
        timed=placed,
        event_count=len(all_day) + len(placed),
        scheduled_minutes=sum(t.duration_minutes for t in placed),
    )
