# Date -> events lookup over an EventStore.
#
# The mapping is rebuilt with one O(n) scan whenever the store's revision
# changes; between mutations every query is a dict lookup.

from __future__ import annotations
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Set

from neuron_main.models.models_calendar import CalendarEvent
from neuron_main.neuron_calendar.calendar import EventStore
from neuron_main.planning.calendar_math import DateLike, as_date, days_in_month


class DateIndex:
    def __init__(self, store: EventStore):
        self._store = store
        self._revision = -1
        self._by_date: Dict[date, List[CalendarEvent]] = {}

    def _refresh(self) -> Dict[date, List[CalendarEvent]]:
        if self._revision != self._store.revision:
            by_date: Dict[date, List[CalendarEvent]] = defaultdict(list)
            for ev in self._store.all():
                by_date[ev.date].append(ev)
            self._by_date = dict(by_date)
            self._revision = self._store.revision
        return self._by_date

    def for_date(self, day: DateLike) -> List[CalendarEvent]:
        """Events on exactly this day, in insertion order."""
        return list(self._refresh().get(as_date(day), ()))

    def for_range(self, start: DateLike, end: DateLike) -> List[CalendarEvent]:
        """Events from start to end inclusive, by date then insertion order."""
        start, end = as_date(start), as_date(end)
        if end < start:
            return []
        by_date = self._refresh()
        out: List[CalendarEvent] = []
        for day in sorted(d for d in by_date if start <= d <= end):
            out.extend(by_date[day])
        return out

    def has_events(self, day: DateLike) -> bool:
        return bool(self._refresh().get(as_date(day)))

    def busy_days(self, year: int, month: int) -> Set[int]:
        """Day numbers of (year, month) that have at least one event."""
        first = date(year, month, 1)
        last = first + timedelta(days=days_in_month(year, month) - 1)
        by_date = self._refresh()
        return {d.day for d in by_date if first <= d <= last and by_date[d]}
