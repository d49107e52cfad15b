# iCalendar (.ics) store: same contract as JsonEventStore, RFC 5545 on disk.
#
# Times are written as floating (naive) local values; all-day events use
# VALUE=DATE. Fields without a standard property ride on X-NEURON-* props.

from __future__ import annotations
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from icalendar import Calendar, Event, vText

from neuron_main.core.errors import PersistenceUnavailable, ValidationError
from neuron_main.models.models_calendar import CalendarEvent, parse_event
from neuron_main.utils.config import CONFIG
from neuron_main.utils.debug import debug_log, get_logger
from neuron_main.utils.persistance import read_text, write_text_atomic

logger = get_logger(__name__)

PRODID = "-//Neuron//Calendar//EN"


def _build_vevent(ev: CalendarEvent) -> Event:
    comp = Event()
    comp.add("uid", ev.id)
    comp.add("summary", vText(ev.title))
    if ev.start_time is None:
        comp.add("dtstart", ev.date)
    else:
        comp.add("dtstart", datetime.combine(ev.date, ev.start_time))
        if ev.end_time is not None:
            comp.add("dtend", datetime.combine(ev.date, ev.end_time))
    comp.add("dtstamp", datetime.now().replace(microsecond=0))
    comp.add("created", ev.created_at)
    if ev.description:
        comp.add("description", vText(ev.description))
    if ev.location:
        comp.add("location", vText(ev.location))
    comp.add("X-NEURON-COLOR", ev.color)
    return comp


def build_ics(events: Iterable[CalendarEvent]) -> bytes:
    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    for ev in events:
        cal.add_component(_build_vevent(ev))
    return cal.to_ical()


def _prop_dt(comp, key: str) -> Optional[Union[date, datetime]]:
    val = comp.get(key)
    if val is None:
        return None
    return val.dt


def _text(comp, key: str) -> Optional[str]:
    val = comp.get(key)
    return str(val) if val is not None else None


def _vevent_record(comp) -> dict:
    start = _prop_dt(comp, "DTSTART")
    end = _prop_dt(comp, "DTEND")
    rec = {
        "id": _text(comp, "UID"),
        "title": _text(comp, "SUMMARY") or "",
        "description": _text(comp, "DESCRIPTION"),
        "location": _text(comp, "LOCATION"),
        "color": _text(comp, "X-NEURON-COLOR") or CONFIG["palette"][0],
    }
    # datetime is a date subclass, so test it first
    if isinstance(start, datetime):
        rec["date"] = start.date()
        rec["start_time"] = start.time()
        if isinstance(end, datetime):
            rec["end_time"] = end.time()
    elif isinstance(start, date):
        rec["date"] = start
    created = _prop_dt(comp, "CREATED")
    if isinstance(created, datetime):
        rec["created_at"] = created.replace(tzinfo=None)
    return rec


def parse_ics(raw: Union[str, bytes]) -> List[CalendarEvent]:
    cal = Calendar.from_ical(raw)
    events: List[CalendarEvent] = []
    for comp in cal.walk("VEVENT"):
        rec = _vevent_record(comp)
        try:
            events.append(parse_event(rec))
        except ValidationError as exc:
            logger.warning("Skipping invalid VEVENT %s: %s", rec.get("id"), exc)
    return events


class IcsEventStore:
    """Store collaborator writing the collection as one VCALENDAR."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or Path(CONFIG["storage"]["path"]).with_suffix(".ics"))

    def load(self) -> List[CalendarEvent]:
        try:
            raw = read_text(self.path)
            if raw is None or not raw.strip():
                return []
            events = parse_ics(raw)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s (%s); starting with no events", self.path, exc)
            return []
        debug_log(f"Loaded {len(events)} event(s) from {self.path}")
        return events

    def save(self, events: Iterable[CalendarEvent]) -> None:
        events = list(events)
        try:
            write_text_atomic(self.path, build_ics(events).decode("utf-8"))
        except OSError as exc:
            raise PersistenceUnavailable(
                f"Could not write {self.path}", details={"path": str(self.path)}, cause=exc
            ) from exc
        debug_log(f"Saved {len(events)} event(s) to {self.path}")
