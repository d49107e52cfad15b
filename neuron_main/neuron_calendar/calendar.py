# Local-only calendar system: in-memory event collection + JSON file store

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from neuron_main.core.errors import NotFound, PersistenceUnavailable, ValidationError
from neuron_main.models.models_calendar import CalendarEvent, parse_event
from neuron_main.utils.config import CONFIG
from neuron_main.utils.debug import debug_log, get_logger
from neuron_main.utils.persistance import load_json, save_json

logger = get_logger(__name__)

# Fields a save-with-existing-id may not touch
_IMMUTABLE = ("id", "created_at", "createdAt")
# Form/localStorage spelling -> field name
_ALIASES = {"startTime": "start_time", "endTime": "end_time"}

EventInput = Union[CalendarEvent, Mapping[str, Any]]


class EventStore:
    """
    The event collection, kept in insertion order.

    Persistence is not done here: each mutation bumps `revision` and sets
    `dirty`, and the application context hands `all()` to the Store
    collaborator and calls mark_clean() once the save succeeded.
    """

    def __init__(self, events: Iterable[CalendarEvent] = ()):
        self._events: Dict[str, CalendarEvent] = {}
        for ev in events:
            if ev.id in self._events:
                logger.warning("Skipping duplicate event id %s", ev.id)
                continue
            self._events[ev.id] = ev
        self.revision = 0
        self.dirty = False

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(list(self._events.values()))

    def _touch(self) -> None:
        self.revision += 1
        self.dirty = True

    def mark_clean(self) -> None:
        self.dirty = False

    def all(self) -> List[CalendarEvent]:
        return list(self._events.values())

    def get(self, event_id: str) -> CalendarEvent:
        try:
            return self._events[event_id]
        except KeyError:
            raise NotFound(event_id) from None

    def add(self, event: EventInput) -> str:
        """Validate and append a new event. Returns its id."""
        ev = event if isinstance(event, CalendarEvent) else parse_event(event)
        if ev.id in self._events:
            raise ValidationError(f"Event id '{ev.id}' already exists", details={"fields": ["id"]})
        self._events[ev.id] = ev
        self._touch()
        debug_log(f"Added event {ev.id} ({ev.title!r} on {ev.date.isoformat()})")
        return ev.id

    def update(self, event_id: str, patch: Mapping[str, Any]) -> CalendarEvent:
        """Replace an event's fields (except id/created_at) in place, keeping its position."""
        current = self.get(event_id)
        merged = current.model_dump()
        merged.update({_ALIASES.get(k, k): v for k, v in patch.items() if k not in _IMMUTABLE})
        merged["id"] = current.id
        merged["created_at"] = current.created_at
        updated = parse_event(merged)
        self._events[event_id] = updated
        self._touch()
        debug_log(f"Updated event {event_id}")
        return updated

    def remove(self, event_id: str) -> CalendarEvent:
        if event_id not in self._events:
            raise NotFound(event_id)
        ev = self._events.pop(event_id)
        self._touch()
        debug_log(f"Removed event {event_id}")
        return ev


def decode_records(rows: Any) -> List[CalendarEvent]:
    """Turn stored records into events, dropping any that no longer validate."""
    if not isinstance(rows, list):
        logger.warning("Event file does not hold a list; starting empty")
        return []
    events: List[CalendarEvent] = []
    for row in rows:
        if not isinstance(row, dict):
            logger.warning("Skipping non-object event record")
            continue
        try:
            events.append(parse_event(row))
        except ValidationError as exc:
            logger.warning("Skipping invalid event record %s: %s", row.get("id"), exc)
    return events


class JsonEventStore:
    """Store collaborator: the whole collection as one JSON list."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or CONFIG["storage"]["path"])

    def load(self) -> List[CalendarEvent]:
        try:
            rows = load_json(self.path, default=[])
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s (%s); starting with no events", self.path, exc)
            return []
        events = decode_records(rows)
        debug_log(f"Loaded {len(events)} event(s) from {self.path}")
        return events

    def save(self, events: Iterable[CalendarEvent]) -> None:
        rows = [ev.to_record() for ev in events]
        try:
            save_json(self.path, rows)
        except (OSError, TypeError) as exc:
            raise PersistenceUnavailable(
                f"Could not write {self.path}", details={"path": str(self.path)}, cause=exc
            ) from exc
        debug_log(f"Saved {len(rows)} event(s) to {self.path}")


def open_store(path: Union[str, Path, None] = None, fmt: Optional[str] = None):
    """Store collaborator picked from CONFIG['storage']['format']."""
    fmt = (fmt or CONFIG["storage"]["format"]).lower()
    if fmt == "json":
        return JsonEventStore(path)
    if fmt == "ics":
        from neuron_main.neuron_calendar.ics import IcsEventStore
        return IcsEventStore(path)
    raise ValueError(f"Unknown storage format: {fmt}")


__all__ = ["EventStore", "JsonEventStore", "decode_records", "open_store"]
