# Core logic handler: the application context.
#
# One Brain owns everything a session needs (event store, date index, view
# state, Store collaborator, notification queue, renderer) and is handed to
# whoever needs it; nothing lives in module globals. Renderers call
# dispatch(action_id, **payload) with the stable ids in ACTIONS and receive
# the recomposed LayoutDescriptor.

from __future__ import annotations
import inspect
from datetime import date
from typing import Any, Callable, Mapping, Optional, Protocol

from neuron_main.core.composer import compose
from neuron_main.core.errors import PersistenceUnavailable, UnknownAction, ValidationError
from neuron_main.core.notifications import NotificationCenter
from neuron_main.core.state import SchedulerState
from neuron_main.models.layout import LayoutDescriptor, NotificationView
from neuron_main.models.models_calendar import CalendarEvent
from neuron_main.neuron_calendar.calendar import EventStore
from neuron_main.neuron_calendar.index import DateIndex
from neuron_main.utils.config import CONFIG
from neuron_main.utils.debug import debug_log, get_logger

logger = get_logger(__name__)


class Renderer(Protocol):
    def paint(self, layout: LayoutDescriptor) -> None: ...


class EventPersistence(Protocol):
    def load(self) -> list: ...

    def save(self, events: list) -> None: ...


# Action id -> Brain method
ACTIONS = {
    "navigate_month": "navigate_month",
    "go_to_today": "go_to_today",
    "select_date": "select_date",
    "cycle_view": "cycle_view",
    "set_view": "set_view",
    "select_event": "select_event",
    "clear_selection": "clear_selection",
    "save_event": "save_event",
    "delete_event": "delete_event",
    "set_sidebar_filter": "set_sidebar_filter",
    "toggle_sidebar_filter": "toggle_sidebar_filter",
}


class Brain:
    def __init__(
        self,
        store: Optional[EventStore] = None,
        persistence: Optional[EventPersistence] = None,
        state: Optional[SchedulerState] = None,
        renderer: Optional[Renderer] = None,
        notifications: Optional[NotificationCenter] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.clock = clock
        self.store = store if store is not None else EventStore()
        self.index = DateIndex(self.store)
        self.persistence = persistence
        self.state = state if state is not None else SchedulerState.starting(clock())
        self.renderer = renderer
        self.notifications = notifications if notifications is not None else NotificationCenter()

    @classmethod
    def boot(cls, persistence: Optional[EventPersistence] = None, **kwargs: Any) -> "Brain":
        """Load the saved collection (empty on any read problem) and build a context."""
        if persistence is None:
            from neuron_main.neuron_calendar.calendar import open_store
            persistence = open_store()
        try:
            events = persistence.load()
        except PersistenceUnavailable as exc:
            logger.warning("Event storage unavailable at startup: %s", exc)
            events = []
        brain = cls(store=EventStore(events), persistence=persistence, **kwargs)
        debug_log(f"Booted with {len(brain.store)} event(s)")
        return brain

    # ---------- rendering ----------

    def render(self) -> LayoutDescriptor:
        """Compose the layout, handing over any queued toasts with it."""
        notes = tuple(
            NotificationView(message=n.message, level=n.level, code=n.code, at=n.at)
            for n in self.notifications.drain()
        )
        layout = compose(self.state, self.store, today=self.clock(), index=self.index,
                         notifications=notes)
        if self.renderer is not None:
            self.renderer.paint(layout)
        return layout

    def dispatch(self, action: str, **payload: Any) -> LayoutDescriptor:
        method = ACTIONS.get(action)
        if method is None:
            raise UnknownAction(f"Unknown action '{action}'", details={"action": action})
        handler = getattr(self, method)
        try:
            inspect.signature(handler).bind(**payload)
        except TypeError as exc:
            raise ValidationError(
                f"Bad payload for action '{action}': {exc}",
                details={"action": action, "payload": sorted(payload)},
                cause=exc,
            ) from exc
        handler(**payload)
        return self.render()

    # ---------- persistence ----------

    def _persist(self) -> None:
        if self.persistence is None or not self.store.dirty:
            return
        try:
            self.persistence.save(self.store.all())
        except PersistenceUnavailable as exc:
            # In-memory state stays authoritative; only durability is lost
            logger.warning("Save failed: %s", exc)
            self.notifications.push(CONFIG["labels"]["save_failed"], level="error", code=exc.code)
            return
        self.store.mark_clean()

    # ---------- navigation / view ----------

    def navigate_month(self, direction: int = 1) -> None:
        self.state.navigate_month(direction)

    def go_to_today(self) -> None:
        self.state.go_to_today(self.clock())

    def select_date(self, day: Any) -> None:
        self.state.select_date(day)

    def cycle_view(self) -> None:
        self.state.cycle_view()

    def set_view(self, view: str) -> None:
        self.state.set_view(view)

    def select_event(self, event_id: str) -> None:
        self.state.select_event(self.store.get(event_id))

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def set_sidebar_filter(self, filter: str) -> None:
        self.state.set_sidebar_filter(filter)

    def toggle_sidebar_filter(self) -> None:
        self.state.toggle_sidebar_filter()

    # ---------- event mutations ----------

    def save_event(self, fields: Mapping[str, Any]) -> str:
        """Create when `fields` has no id, otherwise update that event. Returns the id."""
        event_id = fields.get("id")
        if event_id:
            self.store.update(event_id, fields)
        else:
            event_id = self.store.add({k: v for k, v in fields.items() if k != "id"})
        self._persist()
        return event_id

    def delete_event(self, event_id: Optional[str] = None) -> Optional[CalendarEvent]:
        """Delete by id, or the selected event when no id is given."""
        target = event_id or self.state.selected_event_id
        if target is None:
            debug_log("Delete requested with nothing selected")
            return None
        removed = self.store.remove(target)
        if self.state.selected_event_id == target:
            self.state.clear_selection()
        self._persist()
        return removed
