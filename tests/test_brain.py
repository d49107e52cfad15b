import logging
from datetime import date

import pytest

from neuron_main.core.brain import ACTIONS, Brain
from neuron_main.core.errors import NotFound, UnknownAction, ValidationError
from neuron_main.core.notifications import NotificationCenter
from neuron_main.models.layout import DayLayout, WeekLayout
from neuron_main.models.models_calendar import ViewMode
from neuron_main.neuron_calendar.calendar import JsonEventStore
from neuron_main.utils.config import CONFIG


def test_boot_with_no_file_starts_empty(brain, today):
    assert len(brain.store) == 0
    assert brain.state.selected_date == today
    layout = brain.render()
    assert layout.header.title == "March 2024"


def test_save_event_creates_and_persists(brain, standup, tmp_path):
    ev_id = brain.save_event(standup)
    assert ev_id in brain.store
    assert not brain.store.dirty
    reloaded = JsonEventStore(tmp_path / "events.json").load()
    assert [ev.id for ev in reloaded] == [ev_id]


def test_save_event_with_id_updates(brain, standup):
    ev_id = brain.save_event(standup)
    brain.save_event({"id": ev_id, "title": "Standup (long)", "endTime": "10:00"})
    ev = brain.store.get(ev_id)
    assert ev.title == "Standup (long)"
    assert ev.end_time.hour == 10
    assert len(brain.store) == 1


def test_save_event_with_unknown_id(brain):
    with pytest.raises(NotFound):
        brain.save_event({"id": "nope", "title": "x"})


def test_invalid_save_leaves_store_untouched(brain):
    with pytest.raises(ValidationError):
        brain.dispatch("save_event", fields={"title": "", "date": "2024-03-04", "color": "blue"})
    assert len(brain.store) == 0


def test_delete_selected_event(brain, standup):
    ev_id = brain.save_event(standup)
    brain.dispatch("select_event", event_id=ev_id)
    assert brain.state.selected_event_id == ev_id
    layout = brain.dispatch("delete_event")
    assert ev_id not in brain.store
    assert brain.state.selected_event_id is None
    assert layout.details is None


def test_delete_with_nothing_selected_is_a_no_op(brain, standup):
    brain.save_event(standup)
    assert brain.delete_event() is None
    assert len(brain.store) == 1


def test_delete_unknown_event(brain, standup):
    ev_id = brain.save_event(standup)
    brain.select_event(ev_id)
    with pytest.raises(NotFound):
        brain.delete_event("missing")
    assert len(brain.store) == 1
    assert brain.state.selected_event_id == ev_id


def test_select_unknown_event(brain):
    with pytest.raises(NotFound):
        brain.dispatch("select_event", event_id="missing")


def test_dispatch_paints_every_action(brain, renderer):
    brain.dispatch("cycle_view")
    brain.dispatch("cycle_view")
    brain.dispatch("navigate_month", direction=-1)
    assert len(renderer.painted) == 3
    assert isinstance(renderer.painted[0].body, WeekLayout)
    assert isinstance(renderer.painted[1].body, DayLayout)
    assert renderer.painted[2].header.title == "February 2024"


def test_dispatch_navigation_actions(brain, today):
    brain.dispatch("select_date", day="2024-03-20")
    assert brain.state.selected_date == date(2024, 3, 20)
    brain.dispatch("navigate_month", direction=2)
    brain.dispatch("go_to_today")
    assert brain.state.selected_date == today
    assert brain.state.anchor == date(2024, 3, 1)
    brain.dispatch("set_view", view="day")
    assert brain.state.view == ViewMode.DAY
    layout = brain.dispatch("toggle_sidebar_filter")
    assert layout.sidebar.label == "Upcoming"
    brain.dispatch("set_sidebar_filter", filter="today")
    brain.dispatch("clear_selection")


def test_every_action_id_maps_to_a_method():
    for action, method in ACTIONS.items():
        assert callable(getattr(Brain, method)), action


def test_unknown_action(brain, renderer):
    with pytest.raises(UnknownAction) as info:
        brain.dispatch("launch_rockets")
    assert info.value.details["action"] == "launch_rockets"
    assert renderer.painted == []


def test_save_failure_keeps_events_and_notifies(failing_store, renderer, standup, today, caplog):
    brain = Brain.boot(failing_store, renderer=renderer, clock=lambda: today)
    with caplog.at_level(logging.WARNING):
        brain.dispatch("save_event", fields=standup)
    assert len(brain.store) == 1
    assert brain.store.dirty
    assert failing_store.save_calls == 1
    assert "Save failed" in caplog.text
    painted = renderer.painted[-1]
    (note,) = painted.notifications
    assert note.level == "error"
    assert note.code == "PERSISTENCE_UNAVAILABLE"
    assert note.message == CONFIG["labels"]["save_failed"]
    cell = next(c for c in painted.body.cells if c.date == today)
    assert [e.title for e in cell.events] == ["Standup"]


def test_toasts_are_painted_once(failing_store, renderer, standup, today):
    brain = Brain.boot(failing_store, renderer=renderer, clock=lambda: today)
    brain.dispatch("save_event", fields=standup)
    brain.dispatch("cycle_view")
    assert len(renderer.painted[0].notifications) == 1
    assert renderer.painted[1].notifications == ()
    assert len(brain.notifications) == 0


def test_injected_notification_center_receives_toast(failing_store, standup, today):
    center = NotificationCenter()
    brain = Brain.boot(failing_store, notifications=center, clock=lambda: today)
    assert brain.notifications is center
    brain.save_event(standup)
    assert len(center) == 1
    assert center.pending()[0].level == "error"


@pytest.mark.parametrize("action,payload", [
    ("set_view", {"view": "year"}),
    ("select_date", {"day": "2024-02-30"}),
    ("select_date", {"day": None}),
    ("set_sidebar_filter", {"filter": "past"}),
    ("navigate_month", {"direction": "forward"}),
    ("select_date", {}),
    ("cycle_view", {"view": "week"}),
])
def test_bad_payload_is_a_validation_error(brain, renderer, today, action, payload):
    with pytest.raises(ValidationError):
        brain.dispatch(action, **payload)
    assert brain.state.view == ViewMode.MONTH
    assert brain.state.selected_date == today
    assert brain.state.anchor == date(2024, 3, 1)
    assert renderer.painted == []


def test_save_is_retried_on_next_mutation(failing_store, standup, today):
    brain = Brain.boot(failing_store, clock=lambda: today)
    brain.save_event(standup)
    brain.save_event({"title": "Lunch", "date": "2024-03-04", "color": "green"})
    assert failing_store.save_calls == 2
    assert len(brain.notifications) == 2


def test_boot_loads_existing_events(tmp_path, store, today):
    path = tmp_path / "events.json"
    JsonEventStore(path).save(store.all())
    brain = Brain.boot(JsonEventStore(path), clock=lambda: today)
    assert [ev.title for ev in brain.store] == ["Standup", "Offsite", "Review", "Dentist"]
    assert not brain.store.dirty
