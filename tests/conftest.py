"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from neuron_main.core.brain import Brain
from neuron_main.core.errors import PersistenceUnavailable
from neuron_main.core.state import SchedulerState
from neuron_main.neuron_calendar.calendar import EventStore, JsonEventStore

TODAY = date(2024, 3, 4)  # a Monday


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def standup():
    """The standup event from the product walkthrough."""
    return {
        "title": "Standup",
        "date": "2024-03-04",
        "start_time": "09:00",
        "end_time": "09:30",
        "color": "blue",
    }


@pytest.fixture
def store(standup):
    s = EventStore()
    s.add(standup)
    s.add({"title": "Offsite", "date": "2024-03-04", "color": "green"})
    s.add({"title": "Review", "date": "2024-03-06", "start_time": "14:00", "color": "red"})
    s.add({"title": "Dentist", "date": "2024-02-28", "start_time": "08:15", "end_time": "09:00",
           "color": "purple", "location": "Clinic"})
    s.mark_clean()
    return s


@pytest.fixture
def state(today):
    return SchedulerState.starting(today)


class FakeRenderer:
    def __init__(self):
        self.painted = []

    def paint(self, layout):
        self.painted.append(layout)


class FailingStore:
    """Store collaborator whose disk is gone."""

    def __init__(self):
        self.save_calls = 0

    def load(self):
        return []

    def save(self, events):
        self.save_calls += 1
        raise PersistenceUnavailable("disk full")


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def brain(tmp_path, renderer, today):
    return Brain.boot(JsonEventStore(tmp_path / "events.json"), renderer=renderer, clock=lambda: today)


@pytest.fixture
def failing_store():
    return FailingStore()
