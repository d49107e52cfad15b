from datetime import date, datetime

from neuron_main.neuron_calendar.calendar import EventStore
from neuron_main.neuron_calendar.index import DateIndex


def test_standup_is_found_on_its_day(standup):
    s = EventStore()
    ev_id = s.add(standup)
    index = DateIndex(s)
    found = index.for_date(date(2024, 3, 4))
    assert [ev.id for ev in found] == [ev_id]
    assert index.for_date(date(2024, 3, 5)) == []


def test_for_date_accepts_datetimes(store):
    index = DateIndex(store)
    titles = [ev.title for ev in index.for_date(datetime(2024, 3, 4, 23, 30))]
    assert titles == ["Standup", "Offsite"]


def test_for_range_is_inclusive_and_sorted_by_date(store):
    store.add({"title": "Early", "date": "2024-03-01", "color": "teal"})
    index = DateIndex(store)
    titles = [ev.title for ev in index.for_range(date(2024, 2, 28), date(2024, 3, 6))]
    assert titles == ["Dentist", "Early", "Standup", "Offsite", "Review"]


def test_for_range_single_day_and_inverted(store):
    index = DateIndex(store)
    assert [ev.title for ev in index.for_range("2024-03-06", "2024-03-06")] == ["Review"]
    assert index.for_range(date(2024, 3, 6), date(2024, 3, 1)) == []


def test_index_follows_store_mutations(store):
    index = DateIndex(store)
    assert len(index.for_date(date(2024, 3, 6))) == 1
    new_id = store.add({"title": "Retro", "date": "2024-03-06", "color": "red"})
    assert [ev.title for ev in index.for_date(date(2024, 3, 6))] == ["Review", "Retro"]
    store.update(new_id, {"date": "2024-03-07"})
    assert [ev.title for ev in index.for_date(date(2024, 3, 7))] == ["Retro"]
    store.remove(new_id)
    assert index.for_date(date(2024, 3, 7)) == []


def test_busy_days_and_has_events(store):
    index = DateIndex(store)
    assert index.busy_days(2024, 3) == {4, 6}
    assert index.busy_days(2024, 2) == {28}
    assert index.has_events(date(2024, 3, 4))
    assert not index.has_events(date(2024, 3, 5))
