# Config flags and runtime settings

CONFIG = {
    "debug_mode": False,

    # Where the event collection lives between sessions
    "storage": {
        "format": "json",                     # json | ics
        "path": "data/neuron_events.json",
        "lock_timeout_s": 3.0
    },

    # Fixed colour palette; every event must use one of these
    "palette": ["blue", "green", "red", "purple", "orange", "teal"],

    # Month | Week | Day
    "default_view": "month",

    "month": {
        "max_previews": 3                     # extra events collapse into "+N more"
    },

    # Week/day time axis geometry
    "time_axis": {
        "hour_height_px": 60,
        "min_event_height_px": 20,
        "default_duration_min": 60
    },

    # Sliding week window centred on the selected date
    "week": {
        "days_before": 3,
        "days_after": 3
    },

    "sidebar": {
        "default_filter": "today",            # today | upcoming
        "upcoming_days": 7
    },

    # Toasts shown by the renderer (e.g. failed saves)
    "notifications": {
        "enabled": True,
        "max_pending": 20
    },

    "labels": {
        "views": {"month": "Month", "week": "Week", "day": "Day"},
        "sidebar": {"today": "Today", "upcoming": "Upcoming"},
        "all_day": "All day",
        "from_time": "From {start}",
        "no_description": "No description",
        "more": "+{count} more",
        "event_count": "{count} events",
        "save_failed": "Could not save your events. Changes are kept until you close the calendar."
    }
}
