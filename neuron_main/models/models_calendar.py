import datetime as dt
import uuid
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from neuron_main.core.errors import ValidationError
from neuron_main.utils.config import CONFIG


class ViewMode(str, Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


# Fixed cycling order for the view toggle
VIEW_ORDER = (ViewMode.MONTH, ViewMode.WEEK, ViewMode.DAY)


class SidebarFilter(str, Enum):
    TODAY = "today"
    UPCOMING = "upcoming"


def _now() -> dt.datetime:
    # Seconds precision so the timestamp survives every storage format
    return dt.datetime.now().replace(microsecond=0)


class CalendarEvent(BaseModel):
    """One scheduled item. Both times absent means an all-day event."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    date: dt.date
    start_time: Optional[dt.time] = Field(
        default=None, validation_alias=AliasChoices("start_time", "startTime"))
    end_time: Optional[dt.time] = Field(
        default=None, validation_alias=AliasChoices("end_time", "endTime"))
    description: Optional[str] = None
    location: Optional[str] = None
    color: str
    created_at: dt.datetime = Field(
        default_factory=_now, validation_alias=AliasChoices("created_at", "createdAt"))

    @field_validator("title")
    @classmethod
    def _title_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("start_time", "end_time", "description", "location", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        # HTML forms submit "" for untouched inputs
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def _minute_precision(cls, v: Optional[dt.time]) -> Optional[dt.time]:
        if v is None:
            return None
        return v.replace(second=0, microsecond=0, tzinfo=None)

    @field_validator("color", mode="before")
    @classmethod
    def _color_in_palette(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in CONFIG["palette"]:
                raise ValueError(f"color must be one of {', '.join(CONFIG['palette'])}")
        return v

    @model_validator(mode="after")
    def _times_ordered(self) -> "CalendarEvent":
        if self.end_time is not None and self.start_time is None:
            raise ValueError("end_time requires start_time")
        if self.start_time is not None and self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self

    @property
    def is_all_day(self) -> bool:
        return self.start_time is None and self.end_time is None

    def to_record(self) -> dict:
        """JSON-ready dict (ISO dates, HH:MM times)."""
        rec = self.model_dump(mode="json")
        for key in ("start_time", "end_time"):
            if rec[key]:
                rec[key] = rec[key][:5]
        return rec


def parse_event(data: Mapping[str, Any]) -> CalendarEvent:
    """Build a CalendarEvent, raising the core ValidationError on bad input."""
    try:
        return CalendarEvent.model_validate(dict(data))
    except PydanticValidationError as exc:
        problems = []
        fields = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ())) or "event"
            fields.append(loc)
            problems.append(f"{loc}: {err.get('msg', 'invalid')}")
        raise ValidationError(
            "; ".join(problems),
            details={"fields": fields, "errors": problems},
            cause=exc,
        ) from exc
