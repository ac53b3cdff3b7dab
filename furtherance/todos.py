"""To-do items, their add/edit forms, and helpers for listing them by day."""

from __future__ import annotations

import math
import struct
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from furtherance.hashing import blake3_hex
from furtherance.shortcuts import _f32_display, _to_f32
from furtherance.tasks import _describe

_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_DEFAULT_LABELS = {"today": "Today", "yesterday": "Yesterday", "tomorrow": "Tomorrow"}


def _local(moment: datetime) -> datetime:
    """``moment`` as an aware datetime in the local time zone."""
    return moment.astimezone()


def _timestamp(moment: datetime) -> int:
    return math.floor(_local(moment).timestamp())


def _parse_rate(text: str) -> float:
    """Parse a rate typed by the user as a single-precision float, or 0.0."""
    text = text.strip()
    if not text or "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    try:
        return _to_f32(value)
    except (OverflowError, struct.error):
        return math.copysign(math.inf, value)


def generate_todo_uid(name: str, date: datetime) -> str:
    """Identifier derived from the to-do name and its Unix timestamp."""
    return blake3_hex(f"{name}{_timestamp(date)}")


@dataclass
class FurTodo:
    name: str
    project: str
    tags: str
    rate: float
    currency: str
    date: datetime
    uid: str
    is_completed: bool = False
    is_deleted: bool = False
    last_updated: int = 0

    @classmethod
    def create(
        cls,
        name: str,
        project: str,
        tags: str,
        rate: float,
        date: datetime,
    ) -> FurTodo:
        """Build an open to-do with a generated uid, stamped with the current time."""
        return cls(
            name=name,
            project=project,
            tags=tags,
            rate=rate,
            currency="",
            date=date,
            uid=generate_todo_uid(name, date),
            last_updated=int(time.time()),
        )

    def __str__(self) -> str:
        return _describe(self.name, self.project, self.tags, self.rate)


@dataclass
class EncryptedTodo:
    encrypted_data: str
    nonce: str
    uid: str
    last_updated: int


@dataclass
class TodoToAdd:
    """State of the form for creating a new to-do."""

    name: str = ""
    project: str = ""
    tags: str = ""
    rate: str = f"{0.0:.2f}"
    date: datetime = field(default_factory=lambda: datetime.now().astimezone())
    displayed_date: date | None = None
    show_date_picker: bool = False
    invalid_input_error_message: str = ""

    def __post_init__(self) -> None:
        if self.displayed_date is None:
            self.displayed_date = _local(self.date).date()

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message


@dataclass
class TodoToEdit:
    """State of the form for editing an existing to-do."""

    name: str
    new_name: str
    date: datetime
    new_date: datetime
    displayed_date: date
    show_date_picker: bool
    project: str
    new_project: str
    tags: str
    new_tags: str
    rate: float
    new_rate: str
    uid: str
    is_completed: bool
    invalid_input_error_message: str = ""

    @classmethod
    def from_todo(cls, todo: FurTodo) -> TodoToEdit:
        return cls(
            name=todo.name,
            new_name=todo.name,
            date=todo.date,
            new_date=todo.date,
            displayed_date=_local(todo.date).date(),
            show_date_picker=False,
            project=todo.project,
            new_project=todo.project,
            tags=todo.tags,
            new_tags=f"#{todo.tags}" if todo.tags else todo.tags,
            rate=todo.rate,
            new_rate=f"{todo.rate:.2f}",
            uid=todo.uid,
            is_completed=todo.is_completed,
        )

    def is_changed(self) -> bool:
        """Whether the edited values differ from the original ones."""
        typed_tags = self.new_tags.strip()
        if typed_tags.startswith("#"):
            new_tags = typed_tags[1:].strip()
        else:
            new_tags = self.tags.strip()
        return (
            self.name != self.new_name.strip()
            or self.date != self.new_date
            or self.tags != new_tags
            or self.project != self.new_project.strip()
            or _to_f32(self.rate) != _parse_rate(self.new_rate)
        )

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message


def group_todos_by_date(todos: Iterable[FurTodo]) -> dict[date, list[FurTodo]]:
    """Group to-dos by their local calendar day, days in ascending order."""
    grouped: dict[date, list[FurTodo]] = {}
    for todo in todos:
        grouped.setdefault(_local(todo.date).date(), []).append(todo)
    return dict(sorted(grouped.items()))


def format_todo_date(
    date: date,
    today: date | None = None,
    labels: Mapping[str, str] | None = None,
) -> str:
    """Heading for a day of to-dos: a relative label near today, else the date."""
    today = date.today() if today is None else today
    labels = _DEFAULT_LABELS if labels is None else labels
    relative = {
        today: "today",
        today - timedelta(days=1): "yesterday",
        today + timedelta(days=1): "tomorrow",
    }
    key = relative.get(date)
    if key is not None:
        return labels.get(key, _DEFAULT_LABELS[key])
    text = f"{_MONTHS[date.month - 1]} {date.day:02d}"
    if date.year != today.year:
        text += f", {date.year}"
    return text


def todo_extra_text(
    todo: FurTodo,
    show_project: bool = True,
    show_tags: bool = True,
    show_rate: bool = True,
) -> str:
    """Secondary text shown after a to-do's name in the list."""
    parts = []
    if show_project and todo.project:
        parts.append(f"  @{todo.project}")
    if show_tags and todo.tags:
        parts.append(f"  #{todo.tags}")
    if show_rate and todo.rate > 0.0:
        parts.append(f"  ${_f32_display(todo.rate)}")
    return "".join(parts)