"""Form state for adding and editing tasks, task groups and shortcuts."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from furtherance.shortcuts import FurShortcut, _to_f32
from furtherance.tasks import FurTask, FurTaskGroup
from furtherance.todos import _parse_rate

_HEX_DIGITS = frozenset(string.hexdigits)


def random_color_hex() -> str:
    """A random opaque colour as ``#rrggbb``."""
    return "#" + "".join(f"{random.randrange(256):02x}" for _ in range(3))


def _parse_color(text: str) -> str | None:
    """Normalise a ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa`` colour.

    The leading ``#`` is optional. Returns ``#rrggbb`` for opaque colours,
    ``#rrggbbaa`` otherwise, or ``None`` when the text is not a colour.
    """
    digits = text[1:] if text.startswith("#") else text
    if not digits or not set(digits) <= _HEX_DIGITS:
        return None
    if len(digits) in (3, 4):
        channels = [c * 2 for c in digits]
    elif len(digits) in (6, 8):
        channels = [digits[i : i + 2] for i in range(0, len(digits), 2)]
    else:
        return None
    if len(channels) == 4 and channels[3].lower() == "ff":
        channels = channels[:3]
    return "#" + "".join(channels).lower()


def _edited_tags(original: str, typed: str) -> str:
    """Tags as the user typed them; text without a leading ``#`` keeps the original."""
    typed = typed.strip()
    if typed.startswith("#"):
        return typed[1:].strip()
    return original.strip()


def _parse_untrimmed_rate(text: str) -> float:
    """Parse a rate without tolerating surrounding whitespace; invalid text is 0.0."""
    if text != text.strip():
        return 0.0
    return _parse_rate(text)


def _hashed(tags: str) -> str:
    return f"#{tags}" if tags else tags


def _local(moment: datetime) -> datetime:
    return moment.astimezone()


def _clock(moment: datetime) -> time:
    return _local(moment).time().replace(microsecond=0, tzinfo=None)


def _day(moment: datetime) -> date:
    return _local(moment).date()


@dataclass
class GroupToEdit:
    """State of the form for editing every task in a group at once."""

    uid: str
    name: str
    new_name: str
    tags: str
    new_tags: str
    project: str
    new_project: str
    rate: float
    new_rate: str
    tasks: list[FurTask] = field(default_factory=list)
    is_in_edit_mode: bool = False
    invalid_input_error_message: str = ""

    @classmethod
    def from_group(cls, group: FurTaskGroup) -> GroupToEdit:
        return cls(
            uid=group.uid,
            name=group.name,
            new_name=group.name,
            tags=group.tags,
            new_tags=_hashed(group.tags),
            project=group.project,
            new_project=group.project,
            rate=group.rate,
            new_rate=f"{group.rate:.2f}",
            tasks=list(group.tasks),
        )

    def is_changed(self) -> bool:
        """Whether the edited values differ from the original ones."""
        return (
            self.name != self.new_name.strip()
            or self.tags != _edited_tags(self.tags, self.new_tags)
            or self.project != self.new_project.strip()
            or _to_f32(self.rate) != _parse_rate(self.new_rate)
        )

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message

    def all_task_ids(self) -> list[str]:
        return [task.uid for task in self.tasks]


@dataclass
class ShortcutToAdd:
    """State of the form for creating a new shortcut."""

    name: str = ""
    tags: str = ""
    project: str = ""
    new_rate: str = f"{0.0:.2f}"
    color: str = field(default_factory=random_color_hex)
    show_color_picker: bool = False
    invalid_input_error_message: str = ""

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message


@dataclass
class ShortcutToEdit:
    """State of the form for editing an existing shortcut."""

    name: str
    new_name: str
    tags: str
    new_tags: str
    project: str
    new_project: str
    rate: float
    new_rate: str
    color: str
    new_color: str
    uid: str
    show_color_picker: bool = False
    invalid_input_error_message: str = ""

    @classmethod
    def from_shortcut(cls, shortcut: FurShortcut, fallback_color: str) -> ShortcutToEdit:
        """Start editing ``shortcut``; an unreadable colour becomes ``fallback_color``."""
        color = _parse_color(shortcut.color_hex)
        if color is None:
            color = _parse_color(fallback_color)
            if color is None:
                raise ValueError(f"invalid fallback colour: {fallback_color!r}")
        return cls(
            name=shortcut.name,
            new_name=shortcut.name,
            tags=shortcut.tags,
            new_tags=shortcut.tags,
            project=shortcut.project,
            new_project=shortcut.project,
            rate=shortcut.rate,
            new_rate=f"{shortcut.rate:.2f}",
            color=color,
            new_color=color,
            uid=shortcut.uid,
        )

    def is_changed(self) -> bool:
        """Whether the edited values differ from the original ones."""
        new_color = _parse_color(self.new_color) or self.new_color
        return (
            self.name != self.new_name
            or self.tags != _edited_tags(self.tags, self.new_tags)
            or self.project != self.new_project.strip()
            or _to_f32(self.rate) != _parse_untrimmed_rate(self.new_rate)
            or self.color != new_color
        )

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message


@dataclass
class TaskToAdd:
    """State of the form for recording a task by hand."""

    name: str
    start_time: datetime
    displayed_start_time: time
    displayed_start_date: date
    stop_time: datetime
    displayed_stop_time: time
    displayed_stop_date: date
    tags: str = ""
    project: str = ""
    rate: float = 0.0
    new_rate: str = f"{0.0:.2f}"
    show_start_time_picker: bool = False
    show_start_date_picker: bool = False
    show_stop_time_picker: bool = False
    show_stop_date_picker: bool = False
    invalid_input_error_message: str = ""

    @classmethod
    def create(cls, now: datetime | None = None) -> TaskToAdd:
        """A blank task covering the hour before ``now`` (default: the current time)."""
        now = datetime.now().astimezone() if now is None else _local(now)
        one_hour_ago = now - timedelta(hours=1)
        return cls(
            name="",
            start_time=one_hour_ago,
            displayed_start_time=_clock(one_hour_ago),
            displayed_start_date=_day(one_hour_ago),
            stop_time=now,
            displayed_stop_time=_clock(now),
            displayed_stop_date=_day(now),
        )

    @classmethod
    def from_group(cls, group: GroupToEdit) -> TaskToAdd:
        """A new task for ``group``, from noon to one on the day of its first task."""
        start = _on_day_of_first_task(group, time(12, 0, 0))
        stop = _on_day_of_first_task(group, time(13, 0, 0))
        return cls(
            name=group.name,
            start_time=start,
            displayed_start_time=_clock(start),
            displayed_start_date=_day(start),
            stop_time=stop,
            displayed_stop_time=_clock(stop),
            displayed_stop_date=_day(stop),
            tags=_hashed(group.tags),
            project=group.project,
            rate=group.rate,
            new_rate=f"{group.rate:.2f}",
        )

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message


def _on_day_of_first_task(group: GroupToEdit, clock: time) -> datetime:
    if not group.tasks:
        return datetime.now().astimezone()
    day = _day(group.tasks[0].start_time)
    return datetime.combine(day, clock).astimezone()


@dataclass
class TaskToEdit:
    """State of the form for editing a recorded task."""

    name: str
    new_name: str
    start_time: datetime
    new_start_time: datetime
    displayed_start_time: time
    displayed_start_date: date
    stop_time: datetime
    new_stop_time: datetime
    displayed_stop_time: time
    displayed_stop_date: date
    tags: str
    new_tags: str
    project: str
    new_project: str
    rate: float
    new_rate: str
    uid: str
    show_displayed_start_time_picker: bool = False
    show_displayed_start_date_picker: bool = False
    show_displayed_stop_time_picker: bool = False
    show_displayed_stop_date_picker: bool = False
    invalid_input_error_message: str = ""

    @classmethod
    def from_task(cls, task: FurTask) -> TaskToEdit:
        return cls(
            name=task.name,
            new_name=task.name,
            start_time=task.start_time,
            new_start_time=task.start_time,
            displayed_start_time=_clock(task.start_time),
            displayed_start_date=_day(task.start_time),
            stop_time=task.stop_time,
            new_stop_time=task.stop_time,
            displayed_stop_time=_clock(task.stop_time),
            displayed_stop_date=_day(task.stop_time),
            tags=task.tags,
            new_tags=_hashed(task.tags),
            project=task.project,
            new_project=task.project,
            rate=task.rate,
            new_rate=f"{task.rate:.2f}",
            uid=task.uid,
        )

    def is_changed(self) -> bool:
        """Whether the edited values differ from the original ones."""
        return (
            self.name != self.new_name.strip()
            or self.start_time != self.new_start_time
            or self.stop_time != self.new_stop_time
            or self.tags != _edited_tags(self.tags, self.new_tags)
            or self.project != self.new_project.strip()
            or _to_f32(self.rate) != _parse_rate(self.new_rate)
        )

    def input_error(self, message: str) -> None:
        self.invalid_input_error_message = message