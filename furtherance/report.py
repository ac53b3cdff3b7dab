"""Report state: tasks within a date range, totals, and breakdowns by property."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from datetime import date as _Date

from furtherance.shortcuts import _to_f32
from furtherance.tasks import FurTask
from furtherance.view_enums import FurDateRange, FurTaskProperty, TabId

_log = logging.getLogger(__name__)

TaskFetcher = Callable[[date, date], Iterable[FurTask]]
"""Returns the tasks recorded between two calendar days, both inclusive."""

_ALL_TIME_START = date(1971, 1, 1)
_ALL_TIME_END = date(2300, 1, 1)

_MONTHS_31 = frozenset({1, 3, 5, 7, 8, 10, 12})
_MONTHS_30 = frozenset({4, 6, 9, 11})


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in ``month`` of ``year``; raises ValueError for a bad month."""
    if month in _MONTHS_31:
        return 31
    if month in _MONTHS_30:
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    raise ValueError(f"Invalid month: {month}")


def subtract_months(date: _Date, months: int) -> _Date:
    """``date`` moved back by ``months``, clamped to the end of a shorter month."""
    year = date.year
    month = date.month - months
    while month <= 0:
        month += 12
        year -= 1
    try:
        return _Date(year, month, date.day)
    except ValueError:
        return _Date(year, month, last_day_of_month(year, month))


def property_keys_for_task(
    task: FurTask,
    key: FurTaskProperty,
    none_label: str = "None",
    no_tags_label: str = "No tags",
) -> list[str]:
    """The values under which ``task`` is listed when broken down by ``key``."""
    if key is FurTaskProperty.TITLE:
        return [task.name]
    if key is FurTaskProperty.PROJECT:
        return [none_label if not task.project.strip() else task.project]
    if key is FurTaskProperty.TAGS:
        tags = [tag.strip() for tag in task.tags.split("#")]
        tags = [tag for tag in tags if tag]
        return tags or [no_tags_label]
    if task.rate == 0.0:
        return [none_label]
    return [f"${_to_f32(task.rate):.2f}"]


def _totals(tasks: Iterable[FurTask]) -> tuple[int, float]:
    total_time = 0
    total_earned = 0.0
    for task in tasks:
        total_time += task.total_time_in_seconds()
        total_earned += task.total_earnings()
    return total_time, total_earned


@dataclass
class FurReport:
    """Tasks in the chosen date range with overall and per-selection totals."""

    fetch_tasks: TaskFetcher
    today: Callable[[], date] = field(default=date.today)
    none_label: str = "None"
    no_tags_label: str = "No tags"
    active_tab: TabId = TabId.CHARTS
    picked_date_range: FurDateRange | None = FurDateRange.THIRTY_DAYS
    picked_task_property_key: FurTaskProperty | None = FurTaskProperty.TITLE
    picked_task_property_value: str | None = None
    show_end_date_picker: bool = False
    show_start_date_picker: bool = False
    date_range_start: date = field(init=False)
    date_range_end: date = field(init=False)
    picked_start_date: date = field(init=False)
    picked_end_date: date = field(init=False)
    selection_total_time: int = field(init=False, default=0)
    selection_total_earned: float = field(init=False, default=0.0)
    total_time: int = field(init=False, default=0)
    total_earned: float = field(init=False, default=0.0)
    tasks_in_range: list[FurTask] = field(init=False, default_factory=list)
    task_property_value_keys: list[str] = field(init=False, default_factory=list)
    task_property_values: dict[str, list[int]] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        today = self.today()
        thirty_days_ago = today - timedelta(days=30)
        self.date_range_start = thirty_days_ago
        self.date_range_end = today
        self.picked_start_date = thirty_days_ago
        self.picked_end_date = today
        self.update_tasks_in_range()

    def set_picked_date_range(self, new_range: FurDateRange) -> None:
        """Switch to a preset range (or the picked dates) and reload the tasks."""
        if self.picked_date_range == new_range:
            return
        self.picked_date_range = new_range
        today = self.today()
        if new_range is FurDateRange.PAST_WEEK:
            self.date_range_start = today - timedelta(days=7)
            self.date_range_end = today
        elif new_range is FurDateRange.THIRTY_DAYS:
            self.date_range_start = today - timedelta(days=30)
            self.date_range_end = today
        elif new_range is FurDateRange.SIX_MONTHS:
            self.date_range_start = subtract_months(today, 6)
            self.date_range_end = today
        elif new_range is FurDateRange.ALL_TIME:
            self.date_range_start = _ALL_TIME_START
            self.date_range_end = _ALL_TIME_END
        elif self.picked_start_date <= self.picked_end_date:
            self.date_range_start = self.picked_start_date
            self.date_range_end = self.picked_end_date
        self.update_tasks_in_range()

    def set_picked_task_property_key(self, new_property: FurTaskProperty) -> None:
        if self.picked_task_property_key != new_property:
            self.picked_task_property_key = new_property
            self._populate_task_property_values()
            self._update_selection()

    def set_picked_task_property_value(self, new_value: str) -> None:
        if self.picked_task_property_value != new_value:
            self.picked_task_property_value = new_value
            self._update_selection()

    def set_date_range_end(self, new_date: date) -> None:
        """Move the end of the range, unless it would fall before the start."""
        if self.date_range_end != new_date and new_date >= self.date_range_start:
            self.picked_end_date = new_date
            self.date_range_end = new_date
            self.show_end_date_picker = False
            self.update_tasks_in_range()

    def set_date_range_start(self, new_date: date) -> None:
        """Move the start of the range, unless it would fall after the end."""
        if self.date_range_start != new_date and new_date <= self.date_range_end:
            self.picked_start_date = new_date
            self.date_range_start = new_date
            self.show_start_date_picker = False
            self.update_tasks_in_range()

    def update_tasks_in_range(self) -> None:
        """Reload the tasks of the current range and recompute every total."""
        try:
            self.tasks_in_range = list(
                self.fetch_tasks(self.date_range_start, self.date_range_end)
            )
        except Exception as exc:  # the report stays usable with no data
            _log.warning("Could not retrieve data in range: %s", exc)
            self.tasks_in_range = []
        self._populate_task_property_values()
        self.total_time, self.total_earned = _totals(self.tasks_in_range)
        self._update_selection()

    def _update_selection(self) -> None:
        value = self.picked_task_property_value
        if value is None:
            return
        indices = self.task_property_values.get(value)
        if indices is None:
            return
        self.selection_total_time, self.selection_total_earned = _totals(
            self.tasks_in_range[i] for i in indices
        )

    def _populate_task_property_values(self) -> None:
        key = self.picked_task_property_key
        if key is None:
            return
        values: dict[str, list[int]] = {}
        for index, task in enumerate(self.tasks_in_range):
            for value in property_keys_for_task(
                task, key, self.none_label, self.no_tags_label
            ):
                values.setdefault(value, []).append(index)
        self.task_property_values = values

        if key is FurTaskProperty.RATE:
            rated = sorted((k for k in values if k != self.none_label), reverse=True)
            keys = rated + [k for k in values if k == self.none_label]
        else:
            keys = sorted(values, key=str.lower)
        self.task_property_value_keys = keys

        if keys:
            self.picked_task_property_value = keys[0]