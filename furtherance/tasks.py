"""Recorded time entries and groups of similar entries."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from furtherance.hashing import blake3_hex

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


def _unix_seconds(moment: datetime) -> int:
    return (_aware(moment) - _EPOCH) // timedelta(seconds=1)


def _whole_seconds(delta: timedelta) -> int:
    """Whole seconds in ``delta``, truncated toward zero."""
    seconds = delta.days * 86400 + delta.seconds
    if seconds < 0 and delta.microseconds:
        seconds += 1
    return seconds


def _describe(name: str, project: str, tags: str, rate: float) -> str:
    parts = [name]
    if project:
        parts.append(f" @{project}")
    if tags:
        parts.append(f" #{tags}")
    if rate != 0.0:
        parts.append(f" ${rate:.2f}")
    return "".join(parts)


def generate_task_uid(name: str, start_time: datetime, stop_time: datetime) -> str:
    """Identifier derived from the task name and its start and stop timestamps."""
    return blake3_hex(f"{name}{_unix_seconds(start_time)}{_unix_seconds(stop_time)}")


@dataclass
class FurTask:
    name: str
    start_time: datetime
    stop_time: datetime
    tags: str
    project: str
    rate: float
    currency: str
    uid: str
    is_deleted: bool = False
    last_updated: int = 0

    @classmethod
    def create(
        cls,
        name: str,
        start_time: datetime,
        stop_time: datetime,
        tags: str,
        project: str,
        rate: float,
        currency: str,
        last_updated: int | None = None,
    ) -> FurTask:
        """Build a task with a generated uid; ``last_updated`` defaults to now."""
        return cls(
            name=name,
            start_time=start_time,
            stop_time=stop_time,
            tags=tags,
            project=project,
            rate=rate,
            currency=currency,
            uid=generate_task_uid(name, start_time, stop_time),
            last_updated=int(time.time()) if last_updated is None else last_updated,
        )

    def total_time_in_seconds(self) -> int:
        return _whole_seconds(_aware(self.stop_time) - _aware(self.start_time))

    def total_earnings(self) -> float:
        return (self.total_time_in_seconds() / 3600.0) * self.rate

    def __str__(self) -> str:
        return _describe(self.name, self.project, self.tags, self.rate)


@dataclass
class EncryptedTask:
    encrypted_data: str
    nonce: str
    uid: str
    last_updated: int


@dataclass
class FurTaskGroup:
    uid: str
    name: str
    tags: str
    project: str
    rate: float
    total_time: int
    tasks: list[FurTask] = field(default_factory=list)

    @classmethod
    def from_task(cls, task: FurTask) -> FurTaskGroup:
        return cls(
            uid=task.uid,
            name=task.name,
            tags=task.tags,
            project=task.project,
            rate=task.rate,
            total_time=task.total_time_in_seconds(),
            tasks=[task],
        )

    def add(self, task: FurTask) -> None:
        self.total_time += task.total_time_in_seconds()
        self.tasks.append(task)

    def is_equal_to(self, task: FurTask) -> bool:
        """Whether ``task`` belongs in this group (project compared case-insensitively)."""
        return (
            self.name == task.name
            and self.tags == task.tags
            and self.project.lower() == task.project.lower()
            and self.rate == task.rate
        )

    def all_task_ids(self) -> list[str]:
        return [task.uid for task in self.tasks]

    def __str__(self) -> str:
        return _describe(self.name, self.project, self.tags, self.rate)