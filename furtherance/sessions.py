"""Transient session state: idle detection, pomodoro progress and the signed-in user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


def _now() -> datetime:
    return datetime.now().astimezone()


def format_duration(seconds: float) -> str:
    """Format a number of seconds as ``HH:MM:SS``; negative spans show as zero."""
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


@dataclass
class FurIdle:
    notified: bool = False
    reached: bool = False
    start_time: datetime = field(default_factory=_now)

    def duration(self, now: datetime | None = None) -> str:
        """Time spent idle since ``start_time``, as ``HH:MM:SS``."""
        now = _now() if now is None else now.astimezone()
        elapsed = now - self.start_time.astimezone()
        return format_duration(elapsed.total_seconds())


@dataclass
class FurPomodoro:
    on_break: bool = False
    sessions: int = 0
    snoozed: bool = False
    snoozed_at: datetime = field(default_factory=_now)


@dataclass
class FurUser:
    email: str
    encrypted_key: str
    key_nonce: str
    access_token: str
    refresh_token: str
    server: str