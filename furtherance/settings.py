"""User preferences stored as TOML in the application's data directory."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

from furtherance.view_enums import FurView

_log = logging.getLogger(__name__)

_APP_NAME = "furtherance"
_APP_AUTHOR = "unobserved"
_DB_FILE = "furtherance.db"
_SETTINGS_FILE = "settings.toml"

_U16_MAX = 0xFFFF
_U16_FIELDS = frozenset({"notify_reminder_interval", "pomodoro_extended_break_interval"})

# Settings added after the first release; older files may lack them.
_LATER_ADDITIONS: dict[str, Any] = {
    "first_run": True,
    "notify_reminder": False,
    "notify_reminder_interval": 10,
    "show_chart_selection_earnings": True,
    "last_sync": 0,
    "needs_full_sync": True,
    "notify_of_sync": True,
    "pomodoro_notification_alarm_sound": True,
    "show_task_earnings": True,
    "show_task_project": True,
    "show_task_tags": True,
    "show_todo_project": True,
    "show_todo_rate": True,
    "show_todo_tags": True,
}


class SettingsError(ValueError):
    """The settings file is unreadable or holds an invalid value."""


def get_data_path() -> Path:
    """The application's data directory, created if it does not exist."""
    path = Path(platformdirs.user_data_dir(_APP_NAME, _APP_AUTHOR))
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_default_db_path() -> Path:
    return get_data_path() / _DB_FILE


def get_settings_path() -> Path:
    return get_data_path() / _SETTINGS_FILE


def _default_db_url() -> str:
    return str(get_default_db_path())


@dataclass
class FurSettings:
    chosen_idle_time: int = 6
    database_url: str = field(default_factory=_default_db_url)
    days_to_show: int = 365
    default_view: FurView = FurView.TIMER
    dynamic_total: bool = False
    first_run: bool = True
    last_sync: int = 0
    needs_full_sync: bool = True
    notify_of_sync: bool = True
    notify_on_idle: bool = True
    notify_reminder: bool = False
    notify_reminder_interval: int = 10
    pomodoro: bool = False
    pomodoro_break_length: int = 5
    pomodoro_extended_breaks: bool = False
    pomodoro_extended_break_interval: int = 4
    pomodoro_extended_break_length: int = 25
    pomodoro_length: int = 25
    pomodoro_notification_alarm_sound: bool = True
    pomodoro_snooze_length: int = 5
    show_chart_average_earnings: bool = True
    show_chart_average_time: bool = True
    show_chart_breakdown_by_selection: bool = True
    show_chart_earnings: bool = True
    show_chart_selection_earnings: bool = True
    show_chart_selection_time: bool = True
    show_chart_time_recorded: bool = True
    show_chart_total_earnings_box: bool = True
    show_chart_total_time_box: bool = True
    show_daily_time_total: bool = True
    show_delete_confirmation: bool = True
    show_seconds: bool = True
    show_task_earnings: bool = True
    show_task_project: bool = True
    show_task_tags: bool = True
    show_todo_project: bool = True
    show_todo_rate: bool = True
    show_todo_tags: bool = True
    settings_path: Path | None = field(default=None, repr=False, compare=False)

    @classmethod
    def load(cls, path: str | Path | None = None) -> FurSettings:
        """Read settings from ``path``, creating a default file if there is none.

        Settings introduced in later versions are filled in and written back.
        """
        path = get_settings_path() if path is None else Path(path)
        if not path.exists():
            settings = cls(settings_path=path)
            settings.save()
            return settings

        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise SettingsError(f"invalid settings file {path}: {exc}") from exc

        merged = {**_LATER_ADDITIONS, **data}
        values = {}
        for name in _KINDS:
            if name not in merged:
                raise SettingsError(f"missing field `{name}`")
            values[name] = _coerce(name, merged[name])

        settings = cls(settings_path=path, **values)
        try:
            settings.save()
        except OSError as exc:
            _log.error("Error saving updated settings: %s", exc)
        return settings

    def save(self) -> None:
        """Write the settings to their file."""
        path = self.settings_path if self.settings_path is not None else get_settings_path()
        path.write_text(tomli_w.dumps(self._as_toml()), encoding="utf-8")

    def update(self, **kwargs: Any) -> None:
        """Change one or more settings and save them."""
        unknown = [name for name in kwargs if name not in _KINDS]
        if unknown:
            raise TypeError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        coerced = {name: _coerce(name, value) for name, value in kwargs.items()}
        for name, value in coerced.items():
            setattr(self, name, value)
        self.save()

    def reset_to_default_db_location(self) -> None:
        self.database_url = _default_db_url()
        self.save()

    def _as_toml(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name in _KINDS:
            value = getattr(self, name)
            out[name] = value.value if isinstance(value, FurView) else value
        return out


_KINDS: dict[str, str] = {
    f.name: str(f.type) for f in fields(FurSettings) if f.name != "settings_path"
}


def _coerce(name: str, value: Any) -> Any:
    kind = _KINDS[name]
    if kind == "bool":
        return _to_bool(name, value)
    if kind == "int":
        number = _to_int(name, value)
        if name in _U16_FIELDS and not 0 <= number <= _U16_MAX:
            raise SettingsError(f"{name} out of range: {number}")
        return number
    if kind == "str":
        if isinstance(value, str):
            return value
        raise SettingsError(f"{name} must be text, got {value!r}")
    if isinstance(value, FurView):
        return value
    try:
        return FurView(value)
    except ValueError as exc:
        raise SettingsError(f"{name} has unknown view {value!r}") from exc


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise SettingsError(f"{name} must be true or false, got {value!r}")


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise SettingsError(f"{name} must be a whole number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise SettingsError(f"{name} must be a whole number, got {value!r}")