"""Enumerations describing views, alerts, tabs and choices in the application."""

from __future__ import annotations

from enum import Enum, auto


class FurView(Enum):
    """Top-level views; values match the names stored in settings."""

    SHORTCUTS = "Shortcuts"
    TIMER = "Timer"
    TODO = "Todo"
    REPORT = "Report"
    SETTINGS = "Settings"

    def message_key(self) -> str:
        """Return the localization key for this view's label."""
        return _VIEW_KEYS[self]


_VIEW_KEYS = {
    FurView.SHORTCUTS: "shortcuts",
    FurView.TIMER: "timer",
    FurView.TODO: "todo",
    FurView.REPORT: "report",
    FurView.SETTINGS: "settings",
}


class FurAlert(Enum):
    AUTOSAVE_RESTORED = auto()
    DELETE_EVERYTHING_CONFIRMATION = auto()
    DELETE_GROUP_CONFIRMATION = auto()
    DELETE_SHORTCUT_CONFIRMATION = auto()
    DELETE_TASK_CONFIRMATION = auto()
    DELETE_TODO_CONFIRMATION = auto()
    IDLE = auto()
    IMPORT_MAC_DATABASE = auto()
    NOTIFY_OF_SYNC = auto()
    POMODORO_BREAK_OVER = auto()
    POMODORO_OVER = auto()
    SHORTCUT_EXISTS = auto()


class FurInspectorView(Enum):
    ADD_NEW_TASK = auto()
    ADD_NEW_TODO = auto()
    ADD_SHORTCUT = auto()
    ADD_TASK_TO_GROUP = auto()
    EDIT_GROUP = auto()
    EDIT_SHORTCUT = auto()
    EDIT_TASK = auto()
    EDIT_TODO = auto()


class EditTaskProperty(Enum):
    NAME = auto()
    TAGS = auto()
    PROJECT = auto()
    RATE = auto()
    START_TIME = auto()
    STOP_TIME = auto()
    START_DATE = auto()
    STOP_DATE = auto()


class EditTodoProperty(Enum):
    TASK = auto()
    PROJECT = auto()
    TAGS = auto()
    RATE = auto()
    DATE = auto()


class TabId(Enum):
    GENERAL = auto()
    ADVANCED = auto()
    POMODORO = auto()
    REPORT = auto()
    DATA = auto()
    CHARTS = auto()
    LIST = auto()


class NotificationType(Enum):
    POMODORO_OVER = auto()
    BREAK_OVER = auto()
    IDLE = auto()
    REMINDER = auto()


class ChangeDB(Enum):
    OPEN = auto()
    NEW = auto()


class FurDateRange(Enum):
    """Report date ranges; values match their serialized names."""

    PAST_WEEK = "PastWeek"
    THIRTY_DAYS = "ThirtyDays"
    SIX_MONTHS = "SixMonths"
    ALL_TIME = "AllTime"
    RANGE = "Range"

    def message_key(self) -> str:
        """Return the localization key for this range's label."""
        return _DATE_RANGE_KEYS[self]


_DATE_RANGE_KEYS = {
    FurDateRange.PAST_WEEK: "past-week",
    FurDateRange.THIRTY_DAYS: "past-thirty-days",
    FurDateRange.SIX_MONTHS: "past-six-months",
    FurDateRange.ALL_TIME: "all-time",
    FurDateRange.RANGE: "date-range",
}


class FurTaskProperty(Enum):
    TITLE = auto()
    PROJECT = auto()
    TAGS = auto()
    RATE = auto()

    def message_key(self) -> str:
        """Return the localization key for this property's label."""
        return _TASK_PROPERTY_KEYS[self]


_TASK_PROPERTY_KEYS = {
    FurTaskProperty.TITLE: "title",
    FurTaskProperty.PROJECT: "project",
    FurTaskProperty.TAGS: "tags",
    FurTaskProperty.RATE: "rate",
}


class ServerChoices(Enum):
    OFFICIAL = auto()
    CUSTOM = auto()

    def message_key(self) -> str:
        """Return the localization key for this choice's label."""
        return _SERVER_CHOICE_KEYS[self]


_SERVER_CHOICE_KEYS = {
    ServerChoices.OFFICIAL: "official-server",
    ServerChoices.CUSTOM: "custom",
}


class FurDarkLight(Enum):
    LIGHT = "Light"
    DARK = "Dark"
    AUTO = "Auto"