# furtherance

Track your time without being tracked.

`furtherance` is a library holding the core of a privacy-respecting time
tracker: task, shortcut and to-do models, form state for editing them, report
totals over a date range, settings stored as TOML, AES-256-GCM encryption of
records, and an asynchronous client for an end-to-end encrypted sync server.

## Installation

```
pip install furtherance
```

To run the test suite:

```
pip install "furtherance[test]"
pytest
```

## Modules

- `furtherance.tasks`: `FurTask` (built with `FurTask.create`, which derives
  the `uid` with `generate_task_uid`), `EncryptedTask` and `FurTaskGroup`.
  A task reports its length with `total_time_in_seconds()` and its earnings
  with `total_earnings()`. `FurTaskGroup.from_task` starts a group,
  `add` appends a task and adds its time to `total_time`, `is_equal_to` tells
  whether a task has the same name, tags, rate and (ignoring case) project,
  and `all_task_ids` lists the uids.
- `furtherance.shortcuts`: `FurShortcut` (via `FurShortcut.create`),
  `EncryptedShortcut` and `generate_shortcut_uid`.
- `furtherance.todos`: `FurTodo` (via `FurTodo.create`), `EncryptedTodo`,
  `generate_todo_uid`, the form states `TodoToAdd` and `TodoToEdit`
  (`TodoToEdit.from_todo`, `is_changed`, `input_error`), and listing helpers:
  `group_todos_by_date` (local calendar day, days in ascending order),
  `format_todo_date` ("Today", "Yesterday", "Tomorrow", otherwise `Mar 05`, with
  the year added when it is not the current one; labels can be replaced) and
  `todo_extra_text`.
- `furtherance.sessions`: `FurIdle` (`duration()` as `HH:MM:SS`),
  `FurPomodoro`, `FurUser` and `format_duration`.
- `furtherance.editing`: form state for `GroupToEdit`, `ShortcutToAdd`,
  `ShortcutToEdit`, `TaskToAdd` and `TaskToEdit`, each with `input_error` and,
  for the edit forms, `is_changed`. `random_color_hex` gives a `#rrggbb` colour.
- `furtherance.report`: `FurReport`, which loads the tasks of a date range
  through a function you pass in as `fetch_tasks(start, end)` and keeps
  `total_time`, `total_earned`, a breakdown by `FurTaskProperty`
  (`task_property_values`, `task_property_value_keys`) and the totals of the
  picked value. Helpers: `property_keys_for_task`, `subtract_months`,
  `last_day_of_month`, `is_leap_year`.
- `furtherance.view_enums`: `FurView`, `FurDateRange`, `FurTaskProperty`,
  `ServerChoices` (each with `message_key()` giving a label key), `FurAlert`,
  `FurInspectorView`, `EditTaskProperty`, `EditTodoProperty`, `TabId`,
  `NotificationType`, `ChangeDB` and `FurDarkLight`.
- `furtherance.settings`: `FurSettings` with `load`, `save`, `update` and
  `reset_to_default_db_location`; `get_data_path`, `get_default_db_path` and
  `get_settings_path`. A missing file is created with defaults; keys added in
  later versions are filled in and written back. Bad values raise
  `SettingsError`.
- `furtherance.encryption`: `encrypt` / `decrypt` of JSON-serializable data
  with a 32-byte key, `generate_device_id`, `get_device_key`,
  `encrypt_encryption_key` and `decrypt_encryption_key`. Failures raise
  `EncryptionError`, whose `kind` says which step failed.
- `furtherance.api`: asynchronous `login`, `refresh_auth_token`,
  `server_logout` and `sync_with_server`, returning `LoginResponse` and
  `SyncResponse` and raising `ApiError` (with a `kind`) on failure.
- `furtherance.hashing`: `blake3_hex`, the BLAKE3 digest used for uids.

## Examples

```python
from datetime import datetime, timedelta

from furtherance.tasks import FurTask, FurTaskGroup

stop = datetime.now().astimezone()
start = stop - timedelta(hours=2)
task = FurTask.create("Write report", start, stop, "writing", "Acme", 30.0, "USD")

print(task)                          # Write report @Acme #writing $30.00
print(task.total_time_in_seconds())  # 7200
print(task.total_earnings())         # 60.0

group = FurTaskGroup.from_task(task)
print(group.all_task_ids())
```

A report needs a function that returns the tasks between two days:

```python
from furtherance.report import FurReport
from furtherance.view_enums import FurDateRange, FurTaskProperty

report = FurReport(fetch_tasks=lambda start, end: [task])
report.set_picked_date_range(FurDateRange.PAST_WEEK)
report.set_picked_task_property_key(FurTaskProperty.PROJECT)
print(report.total_time, report.task_property_value_keys)
```

Settings live in `settings.toml` in the platform's user data directory:

```python
from furtherance.settings import FurSettings

settings = FurSettings.load()
settings.update(show_seconds=False, pomodoro=True)
```

Encrypting a record:

```python
import os

from furtherance.encryption import decrypt, encrypt

key = os.urandom(32)
sealed, nonce = encrypt({"name": "Write report"}, key)
print(decrypt(sealed, nonce, key))   # {'name': 'Write report'}
```

## What this package does not do

- It has no user interface and no command to run; it is a library.
- It does not store tasks, shortcuts or to-dos. `FurReport` reads tasks only
  through the `fetch_tasks` function you supply, and `sync_with_server` hands a
  refreshed access token to its `on_token_refresh` callback instead of saving it.
- It does not parse typed timer input, draw charts, send desktop notifications
  or watch the system for idle time.
- Labels are given as localization keys (`message_key()`); no translations are
  bundled.