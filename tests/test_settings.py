import tomllib

import platformdirs
import pytest

from furtherance.settings import (
    FurSettings,
    SettingsError,
    get_data_path,
    get_default_db_path,
    get_settings_path,
)
from furtherance.view_enums import FurView


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    target = tmp_path / "data"
    monkeypatch.setattr(platformdirs, "user_data_dir", lambda *a, **k: str(target))
    return target


def _read(path):
    with path.open("rb") as handle:
        return tomllib.load(handle)


def test_data_path_is_created(data_dir):
    path = get_data_path()
    assert path == data_dir
    assert path.is_dir()


def test_default_paths(data_dir):
    assert get_default_db_path() == data_dir / "furtherance.db"
    assert get_settings_path() == data_dir / "settings.toml"


def test_load_missing_file_writes_defaults(data_dir):
    settings = FurSettings.load()
    assert settings.chosen_idle_time == 6
    assert settings.days_to_show == 365
    assert settings.default_view is FurView.TIMER
    assert settings.first_run is True
    assert settings.database_url == str(data_dir / "furtherance.db")
    stored = _read(data_dir / "settings.toml")
    assert stored["default_view"] == "Timer"
    assert stored["pomodoro_length"] == 25


def test_round_trip_after_update(data_dir):
    path = data_dir / "custom.toml"
    data_dir.mkdir(parents=True, exist_ok=True)
    settings = FurSettings.load(path)
    settings.update(pomodoro=True, days_to_show=30, default_view=FurView.REPORT)
    reloaded = FurSettings.load(path)
    assert reloaded == settings
    assert reloaded.pomodoro is True
    assert reloaded.days_to_show == 30
    assert reloaded.default_view is FurView.REPORT


def test_later_additions_are_filled_in_and_saved(data_dir):
    path = data_dir / "settings.toml"
    FurSettings.load(path)
    stored = _read(path)
    del stored["show_todo_tags"]
    del stored["notify_reminder_interval"]
    import tomli_w

    path.write_text(tomli_w.dumps(stored), encoding="utf-8")
    settings = FurSettings.load(path)
    assert settings.show_todo_tags is True
    assert settings.notify_reminder_interval == 10
    assert _read(path)["notify_reminder_interval"] == 10


def test_missing_required_field_raises(data_dir):
    path = data_dir / "settings.toml"
    FurSettings.load(path)
    stored = _read(path)
    del stored["chosen_idle_time"]
    import tomli_w

    path.write_text(tomli_w.dumps(stored), encoding="utf-8")
    with pytest.raises(SettingsError):
        FurSettings.load(path)


def test_string_values_are_coerced(data_dir):
    path = data_dir / "settings.toml"
    FurSettings.load(path)
    stored = _read(path)
    stored["pomodoro"] = "true"
    stored["days_to_show"] = "14"
    import tomli_w

    path.write_text(tomli_w.dumps(stored), encoding="utf-8")
    settings = FurSettings.load(path)
    assert settings.pomodoro is True
    assert settings.days_to_show == 14


def test_invalid_view_raises(data_dir):
    path = data_dir / "settings.toml"
    FurSettings.load(path)
    stored = _read(path)
    stored["default_view"] = "Nowhere"
    import tomli_w

    path.write_text(tomli_w.dumps(stored), encoding="utf-8")
    with pytest.raises(SettingsError):
        FurSettings.load(path)


def test_malformed_toml_raises(data_dir):
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / "settings.toml"
    path.write_text("this is = = not toml", encoding="utf-8")
    with pytest.raises(SettingsError):
        FurSettings.load(path)


def test_update_unknown_setting_raises(data_dir):
    settings = FurSettings.load()
    with pytest.raises(TypeError):
        settings.update(no_such_setting=True)


def test_update_u16_out_of_range_raises(data_dir):
    settings = FurSettings.load()
    with pytest.raises(SettingsError):
        settings.update(notify_reminder_interval=70000)
    assert settings.notify_reminder_interval == 10


def test_update_bad_type_leaves_settings_unchanged(data_dir):
    settings = FurSettings.load()
    with pytest.raises(SettingsError):
        settings.update(show_seconds="maybe", pomodoro=True)
    assert settings.show_seconds is True
    assert settings.pomodoro is False


def test_reset_to_default_db_location(data_dir):
    settings = FurSettings.load()
    settings.update(database_url="/elsewhere/other.db")
    assert _read(data_dir / "settings.toml")["database_url"] == "/elsewhere/other.db"
    settings.reset_to_default_db_location()
    assert settings.database_url == str(data_dir / "furtherance.db")
    assert _read(data_dir / "settings.toml")["database_url"] == settings.database_url