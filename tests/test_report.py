import calendar
from datetime import date, datetime, timedelta

import pytest

from furtherance.report import (
    FurReport,
    is_leap_year,
    last_day_of_month,
    property_keys_for_task,
    subtract_months,
)
from furtherance.tasks import FurTask
from furtherance.view_enums import FurDateRange, FurTaskProperty

TODAY = date(2024, 5, 20)


def make_task(name, day, hours=1, tags="", project="", rate=0.0):
    start = datetime(day.year, day.month, day.day, 9, 0).astimezone()
    stop = start + timedelta(hours=hours)
    return FurTask.create(name, start, stop, tags, project, rate, "USD", 0)


class FakeStore:
    def __init__(self, tasks=()):
        self.tasks = list(tasks)
        self.calls = []

    def __call__(self, start, end):
        self.calls.append((start, end))
        return [t for t in self.tasks if start <= t.start_time.astimezone().date() <= end]


def failing_store(start, end):
    raise RuntimeError("database unavailable")


def make_report(tasks=()):
    store = FakeStore(tasks)
    report = FurReport(fetch_tasks=store, today=lambda: TODAY)
    return report, store


def test_is_leap_year_matches_calendar():
    for year in range(1800, 2500):
        assert is_leap_year(year) == calendar.isleap(year)


def test_last_day_of_month_matches_calendar():
    for year in (1900, 2000, 2023, 2024):
        for month in range(1, 13):
            assert last_day_of_month(year, month) == calendar.monthrange(year, month)[1]


def test_last_day_of_month_rejects_bad_month():
    with pytest.raises(ValueError):
        last_day_of_month(2024, 13)


def test_subtract_twelve_months_is_previous_year():
    day = date(2023, 7, 15)
    assert subtract_months(day, 12) == day.replace(year=2022)


def test_subtract_months_clamps_to_month_end():
    assert subtract_months(date(2024, 3, 31), 1) == date(2024, 2, last_day_of_month(2024, 2))


def test_subtract_months_crosses_year():
    result = subtract_months(date(2024, 2, 10), 6)
    assert (result.year, result.month, result.day) == (2023, 8, 10)


def test_subtract_negative_months_beyond_year_raises():
    with pytest.raises(ValueError):
        subtract_months(date(2024, 8, 1), -6)


def test_property_keys_title_and_project():
    task = make_task("Write", TODAY, project="  ")
    assert property_keys_for_task(task, FurTaskProperty.TITLE) == ["Write"]
    assert property_keys_for_task(task, FurTaskProperty.PROJECT, "none-label") == ["none-label"]
    named = make_task("Write", TODAY, project="Book")
    assert property_keys_for_task(named, FurTaskProperty.PROJECT) == ["Book"]


def test_property_keys_tags_split_and_trimmed():
    task = make_task("Write", TODAY, tags="draft #  review  # ")
    assert property_keys_for_task(task, FurTaskProperty.TAGS) == ["draft", "review"]
    untagged = make_task("Write", TODAY)
    assert property_keys_for_task(untagged, FurTaskProperty.TAGS, "n", "no-tags") == ["no-tags"]


def test_property_keys_rate():
    task = make_task("Write", TODAY, rate=12.5)
    assert property_keys_for_task(task, FurTaskProperty.RATE) == ["$12.50"]
    free = make_task("Write", TODAY)
    assert property_keys_for_task(free, FurTaskProperty.RATE, "none-label") == ["none-label"]


def test_initial_report_loads_thirty_days():
    tasks = [make_task("A", TODAY - timedelta(days=2), hours=2, rate=10.0)]
    report, store = make_report(tasks)
    assert store.calls == [(TODAY - timedelta(days=30), TODAY)]
    assert report.tasks_in_range == tasks
    assert report.total_time == tasks[0].total_time_in_seconds()
    assert report.total_earned == pytest.approx(tasks[0].total_earnings())
    assert report.picked_task_property_value == "A"


def test_title_keys_sorted_case_insensitively():
    tasks = [make_task(n, TODAY) for n in ("gamma", "beta", "Alpha", "beta")]
    report, _ = make_report(tasks)
    assert report.task_property_value_keys == ["Alpha", "beta", "gamma"]
    assert report.task_property_values["beta"] == [1, 3]
    assert report.picked_task_property_value == "Alpha"


def test_rate_keys_descending_with_none_last():
    tasks = [
        make_task("A", TODAY, rate=0.0),
        make_task("B", TODAY, rate=5.0),
        make_task("C", TODAY, rate=20.0),
    ]
    report, _ = make_report(tasks)
    report.set_picked_task_property_key(FurTaskProperty.RATE)
    assert report.task_property_value_keys == ["$5.00", "$20.00", report.none_label]
    assert report.picked_task_property_value == "$5.00"


def test_selection_totals_follow_picked_value():
    a1 = make_task("A", TODAY, hours=1, rate=10.0)
    b = make_task("B", TODAY, hours=2, rate=3.0)
    a2 = make_task("A", TODAY - timedelta(days=1), hours=3, rate=10.0)
    report, _ = make_report([a1, b, a2])
    assert report.selection_total_time == a1.total_time_in_seconds() + a2.total_time_in_seconds()
    report.set_picked_task_property_value("B")
    assert report.selection_total_time == b.total_time_in_seconds()
    assert report.selection_total_earned == pytest.approx(b.total_earnings())


def test_all_time_range_uses_fixed_bounds():
    report, store = make_report()
    report.set_picked_date_range(FurDateRange.ALL_TIME)
    assert store.calls[-1] == (date(1971, 1, 1), date(2300, 1, 1))
    assert report.picked_date_range is FurDateRange.ALL_TIME


def test_same_range_does_not_reload():
    report, store = make_report()
    report.set_picked_date_range(FurDateRange.THIRTY_DAYS)
    assert len(store.calls) == 1


def test_six_month_range():
    report, store = make_report()
    report.set_picked_date_range(FurDateRange.SIX_MONTHS)
    assert store.calls[-1] == (subtract_months(TODAY, 6), TODAY)


def test_custom_range_ignored_when_inverted():
    report, _ = make_report()
    before = (report.date_range_start, report.date_range_end)
    report.picked_start_date = TODAY
    report.picked_end_date = TODAY - timedelta(days=3)
    report.set_picked_date_range(FurDateRange.RANGE)
    assert (report.date_range_start, report.date_range_end) == before


def test_set_date_range_end_validates_order():
    report, store = make_report()
    report.show_end_date_picker = True
    too_early = report.date_range_start - timedelta(days=1)
    report.set_date_range_end(too_early)
    assert report.date_range_end == TODAY
    assert len(store.calls) == 1
    new_end = TODAY - timedelta(days=5)
    report.set_date_range_end(new_end)
    assert report.date_range_end == new_end
    assert report.picked_end_date == new_end
    assert report.show_end_date_picker is False
    assert store.calls[-1] == (report.date_range_start, new_end)


def test_set_date_range_start_validates_order():
    report, _ = make_report()
    original = report.date_range_start
    report.set_date_range_start(TODAY + timedelta(days=1))
    assert report.date_range_start == original
    new_start = TODAY - timedelta(days=10)
    report.set_date_range_start(new_start)
    assert report.date_range_start == new_start
    assert report.picked_start_date == new_start


def test_fetch_failure_leaves_empty_report():
    report = FurReport(fetch_tasks=failing_store, today=lambda: TODAY)
    assert report.tasks_in_range == []
    assert report.total_time == 0
    assert report.task_property_value_keys == []