from datetime import datetime, timedelta, timezone

import pytest

from furtherance.hashing import blake3_hex
from furtherance.tasks import FurTask, FurTaskGroup, generate_task_uid

START = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def make_task(name="Work", hours=1, tags="", project="", rate=0.0):
    return FurTask.create(name, START, START + timedelta(hours=hours), tags, project, rate, "USD", 42)


def test_create_fills_uid_and_fields():
    task = make_task()
    assert task.uid == generate_task_uid("Work", START, START + timedelta(hours=1))
    assert task.last_updated == 42
    assert task.is_deleted is False


def test_create_defaults_last_updated_to_now():
    task = FurTask.create("a", START, START, "", "", 0.0, "")
    assert task.last_updated > 1_600_000_000


def test_uid_uses_unix_timestamps():
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert generate_task_uid("x", epoch, epoch + timedelta(seconds=1)) == blake3_hex("x01")


def test_uid_independent_of_timezone_representation():
    other_zone = START.astimezone(timezone(timedelta(hours=5)))
    stop = START + timedelta(minutes=5)
    assert generate_task_uid("n", START, stop) == generate_task_uid("n", other_zone, stop)


def test_total_time_and_earnings():
    task = make_task(hours=2, rate=15.0)
    assert task.total_time_in_seconds() == 7200
    assert task.total_earnings() == pytest.approx(30.0)


def test_total_time_truncates_toward_zero():
    task = FurTask.create("t", START, START - timedelta(seconds=1, milliseconds=500), "", "", 0.0, "")
    assert task.total_time_in_seconds() == -1


def test_str_includes_all_parts():
    task = make_task(tags="tag1 #tag2", project="Proj", rate=10.0)
    assert str(task) == "Work @Proj #tag1 #tag2 $10.00"


def test_str_omits_empty_parts():
    assert str(make_task()) == "Work"


def test_group_from_task_and_add():
    first = make_task(hours=1)
    second = FurTask.create("Work", START + timedelta(hours=3), START + timedelta(hours=5), "", "", 0.0, "USD", 1)
    group = FurTaskGroup.from_task(first)
    assert group.uid == first.uid
    group.add(second)
    assert group.total_time == 3 * 3600
    assert group.all_task_ids() == [first.uid, second.uid]


def test_group_equality_ignores_project_case():
    group = FurTaskGroup.from_task(make_task(project="Proj", tags="a"))
    assert group.is_equal_to(make_task(project="pROJ", tags="a"))
    assert not group.is_equal_to(make_task(project="Proj", tags="b"))
    assert not group.is_equal_to(make_task(project="Proj", tags="a", rate=1.0))
    assert not group.is_equal_to(make_task(name="Other", project="Proj", tags="a"))


def test_group_str():
    group = FurTaskGroup.from_task(make_task(tags="t", project="P", rate=2.5))
    assert str(group) == "Work @P #t $2.50"