import pytest

from furtherance.view_enums import (
    FurDarkLight,
    FurDateRange,
    FurTaskProperty,
    FurView,
    ServerChoices,
    TabId,
)


@pytest.mark.parametrize(
    "view, key",
    [
        (FurView.SHORTCUTS, "shortcuts"),
        (FurView.TIMER, "timer"),
        (FurView.TODO, "todo"),
        (FurView.REPORT, "report"),
        (FurView.SETTINGS, "settings"),
    ],
)
def test_view_message_keys(view, key):
    assert view.message_key() == key


def test_view_order_and_serialized_names():
    assert [v.value for v in FurView] == ["Shortcuts", "Timer", "Todo", "Report", "Settings"]
    assert FurView("Timer") is FurView.TIMER


def test_unknown_view_name_rejected():
    with pytest.raises(ValueError):
        FurView("Nowhere")


@pytest.mark.parametrize(
    "date_range, key",
    [
        (FurDateRange.PAST_WEEK, "past-week"),
        (FurDateRange.THIRTY_DAYS, "past-thirty-days"),
        (FurDateRange.SIX_MONTHS, "past-six-months"),
        (FurDateRange.ALL_TIME, "all-time"),
        (FurDateRange.RANGE, "date-range"),
    ],
)
def test_date_range_message_keys(date_range, key):
    assert date_range.message_key() == key


def test_date_range_order():
    assert list(FurDateRange) == [
        FurDateRange.PAST_WEEK,
        FurDateRange.THIRTY_DAYS,
        FurDateRange.SIX_MONTHS,
        FurDateRange.ALL_TIME,
        FurDateRange.RANGE,
    ]
    assert FurDateRange.PAST_WEEK.message_key() == "past-week"
    assert FurDateRange.RANGE.message_key() == "date-range"


def test_task_property_keys_in_order():
    assert list(FurTaskProperty) == [
        FurTaskProperty.TITLE,
        FurTaskProperty.PROJECT,
        FurTaskProperty.TAGS,
        FurTaskProperty.RATE,
    ]
    assert FurTaskProperty.TITLE.message_key() == "title"
    assert FurTaskProperty.PROJECT.message_key() == "project"
    assert FurTaskProperty.TAGS.message_key() == "tags"
    assert FurTaskProperty.RATE.message_key() == "rate"


def test_server_choice_keys():
    assert list(ServerChoices) == [ServerChoices.OFFICIAL, ServerChoices.CUSTOM]
    assert ServerChoices.OFFICIAL.message_key() == "official-server"
    assert ServerChoices.CUSTOM.message_key() == "custom"


def test_dark_light_round_trip():
    assert all(FurDarkLight(member.value) is member for member in FurDarkLight)


def test_tab_ids_distinct():
    assert len(set(TabId)) == 7
    assert TabId(TabId.CHARTS.value) is TabId.CHARTS
    assert TabId(TabId.LIST.value) is TabId.LIST