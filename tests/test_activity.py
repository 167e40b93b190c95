from datetime import date, timedelta

import pytest

from timelog.activity import Activities, Activity, format_duration
from timelog.store import Timelog


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (3, " 0 h  3 min: code this"),
        (59, " 0 h 59 min: code this"),
        (60, " 1 h  0 min: code this"),
        (23 * 60 + 1, "23 h  1 min: code this"),
    ],
)
def test_activity_str(minutes, expected):
    activity = Activity(name="code this", duration=timedelta(minutes=minutes))
    assert str(activity) == expected


def test_format_duration():
    assert format_duration(timedelta(0)) == "0 h 0 min"
    assert format_duration(timedelta(hours=25, minutes=5)) == "25 h 5 min"


def test_activities_empty():
    activities = Activities.from_entries([])
    assert activities.activities == []
    assert activities.total_work == timedelta(0)
    assert activities.total_slack == timedelta(0)
    assert str(activities) == (
        "-------\nTotal work done: 0 h 0 min\nTotal slacking: 0 h 0 min\n"
    )


def test_activities_first_entry_only_sets_start():
    timelog = Timelog.from_text(
        """
2022-06-10 07:00: arrived
2022-06-10 08:45: code
2022-06-10 09:00: ** tea
"""
    )
    activities = Activities.from_entries(timelog.entries)
    assert [(a.name, a.duration) for a in activities.activities] == [
        ("code", timedelta(hours=1, minutes=45)),
        ("** tea", timedelta(minutes=15)),
    ]
    assert activities.total_work == timedelta(hours=1, minutes=45)
    assert activities.total_slack == timedelta(minutes=15)


def test_activities_accumulate_per_task():
    timelog = Timelog.from_text(
        """
2022-06-10 07:00: arrived
2022-06-10 08:00: a
2022-06-10 09:00: a
2022-06-10 09:10: ** b
"""
    )
    activities = Activities.from_entries(timelog.entries)
    assert [a.name for a in activities.activities] == ["a", "** b"]
    assert activities.activities[0].duration == timedelta(hours=2)
    assert activities.total_work == timedelta(hours=2)
    assert activities.total_slack == timedelta(minutes=10)


def test_activities_single_entry():
    timelog = Timelog.from_text("2022-06-10 07:00: arrived\n")
    activities = Activities.from_entries(timelog.entries)
    assert activities.activities == []
    assert activities.total_work == timedelta(0)


def test_activities_zero_duration():
    timelog = Timelog.from_text(
        "2022-06-10 07:00: arrived\n2022-06-10 07:00: oops\n"
    )
    activities = Activities.from_entries(timelog.entries)
    assert [(a.name, a.duration) for a in activities.activities] == [
        ("oops", timedelta(0))
    ]


def test_activities_daily():
    timelog = Timelog.from_text(
        """
2022-06-10 07:00: arrived
2022-06-10 08:45: gtimelog: code
2022-06-10 09:00: ** tea
2022-06-10 12:05: gtimelog: code
2022-06-10 12:35: customer joe: inquiry
2022-06-10 13:15: ** lunch
2022-06-10 14:00: code
2022-06-10 15:00: bug triage
2022-06-10 15:10: ** tea
2022-06-10 16:00: customer joe: support
"""
    )

    activities = Activities.from_entries(timelog.get_day(date(2022, 6, 10)))
    assert activities.total_work == timedelta(minutes=475)
    assert activities.total_slack == timedelta(minutes=65)
    assert len(activities.activities) == 7
    assert activities.activities[0].name == "gtimelog: code"
    # first block 1:45, second block 3:05
    assert activities.activities[0].duration == timedelta(hours=4, minutes=50)

    assert str(activities) == (
        " 4 h 50 min: gtimelog: code\n"
        " 0 h 25 min: ** tea\n"
        " 0 h 30 min: customer joe: inquiry\n"
        " 0 h 40 min: ** lunch\n"
        " 0 h 45 min: code\n"
        " 1 h  0 min: bug triage\n"
        " 0 h 50 min: customer joe: support\n"
        "-------\n"
        "Total work done: 7 h 55 min\n"
        "Total slacking: 1 h 5 min\n"
    )


def test_activities_weekly():
    timelog = Timelog.from_text(
        """
2022-06-01 06:00: arrived
2022-06-01 07:00: workw1
2022-06-01 07:10: ** tea

2022-06-03 06:00: arrived
2022-06-03 07:00: workw1
2022-06-03 07:10: ** tea

2022-06-08 06:00: arrived
2022-06-08 07:00: workw2
2022-06-08 07:10: ** tea

2022-06-09 06:00: arrived
2022-06-09 07:00: workw2

2022-06-10 06:00: arrived
2022-06-10 07:00: workw2
2022-06-10 07:10: ** tea
"""
    )

    activities = Activities.from_entries(timelog.get_week(date(2022, 6, 7)))
    assert activities.total_work == timedelta(hours=3)
    assert activities.total_slack == timedelta(minutes=20)
    assert [(a.name, a.duration) for a in activities.activities] == [
        ("workw2", timedelta(hours=3)),
        ("** tea", timedelta(minutes=20)),
    ]
    assert str(activities) == (
        " 3 h  0 min: workw2\n"
        " 0 h 20 min: ** tea\n"
        "-------\n"
        "Total work done: 3 h 0 min\n"
        "Total slacking: 0 h 20 min\n"
    )


def test_activities_no_overnight_interval():
    # same day-of-month in consecutive months must still count as a new day
    timelog = Timelog.from_text(
        """
2022-05-10 07:00: arrived
2022-05-10 08:00: code

2022-06-10 07:00: arrived
2022-06-10 07:30: code
"""
    )
    activities = Activities.from_entries(timelog.entries)
    assert activities.total_work == timedelta(hours=1, minutes=30)
    assert [a.name for a in activities.activities] == ["code"]


def test_activities_as_dict():
    timelog = Timelog.from_text(
        "2022-06-10 07:00: arrived\n2022-06-10 08:00: code\n2022-06-10 08:10: **tea\n"
    )
    assert Activities.from_entries(timelog.entries).as_dict() == {
        "activities": [
            {"name": "code", "minutes": 60, "is_slack": False},
            {"name": "**tea", "minutes": 10, "is_slack": True},
        ],
        "totals": {"work_minutes": 60, "slack_minutes": 10},
    }
