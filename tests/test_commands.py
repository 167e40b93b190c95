import pytest

from timelog.commands import Action, Command, TimeMode


@pytest.mark.parametrize(
    "line, expected",
    [
        ("", Command(Action.NOTHING)),
        ("   ", Command(Action.NOTHING)),
        (":q", Command(Action.QUIT)),
        (":h", Command(Action.HELP)),
        (":e", Command(Action.EDIT)),
        (":w", Command(Action.SWITCH_MODE, mode=TimeMode.WEEK)),
        (":w2", Command(Action.SWITCH_MODE, mode=TimeMode.WEEK, count=2)),
        (":d", Command(Action.SWITCH_MODE, mode=TimeMode.DAY)),
        (":d7", Command(Action.SWITCH_MODE, mode=TimeMode.DAY, count=7)),
        ("foo", Command(Action.ADD, text="foo")),
        ("** tea  ", Command(Action.ADD, text="** tea")),
        # unknown command letter
        (":x", Command(Action.ERROR, text="Unknown command: :x")),
        # trailing garbage
        (":e2", Command(Action.ERROR, text="Unknown command: :e2")),
        # invalid day/week args
        (":da", Command(Action.ERROR, text="Invalid day number")),
        (":d0", Command(Action.ERROR, text="Invalid day number")),
        (":d-1", Command(Action.ERROR, text="Invalid day number")),
        (":w x", Command(Action.ERROR, text="Invalid week number")),
        (":w²", Command(Action.ERROR, text="Invalid week number")),
    ],
)
def test_parse(line, expected):
    assert Command.parse(line) == expected


def test_switch_mode_defaults_to_one():
    assert Command.parse(":w").count == 1
    assert Command.parse(":d").count == 1
