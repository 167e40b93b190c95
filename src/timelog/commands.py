"""Parsing of interactive shell input."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class TimeMode(enum.Enum):
    DAY = "day"
    WEEK = "week"


class Action(enum.Enum):
    NOTHING = "nothing"
    QUIT = "quit"
    HELP = "help"
    EDIT = "edit"
    SWITCH_MODE = "switch_mode"
    ADD = "add"
    ERROR = "error"


_SIMPLE_COMMANDS: dict[str, Action] = {
    ":q": Action.QUIT,
    ":h": Action.HELP,
    ":e": Action.EDIT,
}

_MODE_COMMANDS: dict[str, tuple[TimeMode, str]] = {
    ":d": (TimeMode.DAY, "Invalid day number"),
    ":w": (TimeMode.WEEK, "Invalid week number"),
}

HELP_TEXT = """
:w  - switch to weekly mode
:wN - show the last N weeks
:d  - switch to daily mode
:dN - show the last N days
:q  - quit
:h  - show this help
:e  - open the timelog in $EDITOR

Any other input is the description of a task that you just finished."""


@dataclass(frozen=True, slots=True)
class Command:
    action: Action
    mode: Optional[TimeMode] = None
    count: int = 1
    text: Optional[str] = None

    @classmethod
    def parse(cls, line: str) -> "Command":
        line = line.rstrip()
        if not line:
            return cls(Action.NOTHING)
        if line in _SIMPLE_COMMANDS:
            return cls(_SIMPLE_COMMANDS[line])
        if not line.startswith(":"):
            return cls(Action.ADD, text=line)

        mode_info = _MODE_COMMANDS.get(line[:2])
        if mode_info is None:
            return cls(Action.ERROR, text=f"Unknown command: {line}")
        mode, invalid = mode_info
        arg = line[2:]
        if not arg:
            return cls(Action.SWITCH_MODE, mode=mode)
        if not arg.isascii() or not arg.isdigit() or int(arg) < 1:
            return cls(Action.ERROR, text=invalid)
        return cls(Action.SWITCH_MODE, mode=mode, count=int(arg))
