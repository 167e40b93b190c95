"""Domain models for the time log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

TIME_FMT = "%Y-%m-%d %H:%M"

SLACK_MARKER = "**"


def is_slack(task: str) -> bool:
    """Return True if the task describes slack time (``** tea``, ``**lunch``)."""
    return task.startswith(SLACK_MARKER)


@dataclass(frozen=True, slots=True)
class Entry:
    """A task that ended at ``stop``."""

    stop: datetime
    task: str

    def __str__(self) -> str:
        return f"{self.stop.strftime(TIME_FMT)}: {self.task}"

    @property
    def is_slack(self) -> bool:
        return is_slack(self.task)
