"""Summarize a slice of entries into per-task durations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Optional, Sequence

from .models import Entry, is_slack


def total_minutes(duration: timedelta) -> int:
    return int(duration.total_seconds() // 60)


def format_duration(duration: timedelta) -> str:
    hours, minutes = divmod(total_minutes(duration), 60)
    return f"{hours} h {minutes} min"


@dataclass(slots=True)
class Activity:
    """Accumulated time spent on a single task."""

    name: str
    duration: timedelta = timedelta(0)

    @property
    def is_slack(self) -> bool:
        return is_slack(self.name)

    def __str__(self) -> str:
        hours, minutes = divmod(total_minutes(self.duration), 60)
        return f"{hours:>2} h {minutes:>2} min: {self.name}"


@dataclass(slots=True)
class Activities:
    """Per-task breakdown of a slice of the timelog, with work and slack totals."""

    activities: list[Activity] = field(default_factory=list)
    total_work: timedelta = timedelta(0)
    total_slack: timedelta = timedelta(0)

    @classmethod
    def from_entries(cls, entries: Sequence[Entry]) -> "Activities":
        """Attribute the time since the previous entry to each entry's task.

        The first entry, and the first entry of every further day, only mark
        a start time ("arrived") and get no duration themselves.
        """
        result = cls()
        # result.activities keeps first-occurrence order; by_name only indexes it
        by_name: dict[str, Activity] = {}
        prev_stop: Optional[datetime] = None

        for entry in entries:
            if prev_stop is None or prev_stop.date() != entry.stop.date():
                prev_stop = entry.stop
                continue

            duration = entry.stop - prev_stop
            if is_slack(entry.task):
                result.total_slack += duration
            else:
                result.total_work += duration

            activity = by_name.get(entry.task)
            if activity is None:
                activity = Activity(name=entry.task, duration=duration)
                by_name[entry.task] = activity
                result.activities.append(activity)
            else:
                activity.duration += duration

            prev_stop = entry.stop

        return result

    def __str__(self) -> str:
        lines = [str(activity) for activity in self.activities]
        lines.append("-------")
        lines.append(f"Total work done: {format_duration(self.total_work)}")
        lines.append(f"Total slacking: {format_duration(self.total_slack)}")
        return "".join(f"{line}\n" for line in lines)

    def as_dict(self) -> dict[str, Any]:
        return {
            "activities": [
                {
                    "name": activity.name,
                    "minutes": total_minutes(activity.duration),
                    "is_slack": activity.is_slack,
                }
                for activity in self.activities
            ],
            "totals": {
                "work_minutes": total_minutes(self.total_work),
                "slack_minutes": total_minutes(self.total_slack),
            },
        }
