"""The timelog: an ordered, append-only sequence of entries."""

from __future__ import annotations

import bisect
import logging
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from .config import TimelogSettings
from .logfile import read_timelog, write_timelog
from .models import TIME_FMT, Entry

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SEPARATOR = ": "


class CorruptLogError(ValueError):
    """The log goes back in time and cannot be summarized safely."""

    def __init__(self, message: str, line: Optional[str] = None) -> None:
        super().__init__(message)
        self.line = line


class Timelog:
    """All entries of a timelog, sorted by stop time.

    Range queries rely on the entries being sorted; this is checked when
    parsing and when adding, and violations raise :class:`CorruptLogError`.
    """

    def __init__(
        self,
        entries: Iterable[Entry] = (),
        path: Optional[Path] = None,
        clock: Clock = datetime.now,
    ) -> None:
        self.entries: list[Entry] = list(entries)
        self.path = Path(path) if path is not None else None
        self.clock = clock

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @classmethod
    def from_text(cls, text: str, clock: Clock = datetime.now) -> "Timelog":
        return cls(cls.parse(text), path=None, clock=clock)

    @classmethod
    def from_path(cls, path: Path, clock: Clock = datetime.now) -> "Timelog":
        path = Path(path)
        return cls(cls.parse(read_timelog(path)), path=path, clock=clock)

    @classmethod
    def from_settings(
        cls, settings: TimelogSettings, clock: Clock = datetime.now
    ) -> "Timelog":
        return cls.from_path(settings.path, clock=clock)

    # parsing and formatting ----------------------------------------------

    @staticmethod
    def parse_line(line: str) -> Optional[Entry]:
        """Parse one ``YYYY-MM-DD HH:MM: task`` line.

        Blank lines yield None silently; malformed lines are logged and
        yield None.
        """
        line = line.strip()
        if not line:
            return None

        stamp, sep, task = line.partition(SEPARATOR)
        if not sep:
            logger.warning("Ignoring invalid line in timelog: %s", line)
            return None
        try:
            stop = datetime.strptime(stamp, TIME_FMT)
        except ValueError:
            logger.warning("Ignoring line with invalid date in timelog: %s", line)
            return None
        return Entry(stop=stop, task=task)

    @classmethod
    def parse(cls, text: str) -> list[Entry]:
        entries: list[Entry] = []
        for line in text.splitlines():
            entry = cls.parse_line(line)
            if entry is None:
                continue
            if entries and entry.stop < entries[-1].stop:
                raise CorruptLogError(
                    f"Line goes back in time: {line.strip()}", line=line.strip()
                )
            entries.append(entry)
        return entries

    def format_store(self) -> str:
        lines: list[str] = []
        prev_day: Optional[date] = None
        for entry in self.entries:
            # leave an empty line between days
            if prev_day is not None and prev_day != entry.stop.date():
                lines.append("")
            prev_day = entry.stop.date()
            lines.append(str(entry))
        return "".join(f"{line}\n" for line in lines)

    def save(self) -> None:
        if self.path is None:
            raise ValueError("Timelog has no associated file")
        write_timelog(self.path, self.format_store())
        logger.debug("Saved %d entries to %s", len(self.entries), self.path)

    # queries ---------------------------------------------------------------

    def get_time_range(self, begin: datetime, end: datetime) -> list[Entry]:
        """Return the entries with ``begin <= stop <= end``."""
        stops = [entry.stop for entry in self.entries]
        first = bisect.bisect_left(stops, begin)
        last = bisect.bisect_right(stops, end)
        return self.entries[first:max(first, last)]

    def get_day(self, day: date) -> list[Entry]:
        return self.get_time_range(
            datetime.combine(day, time(0, 0, 0)),
            datetime.combine(day, time(23, 59, 59)),
        )

    def get_n_days(self, day: date, n: int) -> list[Entry]:
        """Return the entries of the ``n`` days ending with ``day``."""
        first_day = day - timedelta(days=max(n, 1) - 1)
        return self.get_time_range(
            datetime.combine(first_day, time(0, 0, 0)),
            datetime.combine(day, time(23, 59, 59)),
        )

    def get_week(self, day: date) -> list[Entry]:
        return self.get_n_weeks(day, 1)

    def get_n_weeks(self, day: date, n: int) -> list[Entry]:
        """Return the entries of the ``n`` ISO weeks ending with the week of ``day``."""
        monday = week_start(day)
        begin = datetime.combine(monday - timedelta(weeks=max(n, 1) - 1), time(0, 0))
        next_monday = datetime.combine(monday + timedelta(weeks=1), time(0, 0))
        entries = self.get_time_range(begin, next_monday)
        # the range is inclusive; next Monday 00:00 belongs to the next week
        while entries and entries[-1].stop >= next_monday:
            entries.pop()
        return entries

    def today(self) -> date:
        return self.clock().date()

    def get_today(self) -> list[Entry]:
        return self.get_day(self.today())

    def get_this_week(self) -> list[Entry]:
        return self.get_week(self.today())

    def last_entry_today(self) -> Optional[Entry]:
        entries = self.get_today()
        return entries[-1] if entries else None

    def since_last_entry(self) -> Optional[timedelta]:
        """Time since the last entry of today, or None if there is none yet.

        Negative if that entry lies in the future (e.g. after a manual edit).
        """
        now = self.clock()
        last = self.last_entry_today()
        if last is None:
            return None
        return now - last.stop

    @staticmethod
    def get_history(entries: Sequence[Entry]) -> list[str]:
        """Distinct task names, in order of first appearance."""
        seen: set[str] = set()
        history: list[str] = []
        for entry in entries:
            if entry.task not in seen:
                seen.add(entry.task)
                history.append(entry.task)
        return history

    # modification ---------------------------------------------------------

    def add(self, task: str) -> Entry:
        """Record that ``task`` just ended.

        The description is stripped, as parsing strips each line; it must
        fit on a single line of the log.
        """
        task = task.strip()
        if not task:
            raise ValueError("Task description must not be empty")
        if len(task.splitlines()) > 1:
            raise ValueError("Task description must be a single line")
        stop = self.clock().replace(second=0, microsecond=0)
        if self.entries and stop < self.entries[-1].stop:
            raise CorruptLogError(
                f"Clock went back in time: {stop.strftime(TIME_FMT)} is before "
                f"the last entry {self.entries[-1]}"
            )
        entry = Entry(stop=stop, task=task)
        self.entries.append(entry)
        logger.debug("Added entry %s", entry)
        return entry


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    year, week, _ = day.isocalendar()
    return date.fromisocalendar(year, week, 1)


def describe_day(day: date) -> str:
    """Heading for a daily report, e.g. ``Friday, 2022-06-10 (week 23)``."""
    return f"{day.strftime('%A, %Y-%m-%d')} (week {day.isocalendar()[1]})"


def describe_week(day: date) -> str:
    """Heading for a weekly report, e.g. ``2022, week 23 (June 6-12)``."""
    year, week, _ = day.isocalendar()
    begin = week_start(day)
    end = begin + timedelta(days=6)
    if begin.month == end.month:
        span = f"{begin.strftime('%B')} {begin.day}-{end.day}"
    else:
        span = f"{begin.strftime('%B')} {begin.day}-{end.strftime('%B')} {end.day}"
    return f"{year}, week {week} ({span})"
