"""Reading and writing the timelog text file."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def read_timelog(path: Path) -> str:
    """Return the contents of the log file, or an empty string if it does not exist.

    Any other I/O failure (permissions, a directory in the way, ...) propagates.
    """
    path = Path(path)
    try:
        return path.read_text(encoding=ENCODING)
    except FileNotFoundError:
        logger.info("No existing %s, starting new log", path)
        return ""


def write_timelog(path: Path, text: str) -> None:
    """Atomically replace the log file with ``text``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding=ENCODING, newline="\n") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
    logger.debug("Wrote %d bytes to %s", len(text.encode(ENCODING)), path)
