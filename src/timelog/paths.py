"""Helpers for locating the timelog file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from platformdirs import PlatformDirs


APP_NAME = "gtimelog"
LOG_FILENAME = "timelog.txt"
FILE_ENV_VAR = "TIMELOG_FILE"


def get_legacy_dir(home: Optional[Path] = None) -> Path:
    """Return the pre-XDG ``~/.gtimelog`` directory (it may not exist)."""
    return Path(home if home is not None else Path.home()) / ".gtimelog"


def get_data_dir(
    environ: Optional[Mapping[str, str]] = None, home: Optional[Path] = None
) -> Path:
    """Return the directory holding the timelog.

    An existing legacy ``~/.gtimelog`` directory wins; otherwise
    ``$XDG_DATA_HOME/gtimelog`` or the platform's user data directory.
    """
    env = os.environ if environ is None else environ
    legacy_dir = get_legacy_dir(home)
    if legacy_dir.is_dir():
        return legacy_dir
    xdg_data_home = env.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home) / APP_NAME
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False)
    return Path(dirs.user_data_path)


def get_timelog_path(
    environ: Optional[Mapping[str, str]] = None, home: Optional[Path] = None
) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(FILE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_data_dir(env, home) / LOG_FILENAME
