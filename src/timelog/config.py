"""Configuration models and helpers for the time log."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .paths import get_timelog_path

DEFAULT_EDITOR = "vi"


@dataclass(slots=True)
class TimelogSettings:
    """Runtime configuration for the CLI and the dashboard."""

    path: Path = field(default_factory=get_timelog_path)
    editor: str = DEFAULT_EDITOR

    @classmethod
    def from_env(
        cls,
        path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "TimelogSettings":
        env = os.environ if environ is None else environ
        return cls(
            path=Path(path) if path is not None else get_timelog_path(env),
            editor=env.get("EDITOR") or DEFAULT_EDITOR,
        )
