"""Plain-text time log: record finished tasks and summarize work and slack."""

__version__ = "0.3.0"
