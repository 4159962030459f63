"""Personal to-do REST API backed by SQLite."""

__version__ = "0.1.0"
