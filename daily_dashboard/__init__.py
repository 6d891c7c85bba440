"""Daily Dashboard: tasks, notes, dashboard summary and a canned assistant."""

__version__ = "0.1.0"
