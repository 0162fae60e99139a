"""Database layer for docchat."""

from docchat.db.connection import Database
from docchat.db.migrations import run_migrations
from docchat.db.projects import ProjectRecord, ProjectStore
from docchat.db.usage import UsageStats, UsageStore

__all__ = [
    "Database",
    "ProjectRecord",
    "ProjectStore",
    "UsageStats",
    "UsageStore",
    "run_migrations",
]
