"""Project documentation store."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from typing import Optional

from docchat.db.connection import Database


@dataclass
class ProjectRecord:
    """Generated documentation for one Django project."""

    id: str
    name: str
    path: str
    settings_module: str
    created_at: str
    updated_at: str
    markdown_content: str = ""
    html_content: str = ""
    diagram_content: str = ""
    models_count: int = 0
    serializers_count: int = 0
    views_count: int = 0


def generate_id() -> str:
    """Return a new opaque record identifier."""
    return uuid.uuid4().hex


class ProjectStore:
    """SQLite-backed project records keyed by opaque id, unique by path."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def _row_to_record(self, row: sqlite3.Row) -> ProjectRecord:
        """Convert a database row to a ProjectRecord."""
        return ProjectRecord(
            id=row["id"],
            name=row["name"],
            path=row["path"],
            settings_module=row["settings_module"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            markdown_content=row["markdown_content"] or "",
            html_content=row["html_content"] or "",
            diagram_content=row["diagram_content"] or "",
            models_count=row["models_count"] or 0,
            serializers_count=row["serializers_count"] or 0,
            views_count=row["views_count"] or 0,
        )

    def upsert(
        self,
        name: str,
        path: str,
        settings_module: str,
        markdown_content: str = "",
        html_content: str = "",
        diagram_content: str = "",
        models_count: int = 0,
        serializers_count: int = 0,
        views_count: int = 0,
    ) -> ProjectRecord:
        """Create a project, or update the existing one with the same path.

        Returns:
            The stored record.
        """
        existing = self.find_by_path(path)
        if existing is not None:
            self._db.execute(
                """
                UPDATE projects
                SET name = ?, settings_module = ?, markdown_content = ?,
                    html_content = ?, diagram_content = ?, models_count = ?,
                    serializers_count = ?, views_count = ?, updated_at = datetime('now')
                WHERE path = ?
                """,
                (
                    name,
                    settings_module,
                    markdown_content,
                    html_content,
                    diagram_content,
                    models_count,
                    serializers_count,
                    views_count,
                    path,
                ),
            )
        else:
            self._db.execute(
                """
                INSERT INTO projects (
                    id, name, path, settings_module, markdown_content,
                    html_content, diagram_content, models_count,
                    serializers_count, views_count
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    generate_id(),
                    name,
                    path,
                    settings_module,
                    markdown_content,
                    html_content,
                    diagram_content,
                    models_count,
                    serializers_count,
                    views_count,
                ),
            )
        self._db.commit()

        record = self.find_by_path(path)
        # Row was written above
        assert record is not None
        return record

    def get(self, project_id: str) -> Optional[ProjectRecord]:
        """Get a project by ID. Returns None if not found."""
        row = self._db.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
        return self._row_to_record(row) if row else None

    def find_by_path(self, path: str) -> Optional[ProjectRecord]:
        """Find a project by its path. Returns None if not found."""
        row = self._db.execute("SELECT * FROM projects WHERE path = ?", (path,)).fetchone()
        return self._row_to_record(row) if row else None

    def list_all(self) -> list[ProjectRecord]:
        """List all projects, most recently updated first."""
        cursor = self._db.execute("SELECT * FROM projects ORDER BY updated_at DESC, rowid DESC")
        return [self._row_to_record(row) for row in cursor.fetchall()]
