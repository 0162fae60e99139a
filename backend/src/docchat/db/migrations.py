"""Database schema for projects and prompt usage."""

from docchat.db.connection import Database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

-- Generated documentation for a Django project, one row per project path
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    path TEXT NOT NULL UNIQUE,
    settings_module TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now')),
    markdown_content TEXT,
    html_content TEXT,
    diagram_content TEXT,
    models_count INTEGER DEFAULT 0,
    serializers_count INTEGER DEFAULT 0,
    views_count INTEGER DEFAULT 0
);

-- One row per answered chat request
CREATE TABLE IF NOT EXISTS prompt_usage (
    id TEXT PRIMARY KEY,
    project_id TEXT REFERENCES projects(id),
    question TEXT NOT NULL,
    response_length INTEGER DEFAULT 0,
    model_used TEXT NOT NULL,
    tokens_used INTEGER DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    ip_address TEXT
);

CREATE INDEX IF NOT EXISTS idx_projects_path ON projects(path);
CREATE INDEX IF NOT EXISTS idx_prompt_usage_created_at ON prompt_usage(created_at);
CREATE INDEX IF NOT EXISTS idx_prompt_usage_project_id ON prompt_usage(project_id);
"""


def run_migrations(db: Database) -> None:
    """Create tables if missing and record the schema version.

    Args:
        db: Database connection to run migrations on.
    """
    db.executescript(SCHEMA_SQL)
    current = db.execute(
        "SELECT version FROM schema_version ORDER BY version DESC LIMIT 1"
    ).fetchone()
    if current is None or current[0] < SCHEMA_VERSION:
        db.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        db.commit()
