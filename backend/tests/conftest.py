"""Shared pytest fixtures for all tests.

Every test gets an isolated data directory and a clean environment, so
settings and cached dependencies never leak between tests.
"""

import pytest

from docchat.api.deps import _reset_completer_instance, _reset_db_instance, get_settings
from docchat.config import load_settings

ENV_VARS = (
    "GROQ_API_KEY",
    "API_KEY",
    "LLM_PROVIDER",
    "PRIMARY_MODEL",
    "FALLBACK_MODEL",
    "DOCCHAT_ENV",
    "DOCCHAT_CONFIG",
)


def _clear_caches():
    load_settings.cache_clear()
    get_settings.cache_clear()
    _reset_db_instance()
    _reset_completer_instance()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the data dir at tmp_path and drop docchat env vars."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    data_dir = tmp_path / "docchat"
    monkeypatch.setenv("DOCCHAT_DATA_DIR", str(data_dir))
    _clear_caches()
    yield data_dir
    _clear_caches()


@pytest.fixture
def configure(monkeypatch):
    """Set environment variables and reload settings.

    Usage: configure(GROQ_API_KEY="gsk-test", API_KEY="secret")
    """

    def _configure(**env: str) -> None:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        _clear_caches()

    return _configure


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary migrated database that is closed after the test."""
    from docchat.db.connection import Database
    from docchat.db.migrations import run_migrations

    db = Database(tmp_path / "test.db")
    run_migrations(db)
    yield db
    db.close()


SAMPLE_DOCS = """
# Django Project Documentation

## Models

### User Model
- **Fields**: username (CharField), email (EmailField), is_active (BooleanField)
- **Relationships**: One-to-many with Post model

### Post Model
- **Fields**: title (CharField), content (TextField), created_at (DateTimeField)
- **Relationships**: Foreign key to User (author)

## Views

### PostViewSet
- **Type**: ModelViewSet
- **Permissions**: IsAuthenticated
"""


@pytest.fixture
def sample_docs() -> str:
    """Small generated-documentation sample."""
    return SAMPLE_DOCS
