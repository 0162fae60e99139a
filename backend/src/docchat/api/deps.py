"""FastAPI dependency injection functions."""

import logging
import sqlite3
import threading
from functools import lru_cache

from fastapi import Depends

from docchat.chat.service import ChatService
from docchat.config import Settings, load_settings
from docchat.db.connection import Database
from docchat.db.migrations import run_migrations
from docchat.db.projects import ProjectStore
from docchat.db.usage import UsageStore
from docchat.llm.client import LLMClient
from docchat.llm.fallback import FallbackCompleter

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return load_settings()


_db_instance: Database | None = None
# Sync dependencies run in the threadpool; creation must happen once
_db_lock = threading.Lock()


def get_db() -> Database:
    """Get database connection with migrations applied."""
    global _db_instance

    settings = get_settings()

    with _db_lock:
        # Cached connection is stale if the db file was deleted
        if _db_instance is not None and not settings.db_path.exists():
            _db_instance.close()
            _db_instance = None

        if _db_instance is None:
            db = Database(settings.db_path)
            try:
                run_migrations(db)
            except sqlite3.Error:
                db.close()
                raise
            _db_instance = db
        return _db_instance


def _reset_db_instance() -> None:
    """Reset database instance (for testing only)."""
    global _db_instance
    with _db_lock:
        if _db_instance is not None:
            _db_instance.close()
            _db_instance = None


_completer_instance: FallbackCompleter | None = None


def get_completer() -> FallbackCompleter:
    """Get the multi-model completer built from configured models."""
    global _completer_instance
    if _completer_instance is None:
        settings = get_settings()
        clients = [
            LLMClient(
                provider=settings.provider,
                model=model,
                api_key=settings.provider_api_key,
                timeout=settings.llm.request_timeout,
                log_path=settings.llm_log_path,
            )
            for model in settings.models
        ]
        _completer_instance = FallbackCompleter(
            clients,
            temperature=settings.llm.temperature,
            max_tokens=settings.llm.max_tokens,
        )
    return _completer_instance


def _reset_completer_instance() -> None:
    """Reset completer instance (for testing only)."""
    global _completer_instance
    _completer_instance = None


def get_project_store() -> ProjectStore:
    """Get project store bound to the shared database.

    Called from inside route handlers so that database failures surface
    as the handler's JSON error response.
    """
    return ProjectStore(get_db())


def get_usage_store() -> UsageStore:
    """Get usage store bound to the shared database."""
    return UsageStore(get_db())


def get_recording_usage_store() -> UsageStore | None:
    """Get usage store for recording, or None if the database is unavailable."""
    try:
        return get_usage_store()
    except (OSError, sqlite3.Error) as e:
        logger.warning(f"Usage recording disabled, database unavailable: {e}")
        return None


def get_chat_service(
    settings: Settings = Depends(get_settings),
    completer: FallbackCompleter = Depends(get_completer),
    usage_store: UsageStore | None = Depends(get_recording_usage_store),
) -> ChatService:
    """Get chat service instance."""
    return ChatService(
        settings.chat,
        completer,
        usage_store=usage_store,
        tokens_per_char=settings.llm.tokens_per_char,
    )
