"""Prompt usage records and aggregate statistics."""

from dataclasses import dataclass, field
from typing import Optional

from docchat.db.connection import Database
from docchat.db.projects import generate_id

TOP_MODELS_LIMIT = 5


@dataclass
class UsageStats:
    """Aggregate usage across all recorded prompts."""

    total_prompts: int = 0
    total_tokens: int = 0
    prompts_today: int = 0
    prompts_this_week: int = 0
    prompts_this_month: int = 0
    top_models: list[dict] = field(default_factory=list)


class UsageStore:
    """Records one row per answered chat request."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def record(
        self,
        question: str,
        response_length: int,
        model_used: str,
        tokens_used: int,
        project_id: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> str:
        """Insert a usage row. Returns its ID."""
        usage_id = generate_id()
        self._db.execute(
            """
            INSERT INTO prompt_usage (
                id, project_id, question, response_length,
                model_used, tokens_used, ip_address
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (usage_id, project_id, question, response_length, model_used, tokens_used, ip_address),
        )
        self._db.commit()
        return usage_id

    def _count(self, where: str) -> int:
        row = self._db.execute(f"SELECT COUNT(*) FROM prompt_usage WHERE {where}").fetchone()
        return int(row[0] or 0)

    def stats(self) -> UsageStats:
        """Compute totals, recent counts and the most used models."""
        totals = self._db.execute(
            "SELECT COUNT(*) AS total_prompts, SUM(tokens_used) AS total_tokens FROM prompt_usage"
        ).fetchone()

        models = self._db.execute(
            """
            SELECT model_used AS model, COUNT(*) AS count
            FROM prompt_usage
            GROUP BY model_used
            ORDER BY count DESC
            LIMIT ?
            """,
            (TOP_MODELS_LIMIT,),
        ).fetchall()

        return UsageStats(
            total_prompts=int(totals["total_prompts"] or 0),
            total_tokens=int(totals["total_tokens"] or 0),
            prompts_today=self._count("DATE(created_at) = DATE('now')"),
            prompts_this_week=self._count("created_at >= DATE('now', '-7 days')"),
            prompts_this_month=self._count("created_at >= DATE('now', 'start of month')"),
            top_models=[{"model": str(row["model"]), "count": int(row["count"])} for row in models],
        )
