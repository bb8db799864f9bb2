"""
app/api/dependencies.py

Shared FastAPI dependencies: process-wide singletons and role validation.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException, status

from agent.assistant import AnalyticsAssistant
from agent.assistant import get_assistant as _get_assistant
from app.config import get_assistant_settings
from knowledge.base import KnowledgeStore
from knowledge.models import UserRole
from knowledge.static_store import get_knowledge_store
from reporting.bookmarks import BookmarkRepository
from reporting.report import ReportGenerator
from tools.executor import ToolExecutor

VALID_ROLES = frozenset(role.value for role in UserRole)


def get_store() -> KnowledgeStore:
    return get_knowledge_store()


def get_assistant() -> AnalyticsAssistant:
    return _get_assistant()


@lru_cache(maxsize=1)
def get_executor() -> ToolExecutor:
    return ToolExecutor(get_knowledge_store())


@lru_cache(maxsize=1)
def get_bookmark_repository() -> BookmarkRepository:
    return BookmarkRepository(get_assistant_settings().bookmark_store_dir)


def get_report_generator() -> ReportGenerator:
    return ReportGenerator()


def validate_role(role: str) -> str:
    """
    Normalise *role* and reject anything outside :class:`UserRole`.

    Raises HTTP 400 for an unknown role.
    """

    normalized = (role or "").strip().lower()
    if normalized not in VALID_ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown role '{role}'. Allowed values: {sorted(VALID_ROLES)}.",
        )
    return normalized
