"""
reporting/bookmarks.py

Saved chat interactions, persisted as one JSON file per role.

    <directory>/bookmarks_<role>.json

The file holds a JSON array of :class:`BookmarkedInteraction`, newest
first. Every mutating call rewrites the whole file.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

CATEGORIES: tuple[str, ...] = (
    "KPIs",
    "Performance Analysis",
    "Campaign Reports",
    "Forecasting",
    "Quality Metrics",
    "Custom Analysis",
)

ALL_CATEGORIES = "all"

BookmarkCategory = Literal[
    "KPIs",
    "Performance Analysis",
    "Campaign Reports",
    "Forecasting",
    "Quality Metrics",
    "Custom Analysis",
]


class ChatMessage(BaseModel):
    """One rendered chat turn, as shown in the UI."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    content: str
    sender: Literal["user", "assistant"]
    timestamp: datetime
    type: Literal["text", "kpi", "chart", "tool_result", "knowledge"] = "text"
    data: Optional[Any] = None


class BookmarkDraft(BaseModel):
    """Caller-supplied part of a bookmark; id and created_at are assigned on save."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str = ""
    query: str
    response: ChatMessage
    tags: list[str] = Field(default_factory=list)
    category: BookmarkCategory = "Custom Analysis"
    is_starred: bool = False


class BookmarkedInteraction(BookmarkDraft):
    id: str
    user_role: str
    created_at: datetime


_BOOKMARK_LIST = TypeAdapter(list[BookmarkedInteraction])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookmarkRepository:
    """File-backed bookmark storage scoped by user role."""

    def __init__(
        self,
        directory: str | Path,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.directory = Path(directory)
        self._clock = clock

    def _path(self, role: str) -> Path:
        return self.directory / f"bookmarks_{role}.json"

    def _read(self, role: str) -> list[BookmarkedInteraction]:
        path = self._path(role)
        if not path.exists():
            return []
        try:
            return _BOOKMARK_LIST.validate_json(path.read_text(encoding="utf-8"))
        except ValidationError:
            logger.error("Failed to load bookmarks from %s; starting empty", path, exc_info=True)
            return []

    def _write(self, role: str, bookmarks: list[BookmarkedInteraction]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(role).write_bytes(_BOOKMARK_LIST.dump_json(bookmarks, indent=2))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_bookmarks(self, role: str) -> list[BookmarkedInteraction]:
        return self._read(role)

    def get(self, role: str, bookmark_id: str) -> BookmarkedInteraction | None:
        return next((b for b in self._read(role) if b.id == bookmark_id), None)

    def search(
        self,
        role: str,
        term: str = "",
        category: str = ALL_CATEGORIES,
    ) -> list[BookmarkedInteraction]:
        """
        Filter by *term* and *category*.

        *term* is matched case-insensitively against title, description
        and each tag; an empty term matches everything.
        """
        needle = term.strip().lower()

        def matches(bookmark: BookmarkedInteraction) -> bool:
            if category != ALL_CATEGORIES and bookmark.category != category:
                return False
            if not needle:
                return True
            return (
                needle in bookmark.title.lower()
                or needle in bookmark.description.lower()
                or any(needle in tag.lower() for tag in bookmark.tags)
            )

        return [b for b in self._read(role) if matches(b)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, role: str, draft: BookmarkDraft) -> BookmarkedInteraction:
        bookmark = BookmarkedInteraction(
            **draft.model_dump(),
            id=uuid.uuid4().hex,
            user_role=role,
            created_at=self._clock(),
        )
        self._write(role, [bookmark, *self._read(role)])
        logger.info("Bookmark %s saved for role=%s", bookmark.id, role)
        return bookmark

    def toggle_star(self, role: str, bookmark_id: str) -> BookmarkedInteraction | None:
        bookmarks = self._read(role)
        for index, bookmark in enumerate(bookmarks):
            if bookmark.id == bookmark_id:
                updated = bookmark.model_copy(update={"is_starred": not bookmark.is_starred})
                bookmarks[index] = updated
                self._write(role, bookmarks)
                return updated
        return None

    def delete(self, role: str, bookmark_id: str) -> bool:
        bookmarks = self._read(role)
        remaining = [b for b in bookmarks if b.id != bookmark_id]
        if len(remaining) == len(bookmarks):
            return False
        self._write(role, remaining)
        return True

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def select(self, role: str, bookmark_ids: Iterable[str]) -> list[BookmarkedInteraction]:
        wanted = set(bookmark_ids)
        return [b for b in self._read(role) if b.id in wanted]

    def export_json(self, role: str, bookmark_ids: Iterable[str]) -> str:
        """Serialise the selected bookmarks, in stored order, as a JSON array."""
        return _BOOKMARK_LIST.dump_json(self.select(role, bookmark_ids), indent=2).decode("utf-8")

    def import_json(self, role: str, payload: str | bytes) -> list[BookmarkedInteraction]:
        """
        Merge an exported array into *role*'s bookmarks.

        Imported records go first; an existing record with the same id is
        replaced. Raises ``pydantic.ValidationError`` on a malformed payload
        and writes nothing in that case.
        """
        imported = _BOOKMARK_LIST.validate_json(payload)
        imported_ids = {b.id for b in imported}
        kept = [b for b in self._read(role) if b.id not in imported_ids]
        self._write(role, [*imported, *kept])
        logger.info("Imported %d bookmark(s) for role=%s", len(imported), role)
        return imported

