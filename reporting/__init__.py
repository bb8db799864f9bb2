"""
reporting package marker.
"""

from reporting.bookmarks import (
    CATEGORIES,
    BookmarkDraft,
    BookmarkedInteraction,
    BookmarkRepository,
    ChatMessage,
)
from reporting.report import Report, ReportGenerator, export_report, load_report

__all__ = [
    "CATEGORIES",
    "BookmarkDraft",
    "BookmarkedInteraction",
    "BookmarkRepository",
    "ChatMessage",
    "Report",
    "ReportGenerator",
    "export_report",
    "load_report",
]
