"""
app/api/routers package marker.
"""

from app.api.routers.bookmarks_router import router as bookmarks_router
from app.api.routers.chat_router import router as chat_router
from app.api.routers.knowledge_router import router as knowledge_router
from app.api.routers.members_router import router as members_router

__all__ = [
    "bookmarks_router",
    "chat_router",
    "knowledge_router",
    "members_router",
]
