"""
knowledge package marker.
"""

from knowledge.base import KnowledgeStore
from knowledge.models import UserRole
from knowledge.static_store import StaticKnowledgeStore, get_knowledge_store

__all__ = [
    "KnowledgeStore",
    "StaticKnowledgeStore",
    "UserRole",
    "get_knowledge_store",
]
