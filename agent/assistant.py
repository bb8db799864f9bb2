"""
agent/assistant.py

Entry point used by the API and the Streamlit UI.

Wraps the compiled graph so callers always get an :class:`AgentResponse`:
any exception raised while the graph runs is logged once here and the
keyword fallback answers instead.
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any

from agent.fallback import fallback_response
from agent.graph import build_graph
from agent.schema import AgentResponse
from app.config import get_assistant_settings
from knowledge.base import KnowledgeStore
from knowledge.static_store import get_knowledge_store

logger = logging.getLogger(__name__)


class AnalyticsAssistant:
    """Role-aware chat assistant over a knowledge store."""

    def __init__(self, store: KnowledgeStore | None = None, graph: Any = None) -> None:
        self.store = store or get_knowledge_store()
        self.graph = graph if graph is not None else build_graph(self.store)

    def process_query(self, text: str, role: str) -> AgentResponse:
        role_value = getattr(role, "value", role)
        try:
            final_state = self.graph.invoke({"user_query": text, "user_role": role_value})
            response = final_state["final_response"]
            if not isinstance(response, AgentResponse):
                raise TypeError(
                    f"Graph returned {type(response).__name__} instead of AgentResponse"
                )
            return response
        except Exception:
            logger.exception("Assistant pipeline failed; serving fallback response")
            return fallback_response(text, role_value, self.store)

    async def aprocess_query(self, text: str, role: str) -> AgentResponse:
        """
        Async variant that waits the configured UI delay first.

        The pipeline runs in a worker thread so the event loop stays free.
        """
        delay = get_assistant_settings().response_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)
        return await asyncio.to_thread(self.process_query, text, role)


@lru_cache(maxsize=1)
def get_assistant() -> AnalyticsAssistant:
    """Return the process-wide assistant built over the seed store."""
    return AnalyticsAssistant()
