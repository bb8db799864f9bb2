"""
agent/state.py

LangGraph agent state schema for the analytics assistant.
"""

from typing import Any, Optional
from typing_extensions import TypedDict


class AgentState(TypedDict, total=False):
    """Shared state passed between all nodes in the assistant graph."""

    user_query: str
    user_role: str

    intent: Optional[Any]
    tool_plan: Optional[Any]
    tool_results: Optional[list]
    final_response: Optional[Any]
