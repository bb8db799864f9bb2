"""
agent/graph.py

LangGraph workflow assembly for the analytics assistant.

    intent -> plan -> tools -> respond -> END
                   +-> knowledge ------> END
"""

from __future__ import annotations

import logging

from langgraph.graph import END, START, StateGraph

from agent.state import AgentState
from agent.nodes.intent import intent_node
from agent.nodes.planner import planner_node, route_after_plan
from agent.nodes.response import make_knowledge_node, response_node
from agent.nodes.tool_node import make_tool_node
from knowledge.base import KnowledgeStore
from knowledge.static_store import get_knowledge_store
from tools.executor import ToolExecutor

logger = logging.getLogger(__name__)


def build_graph(
    store: KnowledgeStore | None = None,
    executor: ToolExecutor | None = None,
):
    """
    Build and compile the assistant LangGraph workflow.

    *store* defaults to the cached seed store; *executor* defaults to one
    built over *store*.
    """
    store = store or get_knowledge_store()
    executor = executor or ToolExecutor(store)

    graph = StateGraph(AgentState)

    graph.add_node("intent", intent_node)
    graph.add_node("plan", planner_node)
    graph.add_node("tools", make_tool_node(executor))
    graph.add_node("respond", response_node)
    graph.add_node("knowledge", make_knowledge_node(store))

    graph.add_edge(START, "intent")
    graph.add_edge("intent", "plan")
    graph.add_conditional_edges(
        "plan",
        route_after_plan,
        {
            "tools": "tools",
            "knowledge": "knowledge",
        },
    )
    graph.add_edge("tools", "respond")
    graph.add_edge("respond", END)
    graph.add_edge("knowledge", END)

    logger.debug("Assistant graph compiled with tools=%s", executor.tool_ids)
    return graph.compile()
