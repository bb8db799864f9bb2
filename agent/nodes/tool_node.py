"""
agent/nodes/tool_node.py

Tool node: executes the planned tool calls in plan order.

Calls run one after another; result precedence downstream is by plan
order, so a later fan-out must keep that ordering.
"""

from __future__ import annotations

import logging
from typing import Callable

from agent.nodes.planner import ToolPlan
from agent.state import AgentState
from tools.executor import ToolExecutor
from tools.results import ToolResult

logger = logging.getLogger(__name__)


def run_plan(executor: ToolExecutor, tool_plan: ToolPlan) -> list[ToolResult]:
    """Execute every tool in *tool_plan* and return results in plan order."""
    results: list[ToolResult] = []
    for index, tool_id in enumerate(tool_plan.use_tools):
        params = tool_plan.parameters[index] if index < len(tool_plan.parameters) else {}
        results.append(executor.execute(tool_id, params))
    return results


def make_tool_node(executor: ToolExecutor) -> Callable[[AgentState], AgentState]:
    """Bind *executor* into a LangGraph node function."""

    def tool_node(state: AgentState) -> AgentState:
        """
        LangGraph node: run state["tool_plan"].

        Writes:
            state["tool_results"]: list of :class:`ToolResult`
        """
        tool_plan: ToolPlan = state["tool_plan"]
        results = run_plan(executor, tool_plan)
        logger.debug(
            "tool_node executed=%d succeeded=%d",
            len(results),
            sum(1 for r in results if r.success),
        )
        return {**state, "tool_results": results}

    return tool_node
