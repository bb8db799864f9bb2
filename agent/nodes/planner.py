"""
agent/nodes/planner.py

Planner node: maps an intent to at most one tool call with fixed
parameters, and routes the graph to the tool or knowledge branch.

No tool execution, no store access, deterministic only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from agent.nodes.intent import Intent
from agent.state import AgentState

logger = logging.getLogger(__name__)

NO_TOOLS_REASONING = "No specific tools needed for this query"


@dataclass(frozen=True)
class ToolPlan:
    use_tools: list[str] = field(default_factory=list)
    parameters: list[dict[str, Any]] = field(default_factory=list)
    reasoning: str = NO_TOOLS_REASONING

    @property
    def has_tools(self) -> bool:
        return bool(self.use_tools)


def plan(intent: Intent, query: str, role: str) -> ToolPlan:
    """
    Select a tool for *intent*.

    Only ``entities[0]`` is used when several KPIs were recognised.
    *query* and *role* do not influence the choice today.
    """
    entities = intent.entities

    if intent.type == "calculation" and entities:
        return ToolPlan(
            use_tools=["calculate_metric"],
            parameters=[{"metric_type": entities[0], "time_period": "today"}],
            reasoning=f"User wants to calculate {entities[0]} - using calculation tool",
        )

    if intent.type == "comparison" and entities:
        return ToolPlan(
            use_tools=["compare_periods"],
            parameters=[
                {"metric": entities[0], "period1": "last_week", "period2": "this_week"}
            ],
            reasoning=f"User wants to compare {entities[0]} across time periods",
        )

    if intent.type == "analysis":
        if "agents" in entities:
            return ToolPlan(
                use_tools=["agent_performance"],
                parameters=[{"metrics": ["satisfaction", "calls_handled"], "benchmark": True}],
                reasoning="User wants agent performance analysis",
            )
        if "campaigns" in entities:
            return ToolPlan(
                use_tools=["campaign_analysis"],
                parameters=[{"metrics": ["conversions", "revenue"]}],
                reasoning="User wants campaign performance analysis",
            )

    if intent.type == "forecast":
        return ToolPlan(
            use_tools=["forecast_demand"],
            parameters=[{"forecast_period": "next_month"}],
            reasoning="User wants demand forecasting",
        )

    return ToolPlan()


def planner_node(state: AgentState) -> AgentState:
    """
    LangGraph node: build the tool plan from state["intent"].

    Writes:
        state["tool_plan"]: :class:`ToolPlan`
    """
    tool_plan = plan(
        state["intent"],
        state.get("user_query", ""),
        state.get("user_role", ""),
    )
    logger.debug("planner_node tools=%s reasoning=%r", tool_plan.use_tools, tool_plan.reasoning)
    return {**state, "tool_plan": tool_plan}


def route_after_plan(state: AgentState) -> str:
    """
    LangGraph conditional edge function.

    Returns:
        "tools" when the plan names at least one tool, else "knowledge".
    """
    tool_plan: ToolPlan | None = state.get("tool_plan")
    if tool_plan is not None and tool_plan.has_tools:
        return "tools"
    return "knowledge"
