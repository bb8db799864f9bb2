"""
agent/nodes/response.py

Response nodes: wrap tool results, or a knowledge answer when no tool
was planned, into the :class:`AgentResponse` display envelope.
"""

from __future__ import annotations

from typing import Callable, Sequence

from agent.nodes.intent import Intent
from agent.nodes.planner import ToolPlan
from agent.schema import AgentResponse
from agent.state import AgentState
from knowledge.base import KnowledgeStore
from knowledge.models import KPIDefinition, UserRole
from tools.results import ToolResult

TOOL_FAILURE_MESSAGE = (
    "I encountered issues processing your request. Please try rephrasing your question."
)

ROLE_RESPONSES: dict[str, str] = {
    UserRole.ENTERPRISE_LEADER.value: (
        "I can help you with strategic KPIs like revenue impact, cost optimization, "
        "and ROI analysis. Try asking about 'revenue performance', 'cost per call "
        "analysis', or 'forecast next quarter demand'."
    ),
    UserRole.SUPERVISOR.value: (
        "I can analyze team performance, agent metrics, and operational efficiency. "
        "Ask me about 'team performance analysis', 'agent utilization trends', or "
        "'quality score breakdown'."
    ),
    UserRole.DEVELOPER.value: (
        "I can provide system performance insights and technical metrics. Try "
        "'system performance analysis', 'API response time trends', or 'error rate "
        "investigation'."
    ),
    UserRole.AGENT.value: (
        "I can help with your individual performance and customer insights. Ask about "
        "'my performance metrics', 'customer satisfaction trends', or 'skill "
        "development areas'."
    ),
}

GENERIC_PROMPT = (
    "How can I help you analyze your call center data today? I have access to "
    "various analytical tools and a comprehensive knowledge base."
)


# ---------------------------------------------------------------------------
# Narration
# ---------------------------------------------------------------------------


def narrate(result: ToolResult) -> str:
    """
    Turn a successful result into chat text.

    Lines are appended in fixed order and only when the payload carries
    the field: benchmark, business context, positive change, staffing gap.
    """
    data = result.data
    if data is None:
        return result.message

    lines: list[str] = []

    benchmark = getattr(data, "benchmark", None)
    if benchmark:
        lines.append(f"📊 **Performance Assessment:** {benchmark}")

    business_context = getattr(data, "business_context", None)
    if business_context:
        lines.append(f"💡 **Business Context:** {business_context}")

    change_percent = getattr(data, "change_percent", None)
    if change_percent is not None and change_percent > 0:
        lines.append(
            "📈 **Positive Trend:** This metric is improving, indicating good "
            "operational health."
        )

    staffing = getattr(data, "staffing_recommendation", None)
    if staffing is not None and staffing.additional_needed > 0:
        lines.append(
            f"⚠️ **Staffing Alert:** Consider adding {staffing.additional_needed} more "
            "agents to handle projected demand."
        )

    if not lines:
        return result.message
    return f"{result.message}\n\n" + "\n".join(lines)


def format_tool_response(results: Sequence[ToolResult], tool_plan: ToolPlan) -> AgentResponse:
    """Envelope for the first successful result, by plan order."""
    successful = [result for result in results if result.success]
    if not successful:
        return AgentResponse.text(TOOL_FAILURE_MESSAGE, reasoning=tool_plan.reasoning)

    primary = successful[0]
    content = narrate(primary)

    if primary.chart is not None:
        return AgentResponse(
            type="chart",
            content=content,
            data=primary.chart.model_dump(mode="json"),
            tools_used=list(tool_plan.use_tools),
            reasoning=tool_plan.reasoning,
        )

    return AgentResponse(
        type="tool_result",
        content=content,
        data=primary.data.model_dump(mode="json") if primary.data is not None else None,
        tools_used=list(tool_plan.use_tools),
        reasoning=tool_plan.reasoning,
    )


# ---------------------------------------------------------------------------
# Knowledge answers
# ---------------------------------------------------------------------------


def format_definition(kpi_def: KPIDefinition) -> str:
    parts = [f"**{kpi_def.name}**", kpi_def.definition]
    if kpi_def.formula:
        parts.append(f"**Formula:** {kpi_def.formula}")
    parts.append(f"**Business Context:** {kpi_def.business_context}")
    return "\n\n".join(parts)


def role_fallback_text(role: str) -> str:
    role_value = getattr(role, "value", role)
    return ROLE_RESPONSES.get(role_value, GENERIC_PROMPT)


def knowledge_response(intent: Intent, role: str, store: KnowledgeStore) -> AgentResponse:
    """
    Answer without tools.

    A definition question whose first entity is a KPI gets the glossary
    card; everything else gets the role's canned prompt.
    """
    if intent.type == "definition" and intent.entities:
        kpi_def = store.get_kpi_definition(intent.entities[0])
        if kpi_def is not None:
            return AgentResponse(
                type="knowledge",
                content=format_definition(kpi_def),
                data=kpi_def.model_dump(mode="json"),
            )

    return AgentResponse.text(role_fallback_text(role))


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


def response_node(state: AgentState) -> AgentState:
    """
    LangGraph node: format state["tool_results"].

    Writes:
        state["final_response"]: :class:`AgentResponse`
    """
    response = format_tool_response(state.get("tool_results") or [], state["tool_plan"])
    return {**state, "final_response": response}


def make_knowledge_node(store: KnowledgeStore) -> Callable[[AgentState], AgentState]:
    """Bind *store* into the knowledge LangGraph node."""

    def knowledge_node(state: AgentState) -> AgentState:
        response = knowledge_response(
            state["intent"],
            state.get("user_role", ""),
            store,
        )
        return {**state, "final_response": response}

    return knowledge_node
