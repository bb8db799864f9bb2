"""
agent/fallback.py

Degraded response generator used when the main pipeline raises.

Keyword matching picks the branch; store reads happen only inside the
branch that needs them. A store error there degrades to the role text.
"""

from __future__ import annotations

import logging
from typing import Optional

from agent.schema import AgentResponse
from knowledge.base import KnowledgeStore
from knowledge.models import UserRole

_ROLE_FALLBACKS: dict[str, str] = {
    UserRole.ENTERPRISE_LEADER.value: (
        "As an Enterprise Leader, I can provide insights on revenue impact, cost "
        "optimization, and strategic KPIs. Try asking about 'KPIs', 'campaign "
        "performance', or 'call metrics'."
    ),
    UserRole.SUPERVISOR.value: (
        "As a Supervisor, I can help you monitor team performance, agent "
        "utilization, and operational metrics. Ask me about 'team performance', "
        "'agent metrics', or 'call quality'."
    ),
    UserRole.DEVELOPER.value: (
        "As a Developer, I can show you system performance, API metrics, and "
        "technical insights. Try asking about 'system metrics', 'performance "
        "data', or 'technical KPIs'."
    ),
    UserRole.AGENT.value: (
        "I can help you with call center insights and performance data. Ask me "
        "about 'my performance', 'call metrics', or 'campaign results'."
    ),
}

_GENERIC_FALLBACK = "How can I help you with call center analytics today?"

logger = logging.getLogger(__name__)


def _role_label(role: str) -> str:
    return str(role).replace("_", " ", 1)


def fallback_response(query: str, role: str, store: KnowledgeStore) -> AgentResponse:
    """
    Keyword-only answer for *query*.

    kpi / metric / performance  -> ``kpi`` envelope with the role dashboard
    campaign / marketing        -> campaign ``chart``
    agent / team                -> agent ``chart``
    call / volume               -> ``tool_result`` snapshot overview
    anything else               -> role text
    """
    role_value = getattr(role, "value", role)
    lowered = (query or "").lower()
    try:
        response = _keyword_response(lowered, role_value, store)
    except Exception:
        logger.exception("Fallback store lookup failed role=%s", role_value)
        response = None
    if response is not None:
        return response
    return AgentResponse.text(_ROLE_FALLBACKS.get(role_value, _GENERIC_FALLBACK))


def _keyword_response(
    lowered: str, role_value: str, store: KnowledgeStore
) -> Optional[AgentResponse]:
    if any(word in lowered for word in ("kpi", "metric", "performance")):
        return AgentResponse(
            type="kpi",
            content=(
                "Here are the key performance indicators for your "
                f"{_role_label(role_value)} dashboard:"
            ),
            data=[card.model_dump(mode="json") for card in store.get_dashboard_kpis(role_value)],
        )

    if "campaign" in lowered or "marketing" in lowered:
        return AgentResponse(
            type="chart",
            content="Here's the current campaign performance data:",
            data={
                "type": "campaign_performance",
                "data": [c.model_dump(mode="json") for c in store.snapshot().campaigns],
            },
        )

    if "agent" in lowered or "team" in lowered:
        return AgentResponse(
            type="chart",
            content="Agent performance overview:",
            data={
                "type": "agent_comparison",
                "data": [a.model_dump(mode="json") for a in store.snapshot().agents],
            },
        )

    if "call" in lowered or "volume" in lowered:
        return AgentResponse(
            type="tool_result",
            content="Call center overview dashboard:",
            data=store.snapshot().model_dump(mode="json"),
        )

    return None
