"""
agent/nodes/intent.py

Intent node: classifies user_query into an intent type and extracts KPI
and roster entities using deterministic keyword rules. No LLM, no store.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Literal

from agent.state import AgentState

logger = logging.getLogger(__name__)

IntentType = Literal[
    "calculation",
    "comparison",
    "analysis",
    "forecast",
    "definition",
    "general",
]

MATCHED_CONFIDENCE = 0.8
GENERAL_CONFIDENCE = 0.5


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IntentRule:
    """One classification rule; lower priority is evaluated first."""

    intent_type: IntentType
    pattern: re.Pattern[str]
    priority: int

    def matches(self, query: str) -> bool:
        return self.pattern.search(query) is not None


INTENT_RULES: tuple[IntentRule, ...] = tuple(
    sorted(
        (
            IntentRule(
                "calculation",
                re.compile(r"calculate|compute|what is|show me|current|today"),
                10,
            ),
            IntentRule(
                "comparison",
                re.compile(r"compare|versus|vs|difference|trend|change|last|previous"),
                20,
            ),
            IntentRule(
                "analysis",
                re.compile(r"analyze|analysis|performance|deep dive|insights|breakdown"),
                30,
            ),
            IntentRule(
                "forecast",
                re.compile(r"forecast|predict|future|projection|estimate|expect"),
                40,
            ),
            IntentRule(
                "definition",
                re.compile(r"what does|define|definition|meaning|explain|help me understand"),
                50,
            ),
        ),
        key=lambda rule: rule.priority,
    )
)

KPI_KEYWORDS: dict[str, list[str]] = {
    "answer_rate": ["answer rate", "answered calls", "service level"],
    "avg_handle_time": ["handle time", "aht", "call duration", "talk time"],
    "customer_satisfaction": ["satisfaction", "csat", "customer rating", "feedback"],
    "first_call_resolution": ["fcr", "first call", "resolution", "resolved"],
    "agent_utilization": ["utilization", "agent productivity", "efficiency"],
    "cost_per_call": ["cost", "expenses", "budget"],
    "revenue_impact": ["revenue", "sales", "income", "profit"],
}

ROSTER_KEYWORDS: dict[str, list[str]] = {
    "agents": ["agent", "team"],
    "campaigns": ["campaign", "marketing"],
}


@dataclass(frozen=True)
class Intent:
    type: IntentType
    entities: list[str] = field(default_factory=list)
    confidence: float = GENERAL_CONFIDENCE


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def extract_entities(query: str) -> list[str]:
    """
    Return entity tags present in *query*, in table order.

    KPI ids come first (one per id, whichever synonym hit), then the
    ``agents`` / ``campaigns`` roster tags.
    """
    lowered = query.lower()
    entities: list[str] = []

    for kpi_id, keywords in KPI_KEYWORDS.items():
        if any(kw in lowered for kw in keywords):
            entities.append(kpi_id)

    for tag, keywords in ROSTER_KEYWORDS.items():
        if any(kw in lowered for kw in keywords):
            entities.append(tag)

    return entities


def matching_rules(query: str) -> list[IntentRule]:
    """Return every rule whose pattern matches *query*, in evaluation order."""
    lowered = query.lower()
    return [rule for rule in INTENT_RULES if rule.matches(lowered)]


def classify(query: str) -> Intent:
    """First matching rule wins; no match yields ``general``."""
    lowered = query.lower()
    entities = extract_entities(lowered)

    for rule in INTENT_RULES:
        if rule.matches(lowered):
            return Intent(type=rule.intent_type, entities=entities, confidence=MATCHED_CONFIDENCE)

    return Intent(type="general", entities=entities, confidence=GENERAL_CONFIDENCE)


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------


def intent_node(state: AgentState) -> AgentState:
    """
    LangGraph node: classify user_query.

    Updates state fields:
        - intent  (:class:`Intent`)

    All other state fields are left untouched.
    """
    query: str = state.get("user_query", "")
    intent = classify(query)
    logger.debug(
        "intent_node type=%s entities=%s confidence=%.1f",
        intent.type,
        intent.entities,
        intent.confidence,
    )
    return {**state, "intent": intent}
