"""
agent/member_context.py

Helpers for chatting about a specific member.

The prefix built here is prepended to the user's text before it reaches
the classifier, which matches it like any other substring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from knowledge.models import MemberProfile

_HIGH_RISK_THRESHOLD = 0.5
_PREMIUM_TIERS = {"gold", "platinum"}


def with_member_context(text: str, member: MemberProfile) -> str:
    """Return ``[Member Context: <name> (<id>)] <text>``."""
    return f"[Member Context: {member.name} ({member.member_id})] {text}"


@dataclass(frozen=True)
class AssistAction:
    type: Literal["urgent", "warning", "info", "premium"]
    title: str
    description: str
    action: str


def call_assist_actions(member: MemberProfile) -> list[AssistAction]:
    """Suggested handling steps for an agent on a call with *member*."""
    context = member.current_context
    actions: list[AssistAction] = []

    if context.active_issues:
        actions.append(
            AssistAction(
                type="urgent",
                title="Review Active Issues",
                description=f"Address {len(context.active_issues)} pending issues",
                action="Show active issues and resolution status",
            )
        )

    if context.risk_score > _HIGH_RISK_THRESHOLD:
        actions.append(
            AssistAction(
                type="warning",
                title="High Risk Customer",
                description="Customer shows signs of potential churn",
                action="Apply retention strategy and escalate if needed",
            )
        )

    if member.persona.id == "traditional":
        actions.append(
            AssistAction(
                type="info",
                title="Traditional Customer Preference",
                description="Prefers phone calls and personal service",
                action="Provide detailed explanations and personal attention",
            )
        )
    elif member.persona.id == "tech_savvy":
        actions.append(
            AssistAction(
                type="info",
                title="Tech-Savvy Customer",
                description="Comfortable with digital solutions",
                action="Offer digital tools and self-service options",
            )
        )

    tier = member.demographics.tier
    if tier in _PREMIUM_TIERS:
        actions.append(
            AssistAction(
                type="premium",
                title=f"{tier.upper()} Member",
                description="High-value customer - prioritize service",
                action="Apply premium service protocols",
            )
        )

    return actions
