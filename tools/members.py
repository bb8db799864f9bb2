"""
tools/members.py

Member service tools: ``member_lookup`` and ``member_journey``.
"""

from __future__ import annotations

from app.failure_codes import LOOKUP_MISS
from knowledge.models import JourneyEvent, MemberProfile
from tools.base import BaseTool, round_half_up
from tools.params import MemberJourneyParams, MemberLookupParams
from tools.results import (
    ChartPayload,
    JourneyStats,
    MemberJourneyPayload,
    MemberLookupPayload,
    MemberSummary,
    RecentActivity,
    ToolResult,
)

_SECONDS_PER_DAY = 60 * 60 * 24
_HIGH_SUCCESS_RATIO = 0.8
_RECENT_EVENTS = 3


class MemberLookupTool(BaseTool[MemberLookupParams]):
    """
    Find a member by id, phone or name.

    Only the first match is returned in chat context; ``search_results``
    still reports how many members matched.
    """

    tool_id = "member_lookup"
    params_model = MemberLookupParams

    def _search(self, params: MemberLookupParams) -> list[MemberProfile]:
        if params.search_type == "id":
            member = self._store.get_member_by_id(params.search_term)
            return [member] if member else []
        if params.search_type == "phone":
            return self._store.search_members_by_phone(params.search_term)
        return self._store.search_members_by_name(params.search_term)

    def run(self, params: MemberLookupParams) -> ToolResult:
        if not params.search_term:
            return ToolResult.failure("Search term is required for member lookup", LOOKUP_MISS)

        members = self._search(params)
        if not members:
            return ToolResult.failure(
                f'No members found for "{params.search_term}"', LOOKUP_MISS
            )

        member = members[0]
        context = member.current_context
        payload = MemberLookupPayload(
            member=member,
            search_results=len(members),
            member_info=MemberSummary(
                name=member.name,
                tier=member.demographics.tier,
                sentiment=context.sentiment,
                risk_score=context.risk_score,
                lifetime_value=context.lifetime_value,
                active_issues=list(context.active_issues),
                persona=member.persona.name,
            ),
        )
        return ToolResult.ok(
            f"Found member: {member.name} ({member.demographics.tier} tier, "
            f"{context.sentiment} sentiment)",
            payload,
        )


def _journey_span_days(journey: tuple[JourneyEvent, ...]) -> int:
    if not journey:
        return 0
    delta = journey[-1].timestamp - journey[0].timestamp
    return round_half_up(delta.total_seconds() / _SECONDS_PER_DAY)


def _journey_insights(
    journey: tuple[JourneyEvent, ...],
    channels: set[str],
    successful: int,
    escalated: int,
) -> list[str]:
    insights: list[str] = []
    if escalated > 0:
        insights.append(f"{escalated} interactions required escalation")
    if "call_center" in channels and "chat" in channels:
        insights.append("Customer uses both call center and chat support")
    if journey and successful / len(journey) > _HIGH_SUCCESS_RATIO:
        insights.append("High success rate in interactions")
    return insights


class MemberJourneyTool(BaseTool[MemberJourneyParams]):
    """Touchpoint statistics and rule-based insights for one member."""

    tool_id = "member_journey"
    params_model = MemberJourneyParams

    def run(self, params: MemberJourneyParams) -> ToolResult:
        member = self._store.get_member_by_id(params.member_id)
        if member is None:
            return ToolResult.failure(
                f'Member with ID "{params.member_id}" not found', LOOKUP_MISS
            )

        journey = member.journey
        channels = {event.channel for event in journey}
        successful = sum(1 for event in journey if event.outcome == "success")
        escalated = sum(1 for event in journey if event.outcome == "escalated")
        span_days = _journey_span_days(journey)

        payload = MemberJourneyPayload(
            member=member.name,
            journey_stats=JourneyStats(
                total_touchpoints=len(journey),
                channels_used=len(channels),
                successful_interactions=successful,
                escalated_interactions=escalated,
                journey_span_days=span_days,
            ),
            insights=_journey_insights(journey, channels, successful, escalated),
            recent_activity=[
                RecentActivity(
                    touchpoint=event.touchpoint,
                    activity=event.activity,
                    outcome=event.outcome,
                    timestamp=event.timestamp,
                )
                for event in journey[-_RECENT_EVENTS:]
            ],
        )
        chart = ChartPayload(
            type="journey_timeline",
            data=[event.model_dump(mode="json") for event in journey],
        )
        return ToolResult.ok(
            f"Journey analysis for {member.name}: {len(journey)} touchpoints across "
            f"{len(channels)} channels over {span_days} days",
            payload,
            chart,
        )
