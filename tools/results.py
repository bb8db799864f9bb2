"""
tools/results.py

Result contract shared by every tool.

Each tool returns a :class:`ToolResult`. Successful results carry one of a
closed set of payload shapes, discriminated by ``kind``, so callers can
branch on the variant instead of probing for optional keys.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from knowledge.models import AgentRecord, CampaignRecord, MemberProfile


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------------
# Chart payload
# ---------------------------------------------------------------------------


class ChartPayload(_Payload):
    """Series handed to the presentation layer for plotting."""

    type: Literal[
        "trend",
        "agent_comparison",
        "campaign_performance",
        "forecast",
        "journey_timeline",
    ]
    data: list[dict[str, Any]]


# ---------------------------------------------------------------------------
# Per-tool payloads
# ---------------------------------------------------------------------------


class MetricPayload(_Payload):
    kind: Literal["metric"] = "metric"
    metric: str
    value: str
    calculation: str
    benchmark: str
    definition: Optional[str] = None
    business_context: Optional[str] = None


class PeriodValue(_Payload):
    period: str
    value: str


class ComparisonPayload(_Payload):
    kind: Literal["comparison"] = "comparison"
    metric: str
    period1: PeriodValue
    period2: PeriodValue
    change: str
    change_percent: float
    trend: Literal["improving", "declining", "stable"]


class AgentStats(_Payload):
    calls_handled: int
    avg_handle_time: str
    satisfaction: str
    ranking: str


class AgentDetailPayload(_Payload):
    kind: Literal["agent_detail"] = "agent_detail"
    agent: str
    performance: AgentStats


class TeamPayload(_Payload):
    kind: Literal["team"] = "team"
    team_size: int
    top_performer: str
    avg_satisfaction: float
    agents: list[AgentRecord]


class CampaignStats(_Payload):
    leads: int
    conversions: int
    revenue: str
    conversion_rate: str
    revenue_per_lead: str


class CampaignDetailPayload(_Payload):
    kind: Literal["campaign_detail"] = "campaign_detail"
    campaign: str
    performance: CampaignStats


class CampaignSummary(_Payload):
    name: str
    leads: int
    conversions: int
    revenue: int
    conversion_rate: float
    revenue_per_lead: float


class CampaignPortfolioPayload(_Payload):
    kind: Literal["campaign_portfolio"] = "campaign_portfolio"
    total_campaigns: int
    total_revenue: str
    best_performer: str
    campaigns: list[CampaignSummary]


class StaffingRecommendation(_Payload):
    current_agents: int
    required_agents: int
    additional_needed: int


class ForecastPayload(_Payload):
    kind: Literal["forecast"] = "forecast"
    period: str
    current_calls: int
    forecasted_calls: int
    projected_growth: str
    staffing_recommendation: StaffingRecommendation


class QualityPayload(_Payload):
    kind: Literal["quality"] = "quality"
    quality_metric: str
    segment: Optional[str] = None
    overall_satisfaction: float
    first_call_resolution: float
    quality_trend: str
    top_issues: list[str]
    improvements: list[str]


class MemberSummary(_Payload):
    name: str
    tier: str
    sentiment: str
    risk_score: float
    lifetime_value: int
    active_issues: list[str]
    persona: str


class MemberLookupPayload(_Payload):
    kind: Literal["member_lookup"] = "member_lookup"
    member: MemberProfile
    search_results: int
    member_info: MemberSummary


class JourneyStats(_Payload):
    total_touchpoints: int
    channels_used: int
    successful_interactions: int
    escalated_interactions: int
    journey_span_days: int


class RecentActivity(_Payload):
    touchpoint: str
    activity: str
    outcome: str
    timestamp: datetime


class MemberJourneyPayload(_Payload):
    kind: Literal["member_journey"] = "member_journey"
    member: str
    journey_stats: JourneyStats
    insights: list[str]
    recent_activity: list[RecentActivity]


ToolPayload = Annotated[
    Union[
        MetricPayload,
        ComparisonPayload,
        AgentDetailPayload,
        TeamPayload,
        CampaignDetailPayload,
        CampaignPortfolioPayload,
        ForecastPayload,
        QualityPayload,
        MemberLookupPayload,
        MemberJourneyPayload,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Result envelope
# ---------------------------------------------------------------------------


class ToolResult(BaseModel):
    """Outcome of one tool call. Failures never raise; they set ``success``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    success: bool
    message: str
    data: Optional[ToolPayload] = None
    chart: Optional[ChartPayload] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(
        cls,
        message: str,
        data: Any,
        chart: ChartPayload | None = None,
    ) -> "ToolResult":
        return cls(success=True, message=message, data=data, chart=chart)

    @classmethod
    def failure(cls, message: str, error_code: str) -> "ToolResult":
        return cls(success=False, message=message, error_code=error_code)
