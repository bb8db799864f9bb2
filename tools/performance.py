"""
tools/performance.py

Roster tools: ``agent_performance`` and ``campaign_analysis``.

Both accept an optional name fragment. A fragment other than ``"all"``
selects the first record whose name contains it (case-insensitive);
otherwise the whole roster is aggregated and a chart series is attached.
"""

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

from app.failure_codes import LOOKUP_MISS
from knowledge.models import CampaignRecord
from tools.base import BaseTool, format_handle_time
from tools.params import AgentPerformanceParams, CampaignAnalysisParams
from tools.results import (
    AgentDetailPayload,
    AgentStats,
    CampaignDetailPayload,
    CampaignPortfolioPayload,
    CampaignStats,
    CampaignSummary,
    ChartPayload,
    TeamPayload,
    ToolResult,
)

logger = logging.getLogger(__name__)

_TOP_RANKING_LABEL = "Top 20%"

RecordT = TypeVar("RecordT")


def _find_by_name(records: Iterable[RecordT], fragment: str) -> RecordT | None:
    needle = fragment.lower()
    for record in records:
        if needle in record.name.lower():  # type: ignore[attr-defined]
            return record
    return None


def _wants_single(identifier: str | None) -> bool:
    return bool(identifier) and identifier != "all"


def _conversion_rate(campaign: CampaignRecord) -> float:
    if campaign.leads == 0:
        return 0.0
    return campaign.conversions / campaign.leads


def _revenue_per_lead(campaign: CampaignRecord) -> float:
    if campaign.leads == 0:
        return 0.0
    return campaign.revenue / campaign.leads


class AgentPerformanceTool(BaseTool[AgentPerformanceParams]):
    """Per-agent stats, or a team aggregate with the top performer."""

    tool_id = "agent_performance"
    params_model = AgentPerformanceParams

    def run(self, params: AgentPerformanceParams) -> ToolResult:
        agents = self._store.snapshot().agents

        if _wants_single(params.agent_id):
            agent = _find_by_name(agents, params.agent_id)
            if agent is None:
                return ToolResult.failure(f'Agent "{params.agent_id}" not found', LOOKUP_MISS)

            payload = AgentDetailPayload(
                agent=agent.name,
                performance=AgentStats(
                    calls_handled=agent.calls_handled,
                    avg_handle_time=format_handle_time(agent.avg_handle_time),
                    satisfaction=f"{agent.satisfaction:.1f}",
                    ranking=_TOP_RANKING_LABEL,
                ),
            )
            return ToolResult.ok(f"Performance analysis for {agent.name} completed", payload)

        if not agents:
            return ToolResult.failure("No agents available for team analysis", LOOKUP_MISS)

        # max() keeps the first of equal maxima
        top_performer = max(agents, key=lambda a: a.satisfaction)
        avg_satisfaction = round(sum(a.satisfaction for a in agents) / len(agents), 1)
        logger.debug(
            "agent_performance team_size=%d top=%r avg=%.1f",
            len(agents),
            top_performer.name,
            avg_satisfaction,
        )

        payload = TeamPayload(
            team_size=len(agents),
            top_performer=top_performer.name,
            avg_satisfaction=avg_satisfaction,
            agents=list(agents),
        )
        chart = ChartPayload(
            type="agent_comparison",
            data=[agent.model_dump() for agent in agents],
        )
        return ToolResult.ok(
            f"Team performance analysis completed. Top performer: {top_performer.name}",
            payload,
            chart,
        )


class CampaignAnalysisTool(BaseTool[CampaignAnalysisParams]):
    """Per-campaign funnel stats, or a portfolio view with the best converter."""

    tool_id = "campaign_analysis"
    params_model = CampaignAnalysisParams

    def run(self, params: CampaignAnalysisParams) -> ToolResult:
        campaigns = self._store.snapshot().campaigns

        if _wants_single(params.campaign_id):
            campaign = _find_by_name(campaigns, params.campaign_id)
            if campaign is None:
                return ToolResult.failure(
                    f'Campaign "{params.campaign_id}" not found', LOOKUP_MISS
                )

            conversion_rate = f"{_conversion_rate(campaign) * 100:.1f}%"
            revenue_per_lead = f"${_revenue_per_lead(campaign):.2f}"
            payload = CampaignDetailPayload(
                campaign=campaign.name,
                performance=CampaignStats(
                    leads=campaign.leads,
                    conversions=campaign.conversions,
                    revenue=f"${campaign.revenue:,}",
                    conversion_rate=conversion_rate,
                    revenue_per_lead=revenue_per_lead,
                ),
            )
            return ToolResult.ok(
                f"{campaign.name} analysis: {conversion_rate} conversion rate, "
                f"{revenue_per_lead} per lead",
                payload,
            )

        if not campaigns:
            return ToolResult.failure("No campaigns available for analysis", LOOKUP_MISS)

        total_revenue = sum(c.revenue for c in campaigns)
        best = max(campaigns, key=_conversion_rate)

        payload = CampaignPortfolioPayload(
            total_campaigns=len(campaigns),
            total_revenue=f"${total_revenue:,}",
            best_performer=best.name,
            campaigns=[
                CampaignSummary(
                    name=c.name,
                    leads=c.leads,
                    conversions=c.conversions,
                    revenue=c.revenue,
                    conversion_rate=round(_conversion_rate(c) * 100, 1),
                    revenue_per_lead=round(_revenue_per_lead(c), 2),
                )
                for c in campaigns
            ],
        )
        chart = ChartPayload(
            type="campaign_performance",
            data=[c.model_dump() for c in campaigns],
        )
        return ToolResult.ok(
            f"Campaign analysis completed. Best performer: {best.name}",
            payload,
            chart,
        )
