"""
tools/forecast.py

Demand forecast and quality narrative tools.

Formulas
--------
Forecasted calls  = round_half_up(total_calls × 1.15)
Required agents   = ceil(forecasted_calls / 150)
Additional needed = max(0, required_agents − current roster size)
"""

from __future__ import annotations

import math

from tools.base import BaseTool, round_half_up
from tools.params import ForecastDemandParams, QualityAnalysisParams
from tools.results import (
    ChartPayload,
    ForecastPayload,
    QualityPayload,
    StaffingRecommendation,
    ToolResult,
)

GROWTH_FACTOR = 1.15
CALLS_PER_AGENT = 150

_TOP_ISSUES = (
    "Long wait times",
    "Agent knowledge gaps",
    "System technical issues",
)
_IMPROVEMENTS = (
    "Implement callback system",
    "Enhanced agent training",
    "System upgrades",
)


class ForecastDemandTool(BaseTool[ForecastDemandParams]):
    """Project next-period call volume and the headcount needed to absorb it."""

    tool_id = "forecast_demand"
    params_model = ForecastDemandParams

    def run(self, params: ForecastDemandParams) -> ToolResult:
        snapshot = self._store.snapshot()
        current_calls = snapshot.total_calls
        forecasted_calls = round_half_up(current_calls * GROWTH_FACTOR)
        required_agents = math.ceil(forecasted_calls / CALLS_PER_AGENT)
        current_agents = len(snapshot.agents)
        growth_label = f"{round((GROWTH_FACTOR - 1) * 100)}%"

        payload = ForecastPayload(
            period=params.forecast_period,
            current_calls=current_calls,
            forecasted_calls=forecasted_calls,
            projected_growth=growth_label,
            staffing_recommendation=StaffingRecommendation(
                current_agents=current_agents,
                required_agents=required_agents,
                additional_needed=max(0, required_agents - current_agents),
            ),
        )
        chart = ChartPayload(
            type="forecast",
            data=[
                {"period": "Current", "calls": current_calls},
                {"period": params.forecast_period, "calls": forecasted_calls},
            ],
        )
        return ToolResult.ok(
            f"Demand forecast for {params.forecast_period}: {forecasted_calls} calls "
            f"expected (+{growth_label} growth)",
            payload,
            chart,
        )


class QualityAnalysisTool(BaseTool[QualityAnalysisParams]):
    """Fixed quality narrative plus the snapshot's CSAT and FCR."""

    tool_id = "quality_analysis"
    params_model = QualityAnalysisParams

    def run(self, params: QualityAnalysisParams) -> ToolResult:
        snapshot = self._store.snapshot()
        payload = QualityPayload(
            quality_metric=params.quality_metric,
            segment=params.segment,
            overall_satisfaction=snapshot.customer_satisfaction,
            first_call_resolution=snapshot.first_call_resolution,
            quality_trend="improving",
            top_issues=list(_TOP_ISSUES),
            improvements=list(_IMPROVEMENTS),
        )
        return ToolResult.ok(
            "Quality analysis completed. "
            f"Overall satisfaction: {snapshot.customer_satisfaction}/5.0",
            payload,
        )
