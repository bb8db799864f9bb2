"""
tools/metrics.py

Snapshot metric tools: ``calculate_metric`` and ``compare_periods``.

Display formats
---------------
answer_rate            answered / total × 100, one decimal, ``96.6%``
avg_handle_time        seconds rendered as ``m:ss``
customer_satisfaction  one decimal on a five-point scale, ``4.2/5.0``
first_call_resolution  one decimal, ``87.5%``
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from app.failure_codes import LOOKUP_MISS
from knowledge.models import CallCenterSnapshot
from tools.base import BaseTool, format_handle_time
from tools.params import CalculateMetricParams, ComparePeriodsParams
from tools.results import (
    ChartPayload,
    ComparisonPayload,
    MetricPayload,
    PeriodValue,
    ToolResult,
)

# Placeholder for the missing history: the "previous" period is the current
# value minus this offset. Replace with a real historical lookup.
SIMULATED_PREVIOUS_OFFSET = 0.3


class _MetricView(NamedTuple):
    value: Callable[[CallCenterSnapshot], str]
    calculation: Callable[[CallCenterSnapshot], str]
    benchmark: str


def _answer_rate(snapshot: CallCenterSnapshot) -> float:
    if snapshot.total_calls == 0:
        return 0.0
    return snapshot.answered_calls / snapshot.total_calls * 100


_METRIC_VIEWS: dict[str, _MetricView] = {
    "answer_rate": _MetricView(
        value=lambda s: f"{_answer_rate(s):.1f}%",
        calculation=lambda s: f"{s.answered_calls} answered / {s.total_calls} total calls",
        benchmark="Excellent (>95%)",
    ),
    "avg_handle_time": _MetricView(
        value=lambda s: format_handle_time(s.average_handle_time),
        calculation=lambda s: f"{s.average_handle_time} seconds average",
        benchmark="Good (4-6 minutes)",
    ),
    "customer_satisfaction": _MetricView(
        value=lambda s: f"{s.customer_satisfaction:.1f}/5.0",
        calculation=lambda s: "Based on customer survey responses",
        benchmark="Good (4.0-4.5/5.0)",
    ),
    "first_call_resolution": _MetricView(
        value=lambda s: f"{s.first_call_resolution:.1f}%",
        calculation=lambda s: "Calls resolved on first contact",
        benchmark="Excellent (>85%)",
    ),
}

SUPPORTED_METRICS: tuple[str, ...] = tuple(_METRIC_VIEWS)


class CalculateMetricTool(BaseTool[CalculateMetricParams]):
    """Look up one precomputed KPI and attach its glossary context."""

    tool_id = "calculate_metric"
    params_model = CalculateMetricParams

    def run(self, params: CalculateMetricParams) -> ToolResult:
        view = _METRIC_VIEWS.get(params.metric_type)
        if view is None:
            return ToolResult.failure(
                f'Metric "{params.metric_type}" not found. '
                f"Available metrics: {', '.join(SUPPORTED_METRICS)}",
                LOOKUP_MISS,
            )

        snapshot = self._store.snapshot()
        kpi_def = self._store.get_kpi_definition(params.metric_type)
        value = view.value(snapshot)

        payload = MetricPayload(
            metric=params.metric_type,
            value=value,
            calculation=view.calculation(snapshot),
            benchmark=view.benchmark,
            definition=kpi_def.definition if kpi_def else None,
            business_context=kpi_def.business_context if kpi_def else None,
        )
        return ToolResult.ok(
            f"Calculated {params.metric_type} for {params.time_period}: {value}",
            payload,
        )


class ComparePeriodsTool(BaseTool[ComparePeriodsParams]):
    """
    Compare a metric between two named periods.

    The snapshot has no history, so the earlier period is synthesised from
    :data:`SIMULATED_PREVIOUS_OFFSET`. Every metric is compared on the
    customer satisfaction score; ``metric`` only labels the result.
    """

    tool_id = "compare_periods"
    params_model = ComparePeriodsParams

    def run(self, params: ComparePeriodsParams) -> ToolResult:
        snapshot = self._store.snapshot()
        current_value = snapshot.customer_satisfaction
        previous_value = current_value - SIMULATED_PREVIOUS_OFFSET

        change_percent = 0.0
        if previous_value != 0:
            change_percent = round(
                (current_value - previous_value) / previous_value * 100, 1
            )

        payload = ComparisonPayload(
            metric=params.metric,
            period1=PeriodValue(period=params.period1, value=f"{previous_value:.1f}"),
            period2=PeriodValue(period=params.period2, value=f"{current_value:.1f}"),
            change=f"+{change_percent:.1f}%",
            change_percent=change_percent,
            trend="improving",
        )
        chart = ChartPayload(
            type="trend",
            data=[
                {"period": params.period1, "value": previous_value},
                {"period": params.period2, "value": current_value},
            ],
        )
        return ToolResult.ok(
            f"{params.metric} improved by {change_percent:.1f}% "
            f"from {params.period1} to {params.period2}",
            payload,
            chart,
        )
