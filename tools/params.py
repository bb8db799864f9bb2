"""
tools/params.py

Typed parameter structs, one per tool id.

Names and optionality mirror the tool catalogue in ``knowledge/seed.py``;
the executor checks the catalogue's required list first and then parses
the raw dict into the matching model here.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict


class _Params(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)


class CalculateMetricParams(_Params):
    metric_type: str
    time_period: str = "today"
    filters: Optional[dict[str, Any]] = None


class ComparePeriodsParams(_Params):
    metric: str
    period1: str
    period2: str


class AgentPerformanceParams(_Params):
    agent_id: Optional[str] = None
    metrics: list[str]
    benchmark: bool = True


class CampaignAnalysisParams(_Params):
    campaign_id: Optional[str] = None
    metrics: list[str]


class ForecastDemandParams(_Params):
    forecast_period: str
    historical_data: Optional[str] = None


class QualityAnalysisParams(_Params):
    quality_metric: str
    segment: Optional[str] = None


class MemberLookupParams(_Params):
    search_term: str
    search_type: Literal["id", "name", "phone"] = "name"


class MemberJourneyParams(_Params):
    member_id: str
