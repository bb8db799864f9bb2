"""
knowledge/models.py

Read-only domain records served by the knowledge store.

Every model is frozen: the store builds them once at construction time
and nothing downstream is allowed to mutate them.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Roles a caller may select before chatting."""

    ENTERPRISE_LEADER = "enterprise_leader"
    SUPERVISOR = "supervisor"
    DEVELOPER = "developer"
    AGENT = "agent"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# ---------------------------------------------------------------------------
# KPI and tool metadata
# ---------------------------------------------------------------------------


class KPIBenchmarks(_FrozenModel):
    excellent: str
    good: str
    needs_improvement: str


class KPIDefinition(_FrozenModel):
    """Glossary entry for one call-center KPI."""

    id: str
    name: str
    definition: str
    formula: Optional[str] = None
    category: str
    relevant_roles: tuple[UserRole, ...]
    business_context: str
    benchmarks: KPIBenchmarks


class ToolParameter(_FrozenModel):
    name: str
    type: Literal["string", "number", "boolean", "array", "object"]
    description: str
    required: bool


class ToolDescriptor(_FrozenModel):
    """Metadata for one executable tool; parameters keep declaration order."""

    id: str
    name: str
    description: str
    parameters: tuple[ToolParameter, ...]
    category: str

    def required_parameters(self) -> list[str]:
        return [param.name for param in self.parameters if param.required]


class KPICard(_FrozenModel):
    """One tile of the role dashboard grid."""

    label: str
    value: str
    change: Optional[float] = None
    trend: Literal["up", "down", "neutral"]
    color: Literal["success", "warning", "destructive", "info"]


# ---------------------------------------------------------------------------
# Call-center snapshot
# ---------------------------------------------------------------------------


class CampaignRecord(_FrozenModel):
    name: str
    leads: int = Field(ge=0)
    conversions: int = Field(ge=0)
    revenue: int = Field(ge=0)


class AgentRecord(_FrozenModel):
    name: str
    calls_handled: int = Field(ge=0)
    avg_handle_time: int = Field(ge=0)
    satisfaction: float = Field(ge=0.0, le=5.0)


class CallCenterSnapshot(_FrozenModel):
    """
    Single aggregate view of the call center.

    There is no time dimension: every "period" a tool reports is derived
    from these values.
    """

    total_calls: int
    answered_calls: int
    average_handle_time: int
    customer_satisfaction: float = Field(ge=0.0, le=5.0)
    first_call_resolution: float
    agent_utilization: float
    campaigns: tuple[CampaignRecord, ...]
    agents: tuple[AgentRecord, ...]


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class MemberPersona(_FrozenModel):
    id: Literal["tech_savvy", "traditional", "price_conscious"]
    name: str
    description: str
    behaviors: tuple[str, ...]
    preferences: tuple[str, ...]
    pain_points: tuple[str, ...]


class MemberDemographics(_FrozenModel):
    age: int
    location: str
    income: str
    education: str
    occupation: str
    family_status: str
    customer_since: date
    tier: Literal["bronze", "silver", "gold", "platinum"]


class JourneyEvent(_FrozenModel):
    id: str
    timestamp: datetime
    touchpoint: str
    activity: str
    channel: Literal["web", "mobile", "call_center", "email", "chat", "store"]
    outcome: Literal["success", "abandoned", "escalated", "converted"]
    details: dict[str, Any] = Field(default_factory=dict)


class MemberContext(_FrozenModel):
    last_interaction: datetime
    active_issues: tuple[str, ...]
    sentiment: Literal["positive", "neutral", "negative"]
    risk_score: float = Field(ge=0.0, le=1.0)
    lifetime_value: int


class MemberProfile(_FrozenModel):
    member_id: str
    name: str
    email: str
    phone: str
    persona: MemberPersona
    demographics: MemberDemographics
    journey: tuple[JourneyEvent, ...]
    current_context: MemberContext
