"""
knowledge/seed.py

Seed tables for the static knowledge store.

KPI glossary, tool catalogue, call-center snapshot, member personas and
member profiles. Nothing here is mutated at runtime.
"""

from __future__ import annotations

from datetime import date, datetime

from knowledge.models import (
    AgentRecord,
    CallCenterSnapshot,
    CampaignRecord,
    JourneyEvent,
    KPIBenchmarks,
    KPICard,
    KPIDefinition,
    MemberContext,
    MemberDemographics,
    MemberPersona,
    MemberProfile,
    ToolDescriptor,
    ToolParameter,
    UserRole,
)

_LEADER = UserRole.ENTERPRISE_LEADER
_SUPERVISOR = UserRole.SUPERVISOR
_AGENT = UserRole.AGENT


# ---------------------------------------------------------------------------
# KPI glossary
# ---------------------------------------------------------------------------

KPI_DEFINITIONS: tuple[KPIDefinition, ...] = (
    KPIDefinition(
        id="total_calls",
        name="Total Calls",
        definition=(
            "The total number of inbound and outbound calls handled by the "
            "call center in a given time period"
        ),
        formula="Sum of all completed calls (inbound + outbound)",
        category="Volume Metrics",
        relevant_roles=(_LEADER, _SUPERVISOR, _AGENT),
        business_context=(
            "Indicates call center capacity utilization and demand levels. "
            "High volumes may require staffing adjustments."
        ),
        benchmarks=KPIBenchmarks(
            excellent="> 95% of capacity",
            good="80-95% of capacity",
            needs_improvement="< 80% of capacity",
        ),
    ),
    KPIDefinition(
        id="answer_rate",
        name="Answer Rate",
        definition=(
            "Percentage of incoming calls that are answered by agents within "
            "the defined service level"
        ),
        formula="(Answered Calls / Total Incoming Calls) × 100",
        category="Service Quality",
        relevant_roles=(_LEADER, _SUPERVISOR),
        business_context=(
            "Critical for customer satisfaction. Low answer rates indicate "
            "understaffing or inefficient call routing."
        ),
        benchmarks=KPIBenchmarks(excellent="> 95%", good="90-95%", needs_improvement="< 90%"),
    ),
    KPIDefinition(
        id="avg_handle_time",
        name="Average Handle Time (AHT)",
        definition=(
            "Average time an agent spends handling a call, including talk time "
            "and after-call work"
        ),
        formula="(Total Talk Time + Total Hold Time + Total Wrap Time) / Total Calls Handled",
        category="Efficiency Metrics",
        relevant_roles=(_SUPERVISOR, _AGENT),
        business_context=(
            "Balances efficiency with quality. Too low may indicate rushed "
            "service; too high suggests training needs."
        ),
        benchmarks=KPIBenchmarks(
            excellent="< 4 minutes",
            good="4-6 minutes",
            needs_improvement="> 6 minutes",
        ),
    ),
    KPIDefinition(
        id="customer_satisfaction",
        name="Customer Satisfaction (CSAT)",
        definition="Average rating customers give based on their service experience",
        formula="Sum of all satisfaction scores / Total number of surveys",
        category="Quality Metrics",
        relevant_roles=(_LEADER, _SUPERVISOR, _AGENT),
        business_context=(
            "Direct measure of service quality and customer experience. "
            "Impacts retention and brand reputation."
        ),
        benchmarks=KPIBenchmarks(
            excellent="> 4.5/5.0",
            good="4.0-4.5/5.0",
            needs_improvement="< 4.0/5.0",
        ),
    ),
    KPIDefinition(
        id="first_call_resolution",
        name="First Call Resolution (FCR)",
        definition=(
            "Percentage of calls resolved on the first contact without need "
            "for follow-up"
        ),
        formula="(Calls Resolved on First Contact / Total Calls) × 100",
        category="Quality Metrics",
        relevant_roles=(_SUPERVISOR, _AGENT),
        business_context=(
            "Indicates agent knowledge and process efficiency. High FCR "
            "reduces costs and improves satisfaction."
        ),
        benchmarks=KPIBenchmarks(excellent="> 85%", good="75-85%", needs_improvement="< 75%"),
    ),
    KPIDefinition(
        id="agent_utilization",
        name="Agent Utilization",
        definition="Percentage of time agents spend on productive call-related activities",
        formula="(Total Talk Time + Total Wrap Time) / Total Logged Time × 100",
        category="Efficiency Metrics",
        relevant_roles=(_LEADER, _SUPERVISOR),
        business_context=(
            "Measures workforce efficiency. Too high indicates burnout risk; "
            "too low suggests overstaffing."
        ),
        benchmarks=KPIBenchmarks(
            excellent="75-85%",
            good="65-75%",
            needs_improvement="< 65% or > 85%",
        ),
    ),
    KPIDefinition(
        id="cost_per_call",
        name="Cost Per Call",
        definition="Total operational cost divided by number of calls handled",
        formula="(Agent Costs + Technology Costs + Overhead) / Total Calls",
        category="Financial Metrics",
        relevant_roles=(_LEADER,),
        business_context=(
            "Key profitability metric. Helps optimize staffing and technology "
            "investments."
        ),
        benchmarks=KPIBenchmarks(excellent="< $10", good="$10-15", needs_improvement="> $15"),
    ),
    KPIDefinition(
        id="revenue_impact",
        name="Revenue Impact",
        definition=(
            "Total revenue generated through call center activities including "
            "sales and retention"
        ),
        formula="Direct Sales + Upsells + Retention Value - Lost Revenue",
        category="Financial Metrics",
        relevant_roles=(_LEADER,),
        business_context=(
            "Demonstrates call center value as profit center, not just cost center."
        ),
        benchmarks=KPIBenchmarks(
            excellent="> 300% of operating costs",
            good="200-300% of operating costs",
            needs_improvement="< 200% of operating costs",
        ),
    ),
)


# ---------------------------------------------------------------------------
# Tool catalogue
# ---------------------------------------------------------------------------


def _param(name: str, type_: str, description: str, required: bool) -> ToolParameter:
    return ToolParameter(name=name, type=type_, description=description, required=required)


TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        id="calculate_metric",
        name="Calculate Metric",
        description="Calculate specific KPIs or custom metrics from raw data",
        parameters=(
            _param("metric_type", "string", "Type of metric to calculate", True),
            _param("time_period", "string", "Time period for calculation", False),
            _param("filters", "object", "Additional filters to apply", False),
        ),
        category="Analytics",
    ),
    ToolDescriptor(
        id="compare_periods",
        name="Compare Time Periods",
        description="Compare metrics across different time periods",
        parameters=(
            _param("metric", "string", "Metric to compare", True),
            _param("period1", "string", "First time period", True),
            _param("period2", "string", "Second time period", True),
        ),
        category="Analytics",
    ),
    ToolDescriptor(
        id="agent_performance",
        name="Agent Performance Analysis",
        description="Analyze individual or team agent performance",
        parameters=(
            _param("agent_id", "string", "Specific agent ID or 'all' for team", False),
            _param("metrics", "array", "List of metrics to analyze", True),
            _param("benchmark", "boolean", "Include benchmark comparison", False),
        ),
        category="Performance",
    ),
    ToolDescriptor(
        id="campaign_analysis",
        name="Campaign Performance Analysis",
        description="Analyze marketing campaign effectiveness",
        parameters=(
            _param("campaign_id", "string", "Specific campaign or 'all'", False),
            _param("metrics", "array", "Metrics to analyze", True),
        ),
        category="Marketing",
    ),
    ToolDescriptor(
        id="forecast_demand",
        name="Demand Forecasting",
        description="Predict future call volumes and staffing needs",
        parameters=(
            _param("forecast_period", "string", "Period to forecast", True),
            _param("historical_data", "string", "Historical data period to use", False),
        ),
        category="Planning",
    ),
    ToolDescriptor(
        id="quality_analysis",
        name="Quality Score Analysis",
        description="Analyze call quality and customer satisfaction trends",
        parameters=(
            _param("quality_metric", "string", "Specific quality metric", True),
            _param("segment", "string", "Customer or call segment", False),
        ),
        category="Quality",
    ),
    ToolDescriptor(
        id="member_lookup",
        name="Member Information Lookup",
        description="Find member profile information by ID, name, or phone number",
        parameters=(
            _param("search_term", "string", "Member ID, name, or phone number", True),
            _param("search_type", "string", "Type of search: id, name, or phone", False),
        ),
        category="Member Services",
    ),
    ToolDescriptor(
        id="member_journey",
        name="Member Journey Analysis",
        description="Analyze customer journey and touchpoint interactions",
        parameters=(
            _param("member_id", "string", "Member ID to analyze", True),
        ),
        category="Member Services",
    ),
)


# ---------------------------------------------------------------------------
# Call-center snapshot
# ---------------------------------------------------------------------------

CALL_CENTER_SNAPSHOT = CallCenterSnapshot(
    total_calls=15420,
    answered_calls=14890,
    average_handle_time=285,
    customer_satisfaction=4.2,
    first_call_resolution=87.5,
    agent_utilization=78.3,
    campaigns=(
        CampaignRecord(name="Holiday Sale", leads=1250, conversions=312, revenue=78500),
        CampaignRecord(name="Product Launch", leads=890, conversions=245, revenue=125000),
        CampaignRecord(name="Retention Campaign", leads=2100, conversions=567, revenue=89700),
        CampaignRecord(name="Upsell Initiative", leads=760, conversions=198, revenue=45600),
    ),
    agents=(
        AgentRecord(name="Sarah Johnson", calls_handled=142, avg_handle_time=245, satisfaction=4.8),
        AgentRecord(name="Mike Chen", calls_handled=138, avg_handle_time=267, satisfaction=4.6),
        AgentRecord(name="Emily Davis", calls_handled=156, avg_handle_time=298, satisfaction=4.3),
        AgentRecord(name="Alex Rodriguez", calls_handled=129, avg_handle_time=312, satisfaction=4.1),
        AgentRecord(name="Lisa Wang", calls_handled=147, avg_handle_time=234, satisfaction=4.7),
    ),
)


# ---------------------------------------------------------------------------
# Dashboard cards
# ---------------------------------------------------------------------------


def _format_handle_time(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


def build_dashboard_cards(
    snapshot: CallCenterSnapshot,
) -> dict[str, tuple[KPICard, ...]]:
    """Return the KPI card grid per role, plus the ``"default"`` grid."""
    answer_rate = snapshot.answered_calls / snapshot.total_calls * 100
    base = (
        KPICard(
            label="Total Calls Today",
            value=f"{snapshot.total_calls:,}",
            change=12.5,
            trend="up",
            color="info",
        ),
        KPICard(label="Answer Rate", value=f"{answer_rate:.1f}%", change=3.2, trend="up", color="success"),
        KPICard(
            label="Avg Handle Time",
            value=_format_handle_time(snapshot.average_handle_time),
            change=-5.1,
            trend="down",
            color="success",
        ),
        KPICard(
            label="Customer Satisfaction",
            value=f"{snapshot.customer_satisfaction:.1f}",
            change=0.3,
            trend="up",
            color="success",
        ),
    )
    return {
        UserRole.ENTERPRISE_LEADER.value: base + (
            KPICard(label="Revenue Impact", value="$2.4M", change=18.7, trend="up", color="success"),
            KPICard(label="Cost Per Call", value="$12.50", change=-8.2, trend="down", color="success"),
        ),
        UserRole.SUPERVISOR.value: base + (
            KPICard(
                label="Agent Utilization",
                value=f"{snapshot.agent_utilization}%",
                change=5.4,
                trend="up",
                color="info",
            ),
            KPICard(
                label="First Call Resolution",
                value=f"{snapshot.first_call_resolution}%",
                change=2.1,
                trend="up",
                color="success",
            ),
        ),
        UserRole.DEVELOPER.value: (
            KPICard(label="API Response Time", value="145ms", change=-12.3, trend="down", color="success"),
            KPICard(label="System Uptime", value="99.97%", change=0.1, trend="up", color="success"),
            KPICard(label="Error Rate", value="0.03%", change=-45.2, trend="down", color="success"),
            KPICard(label="Database Queries/sec", value="1,247", change=8.9, trend="up", color="info"),
        ),
        "default": base,
    }


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

MEMBER_PERSONAS: tuple[MemberPersona, ...] = (
    MemberPersona(
        id="tech_savvy",
        name="Tech-Savvy Professional",
        description="Digital-first customer who prefers self-service and online channels",
        behaviors=("Uses mobile app frequently", "Prefers digital communication", "Quick decision maker"),
        preferences=("Online chat", "Email notifications", "Mobile-first experience"),
        pain_points=("Long wait times", "Repetitive information requests", "Inconsistent experiences"),
    ),
    MemberPersona(
        id="traditional",
        name="Traditional Customer",
        description="Prefers human interaction and established processes",
        behaviors=("Calls for most inquiries", "Values personal relationships", "Careful decision maker"),
        preferences=("Phone calls", "In-person service", "Paper statements"),
        pain_points=("Complex digital processes", "Automated systems", "Lack of personal touch"),
    ),
    MemberPersona(
        id="price_conscious",
        name="Price-Conscious Buyer",
        description="Highly sensitive to costs and seeks value optimization",
        behaviors=("Compares prices extensively", "Uses promotions", "Negotiates deals"),
        preferences=("Cost transparency", "Discount notifications", "Value propositions"),
        pain_points=("Hidden fees", "Expensive add-ons", "Complex pricing"),
    ),
)

_PERSONAS_BY_ID = {persona.id: persona for persona in MEMBER_PERSONAS}

MEMBER_PROFILES: tuple[MemberProfile, ...] = (
    MemberProfile(
        member_id="M001",
        name="Sarah Johnson",
        email="sarah.johnson@email.com",
        phone="(555) 123-4567",
        persona=_PERSONAS_BY_ID["tech_savvy"],
        demographics=MemberDemographics(
            age=34,
            location="San Francisco, CA",
            income="$85,000-$100,000",
            education="Bachelor's Degree",
            occupation="Software Engineer",
            family_status="Single",
            customer_since=date(2020, 3, 15),
            tier="gold",
        ),
        journey=(
            JourneyEvent(
                id="j1",
                timestamp=datetime(2024, 1, 15, 9, 0),
                touchpoint="Website Visit",
                activity="Product Research",
                channel="web",
                outcome="success",
                details={"pages_viewed": 5, "time_spent": "15min"},
            ),
            JourneyEvent(
                id="j2",
                timestamp=datetime(2024, 1, 15, 14, 30),
                touchpoint="Mobile App",
                activity="Account Update",
                channel="mobile",
                outcome="success",
                details={"feature": "profile_update"},
            ),
            JourneyEvent(
                id="j3",
                timestamp=datetime(2024, 1, 20, 11, 15),
                touchpoint="Customer Support",
                activity="Billing Inquiry",
                channel="chat",
                outcome="escalated",
                details={"issue": "billing_discrepancy", "agent": "Mike Chen"},
            ),
            JourneyEvent(
                id="j4",
                timestamp=datetime(2024, 1, 22, 16, 45),
                touchpoint="Call Center",
                activity="Issue Resolution",
                channel="call_center",
                outcome="success",
                details={"resolution": "billing_corrected", "satisfaction": 4.5},
            ),
        ),
        current_context=MemberContext(
            last_interaction=datetime(2024, 1, 22, 16, 45),
            active_issues=(),
            sentiment="positive",
            risk_score=0.2,
            lifetime_value=12500,
        ),
    ),
    MemberProfile(
        member_id="M002",
        name="Robert Smith",
        email="robert.smith@email.com",
        phone="(555) 987-6543",
        persona=_PERSONAS_BY_ID["traditional"],
        demographics=MemberDemographics(
            age=58,
            location="Dallas, TX",
            income="$60,000-$75,000",
            education="High School",
            occupation="Retail Manager",
            family_status="Married with children",
            customer_since=date(2015, 8, 20),
            tier="platinum",
        ),
        journey=(
            JourneyEvent(
                id="j5",
                timestamp=datetime(2024, 1, 10, 10, 0),
                touchpoint="Call Center",
                activity="Service Inquiry",
                channel="call_center",
                outcome="success",
                details={"duration": "12min", "agent": "Lisa Wong"},
            ),
            JourneyEvent(
                id="j6",
                timestamp=datetime(2024, 1, 18, 15, 20),
                touchpoint="Branch Visit",
                activity="Document Submission",
                channel="store",
                outcome="success",
                details={"documents": ["insurance_claim"], "staff": "John Davis"},
            ),
            JourneyEvent(
                id="j7",
                timestamp=datetime(2024, 1, 25, 9, 30),
                touchpoint="Call Center",
                activity="Follow-up Call",
                channel="call_center",
                outcome="success",
                details={"purpose": "claim_status", "satisfaction": 5.0},
            ),
        ),
        current_context=MemberContext(
            last_interaction=datetime(2024, 1, 25, 9, 30),
            active_issues=("insurance_claim_pending",),
            sentiment="neutral",
            risk_score=0.3,
            lifetime_value=45000,
        ),
    ),
)
