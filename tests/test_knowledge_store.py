"""
tests/test_knowledge_store.py

Unit tests for StaticKnowledgeStore over the seed tables.

Coverage
--------
- KPI lookups by id, role and category
- Dashboard grids per role and the default grid
- Tool catalogue lookups and required parameter names
- Member lookups by id, phone (formatted and bare digits) and name
- Injected tables replace the seed data
"""

from __future__ import annotations

import pytest

from knowledge import StaticKnowledgeStore, UserRole, get_knowledge_store
from knowledge.models import AgentRecord, CallCenterSnapshot


@pytest.fixture()
def store() -> StaticKnowledgeStore:
    return StaticKnowledgeStore()


# ---------------------------------------------------------------------------
# KPI glossary
# ---------------------------------------------------------------------------


class TestKPIGlossary:
    def test_catalogue_has_eight_definitions(self, store: StaticKnowledgeStore) -> None:
        assert len(store.list_kpis()) == 8

    def test_lookup_by_id(self, store: StaticKnowledgeStore) -> None:
        kpi = store.get_kpi_definition("first_call_resolution")
        assert kpi is not None
        assert kpi.name == "First Call Resolution (FCR)"

    def test_unknown_id_returns_none(self, store: StaticKnowledgeStore) -> None:
        assert store.get_kpi_definition("net_promoter_score") is None

    def test_by_role_accepts_enum_and_string(self, store: StaticKnowledgeStore) -> None:
        by_enum = store.get_kpis_by_role(UserRole.ENTERPRISE_LEADER)
        by_str = store.get_kpis_by_role("enterprise_leader")
        assert by_enum == by_str
        assert {k.id for k in by_str} >= {"cost_per_call", "revenue_impact"}

    def test_unknown_role_matches_nothing(self, store: StaticKnowledgeStore) -> None:
        assert store.get_kpis_by_role("intern") == []

    def test_by_category_is_exact(self, store: StaticKnowledgeStore) -> None:
        financial = store.get_kpis_by_category("Financial Metrics")
        assert [k.id for k in financial] == ["cost_per_call", "revenue_impact"]
        assert store.get_kpis_by_category("financial metrics") == []


# ---------------------------------------------------------------------------
# Dashboards
# ---------------------------------------------------------------------------


class TestDashboards:
    @pytest.mark.parametrize(
        "role, expected_count",
        [
            ("enterprise_leader", 6),
            ("supervisor", 6),
            ("developer", 4),
            ("agent", 4),
        ],
    )
    def test_card_count_per_role(
        self, store: StaticKnowledgeStore, role: str, expected_count: int
    ) -> None:
        assert len(store.get_dashboard_kpis(role)) == expected_count

    def test_unknown_role_gets_default_grid(self, store: StaticKnowledgeStore) -> None:
        assert store.get_dashboard_kpis("nobody") == store.get_dashboard_kpis("agent")

    def test_base_cards_are_derived_from_snapshot(self, store: StaticKnowledgeStore) -> None:
        cards = {card.label: card for card in store.get_dashboard_kpis("supervisor")}
        assert cards["Total Calls Today"].value == "15,420"
        assert cards["Answer Rate"].value == "96.6%"
        assert cards["Avg Handle Time"].value == "4:45"
        assert cards["First Call Resolution"].value == "87.5%"

    def test_developer_grid_is_technical(self, store: StaticKnowledgeStore) -> None:
        labels = [card.label for card in store.get_dashboard_kpis("developer")]
        assert labels[0] == "API Response Time"
        assert "Answer Rate" not in labels


# ---------------------------------------------------------------------------
# Tool catalogue
# ---------------------------------------------------------------------------


class TestToolCatalogue:
    def test_lists_eight_tools(self, store: StaticKnowledgeStore) -> None:
        assert [t.id for t in store.list_tools()] == [
            "calculate_metric",
            "compare_periods",
            "agent_performance",
            "campaign_analysis",
            "forecast_demand",
            "quality_analysis",
            "member_lookup",
            "member_journey",
        ]

    def test_required_parameters(self, store: StaticKnowledgeStore) -> None:
        descriptor = store.get_tool_descriptor("compare_periods")
        assert descriptor is not None
        assert descriptor.required_parameters() == ["metric", "period1", "period2"]

    def test_by_category(self, store: StaticKnowledgeStore) -> None:
        ids = [t.id for t in store.get_tools_by_category("Member Services")]
        assert ids == ["member_lookup", "member_journey"]

    def test_unknown_tool_returns_none(self, store: StaticKnowledgeStore) -> None:
        assert store.get_tool_descriptor("sentiment_analysis") is None


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


class TestMembers:
    def test_by_id(self, store: StaticKnowledgeStore) -> None:
        member = store.get_member_by_id("M002")
        assert member is not None
        assert member.name == "Robert Smith"

    def test_by_id_miss(self, store: StaticKnowledgeStore) -> None:
        assert store.get_member_by_id("M999") is None

    @pytest.mark.parametrize("phone", ["(555) 123-4567", "5551234567", "123-4567", "4567"])
    def test_phone_search_compares_digits(self, store: StaticKnowledgeStore, phone: str) -> None:
        assert [m.member_id for m in store.search_members_by_phone(phone)] == ["M001"]

    @pytest.mark.parametrize("phone", ["", "   ", "()-"])
    def test_phone_without_digits_matches_nothing(
        self, store: StaticKnowledgeStore, phone: str
    ) -> None:
        assert store.search_members_by_phone(phone) == []

    def test_name_search_is_case_insensitive_substring(self, store: StaticKnowledgeStore) -> None:
        assert [m.member_id for m in store.search_members_by_name("SMITH")] == ["M002"]
        assert len(store.search_members_by_name("")) == 2


# ---------------------------------------------------------------------------
# Injection
# ---------------------------------------------------------------------------


def test_injected_snapshot_replaces_seed() -> None:
    snapshot = CallCenterSnapshot(
        total_calls=100,
        answered_calls=50,
        average_handle_time=60,
        customer_satisfaction=3.0,
        first_call_resolution=50.0,
        agent_utilization=40.0,
        campaigns=(),
        agents=(AgentRecord(name="Solo", calls_handled=1, avg_handle_time=60, satisfaction=3.0),),
    )
    store = StaticKnowledgeStore(snapshot=snapshot, members=[])

    assert store.snapshot().total_calls == 100
    assert store.search_members_by_name("") == []
    cards = {card.label: card.value for card in store.get_dashboard_kpis("agent")}
    assert cards["Answer Rate"] == "50.0%"


def test_default_store_is_cached() -> None:
    assert get_knowledge_store() is get_knowledge_store()
