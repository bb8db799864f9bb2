"""
tests/test_assistant.py

End-to-end tests through the compiled LangGraph workflow, plus the
fallback path and member context helpers.
"""

from __future__ import annotations

import asyncio
import threading

import pytest

from agent.assistant import AnalyticsAssistant
from agent.fallback import fallback_response
from agent.graph import build_graph
from agent.member_context import call_assist_actions, with_member_context
from agent.nodes.response import ROLE_RESPONSES
from agent.schema import AgentResponse
from knowledge.static_store import StaticKnowledgeStore


@pytest.fixture(scope="module")
def assistant() -> AnalyticsAssistant:
    return AnalyticsAssistant(StaticKnowledgeStore())


class _FailingGraph:
    def invoke(self, _: dict) -> dict:
        raise RuntimeError("forced pipeline failure")


class _BadOutputGraph:
    def invoke(self, _: dict) -> dict:
        return {"final_response": "not an envelope"}


class _ThreadRecordingGraph:
    def __init__(self) -> None:
        self.thread_ids: list[int] = []

    def invoke(self, _: dict) -> dict:
        self.thread_ids.append(threading.get_ident())
        return {"final_response": AgentResponse.text("ok")}


class _BrokenStore(StaticKnowledgeStore):
    def snapshot(self):
        raise RuntimeError("store offline")

    def get_dashboard_kpis(self, role: str):
        raise RuntimeError("store offline")


# ---------------------------------------------------------------------------
# Graph path
# ---------------------------------------------------------------------------


class TestPipeline:
    def test_build_graph_compiles(self) -> None:
        graph = build_graph(StaticKnowledgeStore())
        assert hasattr(graph, "invoke")

    def test_calculation_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("What is our answer rate?", "supervisor")
        assert isinstance(response, AgentResponse)
        assert response.type == "tool_result"
        assert response.content.startswith("Calculated answer_rate for today: 96.6%")
        assert response.tools_used == ["calculate_metric"]

    def test_comparison_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("Compare satisfaction with last week", "agent")
        assert response.type == "chart"
        assert response.data["type"] == "trend"
        assert "improved by 7.7%" in response.content

    def test_team_analysis_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("Analyze team performance", "supervisor")
        assert response.type == "chart"
        assert response.data["type"] == "agent_comparison"
        assert "Top performer: Sarah Johnson" in response.content

    def test_campaign_analysis_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("Give me a breakdown of campaign results", "enterprise_leader")
        assert response.type == "chart"
        assert response.data["type"] == "campaign_performance"
        assert "Best performer: Product Launch" in response.content

    def test_forecast_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("Forecast demand for next month", "enterprise_leader")
        assert response.type == "chart"
        assert "17733 calls" in response.content
        assert "Staffing Alert" in response.content

    def test_definition_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("What does FCR mean?", "agent")
        assert response.type == "knowledge"
        assert response.content.startswith("**First Call Resolution (FCR)**")
        assert response.tools_used is None

    def test_general_query(self, assistant: AnalyticsAssistant) -> None:
        response = assistant.process_query("hello", "developer")
        assert response.type == "text"
        assert response.content == ROLE_RESPONSES["developer"]

    def test_role_enum_is_accepted(self, assistant: AnalyticsAssistant) -> None:
        from knowledge.models import UserRole

        response = assistant.process_query("hello", UserRole.SUPERVISOR)
        assert response.content == ROLE_RESPONSES["supervisor"]

    def test_async_variant_matches_sync(self, assistant: AnalyticsAssistant) -> None:
        response = asyncio.run(assistant.aprocess_query("hello", "agent"))
        assert response == assistant.process_query("hello", "agent")

    def test_async_variant_runs_off_the_event_loop_thread(self) -> None:
        graph = _ThreadRecordingGraph()
        assistant = AnalyticsAssistant(StaticKnowledgeStore(), graph=graph)

        response = asyncio.run(assistant.aprocess_query("hello", "agent"))

        assert response.content == "ok"
        assert graph.thread_ids and graph.thread_ids[0] != threading.get_ident()


# ---------------------------------------------------------------------------
# Fallback
# ---------------------------------------------------------------------------


class TestFallback:
    @pytest.fixture()
    def failing(self) -> AnalyticsAssistant:
        return AnalyticsAssistant(StaticKnowledgeStore(), graph=_FailingGraph())

    def test_graph_failure_never_raises(self, failing: AnalyticsAssistant) -> None:
        response = failing.process_query("show kpi dashboard", "supervisor")
        assert response.type == "kpi"
        assert response.content == (
            "Here are the key performance indicators for your supervisor dashboard:"
        )
        assert len(response.data) == 6

    def test_bad_graph_output_is_replaced(self) -> None:
        assistant = AnalyticsAssistant(StaticKnowledgeStore(), graph=_BadOutputGraph())
        response = assistant.process_query("hello", "agent")
        assert isinstance(response, AgentResponse)
        assert response.type == "text"

    @pytest.mark.parametrize(
        "query, expected_type, chart_type",
        [
            ("marketing campaign numbers", "chart", "campaign_performance"),
            ("how is the team doing", "chart", "agent_comparison"),
        ],
    )
    def test_chart_keywords(self, query: str, expected_type: str, chart_type: str) -> None:
        response = fallback_response(query, "agent", StaticKnowledgeStore())
        assert response.type == expected_type
        assert response.data["type"] == chart_type

    def test_call_volume_overview(self) -> None:
        response = fallback_response("call volume", "agent", StaticKnowledgeStore())
        assert response.type == "tool_result"
        assert response.data["total_calls"] == 15420

    def test_role_label_in_kpi_content(self) -> None:
        response = fallback_response("metrics please", "enterprise_leader", StaticKnowledgeStore())
        assert "enterprise leader dashboard" in response.content

    def test_unmatched_gives_role_text(self) -> None:
        response = fallback_response("hi", "developer", StaticKnowledgeStore())
        assert response.type == "text"
        assert response.content.startswith("As a Developer")

    @pytest.mark.parametrize(
        "query", ["show kpi dashboard", "campaign results", "team view", "call volume", "hi"]
    )
    def test_store_errors_degrade_to_role_text(self, query: str) -> None:
        assistant = AnalyticsAssistant(_BrokenStore(), graph=_FailingGraph())

        response = assistant.process_query(query, "supervisor")

        assert response.type == "text"
        assert response.content.startswith("As a Supervisor")


# ---------------------------------------------------------------------------
# Member context
# ---------------------------------------------------------------------------


class TestMemberContext:
    @pytest.fixture()
    def store(self) -> StaticKnowledgeStore:
        return StaticKnowledgeStore()

    def test_prefix(self, store: StaticKnowledgeStore) -> None:
        member = store.get_member_by_id("M001")
        assert with_member_context("help", member) == "[Member Context: Sarah Johnson (M001)] help"

    def test_prefixed_query_still_classified(
        self, assistant: AnalyticsAssistant, store: StaticKnowledgeStore
    ) -> None:
        text = with_member_context("Forecast demand", store.get_member_by_id("M002"))
        assert assistant.process_query(text, "agent").type == "chart"

    def test_assist_actions_for_m002(self, store: StaticKnowledgeStore) -> None:
        actions = call_assist_actions(store.get_member_by_id("M002"))
        assert [a.type for a in actions] == ["urgent", "info", "premium"]
        assert actions[0].description == "Address 1 pending issues"
        assert actions[1].title == "Traditional Customer Preference"
        assert actions[2].title == "PLATINUM Member"

    def test_assist_actions_for_m001(self, store: StaticKnowledgeStore) -> None:
        actions = call_assist_actions(store.get_member_by_id("M001"))
        assert [a.title for a in actions] == ["Tech-Savvy Customer", "GOLD Member"]

    def test_high_risk_adds_warning(self, store: StaticKnowledgeStore) -> None:
        member = store.get_member_by_id("M001")
        risky = member.model_copy(
            update={"current_context": member.current_context.model_copy(update={"risk_score": 0.7})}
        )
        assert "warning" in [a.type for a in call_assist_actions(risky)]
