import streamlit_app
from agent.assistant import AnalyticsAssistant
from agent.schema import AgentResponse
from knowledge.static_store import StaticKnowledgeStore


_VALID_TYPES = {"text", "kpi", "chart", "tool_result", "knowledge"}


def _assert_response_contract(response: object) -> None:
    assert isinstance(response, AgentResponse)
    assert response.type in _VALID_TYPES
    assert response.content


def _handles(assistant) -> dict:
    return {
        "assistant": assistant,
        "store": StaticKnowledgeStore(),
        "bookmarks": object(),
    }


def test_query_success_returns_agent_response(monkeypatch) -> None:
    store = StaticKnowledgeStore()
    monkeypatch.setattr(
        streamlit_app,
        "_load_backend_handles",
        lambda: _handles(AnalyticsAssistant(store)),
    )

    response = streamlit_app.run_query("Analyze team performance", "supervisor")
    _assert_response_contract(response)
    assert response.type == "chart"


def test_member_context_is_prefixed(monkeypatch) -> None:
    seen: list[str] = []

    class _RecordingAssistant:
        def process_query(self, text: str, role: str) -> AgentResponse:
            seen.append(text)
            return AgentResponse.text("ok")

    monkeypatch.setattr(
        streamlit_app,
        "_load_backend_handles",
        lambda: _handles(_RecordingAssistant()),
    )

    streamlit_app.run_query("help", "agent", member_id="M002")
    streamlit_app.run_query("help", "agent", member_id="M999")

    assert seen == ["[Member Context: Robert Smith (M002)] help", "help"]


def test_assistant_failure_returns_error_text(monkeypatch) -> None:
    class _ExplodingAssistant:
        def process_query(self, text: str, role: str) -> AgentResponse:
            raise RuntimeError("forced failure")

    monkeypatch.setattr(
        streamlit_app,
        "_load_backend_handles",
        lambda: _handles(_ExplodingAssistant()),
    )

    response = streamlit_app.run_query("anything", "agent")
    _assert_response_contract(response)
    assert response.content == streamlit_app.ERROR_MESSAGE


def test_backend_load_failure_returns_error_text(monkeypatch) -> None:
    def _broken():
        raise ImportError("backend unavailable")

    monkeypatch.setattr(streamlit_app, "_load_backend_handles", _broken)

    response = streamlit_app.run_query("anything", "agent")
    _assert_response_contract(response)
    assert response.type == "text"


def test_chart_frame_indexes_by_label_column() -> None:
    frame = streamlit_app.chart_frame(
        {
            "type": "forecast",
            "data": [
                {"period": "Current", "calls": 15420},
                {"period": "next_month", "calls": 17733},
            ],
        }
    )
    assert list(frame.index) == ["Current", "next_month"]
    assert frame.loc["next_month", "calls"] == 17733


def test_chart_frame_empty() -> None:
    assert streamlit_app.chart_frame({"type": "trend", "data": []}).empty
