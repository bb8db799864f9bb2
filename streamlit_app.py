"""Streamlit chat frontend for the call center analytics assistant."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd
import streamlit as st

from agent.schema import AgentResponse

logger = logging.getLogger(__name__)

ERROR_MESSAGE = (
    "I apologize, but I encountered an error processing your request. Please try again."
)

ROLE_LABELS = {
    "enterprise_leader": "Enterprise Leader",
    "supervisor": "Supervisor",
    "developer": "Developer",
    "agent": "Agent",
}

_CHART_INDEX_COLUMNS = ("period", "name", "timestamp")


@st.cache_resource(show_spinner=False)
def _load_backend_handles():
    """Load backend singletons lazily to keep startup lightweight."""
    from agent.assistant import get_assistant  # noqa: PLC0415
    from app.config import get_assistant_settings  # noqa: PLC0415
    from knowledge.static_store import get_knowledge_store  # noqa: PLC0415
    from reporting.bookmarks import BookmarkRepository  # noqa: PLC0415

    settings = get_assistant_settings()
    return {
        "assistant": get_assistant(),
        "store": get_knowledge_store(),
        "bookmarks": BookmarkRepository(settings.bookmark_store_dir),
        "default_role": settings.default_user_role,
    }


def run_query(prompt: str, role: str, member_id: Optional[str] = None) -> AgentResponse:
    """
    Thin frontend adapter that delegates all processing to the assistant.

    Never raises: backend load failures and unexpected errors come back as
    a text envelope so the chat history stays renderable.
    """
    try:
        handles = _load_backend_handles()
        text = prompt
        if member_id:
            from agent.member_context import with_member_context  # noqa: PLC0415

            member = handles["store"].get_member_by_id(member_id)
            if member is not None:
                text = with_member_context(prompt, member)
        response = handles["assistant"].process_query(text, role)
        if not isinstance(response, AgentResponse):
            raise TypeError(f"Assistant returned {type(response).__name__}")
        return response
    except Exception:  # noqa: BLE001
        logger.exception("Frontend query failed role=%s", role)
        return AgentResponse.text(ERROR_MESSAGE)


def chart_frame(chart: dict[str, Any]) -> pd.DataFrame:
    """
    Turn a chart envelope into a DataFrame indexed by its label column.

    The first of ``period``, ``name`` or ``timestamp`` present becomes the
    index; rows keep their payload order.
    """
    frame = pd.DataFrame(chart.get("data") or [])
    for column in _CHART_INDEX_COLUMNS:
        if column in frame.columns:
            return frame.set_index(column)
    return frame


def _message(content: str, sender: str, response: Optional[AgentResponse] = None) -> dict[str, Any]:
    return {
        "id": uuid.uuid4().hex,
        "content": content,
        "sender": sender,
        "timestamp": datetime.now(timezone.utc),
        "type": response.type if response is not None else "text",
        "data": response.data if response is not None else None,
    }


def _render_kpi_cards(cards: list[dict[str, Any]]) -> None:
    columns = st.columns(min(len(cards), 3) or 1)
    for index, card in enumerate(cards):
        change = card.get("change")
        with columns[index % len(columns)]:
            st.metric(
                label=card.get("label", ""),
                value=card.get("value", ""),
                delta=f"{change}%" if change is not None else None,
                delta_color="inverse" if card.get("trend") == "down" else "normal",
            )


def _render_chart(chart: dict[str, Any]) -> None:
    frame = chart_frame(chart)
    if frame.empty:
        return
    chart_type = chart.get("type")
    if chart_type == "journey_timeline":
        st.dataframe(frame, use_container_width=True)
        return
    numeric = frame.select_dtypes(include="number")
    if chart_type in {"trend", "forecast"}:
        st.line_chart(numeric)
    else:
        st.bar_chart(numeric)


def _render_message(message: dict[str, Any]) -> None:
    avatar = "user" if message["sender"] == "user" else "assistant"
    with st.chat_message(avatar):
        st.markdown(message["content"])
        data = message.get("data")
        if data is None:
            return
        if message["type"] == "kpi" and isinstance(data, list):
            _render_kpi_cards(data)
        elif message["type"] == "chart" and isinstance(data, dict):
            _render_chart(data)
        elif message["type"] in {"tool_result", "knowledge"}:
            with st.expander("Details"):
                st.json(data)


def _render_member_assist(store: Any, member_id: str) -> None:
    from agent.member_context import call_assist_actions  # noqa: PLC0415

    member = store.get_member_by_id(member_id)
    if member is None:
        st.warning(f"Member {member_id} not found.")
        return
    st.markdown(f"**{member.name}** ({member.member_id})")
    st.caption(
        f"{member.demographics.tier.upper()} tier · {member.persona.name} · "
        f"sentiment {member.current_context.sentiment}"
    )
    for action in call_assist_actions(member):
        st.markdown(f"**{action.title}**: {action.description}")
        st.caption(action.action)


def _render_bookmark_form(repository: Any, role: str, message: dict[str, Any], query: str) -> None:
    from reporting.bookmarks import CATEGORIES, BookmarkDraft, ChatMessage  # noqa: PLC0415

    with st.form(key=f"bookmark-{message['id']}"):
        title = st.text_input("Title", value=query[:60])
        description = st.text_area("Description", value="")
        tags = st.text_input("Tags (comma separated)", value="")
        category = st.selectbox("Category", options=list(CATEGORIES))
        if st.form_submit_button("Save bookmark"):
            draft = BookmarkDraft(
                title=title or query[:60] or "Untitled",
                description=description,
                query=query,
                response=ChatMessage.model_validate(message),
                tags=[tag.strip() for tag in tags.split(",") if tag.strip()],
                category=category,
            )
            repository.add(role, draft)
            st.success("Bookmark saved.")


def main() -> None:
    st.set_page_config(page_title="Call Center Analytics", page_icon="CC", layout="wide")

    handles = _load_backend_handles()
    store = handles["store"]
    roles = list(ROLE_LABELS)
    default_role = handles.get("default_role")

    if "messages" not in st.session_state:
        st.session_state.messages = []
    if "last_query" not in st.session_state:
        st.session_state.last_query = ""

    with st.sidebar:
        st.header("Session")
        role = st.selectbox(
            "Role",
            options=roles,
            index=roles.index(default_role) if default_role in roles else len(roles) - 1,
            format_func=ROLE_LABELS.get,
        )
        member_id = st.text_input("Member ID (optional)", value="").strip() or None
        if member_id:
            st.subheader("Member Assist")
            _render_member_assist(store, member_id)
        if st.button("Clear chat", use_container_width=True):
            st.session_state.messages = []
            st.session_state.last_query = ""
            st.rerun()

    st.title("Call Center Analytics Assistant")

    if not st.session_state.messages:
        st.session_state.messages.append(
            _message(
                f"Welcome, {ROLE_LABELS[role]}! I'm your AI analytics assistant. I can help "
                "you with call center insights, KPIs, campaign performance, and more. "
                "What would you like to know?",
                "assistant",
            )
        )

    for message in st.session_state.messages:
        _render_message(message)

    prompt = st.chat_input("Ask about KPIs, agents, campaigns or members...")
    if prompt and prompt.strip():
        user_message = _message(prompt.strip(), "user")
        st.session_state.messages.append(user_message)
        _render_message(user_message)
        with st.spinner("Analyzing..."):
            response = run_query(prompt.strip(), role, member_id)
        assistant_message = _message(response.content, "assistant", response)
        st.session_state.messages.append(assistant_message)
        st.session_state.last_query = prompt.strip()
        _render_message(assistant_message)

    last = st.session_state.messages[-1]
    if last["sender"] == "assistant" and st.session_state.last_query:
        with st.expander("Bookmark this answer"):
            _render_bookmark_form(handles["bookmarks"], role, last, st.session_state.last_query)


if __name__ == "__main__":
    main()
