"""
app/api/routers/chat_router.py

Chat endpoint.

POST /chat

Body: {"text": str, "role": str, "member_id": str | null}

Returns the assistant's :class:`AgentResponse`. Pipeline failures are
answered by the fallback generator inside the assistant, so this route
only fails on request validation (400 role, 404 member).
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from agent.assistant import AnalyticsAssistant
from agent.member_context import with_member_context
from agent.schema import AgentResponse
from app.api.dependencies import get_assistant, get_store, validate_role
from knowledge.base import KnowledgeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    text: str = Field(min_length=1)
    role: str
    member_id: Optional[str] = None


@router.post("/chat", response_model=AgentResponse, status_code=status.HTTP_200_OK)
async def chat(
    body: ChatRequest,
    assistant: AnalyticsAssistant = Depends(get_assistant),
    store: KnowledgeStore = Depends(get_store),
) -> AgentResponse:
    """
    Answer one chat turn.

    When ``member_id`` is given the member context prefix is added to the
    text before classification.
    """
    role = validate_role(body.role)
    text = body.text

    if body.member_id:
        member = store.get_member_by_id(body.member_id)
        if member is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Member '{body.member_id}' not found.",
            )
        text = with_member_context(text, member)

    response = await assistant.aprocess_query(text, role)
    logger.info("chat role=%s response_type=%s", role, response.type)
    return response
