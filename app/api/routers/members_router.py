"""
app/api/routers/members_router.py

Member lookup and agent-assist endpoints.

GET /members/search?term=&search_type=name|phone|id
GET /members/{member_id}
GET /members/{member_id}/journey
GET /members/{member_id}/assist
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from agent.member_context import AssistAction, call_assist_actions
from app.api.dependencies import get_executor, get_store
from knowledge.base import KnowledgeStore
from knowledge.models import MemberProfile
from tools.executor import ToolExecutor
from tools.results import ToolResult

router = APIRouter(prefix="/members", tags=["members"])


def _require_member(member_id: str, store: KnowledgeStore) -> MemberProfile:
    member = store.get_member_by_id(member_id)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Member '{member_id}' not found.",
        )
    return member


@router.get("/search", response_model=list[MemberProfile])
def search_members(
    term: str = Query(min_length=1),
    search_type: Literal["id", "name", "phone"] = Query(default="name"),
    store: KnowledgeStore = Depends(get_store),
) -> list[MemberProfile]:
    """Every match, unlike the member_lookup tool which returns the first."""
    if search_type == "id":
        member = store.get_member_by_id(term)
        return [member] if member is not None else []
    if search_type == "phone":
        return store.search_members_by_phone(term)
    return store.search_members_by_name(term)


@router.get("/{member_id}", response_model=MemberProfile)
def get_member(member_id: str, store: KnowledgeStore = Depends(get_store)) -> MemberProfile:
    return _require_member(member_id, store)


@router.get("/{member_id}/journey", response_model=ToolResult)
def get_member_journey(
    member_id: str,
    store: KnowledgeStore = Depends(get_store),
    executor: ToolExecutor = Depends(get_executor),
) -> ToolResult:
    _require_member(member_id, store)
    return executor.execute("member_journey", {"member_id": member_id})


@router.get("/{member_id}/assist", response_model=list[AssistAction])
def get_member_assist(
    member_id: str,
    store: KnowledgeStore = Depends(get_store),
) -> list[AssistAction]:
    return call_assist_actions(_require_member(member_id, store))
