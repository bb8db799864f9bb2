"""
app/api/routers/knowledge_router.py

Read-only access to the KPI glossary, role dashboards and the tool
catalogue, plus direct tool execution.

GET  /kpis?role=&category=
GET  /kpis/{kpi_id}
GET  /dashboard/{role}
GET  /tools?category=
POST /tools/{tool_id}

Tool failures are part of the payload (``success=false``) and come back
with HTTP 200.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from app.api.dependencies import get_executor, get_store, validate_role
from knowledge.base import KnowledgeStore
from knowledge.models import KPICard, KPIDefinition, ToolDescriptor
from tools.executor import ToolExecutor
from tools.results import ToolResult

router = APIRouter(tags=["knowledge"])


# ---------------------------------------------------------------------------
# KPI glossary
# ---------------------------------------------------------------------------


@router.get("/kpis", response_model=list[KPIDefinition])
def list_kpis(
    role: Optional[str] = Query(default=None, description="Only KPIs relevant to this role."),
    category: Optional[str] = Query(default=None, description="Only KPIs in this category."),
    store: KnowledgeStore = Depends(get_store),
) -> list[KPIDefinition]:
    kpis = store.get_kpis_by_role(validate_role(role)) if role is not None else store.list_kpis()
    if category is not None:
        kpis = [kpi for kpi in kpis if kpi.category == category]
    return kpis


@router.get("/kpis/{kpi_id}", response_model=KPIDefinition)
def get_kpi(kpi_id: str, store: KnowledgeStore = Depends(get_store)) -> KPIDefinition:
    kpi_def = store.get_kpi_definition(kpi_id)
    if kpi_def is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"KPI '{kpi_id}' not found.",
        )
    return kpi_def


@router.get("/dashboard/{role}", response_model=list[KPICard])
def get_dashboard(
    role: str = Depends(validate_role),
    store: KnowledgeStore = Depends(get_store),
) -> list[KPICard]:
    return store.get_dashboard_kpis(role)


# ---------------------------------------------------------------------------
# Tool catalogue
# ---------------------------------------------------------------------------


@router.get("/tools", response_model=list[ToolDescriptor])
def list_tools(
    category: Optional[str] = Query(default=None),
    store: KnowledgeStore = Depends(get_store),
) -> list[ToolDescriptor]:
    if category is None:
        return store.list_tools()
    return store.get_tools_by_category(category)


@router.post("/tools/{tool_id}", response_model=ToolResult)
def run_tool(
    tool_id: str,
    parameters: dict[str, Any] = Body(default_factory=dict),
    executor: ToolExecutor = Depends(get_executor),
) -> ToolResult:
    """Execute one tool directly; the result envelope is returned as-is."""
    return executor.execute(tool_id, parameters)
