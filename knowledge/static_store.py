"""
knowledge/static_store.py

In-memory knowledge store backed by the seed tables.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from knowledge.base import KnowledgeStore
from knowledge.models import (
    CallCenterSnapshot,
    KPICard,
    KPIDefinition,
    MemberProfile,
    ToolDescriptor,
)
from knowledge import seed

_NON_DIGITS = re.compile(r"\D")


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


class StaticKnowledgeStore(KnowledgeStore):
    """
    Read-only store over fixed in-memory tables.

    Tables default to the seed data; tests may pass their own sequences.
    The constructor copies them into tuples so later edits to the caller's
    sequences cannot leak in.
    """

    def __init__(
        self,
        *,
        kpi_definitions: Iterable[KPIDefinition] | None = None,
        tools: Iterable[ToolDescriptor] | None = None,
        snapshot: CallCenterSnapshot | None = None,
        members: Iterable[MemberProfile] | None = None,
    ) -> None:
        self._kpis: tuple[KPIDefinition, ...] = tuple(
            seed.KPI_DEFINITIONS if kpi_definitions is None else kpi_definitions
        )
        self._tools: tuple[ToolDescriptor, ...] = tuple(
            seed.TOOL_DESCRIPTORS if tools is None else tools
        )
        self._snapshot = seed.CALL_CENTER_SNAPSHOT if snapshot is None else snapshot
        self._members: tuple[MemberProfile, ...] = tuple(
            seed.MEMBER_PROFILES if members is None else members
        )
        self._kpis_by_id = {kpi.id: kpi for kpi in self._kpis}
        self._tools_by_id = {tool.id: tool for tool in self._tools}
        self._dashboard = seed.build_dashboard_cards(self._snapshot)

    # --- KPI glossary -----------------------------------------------------

    def list_kpis(self) -> list[KPIDefinition]:
        return list(self._kpis)

    def get_kpi_definition(self, kpi_id: str) -> KPIDefinition | None:
        return self._kpis_by_id.get(kpi_id)

    def get_kpis_by_role(self, role: str) -> list[KPIDefinition]:
        role_value = getattr(role, "value", role)
        return [
            kpi
            for kpi in self._kpis
            if any(r.value == role_value for r in kpi.relevant_roles)
        ]

    def get_kpis_by_category(self, category: str) -> list[KPIDefinition]:
        return [kpi for kpi in self._kpis if kpi.category == category]

    def get_dashboard_kpis(self, role: str) -> list[KPICard]:
        role_value = getattr(role, "value", role)
        return list(self._dashboard.get(role_value, self._dashboard["default"]))

    # --- Tool catalogue ---------------------------------------------------

    def list_tools(self) -> list[ToolDescriptor]:
        return list(self._tools)

    def get_tool_descriptor(self, tool_id: str) -> ToolDescriptor | None:
        return self._tools_by_id.get(tool_id)

    def get_tools_by_category(self, category: str) -> list[ToolDescriptor]:
        return [tool for tool in self._tools if tool.category == category]

    # --- Operational data -------------------------------------------------

    def snapshot(self) -> CallCenterSnapshot:
        return self._snapshot

    def get_member_by_id(self, member_id: str) -> MemberProfile | None:
        for member in self._members:
            if member.member_id == member_id:
                return member
        return None

    def search_members_by_phone(self, phone: str) -> list[MemberProfile]:
        wanted = _digits(phone or "")
        if not wanted:
            return []
        return [member for member in self._members if wanted in _digits(member.phone)]

    def search_members_by_name(self, name: str) -> list[MemberProfile]:
        needle = (name or "").lower()
        return [member for member in self._members if needle in member.name.lower()]


@lru_cache(maxsize=1)
def get_knowledge_store() -> StaticKnowledgeStore:
    """Return the cached default store built from the seed tables."""
    return StaticKnowledgeStore()
