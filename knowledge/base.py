"""
knowledge/base.py

Abstract read-only data-access contract for the assistant.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from knowledge.models import (
    CallCenterSnapshot,
    KPICard,
    KPIDefinition,
    MemberProfile,
    ToolDescriptor,
)


class KnowledgeStore(ABC):
    """
    Contract for knowledge store implementations.

    The classifier, planner, tools and formatter receive an instance of
    this class instead of reaching for module-level tables, so a real data
    source can be substituted without touching them.

    Every lookup is total: a miss returns ``None`` or an empty list and
    never raises.
    """

    # --- KPI glossary -----------------------------------------------------

    @abstractmethod
    def list_kpis(self) -> list[KPIDefinition]:
        """Return every KPI definition in catalogue order."""

    @abstractmethod
    def get_kpi_definition(self, kpi_id: str) -> KPIDefinition | None:
        """Return the KPI definition with id *kpi_id*, if any."""

    @abstractmethod
    def get_kpis_by_role(self, role: str) -> list[KPIDefinition]:
        """Return definitions whose ``relevant_roles`` include *role*."""

    @abstractmethod
    def get_kpis_by_category(self, category: str) -> list[KPIDefinition]:
        """Return definitions in *category* (exact match)."""

    @abstractmethod
    def get_dashboard_kpis(self, role: str) -> list[KPICard]:
        """Return the dashboard card grid for *role*."""

    # --- Tool catalogue ---------------------------------------------------

    @abstractmethod
    def list_tools(self) -> list[ToolDescriptor]:
        """Return every tool descriptor in catalogue order."""

    @abstractmethod
    def get_tool_descriptor(self, tool_id: str) -> ToolDescriptor | None:
        """Return the descriptor for *tool_id*, if any."""

    @abstractmethod
    def get_tools_by_category(self, category: str) -> list[ToolDescriptor]:
        """Return descriptors in *category* (exact match)."""

    # --- Operational data -------------------------------------------------

    @abstractmethod
    def snapshot(self) -> CallCenterSnapshot:
        """Return the call-center aggregate snapshot."""

    @abstractmethod
    def get_member_by_id(self, member_id: str) -> MemberProfile | None:
        """Return the member with exactly *member_id*, if any."""

    @abstractmethod
    def search_members_by_phone(self, phone: str) -> list[MemberProfile]:
        """Return members whose phone digits contain the digits of *phone*."""

    @abstractmethod
    def search_members_by_name(self, name: str) -> list[MemberProfile]:
        """Return members whose name contains *name*, case-insensitively."""
