"""
tools/base.py

Abstract base class for all tool implementations.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

from knowledge.base import KnowledgeStore
from tools.results import ToolResult

ParamsT = TypeVar("ParamsT", bound=BaseModel)


class BaseTool(ABC, Generic[ParamsT]):
    """
    Contract for tool implementations.

    Subclasses declare the catalogue id they implement and the pydantic
    model their parameters are parsed into. :meth:`run` receives already
    validated parameters and reads only from the injected store.

    No I/O and no side effects are permitted inside :meth:`run`. Lookup
    misses are reported through :meth:`ToolResult.failure`, never raised.
    """

    tool_id: ClassVar[str]
    params_model: ClassVar[type[BaseModel]]

    def __init__(self, store: KnowledgeStore) -> None:
        self._store = store

    @abstractmethod
    def run(self, params: ParamsT) -> ToolResult:
        """
        Execute the tool and return a :class:`ToolResult`.

        Parameters
        ----------
        params:
            Instance of :attr:`params_model`.
        """


def format_handle_time(seconds: int) -> str:
    """Render a duration in seconds as ``m:ss``."""
    return f"{seconds // 60}:{seconds % 60:02d}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
