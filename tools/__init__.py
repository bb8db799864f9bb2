"""
tools package marker.
"""

from tools.executor import ToolExecutor
from tools.results import ChartPayload, ToolResult

__all__ = [
    "ChartPayload",
    "ToolExecutor",
    "ToolResult",
]
