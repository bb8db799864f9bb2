"""
tools/executor.py

Tool registry and dispatcher.

``execute`` always returns a :class:`ToolResult`. Unknown ids, parameters
that do not satisfy the tool catalogue, and unexpected exceptions raised
inside a tool are all reported as ``success=False`` with a failure code
from :mod:`app.failure_codes`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from app.failure_codes import INVALID_PARAMETERS, TOOL_ERROR, UNKNOWN_TOOL
from knowledge.base import KnowledgeStore
from tools.base import BaseTool
from tools.forecast import ForecastDemandTool, QualityAnalysisTool
from tools.members import MemberJourneyTool, MemberLookupTool
from tools.metrics import CalculateMetricTool, ComparePeriodsTool
from tools.performance import AgentPerformanceTool, CampaignAnalysisTool
from tools.results import ToolResult

logger = logging.getLogger(__name__)

DEFAULT_TOOL_CLASSES: tuple[type[BaseTool], ...] = (
    CalculateMetricTool,
    ComparePeriodsTool,
    AgentPerformanceTool,
    CampaignAnalysisTool,
    ForecastDemandTool,
    QualityAnalysisTool,
    MemberLookupTool,
    MemberJourneyTool,
)


def _format_validation_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


class ToolExecutor:
    """
    Dispatch tool calls by id against an injected knowledge store.

    Parameters are checked in two steps: the tool descriptor's required
    names must be present, then the raw mapping is parsed into the tool's
    parameter model.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        tool_classes: tuple[type[BaseTool], ...] = DEFAULT_TOOL_CLASSES,
    ) -> None:
        self._store = store
        self._tools: dict[str, BaseTool] = {
            cls.tool_id: cls(store) for cls in tool_classes
        }

    @property
    def tool_ids(self) -> list[str]:
        return list(self._tools)

    def _check_required(self, tool_id: str, parameters: Mapping[str, Any]) -> ToolResult | None:
        descriptor = self._store.get_tool_descriptor(tool_id)
        if descriptor is None:
            return None
        missing = [
            name
            for name in descriptor.required_parameters()
            if parameters.get(name) is None
        ]
        if missing:
            return ToolResult.failure(
                f"Missing required parameter(s) for {tool_id}: {', '.join(missing)}",
                INVALID_PARAMETERS,
            )
        return None

    def execute(self, tool_id: str, parameters: Mapping[str, Any] | None = None) -> ToolResult:
        """
        Run *tool_id* with *parameters* and return its result.

        Never raises.
        """
        tool = self._tools.get(tool_id)
        if tool is None:
            logger.warning("Unknown tool requested tool_id=%r", tool_id)
            return ToolResult.failure(f"Unknown tool: {tool_id}", UNKNOWN_TOOL)

        raw = dict(parameters or {})
        missing = self._check_required(tool_id, raw)
        if missing is not None:
            logger.warning("Tool parameter check failed tool_id=%r: %s", tool_id, missing.message)
            return missing

        try:
            params = tool.params_model.model_validate(raw)
        except ValidationError as exc:
            detail = _format_validation_errors(exc)
            logger.warning("Tool parameter validation failed tool_id=%r: %s", tool_id, detail)
            return ToolResult.failure(
                f"Invalid parameters for {tool_id}: {detail}",
                INVALID_PARAMETERS,
            )

        try:
            result = tool.run(params)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool raised unexpectedly tool_id=%r", tool_id)
            return ToolResult.failure(f"Tool {tool_id} failed: {exc}", TOOL_ERROR)

        if not result.success:
            logger.info("Tool reported failure tool_id=%r message=%r", tool_id, result.message)
        else:
            logger.debug("Tool succeeded tool_id=%r", tool_id)
        return result
