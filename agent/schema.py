"""Display envelope returned by the assistant for every chat turn."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AgentResponse(BaseModel):
    """Only allowed output contract for the assistant pipeline."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    type: Literal["text", "kpi", "chart", "tool_result", "knowledge"]
    content: str = Field(min_length=1)
    data: Optional[Any] = None
    tools_used: Optional[list[str]] = None
    reasoning: Optional[str] = None

    @classmethod
    def text(cls, content: str, reasoning: Optional[str] = None) -> "AgentResponse":
        return cls(type="text", content=content, reasoning=reasoning)
