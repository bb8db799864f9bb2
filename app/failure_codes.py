"""Shared failure code constants for tool and pipeline error handling."""

LOOKUP_MISS = "lookup_miss"
UNKNOWN_TOOL = "unknown_tool"
INVALID_PARAMETERS = "invalid_parameters"
TOOL_ERROR = "tool_error"

TOOL_FAILURES = [
    LOOKUP_MISS,
    UNKNOWN_TOOL,
    INVALID_PARAMETERS,
    TOOL_ERROR,
]
