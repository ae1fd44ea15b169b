"""Tool-format translation between the internal tool shape and vendor wire shapes."""

from .formatting import (
    UniversalTool,
    apply_prompt_length_limit,
    format_anthropic_tools,
    format_google_tools,
    format_openai_tools,
    to_universal_tool,
)
from .parsing import parse_anthropic_tool_calls, parse_google_tool_calls, parse_openai_tool_calls
from .results import format_anthropic_tool_result, format_google_tool_result, format_openai_tool_result

__all__ = [
    "UniversalTool",
    "apply_prompt_length_limit",
    "format_anthropic_tools",
    "format_google_tools",
    "format_openai_tools",
    "to_universal_tool",
    "parse_anthropic_tool_calls",
    "parse_google_tool_calls",
    "parse_openai_tool_calls",
    "format_anthropic_tool_result",
    "format_google_tool_result",
    "format_openai_tool_result",
]
