"""Tool registry: every boardclip tool is declared here once."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class ToolSpec:
    """Declarative specification for a single MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]
    handler: Callable[..., Any]
    category: str = "general"
    direct: bool = False  # True = registered with FastMCP; False = reached through execute_tool

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "direct": self.direct,
        }


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    description: str,
    parameters: dict[str, Any],
    handler: Callable[..., Any],
    *,
    category: str = "general",
    direct: bool = False,
) -> None:
    """Register a tool in the global registry."""
    TOOL_REGISTRY[name] = ToolSpec(
        name=name,
        description=description,
        parameters=parameters,
        handler=handler,
        category=category,
        direct=direct,
    )


def get_categories() -> dict[str, list[ToolSpec]]:
    """Return tools grouped by category."""
    categories: dict[str, list[ToolSpec]] = {}
    for tool in TOOL_REGISTRY.values():
        categories.setdefault(tool.category, []).append(tool)
    return categories


def find_tools(query: str) -> list[ToolSpec]:
    """Tools whose name or description contains ``query`` (case-insensitive)."""
    query_lower = query.lower()
    return [
        tool
        for tool in TOOL_REGISTRY.values()
        if query_lower in tool.name.lower() or query_lower in tool.description.lower()
    ]
