"""Tool router: meta-tools for dynamic tool discovery and execution.

The everyday clipboard tools are registered with FastMCP directly. Everything
else is reached through four meta-tools:
  - list_tool_categories
  - get_category_tools
  - execute_tool
  - search_tools
"""

from __future__ import annotations

import inspect
import json
from typing import Any

from fastmcp import FastMCP

from ..constants import MAX_RESPONSE_CHARS
from ..exceptions import BoardClipError
from ..logging_config import create_logger
from .registry import TOOL_REGISTRY, find_tools, get_categories

logger = create_logger(__name__)


def _truncate_response(result: dict[str, Any]) -> dict[str, Any]:
    """Truncate oversized responses by trimming the largest list field."""
    try:
        raw = json.dumps(result, default=str)
    except (TypeError, ValueError):
        return result

    if len(raw) <= MAX_RESPONSE_CHARS:
        return result

    largest_key = None
    largest_len = 0
    for key, value in result.items():
        if isinstance(value, list) and len(value) > largest_len:
            largest_key = key
            largest_len = len(value)

    if largest_key is None or largest_len == 0:
        return result

    # Metadata goes in first so the search accounts for its size
    original_list = result[largest_key]
    result["_truncated"] = True
    result["_message"] = f"Response truncated: '{largest_key}' reduced from {largest_len} items."

    lo, hi = 0, largest_len
    while lo < hi:
        mid = (lo + hi + 1) // 2
        result[largest_key] = original_list[:mid]
        if len(json.dumps(result, default=str)) <= MAX_RESPONSE_CHARS:
            lo = mid
        else:
            hi = mid - 1

    result[largest_key] = original_list[:lo]
    result["_message"] = (
        f"Response truncated: '{largest_key}' reduced from {largest_len} to {lo} items."
    )
    return result


def list_tool_categories() -> dict[str, Any]:
    """List all available tool categories with tool counts.

    Use this to discover what specialized tools are available,
    then use get_category_tools to see tools in a specific category.
    """
    result: dict[str, Any] = {}
    for cat_name, tools in sorted(get_categories().items()):
        routed = [t for t in tools if not t.direct]
        if routed:
            result[cat_name] = {
                "tool_count": len(routed),
                "tools": [t.name for t in routed],
            }
    return {"categories": result}


def get_category_tools(category: str) -> dict[str, Any]:
    """Get detailed information about all tools in a category.

    Args:
        category: Category name from list_tool_categories.
    """
    categories = get_categories()
    if category not in categories:
        return {
            "error": (
                f"Unknown category: {category!r}."
                " Use list_tool_categories to see available categories."
            ),
        }
    tools = [t for t in categories[category] if not t.direct]
    if not tools:
        return {"error": f"No routed tools in category {category!r}."}
    return {
        "category": category,
        "tools": [
            {"name": t.name, "description": t.description, "parameters": t.parameters}
            for t in tools
        ],
    }


async def execute_tool(tool_name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    """Execute a tool by name with the given arguments.

    Args:
        tool_name: Name of the tool to execute.
        arguments: Tool arguments as a JSON object (optional).
    """
    if tool_name not in TOOL_REGISTRY:
        return {
            "error": (
                f"Unknown tool: {tool_name!r}."
                " Use search_tools or list_tool_categories to find tools."
            ),
        }

    spec = TOOL_REGISTRY[tool_name]
    args = arguments or {}
    try:
        result = spec.handler(**args)
        if inspect.isawaitable(result):
            result = await result
    except TypeError as e:
        return {"error": f"Invalid arguments for {tool_name}: {e}"}
    except BoardClipError as e:
        logger.warning(f"Tool {tool_name} failed: {e.message}")
        return {**e.to_dict(), "error": f"Tool {tool_name} failed: {e.message}"}
    if isinstance(result, dict):
        result = _truncate_response(result)
    return result  # type: ignore[no-any-return]


def search_tools(query: str) -> dict[str, Any]:
    """Search for tools by name or description.

    Args:
        query: Search term (e.g., 'paste', 'split', 'undo').
    """
    results = [t.to_dict() for t in find_tools(query)]
    return {"query": query, "result_count": len(results), "tools": results}


def register_router_tools(mcp: FastMCP) -> None:
    """Register the 4 router meta-tools with the FastMCP server."""
    for fn in (list_tool_categories, get_category_tools, execute_tool, search_tools):
        mcp.tool(fn)
