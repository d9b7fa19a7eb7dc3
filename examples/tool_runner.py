"""
Shared helper for running chuk-mcp-hgt MCP tools directly from Python.

Provides a ToolRunner class that registers all MCP tools against a local
tile cache, without requiring a full MCP transport layer. Demo scripts use
this to call tools as plain async functions.

Usage:
    from tool_runner import ToolRunner

    async def main():
        runner = ToolRunner()
        result = await runner.run("hgt_get_elevation", lat=45.833641, lon=6.864594)
        print(result)
"""

from __future__ import annotations

import json
from typing import Any

from chuk_mcp_hgt.core.elevation_manager import ElevationManager
from chuk_mcp_hgt.tools.discovery import register_discovery_tools
from chuk_mcp_hgt.tools.elevation import register_elevation_tools


class _MiniMCP:
    """Minimal MCP server that captures tools registered via @mcp.tool."""

    def __init__(self) -> None:
        self._tools: dict[str, Any] = {}

    def tool(self) -> Any:
        """Decorator factory matching @mcp.tool() usage."""

        def decorator(fn: Any) -> Any:
            self._tools[fn.__name__] = fn
            return fn

        return decorator

    def get_tool(self, name: str) -> Any:
        return self._tools[name]


class ToolRunner:
    """
    Run chuk-mcp-hgt MCP tools directly from Python.

    Tiles are cached under HGT_CACHE_DIR (default /tmp/hgt). Returns parsed
    JSON by default; use run_text() for human-readable output.
    """

    def __init__(self) -> None:
        self._mcp = _MiniMCP()
        self.manager = ElevationManager.from_env()
        register_discovery_tools(self._mcp, self.manager)
        register_elevation_tools(self._mcp, self.manager)

    @property
    def tool_names(self) -> list[str]:
        return list(self._mcp._tools.keys())

    async def run(self, tool_name: str, **kwargs: Any) -> dict[str, Any]:
        """Call a tool by name and return parsed JSON."""
        fn = self._mcp.get_tool(tool_name)
        raw = await fn(**kwargs)
        return json.loads(raw)

    async def run_text(self, tool_name: str, **kwargs: Any) -> str:
        """Call a tool by name with output_mode='text' and return plaintext."""
        fn = self._mcp.get_tool(tool_name)
        return await fn(output_mode="text", **kwargs)
