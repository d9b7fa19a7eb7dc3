"""MCP tool modules for chuk-mcp-hgt."""
