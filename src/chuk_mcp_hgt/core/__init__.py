"""Core tile naming, caching, and decoding for chuk-mcp-hgt."""
