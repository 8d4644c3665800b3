"""MCP tools for florida_news."""
