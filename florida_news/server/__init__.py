"""Server package initialization"""

from florida_news.server.app import create_mcp_server, server

__all__ = ["server", "create_mcp_server"]
