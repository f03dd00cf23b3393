"""Utility modules for Docker MCP."""
