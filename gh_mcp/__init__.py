"""MCP server exposing GitHub repositories, pull requests and issues as tools."""

__version__ = "1.0.0"
