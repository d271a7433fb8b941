"""Shared output formatting for CLI and MCP."""

from .format import format_response, render_cli

__all__ = ["format_response", "render_cli"]
