"""Shared service layer for CLI and MCP."""

from .context import resolve_context_info, get_client, get_client_for_path
from .issues import UNSET, list_issues, get_issue, create_issue, update_issue, delete_issue
from .comments import list_comments, add_comment
from .links import list_links, add_link

__all__ = [
    "resolve_context_info",
    "get_client",
    "get_client_for_path",
    "UNSET",
    "list_issues",
    "get_issue",
    "create_issue",
    "update_issue",
    "delete_issue",
    "list_comments",
    "add_comment",
    "list_links",
    "add_link",
]
