"""Shape Plane API records for display."""

from __future__ import annotations

from .states import display_state
from .tickets import format_ticket_id


def render_issue(issue: dict, project: str) -> dict:
    """Format a Plane issue with its display ticket ID and state name.

    The raw state UUID is kept alongside the display name as ``state_id``.
    """
    sequence_id = issue.get("sequence_id")
    return {
        "ticket_id": format_ticket_id(project, sequence_id) if sequence_id is not None else None,
        "id": issue.get("id"),
        "name": issue.get("name"),
        "description_html": issue.get("description_html"),
        "priority": issue.get("priority"),
        "state": display_state(project, issue.get("state")),
        "state_id": issue.get("state"),
        "assignees": issue.get("assignees"),
        "labels": issue.get("labels"),
        "start_date": issue.get("start_date"),
        "target_date": issue.get("target_date"),
        "parent": issue.get("parent"),
        "created_at": issue.get("created_at"),
        "updated_at": issue.get("updated_at"),
        "created_by": issue.get("created_by"),
    }


def render_comment(comment: dict) -> dict:
    return {
        "id": comment.get("id"),
        "comment_html": comment.get("comment_html"),
        "created_at": comment.get("created_at"),
        "updated_at": comment.get("updated_at"),
        "created_by": comment.get("created_by"),
        "actor": comment.get("actor"),
    }


def render_link(link: dict, full: bool = True) -> dict:
    """Format an external link; ``full=False`` omits ``updated_at``."""
    result = {
        "id": link.get("id"),
        "title": link.get("title"),
        "url": link.get("url"),
        "created_at": link.get("created_at"),
    }
    if full:
        result["updated_at"] = link.get("updated_at")
    result["created_by"] = link.get("created_by")
    return result
