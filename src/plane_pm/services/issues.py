"""Issue operations shared by CLI and MCP."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..errors import PlaneError
from ..formatting import render_issue
from ..plane_client import PlaneClient
from ..projects import describe
from ..resolver import normalize_collection, require_ticket_id, resolve_ticket
from ..states import resolve_state_for_write
from ..tickets import format_ticket_id
from .context import get_client

logger = logging.getLogger(__name__)

DEFAULT_STATE = "Todo"
CLEARABLE_FIELDS = ("start_date", "target_date")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Marks an update field the caller did not supply, as opposed to None (clear).
UNSET: Any = _Unset()


def list_issues(
    project: str,
    state: Optional[str] = None,
    priority: Optional[str] = None,
    limit: int = 50,
    client: Optional[PlaneClient] = None,
) -> dict:
    descriptor = describe(project)
    params: dict[str, Any] = {"per_page": limit}
    if state:
        params["state"] = resolve_state_for_write(project, state)
    if priority:
        params["priority"] = priority

    client = client or get_client()
    issues = normalize_collection(client.list_issues(descriptor.id, **params))

    return {
        "issues": [render_issue(issue, project) for issue in issues],
        "total": len(issues),
        "project": project,
    }


def get_issue(ticket_id: str, client: Optional[PlaneClient] = None) -> dict:
    client = client or get_client()
    resolved = resolve_ticket(ticket_id, client)
    issue = client.get_issue(resolved.project_id, resolved.issue_id)
    return render_issue(issue, resolved.project)


def create_issue(
    project: str,
    name: str,
    description_html: Optional[str] = None,
    priority: str = "none",
    state: Optional[str] = None,
    assignees: Optional[list[str]] = None,
    labels: Optional[list[str]] = None,
    start_date: Optional[str] = None,
    target_date: Optional[str] = None,
    parent: Optional[str] = None,
    client: Optional[PlaneClient] = None,
) -> dict:
    descriptor = describe(project)
    body: dict[str, Any] = {
        "name": name,
        "priority": priority,
        "state": resolve_state_for_write(project, state or DEFAULT_STATE),
    }

    optional = {
        "description_html": description_html,
        "assignees": assignees,
        "labels": labels,
        "start_date": start_date,
        "target_date": target_date,
        "parent": parent,
    }
    body.update({key: value for key, value in optional.items() if value not in (None, "")})

    client = client or get_client()
    issue = client.create_issue(descriptor.id, body)
    if not isinstance(issue, dict) or issue.get("sequence_id") is None:
        raise PlaneError("Created issue response has no sequence_id", 0, issue)
    ticket_id = format_ticket_id(project, issue["sequence_id"])
    logger.info("Created %s", ticket_id)
    return {"status": "done", "ticket_id": ticket_id}


def update_issue(
    ticket_id: str,
    name: Optional[str] = UNSET,
    description_html: Optional[str] = UNSET,
    priority: Optional[str] = UNSET,
    state: Optional[str] = UNSET,
    assignees: Optional[list[str]] = UNSET,
    labels: Optional[list[str]] = UNSET,
    start_date: Optional[str] = UNSET,
    target_date: Optional[str] = UNSET,
    client: Optional[PlaneClient] = None,
) -> dict:
    """Update the supplied fields of an issue.

    Fields left as UNSET are not sent. ``start_date`` and ``target_date`` may
    be None to clear them; None for any other field is treated as UNSET.
    """
    ticket = require_ticket_id(ticket_id)

    fields = {
        "name": name,
        "description_html": description_html,
        "priority": priority,
        "assignees": assignees,
        "labels": labels,
        "start_date": start_date,
        "target_date": target_date,
    }
    body = {
        key: value
        for key, value in fields.items()
        if value is not UNSET and (value is not None or key in CLEARABLE_FIELDS)
    }
    if state is not UNSET and state is not None:
        body["state"] = resolve_state_for_write(ticket.project, state)

    client = client or get_client()
    resolved = resolve_ticket(ticket, client)
    client.update_issue(resolved.project_id, resolved.issue_id, body)
    logger.info("Updated %s (%s)", ticket_id, ", ".join(sorted(body)) or "no fields")
    return {"status": "done"}


def delete_issue(ticket_id: str, client: Optional[PlaneClient] = None) -> dict:
    client = client or get_client()
    resolved = resolve_ticket(ticket_id, client)
    client.delete_issue(resolved.project_id, resolved.issue_id)
    logger.info("Deleted %s", ticket_id)
    return {"success": True, "ticket_id": ticket_id}
