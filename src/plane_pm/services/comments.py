"""Issue comment operations shared by CLI and MCP."""

from __future__ import annotations

from typing import Optional

from ..formatting import render_comment
from ..plane_client import PlaneClient
from ..resolver import normalize_collection, resolve_ticket
from .context import get_client


def list_comments(ticket_id: str, client: Optional[PlaneClient] = None) -> dict:
    client = client or get_client()
    resolved = resolve_ticket(ticket_id, client)
    comments = normalize_collection(
        client.list_comments(resolved.project_id, resolved.issue_id)
    )
    return {
        "ticket_id": ticket_id,
        "comments": [render_comment(c) for c in comments],
        "total": len(comments),
    }


def add_comment(
    ticket_id: str,
    comment_html: str,
    client: Optional[PlaneClient] = None,
) -> dict:
    client = client or get_client()
    resolved = resolve_ticket(ticket_id, client)
    client.add_comment(resolved.project_id, resolved.issue_id, comment_html)
    return {"status": "done"}
