"""External link operations shared by CLI and MCP."""

from __future__ import annotations

from typing import Optional

from ..formatting import render_link
from ..plane_client import PlaneClient
from ..resolver import normalize_collection, resolve_ticket
from .context import get_client


def list_links(ticket_id: str, client: Optional[PlaneClient] = None) -> dict:
    client = client or get_client()
    resolved = resolve_ticket(ticket_id, client)
    links = normalize_collection(client.list_links(resolved.project_id, resolved.issue_id))
    return {
        "ticket_id": ticket_id,
        "links": [render_link(link) for link in links],
        "total": len(links),
    }


def add_link(
    ticket_id: str,
    title: str,
    url: str,
    client: Optional[PlaneClient] = None,
) -> dict:
    client = client or get_client()
    resolved = resolve_ticket(ticket_id, client)
    link = client.add_link(resolved.project_id, resolved.issue_id, title, url)
    return {"ticket_id": ticket_id, "link": render_link(link, full=False)}
