"""Resolve display ticket IDs to Plane issue UUIDs.

Plane addresses issues by UUID, while people use ticket IDs like SBS-123.
Resolution fetches the project's issue list and scans it for the matching
sequence number. Nothing is cached: every call re-fetches, so the result always
reflects the current state of the project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union, TYPE_CHECKING

from .errors import InvalidTicketFormatError, TicketNotFoundError
from .projects import REGISTRY, ProjectRegistry
from .tickets import TicketId, parse_ticket_id

if TYPE_CHECKING:
    from .plane_client import PlaneClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTicket:
    """Plane identifiers for a ticket, valid for a single operation."""

    project: str
    issue_id: str
    project_id: str


def require_ticket_id(text: str, registry: ProjectRegistry = REGISTRY) -> TicketId:
    """Parse a ticket ID or raise InvalidTicketFormatError."""
    ticket = parse_ticket_id(text, registry)
    if ticket is None:
        raise InvalidTicketFormatError(text)
    return ticket


def normalize_collection(payload: Any) -> list[dict]:
    """Accept either a bare list or a paginated {"results": [...]} envelope."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return payload.get("results") or []
    return []


def find_by_sequence(issues: list[dict], sequence_id: int) -> dict | None:
    """Return the first issue with the given sequence number, in list order."""
    return next((i for i in issues if i.get("sequence_id") == sequence_id), None)


def resolve_ticket(
    ticket: Union[str, TicketId],
    client: "PlaneClient",
    registry: ProjectRegistry = REGISTRY,
) -> ResolvedTicket:
    """Resolve a ticket ID to its project and issue UUIDs.

    Raises:
        InvalidTicketFormatError: If a string ticket ID cannot be parsed.
        TicketNotFoundError: If no issue in the project has that sequence number.
    """
    if isinstance(ticket, str):
        ticket = require_ticket_id(ticket, registry)

    project = registry.describe(ticket.project)
    logger.debug("Resolving %s against project %s", ticket, project.id)

    issues = normalize_collection(client.list_issues(project.id))
    issue = find_by_sequence(issues, ticket.sequence_id)
    if issue is None:
        raise TicketNotFoundError(str(ticket))

    logger.debug("Resolved %s to issue %s", ticket, issue["id"])
    return ResolvedTicket(
        project=ticket.project,
        issue_id=issue["id"],
        project_id=project.id,
    )
