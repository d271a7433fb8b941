"""Display ticket IDs such as SBS-123.

A ticket ID is a registered project code, a dash and the issue's sequence
number within that project.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from .projects import REGISTRY, ProjectRegistry

TICKET_ID_PATTERN = re.compile(r"([A-Z]+)-([0-9]+)")


class TicketId(NamedTuple):
    project: str
    sequence_id: int

    def __str__(self) -> str:
        return format_ticket_id(self.project, self.sequence_id)


def parse_ticket_id(
    text: str,
    registry: ProjectRegistry = REGISTRY,
) -> Optional[TicketId]:
    """Parse a ticket ID like "SBS-123".

    Returns None if the text is not in PROJECT-NUMBER form or the project code
    is not registered. Leading zeros in the number are accepted.
    """
    match = TICKET_ID_PATTERN.fullmatch(text)
    if not match:
        return None
    project = match.group(1)
    if project not in registry:
        return None
    return TicketId(project, int(match.group(2)))


def format_ticket_id(project: str, sequence_id: int) -> str:
    return f"{project}-{sequence_id}"
