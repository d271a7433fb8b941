"""Translation between workflow state names and Plane state UUIDs."""

from __future__ import annotations

from typing import Optional

from .errors import InvalidStateError
from .projects import REGISTRY, ProjectRegistry


def resolve_state_for_write(
    project: str,
    state: str,
    registry: ProjectRegistry = REGISTRY,
) -> str:
    """Get the UUID to send for a state name.

    Raises:
        InvalidStateError: If the project has no state with that name. The
            error lists the valid names.
    """
    state_id = registry.state_id(project, state)
    if state_id is None:
        raise InvalidStateError(state, project, registry.valid_state_names(project))
    return state_id


def display_state(
    project: str,
    state: Optional[str],
    registry: ProjectRegistry = REGISTRY,
) -> Optional[str]:
    """Get the display name for a state UUID.

    States missing from the registry keep their raw value, since Plane's
    workflow can change without this table being updated.
    """
    if state is None:
        return None
    if registry.state_id(project, state) is not None:
        return state
    return registry.state_name(project, state)
