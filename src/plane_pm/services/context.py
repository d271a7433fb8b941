"""Context and client resolution helpers shared by CLI and MCP."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import PlaneContext, get_context_help_message, resolve_context
from ..plane_client import PlaneClient


def resolve_context_info(path: Optional[Path] = None) -> dict:
    """Return context info, with help text if the API key is missing."""
    context = resolve_context(path)
    return {
        "config_source": context.config_source,
        "config_path": str(context.config_path) if context.config_path else None,
        "base_url": context.base_url,
        "workspace": context.workspace,
        "api_key_configured": context.has_api_key(),
        "api_key_env": context.api_key_env,
        "help": None if context.has_api_key() else get_context_help_message(context),
    }


def get_client_for_path(path: Optional[Path] = None) -> tuple[PlaneClient, PlaneContext]:
    """Return Plane client + resolved context for a path.

    A missing API key is not checked here; the client raises
    AuthenticationError on its first request.
    """
    context = resolve_context(path)
    return PlaneClient.from_context(context), context


def get_client(path: Optional[Path] = None) -> PlaneClient:
    client, _ = get_client_for_path(path)
    return client
